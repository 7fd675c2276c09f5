"""Immutable server-side HTTP request message.

A ``ServerRequest`` is built once and never modified. Every ``with_*`` operation
returns a shallow copy carrying exactly one changed field, the receiver and all
copies issued before stay valid and unchanged.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from server_request.headers import HeaderBag, HeaderValue
from server_request.parameters import ParameterBag
from server_request.request.config import DEFAULT_CONFIG, RequestConfig
from server_request.request.exceptions import MethodNotImplementedError, MethodNotKnownError, PreconditionError
from server_request.request.protocols import (
    BodyStream,
    HeaderCollection,
    ParameterCollection,
    ParameterInput,
    UriValue,
)

_PARAMETER_FIELDS: tuple[str, ...] = (
    "server_params",
    "cookie_params",
    "query_params",
    "uploaded_files",
    "parsed_body",
)


def normalize_method(method: str) -> str:
    return method.strip().upper()


def _coerce_parameters(field_name: str, value: ParameterInput) -> ParameterCollection | None:
    match value:
        case None:
            return None
        case ParameterCollection():
            return value
        case Mapping():
            return ParameterBag(value)
        case _:
            raise TypeError(f"`{field_name}` must be a mapping or a parameter collection, got {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class ServerRequest:
    """An inbound HTTP request as an immutable value.

    Args:
        method: HTTP method. Not checked unless ``config.validate_on_init`` is set.
        uri: URI of the request, opaque to the message.
        protocol_version: HTTP protocol version, e.g. ``"1.1"``.
        headers: Header collection, a plain mapping is wrapped in a ``HeaderBag``.
        body: Optional body stream.
        server_params: Optional server parameters.
        cookie_params: Optional cookies.
        query_params: Optional query string parameters.
        uploaded_files: Optional uploaded file metadata.
        parsed_body: Optional parsed body.
        attributes: Request attributes, read-only once the message is built.
        config: Method allow-list and diagnostics, inherited by derived copies.
    """

    method: str
    uri: UriValue
    protocol_version: str
    headers: HeaderCollection
    body: BodyStream | None = None
    server_params: ParameterCollection | None = None
    cookie_params: ParameterCollection | None = None
    query_params: ParameterCollection | None = None
    uploaded_files: ParameterCollection | None = None
    parsed_body: ParameterCollection | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)
    config: RequestConfig = field(default=DEFAULT_CONFIG, repr=False, compare=False)

    # unhashable: parameter bags and attributes are mappings
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.uri is None:
            raise ValueError("uri must not be None")

        if isinstance(self.headers, Mapping):
            object.__setattr__(self, "headers", HeaderBag(self.headers))
        elif not isinstance(self.headers, HeaderCollection):
            raise TypeError(f"headers must be a header collection, got {type(self.headers).__name__}")

        for name in _PARAMETER_FIELDS:
            object.__setattr__(self, name, _coerce_parameters(name, getattr(self, name)))

        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

        if self.config.validate_on_init:
            object.__setattr__(self, "method", self._checked_method(self.method))

    def _checked_method(self, method: str) -> str:
        normalized = normalize_method(method)
        if not self.config.is_allowed(normalized):
            if self.config.logger:
                self.config.logger.warning(
                    "Rejected HTTP method %r, allowed methods are %s.",
                    method,
                    ", ".join(sorted(self.config.allowed_methods)),
                )
            raise MethodNotKnownError(method, self.config.allowed_methods)
        return normalized

    def _parameters(self, operation: str, field_name: str) -> dict[str, Any]:
        parameters: ParameterCollection | None = getattr(self, field_name)
        if parameters is None:
            raise PreconditionError(operation, field_name)
        return parameters.all()

    # Protocol version

    def get_protocol_version(self) -> str:
        return self.protocol_version

    def with_protocol_version(self, version: str) -> "ServerRequest":
        return replace(self, protocol_version=version)

    # Headers, delegated to the header collection

    def get_headers(self) -> dict[str, list[str]]:
        return self.headers.get_headers()

    def has_header(self, name: str) -> bool:
        return self.headers.has_header(name)

    def get_header(self, name: str) -> list[str]:
        return self.headers.get_header(name)

    def get_header_line(self, name: str) -> str:
        return self.headers.get_header_line(name)

    def with_header(self, name: str, value: HeaderValue) -> "ServerRequest":
        return replace(self, headers=self.headers.with_header(name, value))

    def with_added_header(self, name: str, value: HeaderValue) -> "ServerRequest":
        return replace(self, headers=self.headers.with_added_header(name, value))

    def without_header(self, name: str) -> "ServerRequest":
        return replace(self, headers=self.headers.without_header(name))

    # Body

    def get_body(self) -> BodyStream | None:
        return self.body

    def with_body(self, body: BodyStream) -> "ServerRequest":
        return replace(self, body=body)

    # Request target

    def get_request_target(self) -> str:
        raise MethodNotImplementedError("get_request_target")

    def with_request_target(self, request_target: str) -> "ServerRequest":
        raise MethodNotImplementedError("with_request_target")

    # Method

    def get_method(self) -> str:
        return self.method

    def with_method(self, method: str) -> "ServerRequest":
        """Return a copy using ``method``, upper-cased and checked against the allow-list.

        Raises:
            MethodNotKnownError: the method is not in ``config.allowed_methods``.
        """
        return replace(self, method=self._checked_method(method))

    # URI

    def get_uri(self) -> UriValue:
        return self.uri

    def with_uri(self, uri: UriValue, preserve_host: bool = False) -> "ServerRequest":
        # preserve_host is accepted for interface compatibility only, the URI is opaque here
        return replace(self, uri=uri)

    # Parameters

    def get_server_params(self) -> dict[str, Any]:
        return self._parameters("get_server_params", "server_params")

    def get_cookie_params(self) -> dict[str, Any]:
        return self._parameters("get_cookie_params", "cookie_params")

    def with_cookie_params(self, cookies: ParameterInput) -> "ServerRequest":
        return replace(self, cookie_params=cookies)

    def get_query_params(self) -> dict[str, Any]:
        return self._parameters("get_query_params", "query_params")

    def with_query_params(self, query: ParameterInput) -> "ServerRequest":
        return replace(self, query_params=query)

    def get_uploaded_files(self) -> dict[str, Any]:
        return self._parameters("get_uploaded_files", "uploaded_files")

    def with_uploaded_files(self, uploaded_files: ParameterInput) -> "ServerRequest":
        return replace(self, uploaded_files=uploaded_files)

    def get_parsed_body(self) -> dict[str, Any]:
        return self._parameters("get_parsed_body", "parsed_body")

    def with_parsed_body(self, data: ParameterInput) -> "ServerRequest":
        return replace(self, parsed_body=data)

    # Attributes

    def get_attributes(self) -> Mapping[str, Any]:
        return self.attributes

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> "ServerRequest":
        raise MethodNotImplementedError("with_attribute")

    def without_attribute(self, name: str) -> "ServerRequest":
        raise MethodNotImplementedError("without_attribute")
