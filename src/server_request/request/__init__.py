"""Immutable server request message package."""

from server_request.request.config import (
    DEFAULT_ALLOWED_METHODS,
    DEFAULT_CONFIG,
    METHOD_GET,
    METHOD_POST,
    RequestConfig,
)
from server_request.request.exceptions import (
    MethodNotImplementedError,
    MethodNotKnownError,
    PreconditionError,
    ServerRequestException,
)
from server_request.request.message import ServerRequest, normalize_method
from server_request.request.protocols import (
    BodyStream,
    HeaderCollection,
    ParameterCollection,
    ParameterInput,
    UriValue,
)

__all__: tuple[str, ...] = (
    "ServerRequest",
    "normalize_method",
    "RequestConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_ALLOWED_METHODS",
    "METHOD_GET",
    "METHOD_POST",
    "ServerRequestException",
    "MethodNotKnownError",
    "MethodNotImplementedError",
    "PreconditionError",
    "BodyStream",
    "HeaderCollection",
    "ParameterCollection",
    "ParameterInput",
    "UriValue",
)
