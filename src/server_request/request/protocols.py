from collections.abc import Mapping
from typing import Any, Protocol, TypeAlias, runtime_checkable

from server_request.headers import HeaderValue

# Opaque to the request message: stored and returned, never interpreted.
UriValue: TypeAlias = Any


@runtime_checkable
class BodyStream(Protocol):
    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes, or everything left when ``size`` is negative."""


@runtime_checkable
class HeaderCollection(Protocol):
    """Case-insensitive mapping of header names to ordered value lists.

    Mutating operations must return a new collection and leave the receiver untouched.
    """

    def get_headers(self) -> dict[str, list[str]]:
        """Return every header, keyed by its original name."""

    def has_header(self, name: str) -> bool:
        """Check whether a header exists, ignoring case."""

    def get_header(self, name: str) -> list[str]:
        """Return the values of a header, or an empty list."""

    def get_header_line(self, name: str) -> str:
        """Return the values of a header joined by a comma, or an empty string."""

    def with_header(self, name: str, value: HeaderValue) -> "HeaderCollection":
        """Return a collection with the header replaced."""

    def with_added_header(self, name: str, value: HeaderValue) -> "HeaderCollection":
        """Return a collection with the value(s) appended to the header."""

    def without_header(self, name: str) -> "HeaderCollection":
        """Return a collection without the header."""


@runtime_checkable
class ParameterCollection(Protocol):
    def all(self) -> dict[str, Any]:
        """Return every parameter, in insertion order."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return a single parameter, or ``default`` when it is missing."""


ParameterInput: TypeAlias = ParameterCollection | Mapping[str, Any] | None
