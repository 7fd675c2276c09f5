"""Errors raised by the server request message."""

from collections.abc import Iterable


class ServerRequestException(Exception):
    """Base class for every error raised by this package."""


class MethodNotKnownError(ServerRequestException, ValueError):
    """Raised when a method outside the allow-list is requested."""

    def __init__(self, method: str, allowed: Iterable[str] = ()) -> None:
        self.method = method
        self.allowed: tuple[str, ...] = tuple(sorted(allowed))
        super().__init__(f"Method not known: {method}")


class MethodNotImplementedError(ServerRequestException, NotImplementedError):
    """Raised by operations the request message deliberately does not support."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Method `{operation}` not implemented")


class PreconditionError(ServerRequestException):
    """Raised when an accessor is called on a parameter collection that is absent."""

    def __init__(self, operation: str, field_name: str) -> None:
        self.operation = operation
        self.field_name = field_name
        super().__init__(f"`{operation}` requires `{field_name}` to be set, but it is absent")
