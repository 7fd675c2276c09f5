from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from server_request.request import ServerRequest, ServerRequestException

_current_request: ContextVar[ServerRequest] = ContextVar("server_request")


class RequestContextException(ServerRequestException):
    """Raised when the current request is accessed outside of a request."""


def current_request() -> ServerRequest:
    try:
        return _current_request.get()
    except LookupError as e:
        raise RequestContextException(
            "No server request available - make sure you are using the ServerRequestMiddleware. "
            "In case you're using Starlette based framework and using add_middleware method "
            "make sure the handler runs inside the middleware stack."
        ) from e


@contextmanager
def request_context(request: ServerRequest) -> Iterator[ServerRequest]:
    token = _current_request.set(request)
    try:
        yield request
    finally:
        _current_request.reset(token)


__all__: tuple[str, ...] = (
    "current_request",
    "request_context",
    "RequestContextException",
)
