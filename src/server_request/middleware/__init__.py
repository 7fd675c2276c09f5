import io
import json
from http import HTTPStatus
from http.cookies import CookieError, SimpleCookie
from logging import Logger
from typing import Any, cast
from urllib.parse import SplitResult, parse_qs

from server_request.context import request_context
from server_request.headers import HeaderBag
from server_request.protocol import ASGIApp, HTTPRequestScope, Message, Receive, Scope, Send
from server_request.request import MethodNotKnownError, RequestConfig, ServerRequest


def _query_params(query_string: str) -> dict[str, str | tuple[str, ...]]:
    params: dict[str, str | tuple[str, ...]] = {}
    for name, values in parse_qs(query_string, keep_blank_values=True).items():
        params[name] = values[0] if len(values) == 1 else tuple(values)
    return params


def _cookie_params(headers: HeaderBag, logger: Logger | None) -> dict[str, str]:
    cookies: dict[str, str] = {}
    for line in headers.get_header("cookie"):
        # SimpleCookie drops the whole line on a single bad pair, load pairs one by one
        for pair in line.split(";"):
            pair = pair.strip()
            if not pair:
                continue

            cookie = SimpleCookie()
            try:
                cookie.load(pair)
            except CookieError:
                cookie.clear()

            if not cookie:
                if logger:
                    logger.warning("Ignoring malformed cookie pair %r.", pair)
                continue
            cookies.update({name: morsel.value for name, morsel in cookie.items()})
    return cookies


def _uri(scope: HTTPRequestScope, headers: HeaderBag) -> SplitResult:
    scheme = scope.get("scheme", "http")
    host = headers.get_header_line("host")
    if not host and (server := scope.get("server")):
        server_host, port = server
        host = server_host if port is None else f"{server_host}:{port}"
    return SplitResult(scheme, host, scope["path"], scope["query_string"].decode("latin-1"), "")


def build_server_request(
    scope: HTTPRequestScope,
    body: bytes = b"",
    config: RequestConfig | None = None,
) -> ServerRequest:
    """Build a request message from an ASGI HTTP scope and its buffered body.

    The scope method is stored as received, use ``with_method`` to validate it.
    """
    config = config or RequestConfig()
    headers = HeaderBag.from_raw(scope["headers"])
    server_params: dict[str, Any] = {
        "scheme": scope.get("scheme", "http"),
        "http_version": scope["http_version"],
        "root_path": scope.get("root_path", ""),
        "path": scope["path"],
        "query_string": scope["query_string"].decode("latin-1"),
        "client": scope.get("client"),
        "server": scope.get("server"),
    }

    return ServerRequest(
        method=scope["method"],
        uri=_uri(scope, headers),
        protocol_version=scope["http_version"],
        headers=headers,
        body=io.BytesIO(body),
        server_params=server_params,
        cookie_params=_cookie_params(headers, config.logger),
        query_params=_query_params(scope["query_string"].decode("latin-1")),
        config=config,
    )


class ServerRequestMiddleware:
    """ASGI middleware exposing each HTTP request as an immutable ``ServerRequest``.

    The request is available to downstream code through ``current_request()``.
    Requests with a method outside the allow-list are answered with 405.
    """

    __slots__ = ("app", "config", "logger")

    def __init__(self, app: ASGIApp, config: RequestConfig | None = None, logger: Logger | None = None) -> None:
        self.app = app
        self.config = config or RequestConfig()
        self.logger = logger or self.config.logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        http_scope = cast(HTTPRequestScope, scope)
        body = await self._read_body(receive)

        try:
            request = build_server_request(http_scope, body, self.config).with_method(http_scope["method"])
        except MethodNotKnownError as e:
            # the request config logger has already reported the rejection
            if self.logger and self.logger is not self.config.logger:
                self.logger.warning("Method %s not allowed for %s.", e.method, http_scope["path"])
            await self._send_method_not_allowed(send, e)
            return

        with request_context(request):
            await self.app(scope, self._replay(body, receive), send)

    async def _read_body(self, receive: Receive) -> bytes:
        chunks: list[bytes] = []
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunks.append(message.get("body", b""))
            more_body = message.get("more_body", False)
        return b"".join(chunks)

    def _replay(self, body: bytes, receive: Receive) -> Receive:
        replayed = False

        async def replay_receive() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        return replay_receive

    async def _send_method_not_allowed(self, send: Send, error: MethodNotKnownError) -> None:
        error_body = {"error": str(error), "method": error.method}

        await send(
            {
                "type": "http.response.start",
                "status": HTTPStatus.METHOD_NOT_ALLOWED,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"allow", ", ".join(error.allowed).encode()),
                ],
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": json.dumps(error_body).encode(),
                "more_body": False,
            }
        )


__all__: tuple[str, ...] = (
    "ServerRequestMiddleware",
    "build_server_request",
)
