"""ASGI HTTP types read by the request adapter.

Only the keys ``build_server_request`` consumes and the messages the middleware
sends are modelled.
"""

from typing import Literal, NotRequired, TypeAlias, TypedDict


class HTTPRequestScope(TypedDict):
    type: Literal["http"]
    http_version: str
    method: str
    scheme: NotRequired[str]
    path: str
    root_path: NotRequired[str]
    query_string: bytes
    headers: list[tuple[bytes, bytes]]
    client: NotRequired[tuple[str, int] | None]
    server: NotRequired[tuple[str, int | None] | None]


class HTTPRequestMessage(TypedDict):
    type: Literal["http.request", "http.disconnect"]
    body: NotRequired[bytes]
    more_body: NotRequired[bool]


class HTTPResponseStartMessage(TypedDict):
    type: Literal["http.response.start"]
    status: int
    headers: NotRequired[list[tuple[bytes, bytes]]]


class HTTPResponseBodyMessage(TypedDict):
    type: Literal["http.response.body"]
    body: NotRequired[bytes]
    more_body: NotRequired[bool]


HTTPResponseMessage: TypeAlias = HTTPResponseStartMessage | HTTPResponseBodyMessage
