"""Typed ASGI callables for the request adapter.

Non-HTTP scopes (lifespan, websocket) are passed through untouched and typed loosely.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any

from .http import HTTPRequestMessage, HTTPRequestScope, HTTPResponseBodyMessage, HTTPResponseMessage, HTTPResponseStartMessage

Scope = HTTPRequestScope | MutableMapping[str, Any]
Message = HTTPRequestMessage | HTTPResponseMessage | MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

__all__: tuple[str, ...] = (
    "Scope",
    "Message",
    "Receive",
    "Send",
    "ASGIApp",
    "HTTPRequestScope",
    "HTTPRequestMessage",
    "HTTPResponseMessage",
    "HTTPResponseStartMessage",
    "HTTPResponseBodyMessage",
)
