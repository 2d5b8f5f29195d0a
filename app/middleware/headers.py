"""Response header middleware: request ID echo and API security headers.

Raw ASGI callables (no BaseHTTPMiddleware) so streaming responses and
background tasks are unaffected.
"""

import re
import uuid
from typing import Callable

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)

# JSON API only: nothing is framed, scripted, or cached by intermediaries.
API_SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-site",
}


def header_value(scope: dict, name: str) -> str | None:
    """First value of a request header (case-insensitive), decoded leniently."""
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("latin-1")
    return None


def resolve_request_id(raw: str | None) -> str:
    """Keep a client request ID only if it is short and log-safe; otherwise mint one."""
    candidate = (raw or "").strip()
    if _REQUEST_ID_PATTERN.match(candidate):
        return candidate
    return uuid.uuid4().hex


def _with_headers(send: Callable, extra: list[tuple[bytes, bytes]]) -> Callable:
    async def wrapped(message: dict) -> None:
        if message["type"] == "http.response.start":
            headers = list(message.get("headers", []))
            present = {k.lower() for k, _ in headers}
            headers.extend((k, v) for k, v in extra if k.lower() not in present)
            message["headers"] = headers
        await send(message)

    return wrapped


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Expose the request ID as request.state.request_id and echo it on the response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(header_value(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        await app(scope, receive, _with_headers(send, [(header_name.encode(), request_id.encode())]))

    return asgi_app


def SecurityHeadersMiddleware(app: Callable, headers: dict[str, str] | None = None) -> Callable:
    """Add API security headers unless the route already set them."""
    extra = [(k.encode(), v.encode()) for k, v in (headers or API_SECURITY_HEADERS).items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        await app(scope, receive, _with_headers(send, extra))

    return asgi_app
