"""Request body size limit middleware.

Rejects bodies larger than max_upload_size with 413. A declared
Content-Length is checked up front; bodies without one are read (up to the
limit) before the app sees them. Raw ASGI.
"""

import json
from typing import Callable

from app.middleware.headers import header_value


def _too_large_response(max_bytes: int) -> tuple[dict, dict]:
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes},
        }
    ).encode()
    start = {
        "type": "http.response.start",
        "status": 413,
        "headers": [
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode()),
        ],
    }
    return start, {"type": "http.response.body", "body": body, "more_body": False}


async def _reject(send: Callable, max_bytes: int) -> None:
    start, body = _too_large_response(max_bytes)
    await send(start)
    await send(body)


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = header_value(scope, "content-length")
        if declared is not None and declared.strip().isdigit():
            if int(declared) > max_bytes:
                await _reject(send, max_bytes)
                return
            await app(scope, receive, send)
            return

        # No usable Content-Length (e.g. chunked): buffer up to the limit.
        body = bytearray()
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body.extend(message.get("body", b""))
            if len(body) > max_bytes:
                await _reject(send, max_bytes)
                return
            if not message.get("more_body", False):
                break

        replayed = False

        async def replay() -> dict:
            nonlocal replayed
            if replayed:
                return await receive()
            replayed = True
            return {"type": "http.request", "body": bytes(body), "more_body": False}

        await app(scope, replay, send)

    return asgi_app
