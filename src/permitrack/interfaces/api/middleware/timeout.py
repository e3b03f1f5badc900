"""Per-request deadline, applied around the whole ASGI app."""

import asyncio
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

TIMED_OUT = "Request timed out"


class RequestTimeoutMiddleware:
    """ASGI wrapper that cancels HTTP requests running past ``seconds``.

    Cancellation unwinds the open unit of work, so its transaction rolls
    back. If the response has not started, a 500 JSON error is sent.
    """

    def __init__(self, app: Any, seconds: float) -> None:
        self._app = app
        self._seconds = seconds

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        started = False

        async def tracking_send(message: dict[str, Any]) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await asyncio.wait_for(self._app(scope, receive, tracking_send), self._seconds)
        except TimeoutError:
            logger.warning(
                "%s %s timed out after %ss", scope.get("method"), scope.get("path"), self._seconds
            )
            if started:
                return
            body = json.dumps({"error": TIMED_OUT}).encode()
            await send(
                {
                    "type": "http.response.start",
                    "status": 500,
                    "headers": [
                        (b"content-type", b"application/json"),
                        (b"content-length", str(len(body)).encode()),
                    ],
                }
            )
            await send({"type": "http.response.body", "body": body})
