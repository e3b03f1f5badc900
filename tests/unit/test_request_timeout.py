"""Unit tests for the per-request deadline."""

import asyncio
import json

import pytest

from permitrack.interfaces.api.middleware.timeout import TIMED_OUT, RequestTimeoutMiddleware


def http_scope() -> dict:
    return {"type": "http", "method": "GET", "path": "/permits"}


async def _receive() -> dict:
    return {"type": "http.request", "body": b"", "more_body": False}


class Recorder:
    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)


@pytest.mark.asyncio
async def test_slow_request_gets_500() -> None:
    cancelled = asyncio.Event()

    async def slow_app(scope, receive, send):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    send = Recorder()
    await RequestTimeoutMiddleware(slow_app, 0.01)(http_scope(), _receive, send)

    assert cancelled.is_set()
    assert send.messages[0]["status"] == 500
    assert json.loads(send.messages[1]["body"]) == {"error": TIMED_OUT}


@pytest.mark.asyncio
async def test_started_response_is_not_rewritten() -> None:
    async def stalling_app(scope, receive, send):
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await asyncio.sleep(10)

    send = Recorder()
    await RequestTimeoutMiddleware(stalling_app, 0.01)(http_scope(), _receive, send)

    assert [m["type"] for m in send.messages] == ["http.response.start"]


@pytest.mark.asyncio
async def test_fast_request_passes_through() -> None:
    async def fast_app(scope, receive, send):
        await send({"type": "http.response.start", "status": 204, "headers": []})
        await send({"type": "http.response.body", "body": b""})

    send = Recorder()
    await RequestTimeoutMiddleware(fast_app, 1)(http_scope(), _receive, send)

    assert send.messages[0]["status"] == 204
    assert len(send.messages) == 2


@pytest.mark.asyncio
async def test_lifespan_is_not_wrapped() -> None:
    seen = []

    async def app(scope, receive, send):
        await asyncio.sleep(0.05)
        seen.append(scope["type"])

    await RequestTimeoutMiddleware(app, 0.01)({"type": "lifespan"}, _receive, Recorder())

    assert seen == ["lifespan"]
