"""Shared test helpers."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import pytest

from rgbwsync.session import ColorForm, SyncSession


class FakeWebSocket:
    """Minimal stand-in for an open aiohttp client websocket."""

    def __init__(self) -> None:
        self.closed = False
        self.sent: list[str] = []

    async def send_str(self, data: str) -> None:
        if self.closed:
            raise ConnectionResetError("socket closed")
        self.sent.append(data)


async def _wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_poll(), timeout=timeout)


@pytest.fixture
def session() -> SyncSession:
    return SyncSession(ColorForm("#112233", "#000000"))


@pytest.fixture
def fake_ws() -> FakeWebSocket:
    return FakeWebSocket()


@pytest.fixture
def wait_for() -> Callable[..., Awaitable[None]]:
    """Return a helper that polls until a predicate holds."""
    return _wait_for
