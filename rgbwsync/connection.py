"""Persistent websocket connection to the fixture, with reconnects."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from aiohttp import ClientSession, ClientWebSocketResponse, WSMsgType

from rgbwsync import const
from rgbwsync.echo import EchoGuard
from rgbwsync.session import SyncSession
from rgbwsync.state import (
    AttachSubmit,
    ClearConnection,
    Closed,
    ConnectionState,
    DeliverMessage,
    DetachSubmit,
    EnableSubmit,
    Event,
    MessageReceived,
    Opened,
    OpenConnection,
    RetryTimerFired,
    ScheduleReconnect,
    Start,
    transition,
)
from rgbwsync.submit import SubmitController

_LOGGER = logging.getLogger(__name__)

_PendingEffect = OpenConnection | ScheduleReconnect | None


class ConnectionManager:
    """Own the fixture websocket and drive its lifecycle state machine.

    A single background worker opens the connection, forwards text frames
    to the echo guard and, after any close or failure, waits a constant
    ``reconnect_delay`` before trying again. There is never more than one
    connection attempt in flight.
    """

    def __init__(
        self,
        session: SyncSession,
        echo_guard: EchoGuard,
        submit_controller: SubmitController,
        *,
        client_session: ClientSession | None = None,
        reconnect_delay: float = const.DEFAULT_RECONNECT_DELAY,
        heartbeat: float | None = const.DEFAULT_HEARTBEAT,
    ) -> None:
        self._session = session
        self._echo_guard = echo_guard
        self._submit_controller = submit_controller
        self._client_session = client_session
        self._reconnect_delay = reconnect_delay
        self._heartbeat = heartbeat

        self._state = ConnectionState.DISCONNECTED
        self._worker_task: asyncio.Task[None] | None = None
        self._opened = asyncio.Event()
        self._stopped = asyncio.Event()
        self._attempts = 0

    @property
    def state(self) -> ConnectionState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def attempts(self) -> int:
        """Return how many connection attempts have been started."""
        return self._attempts

    @property
    def is_open(self) -> bool:
        return self._state is ConnectionState.OPEN

    async def start(self) -> None:
        """Start the background connection worker."""
        if self._worker_task and not self._worker_task.done():
            return
        if self._session.target is None:
            raise ValueError("Connection target must be resolved before start")
        self._stopped.clear()
        self._worker_task = asyncio.create_task(self._connection_worker())

    async def stop(self) -> None:
        """Stop the worker and drop the connection."""
        self._stopped.set()
        if self._worker_task:
            self._worker_task.cancel()
            try:
                await self._worker_task
            except asyncio.CancelledError:
                pass
            self._worker_task = None
        self._session.form.submit_handler = None
        self._session.connection = None
        self._opened.clear()
        self._state = ConnectionState.DISCONNECTED

    async def wait_until_open(self) -> None:
        """Wait for the connection to reach the open state."""
        await self._opened.wait()

    def _dispatch(self, event: Event) -> _PendingEffect:
        """Apply an event and run its immediate effects.

        Returns the effect that needs the worker's attention (opening a
        connection or waiting to reconnect), if any.
        """
        result = transition(self._state, event, self._reconnect_delay)
        if not result.accepted:
            _LOGGER.debug(
                "Ignoring %s in state %s", type(event).__name__, self._state.value
            )
            return None

        if result.state is not self._state:
            _LOGGER.debug(
                "Fixture connection %s -> %s",
                self._state.value,
                result.state.value,
            )
        self._state = result.state

        pending: _PendingEffect = None
        for effect in result.effects:
            if isinstance(effect, AttachSubmit):
                self._session.form.submit_handler = self._submit_controller.on_submit
                self._opened.set()
            elif isinstance(effect, DetachSubmit):
                self._session.form.submit_handler = None
                self._opened.clear()
            elif isinstance(effect, EnableSubmit):
                self._session.form.set_submit_enabled(True)
            elif isinstance(effect, ClearConnection):
                self._session.connection = None
            elif isinstance(effect, DeliverMessage):
                self._echo_guard.on_frame(effect.text)
            elif isinstance(effect, (OpenConnection, ScheduleReconnect)):
                pending = effect
        return pending

    async def _connection_worker(self) -> None:
        """Background task that keeps the fixture connection alive."""
        pending = self._dispatch(Start())
        while pending is not None:
            if isinstance(pending, OpenConnection):
                pending = await self._run_connection()
            else:
                if self._stopped.is_set():
                    return
                _LOGGER.debug(
                    "Fixture connection waiting %.1fs before reconnect",
                    pending.delay,
                )
                await asyncio.sleep(pending.delay)
                pending = self._dispatch(RetryTimerFired())

    async def _run_connection(self) -> _PendingEffect:
        """Run one connection from open to close."""
        target = self._session.target
        self._attempts += 1
        reason = "closed"
        try:
            if self._client_session is not None:
                reason = await self._connect(self._client_session, target)
            else:
                async with ClientSession() as client_session:
                    reason = await self._connect(client_session, target)
        except asyncio.CancelledError:
            raise
        except Exception as err:  # pylint: disable=broad-except
            _LOGGER.error("Fixture connection to %s failed: %s", target, err)
            reason = str(err)
        return self._dispatch(Closed(reason))

    async def _connect(self, client_session: ClientSession, target: str) -> str:
        async with client_session.ws_connect(
            target, heartbeat=self._heartbeat
        ) as ws:
            _LOGGER.debug("Connected to fixture at %s", target)
            self._session.connection = ws
            self._dispatch(Opened())

            async for msg in ws:
                if msg.type == WSMsgType.TEXT:
                    self._dispatch(MessageReceived(msg.data))
                elif msg.type == WSMsgType.BINARY:
                    _LOGGER.debug(
                        "Ignoring %d byte binary frame from fixture", len(msg.data)
                    )
                elif msg.type == WSMsgType.CLOSED:
                    break
                elif msg.type == WSMsgType.ERROR:
                    self._log_ws_error(ws, msg)
                    return "error"
        _LOGGER.warning("Fixture connection to %s closed", target)
        return "closed"

    @staticmethod
    def _log_ws_error(ws: ClientWebSocketResponse, msg: Any) -> None:
        err = ws.exception() or getattr(msg, "data", None)
        _LOGGER.warning(
            "Fixture websocket error: %s", err if err else "unknown websocket error"
        )
