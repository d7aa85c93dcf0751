"""High level client tying discovery, connection and the color form together."""
from __future__ import annotations

import logging
from typing import Any

from aiohttp import ClientSession

from rgbwsync import const
from rgbwsync.config import SyncConfig
from rgbwsync.connection import ConnectionManager
from rgbwsync.discovery import ConnectionInfoResolver
from rgbwsync.echo import EchoGuard
from rgbwsync.session import ColorForm, SyncSession
from rgbwsync.submit import SubmitController

_LOGGER = logging.getLogger(__name__)


class ColorSyncClient:
    """Synchronize a ColorForm with a remote RGBW fixture.

    ``start`` resolves the connection target once and then keeps a
    connection alive in the background until ``stop``.
    """

    def __init__(
        self,
        form: ColorForm,
        config: SyncConfig | None = None,
        *,
        client_session: ClientSession | None = None,
        reconnect_delay: float = const.DEFAULT_RECONNECT_DELAY,
    ) -> None:
        self._config = config or SyncConfig()
        self.session = SyncSession(form)
        self.echo_guard = EchoGuard(self.session)
        self.submit_controller = SubmitController(self.session)
        self._resolver = ConnectionInfoResolver(
            self._config.page_url,
            client_session,
            timeout=self._config.discovery_timeout,
        )
        self.connection = ConnectionManager(
            self.session,
            self.echo_guard,
            self.submit_controller,
            client_session=client_session,
            reconnect_delay=reconnect_delay,
            heartbeat=self._config.heartbeat,
        )
        form.input_handler = self.echo_guard.on_local_change

    @property
    def form(self) -> ColorForm:
        return self.session.form

    async def start(self) -> None:
        """Resolve the target (once) and start the connection worker."""
        if self.session.target is None:
            self.session.target = await self._resolver.resolve()
            _LOGGER.debug("Fixture connection target is %s", self.session.target)
        await self.connection.start()

    async def stop(self) -> None:
        await self.connection.stop()

    async def wait_until_open(self) -> None:
        await self.connection.wait_until_open()

    async def __aenter__(self) -> ColorSyncClient:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()
