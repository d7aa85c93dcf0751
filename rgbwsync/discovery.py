"""Resolve the websocket target the fixture page should connect to."""
from __future__ import annotations

import asyncio
import logging
from urllib.parse import urljoin, urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from rgbwsync import const

_LOGGER = logging.getLogger(__name__)


def default_target(page_url: str) -> str:
    """Derive the websocket target from the page's own location.

    ``https`` pages get ``wss``, anything else ``ws``; the host is the page's
    hostname on the well-known websocket port.
    """
    parts = urlsplit(page_url)
    scheme = (
        const.SCHEME_WSS
        if parts.scheme.lower() in const.SECURE_PAGE_SCHEMES
        else const.SCHEME_WS
    )
    hostname = parts.hostname or "localhost"
    if ":" in hostname:
        hostname = f"[{hostname}]"
    return f"{scheme}://{hostname}:{const.DEFAULT_PORT_WS}{const.PATH_WS_ROOT}"


class ConnectionInfoResolver:
    """One-shot lookup of the websocket target via ``GET /wsinfo``."""

    def __init__(
        self,
        page_url: str,
        session: ClientSession | None = None,
        *,
        timeout: float = const.DEFAULT_DISCOVERY_TIMEOUT,
    ) -> None:
        self._page_url = page_url
        self._session = session
        self._timeout = timeout
        self._target: str | None = None

    @property
    def target(self) -> str | None:
        """Return the resolved target, or None before ``resolve``."""
        return self._target

    async def resolve(self) -> str:
        """Return the connection target; never raises for network failures."""
        if self._target is not None:
            return self._target

        body = await self._fetch_wsinfo()
        if body.strip():
            target = body
            _LOGGER.debug("Discovered websocket target %s", target)
        else:
            target = default_target(self._page_url)
            _LOGGER.debug("No websocket target advertised; using %s", target)
        self._target = target
        return target

    async def _fetch_wsinfo(self) -> str:
        url = urljoin(self._page_url, const.PATH_WSINFO)
        try:
            if self._session is not None:
                return await self._get_text(self._session, url)
            async with ClientSession() as session:
                return await self._get_text(session, url)
        except asyncio.CancelledError:
            raise
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as err:
            _LOGGER.debug("Websocket discovery via %s failed: %s", url, err)
            return ""

    async def _get_text(self, session: ClientSession, url: str) -> str:
        async with session.get(
            url, timeout=ClientTimeout(total=self._timeout)
        ) as resp:
            resp.raise_for_status()
            return await resp.text()
