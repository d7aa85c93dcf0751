"""Client for the fixture's REST color endpoint."""
from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import urljoin

from aiohttp import ClientResponse, ClientSession, ClientTimeout

from rgbwsync import const
from rgbwsync.codec import ChromaticColor
from rgbwsync.errors import FixtureApiError

_LOGGER = logging.getLogger(__name__)


class FixtureRestClient:
    """Read and write the fixture's chromatic color over HTTP.

    The REST API knows nothing about the white channel.
    """

    def __init__(
        self,
        base_url: str,
        session: ClientSession | None = None,
        *,
        timeout: float = const.DEFAULT_DISCOVERY_TIMEOUT,
    ) -> None:
        self._url = urljoin(base_url, const.PATH_COLOR)
        self._session = session
        self._owns_session = session is None
        self._timeout = ClientTimeout(total=timeout)

    async def __aenter__(self) -> FixtureRestClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.async_close()

    async def async_close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> ClientSession:
        if self._session is None:
            self._session = ClientSession()
        return self._session

    async def async_get_color(self) -> ChromaticColor:
        """Return the fixture's current chromatic color."""
        async with self._get_session().get(self._url, timeout=self._timeout) as resp:
            await self._raise_for_error(resp)
            payload = await resp.json(content_type=None)
        try:
            return ChromaticColor(*(payload[key] for key in const.CHROMATIC_KEYS))
        except (KeyError, TypeError, ValueError) as err:
            raise FixtureApiError(resp.status, f"Malformed color payload: {payload!r}") from err

    async def async_put_color(self, color: ChromaticColor) -> None:
        """Set the fixture's chromatic color."""
        payload = {key: getattr(color, key) for key in const.CHROMATIC_KEYS}
        async with self._get_session().put(
            self._url, json=payload, timeout=self._timeout
        ) as resp:
            await self._raise_for_error(resp)
        _LOGGER.debug("Put fixture color %s", color.to_display())

    @staticmethod
    async def _raise_for_error(resp: ClientResponse) -> None:
        if resp.status < 400:
            return
        message = resp.reason or "error"
        try:
            body = json.loads(await resp.text())
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None
        if isinstance(body, dict) and body.get(const.KEY_STATUS) == "error":
            message = str(body.get(const.KEY_MESSAGE, message))
        raise FixtureApiError(resp.status, message)
