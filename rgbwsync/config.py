"""Environment-driven configuration."""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from rgbwsync import const

_LOGGER = logging.getLogger(__name__)

ENV_PAGE_URL = "RGBWSYNC_PAGE_URL"
ENV_HEARTBEAT = "RGBWSYNC_HEARTBEAT"
ENV_DISCOVERY_TIMEOUT = "RGBWSYNC_DISCOVERY_TIMEOUT"


def _env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        result = float(val.strip())
    except ValueError:
        result = -1.0
    if not math.isfinite(result) or result <= 0:
        _LOGGER.warning("Invalid %s=%s; defaulting to %s", name, val, default)
        return default
    return result


@dataclass(slots=True)
class SyncConfig:
    """Settings for a sync client."""

    page_url: str = const.DEFAULT_PAGE_URL
    heartbeat: float = const.DEFAULT_HEARTBEAT
    discovery_timeout: float = const.DEFAULT_DISCOVERY_TIMEOUT

    @classmethod
    def from_env(cls) -> SyncConfig:
        return cls(
            page_url=os.getenv(ENV_PAGE_URL) or const.DEFAULT_PAGE_URL,
            heartbeat=_env_float(ENV_HEARTBEAT, const.DEFAULT_HEARTBEAT),
            discovery_timeout=_env_float(
                ENV_DISCOVERY_TIMEOUT, const.DEFAULT_DISCOVERY_TIMEOUT
            ),
        )
