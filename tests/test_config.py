"""Tests for environment configuration."""
from __future__ import annotations

import pytest

from rgbwsync import const
from rgbwsync.config import SyncConfig


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("RGBWSYNC_PAGE_URL", "RGBWSYNC_HEARTBEAT", "RGBWSYNC_DISCOVERY_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    config = SyncConfig.from_env()
    assert config.page_url == const.DEFAULT_PAGE_URL
    assert config.heartbeat == 30.0
    assert config.discovery_timeout == 5.0


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RGBWSYNC_PAGE_URL", "https://fixture.local/")
    monkeypatch.setenv("RGBWSYNC_HEARTBEAT", "12.5")
    monkeypatch.setenv("RGBWSYNC_DISCOVERY_TIMEOUT", "2")
    config = SyncConfig.from_env()
    assert config.page_url == "https://fixture.local/"
    assert config.heartbeat == 12.5
    assert config.discovery_timeout == 2.0


@pytest.mark.parametrize("value", ["soon", "-1", "0", "nan", "inf", "-inf"])
def test_invalid_float_falls_back(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, value: str
) -> None:
    monkeypatch.setenv("RGBWSYNC_HEARTBEAT", value)
    config = SyncConfig.from_env()
    assert config.heartbeat == const.DEFAULT_HEARTBEAT
    assert "Invalid RGBWSYNC_HEARTBEAT" in caplog.text
