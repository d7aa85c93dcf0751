"""Exceptions raised by the RGBW sync client."""
from __future__ import annotations


class RgbwSyncError(Exception):
    """Base error for the RGBW sync client."""


class ColorDecodeError(RgbwSyncError, ValueError):
    """A color string could not be decoded."""


class FixtureApiError(RgbwSyncError):
    """The fixture's REST API answered with an error."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
