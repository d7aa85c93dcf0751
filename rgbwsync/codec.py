"""Hex and wire encoding for RGBW fixture colors."""
from __future__ import annotations

import json
import logging
import string
from dataclasses import dataclass
from typing import Any

from rgbwsync import const
from rgbwsync.errors import ColorDecodeError

_LOGGER = logging.getLogger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)
_CHROMATIC_HEX_LEN = 6


def clamp_channel(value: Any) -> int:
    """Coerce a channel value to an int in [0, 255]."""
    value = int(value)
    return max(const.CHANNEL_MIN, min(const.CHANNEL_MAX, value))


@dataclass(frozen=True, slots=True)
class ColorValue:
    """Full RGBW fixture state."""

    red: int
    green: int
    blue: int
    white: int

    def __post_init__(self) -> None:
        for key in const.WIRE_KEYS:
            object.__setattr__(self, key, clamp_channel(getattr(self, key)))

    @property
    def chromatic(self) -> ChromaticColor:
        """Return the red, green and blue channels only."""
        return ChromaticColor(self.red, self.green, self.blue)

    def as_dict(self) -> dict[str, int]:
        """Return the wire representation as a dict."""
        return {key: getattr(self, key) for key in const.WIRE_KEYS}


@dataclass(frozen=True, slots=True)
class ChromaticColor:
    """Red, green and blue channels as shown by the color control."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for key in const.CHROMATIC_KEYS:
            object.__setattr__(self, key, clamp_channel(getattr(self, key)))

    def with_white(self, white: int) -> ColorValue:
        """Combine with an explicitly supplied white channel."""
        return ColorValue(self.red, self.green, self.blue, white)

    def to_display(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


def encode(color: ColorValue) -> str:
    """Encode a color as eight lower-case hex digits, ordered R, G, B, W."""
    return f"{color.red:02x}{color.green:02x}{color.blue:02x}{color.white:02x}"


def decode(value: str) -> ChromaticColor:
    """Decode the chromatic channels from a hex color string.

    A leading ``#`` is optional. At least six hex digits are required;
    anything past the sixth digit is ignored. White is never read from the
    string, callers pass it explicitly via ``ChromaticColor.with_white``.
    """
    if not isinstance(value, str):
        raise ColorDecodeError(f"Expected a string, got {type(value).__name__}")
    digits = value.removeprefix("#")
    head = digits[:_CHROMATIC_HEX_LEN]
    if len(head) < _CHROMATIC_HEX_LEN or not _HEX_DIGITS.issuperset(head):
        raise ColorDecodeError(f"Malformed color string: {value!r}")
    return ChromaticColor(
        int(head[0:2], 16),
        int(head[2:4], 16),
        int(head[4:6], 16),
    )


def to_display(color: ColorValue | ChromaticColor) -> str:
    """Return the ``#rrggbb`` display string for a color."""
    if isinstance(color, ColorValue):
        return "#" + encode(color)[:_CHROMATIC_HEX_LEN]
    return color.to_display()


def white_from_display(value: str) -> int:
    """Read the white channel from the white control's display string.

    The control reuses the ``#rrggbb`` format; the white level is its first
    byte.
    """
    return decode(value).red


@dataclass(frozen=True, slots=True)
class WireDecodeResult:
    """Outcome of decoding an inbound wire message."""

    ok: bool
    color: ColorValue | None = None
    error: str | None = None

    @classmethod
    def success(cls, color: ColorValue) -> WireDecodeResult:
        return cls(ok=True, color=color)

    @classmethod
    def failure(cls, error: str) -> WireDecodeResult:
        return cls(ok=False, error=error)


def encode_wire(color: ColorValue) -> str:
    """Serialize a color as a JSON wire message."""
    return json.dumps(color.as_dict(), separators=(",", ":"))


def decode_wire(text: str | bytes) -> WireDecodeResult:
    """Parse a JSON wire message without raising."""
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as err:
        return WireDecodeResult.failure(f"not JSON: {err}")

    if not isinstance(payload, dict):
        return WireDecodeResult.failure(
            f"expected a JSON object, got {type(payload).__name__}"
        )

    channels: dict[str, int] = {}
    for key in const.WIRE_KEYS:
        if key not in payload:
            return WireDecodeResult.failure(f"missing field {key!r}")
        value = payload[key]
        # bool is an int subclass but never a valid channel
        if isinstance(value, bool) or not isinstance(value, int):
            return WireDecodeResult.failure(
                f"field {key!r} is not an integer: {value!r}"
            )
        if not const.CHANNEL_MIN <= value <= const.CHANNEL_MAX:
            _LOGGER.debug("Clamping out of range %s channel value %d", key, value)
        channels[key] = value

    return WireDecodeResult.success(ColorValue(**channels))
