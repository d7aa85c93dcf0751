"""Tests for color and wire encoding."""
from __future__ import annotations

import json

import pytest

from rgbwsync import codec
from rgbwsync.codec import ChromaticColor, ColorValue
from rgbwsync.errors import ColorDecodeError


def test_encode_is_fixed_width_lower_hex() -> None:
    assert codec.encode(ColorValue(0, 10, 171, 255)) == "000aabff"
    assert codec.encode(ColorValue(1, 2, 3, 4)) == "01020304"


def test_decode_round_trips_chromatic_channels() -> None:
    for color in (
        ColorValue(0, 0, 0, 0),
        ColorValue(255, 255, 255, 255),
        ColorValue(18, 52, 86, 7),
        ColorValue(170, 187, 204, 42),
    ):
        assert codec.decode(codec.encode(color)) == color.chromatic


def test_decode_accepts_display_strings() -> None:
    assert codec.decode("#445566") == ChromaticColor(0x44, 0x55, 0x66)
    assert codec.decode("#AABBCC") == ChromaticColor(170, 187, 204)


def test_decode_never_reads_white() -> None:
    decoded = codec.decode("11223344")
    assert decoded == ChromaticColor(0x11, 0x22, 0x33)
    assert not hasattr(decoded, "white")
    assert decoded.with_white(9) == ColorValue(0x11, 0x22, 0x33, 9)


@pytest.mark.parametrize("value", ["", "#12345", "#12345g", "zzzzzz", "# 12345"])
def test_decode_rejects_malformed(value: str) -> None:
    with pytest.raises(ColorDecodeError):
        codec.decode(value)


def test_decode_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        codec.decode("nope")


def test_channels_are_clamped() -> None:
    color = ColorValue(-5, 300, 128, 1000)
    assert (color.red, color.green, color.blue, color.white) == (0, 255, 128, 255)


def test_to_display() -> None:
    assert codec.to_display(ColorValue(0x44, 0x55, 0x66, 10)) == "#445566"
    assert codec.to_display(ChromaticColor(0xAA, 0xBB, 0xCC)) == "#aabbcc"


def test_white_from_display_uses_first_byte() -> None:
    assert codec.white_from_display("#2a0000") == 42
    assert codec.white_from_display("#ff1122") == 255


def test_encode_wire_has_exactly_the_channel_fields() -> None:
    payload = json.loads(codec.encode_wire(ColorValue(170, 187, 204, 42)))
    assert payload == {"red": 170, "green": 187, "blue": 204, "white": 42}


def test_decode_wire_success() -> None:
    result = codec.decode_wire('{"red": 68, "green": 85, "blue": 102, "white": 10}')
    assert result.ok
    assert result.color == ColorValue(68, 85, 102, 10)
    assert result.error is None


def test_decode_wire_clamps_out_of_range() -> None:
    result = codec.decode_wire('{"red": 300, "green": -1, "blue": 0, "white": 0}')
    assert result.ok
    assert result.color == ColorValue(255, 0, 0, 0)


@pytest.mark.parametrize(
    "text",
    [
        "not-json",
        "[1, 2, 3, 4]",
        '{"red": 1, "green": 2, "blue": 3}',
        '{"red": "1", "green": 2, "blue": 3, "white": 4}',
        '{"red": 1.5, "green": 2, "blue": 3, "white": 4}',
        '{"red": true, "green": 2, "blue": 3, "white": 4}',
    ],
)
def test_decode_wire_failure(text: str) -> None:
    result = codec.decode_wire(text)
    assert not result.ok
    assert result.color is None
    assert result.error
