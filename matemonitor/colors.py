"""Colours for graph pickers: parsing, formatting and drag-and-drop data."""

from __future__ import annotations

import enum
import re
import struct
from dataclasses import dataclass, replace

_DRAG_FORMAT = "=4H"
_DRAG_LENGTH = struct.calcsize(_DRAG_FORMAT)
_RGB_FUNCTION = re.compile(r"(rgba?)\s*\((.*)\)")
_HEX_DIGITS = frozenset("0123456789abcdef")


class PickerType(enum.IntEnum):
    """How a colour picker is drawn."""

    CPU = 0
    PIE = 1
    NETWORK_IN = 2
    NETWORK_OUT = 3


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class RGBA:
    """A colour with channels between 0 and 1."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 1.0

    def to_string(self) -> str:
        """Format as ``rgb(r,g,b)``, or ``rgba(r,g,b,a)`` when translucent."""
        r, g, b = (int(0.5 + _clamp(c) * 255) for c in (self.red, self.green, self.blue))
        if self.alpha > 0.999:
            return f"rgb({r},{g},{b})"
        return f"rgba({r},{g},{b},{_clamp(self.alpha):g})"

    @classmethod
    def parse(cls, text: str) -> "RGBA":
        """Parse ``#rgb`` style hex, ``rgb()``, ``rgba()`` or ``transparent``.

        Raises ValueError for anything else.
        """
        spec = text.strip().lower()
        if spec == "transparent":
            return cls(0.0, 0.0, 0.0, 0.0)
        if spec.startswith("#"):
            return cls._parse_hex(spec[1:], text)
        match = _RGB_FUNCTION.fullmatch(spec)
        if match is None:
            raise ValueError(f"invalid colour: {text!r}")
        name, body = match.groups()
        parts = [part.strip() for part in body.split(",")]
        expected = 4 if name == "rgba" else 3
        if len(parts) != expected:
            raise ValueError(f"invalid colour: {text!r}")
        try:
            red, green, blue = (cls._parse_channel(part) for part in parts[:3])
            alpha = _clamp(float(parts[3])) if expected == 4 else 1.0
        except ValueError as error:
            raise ValueError(f"invalid colour: {text!r}") from error
        return cls(red, green, blue, alpha)

    @staticmethod
    def _parse_channel(part: str) -> float:
        if part.endswith("%"):
            return _clamp(float(part[:-1]) / 100.0)
        return _clamp(float(part) / 255.0)

    @classmethod
    def _parse_hex(cls, digits: str, original: str) -> "RGBA":
        if len(digits) not in (3, 6, 9, 12) or not set(digits) <= _HEX_DIGITS:
            raise ValueError(f"invalid colour: {original!r}")
        width = len(digits) // 3
        maximum = 16**width - 1
        red, green, blue = (
            int(digits[i * width:(i + 1) * width], 16) / maximum for i in range(3)
        )
        return cls(red, green, blue, 1.0)


def highlight(color: RGBA, amount: float) -> RGBA:
    """Lighten *color* for a hovered picker; *amount* 0 leaves it unchanged."""
    if amount <= 0:
        return color
    factor = 0.125 * amount
    return replace(
        color,
        red=min(1.0, color.red + factor),
        green=min(1.0, color.green + factor),
        blue=min(1.0, color.blue + factor),
    )


def encode_drag_data(color: RGBA) -> bytes:
    """Encode *color* as application/x-color data: four 16-bit values."""
    return struct.pack(
        _DRAG_FORMAT,
        int(65535.0 * color.red),
        int(65535.0 * color.green),
        int(65535.0 * color.blue),
        65535,  # alpha is not carried
    )


def decode_drag_data(data: bytes) -> tuple[float, float, float]:
    """Decode application/x-color data into red, green and blue.

    Raises ValueError unless *data* is exactly eight bytes long.
    """
    if len(data) != _DRAG_LENGTH:
        raise ValueError("Received invalid color data")
    red, green, blue, _alpha = struct.unpack(_DRAG_FORMAT, bytes(data))
    return red / 65535.0, green / 65535.0, blue / 65535.0


def drag_icon_pixel(color: RGBA) -> int:
    """Return the 0xRRGGBB00 pixel used to fill the drag icon."""
    pixel = (
        (int(color.red * 0xFF) << 24)
        | (int(color.green * 0xFF) << 16)
        | (int(color.blue * 0xFF) << 8)
    )
    return pixel & 0xFFFFFFFF