"""Colour parsing, separator colours and window placement."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

__all__ = [
    "Color",
    "SeparatorKind",
    "Screen",
    "Geometry",
    "hex_to_color",
    "string_to_color",
    "apply_delta",
    "foreground_for",
    "separator_color",
    "window_position",
]

_log = logging.getLogger(__name__)

_HEXDIGITS = "0123456789abcdefABCDEF"
_LONG_MAX = (1 << 63) - 1
_LONG_MIN = -(1 << 63)

#: How much the automatic separator colour differs from the background.
FOREGROUND_DELTA = 0.1


@dataclass(frozen=True)
class Color:
    """An RGB colour with channels between 0 and 1."""

    r: float
    g: float
    b: float


class SeparatorKind(enum.Enum):
    """Where the separator between two notifications takes its colour from."""

    FRAME = "frame"
    CUSTOM = "custom"
    FOREGROUND = "foreground"
    AUTO = "auto"


@dataclass(frozen=True)
class Screen:
    """The position and size of a monitor."""

    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class Geometry:
    """The configured window geometry."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    width_set: bool = False
    negative_width: bool = False
    negative_x: bool = False
    negative_y: bool = False


def hex_to_color(value: int) -> Color:
    """Turn a ``0xRRGGBB`` integer into a colour; higher bits are ignored."""
    return Color(
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )


def _parse_hex_prefix(text: str) -> tuple[int, str]:
    """Read a leading hexadecimal number; return it and the unread rest."""
    pos = 0
    while pos < len(text) and text[pos].isspace():
        pos += 1
    negative = False
    if pos < len(text) and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1
    if (
        text[pos:pos + 2].lower() == "0x"
        and pos + 2 < len(text)
        and text[pos + 2] in _HEXDIGITS
    ):
        pos += 2
    start = pos
    while pos < len(text) and text[pos] in _HEXDIGITS:
        pos += 1
    if pos == start:
        return 0, text
    value = int(text[start:pos], 16)
    if negative:
        value = -value
    value = max(_LONG_MIN, min(_LONG_MAX, value))
    return value, text[pos:]


def string_to_color(text: str) -> Color:
    """Parse a colour string of the form ``#RRGGBB``.

    The first character is skipped; trailing garbage of more than one
    character is reported as a warning, and the parsed prefix is used.
    """
    value, rest = _parse_hex_prefix(text[1:])
    if len(rest) > 1:
        _log.warning("Invalid color string: '%s'", text)
    return hex_to_color(value)


def apply_delta(base: float, delta: float) -> float:
    """Add ``delta`` to ``base`` and clamp the result to ``[0, 1]``."""
    return min(1.0, max(0.0, base + delta))


def foreground_for(bg: Color) -> Color:
    """Return a colour slightly darker or brighter than ``bg``.

    Bright backgrounds are darkened, dark ones brightened.
    """
    darken = (bg.r + bg.g + bg.b) / 3 > 0.5
    delta = -FOREGROUND_DELTA if darken else FOREGROUND_DELTA
    return Color(
        apply_delta(bg.r, delta),
        apply_delta(bg.g, delta),
        apply_delta(bg.b, delta),
    )


def separator_color(
    kind: SeparatorKind,
    custom: str | None,
    frame: Color,
    following_frame: Color,
    urgency: int,
    following_urgency: int,
    fg: Color,
    bg: Color,
) -> Color:
    """Return the colour of the separator below a notification.

    ``frame``, ``urgency``, ``fg`` and ``bg`` belong to the notification
    above the separator; the ``following_`` values to the one below.
    """
    if kind is SeparatorKind.FRAME:
        return following_frame if following_urgency > urgency else frame
    if kind is SeparatorKind.CUSTOM:
        if custom is None:
            raise ValueError("a custom separator colour needs a colour string")
        return string_to_color(custom)
    if kind is SeparatorKind.FOREGROUND:
        return fg
    if kind is SeparatorKind.AUTO:
        return foreground_for(bg)
    raise ValueError(f"invalid separator kind: {kind!r}")


def window_position(
    screen: Screen, geometry: Geometry, width: int, height: int
) -> tuple[int, int]:
    """Return the top-left corner of a window of the given size."""
    if geometry.negative_x:
        x = screen.x + (screen.w - width) + geometry.x
    else:
        x = screen.x + geometry.x
    if geometry.negative_y:
        y = screen.y + (screen.h + geometry.y) - height
    else:
        y = screen.y + geometry.y
    return x, y