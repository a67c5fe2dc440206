"""Fixed color palettes and hexadecimal color parsing.

The 16 CGA colors are module-level constants; ``CGA`` is the full palette in
the classic index order (black first, white last).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import numpy as np

from .color import RGB
from .errors import BadPaletteColor, CouldNotParsePalette

BLACK = RGB.from_hex(0x000000)
BLUE = RGB.from_hex(0x0000AA)
GREEN = RGB.from_hex(0x00AA00)
CYAN = RGB.from_hex(0x00AAAA)
RED = RGB.from_hex(0xAA0000)
MAGENTA = RGB.from_hex(0xAA00AA)
BROWN = RGB.from_hex(0xAA5500)
LIGHT_GRAY = RGB.from_hex(0xAAAAAA)
GRAY = RGB.from_hex(0x555555)
LIGHT_BLUE = RGB.from_hex(0x5555FF)
LIGHT_GREEN = RGB.from_hex(0x55FF55)
LIGHT_CYAN = RGB.from_hex(0x55FFFF)
LIGHT_RED = RGB.from_hex(0xFF5555)
LIGHT_MAGENTA = RGB.from_hex(0xFF55FF)
YELLOW = RGB.from_hex(0xFFFF55)
WHITE = RGB.from_hex(0xFFFFFF)

# Names accepted for single-color mode. BLACK and WHITE are not tints.
CGA_COLORS = {
    "BLUE": BLUE,
    "GREEN": GREEN,
    "CYAN": CYAN,
    "RED": RED,
    "MAGENTA": MAGENTA,
    "BROWN": BROWN,
    "LIGHT_GRAY": LIGHT_GRAY,
    "GRAY": GRAY,
    "LIGHT_BLUE": LIGHT_BLUE,
    "LIGHT_GREEN": LIGHT_GREEN,
    "LIGHT_CYAN": LIGHT_CYAN,
    "LIGHT_RED": LIGHT_RED,
    "LIGHT_MAGENTA": LIGHT_MAGENTA,
    "YELLOW": YELLOW,
}


@dataclass(frozen=True)
class Palette:
    """An ordered, non-empty, immutable set of output colors.

    Order only matters for tie-breaking: when two entries are equally close
    to a color, the earlier one wins.
    """

    name: str
    colors: Tuple[RGB, ...]

    def __init__(self, name: str, colors: Iterable[RGB]) -> None:
        colors = tuple(colors)
        if not colors:
            raise ValueError("a palette needs at least one color")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "colors", colors)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[RGB]:
        return iter(self.colors)

    def to_array(self) -> np.ndarray:
        """Palette as a (K, 3) float64 array."""
        return np.array([tuple(c) for c in self.colors], dtype=np.float64)


CGA = Palette(
    "CGA",
    [
        BLACK,
        BLUE,
        GREEN,
        CYAN,
        RED,
        MAGENTA,
        BROWN,
        LIGHT_GRAY,
        GRAY,
        LIGHT_BLUE,
        LIGHT_GREEN,
        LIGHT_CYAN,
        LIGHT_RED,
        LIGHT_MAGENTA,
        YELLOW,
        WHITE,
    ],
)

_HEX_RE = re.compile(r"(?:0x)?([0-9a-f]+)", re.IGNORECASE)


def parse_hex_color(token: str) -> RGB:
    """Parse a ``0xRRGGBB`` token (the ``0x`` prefix is optional)."""
    match = _HEX_RE.fullmatch(token.strip())
    if match is None:
        raise CouldNotParsePalette(token)
    value = int(match.group(1), 16)
    if value > 0xFFFFFF:
        raise BadPaletteColor(value)
    return RGB.from_hex(value)


__all__ = [
    "Palette",
    "CGA",
    "CGA_COLORS",
    "parse_hex_color",
    "BLACK",
    "BLUE",
    "GREEN",
    "CYAN",
    "RED",
    "MAGENTA",
    "BROWN",
    "LIGHT_GRAY",
    "GRAY",
    "LIGHT_BLUE",
    "LIGHT_GREEN",
    "LIGHT_CYAN",
    "LIGHT_RED",
    "LIGHT_MAGENTA",
    "YELLOW",
    "WHITE",
]
