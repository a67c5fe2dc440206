"""Color modes and how each one is turned into a dithering pipeline.

A ``Mode`` is parsed once from the ``--color`` option. ``resolve`` combines it
with the bit depth into a ``Pipeline``: an optional conversion into the
working grid, a quantizer, and a conversion of the quantized grid back into
an 8-bit RGB image.

Modes
-----
- BlackAndWhite: luminance, n-level gray
- Color: each of R, G, B dithered on its own to n levels
- SingleColor(c): luminance, n levels, rendered as a tint of ``c``
- KnownPalette(p): nearest color of ``p`` in RGB space (depth 1 only)
- CustomPalette(front, back): luminance, 1 bit, blended between the two colors
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .color import RGB, U8, from_luminance, render_levels, to_luminance
from .dithers import Ditherer
from .dithers.quantize import PaletteQuantizer, Quantizer, UniformQuantizer
from .errors import IncompatibleOptions, UnknownOption
from .palette import CGA, CGA_COLORS, Palette, parse_hex_color

Array = np.ndarray


class Mode(ABC):
    """Base class for the ``--color`` variants."""

    @property
    @abstractmethod
    def tag(self) -> str:
        """Short form used in default output file names."""

    @property
    def uses_palette(self) -> bool:
        return False


@dataclass(frozen=True)
class BlackAndWhite(Mode):
    @property
    def tag(self) -> str:
        return "bw"

    def __str__(self) -> str:
        return "bw"


@dataclass(frozen=True)
class Color(Mode):
    @property
    def tag(self) -> str:
        return "color"

    def __str__(self) -> str:
        return "color"


@dataclass(frozen=True)
class SingleColor(Mode):
    color: RGB

    @property
    def tag(self) -> str:
        return f"single_color_{self.color.hex}"

    def __str__(self) -> str:
        return self.tag


@dataclass(frozen=True)
class KnownPalette(Mode):
    palette: Palette

    @property
    def name(self) -> str:
        return self.palette.name

    @property
    def tag(self) -> str:
        return self.palette.name.lower()

    @property
    def uses_palette(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"palette: {self.palette.name}"


@dataclass(frozen=True)
class CustomPalette(Mode):
    front: RGB
    back: RGB

    @property
    def tag(self) -> str:
        return f"custom_{self.front.hex}_{self.back.hex}"

    @property
    def uses_palette(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"custom palette: front 0x{self.front.hex}, back 0x{self.back.hex}"


CGA_PALETTE = KnownPalette(CGA)


def parse_mode(text: str) -> Mode:
    """Parse a ``--color`` value.

    Accepts ``bw`` (also ``black``/``white``), ``c``/``color``, ``cga``, a CGA
    color name such as ``RED`` or ``light_blue``, or two hex colors
    ``"0xRRGGBB 0xRRGGBB"`` (foreground, background). Case-insensitive.
    """
    tokens = text.split()
    if len(tokens) == 2:
        return CustomPalette(parse_hex_color(tokens[0]), parse_hex_color(tokens[1]))

    key = text.strip().upper()
    if key in ("BW", "BLACK", "WHITE"):
        return BlackAndWhite()
    if key in ("C", "COLOR"):
        return Color()
    if key == "CGA":
        return CGA_PALETTE
    if key in CGA_COLORS:
        return SingleColor(CGA_COLORS[key])
    raise UnknownOption(text)


def _tint(color: RGB) -> Callable[[Array], Array]:
    c = color.to_f64() / 255.0

    def convert(gray: Array) -> Array:
        return render_levels(gray, lambda x: c * x)

    return convert


def _blend(front: RGB, back: RGB) -> Callable[[Array], Array]:
    f = front.to_f64() / 255.0
    b = back.to_f64() / 255.0

    def convert(gray: Array) -> Array:
        return render_levels(gray, lambda x: f * x + b * (255.0 - x))

    return convert


@dataclass(frozen=True)
class Pipeline:
    """A resolved mode: what to dither, with which quantizer, and how to render it.

    ``prepare`` maps the (H, W, 3) input to the working grid (``None`` keeps it
    as float RGB). ``finish`` maps the quantized grid back to float RGB
    (``None`` when it already is). ``per_channel`` runs one scalar pass per
    channel instead of a single vector pass.
    """

    quantizer: Quantizer
    prepare: Optional[Callable[[Array], Array]] = None
    finish: Optional[Callable[[Array], Array]] = None
    per_channel: bool = False

    def run(self, image: Array, ditherer: Ditherer) -> Array:
        """Dither an (H, W, 3) image and return it as (H, W, 3) uint8."""
        arr = np.asarray(image)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError("image must be an RGB array with shape (H, W, 3)")
        work = self.prepare(arr) if self.prepare is not None else arr.astype(np.float64)

        if self.per_channel:
            quantized = ditherer.dither_channels(work, self.quantizer)
        else:
            quantized = ditherer.dither(work, self.quantizer)

        if self.finish is not None:
            quantized = self.finish(quantized)
        return U8.convert_array(quantized)


def resolve(mode: Mode, depth: int) -> Pipeline:
    """Build the pipeline for ``mode`` at ``depth`` bits.

    Raises ``BadBitDepth`` for a depth outside 1..=7 and
    ``IncompatibleOptions`` for a palette mode with depth > 1. Both are
    raised before any pixel is touched.
    """
    quantizer = UniformQuantizer(depth)
    if mode.uses_palette and depth > 1:
        raise IncompatibleOptions()

    if isinstance(mode, BlackAndWhite):
        return Pipeline(quantizer, prepare=to_luminance, finish=from_luminance)
    if isinstance(mode, Color):
        return Pipeline(quantizer, per_channel=True)
    if isinstance(mode, SingleColor):
        return Pipeline(quantizer, prepare=to_luminance, finish=_tint(mode.color))
    if isinstance(mode, KnownPalette):
        return Pipeline(PaletteQuantizer(mode.palette))
    if isinstance(mode, CustomPalette):
        return Pipeline(quantizer, prepare=to_luminance, finish=_blend(mode.front, mode.back))
    raise TypeError(f"unsupported color mode: {mode!r}")


def dither_image(image: Array, mode: Mode, depth: int, ditherer: Ditherer) -> Array:
    """Dither an (H, W, 3) uint8 image; returns a new (H, W, 3) uint8 image."""
    return resolve(mode, depth).run(image, ditherer)


__all__ = [
    "Mode",
    "BlackAndWhite",
    "Color",
    "SingleColor",
    "KnownPalette",
    "CustomPalette",
    "CGA_PALETTE",
    "Pipeline",
    "parse_mode",
    "resolve",
    "dither_image",
]
