"""Quantizers: map one value to an allowed output value plus its residual.

A quantizer is a stateless strategy. ``apply(value) -> (quantized, residual)``
with ``residual = value - quantized`` defines what it does to one pixel;
``scan`` runs a whole error-diffusion pass with it. The built-in quantizers
hand the pass to a compiled core in ``engine``; other subclasses only need
``apply``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from ..errors import BadBitDepth
from ..palette import Palette
from .engine import nearest_index, quantize_uniform, scan_apply, scan_palette, scan_uniform

Array = np.ndarray

MIN_BIT_DEPTH = 1
MAX_BIT_DEPTH = 7


class Quantizer(ABC):
    """Base class for quantization strategies."""

    @abstractmethod
    def apply(self, value):
        """Return ``(quantized, residual)`` for one accumulated value."""

    def scan(self, work: Array, dx: Array, dy: Array, w: Array) -> Array:
        """Quantize ``work`` in raster order, diffusing residuals in place."""
        return scan_apply(work, self, dx, dy, w)


class UniformQuantizer(Quantizer):
    """Threshold a scalar in [0, 255] onto ``n`` evenly spaced levels.

    The level spacing is ``256 / n``. With ``n == 1`` this is a hard threshold
    at 128: darker values go to 0, the rest to 255.
    """

    def __init__(self, n: int) -> None:
        if not MIN_BIT_DEPTH <= n <= MAX_BIT_DEPTH:
            raise BadBitDepth(n)
        self.n = n
        self.step = 256.0 / n

    def apply(self, value: float) -> Tuple[float, float]:
        return quantize_uniform(float(value), self.step)

    def scan(self, work: Array, dx: Array, dy: Array, w: Array) -> Array:
        if work.ndim != 2:
            raise ValueError("UniformQuantizer needs a scalar (H, W) grid")
        return scan_uniform(work, self.step, dx, dy, w)

    def __repr__(self) -> str:
        return f"UniformQuantizer(n={self.n})"


class PaletteQuantizer(Quantizer):
    """Snap an RGB triple to the nearest palette color (L1 distance).

    Ties go to the entry that comes first in the palette.
    """

    def __init__(self, palette: Palette) -> None:
        self.palette = palette
        self._colors = palette.to_array()

    def apply(self, value: Array) -> Tuple[Array, Array]:
        value = np.asarray(value, dtype=np.float64)
        idx = nearest_index(float(value[0]), float(value[1]), float(value[2]), self._colors)
        match = self._colors[idx].copy()
        return match, value - match

    def scan(self, work: Array, dx: Array, dy: Array, w: Array) -> Array:
        if work.ndim != 3 or work.shape[2] != 3:
            raise ValueError("PaletteQuantizer needs an RGB (H, W, 3) grid")
        return scan_palette(work, self._colors, dx, dy, w)

    def __repr__(self) -> str:
        return f"PaletteQuantizer({self.palette.name})"


__all__ = [
    "MIN_BIT_DEPTH",
    "MAX_BIT_DEPTH",
    "Quantizer",
    "UniformQuantizer",
    "PaletteQuantizer",
]
