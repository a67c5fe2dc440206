"""Error-diffusion ditherers and a lookup by CLI name.

Exported API
------------
- Ditherer: a named kernel with ``dither`` / ``dither_channels`` helpers
- DITHERERS: name -> Ditherer for every supported algorithm
- get_ditherer(name)

Supported methods
-----------------
- "floyd"   : Floyd–Steinberg error diffusion (default)
- "atkinson": Atkinson error diffusion
- "stucki"  : Stucki error diffusion
- "burkes"  : Burkes error diffusion
- "jarvis"  : Jarvis–Judice–Ninke error diffusion
- "sierra3" : Sierra-3 error diffusion

Implementation notes
--------------------
All ditherers share one engine (``engine.error_diffuse``); they differ only
in their kernel table. Quantization is a separate strategy object (see
``quantize``) so the same kernel serves gray, color and palette output.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..errors import UnknownDitherer
from .engine import error_diffuse, error_diffuse_channels
from .kernels import (
    ATKINSON,
    BURKES,
    FLOYD_STEINBERG,
    JARVIS,
    KERNELS,
    SIERRA3,
    STUCKI,
    Kernel,
)
from .quantize import PaletteQuantizer, Quantizer, UniformQuantizer

Array = np.ndarray


@dataclass(frozen=True)
class Ditherer:
    kernel: Kernel

    @property
    def name(self) -> str:
        return self.kernel.name

    def dither(self, grid: Array, quantizer: Quantizer) -> Array:
        """Single pass over a scalar (H, W) or vector (H, W, C) grid."""
        return error_diffuse(grid, quantizer, self.kernel)

    def dither_channels(self, grid: Array, quantizer: Quantizer) -> Array:
        """Independent scalar pass per channel of an (H, W, C) grid."""
        return error_diffuse_channels(grid, quantizer, self.kernel)

    def __str__(self) -> str:
        return self.name


DITHERERS = {k.name: Ditherer(k) for k in KERNELS}


def get_ditherer(name: str) -> Ditherer:
    """Look up a ditherer by name (case-insensitive)."""
    try:
        return DITHERERS[name.strip().lower()]
    except KeyError:
        raise UnknownDitherer(name) from None


__all__ = [
    "Ditherer",
    "DITHERERS",
    "get_ditherer",
    "Kernel",
    "FLOYD_STEINBERG",
    "ATKINSON",
    "STUCKI",
    "BURKES",
    "JARVIS",
    "SIERRA3",
    "Quantizer",
    "UniformQuantizer",
    "PaletteQuantizer",
    "error_diffuse",
    "error_diffuse_channels",
]
