from __future__ import annotations

# Public API: error-diffusion dithering over NumPy arrays.
from .color import RGB, U8, F64, to_luminance, from_luminance  # noqa: F401
from .dithers import DITHERERS, Ditherer, get_ditherer  # noqa: F401
from .dithers.quantize import PaletteQuantizer, UniformQuantizer  # noqa: F401
from .errors import DitherError  # noqa: F401
from .modes import Mode, dither_image, parse_mode, resolve  # noqa: F401
from .palette import CGA, Palette  # noqa: F401
from .utils.loader import load_image, save_image  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "RGB",
    "U8",
    "F64",
    "to_luminance",
    "from_luminance",
    "DITHERERS",
    "Ditherer",
    "get_ditherer",
    "PaletteQuantizer",
    "UniformQuantizer",
    "DitherError",
    "Mode",
    "dither_image",
    "parse_mode",
    "resolve",
    "CGA",
    "Palette",
    "load_image",
    "save_image",
]
