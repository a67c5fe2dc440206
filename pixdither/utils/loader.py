"""Reading source images and writing dithered results.

Any failure to read an input raises ``ImageReadError``; any failure to write
an output raises ``ImageWriteError``. Both carry the path and the underlying
Pillow error, and both derive from ``DitherError`` so the CLI reports them
like every other user-facing error.

Everything between the two calls works on (H, W, 3) ``uint8`` RGB arrays;
Pillow is only touched here.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from ..errors import ImageReadError, ImageWriteError

Array = np.ndarray


def load_image(path: Union[str, Path]) -> Array:
    """Read the image to dither as an (H, W, 3) uint8 RGB array.

    Raises ``ImageReadError`` when the file is missing, unreadable, not an
    image, or too large to decode. Palette, grayscale and alpha images are
    flattened to plain RGB first, so every color mode sees the same input.
    """
    p = Path(path)
    try:
        with Image.open(p) as im:
            im = im.convert("RGB")
            arr = np.array(im, dtype=np.uint8)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageReadError(p, e) from e
    return arr


def save_image(arr: Array, path: Union[str, Path]) -> None:
    """Write a dithered (H, W, 3) uint8 image to ``path``.

    Raises ``ImageWriteError`` when the extension names no format Pillow can
    write or the file cannot be created. An array of the wrong type or shape
    is a programming error and raises ``TypeError`` / ``ValueError`` before
    anything is written.
    """
    if not isinstance(arr, np.ndarray):
        raise TypeError("arr must be a NumPy array")
    if arr.dtype != np.uint8:
        raise TypeError("arr must have dtype=uint8")
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError("arr must have shape (H, W, 3)")

    p = Path(path)
    im = Image.fromarray(arr)
    try:
        im.save(p)
    except (OSError, ValueError, KeyError) as e:
        raise ImageWriteError(p, e) from e
