"""Error types raised by pixdither.

Every configuration error is raised before any pixel is processed. I/O errors
carry the offending path and the underlying cause. The CLI catches
``DitherError`` and turns it into a message and a non-zero exit status.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union


class DitherError(Exception):
    """Base class for every error pixdither reports to the user."""


class UnknownOption(DitherError, ValueError):
    """An unrecognized ``--color`` token."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f'unknown color option "{option}"')


class BadPaletteColor(DitherError, ValueError):
    """A palette color outside ``0x000000..=0xFFFFFF``."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(
            f"palette colors must be between 0x00 and 0xffffff, but had 0x{value:x}"
        )


class CouldNotParsePalette(DitherError, ValueError):
    """A palette token that is not a hexadecimal literal."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f'could not parse specified palette: "{token}" is not a hex color')


class BadBitDepth(DitherError, ValueError):
    def __init__(self, depth: int) -> None:
        self.depth = depth
        super().__init__(f"bit depth must be between 1 and 7, but was {depth}")


class IncompatibleOptions(DitherError, ValueError):
    def __init__(self) -> None:
        super().__init__("palette color modes cannot be combined with a bit depth greater than 1")


class UnknownDitherer(DitherError, ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'unknown ditherer "{name}"')


class ImageIOError(DitherError, OSError):
    """Reading or writing an image failed."""

    action = "access"

    def __init__(self, path: Union[str, Path], cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f'could not {self.action} image "{self.path}": {cause}')


class ImageReadError(ImageIOError):
    action = "read"


class ImageWriteError(ImageIOError):
    action = "write"


__all__ = [
    "DitherError",
    "UnknownOption",
    "BadPaletteColor",
    "CouldNotParsePalette",
    "BadBitDepth",
    "IncompatibleOptions",
    "UnknownDitherer",
    "ImageIOError",
    "ImageReadError",
    "ImageWriteError",
]
