"""RGB color values and the numeric representations they are stored in.

Colors are stored either as 8-bit integers (``U8``) or as floats (``F64``),
the working form used while dithering. A ``Channel`` owns the arithmetic of
its representation: every result goes through ``convert``, so ``U8`` sums and
products saturate into [0, 255] while ``F64`` arithmetic is plain float math.
The same conversion applies to a single ``RGB`` and to a whole NumPy image.

Luminance uses the Rec. 601 weights 0.299, 0.587 and 0.114.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator

import numpy as np

Array = np.ndarray

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def clamp_to_u8(value: float) -> int:
    """Round ``value`` to the nearest integer and clamp it into [0, 255]."""
    return int(min(255.0, max(0.0, float(np.rint(value)))))


def clamp_array_to_u8(arr: Array) -> Array:
    return np.clip(np.rint(arr), 0, 255).astype(np.uint8)


@dataclass(frozen=True)
class Channel:
    """A numeric representation for color channels."""

    name: str
    convert: Callable[[float], float]
    convert_array: Callable[[Array], Array]

    def add(self, a: float, b: float) -> float:
        return self.convert(a + b)

    def sub(self, a: float, b: float) -> float:
        return self.convert(a - b)

    def scale(self, a: float, k: float) -> float:
        return self.convert(a * k)

    def divide(self, a: float, k: float) -> float:
        return self.convert(a / k)


U8 = Channel("u8", clamp_to_u8, clamp_array_to_u8)
F64 = Channel("f64", float, lambda arr: np.asarray(arr, dtype=np.float64))


def luminance(r, g, b):
    """Weighted gray value; works on scalars and on NumPy arrays alike."""
    wr, wg, wb = LUMA_WEIGHTS
    return r * wr + g * wg + b * wb


@dataclass(frozen=True)
class RGB:
    """Three channel values in one representation (``F64`` by default).

    Components are normalized through the channel on construction. Equality
    compares the components only.
    """

    r: float
    g: float
    b: float
    channel: Channel = field(default=F64, compare=False, repr=False)

    def __post_init__(self) -> None:
        convert = self.channel.convert
        object.__setattr__(self, "r", convert(self.r))
        object.__setattr__(self, "g", convert(self.g))
        object.__setattr__(self, "b", convert(self.b))

    def __iter__(self) -> Iterator[float]:
        return iter((self.r, self.g, self.b))

    def _same_channel(self, other: "RGB") -> Channel:
        if other.channel is not self.channel:
            raise TypeError(
                f"cannot combine {self.channel.name} and {other.channel.name} colors"
            )
        return self.channel

    def __add__(self, other: "RGB") -> "RGB":
        ch = self._same_channel(other)
        return RGB(ch.add(self.r, other.r), ch.add(self.g, other.g), ch.add(self.b, other.b), ch)

    def __sub__(self, other: "RGB") -> "RGB":
        ch = self._same_channel(other)
        return RGB(ch.sub(self.r, other.r), ch.sub(self.g, other.g), ch.sub(self.b, other.b), ch)

    def __mul__(self, k: float) -> "RGB":
        ch = self.channel
        return RGB(ch.scale(self.r, k), ch.scale(self.g, k), ch.scale(self.b, k), ch)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "RGB":
        ch = self.channel
        return RGB(ch.divide(self.r, k), ch.divide(self.g, k), ch.divide(self.b, k), ch)

    def convert(self, channel: Channel) -> "RGB":
        return RGB(self.r, self.g, self.b, channel)

    def to_u8(self) -> "RGB":
        return self.convert(U8)

    def to_f64(self) -> "RGB":
        return self.convert(F64)

    def to_array(self) -> Array:
        return np.array([self.r, self.g, self.b], dtype=np.float64)

    def luminance(self) -> float:
        """Chroma-corrected grayscale value of this color."""
        return luminance(float(self.r), float(self.g), float(self.b))

    @classmethod
    def from_luminance(cls, x: float) -> "RGB":
        return cls(x, x, x)

    @classmethod
    def from_hex(cls, value: int) -> "RGB":
        """Build a ``U8`` color from a 24-bit ``0xRRGGBB`` integer."""
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, U8)

    @property
    def hex(self) -> str:
        r, g, b = self.to_u8()
        return f"{r:02x}{g:02x}{b:02x}"


def to_luminance(img: Array) -> Array:
    """Reduce an (H, W, 3) image to an (H, W) float64 luminance grid."""
    arr = np.asarray(img, dtype=np.float64)
    return luminance(arr[..., 0], arr[..., 1], arr[..., 2])


def from_luminance(gray: Array) -> Array:
    """Replicate an (H, W) grid into all three channels of an (H, W, 3) grid."""
    gray = np.asarray(gray)
    return np.repeat(gray[..., np.newaxis], 3, axis=-1)


def render_levels(gray: Array, color_of: Callable[[float], RGB]) -> Array:
    """Map each distinct value of an (H, W) grid to a ``U8`` color.

    Quantized grids hold only a handful of levels, so ``color_of`` is called
    once per level and the results are scattered back into an (H, W, 3)
    uint8 image.
    """
    gray = np.asarray(gray, dtype=np.float64)
    levels, inverse = np.unique(gray, return_inverse=True)
    colors = np.array([tuple(color_of(float(x)).to_u8()) for x in levels], dtype=np.uint8)
    return colors[inverse.reshape(-1)].reshape(gray.shape + (3,))


__all__ = [
    "LUMA_WEIGHTS",
    "Channel",
    "U8",
    "F64",
    "RGB",
    "clamp_to_u8",
    "clamp_array_to_u8",
    "luminance",
    "to_luminance",
    "from_luminance",
    "render_levels",
]
