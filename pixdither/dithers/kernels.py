"""Error-diffusion kernels.

A kernel lists ``(dx, dy, numerator)`` entries; the weight of an entry is
``numerator / divisor``. Offsets are relative to the current pixel and must
point strictly forward in raster order (``dy > 0``, or ``dy == 0`` and
``dx > 0``), so a single top-to-bottom, left-to-right pass never touches a
pixel that has already been quantized.

Tables (``*`` marks the current pixel)::

    Floyd-Steinberg (/16)     Atkinson (/8)
          *  7                      *  1  1
       3  5  1                   1  1  1
                                    1

    Stucki (/42)              Jarvis-Judice-Ninke (/48)
             *  8  4                   *  7  5
       2  4  8  4  2             3  5  7  5  3
       1  2  4  2  1             1  3  5  3  1

    Burkes (/32)              Sierra-3 (/32)
             *  8  4                   *  5  3
       2  4  8  4  2             2  4  5  4  2
                                    2  3  2

Atkinson only diffuses 6/8 of the error, which lightens the result.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Tuple

import numpy as np

Entry = Tuple[int, int, int]


@dataclass(frozen=True)
class Kernel:
    name: str
    divisor: int
    entries: Tuple[Entry, ...]
    weights: Tuple[Tuple[int, int, float], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.divisor <= 0:
            raise ValueError(f"{self.name}: divisor must be positive")
        for dx, dy, num in self.entries:
            if dy < 0 or (dy == 0 and dx <= 0):
                raise ValueError(
                    f"{self.name}: offset ({dx}, {dy}) does not point forward in scan order"
                )
            if num <= 0:
                raise ValueError(f"{self.name}: weights must be positive")
        object.__setattr__(
            self,
            "weights",
            tuple((dx, dy, num / self.divisor) for dx, dy, num in self.entries),
        )

    def __iter__(self) -> Iterator[Tuple[int, int, float]]:
        return iter(self.weights)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """``(dx, dy, w)`` as int64/int64/float64 arrays for the scan loops."""
        dx = np.array([dx for dx, _, _ in self.weights], dtype=np.int64)
        dy = np.array([dy for _, dy, _ in self.weights], dtype=np.int64)
        w = np.array([w for _, _, w in self.weights], dtype=np.float64)
        return dx, dy, w


FLOYD_STEINBERG = Kernel(
    "floyd",
    16,
    (
        (1, 0, 7),
        (-1, 1, 3), (0, 1, 5), (1, 1, 1),
    ),
)

ATKINSON = Kernel(
    "atkinson",
    8,
    (
        (1, 0, 1), (2, 0, 1),
        (-1, 1, 1), (0, 1, 1), (1, 1, 1),
        (0, 2, 1),
    ),
)

STUCKI = Kernel(
    "stucki",
    42,
    (
        (1, 0, 8), (2, 0, 4),
        (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
        (-2, 2, 1), (-1, 2, 2), (0, 2, 4), (1, 2, 2), (2, 2, 1),
    ),
)

BURKES = Kernel(
    "burkes",
    32,
    (
        (1, 0, 8), (2, 0, 4),
        (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
    ),
)

JARVIS = Kernel(
    "jarvis",
    48,
    (
        (1, 0, 7), (2, 0, 5),
        (-2, 1, 3), (-1, 1, 5), (0, 1, 7), (1, 1, 5), (2, 1, 3),
        (-2, 2, 1), (-1, 2, 3), (0, 2, 5), (1, 2, 3), (2, 2, 1),
    ),
)

SIERRA3 = Kernel(
    "sierra3",
    32,
    (
        (1, 0, 5), (2, 0, 3),
        (-2, 1, 2), (-1, 1, 4), (0, 1, 5), (1, 1, 4), (2, 1, 2),
        (-1, 2, 2), (0, 2, 3), (1, 2, 2),
    ),
)

KERNELS = (FLOYD_STEINBERG, ATKINSON, STUCKI, BURKES, JARVIS, SIERRA3)

__all__ = [
    "Kernel",
    "FLOYD_STEINBERG",
    "ATKINSON",
    "STUCKI",
    "BURKES",
    "JARVIS",
    "SIERRA3",
    "KERNELS",
]
