"""Single-pass error-diffusion engine.

The engine scans a grid top to bottom, left to right. Each pixel's
accumulated value is quantized, the quantized value goes to the output and
the residual is spread to the kernel's neighbors. Contributions that would
land outside the grid are dropped (no wrap-around, no reflection).

Grids are NumPy arrays of shape (H, W) for scalar quantizers or (H, W, C)
for vector quantizers, where the residual is a length-C vector scaled per
channel.

The kernel reaches the scan loops as three parallel arrays ``dx``, ``dy``
and ``w``. The built-in quantizers run the whole pass inside a Numba-compiled
core (``scan_uniform``, ``scan_palette``); any other quantizer goes through
``scan_apply``, which calls ``Quantizer.apply`` once per pixel.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Tuple

import numpy as np
from numba import njit

from .kernels import Kernel

if TYPE_CHECKING:  # pragma: no cover
    from .quantize import Quantizer

Array = np.ndarray


@njit(cache=True)
def quantize_uniform(x: float, step: float) -> Tuple[float, float]:
    floor_q = math.floor(x / step) * step
    floor_rem = x - floor_q
    ceil_q = math.ceil(x / step) * step
    ceil_rem = ceil_q - x
    # Accumulated error can push x outside [0, 255]. The level is clamped,
    # the residual is always measured against the unclamped level.
    if floor_rem < ceil_rem:
        return min(255.0, max(floor_q, 0.0)), floor_rem
    return max(0.0, min(255.0, ceil_q)), -ceil_rem


@njit(cache=True)
def nearest_index(r: float, g: float, b: float, palette: Array) -> int:
    best = 0
    best_dist = np.inf
    for i in range(palette.shape[0]):
        dist = abs(r - palette[i, 0]) + abs(g - palette[i, 1]) + abs(b - palette[i, 2])
        if dist < best_dist:
            best_dist = dist
            best = i
    return best


@njit(cache=True)
def scan_uniform(work: Array, step: float, dx: Array, dy: Array, w: Array) -> Array:
    H, W = work.shape
    out = np.empty_like(work)
    for y in range(H):
        for x in range(W):
            q, err = quantize_uniform(work[y, x], step)
            out[y, x] = q
            for k in range(dx.shape[0]):
                nx = x + dx[k]
                ny = y + dy[k]
                if 0 <= nx < W and ny < H:
                    work[ny, nx] += w[k] * err
    return out


@njit(cache=True)
def scan_palette(work: Array, palette: Array, dx: Array, dy: Array, w: Array) -> Array:
    H, W, _ = work.shape
    out = np.empty_like(work)
    for y in range(H):
        for x in range(W):
            old0 = work[y, x, 0]
            old1 = work[y, x, 1]
            old2 = work[y, x, 2]
            i = nearest_index(old0, old1, old2, palette)
            out[y, x, 0] = palette[i, 0]
            out[y, x, 1] = palette[i, 1]
            out[y, x, 2] = palette[i, 2]
            err0 = old0 - palette[i, 0]
            err1 = old1 - palette[i, 1]
            err2 = old2 - palette[i, 2]
            for k in range(dx.shape[0]):
                nx = x + dx[k]
                ny = y + dy[k]
                if 0 <= nx < W and ny < H:
                    work[ny, nx, 0] += w[k] * err0
                    work[ny, nx, 1] += w[k] * err1
                    work[ny, nx, 2] += w[k] * err2
    return out


def scan_apply(work: Array, quantizer: "Quantizer", dx: Array, dy: Array, w: Array) -> Array:
    """Interpreted pass for quantizers without a compiled core."""
    H, W = work.shape[:2]
    out = np.empty_like(work)
    entries = list(zip(dx.tolist(), dy.tolist(), w.tolist()))
    for y in range(H):
        for x in range(W):
            quantized, residual = quantizer.apply(work[y, x])
            out[y, x] = quantized
            for ox, oy, weight in entries:
                nx = x + ox
                ny = y + oy
                if 0 <= nx < W and ny < H:
                    work[ny, nx] += weight * residual
    return out


def error_diffuse(grid: Array, quantizer: "Quantizer", kernel: Kernel) -> Array:
    """Dither ``grid`` with ``quantizer``, diffusing residuals through ``kernel``.

    Parameters
    ----------
    grid : np.ndarray
        Input values, shape (H, W) or (H, W, C). Not modified.
    quantizer : Quantizer
        Strategy mapping an accumulated value to ``(quantized, residual)``;
        it also picks the scan loop (see ``Quantizer.scan``).
    kernel : Kernel
        Forward-pointing offsets and weights.

    Returns
    -------
    np.ndarray
        Newly allocated float64 array of the same shape holding only
        quantizer outputs.
    """
    work = np.array(grid, dtype=np.float64, order="C")
    if work.ndim not in (2, 3):
        raise ValueError("grid must have shape (H, W) or (H, W, C)")
    dx, dy, w = kernel.as_arrays()
    return quantizer.scan(work, dx, dy, w)


def error_diffuse_channels(grid: Array, quantizer: "Quantizer", kernel: Kernel) -> Array:
    """Run one independent scalar pass per channel of an (H, W, C) grid.

    Each channel gets its own accumulator; channels never exchange error.
    """
    arr = np.asarray(grid)
    if arr.ndim != 3:
        raise ValueError("grid must have shape (H, W, C)")
    out = np.empty(arr.shape, dtype=np.float64)
    for c in range(arr.shape[2]):
        out[:, :, c] = error_diffuse(arr[:, :, c], quantizer, kernel)
    return out


__all__ = [
    "error_diffuse",
    "error_diffuse_channels",
    "scan_uniform",
    "scan_palette",
    "scan_apply",
]
