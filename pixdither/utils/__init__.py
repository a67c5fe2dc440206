"""Utility functions for pixdither.

Modules:
- loader: Load/save Pillow <-> NumPy conversion utilities.
"""
from .loader import load_image, save_image

__all__ = [
    "load_image",
    "save_image",
]
