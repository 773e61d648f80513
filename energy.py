"""
Energy map for seam carving.

The energy of a pixel is the dual-gradient measure: the squared color
difference between its left and right neighbours plus the squared color
difference between its top and bottom neighbours. Neighbours wrap around the
image edges (toroidal), so border pixels are treated like interior ones.

Notes:
  - Input rasters are HxWx3 uint8; differences are taken in int64 and the
    result is stored as uint32 (max 2 * 3 * 255**2 per pixel).
  - Rows are independent of each other, so the whole map is computed with
    array-wide numpy operations.
"""

from __future__ import annotations
import numpy as np


def _axis_gradient(im: np.ndarray, axis: int) -> np.ndarray:
    """Sum over channels of (prev - next)**2 along `axis`, wrapping at the edges."""
    prev = np.roll(im, 1, axis=axis)
    nxt = np.roll(im, -1, axis=axis)
    diff = prev - nxt
    return np.sum(diff * diff, axis=2)


def gradient_energy(im: np.ndarray) -> np.ndarray:
    """
    Dual-gradient energy map on color images.
    Input: im (HxWx3), any integer dtype (uint8 expected).
    Output: energy map (HxW), uint32.
    """
    if im.ndim != 3 or im.shape[2] != 3:
        raise ValueError(f"expected an HxWx3 raster, got shape {im.shape}")
    im = im.astype(np.int64)
    energy = _axis_gradient(im, axis=1) + _axis_gradient(im, axis=0)
    return energy.astype(np.uint32)


class EnergyMatrix:
    """Per-pixel energy of one raster snapshot. Read-only once built."""

    def __init__(self, im: np.ndarray):
        values = gradient_energy(im)
        values.setflags(write=False)
        self._values = values

    @classmethod
    def build(cls, im: np.ndarray) -> "EnergyMatrix":
        return cls(im)

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def width(self) -> int:
        return self._values.shape[1]

    @property
    def height(self) -> int:
        return self._values.shape[0]

    def energy_at(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} energy matrix")
        return int(self._values[y, x])

    def __repr__(self) -> str:
        return f"EnergyMatrix({self.width}x{self.height})"
