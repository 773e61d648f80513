"""Shared test fixtures for the seam carver test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def noise_image(rng):
    """Random 12x16 (HxW) uint8 color raster."""
    return rng.integers(0, 256, size=(12, 16, 3), dtype=np.uint8)


def make_index_image(H, W):
    """Raster whose pixel (y, x) encodes its own source coordinates.

    Channel 0 holds the column, channel 1 the row, channel 2 a constant,
    so surviving pixels can be traced back after carving.
    """
    img = np.zeros((H, W, 3), dtype=np.uint8)
    img[:, :, 0] = np.arange(W, dtype=np.uint8)[None, :]
    img[:, :, 1] = np.arange(H, dtype=np.uint8)[:, None]
    img[:, :, 2] = 7
    return img


def naive_energy(img, x, y):
    """Closed-form dual-gradient energy at (x, y) with wraparound."""
    H, W = img.shape[:2]
    px = img.astype(np.int64)

    def grad(a, b):
        return int(sum((int(a[c]) - int(b[c])) ** 2 for c in range(3)))

    left = px[y, (x - 1) % W]
    right = px[y, (x + 1) % W]
    up = px[(y - 1) % H, x]
    down = px[(y + 1) % H, x]
    return grad(left, right) + grad(up, down)
