"""
Utilities and configuration for the seam carver.

This module defines:
  - Config: Immutable dataclass storing run options for the command line
    (progress display and seam visualization).
  - Lightweight helpers for dtype coercion, rotation, and image I/O.

Design notes:
  - Rasters are HxWx3 uint8 arrays throughout; the carve loop never works in
    floating point.
  - I/O goes through OpenCV, so channels are in BGR order. The energy is
    channel-symmetric, so carving does not care.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np


@dataclass(frozen=True)
class Config:
    """Immutable configuration container for a carving run."""
    show_progress: bool = True
    bar_width: int = 70
    viz_every: int = 1
    viz_max_frames: Optional[int] = None
    viz_fps: int = 12


def as_uint8(img: np.ndarray) -> np.ndarray:
    """Return `img` as uint8, clipping to [0, 255] if needed."""
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    return img


def rotate_image(image: np.ndarray, clockwise: bool) -> np.ndarray:
    """Rotate an image 90 degrees clockwise or counterclockwise."""
    k = -1 if clockwise else 1
    return np.ascontiguousarray(np.rot90(image, k))


def read_image(path: str) -> np.ndarray:
    """Read a 3-channel uint8 image from disk."""
    img = cv2.imread(path, cv2.IMREAD_COLOR)
    if img is None:
        raise RuntimeError(f"Failed to read image: {path}")
    return img


def save_uint8(path: str, img: np.ndarray) -> None:
    """Save an image to disk as uint8, clipping to [0, 255] if needed."""
    # OpenCV asserts instead of returning False on empty rasters
    if img.size == 0:
        raise RuntimeError(f"Failed to write image to: {path} (image is empty)")
    try:
        ok = cv2.imwrite(path, as_uint8(img))
    except cv2.error as e:
        raise RuntimeError(f"Failed to write image to: {path}") from e
    if not ok:
        raise RuntimeError(f"Failed to write image to: {path}")
