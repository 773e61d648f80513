from __future__ import annotations
from typing import Callable, Optional, Tuple

import numpy as np

from dimensions import ResizeDimension
from seams import get_minimum_seam, remove_seam
from utils import as_uint8, rotate_image

# on_seam_removed() -> None, once per removed seam
OnSeamRemoved = Optional[Callable[[], None]]
# on_seam(image_uint8, seam_idx_int64) -> None, before each removal
OnSeam = Optional[Callable[[np.ndarray, np.ndarray], None]]

MAX_GRADIENT = 255**2 * 3 * 2
# Largest side for which a full column of maximal energy still fits in 32 bits.
MAX_DIMENSION = (2**32 - 1) // MAX_GRADIENT


class SeamCarvingError(ValueError):
    """Base class for errors raised while setting up a carve."""


class DimensionTooLarge(SeamCarvingError):
    pass


class TargetLargerThanSource(SeamCarvingError):
    pass


def seams_removal(
    im: np.ndarray,
    num_remove: int,
    on_seam_removed: OnSeamRemoved = None,
    on_seam: OnSeam = None
) -> np.ndarray:
    """Remove `num_remove` vertical seams, notifying the observers for each one."""
    for _ in range(int(num_remove)):
        seam_idx = get_minimum_seam(im)
        if on_seam is not None:
            on_seam(im, seam_idx)
        im = remove_seam(im, seam_idx)
        if on_seam_removed is not None:
            on_seam_removed()
    return im


class SeamCarver:
    """
    Shrinks a raster to a target size by removing vertical seams, then
    horizontal seams on the image rotated 90 degrees clockwise.

    All validation happens here; once constructed, `carve` always succeeds.
    """

    def __init__(self, im: np.ndarray, dimension: ResizeDimension):
        if im.ndim != 3 or im.shape[2] != 3 or im.shape[0] < 1 or im.shape[1] < 1:
            raise ValueError(f"expected a non-empty HxWx3 raster, got shape {im.shape}")
        h, w = im.shape[:2]
        if w > MAX_DIMENSION or h > MAX_DIMENSION:
            raise DimensionTooLarge("image dimension too large")

        new_w, new_h = dimension.resolve(w, h)
        if new_w > w:
            raise TargetLargerThanSource("width must be smaller than original width")
        if new_h > h:
            raise TargetLargerThanSource("height must be smaller than original height")

        self._image: Optional[np.ndarray] = as_uint8(im)
        self._source_size = (w, h)
        self._target_size = (new_w, new_h)
        self.remaining_vertical_seams = w - new_w
        self.remaining_horizontal_seams = h - new_h

    @property
    def source_size(self) -> Tuple[int, int]:
        return self._source_size

    @property
    def target_size(self) -> Tuple[int, int]:
        return self._target_size

    def seams_remaining(self) -> int:
        return self.remaining_vertical_seams + self.remaining_horizontal_seams

    def carve(self, on_seam_removed: OnSeamRemoved = None, on_seam: OnSeam = None) -> np.ndarray:
        """
        Run the carve loop and return the resized raster.

        `on_seam_removed` is called after every removed seam; `on_seam` sees
        the current raster and the chosen seam just before removal (in
        rotated orientation while horizontal seams are carved). The carver
        cannot be reused afterwards.
        """
        if self._image is None:
            raise RuntimeError("SeamCarver.carve() can only be called once")

        def vertical_removed() -> None:
            self.remaining_vertical_seams -= 1
            if on_seam_removed is not None:
                on_seam_removed()

        def horizontal_removed() -> None:
            self.remaining_horizontal_seams -= 1
            if on_seam_removed is not None:
                on_seam_removed()

        self._image = seams_removal(
            self._image, self.remaining_vertical_seams, vertical_removed, on_seam)

        self._image = rotate_image(self._image, True)
        self._image = seams_removal(
            self._image, self.remaining_horizontal_seams, horizontal_removed, on_seam)
        output = rotate_image(self._image, False)

        self._image = None
        return output


def seam_carve(
    im: np.ndarray,
    dimension: ResizeDimension,
    on_seam_removed: OnSeamRemoved = None,
    on_seam: OnSeam = None
) -> np.ndarray:
    return SeamCarver(im, dimension).carve(on_seam_removed, on_seam=on_seam)
