from __future__ import annotations

import os
from typing import List, Optional

import cv2
import imageio.v3 as iio
import numpy as np

SEAM_COLOR_BGR = (0, 0, 255)
PAD_COLOR_BGR = (255, 255, 255)


def _pad_to_size_bgr(img_bgr: np.ndarray, target_h: int, target_w: int) -> np.ndarray:
    """Pad a BGR image on the bottom/right to (target_h, target_w) with white."""
    h, w = img_bgr.shape[:2]
    dh = max(0, target_h - h)
    dw = max(0, target_w - w)
    if dh == 0 and dw == 0:
        return img_bgr
    return cv2.copyMakeBorder(img_bgr, 0, dh, 0, dw, borderType=cv2.BORDER_CONSTANT, value=PAD_COLOR_BGR)


class VizGifRecorder:
    """
    Records the seams chosen by the carve loop as an animated GIF.

    Pass `on_seam` to `SeamCarver.carve`. Each sampled call stores a copy of
    the raster with the seam painted red. Frames keep their own size while
    recording; the GIF canvas is the largest height and width seen, since
    the raster shrinks with every seam and turns on its side for the
    horizontal phase.
    """
    def __init__(self, gif_path: str, every: int = 1, max_frames: Optional[int] = None, fps: int = 12):
        self.gif_path = gif_path
        self.every = max(1, int(every))
        self.max_frames = max_frames if (max_frames is None or max_frames > 0) else None
        self.fps = max(1, int(fps))

        out_dir = os.path.dirname(os.path.abspath(gif_path))
        if out_dir and not os.path.exists(out_dir):
            os.makedirs(out_dir, exist_ok=True)

        self._frames: List[np.ndarray] = []   # BGR, unpadded
        self._calls = 0

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def on_seam(self, im_u8: np.ndarray, seam_idx: np.ndarray) -> None:
        """
        im_u8: HxWx3 uint8 raster (BGR, as read by OpenCV)
        seam_idx: (H,) column of the seam in each row
        """
        call = self._calls
        self._calls += 1
        if call % self.every != 0:
            return
        if self.max_frames is not None and len(self._frames) >= self.max_frames:
            return
        if im_u8.shape[0] == 0 or im_u8.shape[1] == 0:
            return

        frame = np.array(im_u8, dtype=np.uint8, copy=True)
        frame[np.arange(frame.shape[0]), seam_idx] = SEAM_COLOR_BGR
        self._frames.append(frame)

    def rgb_frames(self) -> List[np.ndarray]:
        """Recorded frames padded to a shared canvas, converted to RGB."""
        if not self._frames:
            return []
        canvas_h = max(f.shape[0] for f in self._frames)
        canvas_w = max(f.shape[1] for f in self._frames)
        return [
            cv2.cvtColor(_pad_to_size_bgr(f, canvas_h, canvas_w), cv2.COLOR_BGR2RGB)
            for f in self._frames
        ]

    def close(self) -> None:
        """Write the GIF; nothing is written when no frame was recorded."""
        frames = self.rgb_frames()
        if not frames:
            return
        iio.imwrite(
            self.gif_path,
            np.stack(frames),
            plugin="pillow",
            duration=int(1000 / self.fps),
            loop=0,
        )
