from __future__ import annotations
from typing import Optional, Tuple, Union

import numpy as np
from numba import njit

from energy import EnergyMatrix

NO_PREDECESSOR = -1


# ==========================
# Numba-compiled DP helpers
# ==========================
@njit(cache=True)
def _dp_accumulate(energy: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Given an energy matrix (int64 HxW), build the cumulative cost matrix and
    return:
      - cost: int64 HxW minimum cost of a connected path from row 0 to (i, j)
      - backtrack: int64 HxW of predecessor column indices (-1 on row 0)
    Rows are processed strictly top to bottom; each row only reads the
    finished row above it.
    """
    h, w = energy.shape
    cost = np.empty((h, w), dtype=np.int64)
    backtrack = np.empty((h, w), dtype=np.int64)

    for j in range(w):
        cost[0, j] = energy[0, j]
        backtrack[0, j] = -1

    for i in range(1, h):
        for j in range(w):
            if w == 1:
                prev_j = 0
            elif j == 0 or j == w - 1:
                # candidates: (i-1, left_j), (i-1, left_j + 1)
                left_j = 0 if j == 0 else j - 1
                right_j = left_j + 1
                # the left one keeps ties
                if cost[i - 1, right_j] < cost[i - 1, left_j]:
                    prev_j = right_j
                else:
                    prev_j = left_j
            else:
                # candidates: (i-1,j-1), (i-1,j), (i-1,j+1)
                a = cost[i - 1, j - 1]
                b = cost[i - 1, j]
                c = cost[i - 1, j + 1]
                # strict against both others, else fall through to the right
                if a < b and a < c:
                    prev_j = j - 1
                elif b < a and b < c:
                    prev_j = j
                else:
                    prev_j = j + 1

            backtrack[i, j] = prev_j
            cost[i, j] = energy[i, j] + cost[i - 1, prev_j]

    return cost, backtrack


@njit(cache=True)
def _dp_backtrack(backtrack: np.ndarray, end_j: int) -> np.ndarray:
    """
    Reconstruct the seam indices given a backtrack table and the last-row column end_j.
    Returns seam_idx of shape (H,) int64 such that seam_idx[i] is the column in row i.
    """
    h, w = backtrack.shape
    seam = np.empty(h, dtype=np.int64)
    j = end_j
    for i in range(h - 1, -1, -1):
        seam[i] = j
        j = backtrack[i, j]
    return seam


# =============
# COST MATRIX
# =============
def _read_only(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.setflags(write=False)
    return view


class CostMatrix:
    """
    Cumulative minimum-cost matrix over an energy map, with backpointers.

    Entry (x, y) holds the cheapest total energy of a vertical path that
    starts anywhere on row 0 and ends at (x, y), moving at most one column
    per row, together with the column it came from on row y - 1.

    Ties between predecessor candidates are broken as follows:
      - edge columns (two candidates): the left candidate wins unless the
        right one is strictly cheaper.
      - interior columns (three candidates): the left candidate wins if it is
        strictly cheaper than both others, then the middle one under the same
        test, otherwise the right one. A three-way tie therefore resolves to
        the right candidate.
    """

    def __init__(self, energy: Union[EnergyMatrix, np.ndarray]):
        values = energy.values if isinstance(energy, EnergyMatrix) else np.asarray(energy)
        if values.ndim != 2 or values.shape[0] < 1 or values.shape[1] < 1:
            raise ValueError(f"expected a non-empty HxW energy matrix, got shape {values.shape}")

        cost, backtrack = _dp_accumulate(values.astype(np.int64))
        self._cost = cost.astype(np.uint32)
        self._backtrack = backtrack

    @classmethod
    def build(cls, energy: Union[EnergyMatrix, np.ndarray]) -> "CostMatrix":
        return cls(energy)

    @property
    def costs(self) -> np.ndarray:
        return _read_only(self._cost)

    @property
    def predecessors(self) -> np.ndarray:
        return _read_only(self._backtrack)

    @property
    def width(self) -> int:
        return self._cost.shape[1]

    @property
    def height(self) -> int:
        return self._cost.shape[0]

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} cost matrix")

    def cost_at(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self._cost[y, x])

    def predecessor_at(self, x: int, y: int) -> Optional[int]:
        """Column of the chosen predecessor on row y - 1, or None on row 0."""
        self._check(x, y)
        prev = int(self._backtrack[y, x])
        return None if prev == NO_PREDECESSOR else prev

    def min_cost_seam(self) -> np.ndarray:
        """
        Seam ending at the cheapest cell of the last row (first one on ties),
        as an int64 array of column indices ordered from row 0 to the last row.
        """
        end_j = int(np.argmin(self._cost[-1]))
        return _dp_backtrack(self._backtrack, end_j)

    def __repr__(self) -> str:
        return f"CostMatrix({self.width}x{self.height})"


# ==============
# SEAM HELPERS
# ==============
def is_connected(seam: np.ndarray) -> bool:
    """True if consecutive seam columns never differ by more than one."""
    seam = np.asarray(seam, dtype=np.int64)
    if seam.size < 2:
        return True
    return bool(np.all(np.abs(np.diff(seam)) <= 1))


def seam_to_boolmask(seam: np.ndarray, shape_hw: Tuple[int, int]) -> np.ndarray:
    """Bool HxW mask where False marks the seam pixel of each row."""
    h, w = shape_hw
    if len(seam) != h:
        raise ValueError(f"seam has {len(seam)} entries for {h} rows")
    boolmask = np.ones((h, w), dtype=np.bool_)
    boolmask[np.arange(h), seam] = False
    return boolmask


def remove_seam(im: np.ndarray, seam: np.ndarray) -> np.ndarray:
    """
    Remove a vertical seam (color image). Pixels left of the seam stay in
    place, pixels right of it shift one column left.
    """
    h, w = im.shape[:2]
    boolmask = seam_to_boolmask(seam, (h, w))
    return im[boolmask].reshape((h, w - 1) + im.shape[2:])


def get_minimum_seam(im: np.ndarray) -> np.ndarray:
    """
    Find the seam of minimum energy for the current raster.

    Energy map and cost matrix are rebuilt from scratch; both are discarded
    once the seam is known. A raster with no rows left (after a carve down
    to zero height) has an empty seam.
    """
    if im.shape[0] == 0:
        return np.empty(0, dtype=np.int64)
    return CostMatrix(EnergyMatrix(im)).min_cost_seam()
