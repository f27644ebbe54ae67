# Andy Zhao
"""
Random draws of k unique, present points.

Draw procedure (k is small and fixed: 2, 3 or 5):
  - pick a uniform random slot index in [0, N)
  - reject it if the slot is absent or was already picked in this draw
  - repeat until k indices are accepted

The accepted indices are kept in a k-sized accumulator, membership is a
linear scan over the first d entries.

The rejection loop only terminates if at least k present slots exist, so this
is checked up front (InsufficientPointsError) instead of bounding the retries.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..types import IndexArray, Mask1D, Points2D
from .errors import InsufficientPointsError
from .point_set import PointSet


class UniqueSampler:
    """
    Draws k distinct, present slots of a point set.

    rng:
      - numpy Generator; pass a seeded one (np.random.default_rng(seed))
        for reproducible draws.
    """

    def __init__(self, k: int, rng: Optional[np.random.Generator] = None) -> None:
        if k < 1:
            raise ValueError("UniqueSampler.k must be >= 1")
        self.k = int(k)
        self.rng = rng if rng is not None else np.random.default_rng()
        self._idx = np.zeros((self.k,), dtype=np.intp)   # index accumulator

    def _picked_before(self, d: int, i: int) -> bool:
        # Checks if idx[0], ..., idx[d-1] contains i
        for j in range(d):
            if self._idx[j] == i:
                return True
        return False

    def draw_indices(self, present: Mask1D) -> IndexArray:
        """
        Draw k unique indices of present slots.

        Raises:
          InsufficientPointsError if fewer than k slots are present.
        """
        present = np.asarray(present, dtype=bool)
        n = present.shape[0]
        n_present = int(np.count_nonzero(present))
        if n_present < self.k:
            raise InsufficientPointsError(n_present, self.k)

        for d in range(self.k):
            i = int(self.rng.integers(n))
            while not present[i] or self._picked_before(d, i):
                i = int(self.rng.integers(n))
            self._idx[d] = i

        return self._idx.copy()

    def draw_from(self, point_set: PointSet) -> tuple[IndexArray, Points2D]:
        """
        Draw k unique present points.

        Returns:
          (indices, points) with shapes (k,) and (k,2)
        """
        idx = self.draw_indices(point_set.present)
        return idx, point_set.points[idx]


def has_duplicates(indices: IndexArray) -> bool:
    """
    True if a draw contains any slot index more than once (for testing/diagnostics).
    """
    indices = np.asarray(indices).reshape(-1)
    return np.unique(indices).shape[0] != indices.shape[0]
