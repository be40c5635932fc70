"""Row-to-column assignment built on the Munkres solver."""

from __future__ import annotations

import numpy as np

from .munkres import Munkres


def solve(cost_matrix) -> np.ndarray:
    """Return the optimal (row, col) pairs as an (n, 2) integer array.

    Pairs are listed in row-major order.
    """
    assigned = Munkres().solve(np.asarray(cost_matrix, dtype=np.float64))
    return np.argwhere(assigned.astype(int) == 0)