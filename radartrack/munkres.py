"""Munkres (Hungarian) algorithm for the linear assignment problem."""

from __future__ import annotations

import numpy as np

NORMAL = 0
STAR = 1
PRIME = 2

# Upper bound on the value added or subtracted in the "new zeros" step.
_STEP5_LIMIT = 100000.0


def replace_infinites(matrix) -> np.ndarray:
    """Return a copy with every +inf replaced by one more than the largest finite value.

    When every value is infinite they are replaced by zero.
    """
    result = np.array(matrix, dtype=np.float64)
    finite = result[result != np.inf]
    replacement = float(finite.max()) + 1.0 if finite.size else 0.0
    result[result == np.inf] = replacement
    return result


def minimize_along_direction(matrix, over_columns: bool) -> np.ndarray:
    """Return a copy where each column (or row) has its minimum subtracted.

    Only lines whose minimum is strictly positive are changed.
    """
    result = np.array(matrix, dtype=np.float64)
    if result.size == 0:
        return result
    axis = 0 if over_columns else 1
    mins = result.min(axis=axis)
    positive = mins > 0
    if over_columns:
        result[:, positive] -= mins[positive]
    else:
        result[positive, :] -= mins[positive][:, None]
    return result


class Munkres:
    """Solver for the minimum-cost assignment of rows to columns."""

    def __init__(self) -> None:
        self._matrix = np.zeros((0, 0))
        self._mask = np.zeros((0, 0), dtype=np.int8)
        self._row_mask = np.zeros(0, dtype=bool)
        self._col_mask = np.zeros(0, dtype=bool)
        self._saved = (0, 0)

    def solve(self, matrix) -> np.ndarray:
        """Solve the assignment for a 2D cost matrix.

        Returns a matrix of the same shape holding 0 where a row is assigned
        to a column and -1 everywhere else. The input is left unchanged.
        """
        original = np.array(matrix, dtype=np.float64)
        if original.ndim != 2 or original.size == 0:
            raise ValueError("cost matrix must be a non-empty 2D matrix")
        rows, columns = original.shape
        size = max(rows, columns)

        work = original
        if rows != columns:
            # Pad to a square with the largest value present.
            work = np.full((size, size), original.max(), dtype=np.float64)
            work[:rows, :columns] = original

        work = replace_infinites(work)
        work = minimize_along_direction(work, rows >= columns)
        work = minimize_along_direction(work, rows < columns)

        self._matrix = work
        self._mask = np.full((size, size), NORMAL, dtype=np.int8)
        self._row_mask = np.zeros(size, dtype=bool)
        self._col_mask = np.zeros(size, dtype=bool)
        self._saved = (0, 0)

        steps = {
            1: self._step1,
            2: self._step2,
            3: self._step3,
            4: self._step4,
            5: self._step5,
        }
        step = 1
        while step:
            step = steps[step]()

        result = np.where(self._mask == STAR, 0.0, -1.0)
        return result[:rows, :columns]

    def _step1(self) -> int:
        """Star the first zero of each row whose column holds no star yet."""
        for row, values in enumerate(self._matrix):
            for col in np.flatnonzero(values == 0):
                if not (self._mask[:row, col] == STAR).any():
                    self._mask[row, col] = STAR
                    break
        return 2

    def _step2(self) -> int:
        """Cover every column with a star; finish once enough are covered."""
        stars = self._mask == STAR
        self._col_mask |= stars.any(axis=0)
        if int(stars.sum()) >= min(self._matrix.shape):
            return 0
        return 3

    def _step3(self) -> int:
        """Prime an uncovered zero and adjust the covers."""
        candidates = (
            (self._matrix == 0)
            & ~self._row_mask[:, None]
            & ~self._col_mask[None, :]
        )
        found = np.argwhere(candidates)
        if not len(found):
            return 5
        row, col = int(found[0][0]), int(found[0][1])
        self._mask[row, col] = PRIME
        self._saved = (row, col)

        starred = np.flatnonzero(self._mask[row] == STAR)
        if starred.size:
            self._row_mask[row] = True
            self._col_mask[int(starred[0])] = False
            return 3
        return 4

    def _step4(self) -> int:
        """Flip stars and primes along the alternating sequence."""
        row, col = self._saved
        seq: list[tuple[int, int]] = [(row, col)]
        while True:
            star_row = next(
                (
                    int(r)
                    for r in np.flatnonzero(self._mask[:, col] == STAR)
                    if (int(r), col) not in seq
                ),
                None,
            )
            if star_row is None:
                break
            seq.append((star_row, col))

            prime_col = next(
                (
                    int(c)
                    for c in np.flatnonzero(self._mask[star_row] == PRIME)
                    if (star_row, int(c)) not in seq
                ),
                None,
            )
            if prime_col is None:
                break
            seq.append((star_row, prime_col))
            col = prime_col

        for r, c in seq:
            if self._mask[r, c] == STAR:
                self._mask[r, c] = NORMAL
            elif self._mask[r, c] == PRIME:
                self._mask[r, c] = STAR

        self._mask[self._mask == PRIME] = NORMAL
        self._row_mask[:] = False
        self._col_mask[:] = False
        return 2

    def _step5(self) -> int:
        """Create new zeros from the smallest uncovered non-zero value."""
        uncovered = self._matrix[~self._row_mask][:, ~self._col_mask]
        nonzero = uncovered[uncovered != 0]
        h = _STEP5_LIMIT
        if nonzero.size:
            h = min(h, float(nonzero.min()))
        self._matrix[self._row_mask, :] += h
        self._matrix[:, ~self._col_mask] -= h
        return 3