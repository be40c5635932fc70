import itertools

import numpy as np
import pytest

from radartrack.munkres import Munkres, minimize_along_direction, replace_infinites


def _best_cost(cost):
    rows, cols = cost.shape
    if rows > cols:
        return _best_cost(cost.T)
    return min(
        sum(cost[r, c] for r, c in zip(range(rows), perm))
        for perm in itertools.permutations(range(cols), rows)
    )


def _assigned_cost(cost, result):
    return sum(cost[r, c] for r, c in np.argwhere(result == 0))


def test_solve_simple_diagonal():
    result = Munkres().solve([[1.0, 2.0], [2.0, 1.0]])
    assert result.tolist() == [[0.0, -1.0], [-1.0, 0.0]]


@pytest.mark.parametrize("seed", range(8))
def test_solve_square_is_optimal(seed):
    rng = np.random.default_rng(seed)
    cost = rng.integers(0, 20, size=(5, 5)).astype(float)
    result = Munkres().solve(cost)
    assert result.shape == cost.shape
    assert set(np.unique(result)) <= {0.0, -1.0}
    assert ((result == 0).sum(axis=0) <= 1).all()
    assert ((result == 0).sum(axis=1) == 1).all()
    assert _assigned_cost(cost, result) == pytest.approx(_best_cost(cost))


@pytest.mark.parametrize("shape", [(2, 4), (4, 2), (3, 5), (5, 3)])
def test_solve_rectangular_is_optimal(shape):
    rng = np.random.default_rng(sum(shape))
    cost = rng.uniform(0.1, 10.0, size=shape)
    result = Munkres().solve(cost)
    assert result.shape == shape
    zeros = result == 0
    assert zeros.sum() == min(shape)
    assert (zeros.sum(axis=0) <= 1).all()
    assert (zeros.sum(axis=1) <= 1).all()
    assert _assigned_cost(cost, result) == pytest.approx(_best_cost(cost))


def test_solve_leaves_input_unchanged():
    cost = np.array([[3.0, 1.0, 2.0], [2.0, 3.0, 1.0], [1.0, 2.0, 3.0]])
    before = cost.copy()
    Munkres().solve(cost)
    assert np.array_equal(cost, before)


def test_solve_avoids_infinite_cells():
    cost = np.array([[np.inf, 1.0], [1.0, np.inf]])
    result = Munkres().solve(cost)
    assert result[0, 0] == -1.0 and result[1, 1] == -1.0
    assert result[0, 1] == 0.0 and result[1, 0] == 0.0


def test_solve_solver_is_reusable():
    solver = Munkres()
    first = solver.solve([[1.0, 2.0], [2.0, 1.0]])
    second = solver.solve([[2.0, 1.0], [1.0, 2.0]])
    assert first[0, 0] == 0.0
    assert second[0, 1] == 0.0


def test_solve_empty_raises():
    with pytest.raises(ValueError):
        Munkres().solve(np.zeros((0, 0)))


def test_replace_infinites_uses_max_plus_one():
    result = replace_infinites([[1.0, np.inf], [3.0, 2.0]])
    assert result[0, 1] == 4.0
    assert np.isfinite(result).all()


def test_replace_infinites_all_infinite_becomes_zero():
    result = replace_infinites(np.full((2, 2), np.inf))
    assert (result == 0.0).all()


def test_minimize_rows_gives_zero_row_minimum():
    matrix = np.array([[3.0, 5.0, 4.0], [2.0, 9.0, 7.0]])
    result = minimize_along_direction(matrix, False)
    assert np.allclose(result.min(axis=1), 0.0)
    assert np.allclose(matrix - result, matrix.min(axis=1)[:, None])


def test_minimize_columns_gives_zero_column_minimum():
    matrix = np.array([[3.0, 5.0], [2.0, 9.0], [6.0, 7.0]])
    result = minimize_along_direction(matrix, True)
    assert np.allclose(result.min(axis=0), 0.0)


def test_minimize_skips_non_positive_lines():
    matrix = np.array([[0.0, 5.0], [2.0, 9.0]])
    result = minimize_along_direction(matrix, False)
    assert np.array_equal(result[0], matrix[0])
    assert result[1].min() == 0.0