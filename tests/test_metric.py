import numpy as np
import pytest

from radartrack.metric import MetricType, NearestNeighborDistanceMetric

A = np.array([1.0, 0.0, 0.0, 0.0])
B = np.array([0.0, 1.0, 0.0, 0.0])
C = np.array([1.0, 1.0, 0.0, 0.0])


def make(metric=MetricType.COSINE, budget=100):
    return NearestNeighborDistanceMetric(metric, 0.2, budget)


def test_threshold_and_budget_kept():
    m = make(budget=7)
    assert m.matching_threshold == pytest.approx(0.2)
    assert m.budget == 7
    assert m.samples == {}


def test_cosine_distance_identical_is_zero():
    m = make()
    m.partial_fit([(1, np.array([A]))], [1])
    cost = m.distance(np.array([A, 3 * A]), [1])
    assert cost.shape == (1, 2)
    np.testing.assert_allclose(cost, 0.0, atol=1e-12)


def test_cosine_distance_uses_nearest_sample():
    m = make()
    m.partial_fit([(1, np.array([A, B]))], [1])
    cost = m.distance(np.array([A, B, C]), [1])
    np.testing.assert_allclose(cost[0, :2], 0.0, atol=1e-12)
    only_a = make()
    only_a.partial_fit([(1, np.array([A]))], [1])
    assert cost[0, 2] == pytest.approx(only_a.distance([C], [1])[0, 0])


def test_euclidean_takes_farthest_sample():
    both = make(MetricType.EUCLIDEAN)
    both.partial_fit([(1, np.array([A, B]))], [1])
    only_b = make(MetricType.EUCLIDEAN)
    only_b.partial_fit([(1, np.array([B]))], [1])
    assert both.distance([A], [1])[0, 0] == pytest.approx(only_b.distance([A], [1])[0, 0])
    assert both.distance([A], [1])[0, 0] > 0


def test_euclidean_symmetric():
    m1 = make(MetricType.EUCLIDEAN)
    m1.partial_fit([(1, np.array([A]))], [1])
    m2 = make(MetricType.EUCLIDEAN)
    m2.partial_fit([(1, np.array([C]))], [1])
    assert m1.distance([C], [1])[0, 0] == pytest.approx(m2.distance([A], [1])[0, 0])


def test_distance_rows_follow_targets():
    m = make()
    m.partial_fit([(1, np.array([A])), (2, np.array([B]))], [1, 2])
    cost = m.distance(np.array([A]), [2, 1])
    assert cost[1, 0] == pytest.approx(0.0, abs=1e-12)
    assert cost[0, 0] > cost[1, 0]


def test_unknown_target_raises():
    m = make()
    with pytest.raises(KeyError):
        m.distance([A], [5])


def test_partial_fit_appends_and_drops_inactive():
    m = make()
    m.partial_fit([(1, np.array([A])), (2, np.array([B]))], [1, 2])
    m.partial_fit([(1, np.array([C]))], [1])
    assert set(m.samples) == {1}
    np.testing.assert_array_equal(m.samples[1], np.array([A, C]))


def test_partial_fit_budget_when_old_below_budget():
    m = make(budget=3)
    old = np.array([A, B])
    new = np.array([C, 2 * C])
    m.partial_fit([(1, old)], [1])
    m.partial_fit([(1, new)], [1])
    np.testing.assert_array_equal(m.samples[1], np.array([B, C, 2 * C]))


def test_partial_fit_budget_when_new_exceeds_budget():
    m = make(budget=2)
    m.partial_fit([(1, np.array([A]))], [1])
    m.partial_fit([(1, np.array([B, C, 2 * C]))], [1])
    np.testing.assert_array_equal(m.samples[1], np.array([B, C]))


def test_partial_fit_budget_when_full():
    m = make(budget=3)
    m.partial_fit([(1, np.array([A, B, C]))], [1])
    m.partial_fit([(1, np.array([2 * A]))], [1])
    assert len(m.samples[1]) == 3
    np.testing.assert_array_equal(m.samples[1][-1], 2 * A)
    np.testing.assert_array_equal(m.samples[1][:2], np.array([A, B]))