"""Nearest-neighbour appearance metric over stored track features."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence

import numpy as np


class MetricType(enum.Enum):
    EUCLIDEAN = 1
    COSINE = 2


def _pdist(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    if len(x) == 0 or len(y) == 0:
        return np.zeros((len(x), len(y)))
    res = -2.0 * x @ y.T
    res = res + np.sum(x * x, axis=1)[:, None] + np.sum(y * y, axis=1)[None, :]
    return np.maximum(res, 0.0)


def _cosine_distance(
    a: np.ndarray, b: np.ndarray, data_is_normalized: bool = False
) -> np.ndarray:
    if not data_is_normalized:
        with np.errstate(divide="ignore", invalid="ignore"):
            a = a / np.linalg.norm(a, axis=1, keepdims=True)
            b = b / np.linalg.norm(b, axis=1, keepdims=True)
    return 1.0 - a @ b.T


def _nn_cosine_distance(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return _cosine_distance(x, y).min(axis=0)


def _nn_euclidean_distance(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return np.maximum(_pdist(x, y).max(axis=0), 0.0)


class NearestNeighborDistanceMetric:
    """Keeps a bounded gallery of features per track and measures distances to it."""

    def __init__(self, metric: MetricType, matching_threshold: float, budget: int) -> None:
        if metric is MetricType.EUCLIDEAN:
            self._metric = _nn_euclidean_distance
        elif metric is MetricType.COSINE:
            self._metric = _nn_cosine_distance
        else:
            raise ValueError(f"unknown metric {metric!r}")
        self.matching_threshold = matching_threshold
        self.budget = budget
        self.samples: dict[int, np.ndarray] = {}

    def distance(self, features, targets: Sequence[int]) -> np.ndarray:
        """Return a (len(targets), len(features)) cost matrix."""
        features = np.atleast_2d(np.asarray(features, dtype=np.float64))
        cost = np.zeros((len(targets), len(features)))
        for row, target in enumerate(targets):
            if target not in self.samples:
                raise KeyError(f"no samples stored for target {target}")
            cost[row] = self._metric(self.samples[target], features)
        return cost

    def _merge(self, old: np.ndarray, new: np.ndarray) -> np.ndarray:
        budget = self.budget
        old_size, add_size = len(old), len(new)
        if old_size + add_size <= budget:
            return np.vstack([old, new])
        if add_size >= budget:
            return new[:budget].copy()
        kept = old[add_size - 1 : budget - 1]
        if old_size < budget:
            return np.vstack([kept, new])
        merged = old.copy()
        merged[: budget - add_size] = kept
        merged[budget - add_size : budget] = new
        return merged

    def partial_fit(
        self, tid_features: Iterable[tuple[int, np.ndarray]], active_targets: Iterable[int]
    ) -> None:
        """Add new features per track and drop tracks that are no longer active."""
        for track_id, feats in tid_features:
            feats = np.asarray(feats, dtype=np.float64)
            if feats.ndim == 1:
                feats = feats.reshape(1, -1)
            if track_id in self.samples:
                self.samples[track_id] = self._merge(self.samples[track_id], feats)
            else:
                self.samples[track_id] = feats.copy()

        active = set(active_targets)
        self.samples = {k: v for k, v in self.samples.items() if k in active}