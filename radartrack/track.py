"""A single tracked target with its Kalman state and appearance features."""

from __future__ import annotations

import enum

import numpy as np

from .detection import ClsConf, Detection
from .kalman import KalmanFilter


class TrackState(enum.Enum):
    TENTATIVE = 1
    CONFIRMED = 2
    DELETED = 3


class Track:
    """Track with state ``(x, y, a, h)`` and velocities.

    A track starts tentative, becomes confirmed after ``n_init`` hits and is
    deleted when missed while tentative or after more than ``max_age`` misses.
    """

    def __init__(
        self,
        mean,
        covariance,
        track_id: int,
        n_init: int,
        max_age: int,
        feature,
        cls: int = -1,
        conf: float = -1.0,
    ) -> None:
        self.mean = np.asarray(mean, dtype=np.float64).reshape(8)
        self.covariance = np.asarray(covariance, dtype=np.float64).reshape(8, 8)
        self.track_id = track_id
        self.hits = 1
        self.age = 1
        self.time_since_update = 0
        self.state = TrackState.TENTATIVE
        self.features = np.asarray(feature, dtype=np.float64).reshape(1, -1)
        self.n_init = n_init
        self.max_age = max_age
        self.cls = cls
        self.conf = conf

    def predict(self, kf: KalmanFilter) -> None:
        """Propagate the state one time step forward."""
        self.mean, self.covariance = kf.predict(self.mean, self.covariance)
        self.age += 1
        self.time_since_update += 1

    def update(
        self, kf: KalmanFilter, detection: Detection, cls_conf: ClsConf | None = None
    ) -> None:
        """Correct the state with an associated detection."""
        self.mean, self.covariance = kf.update(
            self.mean, self.covariance, detection.to_xyah()
        )
        feature = np.asarray(detection.feature, dtype=np.float64).reshape(1, -1)
        if len(self.features) == 0:
            self.features = feature
        else:
            self.features = np.vstack([self.features, feature])
        self.hits += 1
        self.time_since_update = 0
        if self.state is TrackState.TENTATIVE and self.hits >= self.n_init:
            self.state = TrackState.CONFIRMED
        if cls_conf is not None:
            self.cls = cls_conf.cls
            self.conf = cls_conf.conf

    def mark_missed(self) -> None:
        """Record that no detection was associated in this step."""
        if self.state is TrackState.TENTATIVE:
            self.state = TrackState.DELETED
        elif self.time_since_update > self.max_age:
            self.state = TrackState.DELETED

    def is_confirmed(self) -> bool:
        return self.state is TrackState.CONFIRMED

    def is_deleted(self) -> bool:
        return self.state is TrackState.DELETED

    def is_tentative(self) -> bool:
        return self.state is TrackState.TENTATIVE

    def to_tlwh(self) -> np.ndarray:
        """Return the current box as (top left x, top left y, width, height)."""
        ret = self.mean[:4].copy()
        ret[2] *= ret[3]
        ret[:2] -= ret[2:] / 2
        return ret