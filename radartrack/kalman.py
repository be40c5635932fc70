"""Constant-velocity Kalman filter over (x, y, aspect ratio, height) boxes."""

from __future__ import annotations

import numpy as np

#: 0.95 quantile of the chi-square distribution for 0 to 9 degrees of freedom.
CHI2INV95: tuple[float, ...] = (
    0.0,
    3.8415,
    5.9915,
    7.8147,
    9.4877,
    11.070,
    12.592,
    14.067,
    15.507,
    16.919,
)

_NDIM = 4


def _cho_solve(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Solve ``a @ x = b`` for a symmetric positive definite ``a``."""
    lower = np.linalg.cholesky(a)
    return np.linalg.solve(lower.T, np.linalg.solve(lower, b))


class KalmanFilter:
    """Kalman filter for tracking boxes in image space.

    The eight-dimensional state holds the box centre, aspect ratio and
    height followed by their velocities.
    """

    chi2inv95 = CHI2INV95

    def __init__(self) -> None:
        dt = 1.0
        self._motion_mat = np.eye(2 * _NDIM)
        for i in range(_NDIM):
            self._motion_mat[i, _NDIM + i] = dt
        self._update_mat = np.eye(_NDIM, 2 * _NDIM)
        self._std_weight_position = 1.0 / 20
        self._std_weight_velocity = 1.0 / 160

    def initiate(self, measurement) -> tuple[np.ndarray, np.ndarray]:
        """Create a track state from an unassociated (x, y, a, h) measurement."""
        measurement = np.asarray(measurement, dtype=np.float64).reshape(_NDIM)
        mean = np.concatenate([measurement, np.zeros(_NDIM)])
        h = measurement[3]
        pos = 2 * self._std_weight_position * h
        vel = 10 * self._std_weight_velocity * h
        std = np.array([pos, pos, 1e-2, pos, vel, vel, 1e-5, vel])
        return mean, np.diag(np.square(std))

    def predict(self, mean, covariance) -> tuple[np.ndarray, np.ndarray]:
        """Run the prediction step and return the new mean and covariance."""
        mean = np.asarray(mean, dtype=np.float64).reshape(2 * _NDIM)
        covariance = np.asarray(covariance, dtype=np.float64)
        h = mean[3]
        pos = self._std_weight_position * h
        vel = self._std_weight_velocity * h
        std = np.array([pos, pos, 1e-2, pos, vel, vel, 1e-5, vel])
        motion_cov = np.diag(np.square(std))
        new_mean = self._motion_mat @ mean
        new_cov = self._motion_mat @ covariance @ self._motion_mat.T + motion_cov
        return new_mean, new_cov

    def project(self, mean, covariance) -> tuple[np.ndarray, np.ndarray]:
        """Project the state distribution into measurement space."""
        mean = np.asarray(mean, dtype=np.float64).reshape(2 * _NDIM)
        covariance = np.asarray(covariance, dtype=np.float64)
        pos = self._std_weight_position * mean[3]
        std = np.array([pos, pos, 1e-1, pos])
        projected_mean = self._update_mat @ mean
        projected_cov = (
            self._update_mat @ covariance @ self._update_mat.T + np.diag(np.square(std))
        )
        return projected_mean, projected_cov

    def update(self, mean, covariance, measurement) -> tuple[np.ndarray, np.ndarray]:
        """Run the correction step against an (x, y, a, h) measurement."""
        mean = np.asarray(mean, dtype=np.float64).reshape(2 * _NDIM)
        covariance = np.asarray(covariance, dtype=np.float64)
        measurement = np.asarray(measurement, dtype=np.float64).reshape(_NDIM)
        projected_mean, projected_cov = self.project(mean, covariance)
        b = (covariance @ self._update_mat.T).T
        kalman_gain = _cho_solve(projected_cov, b).T
        innovation = measurement - projected_mean
        new_mean = mean + innovation @ kalman_gain.T
        new_cov = covariance - kalman_gain @ projected_cov @ kalman_gain.T
        return new_mean, new_cov

    def gating_distance(
        self, mean, covariance, measurements, only_position: bool = False
    ) -> np.ndarray:
        """Return a squared distance between the state and each measurement."""
        if only_position:
            raise NotImplementedError("gating on position only is not supported")
        projected_mean, projected_cov = self.project(mean, covariance)
        d = np.asarray(measurements, dtype=np.float64).reshape(-1, _NDIM)
        if not len(d):
            return np.zeros(0)
        d = d - projected_mean
        lower = np.linalg.cholesky(projected_cov)
        # Solves z @ L = d for every row of d.
        z = np.linalg.solve(lower.T, d.T)
        return np.sum(z * z, axis=0)