"""Projection of lidar points into a camera depth image."""

from __future__ import annotations

from collections import deque

import numpy as np


class DepthQueue:
    """Accumulates projected point clouds into a per-pixel nearest-depth map.

    Only the most recent ``max_queue_size`` clouds contribute; pixels touched
    by an evicted cloud are cleared.
    """

    def __init__(
        self,
        k_0,
        c_0,
        e_0,
        image_width: int,
        image_height: int,
        max_points: int,
        max_queue_size: int,
        epsilon: float = 1e-6,
    ) -> None:
        self.k_0 = np.asarray(k_0, dtype=np.float64).reshape(3, 3)
        self.c_0 = np.asarray(c_0, dtype=np.float64).reshape(1, 5)
        self.e_0 = np.asarray(e_0, dtype=np.float64).reshape(4, 4)
        self.image_width = image_width
        self.image_height = image_height
        self.max_points = max_points
        self.max_queue_size = max_queue_size
        self.epsilon = epsilon
        self._depth = np.zeros((image_height, image_width), dtype=np.float32)
        self._queue: deque[np.ndarray] = deque()

    def queue_size(self) -> int:
        return len(self._queue)

    def _project(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        homogeneous = np.vstack([points.T, np.ones(len(points))])
        transformed = (self.e_0 @ homogeneous)[:3]
        depths = transformed[2]
        with np.errstate(divide="ignore", invalid="ignore"):
            projected = (self.k_0 @ transformed)[:2] / depths
        projected = np.where(np.isfinite(projected), projected, -1.0)
        pixels = np.trunc(projected).astype(np.int64)
        inside_x = (pixels[0] >= 0) & (pixels[0] < self.image_width)
        inside_y = (pixels[1] >= 0) & (pixels[1] < self.image_height)
        pixels[0] = np.where(inside_x, pixels[0], 0)
        pixels[1] = np.where(inside_y, pixels[1], 0)
        return pixels, depths

    def push(self, points) -> np.ndarray:
        """Add an (N, 3) point cloud and return a copy of the depth map."""
        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(points) > self.max_points:
            raise ValueError(
                f"point cloud has {len(points)} points, more than {self.max_points}"
            )
        pixels, depths = self._project(points)
        self._queue.append(pixels)
        if len(self._queue) > self.max_queue_size:
            old = self._queue.popleft()
            self._depth[old[1], old[0]] = 0.0

        for (u, v), dpt in zip(pixels.T, depths):
            if dpt <= 0:
                break
            current = self._depth[v, u]
            if abs(current) < self.epsilon or (
                abs(current) > self.epsilon and dpt < current
            ):
                self._depth[v, u] = dpt
        return self._depth.copy()