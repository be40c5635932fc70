"""Association of tracks with detections by cascaded minimum-cost matching."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from . import hungarian
from .detection import Detection, MatchResult
from .kalman import KalmanFilter
from .track import Track

#: Cost given to pairs that must never be matched.
INFTY_COST = 1e5

DistanceMetric = Callable[
    [Sequence[Track], Sequence[Detection], list[int], list[int]], np.ndarray
]


def min_cost_matching(
    distance_metric: DistanceMetric,
    max_distance: float,
    tracks: Sequence[Track],
    detections: Sequence[Detection],
    track_indices: Sequence[int],
    detection_indices: Sequence[int],
) -> MatchResult:
    """Solve one linear assignment between the given tracks and detections.

    ``distance_metric`` returns a cost matrix with one row per track index and
    one column per detection index. Pairs costing more than ``max_distance``
    are left unmatched.
    """
    track_indices = list(track_indices)
    detection_indices = list(detection_indices)
    if not track_indices or not detection_indices:
        return MatchResult([], track_indices, detection_indices)

    cost = np.array(
        distance_metric(tracks, detections, track_indices, detection_indices),
        dtype=np.float64,
    )
    cost[cost > max_distance] = max_distance + 1e-5
    pairs = [(int(r), int(c)) for r, c in hungarian.solve(cost)]

    assigned_rows = {row for row, _ in pairs}
    assigned_cols = {col for _, col in pairs}
    result = MatchResult(
        unmatched_detections=[
            det for col, det in enumerate(detection_indices) if col not in assigned_cols
        ],
        unmatched_tracks=[
            trk for row, trk in enumerate(track_indices) if row not in assigned_rows
        ],
    )
    for row, col in pairs:
        track_idx = track_indices[row]
        detection_idx = detection_indices[col]
        if cost[row, col] > max_distance:
            result.unmatched_tracks.append(track_idx)
            result.unmatched_detections.append(detection_idx)
        else:
            result.matches.append((track_idx, detection_idx))
    return result


def matching_cascade(
    distance_metric: DistanceMetric,
    max_distance: float,
    cascade_depth: int,
    tracks: Sequence[Track],
    detections: Sequence[Detection],
    track_indices: Sequence[int],
    detection_indices: Sequence[int] | None = None,
) -> MatchResult:
    """Match tracks level by level, most recently updated tracks first.

    When ``detection_indices`` is None every detection takes part.
    """
    track_indices = list(track_indices)
    if detection_indices is None:
        detection_indices = range(len(detections))
    unmatched_detections = list(detection_indices)
    matches: list[tuple[int, int]] = []
    matched_tracks: set[int] = set()

    for level in range(cascade_depth):
        if not unmatched_detections:
            break
        level_tracks = [
            k for k in track_indices if tracks[k].time_since_update == 1 + level
        ]
        if not level_tracks:
            continue
        partial = min_cost_matching(
            distance_metric,
            max_distance,
            tracks,
            detections,
            level_tracks,
            unmatched_detections,
        )
        unmatched_detections = list(partial.unmatched_detections)
        matches.extend(partial.matches)
        matched_tracks.update(track for track, _ in partial.matches)

    return MatchResult(
        matches=matches,
        unmatched_tracks=[k for k in track_indices if k not in matched_tracks],
        unmatched_detections=unmatched_detections,
    )


def gate_cost_matrix(
    kf: KalmanFilter,
    cost_matrix,
    tracks: Sequence[Track],
    detections: Sequence[Detection],
    track_indices: Sequence[int],
    detection_indices: Sequence[int],
    gated_cost: float = INFTY_COST,
    only_position: bool = False,
) -> np.ndarray:
    """Return the cost matrix with infeasible entries set to ``gated_cost``.

    An entry is infeasible when the detection lies outside the 95% gate of
    the track's Kalman state.
    """
    gating_dim = 2 if only_position else 4
    gating_threshold = KalmanFilter.chi2inv95[gating_dim]
    cost = np.array(cost_matrix, dtype=np.float64)
    measurements = [detections[i].to_xyah() for i in detection_indices]
    for row, track_idx in enumerate(track_indices):
        track = tracks[track_idx]
        distances = kf.gating_distance(
            track.mean, track.covariance, measurements, only_position
        )
        cost[row, : len(distances)][distances > gating_threshold] = gated_cost
    return cost