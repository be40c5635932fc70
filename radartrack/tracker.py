"""Multi-target tracker combining appearance and motion cues."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .assignment import INFTY_COST, gate_cost_matrix, matching_cascade, min_cost_matching
from .detection import ClsConf, Detection, MatchResult
from .kalman import KalmanFilter
from .metric import MetricType, NearestNeighborDistanceMetric
from .track import Track


def iou(bbox, candidates) -> np.ndarray:
    """Intersection over union of one tlwh box with each tlwh candidate."""
    bbox = np.asarray(bbox, dtype=np.float64).reshape(4)
    cand = np.asarray(candidates, dtype=np.float64).reshape(-1, 4)
    top_left = np.maximum(bbox[:2], cand[:, :2])
    bottom_right = np.minimum(bbox[:2] + bbox[2:], cand[:, :2] + cand[:, 2:])
    wh = np.maximum(bottom_right - top_left, 0.0)
    intersection = wh[:, 0] * wh[:, 1]
    area_bbox = bbox[2] * bbox[3]
    area_cand = cand[:, 2] * cand[:, 3]
    return intersection / (area_bbox + area_cand - intersection)


class Tracker:
    """Maintains a set of tracks and updates them with each frame's detections."""

    def __init__(
        self,
        max_cosine_distance: float,
        nn_budget: int,
        max_iou_distance: float = 0.7,
        max_age: int = 200,
        n_init: int = 20,
    ) -> None:
        self.metric = NearestNeighborDistanceMetric(
            MetricType.COSINE, max_cosine_distance, nn_budget
        )
        self.max_iou_distance = max_iou_distance
        self.max_age = max_age
        self.n_init = n_init
        self.kf = KalmanFilter()
        self.tracks: list[Track] = []
        self._next_id = 1

    def predict(self) -> None:
        """Propagate every track one step forward."""
        for track in self.tracks:
            track.predict(self.kf)

    def update(
        self,
        detections: Sequence[Detection],
        cls_confs: Sequence[ClsConf] | None = None,
    ) -> None:
        """Associate detections with tracks and update the track set.

        ``cls_confs``, when given, holds one class/confidence pair per
        detection and is copied onto the tracks they update or start.
        """
        detections = list(detections)
        if cls_confs is not None:
            cls_confs = list(cls_confs)
            if len(cls_confs) != len(detections):
                raise ValueError("cls_confs must hold one entry per detection")

        result = self._match(detections)
        for track_idx, det_idx in result.matches:
            self.tracks[track_idx].update(
                self.kf,
                detections[det_idx],
                cls_confs[det_idx] if cls_confs is not None else None,
            )
        for track_idx in result.unmatched_tracks:
            self.tracks[track_idx].mark_missed()
        for det_idx in result.unmatched_detections:
            self._initiate_track(
                detections[det_idx],
                cls_confs[det_idx] if cls_confs is not None else None,
            )
        self.tracks = [t for t in self.tracks if not t.is_deleted()]

        active_targets: list[int] = []
        tid_features: list[tuple[int, np.ndarray]] = []
        for track in self.tracks:
            if not track.is_confirmed():
                continue
            active_targets.append(track.track_id)
            tid_features.append((track.track_id, track.features))
            track.features = np.zeros((0, track.features.shape[1]))
        self.metric.partial_fit(tid_features, active_targets)

    def _match(self, detections: list[Detection]) -> MatchResult:
        confirmed = [i for i, t in enumerate(self.tracks) if t.is_confirmed()]
        unconfirmed = [i for i, t in enumerate(self.tracks) if not t.is_confirmed()]

        matches_a = matching_cascade(
            self.gated_metric,
            self.metric.matching_threshold,
            self.max_age,
            self.tracks,
            detections,
            confirmed,
        )
        iou_candidates = list(unconfirmed)
        still_unmatched = []
        for idx in matches_a.unmatched_tracks:
            if self.tracks[idx].time_since_update == 1:
                iou_candidates.append(idx)
            else:
                still_unmatched.append(idx)

        matches_b = min_cost_matching(
            self.iou_cost,
            self.max_iou_distance,
            self.tracks,
            detections,
            iou_candidates,
            matches_a.unmatched_detections,
        )
        return MatchResult(
            matches=matches_a.matches + matches_b.matches,
            unmatched_tracks=still_unmatched + matches_b.unmatched_tracks,
            unmatched_detections=list(matches_b.unmatched_detections),
        )

    def _initiate_track(self, detection: Detection, cls_conf: ClsConf | None) -> None:
        mean, covariance = self.kf.initiate(detection.to_xyah())
        extra = {} if cls_conf is None else {"cls": cls_conf.cls, "conf": cls_conf.conf}
        self.tracks.append(
            Track(
                mean,
                covariance,
                self._next_id,
                self.n_init,
                self.max_age,
                detection.feature,
                **extra,
            )
        )
        self._next_id += 1

    def gated_metric(
        self,
        tracks: Sequence[Track],
        detections: Sequence[Detection],
        track_indices: Sequence[int],
        detection_indices: Sequence[int],
    ) -> np.ndarray:
        """Appearance cost matrix with motion-infeasible pairs gated out."""
        features = np.array([detections[i].feature for i in detection_indices])
        targets = [tracks[i].track_id for i in track_indices]
        cost = self.metric.distance(features, targets)
        return gate_cost_matrix(
            self.kf, cost, tracks, detections, track_indices, detection_indices
        )

    def iou_cost(
        self,
        tracks: Sequence[Track],
        detections: Sequence[Detection],
        track_indices: Sequence[int],
        detection_indices: Sequence[int],
    ) -> np.ndarray:
        """Cost matrix of one minus the box overlap."""
        cost = np.zeros((len(track_indices), len(detection_indices)))
        if not len(detection_indices):
            return cost
        candidates = np.array([detections[i].tlwh for i in detection_indices])
        for row, track_idx in enumerate(track_indices):
            track = tracks[track_idx]
            if track.time_since_update > 1:
                cost[row] = INFTY_COST
                continue
            cost[row] = 1.0 - iou(track.to_tlwh(), candidates)
        return cost