"""Appearance-aware multi-target tracking of detection boxes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from .detection import ClsConf, Detection
from .models import DetectBox
from .tracker import Tracker

#: Computes one appearance feature row per detection found in a frame.
FeatureExtractor = Callable[[Any, Sequence[Detection]], Any]


class DeepSort:
    """Assigns stable track ids to per-frame detection boxes.

    Appearance features come from ``feature_extractor``, which is called with
    the frame and the frame's detections and returns an array with one
    feature row per detection.
    """

    def __init__(
        self,
        feature_extractor: FeatureExtractor,
        max_cosine_distance: float = 0.2,
        max_budget: int = 100,
        max_iou_distance: float = 0.7,
        max_age: int = 200,
        n_init: int = 20,
    ) -> None:
        self.feature_extractor = feature_extractor
        self.tracker = Tracker(
            max_cosine_distance,
            max_budget,
            max_iou_distance=max_iou_distance,
            max_age=max_age,
            n_init=n_init,
        )

    def _with_features(self, frame, detections: list[Detection]) -> list[Detection]:
        features = np.asarray(self.feature_extractor(frame, detections), dtype=np.float32)
        if features.ndim == 1:
            features = features.reshape(1, -1)
        if features.ndim != 2 or len(features) != len(detections):
            raise ValueError(
                f"feature extractor returned {features.shape[0] if features.ndim else 0} "
                f"rows for {len(detections)} detections"
            )
        return [
            Detection(det.tlwh, det.confidence, feature)
            for det, feature in zip(detections, features)
        ]

    def sort(self, frame, dets: Sequence[DetectBox]) -> list[DetectBox]:
        """Track the boxes of one frame and return the confirmed, current tracks.

        Each returned box carries its track id, class id and confidence.
        A frame without detections yields no boxes and leaves the tracks as
        they are.
        """
        detections: list[Detection] = []
        cls_confs: list[ClsConf] = []
        for box in dets:
            detections.append(
                Detection(
                    np.array([box.x1, box.y1, box.x2 - box.x1, box.y2 - box.y1]),
                    box.confidence,
                )
            )
            cls_confs.append(ClsConf(int(box.class_id), box.confidence))

        if not detections:
            return []

        detections = self._with_features(frame, detections)
        self.tracker.predict()
        self.tracker.update(detections, cls_confs)

        output: list[DetectBox] = []
        for track in self.tracker.tracks:
            if not track.is_confirmed() or track.time_since_update > 1:
                continue
            x, y, w, h = (float(v) for v in track.to_tlwh())
            output.append(
                DetectBox(
                    x1=x,
                    y1=y,
                    x2=x + w,
                    y2=y + h,
                    confidence=track.conf,
                    class_id=float(track.cls),
                    track_id=float(track.track_id),
                )
            )
        return output