"""Detection records used by the tracker."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

FEATURE_DIM = 256


@dataclass
class ClsConf:
    """Class id and confidence of a detection."""

    cls: int = -1
    conf: float = -1.0


def _zero_feature() -> np.ndarray:
    return np.zeros(FEATURE_DIM, dtype=np.float32)


@dataclass
class Detection:
    """A bounding box in (top, left, width, height) form with its feature."""

    tlwh: np.ndarray
    confidence: float = 0.0
    feature: np.ndarray = field(default_factory=_zero_feature)

    def __post_init__(self) -> None:
        self.tlwh = np.asarray(self.tlwh, dtype=np.float64).reshape(4)
        self.feature = np.asarray(self.feature, dtype=np.float32).reshape(-1)

    def to_xyah(self) -> np.ndarray:
        """Return (center x, center y, aspect ratio, height)."""
        ret = self.tlwh.copy()
        ret[0] += ret[2] * 0.5
        ret[1] += ret[3] * 0.5
        ret[2] /= ret[3]
        return ret

    def to_tlbr(self) -> np.ndarray:
        """Return (min x, min y, max x, max y)."""
        ret = self.tlwh.copy()
        ret[0] += ret[2]
        ret[1] += ret[3]
        return ret


@dataclass
class MatchResult:
    """Outcome of matching tracks to detections."""

    matches: list[tuple[int, int]] = field(default_factory=list)
    unmatched_tracks: list[int] = field(default_factory=list)
    unmatched_detections: list[int] = field(default_factory=list)