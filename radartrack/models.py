"""Plain data records shared by the detection and tracking stages."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Rect:
    """Integer axis-aligned rectangle given by its top-left corner and size."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def intersect(self, other: Rect) -> Rect:
        """Return the overlap of two rectangles, or an empty rectangle."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        width = min(self.right, other.right) - x1
        height = min(self.bottom, other.bottom) - y1
        if width <= 0 or height <= 0:
            return Rect()
        return Rect(x1, y1, width, height)


@dataclass
class DetectBox:
    """A first-stage detection box with class, confidence and track id."""

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    confidence: float = 0.0
    class_id: float = -1.0
    track_id: float = -1.0


@dataclass
class ArmorBoundingBox:
    """Armour plate bounding box."""

    flag: bool = False
    x0: float = 0.0
    y0: float = 0.0
    w: float = 0.0
    h: float = 0.0
    cls: float = 0.0
    conf: float = 0.0
    depth: float = 0.0


@dataclass
class BoxAndRect:
    """An armour box bound to the detection box it was found in."""

    armor: ArmorBoundingBox = field(default_factory=ArmorBoundingBox)
    rect: DetectBox = field(default_factory=DetectBox)


@dataclass
class MapLocation2D:
    """Location on the 2D map."""

    flag: bool = False
    depth: float = 0.0
    id: int = -1
    x: int = 0
    y: int = 0


@dataclass
class MapLocation3D:
    """Location in 3D space."""

    flag: bool = False
    id: int = -1
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class BOData:
    """Match progress information."""

    game_end_flag: bool = False
    remain_bo: int = -1


@dataclass
class JudgeMessage:
    """Message exchanged with the referee system."""

    task: int = 0
    targets: list[int] = field(default_factory=list)
    team: int = 0
    loc: list[MapLocation3D] = field(default_factory=list)