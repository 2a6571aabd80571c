"""Segment value type shared by the canvas, operations and generators."""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

Vec2 = Tuple[float, float]


class Direction(Enum):
    """Fold marker carried by every segment."""

    UP = "up"
    DOWN = "down"

    def flipped(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP

    @property
    def sign(self) -> int:
        return 1 if self is Direction.UP else -1


@dataclass(frozen=True)
class Segment:
    """
    An oriented line from (x1, y1) to (x2, y2).

    Segments are never edited in place. The handle is issued by the canvas
    that drew the segment and is what erase/visibility are keyed on, so two
    segments with identical geometry are still distinct lines.
    """

    x1: float
    y1: float
    x2: float
    y2: float
    direction: Direction = Direction.UP
    handle: int = -1

    @property
    def start(self) -> Vec2:
        return (self.x1, self.y1)

    @property
    def end(self) -> Vec2:
        return (self.x2, self.y2)

    @property
    def midpoint(self) -> Vec2:
        return ((self.x1 + self.x2) / 2.0, (self.y1 + self.y2) / 2.0)

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    @property
    def angle(self) -> float:
        """Heading in radians, measured from +x."""
        return math.atan2(self.y2 - self.y1, self.x2 - self.x1)

    def with_handle(self, handle: int) -> "Segment":
        return replace(self, handle=handle)

    def same_geometry(self, other: "Segment", tol: float = 1e-9) -> bool:
        """True if both endpoints match within tol (direction and handle ignored)."""
        return (
            abs(self.x1 - other.x1) <= tol
            and abs(self.y1 - other.y1) <= tol
            and abs(self.x2 - other.x2) <= tol
            and abs(self.y2 - other.y2) <= tol
        )


def rotate_point(px: float, py: float, cx: float, cy: float, deg: float) -> Vec2:
    """Rotate (px, py) about (cx, cy) by deg, counterclockwise in math orientation."""
    dist = math.hypot(px - cx, py - cy)
    theta = math.atan2(py - cy, px - cx) + math.radians(deg)
    return (cx + dist * math.cos(theta), cy + dist * math.sin(theta))
