"""Geometry types shared by the layout engine, canvas adapters and renderers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A point in canvas coordinates (points)."""

    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Bounds of a node in canvas coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    def center(self) -> Point:
        return Point(self.center_x, self.center_y)

    def moved_to(self, left: float, top: float) -> Rect:
        return Rect(left, top, self.width, self.height)


@dataclass(frozen=True)
class Placement:
    """A node id together with the bounds the layout engine assigned it."""

    node_id: str
    rect: Rect
