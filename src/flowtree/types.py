"""Shared type definitions for flowtree.

Enums and the direction/layout/side tables used across the codec, layout
engine, tree operations and renderers.
"""

from __future__ import annotations

from enum import Enum, auto


class Side(Enum):
    """A side of a node. Also names the direction children are created in."""

    TOP = "TOP"
    RIGHT = "RIGHT"
    BOTTOM = "BOTTOM"
    LEFT = "LEFT"

    @property
    def is_horizontal(self) -> bool:
        return self in (Side.LEFT, Side.RIGHT)

    def opposite(self) -> Side:
        return _OPPOSITE[self]


_OPPOSITE: dict[Side, Side] = {
    Side.TOP: Side.BOTTOM,
    Side.BOTTOM: Side.TOP,
    Side.LEFT: Side.RIGHT,
    Side.RIGHT: Side.LEFT,
}


class Layout(Enum):
    """Direction in which a group of children sits relative to its parent."""

    LR = "LR"  # Left-to-Right
    RL = "RL"  # Right-to-Left
    TD = "TD"  # Top-Down
    DT = "DT"  # Down-Top

    @classmethod
    def from_direction(cls, direction: Side) -> Layout:
        return _LAYOUT_FOR_DIRECTION[direction]

    @property
    def direction(self) -> Side:
        return _DIRECTION_FOR_LAYOUT[self]

    @property
    def is_horizontal(self) -> bool:
        return self.direction.is_horizontal

    def sides(self) -> tuple[Side, Side]:
        """(parent side, child side) used to connect a member of this group."""
        return connection_sides(self.direction)


_LAYOUT_FOR_DIRECTION: dict[Side, Layout] = {
    Side.RIGHT: Layout.LR,
    Side.LEFT: Layout.RL,
    Side.BOTTOM: Layout.TD,
    Side.TOP: Layout.DT,
}
_DIRECTION_FOR_LAYOUT: dict[Layout, Side] = {v: k for k, v in _LAYOUT_FOR_DIRECTION.items()}


def connection_sides(direction: Side) -> tuple[Side, Side]:
    """Map a child-creation direction to (parent side, child side).

    TOP -> (TOP, BOTTOM), RIGHT -> (RIGHT, LEFT), BOTTOM -> (BOTTOM, TOP),
    LEFT -> (LEFT, RIGHT).
    """
    return direction, direction.opposite()


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ShapeKind(Enum):
    RECTANGLE = "RECTANGLE"
    ROUND_RECTANGLE = "ROUND_RECTANGLE"
    ELLIPSE = "ELLIPSE"
    TEXT_BOX = "TEXT_BOX"
    CLOUD = "CLOUD"

    @classmethod
    def default(cls) -> ShapeKind:
        return cls.RECTANGLE


class LineCategory(Enum):
    STRAIGHT = auto()
    BENT = auto()
    CURVED = auto()


class ArrowStyle(Enum):
    NONE = auto()
    FILL_ARROW = auto()
    STEALTH_ARROW = auto()
    OPEN_ARROW = auto()
    FILL_CIRCLE = auto()
    OPEN_CIRCLE = auto()
