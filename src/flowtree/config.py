"""Centralized configuration for flowtree."""

from __future__ import annotations

from dataclasses import dataclass

from flowtree.types import ArrowStyle, LineCategory

DEFAULT_GAP = 20.0


@dataclass
class StyleConfig:
    """Visual style applied to newly created nodes."""

    fill_color: str = "#FFFFFF"
    border_color: str = "#000000"
    border_weight: float = 1.0
    font_family: str = "Arial"
    font_size: int = 12
    text_color: str = "#000000"


@dataclass
class LineStyle:
    """Connector appearance."""

    category: LineCategory = LineCategory.STRAIGHT
    start_arrow: ArrowStyle = ArrowStyle.NONE
    end_arrow: ArrowStyle = ArrowStyle.FILL_ARROW


@dataclass(frozen=True)
class Gaps:
    """Spacing in points between a parent and its children and between siblings.

    For LR/RL groups the horizontal gap separates parent and children and the
    vertical gap separates siblings; TD/DT groups swap the two.
    """

    horizontal: float = DEFAULT_GAP
    vertical: float = DEFAULT_GAP

    @classmethod
    def uniform(cls, gap: float) -> Gaps:
        return cls(horizontal=gap, vertical=gap)

    @classmethod
    def coerce(cls, gap: float | Gaps) -> Gaps:
        return gap if isinstance(gap, Gaps) else cls.uniform(float(gap))

    def split(self, horizontal_main_axis: bool) -> tuple[float, float]:
        """Return (main-axis gap, cross-axis gap)."""
        if horizontal_main_axis:
            return self.horizontal, self.vertical
        return self.vertical, self.horizontal


@dataclass
class RenderConfig:
    """Configuration for the text renderer."""

    unicode: bool = True
    scale_x: float = 5.0  # points per column
    scale_y: float = 8.0  # points per row
    show_ids: bool = True
