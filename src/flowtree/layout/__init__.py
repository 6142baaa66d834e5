"""Layout engine, connection site selection and geometry types."""

from __future__ import annotations

from flowtree.layout.engine import (
    detect_layout,
    place_children,
    reflow_group,
    reposition,
    validate_geometry,
)
from flowtree.layout.sites import select_site
from flowtree.layout.types import Placement, Point, Rect

__all__ = [
    "Placement",
    "Point",
    "Rect",
    "detect_layout",
    "place_children",
    "reflow_group",
    "reposition",
    "select_site",
    "validate_geometry",
]
