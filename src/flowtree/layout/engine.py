"""Centered-stack layout for sibling groups.

Every layout group is stacked along the cross-axis with its midpoint on
the parent's cross-axis center, one gap away from the parent's edge along
the main axis:

    main offset  = parent edge + gap
    cross start  = parent cross center - total / 2
    total        = n * child cross size + (n - 1) * sibling gap
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from flowtree.config import Gaps
from flowtree.errors import GeometryError
from flowtree.ids import number_of
from flowtree.layout.types import Placement, Rect
from flowtree.types import Layout, Side


def validate_geometry(width: float, height: float, gaps: Gaps) -> None:
    """Raise GeometryError for non-positive sizes or negative gaps."""
    if width <= 0 or height <= 0:
        raise GeometryError(f"Child size must be positive, got {width}x{height}")
    if gaps.horizontal < 0 or gaps.vertical < 0:
        raise GeometryError(f"Gaps must not be negative, got {gaps.horizontal}/{gaps.vertical}")


def _stack(parent: Rect, direction: Side, gaps: Gaps, width: float, height: float, count: int) -> list[Rect]:
    main_gap, cross_gap = gaps.split(direction.is_horizontal)
    rects: list[Rect] = []
    if direction.is_horizontal:
        total = count * height + (count - 1) * cross_gap
        start = parent.center_y - total / 2
        left = parent.right + main_gap if direction == Side.RIGHT else parent.left - width - main_gap
        for i in range(count):
            rects.append(Rect(left, start + i * (height + cross_gap), width, height))
    else:
        total = count * width + (count - 1) * cross_gap
        start = parent.center_x - total / 2
        top = parent.bottom + main_gap if direction == Side.BOTTOM else parent.top - height - main_gap
        for i in range(count):
            rects.append(Rect(start + i * (width + cross_gap), top, width, height))
    return rects


def place_children(
    parent: Rect,
    direction: Side,
    gap: float | Gaps,
    count: int,
    width: float | None = None,
    height: float | None = None,
) -> list[Rect]:
    """Initial bounds for ``count`` new children of ``parent`` in ``direction``.

    Args:
        parent: Bounds of the parent node.
        direction: Side of the parent the children grow from.
        gap: Uniform gap, or separate horizontal/vertical gaps.
        count: Number of children.
        width: Child width; defaults to the parent's width.
        height: Child height; defaults to the parent's height.

    Returns:
        One rect per child, ordered along the cross-axis.

    Raises:
        GeometryError: If the child size is non-positive or a gap is negative.
    """
    gaps = Gaps.coerce(gap)
    w = parent.width if width is None else width
    h = parent.height if height is None else height
    validate_geometry(w, h, gaps)
    if count <= 0:
        return []
    return _stack(parent, direction, gaps, w, h, count)


def _member_order(placement: Placement) -> tuple[int, str]:
    return number_of(placement.node_id), placement.node_id


def reflow_group(
    parent: Rect,
    layout: Layout,
    members: Sequence[Placement],
    gap: float | Gaps,
) -> list[Placement]:
    """Re-center one layout group on ``parent``.

    Members are ordered by numeric id suffix and sized like the first of
    them, so the result only depends on membership, not on prior positions.
    """
    if not members:
        return []
    gaps = Gaps.coerce(gap)
    ordered = sorted(members, key=_member_order)
    first = ordered[0].rect
    validate_geometry(first.width, first.height, gaps)
    rects = _stack(parent, layout.direction, gaps, first.width, first.height, len(ordered))
    return [Placement(m.node_id, r) for m, r in zip(ordered, rects)]


def reposition(
    parent: Rect,
    groups: Mapping[Layout, Sequence[Placement]],
    gap: float | Gaps,
) -> dict[Layout, list[Placement]]:
    """Re-flow every layout group of a parent independently."""
    return {layout: reflow_group(parent, layout, members, gap) for layout, members in groups.items()}


def detect_layout(parent: Rect, child: Rect) -> Layout:
    """Guess the layout of an existing child from where it sits relative to its parent.

    The dominant axis of the center delta wins; ties count as horizontal.
    """
    dx = child.center_x - parent.center_x
    dy = child.center_y - parent.center_y
    if abs(dx) >= abs(dy):
        return Layout.LR if dx >= 0 else Layout.RL
    return Layout.TD if dy > 0 else Layout.DT
