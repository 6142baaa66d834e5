"""Child creation."""

from __future__ import annotations

from collections.abc import Sequence

from flowtree.canvas.base import CanvasAdapter, NodeHandle
from flowtree.config import DEFAULT_GAP, Gaps, LineStyle, StyleConfig
from flowtree.descriptor import ChildRef, Descriptor, write_descriptor
from flowtree.errors import FlowtreeError
from flowtree.ids import format_id, next_level, next_sibling_number
from flowtree.ir.tree import build_tree_index
from flowtree.layout.engine import place_children
from flowtree.logging import get_logger
from flowtree.ops.common import (
    connect_sides,
    group_members,
    lookup_node,
    reflow_on_canvas,
    require_single,
    style_new_node,
)
from flowtree.ops.roots import make_root
from flowtree.types import Layout, Side, connection_sides

logger = get_logger("ops.children")


def create_children(
    canvas: CanvasAdapter,
    selection: Sequence[NodeHandle],
    direction: Side,
    *,
    count: int = 1,
    gap: float | Gaps = DEFAULT_GAP,
    width: float | None = None,
    height: float | None = None,
    texts: Sequence[str] | None = None,
    line_style: LineStyle | None = None,
    style: StyleConfig | None = None,
) -> list[NodeHandle]:
    """Add children to the selected node, growing out of its ``direction`` side.

    An undecorated anchor is initialized as a new root first. After the new
    nodes are created, the whole layout group they joined is re-centered on
    the parent.

    Args:
        canvas: Page to edit.
        selection: Exactly one anchor node.
        direction: Side of the anchor the children are placed on.
        count: Number of children; ignored when ``texts`` is given.
        gap: Distance from the parent and between siblings.
        width: Child width; defaults to the anchor's width.
        height: Child height; defaults to the anchor's height.
        texts: One label per child.
        line_style: Connector style; defaults to a straight line with an end arrow.
        style: Explicit style for the children; by default the anchor's style is copied.

    Returns:
        Handles of the new nodes in id order.

    Raises:
        SelectionError: If not exactly one node on the page is selected.
        GeometryError: If the child size or gap is invalid.
        DescriptorError: If the anchor duplicates the path of an earlier node.
    """
    anchor = require_single(canvas, selection)
    if texts:
        count = len(texts)
    if count < 1:
        raise FlowtreeError(f"Child count must be at least 1, got {count}")

    gaps = Gaps.coerce(gap)
    parent_rect = canvas.get_bounds(anchor)
    positions = place_children(parent_rect, direction, gaps, count, width, height)

    index = build_tree_index(canvas)
    parent = lookup_node(canvas, index, anchor)
    if parent is None:
        make_root(canvas, index, anchor)
        index = build_tree_index(canvas)
        parent = lookup_node(canvas, index, anchor)
    descriptor: Descriptor = parent.descriptor

    level = next_level(descriptor.level)
    layout = Layout.from_direction(direction)
    existing_ids = descriptor.child_ids() + [c.id for c in index.children_of(parent)]
    first_number = next_sibling_number(level, existing_ids)
    members = group_members(index, parent, layout)

    line_style = line_style or LineStyle()
    parent_side, child_side = connection_sides(direction)
    kind = canvas.get_kind(anchor)

    created: list[NodeHandle] = []
    for i, rect in enumerate(positions):
        child_id = format_id(level, first_number + i)
        handle = canvas.create_node(kind, rect)
        style_new_node(canvas, anchor, handle, style)
        if texts:
            canvas.set_label_text(handle, texts[i])
        write_descriptor(canvas, handle, Descriptor(id=child_id, ancestors=list(descriptor.path), layout=layout))
        connect_sides(canvas, anchor, handle, parent_side, child_side, line_style)
        descriptor.add_child(ChildRef(child_id, layout))
        members[child_id] = handle
        created.append(handle)

    descriptor.layout = layout
    write_descriptor(canvas, anchor, descriptor)
    reflow_on_canvas(canvas, parent_rect, layout, members, gaps)

    logger.info(
        "created %d %s children of %s: %s",
        len(created),
        layout.value,
        descriptor.id,
        ", ".join(format_id(level, first_number + i) for i in range(len(created))),
    )
    return created
