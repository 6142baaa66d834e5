"""Sibling creation."""

from __future__ import annotations

from collections.abc import Sequence

from flowtree.canvas.base import CanvasAdapter, NodeHandle
from flowtree.config import Gaps, LineStyle, StyleConfig
from flowtree.descriptor import ChildRef, Descriptor, write_descriptor
from flowtree.errors import DescriptorError, SelectionError
from flowtree.ids import format_id, next_sibling_number
from flowtree.ir.tree import build_tree_index
from flowtree.layout.engine import validate_geometry
from flowtree.logging import get_logger
from flowtree.ops.common import (
    connect_sides,
    group_members,
    lookup_node,
    reflow_on_canvas,
    require_single,
    style_new_node,
)
from flowtree.types import Layout

logger = get_logger("ops.sibling")


def create_sibling(
    canvas: CanvasAdapter,
    selection: Sequence[NodeHandle],
    *,
    gaps: float | Gaps = Gaps(),
    text: str | None = None,
    line_style: LineStyle | None = None,
    style: StyleConfig | None = None,
) -> NodeHandle:
    """Add one sibling next to the selected non-root node.

    The new node joins the anchor's layout group under the same parent.
    Only that group is re-flowed; other groups of the parent stay put.

    Raises:
        SelectionError: If the selection is not one node, or the node is a root.
        DescriptorError: If the node is undecorated, duplicates the path of an
            earlier node, or its parent is not on the page.
    """
    anchor = require_single(canvas, selection)
    index = build_tree_index(canvas)
    node = lookup_node(canvas, index, anchor)
    if node is None:
        raise DescriptorError(f"Node {anchor} has no hierarchy descriptor")
    if node.descriptor.is_root:
        raise SelectionError(f"{node.id} is a root; roots cannot have siblings")
    parent = index.parent_of(node)
    if parent is None:
        raise DescriptorError(f"Parent {node.descriptor.parent_id} of {node.id} is not on the page")

    gaps = Gaps.coerce(gaps)
    anchor_rect = canvas.get_bounds(anchor)
    validate_geometry(anchor_rect.width, anchor_rect.height, gaps)

    layout = index.group_of(parent, node) or parent.descriptor.layout or Layout.LR
    existing_ids = parent.descriptor.child_ids() + [s.id for s in index.siblings_of(node)]
    new_id = format_id(node.level, next_sibling_number(node.level, existing_ids))
    members = group_members(index, parent, layout)

    handle = canvas.create_node(canvas.get_kind(anchor), anchor_rect)
    style_new_node(canvas, anchor, handle, style)
    if text:
        canvas.set_label_text(handle, text)
    write_descriptor(canvas, handle, Descriptor(id=new_id, ancestors=list(node.descriptor.ancestors), layout=layout))

    parent.descriptor.add_child(ChildRef(new_id, layout))
    write_descriptor(canvas, parent.handle, parent.descriptor)

    parent_side, child_side = layout.sides()
    connect_sides(canvas, parent.handle, handle, parent_side, child_side, line_style or LineStyle())

    members[new_id] = handle
    reflow_on_canvas(canvas, parent.bounds, layout, members, gaps)

    logger.info("created sibling %s of %s under %s", new_id, node.id, parent.id)
    return handle
