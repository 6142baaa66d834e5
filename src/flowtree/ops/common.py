"""Helpers shared by the tree operations."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from flowtree.canvas.base import CanvasAdapter, ConnectorHandle, NodeHandle
from flowtree.config import Gaps, LineStyle, StyleConfig
from flowtree.descriptor import read_descriptor
from flowtree.errors import DescriptorError, SelectionError
from flowtree.ir.tree import TreeIndex, TreeNode
from flowtree.layout.engine import reflow_group
from flowtree.layout.sites import select_site
from flowtree.layout.types import Placement, Rect
from flowtree.types import Layout, Side


def _check_on_page(canvas: CanvasAdapter, handles: Sequence[NodeHandle]) -> None:
    on_page = set(canvas.list_nodes_on_page())
    for handle in handles:
        if handle not in on_page:
            raise SelectionError(f"Node {handle} is not on the page")


def require_single(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> NodeHandle:
    if len(selection) != 1:
        raise SelectionError(f"Select exactly one node (got {len(selection)})")
    _check_on_page(canvas, selection)
    return selection[0]


def require_pair(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> tuple[NodeHandle, NodeHandle]:
    if len(selection) != 2:
        raise SelectionError(f"Select exactly two nodes (got {len(selection)})")
    first, second = selection
    if first == second:
        raise SelectionError("Select two different nodes")
    _check_on_page(canvas, selection)
    return first, second


def lookup_node(canvas: CanvasAdapter, index: TreeIndex, handle: NodeHandle) -> TreeNode | None:
    """The indexed node for ``handle``, or None when the shape carries no descriptor.

    Raises:
        DescriptorError: If the shape is decorated but another node on the page
            already holds the same path, so the index skipped it.
    """
    node = index.node_for_handle(handle)
    if node is None:
        descriptor = read_descriptor(canvas, handle)
        if descriptor is not None:
            raise DescriptorError(
                f"duplicate node path {'/'.join(descriptor.path)} on {handle}; another node already holds it"
            )
    return node


def connect_sides(
    canvas: CanvasAdapter,
    start: NodeHandle,
    end: NodeHandle,
    start_side: Side,
    end_side: Side,
    line_style: LineStyle,
) -> ConnectorHandle:
    """Connect two nodes at the sites matching the requested sides."""
    start_site = canvas.get_connection_site_point(
        start, select_site(canvas.get_connection_site_count(start), start_side)
    )
    end_site = canvas.get_connection_site_point(end, select_site(canvas.get_connection_site_count(end), end_side))
    return canvas.connect(start_site, end_site, line_style)


def style_new_node(canvas: CanvasAdapter, source: NodeHandle, target: NodeHandle, style: StyleConfig | None) -> None:
    """Copy ``source``'s look onto ``target``, unless an explicit style is given."""
    if style is None:
        canvas.copy_visual_style(source, target)
    else:
        canvas.apply_style(target, style)


def reflow_on_canvas(
    canvas: CanvasAdapter,
    parent: Rect,
    layout: Layout,
    members: Mapping[str, NodeHandle],
    gap: float | Gaps,
) -> list[Placement]:
    """Re-center a layout group and move its nodes; ``members`` maps id to handle."""
    current = [Placement(node_id, canvas.get_bounds(handle)) for node_id, handle in members.items()]
    placements = reflow_group(parent, layout, current, gap)
    for placement in placements:
        canvas.set_bounds(members[placement.node_id], placement.rect)
    return placements


def group_members(index: TreeIndex, parent: TreeNode, layout: Layout) -> dict[str, NodeHandle]:
    return {child.id: child.handle for child in index.children_of(parent, layout)}
