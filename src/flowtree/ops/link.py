"""Linking existing nodes and drawing plain connections."""

from __future__ import annotations

from collections.abc import Sequence

from flowtree.canvas.base import CanvasAdapter, ConnectorHandle, NodeHandle
from flowtree.config import LineStyle
from flowtree.descriptor import ChildRef, write_descriptor
from flowtree.errors import DescriptorError, SelectionError
from flowtree.ids import level_depth
from flowtree.ir.tree import build_tree_index
from flowtree.layout.engine import detect_layout
from flowtree.layout.types import Rect
from flowtree.logging import get_logger
from flowtree.ops.common import connect_sides, lookup_node, require_pair
from flowtree.types import Orientation, Side

logger = get_logger("ops.link")


def link_existing(
    canvas: CanvasAdapter,
    selection: Sequence[NodeHandle],
    *,
    line_style: LineStyle | None = None,
) -> ConnectorHandle:
    """Make one of two decorated nodes the parent of the other and connect them.

    The node on the shallower level becomes the parent, whatever the
    argument order; on equal levels the first node does. The child takes the
    parent's layout (detected from the geometry when the parent has none). A
    child that already had a parent is moved, and its descendants' ancestor
    chains are rewritten to match.

    Raises:
        SelectionError: If the selection is not two nodes, or the link would
            make a node its own ancestor or duplicate a sibling id.
        DescriptorError: If either node is undecorated.
    """
    first, second = require_pair(canvas, selection)
    index = build_tree_index(canvas)
    a = lookup_node(canvas, index, first)
    b = lookup_node(canvas, index, second)
    if a is None or b is None:
        missing = first if a is None else second
        raise DescriptorError(f"Node {missing} has no hierarchy descriptor; both nodes must be decorated")

    parent, child = (a, b) if level_depth(a.level) <= level_depth(b.level) else (b, a)
    if parent.path[: len(child.path)] == child.path:
        raise SelectionError(f"Linking would make {child.id} an ancestor of itself")
    new_path = (*parent.path, child.id)
    if new_path != child.path and new_path in index:
        raise SelectionError(f"{parent.id} already has a child {child.id}")

    layout = parent.descriptor.layout or detect_layout(parent.bounds, child.bounds)

    old_parent = index.parent_of(child)
    if old_parent is not None and old_parent.path != parent.path:
        old_parent.descriptor.remove_child(child.id)
        write_descriptor(canvas, old_parent.handle, old_parent.descriptor)

    old_depth = len(child.path)
    for descendant in index.descendants_of(child):
        descendant.descriptor.ancestors = [*new_path, *descendant.descriptor.ancestors[old_depth:]]
        write_descriptor(canvas, descendant.handle, descendant.descriptor)

    child.descriptor.ancestors = list(parent.path)
    child.descriptor.layout = layout
    write_descriptor(canvas, child.handle, child.descriptor)

    parent.descriptor.add_child(ChildRef(child.id, layout))
    write_descriptor(canvas, parent.handle, parent.descriptor)

    parent_side, child_side = layout.sides()
    connector = connect_sides(canvas, parent.handle, child.handle, parent_side, child_side, line_style or LineStyle())
    logger.info("linked %s under %s (%s)", child.id, parent.id, layout.value)
    return connector


def dominant_orientation(a: Rect, b: Rect) -> Orientation:
    """HORIZONTAL when the centers are further apart in x than in y."""
    dx = abs(b.center_x - a.center_x)
    dy = abs(b.center_y - a.center_y)
    return Orientation.HORIZONTAL if dx > dy else Orientation.VERTICAL


def orientation_sides(a: Rect, b: Rect, orientation: Orientation) -> tuple[Side, Side]:
    """Sides facing each other along ``orientation``, by the sign of the center delta."""
    if orientation == Orientation.HORIZONTAL:
        if b.center_x - a.center_x > 0:
            return Side.RIGHT, Side.LEFT
        return Side.LEFT, Side.RIGHT
    if b.center_y - a.center_y > 0:
        return Side.BOTTOM, Side.TOP
    return Side.TOP, Side.BOTTOM


def connect_nodes(
    canvas: CanvasAdapter,
    selection: Sequence[NodeHandle],
    orientation: Orientation | None = None,
    *,
    line_style: LineStyle | None = None,
) -> ConnectorHandle:
    """Draw a connector between two nodes without touching their descriptors.

    With no ``orientation`` the dominant center delta picks one.
    """
    first, second = require_pair(canvas, selection)
    return _connect_facing(canvas, first, second, orientation, line_style or LineStyle())


def _connect_facing(
    canvas: CanvasAdapter,
    start: NodeHandle,
    end: NodeHandle,
    orientation: Orientation | None,
    line_style: LineStyle,
) -> ConnectorHandle:
    a, b = canvas.get_bounds(start), canvas.get_bounds(end)
    side_a, side_b = orientation_sides(a, b, orientation or dominant_orientation(a, b))
    return connect_sides(canvas, start, end, side_a, side_b, line_style)


def update_connectors(
    canvas: CanvasAdapter,
    connectors: Sequence[ConnectorHandle],
    line_style: LineStyle,
) -> list[ConnectorHandle]:
    """Re-create existing connectors with a new line style.

    Each connector is replaced by a fresh one between the same two nodes,
    attached on the sides facing along the dominant center delta.

    Returns:
        Handles of the new connectors, in input order.

    Raises:
        SelectionError: If no connector is given, one is given twice, or a handle
            is unknown.
    """
    if not connectors:
        raise SelectionError("Select at least one connector")
    if len(set(connectors)) != len(connectors):
        raise SelectionError("Each connector may be selected only once")
    ends = []
    for connector in connectors:
        try:
            ends.append(canvas.get_connector_ends(connector))
        except KeyError:
            raise SelectionError(f"Connector {connector} is not on the page") from None

    created: list[ConnectorHandle] = []
    for connector, (start, end) in zip(connectors, ends):
        canvas.remove_connector(connector)
        created.append(_connect_facing(canvas, start, end, None, line_style))
        logger.info("restyled connector %s between %s and %s as %s", connector, start, end, created[-1])
    return created
