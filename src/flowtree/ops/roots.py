"""Root initialization."""

from __future__ import annotations

from collections.abc import Sequence

from flowtree.canvas.base import CanvasAdapter, NodeHandle
from flowtree.descriptor import Descriptor, write_descriptor
from flowtree.errors import SelectionError
from flowtree.ids import ROOT_LEVEL, format_id
from flowtree.ir.tree import TreeIndex, build_tree_index
from flowtree.logging import get_logger
from flowtree.ops.common import lookup_node, require_single

logger = get_logger("ops.roots")


def next_root_id(index: TreeIndex) -> str:
    used = index.used_root_numbers()
    number = 1
    while number in used:
        number += 1
    return format_id(ROOT_LEVEL, number)


def find_next_available_root_id(canvas: CanvasAdapter) -> str:
    """Smallest ``A<n>`` not used by any decorated node on the page."""
    return next_root_id(build_tree_index(canvas))


def make_root(canvas: CanvasAdapter, index: TreeIndex, handle: NodeHandle) -> Descriptor:
    descriptor = Descriptor(id=next_root_id(index))
    write_descriptor(canvas, handle, descriptor)
    logger.info("initialized %s as root %s", handle, descriptor.id)
    return descriptor


def initialize_root(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> Descriptor:
    """Decorate one undecorated node as a new root.

    A node that already is a root is returned unchanged.

    Raises:
        SelectionError: If not exactly one node is selected, or the node
            already has a parent.
        DescriptorError: If the node duplicates the path of an earlier node.
    """
    handle = require_single(canvas, selection)
    index = build_tree_index(canvas)
    existing = lookup_node(canvas, index, handle)
    if existing is not None:
        if existing.descriptor.is_root:
            return existing.descriptor
        raise SelectionError(f"Node {existing.id} already has a parent; clear it before making it a root")
    return make_root(canvas, index, handle)
