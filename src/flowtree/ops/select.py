"""Smart selection queries.

Each query takes one anchor node and returns handles, anchor first.
An undecorated anchor raises DescriptorError.
"""

from __future__ import annotations

from collections.abc import Sequence

from flowtree.canvas.base import CanvasAdapter, NodeHandle
from flowtree.errors import DescriptorError
from flowtree.ir.tree import TreeIndex, TreeNode, build_tree_index
from flowtree.ops.common import lookup_node, require_single


def _anchor(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> tuple[TreeIndex, TreeNode]:
    handle = require_single(canvas, selection)
    index = build_tree_index(canvas)
    node = lookup_node(canvas, index, handle)
    if node is None:
        raise DescriptorError(f"Node {handle} has no hierarchy descriptor")
    return index, node


def _with_anchor(node: TreeNode, others: list[TreeNode]) -> list[NodeHandle]:
    return [node.handle, *(n.handle for n in others if n.handle != node.handle)]


def select_siblings(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> list[NodeHandle]:
    """Nodes sharing the anchor's ancestor chain. Roots have no siblings."""
    index, node = _anchor(canvas, selection)
    if node.descriptor.is_root:
        return [node.handle]
    return _with_anchor(node, index.siblings_of(node))


def select_level(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> list[NodeHandle]:
    """Every node on the anchor's level, across all trees on the page."""
    index, node = _anchor(canvas, selection)
    return _with_anchor(node, index.level_members(node.level))


def select_ancestors(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> list[NodeHandle]:
    index, node = _anchor(canvas, selection)
    return _with_anchor(node, index.ancestors_of(node))


def select_family(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> list[NodeHandle]:
    """The anchor and all of its descendants."""
    index, node = _anchor(canvas, selection)
    return _with_anchor(node, index.descendants_of(node))
