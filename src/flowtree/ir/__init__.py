"""Per-operation hierarchy index built from a canvas page."""

from flowtree.ir.tree import TreeIndex, TreeNode, build_tree_index

__all__ = [
    "TreeIndex",
    "TreeNode",
    "build_tree_index",
]
