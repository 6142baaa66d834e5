"""Tree operations on a canvas page."""

from flowtree.ops.children import create_children
from flowtree.ops.inspect import clear_descriptor, describe, describe_node
from flowtree.ops.link import (
    connect_nodes,
    dominant_orientation,
    link_existing,
    orientation_sides,
    update_connectors,
)
from flowtree.ops.roots import find_next_available_root_id, initialize_root
from flowtree.ops.select import select_ancestors, select_family, select_level, select_siblings
from flowtree.ops.sibling import create_sibling

__all__ = [
    "clear_descriptor",
    "connect_nodes",
    "create_children",
    "create_sibling",
    "describe",
    "describe_node",
    "dominant_orientation",
    "find_next_available_root_id",
    "initialize_root",
    "link_existing",
    "orientation_sides",
    "select_ancestors",
    "select_family",
    "select_level",
    "select_siblings",
    "update_connectors",
]
