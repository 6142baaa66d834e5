"""flowtree: hierarchical diagram construction on a slide-style canvas.

Nodes carry a small descriptor (ancestor chain, layout, id, children) that
is the only persistent record of the tree. Operations decode the page,
compute placements and issue canvas adapter calls.
"""

from flowtree.canvas import CanvasAdapter, MemoryCanvas
from flowtree.config import DEFAULT_GAP, Gaps, LineStyle, RenderConfig, StyleConfig
from flowtree.descriptor import ChildRef, Descriptor, decode, encode
from flowtree.errors import DescriptorError, FlowtreeError, GeometryError, SelectionError
from flowtree.ids import format_id, next_level, next_sibling_number
from flowtree.ir import TreeIndex, build_tree_index
from flowtree.layout import Rect, place_children, reposition, select_site
from flowtree.ops import (
    clear_descriptor,
    connect_nodes,
    create_children,
    create_sibling,
    describe,
    find_next_available_root_id,
    initialize_root,
    link_existing,
    select_ancestors,
    select_family,
    select_level,
    select_siblings,
    update_connectors,
)
from flowtree.renderers import render_page
from flowtree.types import Layout, Orientation, ShapeKind, Side

__all__ = [
    "DEFAULT_GAP",
    "CanvasAdapter",
    "ChildRef",
    "Descriptor",
    "DescriptorError",
    "FlowtreeError",
    "Gaps",
    "GeometryError",
    "Layout",
    "LineStyle",
    "MemoryCanvas",
    "Orientation",
    "Rect",
    "RenderConfig",
    "SelectionError",
    "ShapeKind",
    "Side",
    "StyleConfig",
    "TreeIndex",
    "build_tree_index",
    "clear_descriptor",
    "connect_nodes",
    "create_children",
    "create_sibling",
    "decode",
    "describe",
    "encode",
    "find_next_available_root_id",
    "format_id",
    "initialize_root",
    "link_existing",
    "next_level",
    "next_sibling_number",
    "place_children",
    "render_page",
    "reposition",
    "select_ancestors",
    "select_family",
    "select_level",
    "select_siblings",
    "update_connectors",
    "select_site",
]
