"""Tree index: the hierarchy of one page, rebuilt from stored descriptors.

Descriptors are the only persistent state, so every operation scans the
page once and builds a fresh TreeIndex. Nothing is cached between
operations; edits made to the page in between are picked up on the next scan.

Node ids are unique only among siblings, so the index is keyed by path
(ancestor chain plus own id). Edges run parent -> child in a networkx
DiGraph.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import networkx as nx

from flowtree.canvas.base import CanvasAdapter, NodeHandle
from flowtree.descriptor import Descriptor, read_descriptor
from flowtree.ids import ROOT_LEVEL, split_id
from flowtree.layout.types import Rect
from flowtree.logging import get_logger
from flowtree.types import Layout

logger = get_logger("ir.tree")

Path = tuple[str, ...]


@dataclass
class TreeNode:
    handle: NodeHandle
    descriptor: Descriptor
    bounds: Rect
    order: int  # position on the page

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def path(self) -> Path:
        return self.descriptor.path

    @property
    def parent_path(self) -> Path:
        return tuple(self.descriptor.ancestors)

    @property
    def level(self) -> str:
        return self.descriptor.level


class TreeIndex:
    """Decorated nodes of one page, arranged as a forest."""

    def __init__(self, digraph: nx.DiGraph, undecorated: list[NodeHandle]) -> None:
        self.digraph = digraph
        self.undecorated = undecorated
        self._by_handle: dict[NodeHandle, Path] = {
            data["data"].handle: path for path, data in digraph.nodes(data=True)
        }

    @classmethod
    def from_canvas(cls, canvas: CanvasAdapter) -> TreeIndex:
        """Scan every node on the page and decode its descriptor."""
        digraph: nx.DiGraph = nx.DiGraph()
        undecorated: list[NodeHandle] = []

        for order, handle in enumerate(canvas.list_nodes_on_page()):
            descriptor = read_descriptor(canvas, handle)
            if descriptor is None:
                undecorated.append(handle)
                continue
            path = descriptor.path
            if path in digraph:
                logger.warning(
                    "duplicate node %s on %s; keeping %s",
                    "/".join(path),
                    handle,
                    digraph.nodes[path]["data"].handle,
                )
                continue
            node = TreeNode(handle=handle, descriptor=descriptor, bounds=canvas.get_bounds(handle), order=order)
            digraph.add_node(path, data=node)

        for path in list(digraph.nodes):
            parent_path = path[:-1]
            if not parent_path:
                continue
            if parent_path in digraph:
                digraph.add_edge(parent_path, path)
            else:
                logger.warning("node %s has no parent %s on the page", "/".join(path), "/".join(parent_path))

        logger.debug("indexed %d decorated and %d plain nodes", digraph.number_of_nodes(), len(undecorated))
        return cls(digraph, undecorated)

    # ─── Lookup ──────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return self.digraph.number_of_nodes()

    def __contains__(self, path: object) -> bool:
        return path in self.digraph

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self._sorted(self.digraph.nodes))

    def _node(self, path: Path) -> TreeNode:
        return self.digraph.nodes[path]["data"]

    def _sorted(self, paths) -> list[TreeNode]:
        return sorted((self._node(p) for p in paths), key=lambda n: n.order)

    def get(self, path: Path) -> TreeNode | None:
        if path not in self.digraph:
            return None
        return self._node(path)

    def node_for_handle(self, handle: NodeHandle) -> TreeNode | None:
        path = self._by_handle.get(handle)
        return self._node(path) if path is not None else None

    def find(self, node_id: str) -> list[TreeNode]:
        """All nodes with the given id, in page order."""
        return [n for n in self if n.id == node_id]

    # ─── Topology ────────────────────────────────────────────────────────────

    def parent_of(self, node: TreeNode) -> TreeNode | None:
        return self.get(node.parent_path) if node.parent_path else None

    def children_of(self, node: TreeNode, layout: Layout | None = None) -> list[TreeNode]:
        """Children present on the page, optionally limited to one layout group.

        A child's group is the tag its parent lists it under, falling back to
        the child's own layout field.
        """
        children = self._sorted(self.digraph.successors(node.path))
        if layout is None:
            return children
        return [c for c in children if self.group_of(node, c) == layout]

    def group_of(self, parent: TreeNode, child: TreeNode) -> Layout | None:
        ref = parent.descriptor.child_ref(child.id)
        if ref is not None and ref.layout is not None:
            return ref.layout
        return child.descriptor.layout

    def siblings_of(self, node: TreeNode) -> list[TreeNode]:
        """Nodes sharing ``node``'s ancestor chain, including ``node``."""
        return [n for n in self if n.parent_path == node.parent_path]

    def level_members(self, level: str) -> list[TreeNode]:
        return [n for n in self if n.level == level]

    def ancestors_of(self, node: TreeNode) -> list[TreeNode]:
        """Ancestors present on the page, root first."""
        found = []
        for depth in range(1, len(node.path)):
            ancestor = self.get(node.path[:depth])
            if ancestor is not None:
                found.append(ancestor)
        return found

    def descendants_of(self, node: TreeNode) -> list[TreeNode]:
        """Descendants in depth-first order, children in id order."""
        found: list[TreeNode] = []
        stack = list(reversed(_by_id(self.digraph.successors(node.path))))
        while stack:
            path = stack.pop()
            found.append(self._node(path))
            stack.extend(reversed(_by_id(self.digraph.successors(path))))
        return found

    def roots(self) -> list[TreeNode]:
        return [n for n in self if not n.parent_path]

    def orphans(self) -> list[TreeNode]:
        return [n for n in self if n.parent_path and n.parent_path not in self.digraph]

    def is_forest(self) -> bool:
        return self.digraph.number_of_nodes() == 0 or nx.is_forest(self.digraph)

    def used_root_numbers(self) -> set[int]:
        numbers = set()
        for node in self:
            level, number = split_id(node.id)
            if level == ROOT_LEVEL:
                numbers.add(number)
        return numbers


def _by_id(paths):
    return sorted(paths, key=lambda p: (split_id(p[-1])[1], p[-1]))


def build_tree_index(canvas: CanvasAdapter) -> TreeIndex:
    """Build the hierarchy index for the current state of a page."""
    return TreeIndex.from_canvas(canvas)
