"""Canvas adapter protocol.

The adapter is the only thing that creates, moves or connects shapes.
Tree operations call it; it never calls back into them.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Protocol

from flowtree.config import LineStyle, StyleConfig
from flowtree.layout.types import Point, Rect
from flowtree.types import ShapeKind

NodeHandle = Hashable
ConnectorHandle = Hashable


@dataclass(frozen=True)
class ConnectionSite:
    """A concrete attachment point on a node."""

    handle: NodeHandle
    index: int
    point: Point


class CanvasAdapter(Protocol):
    """Capabilities the core needs from a document/editing layer."""

    def create_node(self, kind: ShapeKind, bounds: Rect) -> NodeHandle: ...

    def get_kind(self, handle: NodeHandle) -> ShapeKind: ...

    def get_bounds(self, handle: NodeHandle) -> Rect: ...

    def set_bounds(self, handle: NodeHandle, rect: Rect) -> None: ...

    def get_connection_site_count(self, handle: NodeHandle) -> int: ...

    def get_connection_site_point(self, handle: NodeHandle, index: int) -> ConnectionSite: ...

    def connect(self, start: ConnectionSite, end: ConnectionSite, line_style: LineStyle) -> ConnectorHandle: ...

    def get_connector_ends(self, connector: ConnectorHandle) -> tuple[NodeHandle, NodeHandle]: ...

    def remove_connector(self, connector: ConnectorHandle) -> None: ...
    def copy_visual_style(self, source: NodeHandle, target: NodeHandle) -> None: ...

    def apply_style(self, handle: NodeHandle, style: StyleConfig) -> None: ...

    def get_label_text(self, handle: NodeHandle) -> str: ...

    def set_label_text(self, handle: NodeHandle, text: str) -> None: ...

    def get_metadata(self, handle: NodeHandle, key: str) -> str | None: ...

    def set_metadata(self, handle: NodeHandle, key: str, value: str | None) -> None:
        """Store ``value`` under ``key``; None removes the key."""
        ...

    def list_nodes_on_page(self) -> list[NodeHandle]: ...
