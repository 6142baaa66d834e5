"""Canvas adapter protocol and the in-memory reference adapter."""

from flowtree.canvas.base import CanvasAdapter, ConnectionSite, ConnectorHandle, NodeHandle
from flowtree.canvas.memory import Connector, MemoryCanvas, Shape

__all__ = [
    "CanvasAdapter",
    "ConnectionSite",
    "Connector",
    "ConnectorHandle",
    "MemoryCanvas",
    "NodeHandle",
    "Shape",
]
