"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from flowtree.canvas.memory import MemoryCanvas


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, canvas: MemoryCanvas) -> str:
        """Render a page to an output string."""
        ...
