"""Text renderers for canvas pages."""

from flowtree.renderers.ascii import AsciiRenderer, render_page
from flowtree.renderers.base import Renderer

__all__ = [
    "AsciiRenderer",
    "Renderer",
    "render_page",
]
