"""Descriptor inspection and removal."""

from __future__ import annotations

from collections.abc import Sequence

from flowtree.canvas.base import CanvasAdapter, NodeHandle
from flowtree.descriptor import DESCRIPTOR_KEY, decode, erase_descriptor
from flowtree.errors import DescriptorError
from flowtree.logging import get_logger
from flowtree.ops.common import require_single

logger = get_logger("ops.inspect")


def describe(text: str | None) -> str:
    """Human-readable breakdown of descriptor text."""
    if not text:
        return "Descriptor: (none)"
    descriptor = decode(text)
    if descriptor is None:
        return f"Descriptor: {text}\n└─ (not a valid descriptor)"
    children = ", ".join(ref.encode() for ref in descriptor.children) or "(none)"
    lines = [
        f"Descriptor: {text}",
        f"├─ Parent: {'|'.join(descriptor.ancestors) or '(root)'}",
        f"├─ Layout: {descriptor.layout.value if descriptor.layout else '(none)'}",
        f"├─ Current: {descriptor.id}",
        f"└─ Children: {children}",
    ]
    return "\n".join(lines)


def describe_node(canvas: CanvasAdapter, handle: NodeHandle) -> str:
    return describe(canvas.get_metadata(handle, DESCRIPTOR_KEY))


def clear_descriptor(canvas: CanvasAdapter, selection: Sequence[NodeHandle]) -> str:
    """Remove the descriptor from the selected node and return the removed text.

    Other nodes that reference it are left alone.

    Raises:
        DescriptorError: If the node has no descriptor to clear.
    """
    handle = require_single(canvas, selection)
    previous = erase_descriptor(canvas, handle)
    if previous is None:
        raise DescriptorError(f"Node {handle} has no descriptor to clear")
    logger.info("cleared descriptor of %s: %s", handle, previous)
    return previous
