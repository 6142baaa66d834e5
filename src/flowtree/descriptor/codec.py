"""Encode/decode hierarchy descriptors and store them on canvas nodes."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor

from flowtree.descriptor.grammar import GRAMMAR
from flowtree.descriptor.types import ChildRef, Descriptor
from flowtree.errors import DescriptorError
from flowtree.logging import get_logger
from flowtree.types import Layout

if TYPE_CHECKING:
    from flowtree.canvas.base import CanvasAdapter, NodeHandle

logger = get_logger("descriptor.codec")

DESCRIPTOR_KEY = "flowtree.descriptor"

_grammar = Grammar(GRAMMAR)


def _collect(items: object, kind: type) -> Iterator:
    if isinstance(items, kind):
        yield items
    elif isinstance(items, list):
        for item in items:
            yield from _collect(item, kind)


class _DescriptorVisitor(NodeVisitor):
    def visit_descriptor(self, node, visited_children):
        _, ancestors, layout, node_id, children = visited_children
        return Descriptor(id=node_id, ancestors=ancestors, layout=layout, children=children)

    def visit_bracketed(self, node, visited_children):
        _, value, _ = visited_children
        return value

    visit_ancestors_part = visit_bracketed
    visit_layout_part = visit_bracketed
    visit_id_part = visit_bracketed
    visit_children_part = visit_bracketed

    def visit_ancestors(self, node, visited_children):
        return node.text.split("|") if node.text else []

    def visit_layout(self, node, visited_children):
        return Layout(node.text) if node.text else None

    def visit_layout_tag(self, node, visited_children):
        return Layout(node.text)

    def visit_children(self, node, visited_children):
        return list(_collect(visited_children, ChildRef))

    def visit_child(self, node, visited_children):
        node_id, tag = visited_children
        layouts = list(_collect(tag, Layout))
        return ChildRef(id=node_id, layout=layouts[0] if layouts else None)

    def visit_node_id(self, node, visited_children):
        return node.text

    def generic_visit(self, node, visited_children):
        return visited_children or node


def encode(descriptor: Descriptor) -> str:
    """Serialize a descriptor to its canonical text form."""
    ancestors = "|".join(descriptor.ancestors)
    layout = descriptor.layout.value if descriptor.layout is not None else ""
    children = ",".join(ref.encode() for ref in descriptor.children)
    return f"graph[{ancestors}][{layout}][{descriptor.id}][{children}]"


def decode_strict(text: str) -> Descriptor:
    """Parse descriptor text.

    Raises:
        DescriptorError: If the text does not match the grammar, or the node
            would be its own ancestor.
    """
    try:
        tree = _grammar.parse(text.strip())
    except ParseError as e:
        raise DescriptorError(f"Not a descriptor: {text!r} ({e})") from e
    descriptor = _DescriptorVisitor().visit(tree)
    chain = descriptor.ancestors
    if descriptor.id in chain or len(set(chain)) != len(chain):
        raise DescriptorError(f"Descriptor {text!r} lists a node as its own ancestor")
    return descriptor


def decode(text: str | None) -> Descriptor | None:
    """Parse descriptor text, returning None for anything that is not one."""
    if not text:
        return None
    try:
        return decode_strict(text)
    except DescriptorError as e:
        logger.debug("treating node as undecorated: %s", e)
        return None


# ─── Storage on canvas nodes ─────────────────────────────────────────────────


def read_descriptor(canvas: CanvasAdapter, handle: NodeHandle) -> Descriptor | None:
    return decode(canvas.get_metadata(handle, DESCRIPTOR_KEY))


def require_descriptor(canvas: CanvasAdapter, handle: NodeHandle) -> Descriptor:
    descriptor = read_descriptor(canvas, handle)
    if descriptor is None:
        raise DescriptorError(f"Node {handle} has no hierarchy descriptor; initialize it as a root first")
    return descriptor


def write_descriptor(canvas: CanvasAdapter, handle: NodeHandle, descriptor: Descriptor) -> None:
    canvas.set_metadata(handle, DESCRIPTOR_KEY, encode(descriptor))


def erase_descriptor(canvas: CanvasAdapter, handle: NodeHandle) -> str | None:
    """Remove the stored descriptor and return the text that was there."""
    previous = canvas.get_metadata(handle, DESCRIPTOR_KEY)
    canvas.set_metadata(handle, DESCRIPTOR_KEY, None)
    return previous
