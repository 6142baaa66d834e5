"""CLI entry point for flowtree.

Every command works on a JSON page file written by ``flowtree new``.
Nodes are named by shape handle (``s3``), node id (``B2``) or path (``A1/B2``).
"""

from __future__ import annotations

import functools
import sys
from pathlib import Path
from typing import NoReturn

import click

from flowtree.canvas.memory import MemoryCanvas
from flowtree.config import Gaps, LineStyle, RenderConfig
from flowtree.descriptor import read_descriptor
from flowtree.ir.tree import build_tree_index
from flowtree.logging import setup_logging
from flowtree.ops import (
    clear_descriptor,
    connect_nodes,
    create_children,
    create_sibling,
    describe_node,
    initialize_root,
    link_existing,
    select_ancestors,
    select_family,
    select_level,
    select_siblings,
    update_connectors,
)
from flowtree.renderers import AsciiRenderer, Renderer
from flowtree.types import ArrowStyle, LineCategory, Orientation, ShapeKind, Side

_SELECTORS = {
    "siblings": select_siblings,
    "level": select_level,
    "ancestors": select_ancestors,
    "family": select_family,
}


def _fail(message: str) -> NoReturn:
    click.echo(f"error: {message}", err=True)
    sys.exit(1)


def _load(page: str) -> MemoryCanvas:
    try:
        return MemoryCanvas.load(page)
    except OSError as e:
        _fail(f"cannot read '{page}': {e}")
    except ValueError as e:
        _fail(f"'{page}' is not a page file: {e}")


def _save(canvas: MemoryCanvas, page: str) -> None:
    try:
        canvas.save(page)
    except OSError as e:
        _fail(f"cannot write '{page}': {e}")


def _resolve(canvas: MemoryCanvas, ref: str) -> str:
    if ref in canvas.shapes:
        return ref
    index = build_tree_index(canvas)
    if "/" in ref:
        node = index.get(tuple(ref.split("/")))
        if node is None:
            _fail(f"no node at path '{ref}'")
        return node.handle
    matches = index.find(ref)
    if not matches:
        _fail(f"no shape or node named '{ref}'")
    if len(matches) > 1:
        paths = ", ".join("/".join(n.path) for n in matches)
        _fail(f"'{ref}' is ambiguous ({paths}); use a path or handle")
    return matches[0].handle


def _line_options(f):
    @click.option("--line", "line", type=click.Choice([c.name for c in LineCategory]), default="STRAIGHT")
    @click.option("--start-arrow", type=click.Choice([a.name for a in ArrowStyle]), default="NONE")
    @click.option("--end-arrow", type=click.Choice([a.name for a in ArrowStyle]), default="FILL_ARROW")
    @functools.wraps(f)
    def wrapper(*args, line: str, start_arrow: str, end_arrow: str, **kwargs):
        style = LineStyle(LineCategory[line], ArrowStyle[start_arrow], ArrowStyle[end_arrow])
        return f(*args, line_style=style, **kwargs)

    return wrapper


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool) -> None:
    """Build hierarchical diagrams on a canvas page."""
    if verbose:
        setup_logging("DEBUG")


@main.command()
@click.argument("page", type=click.Path())
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def new(page: str, force: bool) -> None:
    """Create an empty page file."""
    if Path(page).exists() and not force:
        _fail(f"'{page}' already exists; use --force to overwrite")
    _save(MemoryCanvas(), page)


@main.command("add-shape")
@click.argument("page", type=click.Path(exists=True))
@click.option("--kind", type=click.Choice([k.value for k in ShapeKind]), default=ShapeKind.default().value)
@click.option("--left", type=float, default=0.0)
@click.option("--top", type=float, default=0.0)
@click.option("--width", type=float, default=120.0)
@click.option("--height", type=float, default=40.0)
@click.option("--label", default="")
def add_shape(page: str, kind: str, left: float, top: float, width: float, height: float, label: str) -> None:
    """Add a plain shape and print its handle."""
    if width <= 0 or height <= 0:
        _fail("width and height must be positive")
    canvas = _load(page)
    handle = canvas.add_shape(left, top, width, height, kind=ShapeKind(kind), label=label)
    _save(canvas, page)
    click.echo(handle)


@main.command("init-root")
@click.argument("page", type=click.Path(exists=True))
@click.argument("node")
def init_root(page: str, node: str) -> None:
    """Make NODE the root of a new tree."""
    canvas = _load(page)
    try:
        descriptor = initialize_root(canvas, [_resolve(canvas, node)])
    except ValueError as e:
        _fail(str(e))
    _save(canvas, page)
    click.echo(descriptor.id)


@main.command("add-children")
@click.argument("page", type=click.Path(exists=True))
@click.argument("node")
@click.option("--direction", "-d", type=click.Choice([s.value for s in Side], case_sensitive=False), default="BOTTOM")
@click.option("--count", "-n", type=int, default=1)
@click.option("--gap", "-g", type=float, default=20.0)
@click.option("--width", type=float, default=None, help="Child width (default: parent width)")
@click.option("--height", type=float, default=None, help="Child height (default: parent height)")
@click.option("--text", "texts", multiple=True, help="Label for one child; repeat for several")
@_line_options
def add_children(
    page: str,
    node: str,
    direction: str,
    count: int,
    gap: float,
    width: float | None,
    height: float | None,
    texts: tuple[str, ...],
    line_style: LineStyle,
) -> None:
    """Create children of NODE on its DIRECTION side."""
    canvas = _load(page)
    try:
        handles = create_children(
            canvas,
            [_resolve(canvas, node)],
            Side(direction.upper()),
            count=count,
            gap=gap,
            width=width,
            height=height,
            texts=list(texts),
            line_style=line_style,
        )
    except ValueError as e:
        _fail(str(e))
    _save(canvas, page)
    for handle in handles:
        click.echo(f"{handle} {read_descriptor(canvas, handle).id}")


@main.command("add-sibling")
@click.argument("page", type=click.Path(exists=True))
@click.argument("node")
@click.option("--hgap", type=float, default=20.0)
@click.option("--vgap", type=float, default=20.0)
@click.option("--text", default=None)
@_line_options
def add_sibling(page: str, node: str, hgap: float, vgap: float, text: str | None, line_style: LineStyle) -> None:
    """Create a sibling of NODE."""
    canvas = _load(page)
    try:
        handle = create_sibling(
            canvas, [_resolve(canvas, node)], gaps=Gaps(hgap, vgap), text=text, line_style=line_style
        )
    except ValueError as e:
        _fail(str(e))
    _save(canvas, page)
    click.echo(f"{handle} {read_descriptor(canvas, handle).id}")


@main.command()
@click.argument("page", type=click.Path(exists=True))
@click.argument("first")
@click.argument("second")
@_line_options
def link(page: str, first: str, second: str, line_style: LineStyle) -> None:
    """Link two decorated nodes as parent and child."""
    canvas = _load(page)
    try:
        connector = link_existing(
            canvas, [_resolve(canvas, first), _resolve(canvas, second)], line_style=line_style
        )
    except ValueError as e:
        _fail(str(e))
    _save(canvas, page)
    click.echo(connector)


@main.command()
@click.argument("page", type=click.Path(exists=True))
@click.argument("first")
@click.argument("second")
@click.option("--orientation", type=click.Choice(["auto", *(o.value for o in Orientation)]), default="auto")
@_line_options
def connect(page: str, first: str, second: str, orientation: str, line_style: LineStyle) -> None:
    """Draw a connector between two shapes."""
    canvas = _load(page)
    try:
        connector = connect_nodes(
            canvas,
            [_resolve(canvas, first), _resolve(canvas, second)],
            None if orientation == "auto" else Orientation(orientation),
            line_style=line_style,
        )
    except ValueError as e:
        _fail(str(e))
    _save(canvas, page)
    click.echo(connector)


@main.command()
@click.argument("page", type=click.Path(exists=True))
@click.argument("connectors", nargs=-1, required=True)
@_line_options
def restyle(page: str, connectors: tuple[str, ...], line_style: LineStyle) -> None:
    """Re-create CONNECTORS with a new line style."""
    canvas = _load(page)
    try:
        created = update_connectors(canvas, list(connectors), line_style)
    except ValueError as e:
        _fail(str(e))
    _save(canvas, page)
    for handle in created:
        click.echo(handle)


@main.command()
@click.argument("page", type=click.Path(exists=True))
@click.argument("node")
def show(page: str, node: str) -> None:
    """Describe the descriptor stored on NODE."""
    canvas = _load(page)
    click.echo(describe_node(canvas, _resolve(canvas, node)))


@main.command()
@click.argument("page", type=click.Path(exists=True))
@click.argument("node")
def clear(page: str, node: str) -> None:
    """Remove the descriptor from NODE."""
    canvas = _load(page)
    try:
        previous = clear_descriptor(canvas, [_resolve(canvas, node)])
    except ValueError as e:
        _fail(str(e))
    _save(canvas, page)
    click.echo(f"cleared {previous}")


@main.command()
@click.argument("page", type=click.Path(exists=True))
@click.argument("node")
@click.option("--mode", "-m", type=click.Choice(list(_SELECTORS)), default="siblings")
def select(page: str, node: str, mode: str) -> None:
    """Print the handles related to NODE."""
    canvas = _load(page)
    try:
        handles = _SELECTORS[mode](canvas, [_resolve(canvas, node)])
    except ValueError as e:
        _fail(str(e))
    for handle in handles:
        click.echo(handle)


@main.command("list")
@click.argument("page", type=click.Path(exists=True))
def list_shapes(page: str) -> None:
    """List every shape with its path and bounds."""
    canvas = _load(page)
    index = build_tree_index(canvas)
    for handle in canvas.list_nodes_on_page():
        node = index.node_for_handle(handle)
        path = "/".join(node.path) if node is not None else "-"
        b = canvas.get_bounds(handle)
        click.echo(f"{handle}\t{path}\t{b.left:g},{b.top:g} {b.width:g}x{b.height:g}")


@main.command()
@click.argument("page", type=click.Path(exists=True))
@click.option("--ascii", "-a", "use_ascii", is_flag=True, help="Use plain ASCII instead of Unicode")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
def render(page: str, use_ascii: bool, output: str | None) -> None:
    """Draw the page as text."""
    canvas = _load(page)
    renderer: Renderer = AsciiRenderer(RenderConfig(unicode=not use_ascii))
    rendered = renderer.render(canvas)
    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            _fail(f"cannot write '{output}': {e}")
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
