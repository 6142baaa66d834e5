"""ASCII/Unicode text renderer for a canvas page."""

from __future__ import annotations

from flowtree.canvas.memory import Connector, MemoryCanvas, Shape
from flowtree.config import RenderConfig
from flowtree.descriptor import read_descriptor
from flowtree.layout.types import Point, Rect
from flowtree.renderers.charset import BoxChars, CharSet
from flowtree.renderers.grid import Box, Cell, Grid
from flowtree.types import ArrowStyle, Side

MARGIN = 2


class _Scale:
    """Maps canvas points onto grid cells."""

    def __init__(self, shapes: list[Shape], config: RenderConfig) -> None:
        self.sx = config.scale_x
        self.sy = config.scale_y
        self.left = min(s.bounds.left for s in shapes)
        self.top = min(s.bounds.top for s in shapes)

    def col(self, x: float) -> int:
        return round((x - self.left) / self.sx) + MARGIN

    def row(self, y: float) -> int:
        return round((y - self.top) / self.sy) + MARGIN

    def box(self, r: Rect) -> Box:
        c0, r0 = self.col(r.left), self.row(r.top)
        width = max(self.col(r.right) - c0 + 1, 3)
        height = max(self.row(r.bottom) - r0 + 1, 3)
        return Box(c0, r0, width, height)


def _nearest_side(rect: Rect, p: Point) -> Side:
    distances = {
        Side.TOP: abs(p.y - rect.top),
        Side.BOTTOM: abs(p.y - rect.bottom),
        Side.LEFT: abs(p.x - rect.left),
        Side.RIGHT: abs(p.x - rect.right),
    }
    return min(distances, key=distances.__getitem__)


def _attach(box: Box, scale: _Scale, rect: Rect, p: Point) -> tuple[Cell, Side]:
    """The cell just outside ``box`` where a connector touching ``p`` starts."""
    side = _nearest_side(rect, p)
    col = min(max(scale.col(p.x), box.col + 1), box.col + box.width - 2)
    row = min(max(scale.row(p.y), box.row + 1), box.row + box.height - 2)
    if side == Side.TOP:
        return Cell(col, box.row - 1), side
    if side == Side.BOTTOM:
        return Cell(col, box.row + box.height), side
    if side == Side.LEFT:
        return Cell(box.col - 1, row), side
    return Cell(box.col + box.width, row), side


def _paint_path(grid: Grid, bc: BoxChars, start: Cell, start_side: Side, end: Cell, end_side: Side) -> None:
    if start_side.is_horizontal and end_side.is_horizontal:
        mid = (start.col + end.col) // 2
        grid.hline(start.row, start.col, mid, bc.horizontal)
        grid.vline(mid, start.row, end.row, bc.vertical)
        grid.hline(end.row, mid, end.col, bc.horizontal)
    elif not start_side.is_horizontal and not end_side.is_horizontal:
        mid = (start.row + end.row) // 2
        grid.vline(start.col, start.row, mid, bc.vertical)
        grid.hline(mid, start.col, end.col, bc.horizontal)
        grid.vline(end.col, mid, end.row, bc.vertical)
    elif start_side.is_horizontal:
        grid.hline(start.row, start.col, end.col, bc.horizontal)
        grid.vline(end.col, start.row, end.row, bc.vertical)
    else:
        grid.vline(start.col, start.row, end.row, bc.vertical)
        grid.hline(end.row, start.col, end.col, bc.horizontal)


class AsciiRenderer:
    """Renders a MemoryCanvas page to text.

    Connectors are drawn as orthogonal elbows between the sites they are
    attached to; nodes are drawn on top as boxes labelled with their label
    text, or their node id when the label is empty.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()
        self.charset = CharSet.Unicode if self.config.unicode else CharSet.Ascii

    def _label(self, canvas: MemoryCanvas, shape: Shape) -> str:
        if shape.label:
            return shape.label.splitlines()[0]
        if self.config.show_ids:
            descriptor = read_descriptor(canvas, shape.handle)
            if descriptor is not None:
                return descriptor.id
        return ""

    def render(self, canvas: MemoryCanvas) -> str:
        shapes = list(canvas.shapes.values())
        if not shapes:
            return ""

        scale = _Scale(shapes, self.config)
        boxes = {s.handle: scale.box(s.bounds) for s in shapes}
        width = max(b.col + b.width for b in boxes.values()) + MARGIN
        height = max(b.row + b.height for b in boxes.values()) + MARGIN
        grid = Grid(width, height, self.charset)
        bc = BoxChars.for_charset(self.charset)

        ends: list[tuple[Connector, Cell, Side, Cell, Side]] = []
        for conn in canvas.connectors:
            p_start, p_end = canvas.connector_points(conn)
            start_shape = canvas.shape(conn.start_handle)
            end_shape = canvas.shape(conn.end_handle)
            start, start_side = _attach(boxes[start_shape.handle], scale, start_shape.bounds, p_start)
            end, end_side = _attach(boxes[end_shape.handle], scale, end_shape.bounds, p_end)
            _paint_path(grid, bc, start, start_side, end, end_side)
            ends.append((conn, start, start_side, end, end_side))

        for shape in shapes:
            box = boxes[shape.handle]
            grid.draw_box(box, BoxChars.for_shape(shape.kind, self.charset))
            label = self._label(canvas, shape)[: box.width - 2]
            grid.write_str(box.col + 1 + (box.width - 2 - len(label)) // 2, box.row + box.height // 2, label)

        for conn, start, start_side, end, end_side in ends:
            if conn.line_style.end_arrow != ArrowStyle.NONE:
                grid.set(end.col, end.row, bc.arrow(end_side.opposite()))
            if conn.line_style.start_arrow != ArrowStyle.NONE:
                grid.set(start.col, start.row, bc.arrow(start_side.opposite()))

        return grid.to_string()


def render_page(canvas: MemoryCanvas, config: RenderConfig | None = None) -> str:
    return AsciiRenderer(config).render(canvas)
