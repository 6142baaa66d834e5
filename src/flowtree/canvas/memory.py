"""In-memory canvas adapter with JSON persistence.

A page is an ordered collection of shapes and connectors. Connectors hold
(shape handle, site index) endpoints so they follow shapes when the
layout engine moves them.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path

from flowtree.canvas.base import ConnectionSite
from flowtree.config import LineStyle, StyleConfig
from flowtree.layout.types import Point, Rect
from flowtree.logging import get_logger
from flowtree.types import ArrowStyle, LineCategory, ShapeKind

logger = get_logger("canvas.memory")

FORMAT_VERSION = 1


def _site_points(kind: ShapeKind, r: Rect) -> list[Point]:
    """Attachment points in the order the shape kind exposes them."""
    if kind in (ShapeKind.RECTANGLE, ShapeKind.ROUND_RECTANGLE):
        return [
            Point(r.center_x, r.top),
            Point(r.left, r.center_y),
            Point(r.center_x, r.bottom),
            Point(r.right, r.center_y),
        ]
    if kind == ShapeKind.ELLIPSE:
        # counter-clockwise from the top-right, 45 degrees apart
        points = []
        for k in range(8):
            angle = math.radians(45 * (k + 1))
            points.append(
                Point(
                    r.center_x + r.width / 2 * math.cos(angle),
                    r.center_y - r.height / 2 * math.sin(angle),
                )
            )
        return points
    if kind == ShapeKind.TEXT_BOX:
        return [Point(r.right, r.center_y), Point(r.left, r.center_y)]
    return [Point(r.center_x, r.top)]


@dataclass
class Shape:
    handle: str
    kind: ShapeKind
    bounds: Rect
    label: str = ""
    style: StyleConfig = field(default_factory=StyleConfig)
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class Connector:
    handle: str
    start_handle: str
    start_index: int
    end_handle: str
    end_index: int
    line_style: LineStyle = field(default_factory=LineStyle)


class MemoryCanvas:
    """A single page of shapes held in memory."""

    def __init__(self) -> None:
        self.shapes: dict[str, Shape] = {}
        self.connectors: list[Connector] = []
        self._next_shape = 1
        self._next_connector = 1

    def _shape(self, handle: object) -> Shape:
        try:
            return self.shapes[handle]  # type: ignore[index]
        except KeyError:
            raise KeyError(f"No shape with handle {handle!r} on this page") from None

    # ─── Convenience ─────────────────────────────────────────────────────────

    def add_shape(
        self,
        left: float,
        top: float,
        width: float,
        height: float,
        kind: ShapeKind = ShapeKind.RECTANGLE,
        label: str = "",
    ) -> str:
        handle = self.create_node(kind, Rect(left, top, width, height))
        if label:
            self.set_label_text(handle, label)
        return handle

    def shape(self, handle: str) -> Shape:
        return self._shape(handle)

    def connector_points(self, connector: Connector) -> tuple[Point, Point]:
        start = self.get_connection_site_point(connector.start_handle, connector.start_index)
        end = self.get_connection_site_point(connector.end_handle, connector.end_index)
        return start.point, end.point

    def connectors_between(self, a: str, b: str) -> list[Connector]:
        return [c for c in self.connectors if {c.start_handle, c.end_handle} == {a, b}]

    # ─── CanvasAdapter ───────────────────────────────────────────────────────

    def create_node(self, kind: ShapeKind, bounds: Rect) -> str:
        handle = f"s{self._next_shape}"
        self._next_shape += 1
        self.shapes[handle] = Shape(handle=handle, kind=kind, bounds=bounds)
        logger.debug("created %s %s at %s", kind.value, handle, bounds)
        return handle

    def get_kind(self, handle: object) -> ShapeKind:
        return self._shape(handle).kind

    def get_bounds(self, handle: object) -> Rect:
        return self._shape(handle).bounds

    def set_bounds(self, handle: object, rect: Rect) -> None:
        self._shape(handle).bounds = rect

    def get_connection_site_count(self, handle: object) -> int:
        shape = self._shape(handle)
        return len(_site_points(shape.kind, shape.bounds))

    def get_connection_site_point(self, handle: object, index: int) -> ConnectionSite:
        shape = self._shape(handle)
        points = _site_points(shape.kind, shape.bounds)
        if not 0 <= index < len(points):
            raise IndexError(f"Shape {shape.handle} has no connection site {index}")
        return ConnectionSite(handle=shape.handle, index=index, point=points[index])

    def connect(self, start: ConnectionSite, end: ConnectionSite, line_style: LineStyle) -> str:
        handle = f"c{self._next_connector}"
        self._next_connector += 1
        self.connectors.append(
            Connector(
                handle=handle,
                start_handle=self._shape(start.handle).handle,
                start_index=start.index,
                end_handle=self._shape(end.handle).handle,
                end_index=end.index,
                line_style=replace(line_style),
            )
        )
        return handle

    def _connector(self, handle: object) -> Connector:
        for connector in self.connectors:
            if connector.handle == handle:
                return connector
        raise KeyError(f"No connector with handle {handle!r} on this page")

    def get_connector_ends(self, connector: object) -> tuple[str, str]:
        found = self._connector(connector)
        return found.start_handle, found.end_handle

    def remove_connector(self, connector: object) -> None:
        self.connectors.remove(self._connector(connector))

    def copy_visual_style(self, source: object, target: object) -> None:
        self._shape(target).style = replace(self._shape(source).style)

    def apply_style(self, handle: object, style: StyleConfig) -> None:
        self._shape(handle).style = replace(style)

    def get_label_text(self, handle: object) -> str:
        return self._shape(handle).label

    def set_label_text(self, handle: object, text: str) -> None:
        self._shape(handle).label = text

    def get_metadata(self, handle: object, key: str) -> str | None:
        return self._shape(handle).metadata.get(key)

    def set_metadata(self, handle: object, key: str, value: str | None) -> None:
        metadata = self._shape(handle).metadata
        if value is None:
            metadata.pop(key, None)
        else:
            metadata[key] = value

    def list_nodes_on_page(self) -> list[str]:
        return list(self.shapes)

    # ─── Persistence ─────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "version": FORMAT_VERSION,
            "shapes": [
                {
                    "handle": s.handle,
                    "kind": s.kind.value,
                    "bounds": asdict(s.bounds),
                    "label": s.label,
                    "style": asdict(s.style),
                    "metadata": dict(s.metadata),
                }
                for s in self.shapes.values()
            ],
            "connectors": [
                {
                    "handle": c.handle,
                    "start": {"handle": c.start_handle, "index": c.start_index},
                    "end": {"handle": c.end_handle, "index": c.end_index},
                    "line": {
                        "category": c.line_style.category.name,
                        "start_arrow": c.line_style.start_arrow.name,
                        "end_arrow": c.line_style.end_arrow.name,
                    },
                }
                for c in self.connectors
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> MemoryCanvas:
        """Rebuild a page from ``to_dict`` output.

        Raises:
            ValueError: If the data is not a page of a supported version.
        """
        if not isinstance(data, dict) or data.get("version") != FORMAT_VERSION:
            raise ValueError(f"Unsupported page format (expected version {FORMAT_VERSION})")
        canvas = cls()
        try:
            for raw in data.get("shapes", []):
                shape = Shape(
                    handle=raw["handle"],
                    kind=ShapeKind(raw["kind"]),
                    bounds=Rect(**raw["bounds"]),
                    label=raw.get("label", ""),
                    style=StyleConfig(**raw.get("style", {})),
                    metadata=dict(raw.get("metadata", {})),
                )
                canvas.shapes[shape.handle] = shape
            for raw in data.get("connectors", []):
                line = raw.get("line", {})
                canvas.connectors.append(
                    Connector(
                        handle=raw["handle"],
                        start_handle=raw["start"]["handle"],
                        start_index=int(raw["start"]["index"]),
                        end_handle=raw["end"]["handle"],
                        end_index=int(raw["end"]["index"]),
                        line_style=LineStyle(
                            category=LineCategory[line.get("category", "STRAIGHT")],
                            start_arrow=ArrowStyle[line.get("start_arrow", "NONE")],
                            end_arrow=ArrowStyle[line.get("end_arrow", "FILL_ARROW")],
                        ),
                    )
                )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed page data: {e}") from e
        canvas._next_shape = _next_counter(canvas.shapes, "s")
        canvas._next_connector = _next_counter((c.handle for c in canvas.connectors), "c")
        return canvas

    def save(self, path: str | Path) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2) + "\n")

    @classmethod
    def load(cls, path: str | Path) -> MemoryCanvas:
        return cls.from_dict(json.loads(Path(path).read_text()))


def _next_counter(handles, prefix: str) -> int:
    numbers = [int(h[len(prefix):]) for h in handles if h.startswith(prefix) and h[len(prefix):].isdigit()]
    return max(numbers, default=0) + 1
