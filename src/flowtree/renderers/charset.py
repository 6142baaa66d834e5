"""Box-drawing character sets and junction merging."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from flowtree.types import ShapeKind, Side


class CharSet(Enum):
    Unicode = "unicode"
    Ascii = "ascii"


@dataclass
class BoxChars:
    """Glyphs for one character set.

    Field order matters: the two constructors below pass them positionally,
    corners first, then straight lines, junctions and arrowheads.
    """

    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    tee_right: str
    tee_left: str
    tee_down: str
    tee_up: str
    cross: str
    arrow_right: str
    arrow_left: str
    arrow_down: str
    arrow_up: str

    @classmethod
    def unicode(cls) -> BoxChars:
        return cls(*"┌┐└┘─│├┤┬┴┼►◄▼▲")

    @classmethod
    def ascii(cls) -> BoxChars:
        return cls(*"++++-|+++++><v^")

    @classmethod
    def for_charset(cls, cs: CharSet) -> BoxChars:
        return cls.unicode() if cs == CharSet.Unicode else cls.ascii()

    @classmethod
    def for_shape(cls, kind: ShapeKind, cs: CharSet) -> BoxChars:
        """Round shapes get rounded (or parenthesised) corners."""
        bc = cls.for_charset(cs)
        if kind not in (ShapeKind.ROUND_RECTANGLE, ShapeKind.ELLIPSE, ShapeKind.CLOUD):
            return bc
        corners = "╭╮╰╯" if cs == CharSet.Unicode else "()()"
        return replace(bc, **dict(zip(("top_left", "top_right", "bottom_left", "bottom_right"), corners)))

    def arrow(self, pointing: Side) -> str:
        return getattr(self, f"arrow_{_ARROW_NAMES[pointing]}")


_ARROW_NAMES = {Side.RIGHT: "right", Side.LEFT: "left", Side.BOTTOM: "down", Side.TOP: "up"}


@dataclass(frozen=True)
class Arms:
    """Which arms of a junction cell are active."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_char(cls, c: str) -> Arms | None:
        """Arms of a line glyph from either set; None for anything else."""
        return _GLYPH_ARMS.get(c)

    def merge(self, other: Arms) -> Arms:
        return Arms(
            self.up or other.up,
            self.down or other.down,
            self.left or other.left,
            self.right or other.right,
        )

    def to_char(self, cs: CharSet) -> str:
        bc = BoxChars.for_charset(cs)
        if not (self.left or self.right):
            return bc.vertical if self.up or self.down else " "
        if not (self.up or self.down):
            return bc.horizontal
        for name, arms in _JUNCTIONS.items():
            if arms == self:
                return getattr(bc, name)
        return bc.cross


_JUNCTIONS: dict[str, Arms] = {
    "horizontal": Arms(left=True, right=True),
    "vertical": Arms(up=True, down=True),
    "top_left": Arms(down=True, right=True),
    "top_right": Arms(down=True, left=True),
    "bottom_left": Arms(up=True, right=True),
    "bottom_right": Arms(up=True, left=True),
    "tee_right": Arms(up=True, down=True, right=True),
    "tee_left": Arms(up=True, down=True, left=True),
    "tee_down": Arms(down=True, left=True, right=True),
    "tee_up": Arms(up=True, left=True, right=True),
    "cross": Arms(up=True, down=True, left=True, right=True),
}

_GLYPH_ARMS: dict[str, Arms] = {getattr(BoxChars.unicode(), name): arms for name, arms in _JUNCTIONS.items()}
_GLYPH_ARMS.update({"-": _JUNCTIONS["horizontal"], "|": _JUNCTIONS["vertical"], "+": _JUNCTIONS["cross"]})
