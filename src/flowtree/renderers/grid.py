"""Grid: 2D character cells that a page is painted onto."""

from __future__ import annotations

from dataclasses import dataclass

from flowtree.renderers.charset import Arms, BoxChars, CharSet


@dataclass
class Cell:
    """A position in the grid (column, row)."""

    col: int
    row: int


@dataclass
class Box:
    col: int
    row: int
    width: int
    height: int


class Grid:
    """A fixed-size character grid. Writes outside it are dropped."""

    def __init__(self, width: int, height: int, charset: CharSet) -> None:
        self.width = width
        self.height = height
        self.charset = charset
        self.cells: list[list[str]] = [[" "] * width for _ in range(height)]

    def _inside(self, col: int, row: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, col: int, row: int) -> str:
        return self.cells[row][col] if self._inside(col, row) else " "

    def set(self, col: int, row: int, c: str) -> None:
        if self._inside(col, row):
            self.cells[row][col] = c

    def set_merge(self, col: int, row: int, c: str) -> None:
        if not self._inside(col, row):
            return
        existing = Arms.from_char(self.cells[row][col])
        incoming = Arms.from_char(c)
        if existing is not None and incoming is not None:
            self.cells[row][col] = existing.merge(incoming).to_char(self.charset)
        else:
            self.cells[row][col] = c

    def hline(self, row: int, col1: int, col2: int, c: str) -> None:
        for col in range(min(col1, col2), max(col1, col2) + 1):
            self.set_merge(col, row, c)

    def vline(self, col: int, row1: int, row2: int, c: str) -> None:
        for row in range(min(row1, row2), max(row1, row2) + 1):
            self.set_merge(col, row, c)

    def draw_box(self, box: Box, bc: BoxChars) -> None:
        if box.width < 2 or box.height < 2:
            return
        c0, r0 = box.col, box.row
        c1, r1 = box.col + box.width - 1, box.row + box.height - 1
        for col in range(c0, c1 + 1):
            for row in range(r0, r1 + 1):
                self.set(col, row, " ")
        self.set(c0, r0, bc.top_left)
        self.set(c1, r0, bc.top_right)
        self.set(c0, r1, bc.bottom_left)
        self.set(c1, r1, bc.bottom_right)
        for col in range(c0 + 1, c1):
            self.set(col, r0, bc.horizontal)
            self.set(col, r1, bc.horizontal)
        for row in range(r0 + 1, r1):
            self.set(c0, row, bc.vertical)
            self.set(c1, row, bc.vertical)

    def write_str(self, col: int, row: int, s: str) -> None:
        for i, ch in enumerate(s):
            self.set(col + i, row, ch)

    def to_string(self) -> str:
        lines = ["".join(row).rstrip() for row in self.cells]
        return "\n".join(lines).rstrip("\n") + "\n"
