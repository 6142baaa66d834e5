"""Node identifiers: level letters followed by a 1-based sibling number.

Level letters encode depth (roots are ``A``, their children ``B``, ...).
Past ``Z`` the letters continue in bijective base-26: ``Z -> AA -> AB``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

ROOT_LEVEL = "A"

_ID_RE = re.compile(r"^([A-Z]+)(\d+)$")
_LEVEL_RE = re.compile(r"^[A-Z]+$")


def _check_level(level: str) -> None:
    if not _LEVEL_RE.match(level):
        raise ValueError(f"Invalid level letters '{level}'")


def split_id(node_id: str) -> tuple[str, int]:
    """Split ``"AB12"`` into ``("AB", 12)``."""
    m = _ID_RE.match(node_id)
    if m is None:
        raise ValueError(f"Invalid node id '{node_id}'")
    return m.group(1), int(m.group(2))


def is_node_id(text: str) -> bool:
    m = _ID_RE.match(text)
    return m is not None and int(m.group(2)) > 0


def level_of(node_id: str) -> str:
    return split_id(node_id)[0]


def number_of(node_id: str) -> int:
    return split_id(node_id)[1]


def level_depth(level: str) -> int:
    """1-based depth of a level: A=1, Z=26, AA=27."""
    _check_level(level)
    depth = 0
    for ch in level:
        depth = depth * 26 + (ord(ch) - ord("A") + 1)
    return depth


def level_from_depth(depth: int) -> str:
    if depth < 1:
        raise ValueError(f"Level depth must be positive, got {depth}")
    letters: list[str] = []
    while depth > 0:
        depth, rem = divmod(depth - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


def next_level(level: str) -> str:
    """The level letters one step deeper: ``A -> B``, ``Z -> AA``, ``AZ -> BA``."""
    return level_from_depth(level_depth(level) + 1)


def next_sibling_number(level: str, existing_ids: Iterable[str]) -> int:
    """max(number of every id at ``level``) + 1, or 1 when there are none.

    Gaps left by missing numbers are never reused.
    """
    _check_level(level)
    pattern = re.compile(rf"^{level}(\d+)$")
    numbers = [int(m.group(1)) for m in map(pattern.match, existing_ids) if m]
    return max(numbers, default=0) + 1


def format_id(level: str, number: int) -> str:
    _check_level(level)
    if number < 1:
        raise ValueError(f"Sibling number must be positive, got {number}")
    return f"{level}{number}"
