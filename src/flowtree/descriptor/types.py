"""Descriptor data types."""

from __future__ import annotations

from dataclasses import dataclass, field

from flowtree.ids import level_of, number_of
from flowtree.types import Layout


@dataclass(frozen=True)
class ChildRef:
    """One entry of a node's children list."""

    id: str
    layout: Layout | None = None

    def encode(self) -> str:
        if self.layout is None:
            return self.id
        return f"{self.id}:{self.layout.value}"


@dataclass
class Descriptor:
    """The persistent hierarchy record stored on every decorated node."""

    id: str
    ancestors: list[str] = field(default_factory=list)
    layout: Layout | None = None
    children: list[ChildRef] = field(default_factory=list)

    @property
    def parent_id(self) -> str | None:
        return self.ancestors[-1] if self.ancestors else None

    @property
    def is_root(self) -> bool:
        return not self.ancestors

    @property
    def level(self) -> str:
        return level_of(self.id)

    @property
    def number(self) -> int:
        return number_of(self.id)

    @property
    def path(self) -> tuple[str, ...]:
        """Ancestors plus own id; unique across a page."""
        return (*self.ancestors, self.id)

    def child_ids(self) -> list[str]:
        return [c.id for c in self.children]

    def child_ref(self, child_id: str) -> ChildRef | None:
        for ref in self.children:
            if ref.id == child_id:
                return ref
        return None

    def add_child(self, ref: ChildRef) -> bool:
        """Append ``ref`` unless a child with the same id is already listed."""
        if self.child_ref(ref.id) is not None:
            return False
        self.children.append(ref)
        return True

    def remove_child(self, child_id: str) -> bool:
        before = len(self.children)
        self.children = [c for c in self.children if c.id != child_id]
        return len(self.children) != before
