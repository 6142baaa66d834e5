"""Tests for flowtree.ir.tree: building the per-operation tree index from a page."""

from flowtree.canvas.memory import MemoryCanvas
from flowtree.descriptor import ChildRef, Descriptor, write_descriptor
from flowtree.ir.tree import build_tree_index
from flowtree.types import Layout


def _decorated(canvas: MemoryCanvas, descriptor: Descriptor, left: float = 0, top: float = 0) -> str:
    handle = canvas.add_shape(left, top, 60, 20)
    write_descriptor(canvas, handle, descriptor)
    return handle


def _make_page() -> tuple[MemoryCanvas, dict[str, str]]:
    """Two trees: A1 -> (B1 -> C1, B2, B3 on the right) and A2 -> B1, plus one plain shape."""
    canvas = MemoryCanvas()
    h = {}
    h["A1"] = _decorated(
        canvas,
        Descriptor(
            "A1",
            layout=Layout.LR,
            children=[ChildRef("B1", Layout.TD), ChildRef("B2", Layout.TD), ChildRef("B3", Layout.LR)],
        ),
    )
    h["A1/B1"] = _decorated(canvas, Descriptor("B1", ["A1"], Layout.TD, [ChildRef("C1", Layout.TD)]))
    h["A1/B2"] = _decorated(canvas, Descriptor("B2", ["A1"], Layout.TD))
    h["A1/B3"] = _decorated(canvas, Descriptor("B3", ["A1"], Layout.LR))
    h["A1/B1/C1"] = _decorated(canvas, Descriptor("C1", ["A1", "B1"], Layout.TD))
    h["A2"] = _decorated(canvas, Descriptor("A2", layout=Layout.TD, children=[ChildRef("B1", Layout.TD)]))
    h["A2/B1"] = _decorated(canvas, Descriptor("B1", ["A2"], Layout.TD))
    h["plain"] = canvas.add_shape(0, 0, 10, 10, label="note")
    return canvas, h


class TestBuild:
    def test_counts(self):
        canvas, h = _make_page()
        index = build_tree_index(canvas)
        assert len(index) == 7
        assert index.undecorated == [h["plain"]]

    def test_is_forest(self):
        canvas, _ = _make_page()
        assert build_tree_index(canvas).is_forest()

    def test_empty_page(self):
        index = build_tree_index(MemoryCanvas())
        assert len(index) == 0
        assert index.is_forest()

    def test_nodes_keyed_by_path(self):
        canvas, h = _make_page()
        index = build_tree_index(canvas)
        assert index.get(("A1", "B1")).handle == h["A1/B1"]
        assert index.get(("A2", "B1")).handle == h["A2/B1"]
        assert ("A1", "B1") in index
        assert index.get(("A9",)) is None

    def test_find_returns_every_match(self):
        canvas, h = _make_page()
        index = build_tree_index(canvas)
        assert [n.handle for n in index.find("B1")] == [h["A1/B1"], h["A2/B1"]]

    def test_index_reflects_latest_page_state(self):
        canvas, h = _make_page()
        before = build_tree_index(canvas)
        write_descriptor(canvas, h["plain"], Descriptor("A3"))
        after = build_tree_index(canvas)
        assert len(before) == 7
        assert len(after) == 8

    def test_duplicate_path_keeps_first(self):
        canvas, h = _make_page()
        _decorated(canvas, Descriptor("B2", ["A1"]))
        index = build_tree_index(canvas)
        assert index.get(("A1", "B2")).handle == h["A1/B2"]


class TestTopology:
    def test_parent_of(self):
        canvas, h = _make_page()
        index = build_tree_index(canvas)
        c1 = index.node_for_handle(h["A1/B1/C1"])
        assert index.parent_of(c1).handle == h["A1/B1"]
        assert index.parent_of(index.node_for_handle(h["A1"])) is None

    def test_children_of_and_groups(self):
        canvas, h = _make_page()
        index = build_tree_index(canvas)
        a1 = index.node_for_handle(h["A1"])
        assert [c.id for c in index.children_of(a1)] == ["B1", "B2", "B3"]
        assert [c.id for c in index.children_of(a1, Layout.TD)] == ["B1", "B2"]
        assert [c.id for c in index.children_of(a1, Layout.LR)] == ["B3"]

    def test_siblings_include_node(self):
        canvas, h = _make_page()
        index = build_tree_index(canvas)
        b2 = index.node_for_handle(h["A1/B2"])
        assert [n.handle for n in index.siblings_of(b2)] == [h["A1/B1"], h["A1/B2"], h["A1/B3"]]

    def test_level_members_span_trees(self):
        canvas, _ = _make_page()
        index = build_tree_index(canvas)
        assert ["/".join(n.path) for n in index.level_members("B")] == ["A1/B1", "A1/B2", "A1/B3", "A2/B1"]

    def test_ancestors_root_first(self):
        canvas, h = _make_page()
        index = build_tree_index(canvas)
        c1 = index.node_for_handle(h["A1/B1/C1"])
        assert [n.id for n in index.ancestors_of(c1)] == ["A1", "B1"]

    def test_descendants_depth_first(self):
        canvas, h = _make_page()
        index = build_tree_index(canvas)
        a1 = index.node_for_handle(h["A1"])
        assert ["/".join(n.path) for n in index.descendants_of(a1)] == ["A1/B1", "A1/B1/C1", "A1/B2", "A1/B3"]

    def test_roots_and_orphans(self):
        canvas, _ = _make_page()
        _decorated(canvas, Descriptor("C4", ["A7", "B2"]))
        index = build_tree_index(canvas)
        assert [n.id for n in index.roots()] == ["A1", "A2"]
        assert [n.id for n in index.orphans()] == ["C4"]

    def test_used_root_numbers(self):
        canvas, _ = _make_page()
        assert build_tree_index(canvas).used_root_numbers() == {1, 2}
