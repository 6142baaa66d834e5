"""Tests for flowtree.ops: child, sibling, link and root operations on a MemoryCanvas."""

import pytest

from flowtree.canvas.memory import MemoryCanvas
from flowtree.config import Gaps, LineStyle, StyleConfig
from flowtree.descriptor import ChildRef, Descriptor, read_descriptor, write_descriptor
from flowtree.errors import DescriptorError, GeometryError, SelectionError
from flowtree.ops import (
    connect_nodes,
    create_children,
    create_sibling,
    find_next_available_root_id,
    initialize_root,
    link_existing,
    update_connectors,
)
from flowtree.types import ArrowStyle, Layout, LineCategory, Orientation, ShapeKind, Side


def _make_root(left: float = 100, top: float = 100, width: float = 60, height: float = 20, **kw):
    canvas = MemoryCanvas()
    root = canvas.add_shape(left, top, width, height, **kw)
    initialize_root(canvas, [root])
    return canvas, root


def _ids(canvas: MemoryCanvas, handles) -> list[str]:
    return [read_descriptor(canvas, h).id for h in handles]


def _make_pasted_copy():
    """A1 with child B1, plus a later shape carrying B1's descriptor."""
    canvas, root = _make_root()
    [b1] = create_children(canvas, [root], Side.BOTTOM)
    copy = canvas.add_shape(300, 140, 60, 20)
    write_descriptor(canvas, copy, read_descriptor(canvas, b1))
    return canvas, root, b1, copy


class TestScenarios:
    def test_two_children_below_root(self):
        canvas, root = _make_root()
        handles = create_children(canvas, [root], Side.BOTTOM, count=2, gap=20)

        assert _ids(canvas, handles) == ["B1", "B2"]
        b1, b2 = (canvas.get_bounds(h) for h in handles)
        assert (b1.left, b1.top, b1.width, b1.height) == (60, 140, 60, 20)
        assert (b2.left, b2.top) == (140, 140)
        root_center = canvas.get_bounds(root).center_x
        assert root_center - b1.center_x == pytest.approx(b2.center_x - root_center)

        for handle in handles:
            [conn] = canvas.connectors_between(root, handle)
            assert conn.start_handle == root
            assert conn.start_index == 2  # BOTTOM on a 4-site rectangle
            assert conn.end_index == 0  # TOP

    def test_sibling_joins_group_and_recenters(self):
        canvas, root = _make_root()
        [b1] = create_children(canvas, [root], Side.BOTTOM, count=1, gap=20)
        assert canvas.get_bounds(b1).left == 100

        b2 = create_sibling(canvas, [b1], gaps=20)

        assert read_descriptor(canvas, b2).id == "B2"
        parent = read_descriptor(canvas, root)
        assert parent.children == [ChildRef("B1", Layout.TD), ChildRef("B2", Layout.TD)]
        assert canvas.get_bounds(b1).left == 60
        assert canvas.get_bounds(b2).left == 140
        assert canvas.get_bounds(b2).top == 140

    def test_level_overflow_does_not_raise(self):
        canvas = MemoryCanvas()
        z = canvas.add_shape(0, 0, 60, 20)
        write_descriptor(canvas, z, Descriptor("Z1"))
        [child] = create_children(canvas, [z], Side.RIGHT)
        assert read_descriptor(canvas, child).id == "AA1"

    def test_link_picks_shallower_node_as_parent(self):
        canvas, root = _make_root(left=0, top=0)
        loose = canvas.add_shape(200, 0, 60, 20)
        write_descriptor(canvas, loose, Descriptor("B1"))

        link_existing(canvas, [loose, root])

        assert read_descriptor(canvas, loose).ancestors == ["A1"]
        assert read_descriptor(canvas, loose).layout == Layout.LR
        assert read_descriptor(canvas, root).children == [ChildRef("B1", Layout.LR)]
        [conn] = canvas.connectors
        assert (conn.start_handle, conn.start_index) == (root, 3)  # RIGHT
        assert (conn.end_handle, conn.end_index) == (loose, 1)  # LEFT


class TestCreateChildren:
    def test_descriptors_written(self):
        canvas, root = _make_root()
        handles = create_children(canvas, [root], Side.RIGHT, count=2)
        root_d = read_descriptor(canvas, root)
        assert root_d.layout == Layout.LR
        assert root_d.child_ids() == ["B1", "B2"]
        for handle in handles:
            d = read_descriptor(canvas, handle)
            assert d.ancestors == ["A1"]
            assert d.layout == Layout.LR

    def test_second_batch_continues_numbering_and_recenters(self):
        canvas, root = _make_root(left=0, top=0, width=100, height=40)
        first = create_children(canvas, [root], Side.RIGHT, count=1, gap=20)
        second = create_children(canvas, [root], Side.RIGHT, count=2, gap=20)
        assert _ids(canvas, second) == ["B2", "B3"]
        tops = [canvas.get_bounds(h).top for h in first + second]
        assert tops == [-60, 0, 60]

    def test_groups_in_other_directions_untouched(self):
        canvas, root = _make_root(left=0, top=0, width=100, height=40)
        [right] = create_children(canvas, [root], Side.RIGHT, count=1)
        before = canvas.get_bounds(right)
        below = create_children(canvas, [root], Side.BOTTOM, count=2)
        assert canvas.get_bounds(right) == before
        assert _ids(canvas, below) == ["B2", "B3"]
        root_d = read_descriptor(canvas, root)
        assert root_d.children == [ChildRef("B1", Layout.LR), ChildRef("B2", Layout.TD), ChildRef("B3", Layout.TD)]
        assert root_d.layout == Layout.TD

    def test_grandchildren_get_next_level(self):
        canvas, root = _make_root()
        [b1] = create_children(canvas, [root], Side.BOTTOM)
        [c1] = create_children(canvas, [b1], Side.LEFT)
        d = read_descriptor(canvas, c1)
        assert d.id == "C1"
        assert d.ancestors == ["A1", "B1"]
        assert d.layout == Layout.RL

    def test_undecorated_anchor_becomes_root(self):
        canvas = MemoryCanvas()
        existing = canvas.add_shape(0, 0, 60, 20)
        write_descriptor(canvas, existing, Descriptor("A1"))
        plain = canvas.add_shape(300, 0, 60, 20)
        [child] = create_children(canvas, [plain], Side.TOP)
        assert read_descriptor(canvas, plain).id == "A2"
        assert read_descriptor(canvas, child).ancestors == ["A2"]

    def test_texts_set_labels_and_count(self):
        canvas, root = _make_root()
        handles = create_children(canvas, [root], Side.BOTTOM, count=5, texts=["North", "South"])
        assert [canvas.get_label_text(h) for h in handles] == ["North", "South"]

    def test_style_copied_from_parent(self):
        canvas, root = _make_root(kind=ShapeKind.ELLIPSE)
        canvas.apply_style(root, StyleConfig(fill_color="#FF0000"))
        [child] = create_children(canvas, [root], Side.RIGHT)
        assert canvas.shape(child).style.fill_color == "#FF0000"
        assert canvas.get_kind(child) == ShapeKind.ELLIPSE

    def test_explicit_style_wins(self):
        canvas, root = _make_root()
        canvas.apply_style(root, StyleConfig(fill_color="#FF0000"))
        [child] = create_children(canvas, [root], Side.RIGHT, style=StyleConfig(fill_color="#00FF00"))
        assert canvas.shape(child).style.fill_color == "#00FF00"

    def test_line_style_passed_to_connector(self):
        canvas, root = _make_root()
        style = LineStyle(start_arrow=ArrowStyle.FILL_CIRCLE, end_arrow=ArrowStyle.NONE)
        create_children(canvas, [root], Side.RIGHT, line_style=style)
        assert canvas.connectors[0].line_style == style

    def test_requires_single_selection(self):
        canvas, root = _make_root()
        other = canvas.add_shape(0, 0, 10, 10)
        with pytest.raises(SelectionError):
            create_children(canvas, [], Side.RIGHT)
        with pytest.raises(SelectionError):
            create_children(canvas, [root, other], Side.RIGHT)
        with pytest.raises(SelectionError):
            create_children(canvas, ["s99"], Side.RIGHT)

    def test_geometry_checked_before_any_mutation(self):
        canvas, root = _make_root()
        with pytest.raises(GeometryError):
            create_children(canvas, [root], Side.RIGHT, width=0)
        assert len(canvas.shapes) == 1
        assert canvas.connectors == []

    def test_duplicate_path_anchor_keeps_its_ancestry(self):
        canvas, root, b1, copy = _make_pasted_copy()
        with pytest.raises(DescriptorError, match="duplicate node path A1/B1"):
            create_children(canvas, [copy], Side.RIGHT)
        assert read_descriptor(canvas, copy).ancestors == ["A1"]
        assert len(canvas.shapes) == 3
        assert len(canvas.connectors) == 1


class TestCreateSibling:
    def test_root_has_no_siblings(self):
        canvas, root = _make_root()
        with pytest.raises(SelectionError):
            create_sibling(canvas, [root])

    def test_undecorated_anchor(self):
        canvas = MemoryCanvas()
        plain = canvas.add_shape(0, 0, 10, 10)
        with pytest.raises(DescriptorError):
            create_sibling(canvas, [plain])

    def test_duplicate_path_anchor(self):
        canvas, root, b1, copy = _make_pasted_copy()
        with pytest.raises(DescriptorError, match="duplicate node path"):
            create_sibling(canvas, [copy])
        assert read_descriptor(canvas, root).child_ids() == ["B1"]

    def test_missing_parent(self):
        canvas = MemoryCanvas()
        orphan = canvas.add_shape(0, 0, 10, 10)
        write_descriptor(canvas, orphan, Descriptor("B1", ["A1"], Layout.TD))
        with pytest.raises(DescriptorError):
            create_sibling(canvas, [orphan])

    def test_only_anchor_group_reflowed(self):
        canvas, root = _make_root(left=0, top=0, width=100, height=40)
        [right] = create_children(canvas, [root], Side.RIGHT)
        [below] = create_children(canvas, [root], Side.BOTTOM)
        right_before = canvas.get_bounds(right)

        new = create_sibling(canvas, [below], gaps=Gaps(horizontal=10, vertical=20))

        assert canvas.get_bounds(right) == right_before
        assert read_descriptor(canvas, new).id == "B3"
        assert [canvas.get_bounds(h).left for h in (below, new)] == [-55, 55]
        assert canvas.get_bounds(new).top == 60

    def test_number_skips_numbers_used_on_page(self):
        canvas, root = _make_root()
        [b1] = create_children(canvas, [root], Side.BOTTOM)
        stray = canvas.add_shape(0, 0, 60, 20)
        write_descriptor(canvas, stray, Descriptor("B7", ["A1"], Layout.TD))
        new = create_sibling(canvas, [b1])
        assert read_descriptor(canvas, new).id == "B8"

    def test_connector_uses_group_layout(self):
        canvas, root = _make_root()
        [b1] = create_children(canvas, [root], Side.LEFT)
        new = create_sibling(canvas, [b1])
        [conn] = canvas.connectors_between(root, new)
        assert conn.start_index == 1  # LEFT
        assert conn.end_index == 3  # RIGHT


class TestLinkExisting:
    def test_requires_descriptors(self):
        canvas, root = _make_root()
        plain = canvas.add_shape(0, 0, 10, 10)
        with pytest.raises(DescriptorError):
            link_existing(canvas, [root, plain])

    def test_requires_two_nodes(self):
        canvas, root = _make_root()
        with pytest.raises(SelectionError):
            link_existing(canvas, [root])
        with pytest.raises(SelectionError):
            link_existing(canvas, [root, root])

    def test_uses_parent_layout_when_set(self):
        canvas, root = _make_root(left=0, top=0)
        create_children(canvas, [root], Side.BOTTOM)
        loose = canvas.add_shape(300, 0, 60, 20)
        write_descriptor(canvas, loose, Descriptor("B5"))
        link_existing(canvas, [root, loose])
        assert read_descriptor(canvas, loose).layout == Layout.TD
        assert read_descriptor(canvas, root).child_ids() == ["B1", "B5"]

    def test_relink_moves_subtree(self):
        canvas = MemoryCanvas()
        a1 = canvas.add_shape(0, 0, 60, 20)
        a2 = canvas.add_shape(0, 200, 60, 20)
        initialize_root(canvas, [a1])
        initialize_root(canvas, [a2])
        [b1] = create_children(canvas, [a1], Side.RIGHT)
        [c1] = create_children(canvas, [b1], Side.RIGHT)

        link_existing(canvas, [b1, a2])

        assert read_descriptor(canvas, a1).children == []
        assert read_descriptor(canvas, a2).child_ids() == ["B1"]
        assert read_descriptor(canvas, b1).ancestors == ["A2"]
        assert read_descriptor(canvas, c1).ancestors == ["A2", "B1"]

    def test_refuses_cycle(self):
        canvas, root = _make_root()
        [b1] = create_children(canvas, [root], Side.RIGHT)
        nested = canvas.add_shape(0, 0, 60, 20)
        write_descriptor(canvas, nested, Descriptor("A5", ["A1", "B1"]))
        with pytest.raises(SelectionError):
            link_existing(canvas, [b1, nested])

    def test_refuses_duplicate_sibling_id(self):
        canvas = MemoryCanvas()
        a1 = canvas.add_shape(0, 0, 60, 20)
        a2 = canvas.add_shape(0, 200, 60, 20)
        initialize_root(canvas, [a1])
        initialize_root(canvas, [a2])
        create_children(canvas, [a1], Side.RIGHT)
        [other_b1] = create_children(canvas, [a2], Side.RIGHT)
        with pytest.raises(SelectionError):
            link_existing(canvas, [a1, other_b1])


class TestRoots:
    def test_first_root_is_a1(self):
        canvas = MemoryCanvas()
        assert find_next_available_root_id(canvas) == "A1"

    def test_smallest_unused_number(self):
        canvas = MemoryCanvas()
        for root_id in ("A1", "A3"):
            write_descriptor(canvas, canvas.add_shape(0, 0, 10, 10), Descriptor(root_id))
        assert find_next_available_root_id(canvas) == "A2"

    def test_initialize_root_never_collides(self):
        canvas = MemoryCanvas()
        write_descriptor(canvas, canvas.add_shape(0, 0, 10, 10), Descriptor("A1"))
        plain = canvas.add_shape(0, 0, 10, 10)
        assert initialize_root(canvas, [plain]).id == "A2"

    def test_initialize_existing_root_is_noop(self):
        canvas, root = _make_root()
        assert initialize_root(canvas, [root]).id == "A1"
        assert find_next_available_root_id(canvas) == "A2"

    def test_initialize_child_rejected(self):
        canvas, root = _make_root()
        [b1] = create_children(canvas, [root], Side.RIGHT)
        with pytest.raises(SelectionError):
            initialize_root(canvas, [b1])

    def test_initialize_duplicate_path_rejected(self):
        canvas, root, b1, copy = _make_pasted_copy()
        with pytest.raises(DescriptorError):
            initialize_root(canvas, [copy])
        assert read_descriptor(canvas, copy).ancestors == ["A1"]
        assert find_next_available_root_id(canvas) == "A2"


class TestConnectNodes:
    def test_horizontal_picks_facing_sides(self):
        canvas = MemoryCanvas()
        a = canvas.add_shape(200, 0, 60, 20)
        b = canvas.add_shape(0, 0, 60, 20)
        connect_nodes(canvas, [a, b], Orientation.HORIZONTAL)
        [conn] = canvas.connectors
        assert (conn.start_index, conn.end_index) == (1, 3)  # LEFT -> RIGHT

    def test_vertical_picks_facing_sides(self):
        canvas = MemoryCanvas()
        a = canvas.add_shape(0, 0, 60, 20)
        b = canvas.add_shape(0, 100, 60, 20)
        connect_nodes(canvas, [a, b], Orientation.VERTICAL)
        [conn] = canvas.connectors
        assert (conn.start_index, conn.end_index) == (2, 0)  # BOTTOM -> TOP

    def test_descriptors_untouched(self):
        canvas, root = _make_root()
        plain = canvas.add_shape(0, 0, 10, 10)
        connect_nodes(canvas, [root, plain])
        assert read_descriptor(canvas, plain) is None
        assert read_descriptor(canvas, root).children == []

    def test_orientation_follows_dominant_delta(self):
        canvas = MemoryCanvas()
        a = canvas.add_shape(0, 0, 60, 20)
        below = canvas.add_shape(30, 100, 60, 20)
        beside = canvas.add_shape(200, 30, 60, 20)
        connect_nodes(canvas, [a, below])
        connect_nodes(canvas, [a, beside])
        first, second = canvas.connectors
        assert (first.start_index, first.end_index) == (2, 0)  # BOTTOM -> TOP
        assert (second.start_index, second.end_index) == (3, 1)  # RIGHT -> LEFT


class TestUpdateConnectors:
    def test_restyles_between_same_nodes(self):
        canvas, root = _make_root()
        b1, b2 = create_children(canvas, [root], Side.BOTTOM, count=2)
        style = LineStyle(LineCategory.BENT, ArrowStyle.OPEN_ARROW, ArrowStyle.NONE)

        assert update_connectors(canvas, ["c1"], style) == ["c3"]

        assert [c.handle for c in canvas.connectors] == ["c2", "c3"]
        new = canvas.connectors[1]
        assert (new.start_handle, new.end_handle) == (root, b1)
        assert (new.start_index, new.end_index) == (2, 0)
        assert new.line_style == style

    def test_unknown_handle_changes_nothing(self):
        canvas, root = _make_root()
        create_children(canvas, [root], Side.BOTTOM, count=2)
        with pytest.raises(SelectionError):
            update_connectors(canvas, ["c1", "c9"], LineStyle())
        assert [c.handle for c in canvas.connectors] == ["c1", "c2"]

    def test_empty_or_repeated_selection(self):
        canvas, root = _make_root()
        create_children(canvas, [root], Side.BOTTOM)
        with pytest.raises(SelectionError):
            update_connectors(canvas, [], LineStyle())
        with pytest.raises(SelectionError):
            update_connectors(canvas, ["c1", "c1"], LineStyle())
