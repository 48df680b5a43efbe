"""
Tests for the Reingold-Tilford tree layout.
"""

from collections import defaultdict

import pytest

from canvas_layout.hierarchical import TreeLayout
from canvas_layout.hierarchical.reingold_tilford import TreeArena
from canvas_layout.types import LayoutDirection, LayoutEdge, LayoutNode, Point, PortSide
from canvas_layout.validation import GraphStructureWarning

# =============================================================================
# Test Fixtures
# =============================================================================


def create_binary_tree(count=7):
    """Create a balanced binary tree n0..n{count-1}."""
    #        n0
    #       /  \
    #     n1    n2
    #    / \   /  \
    #   n3 n4 n5  n6
    nodes = [LayoutNode(f"n{i}", (60, 40)) for i in range(count)]
    edges = []
    for i in range(count):
        for child in (2 * i + 1, 2 * i + 2):
            if child < count:
                edges.append(LayoutEdge(f"e{i}_{child}", f"n{i}", f"n{child}"))
    return nodes, edges


def create_linear_tree():
    """Create a linear tree (linked list)."""
    nodes = [LayoutNode(i, (60, 40)) for i in "abc"]
    edges = [LayoutEdge("e1", "a", "b"), LayoutEdge("e2", "b", "c")]
    return nodes, edges


def create_fork():
    """Create a root with two children."""
    nodes = [LayoutNode(i, (60, 40)) for i in ("root", "left", "right")]
    edges = [LayoutEdge("e1", "root", "left"), LayoutEdge("e2", "root", "right")]
    return nodes, edges


def by_depth(result):
    """Group x coordinates by y coordinate (top-to-bottom layouts)."""
    levels = defaultdict(list)
    for point in result.positions.values():
        levels[round(point.y, 6)].append(point.x)
    return [sorted(levels[y]) for y in sorted(levels)]


# =============================================================================
# TreeLayout Tests
# =============================================================================


class TestTreeLayout:
    """Tests for TreeLayout."""

    def test_defaults(self):
        """Test default configuration."""
        layout = TreeLayout()
        assert layout.level_spacing == 80.0
        assert layout.sibling_spacing == 40.0
        assert layout.subtree_spacing == 20.0
        assert layout.name == "Tree"

    def test_linear_tree(self):
        """Test a chain is drawn as a straight centred column."""
        nodes, edges = create_linear_tree()
        result = TreeLayout().layout(nodes, edges, (800, 600))
        pos = result.positions

        assert pos["a"].x == pytest.approx(400)
        assert pos["b"].x == pytest.approx(400)
        assert pos["c"].x == pytest.approx(400)
        assert pos["b"].y - pos["a"].y == pytest.approx(80)
        assert pos["c"].y - pos["b"].y == pytest.approx(80)
        # Bounding box of the tree is centred vertically
        assert (pos["a"].y - 20 + pos["c"].y + 20) / 2 == pytest.approx(300)

    def test_parent_centered_over_children(self):
        """Test siblings are one node plus spacing apart with the parent between."""
        nodes, edges = create_fork()
        pos = TreeLayout().layout(nodes, edges, (800, 600)).positions

        assert pos["right"].x - pos["left"].x == pytest.approx(100)
        assert pos["root"].x == pytest.approx((pos["left"].x + pos["right"].x) / 2)
        assert pos["left"].y == pytest.approx(pos["right"].y)
        assert pos["left"].y > pos["root"].y

    def test_subtree_spacing(self):
        """Test cousins get the extra subtree gap, siblings do not."""
        nodes, edges = create_binary_tree(7)
        pos = TreeLayout().layout(nodes, edges, (800, 600)).positions

        assert pos["n4"].x - pos["n3"].x == pytest.approx(100)
        assert pos["n5"].x - pos["n4"].x == pytest.approx(120)
        assert pos["n6"].x - pos["n5"].x == pytest.approx(100)
        assert pos["n0"].x == pytest.approx((pos["n1"].x + pos["n2"].x) / 2)

    def test_binary_tree_no_overlap(self):
        """Test nodes at each level of a 15-node tree keep sibling spacing."""
        nodes, edges = create_binary_tree(15)
        result = TreeLayout().layout(nodes, edges, (1600, 600))

        assert len(set(result.positions.values())) == 15
        levels = by_depth(result)
        assert [len(level) for level in levels] == [1, 2, 4, 8]
        for xs in levels:
            for a, b in zip(xs, xs[1:]):
                assert b - a >= 60 + 40 - 1e-6

    def test_child_deeper_than_parent(self):
        """Test every edge points down the tree."""
        nodes, edges = create_binary_tree(15)
        pos = TreeLayout().layout(nodes, edges, (800, 600)).positions
        for edge in edges:
            assert pos[edge.to_id].y > pos[edge.from_id].y

    def test_unequal_sizes(self):
        """Test separation uses the sizes of neighbouring nodes."""
        nodes = [
            LayoutNode("root", (60, 40)),
            LayoutNode("wide", (100, 40)),
            LayoutNode("narrow", (20, 40)),
        ]
        edges = [LayoutEdge("e1", "root", "wide"), LayoutEdge("e2", "root", "narrow")]
        pos = TreeLayout().layout(nodes, edges, (800, 600)).positions
        assert pos["narrow"].x - pos["wide"].x == pytest.approx(60 + 40)

    def test_left_to_right(self):
        """Test horizontal trees grow along x and spread siblings on y."""
        nodes, edges = create_fork()
        result = TreeLayout().layout(nodes, edges, (800, 600), LayoutDirection.LEFT_TO_RIGHT)
        pos = result.positions

        assert pos["left"].x - pos["root"].x == pytest.approx(80)
        assert pos["right"].y - pos["left"].y == pytest.approx(40 + 40)
        assert result.entry_ports["root"] is PortSide.LEFT
        assert result.exit_ports["root"] is PortSide.RIGHT

    def test_vertical_ports(self):
        """Test top-to-bottom ports."""
        nodes, edges = create_fork()
        result = TreeLayout().layout(nodes, edges, (800, 600))
        assert set(result.entry_ports.values()) == {PortSide.TOP}
        assert set(result.exit_ports.values()) == {PortSide.BOTTOM}

    def test_unsupported_direction_warns(self):
        """Test reversed directions fall back to their axis with a warning."""
        nodes, edges = create_fork()
        with pytest.warns(GraphStructureWarning, match="does not support"):
            result = TreeLayout().layout(nodes, edges, (800, 600), "bottom-to-top")

        pos = result.positions
        assert pos["left"].y > pos["root"].y
        assert result.entry_ports["root"] is PortSide.TOP

    def test_right_to_left_stays_horizontal(self):
        """Test right-to-left is drawn left-to-right rather than vertically."""
        nodes, edges = create_fork()
        with pytest.warns(GraphStructureWarning, match="does not support"):
            result = TreeLayout().layout(nodes, edges, (800, 600), "right-to-left")

        pos = result.positions
        assert pos["left"].x - pos["root"].x == pytest.approx(80)
        assert pos["left"].y != pytest.approx(pos["right"].y)
        assert result.entry_ports["root"] is PortSide.LEFT
        assert result.exit_ports["root"] is PortSide.RIGHT

    def test_spacing_options(self):
        """Test layerSpacing and nodeSpacing overrides."""
        nodes, edges = create_fork()
        pos = (
            TreeLayout()
            .layout(nodes, edges, (800, 600), options={"layerSpacing": 50, "nodeSpacing": 10})
            .positions
        )
        assert pos["left"].y - pos["root"].y == pytest.approx(50)
        assert pos["right"].x - pos["left"].x == pytest.approx(70)

    def test_forest(self):
        """Test multiple roots are laid out side by side without overlap."""
        nodes = [LayoutNode(i, (60, 40)) for i in ("r1", "a", "r2", "b")]
        edges = [LayoutEdge("e1", "r1", "a"), LayoutEdge("e2", "r2", "b")]
        pos = TreeLayout().layout(nodes, edges, (800, 600)).positions

        assert pos["r1"].y == pytest.approx(pos["r2"].y)
        assert pos["r2"].x - pos["r1"].x >= 100
        assert pos["b"].x - pos["a"].x >= 100

    def test_dag_uses_first_parent(self):
        """Test nodes with several parents are placed once, below the first."""
        nodes = [LayoutNode(i, (60, 40)) for i in ("top", "left", "right", "center")]
        edges = [
            LayoutEdge("e1", "top", "left"),
            LayoutEdge("e2", "top", "right"),
            LayoutEdge("e3", "left", "center"),
            LayoutEdge("e4", "right", "center"),
        ]
        pos = TreeLayout().layout(nodes, edges, (800, 600)).positions

        assert set(pos) == {"top", "left", "right", "center"}
        assert pos["center"].y > pos["left"].y
        assert pos["center"].x == pytest.approx(pos["left"].x)

    def test_cycle_warns(self):
        """Test a graph without roots uses the first node as root."""
        nodes = [LayoutNode(i, (60, 40)) for i in "abc"]
        edges = [LayoutEdge("e1", "a", "b"), LayoutEdge("e2", "b", "c"), LayoutEdge("e3", "c", "a")]
        with pytest.warns(GraphStructureWarning, match="No root"):
            pos = TreeLayout().layout(nodes, edges, (800, 600)).positions

        assert pos["a"].y < pos["b"].y < pos["c"].y

    def test_unreached_nodes_promoted(self):
        """Test nodes unreachable from any root still get positions."""
        nodes = [LayoutNode(i, (60, 40)) for i in ("r", "c", "x", "y")]
        edges = [
            LayoutEdge("e1", "r", "c"),
            LayoutEdge("e2", "x", "y"),
            LayoutEdge("e3", "y", "x"),
        ]
        with pytest.warns(GraphStructureWarning, match="not reachable"):
            result = TreeLayout().layout(nodes, edges, (800, 600))

        assert set(result.positions) == {"r", "c", "x", "y"}
        assert len(set(result.positions.values())) == 4

    def test_pinned_override(self):
        """Test pinned nodes end at their pin while others are laid out."""
        nodes = [
            LayoutNode("root", (60, 40), pinned=(5, 5)),
            LayoutNode("a", (60, 40)),
            LayoutNode("b", (60, 40)),
        ]
        edges = [LayoutEdge("e1", "root", "a"), LayoutEdge("e2", "root", "b")]
        pos = TreeLayout().layout(nodes, edges, (800, 600)).positions

        assert pos["root"] == Point(5, 5)
        assert pos["b"].x - pos["a"].x == pytest.approx(100)


class TestTreeArena:
    """Tests for the arena used by the tree walks."""

    def test_super_root(self):
        """Test the arena starts with an unnamed virtual root."""
        arena = TreeArena(sibling_spacing=40, subtree_spacing=20)
        assert len(arena.records) == 1
        assert arena.records[arena.root].node_id is None
        assert arena.placed() == []

    def test_add_links_children(self):
        """Test children are numbered in insertion order."""
        arena = TreeArena(sibling_spacing=40, subtree_spacing=20)
        a = arena.add("a", 60, 0, arena.root)
        b = arena.add("b", 60, 0, arena.root)

        assert arena.records[arena.root].children == [a, b]
        assert arena.records[b].number == 1
        assert arena.left_sibling(b) == a
        assert arena.left_sibling(a) is None

    def test_separation(self):
        """Test centre distance is half of both extents plus spacing."""
        arena = TreeArena(sibling_spacing=40, subtree_spacing=20)
        a = arena.add("a", 100, 0, arena.root)
        b = arena.add("b", 20, 0, arena.root)
        assert arena.separation(a, b, 40) == pytest.approx(100)

    def test_deep_chain_iterative(self):
        """Test very deep trees do not hit the recursion limit."""
        depth = 3000
        nodes = [LayoutNode(f"n{i}", (10, 10)) for i in range(depth)]
        edges = [LayoutEdge(f"e{i}", f"n{i - 1}", f"n{i}") for i in range(1, depth)]
        result = TreeLayout(level_spacing=1).layout(nodes, edges, (100, 100))
        assert len(result.positions) == depth
