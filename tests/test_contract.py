"""
Tests for the contract shared by every layout algorithm.
"""

import warnings
from pathlib import Path

import pytest

from canvas_layout import (
    ForceDirectedLayout,
    GraphStructureWarning,
    HierarchicalLayout,
    LayoutDirection,
    LayoutEdge,
    LayoutGraph,
    LayoutNode,
    LayoutOptions,
    Point,
    TreeLayout,
    all_presets,
    available_algorithms,
)

ALGORITHMS = [HierarchicalLayout, TreeLayout, ForceDirectedLayout]


def create_graph():
    """Create a small DAG with one pinned node."""
    nodes = [
        LayoutNode("a", (80, 40)),
        LayoutNode("b", (80, 40), pinned=(123.5, 456.25)),
        LayoutNode("c", (80, 40)),
        LayoutNode("d", (80, 40)),
    ]
    edges = [
        LayoutEdge("e1", "a", "b"),
        LayoutEdge("e2", "a", "c"),
        LayoutEdge("e3", "b", "d"),
        LayoutEdge("e4", "c", "d"),
    ]
    return nodes, edges


class TestLayoutGraph:
    """Tests for LayoutGraph."""

    def test_adjacency(self):
        """Test outgoing and incoming lists."""
        nodes, edges = create_graph()
        graph = LayoutGraph(nodes, edges)

        assert len(graph) == 4
        assert graph.node_ids == ["a", "b", "c", "d"]
        assert graph.outgoing["a"] == ["b", "c"]
        assert graph.incoming["d"] == ["b", "c"]

    def test_dangling_edges_dropped(self):
        """Test edges to unknown nodes are removed."""
        graph = LayoutGraph(
            [LayoutNode("a"), LayoutNode("b")],
            [LayoutEdge("e1", "a", "b"), LayoutEdge("e2", "a", "x"), LayoutEdge("e3", "y", "b")],
        )
        assert [e.id for e in graph.edges] == ["e1"]
        assert graph.outgoing["a"] == ["b"]


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
class TestLayoutContract:
    """Tests every algorithm must satisfy."""

    def test_empty_input(self, algorithm_class):
        """Test empty node list gives an empty result."""
        result = algorithm_class().layout([], [LayoutEdge("e", "a", "b")], (800, 600))
        assert dict(result.positions) == {}
        assert result.total_edge_length == 0.0
        assert result.compute_time >= 0.0

    def test_coverage(self, algorithm_class):
        """Test every input node gets exactly one position."""
        nodes, edges = create_graph()
        result = algorithm_class().layout(nodes, edges, (800, 600))
        assert set(result.positions) == {n.id for n in nodes}

    def test_pinned_exact(self, algorithm_class):
        """Test pinned nodes end exactly at their pinned position."""
        nodes, edges = create_graph()
        result = algorithm_class().layout(nodes, edges, (800, 600))
        assert result.positions["b"] == Point(123.5, 456.25)

    def test_deterministic(self, algorithm_class):
        """Test identical input gives identical output."""
        nodes, edges = create_graph()
        algorithm = algorithm_class()
        first = algorithm.layout(nodes, edges, (800, 600))
        second = algorithm.layout(nodes, edges, (800, 600))
        assert first.positions == second.positions
        assert first.layers == second.layers

    def test_dangling_edges_ignored(self, algorithm_class):
        """Test edges to unknown nodes do not affect coverage or metrics."""
        nodes, edges = create_graph()
        noisy = edges + [LayoutEdge("ghost", "a", "missing")]
        result = algorithm_class().layout(nodes, noisy, (800, 600))
        assert set(result.positions) == {n.id for n in nodes}

    def test_total_edge_length(self, algorithm_class):
        """Test total edge length is computed from final positions."""
        nodes, edges = create_graph()
        result = algorithm_class().layout(nodes, edges, (800, 600))
        pos = result.positions
        expected = sum(pos[e.from_id].distance_to(pos[e.to_id]) for e in edges)
        assert result.total_edge_length == pytest.approx(expected)

    def test_unknown_direction_warns(self, algorithm_class):
        """Test an unknown direction string falls back with a warning."""
        nodes, edges = create_graph()
        with pytest.warns(GraphStructureWarning, match="Unknown layout direction"):
            result = algorithm_class().layout(nodes, edges, (800, 600), "diagonal")
        assert len(result.positions) == 4

    def test_options_object(self, algorithm_class):
        """Test LayoutOptions and mappings give the same result."""
        nodes, edges = create_graph()
        algorithm = algorithm_class()
        from_mapping = algorithm.layout(nodes, edges, (800, 600), options={"nodeSpacing": 25})
        from_object = algorithm.layout(
            nodes, edges, (800, 600), options=LayoutOptions(node_spacing=25)
        )
        assert from_mapping.positions == from_object.positions

    def test_single_node(self, algorithm_class):
        """Test a single node is placed inside the bounds."""
        result = algorithm_class().layout([LayoutNode("only", (40, 40))], [], (400, 300))
        point = result.positions["only"]
        assert 0 <= point.x <= 400
        assert 0 <= point.y <= 300

    def test_compute_time(self, algorithm_class):
        """Test compute time is a non-negative number of seconds."""
        nodes, edges = create_graph()
        result = algorithm_class().layout(nodes, edges, (800, 600))
        assert 0.0 <= result.compute_time < 60.0


class TestPresetsTerminate:
    """Tests running every preset through every algorithm."""

    @pytest.mark.parametrize("preset", all_presets(), ids=lambda p: p.name)
    def test_full_coverage(self, preset):
        """Test every algorithm covers every preset node."""
        node_ids = {n.id for n in preset.nodes}
        for algorithm in available_algorithms():
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", GraphStructureWarning)
                result = algorithm.layout(preset.nodes, preset.edges, (1200, 800))
            assert set(result.positions) == node_ids, algorithm.name
            assert result.edge_crossings >= 0

    def test_diamond_layers(self):
        """Test layering of the diamond preset is stable."""
        preset = next(p for p in all_presets() if p.name == "Diamond")
        first = HierarchicalLayout().layout(preset.nodes, preset.edges, (800, 600))
        second = HierarchicalLayout().layout(preset.nodes, preset.edges, (800, 600))
        assert first.layers == second.layers
        assert first.layers[0] == ("top",)
        assert first.layers[-1] == ("bottom",)

    def test_force_iteration_bound(self):
        """Test the force simulation stops within its iteration budget."""
        preset = next(p for p in all_presets() if p.name == "Random Dense")
        result = ForceDirectedLayout(iterations=25).layout(preset.nodes, preset.edges, (800, 600))
        assert 1 <= result.iterations <= 25

    def test_directions_honoured(self):
        """Test layered layout differs between vertical and horizontal flow."""
        preset = next(p for p in all_presets() if p.name == "Simple DAG")
        ttb = HierarchicalLayout().layout(
            preset.nodes, preset.edges, (800, 600), LayoutDirection.TOP_TO_BOTTOM
        )
        ltr = HierarchicalLayout().layout(
            preset.nodes, preset.edges, (800, 600), LayoutDirection.LEFT_TO_RIGHT
        )
        assert ttb.positions != ltr.positions
        assert ttb.layers == ltr.layers


class TestPackaging:
    """Tests for project metadata."""

    def test_readme_is_user_documentation(self):
        """Test the package long description points at an existing README."""
        tomllib = pytest.importorskip("tomllib")
        root = Path(__file__).resolve().parent.parent
        with open(root / "pyproject.toml", "rb") as f:
            project = tomllib.load(f)["project"]

        assert project["readme"] == "README.md"
        assert (root / project["readme"]).is_file()
