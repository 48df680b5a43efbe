"""Tests for layout quality metrics."""

import pytest

from canvas_layout.metrics import (
    count_layer_crossings,
    layout_quality_summary,
    total_edge_length,
)
from canvas_layout.types import LayoutEdge, LayoutResult, Point


class TestTotalEdgeLength:
    """Tests for total_edge_length."""

    def test_single_edge(self):
        """Test a 3-4-5 edge."""
        positions = {"a": Point(0, 0), "b": Point(3, 4)}
        assert total_edge_length(positions, [LayoutEdge("e", "a", "b")]) == pytest.approx(5.0)

    def test_sum_of_edges(self):
        """Test lengths are summed over all edges."""
        positions = {"a": Point(0, 0), "b": Point(10, 0), "c": Point(10, 10)}
        edges = [LayoutEdge("e1", "a", "b"), LayoutEdge("e2", "b", "c")]
        assert total_edge_length(positions, edges) == pytest.approx(20.0)

    def test_missing_endpoint_skipped(self):
        """Test edges to unknown nodes are ignored."""
        positions = {"a": Point(0, 0), "b": Point(0, 7)}
        edges = [LayoutEdge("e1", "a", "b"), LayoutEdge("e2", "a", "ghost")]
        assert total_edge_length(positions, edges) == pytest.approx(7.0)

    def test_no_edges(self):
        """Test zero length without edges."""
        assert total_edge_length({"a": Point(0, 0)}, []) == 0.0


class TestCountLayerCrossings:
    """Tests for count_layer_crossings."""

    def test_no_crossings(self):
        """Test parallel edges do not cross."""
        layers = [["a", "b"], ["c", "d"]]
        outgoing = {"a": ["c"], "b": ["d"]}
        assert count_layer_crossings(layers, outgoing) == 0

    def test_single_crossing(self):
        """Test swapped targets cross once."""
        layers = [["a", "b"], ["c", "d"]]
        outgoing = {"a": ["d"], "b": ["c"]}
        assert count_layer_crossings(layers, outgoing) == 1

    def test_complete_bipartite(self):
        """Test K2,2 between adjacent layers has exactly one crossing."""
        layers = [["a", "b"], ["c", "d"]]
        outgoing = {"a": ["c", "d"], "b": ["c", "d"]}
        assert count_layer_crossings(layers, outgoing) == 1

    def test_long_edges_ignored(self):
        """Test edges spanning more than one layer are not counted."""
        layers = [["a", "b"], ["c"], ["d", "e"]]
        outgoing = {"a": ["e"], "b": ["d"], "c": []}
        assert count_layer_crossings(layers, outgoing) == 0

    def test_empty(self):
        """Test no layers means no crossings."""
        assert count_layer_crossings([], {}) == 0


class TestLayoutQualitySummary:
    """Tests for layout_quality_summary."""

    def test_summary(self):
        """Test summary fields."""
        result = LayoutResult(
            positions={"a": Point(0, 0), "b": Point(0, 10), "c": Point(0, 30)},
            edge_crossings=2,
            total_edge_length=30.0,
            iterations=7,
            compute_time=0.25,
        )
        edges = [LayoutEdge("e1", "a", "b"), LayoutEdge("e2", "b", "c")]

        summary = layout_quality_summary(result, edges)

        assert summary["node_count"] == 3
        assert summary["edge_count"] == 2
        assert summary["edge_crossings"] == 2
        assert summary["total_edge_length"] == 30.0
        assert summary["mean_edge_length"] == pytest.approx(15.0)
        assert summary["iterations"] == 7
        assert summary["compute_time"] == 0.25

    def test_summary_no_edges(self):
        """Test mean edge length is zero without edges."""
        summary = layout_quality_summary(LayoutResult.empty(), [])
        assert summary["node_count"] == 0
        assert summary["mean_edge_length"] == 0.0
