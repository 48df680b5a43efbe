"""
Layout quality metrics.

Provides quantitative measures of layout quality:
- Total edge length: Sum of Euclidean edge lengths
- Layer crossings: Edge crossings between adjacent layers of a layered layout
- Quality summary: Combined report for a LayoutResult

All metrics work on node ids and final positions from any layout algorithm.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np

from .types import LayoutEdge, LayoutResult, Point


def total_edge_length(positions: Mapping[str, Point], edges: Sequence[LayoutEdge]) -> float:
    """
    Sum of Euclidean distances between connected node positions.

    Edges with an endpoint missing from ``positions`` are skipped.

    Args:
        positions: Node id -> position
        edges: Edges to measure

    Returns:
        Total edge length (0.0 when there are no measurable edges)
    """
    pairs = [
        (positions[edge.from_id], positions[edge.to_id])
        for edge in edges
        if edge.from_id in positions and edge.to_id in positions
    ]
    if not pairs:
        return 0.0

    coords = np.asarray(pairs, dtype=np.float64)
    deltas = coords[:, 1, :] - coords[:, 0, :]
    return float(np.hypot(deltas[:, 0], deltas[:, 1]).sum())


def count_layer_crossings(
    layers: Sequence[Sequence[str]],
    outgoing: Mapping[str, Sequence[str]],
) -> int:
    """
    Count edge crossings between adjacent layers.

    Two edges (a1, b1) and (a2, b2) between layer i and layer i+1 cross
    when their relative order flips: a1 < a2 and b1 > b2, or vice versa.
    Edges spanning more than one layer are not counted.

    Args:
        layers: Ordered node ids per layer
        outgoing: Node id -> successor ids

    Returns:
        Number of crossings

    Time Complexity: O(E^2) per layer boundary
    """
    crossings = 0

    for upper, lower in zip(layers, layers[1:]):
        lower_pos = {node_id: pos for pos, node_id in enumerate(lower)}

        segments: list[tuple[int, int]] = []
        for pos, node_id in enumerate(upper):
            for target in outgoing.get(node_id, ()):
                if target in lower_pos:
                    segments.append((pos, lower_pos[target]))

        for a in range(len(segments)):
            a1, b1 = segments[a]
            for b in range(a + 1, len(segments)):
                a2, b2 = segments[b]
                if (a1 < a2 and b1 > b2) or (a1 > a2 and b1 < b2):
                    crossings += 1

    return crossings


def layout_quality_summary(result: LayoutResult, edges: Sequence[LayoutEdge]) -> dict[str, Any]:
    """
    Compute a summary of layout quality for a finished layout.

    Args:
        result: Layout result
        edges: Edges that were laid out

    Returns:
        Dictionary with node count, crossing count, edge length statistics,
        iteration count and compute time
    """
    positions = result.positions
    measured = [e for e in edges if e.from_id in positions and e.to_id in positions]
    mean_length = result.total_edge_length / len(measured) if measured else 0.0

    return {
        "node_count": len(positions),
        "edge_count": len(measured),
        "edge_crossings": result.edge_crossings,
        "total_edge_length": result.total_edge_length,
        "mean_edge_length": mean_length,
        "iterations": result.iterations,
        "compute_time": result.compute_time,
    }


__all__ = [
    "total_edge_length",
    "count_layer_crossings",
    "layout_quality_summary",
]
