"""
Base classes for graph layout algorithms.

This module provides the common contract and shared plumbing for all
layout algorithms:

- LayoutGraph: Per-call adjacency snapshot with dangling edges removed
- LayoutAlgorithm: Abstract base implementing the ``layout()`` template

Every algorithm is a stateless, immutable object. All working structures
are built inside a single ``layout()`` call, so instances can be reused
and shared between threads.
"""

from __future__ import annotations

import dataclasses
import time
import warnings
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

from .metrics import total_edge_length
from .types import (
    LayoutDirection,
    LayoutEdge,
    LayoutNode,
    LayoutOptions,
    LayoutResult,
    OptionsLike,
    Point,
    Size,
    SizeLike,
)
from .validation import GraphStructureWarning, parse_direction


class LayoutGraph:
    """
    Directed graph snapshot used by a single layout call.

    Attributes:
        nodes: Input nodes in input order
        node_map: Node id -> node
        edges: Edges whose endpoints both exist (input order)
        outgoing: Node id -> successor ids (one entry per edge)
        incoming: Node id -> predecessor ids (one entry per edge)
    """

    def __init__(self, nodes: Sequence[LayoutNode], edges: Iterable[LayoutEdge]) -> None:
        self.nodes: list[LayoutNode] = list(nodes)
        self.node_map: dict[str, LayoutNode] = {n.id: n for n in self.nodes}
        self.edges: list[LayoutEdge] = []
        self.outgoing: dict[str, list[str]] = {node_id: [] for node_id in self.node_map}
        self.incoming: dict[str, list[str]] = {node_id: [] for node_id in self.node_map}

        for edge in edges:
            # Dangling edges are ignored, not an error
            if edge.from_id in self.node_map and edge.to_id in self.node_map:
                self.edges.append(edge)
                self.outgoing[edge.from_id].append(edge.to_id)
                self.incoming[edge.to_id].append(edge.from_id)

    @property
    def node_ids(self) -> list[str]:
        """Unique node ids in first-seen input order."""
        return list(self.node_map)

    def __len__(self) -> int:
        return len(self.node_map)

    def __repr__(self) -> str:
        return f"LayoutGraph(nodes={len(self.node_map)}, edges={len(self.edges)})"


class LayoutAlgorithm(ABC):
    """
    Abstract base class for all layout algorithms.

    Subclasses implement ``_compute()``; the base class takes care of the
    parts of the contract that are identical for every algorithm:

    - empty input short-circuits to an empty result
    - bounds, direction and options are coerced into typed values
    - dangling edges are dropped before the algorithm sees the graph
    - pinned nodes are moved to their pinned position last
    - total edge length and compute time are filled in

    Example:
        algorithm = HierarchicalLayout(layer_spacing=100)
        result = algorithm.layout(
            nodes=[LayoutNode("a", (80, 40)), LayoutNode("b", (80, 40))],
            edges=[LayoutEdge("e1", "a", "b")],
            bounds=(800, 600),
            direction=LayoutDirection.LEFT_TO_RIGHT,
            options={"nodeSpacing": 30},
        )
        for node_id, point in result.positions.items():
            print(f"{node_id}: ({point.x}, {point.y})")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the algorithm."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description of how the algorithm works."""

    @property
    @abstractmethod
    def supported_directions(self) -> frozenset[LayoutDirection]:
        """Directions this algorithm honours (empty = direction-agnostic)."""

    def supports(self, direction: LayoutDirection) -> bool:
        """True if the algorithm distinguishes this direction."""
        return direction in self.supported_directions

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def layout(
        self,
        nodes: Sequence[LayoutNode],
        edges: Sequence[LayoutEdge],
        bounds: SizeLike,
        direction: LayoutDirection | str = LayoutDirection.TOP_TO_BOTTOM,
        options: OptionsLike = None,
    ) -> LayoutResult:
        """
        Compute positions for all nodes.

        Args:
            nodes: Nodes to position, with their sizes
            edges: Directed edges between nodes
            bounds: (width, height) of the layout area
            direction: Flow direction (ignored by direction-agnostic layouts)
            options: LayoutOptions or a mapping with ``layerSpacing`` /
                ``nodeSpacing`` overrides; other keys are ignored

        Returns:
            LayoutResult with a position for every input node id
        """
        start = time.perf_counter()

        if not nodes:
            return LayoutResult.empty(compute_time=time.perf_counter() - start)

        graph = LayoutGraph(nodes, edges)
        size = Size(float(bounds[0]), float(bounds[1]))
        flow = self._coerce_direction(direction)
        opts = LayoutOptions.coerce(options)

        result = self._compute(graph, size, flow, opts)

        positions = dict(result.positions)
        for node in graph.nodes:
            if node.pinned is not None:
                positions[node.id] = node.pinned

        return dataclasses.replace(
            result,
            positions=positions,
            total_edge_length=total_edge_length(positions, graph.edges),
            compute_time=time.perf_counter() - start,
        )

    @abstractmethod
    def _compute(
        self,
        graph: LayoutGraph,
        bounds: Size,
        direction: LayoutDirection,
        options: LayoutOptions,
    ) -> LayoutResult:
        """
        Compute node positions.

        Subclasses return a result with positions for every node in
        ``graph`` plus any ports and metrics they compute. Pinned overrides,
        total edge length and timing are applied by ``layout()``.
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _coerce_direction(self, direction: LayoutDirection | str) -> LayoutDirection:
        """Parse direction, falling back to top-to-bottom with a warning."""
        flow: Optional[LayoutDirection] = parse_direction(direction)
        if flow is None:
            warnings.warn(
                f"Unknown layout direction {direction!r}; using top-to-bottom.",
                GraphStructureWarning,
                stacklevel=3,
            )
            return LayoutDirection.TOP_TO_BOTTOM
        return flow

    @staticmethod
    def _bounding_box(
        positions: dict[str, Point], graph: LayoutGraph
    ) -> tuple[float, float, float, float]:
        """Bounding box (min_x, min_y, max_x, max_y) of placed node extents."""
        min_x = min_y = float("inf")
        max_x = max_y = float("-inf")
        for node_id, point in positions.items():
            half_w = graph.node_map[node_id].width / 2
            half_h = graph.node_map[node_id].height / 2
            min_x = min(min_x, point.x - half_w)
            max_x = max(max_x, point.x + half_w)
            min_y = min(min_y, point.y - half_h)
            max_y = max(max_y, point.y + half_h)
        return min_x, min_y, max_x, max_y

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = [
    "LayoutGraph",
    "LayoutAlgorithm",
]
