"""
Sugiyama layered graph layout algorithm.

Based on the framework from:
"Methods for Visual Understanding of Hierarchical System Structures"
by Sugiyama, Tagawa, and Toda (1981)

This algorithm produces layered layouts for directed graphs with the
following phases:
1. Layer assignment (longest path, breadth-first, cycle tolerant)
2. Crossing minimization (barycenter sweeps)
3. Coordinate assignment

Cycles are not removed up front. Instead, a node whose predecessors never
all become assigned is force-assigned after it has been re-queued more
times than there are nodes, using only the predecessors placed so far.
This is a heuristic: on adversarial cyclic graphs the resulting layering
is valid but not minimal.
"""

from __future__ import annotations

import math
import warnings
from collections import deque
from typing import Mapping, Sequence

from ..base import LayoutAlgorithm, LayoutGraph
from ..metrics import count_layer_crossings
from ..types import LayoutDirection, LayoutNode, LayoutOptions, LayoutResult, Point, Size
from ..validation import (
    GraphStructureWarning,
    validate_iterations,
    validate_non_negative,
)


def assign_layers(
    node_ids: Sequence[str],
    outgoing: Mapping[str, Sequence[str]],
    incoming: Mapping[str, Sequence[str]],
) -> list[list[str]]:
    """
    Assign nodes to layers using breadth-first longest path.

    Nodes without incoming edges start in layer 0. If there are none, the
    node with the fewest incoming edges is used as a synthetic source. A
    node's layer is one more than its highest assigned predecessor; it is
    re-queued while predecessors are unassigned, and force-assigned once
    its re-queue count exceeds the node count. Unreached nodes go to
    layer 0.

    Args:
        node_ids: Node ids in input order
        outgoing: Node id -> successor ids
        incoming: Node id -> predecessor ids

    Returns:
        Node ids per layer, indexed by layer number
    """
    if not node_ids:
        return []

    sources = [node_id for node_id in node_ids if not incoming[node_id]]
    if not sources:
        # min() keeps the first node on ties
        synthetic = min(node_ids, key=lambda node_id: len(incoming[node_id]))
        warnings.warn(
            "No source nodes found (all nodes have incoming edges). "
            f"Using {synthetic!r} as a synthetic source; the graph contains cycles.",
            GraphStructureWarning,
            stacklevel=4,
        )
        sources = [synthetic]

    layer_of: dict[str, int] = {source: 0 for source in sources}

    queue: deque[str] = deque(sources)
    processed: set[str] = set()
    requeue_count: dict[str, int] = {}
    max_requeues = len(node_ids)
    forced: list[str] = []

    while queue:
        node_id = queue.popleft()
        if node_id in processed:
            continue

        predecessors = incoming[node_id]
        assigned = [p for p in predecessors if p in layer_of]

        requeue_count[node_id] = requeue_count.get(node_id, 0) + 1
        possible_cycle = requeue_count[node_id] > max_requeues

        if len(assigned) < len(predecessors) and not possible_cycle:
            queue.append(node_id)
            continue

        if possible_cycle and len(assigned) < len(predecessors):
            forced.append(node_id)

        # Unassigned predecessors are part of a cycle and are ignored
        if assigned:
            layer_of[node_id] = max(layer_of[p] for p in assigned) + 1
        elif node_id not in layer_of:
            layer_of[node_id] = 0

        processed.add(node_id)

        for successor in outgoing[node_id]:
            if successor not in processed:
                queue.append(successor)

    if forced:
        warnings.warn(
            f"Forced layer assignment for {len(forced)} node(s) on cycles: "
            f"{', '.join(map(repr, forced))}.",
            GraphStructureWarning,
            stacklevel=4,
        )

    for node_id in node_ids:
        layer_of.setdefault(node_id, 0)

    layers: list[list[str]] = [[] for _ in range(max(layer_of.values()) + 1)]
    for node_id, layer in layer_of.items():
        layers[layer].append(node_id)
    return layers


def _order_by_barycenter(
    layer: list[str],
    reference: Sequence[str],
    connections: Mapping[str, Sequence[str]],
) -> None:
    """Reorder ``layer`` in place by mean index of its neighbours in ``reference``."""
    ref_pos = {node_id: i for i, node_id in enumerate(reference)}

    barycenters: dict[str, float] = {}
    for node_id in layer:
        connected = [ref_pos[c] for c in connections[node_id] if c in ref_pos]
        barycenters[node_id] = sum(connected) / len(connected) if connected else math.inf

    layer.sort(key=barycenters.__getitem__)


def minimize_crossings(
    layers: list[list[str]],
    outgoing: Mapping[str, Sequence[str]],
    incoming: Mapping[str, Sequence[str]],
    iterations: int,
) -> int:
    """
    Reduce edge crossings with alternating barycenter sweeps.

    Each iteration runs a forward sweep (layer 1..N against the previous
    layer's order) and a backward sweep (layer N-1..0 against the next
    layer's order). Nodes with no neighbours in the reference layer sort
    last. Layers are reordered in place.

    Args:
        layers: Node ids per layer (modified in place)
        outgoing: Node id -> successor ids
        incoming: Node id -> predecessor ids
        iterations: Number of forward/backward sweep pairs

    Returns:
        Number of sweep pairs performed, which is always ``iterations``
        (there is no early exit)
    """
    for _ in range(iterations):
        for i in range(1, len(layers)):
            _order_by_barycenter(layers[i], layers[i - 1], incoming)
        for i in range(len(layers) - 2, -1, -1):
            _order_by_barycenter(layers[i], layers[i + 1], outgoing)
    return iterations


class HierarchicalLayout(LayoutAlgorithm):
    """
    Sugiyama-style layered layout.

    Arranges nodes in layers with edges flowing in the requested direction
    and reduces edge crossings through barycenter ordering.

    Example:
        layout = HierarchicalLayout(layer_spacing=100, node_spacing=50)
        result = layout.layout(
            nodes=[LayoutNode(i, (80, 40)) for i in "abcd"],
            edges=[
                LayoutEdge("e1", "a", "b"),
                LayoutEdge("e2", "a", "c"),
                LayoutEdge("e3", "b", "d"),
                LayoutEdge("e4", "c", "d"),
            ],
            bounds=(800, 600),
            direction="left-to-right",
        )
        print(result.layers, result.edge_crossings)
    """

    def __init__(
        self,
        *,
        layer_spacing: float = 80.0,
        node_spacing: float = 40.0,
        crossing_minimization_iterations: int = 4,
    ) -> None:
        """
        Initialize hierarchical layout.

        Args:
            layer_spacing: Gap between consecutive layers along the flow.
            node_spacing: Gap between neighbouring nodes within a layer.
            crossing_minimization_iterations: Number of barycenter sweep pairs.

        Raises:
            InvalidConfigError: If a parameter is out of range.
        """
        self._layer_spacing = validate_non_negative("layer_spacing", layer_spacing)
        self._node_spacing = validate_non_negative("node_spacing", node_spacing)
        self._crossing_iterations = validate_iterations(
            "crossing_minimization_iterations", crossing_minimization_iterations
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Hierarchical"

    @property
    def description(self) -> str:
        return "Layered layout with edge crossing minimization"

    @property
    def supported_directions(self) -> frozenset[LayoutDirection]:
        return frozenset(LayoutDirection)

    @property
    def layer_spacing(self) -> float:
        """Get separation between layers."""
        return self._layer_spacing

    @property
    def node_spacing(self) -> float:
        """Get separation between nodes in the same layer."""
        return self._node_spacing

    @property
    def crossing_minimization_iterations(self) -> int:
        """Get number of crossing minimization sweep pairs."""
        return self._crossing_iterations

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(
        self,
        graph: LayoutGraph,
        bounds: Size,
        direction: LayoutDirection,
        options: LayoutOptions,
    ) -> LayoutResult:
        layer_spacing = options.resolve_layer_spacing(self._layer_spacing)
        node_spacing = options.resolve_node_spacing(self._node_spacing)

        # Phase 1: Layer assignment
        layers = assign_layers(graph.node_ids, graph.outgoing, graph.incoming)

        # Phase 2: Crossing minimization
        sweeps = minimize_crossings(
            layers, graph.outgoing, graph.incoming, self._crossing_iterations
        )

        # Phase 3: Coordinate assignment
        positions = self._assign_positions(
            layers, graph.node_map, direction, bounds, layer_spacing, node_spacing
        )

        entry = direction.entry_side()
        exit_ = direction.exit_side()

        return LayoutResult(
            positions=positions,
            entry_ports={node_id: entry for node_id in graph.node_map},
            exit_ports={node_id: exit_ for node_id in graph.node_map},
            edge_crossings=count_layer_crossings(layers, graph.outgoing),
            iterations=sweeps,
            layers=tuple(tuple(layer) for layer in layers),
        )

    def _assign_positions(
        self,
        layers: list[list[str]],
        node_map: Mapping[str, LayoutNode],
        direction: LayoutDirection,
        bounds: Size,
        layer_spacing: float,
        node_spacing: float,
    ) -> dict[str, Point]:
        """Assign centre coordinates from layer order and node sizes."""
        horizontal = direction.is_horizontal

        # Offsets along the flow axis, one per layer
        layer_offsets: list[float] = []
        offset = layer_spacing
        for layer in layers:
            layer_offsets.append(offset)
            extent = max(
                (node_map[i].width if horizontal else node_map[i].height for i in layer),
                default=0.0,
            )
            offset += extent + layer_spacing

        if direction.is_reversed:
            layer_offsets.reverse()

        cross_extent = bounds.height if horizontal else bounds.width

        positions: dict[str, Point] = {}
        for layer, layer_offset in zip(layers, layer_offsets):
            sizes = [node_map[i].height if horizontal else node_map[i].width for i in layer]
            total = sum(sizes) + (len(layer) - 1) * node_spacing

            cursor = (cross_extent - total) / 2
            for node_id, size in zip(layer, sizes):
                along = cursor + size / 2
                if horizontal:
                    positions[node_id] = Point(layer_offset, along)
                else:
                    positions[node_id] = Point(along, layer_offset)
                cursor += size + node_spacing

        return positions

    def __repr__(self) -> str:
        return (
            f"HierarchicalLayout(layer_spacing={self._layer_spacing:g}, "
            f"node_spacing={self._node_spacing:g}, "
            f"crossing_minimization_iterations={self._crossing_iterations})"
        )


__all__ = [
    "HierarchicalLayout",
    "assign_layers",
    "minimize_crossings",
]
