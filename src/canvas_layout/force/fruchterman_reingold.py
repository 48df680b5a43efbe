"""
Force-directed layout (Fruchterman-Reingold style) with Barnes-Hut acceleration.

Based on the paper:
"Graph Drawing by Force-directed Placement" by Fruchterman and Reingold (1991)

The algorithm simulates a physical system where:
- All nodes repel each other with strength inversely proportional to d^2
- Connected nodes are pulled toward an ideal edge length by springs
- Velocity is damped every step until movement settles

Repulsion is approximated with a Barnes-Hut quadtree that is rebuilt from
scratch every iteration, since every position changes each step.
"""

from __future__ import annotations

import numpy as np

from ..base import LayoutAlgorithm, LayoutGraph
from ..spatial.quadtree import MIN_DISTANCE, QuadTree
from ..types import LayoutDirection, LayoutOptions, LayoutResult, Point, Size
from ..validation import (
    validate_iterations,
    validate_non_negative,
    validate_open_unit_interval,
    validate_positive,
)


class ForceDirectedLayout(LayoutAlgorithm):
    """
    Force-directed graph layout with Barnes-Hut repulsion.

    Unpinned nodes start at seeded random positions inside the central 60%
    of the bounds, so identical input always produces identical output.
    Pinned nodes keep their position throughout and still repel others.

    Example:
        layout = ForceDirectedLayout(iterations=200, theta=0.5)
        result = layout.layout(nodes, edges, bounds=(800, 600))

        for node_id, point in result.positions.items():
            print(f"{node_id}: ({point.x:.1f}, {point.y:.1f})")
    """

    def __init__(
        self,
        *,
        iterations: int = 100,
        ideal_edge_length: float = 100.0,
        repulsion_strength: float = 10000.0,
        attraction_strength: float = 0.1,
        damping: float = 0.9,
        theta: float = 0.8,
        convergence_threshold: float = 0.1,
        seed: int = 42,
        padding: float = 50.0,
    ) -> None:
        """
        Initialize force-directed layout.

        Args:
            iterations: Maximum number of simulation steps.
            ideal_edge_length: Spring rest length. Overridden by the
                ``layerSpacing`` option.
            repulsion_strength: Strength of node-node repulsion.
            attraction_strength: Spring constant along edges.
            damping: Velocity damping factor in (0, 1).
            theta: Barnes-Hut accuracy (0 = exact N-body).
            convergence_threshold: Stop once the largest per-node movement
                in an iteration falls below this.
            seed: Seed for the initial random placement.
            padding: Margin kept between nodes and the bounds edge.

        Raises:
            InvalidConfigError: If a parameter is out of range.
        """
        self._iterations = validate_iterations("iterations", iterations)
        self._ideal_edge_length = validate_positive("ideal_edge_length", ideal_edge_length)
        self._repulsion_strength = validate_non_negative("repulsion_strength", repulsion_strength)
        self._attraction_strength = validate_non_negative(
            "attraction_strength", attraction_strength
        )
        self._damping = validate_open_unit_interval("damping", damping)
        self._theta = validate_non_negative("theta", theta)
        self._convergence_threshold = validate_non_negative(
            "convergence_threshold", convergence_threshold
        )
        self._seed = int(seed)
        self._padding = validate_non_negative("padding", padding)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Force-Directed"

    @property
    def description(self) -> str:
        return "Spring physics simulation with Barnes-Hut optimization"

    @property
    def supported_directions(self) -> frozenset[LayoutDirection]:
        return frozenset()

    @property
    def iterations(self) -> int:
        """Get maximum iterations."""
        return self._iterations

    @property
    def ideal_edge_length(self) -> float:
        """Get spring rest length."""
        return self._ideal_edge_length

    @property
    def repulsion_strength(self) -> float:
        return self._repulsion_strength

    @property
    def attraction_strength(self) -> float:
        return self._attraction_strength

    @property
    def damping(self) -> float:
        """Get velocity damping factor."""
        return self._damping

    @property
    def theta(self) -> float:
        """Get Barnes-Hut theta parameter (accuracy)."""
        return self._theta

    @property
    def convergence_threshold(self) -> float:
        return self._convergence_threshold

    @property
    def seed(self) -> int:
        """Get seed for the initial placement."""
        return self._seed

    @property
    def padding(self) -> float:
        return self._padding

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _compute(
        self,
        graph: LayoutGraph,
        bounds: Size,
        direction: LayoutDirection,
        options: LayoutOptions,
    ) -> LayoutResult:
        ids = graph.node_ids
        n = len(ids)
        index = {node_id: i for i, node_id in enumerate(ids)}
        edge_length = options.resolve_layer_spacing(self._ideal_edge_length)

        pos = self._initial_positions(graph, ids, bounds)
        vel = np.zeros((n, 2), dtype=np.float64)
        pinned = np.array([graph.node_map[i].pinned is not None for i in ids], dtype=bool)
        free = np.flatnonzero(~pinned)

        sources = np.array([index[e.from_id] for e in graph.edges], dtype=np.intp)
        targets = np.array([index[e.to_id] for e in graph.edges], dtype=np.intp)

        low, high = self._clamp_limits(bounds)
        region = (0.0, 0.0, bounds.width, bounds.height)

        steps = 0
        for _ in range(self._iterations):
            steps += 1
            forces = np.zeros((n, 2), dtype=np.float64)

            tree = QuadTree.from_points(
                ((node_id, (pos[i, 0], pos[i, 1])) for i, node_id in enumerate(ids)),
                bounds=region,
            )
            for i in free:
                fx, fy = tree.calculate_repulsion(
                    pos[i, 0], pos[i, 1], ids[i], self._repulsion_strength, self._theta
                )
                forces[i, 0] += fx
                forces[i, 1] += fy

            if len(sources):
                self._apply_springs(pos, forces, sources, targets, pinned, edge_length)

            vel[free] = (vel[free] + forces[free]) * self._damping
            new_pos = np.clip(pos[free] + vel[free], low, high)
            max_movement = (
                float(np.max(np.hypot(*(new_pos - pos[free]).T))) if len(free) else 0.0
            )
            pos[free] = new_pos

            if max_movement < self._convergence_threshold:
                break

        positions = {
            node_id: Point(float(pos[i, 0]), float(pos[i, 1])) for i, node_id in enumerate(ids)
        }
        return LayoutResult(positions=positions, iterations=steps)

    def _initial_positions(self, graph: LayoutGraph, ids: list[str], bounds: Size) -> np.ndarray:
        """Pinned nodes at their pin, others seeded-random in the central 60%."""
        rng = np.random.default_rng(self._seed)
        pos = np.zeros((len(ids), 2), dtype=np.float64)
        for i, node_id in enumerate(ids):
            pinned = graph.node_map[node_id].pinned
            if pinned is not None:
                pos[i] = pinned
            else:
                rx, ry = rng.random(2)
                pos[i, 0] = bounds.width * 0.2 + rx * bounds.width * 0.6
                pos[i, 1] = bounds.height * 0.2 + ry * bounds.height * 0.6
        return pos

    def _clamp_limits(self, bounds: Size) -> tuple[np.ndarray, np.ndarray]:
        """Per-axis clamp range; collapses to the centre line when bounds are too small."""
        low = np.empty(2)
        high = np.empty(2)
        for axis, extent in enumerate((bounds.width, bounds.height)):
            if extent >= 2 * self._padding:
                low[axis], high[axis] = self._padding, extent - self._padding
            else:
                low[axis] = high[axis] = extent / 2
        return low, high

    def _apply_springs(
        self,
        pos: np.ndarray,
        forces: np.ndarray,
        sources: np.ndarray,
        targets: np.ndarray,
        pinned: np.ndarray,
        edge_length: float,
    ) -> None:
        """Accumulate spring forces along every edge into ``forces``."""
        delta = pos[targets] - pos[sources]
        distance = np.hypot(delta[:, 0], delta[:, 1])
        active = distance >= MIN_DISTANCE
        if not active.any():
            return

        delta = delta[active]
        distance = distance[active]
        src = sources[active]
        tgt = targets[active]

        magnitude = (distance - edge_length) * self._attraction_strength / distance
        spring = delta * magnitude[:, None]

        src_free = ~pinned[src]
        tgt_free = ~pinned[tgt]
        np.add.at(forces, src[src_free], spring[src_free])
        np.subtract.at(forces, tgt[tgt_free], spring[tgt_free])

    def __repr__(self) -> str:
        return (
            f"ForceDirectedLayout(iterations={self._iterations}, "
            f"ideal_edge_length={self._ideal_edge_length:g}, theta={self._theta:g})"
        )


__all__ = ["ForceDirectedLayout"]
