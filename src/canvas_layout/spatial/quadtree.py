"""
Quadtree implementation for Barnes-Hut force approximation.

The quadtree recursively subdivides 2D space into quadrants,
enabling O(n log n) approximate n-body repulsion calculations.

Each cell keeps a running center of mass and point count that is updated
as points are inserted, so no separate mass-distribution pass is needed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

# Coincident or nearly coincident bodies exert no force
MIN_DISTANCE = 0.01


@dataclass(frozen=True)
class Body:
    """A keyed point inserted into the quadtree."""

    key: str
    x: float
    y: float


class QuadTree:
    """
    Barnes-Hut quadtree cell.

    A cell covers the half-open rectangle [min_x, max_x) x [min_y, max_y).
    Leaves hold at most ``MAX_POINTS`` bodies; inserting beyond that splits
    the leaf into four children [NW, NE, SW, SE], unless the cell is
    already at ``MAX_DEPTH``, in which case it keeps accumulating bodies.

    Usage:
        tree = QuadTree.from_points(positions.items(), bounds=(0, 0, 800, 600))
        fx, fy = tree.calculate_repulsion(x, y, "a", strength=10000, theta=0.8)

    The theta parameter controls the accuracy/speed tradeoff:
    - theta = 0: No approximation; every non-empty cell is opened
    - theta = 0.5-1.0: Typical for graph layout

    Any cell whose center of mass lies within ``MIN_DISTANCE`` of the query
    point contributes nothing, even with theta = 0, so results can differ
    from the exact n-body sum when a center of mass coincides with the point.
    """

    MAX_POINTS = 1
    MAX_DEPTH = 10

    def __init__(self, bounds: Tuple[float, float, float, float], depth: int = 0) -> None:
        """
        Initialize a quadtree cell.

        Args:
            bounds: (min_x, min_y, max_x, max_y) rectangle covered by this cell
            depth: Depth of this cell (root = 0)
        """
        self.min_x, self.min_y, self.max_x, self.max_y = (float(v) for v in bounds)
        self.depth = depth

        self.center_of_mass_x: float = 0.0
        self.center_of_mass_y: float = 0.0
        self.total_mass: int = 0

        self.bodies: List[Body] = []
        self.children: Optional[List[QuadTree]] = None

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def mid_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def mid_y(self) -> float:
        return (self.min_y + self.max_y) / 2

    def is_leaf(self) -> bool:
        """True if this cell has no children."""
        return self.children is None

    def is_empty(self) -> bool:
        """True if no body has been inserted into this cell."""
        return self.total_mass == 0

    def contains(self, x: float, y: float) -> bool:
        """Check if point (x, y) lies in this cell's half-open rectangle."""
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y

    def get_quadrant(self, x: float, y: float) -> int:
        """
        Get quadrant index for a point.

        Returns:
            0=NW, 1=NE, 2=SW, 3=SE
        """
        east = x >= self.mid_x
        south = y >= self.mid_y
        return (2 if south else 0) + (1 if east else 0)

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def insert(self, key: str, x: float, y: float) -> bool:
        """
        Insert a keyed point.

        Points outside this cell are ignored.

        Returns:
            True if the point was inserted
        """
        if not self.contains(x, y):
            return False

        self.total_mass += 1
        self.center_of_mass_x += (x - self.center_of_mass_x) / self.total_mass
        self.center_of_mass_y += (y - self.center_of_mass_y) / self.total_mass

        if self.children is not None:
            self._insert_into_child(Body(key, x, y))
            return True

        self.bodies.append(Body(key, x, y))
        if len(self.bodies) > self.MAX_POINTS and self.depth < self.MAX_DEPTH:
            self._subdivide()
        return True

    def _subdivide(self) -> None:
        """Split this leaf into four children and push its bodies down."""
        mx, my = self.mid_x, self.mid_y
        d = self.depth + 1
        self.children = [
            QuadTree((self.min_x, self.min_y, mx, my), d),
            QuadTree((mx, self.min_y, self.max_x, my), d),
            QuadTree((self.min_x, my, mx, self.max_y), d),
            QuadTree((mx, my, self.max_x, self.max_y), d),
        ]
        for body in self.bodies:
            self._insert_into_child(body)
        self.bodies = []

    def _insert_into_child(self, body: Body) -> None:
        assert self.children is not None
        self.children[self.get_quadrant(body.x, body.y)].insert(body.key, body.x, body.y)

    # -------------------------------------------------------------------------
    # Force Query
    # -------------------------------------------------------------------------

    def calculate_repulsion(
        self,
        x: float,
        y: float,
        key: str,
        strength: float,
        theta: float,
    ) -> Tuple[float, float]:
        """
        Calculate approximate repulsive force on a point.

        A cell is treated as a single body at its center of mass when
        ``width / distance < theta``; otherwise the query recurses into its
        children. The querying point never repels itself.

        Args:
            x, y: Position of the point the force acts on
            key: Key of the point (excluded from its own force)
            strength: Repulsion constant (F = strength * mass / d^2)
            theta: Barnes-Hut threshold

        Returns:
            (fx, fy) force vector pointing away from other bodies
        """
        if self.total_mass == 0:
            return 0.0, 0.0

        if self.children is None and len(self.bodies) == 1 and self.bodies[0].key == key:
            return 0.0, 0.0

        dx = x - self.center_of_mass_x
        dy = y - self.center_of_mass_y
        distance = math.sqrt(dx * dx + dy * dy)

        if distance < MIN_DISTANCE:
            return 0.0, 0.0

        if self.children is None or self.width / distance < theta:
            mass = self.total_mass
            if self.children is None and any(body.key == key for body in self.bodies):
                mass -= 1
            if mass <= 0:
                return 0.0, 0.0

            force = strength * mass / (distance * distance)
            return dx / distance * force, dy / distance * force

        fx, fy = 0.0, 0.0
        for child in self.children:
            cfx, cfy = child.calculate_repulsion(x, y, key, strength, theta)
            fx += cfx
            fy += cfy
        return fx, fy

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_points(
        cls,
        points: Iterable[Tuple[str, Tuple[float, float]]],
        bounds: Tuple[float, float, float, float],
        margin: float = 1.0,
    ) -> QuadTree:
        """
        Build a quadtree over keyed points.

        The root covers ``bounds`` grown to include every point (plus a small
        margin so points on the far edge fall inside the half-open cell).

        Args:
            points: (key, (x, y)) pairs
            bounds: (min_x, min_y, max_x, max_y) minimum region to cover
            margin: Extra space added on each side when the region grows

        Returns:
            QuadTree with all points inserted
        """
        items = list(points)
        min_x, min_y, max_x, max_y = bounds
        for _, (x, y) in items:
            if x < min_x:
                min_x = x - margin
            if y < min_y:
                min_y = y - margin
            if x >= max_x:
                max_x = x + margin
            if y >= max_y:
                max_y = y + margin

        tree = cls((min_x, min_y, max_x, max_y))
        for key, (x, y) in items:
            tree.insert(key, x, y)
        return tree

    def __repr__(self) -> str:
        return (
            f"QuadTree(bounds=({self.min_x:g}, {self.min_y:g}, {self.max_x:g}, {self.max_y:g}), "
            f"mass={self.total_mass}, depth={self.depth})"
        )


__all__ = ["Body", "QuadTree", "MIN_DISTANCE"]
