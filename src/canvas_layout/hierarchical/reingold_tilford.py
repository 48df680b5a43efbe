"""
Reingold-Tilford tree layout algorithm.

Based on the paper:
"Tidier Drawings of Trees" by Reingold and Tilford (1981)

Extended with improvements from:
"A Node-Positioning Algorithm for General Trees" by Walker (1990)
"Improving Walker's Algorithm to Run in Linear Time" by Buchheim,
Juenger and Leipert (2002)

DAGs and cyclic graphs are collapsed to a spanning forest first: a
depth-first traversal attaches each node to the first parent that reaches
it and drops every later edge into it.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Optional

from ..base import LayoutAlgorithm, LayoutGraph
from ..types import LayoutDirection, LayoutOptions, LayoutResult, PortSide, Point, Size
from ..validation import GraphStructureWarning, validate_non_negative


@dataclass
class TreeRecord:
    """
    Arena entry for one tree node.

    Links to other records (parent, children, thread, ancestor) are stored
    as indices into the arena list rather than object references.
    """

    node_id: Optional[str]
    extent: float
    depth: int
    index: int
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)
    number: int = 0  # Position among siblings

    # Reingold-Tilford fields
    prelim: float = 0.0
    mod: float = 0.0  # Modifier for subtree shift
    shift: float = 0.0
    change: float = 0.0
    thread: Optional[int] = None
    ancestor: int = -1
    x: float = 0.0

    def __post_init__(self) -> None:
        if self.ancestor < 0:
            self.ancestor = self.index


class TreeArena:
    """
    Working state for one Reingold-Tilford run.

    The arena holds the spanning forest below a virtual super-root, so a
    forest is laid out as siblings of one tree. The super-root has no node
    id and never appears in the output.
    """

    def __init__(self, sibling_spacing: float, subtree_spacing: float) -> None:
        self.records: list[TreeRecord] = []
        self.sibling_spacing = sibling_spacing
        self.subtree_spacing = subtree_spacing
        self.root: int = self.add(None, 0.0, -1, None)

    def add(self, node_id: Optional[str], extent: float, depth: int, parent: Optional[int]) -> int:
        """Append a record, attach it to ``parent`` and return its index."""
        index = len(self.records)
        self.records.append(TreeRecord(node_id=node_id, extent=extent, depth=depth, index=index))
        if parent is not None:
            siblings = self.records[parent].children
            self.records[index].parent = parent
            self.records[index].number = len(siblings)
            siblings.append(index)
        return index

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def left_sibling(self, v: int) -> Optional[int]:
        rec = self.records[v]
        if rec.parent is None or rec.number == 0:
            return None
        return self.records[rec.parent].children[rec.number - 1]

    def next_left(self, v: int) -> Optional[int]:
        """Get next node on left contour."""
        rec = self.records[v]
        return rec.children[0] if rec.children else rec.thread

    def next_right(self, v: int) -> Optional[int]:
        """Get next node on right contour."""
        rec = self.records[v]
        return rec.children[-1] if rec.children else rec.thread

    def separation(self, left: int, right: int, spacing: float) -> float:
        """Centre-to-centre distance required between two neighbouring nodes."""
        return (self.records[left].extent + self.records[right].extent) / 2 + spacing

    # -------------------------------------------------------------------------
    # First Walk (bottom-up)
    # -------------------------------------------------------------------------

    def first_walk(self) -> None:
        """
        Compute preliminary coordinates for every record, post-order.

        Each subtree is apportioned against its left siblings as soon as it
        is finished, before the next sibling is visited.
        """
        default_ancestor: dict[int, int] = {}
        stack: list[tuple[int, bool]] = [(self.root, False)]

        while stack:
            v, finished = stack.pop()
            if not finished:
                stack.append((v, True))
                stack.extend((c, False) for c in reversed(self.records[v].children))
                continue

            self._place(v)

            parent = self.records[v].parent
            if parent is not None:
                fallback = default_ancestor.get(parent, self.records[parent].children[0])
                default_ancestor[parent] = self._apportion(v, fallback)

    def _place(self, v: int) -> None:
        rec = self.records[v]
        left = self.left_sibling(v)

        if not rec.children:
            if left is not None:
                rec.prelim = self.records[left].prelim + self.separation(
                    left, v, self.sibling_spacing
                )
            else:
                rec.prelim = 0.0
            return

        self._execute_shifts(v)

        first = self.records[rec.children[0]]
        last = self.records[rec.children[-1]]
        midpoint = (first.prelim + last.prelim) / 2

        if left is not None:
            rec.prelim = self.records[left].prelim + self.separation(left, v, self.sibling_spacing)
            rec.mod = rec.prelim - midpoint
        else:
            rec.prelim = midpoint

    def _apportion(self, v: int, default_ancestor: int) -> int:
        """
        Separate the subtree at ``v`` from the subtrees to its left.

        Walks the inner and outer contours of both sides level by level,
        following threads where a contour is shallower, and shifts ``v``'s
        subtree right wherever the contours come too close.
        """
        left = self.left_sibling(v)
        if left is None:
            return default_ancestor

        recs = self.records
        parent = recs[v].parent
        assert parent is not None

        v_inner_right = v
        v_outer_right = v
        v_inner_left = left
        v_outer_left = recs[parent].children[0]

        s_inner_right = recs[v_inner_right].mod
        s_outer_right = recs[v_outer_right].mod
        s_inner_left = recs[v_inner_left].mod
        s_outer_left = recs[v_outer_left].mod

        spacing = self.sibling_spacing + self.subtree_spacing

        next_inner_left = self.next_right(v_inner_left)
        next_inner_right = self.next_left(v_inner_right)
        while next_inner_left is not None and next_inner_right is not None:
            v_inner_left = next_inner_left
            v_inner_right = next_inner_right
            next_outer_left = self.next_left(v_outer_left)
            next_outer_right = self.next_right(v_outer_right)
            # Outer contours are at least as deep as the inner ones
            assert next_outer_left is not None and next_outer_right is not None
            v_outer_left = next_outer_left
            v_outer_right = next_outer_right

            recs[v_outer_right].ancestor = v

            shift = (
                (recs[v_inner_left].prelim + s_inner_left)
                - (recs[v_inner_right].prelim + s_inner_right)
                + self.separation(v_inner_left, v_inner_right, spacing)
            )
            if shift > 0:
                ancestor = self._ancestor(v_inner_left, v, default_ancestor)
                self._move_subtree(ancestor, v, shift)
                s_inner_right += shift
                s_outer_right += shift

            s_inner_left += recs[v_inner_left].mod
            s_inner_right += recs[v_inner_right].mod
            s_outer_left += recs[v_outer_left].mod
            s_outer_right += recs[v_outer_right].mod

            next_inner_left = self.next_right(v_inner_left)
            next_inner_right = self.next_left(v_inner_right)

        if next_inner_left is not None and self.next_right(v_outer_right) is None:
            recs[v_outer_right].thread = next_inner_left
            recs[v_outer_right].mod += s_inner_left - s_outer_right

        if next_inner_right is not None and self.next_left(v_outer_left) is None:
            recs[v_outer_left].thread = next_inner_right
            recs[v_outer_left].mod += s_inner_right - s_outer_left
            default_ancestor = v

        return default_ancestor

    def _ancestor(self, v_inner_left: int, v: int, default: int) -> int:
        """Find ancestor of v_inner_left that is a sibling of v."""
        candidate = self.records[v_inner_left].ancestor
        if self.records[candidate].parent == self.records[v].parent:
            return candidate
        return default

    def _move_subtree(self, wl: int, wr: int, shift: float) -> None:
        """Move subtree rooted at wr by shift, spreading it over the gap to wl."""
        left, right = self.records[wl], self.records[wr]
        subtrees = right.number - left.number
        if subtrees <= 0:
            return
        right.change -= shift / subtrees
        right.shift += shift
        left.change += shift / subtrees
        right.prelim += shift
        right.mod += shift

    def _execute_shifts(self, v: int) -> None:
        """Execute accumulated shifts for children of v."""
        shift = 0.0
        change = 0.0
        for c in reversed(self.records[v].children):
            child = self.records[c]
            child.prelim += shift
            child.mod += shift
            change += child.change
            shift += child.shift + change

    # -------------------------------------------------------------------------
    # Second Walk (top-down)
    # -------------------------------------------------------------------------

    def second_walk(self) -> None:
        """Final coordinate = prelim + sum of ancestor modifiers."""
        stack: list[tuple[int, float]] = [(self.root, 0.0)]
        while stack:
            v, mod_sum = stack.pop()
            rec = self.records[v]
            rec.x = rec.prelim + mod_sum
            for c in rec.children:
                stack.append((c, mod_sum + rec.mod))

    def placed(self) -> list[TreeRecord]:
        """Records for real graph nodes (excluding the super-root)."""
        return [rec for rec in self.records if rec.node_id is not None]


class TreeLayout(LayoutAlgorithm):
    """
    Reingold-Tilford tidy tree layout.

    Positions nodes in a tree with:
    - Parent centered over its first and last child
    - Subtrees separated to avoid overlap
    - One level per depth along the flow direction

    Non-tree graphs are reduced to a spanning forest first. Multiple roots
    are laid out side by side.

    Example:
        layout = TreeLayout(level_spacing=100, sibling_spacing=30)
        result = layout.layout(
            nodes=[LayoutNode(i, (60, 40)) for i in ("root", "a", "b")],
            edges=[LayoutEdge("e1", "root", "a"), LayoutEdge("e2", "root", "b")],
            bounds=(800, 600),
        )
    """

    def __init__(
        self,
        *,
        level_spacing: float = 80.0,
        sibling_spacing: float = 40.0,
        subtree_spacing: float = 20.0,
    ) -> None:
        """
        Initialize tree layout.

        Args:
            level_spacing: Distance between consecutive depth levels.
            sibling_spacing: Gap between neighbouring siblings.
            subtree_spacing: Extra gap between neighbouring subtrees below
                the sibling level.

        Raises:
            InvalidConfigError: If a parameter is out of range.
        """
        self._level_spacing = validate_non_negative("level_spacing", level_spacing)
        self._sibling_spacing = validate_non_negative("sibling_spacing", sibling_spacing)
        self._subtree_spacing = validate_non_negative("subtree_spacing", subtree_spacing)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Tree"

    @property
    def description(self) -> str:
        return "Reingold-Tilford compact tree layout"

    @property
    def supported_directions(self) -> frozenset[LayoutDirection]:
        return frozenset({LayoutDirection.TOP_TO_BOTTOM, LayoutDirection.LEFT_TO_RIGHT})

    @property
    def level_spacing(self) -> float:
        """Get separation between tree levels."""
        return self._level_spacing

    @property
    def sibling_spacing(self) -> float:
        """Get separation between sibling nodes."""
        return self._sibling_spacing

    @property
    def subtree_spacing(self) -> float:
        return self._subtree_spacing

    # -------------------------------------------------------------------------
    # Tree Construction
    # -------------------------------------------------------------------------

    def _find_roots(self, graph: LayoutGraph) -> list[str]:
        """Nodes with no incoming edge, or the first node if there are none."""
        roots = [node_id for node_id in graph.node_map if not graph.incoming[node_id]]
        if not roots:
            first = graph.node_ids[0]
            warnings.warn(
                "No root node found (all nodes have incoming edges). "
                f"Using {first!r} as root; the graph is not a tree.",
                GraphStructureWarning,
                stacklevel=4,
            )
            roots = [first]
        return roots

    def _build_forest(self, graph: LayoutGraph, arena: TreeArena, horizontal: bool) -> None:
        """Depth-first spanning forest: each node joins the first parent reaching it."""
        visited: set[str] = set()

        def extent(node_id: str) -> float:
            node = graph.node_map[node_id]
            return node.height if horizontal else node.width

        def grow(root_id: str) -> None:
            visited.add(root_id)
            root = arena.add(root_id, extent(root_id), 0, arena.root)
            stack = [(root, iter(graph.outgoing[root_id]))]
            while stack:
                parent, successors = stack[-1]
                for child_id in successors:
                    if child_id not in visited:
                        visited.add(child_id)
                        depth = arena.records[parent].depth + 1
                        child = arena.add(child_id, extent(child_id), depth, parent)
                        stack.append((child, iter(graph.outgoing[child_id])))
                        break
                else:
                    stack.pop()

        for root_id in self._find_roots(graph):
            grow(root_id)

        unreached = [node_id for node_id in graph.node_map if node_id not in visited]
        if unreached:
            warnings.warn(
                f"Found {len(unreached)} node(s) not reachable from any root. "
                "They are laid out as additional trees.",
                GraphStructureWarning,
                stacklevel=4,
            )
        for node_id in unreached:
            if node_id not in visited:
                grow(node_id)

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
        if not self.supports(direction):
            warnings.warn(
                f"{self.name} layout does not support {direction.value!r}; "
                f"using the {'horizontal' if direction.is_horizontal else 'vertical'} "
                "orientation without reversal.",
                GraphStructureWarning,
                stacklevel=3,
            )

        horizontal = direction.is_horizontal
        level_spacing = options.resolve_layer_spacing(self._level_spacing)
        sibling_spacing = options.resolve_node_spacing(self._sibling_spacing)

        arena = TreeArena(sibling_spacing, self._subtree_spacing)
        self._build_forest(graph, arena, horizontal)
        arena.first_walk()
        arena.second_walk()

        positions: dict[str, Point] = {}
        for rec in arena.placed():
            assert rec.node_id is not None
            depth_coord = (rec.depth + 1) * level_spacing
            if horizontal:
                positions[rec.node_id] = Point(depth_coord, rec.x)
            else:
                positions[rec.node_id] = Point(rec.x, depth_coord)

        positions = self._center_in_bounds(positions, graph, bounds)

        entry = PortSide.LEFT if horizontal else PortSide.TOP
        exit_ = entry.opposite()

        return LayoutResult(
            positions=positions,
            entry_ports={node_id: entry for node_id in graph.node_map},
            exit_ports={node_id: exit_ for node_id in graph.node_map},
        )

    def _center_in_bounds(
        self, positions: dict[str, Point], graph: LayoutGraph, bounds: Size
    ) -> dict[str, Point]:
        """Translate positions so the bounding box of all nodes is centred."""
        min_x, min_y, max_x, max_y = self._bounding_box(positions, graph)
        dx = bounds.width / 2 - (min_x + max_x) / 2
        dy = bounds.height / 2 - (min_y + max_y) / 2
        return {node_id: Point(p.x + dx, p.y + dy) for node_id, p in positions.items()}

    def __repr__(self) -> str:
        return (
            f"TreeLayout(level_spacing={self._level_spacing:g}, "
            f"sibling_spacing={self._sibling_spacing:g}, "
            f"subtree_spacing={self._subtree_spacing:g})"
        )


__all__ = ["TreeLayout", "TreeArena", "TreeRecord"]
