"""
Predefined graphs for exercising and comparing layout algorithms.

Each preset is a small, fixed graph with a known shape: DAGs with joins,
balanced and wide trees, a long chain, a crossing-prone diamond, seeded
random graphs and a workflow with several forks and merges.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from .types import LayoutEdge, LayoutNode, Size


@dataclass(frozen=True)
class GraphPreset:
    """A named graph fixture."""

    name: str
    description: str
    nodes: tuple[LayoutNode, ...]
    edges: tuple[LayoutEdge, ...]

    def __repr__(self) -> str:
        return f"GraphPreset({self.name!r}, nodes={len(self.nodes)}, edges={len(self.edges)})"


def _nodes(ids: list[str], size: Size) -> tuple[LayoutNode, ...]:
    return tuple(LayoutNode(node_id, size) for node_id in ids)


def _edges(pairs: list[tuple[str, str]], prefix: str = "e") -> tuple[LayoutEdge, ...]:
    return tuple(
        LayoutEdge(f"{prefix}{i}", src, tgt) for i, (src, tgt) in enumerate(pairs, start=1)
    )


def simple_dag() -> GraphPreset:
    """Simple DAG with clear hierarchy (6 nodes, 7 edges)."""
    return GraphPreset(
        name="Simple DAG",
        description="6 nodes, clear hierarchy",
        nodes=_nodes(["a", "b", "c", "d", "e", "f"], Size(80, 50)),
        edges=_edges(
            [
                ("a", "b"),
                ("a", "c"),
                ("b", "d"),
                ("c", "d"),
                ("c", "e"),
                ("d", "f"),
                ("e", "f"),
            ]
        ),
    )


def binary_tree(count: int = 15) -> GraphPreset:
    """Balanced binary tree: node ``n{i}`` has children ``n{2i+1}`` and ``n{2i+2}``."""
    nodes = _nodes([f"n{i}" for i in range(count)], Size(60, 40))
    edges: list[LayoutEdge] = []
    for i in range(count):
        for side, child in (("l", 2 * i + 1), ("r", 2 * i + 2)):
            if child < count:
                edges.append(LayoutEdge(f"e{i}{side}", f"n{i}", f"n{child}"))
    return GraphPreset(
        name="Binary Tree",
        description=f"{count} nodes, balanced",
        nodes=nodes,
        edges=tuple(edges),
    )


def wide_tree() -> GraphPreset:
    """Shallow, wide tree: root, 5 children, 3/3/3/2/2 grandchildren."""
    size = Size(60, 40)
    nodes = [LayoutNode("root", size)]
    edges: list[LayoutEdge] = []
    for i in range(5):
        nodes.append(LayoutNode(f"l1_{i}", size))
        edges.append(LayoutEdge(f"e_root_{i}", "root", f"l1_{i}"))
        for j in range(3 if i < 3 else 2):
            nodes.append(LayoutNode(f"l2_{i}_{j}", size))
            edges.append(LayoutEdge(f"e_l1{i}_{j}", f"l1_{i}", f"l2_{i}_{j}"))
    return GraphPreset(
        name="Wide Tree",
        description=f"{len(nodes)} nodes, shallow and wide",
        nodes=tuple(nodes),
        edges=tuple(edges),
    )


def deep_chain(count: int = 10) -> GraphPreset:
    """Linear chain ``n0 -> n1 -> ... -> n{count-1}``."""
    ids = [f"n{i}" for i in range(count)]
    return GraphPreset(
        name="Deep Chain",
        description=f"{count} nodes, linear",
        nodes=_nodes(ids, Size(70, 45)),
        edges=tuple(LayoutEdge(f"e{i}", ids[i - 1], ids[i]) for i in range(1, count)),
    )


def diamond() -> GraphPreset:
    """Diamond with cross edges (5 nodes, 7 edges), for crossing minimization."""
    return GraphPreset(
        name="Diamond",
        description="5 nodes, tests crossing minimization",
        nodes=_nodes(["top", "left", "right", "center", "bottom"], Size(80, 50)),
        edges=_edges(
            [
                ("top", "left"),
                ("top", "right"),
                ("left", "center"),
                ("right", "center"),
                ("center", "bottom"),
                ("left", "bottom"),
                ("right", "bottom"),
            ]
        ),
    )


def random_sparse(seed: int = 42) -> GraphPreset:
    """Seeded random forward-only graph (15 nodes, 12 edges)."""
    rng = random.Random(seed)
    nodes = _nodes([f"n{i}" for i in range(15)], Size(70, 45))
    edges: list[LayoutEdge] = []
    for i in range(14):
        if len(edges) >= 12:
            break
        target = i + 1 + rng.randrange(14 - i)
        edges.append(LayoutEdge(f"e{len(edges)}", f"n{i}", f"n{target}"))
    return GraphPreset(
        name="Random Sparse",
        description=f"15 nodes, {len(edges)} edges",
        nodes=nodes,
        edges=tuple(edges),
    )


def random_dense(seed: int = 42) -> GraphPreset:
    """Seeded random graph with 40 distinct edges between 15 nodes."""
    rng = random.Random(seed)
    nodes = _nodes([f"n{i}" for i in range(15)], Size(70, 45))
    seen: set[tuple[int, int]] = set()
    edges: list[LayoutEdge] = []
    while len(edges) < 40:
        a, b = rng.randrange(15), rng.randrange(15)
        if a == b:
            continue
        pair = (min(a, b), max(a, b))
        if pair in seen:
            continue
        seen.add(pair)
        edges.append(LayoutEdge(f"e{len(edges)}", f"n{pair[0]}", f"n{pair[1]}"))
    return GraphPreset(
        name="Random Dense",
        description=f"15 nodes, {len(edges)} edges",
        nodes=nodes,
        edges=tuple(edges),
    )


def workflow() -> GraphPreset:
    """
    Action flow with several forks and joins (16 nodes, 20 edges).

    trigger -> validate forks three ways (fast_track, route, error_handler);
    route forks again (api_call, db_query); the branches merge into
    transform and check; check forks into success/failure paths that
    rejoin at log and end, with notify also passing through archive.
    """
    ids = [
        "trigger",
        "validate",
        "fast_track",
        "route",
        "error_handler",
        "api_call",
        "db_query",
        "transform",
        "check",
        "success",
        "failure",
        "notify",
        "alert",
        "log",
        "end",
        "archive",
    ]
    return GraphPreset(
        name="Workflow",
        description="16 nodes, multi-fork action flow",
        nodes=_nodes(ids, Size(80, 45)),
        edges=_edges(
            [
                ("trigger", "validate"),
                ("validate", "fast_track"),
                ("validate", "route"),
                ("validate", "error_handler"),
                ("route", "api_call"),
                ("route", "db_query"),
                ("fast_track", "check"),
                ("api_call", "transform"),
                ("db_query", "transform"),
                ("error_handler", "transform"),
                ("transform", "check"),
                ("check", "success"),
                ("check", "failure"),
                ("success", "notify"),
                ("notify", "log"),
                ("failure", "alert"),
                ("alert", "log"),
                ("log", "end"),
                ("notify", "archive"),
                ("archive", "end"),
            ]
        ),
    )


PRESET_FACTORIES: dict[str, Callable[[], GraphPreset]] = {
    "simple_dag": simple_dag,
    "binary_tree": binary_tree,
    "wide_tree": wide_tree,
    "deep_chain": deep_chain,
    "diamond": diamond,
    "random_sparse": random_sparse,
    "random_dense": random_dense,
    "workflow": workflow,
}


def all_presets() -> list[GraphPreset]:
    """All presets in display order."""
    return [factory() for factory in PRESET_FACTORIES.values()]


__all__ = [
    "GraphPreset",
    "PRESET_FACTORIES",
    "all_presets",
    "simple_dag",
    "binary_tree",
    "wide_tree",
    "deep_chain",
    "diamond",
    "random_sparse",
    "random_dense",
    "workflow",
]
