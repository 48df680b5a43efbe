"""
The closed set of layout algorithms.

Callers such as a UI pick an algorithm by kind; every kind maps to exactly
one LayoutAlgorithm implementation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from .base import LayoutAlgorithm
from .force import ForceDirectedLayout
from .hierarchical import HierarchicalLayout, TreeLayout


class AlgorithmKind(Enum):
    """Available layout algorithms."""

    HIERARCHICAL = "hierarchical"
    TREE = "tree"
    FORCE = "force"

    @property
    def algorithm_class(self) -> type[LayoutAlgorithm]:
        classes: dict[AlgorithmKind, type[LayoutAlgorithm]] = {
            AlgorithmKind.HIERARCHICAL: HierarchicalLayout,
            AlgorithmKind.TREE: TreeLayout,
            AlgorithmKind.FORCE: ForceDirectedLayout,
        }
        return classes[self]


def create_algorithm(kind: Union[AlgorithmKind, str], **config: Any) -> LayoutAlgorithm:
    """
    Construct an algorithm by kind.

    Args:
        kind: AlgorithmKind or its string value ("hierarchical", "tree", "force")
        **config: Keyword arguments for the algorithm's constructor

    Returns:
        Configured algorithm instance

    Raises:
        ValueError: If kind is not a known algorithm
        InvalidConfigError: If a configuration value is out of range
        TypeError: If a configuration keyword is not accepted
    """
    return AlgorithmKind(kind).algorithm_class(**config)


def available_algorithms() -> list[LayoutAlgorithm]:
    """Default-configured instances of every algorithm, in display order."""
    return [kind.algorithm_class() for kind in AlgorithmKind]


__all__ = [
    "AlgorithmKind",
    "create_algorithm",
    "available_algorithms",
]
