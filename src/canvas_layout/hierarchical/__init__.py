"""
Hierarchical graph layout algorithms.

This module provides algorithms for laying out trees and DAGs:
- HierarchicalLayout: Sugiyama-style layered layout
- TreeLayout: Reingold-Tilford tidy tree layout
"""

from .reingold_tilford import TreeLayout
from .sugiyama import HierarchicalLayout, assign_layers, minimize_crossings

__all__ = [
    "HierarchicalLayout",
    "TreeLayout",
    "assign_layers",
    "minimize_crossings",
]
