"""
Force-directed graph layout algorithms.

This module provides the physics-based layout:
- ForceDirectedLayout: Spring/repulsion simulation with Barnes-Hut acceleration
"""

from .fruchterman_reingold import ForceDirectedLayout

__all__ = [
    "ForceDirectedLayout",
]
