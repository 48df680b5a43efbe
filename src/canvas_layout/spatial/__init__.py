"""
Spatial data structures for efficient force calculations.

Provides quadtree implementation for Barnes-Hut O(n log n) force approximation.
"""

from .quadtree import MIN_DISTANCE, Body, QuadTree

__all__ = ["Body", "QuadTree", "MIN_DISTANCE"]
