"""
canvas-layout: Automatic node placement for visual node/edge canvases.

This package positions sized nodes inside a bounded drawing area so that
connected nodes read in a sensible direction.

Available algorithms:
- hierarchical: Layered DAG layout (Sugiyama) and tidy tree layout (Reingold-Tilford)
- force: Force-directed layout with Barnes-Hut acceleration
"""

__version__ = "0.1.0"

# Shared contract for all algorithms
from .base import LayoutAlgorithm, LayoutGraph

# Force-directed layout
from .force import ForceDirectedLayout

# Hierarchical layouts
from .hierarchical import (
    HierarchicalLayout,
    TreeLayout,
    assign_layers,
    minimize_crossings,
)

# Metrics for layout quality evaluation
from .metrics import (
    count_layer_crossings,
    layout_quality_summary,
    total_edge_length,
)

# Example graphs
from .presets import GraphPreset, all_presets

# Algorithm selection
from .registry import AlgorithmKind, available_algorithms, create_algorithm

# Spatial data structures
from .spatial import Body, QuadTree
from .types import (
    LayoutDirection,
    LayoutEdge,
    LayoutNode,
    LayoutOptions,
    LayoutResult,
    OptionsLike,
    Point,
    PointLike,
    PortSide,
    Size,
    SizeLike,
)

# Validation utilities
from .validation import (
    GraphStructureWarning,
    InvalidConfigError,
    ValidationError,
    parse_direction,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Point",
    "Size",
    "PortSide",
    "LayoutDirection",
    "LayoutNode",
    "LayoutEdge",
    "LayoutOptions",
    "LayoutResult",
    # Type aliases for API
    "PointLike",
    "SizeLike",
    "OptionsLike",
    # Base classes
    "LayoutAlgorithm",
    "LayoutGraph",
    # Algorithms
    "HierarchicalLayout",
    "TreeLayout",
    "ForceDirectedLayout",
    # Algorithm selection
    "AlgorithmKind",
    "create_algorithm",
    "available_algorithms",
    # Layering helpers
    "assign_layers",
    "minimize_crossings",
    # Metrics
    "total_edge_length",
    "count_layer_crossings",
    "layout_quality_summary",
    # Presets
    "GraphPreset",
    "all_presets",
    # Spatial
    "Body",
    "QuadTree",
    # Validation
    "ValidationError",
    "InvalidConfigError",
    "GraphStructureWarning",
    "parse_direction",
]
