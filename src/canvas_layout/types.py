"""
Common types for graph layout algorithms.

This module provides the value types shared by every layout algorithm:
- Point, Size: Geometry primitives
- LayoutDirection: Flow direction for layered and tree layouts
- PortSide: Side of a node where edges attach
- LayoutNode: Graph vertex with size and optional pinned position
- LayoutEdge: Directed edge between two node ids
- LayoutOptions: Spacing overrides recognised by every algorithm
- LayoutResult: Output of a single layout call
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, NamedTuple, Optional, Union

if TYPE_CHECKING:
    from typing_extensions import Self


class Point(NamedTuple):
    """A 2D point (node centre)."""

    x: float
    y: float

    def distance_to(self, other: tuple[float, float]) -> float:
        """Euclidean distance to another point."""
        return math.hypot(other[0] - self.x, other[1] - self.y)


class Size(NamedTuple):
    """Width and height of a node or layout area."""

    width: float
    height: float


class PortSide(Enum):
    """Side of a node where edges enter or exit."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> PortSide:
        """Get the opposite side."""
        opposites = {
            PortSide.TOP: PortSide.BOTTOM,
            PortSide.BOTTOM: PortSide.TOP,
            PortSide.LEFT: PortSide.RIGHT,
            PortSide.RIGHT: PortSide.LEFT,
        }
        return opposites[self]


class LayoutDirection(Enum):
    """Flow direction for hierarchical and tree layouts."""

    TOP_TO_BOTTOM = "top-to-bottom"
    BOTTOM_TO_TOP = "bottom-to-top"
    LEFT_TO_RIGHT = "left-to-right"
    RIGHT_TO_LEFT = "right-to-left"

    @property
    def is_horizontal(self) -> bool:
        """True if edges flow along the x axis."""
        return self in (LayoutDirection.LEFT_TO_RIGHT, LayoutDirection.RIGHT_TO_LEFT)

    @property
    def is_reversed(self) -> bool:
        """True if layers are stacked against the coordinate axis."""
        return self in (LayoutDirection.BOTTOM_TO_TOP, LayoutDirection.RIGHT_TO_LEFT)

    def entry_side(self) -> PortSide:
        """Side where edges enter a node for this flow direction."""
        entries = {
            LayoutDirection.TOP_TO_BOTTOM: PortSide.TOP,
            LayoutDirection.BOTTOM_TO_TOP: PortSide.BOTTOM,
            LayoutDirection.LEFT_TO_RIGHT: PortSide.LEFT,
            LayoutDirection.RIGHT_TO_LEFT: PortSide.RIGHT,
        }
        return entries[self]

    def exit_side(self) -> PortSide:
        """Side where edges leave a node for this flow direction."""
        return self.entry_side().opposite()


@dataclass(frozen=True)
class LayoutNode:
    """
    A node to be positioned by a layout algorithm.

    Attributes:
        id: Unique identifier within one layout call
        size: (width, height), used for spacing and never modified
        pinned: Optional fixed centre position; the node ends exactly here
    """

    id: str
    size: Size = Size(0.0, 0.0)
    pinned: Optional[Point] = None

    def __post_init__(self) -> None:
        if not isinstance(self.size, Size):
            object.__setattr__(self, "size", Size(*self.size))
        if self.pinned is not None and not isinstance(self.pinned, Point):
            object.__setattr__(self, "pinned", Point(*self.pinned))

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height

    def __repr__(self) -> str:
        return f"LayoutNode({self.id!r}, {self.size.width:g}x{self.size.height:g})"


@dataclass(frozen=True)
class LayoutEdge:
    """
    Directed edge between two nodes.

    An edge whose endpoint is not among the layout's nodes is ignored.
    """

    id: str
    from_id: str
    to_id: str

    def __repr__(self) -> str:
        return f"LayoutEdge({self.from_id} -> {self.to_id})"


_OPTION_KEYS = {
    "layer_spacing": ("layerSpacing", "layer_spacing"),
    "node_spacing": ("nodeSpacing", "node_spacing"),
}


def _as_number(value: Any) -> Optional[float]:
    """Return value as float if it is a finite real number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class LayoutOptions:
    """
    Spacing overrides understood by every layout algorithm.

    A value of None means "use the algorithm's configured default".

    Attributes:
        layer_spacing: Distance between layers/levels; for force-directed
            layout this is the ideal edge length.
        node_spacing: Distance between neighbouring nodes in a layer or
            between tree siblings.
    """

    layer_spacing: Optional[float] = None
    node_spacing: Optional[float] = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> Self:
        """
        Build options from a string-keyed bag.

        Recognises ``layerSpacing``/``nodeSpacing`` (and their snake_case
        spellings). Unknown keys and non-numeric values are ignored.
        """
        if not options:
            return cls()
        values: dict[str, Optional[float]] = {}
        for attr, keys in _OPTION_KEYS.items():
            for key in keys:
                number = _as_number(options.get(key))
                if number is not None:
                    values[attr] = number
                    break
        return cls(**values)

    @classmethod
    def coerce(cls, options: Union[LayoutOptions, Mapping[str, Any], None]) -> LayoutOptions:
        """Accept either a LayoutOptions instance or a mapping."""
        if isinstance(options, LayoutOptions):
            return options
        return cls.from_mapping(options)

    def resolve_layer_spacing(self, default: float) -> float:
        return default if self.layer_spacing is None else self.layer_spacing

    def resolve_node_spacing(self, default: float) -> float:
        return default if self.node_spacing is None else self.node_spacing


@dataclass(frozen=True)
class LayoutResult:
    """
    Result of a layout computation.

    Attributes:
        positions: Centre position for every input node id
        entry_ports: Side where edges enter each node (may be empty)
        exit_ports: Side where edges exit each node (may be empty)
        edge_crossings: Crossing count between adjacent layers (0 if not computed)
        total_edge_length: Sum of Euclidean distances between connected nodes
        compute_time: Wall-clock seconds spent in the call (diagnostics only)
        iterations: Simulation steps performed (0 for non-iterative layouts)
        layers: Final layer ordering for layered layouts (empty otherwise)
    """

    positions: Mapping[str, Point] = field(default_factory=dict)
    entry_ports: Mapping[str, PortSide] = field(default_factory=dict)
    exit_ports: Mapping[str, PortSide] = field(default_factory=dict)
    edge_crossings: int = 0
    total_edge_length: float = 0.0
    compute_time: float = 0.0
    iterations: int = 0
    layers: tuple[tuple[str, ...], ...] = ()

    @classmethod
    def empty(cls, compute_time: float = 0.0) -> LayoutResult:
        """Result for an empty graph."""
        return cls(compute_time=compute_time)

    def get_entry_port(self, node_id: str, direction: LayoutDirection) -> PortSide:
        """Entry port for a node, defaulting from the flow direction."""
        port = self.entry_ports.get(node_id)
        return port if port is not None else direction.entry_side()

    def get_exit_port(self, node_id: str, direction: LayoutDirection) -> PortSide:
        """Exit port for a node, defaulting from the flow direction."""
        port = self.exit_ports.get(node_id)
        return port if port is not None else direction.exit_side()


PointLike = Union[Point, tuple[float, float]]
"""Input type for points: Point or (x, y) tuple."""

SizeLike = Union[Size, tuple[float, float]]
"""Input type for sizes and bounds: Size or (width, height) tuple."""

OptionsLike = Union[LayoutOptions, Mapping[str, Any], None]
"""Input type for options: LayoutOptions, a string-keyed mapping, or None."""


__all__ = [
    "Point",
    "Size",
    "PortSide",
    "LayoutDirection",
    "LayoutNode",
    "LayoutEdge",
    "LayoutOptions",
    "LayoutResult",
    "PointLike",
    "SizeLike",
    "OptionsLike",
]
