"""
Common types for Sankey flow layout.

This module provides the fundamental types used across the layout pipeline:
- NodeAlign: Column alignment modes
- LinkColorMode: Link colouring modes (consumed by renderers only)
- NodeSpec, LinkSpec, GraphSpec: Input graph descriptors
- Node, Link: Mutable working objects owned by a single layout run
- NodeLayout, LinkLayout, LayoutResult: Immutable layout output
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union


class NodeAlign(Enum):
    """
    Column alignment modes.

    - left: Nodes sit at their longest-path depth from a source
    - right: Every path ends in the final column
    - center: Like left, but lone sources move next to their consumers
    - justify: Like left, but sinks move to the final column
    """

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFY = "justify"


class LinkColorMode(Enum):
    """How a renderer colours links."""

    NONE = "none"
    SOURCE = "source"
    TARGET = "target"


# =============================================================================
# Input descriptors
# =============================================================================


@dataclass(frozen=True)
class NodeSpec:
    """A declared node: identifier plus optional display attributes."""

    id: str
    attrs: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LinkSpec:
    """A declared link between two node identifiers."""

    source: str
    target: str
    value: float


@dataclass(frozen=True)
class GraphSpec:
    """Graph description handed over by a parser."""

    nodes: tuple[NodeSpec, ...] = ()
    links: tuple[LinkSpec, ...] = ()


# =============================================================================
# Working objects
# =============================================================================


class Node:
    """
    Graph node with column, extent and flow value.

    Attributes:
        index: Position in the run's node list
        id: Unique identifier
        value: Flow magnitude, max(incoming, outgoing)
        column: Column assigned by the layering step
        x0, x1: Horizontal extent
        y0, y1: Vertical extent
        source_links: Outgoing links (this node is their source)
        target_links: Incoming links (this node is their target)
        attrs: Display attributes passed through to the result
    """

    def __init__(
        self,
        id: str,
        index: int = 0,
        value: float = 0.0,
        attrs: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.index = index
        self.id = id
        self.value = value
        self.column = 0
        self.x0 = 0.0
        self.x1 = 0.0
        self.y0 = 0.0
        self.y1 = 0.0
        self.source_links: list[Link] = []
        self.target_links: list[Link] = []
        self.attrs: dict[str, Any] = dict(attrs or {})

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def center(self) -> float:
        return (self.y0 + self.y1) / 2

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, column={self.column}, y0={self.y0:.2f}, y1={self.y1:.2f})"


class Link:
    """
    Directed flow between two nodes.

    Attributes:
        index: Position in the run's link list
        source: Source node
        target: Target node
        value: Flow quantity (> 0)
        width: Band thickness, value * ky
        y0: Attachment centre on the source node
        y1: Attachment centre on the target node
    """

    def __init__(self, source: Node, target: Node, value: float, index: int = 0) -> None:
        if source is None:
            raise ValueError("Link source cannot be None")
        if target is None:
            raise ValueError("Link target cannot be None")

        self.index = index
        self.source = source
        self.target = target
        self.value = value
        self.width = 0.0
        self.y0 = 0.0
        self.y1 = 0.0

    def __repr__(self) -> str:
        return f"Link({self.source.id!r} -> {self.target.id!r}, value={self.value})"


# =============================================================================
# Layout output
# =============================================================================


@dataclass(frozen=True)
class NodeLayout:
    """Final placement of one node."""

    id: str
    column: int
    x0: float
    x1: float
    y0: float
    y1: float
    value: float
    attrs: Mapping[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0


@dataclass(frozen=True)
class LinkLayout:
    """
    Final attachment geometry of one link.

    ``y0``/``y1`` are the vertical centres of the link band where it meets
    the source and target node. ``x0``/``x1`` are the source node's right
    edge and the target node's left edge.
    """

    source_id: str
    target_id: str
    value: float
    x0: float
    x1: float
    y0: float
    y1: float
    width: float

    @property
    def control_points(
        self,
    ) -> tuple[tuple[float, float], tuple[float, float], tuple[float, float], tuple[float, float]]:
        """Cubic Bezier points of a horizontal S-curve from source to target."""
        mid = (self.x0 + self.x1) / 2
        return ((self.x0, self.y0), (mid, self.y0), (mid, self.y1), (self.x1, self.y1))


@dataclass(frozen=True)
class LayoutResult:
    """
    Immutable output of one layout run.

    Nodes keep their input order; links keep their input order too, while
    each node's ``source_links``/``target_links`` ordering is reflected in the
    attachment offsets.
    """

    nodes: tuple[NodeLayout, ...] = ()
    links: tuple[LinkLayout, ...] = ()
    ky: float = 0.0
    node_padding: float = 0.0
    padding_relaxed: bool = False
    width: float = 0.0
    height: float = 0.0

    @property
    def max_column(self) -> int:
        return max((n.column for n in self.nodes), default=0)

    def node(self, node_id: str) -> NodeLayout:
        """Look up a node by identifier."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def links_between(self, source_id: str, target_id: str) -> list[LinkLayout]:
        """All links from ``source_id`` to ``target_id``."""
        return [
            link
            for link in self.links
            if link.source_id == source_id and link.target_id == target_id
        ]

    def is_empty(self) -> bool:
        return not self.nodes


# Type aliases for Pythonic API
NodeLike = Union[NodeSpec, str, Mapping[str, Any]]
"""Input type for nodes: NodeSpec, bare identifier, or dict with 'id'/'name'."""

LinkLike = Union[LinkSpec, Mapping[str, Any], Sequence[Any]]
"""Input type for links: LinkSpec, dict with source/target/value, or 3-tuple."""

AlignLike = Union[NodeAlign, str]
"""Alignment: NodeAlign member or its string value."""


__all__ = [
    "NodeAlign",
    "LinkColorMode",
    "NodeSpec",
    "LinkSpec",
    "GraphSpec",
    "Node",
    "Link",
    "NodeLayout",
    "LinkLayout",
    "LayoutResult",
    "NodeLike",
    "LinkLike",
    "AlignLike",
]
