"""
Sankey layout pipeline.

Runs the phases in order:
1. Graph validation and node values (GraphModel)
2. Column assignment (LayeringEngine)
3. Horizontal placement (ColumnScaler)
4. Vertical scale and initial stacking (NodeSizer)
5. Relaxation passes (VerticalRelaxer)
6. Link ordering and attachment (LinkRouter)

A run is a pure function of (graph, config): every run builds its own
working nodes and links and returns an immutable LayoutResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

if TYPE_CHECKING:
    from typing_extensions import Self

from .columns import ColumnScaler
from .config import DEFAULT_CONFIG, SankeyConfig
from .graph import GraphModel
from .layering import LayeringEngine
from .relaxation import VerticalRelaxer
from .routing import LinkRouter
from .sizing import NodeSizer
from .types import (
    AlignLike,
    GraphSpec,
    LayoutResult,
    Link,
    LinkColorMode,
    LinkLayout,
    LinkLike,
    Node,
    NodeAlign,
    NodeLayout,
    NodeLike,
)


def _freeze(
    nodes: Sequence[Node],
    links: Sequence[Link],
    config: SankeyConfig,
    ky: float,
    node_padding: float,
    padding_relaxed: bool,
) -> LayoutResult:
    return LayoutResult(
        nodes=tuple(
            NodeLayout(
                id=node.id,
                column=node.column,
                x0=node.x0,
                x1=node.x1,
                y0=node.y0,
                y1=node.y1,
                value=node.value,
                attrs=dict(node.attrs),
            )
            for node in nodes
        ),
        links=tuple(
            LinkLayout(
                source_id=link.source.id,
                target_id=link.target.id,
                value=link.value,
                x0=link.source.x1,
                x1=link.target.x0,
                y0=link.y0,
                y1=link.y1,
                width=link.width,
            )
            for link in links
        ),
        ky=ky,
        node_padding=node_padding,
        padding_relaxed=padding_relaxed,
        width=config.width,
        height=config.height,
    )


def compute_layout(
    graph: Union[GraphModel, GraphSpec],
    config: SankeyConfig = DEFAULT_CONFIG,
) -> LayoutResult:
    """
    Lay out a flow graph.

    Args:
        graph: Validated GraphModel, or a GraphSpec to validate first
        config: Layout settings

    Returns:
        LayoutResult with node extents and link attachments. An empty graph
        yields an empty result.

    Raises:
        DuplicateNodeIdError: Two declared nodes share an id (GraphSpec input).
        InvalidValueError: A link value is non-positive or non-finite (GraphSpec input).
        CycleDetectedError: The graph is not a DAG.

    Warns:
        InsufficientHeightWarning: Padding was relaxed to fit the canvas.
    """
    if isinstance(graph, GraphSpec):
        graph = GraphModel.from_spec(graph)

    nodes, links = graph.build()
    if not nodes:
        return LayoutResult(
            node_padding=config.node_padding, width=config.width, height=config.height
        )

    max_column = LayeringEngine(config.align).assign(nodes)

    ColumnScaler(config.width, config.margin, config.node_width).apply(nodes, max_column)

    sizer = NodeSizer(config.height, config.margin, config.node_padding, config.min_node_height)
    sizing = sizer.apply(nodes, max_column)

    relaxer = VerticalRelaxer(
        config.height, config.margin, sizing.node_padding, config.iterations
    )
    relaxer.relax(sizing.columns)

    LinkRouter(sizing.ky).route(nodes)

    return _freeze(nodes, links, config, sizing.ky, sizing.node_padding, sizing.padding_relaxed)


class SankeyLayout:
    """
    Sankey flow layout.

    Places nodes in columns, sizes them by flow and stacks links so their
    widths add up at every node.

    Example:
        layout = SankeyLayout(
            nodes=["A", "B", "C"],
            links=[
                {"source": "A", "target": "B", "value": 3},
                {"source": "A", "target": "C", "value": 4},
            ],
            size=(800, 400),
            align="justify",
        )
        result = layout.run().result

        for node in result.nodes:
            print(node.id, node.x0, node.y0, node.y1)
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        config: Optional[SankeyConfig] = None,
        size: Optional[tuple[float, float]] = None,
        **options: Any,
    ) -> None:
        """
        Initialize Sankey layout.

        Args:
            nodes: Node descriptors (ids, dicts with 'id'/'name', or NodeSpec)
            links: Link descriptors (dicts, (source, target, value) tuples, or LinkSpec)
            config: Base settings; defaults to DEFAULT_CONFIG
            size: Canvas size as (width, height)
            **options: Any SankeyConfig field, e.g. ``node_width=24``

        Raises:
            InvalidConfigError: If a setting is invalid.
        """
        self._nodes: list[NodeLike] = list(nodes or [])
        self._links: list[LinkLike] = list(links or [])
        self._graph: Optional[GraphModel] = None
        self._result: Optional[LayoutResult] = None

        config = config or DEFAULT_CONFIG
        if size is not None:
            options["width"], options["height"] = size
        self._config = config.replace(**options) if options else config

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[NodeLike]:
        """Get the declared node descriptors."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        self._nodes = list(value)
        self._graph = None

    @property
    def links(self) -> list[LinkLike]:
        """Get the declared link descriptors."""
        return self._links

    @links.setter
    def links(self, value: Sequence[LinkLike]) -> None:
        self._links = list(value)
        self._graph = None

    @property
    def config(self) -> SankeyConfig:
        """Get the current settings snapshot."""
        return self._config

    @config.setter
    def config(self, value: SankeyConfig) -> None:
        self._config = value

    @property
    def size(self) -> tuple[float, float]:
        """Get canvas size as (width, height)."""
        return self._config.width, self._config.height

    @size.setter
    def size(self, value: tuple[float, float]) -> None:
        width, height = value
        self._config = self._config.replace(width=width, height=height)

    @property
    def align(self) -> NodeAlign:
        """Get column alignment mode."""
        return self._config.align  # type: ignore[return-value]

    @align.setter
    def align(self, value: AlignLike) -> None:
        self._config = self._config.replace(align=value)

    @property
    def node_width(self) -> float:
        """Get node thickness."""
        return self._config.node_width

    @node_width.setter
    def node_width(self, value: float) -> None:
        self._config = self._config.replace(node_width=value)

    @property
    def node_padding(self) -> float:
        """Get requested vertical gap between nodes."""
        return self._config.node_padding

    @node_padding.setter
    def node_padding(self, value: float) -> None:
        self._config = self._config.replace(node_padding=value)

    @property
    def iterations(self) -> int:
        """Get number of relaxation passes."""
        return self._config.iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        self._config = self._config.replace(iterations=value)

    @property
    def link_color(self) -> LinkColorMode:
        """Get link colouring mode (used by renderers)."""
        return self._config.link_color  # type: ignore[return-value]

    @link_color.setter
    def link_color(self, value: Union[LinkColorMode, str]) -> None:
        self._config = self._config.replace(link_color=value)

    @property
    def graph(self) -> GraphModel:
        """Validated graph, built on first access after nodes/links change."""
        if self._graph is None:
            self._graph = GraphModel(nodes=self._nodes, links=self._links)
        return self._graph

    @property
    def result(self) -> LayoutResult:
        """Result of the last run()."""
        if self._result is None:
            raise RuntimeError("Layout has not been run yet; call run() first")
        return self._result

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Validate the graph without laying it out.

        Returns:
            self (for chaining)

        Raises:
            DuplicateNodeIdError, InvalidValueError, CycleDetectedError
        """
        nodes, _ = self.graph.build()
        LayeringEngine(self._config.align).columns(nodes)
        return self

    def run(self) -> Self:
        """
        Compute the layout from scratch with the current settings.

        Returns:
            self (for chaining); the output is available as ``result``.
        """
        self._result = None
        self._result = compute_layout(self.graph, self._config)
        return self


__all__ = ["SankeyLayout", "compute_layout"]
