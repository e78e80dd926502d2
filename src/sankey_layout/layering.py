"""
Column assignment for flow diagrams.

Columns come from longest-path analysis over a topological order (Kahn's
algorithm), then one of four alignment rules is applied:

- left: forward depth from the sources
- right: max column minus the longest path down to a sink
- justify: forward depth, with every sink pushed to the final column
- center: forward depth, with lone sources pulled up to their nearest consumer
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Union

from .preprocessing import detect_cycle, topological_sort
from .types import Node, NodeAlign
from .validation import CycleDetectedError

if TYPE_CHECKING:
    from .graph import GraphModel


class LayeringEngine:
    """
    Assigns an integer column to every node.

    Guarantees ``column(source) < column(target)`` for every link under all
    alignment modes.

    Example:
        engine = LayeringEngine(NodeAlign.JUSTIFY)
        max_column = engine.assign(nodes)
    """

    def __init__(self, align: Union[NodeAlign, str] = NodeAlign.LEFT) -> None:
        self._align = align if isinstance(align, NodeAlign) else NodeAlign(align)

    @property
    def align(self) -> NodeAlign:
        return self._align

    # -------------------------------------------------------------------------
    # Longest paths
    # -------------------------------------------------------------------------

    def _topological_order(self, nodes: Sequence[Node]) -> list[int]:
        edges = [
            (link.source.index, link.target.index)
            for node in nodes
            for link in node.source_links
        ]
        order = topological_sort(len(nodes), edges)
        if order is None:
            cycle = detect_cycle(len(nodes), edges) or []
            raise CycleDetectedError([nodes[i].id for i in cycle])
        return order

    @staticmethod
    def _depths(nodes: Sequence[Node], order: list[int]) -> list[int]:
        """Longest path from any source to each node."""
        depth = [0] * len(nodes)
        for i in order:
            for link in nodes[i].source_links:
                j = link.target.index
                depth[j] = max(depth[j], depth[i] + 1)
        return depth

    @staticmethod
    def _heights(nodes: Sequence[Node], order: list[int]) -> list[int]:
        """Longest path from each node to any sink."""
        height = [0] * len(nodes)
        for i in reversed(order):
            for link in nodes[i].source_links:
                height[i] = max(height[i], height[link.target.index] + 1)
        return height

    # -------------------------------------------------------------------------
    # Alignment
    # -------------------------------------------------------------------------

    @staticmethod
    def _center_column(node: Node, depth: list[int]) -> int:
        """Column just before the nearest consumer of a lone source."""
        if not node.source_links:
            return 0
        return max(0, min(depth[link.target.index] for link in node.source_links) - 1)

    def columns(self, nodes: Sequence[Node]) -> list[int]:
        """
        Compute aligned columns without touching the nodes.

        Nodes must have ``index`` equal to their position and populated
        ``source_links``/``target_links``.

        Raises:
            CycleDetectedError: If no topological order exists.
        """
        if not nodes:
            return []

        order = self._topological_order(nodes)
        depth = self._depths(nodes, order)
        max_column = max(depth)

        if self._align is NodeAlign.LEFT:
            return depth
        elif self._align is NodeAlign.RIGHT:
            height = self._heights(nodes, order)
            return [max_column - h for h in height]
        elif self._align is NodeAlign.JUSTIFY:
            return [
                depth[i] if node.source_links else max_column for i, node in enumerate(nodes)
            ]
        elif self._align is NodeAlign.CENTER:
            return [
                self._center_column(node, depth) if not node.target_links else depth[i]
                for i, node in enumerate(nodes)
            ]
        raise ValueError(f"Unknown alignment: {self._align}")

    def assign(self, nodes: Sequence[Node]) -> int:
        """
        Set ``node.column`` on every node.

        Returns:
            Highest column index in use (0 for an empty graph).
        """
        columns = self.columns(nodes)
        for node, column in zip(nodes, columns):
            node.column = column
        return max(columns, default=0)


def assign_columns(
    graph: GraphModel, align: Union[NodeAlign, str] = NodeAlign.LEFT
) -> dict[str, int]:
    """
    Column of every node in a GraphModel.

    Example:
        >>> graph = GraphModel(links=[("A", "B", 5)])
        >>> assign_columns(graph)
        {'A': 0, 'B': 1}
    """
    nodes, _ = graph.build()
    engine = LayeringEngine(align)
    return {node.id: column for node, column in zip(nodes, engine.columns(nodes))}


__all__ = ["LayeringEngine", "assign_columns"]
