"""
Iterative vertical relaxation.

Each pass moves nodes toward the flow-weighted mean centre of their
neighbours in the previous column (forward pass) or the next column
(backward pass), then resolves overlaps inside the column. Passes
alternate direction and stop after a fixed count; there is no convergence
test.
"""

from __future__ import annotations

from typing import Sequence

from .types import Link, Node


def _weighted_center(links: Sequence[Link], incoming: bool) -> float:
    total = 0.0
    weight = 0.0
    for link in links:
        other = link.source if incoming else link.target
        total += other.center * link.value
        weight += link.value
    return total / weight


class VerticalRelaxer:
    """
    Repositions nodes within their columns.

    Args:
        height: Canvas height
        margin: Border on each side
        node_padding: Effective gap between nodes in a column
        iterations: Number of passes; even passes run forward, odd backward

    Example:
        relaxer = VerticalRelaxer(600, 10, 16, iterations=6)
        relaxer.relax(columns)
    """

    def __init__(
        self,
        height: float,
        margin: float,
        node_padding: float,
        iterations: int = 6,
    ) -> None:
        self.height = float(height)
        self.margin = float(margin)
        self.node_padding = float(node_padding)
        self.iterations = max(0, int(iterations))

    # -------------------------------------------------------------------------
    # Passes
    # -------------------------------------------------------------------------

    def forward_pass(self, columns: Sequence[list[Node]]) -> None:
        """Align nodes with their sources, column 0 to the last column."""
        for column in columns:
            for node in column:
                if node.target_links:
                    self._move_center(node, _weighted_center(node.target_links, incoming=True))
            self.resolve_overlaps(column)

    def backward_pass(self, columns: Sequence[list[Node]]) -> None:
        """Align nodes with their targets, last column to column 0."""
        for column in reversed(columns):
            for node in column:
                if node.source_links:
                    self._move_center(node, _weighted_center(node.source_links, incoming=False))
            self.resolve_overlaps(column)

    def relax(self, columns: Sequence[list[Node]]) -> None:
        """Run all passes, then make sure every column is overlap free."""
        for i in range(self.iterations):
            if i % 2 == 0:
                self.forward_pass(columns)
            else:
                self.backward_pass(columns)
        for column in columns:
            self.resolve_overlaps(column)

    @staticmethod
    def _move_center(node: Node, center: float) -> None:
        dy = center - node.center
        node.y0 += dy
        node.y1 += dy

    # -------------------------------------------------------------------------
    # Collision resolution
    # -------------------------------------------------------------------------

    def resolve_overlaps(self, column: list[Node]) -> None:
        """
        Remove overlaps within one column.

        Sorts the column by ``y0`` (stable, so ties keep insertion order),
        pushes nodes down until each clears its predecessor by the padding
        and the first clears the top margin, then pushes any overflow past
        the bottom margin back up through the column.
        """
        if not column:
            return

        column.sort(key=lambda n: n.y0)
        padding = self.node_padding

        y = self.margin
        for node in column:
            dy = y - node.y0
            if dy > 0:
                node.y0 += dy
                node.y1 += dy
            y = node.y1 + padding

        y = self.height - self.margin
        for node in reversed(column):
            dy = node.y1 - y
            if dy > 0:
                node.y0 -= dy
                node.y1 -= dy
            y = node.y0 - padding


__all__ = ["VerticalRelaxer"]
