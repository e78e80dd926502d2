"""
Horizontal placement of columns.
"""

from __future__ import annotations

from typing import Sequence

from .types import Node


class ColumnScaler:
    """
    Maps columns to horizontal pixel ranges.

    The first column starts at the left margin and the last column ends at
    the right margin; columns in between are evenly spaced.

    Args:
        width: Canvas width
        margin: Border on each side
        node_width: Horizontal thickness of every node
    """

    def __init__(self, width: float, margin: float, node_width: float) -> None:
        self.width = float(width)
        self.margin = float(margin)
        self.node_width = float(node_width)

    def step(self, max_column: int) -> float:
        """Horizontal distance between consecutive columns."""
        if max_column <= 0:
            return 0.0
        return (self.width - 2 * self.margin - self.node_width) / max_column

    def extent(self, column: int, max_column: int) -> tuple[float, float]:
        """(x0, x1) of a column."""
        x0 = self.margin + column * self.step(max_column)
        return x0, x0 + self.node_width

    def apply(self, nodes: Sequence[Node], max_column: int) -> None:
        """Set ``x0``/``x1`` on every node from its column."""
        step = self.step(max_column)
        for node in nodes:
            node.x0 = self.margin + node.column * step
            node.x1 = node.x0 + self.node_width


__all__ = ["ColumnScaler"]
