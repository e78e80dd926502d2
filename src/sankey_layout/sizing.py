"""
Vertical scale and initial node stacking.

The scale factor ``ky`` (pixels per unit of flow) is chosen so that the
column carrying the most flow, together with the padding needed by the
column holding the most nodes, fits the drawable height. Columns that also
hold zero-flow nodes keep room for their minimum height. When the padding
alone does not fit, padding is dropped to zero and an
InsufficientHeightWarning is issued instead of failing.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .types import Node
from .validation import InsufficientHeightWarning


@dataclass
class SizingResult:
    """Outcome of sizing: scale factor, effective padding and column members."""

    ky: float
    node_padding: float
    padding_relaxed: bool = False
    columns: list[list[Node]] = field(default_factory=list)


def group_columns(nodes: Sequence[Node], max_column: int) -> list[list[Node]]:
    """Nodes per column, each column in insertion order."""
    columns: list[list[Node]] = [[] for _ in range(max_column + 1)]
    for node in nodes:
        columns[node.column].append(node)
    return columns


class NodeSizer:
    """
    Maps node values to heights and stacks each column top to bottom.

    Args:
        height: Canvas height
        margin: Border on each side
        node_padding: Requested gap between nodes in a column
        min_node_height: Height given to nodes whose scaled value is smaller
    """

    def __init__(
        self,
        height: float,
        margin: float,
        node_padding: float,
        min_node_height: float = 1.0,
    ) -> None:
        self.height = float(height)
        self.margin = float(margin)
        self.node_padding = float(node_padding)
        self.min_node_height = float(min_node_height)

    def scale(self, nodes: Sequence[Node], max_column: int) -> tuple[float, float, bool]:
        """
        Compute the vertical scale factor.

        Returns:
            (ky, effective padding, padding_relaxed)
        """
        if not nodes:
            return 0.0, self.node_padding, False

        column_index = np.fromiter((n.column for n in nodes), dtype=np.intp, count=len(nodes))
        values = np.fromiter((n.value for n in nodes), dtype=float, count=len(nodes))
        totals = np.bincount(column_index, weights=values, minlength=max_column + 1)
        counts = np.bincount(column_index, minlength=max_column + 1)

        max_value = float(totals.max())
        max_count = int(counts.max())
        available = self.height - 2 * self.margin

        padding = self.node_padding
        relaxed = False
        if (max_count - 1) * padding > available:
            warnings.warn(
                f"Column with {max_count} nodes cannot fit padding {padding} "
                f"in {available} px; padding relaxed to 0.",
                InsufficientHeightWarning,
                stacklevel=4,
            )
            padding = 0.0
            relaxed = True

        if max_value <= 0:
            return 0.0, padding, relaxed

        ky = (available - (max_count - 1) * padding) / max_value

        # Zero-flow nodes never scale, so their columns reserve the minimum height.
        zero_flow = (values <= 0).astype(float)
        empty = np.bincount(column_index, weights=zero_flow, minlength=max_column + 1)
        for column in np.flatnonzero((empty > 0) & (totals > 0)):
            reserved = (counts[column] - 1) * padding + empty[column] * self.min_node_height
            room = available - reserved
            ky = min(ky, room / totals[column])

        return max(0.0, float(ky)), padding, relaxed

    def apply(self, nodes: Sequence[Node], max_column: int) -> SizingResult:
        """
        Size every node and stack each column from the top margin.

        Sets ``y0``/``y1`` on nodes and ``width`` on their links.
        """
        ky, padding, relaxed = self.scale(nodes, max_column)
        columns = group_columns(nodes, max_column) if nodes else []

        for column in columns:
            y = self.margin
            for node in column:
                node.y0 = y
                node.y1 = y + max(node.value * ky, self.min_node_height)
                y = node.y1 + padding
                for link in node.source_links:
                    link.width = link.value * ky

        return SizingResult(ky=ky, node_padding=padding, padding_relaxed=relaxed, columns=columns)


__all__ = ["NodeSizer", "SizingResult", "group_columns"]
