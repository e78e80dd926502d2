"""
Layout quality metrics.

Provides quantitative measures of a Sankey layout:
- Flow imbalance: Mismatch between band widths entering and leaving a node
- Weighted link length: Vertical travel of links, weighted by flow
- Link crossings: Bands that swap order between two columns
- Column overlaps: Node pairs in one column that intersect

All metrics work with a finished LayoutResult.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

import numpy as np

from .types import LayoutResult


def flow_imbalance(result: LayoutResult) -> dict[str, float]:
    """
    Difference between incoming and outgoing band widths per node.

    Nodes with links on only one side (sources, sinks) or none report 0.

    Returns:
        Mapping of node id to ``abs(sum(in widths) - sum(out widths))``
    """
    incoming: dict[str, float] = defaultdict(float)
    outgoing: dict[str, float] = defaultdict(float)
    for link in result.links:
        outgoing[link.source_id] += link.width
        incoming[link.target_id] += link.width

    imbalance: dict[str, float] = {}
    for node in result.nodes:
        if node.id in incoming and node.id in outgoing:
            imbalance[node.id] = abs(incoming[node.id] - outgoing[node.id])
        else:
            imbalance[node.id] = 0.0
    return imbalance


def weighted_link_length(result: LayoutResult) -> float:
    """
    Total vertical travel of all links weighted by value.

    This is the quantity the relaxation passes try to reduce.
    """
    if not result.links:
        return 0.0
    values = np.array([link.value for link in result.links], dtype=float)
    dy = np.array([link.y1 - link.y0 for link in result.links], dtype=float)
    return float(np.sum(values * np.abs(dy)))


def link_crossings(result: LayoutResult) -> int:
    """
    Count pairs of links that swap vertical order.

    Only links spanning the same pair of columns are compared, which is
    where the attachment ordering is expected to prevent crossings.

    Time Complexity: O(m^2) where m = number of links
    """
    groups: dict[tuple[float, float], list[tuple[float, float]]] = defaultdict(list)
    for link in result.links:
        groups[(link.x0, link.x1)].append((link.y0, link.y1))

    crossings = 0
    for ends in groups.values():
        for i in range(len(ends)):
            for j in range(i + 1, len(ends)):
                if (ends[i][0] - ends[j][0]) * (ends[i][1] - ends[j][1]) < 0:
                    crossings += 1
    return crossings


def column_overlaps(result: LayoutResult, tolerance: float = 1e-6) -> int:
    """
    Count node pairs in the same column whose vertical extents intersect.

    Args:
        result: Finished layout
        tolerance: Overlap smaller than this is ignored
    """
    columns: dict[int, list[tuple[float, float]]] = defaultdict(list)
    for node in result.nodes:
        columns[node.column].append((node.y0, node.y1))

    overlaps = 0
    for extents in columns.values():
        extents.sort()
        for i in range(len(extents)):
            for j in range(i + 1, len(extents)):
                if extents[j][0] < extents[i][1] - tolerance:
                    overlaps += 1
    return overlaps


def layout_quality_summary(result: LayoutResult) -> dict[str, Any]:
    """
    Compute a summary of layout quality metrics.

    Returns:
        Dictionary with all metrics:
        - max_flow_imbalance: Largest per-node imbalance
        - weighted_link_length: Flow-weighted vertical link travel
        - link_crossings: Number of band order swaps
        - column_overlaps: Number of overlapping node pairs
    """
    imbalance = flow_imbalance(result)
    return {
        "max_flow_imbalance": max(imbalance.values(), default=0.0),
        "weighted_link_length": weighted_link_length(result),
        "link_crossings": link_crossings(result),
        "column_overlaps": column_overlaps(result),
    }


__all__ = [
    "flow_imbalance",
    "weighted_link_length",
    "link_crossings",
    "column_overlaps",
    "layout_quality_summary",
]
