"""
Link attachment ordering and geometry.

Links leaving a node are stacked top to bottom in order of their target's
vertical position; links entering a node are stacked in order of their
source's vertical position. Keeping the stacking order consistent with the
neighbour order keeps bands from crossing at the node face.
"""

from __future__ import annotations

from typing import Sequence

from .types import Link, Node

Point = tuple[float, float]


def link_control_points(link: Link) -> tuple[Point, Point, Point, Point]:
    """
    Cubic Bezier points of a horizontal S-curve for a routed link.

    The curve leaves the source's right edge and enters the target's left
    edge horizontally, with both inner control points at the horizontal
    midpoint.
    """
    x0 = link.source.x1
    x1 = link.target.x0
    mid = (x0 + x1) / 2
    return ((x0, link.y0), (mid, link.y0), (mid, link.y1), (x1, link.y1))


class LinkRouter:
    """
    Orders links around each node and assigns attachment offsets.

    Args:
        ky: Vertical scale factor; a link's band width is ``value * ky``
    """

    def __init__(self, ky: float) -> None:
        self.ky = float(ky)

    @staticmethod
    def sort_links(node: Node) -> None:
        """Order a node's links by the vertical position of the far end."""
        node.source_links.sort(key=lambda link: (link.target.y0, link.index))
        node.target_links.sort(key=lambda link: (link.source.y0, link.index))

    def route(self, nodes: Sequence[Node]) -> None:
        """
        Sort every node's links and set ``width``, ``y0`` and ``y1``.

        ``y0``/``y1`` are band centres: each band starts where the previous
        one on the same node face ended, beginning at the node's top.
        """
        for node in nodes:
            self.sort_links(node)

        for node in nodes:
            y = node.y0
            for link in node.source_links:
                link.width = link.value * self.ky
                link.y0 = y + link.width / 2
                y += link.width

            y = node.y0
            for link in node.target_links:
                link.width = link.value * self.ky
                link.y1 = y + link.width / 2
                y += link.width


__all__ = ["LinkRouter", "link_control_points"]
