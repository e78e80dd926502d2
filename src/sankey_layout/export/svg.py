"""
SVG export for Sankey layouts.

Draws nodes as rectangles, links as stroked horizontal cubic curves whose
stroke width equals the band width, and ``"<id>: <value>"`` labels beside
each node.
"""

from __future__ import annotations

from typing import Optional, Union
from xml.sax.saxutils import escape

from ..types import LayoutResult, LinkColorMode, LinkLayout, NodeLayout

# d3 schemeCategory10
PALETTE = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
)


def link_path(link: LinkLayout) -> str:
    """SVG path data for a link's centre line."""
    (x0, y0), (c0x, c0y), (c1x, c1y), (x1, y1) = link.control_points
    return f"M{x0:.1f},{y0:.1f}C{c0x:.1f},{c0y:.1f},{c1x:.1f},{c1y:.1f},{x1:.1f},{y1:.1f}"


def node_colors(result: LayoutResult) -> dict[str, str]:
    """Colour per node: its ``color`` attribute, else a palette entry by position."""
    colors: dict[str, str] = {}
    for i, node in enumerate(result.nodes):
        color = node.attrs.get("color")
        colors[node.id] = str(color) if color else PALETTE[i % len(PALETTE)]
    return colors


def link_color(
    link: LinkLayout,
    mode: Union[LinkColorMode, str],
    colors: dict[str, str],
    default: str = "black",
) -> str:
    """Stroke colour of a link under the given colouring mode."""
    mode = mode if isinstance(mode, LinkColorMode) else LinkColorMode(mode.lower())
    if mode is LinkColorMode.SOURCE:
        return colors.get(link.source_id, default)
    if mode is LinkColorMode.TARGET:
        return colors.get(link.target_id, default)
    return default


def _render_node(node: NodeLayout, fill: str) -> str:
    return (
        f'    <rect x="{node.x0:.1f}" y="{node.y0:.1f}" '
        f'width="{node.width:.1f}" height="{node.height:.1f}" '
        f'fill="{escape(fill)}"/>'
    )


def _render_link(link: LinkLayout, stroke: str, opacity: float) -> str:
    return (
        f'    <path d="{link_path(link)}" fill="none" '
        f'stroke="{escape(stroke)}" stroke-opacity="{opacity}" '
        f'stroke-width="{max(link.width, 0.0):.1f}"/>'
    )


def _render_label(
    node: NodeLayout,
    canvas_width: float,
    color: str,
    font_size: float,
    font_family: str,
) -> str:
    left_half = node.x0 < canvas_width / 2
    x = node.x1 + 6 if left_half else node.x0 - 6
    y = (node.y0 + node.y1) / 2
    anchor = "start" if left_half else "end"
    text = f"{node.id}: {node.value:g}"
    return (
        f'    <text x="{x:.1f}" y="{y:.1f}" dy="0.35em" '
        f'fill="{escape(color)}" font-size="{font_size}" '
        f'font-family="{escape(font_family)}" text-anchor="{anchor}">'
        f"{escape(text)}</text>"
    )


def to_svg(
    result: LayoutResult,
    *,
    link_color_mode: Union[LinkColorMode, str] = LinkColorMode.NONE,
    link_opacity: float = 0.3,
    show_labels: bool = True,
    label_color: str = "#000000",
    font_size: float = 12.0,
    font_family: str = "sans-serif",
    background: Optional[str] = "white",
) -> str:
    """
    Export a Sankey layout to SVG format.

    Args:
        result: Output of compute_layout() or SankeyLayout.run()
        link_color_mode: none (black), source or target node colour
        link_opacity: Stroke opacity of link bands
        show_labels: Whether to draw node labels
        label_color: Colour of labels
        font_size: Font size of labels
        font_family: Font family of labels
        background: Background colour (None for transparent)

    Returns:
        SVG string representation of the diagram
    """
    width, height = result.width, result.height
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width:.1f}" height="{height:.1f}" '
        f'viewBox="0 0 {width:.1f} {height:.1f}" overflow="visible">'
    ]
    if background:
        parts.append(f'  <rect width="100%" height="100%" fill="{escape(background)}"/>')

    colors = node_colors(result)

    parts.append('  <g class="nodes">')
    for node in result.nodes:
        parts.append(_render_node(node, colors[node.id]))
    parts.append("  </g>")

    parts.append('  <g class="links">')
    for link in result.links:
        parts.append(_render_link(link, link_color(link, link_color_mode, colors), link_opacity))
    parts.append("  </g>")

    if show_labels:
        parts.append('  <g class="labels">')
        for node in result.nodes:
            parts.append(_render_label(node, width, label_color, font_size, font_family))
        parts.append("  </g>")

    parts.append("</svg>")
    return "\n".join(parts)


__all__ = ["to_svg", "link_path", "link_color", "node_colors", "PALETTE"]
