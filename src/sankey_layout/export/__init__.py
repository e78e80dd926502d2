"""
Export functionality for Sankey layouts.

Example usage:
    from sankey_layout import SankeyConfig, compute_layout, parse_rows
    from sankey_layout.export import to_svg

    spec = parse_rows("Salary,Budget,3000\\nBudget,Rent,1200\\nBudget,Food,800")
    config = SankeyConfig(link_color="source")
    result = compute_layout(spec, config)

    with open("budget.svg", "w") as f:
        f.write(to_svg(result, link_color_mode=config.link_color))
"""

from .svg import link_color, link_path, node_colors, to_svg

__all__ = [
    "to_svg",
    "link_path",
    "link_color",
    "node_colors",
]
