#!/usr/bin/env python3
"""
HTML/SVG showcase of Sankey layouts.

Renders a few example flow graphs under every alignment mode and writes
them side by side into one HTML page.

Usage:
    python scripts/showcase.py

Output:
    build/showcase.html
"""

from __future__ import annotations

from html import escape
from pathlib import Path

from sankey_layout import (
    GraphSpec,
    NodeAlign,
    SankeyConfig,
    ValidationError,
    compute_layout,
    parse_mapping,
    parse_rows,
)
from sankey_layout.export import to_svg

# Output directory
BUILD_DIR = Path(__file__).parent.parent / "build"

# SVG dimensions
SVG_WIDTH = 600
SVG_HEIGHT = 360

BUDGET = """
Salary,Budget,3000
Side job,Budget,600
Budget,Rent,1200
Budget,Food,800
Budget,Transport,300
Budget,Savings,1300
Savings,Stocks,900
Savings,Cash,400
"""

ENERGY = {
    "nodes": [
        {"name": "Coal", "color": "#444444"},
        {"name": "Gas", "color": "#f28e2b"},
        {"name": "Solar", "color": "#edc948"},
        {"name": "Losses", "color": "#bab0ac"},
    ],
    "links": [
        {"source": "Coal", "target": "Power", "value": 25},
        {"source": "Gas", "target": "Power", "value": 20},
        {"source": "Gas", "target": "Heat", "value": 10},
        {"source": "Solar", "target": "Power", "value": 8},
        {"source": "Power", "target": "Homes", "value": 18},
        {"source": "Power", "target": "Industry", "value": 22},
        {"source": "Power", "target": "Losses", "value": 13},
        {"source": "Heat", "target": "Homes", "value": 6},
        {"source": "Heat", "target": "Losses", "value": 4},
        {"source": "Gas", "target": "Industry", "value": 5},
    ],
}


def render_section(name: str, spec: GraphSpec) -> list[str]:
    """One SVG figure per alignment mode."""
    figures = []
    for align in NodeAlign:
        config = SankeyConfig(
            width=SVG_WIDTH,
            height=SVG_HEIGHT,
            node_width=16,
            node_padding=12,
            align=align,
            link_color="source",
        )
        try:
            result = compute_layout(spec, config)
        except ValidationError as e:
            print(f"    Error ({align.value}): {e}")
            continue
        svg = to_svg(result, link_color_mode=config.link_color)
        figures.append(
            f"<figure>{svg}<figcaption>{escape(name)}: align={align.value}</figcaption></figure>"
        )
    return figures


def generate_html(sections: list[tuple[str, list[str]]]) -> str:
    """Generate the HTML page."""
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '    <meta charset="UTF-8">',
        "    <title>Sankey Layout Showcase</title>",
        "    <style>",
        "        body { font-family: sans-serif; background: #f0f0f0; margin: 2rem; }",
        "        .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(620px, 1fr));"
        " gap: 1.5rem; }",
        "        figure { background: white; padding: 0.5rem; margin: 0; }",
        "    </style>",
        "</head>",
        "<body>",
    ]
    for name, figures in sections:
        parts.append(f"<section><h2>{escape(name)}</h2><div class=\"grid\">")
        parts.extend(figures)
        parts.append("</div></section>")
    parts.extend(["</body>", "</html>"])
    return "\n".join(parts)


def main() -> None:
    """Generate the showcase HTML."""
    BUILD_DIR.mkdir(exist_ok=True)

    graphs = {
        "Household budget (row notation)": parse_rows(BUDGET),
        "Energy flow (mapping notation)": parse_mapping(ENERGY),
    }

    sections = []
    for name, spec in graphs.items():
        print(f"\nProcessing: {name}")
        print(f"  Nodes: {len(spec.nodes)}, Links: {len(spec.links)}")
        sections.append((name, render_section(name, spec)))

    output_path = BUILD_DIR / "showcase.html"
    output_path.write_text(generate_html(sections))
    print(f"\nShowcase saved to: {output_path.absolute()}")


if __name__ == "__main__":
    main()
