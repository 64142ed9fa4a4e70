"""
SVG drawing of a laid-out workflow graph.
"""

from __future__ import annotations

from typing import List
from xml.sax.saxutils import escape

from nfbuilder.graph.graph_schema import WorkflowLayout

EDGE_COLOR = "#a0aec0"
NODE_FILL = "#374151"
NODE_STROKE = "#0ea5e9"
TEXT_COLOR = "#e5e7eb"


def _fmt(value: float) -> str:
    return f"{value:g}"


def render_svg(layout: WorkflowLayout) -> str:
    w = _fmt(layout.bounding_width)
    h = _fmt(layout.bounding_height)

    svg: List[str] = [
        f'<svg width="{w}" height="{h}" xmlns="http://www.w3.org/2000/svg">',
        "  <defs>",
        '    <marker id="arrowhead" markerWidth="10" markerHeight="7" '
        'refX="9" refY="3.5" orient="auto">',
        f'      <polygon points="0 0, 10 3.5, 0 7" fill="{EDGE_COLOR}"/>',
        "    </marker>",
        "  </defs>",
    ]

    # Edges first so nodes paint over the curve ends.
    for edge in layout.edges:
        start, control, end = edge.start_point, edge.control_point, edge.end_point
        path = (
            f"M {_fmt(start.x)} {_fmt(start.y)} "
            f"Q {_fmt(control.x)} {_fmt(control.y)} {_fmt(end.x)} {_fmt(end.y)}"
        )
        svg.append(
            f'  <path id="{escape(edge.id)}" d="{path}" '
            f'stroke="{EDGE_COLOR}" stroke-width="2" fill="none" '
            f'marker-end="url(#arrowhead)"/>'
        )

    for node in layout.nodes:
        svg.append(
            f'  <g transform="translate({_fmt(node.x)}, {_fmt(node.y)})">'
        )
        svg.append(
            f'    <rect width="{_fmt(node.width)}" height="{_fmt(node.height)}" '
            f'rx="8" ry="8" fill="{NODE_FILL}" stroke="{NODE_STROKE}" stroke-width="1.5"/>'
        )
        svg.append(
            f'    <text x="{_fmt(node.width / 2)}" y="{_fmt(node.height / 2)}" '
            f'text-anchor="middle" dominant-baseline="middle" '
            f'font-family="Inter, sans-serif" font-size="14" fill="{TEXT_COLOR}">'
            f"{escape(node.display_name)}</text>"
        )
        svg.append("  </g>")

    svg.append("</svg>")
    return "\n".join(svg)
