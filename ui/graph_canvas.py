"""
graph_canvas.py — SVG Graph & Knapsack Renderer
================================================
Pure rendering functions: Graph (or knapsack items) + Step → SVG string.

Design decisions:
  - Nodes sit on a circle in label order; the graphs are small enough
    (at most ten nodes) that a fixed layout reads better than a
    force-directed one and never moves between frames.
  - Node fill comes from the step: finalised nodes (`sorted_marks`) are
    visited, the node named by the `current`/`k` pointer is current,
    the step's own indices are on the frontier.
  - An edge is chosen when its key is in `step.edges`, active when it
    joins the step's two indices.
  - The snapshot is drawn as an overlay panel: a distance/key column for
    a vector, a matrix for Floyd-Warshall's flattened table.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepKind
from graph import Edge, Graph, Item
from ui.canvas import CONFIG, CanvasConfig


class GraphCanvasConfig(CanvasConfig):
    height: int = 480

    node_colors: Dict[str, str] = {
        "unvisited": "#1c2128",
        "frontier":  "#0ea5e9",
        "visited":   "#10b981",
        "current":   "#06b6d4",
        "source":    "#0ea5e9",
        "failed":    "#991b1b",
    }

    edge_colors: Dict[str, str] = {
        "default":  "#30363d",
        "chosen":   "#a855f7",
        "active":   "#06b6d4",
        "rejected": "#991b1b",
    }

    # graph area (left of the overlay panel)
    graph_width:        int = 600
    node_radius:        int = 20
    node_stroke:        str = "#30363d"
    node_label_color:   str = "#e6edf3"
    node_label_size:    int = 13
    edge_width:         int = 2
    edge_width_chosen:  int = 4
    edge_arrow_size:    int = 10
    edge_weight_color:  str = "#7d8590"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#161b22"

    overlay_bg:         str = "#161b22"
    overlay_border:     str = "#30363d"
    overlay_text:       str = "#7d8590"
    overlay_header:     str = "#e6edf3"
    overlay_accent:     str = "#0ea5e9"
    overlay_font_size:  int = 13


GRAPH_CONFIG = GraphCanvasConfig()


def _svg_open(config: CanvasConfig) -> List[str]:
    return [
        f'<svg width="100%" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]


def _fmt(value) -> str:
    if value is None:
        return "∞"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.2f}"
    return str(int(value)) if isinstance(value, float) else str(value)


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
def node_positions(graph: Graph, config: GraphCanvasConfig = GRAPH_CONFIG) -> List[Tuple[float, float]]:
    """Node centres on a circle, first label at the top, clockwise."""
    cx = config.graph_width / 2
    cy = config.height / 2
    r = min(cx, cy) - config.node_radius - 30
    n = graph.size
    return [
        (cx + r * math.sin(2 * math.pi * k / n), cy - r * math.cos(2 * math.pi * k / n))
        for k in range(n)
    ]


def render_graph(
    graph: Optional[Graph],
    step: Optional[Step] = None,
    config: GraphCanvasConfig = GRAPH_CONFIG,
    source: Optional[int] = None,
    directed: bool = False,
    panel: str = "Distances",
) -> str:
    """
    Returns an SVG string.

    Args:
        graph    : The graph to draw (None → placeholder).
        step     : Current algorithm step, or None for the static graph.
        source   : Start node, outlined before a run begins.
        directed : Draw arrowheads (Bellman-Ford reads edges one way).
        panel    : Header of the snapshot overlay ("Distances", "Key", …).
    """
    parts = _svg_open(config)
    if graph is None:
        parts.append(
            f'<text x="{config.width / 2}" y="{config.height / 2}" text-anchor="middle" '
            f'font-size="14" fill="{config.overlay_text}">Generate or import a graph to begin</text>'
        )
        parts.append("</svg>")
        return "\n".join(parts)

    pos = node_positions(graph, config)
    for edge in graph.edges:
        parts.append(_render_edge(graph, edge, pos, step, config, directed))
    for k, label in enumerate(graph.labels):
        parts.append(_render_node(k, label, pos[k], step, config, source))

    if step is not None and step.snapshot:
        n = graph.size
        if len(step.snapshot) == n * n and n > 1:
            parts.append(_render_matrix_panel(graph, step, config))
        else:
            parts.append(_render_vector_panel(graph, step, config, panel))
    if step is not None and step.totals:
        parts.append(_render_totals(step.totals, config, x=16, y=config.height - 16))

    parts.append("</svg>")
    return "\n".join(parts)


def node_role(k: int, step: Optional[Step], source: Optional[int] = None) -> str:
    if step is None:
        return "source" if k == source else "unvisited"
    if step.kind == StepKind.NEGATIVE_CYCLE and k in step.indices:
        return "failed"
    if step.pointers.get("current", step.pointers.get("k")) == k:
        return "current"
    if k in step.indices:
        return "frontier"
    if k in step.sorted_marks:
        return "visited"
    return "unvisited"


def edge_role(edge: Edge, step: Optional[Step]) -> str:
    if step is None:
        return "default"
    if len(step.indices) == 2 and set(step.indices) == {edge.source, edge.target} \
            and step.kind != StepKind.SELECT:
        if step.kind in (StepKind.REJECT, StepKind.NEGATIVE_CYCLE):
            return "rejected"
        return "active"
    if edge.key in step.edges:
        return "chosen"
    return "default"


def _render_node(k: int, label: str, at: Tuple[float, float], step: Optional[Step],
                 config: GraphCanvasConfig, source: Optional[int]) -> str:
    role = node_role(k, step, source)
    fill = config.node_colors.get(role, config.node_colors["unvisited"])
    cx, cy = at
    r = config.node_radius
    stroke, stroke_width, glow = config.node_stroke, 2, ""
    if role == "current":
        stroke, stroke_width = config.node_colors["current"], 3
        glow = (f'  <circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r + 8}" fill="none" '
                f'stroke="{config.node_colors["current"]}" stroke-width="2" opacity="0.3"/>')
    return "\n".join([
        f'<g class="node {role}" data-index="{k}">',
        glow,
        f'  <circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r}" fill="{fill}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>',
        f'  <text x="{cx:.1f}" y="{cy + 5:.1f}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="\'DM Sans\', sans-serif" '
        f'fill="{config.node_label_color}" font-weight="600">{label}</text>',
        '</g>',
    ])


def _render_edge(graph: Graph, edge: Edge, pos: List[Tuple[float, float]], step: Optional[Step],
                 config: GraphCanvasConfig, directed: bool) -> str:
    role = edge_role(edge, step)
    stroke = config.edge_colors[role]
    width = config.edge_width_chosen if role in ("chosen", "active") else config.edge_width

    (x1, y1), (x2, y2) = pos[edge.source], pos[edge.target]
    dx, dy = x2 - x1, y2 - y1
    dist = math.hypot(dx, dy)
    if dist < 0.001:
        return ""
    ux, uy = dx / dist, dy / dist
    r = config.node_radius
    ax, ay = x1 + ux * r, y1 + uy * r
    bx, by = x2 - ux * r, y2 - uy * r

    parts = [
        f'<g class="edge {role}" data-edge="{graph.describe(edge)}">',
        f'  <line x1="{ax:.1f}" y1="{ay:.1f}" x2="{bx:.1f}" y2="{by:.1f}" '
        f'stroke="{stroke}" stroke-width="{width}"/>',
    ]
    if directed:
        parts.append(_render_arrow(bx, by, ux, uy, stroke, config))

    # weight label, offset perpendicular to the edge
    mx, my = (x1 + x2) / 2 - uy * 12, (y1 + y2) / 2 + ux * 12
    parts.append(
        f'  <circle cx="{mx:.1f}" cy="{my:.1f}" r="12" fill="{config.edge_weight_bg}" opacity="0.9"/>'
    )
    parts.append(
        f'  <text x="{mx:.1f}" y="{my + 4:.1f}" text-anchor="middle" '
        f'font-size="{config.edge_weight_size}" font-family="\'DM Sans\', sans-serif" '
        f'fill="{config.edge_weight_color}" font-weight="600">{_fmt(edge.weight)}</text>'
    )
    parts.append("</g>")
    return "\n".join(parts)


def _render_arrow(x: float, y: float, ux: float, uy: float, color: str, config: GraphCanvasConfig) -> str:
    size = config.edge_arrow_size
    px, py = -uy, ux
    p1 = (x - ux * size + px * size * 0.5, y - uy * size + py * size * 0.5)
    p2 = (x - ux * size - px * size * 0.5, y - uy * size - py * size * 0.5)
    return (f'  <polygon points="{x:.1f},{y:.1f} {p1[0]:.1f},{p1[1]:.1f} '
            f'{p2[0]:.1f},{p2[1]:.1f}" fill="{color}"/>')


def _render_vector_panel(graph: Graph, step: Step, config: GraphCanvasConfig, title: str) -> str:
    x, y = config.graph_width + 20, 20
    parts = [
        f'<g class="distances-panel" transform="translate({x},{y})">',
        f'  <rect width="260" height="{40 + 18 * graph.size}" fill="{config.overlay_bg}" '
        f'stroke="{config.overlay_border}" rx="8" opacity="0.95"/>',
        f'  <text x="12" y="22" font-size="13" font-weight="700" fill="{config.overlay_accent}" '
        f'font-family="\'DM Sans\', sans-serif">{title}</text>',
    ]
    for k, label in enumerate(graph.labels):
        value = step.snapshot[k] if k < len(step.snapshot) else None
        fill = config.overlay_header if k in step.indices else config.overlay_text
        parts.append(
            f'  <text x="16" y="{46 + k * 18}" font-size="{config.overlay_font_size}" '
            f'font-family="\'JetBrains Mono\', monospace" fill="{fill}">{label}: {_fmt(value)}</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)


def _render_matrix_panel(graph: Graph, step: Step, config: GraphCanvasConfig) -> str:
    n = graph.size
    cell = min(26, 250 // (n + 1))
    x, y = config.graph_width + 10, 20
    parts = [
        f'<g class="matrix-panel" transform="translate({x},{y})">',
        f'  <rect width="{(n + 1) * cell + 16}" height="{(n + 1) * cell + 36}" '
        f'fill="{config.overlay_bg}" stroke="{config.overlay_border}" rx="6" opacity="0.95"/>',
        f'  <text x="8" y="18" font-size="13" font-weight="700" '
        f'fill="{config.overlay_header}">Distance Matrix</text>',
    ]
    top = 28
    for k, label in enumerate(graph.labels):
        parts.append(
            f'  <text x="{8 + (k + 1) * cell + cell / 2:.1f}" y="{top + cell / 2 + 4:.1f}" '
            f'text-anchor="middle" font-size="10" fill="#9ca3af">{label}</text>'
        )
        parts.append(
            f'  <text x="{8 + cell / 2:.1f}" y="{top + (k + 1) * cell + cell / 2 + 4:.1f}" '
            f'text-anchor="middle" font-size="10" fill="#9ca3af">{label}</text>'
        )
    hot = (step.indices[0], step.indices[1]) if len(step.indices) == 2 else None
    for i in range(n):
        for j in range(n):
            cx = 8 + (j + 1) * cell
            cy = top + (i + 1) * cell
            fill = "#1f2937"
            if hot == (i, j):
                fill = config.edge_colors["active"] if step.kind == StepKind.RELAX else "#374151"
            parts.append(
                f'  <rect x="{cx}" y="{cy}" width="{cell}" height="{cell}" '
                f'fill="{fill}" stroke="#374151" stroke-width="1"/>'
            )
            parts.append(
                f'  <text x="{cx + cell / 2:.1f}" y="{cy + cell / 2 + 4:.1f}" text-anchor="middle" '
                f'font-size="9" fill="{config.overlay_header}">{_fmt(step.snapshot[i * n + j])}</text>'
            )
    parts.append("</g>")
    return "\n".join(parts)


def _render_totals(totals: Dict[str, float], config: CanvasConfig, x: float, y: float) -> str:
    text = "   ".join(f"{name} = {_fmt(value)}" for name, value in totals.items())
    return (
        f'<text class="totals" x="{x}" y="{y}" font-size="13" '
        f'font-family="\'JetBrains Mono\', monospace" fill="{config.value_label_color}">{text}</text>'
    )


# ---------------------------------------------------------------------------
# Knapsack
# ---------------------------------------------------------------------------
def render_knapsack(
    items: Sequence[Item],
    capacity: float,
    step: Optional[Step] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    One row per item (label, value/weight, ratio, taken fraction) and a
    capacity gauge underneath.
    """
    parts = _svg_open(config)
    if not items:
        parts.append(
            f'<text x="{config.width / 2}" y="{config.height / 2}" text-anchor="middle" '
            f'font-size="14" fill="{config.pointer_color}">Add items to begin</text>'
        )
        parts.append("</svg>")
        return "\n".join(parts)

    fractions = list(step.snapshot) if step else [0.0] * len(items)
    row_h = min(32, (config.height - 110) / len(items))
    bar_x, bar_w = 330, config.width - 330 - config.padding

    for k, item in enumerate(items):
        y = 30 + k * row_h
        role = "default"
        if step is not None and k in step.indices:
            role = config.kind_roles.get(step.kind, "default")
        elif fractions[k]:
            role = "sorted"
        fill = config.bar_colors.get(role, config.bar_colors["default"])
        taken = bar_w * float(fractions[k] or 0)
        parts.append("\n".join([
            f'<g class="item {role}" data-index="{k}">',
            f'  <text x="{config.padding}" y="{y + row_h * 0.6:.1f}" font-size="13" '
            f'font-family="\'JetBrains Mono\', monospace" fill="{config.value_label_color}">'
            f'{item.label}  v={_fmt(item.value)}  w={_fmt(item.weight)}  r={item.ratio:.2f}</text>',
            f'  <rect x="{bar_x}" y="{y + 4:.1f}" width="{bar_w}" height="{row_h - 8:.1f}" '
            f'rx="{config.bar_radius}" fill="{config.bar_colors["dimmed"]}"/>',
            f'  <rect x="{bar_x}" y="{y + 4:.1f}" width="{taken:.1f}" height="{row_h - 8:.1f}" '
            f'rx="{config.bar_radius}" fill="{fill}"/>',
            f'  <text x="{bar_x + bar_w - 6}" y="{y + row_h * 0.6:.1f}" text-anchor="end" '
            f'font-size="11" fill="{config.pointer_color}">{float(fractions[k] or 0) * 100:.0f}%</text>',
            '</g>',
        ]))

    remaining = step.totals.get("remaining", capacity) if step else capacity
    used = capacity - remaining
    gauge_y = config.height - 60
    gauge_w = config.width - 2 * config.padding
    filled = gauge_w * (used / capacity if capacity else 0)
    parts.append("\n".join([
        '<g class="capacity">',
        f'  <rect x="{config.padding}" y="{gauge_y}" width="{gauge_w}" height="18" '
        f'rx="4" fill="{config.bar_colors["dimmed"]}"/>',
        f'  <rect x="{config.padding}" y="{gauge_y}" width="{filled:.1f}" height="18" '
        f'rx="4" fill="{config.bar_colors["writing"]}"/>',
        f'  <text x="{config.padding}" y="{gauge_y - 8}" font-size="12" '
        f'fill="{config.pointer_color}">capacity {_fmt(used)} / {_fmt(capacity)}</text>',
        '</g>',
    ]))
    if step is not None and step.totals:
        parts.append(_render_totals({"value": step.totals.get("value", 0)}, config,
                                    x=config.padding, y=config.height - 14))

    parts.append("</svg>")
    return "\n".join(parts)
