"""
canvas.py — SVG Bar Renderer
==============================
Pure rendering function: Step (or a plain sequence) → SVG string.

The renderer consumes:
  • step_or_sequence – the current Step snapshot, or a bare list of
                       values before any run has started
  • config           – visual config (canvas size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.
  - Role-based coloring is a simple dict lookup: role → hex color.
    A bar's role comes from the step kind and whether it is one of the
    step's indices, a named pointer, or already sorted.
  - Pointers (i, j, pivot, low/high/mid, …) are drawn as labels under
    their bar; merge subranges get a bracket above the bars.
"""

from typing import Dict, List, Optional, Sequence, Union

from algorithms.step import Step, StepKind


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 420
    bg:     str = "#0d1117"

    # bar colors (role → fill)
    bar_colors: Dict[str, str] = {
        "default":   "#30363d",   # medium grey
        "comparing": "#0ea5e9",   # cyan blue
        "swapping":  "#f97316",   # orange
        "writing":   "#a855f7",   # purple, merge placement
        "sorted":    "#10b981",   # emerald green
        "pivot":     "#ec4899",   # pink
        "key":       "#eab308",   # amber, insertion key
        "prefix":    "#065f46",   # dark green, insertion prefix
        "pointer":   "#06b6d4",   # teal, set-pointer
        "visiting":  "#0ea5e9",
        "match":     "#10b981",
        "exhausted": "#991b1b",   # dark red
        "dimmed":    "#1c2128",   # outside the active range
    }

    kind_roles: Dict[StepKind, str] = {
        StepKind.COMPARE:     "comparing",
        StepKind.SWAP:        "swapping",
        StepKind.WRITE:       "writing",
        StepKind.MARK_SORTED: "sorted",
        StepKind.SET_POINTER: "pointer",
        StepKind.VISIT:       "visiting",
        StepKind.MATCH:       "match",
        StepKind.EXHAUSTED:   "exhausted",
        # structures
        StepKind.PUSH:        "writing",
        StepKind.ENQUEUE:     "writing",
        StepKind.INSERT:      "writing",
        StepKind.POP:         "swapping",
        StepKind.DEQUEUE:     "swapping",
        StepKind.REMOVE:      "swapping",
        StepKind.ROTATE:      "swapping",
        StepKind.PEEK:        "match",
        # greedy
        StepKind.SELECT:      "comparing",
        StepKind.TAKE:        "sorted",
        StepKind.SKIP:        "exhausted",
    }

    # bars
    padding:          int = 30
    bar_gap:          int = 6
    bar_radius:       int = 3
    value_label_color: str = "#e6edf3"
    value_label_size:  int = 12

    # pointer labels
    pointer_color:    str = "#7d8590"
    pointer_size:     int = 11

    # subrange bracket
    bracket_color:    str = "#a855f7"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    step_or_sequence: Union[Step, Sequence[int], None],
    config: CanvasConfig = CONFIG,
    target: Optional[int] = None,
) -> str:
    """
    Returns an SVG string.

    Args:
        step_or_sequence : Current algorithm step, or a bare sequence for
                           the static (not yet running) view.
        config           : Visual config.
        target           : Search target, shown in the corner when set.
    """
    step = step_or_sequence if isinstance(step_or_sequence, Step) else None
    values = list(step.snapshot) if step else list(step_or_sequence or [])

    svg_parts = [
        f'<svg width="100%" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]
    svg_parts.append(
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>'
    )

    if not values:
        svg_parts.append(
            f'<text x="{config.width / 2}" y="{config.height / 2}" text-anchor="middle" '
            f'font-size="14" fill="{config.pointer_color}">Generate or import a dataset to begin</text>'
        )
        svg_parts.append("</svg>")
        return "\n".join(svg_parts)

    layout = _layout(values, config)

    if step and step.subrange:
        svg_parts.append(_render_subrange(step.subrange, layout, config))

    pointers = _pointers_by_index(step)
    for idx, value in enumerate(values):
        role = bar_role(idx, step, config)
        svg_parts.append(_render_bar(idx, value, role, layout, config))
        if idx in pointers:
            svg_parts.append(_render_pointer_label(idx, pointers[idx], layout, config))

    if target is not None:
        svg_parts.append(
            f'<text x="{config.width - config.padding}" y="22" text-anchor="end" '
            f'font-size="13" font-family="\'JetBrains Mono\', monospace" '
            f'fill="{config.bar_colors["pivot"]}">target = {target}</text>'
        )

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def bar_role(idx: int, step: Optional[Step], config: CanvasConfig = CONFIG) -> str:
    """Color role of position `idx` in `step`."""
    if step is None:
        return "default"
    if step.kind == StepKind.COMPLETE:
        return "sorted"
    if idx in step.indices:
        return config.kind_roles.get(step.kind, "default")
    if step.pointers.get("pivot") == idx:
        return "pivot"
    if step.pointers.get("key") == idx:
        return "key"
    if idx in step.sorted_marks:
        return "sorted"
    if idx <= step.pointers.get("prefix", -1):
        return "prefix"
    if _outside_active_range(idx, step):
        return "dimmed"
    return "default"


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------
def _layout(values: List[int], config: CanvasConfig) -> Dict[str, float]:
    n = len(values)
    usable_w = config.width - 2 * config.padding
    bar_w = max(4.0, (usable_w - config.bar_gap * (n - 1)) / n)
    peak = max(max(abs(v) for v in values), 1)
    return {
        "bar_w":    bar_w,
        "base_y":   config.height - 50,
        "max_h":    config.height - 110,
        "peak":     peak,
    }


def _bar_x(idx: int, layout: Dict[str, float], config: CanvasConfig) -> float:
    return config.padding + idx * (layout["bar_w"] + config.bar_gap)


def _render_bar(idx: int, value: int, role: str, layout: Dict[str, float], config: CanvasConfig) -> str:
    fill = config.bar_colors.get(role, config.bar_colors["default"])
    h = max(4.0, abs(value) / layout["peak"] * layout["max_h"])
    x = _bar_x(idx, layout, config)
    y = layout["base_y"] - h
    w = layout["bar_w"]
    return "\n".join([
        f'<g class="bar {role}" data-index="{idx}">',
        f'  <rect x="{x:.1f}" y="{y:.1f}" width="{w:.1f}" height="{h:.1f}" '
        f'rx="{config.bar_radius}" fill="{fill}"/>',
        f'  <text x="{x + w / 2:.1f}" y="{y - 6:.1f}" text-anchor="middle" '
        f'font-size="{config.value_label_size}" font-family="\'DM Sans\', sans-serif" '
        f'fill="{config.value_label_color}" font-weight="600">{value}</text>',
        '</g>',
    ])


def _render_pointer_label(idx: int, names: List[str], layout: Dict[str, float], config: CanvasConfig) -> str:
    x = _bar_x(idx, layout, config) + layout["bar_w"] / 2
    y = layout["base_y"] + 18
    return (
        f'<text class="pointer" x="{x:.1f}" y="{y:.1f}" text-anchor="middle" '
        f'font-size="{config.pointer_size}" font-family="\'JetBrains Mono\', monospace" '
        f'fill="{config.pointer_color}">{",".join(names)}</text>'
    )


def _render_subrange(subrange, layout: Dict[str, float], config: CanvasConfig) -> str:
    left, mid, right = subrange
    x1 = _bar_x(left, layout, config)
    x2 = _bar_x(right, layout, config) + layout["bar_w"]
    xm = _bar_x(mid, layout, config) + layout["bar_w"] + config.bar_gap / 2
    y = 30
    return "\n".join([
        '<g class="subrange">',
        f'  <path d="M{x1:.1f},{y + 8} V{y} H{x2:.1f} V{y + 8}" fill="none" '
        f'stroke="{config.bracket_color}" stroke-width="2"/>',
        f'  <line x1="{xm:.1f}" y1="{y}" x2="{xm:.1f}" y2="{y + 8}" '
        f'stroke="{config.bracket_color}" stroke-width="1" stroke-dasharray="2,2"/>',
        '</g>',
    ])


def _pointers_by_index(step: Optional[Step]) -> Dict[int, List[str]]:
    by_index: Dict[int, List[str]] = {}
    if step is None:
        return by_index
    for name, idx in step.pointers.items():
        by_index.setdefault(idx, []).append(name)
    return by_index


def _outside_active_range(idx: int, step: Step) -> bool:
    if step.subrange:
        left, _, right = step.subrange
        return not left <= idx <= right
    ptrs = step.pointers
    if "low" in ptrs and "high" in ptrs:
        return not ptrs["low"] <= idx <= ptrs["high"]
    return False
