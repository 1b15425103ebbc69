"""
structure_canvas.py — SVG Data-Structure Renderer
==================================================
Pure rendering function: StructureState (+ the current Step) → SVG.

Every structure draws the same snapshot positions the producers use,
so a step's indices and pointers land on the right box or node:

    stack            vertical boxes, bottom to top
    queue            horizontal boxes, front on the left
    circular queue   slots on a ring, empty slots hollow
    linked lists     boxes joined by → (singly) or ↔ (doubly)
    BST / AVL        nodes placed by depth and inorder rank
    heaps            the implicit tree above its backing array
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

from algorithms.step import Step
from structures import StructureKind, StructureState
from structures.tree import layout as tree_layout
from ui.canvas import CONFIG, CanvasConfig


BOX = 52
NODE_R = 20


def cell_role(idx: int, step: Optional[Step], config: CanvasConfig = CONFIG) -> str:
    """Color role of snapshot position `idx`."""
    if step is None:
        return "default"
    if idx in step.indices:
        return config.kind_roles.get(step.kind, "default")
    if idx in step.sorted_marks:
        return "sorted"
    return "default"


def render_structure(
    state: StructureState,
    step: Optional[Step] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        state  : The structure and its committed contents.
        step   : Step of the operation being played, or None for the
                 resting contents.
        config : Visual config.
    """
    values = list(step.snapshot) if step is not None else list(state.values)
    if step is not None:
        pointers = dict(step.pointers)
    elif state.info.is_ring:
        pointers = {"front": state.front, "rear": state.rear}
    else:
        pointers = {}

    parts = [
        f'<svg width="100%" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    kind = state.info.kind
    if kind == StructureKind.STACK:
        parts += _stack(values, pointers, step, config)
    elif kind == StructureKind.CIRCULAR_QUEUE:
        parts += _ring(values, pointers, step, config)
    elif kind in (StructureKind.QUEUE, StructureKind.LINKED_LIST, StructureKind.DOUBLY_LINKED_LIST):
        joint = {StructureKind.LINKED_LIST: "→", StructureKind.DOUBLY_LINKED_LIST: "↔"}.get(kind)
        parts += _row(values, pointers, step, config, joint)
    elif kind in (StructureKind.BST, StructureKind.AVL_TREE):
        parts += _tree(values, pointers, step, config)
    else:
        parts += _heap(values, pointers, step, config)

    caption = f"{state.info.label}   {_count(values, state)} / {state.capacity}"
    parts.append(
        f'<text x="{config.padding}" y="22" font-size="13" '
        f'font-family="\'JetBrains Mono\', monospace" fill="{config.pointer_color}">{caption}</text>'
    )
    if step is not None and "result" in step.totals:
        parts.append(
            f'<text x="{config.width - config.padding}" y="22" text-anchor="end" font-size="13" '
            f'font-family="\'JetBrains Mono\', monospace" fill="{config.bar_colors["pivot"]}">'
            f'result = {step.totals["result"]}</text>'
        )
    if not values or all(v is None for v in values):
        parts.append(
            f'<text x="{config.width / 2}" y="{config.height - 20}" text-anchor="middle" '
            f'font-size="13" fill="{config.pointer_color}">empty</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


def _count(values: Sequence, state: StructureState) -> int:
    return sum(v is not None for v in values) if state.info.is_ring else len(values)


def _labels(pointers: Dict[str, int]) -> Dict[int, List[str]]:
    by_index: Dict[int, List[str]] = {}
    for name, idx in pointers.items():
        if idx is not None and idx >= 0:
            by_index.setdefault(idx, []).append(name)
    return by_index


def _box(idx: int, value, x: float, y: float, role: str, config: CanvasConfig) -> str:
    fill = config.bar_colors.get(role, config.bar_colors["default"])
    text = "" if value is None else value
    hollow = ' stroke-dasharray="4,3" fill-opacity="0.3"' if value is None else ""
    return "\n".join([
        f'<g class="cell {role}" data-index="{idx}">',
        f'  <rect x="{x:.1f}" y="{y:.1f}" width="{BOX}" height="{BOX}" rx="{config.bar_radius}" '
        f'fill="{fill}" stroke="#484f58"{hollow}/>',
        f'  <text x="{x + BOX / 2:.1f}" y="{y + BOX / 2 + 5:.1f}" text-anchor="middle" '
        f'font-size="{config.value_label_size + 2}" font-family="\'DM Sans\', sans-serif" '
        f'fill="{config.value_label_color}" font-weight="600">{text}</text>',
        '</g>',
    ])


def _label(x: float, y: float, names: List[str], config: CanvasConfig, anchor: str = "middle") -> str:
    return (
        f'<text class="pointer" x="{x:.1f}" y="{y:.1f}" text-anchor="{anchor}" '
        f'font-size="{config.pointer_size}" font-family="\'JetBrains Mono\', monospace" '
        f'fill="{config.pointer_color}">{",".join(names)}</text>'
    )


def _stack(values, pointers, step, config) -> List[str]:
    parts = []
    labels = _labels(pointers)
    x = config.width / 2 - BOX / 2
    base = config.height - 30
    for idx, value in enumerate(values):
        y = base - (idx + 1) * (BOX + 4)
        parts.append(_box(idx, value, x, y, cell_role(idx, step, config), config))
        if idx in labels:
            parts.append(_label(x + BOX + 12, y + BOX / 2 + 4, labels[idx], config, anchor="start"))
    return parts


def _row(values, pointers, step, config, joint: Optional[str]) -> List[str]:
    parts = []
    labels = _labels(pointers)
    gap = 28 if joint else 6
    n = max(len(values), 1)
    total = n * BOX + (n - 1) * gap
    left = max(config.padding, (config.width - total) / 2)
    y = config.height / 2 - BOX / 2
    for idx, value in enumerate(values):
        x = left + idx * (BOX + gap)
        parts.append(_box(idx, value, x, y, cell_role(idx, step, config), config))
        if joint and idx < len(values) - 1:
            parts.append(
                f'<text x="{x + BOX + gap / 2:.1f}" y="{y + BOX / 2 + 5:.1f}" text-anchor="middle" '
                f'font-size="16" fill="{config.pointer_color}">{joint}</text>'
            )
        if idx in labels:
            parts.append(_label(x + BOX / 2, y + BOX + 18, labels[idx], config))
    if joint and values:
        x = left + len(values) * (BOX + gap) - gap
        parts.append(
            f'<text x="{x + 8:.1f}" y="{y + BOX / 2 + 5:.1f}" font-size="12" '
            f'fill="{config.pointer_color}">→ null</text>'
        )
    return parts


def _ring(values, pointers, step, config) -> List[str]:
    parts = []
    labels = _labels(pointers)
    n = len(values)
    cx, cy = config.width / 2, config.height / 2 + 10
    r = min(cx, cy) - BOX - 20
    for idx, value in enumerate(values):
        angle = 2 * math.pi * idx / max(n, 1)
        x = cx + r * math.sin(angle) - BOX / 2
        y = cy - r * math.cos(angle) - BOX / 2
        parts.append(_box(idx, value, x, y, cell_role(idx, step, config), config))
        parts.append(
            f'<text x="{x + BOX / 2:.1f}" y="{y - 4:.1f}" text-anchor="middle" font-size="10" '
            f'fill="#484f58">{idx}</text>'
        )
        if idx in labels:
            lx = cx + (r - BOX) * math.sin(angle)
            ly = cy - (r - BOX) * math.cos(angle) + 4
            parts.append(_label(lx, ly, labels[idx], config))
    return parts


def _node(idx: int, value, x: float, y: float, role: str, config: CanvasConfig) -> str:
    fill = config.bar_colors.get(role, config.bar_colors["default"])
    return "\n".join([
        f'<g class="node {role}" data-index="{idx}">',
        f'  <circle cx="{x:.1f}" cy="{y:.1f}" r="{NODE_R}" fill="{fill}" stroke="#484f58" stroke-width="2"/>',
        f'  <text x="{x:.1f}" y="{y + 5:.1f}" text-anchor="middle" '
        f'font-size="{config.value_label_size + 1}" font-family="\'DM Sans\', sans-serif" '
        f'fill="{config.value_label_color}" font-weight="600">{value}</text>',
        '</g>',
    ])


def _draw_tree(placed: List[Tuple[int, int, float, Optional[int]]], pointers, step, config,
               top: float, level_h: float) -> List[str]:
    """`placed` holds (value, depth, x, parent position) per snapshot position."""
    labels = _labels(pointers)
    edges, nodes = [], []
    for idx, (value, depth, x, parent) in enumerate(placed):
        y = top + depth * level_h
        if parent is not None:
            _, pdepth, px, _ = placed[parent]
            edges.append(
                f'<line x1="{px:.1f}" y1="{top + pdepth * level_h:.1f}" x2="{x:.1f}" y2="{y:.1f}" '
                f'stroke="#30363d" stroke-width="2"/>'
            )
        nodes.append(_node(idx, value, x, y, cell_role(idx, step, config), config))
        if idx in labels:
            nodes.append(_label(x, y + NODE_R + 14, labels[idx], config))
    return edges + nodes


def _tree(values, pointers, step, config) -> List[str]:
    if not values:
        return []
    shape = tree_layout(values)
    columns = len(values)
    usable = config.width - 2 * config.padding
    step_x = usable / max(columns, 1)
    depth = max(d for _, d, _, _ in shape) + 1
    level_h = min(70.0, (config.height - 90) / max(depth, 1))
    placed = [
        (value, d, config.padding + (col + 0.5) * step_x, parent)
        for value, d, col, parent in shape
    ]
    return _draw_tree(placed, pointers, step, config, top=60, level_h=level_h)


def _heap(values, pointers, step, config) -> List[str]:
    if not values:
        return []
    n = len(values)
    usable = config.width - 2 * config.padding
    placed = []
    for idx, value in enumerate(values):
        d = int(math.log2(idx + 1))
        slot = idx + 1 - 2 ** d
        x = config.padding + usable * (slot + 0.5) / 2 ** d
        placed.append((value, d, x, (idx - 1) // 2 if idx else None))
    parts = _draw_tree(placed, pointers, step, config, top=60, level_h=60)

    # backing array along the bottom
    cell = min(BOX, usable / n)
    left = (config.width - n * cell) / 2
    y = config.height - cell - 16
    for idx, value in enumerate(values):
        fill = config.bar_colors.get(cell_role(idx, step, config), config.bar_colors["default"])
        x = left + idx * cell
        parts.append(
            f'<rect x="{x:.1f}" y="{y:.1f}" width="{cell:.1f}" height="{cell:.1f}" '
            f'fill="{fill}" stroke="#484f58"/>'
        )
        parts.append(
            f'<text x="{x + cell / 2:.1f}" y="{y + cell / 2 + 4:.1f}" text-anchor="middle" '
            f'font-size="{config.value_label_size}" fill="{config.value_label_color}">{value}</text>'
        )
    return parts
