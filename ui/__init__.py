"""
ui/
---
Presentation layer.

    from ui import render_bars, render_structure, render_graph, render_knapsack
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_bars, bar_role, CanvasConfig
from ui.graph_canvas import render_graph, render_knapsack
from ui.structure_canvas import render_structure

from ui.controls import (
    playback_controls,
    algorithm_selector,
    structure_selector,
    dataset_panel,
    structure_panel,
    graph_panel,
    knapsack_panel,
    analytics_panel,
    comparison_panel,
    pseudocode_viewer,
    explanation_panel,
    complexity_panel,
    source_listing,
    preferences_panel,
    mode_toggle,
)

__all__ = [
    "render_bars",
    "bar_role",
    "CanvasConfig",
    "render_graph",
    "render_knapsack",
    "render_structure",
    "playback_controls",
    "algorithm_selector",
    "structure_selector",
    "dataset_panel",
    "structure_panel",
    "graph_panel",
    "knapsack_panel",
    "analytics_panel",
    "comparison_panel",
    "pseudocode_viewer",
    "explanation_panel",
    "complexity_panel",
    "source_listing",
    "preferences_panel",
    "mode_toggle",
]
