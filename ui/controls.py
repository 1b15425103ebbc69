"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls       – start/pause/resume/step/stop + speed slider
  • algorithm_selector      – dropdown of every registered algorithm
  • structure_selector      – dropdown of every data structure
  • structure_panel         – operation buttons, value / position inputs, capacity
  • graph_panel             – graph text, random graph, source node
  • knapsack_panel          – item list and capacity
  • dataset_panel           – size slider, random generation, custom list, search target
  • analytics_panel         – comparisons, swaps, writes, steps, …
  • comparison_panel        – side-by-side metrics of two runs
  • pseudocode_viewer       – with live line highlighting
  • explanation_panel       – Learning Mode "why this step happened"
  • complexity_panel        – best / average / worst / space card
  • source_listing          – reference code tabs (python / javascript / java)
  • preferences_panel       – login, theme, preferred language
  • mode_toggle             – Learning Mode on/off

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo
from algorithms.listings import LANGUAGES
from engine import RunMetrics, ComparisonResult, SPEED_PRESETS
from graph import GRAPH_BOUNDS, Graph, Item, items_text
from structures import StructureInfo, StructureState


def _escape(text: str) -> str:
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;').replace('"', '&quot;')


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    state: str = "idle",
    step_number: int = 0,
    speed: float = 50,
) -> str:
    running = state == "running"
    primary_id    = "btn-pause" if running else ("btn-resume" if state == "paused" else "btn-start")
    primary_icon  = "⏸" if running else "▶"
    primary_label = {"btn-pause": "Pause", "btn-resume": "Resume", "btn-start": "Start"}[primary_id]

    presets = "".join(
        f'<button class="preset-btn" data-speed="{pct}">{name.capitalize()}</button>'
        for name, pct in SPEED_PRESETS.items()
    )

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="{primary_id}" class="btn-play" title="{primary_label}">{primary_icon} {primary_label}</button>
        <button id="btn-step" title="Next step" {'disabled' if running or state == 'completed' else ''}>⏭ Step</button>
        <button id="btn-stop" class="btn-secondary" title="Stop and reset">⏹ Reset</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{step_number}</span>
        · <span id="run-state">{state.upper()}</span>
        {' <span class="finished-badge">DONE</span>' if state == 'completed' else ''}
      </div>
      <div class="speed-control">
        <label>Speed: <span id="speed-val">{int(speed)}</span>%</label>
        <input type="range" id="speed-slider" min="10" max="100" step="1" value="{int(speed)}">
        <div class="preset-row">{presets}</div>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
FAMILY_LABELS = {"sort": "Sorting", "search": "Searching", "graph": "Graph", "greedy": "Greedy"}


def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble-sort",
) -> str:
    groups: Dict[str, List[str]] = {family: [] for family in FAMILY_LABELS}
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        option = f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity.average}</option>'
        groups[algo.family].append(option)
    optgroups = "".join(
        f'<optgroup label="{FAMILY_LABELS[family]}">{"".join(options)}</optgroup>'
        for family, options in groups.items() if options
    )

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-select">
        {optgroups}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Dataset Panel
# ---------------------------------------------------------------------------
def dataset_panel(
    dataset: List[int],
    size: int = 10,
    min_size: int = 2,
    max_size: int = 20,
    is_search: bool = False,
    target: Optional[int] = None,
) -> str:
    target_block = ""
    if is_search:
        target_block = f"""
        <label>Search for:
          <input type="number" id="target-input" value="{'' if target is None else target}">
        </label>
        <button id="btn-set-target" class="btn-secondary">Set Target</button>
        """

    return f"""
    <div class="panel dataset-panel">
      <h3>🎲 Dataset</h3>
      <label>Size: <span id="size-val">{size}</span>
        <input type="range" id="size-slider" min="{min_size}" max="{max_size}" value="{size}">
      </label>
      <button id="btn-generate" class="btn-secondary">Generate Random</button>
      <label>Custom values (comma separated):</label>
      <input type="text" id="custom-input" placeholder="38, 27, 43, 3, 9" value="{', '.join(str(v) for v in dataset)}">
      <button id="btn-import" class="btn-secondary">Use These Values</button>
      <p id="dataset-error" class="error"></p>
      {target_block}
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None, counters: Optional[Dict[str, int]] = None) -> str:
    if metrics is None and not counters:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    if metrics is None:
        # live counters of the run in progress
        return f"""
        <div class="panel analytics-panel">
          <h3>📊 Analytics — live</h3>
          <table>
            <tr><td>Comparisons:</td><td><strong>{counters.get('comparisons', 0)}</strong></td></tr>
            <tr><td>Swaps:</td><td><strong>{counters.get('swaps', 0)}</strong></td></tr>
            <tr><td>Writes:</td><td><strong>{counters.get('writes', 0)}</strong></td></tr>
            <tr><td>Steps:</td><td><strong>{counters.get('steps', 0)}</strong></td></tr>
          </table>
        </div>
        """

    if metrics.family in ("graph", "greedy"):
        figures = ", ".join(f"{name} {value}" for name, value in metrics.totals.items())
        outcome = metrics.outcome.replace('-', ' ').capitalize() + (f" ({figures})" if figures else "")
    elif metrics.target is not None:
        outcome = f"✅ Found at {metrics.found_index}" if metrics.found_index is not None else "❌ Not Found"
    else:
        outcome = "✅ Sorted" if metrics.sorted_ok else "❌ Not Sorted"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Size:</td><td><strong>{metrics.size}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Writes:</td><td><strong>{metrics.writes}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Memory:</td><td><strong>{metrics.memory_bytes // 1024} KB</strong></td></tr>
        <tr><td>Result:</td><td><strong>{outcome}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None, algorithms: Optional[List[AlgoInfo]] = None) -> str:
    if not comp:
        options = "".join(
            f'<option value="{a.key}">{a.label}</option>' for a in (algorithms or []) if a.family == "sort"
        )
        return f"""
        <div class="panel comparison-panel">
          <h3>⚖️ Compare</h3>
          <p class="placeholder">Run two algorithms on the current dataset.</p>
          <select id="compare-left">{options}</select>
          <select id="compare-right">{options}</select>
          <button id="btn-compare" class="btn-secondary">Compare</button>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {winner_label}"

    rows = [
        ("Comparisons", left.comparisons, right.comparisons, comp.winner_comparisons),
        ("Swaps", left.swaps, right.swaps, comp.winner_swaps),
        ("Total Steps", left.total_steps, right.total_steps, comp.winner_steps),
        ("Wall Time", f"{left.wall_time_ms:.2f} ms", f"{right.wall_time_ms:.2f} ms", comp.winner_time),
    ]
    body = "".join(
        f"<tr><td>{name}</td><td>{l}</td><td>{r}</td><td>{winner_badge(w)}</td></tr>"
        for name, l, r, w in rows
    )

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {left.algo_label} vs {right.algo_label}</h3>
      <table class="comparison-table">
        <thead>
          <tr>
            <th>Metric</th>
            <th>{left.algo_label}</th>
            <th>{right.algo_label}</th>
            <th>Winner</th>
          </tr>
        </thead>
        <tbody>
          {body}
        </tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div style="color: #7d8590; padding: 20px; text-align: center;">
            Select an algorithm to view pseudocode
          </div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{_escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel (Learning Mode)
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "", show: bool = True) -> str:
    if not show:
        return """<div class="explanation-text" style="color: #7d8590; padding: 20px;">Learning mode disabled</div>"""

    if not explanation:
        return "<div class=\"explanation-text\">▶ Click <strong>Start</strong> to see step-by-step explanations of what's happening at each stage.</div>"

    return f"""<div class="explanation-text">{_escape(explanation)}</div>"""


# ---------------------------------------------------------------------------
# Complexity Card
# ---------------------------------------------------------------------------
def complexity_panel(info: Optional[AlgoInfo]) -> str:
    if info is None:
        return ""
    c = info.complexity
    stable = "Yes" if info.stable else "No"
    stability_row = "" if info.family != "sort" else f"<tr><td>Stable:</td><td><strong>{stable}</strong></td></tr>"
    return f"""
    <div class="panel complexity-panel">
      <h3>⏱ Complexity — {info.label}</h3>
      <table>
        <tr><td>Best:</td><td><strong>{c.best}</strong></td></tr>
        <tr><td>Average:</td><td><strong>{c.average}</strong></td></tr>
        <tr><td>Worst:</td><td><strong>{c.worst}</strong></td></tr>
        <tr><td>Space:</td><td><strong>{c.space}</strong></td></tr>
        {stability_row}
      </table>
      <p class="hint">{_escape(c.explanation)}</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Source Listing (code tabs)
# ---------------------------------------------------------------------------
def source_listing(info, language: str = "javascript") -> str:
    if info is None:
        return ""
    if language not in LANGUAGES:
        language = LANGUAGES[0]

    tab_buttons = []
    for lang in LANGUAGES:
        active = 'active' if lang == language else ''
        tab_buttons.append(f'<button class="tab-btn lang-tab {active}" data-lang="{lang}">{lang.capitalize()}</button>')

    lines = info.listing(language).split("\n")
    numbered = "".join(
        f'<div class="code-line"><span class="line-no">{n}</span>{_escape(line)}</div>'
        for n, line in enumerate(lines, start=1)
    )
    return f"""
    <div class="source-listing" data-algo="{info.key}">
      <div class="tabs">{''.join(tab_buttons)}</div>
      <div class="code-block">{numbered}</div>
    </div>
    """


# ---------------------------------------------------------------------------
# Data-Structure Panels
# ---------------------------------------------------------------------------
def structure_selector(structures: List[StructureInfo], selected_key: str = "stack") -> str:
    options = "".join(
        f'<option value="{s.key}" {"selected" if s.key == selected_key else ""}>{s.label}</option>'
        for s in structures
    )
    return f"""
    <div class="panel structure-selector">
      <h3>🧱 Data Structure</h3>
      <select id="structure-select">{options}</select>
    </div>
    """


def structure_panel(state: StructureState, value: Optional[int] = None, busy: bool = False) -> str:
    info = state.info
    buttons = "".join(
        f'<button class="op-btn" data-op="{op.name}" title="{op.complexity}" '
        f'data-needs-value="{int(op.needs_target)}" data-needs-position="{int(op.needs_position)}" '
        f'{"disabled" if busy else ""}>{op.label}</button>'
        for op in info.operations.values()
    )
    needs_position = any(op.needs_position for op in info.operations.values())
    position_block = ""
    if needs_position:
        position_block = """
        <label>Position:
          <input type="number" id="position-input" min="0" value="0">
        </label>
        """
    return f"""
    <div class="panel structure-panel" data-structure="{info.key}">
      <h3>🛠 Operations</h3>
      <p class="hint">{_escape(info.description)}</p>
      <label>Value:
        <input type="number" id="value-input" value="{'' if value is None else value}">
      </label>
      {position_block}
      <div class="button-row">{buttons}</div>
      <label>Capacity: <span id="capacity-val">{state.capacity}</span>
        <input type="range" id="capacity-slider" min="{info.capacity.minimum}"
               max="{info.capacity.maximum}" value="{state.capacity}">
      </label>
      <label>Initial values (comma separated):</label>
      <input type="text" id="structure-input" placeholder="5, 3, 8"
             value="{', '.join(str(v) for v in state.values if v is not None)}">
      <div class="button-row">
        <button id="btn-structure-load" class="btn-secondary">Load</button>
        <button id="btn-structure-reset" class="btn-secondary">Clear</button>
      </div>
      <p id="structure-error" class="error"></p>
    </div>
    """


# ---------------------------------------------------------------------------
# Graph & Knapsack Panels
# ---------------------------------------------------------------------------
def graph_panel(graph: Graph, source: int = 0, has_source: bool = True) -> str:
    source_block = ""
    if has_source:
        options = "".join(
            f'<option value="{label}" {"selected" if k == source else ""}>{label}</option>'
            for k, label in enumerate(graph.labels)
        )
        source_block = f"""
        <label>Start node:
          <select id="source-select">{options}</select>
        </label>
        """
    return f"""
    <div class="panel graph-panel">
      <h3>🕸 Graph</h3>
      {source_block}
      <label>Nodes: <span id="graph-size-val">{graph.size}</span>
        <input type="range" id="graph-size-slider" min="{GRAPH_BOUNDS.minimum}"
               max="{GRAPH_BOUNDS.maximum}" value="{graph.size}">
      </label>
      <button id="btn-graph-generate" class="btn-secondary">Random Graph</button>
      <label>Edges (A-B:4, one per comma):</label>
      <textarea id="graph-input" rows="3">{_escape(graph.to_text())}</textarea>
      <button id="btn-graph-import" class="btn-secondary">Use This Graph</button>
      <p id="graph-error" class="error"></p>
    </div>
    """


def knapsack_panel(items: List[Item], capacity: float) -> str:
    return f"""
    <div class="panel knapsack-panel">
      <h3>🎒 Knapsack</h3>
      <label>Items (label:value/weight):</label>
      <textarea id="items-input" rows="3">{_escape(items_text(items))}</textarea>
      <label>Capacity:
        <input type="number" id="capacity-input" min="1" step="any" value="{capacity}">
      </label>
      <button id="btn-knapsack-import" class="btn-secondary">Use These Items</button>
      <p id="knapsack-error" class="error"></p>
    </div>
    """


# ---------------------------------------------------------------------------
# Preferences Panel
# ---------------------------------------------------------------------------
def preferences_panel(user: Optional[Dict[str, Any]] = None) -> str:
    if user is None:
        return """
        <div class="panel preferences-panel">
          <h3>👤 Profile</h3>
          <input type="text" id="login-name" placeholder="Your name">
          <input type="text" id="login-email" placeholder="Email (optional)">
          <button id="btn-login" class="btn-secondary">Log In</button>
        </div>
        """

    prefs = user.get("preferences", {})
    theme = prefs.get("theme", "light")
    lang  = prefs.get("preferredLanguage", "javascript")
    recent = prefs.get("recentStructures", [])

    theme_opts = "".join(
        f'<option value="{t}" {"selected" if t == theme else ""}>{t.capitalize()}</option>'
        for t in ("light", "dark")
    )
    lang_opts = "".join(
        f'<option value="{l}" {"selected" if l == lang else ""}>{l.capitalize()}</option>'
        for l in LANGUAGES
    )
    recent_html = ", ".join(_escape(r) for r in recent) or "—"

    return f"""
    <div class="panel preferences-panel">
      <h3>👤 {_escape(user.get('name', ''))}</h3>
      <label>Theme:
        <select id="pref-theme">{theme_opts}</select>
      </label>
      <label>Preferred language:
        <select id="pref-language">{lang_opts}</select>
      </label>
      <p class="hint">Recent: {recent_html}</p>
      <button id="btn-logout" class="btn-secondary">Log Out</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Mode Toggle (Learning vs Expert)
# ---------------------------------------------------------------------------
def mode_toggle(learning_mode: bool = True) -> str:
    return f"""
    <div class="panel mode-toggle">
      <h3>🎓 Mode</h3>
      <label>
        <input type="checkbox" id="learning-mode-toggle" {'checked' if learning_mode else ''}>
        Learning Mode (explanations)
      </label>
    </div>
    """
