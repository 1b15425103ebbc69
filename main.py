"""
main.py — Algorithm & Data-Structure Visualizer Flask App
==========================================================
The web server that powers the visualizer.

Routes:
  GET  /                                  – main UI
  POST /api/dataset/generate              – random dataset of `size`
  POST /api/dataset/import                – custom comma-separated list
  POST /api/config/algo                   – choose algorithm (stops the run)
  POST /api/config/speed                  – speed 10–100
  POST /api/config/target                 – search target (stops the run)
  POST /api/config/learning               – Learning Mode on/off
  POST /api/run/start|pause|resume|stop|step
  POST /api/tick                          – fire due continuations, return the frame
  GET  /api/state                         – current frame
  GET  /api/algorithms                    – registry cards
  GET  /api/algorithms/<key>/source?lang= – reference listing (algorithms and structures)
  POST /api/compare                       – run two algorithms on the dataset
  GET  /api/structures                    – data-structure cards
  POST /api/structure/select              – choose a data structure
  POST /api/structure/op                  – animate one operation
  POST /api/structure/load                – replace the contents
  POST /api/structure/reset               – empty the structure
  POST /api/structure/capacity            – resize
  POST /api/graph/generate|import|source  – graph input for the graph algorithms
  POST /api/knapsack/import               – items and capacity
  GET|POST|DELETE /api/preferences        – session store
  POST /api/login

State management:
  Each browser session gets one Workspace: a Stepper for algorithms, a
  Stepper for data-structure operations, the structure's contents and
  the graph / knapsack inputs.  Workspaces live in an in-process
  registry keyed by an id stored in the Flask session cookie; idle ones
  expire and the least recently used one is dropped when the registry
  is full.  Playback is timed by a ManualScheduler: the page polls
  /api/tick every TICK_INTERVAL_MS and whatever continuation is due
  fires inside that request.  Requests for one session are serialised
  with the workspace lock.
"""

import logging
import random
import secrets
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request, session

from algorithms import AlgoInfo, AlgorithmKind, get_algorithm, list_algorithms
from algorithms.listings import LANGUAGES
from config import Config
from dataset import STRUCTURE_BOUNDS, generate, parse_dataset, parse_target, validate_size
from engine import ManualScheduler, Recorder, Stepper, StepperState, compare
from errors import StateTransitionError, ValidationError
from graph import (
    GRAPH_BOUNDS, SAMPLE_CAPACITY, parse_capacity, parse_graph, parse_items,
    random_graph, sample_graph, sample_items,
)
from logging_config import setup_logging
from store import SessionStore
from structures import StructureState, get_structure, list_structures
from ui import (
    render_bars,
    render_graph,
    render_knapsack,
    render_structure,
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

logger = logging.getLogger(__name__)

bp = Blueprint("visualizer", __name__)


# ---------------------------------------------------------------------------
# Per-session Workspaces
# ---------------------------------------------------------------------------
class Workspace:
    """
    Attributes:
        algorithm : Stepper for sorts, searches, graph and greedy algorithms.
        structure : Contents of the selected data structure.
        operation : Stepper playing the last structure operation.
        position  : Position operand of the last structure operation.
        graph     : Graph fed to the graph algorithms.
        source    : Start node (index into graph.labels).
        items     : Knapsack items.
        capacity  : Knapsack capacity.
        mode      : "algorithm" or "structure"; picks the active Stepper.
        touched   : Clock reading of the last request.
    """

    def __init__(self, algorithm: Stepper, structure: StructureState):
        self.lock = threading.Lock()
        self.algorithm = algorithm
        self.structure = structure
        self.operation = self._operation_stepper(next(iter(structure.info.operations.values())))
        self.position: Optional[int] = None
        self.graph = sample_graph()
        self.source = 0
        self.items = sample_items()
        self.capacity = SAMPLE_CAPACITY
        self.mode = "algorithm"
        self.touched = 0.0

    @property
    def active(self) -> Stepper:
        return self.operation if self.mode == "structure" else self.algorithm

    def select_structure(self, structure: StructureState) -> None:
        self.operation.close()
        self.structure = structure
        self.position = None
        self.operation = self._operation_stepper(next(iter(structure.info.operations.values())))

    def _operation_stepper(self, op) -> Stepper:
        return Stepper(
            op, self.structure.values,
            on_step=self.structure.commit,
            speed=self.algorithm.speed,
            scheduler=ManualScheduler(),
        )

    def options_for(self, info: AlgoInfo) -> dict:
        """Producer options the algorithm needs beyond the number list."""
        if info.family == "graph":
            return {"graph": self.graph, "source": self.source}
        if info.family == "greedy":
            return {"items": self.items, "capacity": self.capacity}
        return {}

    def configure(self) -> None:
        """Hand the graph / knapsack inputs to the algorithm Stepper."""
        info = self.algorithm.info
        if info.family in ("graph", "greedy"):
            if self.algorithm.dataset:
                self.algorithm.load_dataset(())
            self.algorithm.set_options(**self.options_for(info))
        elif self.algorithm.options:
            self.algorithm.set_options()

    def sync_operation(self) -> None:
        """Point the operation Stepper at the current contents before a fresh run."""
        op = self.operation.info
        self.operation.load_dataset(self.structure.values)
        self.operation.set_options(**self.structure.options(op, self.position))

    def close(self) -> None:
        self.algorithm.close()
        self.operation.close()


class WorkspaceRegistry:
    """
    Workspaces by session id, least recently used first.  Entries idle for
    longer than `idle_seconds` expire; past `max_entries` the oldest goes.
    """

    def __init__(self, idle_seconds: float = 1800, max_entries: int = 256,
                 clock: Callable[[], float] = time.monotonic):
        self.idle_seconds = idle_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Workspace]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid: str, factory: Callable[[], Workspace]) -> Workspace:
        with self._lock:
            now = self._clock()
            self._expire(now)
            workspace = self._entries.get(sid)
            if workspace is None:
                workspace = factory()
                self._entries[sid] = workspace
                while len(self._entries) > self.max_entries:
                    old_sid, old = self._entries.popitem(last=False)
                    logger.info("Evicting workspace %s (registry full)", old_sid[:8])
                    old.close()
            else:
                self._entries.move_to_end(sid)
            workspace.touched = now
            return workspace

    def _expire(self, now: float) -> None:
        while self._entries:
            sid, oldest = next(iter(self._entries.items()))
            if now - oldest.touched <= self.idle_seconds:
                break
            del self._entries[sid]
            logger.info("Workspace %s expired", sid[:8])
            oldest.close()

    def close_all(self) -> None:
        with self._lock:
            for workspace in self._entries.values():
                workspace.close()
            self._entries.clear()

    def __contains__(self, sid: str) -> bool:
        return sid in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _session_id() -> str:
    if "sid" not in session:
        session["sid"] = secrets.token_hex(16)
    return session["sid"]


def _new_workspace() -> Workspace:
    cfg = current_app.config
    stepper = Stepper(
        cfg["DEFAULT_ALGORITHM"],
        generate(cfg["DEFAULT_SIZE"], cfg["VALUE_MIN"], cfg["VALUE_MAX"]),
        speed=cfg["DEFAULT_SPEED"],
        scheduler=ManualScheduler(),
    )
    structure = StructureState(get_structure(cfg["DEFAULT_STRUCTURE"]))
    workspace = Workspace(stepper, structure)
    workspace.configure()
    return workspace


def _workspace() -> Workspace:
    return current_app.extensions["workspaces"].get(_session_id(), _new_workspace)


def _store() -> SessionStore:
    return current_app.extensions["session_store"]


def _json() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _learning_mode() -> bool:
    return session.get("learning_mode", True)


def _language() -> str:
    user = _store().load()
    return (user or {}).get("preferences", {}).get("preferredLanguage", "javascript")


def _prepare(info: AlgoInfo, values):
    """Binary search only runs on ascending input, so its datasets are sorted on the way in."""
    values = list(values)
    if info.kind == AlgorithmKind.BINARY_SEARCH:
        values.sort()
    return values


def _require_numbers(info: AlgoInfo) -> None:
    if info.family not in ("sort", "search"):
        raise ValidationError(f"{info.label} does not take a list of numbers")


# ---------------------------------------------------------------------------
# Frame — everything the page needs to redraw
# ---------------------------------------------------------------------------
def _canvas(ws: Workspace) -> str:
    stepper = ws.active
    step = stepper.current_step
    if ws.mode == "structure":
        return render_structure(ws.structure, step)
    info = stepper.info
    if info.family == "graph":
        return render_graph(
            ws.graph, step,
            source=ws.source if info.has_source else None,
            directed=info.kind == AlgorithmKind.BELLMAN_FORD,
            panel="Key" if info.kind == AlgorithmKind.PRIM_MST else "Distances",
        )
    if info.family == "greedy":
        return render_knapsack(ws.items, ws.capacity, step)
    return render_bars(step if step else stepper.snapshot, target=stepper.target)


def _input_panel(ws: Workspace) -> str:
    if ws.mode == "structure":
        return structure_panel(ws.structure, value=ws.operation.target, busy=ws.operation.is_running)
    stepper = ws.algorithm
    info = stepper.info
    if info.family == "graph":
        return graph_panel(ws.graph, source=ws.source, has_source=info.has_source)
    if info.family == "greedy":
        return knapsack_panel(list(ws.items), ws.capacity)
    return dataset_panel(
        list(stepper.dataset),
        size=len(stepper.dataset),
        min_size=info.bounds.minimum,
        max_size=info.bounds.maximum,
        is_search=info.is_search,
        target=stepper.target,
    )


def _frame(ws: Workspace) -> dict:
    stepper = ws.active
    step = stepper.current_step
    data = stepper.to_dict()
    data["mode"] = ws.mode
    data["structure"] = ws.structure.to_dict()
    data["svg"] = _canvas(ws)
    data["pseudocode"] = pseudocode_viewer(
        stepper.info.pseudocode,
        current_line=step.pseudocode_line if step else -1,
    )
    data["explanation"] = explanation_panel(step.explanation if step else "", show=_learning_mode())
    data["analytics"] = analytics_panel(counters=stepper.counters if step else None)
    data["playback"] = playback_controls(
        state=stepper.state.value,
        step_number=stepper.counters["steps"],
        speed=stepper.speed,
    )
    return data


def _full_frame(ws: Workspace) -> dict:
    """Frame plus the panels that only change with the selection."""
    frame = _frame(ws)
    language = _language()
    if ws.mode == "structure":
        frame["complexity"] = ""
        frame["source"] = source_listing(ws.structure.info, language)
    else:
        frame["complexity"] = complexity_panel(ws.algorithm.info)
        frame["source"] = source_listing(ws.algorithm.info, language)
    frame["dataset_panel"] = _input_panel(ws)
    return frame


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@bp.route("/")
def index():
    ws = _workspace()
    user = _store().load()

    with ws.lock:
        frame = _full_frame(ws)
        html = render_template_string(
            INDEX_TEMPLATE,
            svg=frame["svg"],
            playback=frame["playback"],
            algo_selector=algorithm_selector(list_algorithms(), selected_key=ws.algorithm.info.key),
            structure_selector=structure_selector(list_structures(), selected_key=ws.structure.info.key),
            dataset=frame["dataset_panel"],
            analytics=frame["analytics"],
            compare=comparison_panel(algorithms=list_algorithms()),
            pseudocode=frame["pseudocode"],
            explanation=frame["explanation"],
            complexity=frame["complexity"],
            source_html=frame["source"],
            preferences=preferences_panel(user),
            mode_toggle=mode_toggle(learning_mode=_learning_mode()),
            tick_ms=current_app.config["TICK_INTERVAL_MS"],
            theme=(user or {}).get("preferences", {}).get("theme", "light"),
        )
    return html


# ---------------------------------------------------------------------------
# API: Dataset
# ---------------------------------------------------------------------------
@bp.route("/api/dataset/generate", methods=["POST"])
def api_dataset_generate():
    data = _json()
    ws = _workspace()
    cfg = current_app.config

    with ws.lock:
        stepper = ws.algorithm
        info = stepper.info
        _require_numbers(info)
        size = validate_size(data.get("size", len(stepper.dataset)), info.bounds)
        values = _prepare(info, generate(size, cfg["VALUE_MIN"], cfg["VALUE_MAX"], seed=data.get("seed")))
        stepper.load_dataset(values)
        if info.is_search:
            stepper.set_target(random.choice(values))
        return jsonify(_frame(ws))


@bp.route("/api/dataset/import", methods=["POST"])
def api_dataset_import():
    text = _json().get("text", "")
    ws = _workspace()

    with ws.lock:
        stepper = ws.algorithm
        info = stepper.info
        _require_numbers(info)
        values = _prepare(info, parse_dataset(text, info.bounds))
        stepper.load_dataset(values)
        return jsonify(_frame(ws))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@bp.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    key = _json().get("algo_key", "")
    info = get_algorithm(key)
    if info is None:
        return jsonify({"error": f"Unknown algorithm: {key}"}), 404

    ws = _workspace()
    with ws.lock:
        ws.operation.stop()
        ws.mode = "algorithm"
        stepper = ws.algorithm
        stepper.set_algorithm(info.kind)
        if info.family in ("sort", "search"):
            dataset = list(stepper.dataset)
            if not info.bounds.contains(len(dataset)):
                cfg = current_app.config
                size = min(max(len(dataset), info.bounds.minimum), info.bounds.maximum)
                dataset = generate(size, cfg["VALUE_MIN"], cfg["VALUE_MAX"])
            stepper.load_dataset(_prepare(info, dataset))
            if info.is_search and stepper.target is None:
                stepper.set_target(random.choice(stepper.dataset))
        ws.configure()
        frame = _full_frame(ws)

    _store().record_recent(info.key)
    return jsonify(frame)


@bp.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    raw = _json().get("speed", 50)
    try:
        speed = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid speed: '{raw}'", token=str(raw))

    ws = _workspace()
    with ws.lock:
        ws.algorithm.set_speed(speed)
        ws.operation.set_speed(speed)
        stepper = ws.active
        return jsonify({"speed": stepper.speed, "delay_ms": round(stepper.delay_ms, 2)})


@bp.route("/api/config/target", methods=["POST"])
def api_config_target():
    target = parse_target(_json().get("target"))
    ws = _workspace()
    with ws.lock:
        ws.algorithm.set_target(target)
        return jsonify(_frame(ws))


@bp.route("/api/config/learning", methods=["POST"])
def api_config_learning():
    session["learning_mode"] = bool(_json().get("enabled", True))
    return jsonify({"learning_mode": session["learning_mode"]})


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
_ACTIONS = {
    "start":  Stepper.start,
    "pause":  Stepper.pause,
    "resume": Stepper.resume,
    "stop":   Stepper.stop,
    "step":   Stepper.step_once,
}

_FRESH_RUN = (StepperState.IDLE, StepperState.COMPLETED)


@bp.route("/api/run/<action>", methods=["POST"])
def api_run(action):
    if action not in _ACTIONS:
        return jsonify({"error": f"Unknown action: {action}"}), 404

    ws = _workspace()
    with ws.lock:
        stepper = ws.active
        if ws.mode == "structure" and action in ("start", "step") and stepper.state in _FRESH_RUN:
            # replay the last operation on the contents as they are now
            ws.sync_operation()
        _ACTIONS[action](stepper)
        # start/resume schedule with no delay; apply that step right away
        stepper.scheduler.run_due()
        return jsonify(_frame(ws))


@bp.route("/api/tick", methods=["POST"])
def api_tick():
    ws = _workspace()
    with ws.lock:
        ws.active.scheduler.run_due()
        frame = _frame(ws)
        if ws.mode == "structure" and ws.operation.is_finished:
            frame["dataset_panel"] = _input_panel(ws)
        return jsonify(frame)


@bp.route("/api/state", methods=["GET"])
def api_state():
    ws = _workspace()
    with ws.lock:
        return jsonify(_frame(ws))


# ---------------------------------------------------------------------------
# API: Static content
# ---------------------------------------------------------------------------
@bp.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify([a.to_dict() for a in list_algorithms()])


@bp.route("/api/structures", methods=["GET"])
def api_structures():
    return jsonify([s.to_dict() for s in list_structures()])


@bp.route("/api/algorithms/<key>/source", methods=["GET"])
def api_algorithm_source(key):
    info = get_algorithm(key) or get_structure(key)
    if info is None:
        return jsonify({"error": f"Unknown algorithm: {key}"}), 404
    lang = request.args.get("lang", "javascript")
    if lang not in LANGUAGES:
        raise ValidationError(f"Unsupported language: '{lang}'", token=lang)
    return jsonify({
        "key":      info.key,
        "language": lang,
        "code":     info.listing(lang),
        "html":     source_listing(info, lang),
    })


# ---------------------------------------------------------------------------
# API: Comparison
# ---------------------------------------------------------------------------
@bp.route("/api/compare", methods=["POST"])
def api_compare():
    data = _json()
    left_info = get_algorithm(data.get("left", ""))
    right_info = get_algorithm(data.get("right", ""))
    if left_info is None or right_info is None:
        return jsonify({"error": "Unknown algorithm"}), 404
    if left_info.family != right_info.family:
        raise ValidationError(f"Cannot compare {left_info.label} with {right_info.label}")

    ws = _workspace()
    with ws.lock:
        dataset = list(ws.algorithm.dataset)
        target = ws.algorithm.target
        options = ws.options_for(left_info)

    recorders = []
    for info in (left_info, right_info):
        rec = Recorder()
        values = _prepare(info, dataset) if info.family in ("sort", "search") else ()
        rec.start(info.kind, values, target=target if info.is_search else None, **options)
        rec.run_to_completion()
        recorders.append(rec)

    result = compare(*recorders)
    logger.info("Compared %s and %s (%d inputs)", left_info.key, right_info.key, recorders[0].metrics.size)
    payload = result.to_dict()
    payload["html"] = comparison_panel(result)
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Data structures
# ---------------------------------------------------------------------------
def _structure_ready(ws: Workspace) -> None:
    """Structure requests act on the structure view and abandon any operation in flight."""
    ws.algorithm.stop()
    ws.mode = "structure"
    ws.operation.stop()


@bp.route("/api/structure/select", methods=["POST"])
def api_structure_select():
    key = _json().get("structure", "")
    info = get_structure(key)
    if info is None:
        return jsonify({"error": f"Unknown data structure: {key}"}), 404

    ws = _workspace()
    with ws.lock:
        _structure_ready(ws)
        if ws.structure.info is not info:
            ws.select_structure(StructureState(info))
        frame = _full_frame(ws)

    _store().record_recent(info.key)
    return jsonify(frame)


@bp.route("/api/structure/op", methods=["POST"])
def api_structure_op():
    data = _json()
    ws = _workspace()
    with ws.lock:
        _structure_ready(ws)
        op = ws.structure.info.operation(data.get("op", ""))
        value = parse_target(data.get("value"), what="value") if op.needs_target else None
        position = None
        if op.needs_position:
            position = parse_target(data.get("position"), what="position")

        stepper = ws.operation
        stepper.set_algorithm(op)
        stepper.set_target(value)
        ws.position = position
        ws.sync_operation()
        stepper.start()
        stepper.scheduler.run_due()
        logger.debug("%s on %s", op.key, list(ws.structure.values))
        return jsonify(_frame(ws))


@bp.route("/api/structure/load", methods=["POST"])
def api_structure_load():
    text = _json().get("text", "")
    ws = _workspace()
    with ws.lock:
        _structure_ready(ws)
        ws.structure.load(parse_dataset(text, STRUCTURE_BOUNDS))
        ws.sync_operation()
        return jsonify(_full_frame(ws))


@bp.route("/api/structure/reset", methods=["POST"])
def api_structure_reset():
    ws = _workspace()
    with ws.lock:
        _structure_ready(ws)
        ws.structure.load(())
        ws.sync_operation()
        return jsonify(_full_frame(ws))


@bp.route("/api/structure/capacity", methods=["POST"])
def api_structure_capacity():
    ws = _workspace()
    with ws.lock:
        _structure_ready(ws)
        capacity = validate_size(_json().get("capacity"), ws.structure.info.capacity)
        ws.structure.resize(capacity)
        ws.sync_operation()
        return jsonify(_full_frame(ws))


# ---------------------------------------------------------------------------
# API: Graph & knapsack inputs
# ---------------------------------------------------------------------------
@bp.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = _json()
    ws = _workspace()
    with ws.lock:
        size = validate_size(data.get("size", ws.graph.size), GRAPH_BOUNDS)
        ws.graph = random_graph(size, seed=data.get("seed"))
        ws.source = 0
        ws.configure()
        return jsonify(_full_frame(ws))


@bp.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    text = _json().get("text", "")
    ws = _workspace()
    with ws.lock:
        ws.graph = parse_graph(text)
        ws.source = 0
        ws.configure()
        return jsonify(_full_frame(ws))


@bp.route("/api/graph/source", methods=["POST"])
def api_graph_source():
    label = str(_json().get("source", ""))
    ws = _workspace()
    with ws.lock:
        ws.source = ws.graph.index(label)
        ws.configure()
        return jsonify(_frame(ws))


@bp.route("/api/knapsack/import", methods=["POST"])
def api_knapsack_import():
    data = _json()
    ws = _workspace()
    with ws.lock:
        items = parse_items(data.get("items", ""))
        capacity = parse_capacity(data.get("capacity", ws.capacity))
        ws.items, ws.capacity = items, capacity
        ws.configure()
        return jsonify(_full_frame(ws))


# ---------------------------------------------------------------------------
# API: Preferences
# ---------------------------------------------------------------------------
@bp.route("/api/login", methods=["POST"])
def api_login():
    data = _json()
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Please enter your name")
    user = _store().login(name, email=(data.get("email") or "").strip() or None)
    return jsonify({"user": user, "html": preferences_panel(user)})


@bp.route("/api/preferences", methods=["GET", "POST", "DELETE"])
def api_preferences():
    store = _store()
    if request.method == "DELETE":
        store.clear()
        return jsonify({"user": None, "html": preferences_panel(None)})

    if request.method == "POST":
        partial = _json()
        if not partial:
            raise ValidationError("Nothing to save")
        lang = partial.get("preferredLanguage")
        if lang is not None and lang not in LANGUAGES:
            raise ValidationError(f"Unsupported language: '{lang}'", token=str(lang))
        user = store.save(partial)
        return jsonify({"user": user, "html": preferences_panel(user)})

    return jsonify({"user": store.load()})


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@bp.app_errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    logger.info("Rejected input: %s", exc.message)
    return jsonify(exc.to_dict()), 400


@bp.app_errorhandler(StateTransitionError)
def handle_state_error(exc: StateTransitionError):
    logger.warning("%s", exc)
    return jsonify({"error": str(exc), "action": exc.action, "state": exc.state}), 409


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en" data-theme="{{ theme }}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Algorithm &amp; Data-Structure Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-emerald: #10b981;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: 'DM Sans', -apple-system, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 14px;
    }

    #main { flex: 1; display: flex; flex-direction: column; overflow-y: auto; }

    #canvas-container {
      min-height: 440px;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
      padding: 10px;
    }
    #canvas-svg { width: 100%; }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr 1fr;
      gap: 16px;
      padding: 16px;
      background: var(--bg-dark);
    }

    .card {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 16px;
      overflow: auto;
      max-height: 380px;
    }
    .card h3, .panel h3 {
      font-size: 13px;
      font-weight: 700;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      margin-bottom: 12px;
      color: var(--accent-cyan);
    }

    .code-block {
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      padding: 12px;
      font-family: 'JetBrains Mono', monospace;
      font-size: 12px;
      line-height: 1.6;
      white-space: pre;
      overflow-x: auto;
    }
    .code-line { padding: 1px 8px; border-radius: 4px; }
    .code-line.highlight {
      background: rgba(14, 165, 233, 0.18);
      border-left: 3px solid var(--accent-cyan);
    }
    .line-no { display: inline-block; width: 2.5em; color: var(--text-secondary); }

    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }
    .explanation-text strong { color: var(--text-primary); }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 16px;
      margin-bottom: 14px;
    }

    .button-row, .preset-row { display: flex; gap: 6px; margin: 8px 0; flex-wrap: wrap; }

    button {
      background: var(--accent-cyan);
      color: #fff;
      border: none;
      padding: 8px 14px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
    }
    button:disabled { opacity: 0.4; cursor: default; }
    .btn-secondary { background: #1c2128; border: 1px solid var(--border); }
    .preset-btn { background: transparent; border: 1px solid var(--border); padding: 4px 8px; font-size: 11px; }

    select, textarea, input[type="number"], input[type="text"], input[type="range"] {
      width: 100%;
      padding: 8px 10px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
      font-size: 13px;
    }

    label {
      display: block;
      margin: 8px 0 4px;
      font-size: 12px;
      color: var(--text-secondary);
      text-transform: uppercase;
    }

    .tabs { display: flex; gap: 6px; margin-bottom: 10px; }
    .tab-btn { flex: 1; background: transparent; border: 1px solid var(--border); }
    .tab-btn.active { background: var(--accent-cyan); }

    .step-info {
      font-family: 'JetBrains Mono', monospace;
      font-size: 13px;
      color: var(--text-secondary);
      padding: 6px 10px;
      border-left: 3px solid var(--accent-cyan);
      background: var(--bg-darker);
    }
    .finished-badge { background: var(--accent-emerald); color: #fff; padding: 2px 8px; border-radius: 6px; font-size: 11px; }

    table { width: 100%; font-size: 13px; border-collapse: collapse; }
    table td, table th { padding: 5px 4px; }
    table td:first-child { color: var(--text-secondary); }

    .hint { font-size: 12px; color: var(--text-secondary); margin-top: 8px; }
    .error { color: var(--accent-rose); font-size: 12px; min-height: 1em; }
    .placeholder { color: var(--text-secondary); font-size: 13px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="mode-toggle">{{ mode_toggle|safe }}</div>
    <div id="algo-selector">{{ algo_selector|safe }}</div>
    <div id="structure-selector">{{ structure_selector|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="dataset">{{ dataset|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="compare">{{ compare|safe }}</div>
    <div id="preferences">{{ preferences|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div class="card">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div class="card">
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
        <div id="complexity">{{ complexity|safe }}</div>
      </div>
      <div class="card">
        <h3>Code</h3>
        <div id="source">{{ source_html|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    const TICK_MS = {{ tick_ms }};
    let poller = null;

    async function call(method, url, data) {
      const res = await fetch(url, {
        method: method,
        headers: {'Content-Type': 'application/json'},
        body: data === undefined ? undefined : JSON.stringify(data),
      });
      const body = await res.json();
      if (!res.ok) {
        showError(body.error || 'Request failed');
        throw new Error(body.error);
      }
      showError('');
      return body;
    }
    function showError(message) {
      const el = document.querySelector('#dataset .error');
      if (el) el.textContent = message;
    }
    const post = (url, data) => call('POST', url, data || {});

    const value = (id) => { const el = document.getElementById(id); return el ? el.value : undefined; };

    function setHTML(id, html) {
      if (html !== undefined) document.getElementById(id).innerHTML = html;
    }

    function render(frame) {
      setHTML('canvas-svg', frame.svg);
      setHTML('pseudocode', frame.pseudocode);
      setHTML('explanation', frame.explanation);
      setHTML('analytics', frame.analytics);
      setHTML('playback', frame.playback);
      setHTML('complexity', frame.complexity);
      setHTML('source', frame.source);
      setHTML('dataset', frame.dataset_panel);
      if (frame.state === 'running') startPolling(); else stopPolling();
    }

    function startPolling() {
      if (poller) return;
      poller = setInterval(async () => render(await post('/api/tick')), TICK_MS);
    }
    function stopPolling() {
      if (poller) clearInterval(poller);
      poller = null;
    }

    // Event delegation: panels are re-rendered from the server
    document.addEventListener('click', async (e) => {
      const id = e.target.id;
      const runActions = {'btn-start': 'start', 'btn-pause': 'pause', 'btn-resume': 'resume',
                          'btn-step': 'step', 'btn-stop': 'stop'};
      try {
        if (runActions[id]) {
          render(await post('/api/run/' + runActions[id]));
        } else if (id === 'btn-generate') {
          render(await post('/api/dataset/generate', {size: +document.getElementById('size-slider').value}));
        } else if (id === 'btn-import') {
          render(await post('/api/dataset/import', {text: document.getElementById('custom-input').value}));
        } else if (id === 'btn-set-target') {
          render(await post('/api/config/target', {target: document.getElementById('target-input').value}));
        } else if (e.target.classList.contains('op-btn')) {
          render(await post('/api/structure/op', {
            op: e.target.dataset.op, value: value('value-input'), position: value('position-input'),
          }));
        } else if (id === 'btn-structure-load') {
          render(await post('/api/structure/load', {text: value('structure-input')}));
        } else if (id === 'btn-structure-reset') {
          render(await post('/api/structure/reset'));
        } else if (id === 'btn-graph-generate') {
          render(await post('/api/graph/generate', {size: +value('graph-size-slider')}));
        } else if (id === 'btn-graph-import') {
          render(await post('/api/graph/import', {text: value('graph-input')}));
        } else if (id === 'btn-knapsack-import') {
          render(await post('/api/knapsack/import', {items: value('items-input'), capacity: value('capacity-input')}));
        } else if (id === 'btn-compare') {
          const data = await post('/api/compare', {
            left: document.getElementById('compare-left').value,
            right: document.getElementById('compare-right').value,
          });
          setHTML('compare', data.html);
        } else if (id === 'btn-login') {
          const data = await post('/api/login', {
            name: document.getElementById('login-name').value,
            email: document.getElementById('login-email').value,
          });
          setHTML('preferences', data.html);
        } else if (id === 'btn-logout') {
          const data = await call('DELETE', '/api/preferences');
          setHTML('preferences', data.html);
        } else if (e.target.classList.contains('preset-btn')) {
          const data = await post('/api/config/speed', {speed: +e.target.dataset.speed});
          document.getElementById('speed-slider').value = data.speed;
          document.getElementById('speed-val').textContent = data.speed;
        } else if (e.target.classList.contains('lang-tab')) {
          const algo = e.target.closest('.source-listing').dataset.algo;
          const data = await call('GET', `/api/algorithms/${algo}/source?lang=${e.target.dataset.lang}`);
          setHTML('source', data.html);
        }
      } catch (err) {
        console.warn(err);
      }
    });

    document.addEventListener('change', async (e) => {
      const id = e.target.id;
      try {
        if (id === 'algo-select') {
          render(await post('/api/config/algo', {algo_key: e.target.value}));
        } else if (id === 'structure-select') {
          render(await post('/api/structure/select', {structure: e.target.value}));
        } else if (id === 'source-select') {
          render(await post('/api/graph/source', {source: e.target.value}));
        } else if (id === 'capacity-slider') {
          render(await post('/api/structure/capacity', {capacity: +e.target.value}));
        } else if (id === 'speed-slider') {
          await post('/api/config/speed', {speed: +e.target.value});
        } else if (id === 'learning-mode-toggle') {
          await post('/api/config/learning', {enabled: e.target.checked});
          render(await call('GET', '/api/state'));
        } else if (id === 'pref-theme') {
          await post('/api/preferences', {theme: e.target.value});
          document.documentElement.dataset.theme = e.target.value;
        } else if (id === 'pref-language') {
          await post('/api/preferences', {preferredLanguage: e.target.value});
        }
      } catch (err) {
        console.warn(err);
      }
    });

    document.addEventListener('input', (e) => {
      if (e.target.id === 'speed-slider') document.getElementById('speed-val').textContent = e.target.value;
      if (e.target.id === 'size-slider') document.getElementById('size-val').textContent = e.target.value;
      if (e.target.id === 'graph-size-slider') document.getElementById('graph-size-val').textContent = e.target.value;
      if (e.target.id === 'capacity-slider') document.getElementById('capacity-val').textContent = e.target.value;
    });
  </script>
</body>
</html>
"""




# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config_class=Config) -> Flask:
    """Create and configure a Flask application instance."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    config_class.init_app(app)

    setup_logging(app.config["LOG_LEVEL"], app.config.get("LOG_FILE"))

    store = SessionStore(app.config["SESSION_STORE_PATH"], app.config["SESSION_STORE_KEY"])
    app.extensions["session_store"] = store.init()
    app.extensions["workspaces"] = WorkspaceRegistry(
        idle_seconds=app.config["WORKSPACE_IDLE_SECONDS"],
        max_entries=app.config["MAX_WORKSPACES"],
    )

    app.register_blueprint(bp)
    logger.info("Visualizer ready (store: %s)", app.config["SESSION_STORE_PATH"])
    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app = create_app()
    logger.info("Open http://localhost:5000")
    try:
        app.run(debug=False, threaded=True)
    finally:
        app.extensions["workspaces"].close_all()
        app.extensions["session_store"].teardown()
