"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object the UI interacts with during a run.
It owns the dataset, the algorithm choice and the cursor of the last
applied Step, and drives the pure step producer on a timer.

State machine:
    IDLE      →  start()   →  RUNNING
    RUNNING   →  pause()   →  PAUSED
    PAUSED    →  resume()  →  RUNNING
    RUNNING   →  (producer done) → COMPLETED
    COMPLETED →  start()   →  RUNNING      (implicit reset)
    IDLE / PAUSED → step_once() → PAUSED or COMPLETED
    any       →  stop() / reset() → IDLE

One continuation:
    advance the cursor → apply the snapshot → notify on_step → schedule
    the next continuation after delay_ms (nothing once the run is done).

Cancellation:
  Every continuation carries the run token it was scheduled with.
  pause/stop/reset bump the token and cancel the pending handle, so a
  continuation that fires late does nothing.  At most one continuation
  is ever pending.

Thread safety:
  This class is NOT thread-safe.  The web layer serialises calls per
  session with a lock; an asyncio host only calls it from the loop.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from algorithms import AlgoInfo, AlgorithmKind, get_algorithm
from algorithms.step import Cursor, Step, StepKind
from engine.scheduler import ManualScheduler
from errors import StateTransitionError, ValidationError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# Speed (percent of the slider → milliseconds between steps)
# ---------------------------------------------------------------------------
MIN_SPEED        = 10
MAX_SPEED        = 100
SLOWEST_DELAY_MS = 1000.0
FASTEST_DELAY_MS = 50.0

SPEED_PRESETS = {
    "slow":   10,     # teaching mode
    "medium": 50,
    "fast":   80,     # demo mode
    "turbo":  100,
}


def clamp_speed(percent: float) -> float:
    return max(MIN_SPEED, min(MAX_SPEED, percent))


def speed_to_delay(percent: float) -> float:
    """10 → 1000 ms, 100 → 50 ms, linear in between; out-of-range values are clamped."""
    p = clamp_speed(percent)
    span = SLOWEST_DELAY_MS - FASTEST_DELAY_MS
    return SLOWEST_DELAY_MS - ((p - MIN_SPEED) / (MAX_SPEED - MIN_SPEED)) * span


_COUNTED = {
    StepKind.COMPARE:   "comparisons",
    StepKind.SWAP:      "swaps",
    StepKind.WRITE:     "writes",
    StepKind.VISIT:     "comparisons",
    StepKind.MATCH:     "comparisons",
    StepKind.EXHAUSTED: "comparisons",
    StepKind.EXAMINE:   "comparisons",
    StepKind.ROTATE:    "swaps",
    StepKind.RELAX:     "writes",
    StepKind.ADD_EDGE:  "writes",
    StepKind.TAKE:      "writes",
}


def empty_counters() -> Dict[str, int]:
    return {"comparisons": 0, "swaps": 0, "writes": 0, "steps": 0}


def count_step(counters: Dict[str, int], step: Step) -> None:
    """Tally one Step.  A search look at one index is one comparison; `exhausted` with no index examined nothing."""
    counters["steps"] += 1
    name = _COUNTED.get(step.kind)
    if name and (step.kind != StepKind.EXHAUSTED or step.indices):
        counters[name] += 1


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state        : Current StepperState.
        info         : AlgoInfo of the selected algorithm, or the OperationInfo
                       of a data-structure operation.
        dataset      : The original input sequence (never mutated).
        target       : Search target or operation operand, None for sorts.
        options      : Extra cursor options (graph and source, knapsack items,
                       structure capacity, …).
        snapshot     : Sequence currently displayed.
        current_step : Last applied Step, None before the first one.
        speed        : Slider percent, 10–100.
        counters     : Live comparisons / swaps / writes / steps of this run.
        on_step      : Optional callback(Step) fired once per applied Step.
                       The UI hooks its re-render here.
    """

    def __init__(
        self,
        kind: Union[AlgorithmKind, str],
        dataset: Iterable[int],
        on_step: Optional[Callable[[Step], None]] = None,
        speed: float = SPEED_PRESETS["medium"],
        target: Optional[int] = None,
        scheduler=None,
        options: Optional[dict] = None,
    ):
        self.info:         AlgoInfo        = self._resolve(kind)
        self.options:      dict            = dict(options or {})
        self.dataset:      Tuple[int, ...] = tuple(dataset)
        self.target:       Optional[int]   = target
        self.snapshot:     Tuple[int, ...] = self.dataset
        self.current_step: Optional[Step]  = None
        self.speed:        float           = clamp_speed(speed)
        self.counters:     Dict[str, int]  = empty_counters()
        self.on_step:      Optional[Callable[[Step], None]] = on_step
        self.state:        StepperState    = StepperState.IDLE

        self.scheduler = scheduler if scheduler is not None else ManualScheduler()

        self._cursor: Optional[Cursor] = None
        self._handle = None
        self._token:  int = 0

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Fresh run from the original dataset.  Allowed from IDLE or COMPLETED."""
        self._require("start", StepperState.IDLE, StepperState.COMPLETED)
        cursor = self._fresh_cursor()
        self._discard_run()
        self._cursor = cursor
        self._set_state(StepperState.RUNNING)
        self._schedule(0)

    def pause(self) -> None:
        self._require("pause", StepperState.RUNNING)
        self._cancel_pending()
        self._set_state(StepperState.PAUSED)

    def resume(self) -> None:
        self._require("resume", StepperState.PAUSED)
        self._set_state(StepperState.RUNNING)
        self._schedule(0)

    def stop(self) -> None:
        """Abandon the run and show the original dataset again.  Legal in any state."""
        self._discard_run()
        self._set_state(StepperState.IDLE)

    def reset(self) -> None:
        self.stop()

    def step_once(self) -> Step:
        """Apply exactly one Step by hand ("Next" button).  Allowed from IDLE or PAUSED."""
        self._require("step_once", StepperState.IDLE, StepperState.PAUSED)
        if self.state == StepperState.IDLE:
            cursor = self._fresh_cursor()
            self._discard_run()
            self._cursor = cursor
            self._set_state(StepperState.PAUSED)
        return self._apply_next()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_speed(self, percent: float) -> float:
        """Takes effect from the next scheduled continuation.  Returns the clamped value."""
        self.speed = clamp_speed(percent)
        return self.speed

    @property
    def delay_ms(self) -> float:
        return speed_to_delay(self.speed)

    def load_dataset(self, values: Iterable[int]) -> None:
        values = tuple(values)
        self._force_stop("load_dataset")
        self.dataset  = values
        self.snapshot = values

    def set_algorithm(self, kind: Union[AlgorithmKind, str]) -> None:
        info = self._resolve(kind)
        self._force_stop("set_algorithm")
        self.info = info

    def set_target(self, value: Optional[int]) -> None:
        self._force_stop("set_target")
        self.target = value

    def set_options(self, **options) -> None:
        """Replace the extra cursor options (graph, source, capacity, …)."""
        self._force_stop("set_options")
        self.options = options

    def close(self) -> None:
        """Cancel anything pending and detach the adapter."""
        self._cancel_pending()
        self.on_step = None

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def kind(self) -> AlgorithmKind:
        return self.info.kind

    @property
    def cursor(self) -> Optional[Cursor]:
        return self._cursor

    @property
    def is_running(self) -> bool:
        return self.state == StepperState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.COMPLETED

    @property
    def has_pending(self) -> bool:
        return self._handle is not None

    def to_dict(self) -> dict:
        return {
            "state":     self.state.value,
            "algorithm": self.info.key,
            "dataset":   list(self.dataset),
            "snapshot":  list(self.snapshot),
            "target":    self.target,
            "speed":     self.speed,
            "delay_ms":  round(self.delay_ms, 2),
            "counters":  dict(self.counters),
            "step":      self.current_step.to_dict() if self.current_step else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _resolve(kind) -> AlgoInfo:
        if hasattr(kind, "producer"):
            return kind
        info = get_algorithm(kind)
        if info is None:
            raise ValueError(f"Unknown algorithm: {kind}")
        return info

    def _require(self, action: str, *allowed: StepperState) -> None:
        if self.state not in allowed:
            raise StateTransitionError(action, self.state.value)

    def _set_state(self, state: StepperState) -> None:
        if state != self.state:
            logger.debug("%s: %s -> %s", self.info.key, self.state.value, state.value)
        self.state = state

    def _fresh_cursor(self) -> Cursor:
        if self.info.needs_target and self.target is None:
            raise ValidationError("Enter a value to search for" if self.info.is_search else "Please enter a value")
        return self.info.producer.initial_cursor(self.dataset, self.target, **self.options)

    def _discard_run(self) -> None:
        self._cancel_pending()
        self._cursor      = None
        self.snapshot     = self.dataset
        self.current_step = None
        self.counters     = empty_counters()

    def _force_stop(self, action: str) -> None:
        if self.state in (StepperState.RUNNING, StepperState.PAUSED):
            logger.info("%s while %s: stopping the current run", action, self.state.value)
        self.stop()

    def _cancel_pending(self) -> None:
        self._token += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self, delay_ms: float) -> None:
        token = self._token
        self._handle = self.scheduler.call_later(delay_ms, lambda: self._continue(token))

    def _continue(self, token: int) -> None:
        if token != self._token or self.state != StepperState.RUNNING:
            return
        self._handle = None
        self._apply_next()
        if self.state == StepperState.RUNNING:
            self._schedule(self.delay_ms)

    def _apply_next(self) -> Step:
        step, nxt = self.info.producer.advance(self._cursor)
        self._cursor      = nxt
        self.snapshot     = step.snapshot
        self.current_step = step

        count_step(self.counters, step)

        if nxt is None:
            self._set_state(StepperState.COMPLETED)
        self._notify(step)
        return step

    def _notify(self, step: Step) -> None:
        if self.on_step is None:
            return
        try:
            self.on_step(step)
        except Exception:
            logger.exception("on_step failed at step %d of %s", step.step_number, self.info.key)
