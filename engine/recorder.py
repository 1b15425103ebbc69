"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps), then computes the
analytics metrics the UI needs for the Analytics panel and Comparison
Mode.

Usage:
    rec = Recorder()
    rec.start(AlgorithmKind.QUICK_SORT, dataset=[5, 1, 4, 2])
    rec.run_to_completion()          # drives the Stepper to the end
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    The UI holds two Recorders (one per algo), runs both to completion
    on the SAME dataset, then calls compare(rec1, rec2) → ComparisonResult.
"""

import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from algorithms import AlgoInfo, AlgorithmKind
from algorithms.step import Step, StepKind
from engine.stepper import Stepper, count_step, empty_counters


def _plain(options: Dict[str, Any]) -> Dict[str, Any]:
    """Producer options as JSON-friendly values."""
    out: Dict[str, Any] = {}
    for name, value in options.items():
        if hasattr(value, "to_dict"):
            value = value.to_dict()
        elif isinstance(value, (list, tuple)):
            value = [v.to_dict() if hasattr(v, "to_dict") else v for v in value]
        out[name] = value
    return out


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str           = ""
    algo_label:   str           = ""
    size:         int           = 0
    target:       Optional[int] = None
    comparisons:  int           = 0
    swaps:        int           = 0
    writes:       int           = 0         # merge sort placements
    total_steps:  int           = 0         # number of Steps applied
    wall_time_ms: float         = 0.0       # wall-clock time to run to completion
    memory_bytes: int           = 0         # approx size of the recorded step buffer
    found_index:  Optional[int] = None      # searches: index of the match
    sorted_ok:    bool          = False     # sorts: final snapshot is ascending
    family:       str           = "sort"
    outcome:      str           = ""        # kind of the final step
    totals:       Dict[str, float] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which algo compared less
    winner_swaps:       str = ""
    winner_steps:       str = ""
    winner_time:        str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps       : Full list of Steps from the run.
        metrics     : Computed RunMetrics (available after run_to_completion).
        stepper     : The underlying Stepper, driven by hand one step at a time.
    """

    def __init__(self):
        self.steps:     List[Step]           = []
        self.metrics:   Optional[RunMetrics] = None
        self.stepper:   Optional[Stepper]    = None

        self._start_time: float = 0.0

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        kind: Union[AlgorithmKind, str],
        dataset: Iterable[int],
        target: Optional[int] = None,
        **options,
    ) -> None:
        """Prepare a Stepper for this run; nothing is applied yet.  `options` go to the producer (graph, items, …)."""
        self.steps   = []
        self.metrics = None
        self.stepper = Stepper(kind, dataset, on_step=self.record_step, target=target, options=options)

    def run_to_completion(self) -> RunMetrics:
        """Step until the run completes, record every step, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        self._start_time = time.monotonic()
        self.stepper.step_once()
        while not self.stepper.is_finished:
            self.stepper.step_once()
        wall_ms = (time.monotonic() - self._start_time) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def info(self) -> Optional[AlgoInfo]:
        return self.stepper.info if self.stepper else None

    # ------------------------------------------------------------------
    # Step access (for live playback recording)
    # ------------------------------------------------------------------
    def record_step(self, step: Step) -> None:
        self.steps.append(step)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self.info.key if self.info else "",
            "options":  _plain(self.stepper.options) if self.stepper else {},
            "dataset":  list(self.stepper.dataset) if self.stepper else [],
            "target":   self.stepper.target if self.stepper else None,
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self.info
        last = self.steps[-1] if self.steps else None

        counters = empty_counters()
        for s in self.steps:
            count_step(counters, s)

        found = None
        if last is not None and last.kind == StepKind.MATCH:
            found = last.indices[0]

        sorted_ok = False
        if last is not None and info.family == "sort":
            snap = list(last.snapshot)
            sorted_ok = snap == sorted(snap)

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s) + sys.getsizeof(s.snapshot)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            size=self._size(),
            target=self.stepper.target,
            comparisons=counters["comparisons"],
            swaps=counters["swaps"],
            writes=counters["writes"],
            total_steps=counters["steps"],
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            found_index=found,
            sorted_ok=sorted_ok,
            family=info.family,
            outcome=last.kind.value if last else "",
            totals=dict(last.totals) if last else {},
        )

    def _size(self) -> int:
        options = self.stepper.options
        if options.get("graph") is not None:
            return options["graph"].size
        if options.get("items"):
            return len(options["items"])
        return len(self.stepper.dataset)


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l.algo_label if l_val < r_val else r.algo_label
        return l.algo_label if l_val > r_val else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps      =winner(l.swaps, r.swaps),
        winner_steps      =winner(l.total_steps, r.total_steps),
        winner_time       =winner(l.wall_time_ms, r.wall_time_ms),
    )
