"""
step.py — Algorithm Step Snapshot & Cursor
===========================================
Every algorithm is a step producer: given a Cursor it returns the next
Step plus the Cursor to resume from.  A Step is a frozen-in-time picture
of everything the visualizer needs to render one frame:

    • What just happened (compare / swap / write / mark-sorted / …)
    • Which positions were involved
    • The whole sequence AFTER this step's effect
    • Which positions are final (sorted marks)
    • Named pointers (i, j, pivot, low/high/mid, …) for the bar overlay
    • Which line of pseudocode is executing right now
    • A plain-English explanation of *why* this step happened
      (Learning Mode reads this)

Design decisions:
  - Step and Cursor are frozen dataclasses.  The producer builds new
    ones; nothing downstream can mutate them.
  - The working sequence lives INSIDE the cursor as a tuple.  That makes
    advance(cursor) a pure function, so pausing is just "keep the last
    cursor" and resuming replays nothing.
  - Searches, data-structure operations and graph algorithms reuse the
    same Step type with their own kinds.  For a graph the snapshot is
    the distance vector (or the flattened distance matrix) indexed by
    node, `sorted_marks` are the finalised nodes and `edges` the tree
    edges picked so far.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple


class StepKind(Enum):
    COMPARE     = "compare"
    SWAP        = "swap"
    WRITE       = "write"          # merge sort places a value at k
    MARK_SORTED = "mark-sorted"
    SET_POINTER = "set-pointer"
    COMPLETE    = "complete"
    # searches
    VISIT       = "visit"
    MATCH       = "match"
    EXHAUSTED   = "exhausted"
    # data structures
    PUSH        = "push"
    POP         = "pop"
    PEEK        = "peek"
    ENQUEUE     = "enqueue"
    DEQUEUE     = "dequeue"
    INSERT      = "insert"
    REMOVE      = "remove"
    ROTATE      = "rotate"
    # graphs & greedy
    SELECT      = "select"         # node (or item) picked as the next to process
    EXAMINE     = "examine"        # edge looked at
    RELAX       = "relax"          # edge improved a distance
    REJECT      = "reject"         # edge gave no improvement
    ADD_EDGE    = "add-edge"       # edge joins the spanning tree
    TAKE        = "take"           # knapsack item (or a fraction) packed
    SKIP        = "skip"
    NEGATIVE_CYCLE = "negative-cycle"


TERMINAL_KINDS = frozenset({
    StepKind.COMPLETE, StepKind.MATCH, StepKind.EXHAUSTED, StepKind.NEGATIVE_CYCLE,
})


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind            : What this step did (StepKind).
        indices         : Positions involved, 0–2 of them, in order.
        snapshot        : Full sequence after applying this step's effect.
        sorted_marks    : Positions already final.  Never shrinks during a run.
        step_number     : 0-based index of this step in the run.
        subrange        : (left, mid, right) of the merge in progress, else None.
        pointers        : {name: index} — i, j, min, pivot, key, low, high, mid.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        explanation     : Human-readable "why" text for Learning Mode.
        is_final        : True on the very last step (sorted / found / exhausted).
        edges           : Graph edges (u, v) highlighted as chosen so far.
        totals          : Running figures (MST cost, knapsack value, …).
    """

    kind:             StepKind
    indices:          Tuple[int, ...]               = ()
    snapshot:         Tuple[Any, ...]               = ()
    sorted_marks:     FrozenSet[int]                = frozenset()
    step_number:      int                           = 0
    subrange:         Optional[Tuple[int, int, int]] = None
    pointers:         Dict[str, int]                = field(default_factory=dict)
    pseudocode_line:  int                           = 0
    explanation:      str                           = ""
    is_final:         bool                          = False
    edges:            FrozenSet[Tuple[int, int]]    = frozenset()
    totals:           Dict[str, float]              = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":            self.kind.value,
            "indices":         list(self.indices),
            "snapshot":        list(self.snapshot),
            "sorted_marks":    sorted(self.sorted_marks),
            "step_number":     self.step_number,
            "subrange":        list(self.subrange) if self.subrange else None,
            "pointers":        dict(self.pointers),
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
            "is_final":        self.is_final,
            "edges":           [list(e) for e in sorted(self.edges)],
            "totals":          dict(self.totals),
        }


# ---------------------------------------------------------------------------
# Cursor — the minimal state needed to produce the next Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Cursor:
    """
    Base resumable cursor.  Each producer subclasses it with its own loop
    registers (i, j, min_index, partition stack, …).

    Attributes:
        sequence     : Working copy of the data, owned by this run.
        sorted_marks : Positions finalised so far.
        step_number  : Number of Steps produced before this cursor.
        target       : Search target (searches only).
    """

    sequence:     Tuple[Any, ...] = ()
    sorted_marks: FrozenSet[int]  = frozenset()
    step_number:  int             = 0
    target:       Optional[int]   = None

    @property
    def size(self) -> int:
        return len(self.sequence)
