"""
base.py — Data-Structure Operation Producers
=============================================
A data-structure operation (push, enqueue, BST insert, heap extract, …)
is played back exactly like a sort: a StepProducer whose cursor is
advanced one Step at a time by the Stepper.

Operations are short (at most a walk down a 15-node tree), so each one
is planned up front when its cursor is created, the same way merge sort
flattens its recursion: `plan(cursor)` lists the Frames in order and the
cursor carries the frames still to show.  The last frame is the terminal
Step and its snapshot is the structure after the operation.

Pre-conditions (overflow, underflow, duplicate keys, missing keys) are
checked in `check()` before anything is planned and raise
ValidationError, so a rejected operation never touches the structure.
"""

from abc import abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from algorithms.base import Advance, StepProducer
from algorithms.step import Cursor, StepKind
from dataset import STRUCTURE_BOUNDS


@dataclass(frozen=True)
class Frame:
    """
    One planned Step.

    Attributes:
        kind        : StepKind of the Step.
        indices     : Positions involved, in the frame's own snapshot.
        snapshot    : Structure contents after this frame (None = unchanged).
        pointers    : Named positions (top, front, rear, cur, …).
        line        : Pseudocode line.
        explanation : Learning Mode text.
        marks       : Positions to add to the run's marks (visited nodes).
        totals      : Figures to show with the frame (popped value, …).
    """

    kind:        StepKind
    indices:     Tuple[int, ...]           = ()
    snapshot:    Optional[Tuple[Any, ...]] = None
    pointers:    Dict[str, int]            = field(default_factory=dict)
    line:        int                       = 0
    explanation: str                       = ""
    marks:       Tuple[int, ...]           = ()
    totals:      Dict[str, Any]            = field(default_factory=dict)


@dataclass(frozen=True)
class OperationCursor(Cursor):
    """
    Attributes:
        capacity : Most elements the structure may hold (slots for a ring).
        front    : Ring buffer head, -1 when empty.
        rear     : Ring buffer tail, -1 when empty.
        position : Operand position for positional list operations.
        plan     : Frames still to be shown.
    """

    capacity: int                = STRUCTURE_BOUNDS.maximum
    front:    int                = -1
    rear:     int                = -1
    position: Optional[int]      = None
    plan:     Tuple[Frame, ...]  = ()


class PlannedOperation(StepProducer):
    """Subclasses implement `plan` and, where needed, `check`."""

    cursor_type             = OperationCursor
    COMPLETES_ON_FULL_MARKS = False
    NEEDS_VALUE:    bool    = False
    NEEDS_POSITION: bool    = False

    def initial_cursor(self, sequence: Iterable, target: Optional[int] = None, **options) -> OperationCursor:
        cursor = super().initial_cursor(sequence, target, **options)
        self.check(cursor)
        frames = tuple(self.plan(cursor))
        if not frames:
            raise ValueError(f"{type(self).__name__} planned no frames")
        return replace(cursor, plan=frames)

    def check(self, cursor: OperationCursor) -> None:
        """Raise ValidationError when the operation cannot run on this structure."""

    @abstractmethod
    def plan(self, cursor: OperationCursor) -> List[Frame]:
        """Every frame of the operation, in order; the last one is terminal."""

    def advance(self, cursor: OperationCursor) -> Advance:
        frame, rest = cursor.plan[0], cursor.plan[1:]
        kwargs = dict(
            sequence=frame.snapshot,
            marks=frame.marks,
            line=frame.line,
            explanation=frame.explanation,
            pointers=frame.pointers,
            totals=frame.totals,
        )
        if not rest:
            return self._finish(cursor, frame.kind, frame.indices, **kwargs)
        return self._emit(cursor, frame.kind, frame.indices, plan=rest, **kwargs)
