"""
base.py — Step Producer Interface
==================================
One StepProducer per algorithm.  The contract is tiny:

    cursor = producer.initial_cursor([5, 1, 4])
    step, cursor = producer.advance(cursor)      # cursor is None when done

`advance` is pure: same cursor in, same (Step, Cursor) out.  That is what
lets the Stepper pause anywhere and resume without replaying anything.

Producers build Steps through `_emit` / `_complete` / `_finish` so the
shared rules live in one place:
  - step numbers and cursors advance together
  - `sorted_marks` only ever grows
  - for sorts, a step that would finalise the LAST position is emitted
    as the terminal COMPLETE step instead, so a full set of marks is
    only ever seen at the end of a run
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from algorithms.step import Cursor, Step, StepKind


Advance = Tuple[Step, Optional[Cursor]]


class StepProducer(ABC):
    """
    Subclasses set `cursor_type` and `PSEUDOCODE` and implement `advance`.

    Line numbers used in `_emit(line=…)` index into PSEUDOCODE.
    `initial_cursor` forwards extra keyword options (capacity, graph,
    source, …) to the cursor type.
    """

    cursor_type = Cursor
    PSEUDOCODE: List[str] = []
    COMPLETE_LINE: int = 0
    COMPLETE_TEXT: str = "All elements are in their final position."
    COMPLETES_ON_FULL_MARKS: bool = True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def initial_cursor(self, sequence: Iterable, target: Optional[int] = None, **options) -> Cursor:
        return self.cursor_type(sequence=tuple(sequence), target=target, **options)

    @abstractmethod
    def advance(self, cursor: Cursor) -> Advance:
        """Return the next Step and the cursor to resume from (None = done)."""

    def steps(self, sequence: Iterable, target: Optional[int] = None, **options) -> Iterator[Step]:
        """Generator over every Step of a full run."""
        cursor: Optional[Cursor] = self.initial_cursor(sequence, target, **options)
        while cursor is not None:
            step, cursor = self.advance(cursor)
            yield step

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------
    def _emit(
        self,
        cursor: Cursor,
        kind: StepKind,
        indices: Sequence[int] = (),
        *,
        sequence: Optional[Sequence] = None,
        marks: Optional[Iterable[int]] = None,
        line: int = 0,
        explanation: str = "",
        pointers: Optional[dict] = None,
        subrange: Optional[Tuple[int, int, int]] = None,
        edges: Iterable[Tuple[int, int]] = (),
        totals: Optional[dict] = None,
        **registers,
    ) -> Advance:
        seq       = cursor.sequence if sequence is None else tuple(sequence)
        new_marks = cursor.sorted_marks if marks is None else cursor.sorted_marks | frozenset(marks)

        if self.COMPLETES_ON_FULL_MARKS and seq and len(new_marks) >= len(seq):
            return self._complete(cursor, sequence=seq, explanation=explanation)

        step = Step(
            kind=kind,
            indices=tuple(indices),
            snapshot=seq,
            sorted_marks=new_marks,
            step_number=cursor.step_number,
            subrange=subrange,
            pointers=dict(pointers or {}),
            pseudocode_line=line,
            explanation=explanation,
            edges=frozenset(edges),
            totals=dict(totals or {}),
        )
        next_cursor = replace(
            cursor,
            sequence=seq,
            sorted_marks=new_marks,
            step_number=cursor.step_number + 1,
            **registers,
        )
        return step, next_cursor

    def _complete(
        self,
        cursor: Cursor,
        *,
        sequence: Optional[Sequence] = None,
        explanation: str = "",
    ) -> Advance:
        seq = cursor.sequence if sequence is None else tuple(sequence)
        done = self.COMPLETE_TEXT
        step = Step(
            kind=StepKind.COMPLETE,
            snapshot=seq,
            sorted_marks=frozenset(range(len(seq))),
            step_number=cursor.step_number,
            pseudocode_line=self.COMPLETE_LINE,
            explanation=f"{explanation} {done}".strip() if explanation else done,
            is_final=True,
        )
        return step, None

    def _finish(
        self,
        cursor: Cursor,
        kind: StepKind,
        indices: Sequence[int] = (),
        *,
        sequence: Optional[Sequence] = None,
        marks: Optional[Iterable[int]] = None,
        line: int = 0,
        explanation: str = "",
        pointers: Optional[dict] = None,
        edges: Iterable[Tuple[int, int]] = (),
        totals: Optional[dict] = None,
    ) -> Advance:
        """Terminal step of any kind; nothing follows it."""
        step = Step(
            kind=kind,
            indices=tuple(indices),
            snapshot=cursor.sequence if sequence is None else tuple(sequence),
            sorted_marks=cursor.sorted_marks if marks is None else cursor.sorted_marks | frozenset(marks),
            step_number=cursor.step_number,
            pointers=dict(pointers or {}),
            pseudocode_line=line,
            explanation=explanation,
            is_final=True,
            edges=frozenset(edges),
            totals=dict(totals or {}),
        )
        return step, None


def swapped(sequence: Sequence, a: int, b: int) -> Tuple:
    """Copy of `sequence` with positions a and b exchanged."""
    items = list(sequence)
    items[a], items[b] = items[b], items[a]
    return tuple(items)
