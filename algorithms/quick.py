"""
quick.py — Quick Sort
======================
Lomuto-partition quick sort (pivot = last element of the range) with the
recursion replaced by an explicit stack of (low, high) ranges.  The left
range is pushed last so it is sorted first, matching the recursive order.

  1. Pop a range, choose a[high] as pivot      →  SET_POINTER (high)
  2. Compare a[j] with the pivot               →  COMPARE (j, high)
  3. a[j] < pivot and i != j                   →  SWAP (i, j)
  4. Put the pivot between the two halves      →  SWAP (i+1, high)
  5. Pivot is final                            →  MARK_SORTED (p)
  6. One-element range                         →  MARK_SORTED (low)

Quick sort is not stable, and nothing here tries to make it so.
"""

from dataclasses import dataclass
from typing import List, Tuple

from algorithms.base import Advance, StepProducer, swapped
from algorithms.step import Cursor, StepKind


PSEUDOCODE: List[str] = [
    "def quick_sort(a, low, high):",                # 0
    "    if low < high:",                           # 1
    "        pivot ← a[high];  i ← low - 1",        # 2
    "        for j in range(low, high):",           # 3
    "            if a[j] < pivot:",                 # 4
    "                i ← i + 1",                    # 5
    "                swap(a[i], a[j])",             # 6
    "        swap(a[i + 1], a[high])",              # 7
    "        p ← i + 1  (pivot is final)",          # 8
    "        quick_sort(a, low, p - 1)",            # 9
    "        quick_sort(a, p + 1, high)",           # 10
]


Range = Tuple[int, int]


@dataclass(frozen=True)
class QuickCursor(Cursor):
    stack: Tuple[Range, ...] = ()
    low:   int = 0
    high:  int = -1
    i:     int = -1
    j:     int = 0
    phase: str = "pop"          # "pop" | "compare" | "swap" | "place"


class QuickSort(StepProducer):
    cursor_type   = QuickCursor
    PSEUDOCODE    = PSEUDOCODE
    COMPLETE_LINE = 0

    def initial_cursor(self, sequence, target=None, **options) -> QuickCursor:
        seq = tuple(sequence)
        stack = ((0, len(seq) - 1),) if seq else ()
        return QuickCursor(sequence=seq, target=target, stack=stack)

    def advance(self, cursor: QuickCursor) -> Advance:
        if cursor.phase == "pop":
            return self._pop(cursor)
        if cursor.phase == "compare":
            return self._compare(cursor)
        if cursor.phase == "swap":
            a, i, j = cursor.sequence, cursor.i, cursor.j
            return self._emit(
                cursor, StepKind.SWAP, (i, j),
                sequence=swapped(a, i, j),
                line=6,
                explanation=f"{a[j]} < pivot: swap it into the low side at position {i}.",
                pointers=self._pointers(cursor),
                j=j + 1, phase="compare",
            )
        return self._place(cursor)

    # ------------------------------------------------------------------
    def _pop(self, cursor: QuickCursor) -> Advance:
        stack = cursor.stack
        while stack:
            low, high = stack[-1]
            stack = stack[:-1]
            if low < high:
                pivot = cursor.sequence[high]
                return self._emit(
                    cursor, StepKind.SET_POINTER, (high,),
                    line=2,
                    explanation=f"Partition [{low}..{high}] around pivot {pivot} (last element).",
                    pointers={"low": low, "high": high, "pivot": high},
                    stack=stack, low=low, high=high, i=low - 1, j=low, phase="compare",
                )
            if low == high:
                return self._emit(
                    cursor, StepKind.MARK_SORTED, (low,),
                    marks=(low,),
                    line=1,
                    explanation=f"Range [{low}..{high}] has one element, so it is already in place.",
                    pointers={"low": low, "high": high},
                    stack=stack,
                )
            # empty range: nothing to show, keep popping
        return self._complete(cursor)

    def _compare(self, cursor: QuickCursor) -> Advance:
        a, i, j, high = cursor.sequence, cursor.i, cursor.j, cursor.high
        if j < high:
            if a[j] < a[high]:
                text = f"{a[j]} < pivot {a[high]}: it belongs on the low side."
                nxt = {"i": i + 1, "phase": "swap"} if i + 1 != j else {"i": i + 1, "j": j + 1}
            else:
                text = f"{a[j]} ≥ pivot {a[high]}: leave it on the high side."
                nxt = {"j": j + 1}
            return self._emit(
                cursor, StepKind.COMPARE, (j, high),
                line=4,
                explanation=text,
                pointers=self._pointers(cursor),
                **nxt,
            )

        p = i + 1
        if p != high:
            return self._emit(
                cursor, StepKind.SWAP, (p, high),
                sequence=swapped(a, p, high),
                line=7,
                explanation=f"Move pivot {a[high]} to position {p}, between the two sides.",
                pointers=self._pointers(cursor),
                phase="place",
            )
        return self._place(cursor)

    def _place(self, cursor: QuickCursor) -> Advance:
        low, high = cursor.low, cursor.high
        p = cursor.i + 1
        return self._emit(
            cursor, StepKind.MARK_SORTED, (p,),
            marks=(p,),
            line=8,
            explanation=f"Pivot {cursor.sequence[p]} is final at position {p}.",
            pointers={"low": low, "high": high, "pivot": p},
            stack=cursor.stack + ((p + 1, high), (low, p - 1)),
            phase="pop",
        )

    @staticmethod
    def _pointers(cursor: QuickCursor) -> dict:
        ptrs = {"low": cursor.low, "high": cursor.high, "pivot": cursor.high, "j": cursor.j}
        if cursor.i >= cursor.low:
            ptrs["i"] = cursor.i
        return ptrs
