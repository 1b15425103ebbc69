"""
selection.py — Selection Sort
==============================
Step producer for selection sort.

  1. Compare a[j] with the running minimum    →  COMPARE (j, min_index)
     (the minimum index is updated silently, no extra step)
  2. Inner scan done, minimum not at i         →  SWAP (i, min_index)
  3. Position i is final                       →  MARK_SORTED (i)

There is deliberately no early exit: the scan always runs to the end, so
even a sorted input costs n(n-1)/2 comparisons.
"""

from dataclasses import dataclass
from typing import List

from algorithms.base import Advance, StepProducer, swapped
from algorithms.step import Cursor, StepKind


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                       # 0
    "    for i in range(n - 1):",                   # 1
    "        min_index ← i",                        # 2
    "        for j in range(i + 1, n):",            # 3
    "            if a[j] < a[min_index]:",          # 4
    "                min_index ← j",                # 5
    "        if min_index != i:",                   # 6
    "            swap(a[i], a[min_index])",         # 7
    "        mark a[i] sorted",                     # 8
    "    return a",                                 # 9
]


@dataclass(frozen=True)
class SelectionCursor(Cursor):
    i:         int = 0
    j:         int = 1
    min_index: int = 0
    phase:     str = "scan"          # "scan" | "mark"


class SelectionSort(StepProducer):
    cursor_type   = SelectionCursor
    PSEUDOCODE    = PSEUDOCODE
    COMPLETE_LINE = 9

    def advance(self, cursor: SelectionCursor) -> Advance:
        n = cursor.size
        a = cursor.sequence
        i, j, m = cursor.i, cursor.j, cursor.min_index

        if n < 2 or i >= n - 1:
            return self._complete(cursor)

        if cursor.phase == "scan":
            if j < n:
                new_min = j if a[j] < a[m] else m
                if new_min != m:
                    text = f"{a[j]} < {a[m]}: position {j} is the new minimum."
                else:
                    text = f"{a[j]} ≥ {a[m]}: minimum stays at position {m}."
                return self._emit(
                    cursor, StepKind.COMPARE, (j, m),
                    line=4,
                    explanation=text,
                    pointers={"i": i, "j": j, "min": m},
                    j=j + 1, min_index=new_min,
                )

            if m != i:
                return self._emit(
                    cursor, StepKind.SWAP, (i, m),
                    sequence=swapped(a, i, m),
                    line=7,
                    explanation=f"Minimum {a[m]} found at {m}; swap it into position {i}.",
                    pointers={"i": i, "min": m},
                    phase="mark",
                )

        return self._emit(
            cursor, StepKind.MARK_SORTED, (i,),
            marks=(i,),
            line=8,
            explanation=f"Position {i} now holds {a[i]}, the smallest remaining value.",
            pointers={"i": i},
            i=i + 1, j=i + 2, min_index=i + 1, phase="scan",
        )
