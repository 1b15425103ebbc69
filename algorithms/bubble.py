"""
bubble.py — Bubble Sort
========================
Step producer for bubble sort with the early-exit optimisation.

Emits a Step at every meaningful event:
  1. Compare a[j] and a[j+1]                →  COMPARE (j, j+1)
  2. Out of order  →  exchange them          →  SWAP (j, j+1), post-swap snapshot
  3. Pass finished with swaps                →  MARK_SORTED (n-i-1)
  4. Pass finished with NO swaps             →  COMPLETE (everything is sorted)

The early exit is what makes the best case O(n): an already-sorted input
produces exactly n-1 COMPARE steps and then completes.
"""

from dataclasses import dataclass
from typing import List

from algorithms.base import Advance, StepProducer, swapped
from algorithms.step import Cursor, StepKind


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                          # 0
    "    for i in range(n):",                       # 1
    "        swapped ← False",                      # 2
    "        for j in range(n - i - 1):",           # 3
    "            if a[j] > a[j + 1]:",              # 4
    "                swap(a[j], a[j + 1])",         # 5
    "                swapped ← True",               # 6
    "        mark a[n - i - 1] sorted",             # 7
    "        if not swapped: break",                # 8
    "    return a",                                 # 9
]


@dataclass(frozen=True)
class BubbleCursor(Cursor):
    i:       int  = 0
    j:       int  = 0
    swapped: bool = False
    phase:   str  = "compare"        # "compare" | "swap"


class BubbleSort(StepProducer):
    cursor_type   = BubbleCursor
    PSEUDOCODE    = PSEUDOCODE
    COMPLETE_LINE = 9

    def advance(self, cursor: BubbleCursor) -> Advance:
        n = cursor.size
        a = cursor.sequence
        i, j = cursor.i, cursor.j

        if n < 2:
            return self._complete(cursor)

        # -- swap resolved from the previous compare --
        if cursor.phase == "swap":
            return self._emit(
                cursor, StepKind.SWAP, (j, j + 1),
                sequence=swapped(a, j, j + 1),
                line=5,
                explanation=f"{a[j]} > {a[j + 1]}, so swap positions {j} and {j + 1}.",
                pointers={"i": i, "j": j},
                j=j + 1, swapped=True, phase="compare",
            )

        # -- inner loop --
        if j < n - i - 1:
            out_of_order = a[j] > a[j + 1]
            if out_of_order:
                text = f"Compare {a[j]} and {a[j + 1]}: out of order."
            else:
                text = f"Compare {a[j]} and {a[j + 1]}: already in order."
            return self._emit(
                cursor, StepKind.COMPARE, (j, j + 1),
                line=4,
                explanation=text,
                pointers={"i": i, "j": j},
                phase="swap" if out_of_order else "compare",
                j=j if out_of_order else j + 1,
            )

        # -- pass finished --
        if not cursor.swapped:
            return self._complete(
                cursor,
                explanation=f"Pass {i + 1} made no swaps, so the array is sorted.",
            )

        last = n - i - 1
        return self._emit(
            cursor, StepKind.MARK_SORTED, (last,),
            marks=(last,),
            line=7,
            explanation=f"Pass {i + 1} bubbled {a[last]} into its final position {last}.",
            pointers={"i": i},
            i=i + 1, j=0, swapped=False, phase="compare",
        )
