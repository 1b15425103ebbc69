"""
insertion.py — Insertion Sort
==============================
Step producer for insertion sort, written with adjacent swaps so every
snapshot is a permutation of the input.

  1. First element forms the sorted prefix      →  SET_POINTER (0)
  2. Pick a[i] as the key                       →  SET_POINTER (i)
  3. Compare the key with its left neighbour    →  COMPARE (j-1, j)
  4. Neighbour strictly greater → move key left →  SWAP (j-1, j)
  5. Key in place, prefix 0..i in order         →  SET_POINTER (j)
  6. Last key inserted                          →  COMPLETE

The prefix 0..i is only *relatively* ordered: a later key can still push
its values right.  So it travels as the `prefix` pointer, and positions
become sorted marks only on the terminal COMPLETE step.

Only strictly greater neighbours are passed, so equal keys keep their
order (stable).
"""

from dataclasses import dataclass
from typing import List

from algorithms.base import Advance, StepProducer, swapped
from algorithms.step import Cursor, StepKind


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                       # 0
    "    for i in range(1, n):",                    # 1
    "        key ← a[i]",                           # 2
    "        j ← i",                                # 3
    "        while j > 0 and a[j - 1] > key:",      # 4
    "            swap(a[j - 1], a[j])",             # 5
    "            j ← j - 1",                        # 6
    "        # a[0..i] is now in order",            # 7
    "    return a",                                 # 8
]


@dataclass(frozen=True)
class InsertionCursor(Cursor):
    i:     int = 1
    j:     int = 1
    phase: str = "start"      # "start" | "select" | "compare" | "swap" | "placed"


class InsertionSort(StepProducer):
    cursor_type   = InsertionCursor
    PSEUDOCODE    = PSEUDOCODE
    COMPLETE_LINE = 8

    def advance(self, cursor: InsertionCursor) -> Advance:
        n = cursor.size
        a = cursor.sequence
        i, j = cursor.i, cursor.j
        phase = cursor.phase

        if n < 2:
            return self._complete(cursor)

        if phase == "start":
            return self._emit(
                cursor, StepKind.SET_POINTER, (0,),
                line=1,
                explanation="A single element is trivially in order; it starts the sorted prefix.",
                pointers={"prefix": 0},
                phase="select",
            )

        if phase == "select":
            if i >= n:
                return self._complete(cursor, explanation="Every key has been inserted.")
            return self._emit(
                cursor, StepKind.SET_POINTER, (i,),
                line=2,
                explanation=f"Take {a[i]} at position {i} as the key to insert.",
                pointers={"prefix": i - 1, "i": i, "key": i},
                j=i, phase="compare",
            )

        if phase == "compare" and j > 0:
            greater = a[j - 1] > a[j]
            if greater:
                text = f"{a[j - 1]} > {a[j]}: the key must move left."
            else:
                text = f"{a[j - 1]} ≤ {a[j]}: the key has found its place."
            return self._emit(
                cursor, StepKind.COMPARE, (j - 1, j),
                line=4,
                explanation=text,
                pointers={"prefix": i - 1, "i": i, "j": j, "key": j},
                phase="swap" if greater else "placed",
            )

        if phase == "swap":
            return self._emit(
                cursor, StepKind.SWAP, (j - 1, j),
                sequence=swapped(a, j - 1, j),
                line=5,
                explanation=f"Shift {a[j - 1]} right; the key moves to position {j - 1}.",
                pointers={"prefix": i - 1, "i": i, "j": j - 1, "key": j - 1},
                j=j - 1, phase="compare",
            )

        # compare with j == 0, or placed
        return self._emit(
            cursor, StepKind.SET_POINTER, (j,),
            line=7,
            explanation=f"Key {a[j]} inserted at position {j}; positions 0..{i} are in order.",
            pointers={"prefix": i},
            i=i + 1, j=i + 1, phase="select",
        )
