"""
binary_search.py — Binary Search
=================================
Halving search over an ascending array.

  • VISIT (mid)   – check the middle, discard the half that cannot hold the target
  • MATCH (mid)   – hit
  • EXHAUSTED ()  – low crossed high, target absent

The input must already be ascending; anything else is rejected when the
cursor is created rather than producing a misleading animation.
"""

from dataclasses import dataclass
from typing import List

from algorithms.base import Advance, StepProducer
from algorithms.step import Cursor, StepKind
from errors import ValidationError


PSEUDOCODE: List[str] = [
    "def binary_search(a, target):",                # 0
    "    low, high ← 0, n - 1",                     # 1
    "    while low <= high:",                       # 2
    "        mid ← (low + high) // 2",              # 3
    "        if a[mid] == target: return mid",      # 4
    "        if a[mid] < target: low ← mid + 1",    # 5
    "        else: high ← mid - 1",                 # 6
    "    return NOT FOUND",                         # 7
]


@dataclass(frozen=True)
class BinarySearchCursor(Cursor):
    low:  int = 0
    high: int = -1


class BinarySearch(StepProducer):
    cursor_type = BinarySearchCursor
    PSEUDOCODE  = PSEUDOCODE

    def initial_cursor(self, sequence, target=None, **options) -> BinarySearchCursor:
        seq = tuple(sequence)
        for idx in range(1, len(seq)):
            if seq[idx - 1] > seq[idx]:
                raise ValidationError(
                    f"Binary search needs an ascending array "
                    f"({seq[idx - 1]} comes before {seq[idx]})"
                )
        return BinarySearchCursor(sequence=seq, target=target, high=len(seq) - 1)

    def advance(self, cursor: BinarySearchCursor) -> Advance:
        a, low, high, target = cursor.sequence, cursor.low, cursor.high, cursor.target

        if low > high:
            return self._finish(
                cursor, StepKind.EXHAUSTED,
                line=7,
                explanation=f"low ({low}) passed high ({high}): {target} is not in the array.",
                pointers={"low": low, "high": high},
            )

        mid = (low + high) // 2
        ptrs = {"low": low, "high": high, "mid": mid}

        if a[mid] == target:
            return self._finish(
                cursor, StepKind.MATCH, (mid,),
                line=4,
                explanation=f"a[{mid}] = {a[mid]} equals the target. Found at index {mid}.",
                pointers=ptrs,
            )

        if a[mid] < target:
            return self._emit(
                cursor, StepKind.VISIT, (mid,),
                line=5,
                explanation=f"a[{mid}] = {a[mid]} < {target}: search the right half.",
                pointers=ptrs,
                low=mid + 1,
            )
        return self._emit(
            cursor, StepKind.VISIT, (mid,),
            line=6,
            explanation=f"a[{mid}] = {a[mid]} > {target}: search the left half.",
            pointers=ptrs,
            high=mid - 1,
        )
