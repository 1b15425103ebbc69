"""
linear_search.py — Linear Search
=================================
Single forward scan.  Every examined element is one Step:

  • VISIT (i)      – a[i] is not the target, keep going
  • MATCH (k)      – first hit, the run stops here
  • EXHAUSTED (n-1)– the last element also missed

So a target at index k takes exactly k+1 steps and a missing target
takes exactly n.
"""

from dataclasses import dataclass
from typing import List

from algorithms.base import Advance, StepProducer
from algorithms.step import Cursor, StepKind


PSEUDOCODE: List[str] = [
    "def linear_search(a, target):",                # 0
    "    for i in range(n):",                       # 1
    "        if a[i] == target:",                   # 2
    "            return i",                         # 3
    "    return NOT FOUND",                         # 4
]


@dataclass(frozen=True)
class LinearSearchCursor(Cursor):
    i: int = 0


class LinearSearch(StepProducer):
    cursor_type = LinearSearchCursor
    PSEUDOCODE  = PSEUDOCODE

    def advance(self, cursor: LinearSearchCursor) -> Advance:
        a, i, target = cursor.sequence, cursor.i, cursor.target
        n = len(a)

        # direct calls only (web input is held to SEARCH_BOUNDS); still one terminal step
        if n == 0:
            return self._finish(
                cursor, StepKind.EXHAUSTED,
                line=4,
                explanation="The array is empty; nothing to search.",
            )

        if a[i] == target:
            return self._finish(
                cursor, StepKind.MATCH, (i,),
                line=3,
                explanation=f"a[{i}] = {a[i]} matches the target. Found at index {i}.",
                pointers={"i": i},
            )

        if i == n - 1:
            return self._finish(
                cursor, StepKind.EXHAUSTED, (i,),
                line=4,
                explanation=f"a[{i}] = {a[i]} is the last element and not {target}. Not found.",
                pointers={"i": i},
            )

        return self._emit(
            cursor, StepKind.VISIT, (i,),
            line=2,
            explanation=f"a[{i}] = {a[i]} is not {target}; move to index {i + 1}.",
            pointers={"i": i},
            i=i + 1,
        )
