"""
merge.py — Merge Sort
======================
Top-down merge sort as a resumable step producer.

The recursion is flattened up front: `merge_plan(0, n-1)` lists every
(left, mid, right) merge in the order the recursive algorithm performs
them (post-order).  The cursor then only needs the pending plan plus the
state of the merge in progress.

While merging, the subrange is laid out as

    merged prefix | rest of the left run | rest of the right run

so each snapshot is still a permutation of the input and the two heads
being compared are real positions on screen.

  1. Open a merge of [left..mid] and [mid+1..right]  →  SET_POINTER (left, right)
  2. Compare the heads of the two runs                →  COMPARE (head_l, head_r)
  3. Place the smaller (left wins ties, stable) at k  →  WRITE (k)
  4. Last merge done                                  →  COMPLETE

Every step inside a merge carries `subrange = (left, mid, right)`.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from algorithms.base import Advance, StepProducer
from algorithms.step import Cursor, StepKind


PSEUDOCODE: List[str] = [
    "def merge_sort(a, left, right):",              # 0
    "    if left >= right: return",                 # 1
    "    mid ← (left + right) // 2",                # 2
    "    merge_sort(a, left, mid)",                 # 3
    "    merge_sort(a, mid + 1, right)",            # 4
    "    merge(a, left, mid, right)",               # 5
    "def merge(a, left, mid, right):",              # 6
    "    L ← a[left..mid];  R ← a[mid+1..right]",   # 7
    "    while L and R:",                           # 8
    "        if L[0] <= R[0]: a[k] ← L.pop(0)",     # 9
    "        else: a[k] ← R.pop(0)",                # 10
    "    copy what is left of L or R",              # 11
]


Merge = Tuple[int, int, int]


def merge_plan(left: int, right: int) -> List[Merge]:
    """Every merge of a top-down merge sort over [left..right], in execution order."""
    if left >= right:
        return []
    mid = (left + right) // 2
    return merge_plan(left, mid) + merge_plan(mid + 1, right) + [(left, mid, right)]


@dataclass(frozen=True)
class MergeCursor(Cursor):
    plan:      Tuple[Merge, ...] = ()
    left_run:  Tuple[int, ...]   = ()
    right_run: Tuple[int, ...]   = ()
    merged:    Tuple[int, ...]   = ()
    take_left: Optional[bool]    = None
    phase:     str               = "open"      # "open" | "compare" | "write"


class MergeSort(StepProducer):
    cursor_type   = MergeCursor
    PSEUDOCODE    = PSEUDOCODE
    COMPLETE_LINE = 0

    def initial_cursor(self, sequence, target=None, **options) -> MergeCursor:
        seq = tuple(sequence)
        return MergeCursor(sequence=seq, target=target, plan=tuple(merge_plan(0, len(seq) - 1)))

    def advance(self, cursor: MergeCursor) -> Advance:
        if not cursor.plan:
            return self._complete(cursor)

        left, mid, right = cursor.plan[0]
        a = cursor.sequence
        sub = (left, mid, right)
        ptrs = {"left": left, "mid": mid, "right": right}

        if cursor.phase == "open":
            return self._emit(
                cursor, StepKind.SET_POINTER, (left, right),
                line=7,
                subrange=sub,
                explanation=(
                    f"Merge the sorted runs [{left}..{mid}] and [{mid + 1}..{right}]."
                ),
                pointers=ptrs,
                left_run=a[left:mid + 1],
                right_run=a[mid + 1:right + 1],
                merged=(),
                phase="compare",
            )

        k = left + len(cursor.merged)
        L, R = cursor.left_run, cursor.right_run

        if cursor.phase == "compare" and L and R:
            head_l, head_r = k, k + len(L)
            take_left = L[0] <= R[0]
            if take_left:
                text = f"{L[0]} ≤ {R[0]}: take from the left run."
            else:
                text = f"{L[0]} > {R[0]}: take from the right run."
            return self._emit(
                cursor, StepKind.COMPARE, (head_l, head_r),
                line=9 if take_left else 10,
                subrange=sub,
                explanation=text,
                pointers=dict(ptrs, k=k),
                take_left=take_left,
                phase="write",
            )

        # -- write: either decided by a compare, or one run is exhausted --
        take_left = cursor.take_left if cursor.phase == "write" else bool(L)
        if take_left:
            value, L = L[0], L[1:]
        else:
            value, R = R[0], R[1:]
        merged = cursor.merged + (value,)
        seq = a[:left] + merged + L + R + a[right + 1:]

        if cursor.phase == "write":
            text = f"Place {value} at position {k}."
            line = 9 if take_left else 10
        else:
            text = f"Copy the remaining {value} to position {k}."
            line = 11

        if L or R:
            return self._emit(
                cursor, StepKind.WRITE, (k,),
                sequence=seq,
                line=line,
                subrange=sub,
                explanation=text,
                pointers=dict(ptrs, k=k),
                left_run=L, right_run=R, merged=merged,
                take_left=None, phase="compare",
            )

        # merge finished, move to the next one in the plan
        return self._emit(
            cursor, StepKind.WRITE, (k,),
            sequence=seq,
            line=line,
            subrange=sub,
            explanation=f"{text} Range [{left}..{right}] is merged.",
            pointers=dict(ptrs, k=k),
            plan=cursor.plan[1:],
            left_run=(), right_run=(), merged=(),
            take_left=None, phase="open",
        )
