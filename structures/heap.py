"""
heap.py — Binary Heap (min or max)
===================================
Array layout: children of i sit at 2i+1 and 2i+2, parent at (i-1)//2.
The snapshot is the array itself; the renderer draws it as both a tree
and an array.

`ORDER` decides which of two keys belongs nearer the root:  `<` for a
min-heap, `>` for a max-heap.
"""

import operator
from typing import Callable, List, Tuple

from algorithms.base import swapped
from algorithms.step import StepKind
from errors import ValidationError
from structures.base import Frame, OperationCursor, PlannedOperation


HEAP_PSEUDOCODE: List[str] = [
    "insert(x):",                                                   # 0
    "    a.append(x);  i ← last",                                   # 1
    "    while i > 0 and a[i] beats a[parent(i)]:",                 # 2
    "        swap a[i], a[parent(i)];  i ← parent(i)",              # 3
    "extract():",                                                   # 4
    "    top ← a[0];  a[0] ← a.pop()",                              # 5
    "    while a child of i beats a[i]:",                           # 6
    "        swap a[i] with the better child;  i ← that child",     # 7
    "peek(): return a[0]",                                          # 8
    "heapify(): sift down every parent from the last one to 0",     # 9
]


def _sift_down(a: Tuple, i: int, beats: Callable, word: str, line: int) -> Tuple[Tuple, List[Frame]]:
    frames = []
    n = len(a)
    while True:
        left, right = 2 * i + 1, 2 * i + 2
        if left >= n:
            return a, frames
        best = right if right < n and beats(a[right], a[left]) else left
        frames.append(Frame(
            StepKind.COMPARE, (i, best), pointers={"i": i, "child": best}, line=line,
            explanation=f"The {word} child of {a[i]} is {a[best]}.",
        ))
        if not beats(a[best], a[i]):
            return a, frames
        a = swapped(a, i, best)
        frames.append(Frame(
            StepKind.SWAP, (i, best), snapshot=a, pointers={"i": best}, line=line + 1,
            explanation=f"{a[i]} beats {a[best]}: swap them and continue from index {best}.",
        ))
        i = best


def heapified(values, beats: Callable) -> Tuple:
    """Array form of a valid heap holding `values`."""
    a = tuple(values)
    for i in range(len(a) // 2 - 1, -1, -1):
        a, _ = _sift_down(a, i, beats, "", 0)
    return a


class _HeapOperation(PlannedOperation):
    PSEUDOCODE = HEAP_PSEUDOCODE
    ORDER      = staticmethod(operator.lt)
    WORD       = "smaller"
    EXTREME    = "smallest"

    def beats(self, a, b) -> bool:
        return self.ORDER(a, b)

    def _need_nodes(self, cursor: OperationCursor) -> None:
        if not cursor.sequence:
            raise ValidationError("The heap is empty")


class HeapInsert(_HeapOperation):
    NEEDS_VALUE = True

    def check(self, cursor):
        if cursor.size >= cursor.capacity:
            raise ValidationError(f"Cannot insert more than {cursor.capacity} nodes")

    def plan(self, cursor):
        a = cursor.sequence + (cursor.target,)
        i = len(a) - 1
        frames = [Frame(
            StepKind.INSERT, (i,), snapshot=a, pointers={"i": i}, line=1,
            explanation=f"Append {cursor.target} at index {i}.",
        )]
        while i > 0:
            parent = (i - 1) // 2
            frames.append(Frame(
                StepKind.COMPARE, (i, parent), pointers={"i": i, "parent": parent}, line=2,
                explanation=f"Compare {a[i]} with its parent {a[parent]}.",
            ))
            if not self.beats(a[i], a[parent]):
                break
            a = swapped(a, i, parent)
            frames.append(Frame(
                StepKind.SWAP, (i, parent), snapshot=a, pointers={"i": parent}, line=3,
                explanation=f"{a[parent]} is {self.WORD}: it moves up to index {parent}.",
            ))
            i = parent
        frames.append(Frame(
            StepKind.COMPLETE, (i,), line=2,
            explanation=f"Heap property restored; {cursor.target} settled at index {i}.",
        ))
        return frames


class HeapExtract(_HeapOperation):
    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        a = cursor.sequence
        top = a[0]
        frames = [Frame(
            StepKind.SET_POINTER, (0,), pointers={"i": 0}, line=5,
            explanation=f"The root {top} is the {self.EXTREME} key.",
        )]
        a = (a[-1],) + a[1:-1] if len(a) > 1 else ()
        frames.append(Frame(
            StepKind.REMOVE, (0,) if a else (), snapshot=a, pointers={"i": 0} if a else {}, line=5,
            explanation=f"Removed {top}; the last key {a[0]} moves to the root." if a else f"Removed {top}; the heap is empty.",
            totals={"result": top},
        ))
        if a:
            a, sift = _sift_down(a, 0, self.beats, self.WORD, line=6)
            frames.extend(sift)
            frames.append(Frame(
                StepKind.COMPLETE, line=6, explanation=f"Heap property restored after extracting {top}.",
                totals={"result": top},
            ))
        return frames


class HeapPeek(_HeapOperation):
    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        top = cursor.sequence[0]
        return [Frame(
            StepKind.PEEK, (0,), pointers={"i": 0}, line=8,
            explanation=f"The root holds {top}.", totals={"result": top},
        )]


class Heapify(_HeapOperation):
    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        a = cursor.sequence
        frames = []
        for i in range(len(a) // 2 - 1, -1, -1):
            frames.append(Frame(
                StepKind.SET_POINTER, (i,), pointers={"i": i}, line=9,
                explanation=f"Sift down the subtree rooted at index {i} ({a[i]}).",
            ))
            a, sift = _sift_down(a, i, self.beats, self.WORD, line=6)
            frames.extend(sift)
        frames.append(Frame(
            StepKind.COMPLETE, line=9, explanation="Every parent now beats its children.",
        ))
        return frames


class _MaxOrder:
    ORDER   = staticmethod(operator.gt)
    WORD    = "larger"
    EXTREME = "largest"


class MaxHeapInsert(_MaxOrder, HeapInsert):
    pass


class MaxHeapExtract(_MaxOrder, HeapExtract):
    pass


class MaxHeapPeek(_MaxOrder, HeapPeek):
    pass


class MaxHeapify(_MaxOrder, Heapify):
    pass
