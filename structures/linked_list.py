"""
linked_list.py — Singly & Doubly Linked Lists
==============================================
The snapshot is the list's values from head to tail, so position k in
the snapshot is the k-th node.  A traversal shows one VISIT step per
node the `cur` pointer lands on.

The singly linked list only knows `head`, so reaching the tail is a
walk.  The doubly linked list keeps `head` and `tail` and walks a
positional operation from whichever end is closer.
"""

from typing import List, Tuple

from algorithms.step import StepKind
from errors import ValidationError
from structures.base import Frame, OperationCursor, PlannedOperation


SINGLY_PSEUDOCODE: List[str] = [
    "insert_head(x):  node.next ← head;  head ← node",          # 0
    "insert_tail(x):",                                          # 1
    "    cur ← head;  while cur.next: cur ← cur.next",          # 2
    "    cur.next ← node",                                      # 3
    "remove_head():  head ← head.next",                         # 4
    "remove_tail():",                                           # 5
    "    cur ← head;  while cur.next.next: cur ← cur.next",     # 6
    "    cur.next ← null",                                      # 7
    "search(x):",                                               # 8
    "    cur ← head;  while cur: if cur.value == x: found",     # 9
    "        cur ← cur.next",                                   # 10
]

DOUBLY_PSEUDOCODE: List[str] = [
    "insert_head(x):  node.next ← head;  head.prev ← node;  head ← node",  # 0
    "insert_tail(x):  node.prev ← tail;  tail.next ← node;  tail ← node",  # 1
    "insert_at(p, x):",                                                    # 2
    "    cur ← node p (walk from the nearer end)",                         # 3
    "    link node between cur.prev and cur",                              # 4
    "delete_head():  head ← head.next;  head.prev ← null",                 # 5
    "delete_tail():  tail ← tail.prev;  tail.next ← null",                 # 6
    "delete_at(p):",                                                       # 7
    "    cur ← node p (walk from the nearer end)",                         # 8
    "    cur.prev.next ← cur.next;  cur.next.prev ← cur.prev",             # 9
    "search(x):  walk from head comparing values",                         # 10
]


def _ends(size: int) -> dict:
    return {"head": 0, "tail": size - 1} if size else {}


def _walk(a: Tuple, stop: int, line: int, backwards: bool = False) -> List[Frame]:
    """VISIT frames for `cur` moving from one end up to (and including) `stop`."""
    frames = []
    order = range(len(a) - 1, stop - 1, -1) if backwards else range(0, stop + 1)
    for cur in order:
        frames.append(Frame(
            StepKind.VISIT, (cur,), pointers={**_ends(len(a)), "cur": cur}, line=line,
            explanation=f"cur is at node {cur} (value {a[cur]}).",
        ))
    return frames


def _search(a: Tuple, x: int, line: int) -> List[Frame]:
    frames = []
    for cur, value in enumerate(a):
        if value == x:
            frames.append(Frame(
                StepKind.MATCH, (cur,), pointers={**_ends(len(a)), "cur": cur}, line=line,
                explanation=f"Found {x} at node {cur}.", marks=(cur,), totals={"result": cur},
            ))
            return frames
        frames.append(Frame(
            StepKind.VISIT, (cur,), pointers={**_ends(len(a)), "cur": cur}, line=line,
            explanation=f"{value} ≠ {x}; move cur to the next node.",
        ))
    frames.append(Frame(
        StepKind.EXHAUSTED, pointers=_ends(len(a)), line=line,
        explanation=f"Reached the end of the list: {x} is not in the list.", totals={"result": -1},
    ))
    return frames


class _ListOperation(PlannedOperation):
    def _need_room(self, cursor: OperationCursor) -> None:
        if cursor.size >= cursor.capacity:
            raise ValidationError(f"Cannot insert more than {cursor.capacity} nodes")

    def _need_nodes(self, cursor: OperationCursor) -> None:
        if not cursor.sequence:
            raise ValidationError("The list is empty")


# ---------------------------------------------------------------------------
# Singly linked list
# ---------------------------------------------------------------------------
class SinglyInsertHead(_ListOperation):
    PSEUDOCODE  = SINGLY_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor):
        self._need_room(cursor)

    def plan(self, cursor):
        a, x = cursor.sequence, cursor.target
        return [Frame(
            StepKind.INSERT, (0,), snapshot=(x,) + a, pointers=_ends(len(a) + 1), line=0,
            explanation=f"New node {x} points at the old head and becomes the head.",
        )]


class SinglyInsertTail(_ListOperation):
    PSEUDOCODE  = SINGLY_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor):
        self._need_room(cursor)

    def plan(self, cursor):
        a, x = cursor.sequence, cursor.target
        frames = _walk(a, len(a) - 1, line=2)
        frames.append(Frame(
            StepKind.INSERT, (len(a),), snapshot=a + (x,), pointers=_ends(len(a) + 1), line=3,
            explanation=f"The last node now points at new node {x}." if a else f"The list was empty; {x} becomes the head.",
        ))
        return frames


class SinglyRemoveHead(_ListOperation):
    PSEUDOCODE = SINGLY_PSEUDOCODE

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        a = cursor.sequence
        return [
            Frame(StepKind.SET_POINTER, (0,), pointers=_ends(len(a)), line=4,
                  explanation=f"The head node holds {a[0]}."),
            Frame(StepKind.REMOVE, snapshot=a[1:], pointers=_ends(len(a) - 1), line=4,
                  explanation=f"Removed {a[0]}; head moves to the next node.", totals={"result": a[0]}),
        ]


class SinglyRemoveTail(_ListOperation):
    PSEUDOCODE = SINGLY_PSEUDOCODE

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        a = cursor.sequence
        frames = _walk(a, len(a) - 2, line=6) if len(a) > 1 else [
            Frame(StepKind.SET_POINTER, (0,), pointers=_ends(1), line=5,
                  explanation=f"{a[0]} is the only node; the head itself is removed."),
        ]
        frames.append(Frame(
            StepKind.REMOVE, snapshot=a[:-1], pointers=_ends(len(a) - 1), line=7,
            explanation=f"Removed tail node {a[-1]}.", totals={"result": a[-1]},
        ))
        return frames


class SinglySearch(_ListOperation):
    PSEUDOCODE  = SINGLY_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        return _search(cursor.sequence, cursor.target, line=9)


# ---------------------------------------------------------------------------
# Doubly linked list
# ---------------------------------------------------------------------------
def _closer_walk(a: Tuple, position: int, line: int) -> List[Frame]:
    if position <= (len(a) - 1) // 2:
        return _walk(a, position, line)
    return _walk(a, position, line, backwards=True)


class DoublyInsertHead(_ListOperation):
    PSEUDOCODE  = DOUBLY_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor):
        self._need_room(cursor)

    def plan(self, cursor):
        a, x = cursor.sequence, cursor.target
        return [Frame(
            StepKind.INSERT, (0,), snapshot=(x,) + a, pointers=_ends(len(a) + 1), line=0,
            explanation=f"{x} links to the old head in both directions and becomes the head.",
        )]


class DoublyInsertTail(_ListOperation):
    PSEUDOCODE  = DOUBLY_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor):
        self._need_room(cursor)

    def plan(self, cursor):
        a, x = cursor.sequence, cursor.target
        return [Frame(
            StepKind.INSERT, (len(a),), snapshot=a + (x,), pointers=_ends(len(a) + 1), line=1,
            explanation=f"The tail pointer gives direct access: {x} is linked after it, no walk needed.",
        )]


class DoublyInsertAt(_ListOperation):
    PSEUDOCODE     = DOUBLY_PSEUDOCODE
    NEEDS_VALUE    = True
    NEEDS_POSITION = True

    def check(self, cursor):
        self._need_room(cursor)
        if cursor.position is None or not 0 <= cursor.position <= cursor.size:
            raise ValidationError("Position out of bounds", token=str(cursor.position))

    def plan(self, cursor):
        a, x, p = cursor.sequence, cursor.target, cursor.position
        frames = _closer_walk(a, p, line=3) if p < len(a) else []
        if p == len(a):
            text = f"Position {p} is just past the tail; {x} becomes the new tail."
        else:
            text = f"{x} is linked in front of node {p}; later nodes shift one place."
        frames.append(Frame(
            StepKind.INSERT, (p,), snapshot=a[:p] + (x,) + a[p:], pointers=_ends(len(a) + 1), line=4,
            explanation=text,
        ))
        return frames


class DoublyDeleteHead(_ListOperation):
    PSEUDOCODE = DOUBLY_PSEUDOCODE

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        a = cursor.sequence
        return [
            Frame(StepKind.SET_POINTER, (0,), pointers=_ends(len(a)), line=5,
                  explanation=f"The head node holds {a[0]}."),
            Frame(StepKind.REMOVE, snapshot=a[1:], pointers=_ends(len(a) - 1), line=5,
                  explanation=f"Removed {a[0]}; the next node's prev link is cleared.", totals={"result": a[0]}),
        ]


class DoublyDeleteTail(_ListOperation):
    PSEUDOCODE = DOUBLY_PSEUDOCODE

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        a = cursor.sequence
        last = len(a) - 1
        return [
            Frame(StepKind.SET_POINTER, (last,), pointers=_ends(len(a)), line=6,
                  explanation=f"The tail node holds {a[last]}; no walk needed."),
            Frame(StepKind.REMOVE, snapshot=a[:-1], pointers=_ends(len(a) - 1), line=6,
                  explanation=f"Removed {a[last]}; tail moves back one node.", totals={"result": a[last]}),
        ]


class DoublyDeleteAt(_ListOperation):
    PSEUDOCODE     = DOUBLY_PSEUDOCODE
    NEEDS_POSITION = True

    def check(self, cursor):
        self._need_nodes(cursor)
        if cursor.position is None or not 0 <= cursor.position < cursor.size:
            raise ValidationError("Position out of bounds", token=str(cursor.position))

    def plan(self, cursor):
        a, p = cursor.sequence, cursor.position
        frames = _closer_walk(a, p, line=8)
        frames.append(Frame(
            StepKind.REMOVE, snapshot=a[:p] + a[p + 1:], pointers=_ends(len(a) - 1), line=9,
            explanation=f"Unlinked node {p} ({a[p]}); its neighbours now point at each other.",
            totals={"result": a[p]},
        ))
        return frames


class DoublySearch(_ListOperation):
    PSEUDOCODE  = DOUBLY_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        return _search(cursor.sequence, cursor.target, line=10)
