"""
linear.py — Stack, Queue & Circular Queue
==========================================
Array-backed linear structures.

  Stack           contents bottom → top, `top` pointer
  Queue           contents front → rear
  Circular queue  fixed slots (None = empty), `front` / `rear` wrap
                  around modulo the slot count; -1 / -1 means empty

Every operation shows where it acts first (SET_POINTER), then the
effect (PUSH / POP / ENQUEUE / DEQUEUE).  PEEK is a single step.
"""

from typing import List

from algorithms.step import StepKind
from errors import ValidationError
from structures.base import Frame, OperationCursor, PlannedOperation


# ---------------------------------------------------------------------------
# Stack (LIFO)
# ---------------------------------------------------------------------------
STACK_PSEUDOCODE: List[str] = [
    "push(x):",                                     # 0
    "    if top == capacity - 1: overflow",         # 1
    "    top ← top + 1;  a[top] ← x",               # 2
    "pop():",                                       # 3
    "    if top == -1: underflow",                  # 4
    "    x ← a[top];  top ← top - 1;  return x",    # 5
    "peek():",                                      # 6
    "    return a[top]",                            # 7
]


class StackPush(PlannedOperation):
    PSEUDOCODE  = STACK_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor: OperationCursor) -> None:
        if cursor.size >= cursor.capacity:
            raise ValidationError("Stack Overflow: cannot push when the stack is full")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        a, x = cursor.sequence, cursor.target
        top = len(a) - 1
        if top >= 0:
            where = f"top is {a[top]} at index {top}; {x} goes above it."
        else:
            where = f"The stack is empty (top = -1); {x} becomes the bottom element."
        return [
            Frame(StepKind.SET_POINTER, (top,) if top >= 0 else (), pointers={"top": top},
                  line=1, explanation=f"{where} Room left: {cursor.capacity - len(a)}."),
            Frame(StepKind.PUSH, (top + 1,), snapshot=a + (x,), pointers={"top": top + 1},
                  line=2, explanation=f"Pushed {x}; top is now index {top + 1}."),
        ]


class StackPop(PlannedOperation):
    PSEUDOCODE = STACK_PSEUDOCODE

    def check(self, cursor: OperationCursor) -> None:
        if not cursor.sequence:
            raise ValidationError("Stack Underflow: cannot pop when the stack is empty")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        a = cursor.sequence
        top = len(a) - 1
        return [
            Frame(StepKind.SET_POINTER, (top,), pointers={"top": top},
                  line=4, explanation=f"The top element is {a[top]} at index {top}."),
            Frame(StepKind.POP, snapshot=a[:-1], pointers={"top": top - 1},
                  line=5, explanation=f"Popped {a[top]}; top is now index {top - 1}.",
                  totals={"result": a[top]}),
        ]


class StackPeek(PlannedOperation):
    PSEUDOCODE = STACK_PSEUDOCODE

    def check(self, cursor: OperationCursor) -> None:
        if not cursor.sequence:
            raise ValidationError("Stack is empty: there are no elements to peek")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        a = cursor.sequence
        top = len(a) - 1
        return [
            Frame(StepKind.PEEK, (top,), pointers={"top": top},
                  line=7, explanation=f"Top element is {a[top]}.", totals={"result": a[top]}),
        ]


# ---------------------------------------------------------------------------
# Queue (FIFO)
# ---------------------------------------------------------------------------
QUEUE_PSEUDOCODE: List[str] = [
    "enqueue(x):",                                  # 0
    "    if size == capacity: overflow",            # 1
    "    a[rear + 1] ← x;  rear ← rear + 1",        # 2
    "dequeue():",                                   # 3
    "    if size == 0: underflow",                  # 4
    "    x ← a[front];  shift the rest forward",    # 5
    "peek():",                                      # 6
    "    return a[front]",                          # 7
]


class QueueEnqueue(PlannedOperation):
    PSEUDOCODE  = QUEUE_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor: OperationCursor) -> None:
        if cursor.size >= cursor.capacity:
            raise ValidationError("Queue Overflow: cannot enqueue when the queue is full")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        a, x = cursor.sequence, cursor.target
        rear = len(a) - 1
        if a:
            where = f"rear is {a[rear]} at index {rear}; {x} joins behind it."
            first = Frame(StepKind.SET_POINTER, (rear,), pointers={"front": 0, "rear": rear},
                          line=1, explanation=where)
        else:
            first = Frame(StepKind.SET_POINTER, line=1,
                          explanation=f"The queue is empty; {x} will be both front and rear.")
        return [
            first,
            Frame(StepKind.ENQUEUE, (rear + 1,), snapshot=a + (x,), pointers={"front": 0, "rear": rear + 1},
                  line=2, explanation=f"Enqueued {x} at the rear (index {rear + 1})."),
        ]


class QueueDequeue(PlannedOperation):
    PSEUDOCODE = QUEUE_PSEUDOCODE

    def check(self, cursor: OperationCursor) -> None:
        if not cursor.sequence:
            raise ValidationError("Queue Underflow: cannot dequeue when the queue is empty")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        a = cursor.sequence
        rest = a[1:]
        after = {"front": 0, "rear": len(rest) - 1} if rest else {}
        return [
            Frame(StepKind.SET_POINTER, (0,), pointers={"front": 0, "rear": len(a) - 1},
                  line=4, explanation=f"The front element is {a[0]}."),
            Frame(StepKind.DEQUEUE, snapshot=rest, pointers=after,
                  line=5, explanation=f"Dequeued {a[0]}; every other element moves one place forward.",
                  totals={"result": a[0]}),
        ]


class QueuePeek(PlannedOperation):
    PSEUDOCODE = QUEUE_PSEUDOCODE

    def check(self, cursor: OperationCursor) -> None:
        if not cursor.sequence:
            raise ValidationError("Queue is empty: there are no elements to peek")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        a = cursor.sequence
        return [
            Frame(StepKind.PEEK, (0,), pointers={"front": 0, "rear": len(a) - 1},
                  line=7, explanation=f"Front element is {a[0]}.", totals={"result": a[0]}),
        ]


# ---------------------------------------------------------------------------
# Circular Queue (ring buffer)
# ---------------------------------------------------------------------------
RING_PSEUDOCODE: List[str] = [
    "enqueue(x):",                                              # 0
    "    if (rear + 1) % n == front: overflow",                 # 1
    "    if front == -1: front ← 0",                            # 2
    "    rear ← (rear + 1) % n;  a[rear] ← x",                  # 3
    "dequeue():",                                               # 4
    "    if front == -1: underflow",                            # 5
    "    x ← a[front];  a[front] ← empty",                      # 6
    "    if front == rear: front, rear ← -1, -1",               # 7
    "    else: front ← (front + 1) % n",                        # 8
    "peek():",                                                  # 9
    "    return a[front]",                                      # 10
]


def ring_is_empty(front: int) -> bool:
    return front == -1


def ring_is_full(front: int, rear: int, slots: int) -> bool:
    return (front == 0 and rear == slots - 1) or front == rear + 1


def ring_count(front: int, rear: int, slots: int) -> int:
    if ring_is_empty(front):
        return 0
    if front <= rear:
        return rear - front + 1
    return slots - (front - rear - 1)


class RingEnqueue(PlannedOperation):
    PSEUDOCODE  = RING_PSEUDOCODE
    NEEDS_VALUE = True

    def check(self, cursor: OperationCursor) -> None:
        if ring_is_full(cursor.front, cursor.rear, cursor.size):
            raise ValidationError("Queue Overflow: cannot enqueue when the circular queue is full")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        slots, x = cursor.sequence, cursor.target
        n = len(slots)
        front, rear = cursor.front, cursor.rear
        new_front = 0 if ring_is_empty(front) else front
        new_rear = (rear + 1) % n
        filled = tuple(x if idx == new_rear else v for idx, v in enumerate(slots))

        if ring_is_empty(front):
            text = "The queue is empty: front moves to 0 and rear to slot 0."
        elif new_rear < rear:
            text = f"rear wraps around from slot {rear} to slot {new_rear}."
        else:
            text = f"rear advances from slot {rear} to slot {new_rear}."
        return [
            Frame(StepKind.SET_POINTER, (new_rear,), pointers={"front": new_front, "rear": new_rear},
                  line=3, explanation=text),
            Frame(StepKind.ENQUEUE, (new_rear,), snapshot=filled, pointers={"front": new_front, "rear": new_rear},
                  line=3, explanation=f"Enqueued {x} at slot {new_rear}."),
        ]


class RingDequeue(PlannedOperation):
    PSEUDOCODE = RING_PSEUDOCODE

    def check(self, cursor: OperationCursor) -> None:
        if ring_is_empty(cursor.front):
            raise ValidationError("Queue Underflow: cannot dequeue when the circular queue is empty")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        slots = cursor.sequence
        n = len(slots)
        front, rear = cursor.front, cursor.rear
        value = slots[front]
        cleared = tuple(None if idx == front else v for idx, v in enumerate(slots))

        if front == rear:
            after = {"front": -1, "rear": -1}
            text = f"Dequeued {value}; that was the last element, so front and rear reset to -1."
            line = 7
        else:
            after = {"front": (front + 1) % n, "rear": rear}
            text = f"Dequeued {value} from slot {front}; front moves to slot {after['front']}."
            line = 8
        return [
            Frame(StepKind.SET_POINTER, (front,), pointers={"front": front, "rear": rear},
                  line=6, explanation=f"The front element is {value} at slot {front}."),
            Frame(StepKind.DEQUEUE, (front,), snapshot=cleared, pointers=after,
                  line=line, explanation=text, totals={"result": value}),
        ]


class RingPeek(PlannedOperation):
    PSEUDOCODE = RING_PSEUDOCODE

    def check(self, cursor: OperationCursor) -> None:
        if ring_is_empty(cursor.front):
            raise ValidationError("Queue is empty: there are no elements to peek")

    def plan(self, cursor: OperationCursor) -> List[Frame]:
        front, rear = cursor.front, cursor.rear
        value = cursor.sequence[front]
        return [
            Frame(StepKind.PEEK, (front,), pointers={"front": front, "rear": rear},
                  line=10, explanation=f"Front element is {value} at slot {front}.",
                  totals={"result": value}),
        ]
