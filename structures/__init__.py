"""
structures/__init__.py — Data-Structure Registry
=================================================
Every data structure the visualizer animates, and the operations each
one supports.

    from structures import STRUCTURES, StructureKind, StructureState, get_structure

An operation card (OperationInfo) quacks like an AlgoInfo (key, label,
producer, pseudocode, needs_target), so the same Stepper plays it back.
The structure's contents live in a StructureState between operations;
the state takes the snapshot of an operation's final Step as its new
contents (`commit`).
"""

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from algorithms.listings import LISTINGS
from algorithms.step import Step
from dataset import STRUCTURE_BOUNDS, SizeBounds
from errors import ValidationError
from structures.base import Frame, OperationCursor, PlannedOperation
from structures.heap import (
    HeapExtract, HeapInsert, HeapPeek, Heapify,
    MaxHeapExtract, MaxHeapInsert, MaxHeapPeek, MaxHeapify, heapified,
)
from structures.linear import (
    QueueDequeue, QueueEnqueue, QueuePeek,
    RingDequeue, RingEnqueue, RingPeek, ring_count,
    StackPeek, StackPop, StackPush,
)
from structures.linked_list import (
    DoublyDeleteAt, DoublyDeleteHead, DoublyDeleteTail,
    DoublyInsertAt, DoublyInsertHead, DoublyInsertTail, DoublySearch,
    SinglyInsertHead, SinglyInsertTail, SinglyRemoveHead, SinglyRemoveTail, SinglySearch,
)
from structures.tree import (
    AvlInsert, AvlRemove, InorderTraversal, PostorderTraversal, PreorderTraversal,
    TreeInsert, TreeMax, TreeMin, TreeRemove, TreeSearch, balanced, build, preorder,
)


class StructureKind(Enum):
    STACK              = "stack"
    QUEUE              = "queue"
    CIRCULAR_QUEUE     = "circular-queue"
    LINKED_LIST        = "linked-list"
    DOUBLY_LINKED_LIST = "doubly-linked-list"
    BST                = "bst"
    AVL_TREE           = "avl-tree"
    MIN_HEAP           = "min-heap"
    MAX_HEAP           = "max-heap"


RING_BOUNDS = SizeBounds(1, 10, "circular queue")


# ---------------------------------------------------------------------------
# Operation card
# ---------------------------------------------------------------------------
@dataclass
class OperationInfo:
    structure:  StructureKind
    name:       str                  # "push"
    label:      str                  # "Push"
    producer:   PlannedOperation
    complexity: str = "O(1)"

    family = "structure"
    is_search = False
    bounds = STRUCTURE_BOUNDS

    @property
    def kind(self) -> StructureKind:
        return self.structure

    @property
    def key(self) -> str:
        return f"{self.structure.value}/{self.name}"

    @property
    def pseudocode(self) -> List[str]:
        return self.producer.PSEUDOCODE

    @property
    def needs_target(self) -> bool:
        return self.producer.NEEDS_VALUE

    @property
    def needs_position(self) -> bool:
        return self.producer.NEEDS_POSITION

    def listing(self, language: str) -> str:
        return LISTINGS[self.structure.value][language]

    def to_dict(self) -> dict:
        return {
            "key":            self.key,
            "name":           self.name,
            "label":          self.label,
            "complexity":     self.complexity,
            "needs_value":    self.needs_target,
            "needs_position": self.needs_position,
        }


@dataclass
class StructureInfo:
    kind:        StructureKind
    label:       str
    operations:  Dict[str, OperationInfo]
    description: str                        = ""
    capacity:    SizeBounds                 = STRUCTURE_BOUNDS
    default_capacity: int                   = 10
    normalise:   Callable[[Iterable], Tuple] = tuple
    is_ring:     bool                       = False
    tags:        List[str]                  = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.kind.value

    def operation(self, name: str) -> OperationInfo:
        op = self.operations.get(name)
        if op is None:
            raise ValidationError(f"{self.label} has no '{name}' operation", token=name)
        return op

    def listing(self, language: str) -> str:
        return LISTINGS[self.key][language]

    def to_dict(self) -> dict:
        return {
            "key":          self.key,
            "label":        self.label,
            "description":  self.description,
            "tags":         list(self.tags),
            "min_capacity": self.capacity.minimum,
            "max_capacity": self.capacity.maximum,
            "operations":   [op.to_dict() for op in self.operations.values()],
        }


def _ops(kind: StructureKind, *entries) -> Dict[str, OperationInfo]:
    return {
        name: OperationInfo(kind, name, label, producer, complexity)
        for name, label, producer, complexity in entries
    }


def _unique(values: Iterable) -> List:
    seen, out = set(), []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def _bst(values: Iterable) -> Tuple:
    return preorder(build(_unique(values)))


def _avl(values: Iterable) -> Tuple:
    return balanced(_unique(values))


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
STRUCTURES: Dict[StructureKind, StructureInfo] = {

    StructureKind.STACK: StructureInfo(
        StructureKind.STACK, "Stack",
        _ops(StructureKind.STACK,
             ("push", "Push", StackPush(), "O(1)"),
             ("pop",  "Pop",  StackPop(),  "O(1)"),
             ("peek", "Peek", StackPeek(), "O(1)")),
        description="Last in, first out: every operation works on the top.",
        tags=["linear", "lifo"],
    ),

    StructureKind.QUEUE: StructureInfo(
        StructureKind.QUEUE, "Queue",
        _ops(StructureKind.QUEUE,
             ("enqueue", "Enqueue", QueueEnqueue(), "O(1)"),
             ("dequeue", "Dequeue", QueueDequeue(), "O(n)"),
             ("peek",    "Peek",    QueuePeek(),    "O(1)")),
        description="First in, first out: add at the rear, remove from the front.",
        tags=["linear", "fifo"],
    ),

    StructureKind.CIRCULAR_QUEUE: StructureInfo(
        StructureKind.CIRCULAR_QUEUE, "Circular Queue",
        _ops(StructureKind.CIRCULAR_QUEUE,
             ("enqueue", "Enqueue", RingEnqueue(), "O(1)"),
             ("dequeue", "Dequeue", RingDequeue(), "O(1)"),
             ("peek",    "Peek",    RingPeek(),    "O(1)")),
        description="A fixed ring of slots; front and rear wrap around so dequeue never shifts.",
        capacity=RING_BOUNDS, default_capacity=5, is_ring=True,
        tags=["linear", "fifo", "ring-buffer"],
    ),

    StructureKind.LINKED_LIST: StructureInfo(
        StructureKind.LINKED_LIST, "Linked List",
        _ops(StructureKind.LINKED_LIST,
             ("insert-head", "Insert at Head",   SinglyInsertHead(), "O(1)"),
             ("insert-tail", "Insert at Tail",   SinglyInsertTail(), "O(n)"),
             ("remove-head", "Remove from Head", SinglyRemoveHead(), "O(1)"),
             ("remove-tail", "Remove from Tail", SinglyRemoveTail(), "O(n)"),
             ("search",      "Search",           SinglySearch(),     "O(n)")),
        description="Nodes linked by a next pointer; only the head is known.",
        tags=["linear", "linked"],
    ),

    StructureKind.DOUBLY_LINKED_LIST: StructureInfo(
        StructureKind.DOUBLY_LINKED_LIST, "Doubly Linked List",
        _ops(StructureKind.DOUBLY_LINKED_LIST,
             ("insert-head", "Insert at Head",     DoublyInsertHead(), "O(1)"),
             ("insert-tail", "Insert at Tail",     DoublyInsertTail(), "O(1)"),
             ("insert-at",   "Insert at Position", DoublyInsertAt(),   "O(n)"),
             ("delete-head", "Delete Head",        DoublyDeleteHead(), "O(1)"),
             ("delete-tail", "Delete Tail",        DoublyDeleteTail(), "O(1)"),
             ("delete-at",   "Delete at Position", DoublyDeleteAt(),   "O(n)"),
             ("search",      "Search",             DoublySearch(),     "O(n)")),
        description="Nodes linked both ways, with head and tail pointers.",
        tags=["linear", "linked"],
    ),

    StructureKind.BST: StructureInfo(
        StructureKind.BST, "Binary Search Tree",
        _ops(StructureKind.BST,
             ("insert",    "Insert",    TreeInsert(),         "O(h)"),
             ("remove",    "Remove",    TreeRemove(),         "O(h)"),
             ("search",    "Search",    TreeSearch(),         "O(h)"),
             ("min",       "Find Min",  TreeMin(),            "O(h)"),
             ("max",       "Find Max",  TreeMax(),            "O(h)"),
             ("inorder",   "Inorder",   InorderTraversal(),   "O(n)"),
             ("preorder",  "Preorder",  PreorderTraversal(),  "O(n)"),
             ("postorder", "Postorder", PostorderTraversal(), "O(n)")),
        description="Smaller keys to the left, larger to the right; h is the height.",
        normalise=_bst,
        tags=["tree"],
    ),

    StructureKind.AVL_TREE: StructureInfo(
        StructureKind.AVL_TREE, "AVL Tree",
        _ops(StructureKind.AVL_TREE,
             ("insert",  "Insert",  AvlInsert(),        "O(log n)"),
             ("remove",  "Remove",  AvlRemove(),        "O(log n)"),
             ("search",  "Search",  TreeSearch(),       "O(log n)"),
             ("inorder", "Inorder", InorderTraversal(), "O(n)")),
        description="A BST that rotates after every change so sibling heights differ by at most one.",
        normalise=_avl,
        tags=["tree", "self-balancing"],
    ),

    StructureKind.MIN_HEAP: StructureInfo(
        StructureKind.MIN_HEAP, "Min Heap",
        _ops(StructureKind.MIN_HEAP,
             ("insert",  "Insert",      HeapInsert(),  "O(log n)"),
             ("extract", "Extract Min", HeapExtract(), "O(log n)"),
             ("peek",    "Peek",        HeapPeek(),    "O(1)"),
             ("heapify", "Heapify",     Heapify(),     "O(n)")),
        description="A complete binary tree in an array; every parent is ≤ its children.",
        normalise=lambda values: heapified(values, operator.lt),
        tags=["tree", "heap"],
    ),

    StructureKind.MAX_HEAP: StructureInfo(
        StructureKind.MAX_HEAP, "Max Heap",
        _ops(StructureKind.MAX_HEAP,
             ("insert",  "Insert",      MaxHeapInsert(),  "O(log n)"),
             ("extract", "Extract Max", MaxHeapExtract(), "O(log n)"),
             ("peek",    "Peek",        MaxHeapPeek(),    "O(1)"),
             ("heapify", "Heapify",     MaxHeapify(),     "O(n)")),
        description="A complete binary tree in an array; every parent is ≥ its children.",
        normalise=lambda values: heapified(values, operator.gt),
        tags=["tree", "heap"],
    ),
}


def get_structure(key: Union[str, StructureKind]) -> Optional[StructureInfo]:
    """Return StructureInfo by kind or key string ("stack"), or None."""
    if isinstance(key, StructureKind):
        return STRUCTURES.get(key)
    try:
        return STRUCTURES.get(StructureKind(key))
    except ValueError:
        return None


def list_structures() -> List[StructureInfo]:
    return list(STRUCTURES.values())


# ---------------------------------------------------------------------------
# Structure contents between operations
# ---------------------------------------------------------------------------
class StructureState:
    """
    Attributes:
        info     : StructureInfo of the structure.
        values   : Contents in snapshot layout (slots for a ring).
        capacity : Most elements allowed.
        front    : Ring head, -1 when empty (rings only).
        rear     : Ring tail, -1 when empty (rings only).
    """

    def __init__(self, info: StructureInfo, values: Iterable = (), capacity: Optional[int] = None):
        self.info = info
        self.capacity = info.default_capacity if capacity is None else capacity
        self.front = -1
        self.rear = -1
        self.values: Tuple = ()
        self.load(values)

    def load(self, values: Iterable) -> None:
        """Replace the contents.  A ring is filled from slot 0."""
        if not self.info.capacity.contains(self.capacity):
            raise ValidationError(
                f"{self.info.label} size must be between {self.info.capacity.minimum} "
                f"and {self.info.capacity.maximum}",
                token=str(self.capacity),
            )
        values = self.info.normalise(values)
        if len(values) > self.capacity:
            raise ValidationError(
                f"{len(values)} values do not fit in a {self.info.label.lower()} of capacity {self.capacity}"
            )
        if self.info.is_ring:
            self.values = tuple(values) + (None,) * (self.capacity - len(values))
            self.front, self.rear = (0, len(values) - 1) if values else (-1, -1)
            return
        self.values = tuple(values)

    def resize(self, capacity: int) -> None:
        previous = self.capacity
        items = self.contents()
        self.capacity = capacity
        try:
            self.load(items)
        except ValidationError:
            self.capacity = previous
            raise

    def contents(self) -> Tuple:
        """Elements in order; a ring is read from front to rear."""
        if not self.info.is_ring:
            return self.values
        return tuple(self.values[(self.front + k) % self.capacity] for k in range(self.count))

    @property
    def count(self) -> int:
        if self.info.is_ring:
            return ring_count(self.front, self.rear, self.capacity)
        return len(self.values)

    def options(self, op: OperationInfo, position: Optional[int] = None) -> dict:
        """Keyword options for the operation's cursor."""
        opts = {"capacity": self.capacity}
        if self.info.is_ring:
            opts.update(front=self.front, rear=self.rear)
        if op.needs_position:
            opts["position"] = position
        return opts

    def commit(self, step: Step) -> None:
        """Take the final Step of an operation as the new contents."""
        if not step.is_final:
            return
        self.values = tuple(step.snapshot)
        if self.info.is_ring:
            self.front = step.pointers.get("front", -1)
            self.rear = step.pointers.get("rear", -1)

    def to_dict(self) -> dict:
        return {
            "structure": self.info.key,
            "values":    list(self.values),
            "capacity":  self.capacity,
            "count":     self.count,
            "front":     self.front,
            "rear":      self.rear,
        }


__all__ = [
    "Frame",
    "OperationCursor",
    "OperationInfo",
    "PlannedOperation",
    "RING_BOUNDS",
    "STRUCTURES",
    "StructureInfo",
    "StructureKind",
    "StructureState",
    "get_structure",
    "list_structures",
]
