"""
tree.py — Binary Search Tree & AVL Tree
========================================
Snapshot layout:  a BST with distinct keys is fully determined by its
preorder sequence, so the snapshot IS the preorder tuple.  A node's
position in the snapshot is simply `snapshot.index(value)`, and the
renderer rebuilds the shape with `build()`.

During an operation the producer works on a throw-away mutable copy
(`Node`), recording a preorder snapshot after every structural change:

    BST insert   VISIT along the search path → INSERT leaf
    BST remove   VISIT → (two children: VISIT down to the successor,
                 copy it up) → REMOVE
    AVL insert   BST insert → walk back up; at each unbalanced node a
                 SET_POINTER naming the case then one or two ROTATEs
    Traversals   one VISIT per node in traversal order, marks accumulate
"""

from typing import Iterable, List, Optional, Tuple

from algorithms.step import StepKind
from errors import ValidationError
from structures.base import Frame, OperationCursor, PlannedOperation


class Node:
    __slots__ = ("value", "left", "right")

    def __init__(self, value: int):
        self.value = value
        self.left: Optional["Node"] = None
        self.right: Optional["Node"] = None


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------
def insert_value(root: Optional[Node], value: int) -> Node:
    """Plain BST insert on the mutable tree; returns the (possibly new) root."""
    if root is None:
        return Node(value)
    cur = root
    while True:
        if value < cur.value:
            if cur.left is None:
                cur.left = Node(value)
                return root
            cur = cur.left
        else:
            if cur.right is None:
                cur.right = Node(value)
                return root
            cur = cur.right


def build(values: Iterable[int]) -> Optional[Node]:
    """Rebuild a tree from its preorder (or any insertion) order."""
    root = None
    for value in values:
        root = insert_value(root, value)
    return root


def preorder(node: Optional[Node]) -> Tuple[int, ...]:
    if node is None:
        return ()
    return (node.value,) + preorder(node.left) + preorder(node.right)


def inorder(node: Optional[Node]) -> Tuple[int, ...]:
    if node is None:
        return ()
    return inorder(node.left) + (node.value,) + inorder(node.right)


def postorder(node: Optional[Node]) -> Tuple[int, ...]:
    if node is None:
        return ()
    return postorder(node.left) + postorder(node.right) + (node.value,)


def height(node: Optional[Node]) -> int:
    if node is None:
        return 0
    return 1 + max(height(node.left), height(node.right))


def balance(node: Optional[Node]) -> int:
    if node is None:
        return 0
    return height(node.left) - height(node.right)


def layout(values: Iterable[int]) -> List[Tuple[int, int, int, Optional[int]]]:
    """
    (value, depth, column, parent position) per snapshot position.
    Columns are inorder ranks, which keeps every left child left of its parent.
    """
    values = tuple(values)
    root = build(values)
    column = {v: rank for rank, v in enumerate(inorder(root))}
    placed = {}

    def walk(node, depth, parent):
        if node is None:
            return
        placed[node.value] = (node.value, depth, column[node.value], parent)
        walk(node.left, depth + 1, values.index(node.value))
        walk(node.right, depth + 1, values.index(node.value))

    walk(root, 0, None)
    return [placed[v] for v in values]


def _rotate_right(y: Node) -> Node:
    x = y.left
    y.left = x.right
    x.right = y
    return x


def _rotate_left(x: Node) -> Node:
    y = x.right
    x.right = y.left
    y.left = x
    return y


def _relink(root: Node, parent: Optional[Node], old: Node, new: Optional[Node]) -> Optional[Node]:
    if parent is None:
        return new
    if parent.left is old:
        parent.left = new
    else:
        parent.right = new
    return root


# ---------------------------------------------------------------------------
# Frame builders shared by BST and AVL
# ---------------------------------------------------------------------------
def _path_frames(root: Optional[Node], x: int, line: int) -> Tuple[List[Frame], List[Node], Optional[Node]]:
    """VISIT frames down the search path for x; also returns the path and the node holding x."""
    snapshot = preorder(root)
    frames, path = [], []
    cur = root
    while cur is not None:
        pos = snapshot.index(cur.value)
        if x == cur.value:
            return frames, path, cur
        go = "left" if x < cur.value else "right"
        frames.append(Frame(
            StepKind.VISIT, (pos,), pointers={"cur": pos}, line=line,
            explanation=f"{x} {'<' if x < cur.value else '>'} {cur.value}: go {go}.",
        ))
        path.append(cur)
        cur = cur.left if x < cur.value else cur.right
    return frames, path, None


def _rebalance(root: Node, path: List[Node], line: int) -> Tuple[Node, List[Frame]]:
    """Walk `path` bottom-up, rotating every node whose balance factor leaves [-1, 1]."""
    frames = []
    for depth in range(len(path) - 1, -1, -1):
        node = path[depth]
        parent = path[depth - 1] if depth > 0 else None
        factor = balance(node)
        if -1 <= factor <= 1:
            continue

        if factor > 1:
            case = "Left-Left" if balance(node.left) >= 0 else "Left-Right"
        else:
            case = "Right-Right" if balance(node.right) <= 0 else "Right-Left"
        snap = preorder(root)
        frames.append(Frame(
            StepKind.SET_POINTER, (snap.index(node.value),), pointers={"unbalanced": snap.index(node.value)},
            line=line, explanation=f"Node {node.value} has balance factor {factor}: {case} case.",
        ))

        if case == "Left-Right":
            node.left = _rotate_left(node.left)
            frames.append(_rotation_frame(root, node.left, "left", line))
        elif case == "Right-Left":
            node.right = _rotate_right(node.right)
            frames.append(_rotation_frame(root, node.right, "right", line))

        top = _rotate_right(node) if factor > 1 else _rotate_left(node)
        root = _relink(root, parent, node, top)
        frames.append(_rotation_frame(root, top, "right" if factor > 1 else "left", line))
    return root, frames


def _rotation_frame(root: Node, top: Node, direction: str, line: int) -> Frame:
    snap = preorder(root)
    pos = snap.index(top.value)
    return Frame(
        StepKind.ROTATE, (pos,), snapshot=snap, pointers={"pivot": pos}, line=line,
        explanation=f"Rotate {direction}: {top.value} moves up.",
    )


def _detach(root: Node, path: List[Node], target: Node) -> Tuple[Optional[Node], List[Node], List[Frame], int]:
    """
    Unlink `target` (reached via `path`).  A node with two children is
    replaced by its inorder successor, which is then unlinked instead.
    Returns the new root, the path down to the physically removed node's
    parent, frames for the successor walk, and the value removed.
    """
    frames = []
    removed = target.value
    path = list(path)
    if target.left is not None and target.right is not None:
        snap = preorder(root)
        path.append(target)
        succ = target.right
        while succ.left is not None:
            frames.append(Frame(
                StepKind.VISIT, (snap.index(succ.value),), pointers={"cur": snap.index(succ.value)}, line=5,
                explanation=f"Looking for the successor: {succ.value} has a left child, keep going left.",
            ))
            path.append(succ)
            succ = succ.left
        target.value = succ.value
        frames.append(Frame(
            StepKind.SET_POINTER, (snap.index(succ.value),), pointers={"successor": snap.index(succ.value)}, line=5,
            explanation=f"{removed} has two children; its inorder successor {succ.value} takes its place.",
        ))
        target = succ

    child = target.left if target.left is not None else target.right
    parent = path[-1] if path else None
    root = _relink(root, parent, target, child)
    return root, path, frames, removed


TREE_PSEUDOCODE: List[str] = [
    "insert(x):",                                                   # 0
    "    cur ← root;  go left if x < cur, right otherwise",         # 1
    "    attach x as a leaf where the walk falls off the tree",     # 2
    "remove(x):",                                                   # 3
    "    find x;  if it has ≤ 1 child, splice it out",              # 4
    "    else copy in the inorder successor and remove that",       # 5
    "search(x):  walk down comparing keys",                         # 6
    "min(): go left until there is no left child",                  # 7
    "max(): go right until there is no right child",                # 8
    "inorder: left, node, right",                                   # 9
    "preorder: node, left, right",                                  # 10
    "postorder: left, right, node",                                 # 11
    "rebalance: for each ancestor, rotate if |balance| > 1",        # 12
]


class _TreeOperation(PlannedOperation):
    PSEUDOCODE = TREE_PSEUDOCODE
    BALANCED   = False

    def root(self, cursor: OperationCursor) -> Optional[Node]:
        return build(cursor.sequence)

    def _need_nodes(self, cursor: OperationCursor) -> None:
        if not cursor.sequence:
            raise ValidationError("The tree is empty")


class TreeInsert(_TreeOperation):
    NEEDS_VALUE = True

    def check(self, cursor):
        if cursor.size >= cursor.capacity:
            raise ValidationError(f"Cannot insert more than {cursor.capacity} nodes")
        if cursor.target in cursor.sequence:
            raise ValidationError(f"{cursor.target} already exists in the tree", token=str(cursor.target))

    def plan(self, cursor):
        x = cursor.target
        root = self.root(cursor)
        frames, path, _ = _path_frames(root, x, line=1)
        root = insert_value(root, x)
        snap = preorder(root)
        where = f"as the {'left' if x < path[-1].value else 'right'} child of {path[-1].value}" if path else "as the root"
        frames.append(Frame(
            StepKind.INSERT, (snap.index(x),), snapshot=snap, line=2, explanation=f"Inserted {x} {where}.",
        ))
        if self.BALANCED and path:
            root, rotations = _rebalance(root, path, line=12)
            frames.extend(rotations)
            if rotations:
                frames.append(Frame(
                    StepKind.COMPLETE, (preorder(root).index(x),), line=12,
                    explanation=f"Every node is balanced again; height is {height(root)}.",
                ))
        return frames


class TreeRemove(_TreeOperation):
    NEEDS_VALUE = True

    def check(self, cursor):
        self._need_nodes(cursor)
        if cursor.target not in cursor.sequence:
            raise ValidationError(f"{cursor.target} not found in the tree", token=str(cursor.target))

    def plan(self, cursor):
        x = cursor.target
        root = self.root(cursor)
        frames, path, target = _path_frames(root, x, line=4)
        snap = preorder(root)
        frames.append(Frame(
            StepKind.SET_POINTER, (snap.index(x),), pointers={"cur": snap.index(x)}, line=4,
            explanation=f"Found {x}.",
        ))
        root, path, successor_frames, removed = _detach(root, path, target)
        frames.extend(successor_frames)
        frames.append(Frame(
            StepKind.REMOVE, snapshot=preorder(root), line=4 if not successor_frames else 5,
            explanation=f"Removed {removed}.", totals={"result": removed},
        ))
        if self.BALANCED and root is not None:
            root, rotations = _rebalance(root, path, line=12)
            frames.extend(rotations)
            if rotations:
                frames.append(Frame(
                    StepKind.COMPLETE, line=12,
                    explanation=f"Every node is balanced again; height is {height(root)}.",
                ))
        return frames


class TreeSearch(_TreeOperation):
    NEEDS_VALUE = True

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        x = cursor.target
        frames, _, found = _path_frames(self.root(cursor), x, line=6)
        if found is None:
            frames.append(Frame(
                StepKind.EXHAUSTED, line=6, explanation=f"Fell off the tree: {x} is not in it.", totals={"result": -1},
            ))
        else:
            pos = cursor.sequence.index(x)
            frames.append(Frame(
                StepKind.MATCH, (pos,), pointers={"cur": pos}, marks=(pos,), line=6,
                explanation=f"Found {x}.", totals={"result": x},
            ))
        return frames


class _Extreme(_TreeOperation):
    SIDE = "left"
    LINE = 7

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        a = cursor.sequence
        frames = []
        cur = self.root(cursor)
        while getattr(cur, self.SIDE) is not None:
            pos = a.index(cur.value)
            frames.append(Frame(
                StepKind.VISIT, (pos,), pointers={"cur": pos}, line=self.LINE,
                explanation=f"{cur.value} has a {self.SIDE} child; keep going {self.SIDE}.",
            ))
            cur = getattr(cur, self.SIDE)
        pos = a.index(cur.value)
        label = "minimum" if self.SIDE == "left" else "maximum"
        frames.append(Frame(
            StepKind.MATCH, (pos,), pointers={"cur": pos}, marks=(pos,), line=self.LINE,
            explanation=f"{cur.value} has no {self.SIDE} child: it is the {label}.", totals={"result": cur.value},
        ))
        return frames


class TreeMin(_Extreme):
    SIDE = "left"
    LINE = 7


class TreeMax(_Extreme):
    SIDE = "right"
    LINE = 8


class _Traversal(_TreeOperation):
    ORDER = staticmethod(inorder)
    NAME  = "Inorder"
    LINE  = 9

    def check(self, cursor):
        self._need_nodes(cursor)

    def plan(self, cursor):
        a = cursor.sequence
        order = self.ORDER(self.root(cursor))
        frames = []
        for k, value in enumerate(order):
            pos = a.index(value)
            frames.append(Frame(
                StepKind.VISIT, (pos,), pointers={"cur": pos}, marks=(pos,), line=self.LINE,
                explanation=f"Visit {value} ({k + 1} of {len(order)}).",
            ))
        frames.append(Frame(
            StepKind.COMPLETE, line=self.LINE,
            explanation=f"{self.NAME} traversal: {', '.join(str(v) for v in order)}.",
            totals={"order": list(order)},
        ))
        return frames


class InorderTraversal(_Traversal):
    ORDER = staticmethod(inorder)
    NAME  = "Inorder"
    LINE  = 9


class PreorderTraversal(_Traversal):
    ORDER = staticmethod(preorder)
    NAME  = "Preorder"
    LINE  = 10


class PostorderTraversal(_Traversal):
    ORDER = staticmethod(postorder)
    NAME  = "Postorder"
    LINE  = 11


class AvlInsert(TreeInsert):
    BALANCED = True


class AvlRemove(TreeRemove):
    BALANCED = True


def balanced(values: Iterable[int]) -> Tuple[int, ...]:
    """Preorder of the AVL tree built by inserting `values` one at a time."""
    root = None
    for value in values:
        path = []
        cur = root
        while cur is not None:
            path.append(cur)
            cur = cur.left if value < cur.value else cur.right
        root = insert_value(root, value)
        root, _ = _rebalance(root, path, line=0)
    return preorder(root)
