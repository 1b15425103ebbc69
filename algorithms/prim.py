"""
prim.py — Prim's Minimum Spanning Tree
=======================================
Grows one tree from the start node.  Every round examines each edge
that crosses from the tree to the rest of the graph and adds the
lightest one.

Snapshot layout: per node, the weight of the edge that brought it into
the tree (0 for the start node, None while outside).  Running cost is
in `totals["cost"]`.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from algorithms.base import Advance, StepProducer
from algorithms.step import Cursor, StepKind
from errors import ValidationError
from graph import Edge, Graph


@dataclass(frozen=True)
class PrimCursor(Cursor):
    """
    Attributes:
        phase   : start | scan | examine | add.
        pending : Crossing edges still to examine this round.
        best    : Lightest crossing edge seen so far this round.
        tree    : Edges in the spanning tree.
        cost    : Sum of tree edge weights.
    """

    graph:   Optional[Graph]  = None
    source:  int              = 0
    phase:   str              = "start"
    pending: Tuple[Edge, ...] = ()
    best:    Optional[Edge]   = None
    tree:    Tuple[Edge, ...] = ()
    cost:    float            = 0


class PrimMST(StepProducer):
    cursor_type = PrimCursor
    COMPLETES_ON_FULL_MARKS = False

    PSEUDOCODE: List[str] = [
        "tree ← {start}",                                           # 0
        "while tree is missing nodes:",                             # 1
        "    for each edge (u, v) with u in tree, v outside:",      # 2
        "        keep the lightest one",                            # 3
        "    if none: graph is disconnected",                       # 4
        "    add the lightest edge and v to the tree",              # 5
        "return tree edges, total cost",                            # 6
    ]
    COMPLETE_LINE = 6

    def initial_cursor(self, sequence=(), target=None, graph: Optional[Graph] = None, source: int = 0) -> PrimCursor:
        if graph is None:
            raise ValidationError("Load a graph first")
        if not 0 <= source < graph.size:
            raise ValidationError(f"Unknown source node: {source}", token=str(source))
        return PrimCursor(sequence=(None,) * graph.size, graph=graph, source=source)

    def advance(self, c: PrimCursor) -> Advance:
        g = c.graph
        edges = [e.key for e in c.tree]
        totals = {"cost": c.cost}

        if c.phase == "start":
            keys = list(c.sequence)
            keys[c.source] = 0
            return self._emit(
                c, StepKind.SELECT, (c.source,), sequence=keys, marks=(c.source,), line=0,
                pointers={"current": c.source}, totals=totals,
                explanation=f"Starting Prim's algorithm from node {g.labels[c.source]}.",
                phase="scan",
            )

        if c.phase == "scan":
            if len(c.sorted_marks) == g.size:
                return self._finish(
                    c, StepKind.COMPLETE, line=6, edges=edges, totals=totals,
                    explanation=f"Minimum spanning tree complete with {len(c.tree)} edges. "
                                f"Total cost: {c.cost}.",
                )
            crossing = tuple(
                e for e in g.edges
                if (e.source in c.sorted_marks) != (e.target in c.sorted_marks)
            )
            if not crossing:
                return self._finish(
                    c, StepKind.EXHAUSTED, line=4, edges=edges, totals=totals,
                    explanation=f"Graph is disconnected. Cannot complete MST (cost so far {c.cost}).",
                )
            return self.advance(replace(c, phase="examine", pending=crossing, best=None))

        if c.phase == "examine":
            e, rest = c.pending[0], c.pending[1:]
            best = c.best
            if best is None or e.weight < best.weight:
                best = e
                text = f"Edge {g.describe(e)} with weight {e.weight} is the current minimum."
            else:
                text = (f"Examining edge {g.describe(e)} with weight {e.weight}; "
                        f"{g.describe(best)} ({best.weight}) is still lighter.")
            return self._emit(
                c, StepKind.EXAMINE, (e.source, e.target), line=3 if best is e else 2,
                pointers={"u": best.source, "v": best.target}, edges=edges, totals=totals,
                explanation=text,
                phase="examine" if rest else "add", pending=rest, best=best,
            )

        # add
        e = c.best
        new = e.target if e.source in c.sorted_marks else e.source
        keys = list(c.sequence)
        keys[new] = e.weight
        cost = c.cost + e.weight
        tree = c.tree + (e,)
        return self._emit(
            c, StepKind.ADD_EDGE, (e.source, e.target), sequence=keys, marks=(new,), line=5,
            pointers={"current": new}, edges=[t.key for t in tree], totals={"cost": cost},
            explanation=f"Added edge {g.describe(e)} with weight {e.weight} to MST. Total cost: {cost}.",
            phase="scan", best=None, tree=tree, cost=cost,
        )
