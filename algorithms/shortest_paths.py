"""
shortest_paths.py — Dijkstra, Bellman-Ford & Floyd-Warshall
============================================================
Snapshot layout:
  Dijkstra / Bellman-Ford  distance per node, None = ∞
  Floyd-Warshall           the n×n distance matrix flattened row by row

`sorted_marks` are the finalised nodes and `edges` the shortest-path
tree built from the predecessor links, so the canvas can colour both.

The graph comes in through the cursor options:

    producer.initial_cursor((), graph=sample_graph(), source=0)
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from algorithms.base import Advance, StepProducer
from algorithms.step import Cursor, StepKind
from errors import ValidationError
from graph import Graph


def _fmt(distance) -> str:
    return "∞" if distance is None else str(distance)


def _tree(previous: Tuple[Optional[int], ...]) -> List[Tuple[int, int]]:
    return [(min(p, v), max(p, v)) for v, p in enumerate(previous) if p is not None]


def _require_graph(graph: Optional[Graph], source: int, allow_negative: bool, name: str) -> None:
    if graph is None:
        raise ValidationError("Load a graph first")
    if not 0 <= source < graph.size:
        raise ValidationError(f"Unknown source node: {source}", token=str(source))
    if graph.has_negative_edges and not allow_negative:
        raise ValidationError(f"{name} needs non-negative edge weights; try Bellman-Ford")


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DijkstraCursor(Cursor):
    """
    Attributes:
        graph    : The input graph.
        source   : Start node.
        phase    : start | select | examine | decide.
        current  : Node being expanded.
        pending  : Neighbours of `current` still to look at, as (node, weight).
        previous : Predecessor on the best known path, per node.
    """

    graph:    Optional[Graph]                   = None
    source:   int                               = 0
    phase:    str                               = "start"
    current:  int                               = -1
    pending:  Tuple[Tuple[int, float], ...]     = ()
    previous: Tuple[Optional[int], ...]         = ()


class Dijkstra(StepProducer):
    cursor_type = DijkstraCursor
    COMPLETES_ON_FULL_MARKS = False

    PSEUDOCODE: List[str] = [
        "dist[source] ← 0;  dist[others] ← ∞",                      # 0
        "while some unvisited node has finite dist:",               # 1
        "    u ← unvisited node with the smallest dist",            # 2
        "    for each unvisited neighbour v of u:",                 # 3
        "        if dist[u] + w(u, v) < dist[v]:",                  # 4
        "            dist[v] ← dist[u] + w(u, v);  prev[v] ← u",    # 5
        "return dist, prev",                                        # 6
    ]
    COMPLETE_LINE = 6

    def initial_cursor(self, sequence=(), target=None, graph: Optional[Graph] = None, source: int = 0) -> DijkstraCursor:
        _require_graph(graph, source, allow_negative=False, name="Dijkstra")
        return DijkstraCursor(
            sequence=(None,) * graph.size, graph=graph, source=source,
            previous=(None,) * graph.size,
        )

    def advance(self, c: DijkstraCursor) -> Advance:
        g, dist = c.graph, list(c.sequence)
        tree = _tree(c.previous)

        if c.phase == "start":
            dist[c.source] = 0
            return self._emit(
                c, StepKind.SET_POINTER, (c.source,), sequence=dist, line=0,
                pointers={"current": c.source},
                explanation=f"Starting Dijkstra's algorithm from node {g.labels[c.source]}. "
                            f"Initial distance: {g.labels[c.source]} = 0, all others = ∞.",
                phase="select",
            )

        if c.phase == "select":
            open_nodes = [v for v in range(g.size) if v not in c.sorted_marks and dist[v] is not None]
            if not open_nodes:
                unreached = [g.labels[v] for v in range(g.size) if dist[v] is None]
                text = "Dijkstra's algorithm complete. The shortest paths from the start node have been found."
                if unreached:
                    text += f" Unreachable: {', '.join(unreached)}."
                return self._finish(c, StepKind.COMPLETE, line=6, explanation=text, edges=tree)
            u = min(open_nodes, key=lambda v: (dist[v], v))
            pending = tuple((v, w) for v, w in g.neighbours(u) if v not in c.sorted_marks and v != u)
            return self._emit(
                c, StepKind.SELECT, (u,), marks=(u,), line=2, pointers={"current": u}, edges=tree,
                explanation=f"Selected node {g.labels[u]} with minimum distance {dist[u]}.",
                phase="examine", current=u, pending=pending,
            )

        u = c.current
        if c.phase == "examine":
            if not c.pending:
                return self.advance(replace(c, phase="select"))
            v, w = c.pending[0]
            return self._emit(
                c, StepKind.EXAMINE, (u, v), line=3, pointers={"current": u, "v": v}, edges=tree,
                explanation=f"Examining neighbour {g.labels[v]} from {g.labels[u]} (weight {w}).",
                phase="decide",
            )

        # decide
        (v, w), rest = c.pending[0], c.pending[1:]
        candidate = dist[u] + w
        if dist[v] is None or candidate < dist[v]:
            dist[v] = candidate
            previous = c.previous[:v] + (u,) + c.previous[v + 1:]
            return self._emit(
                c, StepKind.RELAX, (u, v), sequence=dist, line=5, pointers={"current": u, "v": v},
                edges=_tree(previous),
                explanation=f"Updated distance to {g.labels[v]}: {candidate} via {g.labels[u]}.",
                phase="examine", pending=rest, previous=previous,
            )
        return self._emit(
            c, StepKind.REJECT, (u, v), line=4, pointers={"current": u, "v": v}, edges=tree,
            explanation=f"Path to {g.labels[v]} via {g.labels[u]} is not better ({candidate} ≥ {dist[v]}).",
            phase="examine", pending=rest,
        )


# ---------------------------------------------------------------------------
# Bellman-Ford
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BellmanFordCursor(Cursor):
    """
    Attributes:
        iteration  : 1-based relaxation round (at most n - 1).
        edge_index : Next edge of the round.
        relaxed    : Whether any edge improved a distance this round.
    """

    graph:      Optional[Graph]           = None
    source:     int                       = 0
    phase:      str                       = "start"
    iteration:  int                       = 1
    edge_index: int                       = 0
    relaxed:    bool                      = False
    previous:   Tuple[Optional[int], ...] = ()


class BellmanFord(StepProducer):
    cursor_type = BellmanFordCursor
    COMPLETES_ON_FULL_MARKS = False

    PSEUDOCODE: List[str] = [
        "dist[source] ← 0;  dist[others] ← ∞",                      # 0
        "repeat n - 1 times:",                                      # 1
        "    for each edge (u, v, w):",                             # 2
        "        if dist[u] + w < dist[v]:",                        # 3
        "            dist[v] ← dist[u] + w;  prev[v] ← u",          # 4
        "    if nothing changed: stop early",                       # 5
        "for each edge (u, v, w):",                                 # 6
        "    if dist[u] + w < dist[v]: negative cycle",             # 7
        "return dist, prev",                                        # 8
    ]
    COMPLETE_LINE = 8

    def initial_cursor(self, sequence=(), target=None, graph: Optional[Graph] = None, source: int = 0) -> BellmanFordCursor:
        _require_graph(graph, source, allow_negative=True, name="Bellman-Ford")
        return BellmanFordCursor(
            sequence=(None,) * graph.size, graph=graph, source=source,
            previous=(None,) * graph.size,
        )

    def advance(self, c: BellmanFordCursor) -> Advance:
        g, dist = c.graph, list(c.sequence)
        tree = _tree(c.previous)

        if c.phase == "start":
            dist[c.source] = 0
            return self._emit(
                c, StepKind.SET_POINTER, (c.source,), sequence=dist, line=0, pointers={"current": c.source},
                explanation=f"Initialize distances. Distance to start node {g.labels[c.source]} is 0, "
                            f"all others are infinity.",
                phase="round",
            )

        if c.phase == "round":
            if c.iteration >= g.size:
                return self.advance(replace(c, phase="check"))
            return self._emit(
                c, StepKind.SET_POINTER, line=1, pointers={"iteration": c.iteration}, edges=tree,
                explanation=f"Iteration {c.iteration}: relax all edges.",
                phase="edge", edge_index=0, relaxed=False,
            )

        if c.phase == "edge":
            index = c.edge_index
            while index < len(g.edges) and dist[g.edges[index].source] is None:
                index += 1
            if index >= len(g.edges):
                if not c.relaxed:
                    return self._emit(
                        c, StepKind.SET_POINTER, line=5, pointers={"iteration": c.iteration}, edges=tree,
                        explanation=f"No edges were relaxed in iteration {c.iteration}. "
                                    f"Algorithm can terminate early.",
                        phase="done",
                    )
                return self.advance(replace(c, phase="round", iteration=c.iteration + 1))
            e = g.edges[index]
            return self._emit(
                c, StepKind.EXAMINE, (e.source, e.target), line=2,
                pointers={"iteration": c.iteration, "u": e.source, "v": e.target}, edges=tree,
                explanation=f"Considering edge from {g.labels[e.source]} to {g.labels[e.target]} "
                            f"with weight {e.weight}.",
                phase="decide", edge_index=index,
            )

        if c.phase == "decide":
            e = g.edges[c.edge_index]
            candidate = dist[e.source] + e.weight
            pointers = {"iteration": c.iteration, "u": e.source, "v": e.target}
            if dist[e.target] is None or candidate < dist[e.target]:
                dist[e.target] = candidate
                previous = c.previous[:e.target] + (e.source,) + c.previous[e.target + 1:]
                return self._emit(
                    c, StepKind.RELAX, (e.source, e.target), sequence=dist, line=4, pointers=pointers,
                    edges=_tree(previous),
                    explanation=f"Relaxed edge from {g.labels[e.source]} to {g.labels[e.target]}. "
                                f"New distance to {g.labels[e.target]} is {candidate}.",
                    phase="edge", edge_index=c.edge_index + 1, relaxed=True, previous=previous,
                )
            return self._emit(
                c, StepKind.REJECT, (e.source, e.target), line=3, pointers=pointers, edges=tree,
                explanation=f"No improvement for edge from {g.labels[e.source]} to {g.labels[e.target]} "
                            f"({candidate} ≥ {dist[e.target]}).",
                phase="edge", edge_index=c.edge_index + 1,
            )

        if c.phase == "check":
            for e in g.edges:
                if dist[e.source] is not None and dist[e.source] + e.weight < dist[e.target]:
                    return self._finish(
                        c, StepKind.NEGATIVE_CYCLE, (e.source, e.target), line=7, edges=tree,
                        explanation=f"A negative cycle was detected: edge {g.describe(e)} can still "
                                    f"lower a distance after {g.size - 1} rounds.",
                    )

        reached = [v for v in range(g.size) if dist[v] is not None]
        return self._finish(
            c, StepKind.COMPLETE, marks=reached, line=8, edges=tree,
            explanation="Bellman-Ford algorithm completed. All shortest paths from the source have been found.",
        )


# ---------------------------------------------------------------------------
# Floyd-Warshall
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FloydWarshallCursor(Cursor):
    """`k` is the intermediate node; (i, j) the next pair to try."""

    graph: Optional[Graph] = None
    phase: str             = "start"
    k:     int             = 0
    i:     int             = 0
    j:     int             = 0


def initial_matrix(graph: Graph) -> List[Optional[float]]:
    n = graph.size
    matrix: List[Optional[float]] = [None] * (n * n)
    for v in range(n):
        matrix[v * n + v] = 0
    for e in graph.edges:
        matrix[e.source * n + e.target] = e.weight
        matrix[e.target * n + e.source] = e.weight
    return matrix


class FloydWarshall(StepProducer):
    cursor_type = FloydWarshallCursor
    COMPLETES_ON_FULL_MARKS = False

    PSEUDOCODE: List[str] = [
        "dist[i][i] ← 0;  dist[u][v] ← w(u, v);  others ← ∞",       # 0
        "for k in nodes:",                                          # 1
        "    for i in nodes, j in nodes:",                          # 2
        "        if dist[i][k] + dist[k][j] < dist[i][j]:",         # 3
        "            dist[i][j] ← dist[i][k] + dist[k][j]",         # 4
        "return dist",                                              # 5
    ]
    COMPLETE_LINE = 5

    def initial_cursor(self, sequence=(), target=None, graph: Optional[Graph] = None, source: int = 0) -> FloydWarshallCursor:
        _require_graph(graph, source, allow_negative=False, name="Floyd-Warshall")
        return FloydWarshallCursor(sequence=(None,) * (graph.size ** 2), graph=graph)

    @staticmethod
    def _next_pair(n: int, k: int, i: int, j: int) -> Optional[Tuple[int, int]]:
        """First (i, j) at or after the given one with i, j and k all different."""
        while i < n:
            while j < n:
                if len({i, j, k}) == 3:
                    return i, j
                j += 1
            i, j = i + 1, 0
        return None

    def advance(self, c: FloydWarshallCursor) -> Advance:
        g = c.graph
        n = g.size

        if c.phase == "start":
            return self._emit(
                c, StepKind.SET_POINTER, sequence=initial_matrix(g), line=0,
                explanation="Initialize distance matrix. Distance from a vertex to itself is 0, "
                            "and between connected vertices is the edge weight.",
                phase="pivot", k=0,
            )

        if c.phase == "pivot":
            if c.k >= n:
                return self._finish(
                    c, StepKind.COMPLETE, marks=range(n), line=5,
                    explanation="Floyd-Warshall algorithm completed. All shortest paths between "
                                "all pairs of vertices have been found.",
                )
            return self._emit(
                c, StepKind.SELECT, (c.k,), marks=range(c.k), line=1, pointers={"k": c.k},
                explanation=f"Considering {g.labels[c.k]} as an intermediate vertex.",
                phase="pair", i=0, j=0,
            )

        pair = self._next_pair(n, c.k, c.i, c.j)
        if pair is None:
            return self.advance(replace(c, phase="pivot", k=c.k + 1))
        i, j = pair
        m = list(c.sequence)
        ik, kj, ij = m[i * n + c.k], m[c.k * n + j], m[i * n + j]
        names = (g.labels[i], g.labels[j], g.labels[c.k])
        pointers = {"k": c.k, "i": i, "j": j}
        if ik is not None and kj is not None and (ij is None or ik + kj < ij):
            m[i * n + j] = ik + kj
            return self._emit(
                c, StepKind.RELAX, (i, j), sequence=m, line=4, pointers=pointers,
                explanation="Found shorter path from {} to {} through {}. ".format(*names)
                            + f"New distance: {ik + kj}",
                i=i, j=j + 1,
            )
        return self._emit(
            c, StepKind.REJECT, (i, j), line=3, pointers=pointers,
            explanation="No improvement for path from {} to {} through {} ".format(*names)
                        + f"({_fmt(ik)} + {_fmt(kj)} vs {_fmt(ij)}).",
            i=i, j=j + 1,
        )
