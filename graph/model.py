"""
model.py — Weighted Graph & Knapsack Items
===========================================
Inputs for the graph and greedy algorithms.

Graph text format (one token per comma or line):

    A-B:4, A-C:2, B-D:5      weighted edge between labels
    G                         a node with no edges

Nodes are numbered in order of first appearance; every algorithm works
on those numbers and the labels are only for display.  Edges are stored
as entered; undirected algorithms read them both ways, Bellman-Ford
reads them source → target.

Knapsack text format:   A:60/10, B:100/20   (label:value/weight)
"""

import random
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from dataset import SizeBounds
from errors import ValidationError


Number = Union[int, float]

GRAPH_BOUNDS = SizeBounds(2, 10, "graph")
ITEM_BOUNDS  = SizeBounds(1, 10, "knapsack")

_LABEL  = r"[A-Za-z0-9]{1,3}"
_NUMBER = r"[+-]?\d+(?:\.\d+)?"
_EDGE   = re.compile(rf"^({_LABEL})\s*-\s*({_LABEL})\s*:\s*({_NUMBER})$")
_NODE   = re.compile(rf"^({_LABEL})$")
_ITEM   = re.compile(rf"^({_LABEL})\s*:\s*({_NUMBER})\s*/\s*({_NUMBER})$")
_SPLIT  = re.compile(r"[,\n;]+")


def _number(text: str) -> Number:
    return float(text) if "." in text else int(text)


def _tokens(text: str) -> List[str]:
    return [t.strip() for t in _SPLIT.split(text or "") if t.strip()]


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Edge:
    source: int
    target: int
    weight: Number

    @property
    def key(self) -> Tuple[int, int]:
        """Orientation-free key, used to highlight tree edges."""
        return (min(self.source, self.target), max(self.source, self.target))

    def other(self, node: int) -> int:
        return self.target if node == self.source else self.source


@dataclass(frozen=True)
class Graph:
    labels: Tuple[str, ...]
    edges:  Tuple[Edge, ...]

    @property
    def size(self) -> int:
        return len(self.labels)

    def index(self, label: str) -> int:
        try:
            return self.labels.index(label)
        except ValueError:
            raise ValidationError(f"Unknown node: '{label}'", token=label)

    def incident(self, node: int) -> List[Edge]:
        """Edges touching `node`, in input order."""
        return [e for e in self.edges if node in (e.source, e.target)]

    def neighbours(self, node: int) -> List[Tuple[int, Number]]:
        return [(e.other(node), e.weight) for e in self.incident(node)]

    @property
    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def describe(self, edge: Edge) -> str:
        return f"{self.labels[edge.source]}-{self.labels[edge.target]}"

    def to_text(self) -> str:
        joined = {n for e in self.edges for n in (e.source, e.target)}
        parts = [f"{self.describe(e)}:{e.weight}" for e in self.edges]
        parts += [label for i, label in enumerate(self.labels) if i not in joined]
        return ", ".join(parts)

    def to_dict(self) -> dict:
        return {
            "nodes": list(self.labels),
            "edges": [
                {"source": self.labels[e.source], "target": self.labels[e.target], "weight": e.weight}
                for e in self.edges
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        labels = list(data.get("nodes", []))
        edges = []
        for raw in data.get("edges", []):
            for end in (raw["source"], raw["target"]):
                if end not in labels:
                    labels.append(end)
            edges.append(Edge(labels.index(raw["source"]), labels.index(raw["target"]), raw["weight"]))
        return _checked(labels, edges)


def _checked(labels: List[str], edges: List[Edge]) -> Graph:
    if not GRAPH_BOUNDS.contains(len(labels)):
        raise ValidationError(
            f"A graph needs between {GRAPH_BOUNDS.minimum} and {GRAPH_BOUNDS.maximum} nodes, got {len(labels)}"
        )
    seen = set()
    for edge in edges:
        if edge.source == edge.target:
            raise ValidationError(f"Self-loop on {labels[edge.source]}", token=labels[edge.source])
        if edge.key in seen:
            name = f"{labels[edge.source]}-{labels[edge.target]}"
            raise ValidationError(f"Duplicate edge {name}", token=name)
        seen.add(edge.key)
    return Graph(tuple(labels), tuple(edges))


def parse_graph(text: str) -> Graph:
    """'A-B:4, B-C:1' → Graph.  Raises ValidationError naming the bad token."""
    labels: List[str] = []
    edges: List[Edge] = []

    def node(label: str) -> int:
        if label not in labels:
            labels.append(label)
        return labels.index(label)

    for token in _tokens(text):
        m = _EDGE.match(token)
        if m:
            edges.append(Edge(node(m.group(1)), node(m.group(2)), _number(m.group(3))))
            continue
        m = _NODE.match(token)
        if m:
            node(m.group(1))
            continue
        raise ValidationError(f"Invalid edge: '{token}' (expected A-B:4)", token=token)

    if not labels:
        raise ValidationError("Please enter at least one edge")
    return _checked(labels, edges)


def sample_graph() -> Graph:
    """Six-node weighted graph used as the default."""
    return parse_graph("A-B:4, A-C:2, B-C:1, B-D:5, C-D:8, C-E:10, D-E:2, D-F:6, E-F:3")


def random_graph(size: int, seed: Optional[int] = None, low: int = 1, high: int = 15,
                 density: float = 0.3) -> Graph:
    """Connected random graph: a random spanning tree plus extra edges with probability `density`."""
    if not GRAPH_BOUNDS.contains(size):
        raise ValidationError(
            f"Graph size must be between {GRAPH_BOUNDS.minimum} and {GRAPH_BOUNDS.maximum}",
            token=str(size),
        )
    rng = random.Random(seed)
    labels = [chr(ord("A") + i) for i in range(size)]
    edges: Dict[Tuple[int, int], Edge] = {}
    for node in range(1, size):
        parent = rng.randrange(node)
        edges[(parent, node)] = Edge(parent, node, rng.randint(low, high))
    for a in range(size):
        for b in range(a + 1, size):
            if (a, b) not in edges and rng.random() < density:
                edges[(a, b)] = Edge(a, b, rng.randint(low, high))
    ordered = sorted(edges.values(), key=lambda e: e.key)
    return Graph(tuple(labels), tuple(ordered))


# ---------------------------------------------------------------------------
# Knapsack items
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Item:
    label:  str
    value:  Number
    weight: Number

    @property
    def ratio(self) -> float:
        return self.value / self.weight

    def to_dict(self) -> dict:
        return {"label": self.label, "value": self.value, "weight": self.weight, "ratio": round(self.ratio, 3)}


def parse_items(text: str) -> Tuple[Item, ...]:
    """'A:60/10, B:100/20' → items.  Values and weights must be positive."""
    items: List[Item] = []
    for token in _tokens(text):
        m = _ITEM.match(token)
        if not m:
            raise ValidationError(f"Invalid item: '{token}' (expected A:60/10)", token=token)
        label, value, weight = m.group(1), _number(m.group(2)), _number(m.group(3))
        if value <= 0 or weight <= 0:
            raise ValidationError(f"Value and weight must be positive in '{token}'", token=token)
        if any(item.label == label for item in items):
            raise ValidationError(f"Duplicate item {label}", token=label)
        items.append(Item(label, value, weight))
    if not ITEM_BOUNDS.contains(len(items)):
        raise ValidationError(
            f"Enter between {ITEM_BOUNDS.minimum} and {ITEM_BOUNDS.maximum} items, got {len(items)}"
        )
    return tuple(items)


def parse_capacity(raw) -> Number:
    try:
        capacity = _number(str(raw).strip())
    except ValueError:
        raise ValidationError(f"Invalid capacity: '{raw}'", token=str(raw))
    if capacity <= 0:
        raise ValidationError("Capacity must be positive", token=str(raw))
    return capacity


def sample_items() -> Tuple[Item, ...]:
    return (Item("A", 60, 10), Item("B", 100, 20), Item("C", 120, 30))


SAMPLE_CAPACITY = 50


def random_items(count: int, seed: Optional[int] = None) -> Tuple[Item, ...]:
    if not ITEM_BOUNDS.contains(count):
        raise ValidationError(
            f"Item count must be between {ITEM_BOUNDS.minimum} and {ITEM_BOUNDS.maximum}", token=str(count)
        )
    rng = random.Random(seed)
    return tuple(
        Item(chr(ord("A") + i), rng.randint(10, 150), rng.randint(5, 40))
        for i in range(count)
    )


def items_text(items: Iterable[Item]) -> str:
    return ", ".join(f"{i.label}:{i.value}/{i.weight}" for i in items)
