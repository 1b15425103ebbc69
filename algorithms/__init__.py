"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, AlgorithmKind, get_algorithm

REGISTRY is a dict:
    {
        AlgorithmKind.BUBBLE_SORT: AlgoInfo(kind, label, producer, pseudocode, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and UI both consume it
so adding a new algorithm is literally: write the step producer, add one
entry here.  That's the plugin system.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Union

from algorithms.base          import Advance, StepProducer
from algorithms.step          import Cursor, Step, StepKind
from algorithms.bubble        import BubbleSort
from algorithms.selection     import SelectionSort
from algorithms.insertion     import InsertionSort
from algorithms.merge         import MergeSort
from algorithms.quick         import QuickSort
from algorithms.linear_search import LinearSearch
from algorithms.binary_search import BinarySearch
from algorithms.shortest_paths import BellmanFord, Dijkstra, FloydWarshall
from algorithms.prim          import PrimMST
from algorithms.knapsack      import FractionalKnapsack
from algorithms.listings      import LANGUAGES, LISTINGS
from dataset                  import SizeBounds, SORT_BOUNDS, SEARCH_BOUNDS
from graph                    import GRAPH_BOUNDS, ITEM_BOUNDS


class AlgorithmKind(Enum):
    BUBBLE_SORT    = "bubble-sort"
    SELECTION_SORT = "selection-sort"
    INSERTION_SORT = "insertion-sort"
    MERGE_SORT     = "merge-sort"
    QUICK_SORT     = "quick-sort"
    LINEAR_SEARCH  = "linear-search"
    BINARY_SEARCH  = "binary-search"
    DIJKSTRA       = "dijkstra"
    BELLMAN_FORD   = "bellman-ford"
    FLOYD_WARSHALL = "floyd-warshall"
    PRIM_MST       = "prim-mst"
    FRACTIONAL_KNAPSACK = "fractional-knapsack"


# ---------------------------------------------------------------------------
# Complexity card
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Complexity:
    best:        str
    average:     str
    worst:       str
    space:       str
    explanation: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "best": self.best, "average": self.average, "worst": self.worst,
            "space": self.space, "explanation": self.explanation,
        }


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    kind:        AlgorithmKind
    label:       str                           # human label, e.g. "Bubble Sort"
    producer:    StepProducer                  # stateless, shared
    pseudocode:  List[str]                     # lines for the side-panel
    complexity:  Complexity
    tags:        List[str]  = field(default_factory=list)
    is_search:   bool       = False            # needs a target
    stable:      bool       = False
    bounds:      SizeBounds = SORT_BOUNDS
    description: str        = ""               # one-liner for the UI card
    family:      str        = "sort"           # sort | search | graph | greedy
    has_source:  bool       = False            # graph run starts from a chosen node

    @property
    def key(self) -> str:
        return self.kind.value

    @property
    def needs_target(self) -> bool:
        return self.is_search

    def listing(self, language: str) -> str:
        return LISTINGS[self.key][language]

    def to_dict(self) -> dict:
        return {
            "key":         self.key,
            "label":       self.label,
            "tags":        list(self.tags),
            "is_search":   self.is_search,
            "family":      self.family,
            "has_source":  self.has_source,
            "stable":      self.stable,
            "min_size":    self.bounds.minimum,
            "max_size":    self.bounds.maximum,
            "complexity":  self.complexity.to_dict(),
            "pseudocode":  list(self.pseudocode),
            "languages":   list(LANGUAGES),
            "description": self.description,
        }


def _info(kind: AlgorithmKind, label: str, producer: StepProducer, **kwargs) -> AlgoInfo:
    return AlgoInfo(kind=kind, label=label, producer=producer, pseudocode=producer.PSEUDOCODE, **kwargs)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[AlgorithmKind, AlgoInfo] = {

    AlgorithmKind.BUBBLE_SORT: _info(
        AlgorithmKind.BUBBLE_SORT, "Bubble Sort", BubbleSort(),
        tags=["sort", "comparison", "in-place"], stable=True,
        complexity=Complexity(
            "O(n)", "O(n²)", "O(n²)", "O(1)",
            "Best case O(n) when the array is already sorted (one pass, no swaps). "
            "Average and worst case O(n²) from the nested passes.",
        ),
        description="Repeatedly swaps adjacent out-of-order pairs; the largest value bubbles to the end.",
    ),

    AlgorithmKind.SELECTION_SORT: _info(
        AlgorithmKind.SELECTION_SORT, "Selection Sort", SelectionSort(),
        tags=["sort", "comparison", "in-place"],
        complexity=Complexity(
            "O(n²)", "O(n²)", "O(n²)", "O(1)",
            "Always scans the whole unsorted part for the minimum, so even a "
            "sorted array costs n(n-1)/2 comparisons.",
        ),
        description="Finds the minimum of the unsorted part and swaps it to the front.",
    ),

    AlgorithmKind.INSERTION_SORT: _info(
        AlgorithmKind.INSERTION_SORT, "Insertion Sort", InsertionSort(),
        tags=["sort", "comparison", "in-place", "adaptive"], stable=True,
        complexity=Complexity(
            "O(n)", "O(n²)", "O(n²)", "O(1)",
            "Best case O(n) when the array is already sorted. Worst case O(n²) "
            "when it is reversed and every key walks to the front.",
        ),
        description="Grows a sorted prefix by sliding each new key left into place.",
    ),

    AlgorithmKind.MERGE_SORT: _info(
        AlgorithmKind.MERGE_SORT, "Merge Sort", MergeSort(),
        tags=["sort", "comparison", "divide-and-conquer"], stable=True,
        complexity=Complexity(
            "O(n log n)", "O(n log n)", "O(n log n)", "O(n)",
            "Always splits in half (log n levels) and merges each level in O(n). "
            "Needs O(n) auxiliary space for merging.",
        ),
        description="Splits the array in halves, sorts each and merges the sorted runs.",
    ),

    AlgorithmKind.QUICK_SORT: _info(
        AlgorithmKind.QUICK_SORT, "Quick Sort", QuickSort(),
        tags=["sort", "comparison", "in-place", "divide-and-conquer"],
        complexity=Complexity(
            "O(n log n)", "O(n log n)", "O(n²)", "O(log n)",
            "Balanced partitions give O(n log n). A last-element pivot on sorted "
            "input degrades to O(n²). Space is the recursion depth.",
        ),
        description="Partitions around a pivot so smaller values go left, then sorts both sides.",
    ),

    AlgorithmKind.LINEAR_SEARCH: _info(
        AlgorithmKind.LINEAR_SEARCH, "Linear Search", LinearSearch(),
        tags=["search"], is_search=True, bounds=SEARCH_BOUNDS, family="search",
        complexity=Complexity(
            "O(1)", "O(n)", "O(n)", "O(1)",
            "Best case when the target is the first element; otherwise every "
            "element may need to be checked.",
        ),
        description="Checks each element in turn until the target is found.",
    ),

    AlgorithmKind.BINARY_SEARCH: _info(
        AlgorithmKind.BINARY_SEARCH, "Binary Search", BinarySearch(),
        tags=["search", "divide-and-conquer"], is_search=True, bounds=SEARCH_BOUNDS,
        family="search",
        complexity=Complexity(
            "O(1)", "O(log n)", "O(log n)", "O(1)",
            "Each comparison halves the remaining range. Requires a sorted array.",
        ),
        description="Halves a sorted array at every comparison until the target is found or ruled out.",
    ),

    AlgorithmKind.DIJKSTRA: _info(
        AlgorithmKind.DIJKSTRA, "Dijkstra's Algorithm", Dijkstra(),
        tags=["graph", "shortest-path", "greedy"], family="graph", has_source=True, bounds=GRAPH_BOUNDS,
        complexity=Complexity(
            "O(V²)", "O(V²)", "O(V²)", "O(V)",
            "Each of the V rounds scans every node for the closest unvisited one. "
            "A binary heap brings this to O((V + E) log V). Weights must be non-negative.",
        ),
        description="Repeatedly finalises the closest unvisited node and relaxes its edges.",
    ),

    AlgorithmKind.BELLMAN_FORD: _info(
        AlgorithmKind.BELLMAN_FORD, "Bellman-Ford Algorithm", BellmanFord(),
        tags=["graph", "shortest-path", "dynamic-programming"], family="graph", has_source=True,
        bounds=GRAPH_BOUNDS,
        complexity=Complexity(
            "O(E)", "O(V·E)", "O(V·E)", "O(V)",
            "Up to V - 1 rounds over every edge; stops early when a round changes nothing. "
            "Handles negative weights and reports negative cycles.",
        ),
        description="Relaxes every directed edge V - 1 times, then checks for a negative cycle.",
    ),

    AlgorithmKind.FLOYD_WARSHALL: _info(
        AlgorithmKind.FLOYD_WARSHALL, "Floyd-Warshall Algorithm", FloydWarshall(),
        tags=["graph", "shortest-path", "dynamic-programming"], family="graph", bounds=GRAPH_BOUNDS,
        complexity=Complexity(
            "O(V³)", "O(V³)", "O(V³)", "O(V²)",
            "Three nested loops over the nodes; the V×V matrix holds every pair's distance.",
        ),
        description="All-pairs shortest paths: lets each node in turn act as a stop-over.",
    ),

    AlgorithmKind.PRIM_MST: _info(
        AlgorithmKind.PRIM_MST, "Prim's MST", PrimMST(),
        tags=["graph", "spanning-tree", "greedy"], family="graph", has_source=True, bounds=GRAPH_BOUNDS,
        complexity=Complexity(
            "O(V·E)", "O(V·E)", "O(V·E)", "O(V)",
            "Each of the V - 1 rounds looks at every crossing edge. "
            "A priority queue brings this to O(E log V).",
        ),
        description="Grows a spanning tree by always adding the lightest edge leaving it.",
    ),

    AlgorithmKind.FRACTIONAL_KNAPSACK: _info(
        AlgorithmKind.FRACTIONAL_KNAPSACK, "Fractional Knapsack", FractionalKnapsack(),
        tags=["greedy"], family="greedy", bounds=ITEM_BOUNDS,
        complexity=Complexity(
            "O(n log n)", "O(n log n)", "O(n log n)", "O(n)",
            "Dominated by sorting the items by value-to-weight ratio; packing is one pass.",
        ),
        description="Packs items best value-per-weight first, splitting the last one to fill the bag.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[str, AlgorithmKind]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by kind or key string ("bubble-sort"), or None."""
    if isinstance(key, AlgorithmKind):
        return REGISTRY.get(key)
    try:
        return REGISTRY.get(AlgorithmKind(key))
    except ValueError:
        return None


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def advance(kind: AlgorithmKind, cursor: Cursor) -> Advance:
    """Next Step for `kind` from `cursor` (pure)."""
    return REGISTRY[kind].producer.advance(cursor)


def iter_steps(kind: AlgorithmKind, sequence: Iterable[int], target: Optional[int] = None, **options) -> Iterator[Step]:
    """Every Step of a full run of `kind` over `sequence` (graph and items go in `options`)."""
    return REGISTRY[kind].producer.steps(sequence, target, **options)


__all__ = [
    "AlgorithmKind",
    "AlgoInfo",
    "Complexity",
    "REGISTRY",
    "Step",
    "StepKind",
    "Cursor",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "advance",
    "iter_steps",
]
