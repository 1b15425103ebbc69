"""
graph/
------
Inputs for the graph and greedy algorithms.

    from graph import Graph, Edge, parse_graph, sample_graph, random_graph
    from graph import Item, parse_items, sample_items
"""

from graph.model import (
    Edge,
    Graph,
    GRAPH_BOUNDS,
    ITEM_BOUNDS,
    Item,
    SAMPLE_CAPACITY,
    items_text,
    parse_capacity,
    parse_graph,
    parse_items,
    random_graph,
    random_items,
    sample_graph,
    sample_items,
)

__all__ = [
    "Edge",
    "Graph",
    "GRAPH_BOUNDS",
    "ITEM_BOUNDS",
    "Item",
    "SAMPLE_CAPACITY",
    "items_text",
    "parse_capacity",
    "parse_graph",
    "parse_items",
    "random_graph",
    "random_items",
    "sample_graph",
    "sample_items",
]
