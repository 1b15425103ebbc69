import pytest

from errors import ValidationError
from graph import (
    Edge,
    Graph,
    Item,
    items_text,
    parse_capacity,
    parse_graph,
    parse_items,
    random_graph,
    random_items,
    sample_graph,
    sample_items,
)


def connected(graph):
    seen, stack = {0}, [0]
    while stack:
        for v, _ in graph.neighbours(stack.pop()):
            if v not in seen:
                seen.add(v)
                stack.append(v)
    return len(seen) == graph.size


# ---------------------------------------------------------------------------
# Graph text
# ---------------------------------------------------------------------------
def test_parse_numbers_nodes_in_order_of_appearance():
    g = parse_graph("B-A:4, A-C:2.5\nD")
    assert g.labels == ("B", "A", "C", "D")
    assert g.edges == (Edge(0, 1, 4), Edge(1, 2, 2.5))
    assert g.size == 4
    assert g.neighbours(1) == [(0, 4), (2, 2.5)]


def test_parse_accepts_negative_weights():
    g = parse_graph("A-B:-3, B-C:1")
    assert g.has_negative_edges
    assert not sample_graph().has_negative_edges


@pytest.mark.parametrize("text, token", [
    ("A-B:4, A-B", "A-B"),
    ("A-B:x", "A-B:x"),
    ("A-B:4, too-long:1", "too-long:1"),
])
def test_parse_reports_the_bad_token(text, token):
    with pytest.raises(ValidationError) as info:
        parse_graph(text)
    assert info.value.token == token
    assert "expected A-B:4" in str(info.value)


def test_parse_rejects_self_loops_and_duplicate_edges():
    with pytest.raises(ValidationError, match="Self-loop on A"):
        parse_graph("A-A:1, A-B:2")
    with pytest.raises(ValidationError, match="Duplicate edge B-A"):
        parse_graph("A-B:1, B-A:2")


def test_parse_checks_the_node_count():
    with pytest.raises(ValidationError, match="Please enter at least one edge"):
        parse_graph("  ")
    with pytest.raises(ValidationError, match="between 2 and 10 nodes, got 1"):
        parse_graph("A")
    many = ", ".join(f"N{i}-N{i + 1}:1" for i in range(10))
    with pytest.raises(ValidationError, match="got 11"):
        parse_graph(many)


def test_unknown_label():
    with pytest.raises(ValidationError, match="Unknown node: 'Z'"):
        sample_graph().index("Z")
    assert sample_graph().index("C") == 2


def test_text_and_dict_round_trip():
    g = parse_graph("A-B:4, B-C:1, D")
    assert g.to_text() == "A-B:4, B-C:1, D"
    assert parse_graph(g.to_text()) == g
    assert Graph.from_dict(g.to_dict()) == g
    assert g.to_dict()["edges"][0] == {"source": "A", "target": "B", "weight": 4}


def test_edge_key_ignores_direction():
    assert Edge(3, 1, 5).key == (1, 3)
    assert Edge(3, 1, 5).other(1) == 3


# ---------------------------------------------------------------------------
# Random graphs
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("size", [2, 5, 10])
def test_random_graph_is_connected(size):
    g = random_graph(size, seed=size)
    assert g.size == size
    assert len(g.edges) >= size - 1
    assert connected(g)
    assert all(1 <= e.weight <= 15 for e in g.edges)


def test_random_graph_is_reproducible():
    assert random_graph(6, seed=3) == random_graph(6, seed=3)


def test_random_graph_bounds():
    with pytest.raises(ValidationError, match="between 2 and 10"):
        random_graph(11)


# ---------------------------------------------------------------------------
# Knapsack items
# ---------------------------------------------------------------------------
def test_parse_items():
    items = parse_items("A:60/10; B:100/20")
    assert items == (Item("A", 60, 10), Item("B", 100, 20))
    assert items[0].ratio == 6
    assert items[0].to_dict() == {"label": "A", "value": 60, "weight": 10, "ratio": 6.0}
    assert items_text(items) == "A:60/10, B:100/20"


@pytest.mark.parametrize("text, message", [
    ("A:60", "Invalid item: 'A:60'"),
    ("A:60/0", "must be positive"),
    ("A:60/10, A:5/1", "Duplicate item A"),
    ("", "got 0"),
])
def test_bad_items(text, message):
    with pytest.raises(ValidationError, match=message):
        parse_items(text)


def test_parse_capacity():
    assert parse_capacity("50") == 50
    assert parse_capacity(12.5) == 12.5
    with pytest.raises(ValidationError, match="Invalid capacity: 'lots'"):
        parse_capacity("lots")
    with pytest.raises(ValidationError, match="Capacity must be positive"):
        parse_capacity("0")


def test_random_items():
    items = random_items(4, seed=1)
    assert len(items) == 4
    assert [i.label for i in items] == ["A", "B", "C", "D"]
    assert items == random_items(4, seed=1)
    assert sample_items()[0] == Item("A", 60, 10)
