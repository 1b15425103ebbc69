import pytest

from algorithms import REGISTRY, AlgorithmKind, StepKind, advance, get_algorithm, iter_steps
from errors import ValidationError
from graph import SAMPLE_CAPACITY, parse_graph, parse_items, sample_graph, sample_items

GRAPH_KINDS = [
    AlgorithmKind.DIJKSTRA,
    AlgorithmKind.BELLMAN_FORD,
    AlgorithmKind.FLOYD_WARSHALL,
    AlgorithmKind.PRIM_MST,
]


def run(kind, graph=None, source=0):
    return list(iter_steps(kind, (), graph=graph or sample_graph(), source=source))


def knapsack(items=None, capacity=SAMPLE_CAPACITY):
    return list(iter_steps(AlgorithmKind.FRACTIONAL_KNAPSACK, (), items=items or sample_items(), capacity=capacity))


# ---------------------------------------------------------------------------
# Shared behaviour
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("kind", GRAPH_KINDS)
def test_runs_end_with_one_final_step(kind):
    steps = run(kind)
    assert [s.is_final for s in steps].count(True) == 1
    assert steps[-1].is_final
    assert [s.step_number for s in steps] == list(range(len(steps)))


@pytest.mark.parametrize("kind", GRAPH_KINDS)
def test_marks_only_grow(kind):
    steps = run(kind)
    for before, after in zip(steps, steps[1:]):
        assert before.sorted_marks <= after.sorted_marks


@pytest.mark.parametrize("kind", GRAPH_KINDS)
def test_every_step_points_at_real_pseudocode(kind):
    lines = REGISTRY[kind].pseudocode
    for step in run(kind):
        assert 0 <= step.pseudocode_line < len(lines)
        assert step.explanation


@pytest.mark.parametrize("kind", GRAPH_KINDS + [AlgorithmKind.FRACTIONAL_KNAPSACK])
def test_resuming_from_a_saved_cursor_is_pure(kind):
    info = REGISTRY[kind]
    if info.family == "greedy":
        cursor = info.producer.initial_cursor((), items=sample_items(), capacity=SAMPLE_CAPACITY)
    else:
        cursor = info.producer.initial_cursor((), graph=sample_graph(), source=0)
    for _ in range(5):
        _, cursor = advance(kind, cursor)
    assert advance(kind, cursor) == advance(kind, cursor)


@pytest.mark.parametrize("kind", GRAPH_KINDS)
def test_a_graph_is_required(kind):
    with pytest.raises(ValidationError, match="Load a graph first"):
        list(iter_steps(kind, ()))


@pytest.mark.parametrize("kind", [AlgorithmKind.DIJKSTRA, AlgorithmKind.BELLMAN_FORD, AlgorithmKind.PRIM_MST])
def test_unknown_source(kind):
    with pytest.raises(ValidationError, match="Unknown source node: 9"):
        run(kind, source=9)


def test_graph_cards():
    assert get_algorithm("dijkstra").family == "graph"
    assert get_algorithm("dijkstra").has_source
    assert not get_algorithm("floyd-warshall").has_source
    assert get_algorithm("fractional-knapsack").family == "greedy"


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
def test_dijkstra_distances_on_the_sample_graph():
    last = run(AlgorithmKind.DIJKSTRA)[-1]
    assert last.kind == StepKind.COMPLETE
    assert list(last.snapshot) == [0, 3, 2, 8, 10, 13]
    assert last.sorted_marks == frozenset(range(6))
    assert last.edges == frozenset({(1, 2), (0, 2), (1, 3), (3, 4), (4, 5)})


def test_dijkstra_selects_nodes_in_distance_order():
    steps = run(AlgorithmKind.DIJKSTRA)
    selected = [s.indices[0] for s in steps if s.kind == StepKind.SELECT]
    assert selected == [0, 2, 1, 3, 4, 5]


def test_dijkstra_examines_before_deciding():
    steps = run(AlgorithmKind.DIJKSTRA)
    for step, following in zip(steps, steps[1:]):
        if following.kind in (StepKind.RELAX, StepKind.REJECT):
            assert step.kind == StepKind.EXAMINE
            assert step.indices == following.indices


def test_dijkstra_starts_with_only_the_source_at_zero():
    first = run(AlgorithmKind.DIJKSTRA, source=3)[0]
    assert first.kind == StepKind.SET_POINTER
    assert first.snapshot == (None, None, None, 0, None, None)


def test_dijkstra_names_unreachable_nodes():
    last = run(AlgorithmKind.DIJKSTRA, parse_graph("A-B:1, C"))[-1]
    assert last.snapshot == (0, 1, None)
    assert "Unreachable: C" in last.explanation


def test_dijkstra_refuses_negative_weights():
    with pytest.raises(ValidationError, match="try Bellman-Ford"):
        run(AlgorithmKind.DIJKSTRA, parse_graph("A-B:-1, B-C:2"))


# ---------------------------------------------------------------------------
# Bellman-Ford
# ---------------------------------------------------------------------------
def test_bellman_ford_reads_edges_as_directed():
    last = run(AlgorithmKind.BELLMAN_FORD)[-1]
    assert last.kind == StepKind.COMPLETE
    assert list(last.snapshot) == [0, 4, 2, 9, 11, 14]


def test_bellman_ford_stops_early_when_nothing_relaxes():
    steps = run(AlgorithmKind.BELLMAN_FORD)
    rounds = [s for s in steps if "iteration" in s.pointers and s.kind == StepKind.SET_POINTER]
    assert "terminate early" in rounds[-1].explanation
    assert rounds[-1].pointers["iteration"] == 2


def test_bellman_ford_handles_negative_weights():
    last = run(AlgorithmKind.BELLMAN_FORD, parse_graph("A-B:4, A-C:5, C-B:-3"))[-1]
    assert last.kind == StepKind.COMPLETE
    assert last.snapshot == (0, 2, 5)


def test_bellman_ford_detects_a_negative_cycle():
    last = run(AlgorithmKind.BELLMAN_FORD, parse_graph("A-B:1, B-C:-3, C-A:1"))[-1]
    assert last.kind == StepKind.NEGATIVE_CYCLE
    assert last.is_final
    assert "negative cycle" in last.explanation


# ---------------------------------------------------------------------------
# Floyd-Warshall
# ---------------------------------------------------------------------------
def test_floyd_warshall_matrix():
    steps = run(AlgorithmKind.FLOYD_WARSHALL, parse_graph("A-B:4, B-C:1, A-C:7"))
    assert steps[0].snapshot == (0, 4, 7, 4, 0, 1, 7, 1, 0)
    assert steps[-1].snapshot == (0, 4, 5, 4, 0, 1, 5, 1, 0)
    relaxed = [s for s in steps if s.kind == StepKind.RELAX]
    assert [s.indices for s in relaxed] == [(0, 2), (2, 0)]
    assert all(s.pointers["k"] == 1 for s in relaxed)


def test_floyd_warshall_never_tries_a_pair_through_itself():
    for step in run(AlgorithmKind.FLOYD_WARSHALL):
        if step.kind in (StepKind.RELAX, StepKind.REJECT):
            i, j = step.indices
            assert len({i, j, step.pointers["k"]}) == 3


def test_floyd_warshall_matches_dijkstra_from_every_source():
    g = sample_graph()
    matrix = run(AlgorithmKind.FLOYD_WARSHALL, g)[-1].snapshot
    for source in range(g.size):
        row = matrix[source * g.size:(source + 1) * g.size]
        assert row == run(AlgorithmKind.DIJKSTRA, g, source)[-1].snapshot


# ---------------------------------------------------------------------------
# Prim
# ---------------------------------------------------------------------------
def test_prim_builds_the_minimum_spanning_tree():
    steps = run(AlgorithmKind.PRIM_MST)
    last = steps[-1]
    assert last.kind == StepKind.COMPLETE
    assert last.totals["cost"] == 13
    assert last.edges == frozenset({(1, 2), (0, 2), (3, 4), (4, 5), (1, 3)})
    assert list(last.snapshot) == [0, 1, 2, 5, 2, 3]
    added = [s.indices for s in steps if s.kind == StepKind.ADD_EDGE]
    assert added == [(0, 2), (1, 2), (1, 3), (3, 4), (4, 5)]


def test_prim_reports_a_disconnected_graph():
    last = run(AlgorithmKind.PRIM_MST, parse_graph("A-B:1, C-D:1"))[-1]
    assert last.kind == StepKind.EXHAUSTED
    assert last.totals["cost"] == 1
    assert "disconnected" in last.explanation


# ---------------------------------------------------------------------------
# Fractional knapsack
# ---------------------------------------------------------------------------
def test_knapsack_packs_best_ratio_first():
    steps = knapsack()
    last = steps[-1]
    assert last.kind == StepKind.COMPLETE
    assert last.totals["value"] == 240
    assert last.totals["remaining"] == 0
    assert last.snapshot[:2] == (1.0, 1.0)
    assert last.snapshot[2] == pytest.approx(2 / 3)
    assert [s.kind for s in steps] == [StepKind.SET_POINTER] + [StepKind.SELECT, StepKind.TAKE] * 3 + [StepKind.COMPLETE]


def test_knapsack_skips_items_once_full():
    steps = knapsack(parse_items("A:60/10, B:100/20"), capacity=5)
    assert [s.kind for s in steps if s.kind in (StepKind.TAKE, StepKind.SKIP)] == [StepKind.TAKE, StepKind.SKIP]
    assert steps[-1].totals["value"] == 30
    assert steps[-1].snapshot == (0.5, 0.0)


def test_knapsack_keeps_input_order_on_equal_ratios():
    steps = knapsack(parse_items("A:10/5, B:20/10, C:4/2"), capacity=100)
    picked = [s.indices[0] for s in steps if s.kind == StepKind.SELECT]
    assert picked == [0, 1, 2]


def test_knapsack_needs_items_and_capacity():
    with pytest.raises(ValidationError, match="Add at least one item"):
        list(iter_steps(AlgorithmKind.FRACTIONAL_KNAPSACK, (), items=(), capacity=5))
    with pytest.raises(ValidationError, match="Capacity must be positive"):
        knapsack(capacity=0)
