from algorithms import AlgorithmKind, Step, StepKind, get_algorithm, iter_steps
from graph import SAMPLE_CAPACITY, parse_graph, sample_graph, sample_items
from structures import StructureState, get_structure, list_structures
from ui import (
    bar_role,
    complexity_panel,
    graph_panel,
    knapsack_panel,
    pseudocode_viewer,
    render_bars,
    render_graph,
    render_knapsack,
    render_structure,
    source_listing,
    structure_panel,
    structure_selector,
)
from ui.graph_canvas import edge_role, node_role
from ui.structure_canvas import cell_role


def test_empty_canvas_prompts_for_data():
    assert "Generate or import a dataset" in render_bars([])


def test_one_bar_per_value():
    svg = render_bars([5, 1, 4])
    assert svg.count('class="bar ') == 3
    assert "target" not in svg
    assert "target = 4" in render_bars([5, 1, 4], target=4)


def test_roles_follow_the_step():
    step = Step(
        kind=StepKind.COMPARE,
        indices=(0, 1),
        snapshot=(3, 1, 2, 9),
        sorted_marks=frozenset({3}),
        pointers={"pivot": 2},
    )
    assert [bar_role(i, step) for i in range(4)] == ["comparing", "comparing", "pivot", "sorted"]
    assert bar_role(0, None) == "default"


def test_everything_is_sorted_on_completion():
    last = list(iter_steps(AlgorithmKind.BUBBLE_SORT, [2, 1, 3]))[-1]
    assert {bar_role(i, last) for i in range(3)} == {"sorted"}


def test_binary_search_dims_bars_outside_the_range():
    step = Step(kind=StepKind.VISIT, indices=(3,), snapshot=(1, 2, 3, 4, 5), pointers={"low": 2, "high": 4, "mid": 3})
    assert [bar_role(i, step) for i in range(5)] == ["dimmed", "dimmed", "default", "visiting", "default"]


def test_merge_subrange_bracket():
    step = next(s for s in iter_steps(AlgorithmKind.MERGE_SORT, [4, 3, 2, 1]) if s.subrange)
    assert 'class="subrange"' in render_bars(step)


def test_pseudocode_highlights_the_current_line():
    html = pseudocode_viewer(["a < b", "swap"], current_line=0)
    assert 'class="code-line highlight" data-line="0"' in html
    assert "a &lt; b" in html


def test_complexity_card_shows_stability_for_sorts_only():
    assert "Stable" in complexity_panel(get_algorithm("merge-sort"))
    assert "Stable" not in complexity_panel(get_algorithm("binary-search"))


def test_source_listing_escapes_code():
    html = source_listing(get_algorithm("bubble-sort"), "java")
    assert "&gt;" in html


def test_insertion_prefix_is_shaded_until_marked():
    step = Step(kind=StepKind.COMPARE, indices=(2, 3), snapshot=(1, 4, 7, 2), pointers={"prefix": 2, "key": 3})
    assert [bar_role(i, step) for i in range(4)] == ["prefix", "prefix", "comparing", "comparing"]


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------
def test_stack_draws_one_box_per_element():
    svg = render_structure(StructureState(get_structure("stack"), [4, 9]))
    assert svg.count('class="cell ') == 2
    assert "Stack   2 / 10" in svg


def test_empty_structure_says_so():
    assert ">empty</text>" in render_structure(StructureState(get_structure("queue")))


def test_ring_draws_every_slot_and_its_pointers():
    state = StructureState(get_structure("circular-queue"), [1, 2], capacity=4)
    svg = render_structure(state)
    assert svg.count('class="cell ') == 4
    assert ">front</text>" in svg and ">rear</text>" in svg
    assert "2 / 4" in svg


def test_operation_step_colours_its_cell():
    state = StructureState(get_structure("stack"), [4, 9])
    op = state.info.operation("pop")
    steps = list(op.producer.steps(state.values, None, **state.options(op)))
    assert 'class="cell pointer" data-index="1"' in render_structure(state, steps[0])
    assert cell_role(1, steps[0]) == "pointer"
    assert "result = 9" in render_structure(state, steps[-1])


def test_trees_and_heaps_draw_nodes_and_links():
    bst = render_structure(StructureState(get_structure("bst"), [5, 3, 8]))
    assert bst.count('class="node ') == 3
    assert bst.count("<line ") == 2

    heap = render_structure(StructureState(get_structure("max-heap"), [1, 2, 3]))
    assert heap.count('class="node ') == 3


def test_linked_list_draws_its_links():
    svg = render_structure(StructureState(get_structure("doubly-linked-list"), [1, 2, 3]))
    assert svg.count("↔") == 2
    assert "→ null" in svg


def test_structure_panel_lists_the_operations():
    state = StructureState(get_structure("doubly-linked-list"))
    html = structure_panel(state, busy=True)
    assert 'data-op="insert-at"' in html
    assert 'id="position-input"' in html
    assert "disabled" in html
    assert 'id="position-input"' not in structure_panel(StructureState(get_structure("stack")))


def test_structure_selector_marks_the_selection():
    html = structure_selector(list_structures(), "bst")
    assert '<option value="bst" selected>' in html


# ---------------------------------------------------------------------------
# Graphs & knapsack
# ---------------------------------------------------------------------------
def test_static_graph_outlines_the_source():
    svg = render_graph(sample_graph(), source=0)
    assert svg.count('class="node ') == 6
    assert svg.count('class="edge ') == 9
    assert 'class="node source"' in svg
    assert "<polygon" not in svg
    assert "<polygon" in render_graph(sample_graph(), directed=True)


def test_placeholder_without_a_graph():
    assert "Generate or import a graph" in render_graph(None)


def test_node_and_edge_roles():
    g = sample_graph()
    step = Step(kind=StepKind.RELAX, indices=(0, 2), snapshot=(0, None, 2, None, None, None),
                sorted_marks=frozenset({0}), pointers={"current": 0}, edges=frozenset({(0, 2)}))
    assert node_role(0, step) == "current"
    assert node_role(2, step) == "frontier"
    assert node_role(1, step) == "unvisited"
    assert edge_role(g.edges[1], step) == "active"
    assert edge_role(g.edges[0], step) == "default"

    reject = Step(kind=StepKind.REJECT, indices=(1, 2), edges=frozenset({(0, 2)}))
    assert edge_role(g.edges[2], reject) == "rejected"
    assert edge_role(g.edges[1], reject) == "chosen"


def test_negative_cycle_marks_its_edge_as_failed():
    g = parse_graph("A-B:1, B-C:-3, C-A:1")
    last = list(iter_steps(AlgorithmKind.BELLMAN_FORD, (), graph=g, source=0))[-1]
    u, v = last.indices
    assert node_role(u, last) == "failed"
    assert 'class="edge rejected"' in render_graph(g, last, directed=True)


def test_distance_panel_and_matrix_panel():
    g = sample_graph()
    dijkstra = list(iter_steps(AlgorithmKind.DIJKSTRA, (), graph=g, source=0))[-1]
    svg = render_graph(g, dijkstra, panel="Distances")
    assert 'class="distances-panel"' in svg
    assert "F: 13" in svg

    floyd = list(iter_steps(AlgorithmKind.FLOYD_WARSHALL, (), graph=g))[0]
    svg = render_graph(g, floyd)
    assert 'class="matrix-panel"' in svg
    assert "∞" in svg


def test_knapsack_rows_and_gauge():
    items = sample_items()
    assert render_knapsack(items, SAMPLE_CAPACITY).count('class="item ') == 3
    last = list(iter_steps(AlgorithmKind.FRACTIONAL_KNAPSACK, (), items=items, capacity=SAMPLE_CAPACITY))[-1]
    svg = render_knapsack(items, SAMPLE_CAPACITY, last)
    assert "capacity 50 / 50" in svg
    assert "value = 240" in svg
    assert ">67%</text>" in svg
    assert "Add items to begin" in render_knapsack((), 10)


def test_graph_and_knapsack_panels():
    g = sample_graph()
    assert '<option value="B" selected>' in graph_panel(g, source=1)
    assert 'id="source-select"' not in graph_panel(g, has_source=False)
    assert "A:60/10, B:100/20, C:120/30" in knapsack_panel(list(sample_items()), 50)
