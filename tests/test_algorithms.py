import random
from collections import Counter

import pytest

from algorithms import (
    REGISTRY,
    AlgorithmKind,
    StepKind,
    advance,
    algorithms_by_tag,
    get_algorithm,
    iter_steps,
    list_algorithms,
)
from algorithms.listings import LANGUAGES
from algorithms.merge import merge_plan
from conftest import Keyed

SORTS = [
    AlgorithmKind.BUBBLE_SORT,
    AlgorithmKind.SELECTION_SORT,
    AlgorithmKind.INSERTION_SORT,
    AlgorithmKind.MERGE_SORT,
    AlgorithmKind.QUICK_SORT,
]

DATASETS = [
    [5, 1, 4, 2, 8],
    [1, 2, 3, 4, 5, 6],
    [9, 8, 7, 6, 5, 4, 3, 2],
    [3, 3, 1, 3, 2, 1],
    [42, 7],
    [7, 42],
    random.Random(7).sample(range(1, 100), 20),
]


def run(kind, data, target=None):
    return list(iter_steps(kind, data, target))


# ---------------------------------------------------------------------------
# Shared invariants of every sort
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("kind", SORTS)
@pytest.mark.parametrize("data", DATASETS)
def test_sort_ends_sorted(kind, data):
    steps = run(kind, data)
    last = steps[-1]
    assert last.kind == StepKind.COMPLETE
    assert last.is_final
    assert list(last.snapshot) == sorted(data)
    assert last.sorted_marks == frozenset(range(len(data)))


@pytest.mark.parametrize("kind", SORTS)
@pytest.mark.parametrize("data", DATASETS)
def test_step_numbers_are_consecutive(kind, data):
    steps = run(kind, data)
    assert [s.step_number for s in steps] == list(range(len(steps)))
    assert [s.is_final for s in steps].count(True) == 1


@pytest.mark.parametrize("kind", SORTS)
@pytest.mark.parametrize("data", DATASETS)
def test_snapshots_are_permutations(kind, data):
    expected = Counter(data)
    for step in run(kind, data):
        assert Counter(step.snapshot) == expected


@pytest.mark.parametrize("kind", SORTS)
@pytest.mark.parametrize("data", DATASETS)
def test_marks_only_grow_and_fill_at_the_end(kind, data):
    steps = run(kind, data)
    previous = frozenset()
    for step in steps:
        assert previous <= step.sorted_marks
        previous = step.sorted_marks
    for step in steps[:-1]:
        assert len(step.sorted_marks) < len(data)


@pytest.mark.parametrize("kind", SORTS)
@pytest.mark.parametrize("data", [[6, 2, 9, 1, 5, 3], [5, 4, 3, 2, 1]])
def test_marked_positions_hold_their_final_value(kind, data):
    final = sorted(data)
    for step in run(kind, data):
        for idx in step.sorted_marks:
            assert step.snapshot[idx] == final[idx]


@pytest.mark.parametrize("kind", SORTS)
@pytest.mark.parametrize("data", [[], [4]])
def test_tiny_inputs_complete_immediately(kind, data):
    steps = run(kind, data)
    assert len(steps) == 1
    assert steps[0].kind == StepKind.COMPLETE
    assert list(steps[0].snapshot) == data


@pytest.mark.parametrize("kind", SORTS)
def test_resuming_from_a_saved_cursor_is_pure(kind):
    info = REGISTRY[kind]
    cursor = info.producer.initial_cursor([4, 2, 7, 1, 3])
    for _ in range(4):
        _, cursor = advance(kind, cursor)
    first, after_first = advance(kind, cursor)
    second, after_second = advance(kind, cursor)
    assert first == second
    assert after_first == after_second


@pytest.mark.parametrize("kind", SORTS)
def test_every_step_points_at_real_pseudocode(kind):
    lines = REGISTRY[kind].pseudocode
    for step in run(kind, [5, 3, 8, 1, 9, 2]):
        assert 0 <= step.pseudocode_line < len(lines)
        assert step.explanation


# ---------------------------------------------------------------------------
# Per-algorithm behaviour
# ---------------------------------------------------------------------------
def test_bubble_sorted_input_exits_after_one_pass():
    data = [1, 2, 3, 4, 5, 6]
    steps = run(AlgorithmKind.BUBBLE_SORT, data)
    kinds = [s.kind for s in steps]
    assert kinds == [StepKind.COMPARE] * (len(data) - 1) + [StepKind.COMPLETE]


def test_bubble_swap_follows_out_of_order_compare():
    steps = run(AlgorithmKind.BUBBLE_SORT, [2, 1])
    assert steps[0].kind == StepKind.COMPARE
    assert steps[0].indices == (0, 1)
    assert steps[1].kind == StepKind.SWAP
    assert steps[1].snapshot == (1, 2)


def test_selection_sorted_input_still_scans_everything():
    data = [1, 2, 3, 4, 5]
    steps = run(AlgorithmKind.SELECTION_SORT, data)
    compares = [s for s in steps if s.kind == StepKind.COMPARE]
    swaps = [s for s in steps if s.kind == StepKind.SWAP]
    n = len(data)
    assert len(compares) == n * (n - 1) // 2
    assert swaps == []


def test_insertion_starts_with_a_one_element_prefix():
    steps = run(AlgorithmKind.INSERTION_SORT, [3, 1, 2])
    assert steps[0].kind == StepKind.SET_POINTER
    assert steps[0].indices == (0,)
    assert steps[0].pointers == {"prefix": 0}
    assert steps[1].kind == StepKind.SET_POINTER
    assert steps[1].pointers["key"] == 1


def test_merge_steps_carry_their_subrange():
    data = [8, 3, 5, 1, 9, 2, 7]
    for step in run(AlgorithmKind.MERGE_SORT, data)[:-1]:
        assert step.subrange is not None
        left, mid, right = step.subrange
        assert left <= mid < right
        for idx in step.indices:
            assert left <= idx <= right


def test_merge_writes_one_value_per_position_per_merge():
    data = [8, 3, 5, 1, 9, 2, 7]
    steps = run(AlgorithmKind.MERGE_SORT, data)
    writes = [s for s in steps if s.kind == StepKind.WRITE]
    expected = sum(right - left + 1 for left, _, right in merge_plan(0, len(data) - 1))
    assert len(writes) == expected


def test_merge_plan_is_post_order():
    assert merge_plan(0, 3) == [(0, 0, 1), (2, 2, 3), (0, 1, 3)]
    assert merge_plan(0, 0) == []


def test_quick_sort_opens_with_the_last_element_as_pivot():
    data = [4, 9, 2, 6]
    first = run(AlgorithmKind.QUICK_SORT, data)[0]
    assert first.kind == StepKind.SET_POINTER
    assert first.indices == (len(data) - 1,)
    assert first.pointers["pivot"] == len(data) - 1


def test_quick_sort_skips_self_swaps():
    for step in run(AlgorithmKind.QUICK_SORT, [1, 2, 3, 4, 5]):
        if step.kind == StepKind.SWAP:
            a, b = step.indices
            assert a != b


@pytest.mark.parametrize("kind", [k for k in SORTS if REGISTRY[k].stable])
def test_stable_sorts_keep_equal_keys_in_order(kind):
    data = [Keyed(3, "a"), Keyed(1, "a"), Keyed(3, "b"), Keyed(2, "a"), Keyed(1, "b"), Keyed(3, "c")]
    final = run(kind, data)[-1].snapshot
    assert [(k.key, k.tag) for k in final] == [
        (1, "a"), (1, "b"), (2, "a"), (3, "a"), (3, "b"), (3, "c"),
    ]


def test_stability_flags():
    stable = {info.kind for info in list_algorithms() if info.stable}
    assert stable == {AlgorithmKind.BUBBLE_SORT, AlgorithmKind.INSERTION_SORT, AlgorithmKind.MERGE_SORT}


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_covers_every_kind():
    assert set(REGISTRY) == set(AlgorithmKind)
    for kind, info in REGISTRY.items():
        assert info.kind == kind
        assert info.pseudocode
        assert info.complexity.worst


def test_get_algorithm_by_key_or_kind():
    assert get_algorithm("quick-sort") is REGISTRY[AlgorithmKind.QUICK_SORT]
    assert get_algorithm(AlgorithmKind.LINEAR_SEARCH).is_search
    assert get_algorithm("bogo-sort") is None


def test_algorithms_by_tag():
    searches = {info.kind for info in algorithms_by_tag("search")}
    assert searches == {AlgorithmKind.LINEAR_SEARCH, AlgorithmKind.BINARY_SEARCH}
    assert len(algorithms_by_tag("sort")) == len(SORTS)


def test_every_algorithm_has_a_listing_per_language():
    for info in list_algorithms():
        for lang in LANGUAGES:
            assert info.listing(lang).strip()


def test_to_dict_exposes_bounds_and_complexity():
    card = get_algorithm("merge-sort").to_dict()
    assert card["key"] == "merge-sort"
    assert card["min_size"] == 2
    assert card["max_size"] == 20
    assert card["complexity"]["space"] == "O(n)"
    assert card["stable"] is True


def test_insertion_prefix_is_a_pointer_not_a_mark():
    steps = run(AlgorithmKind.INSERTION_SORT, [5, 4, 3, 2, 1])
    for step in steps[:-1]:
        assert step.sorted_marks == frozenset()
    prefixes = [s.pointers["prefix"] for s in steps[:-1]]
    assert prefixes == sorted(prefixes)
    assert prefixes[-1] == 4
