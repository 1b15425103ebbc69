import math

import pytest

from algorithms import REGISTRY, AlgorithmKind, StepKind, iter_steps
from dataset import SEARCH_BOUNDS, parse_dataset
from errors import ValidationError

LINEAR = AlgorithmKind.LINEAR_SEARCH
BINARY = AlgorithmKind.BINARY_SEARCH


def run(kind, data, target):
    return list(iter_steps(kind, data, target))


# ---------------------------------------------------------------------------
# Linear search
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("k", range(6))
def test_linear_hit_at_k_takes_k_plus_one_steps(k):
    data = [14, 3, 27, 9, 41, 8]
    steps = run(LINEAR, data, data[k])
    assert len(steps) == k + 1
    assert steps[-1].kind == StepKind.MATCH
    assert steps[-1].indices == (k,)
    assert steps[-1].is_final
    assert all(s.kind == StepKind.VISIT for s in steps[:-1])


def test_linear_miss_takes_n_steps():
    data = [14, 3, 27, 9]
    steps = run(LINEAR, data, 100)
    assert len(steps) == len(data)
    assert steps[-1].kind == StepKind.EXHAUSTED
    assert steps[-1].indices == (len(data) - 1,)
    assert [s.indices[0] for s in steps] == list(range(len(data)))


def test_linear_stops_at_first_duplicate():
    steps = run(LINEAR, [5, 7, 7, 7], 7)
    assert steps[-1].indices == (1,)


def test_linear_empty_array_is_exhausted_at_once():
    steps = run(LINEAR, [], 3)
    assert len(steps) == 1
    assert steps[0].kind == StepKind.EXHAUSTED
    assert steps[0].indices == ()


def test_an_empty_search_array_is_refused_as_input():
    assert not SEARCH_BOUNDS.contains(0)
    with pytest.raises(ValidationError, match="Please enter"):
        parse_dataset("", SEARCH_BOUNDS)


def test_search_never_touches_the_data():
    data = (5, 1, 9, 3)
    for step in run(LINEAR, data, 9):
        assert step.snapshot == data
        assert step.sorted_marks == frozenset()


# ---------------------------------------------------------------------------
# Binary search
# ---------------------------------------------------------------------------
SORTED = [1, 3, 5, 7, 9, 11, 13, 15, 17]


@pytest.mark.parametrize("target", SORTED)
def test_binary_finds_every_element(target):
    steps = run(BINARY, SORTED, target)
    last = steps[-1]
    assert last.kind == StepKind.MATCH
    assert SORTED[last.indices[0]] == target
    assert len(steps) <= math.floor(math.log2(len(SORTED))) + 1


def test_binary_midpoint_sequence():
    steps = run(BINARY, [1, 3, 5, 7, 9, 11], 7)
    assert [s.indices for s in steps] == [(2,), (4,), (3,)]
    assert [s.kind for s in steps] == [StepKind.VISIT, StepKind.VISIT, StepKind.MATCH]
    assert steps[0].pointers == {"low": 0, "high": 5, "mid": 2}


def test_binary_miss_ends_exhausted_without_an_index():
    steps = run(BINARY, [1, 3, 5, 7, 9, 11], 4)
    assert steps[-1].kind == StepKind.EXHAUSTED
    assert steps[-1].indices == ()
    assert all(s.kind == StepKind.VISIT for s in steps[:-1])


def test_binary_rejects_unsorted_input():
    with pytest.raises(ValidationError):
        REGISTRY[BINARY].producer.initial_cursor([3, 1, 2], 2)


def test_binary_empty_array():
    steps = run(BINARY, [], 1)
    assert [s.kind for s in steps] == [StepKind.EXHAUSTED]
