import asyncio
import logging

import pytest

from algorithms import AlgorithmKind, StepKind, get_algorithm, iter_steps
from engine import AsyncioScheduler, ManualScheduler, Stepper, StepperState, speed_to_delay
from engine.stepper import SPEED_PRESETS, clamp_speed
from errors import StateTransitionError, ValidationError
from graph import SAMPLE_CAPACITY, sample_graph, sample_items

BUBBLE = AlgorithmKind.BUBBLE_SORT
DATA = [5, 1, 4, 2, 8, 3]


class RecordingScheduler(ManualScheduler):
    """ManualScheduler that keeps every handle it hands out."""

    def __init__(self, clock):
        super().__init__(clock)
        self.calls = []

    def call_later(self, delay_ms, callback):
        call = super().call_later(delay_ms, callback)
        self.calls.append(call)
        return call


def make(clock, kind=BUBBLE, data=DATA, **kwargs):
    seen = []
    stepper = Stepper(kind, data, on_step=seen.append, scheduler=RecordingScheduler(clock), **kwargs)
    return stepper, seen


def tick(stepper, clock):
    """Let one delay pass and fire whatever is due."""
    clock.advance(stepper.delay_ms)
    return stepper.scheduler.run_due()


def drive(stepper, clock, limit=1000):
    for _ in range(limit):
        if stepper.state != StepperState.RUNNING:
            return
        tick(stepper, clock)
    raise AssertionError("run did not finish")


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
def test_speed_to_delay_endpoints():
    assert speed_to_delay(10) == 1000
    assert speed_to_delay(100) == 50


def test_speed_to_delay_is_strictly_decreasing():
    delays = [speed_to_delay(p) for p in range(10, 101)]
    assert all(a > b for a, b in zip(delays, delays[1:]))


@pytest.mark.parametrize("percent, expected", [(0, 1000), (5, 1000), (150, 50)])
def test_speed_to_delay_clamps(percent, expected):
    assert speed_to_delay(percent) == expected


def test_presets_are_in_range():
    for value in SPEED_PRESETS.values():
        assert clamp_speed(value) == value


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
def test_starts_idle_showing_the_dataset(clock):
    stepper, seen = make(clock)
    assert stepper.state == StepperState.IDLE
    assert stepper.snapshot == tuple(DATA)
    assert stepper.current_step is None
    assert seen == []


def test_start_applies_the_first_step_without_delay(clock):
    stepper, seen = make(clock)
    stepper.start()
    assert stepper.state == StepperState.RUNNING
    assert stepper.scheduler.run_due() == 1
    assert len(seen) == 1
    assert stepper.scheduler.next_due() == pytest.approx(clock() + stepper.delay_ms / 1000.0)


def test_full_run_matches_the_producer(clock):
    stepper, seen = make(clock)
    stepper.start()
    drive(stepper, clock)
    assert stepper.state == StepperState.COMPLETED
    assert seen == list(iter_steps(BUBBLE, DATA))
    assert stepper.snapshot == tuple(sorted(DATA))
    assert stepper.scheduler.pending == 0


def test_nothing_fires_before_the_delay(clock):
    stepper, seen = make(clock)
    stepper.start()
    stepper.scheduler.run_due()
    clock.advance(stepper.delay_ms / 2)
    assert stepper.scheduler.run_due() == 0
    assert len(seen) == 1


def test_pause_then_resume_equals_an_uninterrupted_run(clock):
    stepper, seen = make(clock)
    stepper.start()
    stepper.scheduler.run_due()
    tick(stepper, clock)
    tick(stepper, clock)

    stepper.pause()
    paused_at = len(seen)
    clock.advance(10_000)
    assert stepper.scheduler.run_due() == 0
    assert len(seen) == paused_at
    assert stepper.state == StepperState.PAUSED

    stepper.resume()
    stepper.scheduler.run_due()
    drive(stepper, clock)
    assert seen == list(iter_steps(BUBBLE, DATA))


def _inputs(kind):
    """Dataset, target and producer options that make a full run of `kind`."""
    info = get_algorithm(kind)
    if info.family == "graph":
        return (), None, {"graph": sample_graph(), "source": 0}
    if info.family == "greedy":
        return (), None, {"items": sample_items(), "capacity": SAMPLE_CAPACITY}
    if info.is_search:
        data = sorted(DATA)
        return data, data[-1], {}
    return DATA, None, {}


@pytest.mark.parametrize("pause_after", [1, 3, 6])
@pytest.mark.parametrize("kind", list(AlgorithmKind), ids=lambda k: k.value)
def test_pausing_anywhere_resumes_into_the_same_run(clock, kind, pause_after):
    data, target, options = _inputs(kind)
    stepper, seen = make(clock, kind=kind, data=data, target=target, options=options)
    stepper.start()
    stepper.scheduler.run_due()
    while len(seen) < pause_after and stepper.state == StepperState.RUNNING:
        tick(stepper, clock)

    if stepper.state == StepperState.RUNNING:
        stepper.pause()
        clock.advance(10_000)
        assert stepper.scheduler.run_due() == 0
        stepper.resume()
        stepper.scheduler.run_due()
    drive(stepper, clock)

    assert stepper.state == StepperState.COMPLETED
    assert seen == list(iter_steps(kind, data, target, **options))


def test_at_most_one_continuation_is_pending(clock):
    stepper, _ = make(clock)
    stepper.start()
    for _ in range(5):
        assert stepper.scheduler.pending <= 1
        tick(stepper, clock)


def test_stale_continuation_after_pause_does_nothing(clock):
    stepper, seen = make(clock)
    stepper.start()
    stepper.scheduler.run_due()
    pending = stepper.scheduler.calls[-1]
    stepper.pause()
    cursor = stepper.cursor

    pending.callback()
    assert len(seen) == 1
    assert stepper.cursor == cursor
    assert stepper.state == StepperState.PAUSED


def test_stale_continuation_from_an_old_run_does_nothing(clock):
    stepper, seen = make(clock)
    stepper.start()
    old = stepper.scheduler.calls[-1]
    stepper.stop()
    stepper.start()

    old.callback()
    assert seen == []
    assert stepper.state == StepperState.RUNNING


def test_stop_restores_the_original_dataset(clock):
    stepper, _ = make(clock)
    stepper.start()
    for _ in range(4):
        tick(stepper, clock)
    stepper.stop()
    assert stepper.state == StepperState.IDLE
    assert stepper.snapshot == tuple(DATA)
    assert stepper.current_step is None
    assert stepper.counters["steps"] == 0
    assert not stepper.has_pending


def test_start_again_after_completion_restarts(clock):
    stepper, seen = make(clock)
    stepper.start()
    drive(stepper, clock)
    first_run = list(seen)

    stepper.start()
    assert stepper.state == StepperState.RUNNING
    assert stepper.snapshot == tuple(DATA)
    drive(stepper, clock)
    assert seen[len(first_run):] == first_run


def test_step_once_from_idle_pauses(clock):
    stepper, seen = make(clock)
    step = stepper.step_once()
    assert stepper.state == StepperState.PAUSED
    assert step.step_number == 0
    assert seen == [step]
    assert not stepper.has_pending


def test_step_once_walks_to_completion(clock):
    stepper, seen = make(clock, data=[3, 1, 2])
    while stepper.state != StepperState.COMPLETED:
        stepper.step_once()
    assert seen == list(iter_steps(BUBBLE, [3, 1, 2]))
    with pytest.raises(StateTransitionError):
        stepper.step_once()


@pytest.mark.parametrize("action, state_setup", [
    ("pause", None),
    ("resume", None),
    ("resume", "start"),
    ("start", "start"),
    ("step_once", "start"),
    ("pause", "step_once"),
])
def test_illegal_transitions_raise_and_change_nothing(clock, action, state_setup):
    stepper, seen = make(clock)
    if state_setup:
        getattr(stepper, state_setup)()
    before = (stepper.state, stepper.cursor, len(seen))

    with pytest.raises(StateTransitionError) as exc:
        getattr(stepper, action)()
    assert exc.value.action == action
    assert (stepper.state, stepper.cursor, len(seen)) == before


def test_counters_track_the_run(clock):
    stepper, seen = make(clock, data=[2, 1])
    stepper.start()
    drive(stepper, clock)
    kinds = [s.kind for s in seen]
    assert stepper.counters["steps"] == len(seen)
    assert stepper.counters["comparisons"] == kinds.count(StepKind.COMPARE)
    assert stepper.counters["swaps"] == kinds.count(StepKind.SWAP)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
def test_speed_change_applies_to_the_next_continuation(clock):
    stepper, _ = make(clock, speed=10)
    stepper.start()
    stepper.scheduler.run_due()
    assert stepper.scheduler.next_due() == pytest.approx(clock() + 1.0)

    assert stepper.set_speed(250) == 100
    clock.advance(1000)
    stepper.scheduler.run_due()
    assert stepper.scheduler.next_due() == pytest.approx(clock() + 0.05)


def test_load_dataset_forces_a_stop(clock, caplog):
    caplog.set_level(logging.INFO, logger="engine.stepper")
    stepper, _ = make(clock)
    stepper.start()
    stepper.scheduler.run_due()

    stepper.load_dataset([9, 8, 7])
    assert stepper.state == StepperState.IDLE
    assert stepper.dataset == (9, 8, 7)
    assert stepper.snapshot == (9, 8, 7)
    assert not stepper.has_pending
    assert "load_dataset while running" in caplog.text


def test_set_algorithm_while_paused_forces_a_stop(clock):
    stepper, _ = make(clock)
    stepper.step_once()
    stepper.set_algorithm("merge-sort")
    assert stepper.state == StepperState.IDLE
    assert stepper.kind == AlgorithmKind.MERGE_SORT
    assert stepper.snapshot == tuple(DATA)


def test_set_algorithm_rejects_unknown_keys(clock):
    stepper, _ = make(clock)
    with pytest.raises(ValueError):
        stepper.set_algorithm("bogo-sort")
    assert stepper.kind == BUBBLE


def test_set_target_forces_a_stop(clock):
    stepper, _ = make(clock, kind=AlgorithmKind.LINEAR_SEARCH, target=4)
    stepper.start()
    stepper.set_target(8)
    assert stepper.state == StepperState.IDLE
    assert stepper.target == 8


def test_search_without_a_target_cannot_start(clock):
    stepper, _ = make(clock, kind=AlgorithmKind.LINEAR_SEARCH)
    with pytest.raises(ValidationError):
        stepper.start()
    assert stepper.state == StepperState.IDLE


def test_search_run_ends_on_the_match(clock):
    stepper, seen = make(clock, kind=AlgorithmKind.LINEAR_SEARCH, target=2)
    stepper.start()
    drive(stepper, clock)
    assert stepper.state == StepperState.COMPLETED
    assert seen[-1].kind == StepKind.MATCH
    assert seen[-1].indices == (DATA.index(2),)
    assert stepper.counters["comparisons"] == DATA.index(2) + 1


def test_adapter_errors_are_logged_and_the_run_continues(clock, caplog):
    calls = []

    def explode(step):
        calls.append(step)
        raise RuntimeError("render failed")

    stepper = Stepper(BUBBLE, [2, 1], on_step=explode, scheduler=ManualScheduler(clock))
    with caplog.at_level(logging.ERROR, logger="engine.stepper"):
        stepper.start()
        drive(stepper, clock)
    assert stepper.state == StepperState.COMPLETED
    assert len(calls) == stepper.counters["steps"]
    assert "on_step failed" in caplog.text


def test_close_detaches_the_adapter(clock):
    stepper, seen = make(clock)
    stepper.start()
    stepper.close()
    assert stepper.on_step is None
    assert stepper.scheduler.run_due() == 0
    assert seen == []


def test_to_dict(clock):
    stepper, _ = make(clock, speed=100)
    stepper.step_once()
    data = stepper.to_dict()
    assert data["state"] == "paused"
    assert data["algorithm"] == "bubble-sort"
    assert data["dataset"] == DATA
    assert data["delay_ms"] == 50
    assert data["step"]["kind"] == "compare"
    assert data["counters"]["comparisons"] == 1


# ---------------------------------------------------------------------------
# asyncio host
# ---------------------------------------------------------------------------
def test_asyncio_scheduler_drives_a_full_run():
    loop = asyncio.new_event_loop()
    try:
        done = loop.create_future()

        def on_step(step):
            if step.is_final and not done.done():
                done.set_result(step)

        stepper = Stepper(BUBBLE, [3, 1, 2], on_step=on_step, speed=100, scheduler=AsyncioScheduler(loop))
        stepper.start()
        final = loop.run_until_complete(asyncio.wait_for(done, timeout=5))
    finally:
        loop.close()

    assert final.kind == StepKind.COMPLETE
    assert stepper.state == StepperState.COMPLETED
    assert stepper.snapshot == (1, 2, 3)
