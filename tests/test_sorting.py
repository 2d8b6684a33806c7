import asyncio
import random
from dataclasses import dataclass, field

import pytest

from algorithms import SORTING, SortingContext
from algorithms.merge_sort import _merge, _sort_range
from engine.controller import Flag, RunState
from engine.sorting_session import SortingSession
from engine.stats import SortingCounters
from engine.tones import set_tone_player
from engine.worker import BackgroundLoop
from model import ElementStatus, from_values
from conftest import BlockingPlayer


SIZES = [0, 1, 2, 3, 10, 37, 50]


def session_with(config, values, seed=7):
    session = SortingSession(config, rng=random.Random(seed))
    session.array = from_values(values)
    return session


async def yield_steps(count):
    for _ in range(count):
        await asyncio.sleep(0)


@pytest.mark.parametrize("key", list(SORTING))
@pytest.mark.parametrize("size", SIZES)
def test_sorts_any_size_with_duplicates(fast_config, key, size):
    rng = random.Random(size)
    values = [rng.randint(10, 40) for _ in range(size)]
    session = session_with(fast_config, values)

    assert asyncio.run(session.run(key)) is True

    assert session.values() == sorted(values)
    assert all(e.status is ElementStatus.SORTED for e in session.array)
    assert session.controller.state is RunState.FINISHED
    assert not session.is_running


def test_already_sorted_input_stays_put(fast_config):
    values = [1, 2, 3, 4, 5]
    for key in SORTING:
        session = session_with(fast_config, values)
        asyncio.run(session.run(key))
        assert session.values() == values


def test_bubble_sort_counters(fast_config):
    session = session_with(fast_config, [5, 3, 8, 1, 9, 2])
    asyncio.run(session.run("bubble_sort"))
    # 5 + 4 + 3 + 2 + 1 comparisons, 8 swaps
    assert session.counters.comparisons == 15
    assert session.counters.array_accesses == 15 * 2 + 8 * 4


def test_bubble_sort_stops_after_a_clean_pass(fast_config):
    session = session_with(fast_config, [1, 2, 3, 4, 5, 6])
    asyncio.run(session.run("bubble_sort"))
    assert session.counters.comparisons == 5
    assert session.counters.array_accesses == 10


def test_selection_sort_counts_every_scan(fast_config):
    session = session_with(fast_config, [4, 3, 2, 1])
    asyncio.run(session.run("selection_sort"))
    assert session.counters.comparisons == 3 + 2 + 1


@dataclass(order=True)
class Tagged:
    """Sorts by `key` only; `tag` tells equal keys apart."""

    key: int
    tag: str = field(compare=False)


def recording_context(array):
    marks = []

    async def never_stop():
        return False

    async def verified():
        return True

    ctx = SortingContext(
        array=array,
        update_item=lambda index, status, value=None: marks.append((index, status, value)),
        swap=lambda i, j: None,
        stop_or_pause=never_stop,
        verify_sorted=verified,
        counters=SortingCounters(),
        running=Flag(True),
    )
    return ctx, marks


def test_merge_takes_the_left_element_on_ties():
    left, right = Tagged(1, "left"), Tagged(1, "right")
    values = [left, right]
    ctx, marks = recording_context([])

    assert asyncio.run(_merge(ctx, values, 0, 0, 1)) is True

    assert [v.tag for v in values] == ["left", "right"]
    writes = [value for _, status, value in marks if status is ElementStatus.SWAP]
    assert [w.tag for w in writes] == ["left", "right"]
    assert ctx.counters.comparisons == 1


def test_merge_sort_keeps_equal_values_in_order():
    values = [Tagged(2, "a"), Tagged(1, "b"), Tagged(2, "c"), Tagged(1, "d"), Tagged(2, "e")]
    ctx, _ = recording_context([])

    asyncio.run(_sort_range(ctx, values, 0, len(values) - 1))

    assert [v.tag for v in values] == ["b", "d", "a", "c", "e"]


def test_merge_sort_counts_one_comparison_per_merge_step(fast_config):
    session = session_with(fast_config, [1, 1, 1])
    asyncio.run(session.run("merge_sort"))
    assert session.counters.comparisons == 3
    assert session.values() == [1, 1, 1]


def test_merge_sort_counts_reads_and_writes(fast_config):
    session = session_with(fast_config, [2, 1])
    asyncio.run(session.run("merge_sort"))
    # highlight 2 + read 2 + write 2
    assert session.counters.array_accesses == 6
    assert session.counters.comparisons == 1


def test_counters_reset_at_run_start(fast_config):
    session = session_with(fast_config, [3, 2, 1])
    asyncio.run(session.run("bubble_sort"))
    first = session.counters.comparisons
    session.array = from_values([3, 2, 1])
    asyncio.run(session.run("bubble_sort"))
    assert session.counters.comparisons == first


async def advance_until(task, predicate, limit=100000):
    """Yield to the sort until `predicate()` holds (or the sort ends)."""
    for _ in range(limit):
        if predicate() or task.done():
            return
        await asyncio.sleep(0)


# comparisons to reach before stopping: deep enough that merge sort has
# frames pending and shaker sort is inside its first backward pass
STOP_AFTER = {
    "bubble_sort":    10,
    "selection_sort": 10,
    "shaker_sort":    31,
    "merge_sort":     5,
}


@pytest.mark.parametrize("key", list(SORTING))
def test_pause_freezes_progress_until_resumed(fast_config, key):
    session = session_with(fast_config, list(range(30, 0, -1)))

    async def scenario():
        task = asyncio.ensure_future(session.run(key))
        await advance_until(task, lambda: session.counters.comparisons >= 3)
        assert not task.done()
        assert session.toggle_pause() is True
        await asyncio.sleep(0.01)

        frozen = session.counters.to_dict()
        array = list(session.array)
        await asyncio.sleep(0.03)
        assert session.counters.to_dict() == frozen
        assert session.array == array
        assert session.controller.state is RunState.PAUSED

        assert session.toggle_pause() is False
        await asyncio.wait_for(task, timeout=5)

    asyncio.run(scenario())
    assert session.values() == list(range(1, 31))
    assert session.controller.state is RunState.FINISHED


@pytest.mark.parametrize("key", list(SORTING))
def test_stop_mid_run_aborts_and_zeroes_counters(fast_config, key):
    values = list(range(30, 0, -1))
    session = session_with(fast_config, values)

    async def scenario():
        task = asyncio.ensure_future(session.run(key))
        await advance_until(task, lambda: session.counters.comparisons >= STOP_AFTER[key])
        assert not task.done()
        assert session.stop() is True
        stopped = list(session.array)
        await asyncio.wait_for(task, timeout=5)
        assert session.array == stopped

    asyncio.run(scenario())
    assert session.controller.state is RunState.ABORTED
    assert session.counters.to_dict() == {"comparisons": 0, "array_accesses": 0}
    assert all(e.status is ElementStatus.DEFAULT for e in session.array)
    assert sorted(session.values()) == sorted(values)


def test_stop_from_the_request_thread_beats_a_write_in_flight(fast_config):
    session = session_with(fast_config, list(range(20, 0, -1)))
    player = BlockingPlayer()
    set_tone_player(player)
    loop = BackgroundLoop("sorting-test")
    try:
        future = loop.submit(session.run("bubble_sort"))
        # the sort is now parked inside its first comparing tone
        assert player.entered.wait(timeout=5)
        session.stop()
        stopped = list(session.array)
        player.release.set()
        future.result(timeout=5)
    finally:
        player.release.set()
        loop.stop()

    assert session.controller.state is RunState.ABORTED
    assert all(e.status is ElementStatus.DEFAULT for e in session.array)
    assert session.counters.to_dict() == {"comparisons": 0, "array_accesses": 0}
    assert session.array == stopped


def test_run_refused_while_busy(fast_config):
    session = session_with(fast_config, list(range(10, 0, -1)))

    async def scenario():
        task = asyncio.ensure_future(session.run("bubble_sort"))
        await yield_steps(2)
        assert await session.run("merge_sort") is False
        session.stop()
        await task

    asyncio.run(scenario())


def test_toggle_pause_when_idle(fast_config):
    assert SortingSession(fast_config).toggle_pause() is False


def test_unknown_algorithm_rejected(fast_config):
    session = SortingSession(fast_config)
    with pytest.raises(ValueError):
        session.select_algorithm("bogo_sort")
    with pytest.raises(ValueError):
        asyncio.run(session.run("dijkstra"))


def test_set_speed_updates_delay(fast_config):
    session = SortingSession(fast_config.with_overrides(sort_base_delay_ms=100))
    assert session.set_speed("4x") == 25
    assert session.delay_ms == 25
    with pytest.raises(ValueError):
        session.set_speed("3x")


def test_set_size_regenerates(fast_config):
    session = SortingSession(fast_config)
    session.set_size(10)
    assert len(session.array) == 10
    assert all(10 <= v <= 309 for v in session.values())
    with pytest.raises(ValueError):
        session.set_size(15)


def test_generate_shuffles_then_loads_fresh_values(fast_config, tones):
    session = SortingSession(fast_config.with_overrides(array_size=20), rng=random.Random(1))
    before = session.values()
    asyncio.run(session.generate())
    assert len(session.array) == 20
    assert session.values() != before
    assert all(e.status is ElementStatus.DEFAULT for e in session.array)
    assert not session.shuffling
    assert tones.events


def test_comparing_plays_a_tone(fast_config, tones):
    session = session_with(fast_config, [2, 1])
    asyncio.run(session.run("bubble_sort"))
    assert tones.events
    assert all(400 <= e.frequency <= 1200 for e in tones.events)


def test_snapshot_shape(fast_config):
    snap = SortingSession(fast_config).snapshot()
    assert snap["algorithm"]["key"] == "selection_sort"
    assert snap["size"] == 30
    assert snap["counters"] == {"comparisons": 0, "array_accesses": 0}
    assert len(snap["array"]) == 30
