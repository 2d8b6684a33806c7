import asyncio

from engine.controller import Controller, Flag, RunState, Suspender
from engine.stats import PathfindingStats, SortingCounters, format_time


def test_flag_basics():
    flag = Flag()
    assert not flag
    flag.set()
    assert flag and flag.is_set()
    flag.clear()
    assert not flag.is_set()


def test_begin_issues_a_fresh_flag_each_run():
    ctl = Controller()
    first = ctl.begin()
    second = ctl.begin()
    assert first is not second
    assert not first
    assert second
    assert ctl.state is RunState.RUNNING


def test_cancel_is_idempotent():
    ctl = Controller()
    flag = ctl.begin()
    assert ctl.cancel() is True
    assert ctl.cancel() is False
    assert not flag
    assert ctl.state is RunState.ABORTED


def test_cancel_when_idle_keeps_state():
    ctl = Controller()
    assert ctl.cancel() is False
    assert ctl.state is RunState.IDLE


def test_finish_ignores_superseded_runs():
    ctl = Controller()
    old = ctl.begin()
    ctl.begin()
    ctl.finish(old)
    assert ctl.state is RunState.RUNNING
    assert ctl.is_running


def test_finish_after_algorithm_cleared_its_flag():
    ctl = Controller()
    flag = ctl.begin()
    flag.clear()
    ctl.finish(flag)
    assert ctl.state is RunState.FINISHED


def test_pause_toggle():
    ctl = Controller()
    assert ctl.toggle_pause() is False  # nothing running
    ctl.begin()
    assert ctl.toggle_pause() is True
    assert ctl.state is RunState.PAUSED
    assert ctl.toggle_pause() is False
    assert ctl.state is RunState.RUNNING


def test_stop_or_pause_reports_stop_when_not_running():
    suspender = Suspender(Flag(False), Flag(False), delay_ms=0)
    assert asyncio.run(suspender.stop_or_pause()) is True


def test_stop_or_pause_continues_when_running():
    suspender = Suspender(Flag(True), Flag(False), delay_ms=0)
    assert asyncio.run(suspender.stop_or_pause()) is False


def test_stop_or_pause_blocks_while_paused_until_cancelled():
    running, paused = Flag(True), Flag(True)
    suspender = Suspender(running, paused, delay_ms=0, poll_ms=1)

    async def scenario():
        task = asyncio.ensure_future(suspender.stop_or_pause())
        await asyncio.sleep(0.02)
        assert not task.done()
        running.clear()
        return await asyncio.wait_for(task, timeout=1)

    assert asyncio.run(scenario()) is True


def test_stop_or_pause_resumes():
    running, paused = Flag(True), Flag(True)
    suspender = Suspender(running, paused, delay_ms=0, poll_ms=1)

    async def scenario():
        task = asyncio.ensure_future(suspender.stop_or_pause())
        await asyncio.sleep(0.01)
        paused.clear()
        return await asyncio.wait_for(task, timeout=1)

    assert asyncio.run(scenario()) is False


def test_step_reads_delay_each_time():
    running = Flag(True)
    suspender = Suspender(running, delay_ms=0)
    assert asyncio.run(suspender.step()) is True
    running.clear()
    assert asyncio.run(suspender.step()) is False


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------
class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_pathfinding_stats_timer_freezes_on_stop():
    clock = FakeClock()
    stats = PathfindingStats(clock=clock)
    stats.start()
    clock.now += 1.5
    assert stats.elapsed_ms == 1500.0
    stats.stop_timer()
    clock.now += 10
    assert stats.elapsed_ms == 1500.0
    assert stats.is_running is False


def test_pathfinding_stats_finish_and_reset():
    stats = PathfindingStats(clock=FakeClock())
    stats.start()
    stats.record_visits(12)
    stats.finish(-1)
    assert stats.to_dict()["path_distance"] == -1
    assert stats.visited_cells == 12
    stats.reset()
    assert stats.visited_cells == 0 and stats.path_distance == 0


def test_sorting_counters():
    counters = SortingCounters()
    counters.add_comparison()
    counters.add_accesses(2)
    counters.add_accesses(4)
    assert counters.to_dict() == {"comparisons": 1, "array_accesses": 6}
    counters.reset()
    assert counters.comparisons == 0


def test_format_time():
    assert format_time(0) == "0.000s"
    assert format_time(12345) == "12.345s"
    assert format_time(999.9) == "0.999s"
