import asyncio

import pytest

from engine.controller import RunState
from engine.tones import set_tone_player
from engine.worker import BackgroundLoop
from engine.pathfinding_session import NO_PATH_MESSAGE, PathfindingSession
from model import CellType
from conftest import BlockingPlayer


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def session(fast_config):
    return PathfindingSession(fast_config.with_overrides(grid_rows=5, grid_cols=5), clock=FakeClock())


def place_endpoints(session, start=(0, 0), end=(4, 4)):
    session.click(*start)
    session.click(*end)


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------
def test_clicks_place_start_then_end_then_walls(session):
    assert session.click(0, 0) is True
    assert session.click(4, 4) is True
    assert session.start.key == (0, 0)
    assert session.end.key == (4, 4)

    assert session.click(2, 2) is True
    assert session.grid.get(2, 2).type is CellType.WALL
    assert session.click(2, 2) is True
    assert session.grid.get(2, 2).type is CellType.EMPTY


def test_endpoint_can_be_picked_up_and_moved(session):
    place_endpoints(session)
    assert session.click(0, 0) is False
    assert session.selected is CellType.START

    assert session.click(1, 3) is True
    assert session.start.key == (1, 3)
    assert session.grid.get(0, 0).type is CellType.EMPTY
    assert session.selected is None
    assert session.grid.count(CellType.START) == 1


def test_selected_endpoint_cannot_land_on_the_other(session):
    place_endpoints(session)
    session.click(0, 0)
    assert session.click(4, 4) is False
    assert session.selected is CellType.START
    assert session.end.key == (4, 4)


def test_clicking_selected_endpoint_again_deselects(session):
    place_endpoints(session)
    session.click(4, 4)
    assert session.click(4, 4) is False
    assert session.selected is None
    assert session.end.key == (4, 4)


def test_paint_draws_walls_only_with_both_endpoints(session):
    assert session.paint(2, 2) is False
    place_endpoints(session)
    assert session.paint(2, 2) is True
    assert session.paint(2, 2) is False
    assert session.paint(0, 0) is False
    assert session.grid.get(2, 2).type is CellType.WALL


def test_out_of_bounds_click_raises(session):
    with pytest.raises(ValueError):
        session.click(5, 0)
    with pytest.raises(ValueError):
        session.paint(-1, 0)


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------
def test_run_without_endpoints_is_a_no_op(session):
    assert asyncio.run(session.run()) is None
    assert session.controller.state is RunState.IDLE


def test_run_finds_path_and_records_result(session):
    place_endpoints(session)
    result = asyncio.run(session.run("astar"))

    assert result.success
    assert result.path_distance == 8
    assert session.last_result is result
    assert session.stats.path_distance == 8
    assert session.controller.state is RunState.FINISHED
    assert session.notification is None
    assert session.grid.count(CellType.PATH) == 7


def test_no_path_raises_notification_that_expires(session):
    place_endpoints(session)
    session.click(1, 0)
    session.click(0, 1)
    result = asyncio.run(session.run("dijkstra"))

    assert not result.success
    assert session.stats.path_distance == -1
    assert session.notification.message == NO_PATH_MESSAGE

    session._clock.now += 4.9
    assert session.notification is not None
    session._clock.now += 0.2
    assert session.notification is None


def test_dismiss_notification(session):
    place_endpoints(session)
    session.click(1, 0)
    session.click(0, 1)
    asyncio.run(session.run("bidirectional"))
    session.dismiss_notification()
    assert session.notification is None


def test_editing_ignored_while_running(session):
    place_endpoints(session)

    async def scenario():
        task = asyncio.ensure_future(session.run("dfs"))
        await asyncio.sleep(0)
        assert session.is_running
        assert session.click(2, 2) is False
        assert session.paint(3, 3) is False
        session.stop()
        return await task

    result = asyncio.run(scenario())
    assert result.aborted
    assert session.controller.state is RunState.ABORTED
    assert session.stats.is_running is False


def test_second_run_cancels_the_first(session):
    place_endpoints(session)

    async def scenario():
        first = asyncio.ensure_future(session.run("dijkstra"))
        await asyncio.sleep(0)
        second = asyncio.ensure_future(session.run("astar"))
        return await first, await second

    first, second = asyncio.run(scenario())
    assert first.aborted
    assert second.success
    assert session.last_result is second
    assert session.algorithm_key == "astar"


def test_stop_from_the_request_thread_freezes_the_board(session):
    place_endpoints(session)
    player = BlockingPlayer()
    set_tone_player(player)
    loop = BackgroundLoop("pathfinding-test")
    try:
        future = loop.submit(session.run("dijkstra"))
        # the run is now parked inside its first visit tone
        assert player.entered.wait(timeout=5)
        session.stop()
        visited = session.grid.count(CellType.VISITED)
        player.release.set()
        result = future.result(timeout=5)
    finally:
        player.release.set()
        loop.stop()

    assert result.aborted
    assert session.grid.count(CellType.VISITED) == visited
    assert session.grid.count(CellType.PATH) == 0
    assert session.controller.state is RunState.ABORTED


def test_reset_keeps_walls_and_endpoints(session):
    place_endpoints(session)
    session.click(2, 2)
    asyncio.run(session.run("dijkstra"))
    session.reset()

    assert session.grid.count(CellType.VISITED) == 0
    assert session.grid.count(CellType.PATH) == 0
    assert session.grid.get(2, 2).type is CellType.WALL
    assert session.start.key == (0, 0)
    assert session.stats.visited_cells == 0
    assert session.last_result is None


def test_clear_all_empties_the_board(session):
    place_endpoints(session)
    session.click(2, 2)
    session.clear_all()
    assert session.start is None and session.end is None
    assert session.grid.count(CellType.WALL) == 0


def test_select_algorithm(session):
    info = session.select_algorithm("bidirectional")
    assert info.key == "bidirectional"
    assert session.algorithm.label == info.label
    with pytest.raises(ValueError):
        session.select_algorithm("bubble_sort")
    with pytest.raises(ValueError):
        asyncio.run(session.run("bogus"))


def test_snapshot_shape(session):
    place_endpoints(session)
    snap = session.snapshot()
    assert snap["grid"]["cells"][0][0] == "start"
    assert snap["algorithm"]["key"] == "dijkstra"
    assert snap["running"] is False
    assert snap["notification"] is None
    assert snap["result"] is None
