import asyncio

from algorithms.reconstruction import animate_path, backtrace, merge_paths
from engine.controller import Flag
from model import Cell, CellType
from conftest import make_context, make_grid


def chain(*keys):
    """came_from map for a straight chain of coordinates."""
    came_from = {}
    for prev, cur in zip(keys, keys[1:]):
        came_from[cur] = Cell(*prev)
    return came_from


def test_backtrace_runs_start_to_goal():
    came_from = chain((0, 0), (1, 0), (2, 0), (2, 1))
    path = backtrace(Cell(2, 1), came_from)
    assert [c.key for c in path] == [(0, 0), (1, 0), (2, 0), (2, 1)]


def test_backtrace_of_start_is_single_cell():
    assert [c.key for c in backtrace(Cell(0, 0), {})] == [(0, 0)]


def test_merge_paths_keeps_meeting_cell_once():
    start_side = chain((0, 0), (1, 0), (2, 0))
    end_side = chain((4, 0), (3, 0), (2, 0))
    path = merge_paths(Cell(2, 0), start_side, end_side)
    assert [c.key for c in path] == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]


def test_animate_path_skips_endpoints_and_rises_in_pitch(tones):
    grid = make_grid(1, 4, start=(0, 0), end=(3, 0))
    ctx = make_context(grid)
    ctx.muted = False
    path = [grid.get(x, 0) for x in range(4)]

    asyncio.run(animate_path(ctx, path))

    assert [grid.get(x, 0).type for x in range(4)] == [
        CellType.START, CellType.PATH, CellType.PATH, CellType.END,
    ]
    frequencies = [e.frequency for e in tones.events]
    assert len(frequencies) == 2
    assert frequencies == sorted(frequencies)
    assert all(e.intensity == 50 for e in tones.events)


def test_animate_path_stops_when_cancelled():
    grid = make_grid(1, 5, start=(0, 0), end=(4, 0))
    ctx = make_context(grid, running=Flag(False))
    path = [grid.get(x, 0) for x in range(5)]

    returned = asyncio.run(animate_path(ctx, path))

    assert returned == path
    assert grid.count(CellType.PATH) == 0
