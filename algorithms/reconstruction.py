"""
reconstruction.py — Path Backtrace & Animation
===============================================
Turns a predecessor map into a start → end list of cells and paints it.

    came_from : {(x, y): Cell}   — "cell at (x, y) was reached from Cell"

Two shapes:
  • Linear          — one map, walked back from the goal.
  • Bidirectional   — two maps that share a meeting cell; the start side is
                      walked back and reversed, the end side walked forward
                      with the meeting cell dropped so it appears once.

Animation runs in path order with a rising pitch and stops the moment the
run is cancelled, returning the list it already built.
"""

from typing import Dict, List, Optional, Tuple

from model import Cell, CellType
from engine.controller import sleep_ms
from engine.tones import path_frequency, play_tone
from algorithms.context import PathfindingContext


CameFrom = Dict[Tuple[int, int], Cell]


# ---------------------------------------------------------------------------
# Backtrace
# ---------------------------------------------------------------------------
def _walk(cell: Optional[Cell], came_from: CameFrom) -> List[Cell]:
    """Follow predecessors from `cell` until a cell with no entry."""
    chain = []
    while cell is not None:
        chain.append(cell)
        cell = came_from.get(cell.key)
    return chain


def backtrace(goal: Cell, came_from: CameFrom) -> List[Cell]:
    chain = _walk(goal, came_from)
    chain.reverse()
    return chain


def merge_paths(meeting: Cell, start_came_from: CameFrom, end_came_from: CameFrom) -> List[Cell]:
    start_half = _walk(meeting, start_came_from)
    start_half.reverse()
    end_half = _walk(meeting, end_came_from)[1:]
    return start_half + end_half


# ---------------------------------------------------------------------------
# Animation
# ---------------------------------------------------------------------------
async def animate_path(ctx: PathfindingContext, path: List[Cell]) -> List[Cell]:
    endpoints = {c.key for c in (ctx.start, ctx.end) if c is not None}
    total = len(path)
    for i, cell in enumerate(path):
        if not ctx.running:
            break
        if cell.key in endpoints:
            continue
        await sleep_ms(ctx.animation_speed_ms / 2)
        if not ctx.paint(cell, CellType.PATH):
            break
        play_tone(path_frequency(i / total), intensity=50, muted=ctx.muted)
    return path


async def reconstruct_path(ctx: PathfindingContext, goal: Cell, came_from: CameFrom) -> List[Cell]:
    return await animate_path(ctx, backtrace(goal, came_from))


async def reconstruct_bidirectional_path(
    ctx: PathfindingContext,
    meeting: Cell,
    start_came_from: CameFrom,
    end_came_from: CameFrom,
) -> List[Cell]:
    return await animate_path(ctx, merge_paths(meeting, start_came_from, end_came_from))
