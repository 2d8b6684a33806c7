"""
bidirectional.py — Bidirectional BFS
======================================
Two BFS frontiers grow at once, one from the start and one from the end.
Each round expands one cell from the start side, then one from the end
side.  The search stops the instant a freshly enqueued cell on one side
has already been seen by the other; that cell is the meeting point.

    start side : queue_s, seen_s, parent_s
    end side   : queue_e, seen_e, parent_e

The loop runs only while BOTH queues are non-empty: once either side has
nothing left to expand, no meeting point can appear.
"""

from collections import deque
from typing import Deque, Dict, List, Optional, Set, Tuple

from model import Cell
from algorithms.context import PathfindingContext, SearchResult
from algorithms.reconstruction import reconstruct_bidirectional_path


CameFrom = Dict[Tuple[int, int], Cell]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BiBFS(grid, start, end):",                         # 0
    "    Qs ← [start]; Qe ← [end]",                         # 1
    "    Vs ← {start}; Ve ← {end}",                         # 2
    "    while Qs and Qe:",                                 # 3
    "        expand one node of Qs (mark in Vs)",           # 4
    "            if nbr ∈ Ve: return join(nbr)",            # 5
    "        expand one node of Qe (mark in Ve)",           # 6
    "            if nbr ∈ Vs: return join(nbr)",            # 7
    "    return NOT FOUND",                                 # 8
]


class _Side:
    """One half of the search: its queue, seen set and predecessor map."""

    def __init__(self, origin: Cell):
        self.queue:     Deque[Cell]          = deque([origin])
        self.seen:      Set[Tuple[int, int]] = {origin.key}
        self.came_from: CameFrom             = {}


async def _expand(
    ctx: PathfindingContext,
    side: _Side,
    other: _Side,
) -> Tuple[bool, Optional[Cell]]:
    """
    Pop one cell from `side` and enqueue its unseen neighbours.
    Returns (keep_going, meeting_cell).  keep_going is False on cancel.
    """
    current = side.queue.popleft()
    for nbr in ctx.grid.neighbours(current):
        if not ctx.running:
            return False, None
        if nbr.key in side.seen:
            continue

        side.seen.add(nbr.key)
        side.came_from[nbr.key] = current
        side.queue.append(nbr)
        if not await ctx.commit_visit(nbr):
            return False, None

        if nbr.key in other.seen:
            return True, nbr
    return True, None


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------
async def bidirectional(ctx: PathfindingContext) -> Optional[SearchResult]:
    start, end = ctx.start, ctx.end
    if start is None or end is None:
        return None

    from_start = _Side(start)
    from_end = _Side(end)

    while from_start.queue and from_end.queue and ctx.running:
        for side, other in ((from_start, from_end), (from_end, from_start)):
            if not side.queue or not ctx.running:
                continue
            keep_going, meeting = await _expand(ctx, side, other)
            if not keep_going:
                return ctx.abort()
            if meeting is not None:
                return await ctx.succeed(
                    lambda: reconstruct_bidirectional_path(
                        ctx, meeting, from_start.came_from, from_end.came_from
                    )
                )

    return ctx.exhausted()
