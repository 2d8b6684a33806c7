"""
astar.py — A* Search
=====================
Dijkstra's frontier mechanics ranked by f = g + h, where h is the
Manhattan distance to the goal (admissible on a 4-connected unit grid,
so the path is as short as Dijkstra's while far fewer cells are painted).

    g      : cost map keyed by cell coordinate — also the "seen" test
    f      : g + heuristic(cell, end), recomputed whenever g improves
    parent : predecessor map for the backtrace

Ties in f are broken by insertion order (stable sort).
"""

from typing import Dict, List, Optional, Set, Tuple

from model import Cell, heuristic
from algorithms.context import PathfindingContext, SearchResult
from algorithms.reconstruction import reconstruct_path


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(grid, start, end):",                   # 0
    "    g[start] ← 0",                               # 1
    "    f[start] ← h(start, end)",                   # 2
    "    open ← [start]",                             # 3
    "    while open is not empty:",                   # 4
    "        node ← pop min-f(open)",                 # 5
    "        if node == end: return path",            # 6
    "        for nbr in neighbours(node):",           # 7
    "            t ← g[node] + 1",                    # 8
    "            if nbr ∉ g or t < g[nbr]:",          # 9
    "                parent[nbr] ← node",             # 10
    "                g[nbr] ← t",                     # 11
    "                f[nbr] ← t + h(nbr, end)",       # 12
    "                if nbr ∉ open: open.push(nbr)",  # 13
    "    return NOT FOUND",                           # 14
]


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------
async def astar(ctx: PathfindingContext) -> Optional[SearchResult]:
    start, end = ctx.start, ctx.end
    if start is None or end is None:
        return None

    g_score:   Dict[Tuple[int, int], int]  = {start.key: 0}
    f_score:   Dict[Tuple[int, int], int]  = {start.key: heuristic(start, end)}
    came_from: Dict[Tuple[int, int], Cell] = {}
    frontier:  List[Cell]                  = [start]
    queued:    Set[Tuple[int, int]]        = {start.key}

    while frontier and ctx.running:
        frontier.sort(key=lambda c: f_score[c.key])
        current = frontier.pop(0)
        queued.discard(current.key)

        if current.key == end.key:
            return await ctx.succeed(lambda: reconstruct_path(ctx, current, came_from))

        for nbr in ctx.grid.neighbours(current):
            if not ctx.running:
                return ctx.abort()

            tentative = g_score[current.key] + 1
            known = g_score.get(nbr.key)
            if known is not None and tentative >= known:
                continue

            came_from[nbr.key] = current
            g_score[nbr.key] = tentative
            f_score[nbr.key] = tentative + heuristic(nbr, end)
            if nbr.key in queued:
                continue

            frontier.append(nbr)
            queued.add(nbr.key)
            if not await ctx.commit_visit(nbr):
                return ctx.abort()

    return ctx.exhausted()
