"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Coroutine Dijkstra over the unit-cost 4-connected grid.

Each round:
  1. Stable-sort the frontier by distance, pop the first cell
  2. Goal popped  →  stop the clock, animate the path, FOUND
  3. Relax every neighbour with cost +1 (missing or strictly better)
  4. Neighbour not yet in the frontier  →  enqueue + visit_node()
  5. Frontier empty  →  NOT_FOUND

The frontier is a plain list rather than a heap: ties are broken by
insertion order, which together with the grid's fixed neighbour order
makes every run on the same board paint the same cells.
"""

from typing import Dict, List, Optional, Set, Tuple

from model import Cell
from algorithms.context import PathfindingContext, SearchResult
from algorithms.reconstruction import reconstruct_path


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(grid, start, end):",              # 0
    "    dist ← {start: 0}",                        # 1
    "    open ← [start]",                           # 2
    "    while open is not empty:",                 # 3
    "        node ← pop min-dist(open)",            # 4
    "        if node == end: return path",          # 5
    "        for nbr in neighbours(node):",         # 6
    "            d ← dist[node] + 1",               # 7
    "            if nbr ∉ dist or d < dist[nbr]:",  # 8
    "                dist[nbr] ← d",                # 9
    "                parent[nbr] ← node",           # 10
    "                if nbr ∉ open: open.push(nbr)",# 11
    "    return NOT FOUND",                         # 12
]


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------
async def dijkstra(ctx: PathfindingContext) -> Optional[SearchResult]:
    start, end = ctx.start, ctx.end
    if start is None or end is None:
        return None

    distances: Dict[Tuple[int, int], int]  = {start.key: 0}
    came_from: Dict[Tuple[int, int], Cell] = {}
    frontier:  List[Cell]                  = [start]
    queued:    Set[Tuple[int, int]]        = {start.key}

    while frontier and ctx.running:
        frontier.sort(key=lambda c: distances[c.key])
        current = frontier.pop(0)
        queued.discard(current.key)

        if current.key == end.key:
            return await ctx.succeed(lambda: reconstruct_path(ctx, current, came_from))

        for nbr in ctx.grid.neighbours(current):
            if not ctx.running:
                return ctx.abort()

            new_distance = distances[current.key] + 1
            known = distances.get(nbr.key)
            if known is not None and new_distance >= known:
                continue

            came_from[nbr.key] = current
            distances[nbr.key] = new_distance
            if nbr.key in queued:
                continue

            frontier.append(nbr)
            queued.add(nbr.key)
            if not await ctx.commit_visit(nbr):
                return ctx.abort()

    return ctx.exhausted()
