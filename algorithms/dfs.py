"""
dfs.py — Depth-First Search
=============================
Explicit LIFO stack (no Python recursion limit issues).  A cell is marked
seen the moment it is pushed, so each cell is painted at most once.

The path it returns is valid but usually far from the shortest: the last
neighbour pushed (right, then left, down, up) is the next one explored.
"""

from typing import Dict, List, Optional, Set, Tuple

from model import Cell
from algorithms.context import PathfindingContext, SearchResult
from algorithms.reconstruction import reconstruct_path


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(grid, start, end):",                  # 0
    "    stack ← [start]",                         # 1
    "    seen ← {start}",                          # 2
    "    while stack is not empty:",               # 3
    "        node ← stack.pop()",                  # 4
    "        if node == end: return path",         # 5
    "        for nbr in neighbours(node):",        # 6
    "            if nbr ∉ seen:",                  # 7
    "                seen.add(nbr)",               # 8
    "                parent[nbr] ← node",          # 9
    "                stack.push(nbr)",             # 10
    "    return NOT FOUND",                        # 11
]


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------
async def dfs(ctx: PathfindingContext) -> Optional[SearchResult]:
    start, end = ctx.start, ctx.end
    if start is None or end is None:
        return None

    stack:     List[Cell]                  = [start]
    seen:      Set[Tuple[int, int]]        = {start.key}
    came_from: Dict[Tuple[int, int], Cell] = {}

    while stack and ctx.running:
        current = stack.pop()

        if current.key == end.key:
            return await ctx.succeed(lambda: reconstruct_path(ctx, current, came_from))

        for nbr in ctx.grid.neighbours(current):
            if not ctx.running:
                return ctx.abort()
            if nbr.key in seen:
                continue

            seen.add(nbr.key)
            came_from[nbr.key] = current
            stack.append(nbr)
            if not await ctx.commit_visit(nbr):
                return ctx.abort()

    return ctx.exhausted()
