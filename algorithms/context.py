"""
context.py — Algorithm Run Contracts
=====================================
What every algorithm receives and what a pathfinding run hands back.

    PathfindingContext  →  dijkstra / astar / dfs / bidirectional
                       ←  SearchResult  (or None if start / end is missing)

    SortingContext      →  bubble / selection / shaker / merge
                       ←  nothing; the run clears its own `running` flag

Design decisions:
  - The context is the algorithm's ONLY window onto the outside world:
    the live grid / array, the callbacks that animate a step, the shared
    cancellation Flag and the stats sink.  Algorithms never import the
    sessions or the web layer.
  - "Aborted" is a real outcome, separate from "not found", so callers
    can tell a user pressing Stop from a walled-in start.
"""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional

from model import ArrayElement, Cell, CellType, ElementStatus, Grid
from engine.controller import Flag
from engine.stats import PathfindingStats, SortingCounters


logger = logging.getLogger(__name__)

VisitNode = Callable[[Cell], Awaitable[None]]
UpdateItem = Callable[..., None]
Swap = Callable[[int, int], None]
StopOrPause = Callable[[], Awaitable[bool]]
VerifySorted = Callable[[], Awaitable[bool]]


# ---------------------------------------------------------------------------
# Pathfinding result
# ---------------------------------------------------------------------------
class Outcome(Enum):
    FOUND     = "found"
    NOT_FOUND = "not_found"
    ABORTED   = "aborted"


@dataclass(frozen=True)
class SearchResult:
    """
    Attributes:
        outcome       : FOUND / NOT_FOUND / ABORTED.
        path          : start → end cells (empty unless a path was built).
        visited_count : Frontier insertions that were animated.
    """

    outcome:        Outcome
    path:           List[Cell] = field(default_factory=list)
    visited_count:  int        = 0

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.FOUND

    @property
    def aborted(self) -> bool:
        return self.outcome is Outcome.ABORTED

    @property
    def path_distance(self) -> int:
        return len(self.path) - 1 if self.success else -1

    def to_dict(self) -> dict:
        return {
            "outcome":       self.outcome.value,
            "success":       self.success,
            "path":          [list(c.key) for c in self.path],
            "visited_count": self.visited_count,
            "path_distance": self.path_distance,
        }


# ---------------------------------------------------------------------------
# Pathfinding context
# ---------------------------------------------------------------------------
@dataclass
class PathfindingContext:
    """
    Attributes:
        grid               : Live grid; read for neighbours, painted by callbacks.
        start / end        : Endpoints (None → the run is a no-op).
        visit_node         : Awaitable "paint this cell visited" callback.
        running            : The run's cancellation Flag.
        stats              : Sink for visited count / timer / path distance.
        animation_speed_ms : Per-visit delay; path cells animate at half.
        muted              : Silence path tones.
        visited_count      : Running tally maintained by commit_visit().
        lock               : Shared with the session; held while painting so
                             a concurrent stop() cannot interleave.
    """

    grid:                Grid
    start:               Optional[Cell]
    end:                 Optional[Cell]
    visit_node:          VisitNode
    running:             Flag
    stats:               PathfindingStats
    animation_speed_ms:  float = 30.0
    muted:               bool  = False
    visited_count:       int   = 0
    lock:                Any   = field(default_factory=threading.Lock, repr=False)

    async def commit_visit(self, cell: Cell) -> bool:
        """
        Animate one new frontier entry.  Returns False (caller must abort)
        if the run was cancelled before or during the visit.
        """
        if not self.running:
            return False
        await self.visit_node(cell)
        if not self.running:
            return False
        self.visited_count += 1
        self.stats.record_visits(self.visited_count)
        return True

    def paint(self, cell: Cell, cell_type: CellType) -> bool:
        """Mark `cell` unless the run has been cancelled."""
        with self.lock:
            if not self.running:
                return False
            return self.grid.mark(cell, cell_type)

    async def succeed(self, animate: Callable[[], Awaitable[List[Cell]]]) -> SearchResult:
        """Goal reached: stop the clock, animate the path, then record its length."""
        if self.running:
            self.stats.stop_timer()
        path = await animate()
        if not self.running:
            return SearchResult(Outcome.ABORTED, path, self.visited_count)
        self.stats.path_distance = len(path) - 1
        return SearchResult(Outcome.FOUND, path, self.visited_count)

    def exhausted(self) -> SearchResult:
        if not self.running:
            return self.abort()
        self.stats.finish(-1)
        return SearchResult(Outcome.NOT_FOUND, [], self.visited_count)

    def abort(self) -> SearchResult:
        return SearchResult(Outcome.ABORTED, [], self.visited_count)


# ---------------------------------------------------------------------------
# Sorting context
# ---------------------------------------------------------------------------
@dataclass
class SortingContext:
    """
    Attributes:
        array          : Snapshot of the visible array at run start.  Each
                         algorithm copies the values into its own shadow list.
        update_item    : update_item(index, status, value=None) — immediate.
        swap           : swap(i, j) on the visible array.
        stop_or_pause  : Suspension point; True means "stop now".
        verify_sorted  : Animated final ascending-order sweep.
        counters       : Comparison / access counters.
        running        : The run's Flag; the algorithm clears it when done.
    """

    array:          List[ArrayElement]
    update_item:    UpdateItem
    swap:           Swap
    stop_or_pause:  StopOrPause
    verify_sorted:  VerifySorted
    counters:       SortingCounters
    running:        Flag

    def shadow_values(self) -> List[int]:
        return [e.value for e in self.array]

    def count_comparison(self, accesses: int = 2) -> None:
        self.counters.add_comparison()
        self.counters.add_accesses(accesses)

    def mark(self, index: int, status: ElementStatus, value: Optional[int] = None) -> None:
        self.update_item(index, status, value)

    async def complete(self) -> None:
        """Final verification sweep, then hand control back to the caller."""
        if not self.running:
            return
        if not await self.verify_sorted() and self.running:
            logger.error("sort finished but the array is not in ascending order")
        self.running.clear()
