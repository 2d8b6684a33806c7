"""
stats.py — Run Statistics & Instrumentation
============================================
Counters the stats panels render, updated by the algorithms while they
run.

    stats = PathfindingStats()
    stats.start()                 # zero everything, start the stopwatch
    stats.record_visits(12)       # visited-cells counter
    stats.stop_timer()            # target reached / frontier exhausted
    stats.finish(path_distance=28)

    counters = SortingCounters()
    counters.add_comparison()
    counters.add_accesses(2)

Counters are monotonic within a run and only reset at run start (or when
the user stops / clears).
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Optional


def format_time(ms: float) -> str:
    """12345 ms → '12.345s'."""
    ms = max(0, int(ms))
    seconds, millis = divmod(ms, 1000)
    return f"{seconds}.{millis:03d}s"


# ---------------------------------------------------------------------------
# Pathfinding
# ---------------------------------------------------------------------------
@dataclass
class PathfindingStats:
    """
    Attributes:
        visited_cells : Number of cells that entered a frontier this run.
        path_distance : Edges on the final path; -1 means "no path".
        is_running    : True while the stopwatch runs.
        clock         : Injected monotonic clock (seconds) for tests.
    """

    visited_cells:  int   = 0
    path_distance:  int   = 0
    is_running:     bool  = False
    clock:          Callable[[], float] = field(default=time.monotonic, repr=False)

    _started_at:    Optional[float] = field(default=None, init=False, repr=False)
    _frozen_ms:     float           = field(default=0.0, init=False, repr=False)

    def start(self) -> None:
        self.visited_cells = 0
        self.path_distance = 0
        self._frozen_ms = 0.0
        self._started_at = self.clock()
        self.is_running = True

    def reset(self) -> None:
        self.visited_cells = 0
        self.path_distance = 0
        self._frozen_ms = 0.0
        self._started_at = None
        self.is_running = False

    def record_visits(self, count: int) -> None:
        self.visited_cells = count

    def stop_timer(self) -> None:
        if self.is_running and self._started_at is not None:
            self._frozen_ms = (self.clock() - self._started_at) * 1000.0
        self.is_running = False

    def finish(self, path_distance: int) -> None:
        self.stop_timer()
        self.path_distance = path_distance

    @property
    def elapsed_ms(self) -> float:
        if self.is_running and self._started_at is not None:
            return (self.clock() - self._started_at) * 1000.0
        return self._frozen_ms

    def to_dict(self) -> dict:
        return {
            "visited_cells": self.visited_cells,
            "path_distance": self.path_distance,
            "elapsed_ms":    round(self.elapsed_ms, 1),
            "elapsed":       format_time(self.elapsed_ms),
            "is_running":    self.is_running,
        }


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
@dataclass
class SortingCounters:
    comparisons:    int = 0
    array_accesses: int = 0

    def add_comparison(self, n: int = 1) -> None:
        self.comparisons += n

    def add_accesses(self, n: int = 1) -> None:
        self.array_accesses += n

    def reset(self) -> None:
        self.comparisons = 0
        self.array_accesses = 0

    def to_dict(self) -> dict:
        return {"comparisons": self.comparisons, "array_accesses": self.array_accesses}
