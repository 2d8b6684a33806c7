"""
pathfinding_session.py — Pathfinding Workspace
================================================
The ONLY object the web layer talks to for the grid page.  It owns the
live Grid, the run Controller, the stats and the "no path" notification,
and builds the PathfindingContext each algorithm receives.

Editing (ignored while a run is active):
    click(x, y)   start → end → wall toggle; clicking start / end selects
                  it, the next click moves it
    paint(x, y)   mouse-drag: walls once both endpoints exist, or places a
                  selected endpoint
Runs:
    await run("astar")      → SearchResult | None
    stop() / reset() / clear_all() / select_algorithm(key)

Design decisions:
  - visit_node is a closure over the run's own Flag and Grid, so a task
    that was superseded can never paint onto a newer board.
  - Handlers run on the request thread and the run on the background
    loop.  The flag check and the grid write happen under one lock that
    stop() / reset() also take, so nothing is painted after they return.
  - Exhaustion raises a notification that expires after
    `notification_ttl_s`; cancellation never does.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from config import VisualizerConfig
from model import PLACEABLE, Cell, CellType, Grid
from engine.controller import Controller, Suspender
from engine.stats import PathfindingStats
from engine.tones import play_tone, visit_frequency
from algorithms import (
    PATHFINDING,
    PATHFINDING_KIND,
    AlgoInfo,
    Outcome,
    PathfindingContext,
    SearchResult,
    get_algorithm,
)


logger = logging.getLogger(__name__)

NO_PATH_MESSAGE = "No path found! The destination is blocked by walls."
DEFAULT_ALGORITHM = "dijkstra"


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Notification:
    message:    str
    created_at: float

    def expired(self, now: float, ttl_s: float) -> bool:
        return now - self.created_at >= ttl_s

    def to_dict(self) -> dict:
        return {"message": self.message}


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
class PathfindingSession:
    """
    Attributes:
        config        : VisualizerConfig in effect.
        grid          : Live grid (replaced on clear_all / run start).
        algorithm_key : Currently selected PATHFINDING key.
        controller    : Owns the running Flag of the current run.
        stats         : Counters rendered by the stats panel.
        selected      : START / END while an endpoint is picked up, else None.
        last_result   : Outcome of the most recent finished run.
    """

    def __init__(
        self,
        config: Optional[VisualizerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config:        VisualizerConfig       = config or VisualizerConfig()
        self.grid:          Grid                   = Grid.create(self.config.grid_rows, self.config.grid_cols)
        self.algorithm_key: str                    = DEFAULT_ALGORITHM
        self.controller:    Controller             = Controller("pathfinding")
        self.stats:         PathfindingStats       = PathfindingStats(clock=clock)
        self.selected:      Optional[CellType]     = None
        self.last_result:   Optional[SearchResult] = None
        self._notification: Optional[Notification] = None
        self._clock = clock
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def start(self) -> Optional[Cell]:
        return self.grid.find(CellType.START)

    @property
    def end(self) -> Optional[Cell]:
        return self.grid.find(CellType.END)

    @property
    def is_running(self) -> bool:
        return self.controller.is_running

    @property
    def algorithm(self) -> AlgoInfo:
        return PATHFINDING[self.algorithm_key]

    @property
    def notification(self) -> Optional[Notification]:
        note = self._notification
        if note is not None and note.expired(self._clock(), self.config.notification_ttl_s):
            self._notification = None
            return None
        return note

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def _checked(self, x: int, y: int) -> Cell:
        if not self.grid.in_bounds(x, y):
            raise ValueError(f"({x}, {y}) is outside the {self.grid.rows}×{self.grid.cols} grid")
        return self.grid.get(x, y)

    def _place_selected(self, cell: Cell) -> bool:
        if cell.type == self.selected:
            # clicking the picked-up node again puts it back down
            self.selected = None
            return False
        if cell.type not in PLACEABLE:
            return False
        old = self.grid.find(self.selected)
        if old is not None:
            self.grid.set_type(old.x, old.y, CellType.EMPTY)
        self.grid.set_type(cell.x, cell.y, self.selected)
        logger.debug("moved %s to (%d, %d)", self.selected.value, cell.x, cell.y)
        self.selected = None
        return True

    def click(self, x: int, y: int) -> bool:
        """Apply one click.  Returns True if the grid changed."""
        cell = self._checked(x, y)
        if self.is_running:
            return False

        if self.selected is not None:
            return self._place_selected(cell)

        if cell.type in (CellType.START, CellType.END):
            self.selected = cell.type
            return False

        placeable = cell.type in (CellType.EMPTY, CellType.WALL)
        if self.start is None and placeable:
            self.grid.set_type(x, y, CellType.START)
            return True
        if self.end is None and placeable:
            self.grid.set_type(x, y, CellType.END)
            return True

        if cell.type == CellType.WALL:
            self.grid.set_type(x, y, CellType.EMPTY)
            return True
        if cell.type == CellType.EMPTY:
            self.grid.set_type(x, y, CellType.WALL)
            return True
        return False

    def paint(self, x: int, y: int) -> bool:
        """Mouse-drag over (x, y).  Returns True if the grid changed."""
        cell = self._checked(x, y)
        if self.is_running:
            return False
        if self.selected is not None:
            return self._place_selected(cell)
        if self.start is None or self.end is None:
            return False
        if cell.type in (CellType.START, CellType.END, CellType.WALL):
            return False
        self.grid.set_type(x, y, CellType.WALL)
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def stop(self) -> bool:
        """Cancel the current run, if any.  Partial painting stays on the grid."""
        with self._lock:
            cancelled = self.controller.cancel()
        if cancelled:
            self.stats.stop_timer()
        return cancelled

    def reset(self) -> None:
        """Cancel, clear visited / path cells and zero the stats."""
        with self._lock:
            self.controller.reset()
            self.grid = self.grid.reset_path_and_visited()
        self.stats.reset()
        self.last_result = None
        self._notification = None

    def clear_all(self) -> None:
        """Cancel and start over with an empty board."""
        with self._lock:
            self.controller.reset()
            self.grid = Grid.create(self.config.grid_rows, self.config.grid_cols)
        self.stats.reset()
        self.selected = None
        self.last_result = None
        self._notification = None

    def select_algorithm(self, key: str) -> AlgoInfo:
        info = get_algorithm(key, PATHFINDING_KIND)
        if info is None:
            raise ValueError(f"Unknown pathfinding algorithm: {key}")
        self.reset()
        self.algorithm_key = key
        return info

    def dismiss_notification(self) -> None:
        self._notification = None

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------
    def _make_visitor(self, suspender: Suspender, grid: Grid, end: Cell):
        rows, cols = grid.rows, grid.cols
        flag = suspender.running

        async def visit_node(cell: Cell) -> None:
            if not await suspender.step():
                return
            with self._lock:
                if not flag:
                    return
                grid.mark(cell, CellType.VISITED)
            play_tone(visit_frequency(cell, end, rows, cols), intensity=75, muted=self.config.muted)

        return visit_node

    async def run(self, key: Optional[str] = None) -> Optional[SearchResult]:
        """
        Run one algorithm to completion on the current board.  Any run in
        flight is cancelled first (without waiting for it).
        """
        key = key or self.algorithm_key
        info = get_algorithm(key, PATHFINDING_KIND)
        if info is None:
            raise ValueError(f"Unknown pathfinding algorithm: {key}")

        start, end = self.start, self.end
        if start is None or end is None:
            logger.info("pathfinding: place a start and an end node first")
            return None

        with self._lock:
            flag = self.controller.begin()
            self.algorithm_key = key
            self.selected = None
            self._notification = None
            self.grid = self.grid.reset_path_and_visited()
        self.stats.start()
        suspender = Suspender(flag, delay_ms=self.config.animation_speed_ms)

        ctx = PathfindingContext(
            grid=self.grid,
            start=start,
            end=end,
            visit_node=self._make_visitor(suspender, self.grid, end),
            running=flag,
            stats=self.stats,
            animation_speed_ms=self.config.animation_speed_ms,
            muted=self.config.muted,
            lock=self._lock,
        )
        logger.info("pathfinding: %s from %s to %s", info.label, start.key, end.key)

        result: Optional[SearchResult] = None
        try:
            result = await info.fn(ctx)
        except Exception:
            logger.exception("pathfinding: %s crashed", key)
            self.stats.stop_timer()
        finally:
            self.controller.finish(flag)

        if result is not None and flag is self.controller.running:
            self.last_result = result
            if result.outcome is Outcome.NOT_FOUND:
                self._notification = Notification(NO_PATH_MESSAGE, self._clock())
                logger.info("pathfinding: %s found no path", key)
            elif result.success:
                logger.info(
                    "pathfinding: %s found a %d-step path after %d visits",
                    key, result.path_distance, result.visited_count,
                )
        return result

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def snapshot(self) -> dict:
        note = self.notification
        return {
            "grid":         self.grid.to_dict(),
            "stats":        self.stats.to_dict(),
            "algorithm":    self.algorithm.to_dict(),
            "state":        self.controller.state.value,
            "running":      self.is_running,
            "selected":     self.selected.value if self.selected else None,
            "notification": note.to_dict() if note else None,
            "result":       self.last_result.to_dict() if self.last_result else None,
        }
