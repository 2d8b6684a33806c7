import sys
import threading
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from config import VisualizerConfig
from engine.controller import Flag
from engine.stats import PathfindingStats
from engine.tones import TonePlayer, set_tone_player
from model import CellType, Grid


class RecordingPlayer(TonePlayer):
    """Keeps every ToneEvent instead of making noise."""

    def __init__(self):
        self.events = []

    def play(self, event):
        self.events.append(event)


class BlockingPlayer(TonePlayer):
    """Parks the first tone until `release` is set; later tones pass through."""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()

    def play(self, event):
        if not self.entered.is_set():
            self.entered.set()
            self.release.wait(timeout=5)


@pytest.fixture(autouse=True)
def tones():
    """Install a recording tone player for every test."""

    player = RecordingPlayer()
    previous = set_tone_player(player)
    yield player
    set_tone_player(previous)


@pytest.fixture
def fast_config():
    return VisualizerConfig(
        animation_speed_ms=0,
        sort_base_delay_ms=0,
        pause_poll_ms=1,
        verify_delay_ms=0,
        shuffle_steps=3,
    )


def make_grid(rows=10, cols=20, start=(0, 0), end=(19, 9), walls=()):
    grid = Grid.create(rows, cols)
    if start is not None:
        grid.set_type(*start, CellType.START)
    if end is not None:
        grid.set_type(*end, CellType.END)
    for x, y in walls:
        grid.set_type(x, y, CellType.WALL)
    return grid


def make_context(grid, running=None, speed_ms=0, visits=None):
    """PathfindingContext whose visit_node marks cells and optionally records them."""
    from algorithms import PathfindingContext

    running = running if running is not None else Flag(True)

    async def visit_node(cell):
        if visits is not None:
            visits.append(cell.key)
        if running:
            grid.mark(cell, CellType.VISITED)

    return PathfindingContext(
        grid=grid,
        start=grid.find(CellType.START),
        end=grid.find(CellType.END),
        visit_node=visit_node,
        running=running,
        stats=PathfindingStats(),
        animation_speed_ms=speed_ms,
        muted=True,
    )
