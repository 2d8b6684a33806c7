"""
tones.py — Sound Feedback
==========================
Algorithms only ever ask for "play a tone"; what actually makes a noise
is somebody else's job.  The process holds one TonePlayer, created on
first use:

    play_tone(bar_frequency(123), intensity=50)

The default player is a ToneQueue that buffers events until the browser
drains them (`GET /api/*/state`) and plays them with WebAudio.  Tests
install their own recorder with set_tone_player().

A failing player never takes an algorithm down: play_tone() logs the
first failure as a warning, later ones at debug level, and returns.
"""

import logging
import math
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from model import Cell


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Frequency mappings
# ---------------------------------------------------------------------------
def bar_frequency(height: float) -> float:
    """Bar height (0-310 px) → 400-1200 Hz."""
    return 400.0 + (height / 310.0) * 800.0


def visit_frequency(cell: Cell, end: Optional[Cell], rows: int, cols: int) -> float:
    """Closer to the goal → higher pitch."""
    if end is None:
        return bar_frequency(0.0)
    distance = math.hypot(cell.x - end.x, cell.y - end.y)
    max_distance = math.hypot(cols, rows)
    return bar_frequency((1.0 - distance / max_distance) * 40.0)


def path_frequency(progress: float) -> float:
    """Path animation: A3 (220 Hz) at the start up to A5 (880 Hz) at the end."""
    progress = min(1.0, max(0.0, progress))
    return 220.0 + progress * 660.0


# ---------------------------------------------------------------------------
# Events & players
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ToneEvent:
    frequency:   float
    intensity:   float = 100.0     # 0-100, scaled to gain by the player
    duration_ms: float = 100.0
    wave:        str   = "square"

    def to_dict(self) -> dict:
        return {
            "frequency":   round(self.frequency, 2),
            "intensity":   self.intensity,
            "duration_ms": self.duration_ms,
            "wave":        self.wave,
        }


class TonePlayer:
    def play(self, event: ToneEvent) -> None:
        raise NotImplementedError


class ToneQueue(TonePlayer):
    """Bounded, thread-safe buffer of pending tones for a browser to play."""

    def __init__(self, maxlen: int = 256):
        self._events: Deque[ToneEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def play(self, event: ToneEvent) -> None:
        with self._lock:
            self._events.append(event)

    def drain(self) -> List[ToneEvent]:
        with self._lock:
            events = list(self._events)
            self._events.clear()
        return events

    def __len__(self) -> int:
        return len(self._events)


# ---------------------------------------------------------------------------
# Process-wide player
# ---------------------------------------------------------------------------
_player: Optional[TonePlayer] = None
_player_lock = threading.Lock()
_warned = False


def get_tone_player() -> TonePlayer:
    global _player
    with _player_lock:
        if _player is None:
            _player = ToneQueue()
            logger.debug("tone player initialised: %s", type(_player).__name__)
        return _player


def set_tone_player(player: Optional[TonePlayer]) -> Optional[TonePlayer]:
    """Swap the process-wide player (None → lazily recreate).  Returns the old one."""
    global _player, _warned
    with _player_lock:
        previous, _player = _player, player
        _warned = False
    return previous


def drain_tones() -> List[ToneEvent]:
    player = get_tone_player()
    if isinstance(player, ToneQueue):
        return player.drain()
    return []


def play_tone(
    frequency: float,
    intensity: float = 100.0,
    muted: bool = False,
    duration_ms: float = 100.0,
) -> None:
    global _warned
    if muted:
        return
    try:
        get_tone_player().play(ToneEvent(frequency, intensity, duration_ms))
    except Exception:
        if not _warned:
            _warned = True
            logger.warning("tone playback failed; continuing without sound", exc_info=True)
        else:
            logger.debug("tone playback failed again", exc_info=True)
