"""
engine/
-------
Execution layer: flags, suspension, stats, sound and the background loop.

    from engine import Controller, Flag, Suspender
    from engine import PathfindingStats, SortingCounters
    from engine import play_tone, set_tone_player

The sessions live in engine.pathfinding_session / engine.sorting_session
and are imported from there (they depend on the algorithms package, which
itself depends on this one).
"""

from engine.controller import Controller, Flag, RunState, Suspender, sleep_ms
from engine.stats      import PathfindingStats, SortingCounters, format_time
from engine.tones      import (
    ToneEvent,
    TonePlayer,
    ToneQueue,
    bar_frequency,
    drain_tones,
    get_tone_player,
    path_frequency,
    play_tone,
    set_tone_player,
    visit_frequency,
)
from engine.worker     import BackgroundLoop

__all__ = [
    "Controller",       "Flag",            "RunState",   "Suspender",  "sleep_ms",
    "PathfindingStats", "SortingCounters", "format_time",
    "ToneEvent",        "TonePlayer",      "ToneQueue",
    "bar_frequency",    "visit_frequency", "path_frequency",
    "get_tone_player",  "set_tone_player", "drain_tones", "play_tone",
    "BackgroundLoop",
]
