"""
config.py — Visualizer Settings
================================
Every tunable the engine and the web app read lives here.

    from config import VisualizerConfig
    cfg = VisualizerConfig()                       # defaults
    cfg = VisualizerConfig.from_env()              # VISUALIZER_* overrides
    cfg = VisualizerConfig.from_mapping({"grid_rows": 12})

The defaults reproduce the classic page settings: a 10×20 grid animated at
30 ms per visited cell, and a 30-bar array sorted at 100 ms per step (1x).
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping


# ---------------------------------------------------------------------------
# Enumerated choices
# ---------------------------------------------------------------------------
SPEED_MULTIPLIERS: Dict[str, float] = {
    "0.5x": 0.5,
    "1x":   1.0,
    "4x":   4.0,
    "100x": 100.0,
}

ARRAY_SIZES = (10, 20, 30, 40, 50)


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VisualizerConfig:
    """
    Attributes:
        grid_rows / grid_cols : Grid dimensions for a fresh pathfinding grid.
        animation_speed_ms    : Sleep before each visited cell is painted.
                                Path cells animate at half this value.
        sort_base_delay_ms    : Per-step delay at 1x; divided by the multiplier.
        sort_speed            : Key into SPEED_MULTIPLIERS.
        array_size            : Number of bars (one of ARRAY_SIZES).
        pause_poll_ms         : Poll interval while a sort is paused.
        verify_delay_ms       : Delay per pair in the final "is it sorted" sweep.
        shuffle_steps         : Frames in the shuffle animation.
        notification_ttl_s    : Lifetime of the "no path found" banner.
        muted                 : Drop every tone.
        min_value / max_value : Inclusive range of random bar heights.
    """

    grid_rows:           int   = 10
    grid_cols:           int   = 20
    animation_speed_ms:  float = 30.0
    sort_base_delay_ms:  float = 100.0
    sort_speed:          str   = "1x"
    array_size:          int   = 30
    pause_poll_ms:       float = 100.0
    verify_delay_ms:     float = 20.0
    shuffle_steps:       int   = 15
    notification_ttl_s:  float = 5.0
    muted:               bool  = False
    min_value:           int   = 10
    max_value:           int   = 309

    def __post_init__(self):
        if self.grid_rows < 1 or self.grid_cols < 1:
            raise ValueError("grid dimensions must be positive")
        if self.sort_speed not in SPEED_MULTIPLIERS:
            raise ValueError(f"Unknown speed: {self.sort_speed}")
        if self.array_size < 0:
            raise ValueError("array_size must be >= 0")
        if self.min_value > self.max_value:
            raise ValueError("min_value must not exceed max_value")

    @property
    def sort_delay_ms(self) -> float:
        return self.sort_base_delay_ms / SPEED_MULTIPLIERS[self.sort_speed]

    def with_overrides(self, **kwargs: Any) -> "VisualizerConfig":
        return replace(self, **kwargs)

    # ------------------------------------------------------------------
    # Loaders
    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VisualizerConfig":
        """Build a config from a plain dict, coercing values to field types."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        kwargs = {name: _coerce(known[name].type, value) for name, value in data.items()}
        return cls(**kwargs)

    @classmethod
    def from_env(cls, prefix: str = "VISUALIZER_") -> "VisualizerConfig":
        """Read overrides such as VISUALIZER_GRID_ROWS=12 from the environment."""
        data = {}
        for f in fields(cls):
            raw = os.environ.get(prefix + f.name.upper())
            if raw is not None:
                data[f.name] = raw
        return cls.from_mapping(data)


def _coerce(kind: Any, value: Any) -> Any:
    name = kind if isinstance(kind, str) else getattr(kind, "__name__", "")
    if name == "bool":
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if name == "int":
        return int(value)
    if name == "float":
        return float(value)
    return str(value)
