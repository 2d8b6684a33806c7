"""
ui/
---
Presentation layer.

    from ui import render_grid, render_bars
    from ui import stats_panel, algorithm_selector, …
"""

from ui.canvas import render_grid, render_bars, CanvasConfig

from ui.controls import (
    algorithm_selector,
    pathfinding_controls,
    sorting_controls,
    speed_selector,
    size_selector,
    stats_panel,
    counters_panel,
    notification_banner,
    legend,
    algorithm_description,
    pseudocode_viewer,
)

__all__ = [
    "render_grid",
    "render_bars",
    "CanvasConfig",
    "algorithm_selector",
    "pathfinding_controls",
    "sorting_controls",
    "speed_selector",
    "size_selector",
    "stats_panel",
    "counters_panel",
    "notification_banner",
    "legend",
    "algorithm_description",
    "pseudocode_viewer",
]
