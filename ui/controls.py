"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • algorithm_selector     – dropdown of registered algorithms
  • pathfinding_controls   – run / stop / reset / clear buttons
  • sorting_controls       – start / pause-resume / stop / new array
  • speed_selector         – 0.5x … 100x
  • size_selector          – 10 … 50 bars
  • stats_panel            – visited cells, path distance, elapsed time
  • counters_panel         – comparisons, array accesses, delay
  • notification_banner    – "no path" message with a dismiss button
  • legend                 – cell colour key
  • algorithm_description  – label, complexity and description card
  • pseudocode_viewer      – the algorithm's pseudocode

Design:
  - All panels are stateless render functions.
  - State is passed in as arguments.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together; the page re-fetches the ones
    that change while a run is in progress.
"""

from typing import List, Optional

from config import ARRAY_SIZES, SPEED_MULTIPLIERS
from algorithms import AlgoInfo
from engine.stats import PathfindingStats, SortingCounters, format_time
from ui.canvas import CONFIG


def _escape(text: str) -> str:
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "") -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Buttons
# ---------------------------------------------------------------------------
def pathfinding_controls(is_running: bool = False) -> str:
    disabled = 'disabled' if is_running else ''
    return f"""
    <div class="panel pathfinding-controls">
      <div class="button-row">
        <button id="btn-run" class="btn-primary" {disabled}>▶ Visualize</button>
        <button id="btn-stop">⏹ Stop</button>
        <button id="btn-reset">↺ Reset</button>
        <button id="btn-clear">🗑 Clear All</button>
      </div>
    </div>
    """


def sorting_controls(is_running: bool = False, is_paused: bool = False, is_shuffling: bool = False) -> str:
    start_disabled = 'disabled' if is_running or is_shuffling else ''
    pause_label = "▶ Resume" if is_paused else "⏸ Pause"
    pause_disabled = '' if is_running else 'disabled'
    return f"""
    <div class="panel sorting-controls">
      <div class="button-row">
        <button id="btn-generate">🔀 New Array</button>
        <button id="btn-start" class="btn-primary" {start_disabled}>▶ Sort</button>
        <button id="btn-pause" {pause_disabled}>{pause_label}</button>
        <button id="btn-stop">⏹ Stop</button>
      </div>
    </div>
    """


def speed_selector(speed: str = "1x") -> str:
    options = []
    for key in SPEED_MULTIPLIERS:
        sel = 'selected' if key == speed else ''
        options.append(f'<option value="{key}" {sel}>{key}</option>')
    return f"""
    <div class="speed-control">
      <label>Speed:</label>
      <select id="speed-selector">{''.join(options)}</select>
    </div>
    """


def size_selector(size: int = 30) -> str:
    options = []
    for n in ARRAY_SIZES:
        sel = 'selected' if n == size else ''
        options.append(f'<option value="{n}" {sel}>{n}</option>')
    return f"""
    <div class="size-control">
      <label>Elements:</label>
      <select id="size-selector">{''.join(options)}</select>
    </div>
    """


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------
def stats_panel(stats: Optional[PathfindingStats] = None) -> str:
    if stats is None:
        return """
        <div class="panel stats-panel">
          <h3>📊 Stats</h3>
          <p class="placeholder">Run an algorithm to see stats.</p>
        </div>
        """

    if stats.path_distance < 0:
        distance = "No path"
    else:
        distance = f"{stats.path_distance}"

    return f"""
    <div class="panel stats-panel">
      <h3>📊 Stats</h3>
      <table>
        <tr><td>Visited Cells:</td><td><strong id="stat-visited">{stats.visited_cells}</strong></td></tr>
        <tr><td>Path Distance:</td><td><strong id="stat-distance">{distance}</strong></td></tr>
        <tr><td>Time:</td><td><strong id="stat-time">{format_time(stats.elapsed_ms)}</strong></td></tr>
      </table>
    </div>
    """


def counters_panel(counters: SortingCounters, delay_ms: float) -> str:
    return f"""
    <div class="panel counters-panel">
      <p>Comparisons: <strong id="stat-comparisons">{counters.comparisons}</strong></p>
      <p>Array Accesses: <strong id="stat-accesses">{counters.array_accesses}</strong></p>
      <p>Delay: <strong id="stat-delay">{delay_ms:.0f}</strong> ms</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------
def notification_banner(message: Optional[str] = None) -> str:
    if not message:
        return ""
    return f"""
    <div class="notification" role="alert">
      <span>⚠️ {_escape(message)}</span>
      <button id="btn-dismiss" title="Dismiss">✕</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Legend & description
# ---------------------------------------------------------------------------
_LEGEND_LABELS = [
    ("start",   "Start"),
    ("end",     "End"),
    ("wall",    "Wall"),
    ("visited", "Visited"),
    ("path",    "Path"),
    ("empty",   "Empty"),
]


def legend() -> str:
    items = []
    for key, label in _LEGEND_LABELS:
        color = CONFIG.cell_colors[key]
        items.append(
            f'<span class="legend-item"><span class="swatch" style="background:{color}"></span>{label}</span>'
        )
    return f'<div class="panel legend">{"".join(items)}</div>'


def algorithm_description(info: Optional[AlgoInfo]) -> str:
    if info is None:
        return ""
    badges = "".join(f'<span class="badge">{_escape(t)}</span>' for t in info.traits)
    return f"""
    <div class="panel algorithm-description">
      <h3>{_escape(info.label)}</h3>
      <p class="traits">{badges}</p>
      <p>{_escape(info.description)}</p>
      <p class="complexity">Time: {info.complexity_time} · Space: {info.complexity_space}</p>
    </div>
    """


def pseudocode_viewer(pseudocode_lines: List[str]) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div style="color: #7d8590; padding: 20px; text-align: center;">
            Select an algorithm to view pseudocode
          </div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        lines_html.append(f'<div class="code-line" data-line="{i}">{_escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """
