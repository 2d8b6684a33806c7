"""
main.py — Algorithm Visualizer Flask App
==========================================
The web server that powers the visualizer.

Routes:
  GET  /                          – pathfinding page
  GET  /sorting                   – sorting page
  GET  /api/pathfinding/state     – grid SVG, panels, notification, tones
  POST /api/pathfinding/click     – placement rules at {x, y}
  POST /api/pathfinding/paint     – drag painting at {x, y}
  POST /api/pathfinding/algo      – select algorithm {algo_key}
  POST /api/pathfinding/run       – start a run in the background
  POST /api/pathfinding/stop      – cancel the run
  POST /api/pathfinding/reset     – cancel + clear visited / path + stats
  POST /api/pathfinding/clear     – cancel + empty board
  POST /api/pathfinding/dismiss   – hide the "no path" notification
  GET  /api/sorting/state         – bars SVG, counters, flags, tones
  POST /api/sorting/algo          – select algorithm {algo_key}
  POST /api/sorting/size          – number of bars {size}
  POST /api/sorting/speed         – speed multiplier {speed}
  POST /api/sorting/generate      – stop + shuffle animation + new values
  POST /api/sorting/start         – start sorting in the background
  POST /api/sorting/pause         – toggle pause
  POST /api/sorting/stop          – stop + reset counters

State management:
  One local Workspace per app (app.extensions["visualizer"]) holding a
  PathfindingSession, a SortingSession and the BackgroundLoop their
  coroutines run on.  Handlers only flip flags and read snapshots; the
  browser polls the state routes while something is animating.
"""

from flask import Flask, current_app, jsonify, render_template_string, request
import logging
import os
import sys
from concurrent.futures import Future
from typing import Optional

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import VisualizerConfig
from algorithms import PATHFINDING_KIND, SORTING_KIND, list_algorithms
from engine import BackgroundLoop, drain_tones
from engine.pathfinding_session import PathfindingSession
from engine.sorting_session import SortingSession
from ui import (
    render_grid,
    render_bars,
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


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------
class Workspace:
    """Everything one browser tab drives: both sessions and their loop."""

    def __init__(self, config: VisualizerConfig):
        self.config = config
        self.pathfinding = PathfindingSession(config)
        self.sorting = SortingSession(config)
        self.loop = BackgroundLoop()
        self.last_future: Optional[Future] = None

    def submit(self, coro) -> Future:
        future = self.loop.submit(coro)
        future.add_done_callback(_log_failure)
        self.last_future = future
        return future

    def shutdown(self) -> None:
        self.pathfinding.stop()
        self.sorting.stop()
        self.loop.stop()


def _log_failure(future: Future) -> None:
    if not future.cancelled() and future.exception() is not None:
        logger.error("background task failed", exc_info=future.exception())


def get_workspace() -> Workspace:
    return current_app.extensions["visualizer"]


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def _int_field(data: dict, key: str) -> int:
    try:
        return int(data[key])
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"'{key}' must be an integer")


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------
def pathfinding_state(ws: Workspace) -> dict:
    session = ws.pathfinding
    snap = session.snapshot()
    note = snap["notification"]
    snap.update(
        svg=render_grid(session.grid),
        stats_html=stats_panel(session.stats),
        controls_html=pathfinding_controls(session.is_running),
        notification_html=notification_banner(note["message"] if note else None),
        tones=[t.to_dict() for t in drain_tones()],
    )
    return snap


def sorting_state(ws: Workspace) -> dict:
    session = ws.sorting
    snap = session.snapshot()
    snap.update(
        svg=render_bars(session.array),
        counters_html=counters_panel(session.counters, session.delay_ms),
        controls_html=sorting_controls(session.is_running, session.is_paused, session.shuffling.is_set()),
        tones=[t.to_dict() for t in drain_tones()],
    )
    return snap


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[VisualizerConfig] = None) -> Flask:
    app = Flask(__name__)
    app.config["VISUALIZER"] = config or VisualizerConfig.from_env()
    app.extensions["visualizer"] = Workspace(app.config["VISUALIZER"])

    @app.errorhandler(ValueError)
    def bad_request(e):
        return jsonify({"error": str(e)}), 400

    # -----------------------------------------------------------------------
    # Pages
    # -----------------------------------------------------------------------
    @app.route("/")
    def index():
        session = get_workspace().pathfinding
        info = session.algorithm
        return render_template_string(PATHFINDING_TEMPLATE,
            base_style=BASE_STYLE,
            common_script=COMMON_SCRIPT,
            svg=render_grid(session.grid),
            algo_selector=algorithm_selector(list_algorithms(PATHFINDING_KIND), info.key),
            controls=pathfinding_controls(session.is_running),
            stats=stats_panel(session.stats),
            legend=legend(),
            description=algorithm_description(info),
            pseudocode=pseudocode_viewer(info.pseudocode),
        )

    @app.route("/sorting")
    def sorting_page():
        session = get_workspace().sorting
        info = session.algorithm
        return render_template_string(SORTING_TEMPLATE,
            base_style=BASE_STYLE,
            common_script=COMMON_SCRIPT,
            svg=render_bars(session.array),
            algo_selector=algorithm_selector(list_algorithms(SORTING_KIND), info.key),
            controls=sorting_controls(session.is_running, session.is_paused, session.shuffling.is_set()),
            speed=speed_selector(session.speed),
            size=size_selector(session.size),
            counters=counters_panel(session.counters, session.delay_ms),
            description=algorithm_description(info),
            pseudocode=pseudocode_viewer(info.pseudocode),
        )

    # -----------------------------------------------------------------------
    # API: Pathfinding
    # -----------------------------------------------------------------------
    @app.route("/api/pathfinding/state")
    def api_pathfinding_state():
        return jsonify(pathfinding_state(get_workspace()))

    @app.route("/api/pathfinding/click", methods=["POST"])
    def api_pathfinding_click():
        data = _payload()
        ws = get_workspace()
        changed = ws.pathfinding.click(_int_field(data, "x"), _int_field(data, "y"))
        return jsonify({"changed": changed, **pathfinding_state(ws)})

    @app.route("/api/pathfinding/paint", methods=["POST"])
    def api_pathfinding_paint():
        data = _payload()
        ws = get_workspace()
        changed = ws.pathfinding.paint(_int_field(data, "x"), _int_field(data, "y"))
        return jsonify({"changed": changed, **pathfinding_state(ws)})

    @app.route("/api/pathfinding/algo", methods=["POST"])
    def api_pathfinding_algo():
        ws = get_workspace()
        info = ws.pathfinding.select_algorithm(_payload().get("algo_key", ""))
        return jsonify({
            "algorithm":   info.to_dict(),
            "description": algorithm_description(info),
            "pseudocode":  pseudocode_viewer(info.pseudocode),
            **pathfinding_state(ws),
        })

    @app.route("/api/pathfinding/run", methods=["POST"])
    def api_pathfinding_run():
        ws = get_workspace()
        session = ws.pathfinding
        if session.start is None or session.end is None:
            return jsonify({"error": "Place a start and an end node first"}), 400
        key = _payload().get("algo_key") or session.algorithm_key
        if key != session.algorithm_key:
            session.select_algorithm(key)
        ws.submit(session.run(key))
        return jsonify({"started": True, "algorithm": key})

    @app.route("/api/pathfinding/stop", methods=["POST"])
    def api_pathfinding_stop():
        ws = get_workspace()
        cancelled = ws.pathfinding.stop()
        return jsonify({"cancelled": cancelled, **pathfinding_state(ws)})

    @app.route("/api/pathfinding/reset", methods=["POST"])
    def api_pathfinding_reset():
        ws = get_workspace()
        ws.pathfinding.reset()
        return jsonify(pathfinding_state(ws))

    @app.route("/api/pathfinding/clear", methods=["POST"])
    def api_pathfinding_clear():
        ws = get_workspace()
        ws.pathfinding.clear_all()
        return jsonify(pathfinding_state(ws))

    @app.route("/api/pathfinding/dismiss", methods=["POST"])
    def api_pathfinding_dismiss():
        ws = get_workspace()
        ws.pathfinding.dismiss_notification()
        return jsonify(pathfinding_state(ws))

    # -----------------------------------------------------------------------
    # API: Sorting
    # -----------------------------------------------------------------------
    @app.route("/api/sorting/state")
    def api_sorting_state():
        return jsonify(sorting_state(get_workspace()))

    @app.route("/api/sorting/algo", methods=["POST"])
    def api_sorting_algo():
        ws = get_workspace()
        info = ws.sorting.select_algorithm(_payload().get("algo_key", ""))
        return jsonify({
            "algorithm":   info.to_dict(),
            "description": algorithm_description(info),
            "pseudocode":  pseudocode_viewer(info.pseudocode),
            **sorting_state(ws),
        })

    @app.route("/api/sorting/size", methods=["POST"])
    def api_sorting_size():
        ws = get_workspace()
        ws.sorting.set_size(_int_field(_payload(), "size"))
        return jsonify(sorting_state(ws))

    @app.route("/api/sorting/speed", methods=["POST"])
    def api_sorting_speed():
        ws = get_workspace()
        ws.sorting.set_speed(str(_payload().get("speed", "")))
        return jsonify(sorting_state(ws))

    @app.route("/api/sorting/generate", methods=["POST"])
    def api_sorting_generate():
        ws = get_workspace()
        ws.sorting.stop()
        ws.submit(ws.sorting.generate())
        return jsonify({"started": True})

    @app.route("/api/sorting/start", methods=["POST"])
    def api_sorting_start():
        ws = get_workspace()
        session = ws.sorting
        if session.is_running or session.shuffling:
            return jsonify({"error": "A sort or shuffle is already in progress"}), 400
        key = _payload().get("algo_key") or session.algorithm_key
        session.select_algorithm(key)
        ws.submit(session.run(key))
        return jsonify({"started": True, "algorithm": key})

    @app.route("/api/sorting/pause", methods=["POST"])
    def api_sorting_pause():
        ws = get_workspace()
        paused = ws.sorting.toggle_pause()
        return jsonify({"paused": paused, **sorting_state(ws)})

    @app.route("/api/sorting/stop", methods=["POST"])
    def api_sorting_stop():
        ws = get_workspace()
        cancelled = ws.sorting.stop()
        return jsonify({"cancelled": cancelled, **sorting_state(ws)})

    return app


# ---------------------------------------------------------------------------
# HTML Templates
# ---------------------------------------------------------------------------
BASE_STYLE = """
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      min-height: 100vh;
    }

    #sidebar {
      width: 340px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; align-items: center; padding: 24px; gap: 16px; }

    nav a { color: var(--accent-cyan); margin-right: 12px; text-decoration: none; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 14px;
      margin-bottom: 14px;
    }
    .panel h3 { font-size: 14px; margin-bottom: 10px; }
    .button-row { display: flex; flex-wrap: wrap; gap: 8px; }
    button, select {
      background: var(--bg-dark);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 6px;
      padding: 6px 10px;
      cursor: pointer;
    }
    button:disabled { opacity: 0.4; cursor: default; }
    .btn-primary { background: var(--accent-cyan); border-color: var(--accent-cyan); }
    .code-block { font-family: 'JetBrains Mono', monospace; font-size: 12px; white-space: pre; }
    .notification {
      display: flex; gap: 12px; align-items: center;
      background: var(--accent-rose); padding: 10px 14px; border-radius: 8px;
    }
    .legend-item { display: inline-flex; align-items: center; gap: 4px; margin-right: 10px; font-size: 12px; }
    .swatch { width: 12px; height: 12px; display: inline-block; border-radius: 2px; }
    .complexity, .placeholder { color: var(--text-secondary); font-size: 12px; }
    .badge { display: inline-block; padding: 1px 8px; margin-right: 6px; border: 1px solid var(--border); border-radius: 10px; font-size: 11px; color: var(--accent-cyan); }
"""


COMMON_SCRIPT = """
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    // tones queued by the server, played with WebAudio
    let audioCtx = null;
    function playTones(tones) {
      if (!tones || !tones.length) return;
      try {
        audioCtx = audioCtx || new (window.AudioContext || window.webkitAudioContext)();
        tones.forEach((t, i) => {
          const start = audioCtx.currentTime + i * 0.03;
          const osc = audioCtx.createOscillator();
          const gain = audioCtx.createGain();
          const volume = 0.1 * Math.min(1, Math.max(0, t.intensity / 100));
          osc.type = t.wave;
          osc.frequency.setValueAtTime(t.frequency, start);
          gain.gain.setValueAtTime(volume, start);
          gain.gain.exponentialRampToValueAtTime(Math.max(volume * 0.1, 0.0001), start + t.duration_ms / 1000);
          osc.connect(gain);
          gain.connect(audioCtx.destination);
          osc.start(start);
          osc.stop(start + t.duration_ms / 1000);
        });
      } catch (err) {
        console.error('Error playing sound:', err);
      }
    }
"""


PATHFINDING_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Pathfinding Visualizer</title>
  <style>{{ base_style|safe }}</style>
</head>
<body>
  <div id="sidebar">
    <nav><a href="/">Pathfinding</a><a href="/sorting">Sorting</a></nav>
    <div id="algo">{{ algo_selector|safe }}</div>
    <div id="controls">{{ controls|safe }}</div>
    <div id="stats">{{ stats|safe }}</div>
    <div id="description">{{ description|safe }}</div>
    <div class="panel"><h3>Pseudocode</h3><div id="pseudocode">{{ pseudocode|safe }}</div></div>
  </div>

  <div id="main">
    <div id="notification"></div>
    <div id="grid">{{ svg|safe }}</div>
    {{ legend|safe }}
  </div>

  <script>
    {{ common_script|safe }}

    let mouseDown = false;
    let polling = null;

    function apply(data) {
      if (data.error) { console.warn(data.error); return; }
      if (data.svg) document.getElementById('grid').innerHTML = data.svg;
      if (data.stats_html) document.getElementById('stats').innerHTML = data.stats_html;
      if (data.controls_html !== undefined) document.getElementById('controls').innerHTML = data.controls_html;
      if (data.notification_html !== undefined) document.getElementById('notification').innerHTML = data.notification_html;
      if (data.description) document.getElementById('description').innerHTML = data.description;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      playTones(data.tones);
      if (data.running && !polling) polling = setInterval(refresh, 100);
      if (data.running === false && polling) { clearInterval(polling); polling = null; }
    }

    async function refresh() {
      const res = await fetch('/api/pathfinding/state');
      apply(await res.json());
    }

    function cellOf(e) {
      const el = e.target.closest('rect.cell');
      return el ? {x: +el.dataset.x, y: +el.dataset.y} : null;
    }

    const grid = document.getElementById('grid');
    grid.addEventListener('mousedown', async (e) => {
      mouseDown = true;
      const c = cellOf(e);
      if (c) apply(await post('/api/pathfinding/click', c));
    });
    grid.addEventListener('mouseover', async (e) => {
      if (!mouseDown) return;
      const c = cellOf(e);
      if (c) apply(await post('/api/pathfinding/paint', c));
    });
    document.addEventListener('mouseup', () => { mouseDown = false; });

    document.addEventListener('click', async (e) => {
      const routes = {
        'btn-run': '/api/pathfinding/run',
        'btn-stop': '/api/pathfinding/stop',
        'btn-reset': '/api/pathfinding/reset',
        'btn-clear': '/api/pathfinding/clear',
        'btn-dismiss': '/api/pathfinding/dismiss',
      };
      const url = routes[e.target.id];
      if (!url) return;
      const data = await post(url, {});
      apply(data);
      if (data.started) refresh().then(() => { if (!polling) polling = setInterval(refresh, 100); });
    });

    document.addEventListener('change', async (e) => {
      if (e.target.id === 'algo-selector') {
        apply(await post('/api/pathfinding/algo', {algo_key: e.target.value}));
      }
    });

    // the notification expires on the server; keep polling slowly so it disappears
    setInterval(() => { if (!polling) refresh(); }, 1000);
  </script>
</body>
</html>
"""


SORTING_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Visualizer</title>
  <style>{{ base_style|safe }}</style>
</head>
<body>
  <div id="sidebar">
    <nav><a href="/">Pathfinding</a><a href="/sorting">Sorting</a></nav>
    <div id="algo">{{ algo_selector|safe }}</div>
    <div class="panel">{{ speed|safe }}{{ size|safe }}</div>
    <div id="controls">{{ controls|safe }}</div>
    <div id="counters">{{ counters|safe }}</div>
    <div id="description">{{ description|safe }}</div>
    <div class="panel"><h3>Pseudocode</h3><div id="pseudocode">{{ pseudocode|safe }}</div></div>
  </div>

  <div id="main">
    <div id="bars">{{ svg|safe }}</div>
  </div>

  <script>
    {{ common_script|safe }}

    let polling = null;

    function apply(data) {
      if (data.error) { console.warn(data.error); return; }
      if (data.svg) document.getElementById('bars').innerHTML = data.svg;
      if (data.counters_html) document.getElementById('counters').innerHTML = data.counters_html;
      if (data.controls_html) document.getElementById('controls').innerHTML = data.controls_html;
      if (data.description) document.getElementById('description').innerHTML = data.description;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      playTones(data.tones);
      const busy = data.running || data.shuffling;
      if (busy && !polling) polling = setInterval(refresh, 50);
      if (busy === false && polling) { clearInterval(polling); polling = null; }
    }

    async function refresh() {
      const res = await fetch('/api/sorting/state');
      apply(await res.json());
    }

    document.addEventListener('click', async (e) => {
      const routes = {
        'btn-generate': '/api/sorting/generate',
        'btn-start': '/api/sorting/start',
        'btn-pause': '/api/sorting/pause',
        'btn-stop': '/api/sorting/stop',
      };
      const url = routes[e.target.id];
      if (!url) return;
      const data = await post(url, {});
      apply(data);
      if (data.started && !polling) polling = setInterval(refresh, 50);
    });

    document.addEventListener('change', async (e) => {
      if (e.target.id === 'algo-selector') {
        apply(await post('/api/sorting/algo', {algo_key: e.target.value}));
      } else if (e.target.id === 'speed-selector') {
        apply(await post('/api/sorting/speed', {speed: e.target.value}));
      } else if (e.target.id === 'size-selector') {
        apply(await post('/api/sorting/size', {size: +e.target.value}));
        const data = await post('/api/sorting/generate', {});
        if (data.started && !polling) polling = setInterval(refresh, 50);
      }
    });

    post('/api/sorting/generate', {}).then(() => { if (!polling) polling = setInterval(refresh, 50); });
  </script>
</body>
</html>
"""


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    print("=" * 60)
    print("  Algorithm Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=False, host="0.0.0.0", port=5000, threaded=True)
