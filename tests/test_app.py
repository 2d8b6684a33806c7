import pytest

from main import create_app


@pytest.fixture
def app(fast_config):
    app = create_app(fast_config)
    app.config.update(TESTING=True)
    yield app
    app.extensions["visualizer"].shutdown()


@pytest.fixture
def client(app):
    return app.test_client()


def wait_for_run(app, timeout=5):
    app.extensions["visualizer"].last_future.result(timeout=timeout)


def test_pages_render(client):
    page = client.get("/")
    assert page.status_code == 200
    assert b"<svg" in page.data
    assert b"Dijkstra" in page.data

    sorting = client.get("/sorting")
    assert sorting.status_code == 200
    assert b"<svg" in sorting.data


def test_click_places_nodes(client):
    r = client.post("/api/pathfinding/click", json={"x": 0, "y": 0})
    assert r.status_code == 200
    assert r.get_json()["changed"] is True
    assert r.get_json()["grid"]["cells"][0][0] == "start"


def test_click_rejects_bad_coordinates(client):
    r = client.post("/api/pathfinding/click", json={"x": "left", "y": 0})
    assert r.status_code == 400
    assert "x" in r.get_json()["error"]

    r = client.post("/api/pathfinding/click", json={"x": 99, "y": 0})
    assert r.status_code == 400


def test_run_requires_endpoints(client):
    r = client.post("/api/pathfinding/run", json={})
    assert r.status_code == 400
    assert "start" in r.get_json()["error"]


def test_run_to_completion(app, client):
    client.post("/api/pathfinding/click", json={"x": 0, "y": 0})
    client.post("/api/pathfinding/click", json={"x": 19, "y": 9})

    r = client.post("/api/pathfinding/run", json={"algo_key": "astar"})
    assert r.get_json() == {"started": True, "algorithm": "astar"}
    wait_for_run(app)

    state = client.get("/api/pathfinding/state").get_json()
    assert state["running"] is False
    assert state["result"]["success"] is True
    assert state["result"]["path_distance"] == 28
    assert state["stats"]["path_distance"] == 28
    assert state["algorithm"]["key"] == "astar"


def test_unknown_algorithm_is_a_bad_request(client):
    r = client.post("/api/pathfinding/algo", json={"algo_key": "quantum"})
    assert r.status_code == 400
    r = client.post("/api/sorting/algo", json={"algo_key": "dijkstra"})
    assert r.status_code == 400


def test_select_algorithm_returns_description(client):
    r = client.post("/api/pathfinding/algo", json={"algo_key": "dfs"})
    data = r.get_json()
    assert data["algorithm"]["key"] == "dfs"
    assert "pseudocode" in data


def test_sorting_start_sorts(app, client):
    r = client.post("/api/sorting/start", json={"algo_key": "merge_sort"})
    assert r.status_code == 200
    wait_for_run(app)

    state = client.get("/api/sorting/state").get_json()
    values = [e["value"] for e in state["array"]]
    assert values == sorted(values)
    assert all(e["status"] == "sorted" for e in state["array"])
    assert state["counters"]["comparisons"] > 0


def test_sorting_size_and_speed(client):
    r = client.post("/api/sorting/size", json={"size": 20})
    assert len(r.get_json()["array"]) == 20
    assert client.post("/api/sorting/size", json={"size": 21}).status_code == 400

    r = client.post("/api/sorting/speed", json={"speed": "100x"})
    assert r.get_json()["speed"] == "100x"
    assert client.post("/api/sorting/speed", json={"speed": "2x"}).status_code == 400


def test_sorting_generate(app, client):
    r = client.post("/api/sorting/generate")
    assert r.get_json() == {"started": True}
    wait_for_run(app)
    state = client.get("/api/sorting/state").get_json()
    assert state["shuffling"] is False
    assert len(state["array"]) == 30


def test_pause_and_stop_when_idle(client):
    assert client.post("/api/sorting/pause").get_json()["paused"] is False
    assert client.post("/api/sorting/stop").get_json()["cancelled"] is False
    assert client.post("/api/pathfinding/stop").get_json()["cancelled"] is False


def test_reset_and_clear(client):
    client.post("/api/pathfinding/click", json={"x": 0, "y": 0})
    client.post("/api/pathfinding/click", json={"x": 3, "y": 3})
    client.post("/api/pathfinding/click", json={"x": 1, "y": 1})

    state = client.post("/api/pathfinding/reset").get_json()
    assert state["grid"]["cells"][1][1] == "wall"

    state = client.post("/api/pathfinding/clear").get_json()
    assert all(c == "empty" for row in state["grid"]["cells"] for c in row)
