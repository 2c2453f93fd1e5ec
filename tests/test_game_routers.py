import pytest
from fastapi.testclient import TestClient

import onestroke.main
from onestroke.main import create_app
from onestroke.services import ManualScheduler, TraceEngine


@pytest.fixture
def client(catalog):
    engine = TraceEngine(catalog, ManualScheduler(), hint_count=1)
    # no with block: the startup hook, and with it logging setup, does not run
    return TestClient(create_app(engine))


def event_kinds(response):
    return [event["kind"] for event in response.json()["events"]]


def test_index_lists_levels(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["levels"] == ["Triangle", "Stick", "House"]


def test_levels_endpoint(client):
    levels = client.get("/game/levels").json()
    assert levels[2] == {"index": 2, "name": "House", "node_count": 5, "edge_count": 7}


def test_initial_state(client):
    state = client.get("/game/state").json()
    assert state["phase"] == "idle"
    assert state["path"] == []
    assert state["level_name"] == "Triangle"
    assert state["cursor_point"] is None


def test_trace_triangle_over_http(client):
    assert event_kinds(client.post("/game/node/0")) == ["path_started"]
    client.post("/game/node/1")
    client.post("/game/node/2")
    response = client.post("/game/node/0")

    assert event_kinds(response) == ["edge_completed", "level_solved"]
    state = response.json()["state"]
    assert state["phase"] == "solved"
    assert state["completed_edges"] == [[0, 1], [0, 2], [1, 2]]
    assert response.json()["events"][1]["effects"][0]["name"] == "success_banner"


def test_release_after_partial_trace_fails(client):
    client.post("/game/node/0")
    client.post("/game/node/1")
    response = client.post("/game/release")

    assert event_kinds(response) == ["attempt_failed"]
    names = [effect["name"] for effect in response.json()["events"][0]["effects"]]
    assert names.count("shake") == 5
    assert "failure_indicator_pop" in names
    assert response.json()["state"]["path"] == []


def test_release_without_path_is_quiet(client):
    response = client.post("/game/release")
    assert response.status_code == 200
    assert event_kinds(response) == []


def test_cursor_only_while_drawing(client):
    response = client.post("/game/cursor", json={"x": 0.1, "y": 0.2})
    assert response.json()["state"]["cursor_point"] is None

    client.post("/game/node/0")
    response = client.post("/game/cursor", json={"x": 0.1, "y": 0.2})
    assert response.json()["state"]["cursor_point"] == [0.1, 0.2]


def test_pointer_events_are_hit_tested(client):
    # 800x600 canvas: scale 540, origin at (400, 300)
    size = {"width": 800, "height": 600}
    response = client.post("/game/pointer", json={"x": 402, "y": 86, **size})
    assert event_kinds(response) == ["path_started"]
    assert response.json()["state"]["cursor_point"] == pytest.approx([2 / 540, -0.4 + 2 / 540])

    # between nodes: only the cursor moves
    response = client.post("/game/pointer", json={"x": 300, "y": 300, **size})
    assert event_kinds(response) == []

    client.post("/game/pointer", json={"x": 184, "y": 462, **size})
    response = client.post("/game/pointer", json={"x": 0, "y": 0, "phase": "release", **size})
    assert event_kinds(response) == ["attempt_failed"]


def test_pointer_on_empty_canvas_does_nothing(client):
    response = client.post("/game/pointer", json={"x": 0, "y": 0, "width": 0, "height": 0})
    assert event_kinds(response) == []
    assert response.json()["state"]["phase"] == "idle"


def test_reset_flag_failure(client):
    client.post("/game/node/0")
    client.post("/game/node/1")
    response = client.post("/game/reset", params={"flag_failure": True})
    assert event_kinds(response) == ["attempt_failed"]

    response = client.post("/game/reset")
    assert event_kinds(response) == ["attempt_reset"]


def test_advance_and_select_level(client):
    response = client.post("/game/advance")
    assert event_kinds(response) == ["level_loaded"]
    assert response.json()["state"]["level_index"] == 1

    response = client.post("/game/levels/0")
    assert response.json()["state"]["level_name"] == "Triangle"

    assert client.post("/game/levels/9").status_code == 404


def test_hints(client):
    first = client.post("/game/hint").json()
    assert first["hint"]["granted"] is True
    assert first["hint"]["nodes"] == []
    assert first["state"]["hints_remaining"] == 0
    assert [e["kind"] for e in first["events"]] == ["hint_used"]

    second = client.post("/game/hint").json()
    assert second["hint"]["granted"] is False


def test_invalid_body_is_rejected(client):
    assert client.post("/game/cursor", json={"x": "left"}).status_code == 422
    assert client.post("/game/pointer", json={"x": 1, "y": 1, "width": -5, "height": 10}).status_code == 422


def test_figure_endpoint(client):
    client.post("/game/node/0")
    response = client.get("/game/figure")
    assert response.status_code == 200
    figure = response.json()
    names = [trace["name"] for trace in figure["data"]]
    assert names == ["Edges", "Traced", "Nodes"]


def test_building_the_app_leaves_logging_alone(catalog, monkeypatch):
    calls = []
    monkeypatch.setattr(onestroke.main, "configure_logging", lambda *args: calls.append(args))

    create_app(TraceEngine(catalog, ManualScheduler()))

    assert calls == []


def test_logging_is_configured_on_startup(catalog, monkeypatch):
    calls = []
    monkeypatch.setattr(onestroke.main, "configure_logging", lambda *args: calls.append(args))

    with TestClient(create_app(TraceEngine(catalog, ManualScheduler()))) as client:
        assert client.get("/").status_code == 200

    assert len(calls) == 1


def test_reset_after_win_keeps_level_solved(client):
    for node in (0, 1, 2, 0):
        client.post(f"/game/node/{node}")
    response = client.post("/game/reset", params={"flag_failure": True})

    assert event_kinds(response) == []
    assert response.json()["state"]["phase"] == "solved"
