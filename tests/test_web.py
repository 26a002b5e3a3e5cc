"""
Tests for the FastAPI move endpoint.
"""

import pytest
from fastapi.testclient import TestClient

from hexbot.config import SearchConfig
from web.app import MAX_REQUEST_DEPTH, app, get_base_config

SCHOLARS_MATE_SETUP = ["e4", "e5", "Qh5", "Nc6", "Bc4", "Nf6"]
FOOLS_MATE = ["f3", "e5", "g4", "Qh4"]


@pytest.fixture
def client():
    get_base_config.cache_clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
    get_base_config.cache_clear()


class TestMoveEndpoint:

    def test_start_position(self, client):
        resp = client.post("/api/move", json={"record": [], "depth": 0})
        assert resp.status_code == 200
        body = resp.json()
        assert body["move"] == body["from_cell"] + body["to_cell"]
        assert body["promotion"] is None
        assert body["nodes"] == 20
        assert body["depth"] == 0
        assert body["value"] == 0

    def test_finds_mate(self, client):
        resp = client.post("/api/move", json={"record": SCHOLARS_MATE_SETUP, "depth": 1})
        assert resp.status_code == 200
        assert resp.json()["move"] == "h5f7"

    def test_pgn_text_record(self, client):
        resp = client.post(
            "/api/move",
            json={"record": "1. e4 e5 2. Qh5 Nc6 3. Bc4 Nf6", "depth": 1},
        )
        assert resp.status_code == 200
        assert resp.json()["move"] == "h5f7"

    def test_fixed_perspective(self, client):
        resp = client.post(
            "/api/move",
            json={"record": SCHOLARS_MATE_SETUP, "depth": 1, "perspective": "b"},
        )
        assert resp.status_code == 200
        assert resp.json()["move"] == "h5f7"
        assert resp.json()["value"] < 0

    def test_invalid_record(self, client):
        resp = client.post("/api/move", json={"record": ["e5"], "depth": 0})
        assert resp.status_code == 400

    def test_depth_out_of_range(self, client):
        resp = client.post("/api/move", json={"record": [], "depth": MAX_REQUEST_DEPTH + 1})
        assert resp.status_code == 422
        resp = client.post("/api/move", json={"record": [], "depth": -1})
        assert resp.status_code == 422

    def test_bool_depth_rejected(self, client):
        resp = client.post("/api/move", json={"record": [], "depth": True})
        assert resp.status_code == 422

    def test_depth_above_engine_maximum(self, client):
        app.dependency_overrides[get_base_config] = lambda: SearchConfig(max_depth=2)
        resp = client.post("/api/move", json={"record": [], "depth": 3})
        assert resp.status_code == 400
        assert "maximum" in resp.json()["detail"]

    def test_malformed_environment(self, client, monkeypatch):
        monkeypatch.setenv("HEXBOT_MAX_DEPTH", "deep")
        resp = client.post("/api/move", json={"record": [], "depth": 0})
        assert resp.status_code == 500
        assert "HEXBOT_MAX_DEPTH" in resp.json()["detail"]

    def test_unknown_perspective(self, client):
        resp = client.post("/api/move", json={"record": [], "perspective": "white"})
        assert resp.status_code == 422

    def test_game_over(self, client):
        resp = client.post("/api/move", json={"record": FOOLS_MATE, "depth": 0})
        assert resp.status_code == 409


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
