"""
API integration tests.
Uses TestClient to avoid starting a server.
Requires: pip install httpx (for TestClient)
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

try:
    from fastapi.testclient import TestClient
    HAS_HTTPX = True
except (ImportError, RuntimeError):
    HAS_HTTPX = False

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

pytestmark = pytest.mark.skipif(not HAS_HTTPX, reason="httpx required for TestClient")

from doubles_rotation import config
from doubles_rotation.api import app
from doubles_rotation.engine.schemas import ScheduleOptions

PLAYERS = ["Ann", "Ben", "Cat", "Dan", "Eve", "Fay", "Gus", "Hal", "Ivy"]


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_defaults(client):
    resp = client.get("/defaults")
    assert resp.status_code == 200
    opts = resp.json()["options"]
    assert opts["beam_width"] >= 1
    assert opts["partner_k"] >= 2
    assert set(opts) == {
        "weight_team", "weight_opponent", "weight_play",
        "beam_width", "partner_k", "square_repeats", "avoid_back_to_back",
    }


def test_seed(client):
    seed = client.get("/seed").json()["seed"]
    assert len(seed) == 8


def test_post_schedule(client):
    resp = client.post(
        "/schedule",
        json={"players": PLAYERS, "courts": 2, "rounds": 4, "seed": "api", "options": {"beam_width": 20}},
    )
    assert resp.status_code == 200
    data = resp.json()
    sched = data["schedule"]
    assert len(sched["rounds"]) == 4
    assert sched["options"]["beam_width"] == 20
    for rnd in sched["rounds"]:
        assert len(rnd["matches"]) == 2
        assert len(rnd["benched"]) == 1
    assert data["text"].startswith("Round 1")
    assert data["diagnostics"]["min_plays"] <= data["diagnostics"]["max_plays"]
    assert data["warnings"] == []


def test_post_schedule_deterministic(client):
    body = {"players": PLAYERS, "courts": 2, "rounds": 3, "seed": "same"}
    a = client.post("/schedule", json=body).json()
    b = client.post("/schedule", json=body).json()
    assert a["schedule"]["rounds"] == b["schedule"]["rounds"]


def test_post_schedule_from_text(client):
    resp = client.post("/schedule", json={"players_text": "Ann, Ben\nCat\nDan", "rounds": 2, "seed": "t"})
    assert resp.status_code == 200
    assert resp.json()["schedule"]["players"] == ["Ann", "Ben", "Cat", "Dan"]


def test_post_schedule_fresh_seed(client):
    resp = client.post("/schedule", json={"players": PLAYERS[:4], "fresh_seed": True})
    assert resp.status_code == 200
    assert len(resp.json()["schedule"]["seed"]) == 8


def test_post_schedule_capped_courts_warns(client):
    resp = client.post("/schedule", json={"players": PLAYERS, "courts": 4, "rounds": 1, "seed": "w"})
    assert resp.status_code == 200
    assert resp.json()["warnings"]


def test_post_schedule_too_few_players(client):
    resp = client.post("/schedule", json={"players": ["Ann", "Ben", "Ann", "Cat"], "seed": "x"})
    assert resp.status_code == 400
    assert "at least 4" in resp.json()["detail"]


def test_post_schedule_validation(client):
    assert client.post("/schedule", json={"players": PLAYERS, "courts": 0}).status_code == 422
    assert client.post("/schedule", json={"players": PLAYERS, "options": {"partner_k": 1}}).status_code == 422


def test_post_schedule_round_limit(client):
    resp = client.post("/schedule", json={"players": PLAYERS, "rounds": config.MAX_ROUNDS + 1})
    assert resp.status_code == 400


def test_share_roundtrip(client):
    resp = client.post(
        "/share",
        json={"players": PLAYERS, "courts": 2, "rounds": 3, "seed": "shared", "options": {"square_repeats": False}},
    )
    assert resp.status_code == 200
    token = resp.json()["token"]

    cfg = client.get(f"/share/{token}").json()
    assert cfg["players"] == PLAYERS
    assert cfg["courts"] == 2
    assert cfg["seed"] == "shared"
    assert cfg["options"]["square_repeats"] is False
    assert cfg["auto"] is True

    via_token = client.get(f"/share/{token}/schedule").json()
    direct = client.post(
        "/schedule",
        json={"players": PLAYERS, "courts": 2, "rounds": 3, "seed": "shared", "options": {"square_repeats": False}},
    ).json()
    assert via_token["schedule"]["rounds"] == direct["schedule"]["rounds"]


def test_share_rejects_unschedulable_config(client):
    resp = client.post("/share", json={"players": ["Ann", "Ben", "Cat"], "seed": "x"})
    assert resp.status_code == 400
    assert "at least 4" in resp.json()["detail"]
    resp = client.post("/share", json={"players": PLAYERS, "rounds": config.MAX_ROUNDS + 1})
    assert resp.status_code == 400


def test_share_rejects_invalid_default_options(client, monkeypatch):
    monkeypatch.setattr(config, "default_options", lambda: ScheduleOptions(weight_team=float("nan")))
    resp = client.post("/share", json={"players": PLAYERS, "seed": "x"})
    assert resp.status_code == 400
    assert "weight_team" in resp.json()["detail"]


def test_share_bad_token(client):
    assert client.get("/share/AAAA").status_code == 400
    assert client.get("/share/AAAA/schedule").status_code == 400
