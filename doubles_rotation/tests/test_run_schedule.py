"""
Tests for the command-line entry point.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from doubles_rotation import run_schedule
from doubles_rotation.adapters.sharing import decode_share_token


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(run_schedule, "setup_logging", lambda *a, **k: None)


def test_text_output(capsys):
    run_schedule.main(["--players", "Ann,Ben,Cat,Dan,Eve", "--rounds", "3", "--seed", "cli"])
    out = capsys.readouterr().out
    assert "Seed: cli" in out
    assert "Round 3" in out
    assert out.count("Benched:") == 3
    assert "Fairness check" in out


def test_json_output_reproducible(capsys):
    args = ["--players", "A,B,C,D,E,F,G,H", "--courts", "2", "--rounds", "4", "--seed", "j", "--json"]
    run_schedule.main(args)
    first = json.loads(capsys.readouterr().out)
    run_schedule.main(args)
    second = json.loads(capsys.readouterr().out)
    assert first == second
    assert len(first["rounds"]) == 4


def test_players_file(tmp_path, capsys):
    f = tmp_path / "players.txt"
    f.write_text("Ann\nBen\nCat\nDan\n\n", encoding="utf-8")
    run_schedule.main(["--players-file", str(f), "--rounds", "1", "--seed", "f", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["players"] == ["Ann", "Ben", "Cat", "Dan"]


def test_share_token_roundtrip(capsys):
    run_schedule.main(["--players", "A,B,C,D,E", "--rounds", "2", "--seed", "tok", "--share"])
    out = capsys.readouterr().out
    token = out.strip().splitlines()[-1].split("Share token: ", 1)[1]
    cfg = decode_share_token(token)
    assert cfg.seed == "tok"
    run_schedule.main(["--token", token, "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == "tok"
    assert data["num_rounds"] == 2


def test_option_flags(capsys):
    run_schedule.main(
        ["--players", "A,B,C,D", "--seed", "x", "--rounds", "1", "--json",
         "--linear-repeats", "--allow-back-to-back", "--beam-width", "5", "--weight-team", "7"]
    )
    opts = json.loads(capsys.readouterr().out)["options"]
    assert opts["square_repeats"] is False
    assert opts["avoid_back_to_back"] is False
    assert opts["beam_width"] == 5
    assert opts["weight_team"] == 7.0


def test_too_few_players_exits():
    with pytest.raises(SystemExit) as exc:
        run_schedule.main(["--players", "A,B,C", "--seed", "x"])
    assert "at least 4" in str(exc.value)
