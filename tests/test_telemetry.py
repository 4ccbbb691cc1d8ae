from __future__ import annotations

import json
from pathlib import Path

from dicebattle.engine.round import run_round
from dicebattle.engine.state import GameConfig, create_initial_state
from dicebattle.services.telemetry import TelemetryService


def _read(path: Path) -> list[dict]:
    return [json.loads(ln) for ln in path.read_text(encoding="utf-8").splitlines()]


def test_logged_events_mirror_the_state_log(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "events.jsonl"
    sink = TelemetryService(path, session="t1")
    state = create_initial_state(GameConfig(rounds=1), seed=123456, observers=[sink])
    run_round(state, "balance")

    records = _read(path)
    logged = [(r["tag"], r["payload"]) for r in records if r["tag"] != "phase"]
    assert logged == [(tag, payload) for tag, payload in state.log]
    assert sink.seq == len(records)


def test_sessions_share_a_file(tmp_path: Path) -> None:
    path = tmp_path / "events.jsonl"
    first = TelemetryService(path, session="a")
    second = TelemetryService(path, session="b")
    first("x", {"n": 1})
    second("x", {"n": 2})
    first("y", {})

    records = _read(path)
    assert [(r["session"], r["seq"], r["tag"]) for r in records] == [("a", 1, "x"), ("b", 1, "x"), ("a", 2, "y")]
    assert records[1]["payload"] == {"n": 2}
