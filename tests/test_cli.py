from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from dicebattle.cli import main
from dicebattle.paths import Paths, get_paths


def test_cli_prints_one_line_per_round(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--seed", "7", "--rounds", "3"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 4
    assert [ln.split(":")[0] for ln in lines[:3]] == ["round 1", "round 2", "round 3"]
    assert lines[-1].split(" (")[0] in {"You win", "You lose", "Draw"}


def test_cli_is_reproducible(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--seed", "11", "--rounds", "4"])
    first = capsys.readouterr().out
    main(["--seed", "11", "--rounds", "4"])
    assert capsys.readouterr().out == first


def test_cli_json_snapshot(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--seed", "5", "--rounds", "2", "--json"]) == 0
    snap = json.loads(capsys.readouterr().out)
    assert snap["seed"] == 5
    assert snap["config"]["rounds"] == 2
    assert snap["round"]["index"] == 3


def test_cli_mode_sets_round_count(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--mode", "quick", "--json"])
    snap = json.loads(capsys.readouterr().out)
    assert snap["config"] == {"rounds": 5, "mode": "quick"}


def test_cli_negative_seed_uses_default(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--seed", "-3", "--rounds", "1", "--json"])
    assert json.loads(capsys.readouterr().out)["seed"] == 123456


def test_cli_fixed_tendency(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--seed", "3", "--rounds", "2", "--tendency", "attack"])
    lines = capsys.readouterr().out.splitlines()
    assert all("attack" in ln for ln in lines[:2])


def test_cli_writes_telemetry(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "logs" / "events.jsonl"
    main(["--seed", "9", "--rounds", "2", "--telemetry", str(out)])
    capsys.readouterr()
    records = [json.loads(ln) for ln in out.read_text(encoding="utf-8").splitlines()]
    tags = [r["tag"] for r in records]
    assert tags[0] == "phase:init"
    assert tags.count("round") == 2
    assert "phase" in tags
    assert [r["seq"] for r in records] == list(range(1, len(records) + 1))
    assert {r["session"] for r in records} == {"seed-9"}
    assert all("ts" in r for r in records)


def test_cli_reports_broken_content(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    real = get_paths()
    data_dir = tmp_path / "data"
    shutil.copytree(real.data_dir, data_dir)
    (data_dir / "modes.json").write_text("[]", encoding="utf-8")
    broken = Paths(
        repo_root=tmp_path,
        data_dir=data_dir,
        schema_dir=data_dir / "schemas",
        userdata_dir=tmp_path / "userdata",
    )
    monkeypatch.setattr("dicebattle.cli.get_paths", lambda: broken)

    assert main(["--rounds", "1"]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "modes.json" in captured.err
