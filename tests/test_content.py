from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from dicebattle.paths import get_paths
from dicebattle.services.content import ContentError, ContentService


def _service() -> ContentService:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir)


def _copy_data(tmp_path: Path) -> ContentService:
    paths = get_paths()
    data_dir = tmp_path / "data"
    shutil.copytree(paths.data_dir, data_dir)
    return ContentService(data_dir, data_dir / "schemas")


def test_content_schemas_validate() -> None:
    _service().validate_all()


def test_ai_presets_load() -> None:
    presets = _service().load_ai_params()
    assert presets.default_difficulty == "Normal"
    assert set(presets.presets) == {"Easy", "Normal", "Hard"}
    assert presets.presets["Hard"].card_use_rate == pytest.approx(0.9)
    assert presets.presets["Easy"].target_shields_max == 1


@pytest.mark.parametrize(
    "mode, rounds, expected",
    [
        ("quick", None, ("quick", 5)),
        ("extended", None, ("extended", 12)),
        (None, None, ("normal", 8)),
        ("marathon", None, ("normal", 8)),
        ("quick", 3, ("quick", 3)),
        ("quick", 0, ("quick", 5)),
        ("normal", -4, ("normal", 8)),
    ],
)
def test_resolve_config(mode, rounds, expected) -> None:
    cfg = _service().resolve_config(mode, rounds)
    assert (cfg.mode, cfg.rounds) == expected


def test_invalid_json_is_reported(tmp_path: Path) -> None:
    content = _copy_data(tmp_path)
    (tmp_path / "data" / "modes.json").write_text("{ not json", encoding="utf-8")
    with pytest.raises(ContentError, match="Invalid JSON"):
        content.load_modes()


def test_schema_violation_is_reported(tmp_path: Path) -> None:
    content = _copy_data(tmp_path)
    path = tmp_path / "data" / "ai_params.json"
    raw = json.loads(path.read_text(encoding="utf-8"))
    raw["presets"]["Normal"]["card_use_rate"] = 2.5
    path.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(ContentError, match="card_use_rate"):
        content.validate_all()


def test_missing_file_is_reported(tmp_path: Path) -> None:
    content = _copy_data(tmp_path)
    (tmp_path / "data" / "modes.json").unlink()
    with pytest.raises(ContentError, match="Missing content file"):
        content.resolve_config("quick")


def test_default_difficulty_must_be_a_preset(tmp_path: Path) -> None:
    content = _copy_data(tmp_path)
    path = tmp_path / "data" / "ai_params.json"
    raw = json.loads(path.read_text(encoding="utf-8"))
    raw["default_difficulty"] = "Nightmare"
    path.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(ContentError, match="Nightmare"):
        content.load_ai_params()


def test_paths_point_at_packaged_content() -> None:
    paths = get_paths()
    assert (paths.data_dir / "modes.json").is_file()
    assert (paths.schema_dir / "modes.schema.json").is_file()
    assert paths.userdata_dir.parent == paths.repo_root
