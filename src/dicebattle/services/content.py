from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from dicebattle.engine.ai import AIParams
from dicebattle.engine.state import GameConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.absolute_path))
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_number(obj: Mapping[str, object], key: str) -> float:
    v = obj.get(key)
    if not isinstance(v, (int, float)) or isinstance(v, bool):
        raise ContentError(f"Expected number for {key}")
    return float(v)


@dataclass(frozen=True)
class ModeCatalog:
    default_mode: str
    rounds: dict[str, int]


@dataclass(frozen=True)
class AIPresets:
    default_difficulty: str
    presets: dict[str, AIParams]


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def _load_validated(self, name: str) -> dict[str, object]:
        path = self._data_dir / f"{name}.json"
        schema = _load_json(self._schema_dir / f"{name}.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{name}.json must be an object")
        return raw

    def load_modes(self) -> ModeCatalog:
        raw = self._load_validated("modes")
        raw_modes = raw.get("modes")
        if not isinstance(raw_modes, dict):
            raise ContentError("modes.json.modes must be an object")
        rounds: dict[str, int] = {}
        for mode, cfg in raw_modes.items():
            if not isinstance(cfg, dict):
                continue
            rounds[mode] = _require_int(cfg, "rounds")
        default_mode = str(raw.get("default_mode"))
        if default_mode not in rounds:
            raise ContentError(f"default_mode {default_mode!r} has no rounds entry")
        return ModeCatalog(default_mode=default_mode, rounds=rounds)

    def load_ai_params(self) -> AIPresets:
        raw = self._load_validated("ai_params")
        raw_presets = raw.get("presets")
        if not isinstance(raw_presets, dict):
            raise ContentError("ai_params.json.presets must be an object")
        presets: dict[str, AIParams] = {}
        for name, p in raw_presets.items():
            if not isinstance(p, dict):
                continue
            presets[name] = AIParams(
                diff_attack=_require_int(p, "diff_attack"),
                diff_defense=_require_int(p, "diff_defense"),
                balance_energy=_require_int(p, "balance_energy"),
                card_use_rate=_require_number(p, "card_use_rate"),
                target_shields_min=_require_int(p, "target_shields_min"),
                target_shields_max=_require_int(p, "target_shields_max"),
            )
        default = str(raw.get("default_difficulty"))
        if default not in presets:
            raise ContentError(f"default_difficulty {default!r} is not a preset")
        return AIPresets(default_difficulty=default, presets=presets)

    def resolve_config(self, mode: str | None = None, rounds: int | None = None) -> GameConfig:
        """Normalize caller input into a GameConfig.

        Unknown modes fall back to the catalog default; missing or
        non-positive round counts take the mode's default.
        """
        catalog = self.load_modes()
        if mode not in catalog.rounds:
            mode = catalog.default_mode
        if rounds is None or rounds < 1:
            rounds = catalog.rounds[mode]
        return GameConfig(rounds=rounds, mode=mode)  # type: ignore[arg-type]

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_modes()
        _ = self.load_ai_params()
