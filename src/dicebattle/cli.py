from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from dicebattle.engine.ai import create_ai, play_round
from dicebattle.engine.round import final_result, is_game_over
from dicebattle.engine.serialize import snapshot
from dicebattle.engine.state import Observer, create_initial_state
from dicebattle.engine.types import TENDENCIES
from dicebattle.paths import get_paths
from dicebattle.services.content import ContentError, ContentService
from dicebattle.services.telemetry import TelemetryService

DEFAULT_SEED = 123456


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dicebattle", description="Run a seeded dice battle.")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--mode", default=None, help="quick, normal or extended")
    parser.add_argument("--rounds", type=int, default=None)
    parser.add_argument(
        "--tendency",
        choices=TENDENCIES,
        default=None,
        help="fixed tendency every round (default: AI autopilot)",
    )
    parser.add_argument("--difficulty", default="Normal", help="autopilot difficulty")
    parser.add_argument("--opponent", default="Normal", help="difficulty of the ai side")
    parser.add_argument(
        "--telemetry",
        nargs="?",
        const="",
        default=None,
        help="append engine events to this JSONL file (default: userdata/telemetry.jsonl)",
    )
    parser.add_argument("--json", action="store_true", help="print the final snapshot as JSON")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    try:
        config = content.resolve_config(args.mode, args.rounds)
        presets = content.load_ai_params()
    except ContentError as e:
        print(f"dicebattle: {e}", file=sys.stderr)
        return 2

    seed = args.seed if args.seed >= 0 else DEFAULT_SEED
    observers: list[Observer] = []
    if args.telemetry is not None:
        log_path = Path(args.telemetry) if args.telemetry else paths.userdata_dir / "telemetry.jsonl"
        observers.append(TelemetryService(log_path, session=f"seed-{seed}"))

    state = create_initial_state(config, seed, observers=observers)
    pilot = create_ai(args.difficulty, presets.presets)
    rival = create_ai(args.opponent, presets.presets)

    while not is_game_over(state):
        index = state.round.index
        tendency = args.tendency or pilot.choose_tendency(state)
        controller = None if args.tendency else pilot
        play_round(state, tendency, controller, rival)
        me = state.players["me"]
        ai = state.players["ai"]
        scores = state.stats.last_scores
        if not args.json:
            print(
                f"round {index}: {tendency:<7} me {scores['me']:>2} ai {scores['ai']:>2}"
                f" | totals {me.total}:{ai.total} energy {me.energy}:{ai.energy}"
            )

    result = final_result(state)
    if args.json:
        print(json.dumps(snapshot(state), ensure_ascii=False, indent=2))
    else:
        outcome = {"me": "You win", "ai": "You lose", None: "Draw"}[result.winner]
        print(f"{outcome} ({result.reason}) me {result.totals['me']} : ai {result.totals['ai']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
