"""Deterministic, headless round engine for Dice Battle.

IMPORTANT: This package must never do I/O; logging goes through the state log
and injected observers.
"""

from .ai import AIController, AIParams, autoplay, choose_tendency, create_ai, play_round
from .cards import add_gauge, can_use_card, draw_card, use_card
from .energy import InsufficientEnergy, RuleError
from .round import (
    FinalResult,
    final_result,
    finalize_round,
    is_game_over,
    run_round,
    start_round,
    start_round_ai,
)
from .shield import create_shield
from .state import GameConfig, GameState, create_initial_state
from .types import CardKind, Side, Tendency

__all__ = [
    "AIController",
    "AIParams",
    "CardKind",
    "FinalResult",
    "GameConfig",
    "GameState",
    "InsufficientEnergy",
    "RuleError",
    "Side",
    "Tendency",
    "add_gauge",
    "autoplay",
    "can_use_card",
    "choose_tendency",
    "create_ai",
    "create_initial_state",
    "create_shield",
    "draw_card",
    "final_result",
    "finalize_round",
    "is_game_over",
    "play_round",
    "run_round",
    "start_round",
    "start_round_ai",
    "use_card",
]
