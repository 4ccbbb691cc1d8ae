from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from .cards import CARD_COSTS, use_card
from .round import finalize_round, is_game_over, start_round, start_round_ai
from .state import MAX_CARDS_PER_ROUND, GameState
from .types import CardKind, Side, Tendency, opponent


@dataclass(frozen=True)
class AIParams:
    """Heuristic thresholds for the AI policy.

    diff_attack / diff_defense:
      total deficit (lead) at which the policy switches to attack (defense)
    balance_energy:
      at or below this energy the policy recharges with balance
    card_use_rate:
      0..1, scaled to the number of cards played per round (0 = never)
    target_shields_min / target_shields_max:
      play defense cards while below the minimum, never above the maximum
    """

    diff_attack: int = 3
    diff_defense: int = 3
    balance_energy: int = 2
    card_use_rate: float = 0.6
    target_shields_min: int = 1
    target_shields_max: int = 2


def choose_tendency(state: GameState, params: AIParams, side: Side = "me") -> Tendency:
    me = state.players[side]
    opp = state.players[opponent(side)]
    diff = me.total - opp.total
    if diff <= -params.diff_attack or me.energy >= 6:
        return "attack"
    if diff >= params.diff_defense or me.shields == 0:
        return "defense"
    if me.energy <= params.balance_energy:
        return "balance"
    return "balance"


def _card_budget(state: GameState, params: AIParams) -> int:
    allowed = min(MAX_CARDS_PER_ROUND, math.ceil(params.card_use_rate * MAX_CARDS_PER_ROUND))
    return max(0, allowed - len(state.round.used_cards))


def _playable(state: GameState, kind: CardKind, picked: list[CardKind]) -> bool:
    if kind in picked:
        return False
    if any(c.kind == kind for c in state.round.used_cards):
        return False
    return any(c.kind == kind for c in state.players["me"].cards)


def decide_pre_roll_cards(state: GameState, params: AIParams) -> list[CardKind]:
    """Defense to reach the shield target, boost when a big round is likely."""
    if state.round.rolled:
        return []
    me = state.players["me"]
    budget = _card_budget(state, params)
    energy = me.energy
    actions: list[CardKind] = []

    if (
        len(actions) < budget
        and _playable(state, "defense", actions)
        and me.shields < params.target_shields_min
        and me.shields < params.target_shields_max
        and energy >= CARD_COSTS["defense"]
    ):
        actions.append("defense")
        energy -= CARD_COSTS["defense"]
    if (
        len(actions) < budget
        and _playable(state, "boost", actions)
        and energy >= CARD_COSTS["boost"]
        and (state.scheduled.bonus_turn_next or energy >= 6)
    ):
        actions.append("boost")
    return actions


def decide_post_roll_cards(state: GameState, params: AIParams) -> list[CardKind]:
    # reset only ever costs the caller its own boost, so it is never chosen
    if not state.round.rolled:
        return []
    me = state.players["me"]
    budget = _card_budget(state, params)
    energy = me.energy
    actions: list[CardKind] = []

    if (
        len(actions) < budget
        and _playable(state, "attack", actions)
        and energy >= CARD_COSTS["attack"]
        and me.shields >= 1
    ):
        actions.append("attack")
        energy -= CARD_COSTS["attack"]
    if (
        len(actions) < budget
        and _playable(state, "steal", actions)
        and CARD_COSTS["steal"] <= energy <= 8
    ):
        actions.append("steal")
    return actions


@dataclass(frozen=True)
class AIController:
    difficulty: str = "Normal"
    params: AIParams = AIParams()

    def choose_tendency(self, state: GameState, side: Side = "me") -> Tendency:
        return choose_tendency(state, self.params, side)

    def play_pre_roll(self, state: GameState) -> GameState:
        for kind in decide_pre_roll_cards(state, self.params):
            use_card(state, kind)
        return state

    def play_post_roll(self, state: GameState) -> GameState:
        for kind in decide_post_roll_cards(state, self.params):
            use_card(state, kind)
        return state


def create_ai(difficulty: str, presets: Mapping[str, AIParams]) -> AIController:
    """Build a controller; unknown difficulties fall back to Normal."""
    if difficulty in presets:
        return AIController(difficulty=difficulty, params=presets[difficulty])
    return AIController(difficulty="Normal", params=presets.get("Normal", AIParams()))


def play_round(
    state: GameState,
    tendency: Tendency,
    controller: AIController | None = None,
    rival: AIController | None = None,
) -> GameState:
    """One full round: pre-roll cards, both rolls, post-roll cards, finalize."""
    if controller is not None:
        controller.play_pre_roll(state)
    start_round(state, tendency)
    if rival is not None:
        start_round_ai(state, rival.choose_tendency(state, side="ai"))
    if controller is not None:
        controller.play_post_roll(state)
    return finalize_round(state)


def autoplay(
    state: GameState, controller: AIController, rival: AIController | None = None
) -> GameState:
    """Let `controller` play every remaining round for the player."""
    while not is_game_over(state):
        play_round(state, controller.choose_tendency(state), controller, rival)
    return state
