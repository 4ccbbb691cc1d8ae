from __future__ import annotations

from .energy import spend_energy
from .state import MAX_SHIELDS, GameState
from .types import Side

BLOCKABLE: frozenset[str] = frozenset({"attack-card", "attack-die", "flame-die-now", "steal-card"})

SHIELD_COST = 3


def add_shield(state: GameState, side: Side, n: int = 1) -> GameState:
    ps = state.players[side]
    ps.shields = min(MAX_SHIELDS, ps.shields + n)
    return state


def can_block(effect: str) -> bool:
    return effect in BLOCKABLE


def consume_shield(state: GameState, side: Side, effect: str) -> bool:
    """Spend one of `side`'s shields against `effect`.

    Returns True when the effect was blocked. Unblockable effects never touch
    the shield count.
    """
    if not can_block(effect):
        return False
    ps = state.players[side]
    if ps.shields > 0:
        ps.shields -= 1
        state.emit("shield:block", {"side": side, "effect": effect, "left": ps.shields})
        return True
    return False


def create_shield(state: GameState, side: Side = "me") -> GameState:
    """Buy a shield for SHIELD_COST energy. Silently does nothing at the cap."""
    if state.players[side].shields >= MAX_SHIELDS:
        return state
    spend_energy(state, side, SHIELD_COST)
    add_shield(state, side, 1)
    state.emit("shield:create", {"side": side, "shields": state.players[side].shields})
    return state
