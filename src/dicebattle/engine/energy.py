from __future__ import annotations

from .state import MAX_ENERGY, GameState
from .types import EnergyEventKind, Side


class RuleError(RuntimeError):
    pass


class InsufficientEnergy(RuleError):
    def __init__(self, side: Side, need: int, have: int) -> None:
        super().__init__(f"Not enough energy for {side}: need {need}, have {have}")
        self.side = side
        self.need = need
        self.have = have


def gain_energy(state: GameState, side: Side, amount: int) -> GameState:
    ps = state.players[side]
    ps.energy = min(MAX_ENERGY, ps.energy + amount)
    return state


def spend_energy(state: GameState, side: Side, amount: int) -> GameState:
    ps = state.players[side]
    after = ps.energy - amount
    if after < 0:
        raise InsufficientEnergy(side, amount, ps.energy)
    ps.energy = max(0, after)
    return state


def charge_delta(energy: int) -> int:
    """Step function for an energy charge: +3 up to 7, +2 up to 9, else nothing."""
    if energy <= 7:
        return 3
    if energy <= 9:
        return 2
    return 0


def apply_energy_event(state: GameState, side: Side, kind: EnergyEventKind) -> GameState:
    ps = state.players[side]
    if kind == "charge":
        return gain_energy(state, side, charge_delta(ps.energy))
    if kind == "drain":
        # below 3 a drain does nothing at all
        if ps.energy >= 3:
            ps.energy = max(1, ps.energy - 2)
    return state
