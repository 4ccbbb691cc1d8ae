from __future__ import annotations

from .energy import spend_energy
from .rng import shuffle
from .shield import add_shield, consume_shield
from .state import GAUGE_STEP, MAX_CARDS_PER_ROUND, MAX_ENERGY, GameState
from .types import CardKind, Side, StrategyCard, opponent

CARD_COSTS: dict[CardKind, int] = {"attack": 2, "defense": 1, "boost": 4, "steal": 2, "reset": 4}

PRE_ROLL_KINDS: frozenset[CardKind] = frozenset({"defense", "boost"})
POST_ROLL_KINDS: frozenset[CardKind] = frozenset({"attack", "steal", "reset"})

ATTACK_DAMAGE = 3


def draw_card(state: GameState, side: Side) -> StrategyCard | None:
    pile = state.decks.cards
    if not pile.draw:
        pile.draw = list(shuffle(pile.discard, state.rng))
        pile.discard = []
    if not pile.draw:
        return None
    card = pile.draw.pop()
    state.players[side].cards.append(card)
    state.emit("card:draw", {"side": side, "card_id": card.id, "kind": card.kind})
    return card


def add_gauge(state: GameState, side: Side, delta: int) -> GameState:
    """Add to the gauge and draw one card per full GAUGE_STEP, carrying the rest."""
    ps = state.players[side]
    gauge = ps.gauge + delta
    while gauge >= GAUGE_STEP:
        gauge -= GAUGE_STEP
        draw_card(state, side)
    ps.gauge = gauge
    return state


def phase_allows(state: GameState, kind: CardKind) -> bool:
    if state.round.rolled:
        return kind in POST_ROLL_KINDS
    return kind in PRE_ROLL_KINDS


def can_use_card(state: GameState, kind: CardKind) -> bool:
    used = state.round.used_cards
    if len(used) >= MAX_CARDS_PER_ROUND:
        return False
    if any(c.kind == kind for c in used):
        return False
    if not any(c.kind == kind for c in state.players["me"].cards):
        return False
    return phase_allows(state, kind)


def _take_from_hand(state: GameState, side: Side, kind: CardKind) -> StrategyCard:
    hand = state.players[side].cards
    for i, c in enumerate(hand):
        if c.kind == kind:
            return hand.pop(i)
    raise LookupError(kind)


def _steal_energy(state: GameState, thief: Side) -> int:
    victim = opponent(thief)
    amount = 1 + int(state.rng.next() * 2)
    vps = state.players[victim]
    tps = state.players[thief]
    take = min(amount, vps.energy, MAX_ENERGY - tps.energy)
    vps.energy -= take
    tps.energy += take
    return take


def use_card(state: GameState, kind: CardKind) -> GameState:
    """Play one card of `kind` from the player's hand.

    Illegal plays are ignored; callers gate on `can_use_card`. Raises
    InsufficientEnergy when the cost cannot be paid.
    """
    if not can_use_card(state, kind):
        return state
    side: Side = "me"
    target = opponent(side)

    spend_energy(state, side, CARD_COSTS[kind])
    card = _take_from_hand(state, side, kind)
    state.round.used_cards.append(card)
    state.emit("card:use", {"side": side, "card_id": card.id, "kind": kind})

    if kind == "defense":
        add_shield(state, side, 1)
    elif kind == "boost":
        state.round.boost_active = True
    elif kind == "reset":
        state.round.temp_score = 0
        state.round.boost_active = False
    elif kind == "attack":
        blocked = consume_shield(state, target, "attack-card")
        if not blocked:
            tps = state.players[target]
            tps.total = max(1, tps.total - ATTACK_DAMAGE)
        state.emit("card:attack", {"target": target, "amount": ATTACK_DAMAGE, "blocked": blocked})
    elif kind == "steal":
        blocked = consume_shield(state, target, "steal-card")
        taken = 0 if blocked else _steal_energy(state, side)
        state.emit("card:steal", {"from": target, "amount": taken, "blocked": blocked})
    return state
