from __future__ import annotations

from dataclasses import replace

from .energy import apply_energy_event
from .rng import shuffle
from .shield import consume_shield
from .state import GameState
from .types import DrawnEvent, EventCategory, EventType, Side, opponent

EVENT_POOLS: dict[EventCategory, tuple[EventType, ...]] = {
    "none": ("none",),
    "positive": ("lucky", "score_boost", "bonus_turn", "energy_charge"),
    "negative": ("bomb", "thief", "curse", "energy_drain"),
    "neutral": ("score_swap", "reset", "card_exchange", "none"),
}

DELAYED: frozenset[str] = frozenset({"lucky", "bonus_turn", "curse"})

SCORE_BOOST = 2
CURSE_PENALTY = 2
THIEF_AMOUNT = 2
THIEF_MIN_TOTAL = 5
BOMB_FLOOR = 3
SWAP_MIN_DIFF = 3


def draw_event(state: GameState) -> DrawnEvent:
    """Pop a category card and expand it to one concrete event type.

    With both piles empty a `none` event with an empty id is returned.
    """
    pile = state.decks.events
    if not pile.draw:
        pile.draw = [replace(c, picked=None) for c in shuffle(pile.discard, state.rng)]
        pile.discard = []
    if not pile.draw:
        return DrawnEvent(id="", type="none")
    card = pile.draw.pop()
    event_type = state.rng.pick(EVENT_POOLS[card.category])
    pile.discard.append(replace(card, picked=event_type))
    return DrawnEvent(id=card.id, type=event_type)


def schedule_delayed(state: GameState, event: DrawnEvent) -> GameState:
    sch = state.scheduled
    if event.type == "lucky":
        sch.luck_next = True
    elif event.type == "bonus_turn":
        sch.bonus_turn_next = True
    elif event.type == "curse":
        sch.curse_next += CURSE_PENALTY
    return state


def _thief(state: GameState, victim: Side) -> None:
    if consume_shield(state, victim, "steal-card"):
        return
    vps = state.players[victim]
    if vps.total >= THIEF_MIN_TOTAL:
        vps.total = max(1, vps.total - THIEF_AMOUNT)
        state.players[opponent(victim)].total += THIEF_AMOUNT


def _card_exchange(state: GameState) -> None:
    mine = state.players["me"].cards
    theirs = state.players["ai"].cards
    if not mine or not theirs:
        return
    mi = int(state.rng.next() * len(mine))
    ti = int(state.rng.next() * len(theirs))
    mine[mi], theirs[ti] = theirs[ti], mine[mi]


def apply_immediate(state: GameState, event: DrawnEvent, side: Side) -> GameState:
    t = event.type
    rnd = state.round
    if t == "score_boost":
        if side == "me":
            rnd.score_boost += SCORE_BOOST
        else:
            rnd.score_boost_ai += SCORE_BOOST
    elif t == "energy_charge":
        apply_energy_event(state, side, "charge")
    elif t == "energy_drain":
        apply_energy_event(state, side, "drain")
    elif t == "bomb":
        ps = state.players[side]
        ps.total = max(BOMB_FLOOR, ps.total // 2)
    elif t == "thief":
        _thief(state, side)
    elif t == "reset":
        if side == "me":
            rnd.temp_score = 0
            rnd.current_score = 0
        else:
            rnd.current_scores["ai"] = 0
    elif t == "score_swap":
        me = state.players["me"]
        ai = state.players["ai"]
        if abs(me.total - ai.total) >= SWAP_MIN_DIFF:
            me.total, ai.total = ai.total, me.total
    elif t == "card_exchange":
        _card_exchange(state)
    return state


def apply_event(state: GameState, event: DrawnEvent, side: Side) -> GameState:
    state.emit("event:apply", {"side": side, "id": event.id, "type": event.type})
    if event.type in DELAYED:
        return schedule_delayed(state, event)
    return apply_immediate(state, event, side)
