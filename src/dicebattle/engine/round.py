from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .cards import add_gauge, draw_card
from .dice import resolve_special, resolve_tendency, roll_dice, star_bonus
from .energy import gain_energy
from .events import apply_event, draw_event
from .shield import add_shield, consume_shield
from .state import GameState, RoundState
from .types import Side, Special, Tendency, opponent

HIGH_SCORE = 15
LOSS_STREAK_BONUS = 2
WIN_STREAK_BONUS = 3

RankReason = Literal["total", "last_round", "energy", "hand", "draw"]


@dataclass(frozen=True)
class FinalResult:
    winner: Side | None
    reason: RankReason
    totals: dict[Side, int]


def is_game_over(state: GameState) -> bool:
    return state.round.index > state.config.rounds


def _score_roll(
    state: GameState, side: Side, tendency: Tendency, roll: int, *, schedule_curse: bool
) -> int:
    """Tendency score plus dice specials for one roll of `side`."""
    res = resolve_tendency(tendency, roll)
    score = res.base_score
    if res.bonus is not None:
        score += res.bonus.plus
        if res.bonus.shield:
            add_shield(state, side, res.bonus.shield)

    specials = resolve_special(tendency, roll, state.rng)
    for sp in specials:
        score = _apply_special(state, side, sp, score, schedule_curse=schedule_curse)
    return score


def _apply_special(
    state: GameState, side: Side, sp: Special, score: int, *, schedule_curse: bool
) -> int:
    state.emit("dice:special", {"side": side, "source": sp.source, "symbol": sp.symbol})
    if sp.symbol == "⚡":
        if not consume_shield(state, side, "attack-die"):
            score = max(0, score - 2)
    elif sp.symbol == "🔥":
        if not consume_shield(state, side, "flame-die-now"):
            score = max(0, score - 3)
        # the carry-over part ignores shields
        if schedule_curse:
            state.scheduled.curse_next += 1
    elif sp.symbol == "🎯":
        score *= 2
    elif sp.symbol == "🛡️":
        add_shield(state, side, 1)
    elif sp.symbol == "⭐":
        score += star_bonus(state.rng)
    return score


def start_round(state: GameState, tendency: Tendency) -> GameState:
    """Roll the player's die for the current round (PreRoll -> PostRoll).

    Out-of-phase calls and calls after the last round leave the state as is.
    """
    rnd = state.round
    if rnd.rolled or is_game_over(state):
        return state
    state.notify("phase", {"name": "round:start", "index": rnd.index})

    if tendency == "balance":
        gain_energy(state, "me", 1)
        add_gauge(state, "me", 1)
    gain_energy(state, "me", 3 if state.stats.last_winner == "ai" else 2)

    sch = state.scheduled
    if sch.curse_next > 0:
        rnd.temp_score = max(0, rnd.temp_score - sch.curse_next)
        state.emit("scheduled:curse", {"amount": sch.curse_next})
        sch.curse_next = 0

    roll = roll_dice(state.rng)
    if sch.luck_next:
        roll = max(roll, roll_dice(state.rng))
        sch.luck_next = False
    rnd.tendency = tendency
    rnd.roll = roll
    rnd.roll_me = roll
    stats = state.stats
    stats.roll_counts[roll] = stats.roll_counts.get(roll, 0) + 1
    stats.consec_six = stats.consec_six + 1 if roll == 6 else 0
    state.emit("dice:roll", {"side": "me", "tendency": tendency, "value": roll})

    score = _score_roll(state, "me", tendency, roll, schedule_curse=True)
    if rnd.boost_active:
        score *= 2

    if sch.bonus_turn_next:
        extra = roll_dice(state.rng)
        state.emit("bonus:roll", {"value": extra})
        add = _score_roll(state, "me", tendency, extra, schedule_curse=True)
        if rnd.boost_active:
            add *= 2
        score += add
        sch.bonus_turn_next = False

    if stats.roll_counts[roll] >= 2:
        add_gauge(state, "me", 1)
    if stats.consec_six >= 2:
        # free card, gauge untouched
        draw_card(state, "me")
        stats.consec_six = 0

    if score >= HIGH_SCORE:
        add_gauge(state, "me", 1)

    rnd.current_score = max(0, score)
    rnd.current_scores["me"] = rnd.current_score
    return state


def start_round_ai(state: GameState, tendency: Tendency) -> GameState:
    """Roll the opponent's die for the current round.

    The opponent plays no cards and has no scheduled effects of its own.
    """
    rnd = state.round
    if rnd.roll_ai is not None or is_game_over(state):
        return state
    state.notify("phase", {"name": "round:start:ai", "index": rnd.index})

    if tendency == "balance":
        gain_energy(state, "ai", 1)
        add_gauge(state, "ai", 1)
    gain_energy(state, "ai", 3 if state.stats.last_winner == "me" else 2)

    roll = roll_dice(state.rng)
    rnd.roll_ai = roll
    state.emit("dice:roll", {"side": "ai", "tendency": tendency, "value": roll})

    score = _score_roll(state, "ai", tendency, roll, schedule_curse=False)
    if score >= HIGH_SCORE:
        add_gauge(state, "ai", 1)
    rnd.current_scores["ai"] = max(0, score)
    return state


def _record_winner(state: GameState, winner: Side | None) -> None:
    stats = state.stats
    stats.last_winner = winner
    if winner is None:
        # loss streaks survive a tie
        stats.win_streak_me = stats.win_streak_ai = 0
        return
    gain_energy(state, winner, 1)
    if winner == "me":
        stats.win_streak_me += 1
        stats.loss_streak_me = 0
        stats.win_streak_ai = 0
        stats.loss_streak_ai += 1
    else:
        stats.win_streak_ai += 1
        stats.loss_streak_ai = 0
        stats.win_streak_me = 0
        stats.loss_streak_me += 1


def finalize_round(state: GameState) -> GameState:
    """Apply events and scoring, then advance to the next round's PreRoll."""
    rnd = state.round
    if not rnd.rolled:
        return state

    rnd.temp_score = rnd.current_score
    for side in ("me", "ai"):
        ev = draw_event(state)
        state.emit("event:draw", {"side": side, "id": ev.id, "type": ev.type})
        apply_event(state, ev, side)

    me = state.players["me"]
    ai = state.players["ai"]
    rnd.temp_score = max(0, rnd.temp_score + rnd.score_boost)
    me.total = max(1, me.total + rnd.temp_score)
    ai.total = max(1, ai.total + max(0, rnd.current_scores["ai"]))
    # counts toward the comparison only, never toward ai.total
    rnd.current_scores["ai"] += rnd.score_boost_ai

    me_score = rnd.current_scores["me"]
    ai_score = rnd.current_scores["ai"]
    winner: Side | None = None
    if me_score > ai_score:
        winner = "me"
    elif ai_score > me_score:
        winner = "ai"
    _record_winner(state, winner)

    stats = state.stats
    # streak bonuses only bank gauge; the next add_gauge pays out any overflow
    if stats.loss_streak_me == LOSS_STREAK_BONUS:
        me.gauge += 1
        stats.loss_streak_me = 0
    if stats.win_streak_me == WIN_STREAK_BONUS:
        me.gauge += 1
        stats.win_streak_me = 0

    state.emit("score:final", {"round": rnd.temp_score, "total": me.total, "winner": winner})
    state.notify("phase", {"name": "round:end", "index": rnd.index})
    state.emit("round", {"index": rnd.index, "roll": rnd.roll, "roll_ai": rnd.roll_ai})

    stats.last_scores = dict(rnd.current_scores)
    state.decks.cards.discard.extend(rnd.used_cards)
    state.round = RoundState(index=rnd.index + 1)
    return state


def run_round(state: GameState, tendency: Tendency) -> GameState:
    return finalize_round(start_round(state, tendency))


def final_result(state: GameState) -> FinalResult:
    """Rank both sides: total, then last round score, energy, hand size."""
    me = state.players["me"]
    ai = state.players["ai"]
    last = state.stats.last_scores
    cascade: tuple[tuple[RankReason, int, int], ...] = (
        ("total", me.total, ai.total),
        ("last_round", last["me"], last["ai"]),
        ("energy", me.energy, ai.energy),
        ("hand", len(me.cards), len(ai.cards)),
    )
    totals: dict[Side, int] = {"me": me.total, "ai": ai.total}
    for reason, mine, theirs in cascade:
        if mine != theirs:
            winner: Side = "me" if mine > theirs else opponent("me")
            return FinalResult(winner=winner, reason=reason, totals=totals)
    return FinalResult(winner=None, reason="draw", totals=totals)
