from __future__ import annotations

from .state import GameState, PlayerState, RoundState
from .types import EventCard, StrategyCard


def _card_to_dict(c: StrategyCard) -> dict[str, object]:
    return {"id": c.id, "kind": c.kind}


def _event_card_to_dict(c: EventCard) -> dict[str, object]:
    return {"id": c.id, "category": c.category, "picked": c.picked}


def _player_to_dict(p: PlayerState) -> dict[str, object]:
    return {
        "total": p.total,
        "energy": p.energy,
        "shields": p.shields,
        "gauge": p.gauge,
        "cards": [_card_to_dict(c) for c in p.cards],
    }


def _round_to_dict(r: RoundState) -> dict[str, object]:
    return {
        "index": r.index,
        "tendency": r.tendency,
        "roll": r.roll,
        "roll_me": r.roll_me,
        "roll_ai": r.roll_ai,
        "used_cards": [_card_to_dict(c) for c in r.used_cards],
        "current_score": r.current_score,
        "current_scores": dict(r.current_scores),
        "temp_score": r.temp_score,
        "score_boost": r.score_boost,
        "score_boost_ai": r.score_boost_ai,
        "boost_active": r.boost_active,
    }


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game state."""
    st = state.stats
    return {
        "seed": state.seed,
        "rng_state": state.rng.state,
        "config": {"rounds": state.config.rounds, "mode": state.config.mode},
        "round": _round_to_dict(state.round),
        "players": {side: _player_to_dict(p) for side, p in state.players.items()},
        "decks": {
            "cards": {
                "draw": [_card_to_dict(c) for c in state.decks.cards.draw],
                "discard": [_card_to_dict(c) for c in state.decks.cards.discard],
            },
            "events": {
                "draw": [_event_card_to_dict(c) for c in state.decks.events.draw],
                "discard": [_event_card_to_dict(c) for c in state.decks.events.discard],
            },
        },
        "scheduled": {
            "luck_next": state.scheduled.luck_next,
            "curse_next": state.scheduled.curse_next,
            "bonus_turn_next": state.scheduled.bonus_turn_next,
        },
        "stats": {
            # JSON object keys must be strings
            "roll_counts": {str(face): n for face, n in sorted(st.roll_counts.items())},
            "consec_six": st.consec_six,
            "last_winner": st.last_winner,
            "win_streak_me": st.win_streak_me,
            "loss_streak_me": st.loss_streak_me,
            "win_streak_ai": st.win_streak_ai,
            "loss_streak_ai": st.loss_streak_ai,
            "last_scores": dict(st.last_scores),
        },
        "log": [[tag, dict(payload)] for tag, payload in state.log],
    }
