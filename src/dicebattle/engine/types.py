from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Side = Literal["me", "ai"]
SIDES: tuple[Side, ...] = ("me", "ai")

Tendency = Literal["attack", "defense", "balance"]
TENDENCIES: tuple[Tendency, ...] = ("attack", "defense", "balance")

CardKind = Literal["attack", "defense", "boost", "steal", "reset"]
CARD_KINDS: tuple[CardKind, ...] = ("attack", "defense", "boost", "steal", "reset")

EventCategory = Literal["none", "positive", "negative", "neutral"]
EventType = Literal[
    "none",
    "lucky",
    "score_boost",
    "bonus_turn",
    "energy_charge",
    "bomb",
    "thief",
    "curse",
    "energy_drain",
    "score_swap",
    "reset",
    "card_exchange",
]

BlockableEffect = Literal["attack-card", "attack-die", "flame-die-now", "steal-card"]

SpecialSource = Literal["attack:special", "defense:special"]
SpecialSymbol = Literal["⚡", "🔥", "🎯", "🛡️", "⭐"]

EnergyEventKind = Literal["charge", "drain"]

Mode = Literal["quick", "normal", "extended"]


def opponent(side: Side) -> Side:
    return "ai" if side == "me" else "me"


@dataclass(frozen=True)
class StrategyCard:
    id: str
    kind: CardKind


@dataclass(frozen=True)
class EventCard:
    """A category card in the event deck.

    ``picked`` is set on discarded cards to the concrete type the category
    expanded to.
    """

    id: str
    category: EventCategory
    picked: EventType | None = None


@dataclass(frozen=True)
class DrawnEvent:
    id: str
    type: EventType


@dataclass(frozen=True)
class TendencyBonus:
    plus: int = 0
    shield: int = 0
    energy: int = 0
    gauge: int = 0


@dataclass(frozen=True)
class TendencyResult:
    success: bool
    base_score: int
    bonus: TendencyBonus | None = None


@dataclass(frozen=True)
class Special:
    source: SpecialSource
    symbol: SpecialSymbol
