from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, TypeVar

from .rng import Rng, shuffle
from .types import CardKind, EventCategory, EventCard, Mode, Side, StrategyCard, Tendency

T = TypeVar("T")

LogEntry = tuple[str, dict[str, object]]
Observer = Callable[[str, dict[str, object]], None]

MAX_ENERGY = 10
MAX_SHIELDS = 2
GAUGE_STEP = 5
MAX_CARDS_PER_ROUND = 2

CARD_DISTRIBUTION: tuple[tuple[CardKind, int], ...] = (
    ("attack", 7),
    ("defense", 7),
    ("boost", 3),
    ("steal", 2),
    ("reset", 1),
)
EVENT_DISTRIBUTION: tuple[tuple[EventCategory, int], ...] = (
    ("none", 8),
    ("positive", 4),
    ("negative", 4),
    ("neutral", 4),
)


@dataclass(frozen=True)
class GameConfig:
    rounds: int = 8
    mode: Mode = "normal"


@dataclass
class PlayerState:
    total: int = 1
    energy: int = 0
    shields: int = 0
    gauge: int = 0
    cards: list[StrategyCard] = field(default_factory=list)


@dataclass
class RoundState:
    index: int = 1
    tendency: Tendency | None = None
    roll: int | None = None
    roll_me: int | None = None
    roll_ai: int | None = None
    used_cards: list[StrategyCard] = field(default_factory=list)
    current_score: int = 0
    current_scores: dict[Side, int] = field(default_factory=lambda: {"me": 0, "ai": 0})
    temp_score: int = 0
    score_boost: int = 0
    score_boost_ai: int = 0
    boost_active: bool = False

    @property
    def rolled(self) -> bool:
        return self.roll is not None


@dataclass
class Pile(Generic[T]):
    draw: list[T] = field(default_factory=list)
    discard: list[T] = field(default_factory=list)


@dataclass
class Decks:
    cards: Pile[StrategyCard] = field(default_factory=Pile)
    events: Pile[EventCard] = field(default_factory=Pile)


@dataclass
class Scheduled:
    """Effects recorded this round that fire on the next ``start_round``."""

    luck_next: bool = False
    curse_next: int = 0
    bonus_turn_next: bool = False


@dataclass
class Stats:
    roll_counts: dict[int, int] = field(default_factory=dict)
    consec_six: int = 0
    last_winner: Side | None = None
    win_streak_me: int = 0
    loss_streak_me: int = 0
    win_streak_ai: int = 0
    loss_streak_ai: int = 0
    # round scratch is cleared on finalize; the tie-break needs the last pair
    last_scores: dict[Side, int] = field(default_factory=lambda: {"me": 0, "ai": 0})


@dataclass
class GameState:
    config: GameConfig
    seed: int
    rng: Rng
    round: RoundState = field(default_factory=RoundState)
    players: dict[Side, PlayerState] = field(
        default_factory=lambda: {"me": PlayerState(), "ai": PlayerState()}
    )
    decks: Decks = field(default_factory=Decks)
    scheduled: Scheduled = field(default_factory=Scheduled)
    stats: Stats = field(default_factory=Stats)
    log: list[LogEntry] = field(default_factory=list)
    observers: list[Observer] = field(default_factory=list)

    def emit(self, tag: str, payload: dict[str, object]) -> None:
        """Append to the log and notify observers."""
        self.log.append((tag, payload))
        self.notify(tag, payload)

    def notify(self, tag: str, payload: dict[str, object]) -> None:
        """Notify observers without recording (phase markers)."""
        for fn in self.observers:
            fn(tag, payload)


def create_initial_state(
    config: GameConfig | None = None,
    seed: int = 123456,
    observers: Iterable[Observer] = (),
) -> GameState:
    cfg = config or GameConfig()
    rng = Rng(seed)
    state = GameState(config=cfg, seed=seed, rng=rng, observers=list(observers))

    cards: list[StrategyCard] = []
    for kind, count in CARD_DISTRIBUTION:
        for _ in range(count):
            cards.append(StrategyCard(id=f"C{len(cards) + 1}", kind=kind))
    state.decks.cards.draw = list(shuffle(cards, rng))

    events: list[EventCard] = []
    for category, count in EVENT_DISTRIBUTION:
        for _ in range(count):
            events.append(EventCard(id=f"E{len(events) + 1}", category=category))
    state.decks.events.draw = list(shuffle(events, rng))

    state.emit("phase:init", {"seed": seed, "rounds": cfg.rounds, "mode": cfg.mode})
    return state
