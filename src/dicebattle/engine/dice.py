from __future__ import annotations

from .rng import Rng
from .types import Special, Tendency, TendencyBonus, TendencyResult

ATTACK_SPECIALS = ("⚡", "🔥", "🎯")
DEFENSE_SPECIALS = ("🛡️", "⭐")


def roll_dice(rng: Rng) -> int:
    return rng.roll(6)


def resolve_tendency(tendency: Tendency, roll: int) -> TendencyResult:
    if tendency == "attack":
        success = roll >= 4
        return TendencyResult(
            success=success,
            base_score=roll if success else 1,
            bonus=TendencyBonus(plus=3) if roll == 6 else None,
        )
    if tendency == "defense":
        success = 2 <= roll <= 5
        return TendencyResult(
            success=success,
            base_score=roll if success else 0,
            bonus=TendencyBonus(shield=1) if success else None,
        )
    return TendencyResult(success=True, base_score=roll, bonus=TendencyBonus(energy=1, gauge=1))


def resolve_special(tendency: Tendency, roll: int, rng: Rng) -> list[Special]:
    """Secondary roll for narrative side effects.

    Only an attack six and a defense two have specials; every other
    combination leaves the RNG untouched.
    """
    if tendency == "attack" and roll == 6:
        return [Special("attack:special", rng.pick(ATTACK_SPECIALS))]
    if tendency == "defense" and roll == 2:
        return [Special("defense:special", rng.pick(DEFENSE_SPECIALS))]
    return []


def star_bonus(rng: Rng) -> int:
    return 2 + int(rng.next() * 5)
