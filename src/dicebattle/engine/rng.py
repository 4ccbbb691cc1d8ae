from __future__ import annotations

from typing import MutableSequence, TypeVar

T = TypeVar("T")

DEFAULT_SEED = 123456789
_MASK = 0xFFFFFFFF


class Rng:
    """Seeded xorshift32 stream.

    Every random decision in a game flows through one instance so a seed and a
    sequence of inputs fully determine the outcome.
    """

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        s = seed & _MASK
        # xorshift never leaves the all-zero state
        self.state = s if s else DEFAULT_SEED

    def next(self) -> float:
        s = self.state
        s = (s ^ (s << 13)) & _MASK
        s ^= s >> 17
        s = (s ^ (s << 5)) & _MASK
        self.state = s
        return s / 0x100000000

    def roll(self, max: int = 6) -> int:
        return 1 + int(self.next() * max)

    def pick(self, options: tuple[T, ...] | list[T]) -> T:
        return options[int(self.next() * len(options))]


def shuffle(items: MutableSequence[T], rng: Rng) -> MutableSequence[T]:
    """In-place Fisher-Yates, last index down to 1."""
    for i in range(len(items) - 1, 0, -1):
        j = int(rng.next() * (i + 1))
        items[i], items[j] = items[j], items[i]
    return items
