# -*- coding: utf-8 -*-

"""
Pure random draws over an injected source.

Any object with ``random() -> float in [0, 1)`` works as a source,
``random.Random(seed)`` included, so tests can replay a run exactly.
"""

from typing import Mapping, Protocol, Sequence, TypeVar
from domain.errors import DegenerateDistribution, InvalidRange

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float: ...


def pick_int(rng: RandomSource, lo: int, hi: int) -> int:
    if lo > hi:
        raise InvalidRange(f"Invalid range: min {lo} > max {hi}.")
    span = hi - lo + 1
    # min() guards a source that returns exactly 1.0
    return lo + min(int(rng.random() * span), span - 1)


def pick_uniform_float(rng: RandomSource, lo: float, hi: float) -> float:
    if lo > hi:
        raise InvalidRange(f"Invalid range: min {lo} > max {hi}.")
    return lo + rng.random() * (hi - lo)


def pick_choice(rng: RandomSource, items: Sequence[T]) -> T:
    if not items:
        raise DegenerateDistribution("Cannot choose from an empty set.")
    return items[pick_int(rng, 0, len(items) - 1)]


def pick_categorical(rng: RandomSource, weights: Mapping[str, float]) -> str:
    """
    Pick a key with probability weight / sum(weights).
    Zero-weight keys are never returned.
    """
    for name, w in weights.items():
        if w < 0:
            raise DegenerateDistribution(f"Negative weight for '{name}': {w}.")
    total = sum(weights.values())
    if total <= 0:
        raise DegenerateDistribution(
            f"Weights {dict(weights)} sum to zero; nothing can be drawn."
        )

    r = rng.random() * total
    acc = 0.0
    last = None
    for name, w in weights.items():
        if w <= 0:
            continue
        acc += w
        last = name
        if r < acc:
            return name
    # float rounding at the upper edge
    return last
