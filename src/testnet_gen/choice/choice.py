"""
Reproducible random selection primitives.

Every selector draws from a caller-owned `random.Random`. The stream is
threaded through each call so that, for a fixed seed, the sequence of draws
(and therefore every generated testnet) is reproducible bit for bit.

Selectors copy their options on construction and never mutate them.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True, init=False)
class UniformChoice(Generic[T]):
    """Picks one option with equal probability."""

    options: tuple[T, ...]
    """Candidate values, in draw order. Never empty."""

    def __init__(self, options: Iterable[T]) -> None:
        object.__setattr__(self, "options", tuple(options))

    def choose(self, rng: random.Random) -> T:
        """Return one option, consuming exactly one draw."""
        return self.options[rng.randrange(len(self.options))]

    def __len__(self) -> int:
        return len(self.options)


@dataclass(frozen=True, slots=True, init=False)
class WeightedChoice(Generic[T]):
    """
    Picks one option with probability proportional to its weight.

    Options are walked in insertion order. A single draw in `[0, total)` selects
    the first option whose cumulative weight exceeds it.
    """

    weights: tuple[tuple[T, int], ...]
    """(option, weight) pairs. Weights are positive integers."""

    def __init__(self, weights: Mapping[T, int]) -> None:
        object.__setattr__(self, "weights", tuple(weights.items()))

    @property
    def total(self) -> int:
        """Sum of all weights."""
        return sum(weight for _, weight in self.weights)

    def choose(self, rng: random.Random) -> T:
        """Return one option, consuming exactly one draw."""
        remaining = rng.randrange(self.total)
        for option, weight in self.weights:
            if remaining < weight:
                return option
            remaining -= weight
        raise AssertionError("weighted draw fell outside the weight range")

    def as_dict(self) -> dict[T, int]:
        """Return a fresh option -> weight mapping."""
        return dict(self.weights)

    def __len__(self) -> int:
        return len(self.weights)


@dataclass(frozen=True, slots=True, init=False)
class ProbSetChoice(Generic[T]):
    """
    Picks a subset where each option is included independently.

    One Bernoulli draw is made per option, in insertion order, so the number of
    draws is always the number of options. The result may be empty.
    """

    probabilities: tuple[tuple[T, float], ...]
    """(option, inclusion probability in [0, 1]) pairs."""

    def __init__(self, probabilities: Mapping[T, float]) -> None:
        object.__setattr__(self, "probabilities", tuple(probabilities.items()))

    def choose(self, rng: random.Random) -> list[T]:
        """Return the included options, in insertion order."""
        return [option for option, p in self.probabilities if rng.random() <= p]


@dataclass(frozen=True, slots=True, init=False)
class UniformSetChoice(Generic[T]):
    """
    Picks a non-empty random subset.

    Both the size and the members are random: the options are permuted, then
    truncated to between 1 and `len - 1` elements. A single option is always
    returned as-is.
    """

    options: tuple[T, ...]
    """Candidate values. Never empty."""

    def __init__(self, options: Iterable[T]) -> None:
        object.__setattr__(self, "options", tuple(options))

    def choose(self, rng: random.Random) -> list[T]:
        """Return a non-empty subset in permutation order."""
        indexes = list(range(len(self.options)))
        rng.shuffle(indexes)
        if len(indexes) > 1:
            indexes = indexes[: 1 + rng.randrange(len(indexes) - 1)]
        return [self.options[i] for i in indexes]
