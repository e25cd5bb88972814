"""
Injectable randomness sources.

Every noise term in the scorers, the sample generator and the realtime feed
draws from a `RandomSource`. Production code uses `SystemRandomSource`
(unseeded unless a seed is configured); tests pass a `FixedSequenceSource`
to pin the exact values.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Anything that yields floats uniformly distributed in [0, 1)."""

    def next(self) -> float:
        ...


class SystemRandomSource:
    """`random.Random` behind the RandomSource interface."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        return self._rng.random()


class FixedSequenceSource:
    """
    Replays a fixed sequence of values, cycling when exhausted.

    Values must lie in [0, 1); the cycle makes long pipelines safe to run
    against a short sequence.
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values: Sequence[float] = tuple(values)
        if not self._values:
            raise ValueError("FixedSequenceSource needs at least one value")
        for value in self._values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"value {value!r} is outside [0, 1)")
        self._index = 0

    @property
    def calls(self) -> int:
        """Number of values handed out so far."""
        return self._index

    def next(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


def uniform(source: RandomSource, low: float, high: float) -> float:
    """Draw from [low, high) using the given source."""
    return low + source.next() * (high - low)


def choice(source: RandomSource, options: Sequence[str]) -> str:
    """Pick one option; the index is clamped so a value near 1.0 stays in range."""
    index = min(int(source.next() * len(options)), len(options) - 1)
    return options[index]


__all__ = [
    "RandomSource",
    "SystemRandomSource",
    "FixedSequenceSource",
    "uniform",
    "choice",
]
