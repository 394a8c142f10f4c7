# world_engine/rng.py

"""
================================================================================
DETERMINISTIC RANDOM NUMBER GENERATOR
================================================================================
A small, self-contained seeded generator used by every stage of world
generation. It implements the Park-Miller "minimal standard" multiplicative
linear congruential recurrence so that a given seed produces the same
sequence on every platform and interpreter.

Data Contract:
---------------
- Inputs (on initialization):
    - seed (int): Any integer. It is normalized into [1, 2147483646].
- Outputs:
    - random() returns floats in [0, 1).
- Side Effects: None outside the instance.
- Invariants: Identical seeds yield identical sequences. Each derived helper
  consumes exactly one random() call, except shuffle() which consumes one
  call per swap.
================================================================================
"""

import math
from typing import MutableSequence, Sequence, TypeVar

from . import config as DEFAULTS

T = TypeVar("T")


class SeededRandom:
    """Stateful Park-Miller generator. Never share one across generation runs."""

    def __init__(self, seed: int):
        self.seed = int(seed)
        # Truncated remainder: negative seeds keep their sign before the shift.
        state = abs(self.seed) % DEFAULTS.RNG_MODULUS
        if self.seed < 0:
            state = -state
        if state <= 0:
            state += DEFAULTS.RNG_MODULUS - 1
        self._state = state

    def random(self) -> float:
        """Returns the next value in [0, 1)."""
        self._state = (self._state * DEFAULTS.RNG_MULTIPLIER) % DEFAULTS.RNG_MODULUS
        return (self._state - 1) / (DEFAULTS.RNG_MODULUS - 1)

    def random_int(self, min_value: int, max_value: int) -> int:
        """Integer in [min_value, max_value)."""
        return math.floor(self.random() * (max_value - min_value)) + min_value

    def random_float(self, min_value: float, max_value: float) -> float:
        return self.random() * (max_value - min_value) + min_value

    def chance(self, probability: float) -> bool:
        return self.random() < probability

    def pick(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot pick from an empty sequence")
        return items[self.random_int(0, len(items))]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place. Returns the same sequence for chaining."""
        for i in range(len(items) - 1, 0, -1):
            j = self.random_int(0, i + 1)
            items[i], items[j] = items[j], items[i]
        return items
