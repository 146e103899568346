"""7-bag randomizer."""

from __future__ import annotations

import random
from typing import List, Optional

from .shapes import ShapeKind


class Bag:
    """Deal shape kinds so every run of seven draws holds each kind once.

    When the pool runs dry it is refilled with all seven kinds and shuffled
    with Fisher-Yates; draws pop from the end of the pool.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self.pool: List[ShapeKind] = []

    def seed(self, seed: Optional[int]) -> None:
        self._rng.seed(seed)
        self.pool.clear()

    def _refill(self) -> None:
        self.pool = list(ShapeKind)
        for i in range(len(self.pool) - 1, 0, -1):
            j = self._rng.randint(0, i)
            self.pool[i], self.pool[j] = self.pool[j], self.pool[i]

    def next(self) -> ShapeKind:
        if not self.pool:
            self._refill()
        return self.pool.pop()


__all__ = ["Bag"]
