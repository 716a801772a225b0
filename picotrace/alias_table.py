"""Alias table for constant-time sampling of a discrete distribution."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence


@dataclass
class _Bucket:
    weight: float
    alias_index: int = 0


class AliasTable:
    """Samples indices in proportion to a set of weights."""

    def __init__(self, weights: Sequence[float] = ()) -> None:
        self._buckets: list[_Bucket] = []
        if weights:
            self.build_table(weights)

    def __len__(self) -> int:
        return len(self._buckets)

    def build_table(self, weights: Sequence[float]) -> None:
        """Rebuild the table from ``weights``."""
        count = len(weights)
        total = float(sum(weights))
        if count and total == 0.0:
            raise ValueError("weights must not sum to zero")

        self._buckets = [_Bucket(w / total) for w in weights]

        over: list[tuple[float, int]] = []
        under: list[tuple[float, int]] = []
        for index, bucket in enumerate(self._buckets):
            p_hat = bucket.weight * count
            (under if p_hat < 1.0 else over).append((p_hat, index))

        while over and under:
            over_p, over_index = over.pop()
            under_p, under_index = under.pop()

            self._buckets[under_index] = _Bucket(under_p, over_index)

            excess = under_p + over_p - 1.0
            (under if excess < 1.0 else over).append((excess, over_index))

        for _, index in (*under, *over):
            self._buckets[index] = _Bucket(1.0, 0)

    def sample(self, rng: random.Random) -> tuple[int, float]:
        """Draw an index; return it with the table's probability for the draw."""
        if not self._buckets:
            raise ValueError("cannot sample an empty alias table")
        count = len(self._buckets)
        bucket_index = rng.randrange(count)
        bucket = self._buckets[bucket_index]
        if rng.random() <= bucket.weight:
            return bucket_index, bucket.weight / count
        return bucket.alias_index, 1.0 - bucket.weight / count