from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def make_rng(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)


def shuffle(items: Sequence[T], rng: random.Random) -> List[T]:
    result = list(items)
    rng.shuffle(result)
    return result


def pick_random(items: Sequence[T], count: int, rng: random.Random) -> List[T]:
    """Sample ``count`` distinct entries without replacement."""
    return shuffle(items, rng)[:count]


def pick_one(items: Sequence[T], rng: random.Random) -> T:
    return items[rng.randrange(len(items))]
