"""Unbiased shuffling for presenting evidence."""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Return a Fisher-Yates shuffled copy of ``items``.

    ``rng`` lets callers pass a seeded ``random.Random``; the module-level
    generator is used otherwise.
    """
    source = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = source.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
