"""
Weighted random selection over an ordered candidate sequence.

Weight formula
--------------
    w(item) = max(item.score + 1.0, 0.1)

A neutral item (score 0) weighs 1; however disliked, an item keeps weight 0.1
so it is never impossible to draw.

Algorithm
---------
    total = sum(w)
    r     = u * total            # u: one draw from a uniform [0, 1) source
    walk candidates in order, cumulative += w; return first with r <= cumulative

Fallbacks: ``total <= 0`` → uniform pick by index from the same draw; walk
exhausted by float rounding → last candidate. Exactly one draw per call.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence

from stuck_picker.preferences.item import Item

WEIGHT_FLOOR = 0.1

RandomSource = Callable[[], float]


class EmptyInputError(ValueError):
    """Raised when a selection is requested over zero candidates.

    Callers should fall back to their "no options" path instead of retrying
    with the same empty set.
    """


def item_weight(item: Item) -> float:
    """Selection weight for one item: ``max(score + 1.0, 0.1)``."""
    return max(item.score + 1.0, WEIGHT_FLOOR)


def select(
    candidates: Sequence[Item],
    random_source: RandomSource | None = None,
) -> Item:
    """Pick one candidate with probability proportional to its weight.

    Args:
        candidates:    Non-empty ordered sequence of items.
        random_source: Zero-argument callable returning a float in ``[0, 1)``.
                       Defaults to ``random.random``.

    Returns:
        One element of ``candidates``.

    Raises:
        EmptyInputError: If ``candidates`` is empty.
    """
    if not candidates:
        raise EmptyInputError("Cannot select from an empty candidate list.")

    draw = (random_source or random.random)()
    weights = [item_weight(item) for item in candidates]
    total = sum(weights)

    if total <= 0.0:
        idx = min(int(draw * len(candidates)), len(candidates) - 1)
        return candidates[idx]

    r = draw * total
    cumulative = 0.0
    for item, weight in zip(candidates, weights):
        cumulative += weight
        if r <= cumulative:
            return item

    # Float rounding left r above the final cumulative sum
    return candidates[-1]
