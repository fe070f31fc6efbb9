"""Min-max normalization onto a 1-100 scale."""

from __future__ import annotations

from typing import List, Sequence


NEUTRAL_SCORE = 50.0
MIN_SCORE = 1.0
MAX_SCORE = 100.0


def normalize(value: float, values: Sequence[float], higher_is_better: bool = True) -> float:
    """Score ``value`` against its peers in ``values``.

    The worst value in the set scores 1 and the best 100; a set with no
    spread (or no values at all) scores everyone 50.
    """

    if not values:
        return NEUTRAL_SCORE
    low = min(values)
    high = max(values)
    if high == low:
        return NEUTRAL_SCORE
    if higher_is_better:
        ratio = (value - low) / (high - low)
    else:
        ratio = (high - value) / (high - low)
    return ratio * (MAX_SCORE - MIN_SCORE) + MIN_SCORE


def normalize_all(values: Sequence[float], higher_is_better: bool = True) -> List[float]:
    return [normalize(value, values, higher_is_better) for value in values]
