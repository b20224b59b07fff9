# services/scoring.py

from __future__ import annotations

import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """2.5 -> 3, 3.5 -> 4 (built-in round() would give 2 and 4)."""
    return int(math.floor(value + 0.5))


def aggregate_score(human_score: float, ai_score: float) -> int:
    """Overall score stored with a scan: mean of the two sub-scores, rounded half up."""
    return round_half_up((human_score + ai_score) / 2)


def average_score(scores: Iterable[float]) -> int:
    """Mean of stored overall scores, 0 for an empty history."""
    values = list(scores)
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))
