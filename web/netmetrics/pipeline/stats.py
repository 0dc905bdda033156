"""Small numeric helpers shared by the aggregator, scorer and generator."""

from __future__ import annotations

import math
from typing import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def pstdev(values: Sequence[float]) -> float:
    """Population standard deviation (divide by N); 0.0 for fewer than two values."""
    if len(values) <= 1:
        return 0.0
    avg = mean(values)
    return math.sqrt(mean([(v - avg) ** 2 for v in values]))


def round_half_up(x: float) -> int:
    """
    Round to the nearest integer with .5 going up.

    Python's round() uses banker's rounding (round(34.5) == 34); the health
    formulas are defined with ties rounding up.
    """
    return int(math.floor(x + 0.5))
