"""Float helpers with IEEE-754 division semantics."""

import math


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide like IEEE-754 floats: x/0 is +-inf and 0/0 is nan, never an exception."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp into [low, high]; nan maps to low."""
    if math.isnan(value):
        return low
    return max(low, min(high, value))
