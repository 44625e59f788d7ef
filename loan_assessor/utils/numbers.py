"""Numeric helpers shared by the scoring pipeline"""

import math
import re
from typing import Any

_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round half away from negative infinity (x.5 -> x+1).

    Python's built-in round() uses banker's rounding; scores and money amounts
    here always round .5 upward.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Half-up rounding to an int"""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]"""
    return max(low, min(high, value))


def parse_number(raw: Any) -> float:
    """
    Leniently parse a numeric field from a CSV cell.

    Takes the leading numeric prefix ("75000abc" -> 75000.0). Empty,
    non-numeric and non-finite input yields 0.0. Never raises.
    """
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else 0.0
    if not isinstance(raw, str):
        return 0.0

    match = _NUMERIC_PREFIX.match(raw)
    if not match:
        return 0.0

    value = float(match.group(1))
    return value if math.isfinite(value) else 0.0
