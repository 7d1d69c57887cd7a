"""
formatting.py — Human-readable numbers and metric labels.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

_SCALES: Tuple[Tuple[float, str], ...] = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)


def _fixed(n: float, places: int) -> str:
    """Round halves away from zero: _fixed(2.5, 0) → "3", _fixed(1.25, 1) → "1.3"."""
    return str(Decimal(n).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def split_number(n: float) -> Tuple[str, str]:
    """
    Return (digits, unit) for an abbreviated number.

    Example:
        split_number(383_285_000_000) → ("383.3", "B")
        split_number(950) → ("950", "")
    """
    for threshold, suffix in _SCALES:
        if abs(n) >= threshold:
            return _fixed(n / threshold, 1), suffix
    return _fixed(n, 0), ""


def format_number(n: float) -> str:
    """Abbreviate with B/M/K suffixes (one decimal), else round to an integer."""
    digits, unit = split_number(n)
    return f"{digits}{unit}"


def display_metric(metric: str) -> str:
    """'net_income' → 'Net Income'."""
    if not metric:
        return ""
    words = [w for w in re.split(r"[\s_]+", metric) if w]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)
