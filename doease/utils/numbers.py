"""Percentages shown to users.

Halves round up (12.5 -> 13), unlike the built-in ``round`` which rounds
halves to even.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def percent(part: int, whole: int) -> int:
    """Whole-number percentage of ``part`` in ``whole``, 0 when ``whole`` is empty."""
    if whole <= 0:
        return 0
    return int((Decimal(part * 100) / Decimal(whole)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
