"""
Decimal Utilities
findway/scoring/utils.py

Precision-safe decimal math for score normalization.
"""

from decimal import Decimal, ROUND_HALF_UP


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of(total: int, maximum: int) -> int:
    """
    Scale total against maximum onto 0-100.

    Formula: round_half_up(total / maximum × 100), clamped to [0, 100].
    Returns 0 when maximum is 0 or negative.
    """
    if maximum <= 0:
        return 0
    ratio = Decimal(total) / Decimal(maximum) * Decimal(100)
    return round_half_up(clamp(ratio))
