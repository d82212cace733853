"""Decimal rounding shared by nutrient totals, averages and calorie targets."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with exact halves going up.

    The float's shortest decimal form is rounded, so ``0.125`` becomes
    ``0.13`` and ``12.5`` becomes ``13``.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
