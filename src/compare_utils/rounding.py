from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

_TWO_PLACES = Decimal("0.01")


def percent(part: int, whole: int) -> float:
    """Return ``part / whole`` as a percentage rounded half up to two decimals.

    The division is done in Decimal so 1/8 -> 12.5 and 2/3 -> 66.67 without
    binary float ties rounding the wrong way.
    """
    ratio = Decimal(part) * 100 / Decimal(whole)
    return float(ratio.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))
