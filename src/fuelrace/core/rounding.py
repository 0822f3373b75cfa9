from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

TWO_PLACES = Decimal("0.01")


def round2(value: float) -> float:
    """
    Round to two decimals, half-up.
    Goes through the shortest repr of the float so that 0.125 becomes 0.13
    instead of the binary-floor 0.12 that builtin round() gives.
    """
    rounded = Decimal(repr(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    # normalise -0.0
    return float(rounded) + 0.0
