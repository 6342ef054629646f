"""Float rounding and display helpers for prices, balances and scores.

Prices are rounded to 2 decimals and scores to 1 decimal, always half away
from zero. Built-in round() rounds half to even and must not be used here.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

# Floats at or beyond 2**52 have no fractional part.
_INTEGRAL_THRESHOLD = 2.0 ** 52


def round_half_away(value: float, ndigits: int) -> float:
    """Round ``value`` to ``ndigits`` decimals, ties away from zero.

    The value is scaled in float arithmetic first, then the scaled float is
    rounded exactly: round_half_away(2.5, 0) -> 3.0, round_half_away(-0.25, 1) -> -0.3.
    Values too large to carry a fraction, infinities and NaN come back unrounded.
    """
    factor = 10 ** ndigits
    scaled = value * factor
    if not math.isfinite(scaled) or abs(scaled) >= _INTEGRAL_THRESHOLD:
        return scaled / factor
    rounded = Decimal(scaled).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(rounded) / factor


def money_to_display(amount: float) -> str:
    """Format a balance for display: 10000.5 -> '$10,000.50', -12 -> '-$12.00'."""
    rounded = round_half_away(amount, 2)
    if rounded == 0:
        return "$0.00"
    if rounded < 0:
        return f"-${-rounded:,.2f}"
    return f"${rounded:,.2f}"
