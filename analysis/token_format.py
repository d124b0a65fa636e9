"""Token amount formatting for balances, positions and market figures.

The rules depend on the magnitude of the amount:

- tiny positive amounts collapse to `<0.00001`,
- ordinary amounts are rounded to `max_digits` significant digits with
  thousands separators,
- large amounts switch to scientific notation (`1.000e+6`).

The function never raises for float input; missing data renders as `-`.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Final

from .numbers import exponential_parts, format_significant, round_places, shortest_decimal

DEFAULT_MAX_DIGITS: Final = 6
MAX_DIGITS_LIMIT: Final = 20
DUST_THRESHOLD: Final = 0.00001
DUST_LABEL: Final = "<0.00001"
MISSING_LABEL: Final = "-"


def format_token_amount(amount: float | None, max_digits: int = DEFAULT_MAX_DIGITS) -> str:
    """Format a token amount for display.

    Args:
        amount: Token amount in whole-token units, or None when not loaded.
        max_digits: Maximum significant digits to display.

    Returns:
        A display string such as `0.00`, `<0.00001`, `0.12346`, `9,999.22` or
        `2.582e+17`. Negative amounts keep their sign and format the magnitude.
    """

    if amount is None or math.isnan(amount):
        return MISSING_LABEL
    if amount == 0:
        return "0.00"
    if amount < 0:
        return f"-{format_token_amount(-amount, max_digits)}"
    if math.isinf(amount):
        return "∞"
    if amount < DUST_THRESHOLD:
        return DUST_LABEL

    # Fixed-point steps round the exact value; locale-style digits round the shortest text.
    value = Decimal(amount)
    if amount < 1:
        return format_significant(round_places(value, max_digits - 1), max_digits=max_digits)
    if amount < 1_000_000:
        return format_significant(shortest_decimal(amount), max_digits=max_digits)
    if amount >= 10 ** (max_digits - 1):
        mantissa, exponent = exponential_parts(value, fraction_digits=max(max_digits - 3, 0))
        sign = "+" if exponent >= 0 else "-"
        return f"{mantissa}e{sign}{abs(exponent)}"
    return f"{round_places(value, 2):,.2f}"
