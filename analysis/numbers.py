"""Number formatting and rounding helpers for dashboard figures.

These helpers follow the display conventions used across the lending
dashboards: US English digit grouping, `$` currency, compact `K/M/B/T`
suffixes and half-up rounding. Locale-style output rounds the shortest decimal
form of a float (`2.675` -> `2.68`); fixed-point steps round its exact binary
value. They are pure (no Django imports) and operate on floats or Decimals.
"""

from __future__ import annotations

import math
import re
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Context, Decimal
from typing import Final

DEFAULT_PRECISION: Final = 2

_COMPACT_SUFFIXES: Final[tuple[str, ...]] = ("", "K", "M", "B", "T")

_UNSIGNED_INPUT_RE: Final = re.compile(r"^[0-9]+\.?[0-9]*$")
_SIGNED_INPUT_RE: Final = re.compile(r"^-?[0-9]+\.?[0-9]*$")

# Wide enough to quantize any float without overflowing the coefficient.
_ROUNDING_CONTEXT: Final = Context(prec=400, Emax=MAX_EMAX, Emin=MIN_EMIN)

# Compact notation only groups digits from this magnitude on (`1000T`, `10,000T`).
_COMPACT_GROUPING_MIN: Final = 10_000


def shortest_decimal(amount: float) -> Decimal:
    """Return the Decimal of the shortest text that round-trips to `amount`."""

    return Decimal(repr(float(amount)))


def round_significant(value: Decimal, digits: int) -> Decimal:
    """Round a Decimal to a number of significant digits.

    Args:
        value: Value to round. Zero and non-finite values are returned as-is.
        digits: Number of significant digits to keep (>= 1).

    Returns:
        The rounded Decimal, using half-up rounding.
    """

    if not value.is_finite() or value.is_zero():
        return value
    quantum = Decimal(1).scaleb(value.adjusted() - digits + 1)
    return value.quantize(quantum, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT)


def round_places(value: Decimal, places: int) -> Decimal:
    """Round a Decimal half-up to a fixed number of decimal places."""

    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT)


def format_significant(
    value: Decimal,
    *,
    max_digits: int,
    min_digits: int = 1,
    grouping: bool = True,
) -> str:
    """Render a Decimal with significant-digit rounding.

    Trailing fractional zeros are dropped unless they are needed to reach
    `min_digits` significant digits.

    Args:
        value: Value to render.
        max_digits: Maximum significant digits.
        min_digits: Minimum significant digits.
        grouping: Whether to insert `,` thousands separators.

    Returns:
        The formatted string, e.g. `9,999.22` or `0.050`.
    """

    separator = "," if grouping else ""
    rounded = round_significant(value, max_digits)
    if rounded.is_zero():
        return f"{Decimal(0):{separator}.{max(min_digits - 1, 0)}f}"
    exponent = min(rounded.normalize().as_tuple().exponent, rounded.adjusted() - min_digits + 1)
    places = max(-exponent, 0)
    return f"{rounded:{separator}.{places}f}"


def exponential_parts(value: Decimal, *, fraction_digits: int) -> tuple[str, int]:
    """Split a Decimal into a rounded mantissa string and a base-10 exponent.

    Args:
        value: Value to render in scientific notation.
        fraction_digits: Digits after the mantissa decimal point.

    Returns:
        Tuple of (mantissa text, exponent), e.g. `("1.000", 6)`.
    """

    rounded = round_significant(value, fraction_digits + 1)
    exponent = 0 if rounded.is_zero() else rounded.adjusted()
    mantissa = rounded.scaleb(-exponent)
    return f"{mantissa:.{fraction_digits}f}", exponent


def format_scientific(
    value: Decimal,
    *,
    max_digits: int,
    min_digits: int = 1,
    engineering: bool = False,
) -> str:
    """Render a Decimal in locale-style scientific notation.

    Args:
        value: Value to render.
        max_digits: Maximum significant digits of the mantissa.
        min_digits: Minimum significant digits of the mantissa.
        engineering: Restrict the exponent to multiples of three.

    Returns:
        Text such as `1.9E-12`, `5E-5` or (engineering) `520E-9`.
    """

    rounded = round_significant(value, max_digits)
    exponent = 0 if rounded.is_zero() else rounded.adjusted()
    if engineering:
        exponent = exponent // 3 * 3
    mantissa = format_significant(
        rounded.scaleb(-exponent),
        max_digits=max_digits,
        min_digits=min_digits,
        grouping=False,
    )
    return f"{mantissa}E{exponent}"


def format_compact(
    value: Decimal,
    *,
    max_digits: int | None = None,
    min_digits: int = 1,
    fraction_digits: int | None = None,
) -> str:
    """Render a Decimal in short compact notation (`1.59K`, `2.529M`, `10T`).

    Exactly one of `max_digits` (significant-digit rounding) or
    `fraction_digits` (fixed fraction rounding) should be provided. Values past
    the trillions keep the `T` suffix; digits are grouped only from five
    integer digits on (`1000T`, `1,000,000T`).
    """

    def render(scaled: Decimal) -> tuple[Decimal, str]:
        if fraction_digits is not None:
            rounded = round_places(scaled, fraction_digits)
            separator = "," if abs(rounded) >= _COMPACT_GROUPING_MIN else ""
            return rounded, f"{rounded:{separator}.{fraction_digits}f}"
        digits = max_digits if max_digits is not None else 3
        rounded = round_significant(scaled, digits)
        text = format_significant(
            rounded,
            max_digits=digits,
            min_digits=min_digits,
            grouping=abs(rounded) >= _COMPACT_GROUPING_MIN,
        )
        return rounded, text

    last = len(_COMPACT_SUFFIXES) - 1
    group = 0 if value.is_zero() else min(max(value.adjusted() // 3, 0), last)
    rounded, text = render(value.scaleb(-3 * group))
    if abs(rounded) >= 1000 and group < last:
        group += 1
        rounded, text = render(value.scaleb(-3 * group))
    return f"{text}{_COMPACT_SUFFIXES[group]}"


def _with_currency(amount: float, text: str) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${text}"


def format_usd(amount: float | None, placeholder: str = "-") -> str:
    """Format an amount of money in USD.

    Args:
        amount: Amount in USD, or None when not loaded.
        placeholder: Text returned when `amount` is None or not finite.

    Returns:
        `$0.00` for zero, two significant digits below `$0.10` (e.g. `$0.050`),
        otherwise two fixed decimals with separators (e.g. `$1,592.25`).
    """

    if amount is None or not math.isfinite(amount):
        return placeholder
    if amount == 0:
        return "$0.00"
    magnitude = shortest_decimal(abs(amount))
    if magnitude < Decimal("0.1"):
        text = format_significant(magnitude, max_digits=2, min_digits=2)
    else:
        text = f"{round_places(magnitude, 2):,.2f}"
    return _with_currency(amount, text)


def format_usd_compact(amount: float | None, placeholder: str = "-") -> str:
    """Format an amount of money in USD using compact notation (`$1.23M`)."""

    if amount is None or not math.isfinite(amount):
        return placeholder
    return _with_currency(amount, format_compact(shortest_decimal(abs(amount)), max_digits=3))


def format_usd_auto(amount: float | None, placeholder: str = "-") -> str:
    """Format USD with the regular format below $1000 and compact above.

    Zero is rendered in compact form (`$0`).
    """

    if amount and amount < 1000:
        return format_usd(amount, placeholder)
    return format_usd_compact(amount, placeholder)


def format_token_amount_sig_digits(amount: float | None, sig_digits: int = 4) -> str:
    """Format a token amount to a number of significant digits.

    Args:
        amount: Token amount in whole-token units, or None when not loaded.
        sig_digits: Maximum significant digits; at least two are shown.

    Returns:
        Compact text above one million (`2.529M`, `1.0B`), full digits down to
        `1e-5` (`0.000050`, `9,529`), then scientific notation (`5.0E-6`). At
        or below `1e-10` the mantissa keeps two digits (`1.9E-12`). Missing
        and NaN amounts render as `-`; negatives keep their sign.
    """

    if amount is None or math.isnan(amount):
        return "-"
    if amount < 0:
        return f"-{format_token_amount_sig_digits(-amount, sig_digits)}"
    if math.isinf(amount):
        return "∞"

    min_digits = min(2, sig_digits)
    value = shortest_decimal(amount)
    if amount > 1e6:
        return format_compact(value, max_digits=sig_digits, min_digits=min_digits)
    if amount > 1e-5 or amount == 0:
        return format_significant(value, max_digits=sig_digits, min_digits=min_digits)
    if amount > 1e-10:
        return format_scientific(value, max_digits=sig_digits, min_digits=min_digits)
    return format_scientific(value, max_digits=2, min_digits=2)


def format_token_amount_compact(amount: float | None, length: int = 4) -> str:
    """Format a token amount for narrow table cells.

    Args:
        amount: Token amount in whole-token units, or None when not loaded.
        length: Digit budget (>= 2). Plain amounts get `length + 1`
            significant digits, compact ones `length` and scientific ones
            `length - 1`.

    Returns:
        Text such as `0.052542`, `573,250`, `12.53T`, `5.25E-4` or `1E15`.
    """

    if amount is None or math.isnan(amount):
        return "-"
    if amount < 0:
        return f"-{format_token_amount_compact(-amount, length)}"
    if math.isinf(amount):
        return "∞"

    value = shortest_decimal(amount)
    if amount >= 1e15:
        return format_scientific(value, max_digits=length - 1)
    if amount > 1e6:
        return format_compact(value, max_digits=length, min_digits=2)
    if amount > 10 ** -(length / 2) or amount == 0:
        return format_significant(value, max_digits=length + 1, min_digits=2)
    return format_scientific(value, max_digits=length - 1)


def format_price_ratio(ratio: float, sig_digits: int = 4) -> str:
    """Format a price ratio such as a liquidation threshold.

    Ratios above one billion render as `∞` and ratios at or below `1e-9`
    (including NaN) as `0`. Between `1e-9` and `1e-6` engineering notation is
    used (`520E-9`).
    """

    min_digits = min(2, sig_digits)
    if ratio > 1e9:
        return "∞"
    if ratio > 1e6:
        return format_compact(shortest_decimal(ratio), max_digits=sig_digits, min_digits=min_digits)
    if ratio > 1e-6:
        return format_significant(shortest_decimal(ratio), max_digits=sig_digits, min_digits=min_digits)
    if ratio > 1e-9:
        return format_scientific(shortest_decimal(ratio), max_digits=sig_digits, engineering=True)
    return "0"


def round_percentage(percentage: float, precision: int | None = None) -> float:
    """Round a percentage to a number of decimal places.

    Args:
        percentage: Percentage to round.
        precision: Decimal places; falsy values fall back to 2.

    Returns:
        The rounded value, without forcing trailing zeros (e.g. `92.26`, `10.0`).
    """

    precision = precision or DEFAULT_PRECISION
    if precision < 0:
        raise ValueError("precision must be >= 0")
    scale = 10**precision
    return math.floor((percentage + 2**-52) * scale + 0.5) / scale


def format_number_input(text: str, negative: bool = False) -> str | None:
    """Normalize numeric text typed into an amount input.

    Args:
        text: Raw input text.
        negative: When True the value is forced negative (a `-` is prepended).

    Returns:
        The normalized text, `""` for empty or sign-only input, or None when the
        input is not a plain decimal number.
    """

    if text in ("", "-"):
        return ""
    if text == ".":
        return "-0." if negative else "0."

    pattern = _SIGNED_INPUT_RE if negative else _UNSIGNED_INPUT_RE
    if not pattern.match(text):
        return None
    if negative and not text.startswith("-"):
        return f"-{text}"
    return text


def round_down_to_nearest_n(value: float, n: float) -> float:
    return math.floor(value / n) * n


def round_up_to_nearest_n(value: float, n: float) -> float:
    return math.ceil(value / n) * n


def truncate_decimals(value: str, decimals: int) -> str:
    """Truncate (not round) a numeric string to a number of decimals.

    A decimal point left without digits is removed (`"1.1"`, 0 -> `"1"`).
    """

    decimal_index = value.find(".")
    if decimal_index == -1:
        return value
    if decimals <= 0:
        return value[:decimal_index]
    return value[: decimal_index + decimals + 1]


def get_decimal_places(value: str) -> int:
    decimal_index = value.find(".")
    if decimal_index == -1:
        return 0
    return len(value) - decimal_index - 1


def _plain_number_text(amount: float) -> str:
    """Render a float the way dashboards print raw numbers (`1`, `1.1`)."""

    if amount.is_integer() and abs(amount) < 1e21:
        return str(int(amount))
    return repr(amount)


def format_amount_with_unit(amount: float, unit: str, max_length: int = 10) -> str:
    """Format an amount followed by its unit, fitting a maximum length.

    Large numbers are abbreviated (`952.9K WETH`), tiny ones use scientific
    notation (`5.0E-5 ETH`) and the rest have decimals truncated so the amount
    fits. Units close to or longer than `max_length` may overflow.

    Args:
        amount: Amount to format.
        unit: Unit appended after a space.
        max_length: Target maximum length of the whole string.

    Returns:
        The formatted string.
    """

    max_amount_length = max_length - len(unit) - 1
    if amount > 10_000:
        return f"{format_compact(shortest_decimal(amount), fraction_digits=1)} {unit}"
    if amount == 0:
        return f"0 {unit}"
    if amount < 1e-4:
        mantissa, exponent = exponential_parts(Decimal(amount), fraction_digits=1)
        return f"{mantissa}E{exponent} {unit}"

    num_digits = max(math.floor(math.log10(abs(amount))), 0)
    num_decimals = max(max_amount_length - num_digits, 0)
    return f"{truncate_decimals(_plain_number_text(amount), num_decimals)} {unit}"


def are_within_n_sig_digs(a: Decimal, b: Decimal, n: int) -> bool:
    """Return True when two values agree once rounded to `n` significant digits."""

    return round_significant(a, n) == round_significant(b, n)


def string_1e(decimals: int) -> str:
    """Return `1` followed by `decimals` zeros (the fixed-point scaler)."""

    return "1" + "0" * decimals


def pretty_format_balance(amount: Decimal | None, decimals: int | None) -> str:
    """Format a raw fixed-point token balance for display.

    Args:
        amount: Raw integer balance (e.g. wei).
        decimals: Token decimals.

    Returns:
        The balance with 4 decimals for tokens with more than 6 decimals,
        otherwise 2 decimals; `-` when either input is missing.
    """

    if amount is None or not decimals:
        return "-"
    places = 4 if decimals > 6 else 2
    return f"{round_places(amount.scaleb(-decimals), places):.{places}f}"
