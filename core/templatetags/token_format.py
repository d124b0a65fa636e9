"""Template filters for token, USD and health figures.

Usage:
    {% load token_format %}
    {{ position.amount|token_amount }}
    {{ position.amount|token_amount:4 }}
    {{ market.tvl|usd_auto }}
    {{ account.health|health_label }}

Values that cannot be read as numbers render like missing data.
"""

from __future__ import annotations

import math

from django import template

from analysis.health import health_label as _health_label
from analysis.numbers import format_usd, format_usd_auto, format_usd_compact
from analysis.token_format import MAX_DIGITS_LIMIT, MISSING_LABEL, format_token_amount

register = template.Library()


def _to_float(value: object) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None


@register.filter
def token_amount(value: object, max_digits: object = None) -> str:
    digits = _to_float(max_digits)
    if digits is None or not math.isfinite(digits) or not 1 <= digits <= MAX_DIGITS_LIMIT:
        return format_token_amount(_to_float(value))
    return format_token_amount(_to_float(value), int(digits))


@register.filter
def usd(value: object) -> str:
    return format_usd(_to_float(value))


@register.filter
def usd_compact(value: object) -> str:
    return format_usd_compact(_to_float(value))


@register.filter
def usd_auto(value: object) -> str:
    return format_usd_auto(_to_float(value))


@register.filter
def health_label(value: object) -> str:
    health = _to_float(value)
    if health is None:
        return MISSING_LABEL
    return _health_label(health)
