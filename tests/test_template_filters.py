"""Integration tests for the `token_format` template filters."""

from __future__ import annotations

import pytest
from django.template import Context, Template

pytestmark = pytest.mark.integration


def _render(source: str, **context: object) -> str:
    return Template("{% load token_format %}" + source).render(Context(context))


def test_token_amount_filter_formats_and_escapes() -> None:
    """Token amounts render with separators; the dust label is HTML-escaped."""

    assert _render("{{ value|token_amount }}", value=9999.22222) == "9,999.22"
    assert _render("{{ value|token_amount:4 }}", value=12.3456) == "12.35"
    assert _render("{{ value|token_amount }}", value=0.000001) == "&lt;0.00001"


def test_token_amount_filter_treats_unreadable_values_as_missing() -> None:
    """None and non-numeric strings render as a dash."""

    assert _render("{{ value|token_amount }}", value=None) == "-"
    assert _render("{{ value|token_amount }}", value="n/a") == "-"
    assert _render("{{ value|token_amount }}", value="1000000") == "1.000e+6"


def test_usd_filters() -> None:
    """USD filters cover regular, compact and auto styles."""

    assert _render("{{ value|usd }}", value=1592.25) == "$1,592.25"
    assert _render("{{ value|usd_compact }}", value=1225209) == "$1.23M"
    assert _render("{{ value|usd_auto }}", value=125.25) == "$125.25"
    assert _render("{{ value|usd }}", value=None) == "-"


def test_health_label_filter() -> None:
    """Health labels cap above the gauge maximum."""

    assert _render("{{ value|health_label }}", value=3.5) == "3+"
    assert _render("{{ value|health_label }}", value="1.5") == "1.50"
    assert _render("{{ value|health_label }}", value=None) == "-"


def test_token_amount_filter_ignores_unusable_digit_arguments() -> None:
    """Non-finite or out-of-range digit counts fall back to the default."""

    assert _render('{{ value|token_amount:"1e400" }}', value=12.3456) == "12.3456"
    assert _render('{{ value|token_amount:"nan" }}', value=12.3456) == "12.3456"
    assert _render("{{ value|token_amount:0 }}", value=12.3456) == "12.3456"
