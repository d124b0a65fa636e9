"""JSON and SVG views exposing dashboard helpers to the front ends."""

from __future__ import annotations

import json
import logging
from typing import Any

from django import forms
from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from analysis.health import health_gauge
from analysis.interpolation import MILLIS_PER_DAY, interpolate_series
from analysis.numbers import format_usd, format_usd_auto, format_usd_compact
from analysis.pie_chart import pie_slice_paths, render_pie_chart_svg
from analysis.token_format import format_token_amount
from core.forms import (
    BorrowGraphForm,
    HealthForm,
    PieChartForm,
    TokenAmountForm,
    UsdAmountForm,
    timestamp_ms_to_iso,
)

logger = logging.getLogger(__name__)

_USD_FORMATTERS = {
    "regular": format_usd,
    "compact": format_usd_compact,
    "auto": format_usd_auto,
}


def _form_errors(form: forms.Form) -> JsonResponse:
    """Return a 400 response listing form errors by field."""

    errors = {
        field: [error["message"] for error in field_errors]
        for field, field_errors in form.errors.get_json_data().items()
    }
    logger.info("Rejected %s input: %s", type(form).__name__, errors)
    return JsonResponse({"errors": errors}, status=400)


def _json_body(request: HttpRequest) -> dict[str, Any] | None:
    """Decode a JSON object request body, or return None when malformed."""

    try:
        payload = json.loads(request.body or b"{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def _invalid_json() -> JsonResponse:
    logger.info("Rejected request with a malformed JSON body.")
    return JsonResponse({"errors": {"__all__": ["Invalid JSON body."]}}, status=400)


@require_GET
def format_token_amount_api(request: HttpRequest) -> JsonResponse:
    """Format a token amount; a missing amount renders as `-`."""

    form = TokenAmountForm(request.GET)
    if not form.is_valid():
        return _form_errors(form)
    amount: float | None = form.cleaned_data["amount"]
    max_digits: int = form.cleaned_data["max_digits"] or settings.TOKEN_AMOUNT_MAX_DIGITS
    return JsonResponse(
        {
            "amount": amount,
            "max_digits": max_digits,
            "formatted": format_token_amount(amount, max_digits),
        }
    )


@require_GET
def format_usd_api(request: HttpRequest) -> JsonResponse:
    """Format a USD amount in the requested style."""

    form = UsdAmountForm(request.GET)
    if not form.is_valid():
        return _form_errors(form)
    amount: float | None = form.cleaned_data["amount"]
    style: str = form.cleaned_data["style"]
    placeholder = form.cleaned_data.get("placeholder") or "-"
    formatted = _USD_FORMATTERS[style](amount, placeholder)
    return JsonResponse({"amount": amount, "style": style, "formatted": formatted})


@require_GET
def health_api(request: HttpRequest) -> JsonResponse:
    """Return gauge position, label and color tier for a health ratio."""

    form = HealthForm(request.GET)
    if not form.is_valid():
        return _form_errors(form)
    gauge = health_gauge(form.cleaned_data["health"])
    return JsonResponse(
        {
            "health": gauge.health,
            "percent": gauge.percent,
            "label": gauge.label,
            "level": gauge.level,
        }
    )


def _pie_chart_form(request: HttpRequest) -> PieChartForm | JsonResponse:
    payload = _json_body(request)
    if payload is None:
        return _invalid_json()
    form = PieChartForm(data=payload)
    if not form.is_valid():
        return _form_errors(form)
    return form


@csrf_exempt
@require_POST
def pie_chart_api(request: HttpRequest) -> JsonResponse:
    """Return SVG path data for each slice of a pie chart."""

    form = _pie_chart_form(request)
    if isinstance(form, JsonResponse):
        return form
    paths = pie_slice_paths(form.cleaned_data["slices"])
    return JsonResponse(
        {
            "paths": [
                {"d": path.path_data, "percent": path.percent, "label": path.label, "color": path.color}
                for path in paths
            ]
        }
    )


@csrf_exempt
@require_POST
def pie_chart_svg(request: HttpRequest) -> HttpResponse:
    """Return a standalone SVG document for a pie chart."""

    form = _pie_chart_form(request)
    if isinstance(form, JsonResponse):
        return form
    svg = render_pie_chart_svg(pie_slice_paths(form.cleaned_data["slices"]))
    return HttpResponse(svg, content_type="image/svg+xml")


@csrf_exempt
@require_POST
def borrow_graph_api(request: HttpRequest) -> JsonResponse:
    """Resample borrow graph points onto evenly spaced timestamps.

    The trailing window and point count default to the `BORROW_GRAPH_*`
    settings. An empty `points` list in the response means there was not
    enough in-window data to draw a graph.
    """

    payload = _json_body(request)
    if payload is None:
        return _invalid_json()
    form = BorrowGraphForm(data=payload)
    if not form.is_valid():
        return _form_errors(form)

    window_days = form.cleaned_data["window_days"] or settings.BORROW_GRAPH_WINDOW_DAYS
    target_count = form.cleaned_data["target_count"] or settings.BORROW_GRAPH_POINTS
    interpolated = interpolate_series(
        form.cleaned_data["points"],
        window_days * MILLIS_PER_DAY,
        target_count,
        now_ms=form.cleaned_data["now"],
    )
    return JsonResponse(
        {
            "points": [
                {"timestamp": point.timestamp, "x": timestamp_ms_to_iso(point.timestamp), **point.values}
                for point in interpolated
            ]
        }
    )
