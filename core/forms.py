"""Forms validating dashboard API input.

Query-string endpoints bind `request.GET` directly. JSON endpoints bind the
decoded body; nested lists (pie slices, series points) are validated entry by
entry and converted into `analysis` DTOs.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

from django import forms
from django.utils.dateparse import parse_datetime

from analysis.dto import PieSlice, SeriesPoint
from analysis.token_format import MAX_DIGITS_LIMIT


class TokenAmountForm(forms.Form):
    """Validate a token amount formatting request."""

    amount = forms.FloatField(required=False)
    max_digits = forms.IntegerField(required=False, min_value=1, max_value=MAX_DIGITS_LIMIT)


class UsdAmountForm(forms.Form):
    """Validate a USD formatting request."""

    amount = forms.FloatField(required=False)
    style = forms.ChoiceField(
        required=False,
        choices=(
            ("regular", "Regular"),
            ("compact", "Compact"),
            ("auto", "Auto"),
        ),
    )
    placeholder = forms.CharField(required=False, max_length=16)

    def clean_style(self) -> str:
        """Default the style to `regular`."""

        return self.cleaned_data.get("style") or "regular"


class HealthForm(forms.Form):
    """Validate an account health ratio."""

    health = forms.FloatField(min_value=0)


class PieSliceForm(forms.Form):
    """Validate a single pie slice."""

    percent = forms.FloatField(min_value=0, max_value=1)
    label = forms.CharField(required=False, max_length=64)
    color = forms.CharField(required=False, max_length=64)

    def to_slice(self) -> PieSlice:
        """Return the validated slice as a DTO."""

        return PieSlice(
            percent=self.cleaned_data["percent"],
            label=self.cleaned_data.get("label") or None,
            color=self.cleaned_data.get("color") or None,
        )


def _nested_errors(prefix: str, form: forms.Form) -> list[str]:
    messages: list[str] = []
    for field, errors in form.errors.get_json_data().items():
        for error in errors:
            messages.append(f"{prefix} {field}: {error['message']}")
    return messages


class PieChartForm(forms.Form):
    """Validate a pie chart request body."""

    slices = forms.JSONField(required=False)

    def clean_slices(self) -> list[PieSlice]:
        """Validate every slice in drawing order.

        Returns:
            The slices as PieSlice DTOs (empty when none were provided).
        """

        raw = self.cleaned_data.get("slices")
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise forms.ValidationError("Provide slices as a list.")

        slices: list[PieSlice] = []
        messages: list[str] = []
        for idx, item in enumerate(raw):
            if not isinstance(item, dict):
                messages.append(f"Slice {idx}: expected an object.")
                continue
            slice_form = PieSliceForm(data=item)
            if not slice_form.is_valid():
                messages.extend(_nested_errors(f"Slice {idx}", slice_form))
                continue
            slices.append(slice_form.to_slice())
        if messages:
            raise forms.ValidationError(messages)
        return slices


_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
MIN_TIMESTAMP_MS = (datetime(1, 1, 1, tzinfo=UTC) - _EPOCH) / timedelta(milliseconds=1)
MAX_TIMESTAMP_MS = (datetime(9999, 12, 31, tzinfo=UTC) - _EPOCH) / timedelta(milliseconds=1)


def parse_timestamp_ms(raw: object) -> float:
    """Parse an epoch-millisecond number or an ISO 8601 datetime string.

    Naive datetimes are interpreted as UTC. Numbers must be finite and fall
    between `MIN_TIMESTAMP_MS` and `MAX_TIMESTAMP_MS`.

    Raises:
        ValueError: When the value is not a usable timestamp.
    """

    if isinstance(raw, bool):
        raise ValueError("timestamp must be a number or an ISO 8601 datetime")
    if isinstance(raw, float) and not math.isfinite(raw):
        raise ValueError("timestamp must be a finite number")
    if isinstance(raw, (int, float)):
        timestamp = raw
    elif isinstance(raw, str):
        parsed = parse_datetime(raw.strip())
        if parsed is None:
            raise ValueError(f"could not parse timestamp {raw!r}")
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        timestamp = (parsed - _EPOCH) / timedelta(milliseconds=1)
    else:
        raise ValueError("timestamp must be a number or an ISO 8601 datetime")

    if not MIN_TIMESTAMP_MS <= timestamp <= MAX_TIMESTAMP_MS:
        raise ValueError("timestamp is outside the supported date range")
    return float(timestamp)


def timestamp_ms_to_iso(timestamp_ms: float) -> str:
    return (_EPOCH + timedelta(milliseconds=timestamp_ms)).isoformat()


class BorrowGraphForm(forms.Form):
    """Validate a borrow graph resampling request body."""

    points = forms.JSONField(required=False)
    window_days = forms.IntegerField(required=False, min_value=1)
    target_count = forms.IntegerField(required=False, min_value=1, max_value=1000)
    now = forms.FloatField(
        required=False,
        min_value=MIN_TIMESTAMP_MS,
        max_value=MAX_TIMESTAMP_MS,
        help_text="Reference time in epoch milliseconds.",
    )

    def clean_points(self) -> list[SeriesPoint]:
        """Convert raw point objects into SeriesPoint DTOs.

        Every key other than `timestamp` must hold a number.
        """

        raw = self.cleaned_data.get("points")
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise forms.ValidationError("Provide points as a list.")

        points: list[SeriesPoint] = []
        messages: list[str] = []
        for idx, item in enumerate(raw):
            if not isinstance(item, dict) or "timestamp" not in item:
                messages.append(f"Point {idx}: expected an object with a timestamp.")
                continue
            try:
                timestamp = parse_timestamp_ms(item["timestamp"])
            except ValueError as exc:
                messages.append(f"Point {idx}: {exc}.")
                continue
            values: dict[str, float] = {}
            for key, value in item.items():
                if key == "timestamp":
                    continue
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    messages.append(f"Point {idx}: field {key!r} must be numeric.")
                    continue
                try:
                    number = float(value)
                except OverflowError:
                    number = math.inf
                if not math.isfinite(number):
                    messages.append(f"Point {idx}: field {key!r} must be finite.")
                    continue
                values[key] = number
            points.append(SeriesPoint(timestamp=timestamp, values=values))
        if messages:
            raise forms.ValidationError(messages)
        return points
