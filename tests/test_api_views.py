"""Integration tests for the dashboard API views."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from django.urls import reverse

pytestmark = pytest.mark.integration



def test_format_token_amount_api_formats_amounts(client) -> None:
    """Formatting uses the configured default digit count."""

    response = client.get(reverse("core:format_token_amount"), {"amount": "9999.22222"})
    assert response.status_code == 200
    assert response.json() == {"amount": 9999.22222, "max_digits": 6, "formatted": "9,999.22"}


def test_format_token_amount_api_accepts_max_digits(client) -> None:
    """An explicit digit budget overrides the default."""

    response = client.get(reverse("core:format_token_amount"), {"amount": "12.3456", "max_digits": "4"})
    assert response.json()["formatted"] == "12.35"


def test_format_token_amount_api_renders_missing_amount_as_dash(client) -> None:
    """Omitting the amount is treated as not-yet-loaded data."""

    response = client.get(reverse("core:format_token_amount"))
    assert response.status_code == 200
    assert response.json()["formatted"] == "-"


def test_format_token_amount_api_rejects_invalid_input(client) -> None:
    """Non-numeric amounts and out-of-range digit counts return 400."""

    response = client.get(reverse("core:format_token_amount"), {"amount": "abc", "max_digits": "0"})
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert set(errors) == {"amount", "max_digits"}


def test_format_token_amount_api_rejects_post(client) -> None:
    """Only GET is allowed."""

    response = client.post(reverse("core:format_token_amount"))
    assert response.status_code == 405


def test_format_usd_api_styles(client) -> None:
    """Each style selects a USD formatter."""

    url = reverse("core:format_usd")
    assert client.get(url, {"amount": "1592.25"}).json()["formatted"] == "$1,592.25"
    assert client.get(url, {"amount": "1592.25", "style": "compact"}).json()["formatted"] == "$1.59K"
    assert client.get(url, {"amount": "125.25", "style": "auto"}).json()["formatted"] == "$125.25"
    assert client.get(url, {"placeholder": "n/a"}).json()["formatted"] == "n/a"
    assert client.get(url, {"amount": "1", "style": "bogus"}).status_code == 400


def test_health_api_returns_gauge(client) -> None:
    """Health ratios above the gauge maximum are capped."""

    response = client.get(reverse("core:health"), {"health": "3.5"})
    assert response.status_code == 200
    assert response.json() == {"health": 3.5, "percent": 100.0, "label": "3+", "level": "green"}


def test_health_api_requires_health(client) -> None:
    """The health ratio is required."""

    response = client.get(reverse("core:health"))
    assert response.status_code == 400
    assert "health" in response.json()["errors"]


def test_pie_chart_api_returns_paths(post_json) -> None:
    """Each slice becomes a path carrying its metadata."""

    response = post_json(
        reverse("core:pie_chart"),
        {
            "slices": [
                {"percent": 0.25, "label": "WETH", "color": "#627eea"},
                {"percent": 0.75},
            ]
        },
    )

    assert response.status_code == 200
    paths = response.json()["paths"]
    assert [path["label"] for path in paths] == ["WETH", None]
    assert [path["color"] for path in paths] == ["#627eea", None]
    assert [path["percent"] for path in paths] == [0.25, 0.75]
    assert [path["d"].split()[7] for path in paths] == ["0", "1"]
    assert all(path["d"].startswith("M ") and path["d"].endswith(" L 0 0") for path in paths)


def test_pie_chart_api_accepts_empty_slices(post_json) -> None:
    """An empty slice list renders an empty chart."""

    response = post_json(reverse("core:pie_chart"), {"slices": []})
    assert response.status_code == 200
    assert response.json() == {"paths": []}


def test_pie_chart_api_rejects_out_of_range_percent(post_json) -> None:
    """Percents outside [0, 1] are rejected with a per-slice message."""

    response = post_json(reverse("core:pie_chart"), {"slices": [{"percent": 0.5}, {"percent": 1.5}]})
    assert response.status_code == 400
    messages = response.json()["errors"]["slices"]
    assert len(messages) == 1
    assert messages[0].startswith("Slice 1 percent:")


def test_pie_chart_api_rejects_malformed_json(client) -> None:
    """Bodies that are not a JSON object return a generic error."""

    response = client.post(reverse("core:pie_chart"), data="not json", content_type="application/json")
    assert response.status_code == 400
    assert response.json() == {"errors": {"__all__": ["Invalid JSON body."]}}


def test_pie_chart_api_rejects_get(client) -> None:
    """Only POST is allowed."""

    assert client.get(reverse("core:pie_chart")).status_code == 405


def test_pie_chart_svg_returns_svg_document(post_json) -> None:
    """The SVG endpoint returns a standalone document."""

    response = post_json(reverse("core:pie_chart_svg"), {"slices": [{"percent": 1.0, "color": "red"}]})

    assert response.status_code == 200
    assert response["Content-Type"] == "image/svg+xml"
    body = response.content.decode()
    assert body.startswith("<svg")
    assert body.count("<path ") == 1
    assert 'fill="red"' in body


def test_borrow_graph_api_resamples_points(post_json) -> None:
    """Points are resampled onto evenly spaced timestamps within the window."""

    start = datetime(2025, 1, 1, tzinfo=UTC)
    end = start + timedelta(days=10)
    now_ms = end.timestamp() * 1000

    response = post_json(
        reverse("core:borrow_graph"),
        {
            "points": [
                {"timestamp": end.isoformat(), "IV": 10, "LTV": 0.7},
                {"timestamp": start.timestamp() * 1000, "IV": 0, "LTV": 0.5},
            ],
            "target_count": 10,
            "now": now_ms,
        },
    )

    assert response.status_code == 200
    points = response.json()["points"]
    assert len(points) == 10
    assert points[0]["x"] == "2025-01-01T00:00:00+00:00"
    assert points[0]["IV"] == pytest.approx(0.0)
    assert points[5]["x"] == "2025-01-06T00:00:00+00:00"
    assert points[5]["IV"] == pytest.approx(5.0)
    assert points[5]["LTV"] == pytest.approx(0.6)


def test_borrow_graph_api_returns_empty_series_outside_window(post_json) -> None:
    """Stale data yields an empty series instead of an error."""

    now_ms = datetime(2025, 6, 1, tzinfo=UTC).timestamp() * 1000
    response = post_json(
        reverse("core:borrow_graph"),
        {
            "points": [
                {"timestamp": "2025-01-01T00:00:00Z", "IV": 1},
                {"timestamp": "2025-01-02T00:00:00Z", "IV": 2},
            ],
            "window_days": 30,
            "now": now_ms,
        },
    )

    assert response.status_code == 200
    assert response.json() == {"points": []}


def test_borrow_graph_api_rejects_non_numeric_fields(post_json) -> None:
    """Every non-timestamp field must be numeric."""

    response = post_json(
        reverse("core:borrow_graph"),
        {"points": [{"timestamp": 0, "IV": "high"}, {"timestamp": "yesterday", "IV": 1}]},
    )

    assert response.status_code == 400
    messages = response.json()["errors"]["points"]
    assert messages == [
        "Point 0: field 'IV' must be numeric.",
        "Point 1: could not parse timestamp 'yesterday'.",
    ]


def test_borrow_graph_api_rejects_out_of_range_timestamps(post_json) -> None:
    """Timestamps beyond the representable date range are a client error."""

    response = post_json(
        reverse("core:borrow_graph"),
        {
            "points": [{"timestamp": 1e20, "IV": 1}, {"timestamp": 1e20 + 1e6, "IV": 2}],
            "now": 1e20 + 1e6,
        },
    )

    assert response.status_code == 400
    errors = response.json()["errors"]
    assert errors["points"] == [
        "Point 0: timestamp is outside the supported date range.",
        "Point 1: timestamp is outside the supported date range.",
    ]
    assert "now" in errors


def test_borrow_graph_api_rejects_non_finite_numbers(client) -> None:
    """NaN and Infinity literals never reach the response body."""

    url = reverse("core:borrow_graph")
    body = '{"points": [{"timestamp": 1, "v": NaN}, {"timestamp": Infinity, "v": 2}], "now": 2}'

    response = client.post(url, data=body, content_type="application/json")

    assert response.status_code == 400
    assert response.json()["errors"]["points"] == [
        "Point 0: field 'v' must be finite.",
        "Point 1: timestamp must be a finite number.",
    ]

    response = client.post(url, data='{"points": [], "now": NaN}', content_type="application/json")
    assert response.status_code == 400
    assert "now" in response.json()["errors"]
