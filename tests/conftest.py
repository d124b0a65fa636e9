"""Pytest configuration shared across the test suite."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence

import pytest

SPEED_MARKERS = ("unit", "integration")


@pytest.fixture
def post_json(client) -> Callable[[str, object], object]:
    """Return a helper that POSTs a JSON body with the Django test client."""

    def _post(url: str, body: object):
        return client.post(url, data=json.dumps(body), content_type="application/json")

    return _post


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Require exactly one speed marker per test.

    `unit` tests exercise the pure `analysis` package; `integration` tests go
    through Django (views, template filters, management commands).
    """

    invalid: list[str] = []
    for item in items:
        markers = [name for name in SPEED_MARKERS if item.get_closest_marker(name) is not None]
        if len(markers) != 1:
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test needs exactly one of `@pytest.mark.unit` or `@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
