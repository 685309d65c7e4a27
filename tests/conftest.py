"""Pytest fixtures shared across the SalusChart test suite."""

from __future__ import annotations

from collections.abc import Sequence
from zoneinfo import ZoneInfo

import pytest


@pytest.fixture
def seoul() -> ZoneInfo:
    """Return the Asia/Seoul zone (UTC+9, no DST) used for calendar tests."""

    return ZoneInfo("Asia/Seoul")


@pytest.fixture
def new_york() -> ZoneInfo:
    """Return the America/New_York zone used for DST-boundary tests."""

    return ZoneInfo("America/New_York")


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests with no Django state.
    - `integration`: tests touching Django settings, time zones, translations or commands.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
