"""Unit tests for Sunday-first calendar grid math."""

from __future__ import annotations

import pytest

from core.charting.calendar import MonthGrid, bubble_size, cell_for_day, month_grid

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("year", "month", "expected"),
    [
        (2025, 6, MonthGrid(first_weekday=0, day_count=30, week_rows=5)),
        (2024, 2, MonthGrid(first_weekday=4, day_count=29, week_rows=5)),
        (2026, 2, MonthGrid(first_weekday=0, day_count=28, week_rows=4)),
        (2025, 8, MonthGrid(first_weekday=5, day_count=31, week_rows=6)),
    ],
)
def test_month_grid(year: int, month: int, expected: MonthGrid) -> None:
    """Grids start on Sunday and have just enough rows for every day."""

    assert month_grid(year, month) == expected


def test_cell_for_day() -> None:
    """Days flow left to right, top to bottom from the first weekday."""

    grid = month_grid(2025, 6)

    assert cell_for_day(grid, 1) == (0, 0)
    assert cell_for_day(grid, 7) == (0, 6)
    assert cell_for_day(grid, 8) == (1, 0)
    assert cell_for_day(grid, 30) == (4, 1)
    with pytest.raises(ValueError):
        cell_for_day(grid, 31)


def test_bubble_size_scales_linearly() -> None:
    """Bubble sizes interpolate between the bounds and floor at the minimum."""

    assert bubble_size(5, 10, 4, 12) == 8
    assert bubble_size(10, 10, 4, 12) == 12
    assert bubble_size(3, 0, 4, 12) == 4
