"""Month-grid math for calendar charts.

Weeks start on Sunday, matching the week buckets of the aggregation engine.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MonthGrid:
    """Layout of one month on a Sunday-first grid.

    Attributes:
        first_weekday: Column of the 1st of the month (Sunday = 0).
        day_count: Number of days in the month.
        week_rows: Rows needed to fit every day.
    """

    first_weekday: int
    day_count: int
    week_rows: int


def month_grid(year: int, month: int) -> MonthGrid:
    """Return the Sunday-first grid layout for a month."""

    monday_based, day_count = calendar.monthrange(year, month)
    first_weekday = (monday_based + 1) % 7
    week_rows = (first_weekday + day_count + 6) // 7
    return MonthGrid(first_weekday=first_weekday, day_count=day_count, week_rows=week_rows)


def cell_for_day(grid: MonthGrid, day: int) -> tuple[int, int]:
    """Return the `(row, column)` cell of a day of the month.

    Raises:
        ValueError: When `day` is not a day of the month.
    """

    if not 1 <= day <= grid.day_count:
        raise ValueError(f"Day {day} is outside 1..{grid.day_count}.")
    offset = grid.first_weekday + day - 1
    return offset // 7, offset % 7


def bubble_size(value: float, max_value: float, min_size: float, max_size: float) -> float:
    """Scale a value linearly into `[min_size, max_size]`.

    A non-positive `max_value` yields `min_size`.
    """

    if max_value <= 0:
        return min_size
    return min_size + (max_size - min_size) * (value / max_value)
