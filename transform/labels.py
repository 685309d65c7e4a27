"""Display labels for aggregated series.

Labels are assigned after aggregation, when a TimeSeries is converted into
ChartPoints. The formats follow the Korean UI of the host application; weekday
names can be injected by callers that have a localization layer.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta, tzinfo

from .aggregations import week_start
from .dto import ChartPoint, TimeSeries
from .time_units import TimeUnit

WEEKDAY_NAMES: tuple[str, ...] = ("일", "월", "화", "수", "목", "금", "토")
"""Sunday-first weekday names."""


def week_of_month(sunday: date) -> int:
    """Return the 1-based week number of a week-start Sunday within its month.

    Weeks are counted among the Sundays on or after the first Sunday of the
    Sunday's own month.
    """

    first_day = sunday.replace(day=1)
    first_sunday = first_day + timedelta(days=(6 - first_day.weekday()) % 7)
    return (sunday - first_sunday).days // 7 + 1


def format_bucket_label(timestamp: datetime, unit: TimeUnit, *, tz: tzinfo | None = None) -> str:
    """Format a bucket timestamp for display.

    Args:
        timestamp: Bucket start (or raw sample time for HOUR series).
        unit: Granularity of the series the timestamp belongs to.
        tz: Time zone used to read the local calendar fields.

    Returns:
        `"14시"`, `"6/1"`, `"6월 1주차"`, `"2025년 6월"` or `"2025년"`.
    """

    local = timestamp.astimezone(tz)
    if unit is TimeUnit.HOUR:
        return f"{local.hour}시"
    if unit is TimeUnit.DAY:
        return f"{local.month}/{local.day}"
    if unit is TimeUnit.WEEK:
        sunday = week_start(local.date())
        return f"{sunday.month}월 {week_of_month(sunday)}주차"
    if unit is TimeUnit.MONTH:
        return f"{local.year}년 {local.month}월"
    return f"{local.year}년"


def weekday_label(
    timestamp: datetime,
    *,
    tz: tzinfo | None = None,
    names: Sequence[str] = WEEKDAY_NAMES,
) -> str:
    """Return the weekday name of a timestamp.

    Args:
        timestamp: Instant to label.
        tz: Time zone used to read the local date.
        names: Seven Sunday-first weekday names.
    """

    if len(names) != 7:
        raise ValueError(f"Expected 7 weekday names, got {len(names)}.")
    local = timestamp.astimezone(tz)
    return names[(local.weekday() + 1) % 7]


def to_chart_points(
    series: TimeSeries,
    *,
    tz: tzinfo | None = None,
    weekday_names: Sequence[str] | None = None,
) -> list[ChartPoint]:
    """Convert a series into plot-ready ChartPoints.

    Args:
        series: Series to convert, usually the output of `aggregate_series`.
        tz: Time zone used for label formatting.
        weekday_names: When given and the series is daily, points are labelled
            with these Sunday-first weekday names instead of `"m/d"`.

    Returns:
        One ChartPoint per sample, with `x` set to the sample's index.
    """

    points: list[ChartPoint] = []
    for index, (timestamp, value) in enumerate(zip(series.timestamps, series.values)):
        if weekday_names is not None and series.time_unit is TimeUnit.DAY:
            label = weekday_label(timestamp, tz=tz, names=weekday_names)
        else:
            label = format_bucket_label(timestamp, series.time_unit, tz=tz)
        points.append(ChartPoint(x=float(index), y=float(value), label=label or timestamp.isoformat()))
    return points
