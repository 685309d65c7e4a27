"""Time-bucketing aggregation engine.

This module resamples a TimeSeries into a coarser (or equal) TimeUnit. All
calendar truncation happens on local wall-clock time in an explicit time zone;
passing `tz=None` falls back to the executing system's local time zone, which
makes results environment dependent. Tests and the Django layer always pass an
explicit zone.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta, tzinfo

from .dto import TimeSeries
from .time_units import AggregationMode, TimeUnit

logger = logging.getLogger(__name__)

_WallKey = tuple[datetime, int]


class InvalidAggregationError(ValueError):
    """Raised when an aggregation request cannot be satisfied.

    AVERAGE needs several source samples per destination bucket, so the source
    unit must be strictly finer than the target unit.
    """

    def __init__(self, *, source_unit: TimeUnit, target_unit: TimeUnit) -> None:
        """Initialize the error.

        Args:
            source_unit: Native unit of the series being aggregated.
            target_unit: Requested destination unit.
        """

        super().__init__(
            f"Cannot average {source_unit.value} data into {target_unit.value} buckets: "
            "the source unit must be finer than the target unit."
        )
        self.source_unit = source_unit
        self.target_unit = target_unit


def week_start(day: date) -> date:
    """Return the Sunday on or before `day` (weeks start on Sunday)."""

    return day - timedelta(days=(day.weekday() + 1) % 7)


def bucket_start(timestamp: datetime, unit: TimeUnit, *, tz: tzinfo | None = None) -> datetime:
    """Truncate a timestamp to the start of its bucket for a time unit.

    Args:
        timestamp: Instant to truncate. Naive values are read as system local time.
        unit: Bucket granularity. HOUR truncates to the top of the hour.
        tz: Time zone whose calendar defines the bucket boundaries.

    Returns:
        Timezone-aware bucket start in `tz` (system local time when `tz` is None).
    """

    return _from_wall_clock(_truncate(_wall_clock(timestamp, tz), unit), tz)


def aggregate_series(
    series: TimeSeries,
    target_unit: TimeUnit,
    mode: AggregationMode = AggregationMode.SUM,
    *,
    tz: tzinfo | None = None,
) -> TimeSeries:
    """Resample a series into `target_unit` buckets.

    SUM adds the values in each bucket. AVERAGE divides each bucket total by
    the number of distinct source-unit slots actually observed in that bucket
    (a month with data on 5 distinct days averages over 5, not over the month
    length). The divisor is floored at 1.

    Args:
        series: Series to resample, tagged with its native unit.
        target_unit: Destination granularity.
        mode: SUM or AVERAGE.
        tz: Time zone whose calendar defines bucket boundaries.

    Returns:
        A new series sorted by bucket start and tagged with `target_unit`, or
        `series` itself when SUM-aggregating into its own native unit.

    Raises:
        InvalidAggregationError: When AVERAGE is requested and the source unit
            is not strictly finer than `target_unit`.
    """

    source_unit = series.time_unit
    if mode is AggregationMode.AVERAGE and not source_unit.is_smaller_than(target_unit):
        raise InvalidAggregationError(source_unit=source_unit, target_unit=target_unit)

    if source_unit is target_unit and mode is AggregationMode.SUM:
        return series

    totals: dict[_WallKey, float] = defaultdict(float)
    observed_slots: dict[_WallKey, set[_WallKey]] = defaultdict(set)
    for timestamp, value in zip(series.timestamps, series.values):
        wall = _wall_clock(timestamp, tz)
        key = _group_key(wall, target_unit)
        totals[key] += value
        if mode is AggregationMode.AVERAGE:
            observed_slots[key].add(_fold_aware(_truncate(wall, source_unit)))

    keys = sorted(totals, key=lambda key: _from_wall_clock(key[0], tz).timestamp())
    if mode is AggregationMode.SUM:
        values = tuple(totals[key] for key in keys)
    else:
        values = tuple(totals[key] / max(1, len(observed_slots[key])) for key in keys)

    logger.debug(
        "Aggregated %d %s samples into %d %s buckets (%s).",
        len(series),
        source_unit.value,
        len(keys),
        target_unit.value,
        mode.value,
    )
    return TimeSeries(
        timestamps=tuple(_from_wall_clock(wall, tz) for wall, _ in keys),
        values=values,
        time_unit=target_unit,
        label=None,
    )


def _wall_clock(timestamp: datetime, tz: tzinfo | None) -> datetime:
    """Return the naive local wall-clock time of `timestamp` in `tz`."""

    return timestamp.astimezone(tz).replace(tzinfo=None)


def _from_wall_clock(wall: datetime, tz: tzinfo | None) -> datetime:
    """Attach `tz` (or the system local zone) to a naive wall-clock time."""

    if tz is None:
        return wall.astimezone()
    return wall.replace(tzinfo=tz)


def _group_key(wall: datetime, unit: TimeUnit) -> _WallKey:
    """Return the grouping key for a target unit.

    HOUR targets keep every distinct timestamp; coarser units truncate.
    """

    if unit is TimeUnit.HOUR:
        return _fold_aware(wall)
    return _fold_aware(_truncate(wall, unit))


def _fold_aware(wall: datetime) -> _WallKey:
    """Pair a wall-clock time with its fold.

    Naive datetimes compare equal across a DST fold, so the repeated hour of a
    fall-back transition needs the fold to stay a separate slot.
    """

    return wall, wall.fold


def _truncate(wall: datetime, unit: TimeUnit) -> datetime:
    """Truncate a naive wall-clock time to the start of its `unit` bucket."""

    if unit is TimeUnit.HOUR:
        return wall.replace(minute=0, second=0, microsecond=0)

    day = wall.date()
    if unit is TimeUnit.WEEK:
        day = week_start(day)
    elif unit is TimeUnit.MONTH:
        day = day.replace(day=1)
    elif unit is TimeUnit.YEAR:
        day = date(day.year, 1, 1)
    return datetime.combine(day, time())
