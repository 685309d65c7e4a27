"""DTO types passed between the aggregation engine and chart geometry.

DTOs are plain immutable data containers. They intentionally avoid any Django
dependencies so the transform layer stays pure and easy to test.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime

from .time_units import TimeUnit


@dataclass(frozen=True, slots=True)
class Sample:
    """A single time-stamped measurement.

    Attributes:
        timestamp: Instant at which the value was measured.
        value: Measured value.
    """

    timestamp: datetime
    value: float


@dataclass(frozen=True, slots=True)
class TimeSeries:
    """A time-indexed numeric series tagged with its native granularity.

    Timestamps and values are parallel tuples. Timestamps need not be sorted
    or evenly spaced.

    Attributes:
        timestamps: Sample instants.
        values: Sample values, aligned 1:1 with `timestamps`.
        time_unit: Native granularity the series was sampled at.
        label: Optional series label.
    """

    timestamps: tuple[datetime, ...]
    values: tuple[float, ...]
    time_unit: TimeUnit = TimeUnit.HOUR
    label: str | None = None

    def __post_init__(self) -> None:
        if len(self.timestamps) != len(self.values):
            raise ValueError(
                f"TimeSeries requires parallel sequences: got {len(self.timestamps)} timestamps "
                f"and {len(self.values)} values."
            )

    @classmethod
    def from_samples(
        cls,
        samples: Iterable[Sample],
        *,
        time_unit: TimeUnit,
        label: str | None = None,
    ) -> TimeSeries:
        """Build a series from individual samples, preserving their order."""

        materialized = tuple(samples)
        return cls(
            timestamps=tuple(sample.timestamp for sample in materialized),
            values=tuple(float(sample.value) for sample in materialized),
            time_unit=time_unit,
            label=label,
        )

    def samples(self) -> Iterator[Sample]:
        """Iterate the series as Sample objects."""

        for timestamp, value in zip(self.timestamps, self.values):
            yield Sample(timestamp=timestamp, value=value)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """A plot-ready point.

    Attributes:
        x: Ordinal position of the point in its sequence (not a timestamp).
        y: Value plotted on the Y axis.
        label: Optional display label (e.g. `"6/1"`, `"2025년 6월"`).
    """

    x: float
    y: float
    label: str | None = None
