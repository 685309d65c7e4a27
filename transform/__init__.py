"""Pure time-series transform package for SalusChart.

This package resamples raw measurements into chart-ready points. It performs
no I/O and must not import Django; time zones are always passed explicitly.
"""

from .aggregations import InvalidAggregationError, aggregate_series, bucket_start
from .dto import ChartPoint, Sample, TimeSeries
from .labels import to_chart_points
from .time_units import AggregationMode, TimeUnit

__all__ = [
    "AggregationMode",
    "ChartPoint",
    "InvalidAggregationError",
    "Sample",
    "TimeSeries",
    "TimeUnit",
    "aggregate_series",
    "bucket_start",
    "to_chart_points",
]
