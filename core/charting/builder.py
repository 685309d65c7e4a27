"""Chart geometry builder.

This module composes the pure transform and geometry layers into one
`ChartGeometry` per render pass. It is the only charting module that reads
Django state: chart defaults come from settings, the calendar time zone from
the active Django time zone and weekday names from the active language.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import tzinfo
from typing import Any

from django.utils import timezone

from transform.aggregations import aggregate_series
from transform.dto import ChartPoint, TimeSeries
from transform.labels import to_chart_points
from transform.time_units import AggregationMode, TimeUnit

from .angles import compute_pie_slices, pie_metrics
from .coordinates import bar_rects, compute_metrics, map_to_pixels
from .defaults import ChartDefaults, chart_defaults, localized_weekday_names
from .label_placement import place_labels
from .schema import FAMILY_TRAITS, BarRect, CanvasSize, ChartFamily, ChartMetrics, PieSlice, ScreenPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChartGeometry:
    """Everything the drawing backend needs for one chart.

    Only the fields relevant to the family's layout are populated.

    Args:
        family: Chart family the geometry was computed for.
        canvas: Canvas the geometry was computed for.
        points: Plot-ready points, including display labels.
        metrics: Axis and plot-area metrics (point and bar layouts).
        screen_points: Pixel positions of `points` (point layouts).
        label_anchors: Value label anchors (line charts only).
        bars: Bar rectangles (bar layouts).
        slices: Pie slices (slice layouts).
        pie_center: Pie center (slice layouts).
        pie_radius: Pie radius (slice layouts).
        time_unit: Unit of the plotted series after aggregation.
    """

    family: ChartFamily
    canvas: CanvasSize
    points: tuple[ChartPoint, ...]
    metrics: ChartMetrics | None = None
    screen_points: tuple[ScreenPoint, ...] = ()
    label_anchors: tuple[ScreenPoint, ...] = ()
    bars: tuple[BarRect, ...] = ()
    slices: tuple[PieSlice, ...] = ()
    pie_center: ScreenPoint | None = None
    pie_radius: float | None = None
    time_unit: TimeUnit | None = None


def build_chart_geometry(
    series: TimeSeries,
    *,
    family: ChartFamily,
    canvas: CanvasSize,
    time_unit: TimeUnit | None = None,
    aggregation: AggregationMode = AggregationMode.SUM,
    forced_min_y: float | None = None,
    forced_max_y: float | None = None,
    tz: tzinfo | None = None,
    weekday_labels: bool = False,
    defaults: ChartDefaults | None = None,
) -> ChartGeometry:
    """Aggregate a series and compute the geometry for one chart.

    Args:
        series: Raw series in its native unit.
        family: Chart family to lay out.
        canvas: Full canvas size.
        time_unit: Optional resampling target; the series is used as-is when None.
        aggregation: SUM or AVERAGE, used when `time_unit` is given.
        forced_min_y: User-forced Y minimum.
        forced_max_y: User-forced Y maximum.
        tz: Calendar time zone; defaults to the active Django time zone.
        weekday_labels: Label daily points with localized weekday names.
        defaults: Chart defaults; read from settings when None.

    Returns:
        ChartGeometry for the family's layout.

    Raises:
        InvalidAggregationError: When the aggregation request is invalid.
        ValueError: When the family needs multi-value input (range or stacked
            bars), which a single series cannot provide.
    """

    traits = FAMILY_TRAITS[family]
    if traits.layout in ("ranges", "stacks"):
        raise ValueError(
            f"{family.value} charts need per-item ranges or segments; "
            "use bar_rects() or stacked_bar_rects() directly."
        )

    defaults = defaults or chart_defaults()
    if tz is None:
        tz = timezone.get_current_timezone()

    if time_unit is not None:
        series = aggregate_series(series, time_unit, aggregation, tz=tz)
    weekday_names = localized_weekday_names() if weekday_labels else None
    points = tuple(to_chart_points(series, tz=tz, weekday_names=weekday_names))

    logger.debug("Building %s geometry for %d points.", family.value, len(points))

    if traits.layout == "slices":
        center, radius = pie_metrics(canvas, padding=defaults.pie_padding)
        return ChartGeometry(
            family=family,
            canvas=canvas,
            points=points,
            slices=tuple(compute_pie_slices([point.y for point in points])),
            pie_center=center,
            pie_radius=radius,
            time_unit=series.time_unit,
        )

    if traits.minimal:
        padding_x = padding_y = defaults.minimal_padding
    else:
        padding_x, padding_y = defaults.padding_x, defaults.padding_y
    metrics = compute_metrics(
        canvas,
        [point.y for point in points],
        defaults.tick_count,
        family=family,
        padding_x=padding_x,
        padding_y=padding_y,
        forced_min_y=forced_min_y,
        forced_max_y=forced_max_y,
    )

    if traits.layout == "bars":
        bars = bar_rects(
            [metrics.min_y] * len(points),
            [point.y for point in points],
            metrics,
            width_ratio=defaults.bar_width_ratio,
        )
        return ChartGeometry(
            family=family,
            canvas=canvas,
            points=points,
            metrics=metrics,
            bars=tuple(bars),
            time_unit=series.time_unit,
        )

    screen_points = map_to_pixels(points, metrics)
    label_anchors = place_labels(screen_points, offset=defaults.label_offset) if family is ChartFamily.LINE else []
    return ChartGeometry(
        family=family,
        canvas=canvas,
        points=points,
        metrics=metrics,
        screen_points=tuple(screen_points),
        label_anchors=tuple(label_anchors),
        time_unit=series.time_unit,
    )


def geometry_payload(geometry: ChartGeometry) -> dict[str, Any]:
    """Render a ChartGeometry as a JSON-ready dictionary.

    Enum values are emitted by their stable string value.
    """

    payload = asdict(geometry)
    payload["family"] = geometry.family.value
    payload["time_unit"] = geometry.time_unit.value if geometry.time_unit is not None else None
    return payload
