"""Integration tests for the Django-aware chart geometry builder."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import pytest
from django.utils import timezone, translation

from core.charting.builder import build_chart_geometry, geometry_payload
from core.charting.defaults import ChartDefaults, chart_defaults, localized_weekday_names
from core.charting.schema import CanvasSize, ChartFamily, ScreenPoint
from transform.aggregations import InvalidAggregationError
from transform.dto import TimeSeries
from transform.time_units import AggregationMode, TimeUnit

pytestmark = pytest.mark.integration

CANVAS = CanvasSize(width=460, height=340)


def _hourly_series(tz, values_per_day: list[list[float]]) -> TimeSeries:
    timestamps: list[datetime] = []
    values: list[float] = []
    for day_index, day_values in enumerate(values_per_day):
        for hour, value in enumerate(day_values):
            timestamps.append(datetime(2025, 6, 1 + day_index, 8 + hour, tzinfo=tz))
            values.append(value)
    return TimeSeries(timestamps=tuple(timestamps), values=tuple(values), time_unit=TimeUnit.HOUR, label="Steps")


def test_line_geometry_aggregates_and_places_labels(seoul) -> None:
    """Line charts get pixel points and one label anchor per point."""

    series = _hourly_series(seoul, [[100, 200], [50], [300, 100, 50]])

    geometry = build_chart_geometry(
        series,
        family=ChartFamily.LINE,
        canvas=CANVAS,
        time_unit=TimeUnit.DAY,
        tz=seoul,
        defaults=ChartDefaults(),
    )

    assert geometry.time_unit is TimeUnit.DAY
    assert [point.y for point in geometry.points] == [300.0, 50.0, 450.0]
    assert [point.label for point in geometry.points] == ["6/1", "6/2", "6/3"]
    assert geometry.metrics is not None
    assert (geometry.metrics.padding_x, geometry.metrics.padding_y) == (60, 40)
    assert [pixel.x for pixel in geometry.screen_points] == [60, 260, 460]
    assert len(geometry.label_anchors) == 3
    assert geometry.bars == ()


def test_scatter_geometry_has_no_label_anchors(seoul) -> None:
    """Only line charts compute value label anchors."""

    series = _hourly_series(seoul, [[1, 2, 3]])

    geometry = build_chart_geometry(series, family=ChartFamily.SCATTER, canvas=CANVAS, tz=seoul)

    assert len(geometry.screen_points) == 3
    assert geometry.label_anchors == ()


def test_bar_geometry_reads_width_ratio_from_settings(settings, seoul) -> None:
    """SALUSCHART settings feed the bar layout."""

    settings.SALUSCHART = {"BAR_WIDTH_RATIO": 0.5}
    series = _hourly_series(seoul, [[10], [20], [40]])

    geometry = build_chart_geometry(
        series,
        family=ChartFamily.BAR,
        canvas=CANVAS,
        time_unit=TimeUnit.DAY,
        tz=seoul,
    )

    assert geometry.metrics is not None
    assert geometry.metrics.min_y == 0.0
    assert len(geometry.bars) == 3
    assert all(bar.width == pytest.approx(400 / 3 * 0.5) for bar in geometry.bars)
    assert all(bar.y + bar.height == pytest.approx(300) for bar in geometry.bars)
    assert geometry.screen_points == ()


def test_minimal_families_use_minimal_padding(settings, seoul) -> None:
    """Minimal charts take their padding from MINIMAL_PADDING."""

    settings.SALUSCHART = {"MINIMAL_PADDING": 2}
    series = _hourly_series(seoul, [[1, 5, 3]])

    geometry = build_chart_geometry(series, family=ChartFamily.MINIMAL_LINE, canvas=CANVAS, tz=seoul)

    assert geometry.metrics is not None
    assert (geometry.metrics.padding_x, geometry.metrics.padding_y) == (2, 2)


@pytest.mark.parametrize("family", [ChartFamily.PIE, ChartFamily.DONUT])
def test_pie_geometry(seoul, family: ChartFamily) -> None:
    """Pie and donut charts share the same slice layout."""

    series = _hourly_series(seoul, [[1, 1, 2]])

    geometry = build_chart_geometry(series, family=family, canvas=CANVAS, tz=seoul, defaults=ChartDefaults())

    assert [s.sweep_angle_deg for s in geometry.slices] == [90.0, 90.0, 180.0]
    assert geometry.pie_center == ScreenPoint(230, 170)
    assert geometry.pie_radius == 138
    assert geometry.metrics is None


@pytest.mark.parametrize("family", [ChartFamily.RANGE_BAR, ChartFamily.STACKED_BAR, ChartFamily.MINIMAL_RANGE_BAR])
def test_multi_value_families_are_rejected(seoul, family: ChartFamily) -> None:
    """A single series cannot describe ranges or stacks."""

    with pytest.raises(ValueError, match="ranges or segments"):
        build_chart_geometry(_hourly_series(seoul, [[1]]), family=family, canvas=CANVAS, tz=seoul)


def test_invalid_aggregation_propagates(seoul) -> None:
    """AVERAGE into the native unit surfaces the typed error."""

    series = TimeSeries(
        timestamps=(datetime(2025, 6, 1, tzinfo=seoul),),
        values=(1.0,),
        time_unit=TimeUnit.DAY,
    )

    with pytest.raises(InvalidAggregationError):
        build_chart_geometry(
            series,
            family=ChartFamily.LINE,
            canvas=CANVAS,
            time_unit=TimeUnit.DAY,
            aggregation=AggregationMode.AVERAGE,
            tz=seoul,
        )


def test_calendar_defaults_to_the_active_django_time_zone(seoul) -> None:
    """Without an explicit zone the active Django time zone defines the days."""

    series = TimeSeries(
        timestamps=(datetime(2025, 6, 1, 20, tzinfo=UTC),),
        values=(7.0,),
        time_unit=TimeUnit.HOUR,
    )

    with timezone.override(seoul):
        geometry = build_chart_geometry(series, family=ChartFamily.LINE, canvas=CANVAS, time_unit=TimeUnit.DAY)

    assert [point.label for point in geometry.points] == ["6/2"]


def test_weekday_labels_follow_the_active_language(seoul) -> None:
    """Weekday labels come from Django's translated abbreviations."""

    start = datetime(2025, 6, 1, tzinfo=seoul)
    series = TimeSeries(
        timestamps=tuple(start + timedelta(days=offset) for offset in range(3)),
        values=(1.0, 2.0, 3.0),
        time_unit=TimeUnit.DAY,
    )

    with translation.override("en"):
        assert localized_weekday_names() == ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
        geometry = build_chart_geometry(
            series,
            family=ChartFamily.LINE,
            canvas=CANVAS,
            tz=seoul,
            weekday_labels=True,
        )

    assert [point.label for point in geometry.points] == ["Sun", "Mon", "Tue"]


def test_unknown_chart_settings_are_rejected(settings) -> None:
    """Typos in SALUSCHART fail loudly instead of being ignored."""

    settings.SALUSCHART = {"TICKS": 4}
    with pytest.raises(ValueError, match="TICKS"):
        chart_defaults()


def test_geometry_payload_is_json_ready(seoul) -> None:
    """Enum fields are emitted by value and nested geometry as dictionaries."""

    series = _hourly_series(seoul, [[5], [10]])
    geometry = build_chart_geometry(
        series,
        family=ChartFamily.LINE,
        canvas=CANVAS,
        time_unit=TimeUnit.DAY,
        tz=seoul,
    )

    payload = json.loads(json.dumps(geometry_payload(geometry), default=str))

    assert payload["family"] == "line"
    assert payload["time_unit"] == "day"
    assert payload["canvas"] == {"width": 460, "height": 340}
    assert payload["points"][0] == {"x": 0.0, "y": 5.0, "label": "6/1"}


def test_single_bucket_line_chart_stays_on_the_canvas(seoul) -> None:
    """One week of data aggregated to WEEK is drawn mid-plot, not off-canvas."""

    series = _hourly_series(seoul, [[72], [72]])

    geometry = build_chart_geometry(
        series,
        family=ChartFamily.LINE,
        canvas=CANVAS,
        time_unit=TimeUnit.WEEK,
        aggregation=AggregationMode.AVERAGE,
        tz=seoul,
        defaults=ChartDefaults(),
    )

    assert geometry.metrics is not None
    (pixel,) = geometry.screen_points
    assert pixel.x == 260
    assert pixel.y == pytest.approx(150)
    assert 0 <= geometry.label_anchors[0].y <= geometry.metrics.plot_height
