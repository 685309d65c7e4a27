"""Domain-to-screen coordinate mapping.

This module turns a value range and a canvas size into ChartMetrics and maps
data points, bars and range bars into pixel space. Pixel Y grows downward
while data Y grows upward, so every vertical mapping is inverted.

Two geometry edge cases degrade gracefully by default and raise in strict
mode:

- a zero-width value range is widened to `[v - 0.5, v + 0.5]`;
- a single point is anchored at the horizontal center of the plot area.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from transform.dto import ChartPoint

from .schema import BarLayout, BarRect, CanvasSize, ChartFamily, ChartMetrics, ScreenPoint, family_traits
from .ticks import compute_nice_ticks

logger = logging.getLogger(__name__)

DEFAULT_PADDING_X = 60.0
DEFAULT_PADDING_Y = 40.0
MINIMAL_PADDING = 4.0
DEGENERATE_HALF_RANGE = 0.5


class DegenerateRangeError(ValueError):
    """Raised in strict mode when the Y range has zero (or negative) width."""

    def __init__(self, *, min_y: float, max_y: float) -> None:
        super().__init__(f"Cannot map values onto an empty Y range [{min_y}, {max_y}].")
        self.min_y = min_y
        self.max_y = max_y


class InsufficientPointsError(ValueError):
    """Raised in strict mode when point spacing needs at least two points."""

    def __init__(self, *, count: int) -> None:
        super().__init__(f"Point spacing requires at least 2 points, got {count}.")
        self.count = count


def resolve_value_range(min_y: float, max_y: float, *, strict: bool = False) -> tuple[float, float]:
    """Return a drawable `(min_y, max_y)` range.

    Args:
        min_y: Lower bound of the value range.
        max_y: Upper bound of the value range.
        strict: Raise instead of substituting a fallback range.

    Returns:
        The input range when it has positive width, else a unit-wide range
        centered on `min_y`.

    Raises:
        DegenerateRangeError: In strict mode, when `max_y <= min_y`.
    """

    if max_y > min_y:
        return min_y, max_y
    if strict:
        raise DegenerateRangeError(min_y=min_y, max_y=max_y)
    logger.debug("Degenerate Y range [%s, %s]; widening around %s.", min_y, max_y, min_y)
    return min_y - DEGENERATE_HALF_RANGE, min_y + DEGENERATE_HALF_RANGE


def compute_metrics(
    canvas: CanvasSize,
    values: Sequence[float],
    tick_count: int = 5,
    family: ChartFamily | None = None,
    minimal: bool = False,
    padding_x: float | None = None,
    padding_y: float | None = None,
    forced_min_y: float | None = None,
    forced_max_y: float | None = None,
) -> ChartMetrics:
    """Compute pixel-space drawing metrics for a set of values.

    Args:
        canvas: Full canvas size.
        values: Y values that will be drawn.
        tick_count: Desired number of Y tick intervals.
        family: Optional chart family hint (zero baseline, minimal padding).
        minimal: Sparkline-style chart with near-zero default padding.
        padding_x: Override for the horizontal padding.
        padding_y: Override for the vertical padding.
        forced_min_y: User-forced Y minimum.
        forced_max_y: User-forced Y maximum.

    Returns:
        ChartMetrics whose `min_y`/`max_y` are the forced bounds when given,
        otherwise the tick extremes, otherwise the data extremes. Flat data
        is widened to `[v - 0.5, v + 0.5]` before ticks are computed, so a
        constant series is drawn mid-plot.
    """

    traits = family_traits(family)
    if traits is not None and traits.minimal:
        minimal = True

    default_padding_x, default_padding_y = (
        (MINIMAL_PADDING, MINIMAL_PADDING) if minimal else (DEFAULT_PADDING_X, DEFAULT_PADDING_Y)
    )
    padding_x = default_padding_x if padding_x is None else padding_x
    padding_y = default_padding_y if padding_y is None else padding_y

    data_min = min(values) if values else 0.0
    data_max = max(values) if values else 1.0
    if data_min == data_max and (forced_min_y is None or forced_max_y is None):
        data_min, data_max = resolve_value_range(data_min, data_max)

    ticks = compute_nice_ticks(
        data_min,
        data_max,
        tick_count,
        family=family,
        actual_min=forced_min_y,
        actual_max=forced_max_y,
    )

    if forced_min_y is not None:
        min_y = forced_min_y
    else:
        min_y = min(ticks) if ticks else data_min
    if forced_max_y is not None:
        max_y = forced_max_y
    else:
        max_y = max(ticks) if ticks else data_max
    min_y, max_y = resolve_value_range(min_y, max_y)

    return ChartMetrics(
        padding_x=padding_x,
        padding_y=padding_y,
        plot_width=canvas.width - padding_x,
        plot_height=canvas.height - padding_y,
        min_y=min_y,
        max_y=max_y,
        ticks=tuple(ticks),
    )


def value_to_pixel_y(value: float, metrics: ChartMetrics, *, strict: bool = False) -> float:
    """Map a data value to a pixel Y coordinate inside the plot area."""

    min_y, max_y = resolve_value_range(metrics.min_y, metrics.max_y, strict=strict)
    return metrics.plot_height - ((value - min_y) / (max_y - min_y)) * metrics.plot_height


def point_spacing(count: int, metrics: ChartMetrics, *, strict: bool = False) -> float:
    """Return the horizontal distance between consecutive line points.

    Raises:
        InsufficientPointsError: In strict mode, when `count < 2`.
    """

    if count < 2:
        if strict:
            raise InsufficientPointsError(count=count)
        return 0.0
    return metrics.plot_width / (count - 1)


def map_to_pixels(
    points: Sequence[ChartPoint],
    metrics: ChartMetrics,
    *,
    strict: bool = False,
) -> list[ScreenPoint]:
    """Map chart points to pixel coordinates.

    Args:
        points: Points to map; only their order and `y` values are used.
        metrics: Metrics from `compute_metrics`.
        strict: Raise on single-point series and degenerate ranges instead of
            falling back.

    Returns:
        One ScreenPoint per input point. A single point is centered
        horizontally in the plot area.
    """

    if not points:
        return []

    spacing = point_spacing(len(points), metrics, strict=strict)
    if len(points) == 1:
        return [ScreenPoint(metrics.padding_x + metrics.plot_width / 2, value_to_pixel_y(points[0].y, metrics))]

    return [
        ScreenPoint(
            metrics.padding_x + index * spacing,
            value_to_pixel_y(point.y, metrics, strict=strict),
        )
        for index, point in enumerate(points)
    ]


def compute_bar_layout(item_count: int, metrics: ChartMetrics, *, width_ratio: float = 0.8) -> BarLayout:
    """Compute the per-item slot and bar widths for bar-like charts.

    Args:
        item_count: Number of bars.
        metrics: Metrics from `compute_metrics`.
        width_ratio: Fraction of each slot occupied by the bar body.

    Raises:
        ValueError: When `item_count < 1` or `width_ratio` is outside (0, 1].
    """

    if item_count < 1:
        raise ValueError("item_count must be >= 1")
    if not 0 < width_ratio <= 1:
        raise ValueError("width_ratio must be in (0, 1]")
    slot_width = metrics.plot_width / item_count
    return BarLayout(slot_width=slot_width, bar_width=slot_width * width_ratio)


def bar_rects(
    min_values: Sequence[float],
    max_values: Sequence[float],
    metrics: ChartMetrics,
    *,
    width_ratio: float = 0.8,
    line_aligned: bool = False,
) -> list[BarRect]:
    """Compute bar rectangles spanning `[min, max]` in data space.

    Plain bars pass `metrics.min_y` as every minimum; range bars pass their
    lower bounds.

    Args:
        min_values: Lower data value of each bar (missing entries read as 0).
        max_values: Upper data value of each bar (missing entries read as 0).
        metrics: Metrics from `compute_metrics`.
        width_ratio: Fraction of the per-item slot occupied by the bar.
        line_aligned: Center bars on line-chart point positions instead of
            bar slots (used for touch areas over line charts).

    Returns:
        One BarRect per item, left to right.
    """

    count = max(len(min_values), len(max_values))
    if count == 0:
        return []

    if line_aligned:
        if not 0 < width_ratio <= 1:
            raise ValueError("width_ratio must be in (0, 1]")
        spacing = point_spacing(count, metrics)
        width = (spacing if count > 1 else metrics.plot_width) * width_ratio
    else:
        layout = compute_bar_layout(count, metrics, width_ratio=width_ratio)
        width = layout.bar_width

    rects: list[BarRect] = []
    for index in range(count):
        low = min_values[index] if index < len(min_values) else 0.0
        high = max_values[index] if index < len(max_values) else 0.0
        top = value_to_pixel_y(high, metrics)
        bottom = value_to_pixel_y(low, metrics)
        if line_aligned:
            center = metrics.padding_x + (index * spacing if count > 1 else metrics.plot_width / 2)
            x = center - width / 2
        else:
            x = metrics.padding_x + index * layout.slot_width + layout.inset
        rects.append(BarRect(x=x, y=top, width=width, height=bottom - top))
    return rects


def stacked_bar_rects(
    stacks: Sequence[Sequence[float]],
    metrics: ChartMetrics,
    *,
    width_ratio: float = 0.6,
) -> list[list[BarRect]]:
    """Compute stacked bar segments, stacked bottom-up from the plot floor.

    Segment heights are proportional to their value; non-positive segments
    are skipped.

    Returns:
        One list of segment rectangles per stack.
    """

    if not stacks:
        return []
    layout = compute_bar_layout(len(stacks), metrics, width_ratio=width_ratio)
    min_y, max_y = resolve_value_range(metrics.min_y, metrics.max_y)

    result: list[list[BarRect]] = []
    for index, segments in enumerate(stacks):
        x = metrics.padding_x + index * layout.slot_width + layout.inset
        current_y = metrics.plot_height
        rects: list[BarRect] = []
        for value in segments:
            if value <= 0:
                continue
            height = (value / (max_y - min_y)) * metrics.plot_height
            current_y -= height
            rects.append(BarRect(x=x, y=current_y, width=layout.bar_width, height=height))
        result.append(rects)
    return result


def minimal_range_bar(
    canvas: CanvasSize,
    y_min: float,
    y_max: float,
    container_min: float,
    container_max: float,
    *,
    padding: float = 8.0,
    text_space: float = 24.0,
    container_ratio: float = 0.6,
) -> tuple[BarRect, BarRect]:
    """Lay out a horizontal range bar inside its container for minimal charts.

    The data range is clamped to the container range before it is
    normalized. An empty container range fills the whole container.

    Returns:
        `(container, range_bar)` rectangles.
    """

    plot_width = canvas.width - padding * 2
    plot_height = canvas.height - padding * 2
    available_height = plot_height - text_space
    container_height = available_height * container_ratio
    container_y = padding + text_space + (available_height - container_height) / 2
    container = BarRect(x=padding, y=container_y, width=plot_width, height=container_height)

    span = container_max - container_min
    low = min(max(y_min, container_min), container_max)
    high = min(max(y_max, container_min), container_max)
    start_ratio = (low - container_min) / span if span > 0 else 0.0
    end_ratio = (high - container_min) / span if span > 0 else 1.0

    range_bar = BarRect(
        x=padding + plot_width * start_ratio,
        y=container_y,
        width=plot_width * (end_ratio - start_ratio),
        height=container_height,
    )
    return container, range_bar
