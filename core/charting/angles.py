"""Angular layout for pie and donut charts.

Donut versus filled pie is a presentation detail of the drawing backend; the
angles are identical for both.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .schema import CanvasSize, PieSlice, ScreenPoint

START_ANGLE_DEG = -90.0
FULL_CIRCLE_DEG = 360.0


def compute_pie_slices(values: Sequence[float]) -> list[PieSlice]:
    """Convert magnitudes into contiguous slices, clockwise from 12 o'clock.

    Args:
        values: Non-negative magnitudes, in drawing order.

    Returns:
        One PieSlice per value, or an empty list when the total is not
        positive (nothing to draw).

    Raises:
        ValueError: When any magnitude is negative.
    """

    if any(value < 0 for value in values):
        raise ValueError("Pie magnitudes must be non-negative.")

    total = math.fsum(values)
    if total <= 0:
        return []

    slices: list[PieSlice] = []
    start = START_ANGLE_DEG
    for value in values:
        ratio = value / total
        sweep = ratio * FULL_CIRCLE_DEG
        slices.append(PieSlice(start_angle_deg=start, sweep_angle_deg=sweep, ratio=ratio))
        start += sweep
    return slices


def pie_metrics(canvas: CanvasSize, *, padding: float = 32.0) -> tuple[ScreenPoint, float]:
    """Return the pie center and radius for a canvas.

    The radius is half the shorter canvas side minus `padding`, floored at 0.
    """

    center = ScreenPoint(canvas.width / 2, canvas.height / 2)
    radius = max(0.0, min(canvas.width, canvas.height) / 2 - padding)
    return center, radius


def slice_mid_angle(pie_slice: PieSlice) -> float:
    """Return the angle (degrees) halfway through a slice."""

    return pie_slice.start_angle_deg + pie_slice.sweep_angle_deg / 2


def pie_label_position(
    center: ScreenPoint,
    radius: float,
    radius_factor: float,
    angle_deg: float,
) -> ScreenPoint:
    """Return a label anchor on the circle of radius `radius * radius_factor`.

    Factors below 1 place the label inside the slice, above 1 outside.
    """

    angle = math.radians(angle_deg)
    label_radius = radius * radius_factor
    return ScreenPoint(center.x + label_radius * math.cos(angle), center.y + label_radius * math.sin(angle))
