"""Tangent-based value label placement for line charts.

Each label is pushed a fixed distance along a normal of the local line
direction. Of the two normals, the one that ends up visually higher (smaller
pixel Y) wins, so labels tend to sit above the line.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .schema import ScreenPoint

LABEL_OFFSET = 25.0
_HORIZONTAL = ScreenPoint(1.0, 0.0)


def normalize_vector(vector: ScreenPoint) -> ScreenPoint:
    """Return `vector` scaled to unit length; a zero vector becomes `(1, 0)`."""

    magnitude = math.hypot(vector.x, vector.y)
    if magnitude > 0:
        return ScreenPoint(vector.x / magnitude, vector.y / magnitude)
    return _HORIZONTAL


def tangent_at(index: int, points: Sequence[ScreenPoint]) -> ScreenPoint:
    """Return the unit tangent of the polyline at `points[index]`.

    Raises:
        IndexError: When `index` is out of range.
    """

    if not 0 <= index < len(points):
        raise IndexError(f"Point index {index} out of range for {len(points)} points.")
    if len(points) < 2:
        return _HORIZONTAL

    current = points[index]
    if index == 0:
        return normalize_vector(points[1] - current)
    if index == len(points) - 1:
        return normalize_vector(current - points[index - 1])

    incoming = normalize_vector(current - points[index - 1])
    outgoing = normalize_vector(points[index + 1] - current)
    return normalize_vector((incoming + outgoing) * 0.5)


def place_label(index: int, points: Sequence[ScreenPoint], *, offset: float = LABEL_OFFSET) -> ScreenPoint:
    """Return the label anchor for `points[index]`.

    Args:
        index: Index of the labelled point.
        points: Plotted polyline in pixel space.
        offset: Distance from the point to the anchor, in pixels.
    """

    tangent = tangent_at(index, points)
    current = points[index]
    counterclockwise = current + ScreenPoint(-tangent.y, tangent.x) * offset
    clockwise = current + ScreenPoint(tangent.y, -tangent.x) * offset
    return counterclockwise if counterclockwise.y < clockwise.y else clockwise


def place_labels(points: Sequence[ScreenPoint], *, offset: float = LABEL_OFFSET) -> list[ScreenPoint]:
    """Return one label anchor per point of a polyline."""

    return [place_label(index, points, offset=offset) for index in range(len(points))]
