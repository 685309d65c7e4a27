"""Unit tests for tangent-based line label placement."""

from __future__ import annotations

import math

import pytest

from core.charting.label_placement import LABEL_OFFSET, normalize_vector, place_label, place_labels, tangent_at
from core.charting.schema import ScreenPoint

pytestmark = pytest.mark.unit


def test_normalize_vector() -> None:
    """Vectors scale to unit length; the zero vector becomes horizontal."""

    assert normalize_vector(ScreenPoint(3, 4)) == ScreenPoint(0.6, 0.8)
    assert normalize_vector(ScreenPoint(0, 0)) == ScreenPoint(1.0, 0.0)


def test_horizontal_line_labels_sit_above_points() -> None:
    """On a flat line every label moves straight up by the offset."""

    points = [ScreenPoint(0, 100), ScreenPoint(50, 100), ScreenPoint(100, 100)]

    assert place_labels(points) == [ScreenPoint(0, 75), ScreenPoint(50, 75), ScreenPoint(100, 75)]


def test_single_point_uses_a_horizontal_tangent() -> None:
    """A lone point is labelled directly above it."""

    assert tangent_at(0, [ScreenPoint(10, 10)]) == ScreenPoint(1.0, 0.0)
    anchor = place_label(0, [ScreenPoint(10, 10)])
    assert (anchor.x, anchor.y) == pytest.approx((10.0, -15.0))


def test_rising_segment_label_goes_up_and_left() -> None:
    """On an upward slope the higher of the two normals is chosen."""

    anchor = place_label(0, [ScreenPoint(0, 100), ScreenPoint(100, 0)])
    shift = LABEL_OFFSET / math.sqrt(2)

    assert (anchor.x, anchor.y) == pytest.approx((-shift, 100 - shift))


def test_interior_tangent_bisects_the_neighbouring_segments() -> None:
    """At the bottom of a V the tangent is horizontal, so the label goes straight up."""

    points = [ScreenPoint(0, 0), ScreenPoint(50, 100), ScreenPoint(100, 0)]

    tangent = tangent_at(1, points)
    anchor = place_label(1, points)

    assert (tangent.x, tangent.y) == pytest.approx((1.0, 0.0))
    assert (anchor.x, anchor.y) == pytest.approx((50.0, 75.0))


def test_every_anchor_is_offset_by_the_label_distance() -> None:
    """Anchors keep the configured distance from their points."""

    points = [ScreenPoint(0, 40), ScreenPoint(30, 10), ScreenPoint(60, 90), ScreenPoint(90, 20)]

    anchors = place_labels(points, offset=12)

    assert len(anchors) == len(points)
    for point, anchor in zip(points, anchors):
        assert math.hypot(anchor.x - point.x, anchor.y - point.y) == pytest.approx(12)


def test_tangent_index_out_of_range() -> None:
    """Indices outside the polyline raise IndexError."""

    with pytest.raises(IndexError):
        tangent_at(2, [ScreenPoint(0, 0), ScreenPoint(1, 1)])
    with pytest.raises(IndexError):
        tangent_at(0, [])
