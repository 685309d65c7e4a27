"""Compute chart geometry for a YAML samples document.

The document looks like:

    time_unit: hour
    label: Steps
    samples:
      - {timestamp: 2025-06-02T08:00:00+09:00, value: 1200}
      - {timestamp: 2025-06-02T09:00:00+09:00, value: 800}

Naive timestamps are read in the current Django time zone. The geometry is
printed to stdout as JSON.
"""

from __future__ import annotations

import json
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import yaml
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.charting.builder import build_chart_geometry, geometry_payload
from core.charting.schema import CanvasSize, ChartFamily
from transform.aggregations import InvalidAggregationError
from transform.dto import Sample, TimeSeries
from transform.time_units import AggregationMode, TimeUnit


class Command(BaseCommand):
    """Aggregate samples and print the chart geometry as JSON."""

    help = "Compute chart geometry (ticks, pixel points, bars or pie slices) for a YAML samples file."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("path", help="Path to a YAML samples document.")
        parser.add_argument("--family", default="line", help="Chart family (default: line).")
        parser.add_argument("--unit", default=None, help="Resample to this time unit (hour/day/week/month/year).")
        parser.add_argument("--aggregation", default="sum", help="sum or average (default: sum).")
        parser.add_argument("--width", type=float, default=400.0, help="Canvas width in pixels.")
        parser.add_argument("--height", type=float, default=300.0, help="Canvas height in pixels.")
        parser.add_argument("--min-y", type=float, default=None, help="Force the Y-axis minimum.")
        parser.add_argument("--max-y", type=float, default=None, help="Force the Y-axis maximum.")
        parser.add_argument(
            "--weekday-labels",
            action="store_true",
            help="Label daily points with weekday names.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        try:
            family = ChartFamily.parse(options["family"])
            aggregation = AggregationMode.parse(options["aggregation"])
            target_unit = TimeUnit.parse(options["unit"]) if options["unit"] else None
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        series = self._load_series(Path(options["path"]))
        try:
            geometry = build_chart_geometry(
                series,
                family=family,
                canvas=CanvasSize(width=options["width"], height=options["height"]),
                time_unit=target_unit,
                aggregation=aggregation,
                forced_min_y=options["min_y"],
                forced_max_y=options["max_y"],
                weekday_labels=options["weekday_labels"],
            )
        except InvalidAggregationError as exc:
            raise CommandError(str(exc)) from exc
        except ValueError as exc:
            raise CommandError(f"Cannot lay out {family.value} chart: {exc}") from exc

        self.stdout.write(json.dumps(geometry_payload(geometry), ensure_ascii=False, default=str))
        return None

    def _load_series(self, path: Path) -> TimeSeries:
        """Parse the YAML samples document into a TimeSeries."""

        try:
            payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except OSError as exc:
            raise CommandError(f"Cannot read {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise CommandError(f"Invalid YAML in {path}: {exc}") from exc

        if not isinstance(payload, dict):
            raise CommandError(f"{path} must contain a mapping with a `samples` list.")

        try:
            time_unit = TimeUnit.parse(str(payload.get("time_unit", "hour")))
            samples = [self._parse_sample(raw) for raw in payload.get("samples") or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise CommandError(f"Invalid samples in {path}: {exc}") from exc

        label = payload.get("label")
        return TimeSeries.from_samples(samples, time_unit=time_unit, label=str(label) if label else None)

    def _parse_sample(self, raw: Any) -> Sample:
        """Parse one `{timestamp, value}` mapping."""

        timestamp = raw["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        elif isinstance(timestamp, date) and not isinstance(timestamp, datetime):
            timestamp = datetime.combine(timestamp, time())
        if not isinstance(timestamp, datetime):
            raise TypeError(f"Unsupported timestamp {timestamp!r}.")
        if timezone.is_naive(timestamp):
            timestamp = timezone.make_aware(timestamp)
        return Sample(timestamp=timestamp, value=float(raw["value"]))
