"""Chart defaults resolved from Django settings.

`settings.SALUSCHART` may override any key; missing keys fall back to the
geometry module constants.
"""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from django.utils.dates import WEEKDAYS_ABBR

from .coordinates import DEFAULT_PADDING_X, DEFAULT_PADDING_Y, MINIMAL_PADDING
from .label_placement import LABEL_OFFSET


@dataclass(frozen=True, slots=True)
class ChartDefaults:
    """Per-deployment chart defaults.

    Args:
        tick_count: Desired number of Y tick intervals.
        padding_x: Horizontal padding of full charts.
        padding_y: Vertical padding of full charts.
        minimal_padding: Padding of minimal (sparkline) charts on both axes.
        label_offset: Distance between a line point and its value label.
        bar_width_ratio: Fraction of each bar slot occupied by the bar body.
        pie_padding: Gap between the pie circle and the canvas edge.
    """

    tick_count: int = 5
    padding_x: float = DEFAULT_PADDING_X
    padding_y: float = DEFAULT_PADDING_Y
    minimal_padding: float = MINIMAL_PADDING
    label_offset: float = LABEL_OFFSET
    bar_width_ratio: float = 0.8
    pie_padding: float = 32.0


_SETTING_KEYS: dict[str, str] = {
    "TICK_COUNT": "tick_count",
    "PADDING_X": "padding_x",
    "PADDING_Y": "padding_y",
    "MINIMAL_PADDING": "minimal_padding",
    "LABEL_OFFSET": "label_offset",
    "BAR_WIDTH_RATIO": "bar_width_ratio",
    "PIE_PADDING": "pie_padding",
}


def chart_defaults() -> ChartDefaults:
    """Return chart defaults from `settings.SALUSCHART`.

    Raises:
        ValueError: When the settings contain an unknown key.
    """

    configured: dict[str, object] = dict(getattr(settings, "SALUSCHART", {}) or {})
    unknown = sorted(set(configured) - set(_SETTING_KEYS))
    if unknown:
        raise ValueError(f"Unknown SALUSCHART settings: {', '.join(unknown)}.")
    return ChartDefaults(**{_SETTING_KEYS[key]: value for key, value in configured.items()})


def localized_weekday_names() -> tuple[str, ...]:
    """Return Sunday-first abbreviated weekday names in the active language."""

    monday_first = [str(WEEKDAYS_ABBR[index]) for index in range(7)]
    return (monday_first[6], *monday_first[:6])
