"""Schema types for chart geometry.

Chart families are dispatched through the `FAMILY_TRAITS` lookup table rather
than scattered conditionals, so the tick and metric logic can be tested in
isolation from any rendering surface. Every geometry type is an immutable
value object created fresh for one render pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

FamilyLayout = Literal["points", "bars", "ranges", "stacks", "slices"]


class ChartFamily(Enum):
    """The visual chart family a geometry is computed for."""

    LINE = "line"
    BAR = "bar"
    RANGE_BAR = "range_bar"
    STACKED_BAR = "stacked_bar"
    SCATTER = "scatter"
    PIE = "pie"
    DONUT = "donut"
    MINIMAL_LINE = "minimal_line"
    MINIMAL_BAR = "minimal_bar"
    MINIMAL_RANGE_BAR = "minimal_range_bar"

    @classmethod
    def parse(cls, raw: str) -> ChartFamily:
        """Parse a case-insensitive family name (e.g. `"line"`, `"STACKED_BAR"`).

        Raises:
            ValueError: When `raw` does not name a ChartFamily.
        """

        try:
            return cls(raw.strip().lower())
        except ValueError:
            choices = ", ".join(family.value for family in cls)
            raise ValueError(f"Unknown chart family {raw!r}; expected one of: {choices}.") from None


@dataclass(frozen=True, slots=True)
class FamilyTraits:
    """Behavior switches for a chart family.

    Args:
        zero_baseline: Force the Y-axis minimum to 0 regardless of data.
        minimal: Sparkline-style chart with near-zero padding and no axes.
        layout: Which geometry the family is drawn from.
    """

    zero_baseline: bool
    minimal: bool
    layout: FamilyLayout


FAMILY_TRAITS: dict[ChartFamily, FamilyTraits] = {
    ChartFamily.LINE: FamilyTraits(zero_baseline=False, minimal=False, layout="points"),
    ChartFamily.SCATTER: FamilyTraits(zero_baseline=False, minimal=False, layout="points"),
    ChartFamily.BAR: FamilyTraits(zero_baseline=True, minimal=False, layout="bars"),
    ChartFamily.RANGE_BAR: FamilyTraits(zero_baseline=False, minimal=False, layout="ranges"),
    ChartFamily.STACKED_BAR: FamilyTraits(zero_baseline=True, minimal=False, layout="stacks"),
    ChartFamily.PIE: FamilyTraits(zero_baseline=False, minimal=False, layout="slices"),
    ChartFamily.DONUT: FamilyTraits(zero_baseline=False, minimal=False, layout="slices"),
    ChartFamily.MINIMAL_LINE: FamilyTraits(zero_baseline=False, minimal=True, layout="points"),
    ChartFamily.MINIMAL_BAR: FamilyTraits(zero_baseline=True, minimal=True, layout="bars"),
    ChartFamily.MINIMAL_RANGE_BAR: FamilyTraits(zero_baseline=False, minimal=True, layout="ranges"),
}


def family_traits(family: ChartFamily | None) -> FamilyTraits | None:
    """Return the traits for a family, or None when no family hint is given."""

    if family is None:
        return None
    return FAMILY_TRAITS[family]


@dataclass(frozen=True, slots=True)
class CanvasSize:
    """Full drawing-surface size in pixels."""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class ScreenPoint:
    """A position in pixel space (Y grows downward)."""

    x: float
    y: float

    def __add__(self, other: ScreenPoint) -> ScreenPoint:
        return ScreenPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: ScreenPoint) -> ScreenPoint:
        return ScreenPoint(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> ScreenPoint:
        return ScreenPoint(self.x * factor, self.y * factor)


@dataclass(frozen=True, slots=True)
class ChartMetrics:
    """Pixel-space drawing metrics for one render pass.

    Args:
        padding_x: Left padding reserved for the Y axis and its labels.
        padding_y: Bottom padding reserved for the X axis and its labels.
        plot_width: Canvas width minus `padding_x`.
        plot_height: Canvas height minus `padding_y`.
        min_y: Data value mapped to the bottom of the plot area.
        max_y: Data value mapped to the top of the plot area.
        ticks: Y-axis tick values, ascending.
    """

    padding_x: float
    padding_y: float
    plot_width: float
    plot_height: float
    min_y: float
    max_y: float
    ticks: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class PieSlice:
    """One slice of a pie or donut.

    Angles are in degrees in the drawing backend's convention: 0° points to
    3 o'clock and positive sweeps run clockwise.
    """

    start_angle_deg: float
    sweep_angle_deg: float
    ratio: float


@dataclass(frozen=True, slots=True)
class BarRect:
    """An axis-aligned rectangle with a top-left origin."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class BarLayout:
    """Horizontal layout shared by every bar of a bar-like chart.

    Args:
        slot_width: Width allotted to each item (`plot_width / item_count`).
        bar_width: Width of the bar body, centered within its slot.
    """

    slot_width: float
    bar_width: float

    @property
    def inset(self) -> float:
        """Gap between the slot's left edge and the bar body."""

        return (self.slot_width - self.bar_width) / 2
