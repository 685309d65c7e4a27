"""Nice axis tick generation.

Ticks are round multiples of 1, 2 or 5 times a power of ten. User-forced
bounds always win over the computed nice bounds, even when they cut into the
data extent.
"""

from __future__ import annotations

import logging
import math

from .schema import ChartFamily, family_traits

logger = logging.getLogger(__name__)

TICK_EPSILON = 1e-6
TICK_DECIMALS = 6
STEP_MULTIPLIERS: tuple[float, ...] = (1.0, 2.0, 5.0, 10.0)


def nice_step(raw_step: float) -> float:
    """Return the 1/2/5 × 10^k step closest to `raw_step`.

    The 10× candidate is the next decade's 1× step, so a raw step of 9.4
    resolves to 10 rather than 5. Ties go to the smaller candidate.
    """

    if raw_step <= 0 or not math.isfinite(raw_step):
        raise ValueError(f"raw_step must be a positive finite number, got {raw_step!r}.")
    power = 10.0 ** math.floor(math.log10(raw_step))
    return min((multiplier * power for multiplier in STEP_MULTIPLIERS), key=lambda step: abs(step - raw_step))


def compute_nice_ticks(
    min_value: float,
    max_value: float,
    tick_count: int = 5,
    *,
    family: ChartFamily | None = None,
    actual_min: float | None = None,
    actual_max: float | None = None,
) -> list[float]:
    """Compute ascending, deduplicated axis ticks for a value range.

    Args:
        min_value: Smallest data value.
        max_value: Largest data value.
        tick_count: Desired number of intervals.
        family: Optional chart family; bar-like families force a zero baseline.
        actual_min: User-forced axis minimum, emitted as the first tick.
        actual_max: User-forced axis maximum, emitted as the last tick.

    Returns:
        Tick values rounded to 6 decimals. An empty data range falls back to
        `[0.0, 1.0]` unless both forced bounds span a usable range, in which
        case the step is taken from the forced range.

    Raises:
        ValueError: When `tick_count` is less than 1.
    """

    if tick_count < 1:
        raise ValueError("tick_count must be >= 1")

    traits = family_traits(family)
    if traits is not None and traits.zero_baseline:
        min_value = 0.0

    if min_value >= max_value:
        if actual_min is None or actual_max is None or actual_min >= actual_max:
            return [0.0, 1.0]
        min_value, max_value = actual_min, actual_max

    step = nice_step((max_value - min_value) / tick_count)
    nice_min = math.floor(min_value / step) * step
    nice_max = math.ceil(max_value / step) * step

    lower = actual_min if actual_min is not None else nice_min
    upper = actual_max if actual_max is not None else nice_max
    if lower >= upper:
        logger.warning("Forced axis bounds collapse the range (%s >= %s); using [0, 1].", lower, upper)
        return [0.0, 1.0]

    ticks: list[float] = []
    if actual_min is not None:
        ticks.append(actual_min)

    index = math.ceil(lower / step - TICK_EPSILON)
    tick = index * step
    while tick <= upper + TICK_EPSILON:
        if not _collides(tick, actual_min) and not _collides(tick, actual_max):
            ticks.append(tick)
        index += 1
        tick = index * step

    if actual_max is not None:
        ticks.append(actual_max)

    return sorted({round(tick, TICK_DECIMALS) + 0.0 for tick in ticks})


def format_tick_label(value: float) -> str:
    """Format a tick value compactly (`"0"`, `"1.5K"`, `"2.0M"`, `"25"`, `"0.5"`)."""

    if value == 0:
        return "0"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    if float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.1f}"


def _collides(tick: float, bound: float | None) -> bool:
    return bound is not None and abs(tick - bound) <= TICK_EPSILON
