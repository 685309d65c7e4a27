"""Time granularity and aggregation mode definitions.

TimeUnit is totally ordered by granularity: a "smaller" unit is a finer one
(HOUR < DAY < WEEK < MONTH < YEAR). The ordering is used both to describe the
native resolution of a series and to validate resampling requests.
"""

from __future__ import annotations

from enum import Enum
from functools import total_ordering


@total_ordering
class TimeUnit(Enum):
    """Time granularity for a series or a resampling target.

    Values are stable lowercase identifiers used by settings and the CLI.
    """

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def ordinal(self) -> int:
        """Return the position of this unit in granularity order."""

        return _ORDER.index(self)

    def is_smaller_than(self, other: TimeUnit) -> bool:
        """Return True when this unit is strictly finer than `other`."""

        return self.ordinal < other.ordinal

    def is_bigger_than(self, other: TimeUnit) -> bool:
        """Return True when this unit is strictly coarser than `other`."""

        return self.ordinal > other.ordinal

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self.ordinal < other.ordinal

    @classmethod
    def parse(cls, raw: str) -> TimeUnit:
        """Parse a case-insensitive unit name (e.g. `"day"`, `"WEEK"`).

        Raises:
            ValueError: When `raw` does not name a TimeUnit.
        """

        try:
            return cls(raw.strip().lower())
        except ValueError:
            choices = ", ".join(unit.value for unit in cls)
            raise ValueError(f"Unknown time unit {raw!r}; expected one of: {choices}.") from None


_ORDER: tuple[TimeUnit, ...] = tuple(TimeUnit)


class AggregationMode(Enum):
    """How values that fall into the same bucket are combined."""

    SUM = "sum"
    AVERAGE = "average"

    @classmethod
    def parse(cls, raw: str) -> AggregationMode:
        """Parse a case-insensitive aggregation mode name.

        Raises:
            ValueError: When `raw` does not name an AggregationMode.
        """

        try:
            return cls(raw.strip().lower())
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown aggregation mode {raw!r}; expected one of: {choices}.") from None
