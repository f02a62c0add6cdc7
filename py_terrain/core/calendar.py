"""
Contribution calendar data structures.

The calendar is the only external input to a world besides the identity.
It is supplied by a fetch collaborator and is immutable once built.
"""

import math
import numbers
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

DAYS_PER_WEEK = 7


class CalendarError(ValueError):
    """Raised when calendar data violates the data model."""


@dataclass(frozen=True)
class ContributionDay:
    """A single day's activity."""

    date: str  # ISO date (YYYY-MM-DD)
    count: int
    level: int = 0  # coarse 0-4 level from the data source

    def __post_init__(self):
        try:
            date.fromisoformat(self.date)
        except (TypeError, ValueError) as e:
            raise CalendarError(f"Day date must be an ISO date (YYYY-MM-DD), got {self.date!r}") from e

        count = self.count
        if isinstance(count, bool) or not isinstance(count, numbers.Real) or not math.isfinite(count):
            raise CalendarError(f"Count for {self.date} is not a finite number: {count!r}")
        # numpy scalars become plain Python numbers
        object.__setattr__(self, "count", int(count) if isinstance(count, numbers.Integral) else float(count))
        if self.count < 0:
            raise CalendarError(f"Count for {self.date} is negative: {self.count}")
        if not 0 <= self.level <= 4:
            raise CalendarError(f"Coarse level for {self.date} must be 0-4, got {self.level}")


@dataclass(frozen=True)
class ContributionWeek:
    """One calendar column, Sunday first."""

    days: Tuple[ContributionDay, ...]
    first_day: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "days", tuple(self.days))
        if not self.days:
            raise CalendarError("A week must contain at least one day")
        if len(self.days) > DAYS_PER_WEEK:
            raise CalendarError(f"A week has at most {DAYS_PER_WEEK} days, got {len(self.days)}")
        if self.first_day is None:
            object.__setattr__(self, "first_day", self.days[0].date)


@dataclass(frozen=True)
class Calendar:
    """
    Ordered weeks of daily activity for one identity.

    Weeks are normally full; the first and last week of a rolling year may be
    partial, which the data model allows.
    """

    weeks: Tuple[ContributionWeek, ...]
    identity: str = ""
    year: Optional[int] = None
    _max_count: int = field(init=False, repr=False, compare=False, default=0)

    def __post_init__(self):
        object.__setattr__(self, "weeks", tuple(self.weeks))
        max_count = 0
        for week in self.weeks:
            for day in week.days:
                if day.count > max_count:
                    max_count = day.count
        object.__setattr__(self, "_max_count", max_count)

    @property
    def max_count(self) -> int:
        """Largest daily count in the calendar (0 for an empty year)."""
        return self._max_count

    @property
    def num_weeks(self) -> int:
        return len(self.weeks)

    @property
    def oldest_date(self) -> Optional[date]:
        """Date of the first day, used to align seasons."""
        if not self.weeks:
            return None
        return date.fromisoformat(self.weeks[0].days[0].date)

    def iter_days(self) -> Iterator[Tuple[int, int, ContributionDay]]:
        """Yield (week_index, day_index, day) in column-major order."""
        for w, week in enumerate(self.weeks):
            for d, day in enumerate(week.days):
                yield w, d, day

    def total(self) -> int:
        return sum(day.count for _, _, day in self.iter_days())

    @classmethod
    def from_counts(
        cls,
        weeks: Sequence[Sequence[int]],
        start: Optional[date] = None,
        identity: str = "",
    ) -> "Calendar":
        """
        Build a calendar from bare counts (mostly for tests and demos).

        Args:
            weeks: One sequence of counts per week
            start: Date of the first day, defaults to 2024-01-07 (a Sunday)
            identity: Identity string attached to the calendar
        """
        start = start or date(2024, 1, 7)
        ordinal = start.toordinal()
        built: List[ContributionWeek] = []
        for week_counts in weeks:
            days = []
            for count in week_counts:
                days.append(
                    ContributionDay(
                        date=date.fromordinal(ordinal).isoformat(),
                        count=count,
                        level=_coarse_level(count),
                    )
                )
                ordinal += 1
            built.append(ContributionWeek(days=tuple(days)))
        return cls(weeks=tuple(built), identity=identity, year=start.year)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Calendar":
        """Build a calendar from the fetch collaborator's JSON shape."""
        try:
            weeks = tuple(
                ContributionWeek(
                    days=tuple(
                        ContributionDay(
                            date=str(day["date"]),
                            count=day["count"],
                            level=int(day.get("level", 0)),
                        )
                        for day in week["days"]
                    ),
                    first_day=week.get("firstDay") or week.get("first_day"),
                )
                for week in payload["weeks"]
            )
        except (KeyError, TypeError) as e:
            raise CalendarError(f"Malformed calendar payload: {e}") from e
        return cls(
            weeks=weeks,
            identity=payload.get("username") or payload.get("identity") or "",
            year=payload.get("year"),
        )


def _coarse_level(count: int) -> int:
    # Rough stand-in for the source's quartile buckets
    if count <= 0:
        return 0
    if count < 3:
        return 1
    if count < 6:
        return 2
    if count < 10:
        return 3
    return 4
