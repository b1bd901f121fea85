from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator


MONTH_ABBREVIATIONS = (
    "JAN",
    "FEB",
    "MAR",
    "APR",
    "MAY",
    "JUN",
    "JUL",
    "AUG",
    "SEP",
    "OCT",
    "NOV",
    "DEC",
)


@dataclass(frozen=True, order=True)
class Year:
    start: date

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Year":
        return cls(start=date(ordinal, 1, 1))

    @property
    def end(self) -> date:
        return date(self.start.year + 1, 1, 1)

    def ordinal(self) -> int:
        return self.start.year

    def duration(self) -> timedelta:
        return self.end - self.start

    def days_in_year(self) -> int:
        return self.duration().days

    def next(self) -> "Year":
        return Year.from_ordinal(self.start.year + 1)

    def days(self) -> "DaySpan":
        return DaySpan(self.start, self.end)

    def months(self) -> "MonthSpan":
        return MonthSpan(Month(self.start), Month(self.end))

    def __str__(self) -> str:
        return str(self.start.year)


@dataclass(frozen=True)
class Month:
    start: date

    @property
    def end(self) -> date:
        if self.start.month == 12:
            return date(self.start.year + 1, 1, 1)
        return date(self.start.year, self.start.month + 1, 1)

    @property
    def abbreviation(self) -> str:
        return MONTH_ABBREVIATIONS[self.start.month - 1]

    def duration(self) -> timedelta:
        return self.end - self.start

    def year(self) -> Year:
        return Year.from_ordinal(self.start.year)

    def next(self) -> "Month":
        return Month(self.end)

    def days(self) -> "DaySpan":
        return DaySpan(self.start, self.end)

    def __str__(self) -> str:
        return self.start.isoformat()


@dataclass(frozen=True)
class Day:
    date: date

    def ordinal(self) -> int:
        return self.date.timetuple().tm_yday

    def month(self) -> Month:
        return Month(date(self.date.year, self.date.month, 1))

    def year(self) -> Year:
        return Year.from_ordinal(self.date.year)

    def next(self) -> "Day":
        return Day(self.date + timedelta(days=1))

    def prev(self) -> "Day":
        return Day(self.date - timedelta(days=1))

    def __str__(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class DaySpan:
    """Half-open run of days; iterating twice yields the same days."""

    start: date
    end: date

    def __iter__(self) -> Iterator[Day]:
        cur = Day(self.start)
        while cur.date < self.end:
            yield cur
            cur = cur.next()

    def __len__(self) -> int:
        return max(0, (self.end - self.start).days)


@dataclass(frozen=True)
class MonthSpan:
    first: Month
    stop: Month

    def __iter__(self) -> Iterator[Month]:
        cur = self.first
        while cur.start < self.stop.start:
            yield cur
            cur = cur.next()

    def __len__(self) -> int:
        return (self.stop.start.year - self.first.start.year) * 12 + (self.stop.start.month - self.first.start.month)
