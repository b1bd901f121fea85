from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import re


_DMS_PATTERN = re.compile(
    r"(\d+)°(\d+)[′'](\d+)[″\"]([NSns]) (\d+)°(\d+)[′'](\d+)[″\"]([EWew])"
)


@dataclass(frozen=True)
class DayRecord:
    """One station-day of GSOD-style observations; absent quantities are None."""

    date: date
    mean_temp: float | None = None
    max_temp: float | None = None
    min_temp: float | None = None
    dew_point: float | None = None
    mean_wind: float | None = None
    max_wind: float | None = None
    gust: float | None = None
    precipitation: float | None = None
    snow_depth: float | None = None


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float

    @classmethod
    def parse(cls, text: str) -> "Location":
        """Parse degrees/minutes/seconds such as ``40°26'46"N 79°58'56"W``."""
        match = _DMS_PATTERN.search(text)
        if match is None:
            raise ValueError(f"invalid DMS coordinates: {text!r}")
        lat = _dms_to_degrees(match.group(1), match.group(2), match.group(3))
        lng = _dms_to_degrees(match.group(5), match.group(6), match.group(7))
        if match.group(4).upper() == "S":
            lat = -lat
        if match.group(8).upper() == "W":
            lng = -lng
        return cls(lat=lat, lng=lng)


@dataclass
class Station:
    id: str
    name: str | None = None
    location: Location | None = None
    days: list[DayRecord] = field(default_factory=list)

    def days_in(self, year: int) -> list[DayRecord]:
        return [d for d in self.days if d.date.year == year]


def _dms_to_degrees(d: str, m: str, s: str) -> float:
    return int(d) + int(m) / 60.0 + int(s) / 3600.0
