from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Callable, Iterable, Protocol, TypeVar

import numpy as np

from weather_banner.errors import ChartDataError
from weather_banner.periods import Day, Year
from weather_banner.ranges import Range, Unit

LOGGER = logging.getLogger(__name__)


class Dated(Protocol):
    @property
    def date(self) -> date:
        ...


R = TypeVar("R", bound=Dated)
Aggregate = Callable[[np.ndarray], float]


@dataclass(frozen=True)
class _Fold:
    carry: float = 0.0
    min: float = float("inf")
    min_index: int = 0
    max: float = float("-inf")
    max_index: int = 0

    def step(self, index: int, value: float | None) -> tuple["_Fold", float]:
        if value is None:
            return self, self.carry
        lo, lo_index = (value, index) if value < self.min else (self.min, self.min_index)
        hi, hi_index = (value, index) if value > self.max else (self.max, self.max_index)
        return _Fold(carry=value, min=lo, min_index=lo_index, max=hi, max_index=hi_index), value


@dataclass(frozen=True, eq=False)
class Series:
    """Dense, calendar-aligned samples with the range of the observed ones.

    Missing days hold the last observed value (0.0 before the first
    observation) and never move the range or extremum indices.
    """

    values: np.ndarray
    range: Range
    min_index: int
    max_index: int
    present: np.ndarray

    def __post_init__(self) -> None:
        self.values.setflags(write=False)
        self.present.setflags(write=False)

    @classmethod
    def from_values(cls, items: Iterable[float | None]) -> "Series":
        fold = _Fold()
        vals: list[float] = []
        mask: list[bool] = []
        for i, item in enumerate(items):
            value = None if item is None else float(item)
            fold, stored = fold.step(i, value)
            vals.append(stored)
            mask.append(value is not None)

        if not any(mask):
            LOGGER.warning("series of %d samples has no observed values; using a flat range", len(vals))
            rng = Range(0.0, 0.0)
            min_index = max_index = 0
        else:
            rng = Range(fold.min, fold.max)
            min_index, max_index = fold.min_index, fold.max_index

        return cls(
            values=np.asarray(vals, dtype=np.float64),
            range=rng,
            min_index=min_index,
            max_index=max_index,
            present=np.asarray(mask, dtype=bool),
        )

    @classmethod
    def for_each_day(cls, year: Year, records: Iterable[R], value_of: Callable[[R], float | None]) -> "Series":
        by_ordinal: dict[int, R] = {}
        for record in records:
            by_ordinal[Day(record.date).ordinal()] = record

        def lookup(day: Day) -> float | None:
            record = by_ordinal.get(day.ordinal())
            if record is None:
                return None
            return value_of(record)

        series = cls.from_values(lookup(day) for day in year.days())
        LOGGER.debug(
            "built series for %s: %d/%d observed, range=[%s, %s]",
            year,
            series.present_count,
            len(series),
            series.range.min,
            series.range.max,
        )
        return series

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def is_empty(self) -> bool:
        return not bool(np.any(self.present))

    @property
    def present_count(self) -> int:
        return int(np.count_nonzero(self.present))

    @property
    def max_value(self) -> float | None:
        """Largest observed sample, independent of the display range."""
        if self.is_empty:
            return None
        return float(self.values[self.max_index])

    @property
    def min_value(self) -> float | None:
        if self.is_empty:
            return None
        return float(self.values[self.min_index])

    def with_range(self, rng: Range) -> "Series":
        return Series(
            values=self.values,
            range=rng,
            min_index=self.min_index,
            max_index=self.max_index,
            present=self.present,
        )

    def get(self, i: int) -> float:
        n = len(self)
        if n == 0:
            raise ChartDataError("cannot index an empty series")
        return float(self.values[((i % n) + n) % n])

    def get_normalized(self, i: int) -> Unit:
        return self.range.normalize(self.get(i))

    def normalized(self) -> np.ndarray:
        if self.range.is_degenerate:
            return np.zeros_like(self.values)
        return (self.values - self.range.min) / self.range.span

    def downsample_by(self, k: int, aggregate: Aggregate) -> "Series":
        """Aggregate contiguous blocks of ``k`` samples; a short tail is dropped.

        The extremum indices are the original ones divided by ``k``. They
        point at the block that held the extremum, which is not necessarily
        the extremum of the aggregated values.
        """
        if k < 1:
            raise ValueError("downsample factor must be >= 1")
        m = len(self) // k
        blocks = self.values[: m * k].reshape(m, k)
        present_blocks = self.present[: m * k].reshape(m, k)
        return Series(
            values=np.asarray([aggregate(block) for block in blocks], dtype=np.float64),
            range=self.range,
            min_index=self.min_index // k,
            max_index=self.max_index // k,
            present=np.any(present_blocks, axis=1),
        )

    def observed(self) -> np.ndarray:
        return self.values[self.present]

    def mean(self) -> float | None:
        obs = self.observed()
        if obs.size == 0:
            return None
        return float(np.mean(obs))

    def total(self) -> float:
        return float(np.sum(self.observed()))

    def count(self, predicate: Callable[[np.ndarray], np.ndarray]) -> int:
        return int(np.count_nonzero(predicate(self.observed())))
