from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import numpy as np

from weather_banner.errors import ScaleError
from weather_banner.ranges import Range

LOGGER = logging.getLogger(__name__)

STEP_FACTORS = (1, 2, 3, 5, 10, 20, 30, 50)


@dataclass(frozen=True)
class Scale:
    step: float
    ticks: tuple[float, ...]

    @classmethod
    def from_range(cls, r: Range, lim: float) -> "Scale":
        _check_range(r)
        width = r.max - r.min
        magnitude = 10.0 ** math.floor(math.log10(width) - 1.0)
        for fac in STEP_FACTORS:
            step = fac * magnitude
            if width / step < lim:
                LOGGER.debug("scale for [%s, %s] with limit %s: step=%s", r.min, r.max, lim, step)
                return cls.from_range_with_step(r, step)
        raise ScaleError(f"no tick step keeps [{r.min}, {r.max}] under {lim} ticks")

    @classmethod
    def from_range_with_step(cls, r: Range, step: float) -> "Scale":
        if not np.isfinite(step) or step <= 0:
            raise ScaleError(f"tick step must be a positive number, got {step}")
        _check_range(r)
        k = math.floor(r.min / step) + 1
        ticks: list[float] = []
        value = k * step
        while value < r.max:
            ticks.append(value)
            k += 1
            value = k * step
        return cls(step=step, ticks=tuple(ticks))

    def steps(self) -> tuple[float, ...]:
        return self.ticks

    def __len__(self) -> int:
        return len(self.ticks)

    def label_for(self, i: int) -> str:
        return format_tick(self.ticks[i], step=self.step)

    def labels(self) -> list[str]:
        return [self.label_for(i) for i in range(len(self.ticks))]


def format_tick(value: float, *, step: float) -> str:
    if step >= 1.0:
        return str(int(round(value)))
    decimals = _decimals_from_step(step)
    out = f"{value:.{decimals}f}"
    if float(out) == 0.0:
        out = f"{0.0:.{decimals}f}"
    return out


def _decimals_from_step(step: float) -> int:
    return abs(math.floor(math.log10(step)))


def _check_range(r: Range) -> None:
    if not (np.isfinite(r.min) and np.isfinite(r.max)):
        raise ScaleError(f"range [{r.min}, {r.max}] is not finite")
    if r.is_degenerate:
        raise ScaleError(f"range [{r.min}, {r.max}] has zero width")
    if r.is_inverted:
        raise ScaleError(f"range [{r.min}, {r.max}] is inverted")
