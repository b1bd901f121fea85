from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Unit:
    """Position relative to a Range; values outside [0, 1] extrapolate."""

    value: float

    @classmethod
    def zero(cls) -> "Unit":
        return cls(0.0)


@dataclass(frozen=True)
class Range:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        return self.min == self.max

    @property
    def is_inverted(self) -> bool:
        return self.min > self.max

    def normalize(self, v: float) -> Unit:
        # A flat range maps everything onto the inner edge.
        if self.is_degenerate:
            return Unit.zero()
        return Unit((v - self.min) / (self.max - self.min))

    def project(self, u: Unit) -> float:
        return self.min + u.value * (self.max - self.min)

    def widened(self, ratio: float = 0.05) -> "Range":
        if not self.is_degenerate:
            return self
        delta = max(1.0, abs(self.min) * ratio)
        return Range(self.min - delta, self.max + delta)

    @staticmethod
    def union(a: "Range", b: "Range") -> "Range":
        return Range(min(a.min, b.min), max(a.max, b.max))

    @staticmethod
    def intersect(a: "Range", b: "Range") -> "Range":
        """Return the range covering both inputs.

        Despite the name this is a union: related metrics (daily max and min
        temperature, say) share one scale by intersecting their ranges.
        """
        return Range.union(a, b)
