from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from weather_banner.canvas import Canvas, Color
from weather_banner.errors import ChartDataError
from weather_banner.ranges import Range
from weather_banner.series import Series


TAU = 2.0 * math.pi
# Control-point distance for a one-span cubic approximation of a circular arc.
ARC_KAPPA = 0.55


def arc_chord_length(r: float, t: float) -> float:
    return math.sqrt((r * math.cos(t) - r) ** 2 + (r * math.sin(t)) ** 2)


def sample_angle(i: int, n: int) -> float:
    """Angle of sample ``i`` of ``n``: sample 0 at the top, increasing clockwise."""
    return i * (TAU / n) - TAU / 4.0


def polar_point(cx: float, cy: float, r: float, theta: float) -> tuple[float, float]:
    return (cx + r * math.cos(theta), cy + r * math.sin(theta))


@dataclass(frozen=True)
class Radial:
    """Maps series samples onto a shared center and radius interval."""

    cx: float
    cy: float
    rrange: Range
    smooth: bool = True

    def radius(self, series: Series, i: int) -> float:
        return self.rrange.project(series.get_normalized(i))

    def point(self, series: Series, i: int) -> tuple[float, float]:
        return polar_point(self.cx, self.cy, self.radius(series, i), sample_angle(i, len(series)))

    def points(self, series: Series) -> tuple[np.ndarray, np.ndarray]:
        n = len(series)
        theta = np.arange(n, dtype=np.float64) * (TAU / n) - TAU / 4.0
        radii = self.rrange.min + series.normalized() * self.rrange.span
        return self.cx + radii * np.cos(theta), self.cy + radii * np.sin(theta)

    def trace(self, ctx: Canvas, series: Series, *, reverse: bool = False, connect: bool = False) -> None:
        """Append one closed lap around ``series`` to the current path.

        Forward laps run 0..n, reverse laps run n..0; index n is sample 0 again.
        With ``connect`` the lap starts with a line from the current point
        instead of a move.
        """
        n = len(series)
        if n == 0:
            return
        order = range(n, 0, -1) if reverse else range(0, n)
        step = -1 if reverse else 1
        first = n if reverse else 0
        x0, y0 = self.point(series, first)
        if connect:
            ctx.line_to(x0, y0)
        else:
            ctx.move_to(x0, y0)
        for i in order:
            self._segment(ctx, series, i, i + step)

    def _segment(self, ctx: Canvas, series: Series, i: int, j: int) -> None:
        n = len(series)
        t1 = sample_angle(j, n)
        r1 = self.radius(series, j)
        x1, y1 = polar_point(self.cx, self.cy, r1, t1)
        if not self.smooth:
            ctx.line_to(x1, y1)
            return

        dt = TAU / n
        direction = 1.0 if j > i else -1.0
        t0 = sample_angle(i, n)
        r0 = self.radius(series, i)
        x0, y0 = polar_point(self.cx, self.cy, r0, t0)
        d0 = direction * ARC_KAPPA * arc_chord_length(r0, dt)
        d1 = direction * ARC_KAPPA * arc_chord_length(r1, dt)
        ctx.curve_to(
            x0 - d0 * math.sin(t0),
            y0 + d0 * math.cos(t0),
            x1 + d1 * math.sin(t1),
            y1 - d1 * math.cos(t1),
            x1,
            y1,
        )

    def stroke_path(self, ctx: Canvas, series: Series) -> None:
        ctx.new_path()
        self.trace(ctx, series)
        ctx.close_path()

    def band_path(self, ctx: Canvas, hi: Series, lo: Series) -> None:
        if len(hi) != len(lo):
            raise ChartDataError(f"band series lengths differ: {len(hi)} != {len(lo)}")
        ctx.new_path()
        self.trace(ctx, hi)
        self.trace(ctx, lo, reverse=True, connect=True)
        ctx.close_path()

    def stroke(self, ctx: Canvas, series: Series, color: Color, *, line_width: float = 1.0, fill: Color | None = None) -> None:
        self.stroke_path(ctx, series)
        if fill is not None:
            fill.set(ctx)
            ctx.fill_preserve()
        color.set(ctx)
        ctx.set_line_width(line_width)
        ctx.stroke()

    def band(
        self,
        ctx: Canvas,
        hi: Series,
        lo: Series,
        *,
        fill: Color | None,
        outline: Color | None,
        line_width: float = 1.0,
    ) -> None:
        self.band_path(ctx, hi, lo)
        if fill is not None:
            fill.set(ctx)
            if outline is None:
                ctx.fill()
                return
            ctx.fill_preserve()
        if outline is not None:
            outline.set(ctx)
            ctx.set_line_width(line_width)
            ctx.stroke()
        else:
            ctx.new_path()

    def marker(self, ctx: Canvas, series: Series, i: int, color: Color, *, size: float = 3.0) -> None:
        x, y = self.point(series, i)
        ctx.new_path()
        ctx.arc(x, y, size, 0.0, TAU)
        color.set(ctx)
        ctx.fill()
