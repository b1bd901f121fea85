from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable, Iterable, Sequence

import numpy as np

from weather_banner.canvas import Canvas, Color, Font
from weather_banner.config import RenderConfig
from weather_banner.periods import Year
from weather_banner.radial import TAU, Radial
from weather_banner.ranges import Range
from weather_banner.records import DayRecord
from weather_banner.scales import Scale
from weather_banner.series import Series

LOGGER = logging.getLogger(__name__)

INNER_RADIUS = 0.36
OUTER_RADIUS = 0.84
LABEL_RADIUS = 0.92
SLOT_FILL = 0.92

BACKGROUND = Color.from_u32(0xF6F4EF)
WEDGE_SHADES = (Color.from_u32(0xECE8DF), Color.from_u32(0xE3DED3))
MONTH_LABEL = Color.from_u32(0x8A8578)
GRID = Color.from_u32_with_alpha(0x6B6558, 0.25)
TICK_LABEL = Color.from_u32(0x6B6558)
SUMMARY_TEXT = Color.from_u32(0x2B2925)
DEBUG = Color.from_u32_with_alpha(0xFF00FF, 0.6)

MONTH_FONT = Font("DejaVu Sans", 11.0)
TICK_FONT = Font("DejaVu Sans", 9.0)
SUMMARY_FONT = Font("DejaVu Sans", 13.0)
TITLE_FONT = Font("DejaVu Sans", 15.0, weight="bold")

Extract = Callable[[DayRecord], float | None]
SummaryLines = list[tuple[str, str]]


@dataclass(frozen=True)
class ChartSlot:
    cx: float
    cy: float
    radius: float

    @property
    def rrange(self) -> Range:
        return Range(self.radius * INNER_RADIUS, self.radius * OUTER_RADIUS)


@dataclass(frozen=True)
class MetricSeries:
    """Drawn series plus an optional ``peak`` series that only feeds the summary."""

    hi: Series
    lo: Series | None = None
    mid: Series | None = None
    peak: Series | None = None

    def all(self) -> list[Series]:
        return [s for s in (self.hi, self.lo, self.mid) if s is not None]

    def with_range(self, rng: Range) -> "MetricSeries":
        return MetricSeries(
            hi=self.hi.with_range(rng),
            lo=self.lo.with_range(rng) if self.lo is not None else None,
            mid=self.mid.with_range(rng) if self.mid is not None else None,
            peak=self.peak,
        )

    def downsample_by(self, k: int) -> "MetricSeries":
        if k == 1:
            return self
        return MetricSeries(
            hi=self.hi.downsample_by(k, np.max),
            lo=self.lo.downsample_by(k, np.min) if self.lo is not None else None,
            mid=self.mid.downsample_by(k, np.mean) if self.mid is not None else None,
            peak=self.peak,
        )


@dataclass(frozen=True)
class Metric:
    name: str
    hi: Extract
    summarize: Callable[[MetricSeries], SummaryLines]
    outline: Color
    fill: Color
    lo: Extract | None = None
    mid: Extract | None = None
    mid_color: Color | None = None
    peak: Extract | None = None

    def build(self, year: Year, records: Sequence[DayRecord]) -> MetricSeries:
        return MetricSeries(
            hi=Series.for_each_day(year, records, self.hi),
            lo=Series.for_each_day(year, records, self.lo) if self.lo is not None else None,
            mid=Series.for_each_day(year, records, self.mid) if self.mid is not None else None,
            peak=Series.for_each_day(year, records, self.peak) if self.peak is not None else None,
        )


def shared_range(series: Iterable[Series]) -> Range:
    """Union of the ranges of the series that observed anything."""
    rng: Range | None = None
    for s in series:
        if s.is_empty:
            continue
        rng = s.range if rng is None else Range.intersect(rng, s.range)
    return rng if rng is not None else Range(0.0, 0.0)


def format_value(value: float | None, unit: str = "") -> str:
    if value is None or not math.isfinite(value):
        return "n/a"
    return f"{value:.1f}{unit}"


def _temperature_summary(ms: MetricSeries) -> SummaryLines:
    assert ms.lo is not None
    avg = ms.mid.mean() if ms.mid is not None else None
    return [
        ("MAX", format_value(ms.hi.max_value, "°")),
        ("AVG", format_value(avg, "°")),
        ("MIN", format_value(ms.lo.min_value, "°")),
    ]


def _wind_summary(ms: MetricSeries) -> SummaryLines:
    assert ms.lo is not None
    return [
        ("MAX", format_value(ms.hi.max_value)),
        ("AVG", format_value(ms.lo.mean())),
        ("GUST", format_value(ms.peak.max_value if ms.peak is not None else None)),
    ]


def _precipitation_summary(ms: MetricSeries) -> SummaryLines:
    if ms.hi.is_empty:
        return [("TOTAL", "n/a"), ("DAYS", "n/a"), ("MAX", "n/a")]
    return [
        ("TOTAL", format_value(ms.hi.total())),
        ("DAYS", str(ms.hi.count(lambda v: v > 0.0))),
        ("MAX", format_value(ms.hi.max_value)),
    ]


METRICS = (
    Metric(
        name="TEMPERATURE",
        hi=lambda d: d.max_temp,
        lo=lambda d: d.min_temp,
        mid=lambda d: d.mean_temp,
        summarize=_temperature_summary,
        outline=Color.from_u32(0xD1495B),
        fill=Color.from_u32_with_alpha(0xD1495B, 0.35),
        mid_color=Color.from_u32(0x7A1F2B),
    ),
    Metric(
        name="WIND",
        hi=lambda d: d.max_wind,
        lo=lambda d: d.mean_wind,
        peak=lambda d: d.gust,
        summarize=_wind_summary,
        outline=Color.from_u32(0x00798C),
        fill=Color.from_u32_with_alpha(0x00798C, 0.35),
    ),
    Metric(
        name="PRECIPITATION",
        hi=lambda d: d.precipitation,
        summarize=_precipitation_summary,
        outline=Color.from_u32(0x30638E),
        fill=Color.from_u32_with_alpha(0x30638E, 0.25),
    ),
)


def chart_slots(width: float, height: float, count: int = 3) -> list[ChartSlot]:
    radius = min(width / count, height) / 2.0 * SLOT_FILL
    return [ChartSlot(cx=width * (2 * k + 1) / (2 * count), cy=height / 2.0, radius=radius) for k in range(count)]


def month_angle(year: Year, offset_days: float) -> float:
    return offset_days / year.days_in_year() * TAU - TAU / 4.0


def draw_month_wedges(ctx: Canvas, year: Year, slot: ChartSlot) -> None:
    r_in = slot.rrange.min
    r_out = slot.radius
    MONTH_FONT.set(ctx)
    for k, month in enumerate(year.months()):
        a1 = month_angle(year, (month.start - year.start).days)
        a2 = month_angle(year, (month.end - year.start).days)
        ctx.new_path()
        ctx.arc(slot.cx, slot.cy, r_out, a1, a2)
        ctx.arc_negative(slot.cx, slot.cy, r_in, a2, a1)
        ctx.close_path()
        WEDGE_SHADES[k % 2].set(ctx)
        ctx.fill()

        label = month.abbreviation
        ext = ctx.text_extents(label)
        mid = (a1 + a2) / 2.0
        ctx.save()
        ctx.translate(slot.cx, slot.cy)
        ctx.rotate(mid + TAU / 4.0)
        ctx.move_to(-ext.width / 2.0 - ext.x_bearing, -slot.radius * LABEL_RADIUS - ext.y_bearing / 2.0)
        MONTH_LABEL.set(ctx)
        ctx.show_text(label)
        ctx.restore()


def draw_scale(ctx: Canvas, slot: ChartSlot, rng: Range, scale: Scale) -> None:
    """Grid circles for each tick with labels stacked up the top seam."""
    rrange = slot.rrange
    TICK_FONT.set(ctx)
    for i, value in enumerate(scale.steps()):
        r = rrange.project(rng.normalize(value))
        ctx.new_path()
        ctx.arc(slot.cx, slot.cy, r, 0.0, TAU)
        GRID.set(ctx)
        ctx.set_line_width(1.0)
        ctx.stroke()

        label = scale.label_for(i)
        ext = ctx.text_extents(label)
        ctx.move_to(slot.cx - ext.width - ext.x_bearing - 3.0, slot.cy - r - ext.y_bearing / 2.0)
        TICK_LABEL.set(ctx)
        ctx.show_text(label)


def draw_curves(ctx: Canvas, metric: Metric, radial: Radial, ms: MetricSeries) -> None:
    if ms.lo is not None:
        radial.band(ctx, ms.hi, ms.lo, fill=metric.fill, outline=metric.outline, line_width=1.0)
    else:
        radial.stroke(ctx, ms.hi, metric.outline, line_width=1.5, fill=metric.fill)
    if ms.mid is not None:
        radial.stroke(ctx, ms.mid, metric.mid_color or metric.outline, line_width=1.5)

    if not ms.hi.is_empty:
        radial.marker(ctx, ms.hi, ms.hi.max_index, metric.outline)
    if ms.lo is not None and not ms.lo.is_empty:
        radial.marker(ctx, ms.lo, ms.lo.min_index, metric.outline)


def draw_summary(ctx: Canvas, slot: ChartSlot, title: str, lines: SummaryLines) -> None:
    rows = [title] + [f"{label} {value}" for label, value in lines]
    line_height = SUMMARY_FONT.size * 1.35
    top = slot.cy - line_height * (len(rows) - 1) / 2.0
    for i, row in enumerate(rows):
        (TITLE_FONT if i == 0 else SUMMARY_FONT).set(ctx)
        ext = ctx.text_extents(row)
        ctx.move_to(slot.cx - ext.width / 2.0 - ext.x_bearing, top + i * line_height - ext.y_bearing / 2.0)
        SUMMARY_TEXT.set(ctx)
        ctx.show_text(row)


def draw_debug(ctx: Canvas, slot: ChartSlot) -> None:
    DEBUG.set(ctx)
    ctx.set_line_width(1.0)
    ctx.new_path()
    ctx.rectangle(slot.cx - slot.radius, slot.cy - slot.radius, 2 * slot.radius, 2 * slot.radius)
    ctx.stroke()
    ctx.new_path()
    ctx.move_to(slot.cx - slot.radius, slot.cy)
    ctx.line_to(slot.cx + slot.radius, slot.cy)
    ctx.move_to(slot.cx, slot.cy - slot.radius)
    ctx.line_to(slot.cx, slot.cy + slot.radius)
    ctx.stroke()
    for r in (slot.rrange.min, slot.rrange.max):
        ctx.new_path()
        ctx.arc(slot.cx, slot.cy, r, 0.0, TAU)
        ctx.stroke()


def render_metric(
    ctx: Canvas,
    metric: Metric,
    year: Year,
    records: Sequence[DayRecord],
    slot: ChartSlot,
    config: RenderConfig,
) -> MetricSeries:
    full = metric.build(year, records)
    rng = shared_range(full.all()).widened()
    shared = full.with_range(rng)
    drawn = shared.downsample_by(config.downsample)
    scale = Scale.from_range(rng, config.tick_count)
    LOGGER.debug(
        "%s: range=[%s, %s] step=%s samples=%d",
        metric.name,
        rng.min,
        rng.max,
        scale.step,
        len(drawn.hi),
    )

    draw_month_wedges(ctx, year, slot)
    draw_scale(ctx, slot, rng, scale)
    draw_curves(ctx, metric, Radial(slot.cx, slot.cy, slot.rrange, smooth=config.smooth), drawn)
    draw_summary(ctx, slot, metric.name, metric.summarize(shared))
    if config.debug:
        draw_debug(ctx, slot)
    return shared


def render_banner(
    ctx: Canvas,
    year: Year,
    records: Iterable[DayRecord],
    config: RenderConfig,
    *,
    title: str | None = None,
) -> None:
    days = [r for r in records if r.date.year == year.ordinal()]
    LOGGER.debug("rendering %s with %d day records", year, len(days))

    BACKGROUND.set(ctx)
    ctx.new_path()
    ctx.rectangle(0.0, 0.0, float(config.width), float(config.height))
    ctx.fill()

    for metric, slot in zip(METRICS, chart_slots(config.width, config.height, len(METRICS)), strict=True):
        render_metric(ctx, metric, year, days, slot, config)

    if title:
        TITLE_FONT.set(ctx)
        ext = ctx.text_extents(title)
        ctx.move_to(12.0 - ext.x_bearing, 12.0 - ext.y_bearing)
        SUMMARY_TEXT.set(ctx)
        ctx.show_text(title)
