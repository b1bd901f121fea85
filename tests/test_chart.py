from __future__ import annotations

from datetime import date, timedelta
import unittest

from weather_banner.api import render_banner
from weather_banner.canvas import RecordingCanvas
from weather_banner.chart import (
    METRICS,
    ChartSlot,
    chart_slots,
    draw_month_wedges,
    render_metric,
    shared_range,
)
from weather_banner.config import RenderConfig
from weather_banner.periods import Year
from weather_banner.ranges import Range
from weather_banner.records import DayRecord
from weather_banner.series import Series


def _records(year: int, days: int = 365) -> list[DayRecord]:
    start = date(year, 1, 1)
    out = []
    for i in range(days):
        t = 10.0 + 15.0 * ((i % 73) / 73.0)
        out.append(
            DayRecord(
                date=start + timedelta(days=i),
                mean_temp=t,
                max_temp=t + 6.0,
                min_temp=t - 6.0,
                mean_wind=5.0 + (i % 5),
                max_wind=12.0 + (i % 7),
                gust=20.0 + (i % 11),
                precipitation=0.0 if i % 3 else 0.4,
            )
        )
    return out


class LayoutTests(unittest.TestCase):
    def test_three_slots_share_a_radius(self) -> None:
        slots = chart_slots(1600, 600)
        self.assertEqual(len(slots), 3)
        self.assertEqual(len({s.radius for s in slots}), 1)
        self.assertEqual([s.cy for s in slots], [300.0] * 3)
        self.assertLess(slots[0].cx, slots[1].cx)
        self.assertLess(slots[1].cx, slots[2].cx)
        self.assertLess(slots[0].rrange.min, slots[0].rrange.max)

    def test_shared_range_skips_empty_series(self) -> None:
        a = Series.from_values([1.0, 5.0])
        b = Series.from_values([-2.0, 3.0])
        with self.assertLogs("weather_banner.series", level="WARNING"):
            empty = Series.from_values([None, None])
        self.assertEqual(shared_range([a, b, empty]), Range(-2.0, 5.0))
        self.assertEqual(shared_range([empty]), Range(0.0, 0.0))

    def test_month_wedges_are_labeled(self) -> None:
        ctx = RecordingCanvas()
        draw_month_wedges(ctx, Year.from_ordinal(2023), ChartSlot(100.0, 100.0, 80.0))
        labels = [c.args[0] for c in ctx.calls_named("show_text")]
        self.assertEqual(labels[0], "JAN")
        self.assertEqual(labels[-1], "DEC")
        self.assertEqual(len(labels), 12)
        self.assertEqual(len(ctx.calls_named("fill")), 12)


class RenderMetricTests(unittest.TestCase):
    def setUp(self) -> None:
        self.year = Year.from_ordinal(2023)
        self.records = _records(2023)
        self.slot = ChartSlot(300.0, 300.0, 250.0)

    def test_emission_order(self) -> None:
        ctx = RecordingCanvas()
        render_metric(ctx, METRICS[0], self.year, self.records, self.slot, RenderConfig())
        names = ctx.names()
        first_curve = names.index("curve_to")
        last_curve = len(names) - 1 - names[::-1].index("curve_to")
        texts = [(i, c.args[0]) for i, c in enumerate(ctx.calls) if c.name == "show_text"]
        before = [t for i, t in texts if i < first_curve]
        after = [t for i, t in texts if i > last_curve]
        # Month labels, then tick labels, then curves, then the summary.
        self.assertEqual(before[:12], ["JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"])
        self.assertGreater(len(before), 12)
        self.assertEqual(after[0], "TEMPERATURE")
        self.assertEqual([t.split()[0] for t in after[1:]], ["MAX", "AVG", "MIN"])
        self.assertFalse(any(first_curve < i < last_curve for i, _ in texts))

    def test_shared_range_spans_max_and_min(self) -> None:
        ctx = RecordingCanvas()
        shared = render_metric(ctx, METRICS[0], self.year, self.records, self.slot, RenderConfig())
        self.assertEqual(shared.hi.range, shared.lo.range)
        self.assertEqual(shared.hi.range.min, min(r.min_temp for r in self.records))
        self.assertEqual(shared.hi.range.max, max(r.max_temp for r in self.records))

    def test_downsample_draws_fewer_spans_but_keeps_summary(self) -> None:
        full = RecordingCanvas()
        render_metric(full, METRICS[0], self.year, self.records, self.slot, RenderConfig())
        coarse = RecordingCanvas()
        render_metric(coarse, METRICS[0], self.year, self.records, self.slot, RenderConfig(downsample=5))
        self.assertEqual(len(full.calls_named("curve_to")), 3 * 365)
        self.assertEqual(len(coarse.calls_named("curve_to")), 3 * 73)

        def summary(ctx: RecordingCanvas) -> list[str]:
            texts = [c.args[0] for c in ctx.calls_named("show_text")]
            return texts[texts.index("TEMPERATURE") :]

        self.assertEqual(summary(full), summary(coarse))

    def test_unsmoothed_curves_use_lines(self) -> None:
        ctx = RecordingCanvas()
        render_metric(ctx, METRICS[2], self.year, self.records, self.slot, RenderConfig(smooth=False))
        self.assertNotIn("curve_to", ctx.names())
        texts = [c.args[0] for c in ctx.calls_named("show_text")]
        self.assertIn("DAYS 122", texts)

    def test_missing_metric_renders_flat(self) -> None:
        records = [DayRecord(date=r.date, max_temp=r.max_temp, min_temp=r.min_temp) for r in self.records]
        ctx = RecordingCanvas()
        with self.assertLogs("weather_banner.series", level="WARNING"):
            render_metric(ctx, METRICS[2], self.year, records, self.slot, RenderConfig())
        texts = [c.args[0] for c in ctx.calls_named("show_text")]
        self.assertIn("TOTAL n/a", texts)
        self.assertIn("DAYS n/a", texts)
        self.assertIn("MAX n/a", texts)

    def test_dry_year_summary_reports_observed_extremes(self) -> None:
        records = [DayRecord(date=r.date, precipitation=0.0) for r in self.records]
        ctx = RecordingCanvas()
        render_metric(ctx, METRICS[2], self.year, records, self.slot, RenderConfig())
        texts = [c.args[0] for c in ctx.calls_named("show_text")]
        summary = texts[texts.index("PRECIPITATION") + 1 :]
        self.assertEqual(summary, ["TOTAL 0.0", "DAYS 0", "MAX 0.0"])

    def test_constant_temperature_summary_ignores_widened_range(self) -> None:
        records = [DayRecord(date=r.date, mean_temp=20.0, max_temp=20.0, min_temp=20.0) for r in self.records]
        ctx = RecordingCanvas()
        shared = render_metric(ctx, METRICS[0], self.year, records, self.slot, RenderConfig())
        self.assertLess(shared.hi.range.min, 20.0)
        self.assertGreater(shared.hi.range.max, 20.0)
        texts = [c.args[0] for c in ctx.calls_named("show_text")]
        summary = texts[texts.index("TEMPERATURE") + 1 :]
        self.assertEqual(summary, ["MAX 20.0°", "AVG 20.0°", "MIN 20.0°"])

    def test_wind_summary_reports_peak_gust(self) -> None:
        records = [
            DayRecord(date=r.date, mean_wind=r.mean_wind, max_wind=r.max_wind, gust=35.0 if i == 40 else 25.0)
            for i, r in enumerate(self.records)
        ]
        ctx = RecordingCanvas()
        shared = render_metric(ctx, METRICS[1], self.year, records, self.slot, RenderConfig(downsample=5))
        texts = [c.args[0] for c in ctx.calls_named("show_text")]
        summary = texts[texts.index("WIND") + 1 :]
        self.assertEqual([t.split()[0] for t in summary], ["MAX", "AVG", "GUST"])
        self.assertEqual(summary[2], "GUST 35.0")
        # Gusts are summarized but never drawn, so they stay out of the chart range.
        self.assertEqual(shared.hi.range.max, max(r.max_wind for r in records))

    def test_wind_without_gusts_reports_missing_gust(self) -> None:
        records = [DayRecord(date=r.date, mean_wind=r.mean_wind, max_wind=r.max_wind) for r in self.records]
        ctx = RecordingCanvas()
        with self.assertLogs("weather_banner.series", level="WARNING"):
            render_metric(ctx, METRICS[1], self.year, records, self.slot, RenderConfig())
        texts = [c.args[0] for c in ctx.calls_named("show_text")]
        self.assertIn("GUST n/a", texts)

    def test_debug_overlay_adds_guides(self) -> None:
        plain = RecordingCanvas()
        render_metric(plain, METRICS[1], self.year, self.records, self.slot, RenderConfig())
        debug = RecordingCanvas()
        render_metric(debug, METRICS[1], self.year, self.records, self.slot, RenderConfig(debug=True))
        self.assertGreater(len(debug.calls), len(plain.calls))
        self.assertEqual(len(debug.calls_named("rectangle")), len(plain.calls_named("rectangle")) + 1)


class RenderBannerTests(unittest.TestCase):
    def test_banner_renders_three_charts_and_title(self) -> None:
        ctx = RecordingCanvas()
        records = _records(2023) + _records(2022, 30)
        render_banner(ctx, 2023, records, RenderConfig(), title="PITTSBURGH 2023")
        texts = [c.args[0] for c in ctx.calls_named("show_text")]
        for name in ("TEMPERATURE", "WIND", "PRECIPITATION"):
            self.assertIn(name, texts)
        self.assertEqual(texts[-1], "PITTSBURGH 2023")
        self.assertEqual(ctx.calls[1], ctx.calls_named("new_path")[0])
        self.assertEqual(ctx.calls_named("rectangle")[0].args, (0.0, 0.0, 1600.0, 600.0))


if __name__ == "__main__":
    unittest.main()
