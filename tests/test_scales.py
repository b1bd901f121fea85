from __future__ import annotations

import unittest

from weather_banner.errors import ScaleError
from weather_banner.ranges import Range
from weather_banner.scales import Scale, format_tick


class ScaleTests(unittest.TestCase):
    def test_worked_example_picks_step_three(self) -> None:
        scale = Scale.from_range(Range(40.0, 50.0), 5)
        self.assertEqual(scale.step, 3.0)
        self.assertEqual(list(scale.steps()), [42.0, 45.0, 48.0])
        self.assertEqual(scale.labels(), ["42", "45", "48"])

    def test_ticks_strictly_inside_and_increasing(self) -> None:
        for lo, hi, lim in [(-17.3, 38.9, 5), (0.0, 1.0, 4), (0.02, 0.31, 6), (-500.0, 12000.0, 8), (3.0, 3.4, 3)]:
            scale = Scale.from_range(Range(lo, hi), lim)
            ticks = scale.steps()
            self.assertGreater(len(ticks), 0)
            for a, b in zip(ticks, ticks[1:]):
                self.assertLess(a, b)
            for t in ticks:
                self.assertGreater(t, lo)
                self.assertLess(t, hi)
            self.assertLess((hi - lo) / scale.step, lim)

    def test_max_boundary_is_excluded(self) -> None:
        scale = Scale.from_range_with_step(Range(0.0, 10.0), 2.0)
        self.assertEqual(list(scale.steps()), [2.0, 4.0, 6.0, 8.0])

    def test_min_boundary_is_excluded(self) -> None:
        scale = Scale.from_range_with_step(Range(-4.0, 5.0), 2.0)
        self.assertEqual(list(scale.steps()), [-2.0, 0.0, 2.0, 4.0])

    def test_fractional_labels_follow_step_magnitude(self) -> None:
        scale = Scale.from_range(Range(0.0, 1.0), 4)
        self.assertAlmostEqual(scale.step, 0.3)
        self.assertEqual(scale.labels(), ["0.3", "0.6", "0.9"])
        self.assertEqual(format_tick(0.05, step=0.05), "0.05")
        self.assertEqual(format_tick(-0.0000001, step=0.1), "0.0")

    def test_no_candidate_is_an_error(self) -> None:
        with self.assertRaises(ScaleError):
            Scale.from_range(Range(0.0, 99.0), 1)

    def test_unusable_ranges_are_errors(self) -> None:
        with self.assertRaises(ScaleError):
            Scale.from_range(Range(5.0, 5.0), 5)
        with self.assertRaises(ScaleError):
            Scale.from_range(Range(5.0, 1.0), 5)
        with self.assertRaises(ScaleError):
            Scale.from_range(Range(0.0, float("inf")), 5)
        with self.assertRaises(ScaleError):
            Scale.from_range_with_step(Range(0.0, 1.0), 0.0)


if __name__ == "__main__":
    unittest.main()
