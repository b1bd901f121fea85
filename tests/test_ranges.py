from __future__ import annotations

import unittest

from weather_banner.ranges import Range, Unit


class RangeTests(unittest.TestCase):
    def test_normalize_and_project_are_inverse(self) -> None:
        r = Range(-12.5, 37.0)
        for v in (-12.5, 0.0, 3.3, 37.0, 80.0, -100.0):
            self.assertAlmostEqual(r.project(r.normalize(v)), v, places=9)

    def test_normalize_extrapolates(self) -> None:
        r = Range(0.0, 10.0)
        self.assertAlmostEqual(r.normalize(15.0).value, 1.5)
        self.assertAlmostEqual(r.normalize(-5.0).value, -0.5)
        self.assertAlmostEqual(r.project(Unit(0.25)), 2.5)

    def test_degenerate_range_normalizes_to_zero(self) -> None:
        r = Range(4.0, 4.0)
        self.assertTrue(r.is_degenerate)
        self.assertEqual(r.normalize(4.0), Unit.zero())
        self.assertEqual(r.normalize(100.0).value, 0.0)

    def test_intersect_is_union(self) -> None:
        a = Range(40.0, 50.0)
        b = Range(45.0, 70.0)
        self.assertEqual(Range.intersect(a, b), Range(40.0, 70.0))
        self.assertEqual(Range.intersect(b, a), Range.union(a, b))
        self.assertEqual(Range.intersect(Range(0.0, 1.0), Range(5.0, 6.0)), Range(0.0, 6.0))

    def test_widened_only_changes_flat_ranges(self) -> None:
        self.assertEqual(Range(1.0, 2.0).widened(), Range(1.0, 2.0))
        self.assertEqual(Range(0.0, 0.0).widened(), Range(-1.0, 1.0))
        self.assertEqual(Range(100.0, 100.0).widened(0.05), Range(95.0, 105.0))

    def test_inverted_is_reported(self) -> None:
        self.assertTrue(Range(2.0, 1.0).is_inverted)
        self.assertFalse(Range(1.0, 2.0).is_inverted)


if __name__ == "__main__":
    unittest.main()
