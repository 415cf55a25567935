from __future__ import annotations

import unittest

import numpy as np

from framesvg.errors import InsufficientSamplesError
from framesvg.numeric.spline import cubic_spline_interpolator, frange, to_points_smooth


class SplineTests(unittest.TestCase):
    def test_output_length_is_n_times_multiplier(self) -> None:
        for n, m in [(2, 1), (2, 5), (4, 3), (9, 8)]:
            with self.subTest(n=n, m=m):
                x = np.arange(n, dtype=np.float64)
                y = np.cos(x)
                self.assertEqual(len(to_points_smooth(x, y, m)), n * m)

    def test_linear_input_stays_linear(self) -> None:
        pts = to_points_smooth([0, 1, 2, 3], [0, 1, 2, 3], 5)
        xs = np.asarray([p.x for p in pts])
        ys = np.asarray([p.y for p in pts])
        np.testing.assert_allclose(xs, ys, atol=1e-9)
        np.testing.assert_allclose(xs, np.linspace(0.0, 3.0, 20), atol=1e-9)

    def test_collinear_input_with_offset(self) -> None:
        pts = to_points_smooth([1, 3, 5, 7, 9], [2, 1, 0, -1, -2], 3)
        for p in pts:
            self.assertAlmostEqual(p.y, 2.0 - (p.x - 1.0) / 2.0, delta=1e-9)

    def test_endpoints_are_preserved(self) -> None:
        x = [0.0, 2.0, 3.0, 7.0]
        y = [1.0, -4.0, 2.5, 0.0]
        pts = to_points_smooth(x, y, 4)
        self.assertAlmostEqual(pts[0].x, 0.0, places=9)
        self.assertAlmostEqual(pts[0].y, 1.0, places=9)
        self.assertAlmostEqual(pts[-1].x, 7.0, places=9)
        self.assertAlmostEqual(pts[-1].y, 0.0, places=9)

    def test_spline_passes_through_knots(self) -> None:
        knots = np.linspace(0.0, 1.0, 5)
        values = np.asarray([0.0, 1.0, 0.0, -1.0, 0.0])
        model = cubic_spline_interpolator(knots, values)
        np.testing.assert_allclose(model.sample(5), values, atol=1e-9)

    def test_slopes_of_a_line_equal_its_gradient(self) -> None:
        model = cubic_spline_interpolator([0.0, 0.5, 1.0], [1.0, 2.0, 3.0])
        np.testing.assert_allclose(model.slopes, [2.0, 2.0, 2.0], atol=1e-12)

    def test_evaluator_scale_factor(self) -> None:
        model = cubic_spline_interpolator([0.0, 1.0], [0.0, 2.0])
        np.testing.assert_allclose(model(0.0, 0.5, 3, scale=10.0), [0.0, 10.0, 20.0], atol=1e-12)

    def test_mismatched_lengths_truncate_with_warning(self) -> None:
        with self.assertLogs("framesvg.geometry", level="WARNING") as logs:
            pts = to_points_smooth([0, 1, 2, 3, 4], [0, 1], 2)
        self.assertEqual(len(pts), 4)
        self.assertIn("5 != 2", logs.output[0])
        self.assertAlmostEqual(pts[-1].x, 1.0, places=9)

    def test_matching_lengths_do_not_warn(self) -> None:
        with self.assertNoLogs("framesvg.geometry", level="WARNING"):
            to_points_smooth([0, 1, 2], [0, 1, 4], 2)

    def test_single_sample_fails_fast(self) -> None:
        with self.assertRaises(InsufficientSamplesError):
            to_points_smooth([1.0], [2.0], 4)
        with self.assertRaises(InsufficientSamplesError):
            cubic_spline_interpolator([0.0], [1.0])

    def test_invalid_multiplier(self) -> None:
        with self.assertRaises(ValueError):
            to_points_smooth([0, 1], [0, 1], 0)
        with self.assertRaises(ValueError):
            to_points_smooth([0, 1], [0, 1], 1.5)

    def test_knots_must_increase(self) -> None:
        with self.assertRaises(ValueError):
            cubic_spline_interpolator([0.0, 0.0, 1.0], [1.0, 2.0, 3.0])

    def test_frange(self) -> None:
        self.assertEqual(list(frange(1.0, 0.5, 4)), [1.0, 1.5, 2.0, 2.5])
        self.assertEqual(list(frange(0.0, 1.0, 0)), [])


if __name__ == "__main__":
    unittest.main()
