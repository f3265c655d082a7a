from __future__ import annotations

import unittest

import numpy as np

from plotframe import Function1D, Graph, Histogram, Histogram2D, PlotDataError
from plotframe.datasets import (
    NO_CUT,
    cut_graph,
    cut_histogram,
    divide_graphs,
    divide_histograms,
    normalize_histogram,
)


def _hist(contents, edges=None, errors=None, name="h") -> Histogram:
    if edges is None:
        edges = np.arange(len(contents) + 1, dtype=float)
    return Histogram(name, edges, contents, errors)


class HistogramTests(unittest.TestCase):
    def test_find_bin_uses_underflow_and_overflow(self) -> None:
        hist = _hist([1, 2, 3, 4])
        self.assertEqual(hist.find_bin(-1.0), -1)
        self.assertEqual(hist.find_bin(0.0), 0)
        self.assertEqual(hist.find_bin(2.5), 2)
        self.assertEqual(hist.find_bin(4.0), 4)

    def test_errors_default_to_poisson(self) -> None:
        hist = _hist([4, 9])
        np.testing.assert_allclose(hist.errors, [2.0, 3.0])
        self.assertEqual(hist.entries, 13)

    def test_statistics(self) -> None:
        hist = _hist([1, 3], edges=[0.0, 2.0, 4.0])
        self.assertAlmostEqual(hist.integral(), 4.0)
        self.assertAlmostEqual(hist.integral(width=True), 8.0)
        self.assertAlmostEqual(hist.mean(), 2.5)
        self.assertEqual((hist.maximum(), hist.minimum()), (3.0, 1.0))

    def test_mismatched_edges_raise(self) -> None:
        with self.assertRaises(PlotDataError):
            _hist([1, 2, 3], edges=[0, 1, 2])
        with self.assertRaises(PlotDataError):
            _hist([1, 2], edges=[0, 2, 1])
        with self.assertRaises(PlotDataError):
            Histogram2D("h2", [0, 1, 2], [[1, 2]], y_edges=[0, 1, 2])


class CutTests(unittest.TestCase):
    def test_cut_histogram_zeroes_both_sides(self) -> None:
        hist = cut_histogram(_hist([1, 2, 3, 4]), high=2.5, low=0.5)
        np.testing.assert_allclose(hist.contents, [0, 2, 0, 0])
        np.testing.assert_allclose(hist.errors, [0, np.sqrt(2), 0, 0])

    def test_disabled_side_is_left_untouched(self) -> None:
        hist = cut_histogram(_hist([1, 2, 3, 4]), high=NO_CUT, low=1.5)
        np.testing.assert_allclose(hist.contents, [0, 0, 3, 4])
        hist = cut_histogram(_hist([1, 2, 3, 4]), high=1.5, low=NO_CUT)
        np.testing.assert_allclose(hist.contents, [1, 0, 0, 0])

    def test_cut_histogram_is_idempotent(self) -> None:
        once = cut_histogram(_hist([1, 2, 3, 4, 5]), high=3.2, low=0.7)
        twice = cut_histogram(cut_histogram(_hist([1, 2, 3, 4, 5]), high=3.2, low=0.7), high=3.2, low=0.7)
        np.testing.assert_array_equal(once.contents, twice.contents)
        np.testing.assert_array_equal(once.errors, twice.errors)

    def test_cut_2d_histogram_acts_on_x(self) -> None:
        hist = Histogram2D("h2", [0, 1, 2, 3], np.ones((3, 2)), y_edges=[0, 1, 2])
        cut_histogram(hist, high=2.5)
        np.testing.assert_allclose(hist.contents, [[1, 1], [1, 1], [0, 0]])

    def test_cut_graph_removes_points_beyond_bounds(self) -> None:
        graph = cut_graph(Graph("g", [0, 1, 2, 3, 4], [5, 6, 7, 8, 9]), high=2.5, low=0.5)
        np.testing.assert_allclose(graph.x, [1, 2])
        np.testing.assert_allclose(graph.y, [6, 7])

    def test_cut_graph_keeps_relative_order(self) -> None:
        graph = cut_graph(Graph("g", [3, 0, 2, 1], [1, 2, 3, 4]), high=2.5)
        np.testing.assert_allclose(graph.x, [0, 2, 1])
        self.assertEqual(graph.n_points, 3)


class NormalizeTests(unittest.TestCase):
    def test_normalize_divides_by_integral(self) -> None:
        hist = normalize_histogram(_hist([1, 3]))
        np.testing.assert_allclose(hist.contents, [0.25, 0.75])

    def test_normalize_with_width(self) -> None:
        hist = normalize_histogram(_hist([1, 3], edges=[0.0, 2.0, 4.0]), use_width=True)
        np.testing.assert_allclose(hist.contents, [0.125, 0.375])

    def test_empty_histogram_is_left_alone(self) -> None:
        hist = normalize_histogram(_hist([0, 0]))
        np.testing.assert_allclose(hist.contents, [0, 0])


class DivideTests(unittest.TestCase):
    def test_identical_histograms_give_flat_ratio(self) -> None:
        ratio = divide_histograms(_hist([2, 0, 4]), _hist([2, 0, 4]))
        np.testing.assert_allclose(ratio.contents, [1, 0, 1])
        self.assertTrue(np.all(np.isfinite(ratio.errors)))

    def test_uncorrelated_errors_add_in_quadrature(self) -> None:
        ratio = divide_histograms(_hist([4.0], errors=[2.0]), _hist([4.0], errors=[2.0]))
        self.assertAlmostEqual(ratio.errors[0], np.sqrt(0.5))

    def test_correlated_errors_are_binomial(self) -> None:
        ratio = divide_histograms(_hist([4.0], errors=[2.0]), _hist([4.0], errors=[2.0]), correlated=True)
        self.assertAlmostEqual(ratio.errors[0], 0.0)

    def test_different_binning_interpolates_denominator(self) -> None:
        num = _hist([2, 4], edges=[0, 1, 2])
        den = _hist([1, 1, 2, 2], edges=[0, 0.5, 1, 1.5, 2])
        ratio = divide_histograms(num, den)
        np.testing.assert_allclose(ratio.contents, [2, 2])

    def test_2d_shape_mismatch_raises(self) -> None:
        a = Histogram2D("a", [0, 1, 2], np.ones((2, 2)), y_edges=[0, 1, 2])
        b = Histogram2D("b", [0, 1, 2, 3], np.ones((3, 2)), y_edges=[0, 1, 2])
        with self.assertRaises(PlotDataError):
            divide_histograms(a, b)
        with self.assertRaises(PlotDataError):
            divide_histograms(_hist([1, 1]), a)

    def test_graph_ratio_interpolates_denominator(self) -> None:
        num = Graph("n", [0, 1, 2], [2, 4, 6], ey=[1, 1, 1])
        den = Graph("d", [2, 0], [3, 1])
        ratio = divide_graphs(num, den)
        np.testing.assert_allclose(ratio.y, [2, 2, 2])
        np.testing.assert_allclose(ratio.ey, [1, 0.5, 1 / 3])

    def test_graph_over_function(self) -> None:
        num = Graph("n", [1, 2], [2, 4])
        ratio = divide_graphs(num, Function1D("f", lambda x: 2 * x, 0, 5))
        np.testing.assert_allclose(ratio.y, [1, 1])


class FunctionTests(unittest.TestCase):
    def test_constant_function_broadcasts(self) -> None:
        func = Function1D("one", lambda x: 1.0, 0.0, 2.0, n_samples=5)
        xs, ys = func.samples()
        self.assertEqual(xs.shape, ys.shape)
        np.testing.assert_allclose(ys, 1.0)
        self.assertAlmostEqual(func.integral(), 2.0)

    def test_invalid_range_raises(self) -> None:
        with self.assertRaises(PlotDataError):
            Function1D("f", np.sin, 1.0, 1.0)


if __name__ == "__main__":
    unittest.main()
