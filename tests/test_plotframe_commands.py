from __future__ import annotations

import unittest

import numpy as np

from plotframe import Function1D, Graph, Histogram, Histogram2D, PlotConfigError, PlotDataError
from plotframe.commands import (
    BOXES_ERROR_X,
    FILLED_MAP_CONTOURS,
    RATIO_VIEW,
    SeriesCursor,
    build_axis_redraw,
    build_ref_func,
    build_series,
)
from plotframe.constants import BLACK, BLUE, FILL_HOLLOW, FILL_SOLID, RED
from plotframe.merge import merge
from plotframe.options import DrawingOption, has_token
from plotframe.properties import Pad
from plotframe.style import DEFAULT_STYLE


def _pad() -> Pad:
    return merge(DEFAULT_STYLE.pad_defaults(), Pad().set_default_marker_colors([RED, BLUE]))


def _pool() -> dict:
    return {
        "a_IN_in": Histogram("a", [0, 1, 2, 3, 4], [1, 2, 3, 4]),
        "b_IN_in": Histogram("b", [0, 1, 2, 3, 4], [2, 2, 2, 2]),
        "map_IN_in": Histogram2D("map", [0, 1, 2], np.ones((2, 2)), y_edges=[0, 1, 2]),
        "map2_IN_in": Histogram2D("map2", [0, 1, 2], np.full((2, 2), 2.0), y_edges=[0, 1, 2]),
        "g_IN_in": Graph("g", [0, 1, 2], [1, 2, 3]),
        "f_IN_in": Function1D("f", np.sqrt, 0, 4),
    }


class HistogramCommandTests(unittest.TestCase):
    def test_default_option_and_same_for_later_series(self) -> None:
        pad = _pad()
        pool = _pool()
        first = build_series(pad.add_data("a", "in"), pad, DEFAULT_STYLE, pool, SeriesCursor())
        second = build_series(pad.add_data("b", "in"), pad, DEFAULT_STYLE, pool, first.cursor)

        self.assertEqual(first.directives[0].option, "ex0")
        self.assertEqual(second.directives[0].option, "ex0 same")
        self.assertEqual(second.directives[0].z, 1)
        self.assertEqual(second.cursor.index, 2)
        self.assertEqual(second.directives[0].style.marker_color, BLUE)

    def test_range_cuts_a_copy_of_the_dataset(self) -> None:
        pad = _pad()
        pool = _pool()
        data = pad.add_data("a", "in").set_range_x(0.5, 2.5)
        built = build_series(data, pad, DEFAULT_STYLE, pool, SeriesCursor())

        np.testing.assert_allclose(built.directives[0].handle.contents, [0, 2, 0, 0])
        np.testing.assert_allclose(pool["a_IN_in"].contents, [1, 2, 3, 4])

    def test_scale_and_normalize(self) -> None:
        pad = _pad()
        data = pad.add_data("b", "in").set_scale_factor(3.0).set_normalize()
        built = build_series(data, pad, DEFAULT_STYLE, _pool(), SeriesCursor())
        np.testing.assert_allclose(built.directives[0].handle.contents, [0.25] * 4)

    def test_band_hides_markers_and_fills(self) -> None:
        pad = _pad()
        data = pad.add_data("a", "in").set_options(DrawingOption.BAND)
        directive = build_series(data, pad, DEFAULT_STYLE, _pool(), SeriesCursor()).directives[0]

        self.assertTrue(has_token(directive.option, "e5"))
        self.assertFalse(has_token(directive.option, "band"))
        self.assertEqual(directive.style.marker_size, 0.0)
        self.assertEqual(directive.style.fill_style, FILL_SOLID)
        self.assertEqual(directive.style.fill_color, RED)

    def test_boxes_widen_error_bars_for_one_draw(self) -> None:
        pad = _pad()
        data = pad.add_data("a", "in").set_options("boxes")
        directive = build_series(data, pad, DEFAULT_STYLE, _pool(), SeriesCursor()).directives[0]

        self.assertEqual(directive.option, "e2")
        self.assertEqual(directive.error_x, BOXES_ERROR_X)
        self.assertEqual(directive.style.fill_style, FILL_HOLLOW)

    def test_hist_wins_over_band_and_draws_legend_as_line(self) -> None:
        pad = _pad()
        data = pad.add_data("a", "in", "A").set_options("hist band")
        built = build_series(data, pad, DEFAULT_STYLE, _pool(), SeriesCursor())

        self.assertTrue(has_token(built.directives[0].option, "band"))
        self.assertEqual(built.legend.draw_style, "l")
        self.assertEqual(built.legend.ref_name, "a_IN_in")

    def test_none_and_thick_modifiers(self) -> None:
        pad = _pad()
        thin = build_series(pad.add_data("a", "in").set_options("ex0 none"), pad, DEFAULT_STYLE, _pool(), SeriesCursor())
        thick = build_series(pad.add_data("a", "in").set_options("ex0 thick"), pad, DEFAULT_STYLE, _pool(), SeriesCursor())

        self.assertEqual(thin.directives[0].style.line_width, 0.0)
        self.assertEqual(thin.directives[0].option, "ex0")
        self.assertEqual(thick.directives[0].style.line_width, DEFAULT_STYLE.thick_line_width)
        self.assertEqual(thick.directives[0].style.marker_size, DEFAULT_STYLE.thick_marker_size)

    def test_2d_histogram_gets_color_map_and_contours(self) -> None:
        pad = _pad()
        directive = build_series(pad.add_data("map", "in"), pad, DEFAULT_STYLE, _pool(), SeriesCursor()).directives[0]
        self.assertTrue(has_token(directive.option, "colz"))
        self.assertEqual(directive.contours, FILLED_MAP_CONTOURS)

    def test_labelless_series_has_no_legend_hint(self) -> None:
        pad = _pad()
        built = build_series(pad.add_data("a", "in"), pad, DEFAULT_STYLE, _pool(), SeriesCursor())
        self.assertIsNone(built.legend)


class RatioCommandTests(unittest.TestCase):
    def test_first_ratio_draws_frame_and_reference_line(self) -> None:
        pad = _pad()
        data = pad.add_ratio("a", "in", "a", "in")
        built = build_series(data, pad, DEFAULT_STYLE, _pool(), SeriesCursor())

        self.assertEqual([d.role for d in built.directives], ["axis", "reference", "data"])
        reference = built.directives[1]
        self.assertIsInstance(reference.handle, Function1D)
        np.testing.assert_allclose(reference.handle.samples()[1], 1.0)
        self.assertEqual(reference.style.line_color, BLACK)
        self.assertEqual(reference.style.line_width, 2.0)

        series = built.directives[2]
        np.testing.assert_allclose(series.handle.contents, [1, 1, 1, 1])
        self.assertTrue(has_token(series.option, "same"))
        self.assertEqual(series.style.marker_color, BLUE)
        self.assertEqual(built.cursor.index, 2)
        self.assertEqual(built.cursor.z, 3)

    def test_second_ratio_has_no_reference(self) -> None:
        pad = _pad()
        pool = _pool()
        first = build_series(pad.add_ratio("a", "in", "b", "in"), pad, DEFAULT_STYLE, pool, SeriesCursor())
        second = build_series(pad.add_ratio("b", "in", "a", "in"), pad, DEFAULT_STYLE, pool, first.cursor)

        self.assertEqual(len(second.directives), 1)
        self.assertEqual(second.directives[0].style.marker_color, RED)

    def test_ratio_after_plain_series_keeps_existing_drawing(self) -> None:
        pad = _pad()
        pool = _pool()
        plain = build_series(pad.add_data("a", "in", "A"), pad, DEFAULT_STYLE, pool, SeriesCursor())
        ratio = build_series(pad.add_ratio("a", "in", "b", "in", "A/B"), pad, DEFAULT_STYLE, pool, plain.cursor)

        self.assertEqual([d.role for d in ratio.directives], ["data"])
        self.assertEqual(ratio.directives[0].option, "ex0 same")
        self.assertEqual(ratio.directives[0].style.marker_color, BLUE)
        self.assertEqual(ratio.cursor.index, 2)

    def test_ratio_is_cut_after_division(self) -> None:
        pad = _pad()
        data = pad.add_ratio("a", "in", "b", "in").set_max_range_x(2.5)
        series = build_series(data, pad, DEFAULT_STYLE, _pool(), SeriesCursor()).directives[-1]
        np.testing.assert_allclose(series.handle.contents, [0.5, 1.0, 0, 0])

    def test_2d_ratio_sets_view_instead_of_reference(self) -> None:
        pad = _pad()
        built = build_series(pad.add_ratio("map", "in", "map2", "in"), pad, DEFAULT_STYLE, _pool(), SeriesCursor())

        self.assertEqual(len(built.directives), 1)
        self.assertEqual(built.directives[0].view, RATIO_VIEW)
        np.testing.assert_allclose(built.directives[0].handle.contents, 0.5)
        self.assertTrue(has_token(built.directives[0].option, "colz"))
        self.assertEqual(built.directives[0].contours, FILLED_MAP_CONTOURS)

    def test_missing_denominator_raises(self) -> None:
        pad = _pad()
        with self.assertRaises(PlotDataError):
            build_series(pad.add_ratio("a", "in", "nope", "in"), pad, DEFAULT_STYLE, _pool(), SeriesCursor())
        with self.assertRaises(PlotDataError):
            build_series(pad.add_ratio("a", "in", "g", "in"), pad, DEFAULT_STYLE, _pool(), SeriesCursor())


class GraphAndFunctionCommandTests(unittest.TestCase):
    def test_first_graph_requests_axis(self) -> None:
        pad = _pad()
        pool = _pool()
        first = build_series(pad.add_data("g", "in"), pad, DEFAULT_STYLE, pool, SeriesCursor())
        second = build_series(pad.add_data("g", "in"), pad, DEFAULT_STYLE, pool, first.cursor)

        self.assertTrue(has_token(first.directives[0].option, "ap"))
        self.assertFalse(has_token(second.directives[0].option, "ap"))
        self.assertTrue(has_token(second.directives[0].option, "same"))

    def test_graph_cut_trims_points(self) -> None:
        pad = _pad()
        data = pad.add_data("g", "in").set_range_x(0.5, 1.5)
        directive = build_series(data, pad, DEFAULT_STYLE, _pool(), SeriesCursor()).directives[0]
        np.testing.assert_allclose(directive.handle.x, [1])

    def test_function_draws_as_line(self) -> None:
        pad = _pad()
        built = build_series(pad.add_data("f", "in", "fit"), pad, DEFAULT_STYLE, _pool(), SeriesCursor())
        self.assertEqual(built.directives[0].option, "l")
        self.assertEqual(built.legend.draw_style, "l")

    def test_missing_data_raises(self) -> None:
        pad = _pad()
        with self.assertRaises(PlotDataError):
            build_series(pad.add_data("nope", "in"), pad, DEFAULT_STYLE, _pool(), SeriesCursor())

    def test_reference_function_and_axis_redraw(self) -> None:
        pad = _pad().set_ref_func("0.5")
        frame = _pool()["a_IN_in"]
        built = build_ref_func(pad, frame, SeriesCursor(z=3))
        self.assertEqual(built.directives[0].z, 3)
        np.testing.assert_allclose(built.directives[0].handle.samples()[1], 0.5)
        self.assertEqual(built.directives[0].handle.xmax, 4.0)

        redraw = build_axis_redraw(frame, built.cursor)
        self.assertEqual(redraw.directives[0].option, "axis same")
        self.assertEqual(redraw.directives[0].z, 4)

        with self.assertRaises(PlotConfigError):
            build_ref_func(_pad().set_ref_func("[0]*x"), frame, SeriesCursor())


if __name__ == "__main__":
    unittest.main()
