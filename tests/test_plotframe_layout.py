from __future__ import annotations

import unittest

from plotframe import Histogram
from plotframe.backend.base import UNIT_RECT, Rect
from plotframe.backend.recording import RecordingBackend
from plotframe.backend.base import PadSpec
from plotframe.commands import LegendHint
from plotframe.constants import BLUE, GREEN, RED
from plotframe.defaults import ResolvedStyle
from plotframe.layout import (
    TICK_MARGIN_FRACTION,
    assemble_entries,
    auto_place,
    measure_legend,
    place_legend,
    place_text,
    substitute_tokens,
)
from plotframe.properties import LegendBox, TextBox
from plotframe.style import DEFAULT_CONTEXT


class _StubBackend:
    """Fixed metrics: every text is 100x20 px on a 1000x1000 px pad."""

    def __init__(self, free=(0.5, 0.5)) -> None:
        self.free = free
        self.exclusions: dict[int, Rect] = {}
        self.added = 0
        self.requests: list[tuple[float, float]] = []

    def text_size(self, text, font, size):
        return (100, 20)

    def pad_pixel_size(self):
        return (1000, 1000)

    def frame_rect(self):
        return Rect(0.1, 0.1, 0.9, 0.9)

    def current_style(self):
        return DEFAULT_CONTEXT

    def user_to_ndc(self, x, y):
        return (x / 10.0, y / 10.0)

    def add_exclusion(self, rect):
        self.added += 1
        self.exclusions[self.added] = rect
        return self.added

    def remove_exclusion(self, token):
        del self.exclusions[token]

    def place_box(self, width, height):
        self.requests.append((width, height))
        return self.free


def _style(color: int) -> ResolvedStyle:
    return ResolvedStyle(color, 20, 1.0, color, 1, 1.0, color, 0, 1.0)


def _hint(label: str, ref: str, color: int = RED, draw_style: str = "ep", legend_id: int = 1) -> LegendHint:
    handle = Histogram(ref.split("_IN_")[0], [0, 1, 2, 3], [1, 2, 3], title="spectrum")
    return LegendHint(handle, label, draw_style, ref, legend_id, _style(color))


class LegendSizeTests(unittest.TestCase):
    def test_three_rows_are_five_row_heights_tall(self) -> None:
        size = measure_legend(["a", "b", "c"], None, 1, 43, 24, _StubBackend())
        self.assertAlmostEqual(size.height, 5 * 0.02)
        self.assertAlmostEqual(size.width, (1 + 1 / 3) * 0.1 + 0.1)
        self.assertEqual(size.num_rows, 3)

    def test_size_grows_with_entries_and_columns(self) -> None:
        backend = _StubBackend()
        three = measure_legend(["a", "b", "c"], None, 1, 43, 24, backend)
        four = measure_legend(["a", "b", "c", "d"], None, 1, 43, 24, backend)
        two_columns = measure_legend(["a", "b", "c", "d"], None, 2, 43, 24, backend)

        self.assertGreaterEqual(four.height, three.height)
        self.assertGreaterEqual(four.width, three.width)
        self.assertGreater(two_columns.width, four.width)
        self.assertEqual(two_columns.num_rows, 2)

    def test_wide_title_drives_width(self) -> None:
        class WideTitle(_StubBackend):
            def text_size(self, text, font, size):
                return (600, 20) if text == "title" else (100, 20)

        size = measure_legend(["a"], "title", 1, 43, 24, WideTitle())
        self.assertAlmostEqual(size.width, 0.1 / 3 + 0.6)
        self.assertAlmostEqual(size.height, (2 + 1.5) * 0.02)


class PlacementTests(unittest.TestCase):
    def test_found_position_is_inset_by_margin(self) -> None:
        backend = _StubBackend(free=(0.5, 0.4))
        x, y, fallback = auto_place(0.2, 0.1, backend)

        mx = TICK_MARGIN_FRACTION * 0.03 * 0.8
        self.assertFalse(fallback)
        self.assertAlmostEqual(x, 0.5 + mx)
        self.assertAlmostEqual(y, 0.4 + mx + 0.1)
        self.assertAlmostEqual(backend.requests[0][0], 0.2 + 2 * mx)
        self.assertEqual(backend.exclusions, {})
        self.assertEqual(backend.added, 4)

    def test_fallback_uses_frame_corner_and_warns(self) -> None:
        backend = _StubBackend(free=None)
        with self.assertLogs("plotframe.layout", level="WARNING"):
            x, y, fallback = auto_place(0.2, 0.1, backend)

        mx = TICK_MARGIN_FRACTION * 0.03 * 0.8
        inset = (1 + 1 / TICK_MARGIN_FRACTION) * mx
        self.assertTrue(fallback)
        self.assertAlmostEqual(x, 0.1 + inset)
        self.assertAlmostEqual(y, 0.9 - inset)
        self.assertEqual(backend.exclusions, {})

    def test_recording_backend_finds_space_on_empty_pad(self) -> None:
        backend = RecordingBackend()
        backend.create_canvas("c", 800, 600, None, None)
        backend.create_pad(PadSpec(1, (0, 0, 1, 1), (0.05, 0.1, 0.1, 0.05)))

        x, y, fallback = auto_place(0.3, 0.2, backend)

        self.assertFalse(fallback)
        self.assertGreater(x, 0.0)
        self.assertLessEqual(y, 1.0)

    def test_recording_backend_falls_back_when_pad_is_covered(self) -> None:
        backend = RecordingBackend()
        backend.create_canvas("c", 800, 600, None, None)
        backend.create_pad(PadSpec(1, (0, 0, 1, 1), (0.05, 0.1, 0.1, 0.05)))
        token = backend.add_exclusion(UNIT_RECT)

        self.assertIsNone(backend.place_box(0.1, 0.1))
        with self.assertLogs("plotframe.layout", level="WARNING"):
            _, _, fallback = auto_place(0.1, 0.1, backend)
        self.assertTrue(fallback)
        backend.remove_exclusion(token)
        self.assertIsNotNone(backend.place_box(0.1, 0.1))


class LegendEntryTests(unittest.TestCase):
    def test_tokens_are_substituted_from_the_dataset(self) -> None:
        handle = Histogram("pt", [0, 1, 2], [1, 3], title="spectrum")
        self.assertEqual(substitute_tokens("<name>: <title> (<entries>)", handle), "pt: spectrum (4)")
        self.assertEqual(substitute_tokens("<mean>", handle), "1.250000")
        self.assertEqual(substitute_tokens("max <maximum>", handle), "max 3.000000")
        self.assertEqual(substitute_tokens("plain", None), "plain")

    def test_user_override_wins_and_missing_fields_inherit(self) -> None:
        legend = LegendBox()
        legend.entry(1).set_ref_data("b", "in").set_label("renamed").set_line_color(GREEN)
        legend.entry(2).set_label("extra")
        entries = assemble_entries(legend, [_hint("A", "a_IN_in", RED), _hint("B", "b_IN_in", BLUE)])

        self.assertEqual([e.label for e in entries], ["A", "renamed", "extra"])
        self.assertEqual(entries[1].line.color, GREEN)
        self.assertEqual(entries[1].marker.color, BLUE)
        self.assertEqual(entries[1].draw_style, "ep")

    def test_box_defaults_apply_to_generated_entries(self) -> None:
        legend = LegendBox().set_default_draw_style("l").set_default_line_width(3.0)
        entries = assemble_entries(legend, [_hint("A", "a_IN_in")])
        self.assertEqual(entries[0].draw_style, "l")
        self.assertEqual(entries[0].line.scale, 3.0)
        self.assertEqual(entries[0].line.color, RED)

    def test_integer_generated_width_accepts_float_override(self) -> None:
        legend = LegendBox()
        legend.entry(1).set_ref_data("a", "in").set_line_width(2.0)
        style = ResolvedStyle(RED, 20, 1, RED, 1, 3, RED, 0, 1)
        hint = LegendHint(Histogram("a", [0, 1], [1]), "A", "ep", "a_IN_in", 1, style)

        entries = assemble_entries(legend, [hint])

        self.assertEqual(entries[0].line.scale, 2.0)
        self.assertEqual(entries[0].marker.scale, 1)

    def test_series_sharing_a_dataset_keep_their_own_statistics(self) -> None:
        low = Histogram("a", [0, 1, 2], [1, 2])
        high = Histogram("a", [0, 1, 2], [5, 7])
        hints = [
            LegendHint(low, "<maximum>", "ep", "a_IN_in", 1, _style(RED)),
            LegendHint(high, "<maximum>", "ep", "a_IN_in", 1, _style(BLUE)),
        ]

        placement = place_legend(LegendBox(), hints, _StubBackend())

        self.assertEqual([row.label for row in placement.rows], ["2.000000", "7.000000"])
        self.assertIs(placement.rows[1].handle, high)

    def test_place_legend_builds_rows(self) -> None:
        legend = LegendBox().set_title("runs")
        placement = place_legend(legend, [_hint("<name>", "a_IN_in"), _hint("B", "b_IN_in")], _StubBackend())

        self.assertEqual([row.label for row in placement.rows], ["a", "B"])
        self.assertEqual(placement.title, "runs")
        self.assertAlmostEqual(placement.rect.height, (3 + 2) * 0.02)
        self.assertEqual(len(legend.entries), 2)

    def test_empty_legend_is_skipped(self) -> None:
        self.assertIsNone(place_legend(LegendBox(), [], _StubBackend()))

    def test_explicit_user_coordinates_are_converted(self) -> None:
        legend = LegendBox().set_position(5.0, 8.0).set_user_coordinates()
        backend = _StubBackend()
        placement = place_legend(legend, [_hint("A", "a_IN_in")], backend)
        self.assertAlmostEqual(placement.rect.x0, 0.5)
        self.assertAlmostEqual(placement.rect.y1, 0.8)
        self.assertEqual(backend.requests, [])


class TextBoxTests(unittest.TestCase):
    def test_text_box_is_sized_from_lines(self) -> None:
        placement = place_text(TextBox(text="a // bcd").set_position(0.2, 0.9), _StubBackend())
        self.assertEqual(placement.lines, ("a", "bcd"))
        self.assertAlmostEqual(placement.rect.height, 2.5 * 24 / 1000)
        self.assertAlmostEqual(placement.rect.width, 3 * 0.6 * 24 / 1000)
        self.assertAlmostEqual(placement.rect.y1, 0.9)

    def test_text_box_without_position_goes_to_corner(self) -> None:
        backend = _StubBackend()
        placement = place_text(TextBox(text="ALICE"), backend)
        mx = TICK_MARGIN_FRACTION * 0.03 * 0.8
        self.assertAlmostEqual(placement.rect.x0, 0.1 + (1 + 1 / TICK_MARGIN_FRACTION) * mx)
        self.assertEqual(backend.requests, [])


if __name__ == "__main__":
    unittest.main()
