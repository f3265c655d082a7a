from __future__ import annotations

import contextlib
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Iterator, Mapping

from plotframe.constants import BLACK, DEFAULT_COLORS, DEFAULT_MARKERS, FONT_HELVETICA_PX
from plotframe.options import DrawingOption
from plotframe.properties import AXIS_KEYS, Pad


@dataclass(frozen=True)
class StyleContext:
    """Ambient backend registers applied before a pad is drawn."""

    text_font: int = FONT_HELVETICA_PX
    text_size: float = 24.0
    text_color: int = BLACK
    label_font: int = FONT_HELVETICA_PX
    label_size: float = 22.0
    title_font: int = FONT_HELVETICA_PX
    title_size: float = 26.0
    palette: int = 57
    n_contours: int = 20
    marker_size: float = 1.0
    line_width: float = 1.0
    error_x: float = 0.0
    max_digits: int = 3
    tick_length_x: float = 0.03
    tick_length_y: float = 0.03


DEFAULT_CONTEXT = StyleContext()


@contextlib.contextmanager
def scoped_style(backend: Any, context: StyleContext) -> Iterator[StyleContext]:
    """Apply ``context`` to the backend registers and restore the previous one on exit."""
    previous = backend.current_style()
    backend.apply_style(context)
    try:
        yield context
    finally:
        backend.apply_style(previous)


@dataclass(frozen=True)
class PlotStyle:
    name: str = "default"
    num_pads: int = 1
    width: int = 710
    height: int = 710
    # top, bottom, left, right
    pad_margins: tuple[float, float, float, float] = (0.07, 0.14, 0.12, 0.07)
    pad_positions: Mapping[int, tuple[float, float, float, float]] = field(
        default_factory=lambda: {1: (0.0, 0.0, 1.0, 1.0)}
    )
    linked_axes: Mapping[tuple[str, int], frozenset[int]] = field(default_factory=dict)
    context: StyleContext = DEFAULT_CONTEXT
    thick_line_width: float = 3.0
    thick_marker_size: float = 1.6
    # x, y, z
    title_offsets: tuple[float, float, float] = (1.1, 1.4, 1.2)
    title_offsets_2d: tuple[float, float, float] = (1.1, 1.1, 1.6)
    pad_margins_2d: tuple[float, float, float, float] = (0.07, 0.14, 0.12, 0.18)
    default_hist2d_option: DrawingOption = DrawingOption.COLZ

    def link_axes(self, axis: str, pad_ids: list[int] | tuple[int, ...]) -> "PlotStyle":
        if axis not in AXIS_KEYS:
            raise ValueError(f"axis must be one of {AXIS_KEYS}, got {axis!r}")
        if not pad_ids:
            raise ValueError("pad_ids must not be empty")
        table = dict(self.linked_axes)
        table[(axis, min(pad_ids))] = frozenset(int(pad_id) for pad_id in pad_ids)
        return replace(self, linked_axes=table)

    def pad_defaults(self) -> Pad:
        """Base layer merged under every pad of a plot rendered with this style."""
        top, bottom, left, right = self.pad_margins
        pad = (
            Pad()
            .set_margins(top, bottom, left, right)
            .set_default_marker_colors(DEFAULT_COLORS)
            .set_default_marker_styles(DEFAULT_MARKERS)
            .set_default_marker_size(self.context.marker_size)
            .set_default_line_width(self.context.line_width)
            .set_default_text_size(self.context.text_size)
            .set_default_text_font(self.context.text_font)
            .set_default_text_color(self.context.text_color)
            .set_default_drawing_option_graph(DrawingOption.POINTS)
            .set_default_drawing_option_hist(DrawingOption.POINTS)
            .set_default_drawing_option_hist2d(self.default_hist2d_option)
        )
        return pad


DEFAULT_STYLE = PlotStyle()


def ratio_style() -> PlotStyle:
    """Two pads: main panel on top of a ratio panel sharing the x axis."""
    style = PlotStyle(
        name="ratio",
        num_pads=2,
        height=900,
        pad_positions={1: (0.0, 0.28, 1.0, 1.0), 2: (0.0, 0.0, 1.0, 0.28)},
    )
    return style.link_axes("X", [1, 2])


def validate_style_context(overrides: Mapping[str, Any] | None = None) -> StyleContext:
    raw: dict[str, Any] = asdict(DEFAULT_CONTEXT)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style register: {key}")
            raw[key] = value

    for key in ("text_font", "text_color", "label_font", "title_font", "palette", "n_contours", "max_digits"):
        if not isinstance(raw[key], int) or isinstance(raw[key], bool) or raw[key] < 0:
            raise ValueError(f"Register `{key}` must be a non-negative integer")

    for key in ("text_size", "label_size", "title_size", "marker_size", "line_width"):
        if not isinstance(raw[key], (int, float)) or float(raw[key]) <= 0:
            raise ValueError(f"Register `{key}` must be a positive number")

    for key in ("error_x", "tick_length_x", "tick_length_y"):
        if not isinstance(raw[key], (int, float)) or float(raw[key]) < 0:
            raise ValueError(f"Register `{key}` must be a non-negative number")

    return StyleContext(**{key: raw[key] for key in raw})


def validate_plot_style(overrides: Mapping[str, Any] | None = None) -> PlotStyle:
    """Validate and merge overrides against the default plot style."""
    raw: dict[str, Any] = {f.name: getattr(DEFAULT_STYLE, f.name) for f in fields(PlotStyle)}
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown plot style key: {key}")
            raw[key] = value

    if not isinstance(raw["name"], str) or not raw["name"].strip():
        raise ValueError("Style `name` must be a non-empty string")

    for key in ("num_pads", "width", "height"):
        if not isinstance(raw[key], int) or isinstance(raw[key], bool) or raw[key] <= 0:
            raise ValueError(f"Style `{key}` must be a positive integer")

    for key in ("pad_margins", "pad_margins_2d"):
        margins = tuple(float(v) for v in raw[key])
        if len(margins) != 4 or any(v < 0 for v in margins):
            raise ValueError(f"Style `{key}` must be four non-negative fractions")
        if margins[0] + margins[1] >= 1.0 or margins[2] + margins[3] >= 1.0:
            raise ValueError(f"Style `{key}` leaves no room for the frame")
        raw[key] = margins

    for key in ("title_offsets", "title_offsets_2d"):
        offsets = tuple(float(v) for v in raw[key])
        if len(offsets) != 3:
            raise ValueError(f"Style `{key}` must hold x, y and z offsets")
        raw[key] = offsets

    positions = {}
    for pad_id, position in dict(raw["pad_positions"]).items():
        xlow, ylow, xup, yup = (float(v) for v in position)
        if not (0.0 <= xlow < xup <= 1.0 and 0.0 <= ylow < yup <= 1.0):
            raise ValueError(f"Style pad position {pad_id} must satisfy 0 <= low < up <= 1")
        positions[int(pad_id)] = (xlow, ylow, xup, yup)
    raw["pad_positions"] = positions

    linked = {}
    for (axis, representative), pad_ids in dict(raw["linked_axes"]).items():
        if axis not in AXIS_KEYS:
            raise ValueError(f"Linked axis must be one of {AXIS_KEYS}, got {axis!r}")
        group = frozenset(int(pad_id) for pad_id in pad_ids)
        if int(representative) not in group:
            raise ValueError(f"Linked pads for {axis} must contain representative pad {representative}")
        linked[(axis, int(representative))] = group
    raw["linked_axes"] = linked

    for key in ("thick_line_width", "thick_marker_size"):
        if not isinstance(raw[key], (int, float)) or float(raw[key]) <= 0:
            raise ValueError(f"Style `{key}` must be a positive number")
        raw[key] = float(raw[key])

    context = raw["context"]
    if not isinstance(context, StyleContext):
        context = validate_style_context(context)
    raw["context"] = context

    option = raw["default_hist2d_option"]
    raw["default_hist2d_option"] = option if isinstance(option, DrawingOption) else DrawingOption(option)

    return PlotStyle(**raw)
