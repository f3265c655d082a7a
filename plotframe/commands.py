"""Translate resolved series configuration into ordered backend draw directives."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace

import numpy as np

from plotframe.constants import BLACK, FILL_HOLLOW, FILL_SOLID, LINE_SOLID
from plotframe.datasets import (
    NO_CUT,
    Dataset,
    Function1D,
    Graph,
    Histogram,
    Histogram2D,
    cut_graph,
    cut_histogram,
    divide_graphs,
    divide_histograms,
    normalize_histogram,
)
from plotframe.defaults import ResolvedStyle, resolve_style
from plotframe.errors import PlotConfigError, PlotDataError
from plotframe.options import FILLED_COLOR_MAPS, add_token, has_token, option_string, remove_token
from plotframe.properties import Data, DataKind, NormMode, Pad
from plotframe.style import PlotStyle

LOGGER = logging.getLogger(__name__)

BOXES_ERROR_X = 0.48
FILLED_MAP_CONTOURS = 256
RATIO_VIEW = (49.5, 230.0)
REFERENCE_LINE_WIDTH = 2.0


@dataclass(frozen=True)
class DrawDirective:
    """One backend draw call; ``z`` is the position in the pad's draw sequence."""

    handle: Dataset
    option: str
    z: int
    style: ResolvedStyle
    name: str = ""
    role: str = "data"
    error_x: float | None = None
    contours: int | None = None
    view: tuple[float, float] | None = None
    y_range: tuple[float | None, float | None] | None = None
    defines_frame: bool = False


@dataclass(frozen=True)
class LegendHint:
    handle: Dataset
    label: str
    draw_style: str
    ref_name: str
    legend_id: int
    style: ResolvedStyle


@dataclass(frozen=True)
class SeriesCursor:
    """Draw position within a pad: style index and directive count."""

    index: int = 0
    z: int = 0

    @property
    def first_in_pad(self) -> bool:
        return self.z == 0


@dataclass(frozen=True)
class SeriesBuild:
    directives: tuple[DrawDirective, ...]
    legend: LegendHint | None
    cursor: SeriesCursor


def _load(datasets: Mapping[str, Dataset], key: str, expected: tuple[type, ...]) -> Dataset:
    handle = datasets.get(key)
    if handle is None:
        raise PlotDataError(f"data '{key}' not found")
    if not isinstance(handle, expected):
        names = ", ".join(t.__name__ for t in expected)
        raise PlotDataError(f"data '{key}' is a {type(handle).__name__}, expected {names}")
    return handle.copy()


def _cut_bounds(data: Data) -> tuple[float, float]:
    high = data.range_x.max if data.range_x.max is not None else NO_CUT
    low = data.range_x.min if data.range_x.min is not None else NO_CUT
    return high, low


def _y_range(data: Data) -> tuple[float | None, float | None] | None:
    if not data.range_y.is_set():
        return None
    return (data.range_y.min, data.range_y.max)


def _base_option(data: Data, pad: Pad, handle: Dataset) -> str:
    if data.drawing_options is not None:
        return data.drawing_options
    if data.drawing_option_alias is not None:
        return option_string(data.drawing_option_alias)
    defaults = pad.drawing_option_defaults
    if isinstance(handle, Histogram2D):
        return ""
    alias = defaults.hist if isinstance(handle, Histogram) else defaults.graph
    return option_string(alias) if alias is not None else ""


def _hist2d_option(pad: Pad, style: PlotStyle):
    return pad.drawing_option_defaults.hist2d or style.default_hist2d_option


def _x_extent(handle: Dataset) -> tuple[float, float]:
    if isinstance(handle, Histogram):
        return float(handle.edges[0]), float(handle.edges[-1])
    if isinstance(handle, Graph):
        if handle.n_points == 0:
            return 0.0, 1.0
        return float(np.min(handle.x)), float(np.max(handle.x))
    return float(handle.xmin), float(handle.xmax)


class _Modified:
    """Option string and style of one series while modifiers are applied."""

    def __init__(self, option: str, style: ResolvedStyle) -> None:
        self.option = option
        self.style = style
        self.error_x: float | None = None
        self.contours: int | None = None

    def thick(self, plot_style: PlotStyle) -> None:
        if has_token(self.option, "thick"):
            self.option = remove_token(self.option, "thick")
            self.style = replace(
                self.style,
                line_width=plot_style.thick_line_width,
                marker_size=plot_style.thick_marker_size,
            )

    def no_line(self) -> None:
        if has_token(self.option, "none"):
            self.option = remove_token(self.option, "none")
            self.style = replace(self.style, line_width=0.0)

    def fill_modes(self) -> None:
        if has_token(self.option, "hist"):
            return
        if has_token(self.option, "band"):
            self.option = add_token(remove_token(self.option, "band"), "e5")
            self.style = replace(
                self.style,
                marker_size=0.0,
                fill_color=self.style.marker_color,
                fill_style=FILL_SOLID,
            )
        elif has_token(self.option, "boxes"):
            self.boxes()

    def boxes(self) -> None:
        if has_token(self.option, "boxes"):
            self.option = add_token(remove_token(self.option, "boxes"), "e2")
            self.style = replace(self.style, fill_style=FILL_HOLLOW)
            self.error_x = BOXES_ERROR_X


def _directive(
    handle: Dataset,
    modified: _Modified,
    data: Data,
    cursor: SeriesCursor,
    **extra,
) -> DrawDirective:
    option = modified.option
    if not cursor.first_in_pad:
        option = add_token(option, "same")
    return DrawDirective(
        handle=handle,
        option=option,
        z=cursor.z,
        style=modified.style,
        name=data.unique_name,
        error_x=modified.error_x,
        contours=modified.contours,
        y_range=_y_range(data),
        defines_frame=bool(data.defines_frame),
        **extra,
    )


def _legend_hint(data: Data, handle: Dataset, option: str, style: ResolvedStyle) -> LegendHint | None:
    if not data.legend.label:
        return None
    draw_style = "l" if isinstance(handle, Function1D) or has_token(option, "hist") else "ep"
    return LegendHint(
        handle=handle,
        label=data.legend.label,
        draw_style=draw_style,
        ref_name=data.unique_name,
        legend_id=data.legend.identifier or 1,
        style=style,
    )


def _modify(handle: Dataset, data: Data) -> None:
    if data.modify.scale_factor is not None and not isinstance(handle, Function1D):
        handle.scale(data.modify.scale_factor)
    if data.modify.norm_mode is not None and isinstance(handle, Histogram):
        normalize_histogram(handle, use_width=data.modify.norm_mode is NormMode.WIDTH)


def _build_histogram(
    data: Data, pad: Pad, plot_style: PlotStyle, handle: Histogram, cursor: SeriesCursor
) -> SeriesBuild:
    high, low = _cut_bounds(data)
    cut_histogram(handle, high, low)
    _modify(handle, data)

    modified = _Modified(_base_option(data, pad, handle), resolve_style(data, pad, cursor.index))
    modified.thick(plot_style)
    if isinstance(handle, Histogram2D):
        alias = _hist2d_option(pad, plot_style)
        modified.option = add_token(modified.option, option_string(alias))
        if alias in FILLED_COLOR_MAPS:
            modified.contours = FILLED_MAP_CONTOURS
    modified.no_line()
    modified.fill_modes()

    directive = _directive(handle, modified, data, cursor)
    return SeriesBuild(
        directives=(directive,),
        legend=_legend_hint(data, handle, directive.option, modified.style),
        cursor=replace(cursor, index=cursor.index + 1, z=cursor.z + 1),
    )


def _build_graph(data: Data, pad: Pad, plot_style: PlotStyle, handle: Graph, cursor: SeriesCursor) -> SeriesBuild:
    high, low = _cut_bounds(data)
    cut_graph(handle, high, low)
    _modify(handle, data)

    modified = _Modified(_base_option(data, pad, handle), resolve_style(data, pad, cursor.index))
    modified.thick(plot_style)
    modified.no_line()
    modified.boxes()
    if cursor.first_in_pad:
        modified.option = add_token(modified.option, "ap")

    directive = _directive(handle, modified, data, cursor)
    return SeriesBuild(
        directives=(directive,),
        legend=_legend_hint(data, handle, directive.option, modified.style),
        cursor=replace(cursor, index=cursor.index + 1, z=cursor.z + 1),
    )


def _build_function(
    data: Data, pad: Pad, plot_style: PlotStyle, handle: Function1D, cursor: SeriesCursor
) -> SeriesBuild:
    option = data.drawing_options
    if option is None:
        option = option_string(data.drawing_option_alias) if data.drawing_option_alias else "l"
    modified = _Modified(option, resolve_style(data, pad, cursor.index))
    modified.thick(plot_style)
    modified.no_line()

    directive = _directive(handle, modified, data, cursor)
    return SeriesBuild(
        directives=(directive,),
        legend=_legend_hint(data, handle, directive.option, modified.style),
        cursor=replace(cursor, index=cursor.index + 1, z=cursor.z + 1),
    )


def reference_line(value: float, xmin: float, xmax: float, name: str = "reference") -> Function1D:
    return Function1D(name, lambda x: np.full_like(x, value, dtype=np.float64), xmin, xmax, n_samples=2)


def _reference_style() -> ResolvedStyle:
    return ResolvedStyle(
        marker_color=BLACK,
        marker_style=1,
        marker_size=0.0,
        line_color=BLACK,
        line_style=LINE_SOLID,
        line_width=REFERENCE_LINE_WIDTH,
        fill_color=BLACK,
        fill_style=FILL_HOLLOW,
        fill_opacity=1.0,
    )


def _build_ratio(
    data: Data,
    pad: Pad,
    plot_style: PlotStyle,
    datasets: Mapping[str, Dataset],
    cursor: SeriesCursor,
) -> SeriesBuild:
    if data.ratio is None:
        raise PlotConfigError(f"ratio '{data.name}' has no denominator")
    numerator = _load(datasets, data.unique_name, (Histogram, Graph))
    if isinstance(numerator, Histogram):
        denominator = _load(datasets, data.ratio.denominator_unique_name, (Histogram,))
        handle = divide_histograms(numerator, denominator, correlated=bool(data.ratio.is_correlated))
        high, low = _cut_bounds(data)
        cut_histogram(handle, high, low)
    else:
        denominator = _load(datasets, data.ratio.denominator_unique_name, (Graph, Function1D))
        handle = divide_graphs(numerator, denominator)
        high, low = _cut_bounds(data)
        cut_graph(handle, high, low)
    handle.title = ""

    directives: list[DrawDirective] = []
    view = None
    if isinstance(handle, Histogram2D):
        view = RATIO_VIEW
    elif cursor.first_in_pad:
        LOGGER.debug("ratio '%s' opens the ratio frame", data.unique_name)
        xmin, xmax = _x_extent(handle)
        axis_style = replace(_reference_style(), line_width=0.0, line_color=0)
        directives.append(
            DrawDirective(handle=handle, option="axis", z=cursor.z, style=axis_style, name="ratio_frame", role="axis")
        )
        directives.append(
            DrawDirective(
                handle=reference_line(1.0, xmin, xmax, name="ratio_reference"),
                option="l same",
                z=cursor.z + 1,
                style=_reference_style(),
                name="ratio_reference",
                role="reference",
            )
        )
        cursor = replace(cursor, index=cursor.index + 1, z=cursor.z + 2)

    modified = _Modified(_base_option(data, pad, handle), resolve_style(data, pad, cursor.index))
    modified.thick(plot_style)
    if isinstance(handle, Histogram2D):
        alias = _hist2d_option(pad, plot_style)
        modified.option = add_token(modified.option, option_string(alias))
        if alias in FILLED_COLOR_MAPS:
            modified.contours = FILLED_MAP_CONTOURS
    modified.no_line()
    if isinstance(handle, Graph):
        modified.boxes()
    else:
        modified.fill_modes()
    if isinstance(handle, Graph) and cursor.first_in_pad:
        modified.option = add_token(modified.option, "ap")

    directive = _directive(handle, modified, data, cursor, view=view)
    directives.append(directive)
    return SeriesBuild(
        directives=tuple(directives),
        legend=_legend_hint(data, handle, directive.option, modified.style),
        cursor=replace(cursor, index=cursor.index + 1, z=cursor.z + 1),
    )


def build_series(
    data: Data,
    pad: Pad,
    plot_style: PlotStyle,
    datasets: Mapping[str, Dataset],
    cursor: SeriesCursor,
) -> SeriesBuild:
    """Directives for one series drawn at ``cursor``.

    Raises PlotDataError when backing data is missing or of the wrong kind and
    PlotConfigError for an unrecognized data kind; the cursor only advances on
    success.
    """
    if data.kind is DataKind.RATIO:
        return _build_ratio(data, pad, plot_style, datasets, cursor)
    if data.kind is not DataKind.PLAIN:
        raise PlotConfigError(f"no representation for data kind {data.kind!r} of '{data.name}'")

    handle = _load(datasets, data.unique_name, (Histogram, Graph, Function1D))
    if isinstance(handle, Histogram):
        return _build_histogram(data, pad, plot_style, handle, cursor)
    if isinstance(handle, Graph):
        return _build_graph(data, pad, plot_style, handle, cursor)
    return _build_function(data, pad, plot_style, handle, cursor)


def build_ref_func(pad: Pad, frame_handle: Dataset, cursor: SeriesCursor) -> SeriesBuild:
    """Horizontal line at the pad's constant reference value across the frame."""
    try:
        value = float(pad.ref_func)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise PlotConfigError(f"reference function '{pad.ref_func}' is not a constant") from exc
    xmin, xmax = _x_extent(frame_handle)
    directive = DrawDirective(
        handle=reference_line(value, xmin, xmax, name="pad_reference"),
        option="l same",
        z=cursor.z,
        style=_reference_style(),
        name="pad_reference",
        role="reference",
    )
    return SeriesBuild((directive,), None, replace(cursor, z=cursor.z + 1))


def build_axis_redraw(frame_handle: Dataset, cursor: SeriesCursor) -> SeriesBuild:
    directive = DrawDirective(
        handle=frame_handle,
        option="axis same",
        z=cursor.z,
        style=replace(_reference_style(), line_width=0.0),
        name="axis_redraw",
        role="axis",
    )
    return SeriesBuild((directive,), None, replace(cursor, z=cursor.z + 1))
