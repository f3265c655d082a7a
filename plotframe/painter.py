from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from plotframe.axis_link import AxisLinker
from plotframe.backend.base import Backend, PadSpec
from plotframe.commands import (
    DrawDirective,
    LegendHint,
    SeriesCursor,
    build_axis_redraw,
    build_ref_func,
    build_series,
)
from plotframe.datasets import Dataset
from plotframe.errors import PlotConfigError, PlotDataError
from plotframe.layout import place_legend, place_text
from plotframe.merge import merge
from plotframe.properties import LegendBox, Pad, Plot
from plotframe.style import PlotStyle, StyleContext, scoped_style

LOGGER = logging.getLogger(__name__)


def generate_plot(plot: Plot, style: PlotStyle, datasets: Mapping[str, Dataset], backend: Backend) -> Any | None:
    """Render ``plot`` with ``style`` onto ``backend``.

    Returns whatever ``backend.finish_canvas()`` returns, or None when the plot
    needs more pads than the style provides. Series whose data is missing or
    unusable are logged and skipped.
    """
    if plot.num_required_pads > style.num_pads:
        LOGGER.error(
            "plot '%s' needs %d pads but style '%s' provides %d",
            plot.unique_name,
            plot.num_required_pads,
            style.name,
            style.num_pads,
        )
        return None

    width = plot.dimensions.width or style.width
    height = plot.dimensions.height or style.height
    backend.create_canvas(plot.unique_name, width, height, plot.fill.color, plot.fill.style)

    base = merge(style.pad_defaults(), plot.pads.get(0))
    pads = {pad_id: merge(base, plot.pads.get(pad_id)) for pad_id in range(1, style.num_pads + 1)}
    linker = AxisLinker(style, pads)
    for pad_id in sorted(pads):
        pad = pads[pad_id]
        with scoped_style(backend, _pad_context(style.context, pad)) as context:
            _draw_pad(pad_id, pad, style, context, datasets, backend, linker)
    return backend.finish_canvas()


def _pad_context(context: StyleContext, pad: Pad) -> StyleContext:
    overrides: dict[str, Any] = {}
    if pad.text.size is not None:
        overrides["text_size"] = pad.text.size
    if pad.text.font is not None:
        overrides["text_font"] = pad.text.font
    if pad.text.color is not None:
        overrides["text_color"] = pad.text.color
    if pad.palette is not None:
        overrides["palette"] = pad.palette
    return replace(context, **overrides)


def _pad_spec(pad_id: int, pad: Pad, style: PlotStyle) -> PadSpec:
    position = style.pad_positions.get(pad_id, (0.0, 0.0, 1.0, 1.0))
    p = pad.position
    if None not in (p.xlow, p.ylow, p.xup, p.yup):
        position = (p.xlow, p.ylow, p.xup, p.yup)
    defaults = style.pad_margins
    m = pad.margins
    margins = tuple(
        value if value is not None else default
        for value, default in zip((m.top, m.bottom, m.left, m.right), defaults)
    )
    return PadSpec(
        pad_id=pad_id,
        position=position,
        margins=margins,
        title=pad.title,
        fill_color=pad.fill.color,
        fill_style=pad.fill.style,
        frame=pad.frame,
        palette=pad.palette,
    )


def _draw(backend: Backend, context: StyleContext, directive: DrawDirective) -> None:
    overrides: dict[str, Any] = {}
    if directive.error_x is not None:
        overrides["error_x"] = directive.error_x
    if directive.contours is not None:
        overrides["n_contours"] = directive.contours
    if not overrides:
        backend.draw(directive)
        return
    with scoped_style(backend, replace(context, **overrides)):
        backend.draw(directive)


def _route_hints(legends: list[LegendBox], hints: list[LegendHint], pad_id: int) -> list[list[LegendHint]]:
    routed: list[list[LegendHint]] = [[] for _ in legends]
    for hint in hints:
        slot = hint.legend_id - 1
        if 0 <= slot < len(routed):
            routed[slot].append(hint)
        else:
            LOGGER.debug("pad %d has no legend %d for '%s'", pad_id, hint.legend_id, hint.ref_name)
    return routed


def _draw_pad(
    pad_id: int,
    pad: Pad,
    style: PlotStyle,
    context: StyleContext,
    datasets: Mapping[str, Dataset],
    backend: Backend,
    linker: AxisLinker,
) -> None:
    backend.create_pad(_pad_spec(pad_id, pad, style))

    cursor = SeriesCursor()
    hints: list[LegendHint] = []
    first_handle = None
    frame_handle = None
    for data in pad.data:
        try:
            built = build_series(data, pad, style, datasets, cursor)
        except (PlotDataError, PlotConfigError) as exc:
            LOGGER.error("skipping series '%s' in pad %d: %s", data.unique_name, pad_id, exc)
            continue
        for directive in built.directives:
            _draw(backend, context, directive)
        cursor = built.cursor
        main = built.directives[-1]
        if first_handle is None:
            first_handle = main.handle
        if frame_handle is None and main.defines_frame:
            frame_handle = main.handle
        if built.legend is not None:
            hints.append(built.legend)
    if frame_handle is None:
        frame_handle = first_handle

    if pad.ref_func and frame_handle is not None:
        try:
            built = build_ref_func(pad, frame_handle, cursor)
        except PlotConfigError as exc:
            LOGGER.error("skipping reference function of pad %d: %s", pad_id, exc)
        else:
            _draw(backend, context, built.directives[0])
            cursor = built.cursor
    if pad.redraw_axes and frame_handle is not None:
        built = build_axis_redraw(frame_handle, cursor)
        _draw(backend, context, built.directives[0])
        cursor = built.cursor

    legends = pad.legends()
    routed = _route_hints(legends, hints, pad_id)
    slots = {id(box): i for i, box in enumerate(legends)}
    for box in pad.boxes:
        if isinstance(box, LegendBox):
            placement = place_legend(box, routed[slots[id(box)]], backend)
            if placement is not None:
                backend.draw_legend(placement)
        else:
            backend.draw_text(place_text(box, backend))

    backend.configure_frame(linker.finalize_frame(pad_id, pad, frame_handle))
