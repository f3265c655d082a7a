"""Per-series style resolution from a pad's cyclic default lists."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from plotframe.constants import DEFAULT_COLORS, DEFAULT_MARKERS, FILL_HOLLOW, LINE_SOLID
from plotframe.properties import Data, Pad, StyleDefaults


@dataclass(frozen=True)
class ResolvedStyle:
    marker_color: int
    marker_style: int
    marker_size: float
    line_color: int
    line_style: int
    line_width: float
    fill_color: int
    fill_style: int
    fill_opacity: float


def cyclic_value(values: Sequence[int] | None, index: int) -> int | None:
    if not values:
        return None
    return values[index % len(values)]


def resolve_cyclic(explicit: int | None, values: Sequence[int] | None, index: int) -> int | None:
    """Explicit value, else ``values[index mod len]``.

    A negative result ``-k`` means "the slot ``k`` steps back": it is resolved
    again from the list at ``index - k``. The series keeps its own index.
    """
    value = explicit if explicit is not None else cyclic_value(values, index)
    if value is not None and value < 0:
        return cyclic_value(values, index + value)
    return value


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def resolve_style(data: Data, pad: Pad, index: int) -> ResolvedStyle:
    """Effective marker/line/fill layout of ``data`` drawn at ``index`` in ``pad``.

    Line and fill colors without an explicit value or a pad list follow the
    resolved marker color.
    """
    markers: StyleDefaults = pad.marker_defaults
    lines: StyleDefaults = pad.line_defaults
    fills: StyleDefaults = pad.fill_defaults

    marker_color = _first(resolve_cyclic(data.marker.color, markers.colors or DEFAULT_COLORS, index), DEFAULT_COLORS[0])
    marker_style = _first(resolve_cyclic(data.marker.style, markers.styles or DEFAULT_MARKERS, index), DEFAULT_MARKERS[0])
    line_color = _first(resolve_cyclic(data.line.color, lines.colors, index), marker_color)
    line_style = _first(resolve_cyclic(data.line.style, lines.styles, index), LINE_SOLID)
    fill_color = _first(resolve_cyclic(data.fill.color, fills.colors, index), marker_color)
    fill_style = _first(resolve_cyclic(data.fill.style, fills.styles, index), FILL_HOLLOW)

    return ResolvedStyle(
        marker_color=marker_color,
        marker_style=marker_style,
        marker_size=float(_first(data.marker.scale, markers.scale, 1.0)),
        line_color=line_color,
        line_style=line_style,
        line_width=float(_first(data.line.scale, lines.scale, 1.0)),
        fill_color=fill_color,
        fill_style=fill_style,
        fill_opacity=float(_first(data.fill.scale, fills.scale, 1.0)),
    )
