"""Legend and text box geometry.

Legends are sized from measured label extents and, when no position is set,
placed in the largest-free-area search offered by the backend. The search is
fenced off from the tick and label bands along each frame edge. When nothing
fits, the box goes to the upper-left corner of the frame and a warning is
logged. Text boxes use a character-count estimate and are never searched.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from plotframe.backend.base import Backend, LegendPlacement, LegendRow, Rect, TextPlacement
from plotframe.commands import LegendHint
from plotframe.constants import FONT_HELVETICA_PX, NAME_GROUP_SEPARATOR
from plotframe.datasets import Dataset
from plotframe.merge import merge
from plotframe.properties import BoxProperties, Layout, LegendBox, LegendEntry, TextBox

LOGGER = logging.getLogger(__name__)

DEFAULT_TEXT_SIZE_PX = 24.0
DEFAULT_TEXT_FONT = FONT_HELVETICA_PX
MARKER_PLACEHOLDER = "AAA"
TICK_MARGIN_FRACTION = 0.9
TEXT_DELIMITER = " // "
CHAR_WIDTH_FRACTION = 0.6


def substitute_tokens(label: str, handle) -> str:
    """Replace ``<name>``, ``<title>``, ``<entries>`` and the statistics tokens from ``handle``."""
    if handle is None or "<" not in label:
        return label
    out = label
    if "<name>" in out:
        out = out.replace("<name>", handle.name.split(NAME_GROUP_SEPARATOR)[0])
    if "<title>" in out:
        out = out.replace("<title>", handle.title or "")
    if "<entries>" in out:
        out = out.replace("<entries>", str(int(handle.entries)))
    for token, getter in (
        ("<integral>", handle.integral),
        ("<mean>", handle.mean),
        ("<maximum>", handle.maximum),
        ("<minimum>", handle.minimum),
    ):
        if token in out:
            out = out.replace(token, f"{getter():.6f}")
    return out


def _hint_entry(hint: LegendHint) -> LegendEntry:
    style = hint.style
    return LegendEntry(
        label=hint.label,
        ref_data_name=hint.ref_name,
        draw_style=hint.draw_style,
        marker=Layout(style.marker_color, style.marker_style, style.marker_size),
        line=Layout(style.line_color, style.line_style, style.line_width),
        fill=Layout(style.fill_color, style.fill_style, style.fill_opacity),
    )


def assemble_entries(legend: LegendBox, hints: Sequence[LegendHint]) -> list[LegendEntry]:
    """Entries for one render: drawn series, then box defaults, then user overrides.

    User entries are matched to drawn series by reference name; a field the
    override leaves unset keeps the generated value. Unmatched user entries
    are appended in id order.
    """
    return [entry for entry, _ in _entries_with_handles(legend, hints)]


def _entries_with_handles(
    legend: LegendBox, hints: Sequence[LegendHint]
) -> list[tuple[LegendEntry, Dataset | None]]:
    box_defaults = LegendEntry(
        draw_style=legend.draw_style_default,
        marker=legend.marker_default,
        line=legend.line_default,
        fill=legend.fill_default,
        text=legend.box.text,
    )
    overrides = dict(sorted(legend.user_entries.items()))
    entries = []
    for hint in hints:
        entry = merge(_hint_entry(hint), box_defaults)
        for entry_id, user in list(overrides.items()):
            if user.ref_data_name is not None and user.ref_data_name == hint.ref_name:
                entry = merge(entry, user)
                del overrides[entry_id]
                break
        entries.append((entry, hint.handle))
    for user in overrides.values():
        entries.append((merge(box_defaults, user), None))
    return entries


@dataclass(frozen=True)
class LegendSize:
    width: float
    height: float
    marker_width: float
    row_height: float
    num_rows: int


def measure_legend(
    labels: Sequence[str],
    title: str | None,
    num_columns: int,
    font: int,
    size: float,
    backend: Backend,
) -> LegendSize:
    pad_w, pad_h = backend.pad_pixel_size()
    row_h_px = 0
    column_w_px = [0] * num_columns
    for i, label in enumerate(labels):
        w, h = backend.text_size(label, font, size)
        row_h_px = max(row_h_px, h)
        column_w_px[i % num_columns] = max(column_w_px[i % num_columns], w)
    title_w_px = 0
    if title:
        title_w_px, h = backend.text_size(title, font, size)
        row_h_px = max(row_h_px, h)
    marker_w_px, _ = backend.text_size(MARKER_PLACEHOLDER, font, size)

    entries_w = sum(column_w_px) / pad_w
    row_h = row_h_px / pad_h
    marker_w = marker_w_px / pad_w
    n = len(labels) + (1 if title else 0)

    height = (n + 0.5 * (n + 1)) * row_h / num_columns
    width = (num_columns + 1.0 / 3.0) * marker_w + entries_w
    if title_w_px > sum(column_w_px):
        width = marker_w / 3.0 + title_w_px / pad_w
    num_rows = math.ceil(len(labels) / num_columns) + (1 if title else 0)
    return LegendSize(width=width, height=height, marker_width=marker_w, row_height=row_h, num_rows=num_rows)


def _margins(backend: Backend, frame: Rect) -> tuple[float, float, float, float]:
    """Tick band thickness and box margin along x and y, in pad NDC."""
    context = backend.current_style()
    band_x = context.tick_length_y * frame.width
    band_y = context.tick_length_x * frame.height
    return band_x, band_y, TICK_MARGIN_FRACTION * band_x, TICK_MARGIN_FRACTION * band_y


def corner_position(backend: Backend) -> tuple[float, float]:
    """Upper-left corner just inside the frame, inset by the margin plus a tick length."""
    frame = backend.frame_rect()
    _, _, mx, my = _margins(backend, frame)
    inset = 1.0 + 1.0 / TICK_MARGIN_FRACTION
    return frame.x0 + inset * mx, frame.y1 - inset * my


def auto_place(width: float, height: float, backend: Backend) -> tuple[float, float, bool]:
    """Upper-left corner for a ``width`` x ``height`` box and whether the fallback was used."""
    frame = backend.frame_rect()
    band_x, band_y, mx, my = _margins(backend, frame)
    bands = (
        Rect(0.0, 0.0, 1.0, frame.y0 + band_y),
        Rect(0.0, frame.y1 - band_y, 1.0, 1.0),
        Rect(0.0, 0.0, frame.x0 + band_x, 1.0),
        Rect(frame.x1 - band_x, 0.0, 1.0, 1.0),
    )
    tokens = []
    try:
        for band in bands:
            tokens.append(backend.add_exclusion(band))
        found = backend.place_box(width + 2 * mx, height + 2 * my)
    finally:
        for token in tokens:
            backend.remove_exclusion(token)
    if found is None:
        LOGGER.warning("could not find enough space to place box of %.3f x %.3f, using frame corner", width, height)
        x, y = corner_position(backend)
        return x, y, True
    lx, ly = found
    return lx + mx, ly + my + height, False


def _explicit_position(box: BoxProperties, backend: Backend) -> tuple[float, float]:
    x, y = box.position.x, box.position.y
    if box.is_user_coordinates:
        return backend.user_to_ndc(x, y)
    return x, y


def place_legend(legend: LegendBox, hints: Sequence[LegendHint], backend: Backend) -> LegendPlacement | None:
    paired = _entries_with_handles(legend, hints)
    entries = [entry for entry, _ in paired]
    legend.entries = entries
    if not entries and not legend.title:
        LOGGER.debug("legend without entries skipped")
        return None

    font = legend.box.text.style if legend.box.text.style is not None else DEFAULT_TEXT_FONT
    size = legend.box.text.scale if legend.box.text.scale is not None else DEFAULT_TEXT_SIZE_PX
    num_columns = legend.num_columns or 1

    rows = []
    for entry, handle in paired:
        rows.append(
            LegendRow(
                handle=handle,
                label=substitute_tokens(entry.label or "", handle),
                draw_style=entry.draw_style or "ep",
                marker=entry.marker,
                line=entry.line,
                fill=entry.fill,
                text=entry.text,
            )
        )
    measured = measure_legend([row.label for row in rows], legend.title, num_columns, font, size, backend)

    fallback = False
    if legend.box.is_auto_placement:
        x, y, fallback = auto_place(measured.width, measured.height, backend)
    else:
        x, y = _explicit_position(legend.box, backend)

    rows_height = 0.5 * measured.height / max(measured.num_rows, 1)
    return LegendPlacement(
        rect=Rect(x, y - measured.height, x + measured.width, y),
        rows=tuple(rows),
        title=legend.title,
        num_columns=num_columns,
        text_font=font,
        text_size=size,
        margin=measured.marker_width * num_columns / measured.width if measured.width else 0.0,
        entry_separation=1.0 - 0.5 * measured.row_height / rows_height if rows_height else 0.0,
        border=legend.box.border,
        fill=legend.box.fill,
        fallback=fallback,
    )


def split_lines(text: str) -> list[str]:
    return text.split(TEXT_DELIMITER)


def place_text(box: TextBox, backend: Backend) -> TextPlacement:
    lines = split_lines(box.text or "")
    size = box.box.text.scale if box.box.text.scale is not None else DEFAULT_TEXT_SIZE_PX
    pad_w, pad_h = backend.pad_pixel_size()
    n = len(lines)
    height = (n + 0.5 * (n - 1)) * size / pad_h
    width = max(len(line) for line in lines) * CHAR_WIDTH_FRACTION * size / pad_w

    if box.box.is_auto_placement:
        x, y = corner_position(backend)
    else:
        x, y = _explicit_position(box.box, backend)
    text_layout = Layout(
        box.box.text.color,
        box.box.text.style if box.box.text.style is not None else DEFAULT_TEXT_FONT,
        size,
    )
    return TextPlacement(
        rect=Rect(x, y - height, x + width, y),
        lines=tuple(lines),
        text=text_layout,
        border=box.box.border,
        fill=box.box.fill,
    )
