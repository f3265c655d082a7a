"""Headless backend that records what would be drawn.

Besides recording, it answers the geometry queries of the layout engine: text
extents come from Pillow font metrics, the data transform from the frame
object's limits, and free-space search runs on a coarse occupancy grid of the
pad in which drawn curves, boxes and exclusion rectangles are marked.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Hashable

import numpy as np

from plotframe.backend.base import LegendPlacement, PadSpec, Rect, TextPlacement
from plotframe.backend.fonts import font_size_px, text_size
from plotframe.backend.transform import DataLimits, build_transform, handle_points, limits_for, map_to_ndc
from plotframe.datasets import Dataset, Histogram2D
from plotframe.style import DEFAULT_CONTEXT, StyleContext

LOGGER = logging.getLogger(__name__)

GRID_SIZE = 100


@dataclass
class DrawRecord:
    directive: Any
    context: StyleContext


@dataclass
class PadRecord:
    spec: PadSpec
    draws: list[DrawRecord] = field(default_factory=list)
    legends: list[LegendPlacement] = field(default_factory=list)
    texts: list[TextPlacement] = field(default_factory=list)
    frame_handle: Dataset | None = None
    frame_y_range: tuple[float | None, float | None] | None = None
    frame: Any = None

    @property
    def options(self) -> list[str]:
        return [record.directive.option for record in self.draws]


@dataclass
class CanvasRecord:
    name: str
    width: int
    height: int
    fill_color: int | None = None
    fill_style: int | None = None
    pads: list[PadRecord] = field(default_factory=list)

    def pad(self, pad_id: int) -> PadRecord:
        for record in self.pads:
            if record.spec.pad_id == pad_id:
                return record
        raise KeyError(pad_id)


class RecordingBackend:
    def __init__(self, grid_size: int = GRID_SIZE) -> None:
        if grid_size < 2:
            raise ValueError("grid_size must be >= 2")
        self.grid_size = grid_size
        self.canvases: list[CanvasRecord] = []
        self.style_history: list[StyleContext] = []
        self._style = DEFAULT_CONTEXT
        self._canvas: CanvasRecord | None = None
        self._pad: PadRecord | None = None
        self._occupied = np.zeros((grid_size, grid_size), dtype=bool)
        self._exclusions: dict[int, Rect] = {}
        self._tokens = itertools.count(1)

    # canvas and pads

    def create_canvas(self, name: str, width: int, height: int, fill_color: int | None, fill_style: int | None) -> None:
        LOGGER.debug("canvas '%s' %dx%d", name, width, height)
        self._canvas = CanvasRecord(name=name, width=width, height=height, fill_color=fill_color, fill_style=fill_style)
        self._pad = None

    def create_pad(self, spec: PadSpec) -> None:
        canvas = self._require_canvas()
        self._pad = PadRecord(spec=spec)
        canvas.pads.append(self._pad)
        self._occupied = np.zeros((self.grid_size, self.grid_size), dtype=bool)
        self._exclusions = {}

    def finish_canvas(self) -> CanvasRecord:
        canvas = self._require_canvas()
        self.canvases.append(canvas)
        self._canvas = None
        self._pad = None
        return canvas

    # ambient style

    def current_style(self) -> StyleContext:
        return self._style

    def apply_style(self, context: StyleContext) -> None:
        self._style = context
        self.style_history.append(context)

    # drawing

    def draw(self, directive: Any) -> None:
        pad = self._require_pad()
        pad.draws.append(DrawRecord(directive=directive, context=self._style))
        if pad.frame_handle is None or directive.defines_frame:
            pad.frame_handle = directive.handle
            pad.frame_y_range = directive.y_range
        if directive.role == "axis":
            return
        if isinstance(directive.handle, Histogram2D):
            self._mark_rect(self.frame_rect())
            return
        self._mark_curve(directive.handle)

    def draw_legend(self, placement: LegendPlacement) -> None:
        self._require_pad().legends.append(placement)
        self._mark_rect(placement.rect)

    def draw_text(self, placement: TextPlacement) -> None:
        self._require_pad().texts.append(placement)
        self._mark_rect(placement.rect)

    def configure_frame(self, update: Any) -> None:
        self._require_pad().frame = update

    # geometry queries

    def text_size(self, text: str, font: int, size: float) -> tuple[int, int]:
        _, pad_h = self.pad_pixel_size()
        return text_size(text, font=font, size_px=font_size_px(font, size, pad_h))

    def pad_pixel_size(self) -> tuple[int, int]:
        canvas = self._require_canvas()
        xlow, ylow, xup, yup = self._require_pad().spec.position
        return max(1, int(round(canvas.width * (xup - xlow)))), max(1, int(round(canvas.height * (yup - ylow))))

    def frame_rect(self) -> Rect:
        top, bottom, left, right = self._require_pad().spec.margins
        return Rect(left, bottom, 1.0 - right, 1.0 - top)

    def frame_limits(self) -> DataLimits:
        pad = self._require_pad()
        if pad.frame_handle is None:
            return DataLimits(0.0, 1.0, 0.0, 1.0)
        return limits_for(pad.frame_handle, pad.frame_y_range)

    def user_to_ndc(self, x: float, y: float) -> tuple[float, float]:
        transform = build_transform(self.frame_limits(), self.frame_rect())
        nx, ny = map_to_ndc(np.asarray([x]), np.asarray([y]), transform)
        return float(nx[0]), float(ny[0])

    def add_exclusion(self, rect: Rect) -> Hashable:
        token = next(self._tokens)
        self._exclusions[token] = rect
        return token

    def remove_exclusion(self, token: Hashable) -> None:
        self._exclusions.pop(token, None)

    def place_box(self, width: float, height: float) -> tuple[float, float] | None:
        """Topmost, then leftmost, free window of the requested size on the occupancy grid."""
        n = self.grid_size
        w = max(1, math.ceil(width * n))
        h = max(1, math.ceil(height * n))
        if w > n or h > n:
            return None
        occupied = self._occupied.copy()
        for rect in self._exclusions.values():
            self._fill(occupied, rect)

        table = np.zeros((n + 1, n + 1), dtype=np.int64)
        table[1:, 1:] = np.cumsum(np.cumsum(occupied, axis=0), axis=1)
        sums = table[w:, h:] - table[:-w, h:] - table[w:, :-h] + table[:-w, :-h]
        free = sums == 0
        for j in range(n - h, -1, -1):
            row = free[:, j]
            if row.any():
                i = int(np.argmax(row))
                return i / n, j / n
        return None

    # occupancy

    def _cells(self, rect: Rect) -> tuple[int, int, int, int]:
        n = self.grid_size
        i0 = min(max(int(math.floor(rect.x0 * n)), 0), n)
        i1 = min(max(int(math.ceil(rect.x1 * n)), 0), n)
        j0 = min(max(int(math.floor(rect.y0 * n)), 0), n)
        j1 = min(max(int(math.ceil(rect.y1 * n)), 0), n)
        return i0, i1, j0, j1

    def _fill(self, grid: np.ndarray, rect: Rect) -> None:
        i0, i1, j0, j1 = self._cells(rect)
        grid[i0:i1, j0:j1] = True

    def _mark_rect(self, rect: Rect) -> None:
        self._fill(self._occupied, rect)

    def _mark_curve(self, handle: Dataset) -> None:
        x, y = handle_points(handle)
        if x.size == 0:
            return
        transform = build_transform(self.frame_limits(), self.frame_rect())
        nx, ny = map_to_ndc(x, y, transform)
        if nx.size > 1:
            steps = self.grid_size
            t = np.linspace(0.0, 1.0, steps, endpoint=False)
            nx = np.concatenate([(nx[:-1, None] + (nx[1:] - nx[:-1])[:, None] * t).ravel(), nx[-1:]])
            ny = np.concatenate([(ny[:-1, None] + (ny[1:] - ny[:-1])[:, None] * t).ravel(), ny[-1:]])
        keep = np.isfinite(nx) & np.isfinite(ny) & (nx >= 0) & (nx < 1) & (ny >= 0) & (ny < 1)
        n = self.grid_size
        i = (nx[keep] * n).astype(np.int64)
        j = (ny[keep] * n).astype(np.int64)
        self._occupied[i, j] = True

    def _require_canvas(self) -> CanvasRecord:
        if self._canvas is None:
            raise RuntimeError("no canvas; call create_canvas first")
        return self._canvas

    def _require_pad(self) -> PadRecord:
        if self._pad is None:
            raise RuntimeError("no pad; call create_pad first")
        return self._pad
