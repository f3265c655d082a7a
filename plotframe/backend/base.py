"""Capability surface a graphics backend offers the painter and layout engine.

All geometry handed across this boundary is in pad NDC (the unit square of the
current pad) unless a name says pixels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Hashable, Protocol

from plotframe.properties import Frame, Layout

if TYPE_CHECKING:
    from plotframe.axis_link import FrameUpdate
    from plotframe.commands import DrawDirective
    from plotframe.style import StyleContext


@dataclass(frozen=True)
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0


UNIT_RECT = Rect(0.0, 0.0, 1.0, 1.0)


@dataclass(frozen=True)
class PadSpec:
    pad_id: int
    # xlow, ylow, xup, yup as canvas fractions
    position: tuple[float, float, float, float]
    # top, bottom, left, right as pad fractions
    margins: tuple[float, float, float, float]
    title: str | None = None
    fill_color: int | None = None
    fill_style: int | None = None
    frame: Frame | None = None
    palette: int | None = None


@dataclass(frozen=True)
class LegendRow:
    handle: Any
    label: str
    draw_style: str
    marker: Layout
    line: Layout
    fill: Layout
    text: Layout


@dataclass(frozen=True)
class LegendPlacement:
    rect: Rect
    rows: tuple[LegendRow, ...]
    title: str | None
    num_columns: int
    text_font: int
    text_size: float
    # fraction of the box width reserved for marker glyphs
    margin: float
    entry_separation: float
    border: Layout
    fill: Layout
    fallback: bool = False


@dataclass(frozen=True)
class TextPlacement:
    rect: Rect
    lines: tuple[str, ...]
    text: Layout
    border: Layout
    fill: Layout


class Backend(Protocol):
    def create_canvas(self, name: str, width: int, height: int, fill_color: int | None, fill_style: int | None) -> None: ...

    def create_pad(self, spec: PadSpec) -> None: ...

    def current_style(self) -> "StyleContext": ...

    def apply_style(self, context: "StyleContext") -> None: ...

    def draw(self, directive: "DrawDirective") -> None: ...

    def text_size(self, text: str, font: int, size: float) -> tuple[int, int]:
        """Rendered text extent in pixels."""
        ...

    def pad_pixel_size(self) -> tuple[int, int]: ...

    def frame_rect(self) -> Rect:
        """Data-axis rectangle of the current pad."""
        ...

    def user_to_ndc(self, x: float, y: float) -> tuple[float, float]: ...

    def add_exclusion(self, rect: Rect) -> Hashable: ...

    def remove_exclusion(self, token: Hashable) -> None: ...

    def place_box(self, width: float, height: float) -> tuple[float, float] | None:
        """Lower-left corner of a free ``width`` x ``height`` area, or None."""
        ...

    def draw_legend(self, placement: LegendPlacement) -> None: ...

    def draw_text(self, placement: TextPlacement) -> None: ...

    def configure_frame(self, update: "FrameUpdate") -> None: ...

    def finish_canvas(self) -> Any: ...
