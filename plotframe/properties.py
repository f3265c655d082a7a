"""Declarative plot description.

Every attribute is optional: ``None`` means "unset, inherit from the layer
below" when two descriptions are merged (see :mod:`plotframe.merge`). Entities
are mutable and populated through fluent setters that return the concrete
object, so calls can be chained::

    plot = Plot("spectra", "pp")
    pad = plot.pad(1).set_margins(0.05, 0.14, 0.12, 0.05)
    pad.add_data("pt", "run1", "data").set_marker(RED, MARKER_FULL_CIRCLE, 1.2)
    pad.axis("X").set_title("#it{p}_{T}")

The painter, merge engine, defaults resolver and layout engine read the raw
fields directly.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, TypeVar

from plotframe.constants import FILL_HOLLOW, FILL_SOLID, FILL_TRANSPARENT, LINE_SOLID, NAME_GROUP_SEPARATOR
from plotframe.errors import PlotConfigError
from plotframe.options import DrawingOption

AXIS_KEYS: tuple[str, ...] = ("X", "Y", "Z")
MAX_PAD_ID = 255


def _check_axis_key(axis: str) -> str:
    if axis not in AXIS_KEYS:
        raise ValueError(f"axis must be one of {AXIS_KEYS}, got {axis!r}")
    return axis


def _check_pad_id(pad_id: int) -> int:
    if not 0 <= int(pad_id) <= MAX_PAD_ID:
        raise ValueError(f"pad id must be in [0, {MAX_PAD_ID}]")
    return int(pad_id)


def _check_opacity(opacity: float) -> float:
    if not 0.0 <= opacity <= 1.0:
        raise ValueError("opacity must be in [0, 1]")
    return float(opacity)


@dataclass
class Layout:
    """Color/style/scale triple shared by markers, lines, fills and text.

    ``scale`` is marker size, line width, fill opacity or text size depending on
    where the layout is used; for text ``style`` is the font code.
    """

    color: int | None = None
    style: int | None = None
    scale: float | None = None


@dataclass
class Range:
    min: float | None = None
    max: float | None = None

    def is_set(self) -> bool:
        return self.min is not None or self.max is not None


@dataclass
class Dimensions:
    width: int | None = None
    height: int | None = None
    fix_aspect_ratio: bool | None = None


@dataclass
class Fill:
    color: int | None = None
    style: int | None = None


@dataclass
class PadPosition:
    xlow: float | None = None
    ylow: float | None = None
    xup: float | None = None
    yup: float | None = None


@dataclass
class PadMargins:
    top: float | None = None
    bottom: float | None = None
    left: float | None = None
    right: float | None = None


@dataclass
class Frame:
    fill_color: int | None = None
    fill_style: int | None = None
    line_color: int | None = None
    line_style: int | None = None
    line_width: float | None = None


@dataclass
class TextStyle:
    color: int | None = None
    font: int | None = None
    size: float | None = None


@dataclass
class StyleDefaults:
    """Cyclic per-series defaults of one kind (marker, line or fill)."""

    scale: float | None = None
    styles: tuple[int, ...] | None = None
    colors: tuple[int, ...] | None = None


@dataclass
class DrawingOptionDefaults:
    graph: DrawingOption | None = None
    hist: DrawingOption | None = None
    hist2d: DrawingOption | None = None


# ---------------------------------------------------------------------------
# axis
# ---------------------------------------------------------------------------


@dataclass
class AxisText:
    font: int | None = None
    size: float | None = None
    color: int | None = None
    offset: float | None = None
    center: bool | None = None


@dataclass
class Axis:
    name: str | None = None
    range: Range = field(default_factory=Range)
    title: str | None = None
    num_divisions: int | None = None
    max_digits: int | None = None
    tick_length: float | None = None
    axis_color: int | None = None
    is_log: bool | None = None
    is_grid: bool | None = None
    is_opposite_ticks: bool | None = None
    time_format: str | None = None
    tick_orientation: str | None = None
    title_properties: AxisText = field(default_factory=AxisText)
    label_properties: AxisText = field(default_factory=AxisText)

    def set_title(self, title: str) -> "Axis":
        self.title = title
        return self

    def set_range(self, vmin: float, vmax: float) -> "Axis":
        if vmax <= vmin:
            raise ValueError("axis range max must be > min")
        self.range.min = float(vmin)
        self.range.max = float(vmax)
        return self

    def set_min_range(self, vmin: float) -> "Axis":
        self.range.min = float(vmin)
        return self

    def set_max_range(self, vmax: float) -> "Axis":
        self.range.max = float(vmax)
        return self

    def set_color(self, color: int) -> "Axis":
        self.axis_color = color
        self.title_properties.color = color
        self.label_properties.color = color
        return self

    def set_axis_color(self, color: int) -> "Axis":
        self.axis_color = color
        return self

    def set_num_divisions(self, num_divisions: int) -> "Axis":
        self.num_divisions = int(num_divisions)
        return self

    def set_max_digits(self, max_digits: int) -> "Axis":
        if max_digits <= 0:
            raise ValueError("max_digits must be > 0")
        self.max_digits = int(max_digits)
        return self

    def set_tick_length(self, tick_length: float) -> "Axis":
        if tick_length < 0:
            raise ValueError("tick_length must be >= 0")
        self.tick_length = float(tick_length)
        return self

    def set_title_font(self, font: int) -> "Axis":
        self.title_properties.font = font
        return self

    def set_label_font(self, font: int) -> "Axis":
        self.label_properties.font = font
        return self

    def set_title_size(self, size: float) -> "Axis":
        self.title_properties.size = float(size)
        return self

    def set_label_size(self, size: float) -> "Axis":
        self.label_properties.size = float(size)
        return self

    def set_title_color(self, color: int) -> "Axis":
        self.title_properties.color = color
        return self

    def set_label_color(self, color: int) -> "Axis":
        self.label_properties.color = color
        return self

    def set_title_offset(self, offset: float) -> "Axis":
        self.title_properties.offset = float(offset)
        return self

    def set_label_offset(self, offset: float) -> "Axis":
        self.label_properties.offset = float(offset)
        return self

    def set_title_center(self, center: bool = True) -> "Axis":
        self.title_properties.center = bool(center)
        return self

    def set_label_center(self, center: bool = True) -> "Axis":
        self.label_properties.center = bool(center)
        return self

    def set_log(self, is_log: bool = True) -> "Axis":
        self.is_log = bool(is_log)
        return self

    def set_grid(self, is_grid: bool = True) -> "Axis":
        self.is_grid = bool(is_grid)
        return self

    def set_opposite_ticks(self, is_opposite_ticks: bool = True) -> "Axis":
        self.is_opposite_ticks = bool(is_opposite_ticks)
        return self

    def set_time_format(self, time_format: str) -> "Axis":
        self.time_format = time_format
        return self

    def set_tick_orientation(self, tick_orientation: str) -> "Axis":
        if tick_orientation not in {"+", "-", "+-"}:
            raise ValueError("tick orientation must be '+', '-' or '+-'")
        self.tick_orientation = tick_orientation
        return self


# ---------------------------------------------------------------------------
# data
# ---------------------------------------------------------------------------


class DataKind(Enum):
    PLAIN = "data"
    RATIO = "ratio"


class NormMode(Enum):
    SUM = "sum"
    WIDTH = "width"


@dataclass
class RatioPayload:
    denominator_name: str | None = None
    denominator_input_id: str | None = None
    is_correlated: bool | None = None

    @property
    def denominator_unique_name(self) -> str:
        return f"{self.denominator_name}{NAME_GROUP_SEPARATOR}{self.denominator_input_id}"


@dataclass
class LegendRef:
    label: str | None = None
    identifier: int | None = None


@dataclass
class Modify:
    norm_mode: NormMode | None = None
    scale_factor: float | None = None


@dataclass
class Data:
    """One drawable series; ``kind`` selects plain series or ratio."""

    name: str | None = None
    input_id: str | None = None
    kind: DataKind = DataKind.PLAIN
    ratio: RatioPayload | None = None
    legend: LegendRef = field(default_factory=LegendRef)
    drawing_options: str | None = None
    drawing_option_alias: DrawingOption | None = None
    text_format: str | None = None
    modify: Modify = field(default_factory=Modify)
    range_x: Range = field(default_factory=Range)
    range_y: Range = field(default_factory=Range)
    marker: Layout = field(default_factory=Layout)
    line: Layout = field(default_factory=Layout)
    fill: Layout = field(default_factory=Layout)
    defines_frame: bool | None = None

    @property
    def unique_name(self) -> str:
        return f"{self.name}{NAME_GROUP_SEPARATOR}{self.input_id}"

    @property
    def is_ratio(self) -> bool:
        return self.kind is DataKind.RATIO

    def set_input_id(self, input_id: str) -> "Data":
        self.input_id = input_id
        return self

    def set_layout(self, other: "Data") -> "Data":
        """Copy every display attribute of ``other``, keeping identity."""
        for name in (
            "drawing_options",
            "drawing_option_alias",
            "text_format",
            "modify",
            "range_x",
            "range_y",
            "marker",
            "line",
            "fill",
        ):
            setattr(self, name, copy.deepcopy(getattr(other, name)))
        return self

    def set_range_x(self, vmin: float, vmax: float) -> "Data":
        self.range_x = Range(float(vmin), float(vmax))
        return self

    def set_min_range_x(self, vmin: float) -> "Data":
        self.range_x.min = float(vmin)
        return self

    def set_max_range_x(self, vmax: float) -> "Data":
        self.range_x.max = float(vmax)
        return self

    def unset_range_x(self) -> "Data":
        self.range_x = Range()
        return self

    def set_range_y(self, vmin: float, vmax: float) -> "Data":
        self.range_y = Range(float(vmin), float(vmax))
        return self

    def set_min_range_y(self, vmin: float) -> "Data":
        self.range_y.min = float(vmin)
        return self

    def set_max_range_y(self, vmax: float) -> "Data":
        self.range_y.max = float(vmax)
        return self

    def unset_range_y(self) -> "Data":
        self.range_y = Range()
        return self

    def set_legend_label(self, label: str) -> "Data":
        self.legend.label = label
        return self

    def set_legend_id(self, legend_id: int) -> "Data":
        if legend_id < 1:
            raise ValueError("legend id must be >= 1")
        self.legend.identifier = int(legend_id)
        return self

    def set_options(self, options: str | DrawingOption) -> "Data":
        if isinstance(options, DrawingOption):
            self.drawing_option_alias = options
            self.drawing_options = None
        else:
            self.drawing_options = options
            self.drawing_option_alias = None
        return self

    def unset_options(self) -> "Data":
        self.drawing_options = None
        self.drawing_option_alias = None
        return self

    def set_text_format(self, text_format: str) -> "Data":
        self.text_format = text_format
        return self

    def set_normalize(self, use_width: bool = False) -> "Data":
        self.modify.norm_mode = NormMode.WIDTH if use_width else NormMode.SUM
        return self

    def set_scale_factor(self, scale: float) -> "Data":
        self.modify.scale_factor = float(scale)
        return self

    def set_color(self, color: int) -> "Data":
        self.marker.color = color
        self.line.color = color
        self.fill.color = color
        return self

    def set_marker(self, color: int, style: int, size: float) -> "Data":
        self.marker = Layout(color, style, float(size))
        return self

    def set_marker_color(self, color: int) -> "Data":
        self.marker.color = color
        return self

    def set_marker_style(self, style: int) -> "Data":
        self.marker.style = style
        return self

    def set_marker_size(self, size: float) -> "Data":
        self.marker.scale = float(size)
        return self

    def set_line(self, color: int, style: int, width: float) -> "Data":
        self.line = Layout(color, style, float(width))
        return self

    def set_line_color(self, color: int) -> "Data":
        self.line.color = color
        return self

    def set_line_style(self, style: int) -> "Data":
        self.line.style = style
        return self

    def set_line_width(self, width: float) -> "Data":
        self.line.scale = float(width)
        return self

    def set_fill(self, color: int, style: int, opacity: float = 1.0) -> "Data":
        self.fill = Layout(color, style, _check_opacity(opacity))
        return self

    def set_fill_color(self, color: int) -> "Data":
        self.fill.color = color
        return self

    def set_fill_style(self, style: int) -> "Data":
        self.fill.style = style
        return self

    def set_fill_opacity(self, opacity: float) -> "Data":
        self.fill.scale = _check_opacity(opacity)
        return self

    def set_defines_frame(self) -> "Data":
        self.defines_frame = True
        return self

    def set_is_correlated(self, is_correlated: bool = True) -> "Data":
        if self.ratio is None:
            raise PlotConfigError(f"series '{self.name}' is not a ratio")
        self.ratio.is_correlated = bool(is_correlated)
        return self


# ---------------------------------------------------------------------------
# boxes
# ---------------------------------------------------------------------------


@dataclass
class BoxPosition:
    x: float | None = None
    y: float | None = None
    user_coordinates: bool | None = None


@dataclass
class BoxProperties:
    position: BoxPosition = field(default_factory=BoxPosition)
    text: Layout = field(default_factory=Layout)
    border: Layout = field(default_factory=Layout)
    fill: Layout = field(default_factory=Layout)

    @property
    def is_auto_placement(self) -> bool:
        return self.position.x is None or self.position.y is None

    @property
    def is_user_coordinates(self) -> bool:
        return bool(self.position.user_coordinates)


B = TypeVar("B", bound="_BoxSetters")


class _BoxSetters:
    """Setters shared by all box kinds; each returns the concrete box."""

    box: BoxProperties

    def set_position(self: B, x: float, y: float) -> B:
        self.box.position.x = float(x)
        self.box.position.y = float(y)
        return self

    def set_user_coordinates(self: B, user_coordinates: bool = True) -> B:
        self.box.position.user_coordinates = bool(user_coordinates)
        return self

    def set_auto_placement(self: B) -> B:
        self.box.position = BoxPosition()
        return self

    def set_border(self: B, color: int, style: int, width: float) -> B:
        self.box.border = Layout(color, style, float(width))
        return self

    def set_border_color(self: B, color: int) -> B:
        self.box.border.color = color
        return self

    def set_border_style(self: B, style: int) -> B:
        self.box.border.style = style
        return self

    def set_border_width(self: B, width: float) -> B:
        self.box.border.scale = float(width)
        return self

    def set_text(self: B, color: int, font: int, size: float) -> B:
        self.box.text = Layout(color, font, float(size))
        return self

    def set_text_color(self: B, color: int) -> B:
        self.box.text.color = color
        return self

    def set_text_font(self: B, font: int) -> B:
        self.box.text.style = font
        return self

    def set_text_size(self: B, size: float) -> B:
        self.box.text.scale = float(size)
        return self

    def set_fill(self: B, color: int, style: int = FILL_SOLID, opacity: float = 1.0) -> B:
        self.box.fill = Layout(color, style, _check_opacity(opacity))
        return self

    def set_fill_color(self: B, color: int) -> B:
        self.box.fill.color = color
        return self

    def set_fill_style(self: B, style: int) -> B:
        self.box.fill.style = style
        return self

    def set_fill_opacity(self: B, opacity: float) -> B:
        self.box.fill.scale = _check_opacity(opacity)
        return self

    def set_transparent(self: B) -> B:
        self.box.fill.style = FILL_HOLLOW
        return self

    def set_no_box(self: B) -> B:
        self.box.fill.style = FILL_HOLLOW
        self.box.border.scale = 0.0
        return self


@dataclass
class TextBox(_BoxSetters):
    tree_type: ClassVar[str] = "text"

    box: BoxProperties = field(default_factory=BoxProperties)
    text: str | None = None

    def set_content(self, text: str) -> "TextBox":
        self.text = text
        return self


@dataclass
class LegendEntry:
    label: str | None = None
    ref_data_name: str | None = None
    draw_style: str | None = None
    marker: Layout = field(default_factory=Layout)
    line: Layout = field(default_factory=Layout)
    fill: Layout = field(default_factory=Layout)
    text: Layout = field(default_factory=Layout)

    def set_label(self, label: str) -> "LegendEntry":
        self.label = label
        return self

    def set_ref_data(self, name: str, input_id: str) -> "LegendEntry":
        self.ref_data_name = f"{name}{NAME_GROUP_SEPARATOR}{input_id}"
        return self

    def set_draw_style(self, draw_style: str) -> "LegendEntry":
        self.draw_style = draw_style
        return self

    def set_marker_color(self, color: int) -> "LegendEntry":
        self.marker.color = color
        return self

    def set_marker_style(self, style: int) -> "LegendEntry":
        self.marker.style = style
        return self

    def set_marker_size(self, size: float) -> "LegendEntry":
        self.marker.scale = float(size)
        return self

    def set_line_color(self, color: int) -> "LegendEntry":
        self.line.color = color
        return self

    def set_line_style(self, style: int) -> "LegendEntry":
        self.line.style = style
        return self

    def set_line_width(self, width: float) -> "LegendEntry":
        self.line.scale = float(width)
        return self

    def set_fill_color(self, color: int) -> "LegendEntry":
        self.fill.color = color
        return self

    def set_fill_style(self, style: int) -> "LegendEntry":
        self.fill.style = style
        return self

    def set_fill_opacity(self, opacity: float) -> "LegendEntry":
        self.fill.scale = _check_opacity(opacity)
        return self

    def set_text_color(self, color: int) -> "LegendEntry":
        self.text.color = color
        return self

    def set_text_font(self, font: int) -> "LegendEntry":
        self.text.style = font
        return self

    def set_text_size(self, size: float) -> "LegendEntry":
        self.text.scale = float(size)
        return self


@dataclass
class LegendBox(_BoxSetters):
    tree_type: ClassVar[str] = "legend"

    box: BoxProperties = field(default_factory=BoxProperties)
    title: str | None = None
    num_columns: int | None = None
    draw_style_default: str | None = None
    marker_default: Layout = field(default_factory=Layout)
    line_default: Layout = field(default_factory=Layout)
    fill_default: Layout = field(default_factory=Layout)
    # rebuilt from the drawn series on every render
    entries: list[LegendEntry] = field(default_factory=list, metadata={"transient": True})
    user_entries: dict[int, LegendEntry] = field(default_factory=dict)

    def set_title(self, title: str) -> "LegendBox":
        self.title = title
        return self

    def set_num_columns(self, num_columns: int) -> "LegendBox":
        if num_columns < 1:
            raise ValueError("num_columns must be >= 1")
        self.num_columns = int(num_columns)
        return self

    def entry(self, entry_id: int) -> LegendEntry:
        return self.user_entries.setdefault(int(entry_id), LegendEntry())

    def set_default_draw_style(self, draw_style: str) -> "LegendBox":
        self.draw_style_default = draw_style
        return self

    def set_default_line_color(self, color: int) -> "LegendBox":
        self.line_default.color = color
        return self

    def set_default_line_style(self, style: int) -> "LegendBox":
        self.line_default.style = style
        return self

    def set_default_line_width(self, width: float) -> "LegendBox":
        self.line_default.scale = float(width)
        return self

    def set_default_marker_color(self, color: int) -> "LegendBox":
        self.marker_default.color = color
        return self

    def set_default_marker_style(self, style: int) -> "LegendBox":
        self.marker_default.style = style
        return self

    def set_default_marker_size(self, size: float) -> "LegendBox":
        self.marker_default.scale = float(size)
        return self

    def set_default_fill_color(self, color: int) -> "LegendBox":
        self.fill_default.color = color
        return self

    def set_default_fill_style(self, style: int) -> "LegendBox":
        self.fill_default.style = style
        return self

    def set_default_fill_opacity(self, opacity: float) -> "LegendBox":
        self.fill_default.scale = _check_opacity(opacity)
        return self


# ---------------------------------------------------------------------------
# pad and plot
# ---------------------------------------------------------------------------


@dataclass
class Pad:
    title: str | None = None
    position: PadPosition = field(default_factory=PadPosition)
    margins: PadMargins = field(default_factory=PadMargins)
    fill: Fill = field(default_factory=Fill)
    frame: Frame = field(default_factory=Frame)
    text: TextStyle = field(default_factory=TextStyle)
    marker_defaults: StyleDefaults = field(default_factory=StyleDefaults)
    line_defaults: StyleDefaults = field(default_factory=StyleDefaults)
    fill_defaults: StyleDefaults = field(default_factory=StyleDefaults)
    drawing_option_defaults: DrawingOptionDefaults = field(default_factory=DrawingOptionDefaults)
    palette: int | None = None
    redraw_axes: bool | None = None
    ref_func: str | None = None
    axes: dict[str, Axis] = field(default_factory=dict)
    data: list[Data] = field(default_factory=list)
    boxes: list[TextBox | LegendBox] = field(default_factory=list)

    def axis(self, axis: str) -> Axis:
        key = _check_axis_key(axis)
        if key not in self.axes:
            self.axes[key] = Axis(name=key)
        return self.axes[key]

    def add_data(self, name: str, input_id: str | Data, label: str | None = None) -> Data:
        """Append a series; ``input_id`` may be a series whose input and layout are reused."""
        if isinstance(input_id, Data):
            data = Data(name=name, input_id=input_id.input_id).set_layout(input_id)
        else:
            data = Data(name=name, input_id=input_id)
        if label:
            data.legend.label = label
        self.data.append(data)
        return data

    def add_ratio(
        self,
        numerator_name: str,
        numerator_input_id: str | Data,
        denominator_name: str,
        denominator_input_id: str,
        label: str | None = None,
    ) -> Data:
        data = self.add_data(numerator_name, numerator_input_id, label)
        data.kind = DataKind.RATIO
        data.ratio = RatioPayload(denominator_name, denominator_input_id)
        return data

    def add_text(self, text: str, x: float | None = None, y: float | None = None) -> TextBox:
        box = TextBox(text=text)
        if x is not None and y is not None:
            box.set_position(x, y)
        self.boxes.append(box)
        return box

    def add_legend(self, x: float | None = None, y: float | None = None) -> LegendBox:
        box = LegendBox()
        if x is not None and y is not None:
            box.set_position(x, y)
        self.boxes.append(box)
        return box

    def get_data(self, index: int) -> Data:
        return self.data[index]

    def legends(self) -> list[LegendBox]:
        return [box for box in self.boxes if isinstance(box, LegendBox)]

    def texts(self) -> list[TextBox]:
        return [box for box in self.boxes if isinstance(box, TextBox)]

    def get_legend(self, index: int) -> LegendBox:
        return self.legends()[index]

    def get_text(self, index: int) -> TextBox:
        return self.texts()[index]

    def set_title(self, title: str) -> "Pad":
        self.title = title
        return self

    def set_position(self, xlow: float, ylow: float, xup: float, yup: float) -> "Pad":
        if not (0.0 <= xlow < xup <= 1.0 and 0.0 <= ylow < yup <= 1.0):
            raise ValueError("pad position must satisfy 0 <= low < up <= 1")
        self.position = PadPosition(float(xlow), float(ylow), float(xup), float(yup))
        return self

    def set_margins(self, top: float, bottom: float, left: float, right: float) -> "Pad":
        if top + bottom >= 1.0 or left + right >= 1.0:
            raise ValueError("pad margins leave no room for the frame")
        self.margins = PadMargins(float(top), float(bottom), float(left), float(right))
        return self

    def set_palette(self, palette: int) -> "Pad":
        self.palette = int(palette)
        return self

    def set_default_text_size(self, size: float) -> "Pad":
        self.text.size = float(size)
        return self

    def set_default_text_color(self, color: int) -> "Pad":
        self.text.color = color
        return self

    def set_default_text_font(self, font: int) -> "Pad":
        self.text.font = font
        return self

    def set_default_marker_size(self, size: float) -> "Pad":
        self.marker_defaults.scale = float(size)
        return self

    def set_default_marker_colors(self, colors: list[int] | tuple[int, ...]) -> "Pad":
        self.marker_defaults.colors = tuple(colors)
        return self

    def set_default_marker_styles(self, styles: list[int] | tuple[int, ...]) -> "Pad":
        self.marker_defaults.styles = tuple(styles)
        return self

    def set_default_line_width(self, width: float) -> "Pad":
        self.line_defaults.scale = float(width)
        return self

    def set_default_line_colors(self, colors: list[int] | tuple[int, ...]) -> "Pad":
        self.line_defaults.colors = tuple(colors)
        return self

    def set_default_line_styles(self, styles: list[int] | tuple[int, ...]) -> "Pad":
        self.line_defaults.styles = tuple(styles)
        return self

    def set_default_fill_opacity(self, opacity: float) -> "Pad":
        self.fill_defaults.scale = _check_opacity(opacity)
        return self

    def set_default_fill_colors(self, colors: list[int] | tuple[int, ...]) -> "Pad":
        self.fill_defaults.colors = tuple(colors)
        return self

    def set_default_fill_styles(self, styles: list[int] | tuple[int, ...]) -> "Pad":
        self.fill_defaults.styles = tuple(styles)
        return self

    def set_default_drawing_option_graph(self, option: DrawingOption) -> "Pad":
        self.drawing_option_defaults.graph = option
        return self

    def set_default_drawing_option_hist(self, option: DrawingOption) -> "Pad":
        self.drawing_option_defaults.hist = option
        return self

    def set_default_drawing_option_hist2d(self, option: DrawingOption) -> "Pad":
        self.drawing_option_defaults.hist2d = option
        return self

    def set_fill(self, color: int, style: int = FILL_SOLID) -> "Pad":
        self.fill = Fill(color, style)
        return self

    def set_transparent(self) -> "Pad":
        self.fill.style = FILL_TRANSPARENT
        return self

    def set_fill_frame(self, color: int, style: int = FILL_SOLID) -> "Pad":
        self.frame.fill_color = color
        self.frame.fill_style = style
        return self

    def set_line_frame(self, color: int, style: int = LINE_SOLID, width: float = 1.0) -> "Pad":
        self.frame.line_color = color
        self.frame.line_style = style
        self.frame.line_width = float(width)
        return self

    def set_transparent_frame(self) -> "Pad":
        self.frame.fill_style = FILL_TRANSPARENT
        return self

    def set_redraw_axes(self, redraw: bool = True) -> "Pad":
        self.redraw_axes = bool(redraw)
        return self

    def set_ref_func(self, ref_func: str) -> "Pad":
        self.ref_func = ref_func
        return self


@dataclass
class Plot:
    """One multi-pad figure; pad 0 holds defaults merged into every other pad."""

    name: str | None = None
    figure_group: str | None = None
    plot_template_name: str | None = None
    figure_category: str | None = None
    dimensions: Dimensions = field(default_factory=Dimensions)
    fill: Fill = field(default_factory=Fill)
    pads: dict[int, Pad] = field(default_factory=dict)

    @property
    def unique_name(self) -> str:
        out = f"{self.name}{NAME_GROUP_SEPARATOR}{self.figure_group}"
        if self.figure_category:
            out += f":{self.figure_category}"
        return out

    @property
    def num_required_pads(self) -> int:
        return max((pad_id for pad_id in self.pads if pad_id != 0), default=0)

    def pad(self, pad_id: int) -> Pad:
        key = _check_pad_id(pad_id)
        if key not in self.pads:
            self.pads[key] = Pad()
        return self.pads[key]

    def pad_defaults(self) -> Pad:
        return self.pad(0)

    def clone(self, name: str | None = None, figure_group: str | None = None) -> "Plot":
        out = copy.deepcopy(self)
        if name is not None:
            out.name = name
        if figure_group is not None:
            out.figure_group = figure_group
        return out

    def set_figure_group(self, figure_group: str) -> "Plot":
        self.figure_group = figure_group
        return self

    def set_figure_category(self, figure_category: str) -> "Plot":
        self.figure_category = figure_category
        return self

    def set_plot_template_name(self, plot_template_name: str) -> "Plot":
        self.plot_template_name = plot_template_name
        return self

    def set_dimensions(self, width: int, height: int, fix_aspect_ratio: bool = False) -> "Plot":
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.dimensions = Dimensions(int(width), int(height), bool(fix_aspect_ratio))
        return self

    def set_width(self, width: int) -> "Plot":
        if width <= 0:
            raise ValueError("width must be > 0")
        self.dimensions.width = int(width)
        return self

    def set_height(self, height: int) -> "Plot":
        if height <= 0:
            raise ValueError("height must be > 0")
        self.dimensions.height = int(height)
        return self

    def set_fix_aspect_ratio(self, fix_aspect_ratio: bool = True) -> "Plot":
        self.dimensions.fix_aspect_ratio = bool(fix_aspect_ratio)
        return self

    def set_fill(self, color: int, style: int = FILL_SOLID) -> "Plot":
        self.fill = Fill(color, style)
        return self

    def set_transparent(self) -> "Plot":
        self.fill.style = FILL_TRANSPARENT
        return self
