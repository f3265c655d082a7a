from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass

from plotframe.datasets import Dataset, Histogram2D
from plotframe.properties import AXIS_KEYS, Axis, Pad
from plotframe.style import PlotStyle


@dataclass(frozen=True)
class FrameUpdate:
    """Final axis settings for the authoritative object of one pad."""

    pad_id: int
    handle: Dataset | None
    axes: Mapping[str, Axis]
    is_2d: bool = False
    # top, bottom, left, right; set when a 2-D object needs room for its palette
    margins: tuple[float, float, float, float] | None = None


class AxisLinker:
    """Shares axis range and title across pads grouped in the style's link table."""

    def __init__(self, style: PlotStyle, pads: Mapping[int, Pad]) -> None:
        self.style = style
        self.pads = pads

    def group_for(self, axis: str, pad_id: int) -> tuple[int, frozenset[int]] | None:
        for (key, representative), pad_ids in self.style.linked_axes.items():
            if key == axis and pad_id in pad_ids:
                return representative, pad_ids
        return None

    def linked_axis(self, axis: str, pad_id: int) -> Axis | None:
        group = self.group_for(axis, pad_id)
        if group is None:
            return None
        pad = self.pads.get(group[0])
        if pad is None:
            return None
        return pad.axes.get(axis)

    def finalize_frame(self, pad_id: int, pad: Pad, handle: Dataset | None) -> FrameUpdate:
        is_2d = isinstance(handle, Histogram2D)
        offsets = self.style.title_offsets_2d if is_2d else self.style.title_offsets
        keys = AXIS_KEYS if is_2d else AXIS_KEYS[:2]

        axes: dict[str, Axis] = {}
        for i, key in enumerate(keys):
            axis = copy.deepcopy(pad.axes.get(key)) or Axis(name=key)
            linked = self.linked_axis(key, pad_id)
            if linked is not None:
                if linked.range.is_set():
                    axis.range = copy.deepcopy(linked.range)
                if linked.title is not None:
                    axis.title = linked.title
            if axis.title_properties.offset is None:
                axis.title_properties.offset = offsets[i]
            axes[key] = axis

        return FrameUpdate(
            pad_id=pad_id,
            handle=handle,
            axes=axes,
            is_2d=is_2d,
            margins=self.style.pad_margins_2d if is_2d else None,
        )
