from __future__ import annotations

from enum import Enum


class DrawingOption(Enum):
    # 1d options
    POINTS = "points"
    POINTS_XERR = "points_xerr"
    POINTS_ENDCAPS = "points_endcaps"
    POINTS_LINE = "points_line"
    LINE = "line"
    CURVE = "curve"
    BAND = "band"
    BAND_LINE = "band_line"
    HIST = "hist"
    HIST_NO_BORDERS = "hist_no_borders"
    FIT = "fit"
    BAR = "bar"
    AREA = "area"
    AREA_CURVE = "area_curve"
    AREA_LINE = "area_line"
    BOXES = "boxes"
    BOXES_ONLY = "boxes_only"
    STARS = "stars"
    TEXT = "text"
    # 2d options
    COLZ = "colz"
    SURF = "surf"


OPTION_STRINGS: dict[DrawingOption, str] = {
    DrawingOption.POINTS: "ex0",
    DrawingOption.POINTS_XERR: "e",
    DrawingOption.POINTS_ENDCAPS: "e1",
    DrawingOption.POINTS_LINE: "ex0 l",
    DrawingOption.LINE: "l",
    DrawingOption.CURVE: "c",
    DrawingOption.BAND: "band",
    DrawingOption.BAND_LINE: "band l",
    DrawingOption.HIST: "hist",
    DrawingOption.HIST_NO_BORDERS: "hist ][",
    DrawingOption.FIT: "fit",
    DrawingOption.BAR: "bar",
    DrawingOption.AREA: "f",
    DrawingOption.AREA_CURVE: "fc",
    DrawingOption.AREA_LINE: "fl",
    DrawingOption.BOXES: "boxes",
    DrawingOption.BOXES_ONLY: "boxes x0",
    DrawingOption.STARS: "*",
    DrawingOption.TEXT: "text",
    DrawingOption.COLZ: "colz",
    DrawingOption.SURF: "surf",
}

# filled color maps need a finer contour count
FILLED_COLOR_MAPS = frozenset({DrawingOption.COLZ})


def option_string(alias: DrawingOption) -> str:
    return OPTION_STRINGS[alias]


def tokens(option: str) -> list[str]:
    return option.lower().split()


def has_token(option: str, token: str) -> bool:
    return token in tokens(option)


def remove_token(option: str, token: str) -> str:
    return " ".join(t for t in tokens(option) if t != token)


def add_token(option: str, token: str) -> str:
    parts = tokens(option)
    if token not in parts:
        parts.append(token)
    return " ".join(parts)
