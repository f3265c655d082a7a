from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from PIL import ImageFont

from plotframe.constants import FONT_HELVETICA_PX

# font code // 10 -> family name patterns, most specific first
FONT_FAMILIES: dict[int, tuple[str, ...]] = {
    1: ("times new roman italic", "dejavuserif-italic", "liberationserif-italic"),
    2: ("times new roman bold", "dejavuserif-bold", "liberationserif-bold"),
    4: ("helvetica", "arial", "liberationsans-regular", "dejavusans"),
    5: ("helvetica oblique", "arial italic", "liberationsans-italic", "dejavusans-oblique"),
    6: ("helvetica bold", "arial bold", "liberationsans-bold", "dejavusans-bold"),
    8: ("courier new", "courier", "liberationmono-regular", "dejavusansmono"),
    13: ("times new roman", "dejavuserif", "liberationserif-regular"),
}
SANS_FALLBACK_PATTERNS = ("helvetica", "arial", "liberationsans", "dejavusans")

_MARKUP = re.compile(r"#[a-zA-Z]+")


def font_patterns(font: int) -> tuple[str, ...]:
    return FONT_FAMILIES.get(font // 10, ()) + SANS_FALLBACK_PATTERNS


def font_size_px(font: int, size: float, pad_height_px: float) -> float:
    """Pixel size of ``size``; precision 3 fonts are sized in pixels, others relative to the pad height."""
    if font % 10 == 3:
        return float(size)
    return float(size) * pad_height_px


def plain_text(text: str) -> str:
    """Strip ``#command`` markup and grouping characters before measuring."""
    return _MARKUP.sub("", text).replace("{", "").replace("}", "").replace("_", "").replace("^", "")


def text_size(text: str, *, font: int = FONT_HELVETICA_PX, size_px: float = 24.0) -> tuple[int, int]:
    loaded = _load_font(font=font, size_px=size_px)
    text = plain_text(text)
    if not text:
        _, top, _, bottom = loaded.getbbox("Ag")
        return (0, max(1, int(bottom - top)))
    left, top, right, bottom = loaded.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    return (w, h)


@lru_cache(maxsize=64)
def _load_font(font: int, size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(size_px)))
    font_path = _resolve_font_path(font_patterns(font))
    if font_path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=16)
def _resolve_font_path(patterns: tuple[str, ...]) -> Path | None:
    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p == stem or p in stem:
                return path
    return None
