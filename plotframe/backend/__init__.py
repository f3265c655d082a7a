from .base import UNIT_RECT, Backend, LegendPlacement, LegendRow, PadSpec, Rect, TextPlacement
from .fonts import font_size_px, text_size
from .recording import CanvasRecord, PadRecord, RecordingBackend
from .transform import DataLimits, NdcTransform, build_transform, compute_limits

__all__ = [
    "Backend",
    "CanvasRecord",
    "DataLimits",
    "LegendPlacement",
    "LegendRow",
    "NdcTransform",
    "PadRecord",
    "PadSpec",
    "RecordingBackend",
    "Rect",
    "TextPlacement",
    "UNIT_RECT",
    "build_transform",
    "compute_limits",
    "font_size_px",
    "text_size",
]
