from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from plotframe.backend.base import Rect
from plotframe.datasets import Dataset, Function1D, Graph, Histogram, Histogram2D


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float


@dataclass(frozen=True)
class NdcTransform:
    sx: float
    tx: float
    sy: float
    ty: float


def compute_limits(x: np.ndarray, y: np.ndarray, mask: np.ndarray | None = None, y_buffer_ratio: float = 0.05) -> DataLimits:
    if mask is None:
        mask = np.isfinite(x) & np.isfinite(y)
    vx = x[mask]
    vy = y[mask]
    if vx.size == 0:
        return DataLimits(xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)
    xmin = float(np.min(vx))
    xmax = float(np.max(vx))
    ymin = float(np.min(vy))
    ymax = float(np.max(vy))

    if ymin == ymax:
        delta = max(1.0, abs(ymin) * y_buffer_ratio)
        ymin -= delta
        ymax += delta
    else:
        span = ymax - ymin
        pad = span * y_buffer_ratio
        ymin -= pad
        ymax += pad

    if xmin == xmax:
        xmin -= 1.0
        xmax += 1.0

    return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def handle_points(handle: Dataset) -> tuple[np.ndarray, np.ndarray]:
    """Representative (x, y) points of a dataset in data coordinates."""
    if isinstance(handle, Histogram2D):
        xs, ys = np.meshgrid(handle.centers, 0.5 * (handle.y_edges[:-1] + handle.y_edges[1:]), indexing="ij")
        return xs.ravel(), ys.ravel()
    if isinstance(handle, Histogram):
        return handle.centers, handle.contents
    if isinstance(handle, Graph):
        return handle.x, handle.y
    if isinstance(handle, Function1D):
        return handle.samples()
    raise TypeError(f"unsupported dataset {type(handle).__name__}")


def limits_for(
    handle: Dataset,
    y_range: tuple[float | None, float | None] | None = None,
    x_range: tuple[float | None, float | None] | None = None,
) -> DataLimits:
    """Frame limits of the axis object drawn from ``handle``; explicit ranges win."""
    if isinstance(handle, Histogram2D):
        limits = DataLimits(
            xmin=float(handle.edges[0]),
            xmax=float(handle.edges[-1]),
            ymin=float(handle.y_edges[0]),
            ymax=float(handle.y_edges[-1]),
        )
    elif isinstance(handle, Histogram):
        x = np.concatenate([handle.centers, handle.centers])
        y = np.concatenate([handle.contents - handle.errors, handle.contents + handle.errors])
        auto = compute_limits(x, y)
        limits = DataLimits(float(handle.edges[0]), float(handle.edges[-1]), auto.ymin, auto.ymax)
    else:
        x, y = handle_points(handle)
        limits = compute_limits(x, y)

    xmin, xmax, ymin, ymax = limits.xmin, limits.xmax, limits.ymin, limits.ymax
    if x_range is not None:
        xmin = xmin if x_range[0] is None else float(x_range[0])
        xmax = xmax if x_range[1] is None else float(x_range[1])
    if y_range is not None:
        ymin = ymin if y_range[0] is None else float(y_range[0])
        ymax = ymax if y_range[1] is None else float(y_range[1])
    if xmax <= xmin:
        xmax = xmin + 1.0
    if ymax <= ymin:
        ymax = ymin + 1.0
    return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def build_transform(limits: DataLimits, frame: Rect) -> NdcTransform:
    """Affine map from data coordinates onto the frame rectangle in pad NDC."""
    sx = frame.width / (limits.xmax - limits.xmin)
    tx = frame.x0 - limits.xmin * sx
    sy = frame.height / (limits.ymax - limits.ymin)
    ty = frame.y0 - limits.ymin * sy
    return NdcTransform(sx=sx, tx=tx, sy=sy, ty=ty)


def map_to_ndc(x: np.ndarray, y: np.ndarray, transform: NdcTransform) -> tuple[np.ndarray, np.ndarray]:
    nx = np.asarray(x, dtype=np.float64) * transform.sx + transform.tx
    ny = np.asarray(y, dtype=np.float64) * transform.sy + transform.ty
    return nx, ny
