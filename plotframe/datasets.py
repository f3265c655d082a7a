"""Backing dataset handles and the shape operations applied before drawing."""

from __future__ import annotations

import copy
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

import numpy as np

from plotframe.errors import PlotDataError

# Cut bounds at or above CUT_DISABLED are active; NO_CUT is the unset value.
NO_CUT = -999.0
CUT_DISABLED = -997.0


def _coerce(value: Any, *, label: str, ndim: int = 1) -> np.ndarray:
    if isinstance(value, (str, bytes, bytearray)):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")
    if not isinstance(value, (np.ndarray, Sequence)):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise PlotDataError(f"{label} contains non-numeric values") from exc
    if arr.ndim != ndim:
        raise PlotDataError(f"{label} must be {ndim}-D")
    return arr.copy()


def _check_edges(edges: np.ndarray, label: str) -> None:
    if edges.size < 2:
        raise PlotDataError(f"{label} needs at least two edges")
    if np.any(np.diff(edges) <= 0):
        raise PlotDataError(f"{label} must be strictly increasing")


@dataclass
class Histogram:
    """Binned 1-D dataset. Bin indices are 0-based; -1 is underflow, ``n_bins`` overflow."""

    ndim: ClassVar[int] = 1

    name: str
    edges: Any
    contents: Any
    errors: Any = None
    title: str = ""
    entries: int | None = None

    def __post_init__(self) -> None:
        self.edges = _coerce(self.edges, label="edges")
        self.contents = _coerce(self.contents, label="contents")
        _check_edges(self.edges, "edges")
        if self.edges.size != self.contents.size + 1:
            raise PlotDataError(
                f"histogram '{self.name}' has {self.contents.size} bins but {self.edges.size} edges"
            )
        if self.errors is None:
            self.errors = np.sqrt(np.abs(self.contents))
        else:
            self.errors = _coerce(self.errors, label="errors")
            if self.errors.shape != self.contents.shape:
                raise PlotDataError("errors must match contents")
        if self.entries is None:
            self.entries = int(round(float(np.sum(self.contents))))

    @property
    def n_bins(self) -> int:
        return int(self.contents.size)

    @property
    def centers(self) -> np.ndarray:
        return 0.5 * (self.edges[:-1] + self.edges[1:])

    @property
    def widths(self) -> np.ndarray:
        return np.diff(self.edges)

    def bin_volumes(self) -> np.ndarray:
        return self.widths

    def find_bin(self, x: float) -> int:
        return int(np.searchsorted(self.edges, x, side="right")) - 1

    def same_binning(self, other: "Histogram") -> bool:
        return self.edges.shape == other.edges.shape and bool(np.allclose(self.edges, other.edges))

    def integral(self, width: bool = False) -> float:
        if width:
            return float(np.sum(self.contents * self.bin_volumes()))
        return float(np.sum(self.contents))

    def mean(self) -> float:
        total = float(np.sum(self.contents))
        if total == 0:
            return 0.0
        return float(np.sum(self.contents * self.centers) / total)

    def maximum(self) -> float:
        return float(np.max(self.contents))

    def minimum(self) -> float:
        return float(np.min(self.contents))

    def scale(self, factor: float) -> None:
        self.contents = self.contents * factor
        self.errors = self.errors * abs(factor)

    def reset(self) -> None:
        self.contents = np.zeros_like(self.contents)
        self.errors = np.zeros_like(self.errors)

    def copy(self, name: str | None = None):
        out = copy.deepcopy(self)
        if name is not None:
            out.name = name
        return out

    def zero_bins(self, start: int, stop: int) -> None:
        """Zero content and error of bins ``start`` (inclusive) to ``stop`` (exclusive)."""
        start = max(start, 0)
        stop = min(stop, self.n_bins)
        if start < stop:
            self.contents[start:stop] = 0.0
            self.errors[start:stop] = 0.0


@dataclass
class Histogram2D(Histogram):
    """Binned 2-D dataset; contents have shape ``(n_bins_x, n_bins_y)``.

    ``edges`` are the x edges; cuts and bin lookup act on x.
    """

    ndim: ClassVar[int] = 2

    y_edges: Any = None

    def __post_init__(self) -> None:
        self.edges = _coerce(self.edges, label="edges")
        _check_edges(self.edges, "edges")
        if self.y_edges is None:
            raise PlotDataError(f"2-D histogram '{self.name}' needs y_edges")
        self.y_edges = _coerce(self.y_edges, label="y_edges")
        _check_edges(self.y_edges, "y_edges")
        self.contents = _coerce(self.contents, label="contents", ndim=2)
        expected = (self.edges.size - 1, self.y_edges.size - 1)
        if self.contents.shape != expected:
            raise PlotDataError(f"2-D histogram '{self.name}' contents shape {self.contents.shape} != {expected}")
        if self.errors is None:
            self.errors = np.sqrt(np.abs(self.contents))
        else:
            self.errors = _coerce(self.errors, label="errors", ndim=2)
            if self.errors.shape != self.contents.shape:
                raise PlotDataError("errors must match contents")
        if self.entries is None:
            self.entries = int(round(float(np.sum(self.contents))))

    @property
    def n_bins(self) -> int:
        return int(self.contents.shape[0])

    def bin_volumes(self) -> np.ndarray:
        return np.outer(np.diff(self.edges), np.diff(self.y_edges))

    def same_binning(self, other: "Histogram") -> bool:
        return (
            isinstance(other, Histogram2D)
            and super().same_binning(other)
            and self.y_edges.shape == other.y_edges.shape
            and bool(np.allclose(self.y_edges, other.y_edges))
        )

    def mean(self) -> float:
        projection = np.sum(self.contents, axis=1)
        total = float(np.sum(projection))
        if total == 0:
            return 0.0
        return float(np.sum(projection * self.centers) / total)

    def zero_bins(self, start: int, stop: int) -> None:
        start = max(start, 0)
        stop = min(stop, self.n_bins)
        if start < stop:
            self.contents[start:stop, :] = 0.0
            self.errors[start:stop, :] = 0.0


@dataclass
class Graph:
    """Curve-like dataset of (x, y) points with optional symmetric errors."""

    ndim: ClassVar[int] = 1

    name: str
    x: Any
    y: Any
    ex: Any = None
    ey: Any = None
    title: str = ""

    def __post_init__(self) -> None:
        self.x = _coerce(self.x, label="x")
        self.y = _coerce(self.y, label="y")
        if self.x.shape != self.y.shape:
            raise PlotDataError(f"x and y length mismatch: {self.x.size} != {self.y.size}")
        self.ex = np.zeros_like(self.x) if self.ex is None else _coerce(self.ex, label="ex")
        self.ey = np.zeros_like(self.y) if self.ey is None else _coerce(self.ey, label="ey")
        if self.ex.shape != self.x.shape or self.ey.shape != self.y.shape:
            raise PlotDataError("errors must match points")

    @property
    def n_points(self) -> int:
        return int(self.x.size)

    @property
    def entries(self) -> int:
        return self.n_points

    def keep(self, mask: np.ndarray) -> None:
        self.x = self.x[mask]
        self.y = self.y[mask]
        self.ex = self.ex[mask]
        self.ey = self.ey[mask]

    def sorted_by_x(self) -> tuple[np.ndarray, np.ndarray]:
        order = np.argsort(self.x, kind="stable")
        return self.x[order], self.y[order]

    def integral(self, width: bool = False) -> float:
        if self.n_points < 2:
            return 0.0
        x, y = self.sorted_by_x()
        return float(np.sum(np.diff(x) * 0.5 * (y[1:] + y[:-1])))

    def mean(self) -> float:
        if self.n_points == 0:
            return 0.0
        return float(np.mean(self.x))

    def maximum(self) -> float:
        return float(np.max(self.y)) if self.n_points else 0.0

    def minimum(self) -> float:
        return float(np.min(self.y)) if self.n_points else 0.0

    def scale(self, factor: float) -> None:
        self.y = self.y * factor
        self.ey = self.ey * abs(factor)

    def copy(self, name: str | None = None) -> "Graph":
        out = copy.deepcopy(self)
        if name is not None:
            out.name = name
        return out


@dataclass
class Function1D:
    """Analytic curve ``func(x)`` sampled on ``[xmin, xmax]`` when drawn."""

    ndim: ClassVar[int] = 1

    name: str
    func: Callable[[np.ndarray], Any]
    xmin: float
    xmax: float
    title: str = ""
    n_samples: int = 200
    entries: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.xmax <= self.xmin:
            raise PlotDataError(f"function '{self.name}' needs xmax > xmin")
        if self.n_samples < 2:
            raise PlotDataError("n_samples must be >= 2")

    def evaluate(self, x: Any) -> np.ndarray:
        xs = np.asarray(x, dtype=np.float64)
        return np.broadcast_to(np.asarray(self.func(xs), dtype=np.float64), xs.shape).copy()

    def samples(self) -> tuple[np.ndarray, np.ndarray]:
        xs = np.linspace(self.xmin, self.xmax, self.n_samples)
        return xs, self.evaluate(xs)

    def integral(self, width: bool = False) -> float:
        xs, ys = self.samples()
        return float(np.sum(np.diff(xs) * 0.5 * (ys[1:] + ys[:-1])))

    def mean(self) -> float:
        xs, ys = self.samples()
        total = float(np.sum(ys))
        if total == 0:
            return 0.0
        return float(np.sum(xs * ys) / total)

    def maximum(self) -> float:
        return float(np.max(self.samples()[1]))

    def minimum(self) -> float:
        return float(np.min(self.samples()[1]))

    def copy(self, name: str | None = None) -> "Function1D":
        out = copy.copy(self)
        if name is not None:
            out.name = name
        return out


Dataset = Union[Histogram, Histogram2D, Graph, Function1D]


def is_active_cut(value: float | None) -> bool:
    return value is not None and value >= CUT_DISABLED


def cut_histogram(hist: Histogram, high: float | None = NO_CUT, low: float | None = NO_CUT) -> Histogram:
    """Zero every bin from the one containing ``high`` upward and up to the one containing ``low``.

    Each side is skipped independently when its bound is below ``CUT_DISABLED``.
    """
    if is_active_cut(high):
        hist.zero_bins(hist.find_bin(high), hist.n_bins)
    if is_active_cut(low):
        hist.zero_bins(0, hist.find_bin(low) + 1)
    return hist


def cut_graph(graph: Graph, high: float | None = NO_CUT, low: float | None = NO_CUT) -> Graph:
    """Drop points strictly above ``high`` and strictly below ``low``, keeping order."""
    mask = np.ones(graph.n_points, dtype=bool)
    if is_active_cut(high):
        mask &= ~(graph.x > high)
    if is_active_cut(low):
        mask &= ~(graph.x < low)
    graph.keep(mask)
    return graph


def normalize_histogram(hist: Histogram, use_width: bool = False) -> Histogram:
    """Divide by the integral; with ``use_width`` also divide each bin by its width."""
    total = hist.integral()
    if total == 0:
        return hist
    hist.scale(1.0 / total)
    if use_width:
        volumes = hist.bin_volumes()
        hist.contents = hist.contents / volumes
        hist.errors = hist.errors / volumes
    return hist


def _ratio_errors(num, den, num_err, den_err, ratio, correlated: bool) -> np.ndarray:
    out = np.zeros_like(ratio)
    ok = den != 0
    d2 = den[ok] ** 2
    if correlated:
        var = np.abs(((1.0 - 2.0 * ratio[ok]) * num_err[ok] ** 2 + ratio[ok] ** 2 * den_err[ok] ** 2) / d2)
    else:
        var = (num_err[ok] ** 2 * d2 + den_err[ok] ** 2 * num[ok] ** 2) / (d2 * d2)
    out[ok] = np.sqrt(var)
    return out


def divide_histograms(num: Histogram, den: Histogram, correlated: bool = False) -> Histogram:
    """Pointwise ``num / den``; bins with a zero denominator stay 0.

    Different 1-D binnings interpolate the denominator at the numerator bin centers.
    """
    result = num.copy()
    result.reset()
    if isinstance(num, Histogram2D) or isinstance(den, Histogram2D):
        if not (isinstance(num, Histogram2D) and isinstance(den, Histogram2D)):
            raise PlotDataError(f"cannot divide '{num.name}' by '{den.name}': dimensions differ")
        if num.contents.shape != den.contents.shape:
            raise PlotDataError(f"cannot divide '{num.name}' by '{den.name}': binning differs")
        den_values, den_errors = den.contents, den.errors
    elif num.same_binning(den):
        den_values, den_errors = den.contents, den.errors
    else:
        den_values = np.interp(num.centers, den.centers, den.contents)
        den_errors = np.zeros_like(den_values)
    ok = den_values != 0
    result.contents[ok] = num.contents[ok] / den_values[ok]
    result.errors = _ratio_errors(num.contents, den_values, num.errors, den_errors, result.contents, correlated)
    return result


def divide_graphs(num: Graph, den: Graph | Function1D) -> Graph:
    """Divide ``num`` by ``den`` linearly interpolated at the numerator x values."""
    result = num.copy()
    if isinstance(den, Function1D):
        den_values = den.evaluate(num.x)
    else:
        if den.n_points == 0:
            raise PlotDataError(f"denominator '{den.name}' has no points")
        dx, dy = den.sorted_by_x()
        den_values = np.interp(num.x, dx, dy)
    ok = den_values != 0
    result.y = np.zeros_like(num.y)
    result.ey = np.zeros_like(num.ey)
    result.y[ok] = num.y[ok] / den_values[ok]
    result.ey[ok] = num.ey[ok] / np.abs(den_values[ok])
    return result
