from plotframe.api import new_plot
from plotframe.datasets import Function1D, Graph, Histogram, Histogram2D
from plotframe.errors import PlotConfigError, PlotDataError
from plotframe.manager import PlotManager
from plotframe.merge import merge
from plotframe.options import DrawingOption
from plotframe.painter import generate_plot
from plotframe.properties import Axis, Data, DataKind, LegendBox, LegendEntry, Pad, Plot, TextBox
from plotframe.style import PlotStyle, StyleContext, ratio_style, validate_plot_style
from plotframe.tree import from_tree, to_tree

__all__ = [
    "Axis",
    "Data",
    "DataKind",
    "DrawingOption",
    "Function1D",
    "Graph",
    "Histogram",
    "Histogram2D",
    "LegendBox",
    "LegendEntry",
    "Pad",
    "Plot",
    "PlotConfigError",
    "PlotDataError",
    "PlotManager",
    "PlotStyle",
    "StyleContext",
    "TextBox",
    "from_tree",
    "generate_plot",
    "merge",
    "new_plot",
    "ratio_style",
    "to_tree",
    "validate_plot_style",
]
