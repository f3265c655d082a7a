from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from plotframe.constants import NAME_GROUP_SEPARATOR
from plotframe.datasets import Dataset
from plotframe.errors import PlotConfigError
from plotframe.merge import merge
from plotframe.painter import generate_plot
from plotframe.properties import Plot
from plotframe.style import DEFAULT_STYLE, PlotStyle, ratio_style
from plotframe.tree import from_tree, to_tree

LOGGER = logging.getLogger(__name__)


class PlotManager:
    """Registry of plot templates, plots, styles and the dataset pool they draw from."""

    def __init__(self) -> None:
        self.templates: dict[str, Plot] = {}
        self.plots: dict[str, Plot] = {}
        self.datasets: dict[str, Dataset] = {}
        self.styles: dict[str, PlotStyle] = {DEFAULT_STYLE.name: DEFAULT_STYLE}
        ratio = ratio_style()
        self.styles[ratio.name] = ratio

    # registry

    def add_template(self, template: Plot, name: str | None = None) -> None:
        key = name or template.name
        if not key:
            raise PlotConfigError("template needs a name")
        self.templates[key] = copy.deepcopy(template)

    def add_plot(self, plot: Plot) -> None:
        if not plot.name or not plot.figure_group:
            raise PlotConfigError("plot needs a name and a figure group")
        if plot.unique_name in self.plots:
            LOGGER.warning("replacing plot '%s'", plot.unique_name)
        self.plots[plot.unique_name] = copy.deepcopy(plot)

    def get_plot(self, unique_name: str) -> Plot:
        try:
            return self.plots[unique_name]
        except KeyError:
            raise PlotConfigError(f"plot '{unique_name}' not registered") from None

    def remove_plot(self, unique_name: str) -> None:
        self.plots.pop(unique_name, None)

    def add_style(self, style: PlotStyle) -> None:
        self.styles[style.name] = style

    # dataset pool

    def add_dataset(self, handle: Dataset, input_id: str) -> str:
        key = f"{handle.name}{NAME_GROUP_SEPARATOR}{input_id}"
        self.datasets[key] = handle
        return key

    def add_datasets(self, handles: list[Dataset], input_id: str) -> list[str]:
        return [self.add_dataset(handle, input_id) for handle in handles]

    def clear_datasets(self) -> None:
        self.datasets.clear()

    # rendering

    def apply_template(self, plot: Plot) -> Plot:
        """``template ⊕ plot`` for the plot's template name; the plot itself when there is none."""
        name = plot.plot_template_name
        if not name:
            return plot
        template = self.templates.get(name)
        if template is None:
            LOGGER.warning("template '%s' for plot '%s' not found", name, plot.unique_name)
            return plot
        return merge(template, plot)

    def generate(self, unique_name: str, backend: Any, style: str | PlotStyle = DEFAULT_STYLE.name) -> Any | None:
        plot = self.apply_template(self.get_plot(unique_name))
        if isinstance(style, str):
            if style not in self.styles:
                raise PlotConfigError(f"style '{style}' not registered")
            style = self.styles[style]
        return generate_plot(plot, style, self.datasets, backend)

    def generate_all(
        self,
        backend: Any,
        style: str | PlotStyle = DEFAULT_STYLE.name,
        figure_group: str | None = None,
    ) -> dict[str, Any]:
        results = {}
        for unique_name, plot in self.plots.items():
            if figure_group is not None and plot.figure_group != figure_group:
                continue
            results[unique_name] = self.generate(unique_name, backend, style)
        return results

    # property tree

    def export_tree(self) -> dict[str, Any]:
        tree: dict[str, Any] = {}
        if self.templates:
            tree["templates"] = {name: to_tree(plot) for name, plot in self.templates.items()}
        if self.plots:
            tree["plots"] = {name: to_tree(plot) for name, plot in self.plots.items()}
        return tree

    def import_tree(self, tree: Mapping[str, Any]) -> None:
        unknown = set(tree) - {"templates", "plots"}
        if unknown:
            raise PlotConfigError(f"unknown sections in plot tree: {sorted(unknown)}")
        for name, node in tree.get("templates", {}).items():
            self.add_template(from_tree(Plot, node), name)
        for node in tree.get("plots", {}).values():
            self.add_plot(from_tree(Plot, node))
