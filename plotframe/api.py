from __future__ import annotations

from plotframe.properties import Plot

DEFAULT_ASPECT_RATIO = 1.0


def new_plot(
    name: str,
    figure_group: str,
    width: int | None = None,
    height: int | None = None,
    *,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    figure_category: str | None = None,
    plot_template_name: str | None = None,
) -> Plot:
    """Plot with identity set; a single given dimension fixes the other through ``aspect_ratio``.

    Without dimensions the canvas size is left to the style.
    """
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be > 0")
    if width is None and height is not None:
        if height <= 0:
            raise ValueError("height must be > 0")
        width = max(1, int(round(height * aspect_ratio)))
    elif width is not None and height is None:
        if width <= 0:
            raise ValueError("width must be > 0")
        height = max(1, int(round(width / aspect_ratio)))

    plot = Plot(name=name, figure_group=figure_group)
    if width is not None and height is not None:
        plot.set_dimensions(width, height)
    if figure_category:
        plot.set_figure_category(figure_category)
    if plot_template_name:
        plot.set_plot_template_name(plot_template_name)
    return plot
