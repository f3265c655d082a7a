from __future__ import annotations


class PlotDataError(ValueError):
    """Backing data for a series is missing or of the wrong kind."""


class PlotConfigError(ValueError):
    """A plot configuration value cannot be honoured."""
