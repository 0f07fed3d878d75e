"""Visualization module."""

from .plots import (
    plot_split_windows,
    plot_panel_coverage,
    create_split_visualizations,
)

__all__ = [
    "plot_split_windows",
    "plot_panel_coverage",
    "create_split_visualizations",
]
