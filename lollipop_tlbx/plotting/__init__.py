"""Plotting: rendering surfaces, the interactive chart controller and its factories."""

from .lollipop_chart import LollipopChart
from .lollipop_plots import create_lollipop_chart, plot_classic_lollipop, plot_lollipop
from .surface import MatplotlibSurface, RenderingSurface


__all__ = [
    # Controller
    "LollipopChart",
    # Surfaces
    "MatplotlibSurface",
    "RenderingSurface",
    # Factories
    "create_lollipop_chart",
    "plot_classic_lollipop",
    "plot_lollipop",
]
