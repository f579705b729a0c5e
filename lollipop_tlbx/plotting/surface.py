"""Drawing contract consumed by the chart controller and its matplotlib implementation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.backend_bases import PickEvent
from matplotlib.container import StemContainer
from matplotlib.figure import Figure
from matplotlib.legend import Legend

from lollipop_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


logger = logging.getLogger(__name__)

Color = tuple[float, float, float]
LegendCallback = Callable[[int], None]


class RenderingSurface(Protocol):
    """Primitives the chart controller needs from a drawing backend.

    Handles returned by the ``add_*`` methods are opaque to the controller;
    it only passes them back to the ``set_*`` methods.
    """

    def add_connector(
        self,
        x: tuple[float, float],
        y: tuple[float, float],
        *,
        color: Color,
        width: float,
        visible: bool,
    ) -> Any: ...

    def add_markers(
        self,
        x: np.ndarray,
        y: np.ndarray,
        *,
        size: float,
        color: Color,
        marker: str,
        label: str,
    ) -> Any: ...

    def add_stem(
        self,
        x: np.ndarray,
        y: np.ndarray,
        *,
        baseline: float,
        color: Color,
        marker_size: float,
        label: str,
    ) -> Any: ...

    def add_reference_line(self, y: float) -> Any: ...

    def add_text(self, x: float, y: float, text: str, *, ha: str = "center", va: str = "center") -> Any: ...

    def add_legend(self, handles: Sequence[Any], labels: Sequence[str], on_activate: LegendCallback) -> Any: ...

    def set_connector_style(
        self,
        handle: Any,
        *,
        color: Color | None = None,
        width: float | None = None,
        visible: bool | None = None,
    ) -> None: ...

    def set_series_style(self, handle: Any, *, visible: bool | None = None, alpha: float | None = None) -> None: ...

    def set_legend_labels(self, legend: Any, labels: Sequence[str]) -> None: ...

    def set_category_ticks(self, positions: np.ndarray, labels: Sequence[str]) -> None: ...

    def set_limits(self, x_limits: tuple[float, float], y_limits: tuple[float, float]) -> None: ...

    def decorate(self, *, xlabel: str, ylabel: str, title: str) -> None: ...

    def refresh(self) -> None: ...

    def close(self) -> None: ...


class MatplotlibSurface:
    """:class:`RenderingSurface` drawing into a matplotlib ``Axes``.

    Legend entries (both the handle and the text) are pickable; a pick event on
    an entry calls the registered callback with the entry's series index.
    """

    def __init__(self, fig: Figure, ax: Axes, plotting_config: PlottingConfig | None = None) -> None:
        self.fig = fig
        self.ax = ax
        self._cfg = plotting_config or DEFAULT_PLOT_CFG
        self._legend_targets: dict[Artist, int] = {}
        self._on_activate: LegendCallback | None = None
        self._pick_cid: int | None = None

    @classmethod
    def create(
        cls,
        figsize: tuple[float, float] = (10, 6),
        plotting_config: PlottingConfig | None = None,
    ) -> MatplotlibSurface:
        """Create a new figure with one axes, styled by ``plotting_config``."""
        cfg = plotting_config or DEFAULT_PLOT_CFG
        with cfg.apply():
            fig, ax = plt.subplots(figsize=figsize)
        return cls(fig, ax, cfg)

    # ------------------------------------------------------------------ primitives
    def add_connector(self, x, y, *, color, width, visible):
        (line,) = self.ax.plot(x, y, color=color, linewidth=width, solid_capstyle="round", zorder=1)
        line.set_visible(visible)
        return line

    def add_markers(self, x, y, *, size, color, marker, label):
        return self.ax.scatter(
            x,
            y,
            s=size,
            color=[color],
            marker=marker,
            edgecolors="k",
            linewidths=0.6,
            label=label,
            zorder=3,
        )

    def add_stem(self, x, y, *, baseline, color, marker_size, label):
        container = self.ax.stem(x, y, bottom=baseline, basefmt=" ", label=label)
        container.markerline.set_color(color)
        container.markerline.set_markersize(float(np.sqrt(marker_size)))
        container.stemlines.set_color(color)
        container.stemlines.set_linewidth(1.5)
        return container

    def add_reference_line(self, y):
        return self.ax.axhline(y, color="0.3", linewidth=1, zorder=0)

    def add_text(self, x, y, text, *, ha="center", va="center"):
        return self.ax.text(x, y, text, ha=ha, va=va, fontsize=self._cfg.annotation_size, clip_on=True)

    def add_legend(self, handles, labels, on_activate) -> Legend:
        legend = self.ax.legend(list(handles), list(labels), loc="best")
        self._legend_targets.clear()
        for index, (handle, text) in enumerate(zip(legend.legend_handles, legend.get_texts(), strict=True)):
            for artist in (handle, text):
                if artist is None:
                    continue
                artist.set_picker(True)
                self._legend_targets[artist] = index
        self._on_activate = on_activate
        if self._pick_cid is None:
            self._pick_cid = self.fig.canvas.mpl_connect("pick_event", self._on_pick)
        return legend

    def _on_pick(self, event: PickEvent) -> None:
        index = self._legend_targets.get(event.artist)
        if index is None or self._on_activate is None:
            return
        logger.debug("Legend entry %d activated", index)
        self._on_activate(index)

    # ------------------------------------------------------------------ updates
    def set_connector_style(self, handle, *, color=None, width=None, visible=None) -> None:
        if color is not None:
            handle.set_color(color)
        if width is not None:
            handle.set_linewidth(width)
        if visible is not None:
            handle.set_visible(visible)

    def set_series_style(self, handle, *, visible=None, alpha=None) -> None:
        artists = (handle.markerline, handle.stemlines) if isinstance(handle, StemContainer) else (handle,)
        for artist in artists:
            if visible is not None:
                artist.set_visible(visible)
            if alpha is not None:
                artist.set_alpha(alpha)

    def set_legend_labels(self, legend, labels) -> None:
        for text, label in zip(legend.get_texts(), labels, strict=True):
            text.set_text(label)

    def set_category_ticks(self, positions, labels) -> None:
        self.ax.set_xticks(positions, labels=list(labels), rotation=self._cfg.tick_rotation, ha="right")

    def set_limits(self, x_limits, y_limits) -> None:
        self.ax.set_xlim(*x_limits)
        self.ax.set_ylim(*y_limits)

    def decorate(self, *, xlabel, ylabel, title) -> None:
        self.ax.set_xlabel(xlabel)
        self.ax.set_ylabel(ylabel)
        self.ax.set_title(title)
        self.ax.grid(True, alpha=0.3)

    def refresh(self) -> None:
        self.fig.canvas.draw_idle()

    def close(self) -> None:
        if self._pick_cid is not None:
            self.fig.canvas.mpl_disconnect(self._pick_cid)
            self._pick_cid = None
        plt.close(self.fig)
