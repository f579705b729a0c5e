"""Interactive lollipop chart: draws a geometry once and applies legend toggles as diffs."""

import logging
from typing import Any

import numpy as np
import pandas as pd
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from lollipop_tlbx.analysis.geometry import SECOND_MARKER_SCALE, DumbbellGeometry, GeometryBuilder, StemGeometry
from lollipop_tlbx.analysis.role_resolver import ColumnRoleAssignment
from lollipop_tlbx.analysis.visibility import (
    DerivedEncoding,
    EncodingDiff,
    LegendEvent,
    SeriesPalette,
    VisibilityState,
    diff_encodings,
    encode,
    transition,
)
from lollipop_tlbx.data.tabular_dataset import TabularDataset, as_view
from lollipop_tlbx.data.views import DatasetView
from lollipop_tlbx.utils.chart_config import DEFAULT_CHART_CFG, LollipopConfig
from lollipop_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig

from .surface import MatplotlibSurface, RenderingSurface


logger = logging.getLogger(__name__)

_CONNECTOR_ATTRS = ("color", "width", "visible")
_SERIES_ATTRS = ("visible", "alpha")


class LollipopChart:
    """Lollipop chart bound to one dataset snapshot and one rendering surface.

    The geometry is computed before any surface exists, so invalid input never
    leaves a figure behind. Legend activations go through
    :meth:`handle_legend_event`, which recomputes the encoding for the new
    visibility state and pushes only the changed attributes to the surface.

    Example:
        >>> roles = resolve_roles(df)
        >>> chart = LollipopChart(df, roles)
        >>> chart.handle_legend_event(LegendEvent(series_index=1))
        >>> chart.legend.get_texts()[1].get_text()
        '(off) Second Score'
    """

    def __init__(
        self,
        dataset: pd.DataFrame | TabularDataset | DatasetView,
        roles: ColumnRoleAssignment,
        config: LollipopConfig | None = None,
        *,
        surface: RenderingSurface | None = None,
        plotting_config: PlottingConfig | None = None,
    ) -> None:
        self.view = as_view(dataset)
        self.roles = roles
        self.config = config or DEFAULT_CHART_CFG
        self.plotting_config = plotting_config or DEFAULT_PLOT_CFG

        self.geometry = GeometryBuilder(self.view, roles, self.config).fit().result()
        self.palette = SeriesPalette.from_config(self.config, self.geometry.n_series, self.plotting_config.palette)
        self.state = VisibilityState.initial(self.geometry.n_series)
        self.encoding: DerivedEncoding = encode(self.geometry, self.state, self.palette)

        self.lines: list[Any] = []
        self.markers: list[Any] = []
        self.stems: list[Any] = []
        self.texts: list[Any] = []
        self.legend: Any = None

        owns_surface = surface is None
        self.surface: RenderingSurface = (
            MatplotlibSurface.create(self.config.figsize, self.plotting_config) if surface is None else surface
        )
        try:
            self._draw()
        except Exception:
            if owns_surface:
                self.surface.close()
            raise

    # ------------------------------------------------------------------ handles
    @property
    def fig(self) -> Figure | None:
        return getattr(self.surface, "fig", None)

    @property
    def ax(self) -> Axes | None:
        return getattr(self.surface, "ax", None)

    @property
    def series_handles(self) -> list[Any]:
        """Marker collections (dumbbell) or stem containers (stems), in series order."""
        return self.markers if isinstance(self.geometry, DumbbellGeometry) else self.stems

    # ------------------------------------------------------------------ drawing
    def _draw(self) -> None:
        geometry = self.geometry
        if isinstance(geometry, DumbbellGeometry):
            self._draw_dumbbell(geometry)
            default_title = "Lollipop Plot"
        else:
            self._draw_stems(geometry)
            default_title = "Lollipop Plot (stems)"

        axis = geometry.axis
        if axis.is_ordinal:
            self.surface.set_category_ticks(axis.tick_positions, axis.tick_labels)
        self.surface.set_limits(geometry.x_limits, geometry.y_limits)
        self.surface.decorate(
            xlabel=self.config.xlabel or axis.label,
            ylabel=self.config.ylabel,
            title=self.config.title or default_title,
        )
        self.legend = self.surface.add_legend(
            self.series_handles,
            self.encoding.legend_labels,
            self._on_legend_activate,
        )
        self.surface.refresh()
        logger.debug("Drew %d rows in %d series", geometry.n_rows, geometry.n_series)

    def _draw_dumbbell(self, geometry: DumbbellGeometry) -> None:
        for row, ((y0, y1), style) in enumerate(zip(geometry.line_y, self.encoding.connectors, strict=True)):
            x = float(geometry.x[row])
            self.lines.append(
                self.surface.add_connector(
                    (x, x),
                    (float(y0), float(y1)),
                    color=style.color,
                    width=style.width,
                    visible=style.visible,
                )
            )

        top_name, second_name = geometry.series_names
        self.markers = [
            self.surface.add_markers(
                geometry.top_x,
                geometry.top,
                size=geometry.marker_size,
                color=self.palette.top,
                marker="o",
                label=top_name,
            ),
            self.surface.add_markers(
                geometry.second_x,
                geometry.second,
                size=geometry.marker_size * SECOND_MARKER_SCALE,
                color=self.palette.second,
                marker="s",
                label=second_name,
            ),
        ]

        self._annotate(geometry)
        if geometry.delta_labels is not None:
            for (x, y), label in zip(geometry.delta_positions, geometry.delta_labels, strict=True):
                if label is not None:
                    self.texts.append(self.surface.add_text(float(x), float(y), label, ha="left"))

    def _annotate(self, geometry: DumbbellGeometry) -> None:
        offset = geometry.annotation_offset
        rows = zip(
            geometry.top_x,
            geometry.top,
            geometry.top_annotations,
            geometry.second_x,
            geometry.second,
            geometry.second_annotations,
            strict=True,
        )
        for top_x, top, top_text, second_x, second, second_text in rows:
            if top_text and np.isfinite(top):
                self.texts.append(self.surface.add_text(float(top_x), float(top + offset), top_text, va="bottom"))
            if second_text and np.isfinite(second):
                self.texts.append(
                    self.surface.add_text(float(second_x), float(second - offset), second_text, va="top")
                )

    def _draw_stems(self, geometry: StemGeometry) -> None:
        self.surface.add_reference_line(geometry.baseline)
        for color, values, name in zip(self.palette.colors, geometry.values, geometry.series_names, strict=False):
            self.stems.append(
                self.surface.add_stem(
                    geometry.x,
                    values,
                    baseline=geometry.baseline,
                    color=color,
                    marker_size=geometry.marker_size,
                    label=name,
                )
            )

    # ------------------------------------------------------------------ interaction
    def _on_legend_activate(self, series_index: int) -> None:
        self.handle_legend_event(LegendEvent(series_index=series_index))

    def handle_legend_event(self, event: LegendEvent) -> EncodingDiff:
        """Toggle one series and update the surface with what changed.

        Returns:
            The difference between the previous and the new encoding.
        """
        next_state, next_encoding = transition(self.state, self.geometry, event, self.palette)
        diff = diff_encodings(self.encoding, next_encoding)
        previous = self.encoding
        self.state, self.encoding = next_state, next_encoding

        logger.debug(
            "Series %d toggled: visible=%s, %d connector and %d series updates",
            event.series_index,
            next_state.visible,
            len(diff.connectors),
            len(diff.series),
        )
        if diff.is_empty:
            return diff
        self._apply(diff, previous)
        self.surface.refresh()
        return diff

    def _apply(self, diff: EncodingDiff, previous: DerivedEncoding) -> None:
        for row, style in diff.connectors:
            changed = _changed_attrs(previous.connectors[row], style, _CONNECTOR_ATTRS)
            self.surface.set_connector_style(self.lines[row], **changed)
        handles = self.series_handles
        for index, style in diff.series:
            changed = _changed_attrs(previous.series[index], style, _SERIES_ATTRS)
            self.surface.set_series_style(handles[index], **changed)
        if diff.legend_labels is not None:
            self.surface.set_legend_labels(self.legend, diff.legend_labels)

    def close(self) -> None:
        """Release the rendering surface."""
        self.surface.close()


def _changed_attrs(old: object, new: object, attrs: tuple[str, ...]) -> dict[str, Any]:
    return {attr: getattr(new, attr) for attr in attrs if getattr(old, attr) != getattr(new, attr)}


__all__ = ["LollipopChart"]
