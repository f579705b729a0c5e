"""Series geometry: plot coordinates, marker offsets, dominance flags and label positions."""

import logging
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Self

import numpy as np
import pandas as pd

from lollipop_tlbx.data.column_kinds import ColumnKind
from lollipop_tlbx.data.tabular_dataset import TabularDataset, as_view
from lollipop_tlbx.data.views import DatasetView
from lollipop_tlbx.utils.chart_config import DEFAULT_CHART_CFG, LollipopConfig

from .base_analyser import BaseAnalyser
from .role_resolver import ColumnRoleAssignment, DumbbellMode, StemMode


logger = logging.getLogger(__name__)

SECOND_MARKER_SCALE = 0.7
"""Second-series markers are drawn smaller so coinciding points stay distinguishable."""


def _frozen(values: np.ndarray) -> np.ndarray:
    values.setflags(write=False)
    return values


@dataclass(frozen=True, eq=False)
class CategoryAxis:
    """X positions of the rows plus the tick layout of the category axis.

    Attributes:
        positions: X position per row.
        is_ordinal: True when category values were mapped to ``1..K``.
        tick_positions: Positions of the category ticks (ordinal axes only).
        tick_labels: Labels of the category ticks (ordinal axes only).
        label: Display label of the category column.
    """

    positions: np.ndarray
    is_ordinal: bool
    tick_positions: np.ndarray | None
    tick_labels: tuple[str, ...] | None
    label: str

    @property
    def x_range(self) -> float:
        """Span of the x positions, 1 when every row shares one position."""
        finite = self.positions[np.isfinite(self.positions)]
        span = float(finite.max() - finite.min()) if finite.size else 0.0
        return span if span > 0 else 1.0


@dataclass(frozen=True, eq=False)
class DumbbellGeometry:
    """Per-row geometry of a two-series dumbbell chart.

    Attributes:
        axis: Category axis layout.
        top: Top-series value per row.
        second: Second-series value per row.
        offset: Horizontal distance of each marker from its connector.
        top_dominant: ``top >= second`` per row (ties count as top-dominant).
        delta_labels: Signed ``second - top`` text per row, ``None`` if suppressed.
        top_annotations: Text placed above each top marker.
        second_annotations: Text placed below each second marker.
        annotation_offset: Vertical distance between a marker and its annotation.
        row_labels: Label per row.
        series_names: Display names of the top and second series.
        marker_size: Top-series marker area (second markers use ``SECOND_MARKER_SCALE``).
        x_limits: Suggested x axis limits.
        y_limits: Suggested y axis limits.
    """

    axis: CategoryAxis
    top: np.ndarray
    second: np.ndarray
    offset: float
    top_dominant: np.ndarray
    delta_labels: tuple[str | None, ...] | None
    top_annotations: tuple[str, ...]
    second_annotations: tuple[str, ...]
    annotation_offset: float
    row_labels: tuple[str, ...]
    series_names: tuple[str, str]
    marker_size: float
    x_limits: tuple[float, float]
    y_limits: tuple[float, float]

    @property
    def n_rows(self) -> int:
        return len(self.top)

    @property
    def n_series(self) -> int:
        return 2

    @property
    def x(self) -> np.ndarray:
        return self.axis.positions

    @property
    def top_x(self) -> np.ndarray:
        return self.axis.positions - self.offset

    @property
    def second_x(self) -> np.ndarray:
        return self.axis.positions + self.offset

    @property
    def line_y(self) -> np.ndarray:
        """Connector endpoints ``[min, max]`` per row, shape ``(n_rows, 2)``."""
        return np.column_stack([np.fmin(self.top, self.second), np.fmax(self.top, self.second)])

    @property
    def delta_positions(self) -> np.ndarray:
        """Anchor of each delta label: right of the connector, at its vertical midpoint."""
        return np.column_stack([self.axis.positions + self.offset, (self.top + self.second) / 2])


@dataclass(frozen=True, eq=False)
class StemGeometry:
    """Geometry of independent stems, one series per value column.

    Attributes:
        axis: Category axis layout.
        values: One array of values per series.
        baseline: Value every stem starts from.
        row_labels: Label per row.
        series_names: Display name per series.
        marker_size: Marker area of every stem head.
        x_limits: Suggested x axis limits.
        y_limits: Suggested y axis limits.
    """

    axis: CategoryAxis
    values: tuple[np.ndarray, ...]
    baseline: float
    row_labels: tuple[str, ...]
    series_names: tuple[str, ...]
    marker_size: float
    x_limits: tuple[float, float]
    y_limits: tuple[float, float]

    @property
    def n_rows(self) -> int:
        return len(self.axis.positions)

    @property
    def n_series(self) -> int:
        return len(self.values)

    @property
    def x(self) -> np.ndarray:
        return self.axis.positions


SeriesGeometry = DumbbellGeometry | StemGeometry


def _tick_label(value: object) -> str:
    if isinstance(value, pd.Timestamp) and value == value.normalize():
        return value.date().isoformat()
    return str(value)


def map_categories(series: pd.Series, kind: ColumnKind, label: str) -> CategoryAxis:
    """Map category values onto x positions.

    Numeric and boolean categories pass through unchanged; every other kind is
    mapped to ``1..K`` in order of first occurrence (stable, not sorted).
    """
    if kind.is_numeric_like:
        return CategoryAxis(
            positions=_frozen(series.astype("float64").to_numpy(copy=True)),
            is_ordinal=False,
            tick_positions=None,
            tick_labels=None,
            label=label,
        )

    codes, uniques = pd.factorize(series, sort=False, use_na_sentinel=False)
    return CategoryAxis(
        positions=_frozen(codes.astype("float64") + 1.0),
        is_ordinal=True,
        tick_positions=_frozen(np.arange(1, len(uniques) + 1, dtype="float64")),
        tick_labels=tuple(_tick_label(u) for u in uniques),
        label=label,
    )


def default_marker_size(n_rows: int) -> float:
    """Marker area shrinking with the number of rows, never below 36 points^2."""
    return float(max(36, round(110 * min(1.0, 200 / max(n_rows, 1)))))


def _value_bounds(*arrays: np.ndarray) -> tuple[float, float, float]:
    stacked = np.concatenate([np.ravel(a) for a in arrays])
    finite = stacked[np.isfinite(stacked)]
    if finite.size == 0:
        return 0.0, 0.0, 1.0
    ymin, ymax = float(finite.min()), float(finite.max())
    return ymin, ymax, max(1.0, ymax - ymin)


def _x_limits(axis: CategoryAxis, offset: float = 0.0) -> tuple[float, float]:
    finite = axis.positions[np.isfinite(axis.positions)]
    if finite.size == 0:
        return (0.5, 1.5)
    if axis.is_ordinal:
        return (float(finite.min()) - 0.5, float(finite.max()) + 0.5)
    pad = 0.05 * axis.x_range + offset
    return (float(finite.min()) - pad, float(finite.max()) + pad)


def format_delta(top: float, second: float) -> str | None:
    """Signed 2-significant-digit difference ``second - top``; ``None`` for missing values."""
    delta = second - top
    if not np.isfinite(delta):
        return None
    return f"{delta:+.2g}"


def _annotations(view: DatasetView, column: Hashable | None) -> tuple[str, ...]:
    if column is None:
        return view.row_labels
    return tuple("" if pd.isna(value) else str(value) for value in view.df[column])


class GeometryBuilder(BaseAnalyser):
    """Turn resolved roles into plot coordinates.

    The builder is pure: it reads the dataset view and never mutates it, and
    every call to :meth:`fit` recomputes the geometry from scratch.

    Example:
        >>> roles = resolve_roles(df)
        >>> geometry = GeometryBuilder(as_view(df), roles).fit().result()
        >>> geometry.top_dominant, geometry.offset
    """

    def __init__(
        self,
        view: DatasetView,
        roles: ColumnRoleAssignment,
        config: LollipopConfig | None = None,
    ) -> None:
        self._view = view
        self._roles = roles
        self._config = config or DEFAULT_CHART_CFG
        self._result: SeriesGeometry | None = None

    def fit(self) -> Self:
        """Compute the geometry for the configured chart mode."""
        view = self._view
        category = self._roles.category
        axis = map_categories(view.df[category], view.kinds[category], view.pretty(category))

        mode = self._roles.mode
        if isinstance(mode, DumbbellMode):
            self._result = self._build_dumbbell(axis, mode)
        elif isinstance(mode, StemMode):
            self._result = self._build_stems(axis, mode)
        else:
            raise TypeError(f"Unsupported chart mode: {type(mode).__name__}")
        return self

    def result(self) -> SeriesGeometry:
        if self._result is None:
            raise ValueError("Must call fit() before result()")
        return self._result

    def _values(self, column: Hashable) -> np.ndarray:
        return _frozen(self._view.df[column].astype("float64").to_numpy(copy=True))

    def _marker_size(self) -> float:
        if self._config.marker_size is not None:
            return float(self._config.marker_size)
        return default_marker_size(self._view.n_rows)

    def _build_dumbbell(self, axis: CategoryAxis, mode: DumbbellMode) -> DumbbellGeometry:
        view = self._view
        top = self._values(mode.top_value)
        second = self._values(mode.second_value)

        offset = self._config.offset_fraction * axis.x_range
        # ties resolve to the top series
        top_dominant = _frozen(top >= second)

        delta_labels = (
            tuple(format_delta(t, s) for t, s in zip(top, second, strict=True)) if self._config.show_delta else None
        )

        ymin, ymax, y_range = _value_bounds(top, second)
        margin = 0.06 * y_range
        logger.debug("Dumbbell geometry: %d rows, offset=%.4g, y=[%.4g, %.4g]", len(top), offset, ymin, ymax)

        return DumbbellGeometry(
            axis=axis,
            top=top,
            second=second,
            offset=offset,
            top_dominant=top_dominant,
            delta_labels=delta_labels,
            top_annotations=_annotations(view, mode.top_name),
            second_annotations=_annotations(view, mode.second_name),
            annotation_offset=max(0.02 * y_range, 0.2),
            row_labels=view.row_labels,
            series_names=(view.pretty(mode.top_value), view.pretty(mode.second_value)),
            marker_size=self._marker_size(),
            x_limits=_x_limits(axis, offset),
            y_limits=(ymin - margin, ymax + margin),
        )

    def _build_stems(self, axis: CategoryAxis, mode: StemMode) -> StemGeometry:
        view = self._view
        values = tuple(self._values(col) for col in mode.value_columns)
        baseline = float(self._config.baseline)

        ymin, ymax, y_range = _value_bounds(*values, np.array([baseline]))
        margin = 0.06 * y_range

        return StemGeometry(
            axis=axis,
            values=values,
            baseline=baseline,
            row_labels=view.row_labels,
            series_names=tuple(view.pretty(col) for col in mode.value_columns),
            marker_size=self._marker_size(),
            x_limits=_x_limits(axis),
            y_limits=(ymin - margin, ymax + margin),
        )


def build_geometry(
    dataset: pd.DataFrame | TabularDataset | DatasetView,
    roles: ColumnRoleAssignment,
    config: LollipopConfig | None = None,
) -> SeriesGeometry:
    """Build the geometry of ``dataset`` for already resolved ``roles``."""
    return GeometryBuilder(as_view(dataset), roles, config).fit().result()
