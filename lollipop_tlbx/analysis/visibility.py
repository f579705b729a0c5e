"""Legend-driven visibility state and the connector/marker encoding derived from it.

Everything here is pure: a legend activation is an explicit :class:`LegendEvent`,
:func:`transition` maps ``(state, geometry, event)`` onto the next state and its
full :class:`DerivedEncoding`, and :func:`diff_encodings` tells the chart which
attributes actually changed.

Connector policy in dumbbell mode:

==================  ==========================================  =========
visible series      connector color                             width
==================  ==========================================  =========
both                top color if top-dominant, else second      1.6
exactly one         faded grey                                  1.0
none                hidden                                      -
==================  ==========================================  =========
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

import seaborn as sns
from matplotlib.colors import to_rgb

from lollipop_tlbx.utils.chart_config import LollipopConfig

from .geometry import DumbbellGeometry, SeriesGeometry, StemGeometry


RGB = tuple[float, float, float]

HIDDEN_PREFIX = "(off) "
HIDDEN_MARKER_ALPHA = 0.25
FADED_COLOR: RGB = (0.85, 0.85, 0.85)


@dataclass(frozen=True)
class VisibilityState:
    """One visibility flag per declared series."""

    visible: tuple[bool, ...]

    @classmethod
    def initial(cls, n_series: int) -> VisibilityState:
        """All series visible."""
        return cls(visible=(True,) * n_series)

    def toggle(self, index: int) -> VisibilityState:
        """Flip the flag of series ``index``; every other flag is kept."""
        if not 0 <= index < len(self.visible):
            raise IndexError(f"Series index {index} out of range for {len(self.visible)} series.")
        flags = list(self.visible)
        flags[index] = not flags[index]
        return VisibilityState(visible=tuple(flags))

    @property
    def n_visible(self) -> int:
        return sum(self.visible)

    def __len__(self) -> int:
        return len(self.visible)

    def __getitem__(self, index: int) -> bool:
        return self.visible[index]


@dataclass(frozen=True)
class LegendEvent:
    """A single legend-item activation."""

    series_index: int


class ConnectorRegime(StrEnum):
    """Connector coloring regime of a dumbbell chart."""

    COMPARED = "compared"
    """Both series visible: connectors colored by dominance."""
    PARTIAL = "partial"
    """One series visible: faded, thinner connectors."""
    HIDDEN = "hidden"
    """No series visible: connectors hidden."""


@dataclass(frozen=True)
class ConnectorStyle:
    color: RGB
    width: float
    visible: bool


@dataclass(frozen=True)
class SeriesStyle:
    visible: bool
    alpha: float


@dataclass(frozen=True)
class SeriesPalette:
    """Colors and connector widths used by the encoding.

    Attributes:
        colors: One RGB color per series.
        faded: Connector color while only one series is visible.
        connector_width: Connector width while both series are visible.
        faded_width: Connector width while only one series is visible.
    """

    colors: tuple[RGB, ...]
    faded: RGB = FADED_COLOR
    connector_width: float = 1.6
    faded_width: float = 1.0

    @property
    def top(self) -> RGB:
        return self.colors[0]

    @property
    def second(self) -> RGB:
        return self.colors[1]

    @classmethod
    def from_config(cls, config: LollipopConfig, n_series: int, palette: str = "tab10") -> SeriesPalette:
        """Resolve per-series colors from ``config.colors`` or a seaborn palette.

        Explicit colors shorter than the series count are replaced by the first
        color repeated for every series.
        """
        n_colors = max(2, n_series)
        if config.colors is None:
            colors: Sequence = sns.color_palette(palette, n_colors)
        elif len(config.colors) < n_colors:
            colors = [config.colors[0]] * n_colors
        else:
            colors = config.colors
        return cls(colors=tuple(to_rgb(c) for c in colors))


@dataclass(frozen=True)
class DerivedEncoding:
    """Connector styles, marker styles and legend labels for one visibility state.

    Attributes:
        regime: Connector regime (``None`` for stems, which have no connectors).
        connectors: Style per row connector (empty for stems).
        series: Style per series (markers or stems).
        legend_labels: Legend text per series.
    """

    regime: ConnectorRegime | None
    connectors: tuple[ConnectorStyle, ...]
    series: tuple[SeriesStyle, ...]
    legend_labels: tuple[str, ...]


@dataclass(frozen=True)
class EncodingDiff:
    """Attributes that differ between two encodings.

    Attributes:
        connectors: ``(row, style)`` pairs of changed connectors.
        series: ``(series, style)`` pairs of changed series.
        legend_labels: Full label tuple when any label changed, else ``None``.
    """

    connectors: tuple[tuple[int, ConnectorStyle], ...] = ()
    series: tuple[tuple[int, SeriesStyle], ...] = ()
    legend_labels: tuple[str, ...] | None = None

    @property
    def is_empty(self) -> bool:
        return not self.connectors and not self.series and self.legend_labels is None


def legend_labels(names: Sequence[str], state: VisibilityState) -> tuple[str, ...]:
    """Legend text per series: hidden series get the ``(off)`` prefix."""
    return tuple(
        name if visible else f"{HIDDEN_PREFIX}{name}" for name, visible in zip(names, state.visible, strict=True)
    )


def connector_regime(state: VisibilityState) -> ConnectorRegime:
    if state.n_visible == len(state):
        return ConnectorRegime.COMPARED
    if state.n_visible == 0:
        return ConnectorRegime.HIDDEN
    return ConnectorRegime.PARTIAL


def _encode_dumbbell(geometry: DumbbellGeometry, state: VisibilityState, palette: SeriesPalette) -> DerivedEncoding:
    regime = connector_regime(state)
    if regime is ConnectorRegime.COMPARED:
        connectors = tuple(
            ConnectorStyle(
                color=palette.top if dominant else palette.second,
                width=palette.connector_width,
                visible=True,
            )
            for dominant in geometry.top_dominant
        )
    else:
        style = ConnectorStyle(
            color=palette.faded,
            width=palette.faded_width,
            visible=regime is ConnectorRegime.PARTIAL,
        )
        connectors = (style,) * geometry.n_rows

    # hidden dumbbell markers stay drawn, only dimmed
    series = tuple(
        SeriesStyle(visible=True, alpha=1.0 if visible else HIDDEN_MARKER_ALPHA) for visible in state.visible
    )
    return DerivedEncoding(
        regime=regime,
        connectors=connectors,
        series=series,
        legend_labels=legend_labels(geometry.series_names, state),
    )


def _encode_stems(geometry: StemGeometry, state: VisibilityState) -> DerivedEncoding:
    return DerivedEncoding(
        regime=None,
        connectors=(),
        series=tuple(SeriesStyle(visible=visible, alpha=1.0) for visible in state.visible),
        legend_labels=legend_labels(geometry.series_names, state),
    )


def encode(geometry: SeriesGeometry, state: VisibilityState, palette: SeriesPalette) -> DerivedEncoding:
    """Recompute the full encoding for ``state``."""
    if len(state) != geometry.n_series:
        raise ValueError(f"Visibility state has {len(state)} flags for {geometry.n_series} series.")
    if isinstance(geometry, DumbbellGeometry):
        return _encode_dumbbell(geometry, state, palette)
    return _encode_stems(geometry, state)


def transition(
    state: VisibilityState,
    geometry: SeriesGeometry,
    event: LegendEvent,
    palette: SeriesPalette,
) -> tuple[VisibilityState, DerivedEncoding]:
    """Apply one legend activation and return the next state with its encoding."""
    next_state = state.toggle(event.series_index)
    return next_state, encode(geometry, next_state, palette)


def diff_encodings(old: DerivedEncoding, new: DerivedEncoding) -> EncodingDiff:
    """Collect the connector, series and label changes between two encodings."""
    return EncodingDiff(
        connectors=tuple(
            (row, style)
            for row, (prev, style) in enumerate(zip(old.connectors, new.connectors, strict=True))
            if prev != style
        ),
        series=tuple(
            (idx, style) for idx, (prev, style) in enumerate(zip(old.series, new.series, strict=True)) if prev != style
        ),
        legend_labels=new.legend_labels if new.legend_labels != old.legend_labels else None,
    )
