"""Chart options: role hints and rendering configuration accepted by the chart factories."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from typing import Any


logger = logging.getLogger(__name__)

ColorSpec = str | tuple[float, float, float] | tuple[float, float, float, float]

ROLE_OPTIONS: frozenset[str] = frozenset(
    {"category", "top_name", "second_name", "top_value", "second_value", "values"},
)

_OPTION_ALIASES: dict[str, str] = {
    "categoryColumn": "category",
    "topValueColumn": "top_value",
    "secondValueColumn": "second_value",
    "topNameColumn": "top_name",
    "secondNameColumn": "second_name",
    "valueColumns": "values",
    "nameColumns": "names",
    "markerSize": "marker_size",
    "offsetFraction": "offset_fraction",
    "showDelta": "show_delta",
}


@dataclass(frozen=True)
class LollipopConfig:
    """Rendering options shared by the dumbbell and stem charts.

    Attributes:
        marker_size: Marker area in points^2; ``None`` picks a size from the row count.
        colors: Per-series colors; ``None`` uses the seaborn ``tab10`` palette.
        offset_fraction: Horizontal marker offset as a fraction of the x range.
        show_delta: Draw the signed ``second - top`` difference next to each connector.
        baseline: Baseline value the stems start from.
        title: Axes title (defaults per chart mode).
        xlabel: X axis label (defaults to the category column).
        ylabel: Y axis label.
        figsize: Figure size in inches when the chart creates its own figure.
    """

    marker_size: float | None = None
    colors: tuple[ColorSpec, ...] | None = None
    offset_fraction: float = 0.02
    show_delta: bool = True
    baseline: float = 0.0
    title: str | None = None
    xlabel: str | None = None
    ylabel: str = "Value"
    figsize: tuple[float, float] = (10, 6)

    def __post_init__(self) -> None:
        if self.marker_size is not None and self.marker_size <= 0:
            raise ValueError(f"marker_size must be positive, got {self.marker_size}.")
        if not math.isfinite(self.offset_fraction) or self.offset_fraction < 0:
            raise ValueError(f"offset_fraction must be a finite non-negative number, got {self.offset_fraction}.")
        if self.colors is not None:
            colors = (self.colors,) if isinstance(self.colors, str) else tuple(self.colors)
            if not colors:
                raise ValueError("colors must contain at least one color.")
            object.__setattr__(self, "colors", colors)

    @classmethod
    def from_options(cls, **options: Any) -> LollipopConfig:
        """Build a config from keyword options, ignoring anything that is not a config field."""
        _, config = split_options(options)
        return config


def normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases onto option names and expand ``names`` into the two name roles."""
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        name = _OPTION_ALIASES.get(key, key)
        if name == "names":
            if isinstance(value, str) or len(value) != 2:
                raise ValueError(f"names must contain exactly two column hints, got {value!r}.")
            normalized["top_name"], normalized["second_name"] = value
        else:
            normalized[name] = value
    return normalized


def split_options(options: Mapping[str, Any]) -> tuple[dict[str, Any], LollipopConfig]:
    """Split factory options into role hints and a :class:`LollipopConfig`.

    Unrecognized options are ignored (and logged), not rejected.

    Returns:
        Tuple of (role hints, config).
    """
    normalized = normalize_options(options)
    config_fields = {f.name for f in fields(LollipopConfig)}

    hints = {k: v for k, v in normalized.items() if k in ROLE_OPTIONS}
    config_kwargs = {k: v for k, v in normalized.items() if k in config_fields}
    ignored = sorted(set(normalized) - ROLE_OPTIONS - config_fields)
    if ignored:
        logger.debug("Ignoring unrecognized chart options: %s", ", ".join(ignored))

    if isinstance(config_kwargs.get("colors"), Sequence) and not isinstance(config_kwargs["colors"], str):
        config_kwargs["colors"] = tuple(
            tuple(c) if isinstance(c, Sequence) and not isinstance(c, str) else c for c in config_kwargs["colors"]
        )
    if "figsize" in config_kwargs:
        config_kwargs["figsize"] = tuple(config_kwargs["figsize"])

    return hints, LollipopConfig(**config_kwargs)


DEFAULT_CHART_CFG = LollipopConfig()


__all__ = ["DEFAULT_CHART_CFG", "ROLE_OPTIONS", "ColorSpec", "LollipopConfig", "normalize_options", "split_options"]
