"""Chart factories: resolve roles from keyword options and build a :class:`LollipopChart`."""

import logging
from typing import Any

import pandas as pd

from lollipop_tlbx.analysis.role_resolver import RoleHints, RoleResolver
from lollipop_tlbx.data.tabular_dataset import TabularDataset, as_view
from lollipop_tlbx.data.views import DatasetView
from lollipop_tlbx.errors import RoleResolutionError
from lollipop_tlbx.utils.chart_config import split_options
from lollipop_tlbx.utils.plotting_config import PlottingConfig

from .lollipop_chart import LollipopChart
from .surface import RenderingSurface


logger = logging.getLogger(__name__)


def plot_lollipop(
    data: pd.DataFrame | TabularDataset | DatasetView,
    *,
    plotting_config: PlottingConfig | None = None,
    surface: RenderingSurface | None = None,
    **options: Any,
) -> LollipopChart:
    """Create an interactive dumbbell chart, inferring every role that is not given.

    Args:
        data: Table with a category column, two name columns and at least two
            numeric columns.
        plotting_config: Style applied to the created figure.
        surface: Draw into this surface instead of a new matplotlib figure.
        **options: Role hints (``category``, ``top_value``, ``second_value``,
            ``top_name``, ``second_name``, or their camelCase spellings) and
            :class:`LollipopConfig` fields. Unrecognized options are ignored.

    Returns:
        The drawn chart; toggling legend entries hides and shows series.

    Raises:
        InvalidDatasetShape: If ``data`` is not a non-empty table.
        RoleResolutionError: If the roles cannot be resolved.
    """
    hints, config = split_options(options)
    if "values" in hints:
        logger.debug("Ignoring 'values' for the dumbbell chart; use plot_classic_lollipop for explicit series.")
        hints.pop("values")

    view = as_view(data)
    roles = RoleResolver(view, RoleHints(**hints)).fit().result()
    return LollipopChart(view, roles, config, surface=surface, plotting_config=plotting_config)


create_lollipop_chart = plot_lollipop


def plot_classic_lollipop(
    data: pd.DataFrame | TabularDataset | DatasetView,
    *,
    category: Any = None,
    values: Any = None,
    plotting_config: PlottingConfig | None = None,
    surface: RenderingSurface | None = None,
    **options: Any,
) -> LollipopChart:
    """Create a chart from an explicit category column and value columns.

    Two value columns give a dumbbell chart annotated with row labels; any
    other count gives independent stems drawn from ``baseline``.
    """
    hints, config = split_options(options)
    category = category if category is not None else hints.get("category")
    values = values if values is not None else hints.get("values")
    if category is None or values is None:
        raise RoleResolutionError(
            "You must provide 'category' and 'values'.",
            context={"category": category, "values": values},
        )

    view = as_view(data)
    roles = RoleResolver.classic(view, category=category, values=values).fit().result()
    return LollipopChart(view, roles, config, surface=surface, plotting_config=plotting_config)


__all__ = ["create_lollipop_chart", "plot_classic_lollipop", "plot_lollipop"]
