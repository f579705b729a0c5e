from .analysis import LegendEvent, resolve_classic_roles, resolve_roles
from .data import TabularDataset
from .errors import (
    ColumnIndexOutOfRange,
    InvalidDatasetShape,
    LollipopError,
    NotEnoughNumericColumns,
    RoleResolutionError,
    UnknownColumnName,
    ValueColumnNotNumeric,
)
from .plotting import LollipopChart, create_lollipop_chart, plot_classic_lollipop, plot_lollipop
from .utils import LollipopConfig, PlottingConfig


__version__ = "0.1.0"

__all__ = [
    "ColumnIndexOutOfRange",
    "InvalidDatasetShape",
    "LegendEvent",
    "LollipopChart",
    "LollipopConfig",
    "LollipopError",
    "NotEnoughNumericColumns",
    "PlottingConfig",
    "RoleResolutionError",
    "TabularDataset",
    "UnknownColumnName",
    "ValueColumnNotNumeric",
    "create_lollipop_chart",
    "plot_classic_lollipop",
    "plot_lollipop",
    "resolve_classic_roles",
    "resolve_roles",
]
