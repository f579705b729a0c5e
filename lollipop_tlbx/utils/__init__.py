from .chart_config import DEFAULT_CHART_CFG, LollipopConfig, split_options
from .paths import get_data_dir, get_dataset_path
from .plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


__all__ = [
    "DEFAULT_CHART_CFG",
    "DEFAULT_PLOT_CFG",
    "LollipopConfig",
    "PlottingConfig",
    "get_data_dir",
    "get_dataset_path",
    "split_options",
]
