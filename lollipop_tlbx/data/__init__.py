"""Data module for dataset classes."""

from .column_kinds import ColumnKind, classify_columns, classify_series
from .tabular_dataset import TabularDataset, as_view
from .views import DatasetView


__all__ = ["ColumnKind", "DatasetView", "TabularDataset", "as_view", "classify_columns", "classify_series"]
