"""Read-only views over dataset content."""

from collections.abc import Hashable, Mapping
from dataclasses import dataclass

import pandas as pd

from .column_kinds import ColumnKind


@dataclass(frozen=True)
class DatasetView:
    """Immutable snapshot of dataset data and related metadata.

    Attributes:
        df: Dataframe holding the rows to chart.
        pretty_by_col: Mapping from column names to display-friendly labels.
        kinds: Column kind per column, in column order.
        row_labels: One label per row (explicit index labels or ``"1".."N"``).
    """

    df: pd.DataFrame
    """Dataframe holding the rows to chart."""
    pretty_by_col: Mapping[Hashable, str]
    """Mapping from column names to display-friendly labels."""
    kinds: Mapping[Hashable, ColumnKind]
    row_labels: tuple[str, ...]
    """One label per row, used for annotations when no name columns are resolved."""

    @property
    def columns(self) -> list[Hashable]:
        """Column names in their original order."""
        return list(self.kinds)

    @property
    def n_rows(self) -> int:
        return len(self.df)

    @property
    def text_like_cols(self) -> list[Hashable]:
        """Columns usable as category or name labels, in column order."""
        return [col for col, kind in self.kinds.items() if kind.is_text_like]

    @property
    def numeric_like_cols(self) -> list[Hashable]:
        """Columns usable as value series, in column order."""
        return [col for col, kind in self.kinds.items() if kind.is_numeric_like]

    def position(self, column: Hashable) -> int:
        """Return the 0-based position of ``column``."""
        return self.columns.index(column)

    def pretty(self, column: Hashable) -> str:
        """Display label for ``column``."""
        return self.pretty_by_col.get(column, str(column))
