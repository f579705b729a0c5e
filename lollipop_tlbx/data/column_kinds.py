"""Column kind classification for tabular inputs."""

from __future__ import annotations

from enum import StrEnum

import pandas as pd


class ColumnKind(StrEnum):
    """Element type of a dataset column as seen by the role resolver.

    Kinds:
    - ``numeric``: int/float columns (including object columns holding only numbers)
    - ``boolean``: bool columns
    - ``text``: string columns
    - ``categorical``: pandas ``category`` columns
    - ``temporal``: datetime, period and timedelta columns
    - ``other``: anything else (mixed objects, all-missing columns, ...)
    """

    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    TEXT = "text"
    CATEGORICAL = "categorical"
    TEMPORAL = "temporal"
    OTHER = "other"

    @property
    def is_text_like(self) -> bool:
        """Whether the column can serve as a category or name label."""
        return self in {ColumnKind.TEXT, ColumnKind.CATEGORICAL, ColumnKind.TEMPORAL}

    @property
    def is_numeric_like(self) -> bool:
        """Whether the column can serve as a value series."""
        return self in {ColumnKind.NUMERIC, ColumnKind.BOOLEAN}


_INFERRED_KINDS: dict[str, ColumnKind] = {
    "string": ColumnKind.TEXT,
    "boolean": ColumnKind.BOOLEAN,
    "integer": ColumnKind.NUMERIC,
    "floating": ColumnKind.NUMERIC,
    "mixed-integer-float": ColumnKind.NUMERIC,
    "decimal": ColumnKind.NUMERIC,
    "datetime": ColumnKind.TEMPORAL,
    "datetime64": ColumnKind.TEMPORAL,
    "date": ColumnKind.TEMPORAL,
    "period": ColumnKind.TEMPORAL,
    "timedelta": ColumnKind.TEMPORAL,
    "timedelta64": ColumnKind.TEMPORAL,
}


def classify_series(series: pd.Series) -> ColumnKind:
    """Classify a single column by its dtype, inspecting values for object columns."""
    dtype = series.dtype
    if pd.api.types.is_bool_dtype(dtype):
        return ColumnKind.BOOLEAN
    if isinstance(dtype, pd.CategoricalDtype):
        return ColumnKind.CATEGORICAL
    if (
        pd.api.types.is_datetime64_any_dtype(dtype)
        or pd.api.types.is_timedelta64_dtype(dtype)
        or isinstance(dtype, pd.PeriodDtype)
    ):
        return ColumnKind.TEMPORAL
    if pd.api.types.is_numeric_dtype(dtype):
        return ColumnKind.NUMERIC

    inferred = pd.api.types.infer_dtype(series, skipna=True)
    return _INFERRED_KINDS.get(inferred, ColumnKind.OTHER)


def classify_columns(df: pd.DataFrame) -> dict[str, ColumnKind]:
    """Classify every column of ``df``, preserving column order."""
    return {col: classify_series(df[col]) for col in df.columns}


__all__ = ["ColumnKind", "classify_columns", "classify_series"]
