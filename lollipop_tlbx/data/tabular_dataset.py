"""Dataset wrapper handing tabular data to the role resolver and geometry builder."""

import logging
from collections.abc import Hashable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from lollipop_tlbx.errors import InvalidDatasetShape
from lollipop_tlbx.utils.paths import get_dataset_path

from .column_kinds import ColumnKind, classify_columns
from .views import DatasetView


if TYPE_CHECKING:
    from lollipop_tlbx.analysis.geometry import GeometryBuilder
    from lollipop_tlbx.analysis.role_resolver import ColumnHint, ColumnRoleAssignment, RoleResolver
    from lollipop_tlbx.utils.chart_config import LollipopConfig

logger = logging.getLogger(__name__)


class TabularDataset:
    """Read-only tabular dataset used as chart input.

    The wrapped DataFrame is borrowed from the caller and never modified.

    Example:
        >>> from lollipop_tlbx.data import TabularDataset
        >>> ds = TabularDataset.from_csv()
        >>> roles = ds.make_role_resolver().fit().result()
        >>> geometry = ds.make_geometry_builder(roles).fit().result()
        >>> geometry.top_dominant
    """

    def __init__(self, df: pd.DataFrame, pretty_names: Mapping[Hashable, str] | None = None) -> None:
        """Initialize the dataset.

        Args:
            df: DataFrame with one row per chart position.
            pretty_names: Optional display labels per column (falls back to title-cased names).

        Raises:
            InvalidDatasetShape: If ``df`` is not a DataFrame, has no rows or columns,
                or has duplicated column names.
        """
        self._df = validate_frame(df)
        self._pretty_names = dict(pretty_names or {})
        self._kinds: dict[Hashable, ColumnKind] | None = None

    @classmethod
    def from_csv(
        cls,
        csv_path: str | Path | None = None,
        *,
        index_col: int | str | None = None,
        parse_dates: Sequence[str] | None = None,
        **read_csv_kwargs: object,
    ) -> "TabularDataset":
        """Load a dataset from a CSV file.

        Args:
            csv_path: Path to the CSV file (defaults to the bundled team scores sample)
            index_col: Column to use as explicit row labels
            parse_dates: Columns parsed as datetimes (classified as temporal)
            **read_csv_kwargs: Forwarded to :func:`pandas.read_csv`

        Returns:
            TabularDataset instance with the loaded data
        """
        csv_path = get_dataset_path("team_scores") if csv_path is None else Path(csv_path)
        df = pd.read_csv(csv_path, index_col=index_col, parse_dates=list(parse_dates or []), **read_csv_kwargs)
        logger.debug("Loaded %d rows x %d columns from %s", len(df), len(df.columns), csv_path)
        return cls(df)

    @property
    def df(self) -> pd.DataFrame:
        """Get the wrapped DataFrame."""
        return self._df

    @property
    def column_kinds(self) -> dict[Hashable, ColumnKind]:
        """Column kind per column, classified once and cached."""
        if self._kinds is None:
            self._kinds = classify_columns(self._df)
        return self._kinds

    @property
    def numeric_cols(self) -> list[Hashable]:
        """Numeric and boolean column names in column order."""
        return [col for col, kind in self.column_kinds.items() if kind.is_numeric_like]

    @property
    def row_labels(self) -> tuple[str, ...]:
        """Explicit row labels from a non-default index, else ``"1".."N"``."""
        if isinstance(self._df.index, pd.RangeIndex):
            return tuple(str(i) for i in range(1, len(self._df) + 1))
        return tuple(str(label) for label in self._df.index)

    def get_pretty_name(self, column_name: Hashable) -> str:
        """Convert column name to pretty name for legends and axis labels."""
        if column_name in self._pretty_names:
            return self._pretty_names[column_name]
        if isinstance(column_name, str):
            return column_name.replace("_", " ").title()
        return str(column_name)

    def view(self) -> DatasetView:
        """Build an immutable dataset view for the analyzers and the chart controller."""
        return DatasetView(
            df=self._df,
            pretty_by_col={col: self.get_pretty_name(col) for col in self._df.columns},
            kinds=self.column_kinds,
            row_labels=self.row_labels,
        )

    def make_role_resolver(
        self,
        *,
        category: "ColumnHint | None" = None,
        top_name: "ColumnHint | None" = None,
        second_name: "ColumnHint | None" = None,
        top_value: "ColumnHint | None" = None,
        second_value: "ColumnHint | None" = None,
    ) -> "RoleResolver":
        """Instantiate a dumbbell role resolver (with inference) for this dataset."""
        from lollipop_tlbx.analysis.role_resolver import RoleHints, RoleResolver

        hints = RoleHints(
            category=category,
            top_name=top_name,
            second_name=second_name,
            top_value=top_value,
            second_value=second_value,
        )
        return RoleResolver(self.view(), hints)

    def make_classic_role_resolver(
        self,
        *,
        category: "ColumnHint",
        values: "ColumnHint | Sequence[ColumnHint]",
    ) -> "RoleResolver":
        """Instantiate a classic role resolver (explicit category and value columns)."""
        from lollipop_tlbx.analysis.role_resolver import RoleResolver

        return RoleResolver.classic(self.view(), category=category, values=values)

    def make_geometry_builder(
        self,
        roles: "ColumnRoleAssignment",
        config: "LollipopConfig | None" = None,
    ) -> "GeometryBuilder":
        """Instantiate a geometry builder for resolved roles."""
        from lollipop_tlbx.analysis.geometry import GeometryBuilder

        return GeometryBuilder(self.view(), roles, config)


def validate_frame(df: object) -> pd.DataFrame:
    """Check that ``df`` is a non-empty DataFrame with unique column names."""
    if not isinstance(df, pd.DataFrame):
        raise InvalidDatasetShape(
            f"Expected a pandas DataFrame, got {type(df).__name__}.",
            context={"type": type(df).__name__},
        )
    if len(df.columns) == 0 or len(df) == 0:
        raise InvalidDatasetShape(
            f"Dataset must have at least one row and one column, got shape {df.shape}.",
            context={"shape": df.shape},
        )
    if df.columns.has_duplicates:
        duplicated = df.columns[df.columns.duplicated()].tolist()
        raise InvalidDatasetShape(f"Duplicated column names: {duplicated}.", context={"duplicated": duplicated})
    return df


def as_view(data: "pd.DataFrame | TabularDataset | DatasetView") -> DatasetView:
    """Normalize the accepted dataset inputs into a :class:`DatasetView`."""
    if isinstance(data, DatasetView):
        return data
    if isinstance(data, TabularDataset):
        return data.view()
    return TabularDataset(data).view()
