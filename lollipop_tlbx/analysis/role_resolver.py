"""Column role resolution: which columns feed the category axis, names and value series."""

import logging
from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from typing import Self

import numpy as np
import pandas as pd

from lollipop_tlbx.data.tabular_dataset import TabularDataset, as_view
from lollipop_tlbx.data.views import DatasetView
from lollipop_tlbx.errors import (
    ColumnIndexOutOfRange,
    NotEnoughNumericColumns,
    RoleResolutionError,
    UnknownColumnName,
    ValueColumnNotNumeric,
)

from .base_analyser import BaseAnalyser


logger = logging.getLogger(__name__)

ColumnHint = Hashable
"""A column name, or an ``int`` giving the 0-based column position."""


@dataclass(frozen=True)
class RoleHints:
    """Optional explicit roles for the dumbbell chart; ``None`` means infer."""

    category: ColumnHint | None = None
    top_name: ColumnHint | None = None
    second_name: ColumnHint | None = None
    top_value: ColumnHint | None = None
    second_value: ColumnHint | None = None


@dataclass(frozen=True)
class DumbbellMode:
    """Two compared value columns joined by one connector per row."""

    top_value: Hashable
    second_value: Hashable
    top_name: Hashable | None = None
    second_name: Hashable | None = None

    @property
    def value_columns(self) -> tuple[Hashable, Hashable]:
        return (self.top_value, self.second_value)

    @property
    def name_columns(self) -> tuple[Hashable, Hashable] | None:
        if self.top_name is None or self.second_name is None:
            return None
        return (self.top_name, self.second_name)


@dataclass(frozen=True)
class StemMode:
    """Independent stems, one series per value column."""

    value_columns: tuple[Hashable, ...]


ChartMode = DumbbellMode | StemMode


@dataclass(frozen=True)
class ColumnRoleAssignment:
    """Resolved column roles.

    Attributes:
        category: Column supplying the x position of each row.
        mode: Chart variant with its value (and name) columns.
        category_index: 0-based position of the category column.
        value_indices: 0-based positions of the value columns, in series order.
        name_indices: 0-based positions of the two name columns (dumbbell mode only).
        column_count: Number of columns of the resolved dataset.
    """

    category: Hashable
    mode: ChartMode
    category_index: int
    value_indices: tuple[int, ...]
    name_indices: tuple[int, int] | None
    column_count: int

    @property
    def value_columns(self) -> tuple[Hashable, ...]:
        return tuple(self.mode.value_columns)

    @property
    def n_series(self) -> int:
        return len(self.value_columns)

    @property
    def is_dumbbell(self) -> bool:
        return isinstance(self.mode, DumbbellMode)


class RoleResolver(BaseAnalyser):
    """Resolve which columns play the category, name and value roles.

    Dumbbell mode (default constructor) infers every role that is not hinted:

    - category: first text-like column, else the first column
    - names: text-like columns after removing the category, padded with the
      remaining columns in column order until two are found
    - values: the two numeric-like columns with the largest column sums
      (ties keep column order)

    Classic mode (:meth:`classic`) only validates the explicit category and
    value columns; two value columns give a dumbbell, any other count stems.

    Example:
        >>> resolver = RoleResolver(view, RoleHints(category="team"))
        >>> roles = resolver.fit().result()
        >>> roles.mode.top_value, roles.mode.second_value
    """

    def __init__(self, view: DatasetView, hints: RoleHints | None = None) -> None:
        """Initialize the resolver with a dataset view and optional role hints."""
        self._view = view
        self._hints = hints or RoleHints()
        self._classic_values: tuple[ColumnHint, ...] | None = None
        self._result: ColumnRoleAssignment | None = None

    @classmethod
    def classic(
        cls,
        view: DatasetView,
        *,
        category: ColumnHint,
        values: ColumnHint | Sequence[ColumnHint],
    ) -> Self:
        """Build a resolver for explicitly supplied category and value columns."""
        if category is None:
            raise RoleResolutionError("A category column is required.")
        values = list(values) if pd.api.types.is_list_like(values) else [values]
        if len(values) == 0:
            raise RoleResolutionError("At least one value column is required.")

        resolver = cls(view, RoleHints(category=category))
        resolver._classic_values = tuple(values)
        return resolver

    # ------------------------------------------------------------------ public API
    def fit(self) -> Self:
        """Resolve the roles, raising a :class:`RoleResolutionError` subclass on failure."""
        if self._classic_values is None:
            self._result = self._resolve_dumbbell()
        else:
            self._result = self._resolve_classic(self._classic_values)
        logger.debug(
            "Resolved roles: category=%r mode=%r",
            self._result.category,
            self._result.mode,
        )
        return self

    def result(self) -> ColumnRoleAssignment:
        if self._result is None:
            raise ValueError("Must call fit() before result()")
        return self._result

    # ------------------------------------------------------------------ hint handling
    def resolve_hint(self, hint: ColumnHint, role: str) -> Hashable:
        """Map a name or 0-based position onto a column name."""
        columns = self._view.columns
        if isinstance(hint, bool | np.bool_) or not isinstance(hint, Hashable):
            raise RoleResolutionError(
                f"Column hint for '{role}' must be a column name or position, got {hint!r}.",
                context={"role": role, "hint": hint},
            )
        if isinstance(hint, int | np.integer):
            position = int(hint)
            if not 0 <= position < len(columns):
                raise ColumnIndexOutOfRange(
                    f"Column position {position} for '{role}' is outside [0, {len(columns) - 1}].",
                    context={"role": role, "hint": position, "column_count": len(columns)},
                )
            return columns[position]
        if hint not in self._view.kinds:
            raise UnknownColumnName(
                f"Column '{hint}' for '{role}' not found. Available: {columns}",
                context={"role": role, "hint": hint},
            )
        return hint

    def _resolve_value_hint(self, hint: ColumnHint, role: str) -> Hashable:
        column = self.resolve_hint(hint, role)
        kind = self._view.kinds[column]
        if not kind.is_numeric_like:
            raise ValueColumnNotNumeric(
                f"Column '{column}' selected for '{role}' is {kind}, expected numeric or boolean.",
                context={"role": role, "column": column, "kind": str(kind)},
            )
        return column

    # ------------------------------------------------------------------ inference
    def default_category(self) -> Hashable:
        """First text-like column, falling back to the first column."""
        text_like = self._view.text_like_cols
        if text_like:
            return text_like[0]
        fallback = self._view.columns[0]
        logger.info("No text-like column found; using first column %r as category.", fallback)
        return fallback

    def default_names(self, category: Hashable, exclude: Sequence[Hashable] = ()) -> list[Hashable]:
        """Text-like columns other than the category, padded from the remaining columns.

        Columns in ``exclude`` (already hinted name columns) are never returned.
        """
        taken = {category, *exclude}
        names = [col for col in self._view.text_like_cols if col not in taken]
        if len(names) < 2:
            remaining = [col for col in self._view.columns if col not in taken and col not in names]
            padding = remaining[: 2 - len(names)]
            if padding:
                logger.info("Padding name columns with %r.", padding)
            names.extend(padding)
        return names[:2]

    def rank_value_columns(self) -> list[Hashable]:
        """Numeric-like columns ranked by column sum (descending, ties in column order)."""
        numeric = self._view.numeric_like_cols
        sums = {col: _column_sum(self._view.df[col]) for col in numeric}
        return sorted(numeric, key=lambda col: -sums[col])

    def _resolve_dumbbell(self) -> ColumnRoleAssignment:
        hints = self._hints
        view = self._view

        category = (
            self.resolve_hint(hints.category, "category") if hints.category is not None else self.default_category()
        )

        numeric = view.numeric_like_cols
        if len(numeric) < 2:
            raise NotEnoughNumericColumns(
                f"Need at least two numeric columns for values, found {len(numeric)}: {numeric}",
                context={"numeric_columns": numeric},
            )

        slots = (("top_name", hints.top_name), ("second_name", hints.second_name))
        hinted = {role: self.resolve_hint(hint, role) for role, hint in slots if hint is not None}
        fallback = iter(self.default_names(category, exclude=list(hinted.values())))
        names: list[Hashable] = []
        for role, _ in slots:
            name = hinted[role] if role in hinted else next(fallback, None)
            if name is None:
                raise RoleResolutionError(
                    f"Cannot infer '{role}': need at least three columns, got {len(view.columns)}.",
                    context={"role": role, "column_count": len(view.columns)},
                )
            names.append(name)

        top = self._resolve_value_hint(hints.top_value, "top_value") if hints.top_value is not None else None
        second = (
            self._resolve_value_hint(hints.second_value, "second_value") if hints.second_value is not None else None
        )
        if top is None or second is None:
            ranked = self.rank_value_columns()
            if top is None and second is None:
                top, second = ranked[0], ranked[1]
            elif top is None:
                top = next(col for col in ranked if col != second)
            else:
                second = next(col for col in ranked if col != top)
        if top == second:
            raise RoleResolutionError(
                f"Top and second value columns must differ, both resolved to '{top}'.",
                context={"column": top},
            )

        mode = DumbbellMode(top_value=top, second_value=second, top_name=names[0], second_name=names[1])
        return ColumnRoleAssignment(
            category=category,
            mode=mode,
            category_index=view.position(category),
            value_indices=(view.position(top), view.position(second)),
            name_indices=(view.position(names[0]), view.position(names[1])),
            column_count=len(view.columns),
        )

    def _resolve_classic(self, values: tuple[ColumnHint, ...]) -> ColumnRoleAssignment:
        view = self._view
        category = self.resolve_hint(self._hints.category, "category")
        value_cols = tuple(self._resolve_value_hint(hint, f"values[{i}]") for i, hint in enumerate(values))
        if len(set(value_cols)) != len(value_cols):
            raise RoleResolutionError(f"Value columns must be distinct, got {list(value_cols)}.")

        mode: ChartMode
        if len(value_cols) == 2:
            mode = DumbbellMode(top_value=value_cols[0], second_value=value_cols[1])
        else:
            mode = StemMode(value_columns=value_cols)

        return ColumnRoleAssignment(
            category=category,
            mode=mode,
            category_index=view.position(category),
            value_indices=tuple(view.position(col) for col in value_cols),
            name_indices=None,
            column_count=len(view.columns),
        )


def _column_sum(series: pd.Series) -> float:
    return float(series.astype("float64").sum())


def resolve_roles(
    dataset: pd.DataFrame | TabularDataset | DatasetView,
    *,
    category: ColumnHint | None = None,
    top_name: ColumnHint | None = None,
    second_name: ColumnHint | None = None,
    top_value: ColumnHint | None = None,
    second_value: ColumnHint | None = None,
) -> ColumnRoleAssignment:
    """Resolve dumbbell roles for ``dataset``, inferring every role that is not hinted.

    Raises:
        InvalidDatasetShape: If the dataset is not a non-empty DataFrame.
        RoleResolutionError: Or one of its subclasses when the roles cannot be resolved.
    """
    hints = RoleHints(
        category=category,
        top_name=top_name,
        second_name=second_name,
        top_value=top_value,
        second_value=second_value,
    )
    return RoleResolver(as_view(dataset), hints).fit().result()


def resolve_classic_roles(
    dataset: pd.DataFrame | TabularDataset | DatasetView,
    *,
    category: ColumnHint,
    values: ColumnHint | Sequence[ColumnHint],
) -> ColumnRoleAssignment:
    """Validate explicit classic-chart roles (no inference)."""
    return RoleResolver.classic(as_view(dataset), category=category, values=values).fit().result()
