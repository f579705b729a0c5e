"""Structured errors raised while resolving column roles and building charts."""

from __future__ import annotations

from typing import Any


class LollipopError(ValueError):
    """Base class for lollipop chart construction issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class InvalidDatasetShape(LollipopError):
    """Raised when the input is not tabular or has no rows/columns."""


class RoleResolutionError(LollipopError):
    """Raised when the column roles cannot be resolved into a valid assignment."""


class UnknownColumnName(RoleResolutionError):
    """Raised when a column hint names a column that does not exist."""


class ColumnIndexOutOfRange(RoleResolutionError):
    """Raised when a positional column hint lies outside the table."""


class NotEnoughNumericColumns(RoleResolutionError):
    """Raised when fewer than two numeric columns are available for the values."""


class ValueColumnNotNumeric(RoleResolutionError):
    """Raised when a value role points at a non-numeric column."""


__all__ = [
    "ColumnIndexOutOfRange",
    "InvalidDatasetShape",
    "LollipopError",
    "NotEnoughNumericColumns",
    "RoleResolutionError",
    "UnknownColumnName",
    "ValueColumnNotNumeric",
]
