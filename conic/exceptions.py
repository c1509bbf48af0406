"""
Exception types raised by the conic package.

Fatal problems (unreadable files, missing columns, bad configuration) are
raised as exceptions. Per-row numeric problems are never raised; they are
reported as NaN values and convergence flags in the output table.
"""

from typing import Iterable, Optional


class ConicError(Exception):
    """Base class for all conic errors."""


class InvalidDataError(ConicError, ValueError):
    """Input data is empty, malformed or cannot be processed."""


class SchemaError(InvalidDataError):
    """Required columns are missing or cannot be coerced to float."""

    def __init__(self, message: str, columns: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.columns = list(columns) if columns is not None else []


class ConfigError(ConicError, ValueError):
    """Invalid configuration value or unsupported configuration file."""


__all__ = [
    "ConicError",
    "InvalidDataError",
    "SchemaError",
    "ConfigError",
]
