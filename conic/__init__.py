"""
CONIC - CPTu Sounding Processing
================================

A toolkit for cleaning and interpreting Cone Penetration Test (CPTu) data.

This package provides:
- Removal or masking of rows holding logger error codes
- Basic stress and normalisation parameters
- Iterative solution of the soil behaviour type index Ic
- Soil behaviour type classification
- Command-line interface

Example usage:
    >>> from conic.core import batch_workflow
    >>> results = batch_workflow.run_complete_workflow("sounding.csv", "out.csv")
"""

__version__ = "1.0.0"

from .core import (
    cptu_io,
    row_filter,
    depth,
    basic_params,
    derived_params,
    classification,
    batch_workflow,
)
from .core.row_filter import remove_rows, replace_rows
from .core.basic_params import add_basic_params
from .core.derived_params import add_derived_params, solve_row
from .exceptions import ConicError, ConfigError, InvalidDataError, SchemaError

__all__ = [
    "cptu_io",
    "row_filter",
    "depth",
    "basic_params",
    "derived_params",
    "classification",
    "batch_workflow",
    "remove_rows",
    "replace_rows",
    "add_basic_params",
    "add_derived_params",
    "solve_row",
    "ConicError",
    "ConfigError",
    "InvalidDataError",
    "SchemaError",
    "__version__",
]
