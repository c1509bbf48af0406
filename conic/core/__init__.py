"""
Core modules for CPTu processing.

This package contains the processing stages:
- cptu_io: CSV reading with schema checks, CSV writing
- row_filter: Removal / masking of rows holding error indicators
- depth: Uniform depth column regeneration
- basic_params: Stresses, corrected cone resistance, Fr and Bq
- derived_params: Iterative solver for n, Qtn and Ic
- classification: Soil behaviour type zones from Ic
- batch_workflow: Complete workflow orchestration
"""

from . import (
    columns,
    cptu_io,
    row_filter,
    depth,
    basic_params,
    derived_params,
    classification,
    batch_workflow,
)

__all__ = [
    "columns",
    "cptu_io",
    "row_filter",
    "depth",
    "basic_params",
    "derived_params",
    "classification",
    "batch_workflow",
]
