"""
Depth column fix-up.

Loggers sometimes record jittery or duplicated depth readings. adjust_depth
rewrites the depth column as an evenly spaced sequence start + i * spacing.
"""

from typing import Dict, Optional

import numpy as np
import pandas as pd

from ..exceptions import InvalidDataError, SchemaError
from .columns import resolve_columns


def adjust_depth(
    table: pd.DataFrame,
    start_depth: Optional[float] = None,
    spacing: Optional[float] = None,
    columns: Optional[Dict] = None,
) -> pd.DataFrame:
    """Return a copy of ``table`` with a uniformly spaced depth column.

    start_depth defaults to the first depth value and spacing to the mean of
    consecutive depth differences. Spacing is rounded to 3 decimals (mm).
    """
    cols = resolve_columns(columns)
    depth_col = cols["depth"]
    if depth_col not in table.columns:
        raise SchemaError(f"Missing depth column: {depth_col}", [depth_col])

    n_rows = len(table)
    if n_rows == 0:
        raise InvalidDataError("Cannot adjust depth: table is empty")
    if n_rows == 1 and spacing is None:
        raise InvalidDataError(
            "Cannot adjust depth: table has only 1 row and no spacing was given"
        )

    depth = table[depth_col].to_numpy(dtype=float)

    if start_depth is None:
        start_depth = float(depth[0])
        if not np.isfinite(start_depth):
            raise InvalidDataError("Cannot adjust depth: first depth value is not finite")

    if spacing is None:
        diffs = np.diff(depth)
        diffs = diffs[np.isfinite(diffs)]
        if diffs.size == 0:
            raise InvalidDataError("Cannot adjust depth: no finite depth differences")
        spacing = float(np.mean(diffs))

    spacing = round(spacing, 3)

    out = table.copy()
    out[depth_col] = start_depth + np.arange(n_rows, dtype=float) * spacing
    return out


__all__ = ["adjust_depth"]
