"""
Row filtering for sentinel-flagged CPTu records.

Field loggers write error codes such as -9999 into any channel that failed
to record. This module finds rows carrying those indicator values and either
drops them or overwrites them in place:

  remove_rows   keep a row only if no column holds an indicator (AND)
  replace_rows  mask every column of a row if any column holds one (OR)

Indicator matching is exact float equality. NaN is only treated as an
indicator when it is explicitly part of the indicator set.
"""

import logging
from typing import Iterable, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def _split_indicators(indicators: Iterable[float]):
    values = np.asarray(list(indicators), dtype=float)
    has_nan = bool(np.isnan(values).any()) if values.size else False
    return values[~np.isnan(values)], has_nan


def _column_hits(series: pd.Series, values: np.ndarray, has_nan: bool) -> np.ndarray:
    data = series.to_numpy()
    hits = np.isin(data, values)
    if has_nan:
        hits |= pd.isna(data)
    return hits


def indicator_mask(table: pd.DataFrame, indicators: Iterable[float], how: str = "any") -> np.ndarray:
    """Build a per-row boolean mask of indicator membership.

    how='any' marks rows where at least one column holds an indicator,
    how='all' marks rows where every column does.
    """
    if how not in ("any", "all"):
        raise ValueError(f"Unsupported mask combination: {how}")

    values, has_nan = _split_indicators(indicators)
    n_rows = len(table)

    if how == "any":
        mask = np.zeros(n_rows, dtype=bool)
        for name in table.columns:
            mask |= _column_hits(table[name], values, has_nan)
    else:
        mask = np.ones(n_rows, dtype=bool)
        for name in table.columns:
            mask &= _column_hits(table[name], values, has_nan)
    return mask


def remove_rows(table: pd.DataFrame, indicators: Iterable[float]) -> pd.DataFrame:
    """Return a copy of ``table`` without rows holding any indicator value.

    Column order and relative row order are preserved and the index is reset.
    An empty indicator set returns the table unchanged.
    """
    indicators = list(indicators)
    if not indicators:
        return table.copy()

    keep = ~indicator_mask(table, indicators, how="any")
    out = table.loc[keep].reset_index(drop=True)

    dropped = len(table) - len(out)
    if dropped:
        logger.info(f"Removed {dropped} of {len(table)} rows holding indicator values")
    return out


def replace_rows(
    table: pd.DataFrame,
    indicators: Iterable[float],
    replace_value: float = np.nan,
    excluded_columns: Optional[Iterable[str]] = None,
) -> pd.DataFrame:
    """Overwrite every flagged row with ``replace_value``.

    A row is flagged when any column holds an indicator. Columns listed in
    ``excluded_columns`` (typically depth) keep their original values, so the
    row count and depth continuity of the sounding are preserved.
    """
    indicators = list(indicators)
    excluded = set(excluded_columns or ())

    if not indicators:
        return table.copy()

    marked = indicator_mask(table, indicators, how="any")

    data = {}
    for name in table.columns:
        if name in excluded:
            data[name] = table[name].copy()
        else:
            data[name] = pd.Series(
                np.where(marked, replace_value, table[name].to_numpy()),
                index=table.index,
                name=name,
            )
    out = pd.DataFrame(data, index=table.index, columns=table.columns)

    n_marked = int(marked.sum())
    if n_marked:
        logger.info(f"Replaced values in {n_marked} of {len(table)} rows holding indicator values")
    return out


def remove_nan_rows(table: pd.DataFrame) -> pd.DataFrame:
    """Drop rows with a NaN in any column, e.g. after ``replace_rows``."""
    return table.dropna(how="any").reset_index(drop=True)


__all__ = [
    "indicator_mask",
    "remove_rows",
    "replace_rows",
    "remove_nan_rows",
]
