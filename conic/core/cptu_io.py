"""
CPTu CSV reading and writing.

A sounding file must provide the depth, qc, fs and u2 columns. The
hydrostatic pore pressure u0 is either read from the file or, when a water
level is given, computed as gamma_w * (z - z_w) below the water table.
All columns are coerced to float64; anything else in the file is dropped.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
import pandas as pd

from ..exceptions import InvalidDataError, SchemaError
from .columns import resolve_columns

logger = logging.getLogger(__name__)

GAMMA_W = 9.81  # kN/m³


def hydrostatic_pressure(depth: np.ndarray, water_level: float, gamma_w: float = GAMMA_W) -> np.ndarray:
    """Hydrostatic pore pressure (kPa), zero above the water table."""
    depth = np.asarray(depth, dtype=float)
    return np.where(depth >= water_level, (depth - water_level) * gamma_w, 0.0)


def read_cptu_csv(
    path: Union[str, Path],
    columns: Optional[Dict] = None,
    water_level: Optional[float] = None,
    gamma_w: float = GAMMA_W,
) -> pd.DataFrame:
    """Read a CPTu sounding from CSV.

    Args:
        path: CSV file with a header row.
        columns: optional column name overrides.
        water_level: depth of the water table (m); used only when the file
            has no u0 column.
        gamma_w: unit weight of water (kN/m³).

    Returns:
        DataFrame with depth, qc, fs, u2, u0 as float64, in that order.

    Raises:
        FileNotFoundError: the file does not exist.
        InvalidDataError: the file cannot be parsed.
        SchemaError: a required column is missing or not numeric.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CPTu file not found: {path}")

    cols = resolve_columns(columns)
    required = [cols["depth"], cols["qc"], cols["fs"], cols["u2"]]
    u0_col = cols["u0"]

    try:
        raw = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise InvalidDataError(f"Failed to read CSV file '{path}': {exc}") from exc

    has_u0 = u0_col in raw.columns
    if not has_u0 and water_level is None:
        required = required + [u0_col]

    missing = [name for name in required if name not in raw.columns]
    if missing:
        raise SchemaError(
            f"Missing required column(s) {missing} in '{path}'. "
            f"Required columns: {required}",
            missing,
        )

    data = {}
    for name in required + ([u0_col] if has_u0 and u0_col not in required else []):
        try:
            data[name] = pd.to_numeric(raw[name], errors="raise").astype(np.float64)
        except (ValueError, TypeError) as exc:
            raise SchemaError(f"Column '{name}' cannot be parsed as float: {exc}", [name]) from exc

    if not has_u0:
        logger.info(f"No '{u0_col}' column, deriving hydrostatic pressure from water level {water_level} m")
        data[u0_col] = pd.Series(
            hydrostatic_pressure(data[cols["depth"]].to_numpy(), water_level, gamma_w),
            index=raw.index,
        )

    order = [cols["depth"], cols["qc"], cols["fs"], cols["u2"], u0_col]
    table = pd.DataFrame({name: data[name] for name in order})
    logger.info(f"Read {len(table)} rows from {path}")
    return table


def write_cptu_csv(table: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write an annotated sounding to CSV and return the output path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path, index=False)
    logger.info(f"Wrote {len(table)} rows to {path}")
    return path


__all__ = [
    "GAMMA_W",
    "hydrostatic_pressure",
    "read_cptu_csv",
    "write_cptu_csv",
]
