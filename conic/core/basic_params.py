"""
Basic CPTu parameters.

Single vectorised pass over a cleaned sounding. Adds, in order:

  σv_tot = gamma_soil * z                       total vertical stress (kPa)
  σv_eff = σv_tot - u0                          effective vertical stress (kPa)
  qt     = qc + u2 * (1 - a) / 1000             corrected cone resistance (MPa)
  Fr     = fs / (qt - σv_tot) * 100             normalised friction ratio (%)
  Bq     = (u2 - u0) / (qt - σv_tot)            pore pressure ratio

qc and qt are carried in MPa, every other stress in kPa. Zero net cone
resistance gives inf/NaN in Fr and Bq; these propagate to the solver.
"""

import logging
from typing import Dict, Optional

import numpy as np
import pandas as pd

from ..exceptions import ConfigError, SchemaError
from .columns import resolve_columns

logger = logging.getLogger(__name__)

DEFAULT_AREA_RATIO = 0.8
DEFAULT_GAMMA_SOIL = 19.0  # kN/m³
KPA_PER_MPA = 1000.0


def _require(table: pd.DataFrame, names) -> None:
    missing = [name for name in names if name not in table.columns]
    if missing:
        raise SchemaError(f"Missing required column(s): {missing}", missing)


def add_basic_params(
    table: pd.DataFrame,
    area_ratio: float = DEFAULT_AREA_RATIO,
    gamma_soil: float = DEFAULT_GAMMA_SOIL,
    columns: Optional[Dict] = None,
) -> pd.DataFrame:
    """Append stress and normalisation columns to a copy of ``table``.

    Args:
        table: cleaned sounding with depth, qc, fs, u2 and u0 columns.
        area_ratio: cone net area ratio, 0 < a <= 1.
        gamma_soil: soil unit weight (kN/m³), > 0.
        columns: optional column name overrides.

    Returns:
        New DataFrame with five columns appended; row count unchanged.
    """
    if not 0.0 < area_ratio <= 1.0:
        raise ConfigError(f"area_ratio must be in (0, 1], got {area_ratio}")
    if not gamma_soil > 0.0:
        raise ConfigError(f"gamma_soil must be positive, got {gamma_soil}")

    cols = resolve_columns(columns)
    _require(table, [cols["depth"], cols["qc"], cols["fs"], cols["u2"], cols["u0"]])

    depth = table[cols["depth"]].to_numpy(dtype=float)
    qc = table[cols["qc"]].to_numpy(dtype=float)
    fs = table[cols["fs"]].to_numpy(dtype=float)
    u2 = table[cols["u2"]].to_numpy(dtype=float)
    u0 = table[cols["u0"]].to_numpy(dtype=float)

    with np.errstate(divide="ignore", invalid="ignore"):
        sigv_tot = gamma_soil * depth
        sigv_eff = sigv_tot - u0
        qt = qc + u2 * (1.0 - area_ratio) / KPA_PER_MPA
        qnet = qt * KPA_PER_MPA - sigv_tot
        fr = fs / qnet * 100.0
        bq = (u2 - u0) / qnet

    out = table.copy()
    out[cols["sigv_tot"]] = sigv_tot
    out[cols["sigv_eff"]] = sigv_eff
    out[cols["qt"]] = qt
    out[cols["fr"]] = fr
    out[cols["bq"]] = bq

    n_degenerate = int(np.count_nonzero(~np.isfinite(fr)))
    if n_degenerate:
        logger.debug(f"{n_degenerate} rows have a non-finite friction ratio")

    return out


__all__ = [
    "add_basic_params",
    "DEFAULT_AREA_RATIO",
    "DEFAULT_GAMMA_SOIL",
    "KPA_PER_MPA",
]
