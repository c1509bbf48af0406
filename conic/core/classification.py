"""Soil behaviour type (SBT) zones from Ic, after Robertson (1990, 2009)."""

from typing import Dict, Optional

import numpy as np
import pandas as pd

from .columns import resolve_columns

# Upper Ic bound of each zone, checked in order
IC_BOUNDARIES = (
    (1.31, 7),
    (2.05, 6),
    (2.60, 5),
    (2.95, 4),
    (3.60, 3),
)

SBT_ZONE_NAMES: Dict[int, str] = {
    0: "Unclassified",
    2: "Organic soils - clay",
    3: "Clays - silty clay to clay",
    4: "Silt mixtures - clayey silt to silty clay",
    5: "Sand mixtures - silty sand to sandy silt",
    6: "Sands - clean sand to silty sand",
    7: "Gravelly sand to dense sand",
}


def sbt_zone(ic: float) -> int:
    """Return the SBT zone number for a single Ic value (0 if undefined)."""
    if ic is None or np.isnan(ic):
        return 0
    for upper, zone in IC_BOUNDARIES[:-1]:
        if ic < upper:
            return zone
    # Zone 3 includes its upper bound
    if ic <= IC_BOUNDARIES[-1][0]:
        return IC_BOUNDARIES[-1][1]
    return 2


def add_sbt_zones(table: pd.DataFrame, columns: Optional[Dict] = None) -> pd.DataFrame:
    """Append an integer SBT zone column computed from the Ic column."""
    cols = resolve_columns(columns)
    ic = table[cols["ic"]].to_numpy(dtype=float)

    out = table.copy()
    out[cols["sbt_zone"]] = np.array([sbt_zone(value) for value in ic], dtype=int)
    return out


__all__ = [
    "IC_BOUNDARIES",
    "SBT_ZONE_NAMES",
    "sbt_zone",
    "add_sbt_zones",
]
