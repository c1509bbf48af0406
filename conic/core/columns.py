"""
Column name registry.

Input names follow the usual CPTu export headers (name plus unit suffix).
Both mappings can be overridden through the ``columns`` section of the
workflow configuration.
"""

from typing import Dict, Optional

INPUT_COLUMNS: Dict[str, str] = {
    "depth": "Depth (m)",
    "qc": "qc (MPa)",
    "fs": "fs (kPa)",
    "u2": "u2 (kPa)",
    "u0": "u0 (kPa)",
}

OUTPUT_COLUMNS: Dict[str, str] = {
    "sigv_tot": "σv_tot (kPa)",
    "sigv_eff": "σv_eff (kPa)",
    "qt": "qt (MPa)",
    "fr": "Fr (%)",
    "bq": "Bq",
    "n": "n",
    "qtn": "Qtn",
    "ic": "Ic",
    "converged": "converged",
    "iterations": "iterations",
    "sbt_zone": "SBT zone",
}


def resolve_columns(columns: Optional[Dict] = None) -> Dict[str, str]:
    """Return a flat key -> column name mapping with overrides applied.

    ``columns`` may be flat (``{"depth": "z"}``) or nested like the config
    file (``{"input": {...}, "output": {...}}``).
    """
    names = {**INPUT_COLUMNS, **OUTPUT_COLUMNS}
    if not columns:
        return names

    for key, value in columns.items():
        if key in ("input", "output") and isinstance(value, dict):
            names.update(value)
        else:
            names[key] = value
    return names


__all__ = [
    "INPUT_COLUMNS",
    "OUTPUT_COLUMNS",
    "resolve_columns",
]
