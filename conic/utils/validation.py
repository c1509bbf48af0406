"""
Input validation utilities.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from ..core.cptu_io import read_cptu_csv
from ..exceptions import ConicError


def validate_cptu_csv(csv_path: Path, columns: Optional[Dict] = None,
                      water_level: Optional[float] = None) -> Tuple[bool, Optional[str]]:
    """Validate a CPTu sounding CSV file.

    Returns:
        (is_valid, error_message)
    """
    try:
        table = read_cptu_csv(csv_path, columns=columns, water_level=water_level)
    except (FileNotFoundError, ConicError) as e:
        return False, str(e)

    if len(table) == 0:
        return False, "CSV file has no data rows"

    return True, None


def validate_indicators(indicators: Iterable) -> Tuple[bool, Optional[str]]:
    """Validate a list of indicator (sentinel) values.

    Returns:
        (is_valid, error_message)
    """
    if isinstance(indicators, (str, bytes)):
        return False, "Indicators must be a list of numbers"

    try:
        values = list(indicators)
    except TypeError:
        return False, "Indicators must be a list of numbers"

    for value in values:
        if isinstance(value, bool):
            return False, f"Indicator {value!r} is not a number"
        try:
            float(value)
        except (TypeError, ValueError):
            return False, f"Indicator {value!r} is not a number"

    return True, None


__all__ = [
    "validate_cptu_csv",
    "validate_indicators",
]
