"""
Utility functions for the conic package.
"""

from .config import load_config, merge_configs, save_config, validate_calc_config
from .validation import validate_cptu_csv, validate_indicators

__all__ = [
    "load_config",
    "merge_configs",
    "save_config",
    "validate_calc_config",
    "validate_cptu_csv",
    "validate_indicators",
]
