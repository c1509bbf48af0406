"""
Batch Workflow Module
====================

Orchestrates the complete CPTu processing workflow:
1. Reading (cptu_io.py) - Loads and validates the sounding CSV
2. Cleaning (row_filter.py) - Removes or masks rows holding error indicators
3. Basic parameters (basic_params.py) - Stresses, qt, Fr and Bq
4. Derived parameters (derived_params.py) - Iterative n / Qtn / Ic solve
5. Classification (classification.py) - Soil behaviour type zones

This module runs the stages in order; each stage returns a new table.
"""

import copy
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from ..exceptions import InvalidDataError
from ..utils.config import validate_calc_config
from .basic_params import add_basic_params
from .classification import add_sbt_zones
from .columns import INPUT_COLUMNS, OUTPUT_COLUMNS, resolve_columns
from .cptu_io import GAMMA_W, read_cptu_csv, write_cptu_csv
from .depth import adjust_depth
from .derived_params import add_derived_params, summarize_convergence
from .row_filter import remove_nan_rows, remove_rows, replace_rows

logger = logging.getLogger(__name__)


# Default configuration for the complete workflow
DEFAULT_WORKFLOW_CONFIG = {
    "columns": {
        "input": dict(INPUT_COLUMNS),
        "output": dict(OUTPUT_COLUMNS),
    },

    # Reading configuration
    "input": {
        "water_level": None,     # m, used when the file has no u0 column
        "gamma_w": GAMMA_W,
    },

    # Row filter configuration
    "filter": {
        "indicators": [-9999.0, -8888.0, -7777.0],
        "mode": "remove",        # "remove" or "replace"
        "replace_value": float("nan"),
        "exclude_depth": True,   # keep depth untouched in replace mode
        "drop_replaced": False,  # drop NaN rows after replacing
    },

    # Depth fix-up configuration
    "depth": {
        "adjust": False,
        "start_depth": None,
        "spacing": None,
    },

    # Basic parameter configuration
    "basic": {
        "area_ratio": 0.8,
        "gamma_soil": 19.0,      # kN/m³
    },

    # Iterative solver configuration
    "derived": {
        "p_atm": 101.325,        # kPa
        "tolerance": 1e-3,
        "max_iter": 999,
        "workers": None,
    },

    "output": {
        "classify": True,
        "drop_unconverged": False,
    },
}


def deep_update(base_dict: Dict, update_dict: Dict) -> Dict:
    """Recursively update nested dictionary."""
    for key, value in update_dict.items():
        if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
            deep_update(base_dict[key], value)
        else:
            base_dict[key] = value
    return base_dict


def build_config(workflow_config: Optional[Dict] = None) -> Dict:
    """Merge ``workflow_config`` over the defaults and validate it."""
    config = copy.deepcopy(DEFAULT_WORKFLOW_CONFIG)
    if workflow_config:
        config = deep_update(config, copy.deepcopy(workflow_config))
    validate_calc_config(config)
    return config


def clean_table(table: pd.DataFrame, config: Dict) -> pd.DataFrame:
    """Apply the configured row filter to a raw table."""
    filter_cfg = config["filter"]
    cols = resolve_columns(config.get("columns"))
    indicators = filter_cfg.get("indicators") or []

    if filter_cfg.get("mode", "remove") == "replace":
        excluded = [cols["depth"]] if filter_cfg.get("exclude_depth", True) else []
        replace_value = filter_cfg.get("replace_value")
        if replace_value is None:
            replace_value = np.nan
        cleaned = replace_rows(table, indicators, float(replace_value), excluded)
        if filter_cfg.get("drop_replaced", False):
            cleaned = remove_nan_rows(cleaned)
        return cleaned

    return remove_rows(table, indicators)


def process_table(table: pd.DataFrame, workflow_config: Optional[Dict] = None) -> pd.DataFrame:
    """Run the cleaning and calculation stages on an in-memory table."""
    config = build_config(workflow_config)
    columns = config["columns"]

    cleaned = clean_table(table, config)

    depth_cfg = config["depth"]
    if depth_cfg.get("adjust", False):
        cleaned = adjust_depth(
            cleaned,
            start_depth=depth_cfg.get("start_depth"),
            spacing=depth_cfg.get("spacing"),
            columns=columns,
        )

    basic_cfg = config["basic"]
    result = add_basic_params(
        cleaned,
        area_ratio=float(basic_cfg["area_ratio"]),
        gamma_soil=float(basic_cfg["gamma_soil"]),
        columns=columns,
    )

    derived_cfg = config["derived"]
    result = add_derived_params(
        result,
        p_atm=float(derived_cfg["p_atm"]),
        tolerance=float(derived_cfg["tolerance"]),
        max_iter=int(derived_cfg["max_iter"]),
        columns=columns,
        workers=derived_cfg.get("workers"),
    )

    if config["output"].get("classify", True):
        result = add_sbt_zones(result, columns=columns)

    if config["output"].get("drop_unconverged", False):
        cols = resolve_columns(columns)
        result = result.loc[result[cols["converged"]]].reset_index(drop=True)

    return result


def run_complete_workflow(input_csv: str, output_csv: str,
                          workflow_config: Optional[Dict] = None) -> Dict[str, Any]:
    """
    Run the complete CPTu processing workflow.

    Parameters:
    -----------
    input_csv : str
        Path to the raw CPTu sounding CSV
    output_csv : str
        Path for the annotated output CSV
    workflow_config : dict, optional
        Configuration dictionary for all workflow steps

    Returns:
    --------
    dict
        Row counts, convergence summary, timings and the output path
    """
    input_csv = Path(input_csv)
    output_csv = Path(output_csv)

    # Fatal problems surface here, before any calculation stage runs
    config = build_config(workflow_config)
    columns = config["columns"]

    logger.info(f"Input: {input_csv}")
    logger.info(f"Output: {output_csv}")

    start_time = time.time()
    raw = read_cptu_csv(
        input_csv,
        columns=columns,
        water_level=config["input"].get("water_level"),
        gamma_w=float(config["input"].get("gamma_w", GAMMA_W)),
    )
    if len(raw) == 0:
        raise InvalidDataError(f"No data rows in {input_csv}")
    read_time = time.time() - start_time

    start_time = time.time()
    result = process_table(raw, config)
    calc_time = time.time() - start_time

    write_cptu_csv(result, output_csv)

    summary = summarize_convergence(result, columns)
    logger.info(
        f"Processed {len(raw)} rows -> {len(result)} rows "
        f"({summary['converged']} converged, {summary['exhausted']} exhausted, "
        f"{summary['skipped']} skipped) in {read_time + calc_time:.2f}s"
    )

    return {
        "success": True,
        "input_csv": input_csv,
        "output_csv": output_csv,
        "rows_in": len(raw),
        "rows_out": len(result),
        "convergence": summary,
        "timings": {"read": read_time, "calc": calc_time},
        "workflow_config": config,
    }


__all__ = [
    "DEFAULT_WORKFLOW_CONFIG",
    "deep_update",
    "build_config",
    "clean_table",
    "process_table",
    "run_complete_workflow",
]
