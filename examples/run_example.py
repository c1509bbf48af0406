#!/usr/bin/env python
"""
Example script demonstrating conic package usage.
"""

from pathlib import Path
import logging
import sys

import numpy as np
import pandas as pd

from conic.core import batch_workflow
from conic.logging_config import setup_logging


def make_sounding(path: Path) -> Path:
    """Write a small synthetic sounding with a few error codes."""
    depth = np.round(np.arange(0.5, 10.5, 0.5), 2)
    table = pd.DataFrame({
        "Depth (m)": depth,
        "qc (MPa)": 2.0 + 0.4 * depth,
        "fs (kPa)": 20.0 + 3.0 * depth,
        "u2 (kPa)": 15.0 * depth,
        "u0 (kPa)": np.where(depth >= 1.0, (depth - 1.0) * 9.81, 0.0),
    })
    table.loc[3, "qc (MPa)"] = -9999.0
    table.loc[7, "fs (kPa)"] = -8888.0
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path, index=False)
    return path


def main():
    """Run example analysis."""
    setup_logging(logging.INFO)

    example_dir = Path(__file__).parent
    input_csv = make_sounding(example_dir / "output" / "example_sounding.csv")
    output_csv = example_dir / "output" / "example_results.csv"

    config = {
        "basic": {"area_ratio": 0.8, "gamma_soil": 19.0},
        "derived": {"tolerance": 1e-3, "max_iter": 999},
    }

    try:
        results = batch_workflow.run_complete_workflow(str(input_csv), str(output_csv), config)
    except Exception as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ {results['rows_in']} rows in, {results['rows_out']} rows out")
    print(f"📊 Convergence: {results['convergence']}")
    print(f"📁 Results saved in: {output_csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
