import logging

import pandas as pd
import pytest


@pytest.fixture(autouse=True)
def reset_conic_logger():
    yield
    logging.getLogger("conic").handlers.clear()


@pytest.fixture
def raw_sounding():
    """Five-row sounding in the default column layout, rows 1 and 3 flagged."""
    return pd.DataFrame({
        "Depth (m)": [1.0, 2.0, 3.0, 4.0, 5.0],
        "qc (MPa)": [5.0, -9999.0, 4.0, 3.5, 6.0],
        "fs (kPa)": [40.0, 50.0, 45.0, -8888.0, 60.0],
        "u2 (kPa)": [20.0, 30.0, 40.0, 50.0, 60.0],
        "u0 (kPa)": [0.0, 9.81, 19.62, 29.43, 39.24],
    })


@pytest.fixture
def sounding_csv(tmp_path, raw_sounding):
    path = tmp_path / "sounding.csv"
    raw_sounding.to_csv(path, index=False)
    return path
