import numpy as np
import pandas as pd
import pytest

from conic.core.depth import adjust_depth
from conic.exceptions import InvalidDataError, SchemaError


def test_adjust_depth_uses_mean_spacing():
    table = pd.DataFrame({"Depth (m)": [1.0, 1.019, 1.041, 1.06], "qc (MPa)": [1.0, 2.0, 3.0, 4.0]})
    out = adjust_depth(table)
    np.testing.assert_allclose(out["Depth (m)"], [1.0, 1.02, 1.04, 1.06])
    assert out["qc (MPa)"].tolist() == [1.0, 2.0, 3.0, 4.0]


def test_adjust_depth_explicit_start_and_spacing():
    table = pd.DataFrame({"Depth (m)": [5.0, 5.0, 5.0]})
    out = adjust_depth(table, start_depth=0.5, spacing=0.25)
    np.testing.assert_allclose(out["Depth (m)"], [0.5, 0.75, 1.0])


def test_adjust_depth_single_row_needs_spacing():
    table = pd.DataFrame({"Depth (m)": [2.0]})
    with pytest.raises(InvalidDataError):
        adjust_depth(table)
    assert adjust_depth(table, spacing=0.1)["Depth (m)"].tolist() == [2.0]


def test_adjust_depth_empty_table():
    with pytest.raises(InvalidDataError):
        adjust_depth(pd.DataFrame({"Depth (m)": []}))


def test_adjust_depth_ignores_nan_gaps():
    table = pd.DataFrame({"Depth (m)": [0.0, np.nan, 0.2, 0.3]})
    out = adjust_depth(table)
    np.testing.assert_allclose(out["Depth (m)"], [0.0, 0.1, 0.2, 0.3])


def test_adjust_depth_missing_column():
    with pytest.raises(SchemaError):
        adjust_depth(pd.DataFrame({"z": [0.0, 1.0]}))
