import numpy as np
import pandas as pd
import pytest

from conic.core.cptu_io import hydrostatic_pressure, read_cptu_csv, write_cptu_csv
from conic.exceptions import InvalidDataError, SchemaError


def test_read_cptu_csv_coerces_to_float(tmp_path):
    path = tmp_path / "ints.csv"
    pd.DataFrame({
        "Depth (m)": [1, 2],
        "qc (MPa)": [5, 6],
        "fs (kPa)": [40, 50],
        "u2 (kPa)": [10, 20],
        "u0 (kPa)": [0, 10],
        "comment": ["a", "b"],
    }).to_csv(path, index=False)

    table = read_cptu_csv(path)
    assert list(table.columns) == ["Depth (m)", "qc (MPa)", "fs (kPa)", "u2 (kPa)", "u0 (kPa)"]
    assert all(dtype == np.float64 for dtype in table.dtypes)


def test_read_cptu_csv_roundtrip(tmp_path, sounding_csv, raw_sounding):
    table = read_cptu_csv(sounding_csv)
    pd.testing.assert_frame_equal(table, raw_sounding)

    out = write_cptu_csv(table, tmp_path / "nested" / "out.csv")
    assert out.exists()


def test_missing_column_is_reported(tmp_path, raw_sounding):
    path = tmp_path / "missing.csv"
    raw_sounding.drop(columns=["fs (kPa)", "u0 (kPa)"]).to_csv(path, index=False)

    with pytest.raises(SchemaError) as excinfo:
        read_cptu_csv(path)
    assert excinfo.value.columns == ["fs (kPa)", "u0 (kPa)"]
    assert "fs (kPa)" in str(excinfo.value)


def test_non_numeric_column_is_reported(tmp_path, raw_sounding):
    path = tmp_path / "text.csv"
    table = raw_sounding.astype(object)
    table.loc[2, "u2 (kPa)"] = "broken"
    table.to_csv(path, index=False)

    with pytest.raises(SchemaError) as excinfo:
        read_cptu_csv(path)
    assert excinfo.value.columns == ["u2 (kPa)"]


def test_u0_derived_from_water_level(tmp_path, raw_sounding):
    path = tmp_path / "no_u0.csv"
    raw_sounding.drop(columns=["u0 (kPa)"]).to_csv(path, index=False)

    table = read_cptu_csv(path, water_level=2.0)
    np.testing.assert_allclose(table["u0 (kPa)"], [0.0, 0.0, 9.81, 19.62, 29.43])


def test_file_u0_wins_over_water_level(sounding_csv, raw_sounding):
    table = read_cptu_csv(sounding_csv, water_level=0.0)
    np.testing.assert_allclose(table["u0 (kPa)"], raw_sounding["u0 (kPa)"])


def test_custom_column_names(tmp_path):
    path = tmp_path / "custom.csv"
    pd.DataFrame({"z": [1.0], "qc": [2.0], "fs": [3.0], "u2": [4.0], "u0": [0.0]}).to_csv(path, index=False)
    columns = {"input": {"depth": "z", "qc": "qc", "fs": "fs", "u2": "u2", "u0": "u0"}}
    table = read_cptu_csv(path, columns=columns)
    assert list(table.columns) == ["z", "qc", "fs", "u2", "u0"]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_cptu_csv(tmp_path / "nope.csv")


def test_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(InvalidDataError):
        read_cptu_csv(path)


def test_hydrostatic_pressure_is_zero_above_water_table():
    np.testing.assert_allclose(hydrostatic_pressure([0.0, 1.0, 3.0], 1.0, 10.0), [0.0, 0.0, 20.0])
