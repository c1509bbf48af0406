import json

import pytest

from conic.core.batch_workflow import DEFAULT_WORKFLOW_CONFIG, build_config
from conic.exceptions import ConfigError
from conic.utils.config import (
    DEFAULT_CONFIG_PATH,
    load_config,
    merge_configs,
    save_config,
    validate_calc_config,
)
from conic.utils.validation import validate_cptu_csv, validate_indicators


def test_packaged_default_config_matches_defaults():
    config = load_config(DEFAULT_CONFIG_PATH)
    merged = build_config(config)
    assert merged["basic"] == DEFAULT_WORKFLOW_CONFIG["basic"]
    assert merged["derived"] == DEFAULT_WORKFLOW_CONFIG["derived"]
    assert merged["filter"]["indicators"] == DEFAULT_WORKFLOW_CONFIG["filter"]["indicators"]
    assert merged["columns"] == DEFAULT_WORKFLOW_CONFIG["columns"]


@pytest.mark.parametrize("fmt,suffix", [("yaml", ".yaml"), ("json", ".json")])
def test_save_and_load_config(tmp_path, fmt, suffix):
    config = {"basic": {"area_ratio": 0.75}, "columns": {"input": {"depth": "Depth (m)"}}}
    path = tmp_path / f"config{suffix}"
    save_config(config, path, format=fmt)
    assert load_config(path) == config


def test_load_config_rejects_unknown_suffix(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("a = 1")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_merge_configs_is_recursive_and_pure():
    base = {"basic": {"area_ratio": 0.8, "gamma_soil": 19.0}, "x": 1}
    merged = merge_configs(base, {"basic": {"area_ratio": 0.7}})
    assert merged == {"basic": {"area_ratio": 0.7, "gamma_soil": 19.0}, "x": 1}
    assert base["basic"]["area_ratio"] == 0.8


@pytest.mark.parametrize("update", [
    {"basic": {"area_ratio": 0.0}},
    {"basic": {"area_ratio": 1.5}},
    {"basic": {"gamma_soil": -1.0}},
    {"basic": {"gamma_soil": "heavy"}},
    {"derived": {"tolerance": 0.0}},
    {"derived": {"max_iter": 0}},
    {"derived": {"max_iter": 2.5}},
    {"derived": {"p_atm": -101.3}},
    {"filter": {"mode": "delete"}},
])
def test_invalid_calc_config(update):
    with pytest.raises(ConfigError):
        build_config(update)


def test_validate_calc_config_accepts_defaults():
    validate_calc_config(DEFAULT_WORKFLOW_CONFIG)


def test_validate_cptu_csv(sounding_csv, tmp_path):
    assert validate_cptu_csv(sounding_csv) == (True, None)

    ok, message = validate_cptu_csv(tmp_path / "missing.csv")
    assert not ok
    assert "not found" in message

    header_only = tmp_path / "header.csv"
    header_only.write_text("Depth (m),qc (MPa),fs (kPa),u2 (kPa),u0 (kPa)\n")
    assert validate_cptu_csv(header_only) == (False, "CSV file has no data rows")


@pytest.mark.parametrize("indicators,valid", [
    ([-9999.0, -8888], True),
    ([], True),
    (["-9999", "x"], False),
    ([True], False),
    ("-9999", False),
])
def test_validate_indicators(indicators, valid):
    assert validate_indicators(indicators)[0] is valid


def test_json_config_drives_workflow(tmp_path, sounding_csv):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"filter": {"mode": "replace"}}))
    assert build_config(load_config(path))["filter"]["mode"] == "replace"
