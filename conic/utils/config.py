"""
Configuration management utilities.
"""

import json
import math
from pathlib import Path
from typing import Dict, Union

import yaml

from ..exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


def load_config(config_path: Union[str, Path]) -> Dict:
    """Load configuration from YAML or JSON file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        if config_path.suffix.lower() in ['.yaml', '.yml']:
            config = yaml.safe_load(f)
        elif config_path.suffix.lower() == '.json':
            config = json.load(f)
        else:
            raise ConfigError(f"Unsupported config format: {config_path.suffix}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config file must hold a mapping: {config_path}")
    return config


def merge_configs(base: Dict, update: Dict) -> Dict:
    """Recursively merge configuration dictionaries."""
    result = base.copy()

    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def save_config(config: Dict, output_path: Union[str, Path], format: str = 'yaml'):
    """Save configuration to file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        if format.lower() in ['yaml', 'yml']:
            yaml.safe_dump(config, f, default_flow_style=False, indent=2, allow_unicode=True)
        elif format.lower() == 'json':
            json.dump(config, f, indent=2, ensure_ascii=False)
        else:
            raise ConfigError(f"Unsupported format: {format}")


def _as_float(section: str, key: str, value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{section}.{key} must be a number, got {value!r}") from exc


def validate_calc_config(config: Dict) -> None:
    """Check the calculator scalars of a merged workflow config.

    Raises ConfigError on the first invalid value.
    """
    basic = config.get("basic", {})
    derived = config.get("derived", {})

    area_ratio = _as_float("basic", "area_ratio", basic.get("area_ratio"))
    if not 0.0 < area_ratio <= 1.0:
        raise ConfigError(f"basic.area_ratio must be in (0, 1], got {area_ratio}")

    gamma_soil = _as_float("basic", "gamma_soil", basic.get("gamma_soil"))
    if not gamma_soil > 0.0:
        raise ConfigError(f"basic.gamma_soil must be positive, got {gamma_soil}")

    p_atm = _as_float("derived", "p_atm", derived.get("p_atm"))
    if not (p_atm > 0.0 and math.isfinite(p_atm)):
        raise ConfigError(f"derived.p_atm must be positive, got {p_atm}")

    tolerance = _as_float("derived", "tolerance", derived.get("tolerance"))
    if not tolerance > 0.0:
        raise ConfigError(f"derived.tolerance must be positive, got {tolerance}")

    max_iter = derived.get("max_iter")
    if isinstance(max_iter, bool) or not isinstance(max_iter, int) or max_iter < 1:
        raise ConfigError(f"derived.max_iter must be a positive integer, got {max_iter!r}")

    mode = config.get("filter", {}).get("mode", "remove")
    if mode not in ("remove", "replace"):
        raise ConfigError(f"filter.mode must be 'remove' or 'replace', got {mode!r}")


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "merge_configs",
    "save_config",
    "validate_calc_config",
]
