# Copyright 2025 Jesse Bate (https://github.com/jbatesy)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
YAML configuration for hj.

The configuration file is optional and located through the ``HJ_CONFIG``
environment variable:

    raw: false
    array: true
    noise:
      prefixes:
        - "[debug] "
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml


CONFIG_ENV_VAR = "HJ_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""
    pass


@dataclass
class Settings:
    """Settings for a conversion run."""
    raw: bool = False
    array: bool = False
    noise_prefixes: List[str] = field(default_factory=list)


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        ConfigError: If the file is missing or not a YAML mapping
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError("Config file must contain a YAML dictionary")

    return config


def _get_bool(config: Mapping[str, Any], key: str) -> bool:
    value = config.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false")
    return value


def settings_from_config(config: Mapping[str, Any]) -> Settings:
    """
    Validate a configuration dictionary and build ``Settings`` from it.

    Raises:
        ConfigError: If a value has the wrong type
    """
    noise = config.get("noise") or {}
    if not isinstance(noise, dict):
        raise ConfigError("noise must be a mapping")

    prefixes = noise.get("prefixes") or []
    if not isinstance(prefixes, list):
        raise ConfigError("noise.prefixes must be a list of strings")
    for prefix in prefixes:
        if not isinstance(prefix, str) or not prefix:
            raise ConfigError("noise.prefixes must be a list of non-empty strings")

    return Settings(
        raw=_get_bool(config, "raw"),
        array=_get_bool(config, "array"),
        noise_prefixes=list(prefixes),
    )


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Load settings from ``config_path`` or the ``HJ_CONFIG`` file.

    Returns default settings when neither is given.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or None
    if config_path is None:
        return Settings()
    return settings_from_config(load_config(config_path))
