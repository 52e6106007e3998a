"""
vtpool.config - Configuration loading and defaults
"""

from vtpool.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG
from vtpool.config.loader import (
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    load_config,
    merge_configs,
    parse_toml,
    save_config,
)
from vtpool.config.settings import AutosaveSettings, DesignerSettings, HistorySettings

__all__ = [
    "load_config",
    "find_config_file",
    "merge_configs",
    "parse_toml",
    "save_config",
    "DEFAULT_CONFIG",
    "CONFIG_FILE_NAME",
    "DesignerSettings",
    "AutosaveSettings",
    "HistorySettings",
]
