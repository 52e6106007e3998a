"""
vtpool.config.loader - Configuration file discovery, parsing and merging.

Configuration is read from `.vtpool.toml`, merged over DEFAULT_CONFIG, and
finally overridden by `VTPOOL_<SECTION>_<KEY>` environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit

from vtpool.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG, ENV_PREFIX


def find_config_file(start_path: Path) -> Optional[Path]:
    """Find the configuration file by searching upward from `start_path`.

    Args:
        start_path: Directory to start searching from.

    Returns:
        Path to the config file, or None if not found.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def parse_toml(content: str) -> Dict[str, Any]:
    """Parse TOML text into plain Python dicts and values."""
    return tomlkit.parse(content).unwrap()


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge `override` into a copy of `base`."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Convert an environment variable string to a typed value.

    Booleans ("true"/"false"), integers and JSON arrays/objects are parsed;
    anything else (including malformed JSON) is returned as the string.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(value)
    except ValueError:
        pass
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply VTPOOL_<SECTION>_<KEY> environment variables to a config.

    The section is the first underscore-separated word; the rest is the key,
    so VTPOOL_AUTOSAVE_INTERVAL_SECS sets autosave.interval_secs.
    """
    for env_name, raw in os.environ.items():
        if not env_name.startswith(ENV_PREFIX):
            continue
        parts = env_name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        config.setdefault(section, {})[key] = _try_parse_env_value(raw)
    return config


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration, merged with defaults and environment overrides.

    Args:
        config_path: Explicit config file; when None, `.vtpool.toml` is
            searched for from the working directory upward.

    Returns:
        The effective configuration dictionary.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
    """
    if config_path is None:
        config_path = find_config_file(Path.cwd())
    elif not Path(config_path).is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    user_config: Dict[str, Any] = {}
    if config_path is not None:
        user_config = parse_toml(Path(config_path).read_text(encoding="utf-8"))

    config = merge_configs(DEFAULT_CONFIG, user_config)
    return _apply_env_overrides(config)


def save_config(config_path: Path, values: Dict[str, Any]) -> None:
    """Write values into a config file, keeping existing comments and layout."""
    path = Path(config_path)
    if path.is_file():
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    else:
        doc = tomlkit.document()

    for section, entries in values.items():
        if isinstance(entries, dict):
            if section not in doc:
                doc.add(section, tomlkit.table())
            table = doc[section]
            for key, value in entries.items():
                table[key] = value
        else:
            doc[section] = entries

    path.write_text(tomlkit.dumps(doc), encoding="utf-8")
