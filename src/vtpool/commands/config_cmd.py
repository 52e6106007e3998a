"""
vtpool.commands.config_cmd - Show and change configuration.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import tomlkit

from vtpool.config import CONFIG_FILE_NAME, find_config_file, load_config, save_config
from vtpool.config.loader import _try_parse_env_value


def run(args: argparse.Namespace) -> int:
    """Run the config command.

    Subcommands:
    - show: Print the effective configuration
    - path: Print the config file location
    - set: Write one value to the config file
    """
    action = getattr(args, "config_action", None)
    if action == "show":
        return _show(args)
    elif action == "path":
        return _path(args)
    elif action == "set":
        return _set(args)
    else:
        print("Usage: vtpool config <show|path|set>", file=sys.stderr)
        return 1


def _config_path(args: argparse.Namespace) -> Path | None:
    if getattr(args, "config", None) is not None:
        return args.config
    return find_config_file(Path.cwd())


def _show(args: argparse.Namespace) -> int:
    config = load_config(getattr(args, "config", None))
    if args.section:
        if args.section not in config:
            print(f"Error: unknown section '{args.section}'", file=sys.stderr)
            return 1
        config = {args.section: config[args.section]}
    if args.json:
        print(json.dumps(config, indent=2))
    else:
        print(tomlkit.dumps(config), end="")
    return 0


def _path(args: argparse.Namespace) -> int:
    path = _config_path(args)
    if path is None:
        print(f"No {CONFIG_FILE_NAME} found (using defaults)")
        return 1
    print(path)
    return 0


def _set(args: argparse.Namespace) -> int:
    section, _, key = args.key.partition(".")
    if not section or not key:
        print("Error: key must look like 'section.key'", file=sys.stderr)
        return 1
    path = _config_path(args) or Path.cwd() / CONFIG_FILE_NAME
    save_config(path, {section: {key: _try_parse_env_value(args.value)}})
    print(f"Set {section}.{key} in {path}")
    return 0
