"""
vtpool.commands.common - Helpers shared by CLI commands.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from vtpool.codec.project_file import PROJECT_FILE_EXTENSION
from vtpool.config import DesignerSettings, load_config
from vtpool.document.project import EditorProject
from vtpool.errors import VtPoolError
from vtpool.session import DesignerSession


def load_settings(args: argparse.Namespace) -> DesignerSettings:
    """Settings from --config, or from .vtpool.toml found upward from the cwd."""
    config_path: Optional[Path] = getattr(args, "config", None)
    return DesignerSettings.from_config(load_config(config_path))


def is_project_file(path: Path, content: bytes) -> bool:
    """Project files are JSON; anything else is treated as raw IOP."""
    if path.suffix.lower() == PROJECT_FILE_EXTENSION:
        return True
    return content.lstrip()[:1] == b"{"


def open_project(path: Path, settings: DesignerSettings) -> EditorProject:
    """Load a .aitp or .iop file into a project.

    Raises:
        VtPoolError: If the file cannot be decoded.
        OSError: If the file cannot be read.
    """
    content = Path(path).read_bytes()
    session = DesignerSession(settings)
    if is_project_file(Path(path), content):
        result = session.load_project_bytes(content)
    else:
        result = session.load_pool_bytes(content)
    if not result.success:
        raise VtPoolError(f"{path}: {result.error}")
    return result.value


def write_output(content: bytes, output: Optional[Path], quiet: bool = False) -> None:
    """Write bytes to a file, or to stdout when no output path is given."""
    if output is None:
        sys.stdout.buffer.write(content)
        sys.stdout.flush()
        return
    Path(output).write_bytes(content)
    if not quiet:
        print(f"Wrote {len(content)} bytes to {output}", file=sys.stderr)
