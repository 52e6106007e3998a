"""
vtpool.commands.convert - Convert between raw IOP and project files.

Also implements `export-iop`, which always writes the raw pool.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from vtpool.codec.iop import encode_pool
from vtpool.codec.project_file import PROJECT_FILE_EXTENSION
from vtpool.commands.common import load_settings, open_project, write_output


def run(args: argparse.Namespace) -> int:
    """Run the convert command.

    The output format follows the output file extension: `.aitp` writes a
    project file, anything else writes raw IOP.
    """
    project = open_project(args.input, load_settings(args))
    output: Path = args.output
    if output.suffix.lower() == PROJECT_FILE_EXTENSION:
        content = project.save_project()
    else:
        content = encode_pool(project.pool)
    write_output(content, output, quiet=args.quiet)
    return 0


def run_export_iop(args: argparse.Namespace) -> int:
    """Run the export-iop command."""
    project = open_project(args.input, load_settings(args))
    write_output(encode_pool(project.pool), args.output, quiet=args.quiet)
    return 0
