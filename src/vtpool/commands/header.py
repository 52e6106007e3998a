"""
vtpool.commands.header - Export a C header of object ids.
"""

from __future__ import annotations

import argparse

from vtpool.commands.common import load_settings, open_project, write_output
from vtpool.export.header import generate_header


def run(args: argparse.Namespace) -> int:
    """Run the header command."""
    project = open_project(args.file, load_settings(args))
    header = generate_header(project.pool, project.object_name)
    write_output(header.encode("utf-8"), args.output, quiet=args.quiet)
    return 0
