"""
vtpool.commands.largest - List the largest objects of a pool.
"""

from __future__ import annotations

import argparse

from vtpool.commands.common import load_settings, open_project
from vtpool.export.report import top_largest_objects


def run(args: argparse.Namespace) -> int:
    """Run the largest command."""
    project = open_project(args.file, load_settings(args))
    largest = top_largest_objects(project.pool, args.count)
    if not largest:
        print("No objects in pool.")
        return 0
    for entry in largest:
        print(f"{entry} - {project.object_name(project.pool.object_by_id(entry.object_id))}")
    return 0
