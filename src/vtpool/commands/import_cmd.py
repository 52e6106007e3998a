"""
vtpool.commands.import_cmd - Merge objects of one pool into a project.
"""

from __future__ import annotations

import argparse
import sys

from vtpool.commands.common import load_settings, open_project, write_output
from vtpool.document.importer import import_objects


def run(args: argparse.Namespace) -> int:
    """Run the import command.

    Objects listed with --select (default: every object) are imported from
    the source, together with everything they reference, and the merged
    project is written as a project file.
    """
    settings = load_settings(args)
    target = open_project(args.target, settings)
    source = open_project(args.source, settings)

    selected = args.select if args.select else source.pool.ids()
    missing = [object_id for object_id in selected if object_id not in source.pool]
    if missing:
        print(
            f"Error: objects not found in {args.source}: {', '.join(map(str, missing))}",
            file=sys.stderr,
        )
        return 1

    report = import_objects(target, source.pool, selected, source.object_info)

    if not args.quiet:
        for old_id, new_id in sorted(report.id_map.items()):
            name = target.object_info[new_id].name
            print(f"{old_id} -> {new_id} ({name})", file=sys.stderr)
        print(f"Imported {len(report)} objects", file=sys.stderr)

    write_output(target.save_project(), args.output, quiet=args.quiet)
    return 0
