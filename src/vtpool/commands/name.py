"""
vtpool.commands.name - Suggest a name for a new object.
"""

from __future__ import annotations

import argparse
import sys

from vtpool.commands.common import load_settings, open_project
from vtpool.document.project import EditorProject
from vtpool.pool.objects import ObjectType


def run(args: argparse.Namespace) -> int:
    """Run the name command."""
    try:
        object_type = ObjectType.from_name(args.type)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.file is not None:
        project = open_project(args.file, load_settings(args))
    else:
        project = EditorProject()

    print(project.generate_smart_name_for_new_object(object_type))
    return 0
