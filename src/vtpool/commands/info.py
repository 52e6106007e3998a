"""
vtpool.commands.info - Summarize an object pool or project file.
"""

from __future__ import annotations

import argparse
import json
from collections import Counter

from vtpool.commands.common import load_settings, open_project
from vtpool.pool.references import broken_references


def run(args: argparse.Namespace) -> int:
    """Run the info command."""
    project = open_project(args.file, load_settings(args))
    pool = project.pool

    counts = Counter(obj.object_type for obj in pool)
    broken = broken_references(pool)

    if getattr(args, "json", False):
        data = {
            "objects": len(pool),
            "types": {t.display_name: n for t, n in sorted(counts.items())},
            "mask_size": project.mask_size,
            "soft_key_size": list(project.soft_key_size),
            "selected": project.selected,
            "broken_references": [
                {"source": b.source_id, "target": b.target_id, "field": b.field_name}
                for b in broken
            ],
        }
        print(json.dumps(data, indent=2))
        return 0

    print(f"Objects: {len(pool)}")
    for object_type, count in sorted(counts.items()):
        print(f"  {object_type.display_name}: {count}")
    print(f"Mask size: {project.mask_size}")
    print(f"Soft key size: {project.soft_key_size[0]}x{project.soft_key_size[1]}")
    if project.selected is not None:
        print(f"Last selected: {project.selected}")

    if broken:
        print(f"Broken references: {len(broken)}")
        for ref in broken:
            print(f"  {ref}")
    return 0
