"""Import merge - bring objects of another pool into a project.

Merging is two-phase: every surviving object is given a fresh identifier
first, and only then are own ids and references rewritten with the
complete old->new map. The target is committed once at the end.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from vtpool.document.object_info import ObjectInfo
from vtpool.document.project import EditorProject
from vtpool.pool.allocator import allocate_object_id
from vtpool.pool.naming import generate_smart_default_name
from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import ObjectType
from vtpool.pool.references import (
    reference_closure,
    referenced_objects,
    remap_object_id,
    remap_object_references,
)

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """Outcome of an import merge.

    Attributes:
        id_map: Old (source) id -> new (target) id for every imported object.
        imported_ids: New ids, in insertion order.
        renamed_ids: New ids whose source name was missing or already taken
            and that received a generated name instead.
        changed: Whether the commit changed the target pool.
    """

    id_map: dict[int, int] = field(default_factory=dict)
    imported_ids: list[int] = field(default_factory=list)
    renamed_ids: list[int] = field(default_factory=list)
    changed: bool = False

    def __len__(self) -> int:
        return len(self.imported_ids)


def import_objects(
    project: EditorProject,
    source: ObjectPool,
    selected_ids: Iterable[int],
    source_info: Mapping[int, ObjectInfo] | None = None,
) -> ImportReport:
    """Merge selected objects of `source`, and everything they reference, into a project.

    Args:
        project: Target document; its staging pool receives the objects.
        source: Independently loaded pool to import from. Not modified.
        selected_ids: Objects the user picked; missing ids are ignored.
        source_info: Optional names/notes of the source objects, by source id.

    Returns:
        ImportReport describing the merge.

    Raises:
        ObjectIdRangeExhausted: If a type's range in the target is full.
            Nothing is changed in that case.
    """
    closure = [
        object_id
        for object_id in reference_closure(source, selected_ids)
        if source.object_by_id(object_id).object_type != ObjectType.WORKING_SET
    ]
    report = ImportReport()
    if not closure:
        return report

    staging = project.staging

    # Phase 1: allocate every new id before touching anything.
    assigned: set[int] = set()
    for old_id in closure:
        object_type = source.object_by_id(old_id).object_type
        new_id = allocate_object_id(staging, object_type, reserved=assigned)
        assigned.add(new_id)
        report.id_map[old_id] = new_id

    # Phase 2: remap copies with the complete map.
    imported = []
    for old_id in closure:
        obj = copy.deepcopy(source.object_by_id(old_id))
        remap_object_id(obj, report.id_map)
        remap_object_references(obj, report.id_map)
        imported.append(obj)
    imported.sort(key=lambda o: o.id)

    existing = project.get_all_object_names()
    reverse_map = {new: old for old, new in report.id_map.items()}
    for obj in imported:
        staging.add(obj)
        report.imported_ids.append(obj.id)

        source_meta = (source_info or {}).get(reverse_map[obj.id])
        name = source_meta.name if source_meta is not None else None
        if name is None or name in existing:
            name = generate_smart_default_name(obj.object_type, existing)
            report.renamed_ids.append(obj.id)
        existing[name] = obj.object_type
        project.object_info[obj.id] = ObjectInfo(
            name=name, notes=source_meta.notes if source_meta is not None else None
        )

    for obj in imported:
        dangling = [ref for ref in referenced_objects(obj) if ref not in staging]
        if dangling:
            logger.warning("Imported object %d references missing objects %s", obj.id, dangling)

    staging.sort_by(lambda o: o.id)
    report.changed = project.commit()
    project.select(None)
    logger.info("Imported %d objects", len(report.imported_ids))
    return report


def import_pool(project: EditorProject, pool: ObjectPool) -> bool:
    """Append every object of a pool to the project as-is and commit.

    Objects keep their identifiers; an object with an id already in the
    project replaces it.
    """
    for obj in pool:
        project.staging.add(copy.deepcopy(obj))
    return project.commit()


__all__ = ["ImportReport", "import_objects", "import_pool"]
