"""Reference helpers - enumerate, rewrite and check object references.

References are found by walking each type's schema, so every reference
field of every object type is covered in one place:
- referenced_objects: identifiers an object points at
- remap_object_references: rewrite references through an old->new map
- would_create_cycle: guard for new parent->child edges
- reference_closure: everything reachable from a set of objects
- broken_references: references to identifiers missing from the pool
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from vtpool.errors import CycleError
from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import NULL_OBJECT_ID, PoolObject
from vtpool.pool.schema import Field, FieldKind, schema_for


@dataclass(frozen=True)
class BrokenReference:
    """A reference to an identifier absent from the pool.

    Attributes:
        source_id: ID of the object holding the reference.
        target_id: ID that was referenced but doesn't exist.
        field_name: Attribute holding the reference.
    """

    source_id: int
    target_id: int
    field_name: str

    def __str__(self) -> str:
        return f"{self.source_id} --[{self.field_name}]--> {self.target_id} (missing)"


def _field_ids(obj: PoolObject, f: Field) -> Iterator[int]:
    value = obj.attributes.get(f.name)
    if value is None:
        return
    kind = f.kind
    if kind in (FieldKind.REF, FieldKind.NULLABLE_REF):
        if value != NULL_OBJECT_ID:
            yield value
    elif kind in (FieldKind.REF_LIST, FieldKind.NULLABLE_REF_LIST):
        for item in value:
            if item is not None and item != NULL_OBJECT_ID:
                yield item
    elif kind == FieldKind.OBJECT_REFS:
        for item in value:
            yield item.id
    elif kind == FieldKind.LABELS:
        for label in value:
            yield label.id
            if label.string_variable_reference is not None:
                yield label.string_variable_reference
            if label.graphic_representation is not None:
                yield label.graphic_representation


def iter_references(obj: PoolObject, structural_only: bool = False) -> Iterator[tuple[str, int]]:
    """Iterate (field name, referenced id) pairs in schema order.

    Null references are skipped.
    """
    for f in schema_for(obj.object_type).reference_fields():
        if structural_only and not f.structural:
            continue
        for ref_id in _field_ids(obj, f):
            yield f.name, ref_id


def referenced_objects(obj: PoolObject, structural_only: bool = False) -> list[int]:
    """List every identifier an object references, in schema order."""
    return [ref_id for _, ref_id in iter_references(obj, structural_only)]


def remap_object_references(obj: PoolObject, id_map: Mapping[int, int]) -> None:
    """Rewrite every reference of an object through an old->new mapping.

    Unmapped references are left untouched, and so is the object's own
    identifier (see remap_object_id).
    """
    if not id_map:
        return
    for f in schema_for(obj.object_type).reference_fields():
        value = obj.attributes.get(f.name)
        if value is None:
            continue
        kind = f.kind
        if kind in (FieldKind.REF, FieldKind.NULLABLE_REF):
            obj.attributes[f.name] = id_map.get(value, value)
        elif kind in (FieldKind.REF_LIST, FieldKind.NULLABLE_REF_LIST):
            obj.attributes[f.name] = [
                id_map.get(item, item) if item is not None else None for item in value
            ]
        elif kind == FieldKind.OBJECT_REFS:
            for item in value:
                item.id = id_map.get(item.id, item.id)
        elif kind == FieldKind.LABELS:
            for label in value:
                label.id = id_map.get(label.id, label.id)
                if label.string_variable_reference is not None:
                    label.string_variable_reference = id_map.get(
                        label.string_variable_reference, label.string_variable_reference
                    )
                if label.graphic_representation is not None:
                    label.graphic_representation = id_map.get(
                        label.graphic_representation, label.graphic_representation
                    )


def remap_object_id(obj: PoolObject, id_map: Mapping[int, int]) -> None:
    """Rewrite an object's own identifier if it is mapped."""
    obj.id = id_map.get(obj.id, obj.id)


def would_create_cycle(pool: ObjectPool, parent_id: int, child_id: int) -> bool:
    """Check if referencing `child_id` from `parent_id` would create a cycle.

    True when both are the same object, or when `parent_id` is reachable from
    `child_id` over structural references. Already-visited objects are
    skipped, so pools that already contain a cycle still terminate.
    Missing objects end their branch of the search.
    """
    if parent_id == child_id:
        return True

    visited: set[int] = set()
    stack = [child_id]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        if current == parent_id:
            return True
        obj = pool.object_by_id(current)
        if obj is not None:
            stack.extend(referenced_objects(obj, structural_only=True))
    return False


def ensure_no_cycle(pool: ObjectPool, parent_id: int, child_id: int) -> None:
    """Strict form of would_create_cycle.

    Raises:
        CycleError: If the reference would create a cycle.
    """
    if would_create_cycle(pool, parent_id, child_id):
        raise CycleError(parent_id, child_id)


def reference_closure(
    pool: ObjectPool,
    roots: Iterable[int],
    structural_only: bool = False,
) -> list[int]:
    """Collect the roots and everything they transitively reference.

    Identifiers not present in the pool are left out. Order is breadth-first
    from the roots.
    """
    seen: set[int] = set()
    ordered: list[int] = []
    queue = deque(roots)
    while queue:
        current = queue.popleft()
        if current in seen:
            continue
        seen.add(current)
        obj = pool.object_by_id(current)
        if obj is None:
            continue
        ordered.append(current)
        queue.extend(referenced_objects(obj, structural_only))
    return ordered


def broken_references(pool: ObjectPool) -> list[BrokenReference]:
    """Find every reference to an identifier missing from the pool."""
    broken = []
    for obj in pool:
        for field_name, ref_id in iter_references(obj):
            if ref_id not in pool:
                broken.append(BrokenReference(obj.id, ref_id, field_name))
    return broken


def referencing_objects(pool: ObjectPool, target_id: int) -> list[PoolObject]:
    """Objects holding at least one reference to `target_id`."""
    return [obj for obj in pool if target_id in referenced_objects(obj)]


__all__ = [
    "BrokenReference",
    "iter_references",
    "referenced_objects",
    "remap_object_references",
    "remap_object_id",
    "would_create_cycle",
    "ensure_no_cycle",
    "reference_closure",
    "broken_references",
    "referencing_objects",
]
