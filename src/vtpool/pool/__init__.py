"""Pool module - VT object pool data structures.

Exports:
- ObjectType: Enum of VT object types
- PoolObject: A typed node with attributes
- ObjectRef, MacroRef, Point, ObjectLabel, CodePlane: attribute value types
- ObjectPool: Ordered id -> object container
- allocate_object_id / object_id_range: Per-type identifier allocation
- would_create_cycle / remap_object_references / referenced_objects
- generate_smart_default_name: Collision-free naming
- default_object: Fresh objects of any type
"""

from vtpool.pool.allocator import (
    OBJECT_ID_RANGES,
    allocate_object_id,
    object_id_range,
    object_type_for_id,
)
from vtpool.pool.defaults import default_object
from vtpool.pool.naming import (
    default_object_name,
    generate_smart_default_name,
    object_type_name,
)
from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import (
    NULL_OBJECT_ID,
    CodePlane,
    MacroRef,
    ObjectLabel,
    ObjectRef,
    ObjectType,
    Point,
    PoolObject,
)
from vtpool.pool.references import (
    BrokenReference,
    broken_references,
    ensure_no_cycle,
    reference_closure,
    referenced_objects,
    remap_object_id,
    remap_object_references,
    would_create_cycle,
)

__all__ = [
    "NULL_OBJECT_ID",
    "ObjectType",
    "PoolObject",
    "ObjectRef",
    "MacroRef",
    "Point",
    "ObjectLabel",
    "CodePlane",
    "ObjectPool",
    "OBJECT_ID_RANGES",
    "allocate_object_id",
    "object_id_range",
    "object_type_for_id",
    "default_object",
    "default_object_name",
    "generate_smart_default_name",
    "object_type_name",
    "BrokenReference",
    "broken_references",
    "ensure_no_cycle",
    "reference_closure",
    "referenced_objects",
    "remap_object_id",
    "remap_object_references",
    "would_create_cycle",
]
