"""Default objects - fresh, valid objects of every type for the editor."""

from __future__ import annotations

from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import NULL_OBJECT_ID, ObjectType, PoolObject
from vtpool.pool.schema import schema_for

# Types whose text rendering needs a font; defaults point at the pool's first font.
_FONT_USERS = (
    ObjectType.INPUT_STRING,
    ObjectType.INPUT_NUMBER,
    ObjectType.OUTPUT_STRING,
    ObjectType.OUTPUT_NUMBER,
)


def default_object(
    object_type: ObjectType,
    pool: ObjectPool | None = None,
    object_id: int = 0,
) -> PoolObject:
    """Build an object of the given type with default attributes.

    Args:
        object_type: Type to create.
        pool: Optional pool used to pick sensible defaults for references
            (first font for text objects, first data mask as a working set's
            active mask).
        object_id: Identifier to give the object.

    Returns:
        The new PoolObject (not yet added to any pool).
    """
    object_type = ObjectType(object_type)
    obj = PoolObject(object_id, object_type, schema_for(object_type).defaults())

    if pool is None:
        return obj

    if object_type in _FONT_USERS:
        fonts = pool.objects_by_type(ObjectType.FONT_ATTRIBUTES)
        if fonts:
            obj.attributes["font_attributes"] = fonts[0].id
    elif object_type == ObjectType.WORKING_SET:
        masks = pool.objects_by_type(ObjectType.DATA_MASK)
        obj.attributes["active_mask"] = masks[0].id if masks else NULL_OBJECT_ID
    return obj


__all__ = ["default_object"]
