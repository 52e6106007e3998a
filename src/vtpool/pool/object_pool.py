"""ObjectPool - ordered container of pool objects addressed by identifier.

Insertion order is kept for deterministic iteration and export only; it has
no semantic meaning. Lookups of missing identifiers return None rather than
raising, since references may transiently point at objects that do not
exist yet.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Iterator

from vtpool.pool.objects import ObjectType, PoolObject

DEFAULT_MASK_SIZE = 200
DEFAULT_SOFT_KEY_SIZE = (60, 60)


class ObjectPool:
    """Mapping of object identifier to PoolObject.

    Example:
        >>> pool = ObjectPool()
        >>> pool.add(PoolObject(1000, ObjectType.DATA_MASK))
        >>> pool.object_by_id(1000).object_type
        <ObjectType.DATA_MASK: 1>
    """

    def __init__(self, objects: Iterable[PoolObject] | None = None) -> None:
        self._objects: dict[int, PoolObject] = {}
        for obj in objects or ():
            self.add(obj)

    # Access

    def object_by_id(self, object_id: int | None) -> PoolObject | None:
        """Find object by ID, or None when absent (or when ID is None)."""
        if object_id is None:
            return None
        return self._objects.get(object_id)

    def objects(self) -> list[PoolObject]:
        """All objects in pool order."""
        return list(self._objects.values())

    def objects_by_type(self, object_type: ObjectType) -> list[PoolObject]:
        """All objects of one type, in pool order."""
        return [o for o in self._objects.values() if o.object_type == object_type]

    def ids(self) -> list[int]:
        return list(self._objects)

    def working_set(self) -> PoolObject | None:
        """The first Working Set object, if any."""
        found = self.objects_by_type(ObjectType.WORKING_SET)
        return found[0] if found else None

    # Mutation

    def add(self, obj: PoolObject) -> None:
        """Add an object; an object with the same ID is replaced in place."""
        self._objects[obj.id] = obj

    def remove(self, object_id: int) -> PoolObject | None:
        """Remove and return the object with this ID, or None if absent."""
        return self._objects.pop(object_id, None)

    def clear(self) -> None:
        self._objects.clear()

    def sort_by(self, key: Callable[[PoolObject], Any]) -> None:
        """Reorder objects by a sort key (stable)."""
        ordered = sorted(self._objects.values(), key=key)
        self._objects = {o.id: o for o in ordered}

    def clone(self) -> ObjectPool:
        """Create a deep copy of this pool.

        The new pool is completely independent - mutations to one do not
        affect the other.
        """
        return copy.deepcopy(self)

    # Derived data

    def minimum_mask_sizes(self) -> tuple[int, tuple[int, int]]:
        """Estimate mask size and soft key size needed to show the pool.

        Returns:
            Tuple of (mask_size, (soft_key_width, soft_key_height)). The mask
            size is the largest extent of any positioned child of a data or
            alarm mask; soft key size is the largest key content extent.
        """
        mask_size = 0
        key_w, key_h = 0, 0
        for obj in self._objects.values():
            if obj.object_type in (ObjectType.DATA_MASK, ObjectType.ALARM_MASK):
                for child_ref in obj.get("object_refs", []):
                    child = self.object_by_id(child_ref.id)
                    width, height = _extent(child)
                    mask_size = max(mask_size, child_ref.x + width, child_ref.y + height)
            elif obj.object_type == ObjectType.KEY:
                for child_ref in obj.get("object_refs", []):
                    child = self.object_by_id(child_ref.id)
                    width, height = _extent(child)
                    key_w = max(key_w, child_ref.x + width)
                    key_h = max(key_h, child_ref.y + height)
        return (
            mask_size or DEFAULT_MASK_SIZE,
            (key_w or DEFAULT_SOFT_KEY_SIZE[0], key_h or DEFAULT_SOFT_KEY_SIZE[1]),
        )

    # Python protocol

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._objects

    def __iter__(self) -> Iterator[PoolObject]:
        return iter(list(self._objects.values()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectPool):
            return NotImplemented
        return list(self._objects.items()) == list(other._objects.items())

    def __repr__(self) -> str:
        return f"ObjectPool({len(self._objects)} objects)"


def _extent(obj: PoolObject | None) -> tuple[int, int]:
    if obj is None:
        return 0, 0
    width = obj.get("width", 0) or 0
    height = obj.get("height", width) or 0
    return width, height


__all__ = ["ObjectPool", "DEFAULT_MASK_SIZE", "DEFAULT_SOFT_KEY_SIZE"]
