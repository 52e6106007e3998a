"""Size report - which objects take up the most space in a pool."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vtpool.codec.iop import encode_object
from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import ObjectType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObjectSize:
    """Encoded size of one object record."""

    rank: int
    object_id: int
    object_type: ObjectType
    size: int

    def __str__(self) -> str:
        return (
            f"{self.rank}. id: {self.object_id}, type: {self.object_type.display_name}, "
            f"total size: {self.size} bytes"
        )


def top_largest_objects(pool: ObjectPool, count: int = 10) -> list[ObjectSize]:
    """The `count` largest objects by IOP record size, largest first.

    Ties keep pool order.
    """
    sized = sorted(
        ((len(encode_object(obj)), obj) for obj in pool),
        key=lambda item: item[0],
        reverse=True,
    )
    return [
        ObjectSize(rank, obj.id, obj.object_type, size)
        for rank, (size, obj) in enumerate(sized[:count], start=1)
    ]


def log_top_largest_objects(pool: ObjectPool, count: int = 10) -> list[ObjectSize]:
    """Log the largest objects at INFO level and return them."""
    largest = top_largest_objects(pool, count)
    for entry in largest:
        logger.info("%s", entry)
    if not largest:
        logger.info("No objects in pool.")
    return largest


__all__ = ["ObjectSize", "top_largest_objects", "log_top_largest_objects"]
