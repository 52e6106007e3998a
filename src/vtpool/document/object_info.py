"""Per-object metadata kept alongside, not inside, the object pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from vtpool.pool.naming import default_object_name
from vtpool.pool.objects import PoolObject


@dataclass
class ObjectInfo:
    """User-facing metadata of one object.

    Attributes:
        name: User- or auto-assigned name; None means "use the default".
        notes: Free-form notes.
    """

    name: Optional[str] = None
    notes: Optional[str] = None

    def get_name(self, obj: PoolObject) -> str:
        """Explicit name, or the default "Object <id> (<type>)" name."""
        if self.name is not None:
            return self.name
        return default_object_name(obj)

    def set_name(self, name: str) -> None:
        self.name = name


__all__ = ["ObjectInfo"]
