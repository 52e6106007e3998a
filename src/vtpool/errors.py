"""Exception hierarchy for vtpool.

Boundary operations (loading files, importing pools, CLI commands) convert
these into result values or exit codes. Internal helpers raise them.
"""

from __future__ import annotations


class VtPoolError(Exception):
    """Base class for all vtpool errors."""


class PoolError(VtPoolError):
    """An object pool operation could not be carried out."""


class ObjectIdRangeExhausted(PoolError):
    """Every identifier in an object type's reserved range is in use.

    Ranges are fixed by the VT protocol, so this is never retried.
    """

    def __init__(self, object_type: object, first: int, last: int) -> None:
        self.object_type = object_type
        self.first = first
        self.last = last
        super().__init__(f"No available object ID in range {first}..={last} for {object_type}")


class CycleError(PoolError):
    """Adding a reference would create a structural cycle."""

    def __init__(self, parent_id: int, child_id: int) -> None:
        self.parent_id = parent_id
        self.child_id = child_id
        super().__init__(
            f"Referencing object {child_id} from {parent_id} would create a circular reference"
        )


class IopDecodeError(VtPoolError):
    """Raw IOP bytes could not be decoded."""

    def __init__(self, message: str, offset: int) -> None:
        self.offset = offset
        super().__init__(f"{message} (at byte {offset})")


class ProjectFileError(VtPoolError):
    """A project wrapper file is malformed or unsupported."""


__all__ = [
    "VtPoolError",
    "PoolError",
    "ObjectIdRangeExhausted",
    "CycleError",
    "IopDecodeError",
    "ProjectFileError",
]
