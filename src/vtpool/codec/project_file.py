"""Project file - the .aitp wrapper around an IOP object pool.

The wrapper is a JSON document holding:
- version: format version (currently 1)
- object_pool_data: the IOP bytes, as a list of byte values
- object_metadata: {"<id>": {"name": ..., "notes": ...}}
- settings: {"mask_size": ..., "last_selected": ...}
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

from vtpool.codec.iop import decode_pool_strict, encode_pool
from vtpool.errors import IopDecodeError, ProjectFileError
from vtpool.pool.object_pool import ObjectPool

if TYPE_CHECKING:
    from vtpool.document.object_info import ObjectInfo

PROJECT_FILE_VERSION = 1
PROJECT_FILE_EXTENSION = ".aitp"
DEFAULT_MASK_SIZE = 500
MIN_POOL_DATA_SIZE = 4


@dataclass
class ObjectMetadata:
    """Persisted metadata of one object."""

    name: str | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "notes": self.notes}

    @classmethod
    def from_dict(cls, data: Any) -> ObjectMetadata:
        if not isinstance(data, dict):
            raise ProjectFileError(f"Object metadata must be an object, got {type(data).__name__}")
        name = data.get("name")
        notes = data.get("notes")
        for key, value in (("name", name), ("notes", notes)):
            if value is not None and not isinstance(value, str):
                raise ProjectFileError(f"Object metadata '{key}' must be a string or null")
        return cls(name=name, notes=notes)


@dataclass
class ProjectSettings:
    """Project-level settings."""

    mask_size: int = DEFAULT_MASK_SIZE
    last_selected: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"mask_size": self.mask_size, "last_selected": self.last_selected}

    @classmethod
    def from_dict(cls, data: Any) -> ProjectSettings:
        if not isinstance(data, dict):
            raise ProjectFileError("Project settings must be an object")
        mask_size = data.get("mask_size", DEFAULT_MASK_SIZE)
        last_selected = data.get("last_selected")
        if not _is_u16(mask_size) or mask_size == 0:
            raise ProjectFileError(f"Invalid mask_size: {mask_size!r}")
        if last_selected is not None and not _is_u16(last_selected):
            raise ProjectFileError(f"Invalid last_selected: {last_selected!r}")
        return cls(mask_size=mask_size, last_selected=last_selected)


def _is_u16(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFFFF


@dataclass
class ProjectFile:
    """In-memory form of a project wrapper file."""

    version: int = PROJECT_FILE_VERSION
    object_pool_data: bytes = b""
    object_metadata: dict[int, ObjectMetadata] = field(default_factory=dict)
    settings: ProjectSettings = field(default_factory=ProjectSettings)

    @classmethod
    def new(
        cls,
        pool: ObjectPool,
        object_info: Mapping[int, ObjectInfo],
        mask_size: int,
        selected: int | None,
    ) -> ProjectFile:
        """Create a project file from a pool and its per-object metadata."""
        metadata = {
            object_id: ObjectMetadata(name=info.name, notes=info.notes)
            for object_id, info in object_info.items()
        }
        return cls(
            version=PROJECT_FILE_VERSION,
            object_pool_data=encode_pool(pool),
            object_metadata=metadata,
            settings=ProjectSettings(mask_size=mask_size, last_selected=selected),
        )

    def load_pool(self) -> ObjectPool:
        """Decode the embedded object pool.

        Raises:
            ProjectFileError: If the data is too small to be a pool, is
                truncated, or decodes to nothing although it is not
                trivially small.
        """
        if len(self.object_pool_data) < MIN_POOL_DATA_SIZE:
            raise ProjectFileError("Object pool data is too small to be valid")
        try:
            pool = decode_pool_strict(self.object_pool_data)
        except IopDecodeError as exc:
            raise ProjectFileError(f"Failed to parse object pool: {exc}") from exc
        if len(pool) == 0 and len(self.object_pool_data) > MIN_POOL_DATA_SIZE:
            raise ProjectFileError("Failed to parse object pool: no objects found in data")
        return pool

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "object_pool_data": list(self.object_pool_data),
            "object_metadata": {
                str(object_id): meta.to_dict()
                for object_id, meta in sorted(self.object_metadata.items())
            },
            "settings": self.settings.to_dict(),
        }

    def to_bytes(self) -> bytes:
        """Serialize to pretty-printed JSON bytes."""
        return json.dumps(self.to_dict(), indent=2).encode("utf-8")

    @classmethod
    def from_dict(cls, data: Any) -> ProjectFile:
        if not isinstance(data, dict):
            raise ProjectFileError("Project file must be a JSON object")
        for key in ("version", "object_pool_data", "object_metadata", "settings"):
            if key not in data:
                raise ProjectFileError(f"Project file is missing '{key}'")

        version = data["version"]
        if not isinstance(version, int) or isinstance(version, bool) or version < 1:
            raise ProjectFileError(f"Invalid project file version: {version!r}")
        if version > PROJECT_FILE_VERSION:
            raise ProjectFileError(
                f"Project file version {version} is newer than supported "
                f"version {PROJECT_FILE_VERSION}"
            )

        metadata_in = data["object_metadata"]
        if not isinstance(metadata_in, dict):
            raise ProjectFileError("'object_metadata' must be an object")
        metadata: dict[int, ObjectMetadata] = {}
        for key, value in metadata_in.items():
            try:
                object_id = int(key)
            except (TypeError, ValueError):
                raise ProjectFileError(f"Invalid object id in metadata: {key!r}") from None
            if not 0 <= object_id <= 0xFFFF:
                raise ProjectFileError(f"Invalid object id in metadata: {key!r}")
            metadata[object_id] = ObjectMetadata.from_dict(value)

        return cls(
            version=version,
            object_pool_data=_pool_data_from_json(data["object_pool_data"]),
            object_metadata=metadata,
            settings=ProjectSettings.from_dict(data["settings"]),
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> ProjectFile:
        """Parse JSON bytes.

        Raises:
            ProjectFileError: If the bytes are not a valid project file.
        """
        try:
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ProjectFileError(f"Failed to parse project file: {exc}") from exc
        return cls.from_dict(data)


def _pool_data_from_json(value: Any) -> bytes:
    """Accept the pool data as a list of byte values or a base64 string."""
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ProjectFileError(f"Invalid base64 object pool data: {exc}") from exc
    if isinstance(value, list):
        try:
            return bytes(value)
        except (TypeError, ValueError) as exc:
            raise ProjectFileError(f"Invalid object pool data: {exc}") from exc
    raise ProjectFileError("'object_pool_data' must be a list of bytes or a base64 string")


__all__ = [
    "PROJECT_FILE_VERSION",
    "PROJECT_FILE_EXTENSION",
    "ObjectMetadata",
    "ProjectSettings",
    "ProjectFile",
]
