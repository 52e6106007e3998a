"""Codec module - serialized forms of an object pool.

Exports:
- encode_pool / decode_pool: raw IOP binary
- ProjectFile: .aitp project wrapper (pool + names + settings)
"""

from vtpool.codec.iop import decode_pool, decode_pool_strict, encode_object, encode_pool
from vtpool.codec.project_file import (
    PROJECT_FILE_VERSION,
    ObjectMetadata,
    ProjectFile,
    ProjectSettings,
)

__all__ = [
    "encode_object",
    "encode_pool",
    "decode_pool",
    "decode_pool_strict",
    "PROJECT_FILE_VERSION",
    "ObjectMetadata",
    "ProjectFile",
    "ProjectSettings",
]
