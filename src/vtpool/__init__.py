"""
vtpool - ISOBUS Virtual Terminal object pool editing engine

vtpool holds VT object pools in memory, allocates identifiers within each
object type's reserved range, keeps parent/child references free of
cycles, tracks undo/redo history, names objects, and reads and writes both
the raw IOP binary and the .aitp project file.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("vtpool")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed

from vtpool.codec import ProjectFile, decode_pool, encode_pool
from vtpool.document import EditorProject, ObjectInfo, import_objects
from vtpool.errors import (
    CycleError,
    IopDecodeError,
    ObjectIdRangeExhausted,
    PoolError,
    ProjectFileError,
    VtPoolError,
)
from vtpool.pool import ObjectPool, ObjectType, PoolObject

__all__ = [
    "__version__",
    "ObjectPool",
    "ObjectType",
    "PoolObject",
    "EditorProject",
    "ObjectInfo",
    "import_objects",
    "ProjectFile",
    "encode_pool",
    "decode_pool",
    "VtPoolError",
    "PoolError",
    "ObjectIdRangeExhausted",
    "CycleError",
    "IopDecodeError",
    "ProjectFileError",
]
