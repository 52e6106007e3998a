"""Document module - the editable project around an object pool.

Exports:
- EditorProject: committed/staging pools, history, selection, names
- ObjectInfo: per-object name and notes
- import_objects / import_pool: merge another pool into a project
- Result, Ok, Err: outcomes of fallible boundary operations
"""

from vtpool.document.importer import ImportReport, import_objects, import_pool
from vtpool.document.object_info import ObjectInfo
from vtpool.document.project import (
    MAX_UNDO_REDO_POOL,
    MAX_UNDO_REDO_SELECTED,
    EditorProject,
    RenameState,
)
from vtpool.document.results import Err, Ok, Result

__all__ = [
    "EditorProject",
    "RenameState",
    "MAX_UNDO_REDO_POOL",
    "MAX_UNDO_REDO_SELECTED",
    "ObjectInfo",
    "ImportReport",
    "import_objects",
    "import_pool",
    "Result",
    "Ok",
    "Err",
]
