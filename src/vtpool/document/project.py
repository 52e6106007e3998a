"""EditorProject - the editable object pool document.

The project owns two pools: the committed pool, which is what everything
reads, and the staging pool, which edits go into. `update_pool()` (alias
`commit()`) promotes staging to committed and records the previous
committed pool in a bounded undo history. Selection is tracked the same way
with its own, independent history.

Names and notes live in `object_info`, keyed by object id, outside the pool.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from vtpool.codec.project_file import ProjectFile
from vtpool.document.object_info import ObjectInfo
from vtpool.document.results import Err, Ok, Result
from vtpool.errors import CycleError, VtPoolError
from vtpool.pool.allocator import allocate_object_id
from vtpool.pool.defaults import default_object
from vtpool.pool.naming import default_object_name, generate_smart_default_name
from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import MAX_OBJECT_ID, ObjectRef, ObjectType, PoolObject
from vtpool.pool.references import ensure_no_cycle, would_create_cycle
from vtpool.pool.schema import FieldKind, schema_for

logger = logging.getLogger(__name__)

MAX_UNDO_REDO_POOL = 10
MAX_UNDO_REDO_SELECTED = 20

_CHILD_LIST_KINDS = (FieldKind.OBJECT_REFS, FieldKind.REF_LIST, FieldKind.NULLABLE_REF_LIST)


@dataclass
class RenameState:
    """An in-progress rename of one object.

    Attributes:
        object_id: Object being renamed.
        name: The name typed so far.
    """

    object_id: int
    name: str


def _push_bounded(stack: list[Any], item: Any, depth: int) -> None:
    stack.append(item)
    if len(stack) > depth:
        del stack[: len(stack) - depth]


class EditorProject:
    """Editable document around one object pool.

    Example:
        >>> project = EditorProject.from_pool(pool)
        >>> project.staging.add(button)
        >>> project.commit()
        True
        >>> project.undo()
    """

    def __init__(
        self,
        pool: ObjectPool | None = None,
        *,
        pool_depth: int = MAX_UNDO_REDO_POOL,
        selection_depth: int = MAX_UNDO_REDO_SELECTED,
    ) -> None:
        self._pool = pool if pool is not None else ObjectPool()
        self._staging = self._pool.clone()
        self._undo_pool_history: list[ObjectPool] = []
        self._redo_pool_history: list[ObjectPool] = []
        self._pool_depth = pool_depth

        self._selected: int | None = None
        self._staging_selected: int | None = None
        self._undo_selected_history: list[int | None] = []
        self._redo_selected_history: list[int | None] = []
        self._selection_depth = selection_depth

        self.mask_size, self.soft_key_size = self._pool.minimum_mask_sizes()
        self.object_info: dict[int, ObjectInfo] = {}

        self._renaming: RenameState | None = None
        self._next_available_id: int | None = None
        self._default_names: dict[int, str] = {}
        self._image_load_request: int | None = None

    @classmethod
    def from_pool(cls, pool: ObjectPool, **history: int) -> EditorProject:
        """Create a project around a freshly loaded or authored pool."""
        return cls(pool, **history)

    # ─────────────────────────────────────────────────────────────────────────
    # Pools and history
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def pool(self) -> ObjectPool:
        """The committed pool. Treat as read-only; edit `staging` instead."""
        return self._pool

    @property
    def staging(self) -> ObjectPool:
        """The staging pool that edits are made to before `commit()`."""
        return self._staging

    def is_dirty(self) -> bool:
        return self._staging != self._pool

    def update_pool(self) -> bool:
        """Promote the staging pool if it differs from the committed one.

        Returns:
            True if the committed pool changed.
        """
        if self._staging == self._pool:
            return False
        self._redo_pool_history.clear()
        _push_bounded(self._undo_pool_history, self._pool, self._pool_depth)
        self._pool = self._staging.clone()
        self._invalidate_caches()
        return True

    commit = update_pool

    def undo(self) -> None:
        """Restore the previous committed pool, if any."""
        if not self._undo_pool_history:
            return
        snapshot = self._undo_pool_history.pop()
        self._redo_pool_history.append(self._pool)
        self._restore(snapshot)

    def redo(self) -> None:
        """Re-apply the last undone pool, if any."""
        if not self._redo_pool_history:
            return
        snapshot = self._redo_pool_history.pop()
        _push_bounded(self._undo_pool_history, self._pool, self._pool_depth)
        self._restore(snapshot)

    def undo_available(self) -> bool:
        return bool(self._undo_pool_history)

    def redo_available(self) -> bool:
        return bool(self._redo_pool_history)

    def _restore(self, snapshot: ObjectPool) -> None:
        # Both pools are replaced so the restore itself is not recorded.
        self._pool = snapshot
        self._staging = snapshot.clone()
        self._invalidate_caches()

    def _invalidate_caches(self) -> None:
        self._next_available_id = None
        self._default_names.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Selection
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def selected(self) -> int | None:
        """The committed selection."""
        return self._selected

    @property
    def staging_selected(self) -> int | None:
        return self._staging_selected

    def select(self, object_id: int | None) -> None:
        """Stage a new selection; takes effect on `update_selected()`."""
        self._staging_selected = object_id

    def selected_object(self) -> PoolObject | None:
        """The committed selection resolved in the committed pool."""
        return self._pool.object_by_id(self._selected)

    def update_selected(self) -> bool:
        """Promote the staged selection if it changed.

        Selecting an object pushes the previous selection onto the history;
        clearing the selection does not.

        Returns:
            True if the selection changed.
        """
        if self._staging_selected == self._selected:
            return False
        self._redo_selected_history.clear()
        if self._staging_selected is not None:
            _push_bounded(self._undo_selected_history, self._selected, self._selection_depth)
        self._selected = self._staging_selected
        return True

    commit_selection = update_selected

    def set_previous_selected(self) -> None:
        if not self._undo_selected_history:
            return
        previous = self._undo_selected_history.pop()
        self._redo_selected_history.append(self._selected)
        self._selected = self._staging_selected = previous

    def set_next_selected(self) -> None:
        if not self._redo_selected_history:
            return
        following = self._redo_selected_history.pop()
        _push_bounded(self._undo_selected_history, self._selected, self._selection_depth)
        self._selected = self._staging_selected = following

    # ─────────────────────────────────────────────────────────────────────────
    # Identifiers
    # ─────────────────────────────────────────────────────────────────────────

    def allocate_object_id_for_type(self, object_type: ObjectType) -> int:
        """Lowest free identifier of a type's range in the committed pool.

        Raises:
            ObjectIdRangeExhausted: If the range is full.
        """
        return allocate_object_id(self._pool, object_type)

    @property
    def next_available_id(self) -> int:
        """One past the highest identifier in the committed pool."""
        if self._next_available_id is None:
            highest = max(self._pool.ids(), default=-1)
            self._next_available_id = min(highest + 1, MAX_OBJECT_ID)
        return self._next_available_id

    # ─────────────────────────────────────────────────────────────────────────
    # Names and metadata
    # ─────────────────────────────────────────────────────────────────────────

    def get_object_info(self, obj: PoolObject) -> ObjectInfo:
        """Metadata of an object, creating an empty entry when missing."""
        return self.object_info.setdefault(obj.id, ObjectInfo())

    def object_name(self, obj: PoolObject) -> str:
        info = self.object_info.get(obj.id)
        if info is not None and info.name is not None:
            return info.name
        return self._cached_default_name(obj)

    def _cached_default_name(self, obj: PoolObject) -> str:
        name = self._default_names.get(obj.id)
        if name is None:
            name = default_object_name(obj)
            self._default_names[obj.id] = name
        return name

    def set_object_name(self, object_id: int, name: str | None) -> None:
        self.object_info.setdefault(object_id, ObjectInfo()).name = name

    def set_object_notes(self, object_id: int, notes: str | None) -> None:
        self.object_info.setdefault(object_id, ObjectInfo()).notes = notes

    def get_all_object_names(self) -> dict[str, ObjectType]:
        """Every name in use in the committed pool, mapped to its object type."""
        names: dict[str, ObjectType] = {}
        for obj in self._pool:
            names.setdefault(self.object_name(obj), obj.object_type)
        return names

    def generate_smart_name_for_new_object(self, object_type: ObjectType) -> str:
        return generate_smart_default_name(object_type, self.get_all_object_names())

    def apply_smart_naming_to_object(self, obj: PoolObject) -> None:
        """Give an object a smart name unless it already has one."""
        info = self.object_info.get(obj.id)
        if info is not None and info.name is not None:
            return

        existing: dict[str, ObjectType] = {}
        for other in self._pool:
            if other.id == obj.id:
                continue
            existing.setdefault(self.object_name(other), other.object_type)
        self.set_object_name(obj.id, generate_smart_default_name(obj.object_type, existing))

    def apply_smart_naming_to_all_objects(self) -> None:
        """Smart-name every object of the committed pool that has no name."""
        existing: dict[str, ObjectType] = {}
        for object_id, info in self.object_info.items():
            obj = self._pool.object_by_id(object_id)
            if obj is not None and info.name is not None:
                existing.setdefault(info.name, obj.object_type)

        for obj in self._pool:
            info = self.object_info.get(obj.id)
            if info is not None and info.name is not None:
                continue
            name = generate_smart_default_name(obj.object_type, existing)
            existing[name] = obj.object_type
            self.set_object_name(obj.id, name)

    def update_object_id_for_info(self, old_id: int, new_id: int) -> None:
        """Move an object's metadata to a new identifier."""
        info = self.object_info.pop(old_id, None)
        if info is not None:
            self.object_info[new_id] = info

    # Rename workflow

    @property
    def renaming(self) -> RenameState | None:
        return self._renaming

    def start_renaming(self, object_id: int, name: str) -> None:
        self._renaming = RenameState(object_id, name)

    def update_renaming(self, name: str) -> None:
        if self._renaming is not None:
            self._renaming.name = name

    def finish_renaming(self, store: bool) -> None:
        """End the rename, storing the typed name when `store` is true."""
        if store and self._renaming is not None:
            self.set_object_name(self._renaming.object_id, self._renaming.name)
        self._renaming = None

    # ─────────────────────────────────────────────────────────────────────────
    # Editing
    # ─────────────────────────────────────────────────────────────────────────

    def sort_objects_by(self, key: Callable[[PoolObject], Any]) -> None:
        """Reorder the staging pool."""
        self._staging.sort_by(key)

    def copy_selected_objects_exact(self) -> list[PoolObject]:
        """Clone of the selected object, identifier included."""
        obj = self.selected_object()
        if obj is None:
            return []
        return [copy.deepcopy(obj)]

    def copy_selected_objects_as_new(self) -> list[PoolObject]:
        """Clone of the selected object under a freshly allocated identifier.

        Only the clone's own identifier changes; references held by the
        clone still point at the original targets.

        Raises:
            ObjectIdRangeExhausted: If the type's range is full.
        """
        copies = self.copy_selected_objects_exact()
        for obj in copies:
            obj.id = self.allocate_object_id_for_type(obj.object_type)
        return copies

    def paste_objects(self, objects: Iterable[PoolObject]) -> bool:
        """Add objects to the staging pool and commit.

        Returns:
            True if the committed pool changed.
        """
        for obj in objects:
            self._staging.add(obj)
        return self.update_pool()

    def create_object(self, object_type: ObjectType, name: str | None = None) -> int:
        """Create a default object of a type, name it and commit.

        Returns:
            The new object's identifier.

        Raises:
            ObjectIdRangeExhausted: If the type's range is full.
        """
        object_id = allocate_object_id(self._staging, object_type)
        obj = default_object(object_type, self._staging, object_id)
        if name is None:
            name = self.generate_smart_name_for_new_object(object_type)
        self._staging.add(obj)
        self.set_object_name(object_id, name)
        self.update_pool()
        logger.debug("Created %s as %d (%s)", object_type.display_name, object_id, name)
        return object_id

    def allowed_child_choices(self, parent_id: int, candidates: Iterable[int]) -> list[int]:
        """Filter out candidate children that would close a structural cycle."""
        return [c for c in candidates if not would_create_cycle(self._staging, parent_id, c)]

    def add_child_reference(
        self,
        parent_id: int,
        child_id: int,
        x: int = 0,
        y: int = 0,
        field_name: str | None = None,
    ) -> Result[bool]:
        """Append a child to a parent's child list in staging and commit.

        The staging pool is left untouched when the edit is refused.

        Args:
            parent_id: Object receiving the child.
            child_id: Object to reference.
            x, y: Offset, for positioned child lists.
            field_name: Child list to append to; defaults to the parent
                type's first structural list.

        Returns:
            Ok(changed) or Err describing why the edit was refused.
        """
        parent = self._staging.object_by_id(parent_id)
        if parent is None:
            return Err(f"Object {parent_id} does not exist")

        candidates = [
            f
            for f in schema_for(parent.object_type).reference_fields()
            if f.structural and f.kind in _CHILD_LIST_KINDS
        ]
        if field_name is not None:
            candidates = [f for f in candidates if f.name == field_name]
        if not candidates:
            return Err(f"{parent.object_type.display_name} cannot hold child objects")

        try:
            ensure_no_cycle(self._staging, parent_id, child_id)
        except CycleError as exc:
            return Err(str(exc))

        target = candidates[0]
        items = parent.attributes.setdefault(target.name, [])
        if target.kind == FieldKind.OBJECT_REFS:
            items.append(ObjectRef(child_id, x, y))
        else:
            items.append(child_id)
        return Ok(self.update_pool())

    # ─────────────────────────────────────────────────────────────────────────
    # Image load request
    # ─────────────────────────────────────────────────────────────────────────

    def request_image_load(self, object_id: int) -> None:
        """Ask the front end for image bytes; replaces any pending request."""
        self._image_load_request = object_id

    def take_image_load_request(self) -> int | None:
        request, self._image_load_request = self._image_load_request, None
        return request

    # ─────────────────────────────────────────────────────────────────────────
    # Persistence
    # ─────────────────────────────────────────────────────────────────────────

    def save_project(self) -> bytes:
        """Serialize the committed pool, names and settings to project bytes."""
        selected = (
            self._staging_selected if self._staging_selected is not None else self._selected
        )
        project = ProjectFile.new(self._pool, self.object_info, self.mask_size, selected)
        return project.to_bytes()

    @classmethod
    def load_project(cls, data: bytes, **history: int) -> Result[EditorProject]:
        """Build a project from project file bytes.

        Names and notes are restored for objects present in the file's
        metadata; every other object gets a smart name. The last selection
        is restored only if it still resolves to an object.
        """
        try:
            project_file = ProjectFile.from_bytes(data)
            pool = project_file.load_pool()
        except VtPoolError as exc:
            logger.error("Failed to load project: %s", exc)
            return Err(str(exc))

        project = cls.from_pool(pool, **history)
        project.mask_size = project_file.settings.mask_size

        for obj in pool:
            meta = project_file.object_metadata.get(obj.id)
            if meta is not None:
                project.object_info[obj.id] = ObjectInfo(name=meta.name, notes=meta.notes)

        for obj in pool:
            project.apply_smart_naming_to_object(obj)

        last_selected = project_file.settings.last_selected
        if last_selected is not None and last_selected in pool:
            project._selected = project._staging_selected = last_selected

        logger.debug("Loaded project with %d objects", len(pool))
        return Ok(project)


__all__ = [
    "EditorProject",
    "RenameState",
    "MAX_UNDO_REDO_POOL",
    "MAX_UNDO_REDO_SELECTED",
]
