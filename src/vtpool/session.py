"""DesignerSession - the boundary between a front end and the document.

A front end drives the session once per frame with `tick()`. File picking
is delegated to a FileDialogs implementation; picked file contents come
back later through `deliver_file()` and are applied on the next tick,
according to the reason the dialog was opened for.

Every fallible operation returns a Result instead of raising.
"""

from __future__ import annotations

import copy
import logging
import queue
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol

from vtpool.codec.iop import decode_pool_strict, encode_pool
from vtpool.codec.project_file import PROJECT_FILE_EXTENSION
from vtpool.config.settings import DesignerSettings
from vtpool.document.importer import ImportReport, import_objects
from vtpool.document.object_info import ObjectInfo
from vtpool.document.project import EditorProject
from vtpool.document.results import Err, Ok, Result
from vtpool.errors import PoolError, VtPoolError
from vtpool.export.header import HEADER_FILE_NAME, generate_header
from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import ObjectType, PoolObject

logger = logging.getLogger(__name__)

IOP_EXTENSION = ".iop"
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".gif")


class FileDialogReason(Enum):
    """Why a file dialog was opened; decides what delivered bytes mean."""

    LOAD_POOL = "load_pool"
    LOAD_PROJECT = "load_project"
    IMPORT_POOL = "import_pool"
    OPEN_IMAGE = "open_image"


@dataclass(frozen=True)
class PendingDialog:
    reason: FileDialogReason
    object_id: Optional[int] = None


class FileDialogs(Protocol):
    """File picking provided by the front end."""

    def open_file(self, reason: FileDialogReason, extensions: tuple[str, ...]) -> None:
        """Let the user pick a file; its bytes go to `DesignerSession.deliver_file`."""

    def save_file(self, suggested_name: str, content: bytes) -> None:
        """Let the user choose where to write `content`."""


ImageApplier = Callable[[PoolObject, bytes], None]
"""Updates a picture object from image file bytes; raises ValueError on bad images."""


@dataclass
class ImportSelection:
    """State of the "choose objects to import" modal.

    Attributes:
        pool: The pool being imported from.
        selected: Ids the user ticked.
        source_info: Names/notes of the source objects, when known.
        show_modal: Whether the modal is visible.
        opened_last_frame: Whether the modal was already shown on the
            previous frame; false until the first `begin_frame()`.
    """

    pool: ObjectPool
    selected: set[int] = field(default_factory=set)
    source_info: Optional[dict[int, ObjectInfo]] = None
    show_modal: bool = True
    opened_last_frame: bool = False

    def begin_frame(self) -> bool:
        """Mark the modal as shown; True on the first frame it is open."""
        first = not self.opened_last_frame
        self.opened_last_frame = True
        return first

    def toggle(self, object_id: int) -> None:
        if object_id in self.selected:
            self.selected.discard(object_id)
        elif object_id in self.pool:
            self.selected.add(object_id)

    def select_all(self) -> None:
        self.selected = set(self.pool.ids())

    def close(self) -> None:
        self.show_modal = False
        self.opened_last_frame = False


class DesignerSession:
    """One editing session: the open project plus its I/O plumbing."""

    def __init__(
        self,
        settings: DesignerSettings | None = None,
        dialogs: FileDialogs | None = None,
        image_applier: ImageApplier | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or DesignerSettings()
        self.dialogs = dialogs
        self.image_applier = image_applier
        self._clock = clock

        self.project: EditorProject | None = None
        self.file_channel: queue.SimpleQueue[bytes] = queue.SimpleQueue()
        self.pending_dialog: PendingDialog | None = None
        self.import_selection: ImportSelection | None = None
        self.clipboard: list[PoolObject] = []
        self.last_autosave = clock()

    # ─────────────────────────────────────────────────────────────────────────
    # Frame loop
    # ─────────────────────────────────────────────────────────────────────────

    def tick(self, now: float | None = None) -> Result | None:
        """Run one frame of housekeeping.

        Autosaves when due, applies a delivered file if one is waiting, and
        turns an image load request of the project into an open dialog.

        Returns:
            The result of applying a delivered file, or None if none was
            waiting.
        """
        now = self._clock() if now is None else now
        self.autosave_if_due(now)
        outcome = self.handle_file_loaded()
        if self.project is not None:
            object_id = self.project.take_image_load_request()
            if object_id is not None:
                self.open_file_dialog(FileDialogReason.OPEN_IMAGE, object_id)
        return outcome

    def open_file_dialog(self, reason: FileDialogReason, object_id: int | None = None) -> None:
        """Remember why a file is wanted and ask the front end for one."""
        self.pending_dialog = PendingDialog(reason, object_id)
        if self.dialogs is None:
            return
        if reason == FileDialogReason.LOAD_PROJECT:
            extensions: tuple[str, ...] = (PROJECT_FILE_EXTENSION,)
        elif reason == FileDialogReason.OPEN_IMAGE:
            extensions = IMAGE_EXTENSIONS
        else:
            extensions = (IOP_EXTENSION,)
        self.dialogs.open_file(reason, extensions)

    def deliver_file(self, content: bytes) -> None:
        """Hand picked file contents back to the session (any thread)."""
        self.file_channel.put(bytes(content))

    def handle_file_loaded(self) -> Result | None:
        try:
            content = self.file_channel.get_nowait()
        except queue.Empty:
            return None

        pending, self.pending_dialog = self.pending_dialog, None
        if pending is None:
            logger.warning("Dropping %d delivered bytes: no file dialog was open", len(content))
            return Err("No file was requested")

        if pending.reason == FileDialogReason.LOAD_POOL:
            outcome: Result = self.load_pool_bytes(content)
        elif pending.reason == FileDialogReason.IMPORT_POOL:
            outcome = self.import_pool_bytes(content)
        elif pending.reason == FileDialogReason.LOAD_PROJECT:
            outcome = self.load_project_bytes(content)
        else:
            outcome = self.apply_image(pending.object_id, content)

        if not outcome.success:
            logger.error("Failed to handle %s: %s", pending.reason.value, outcome.error)
        return outcome

    # ─────────────────────────────────────────────────────────────────────────
    # Loading and saving
    # ─────────────────────────────────────────────────────────────────────────

    def _history(self) -> dict[str, int]:
        return {
            "pool_depth": self.settings.history.pool_depth,
            "selection_depth": self.settings.history.selection_depth,
        }

    def load_pool_bytes(self, data: bytes) -> Result[EditorProject]:
        """Replace the project with one built from raw IOP bytes."""
        pool = _decode(data)
        if not pool.success:
            return pool
        project = EditorProject.from_pool(pool.value, **self._history())
        if self.settings.apply_smart_naming_on_import:
            project.apply_smart_naming_to_all_objects()
        self._replace_project(project)
        return Ok(project)

    def load_project_bytes(self, data: bytes) -> Result[EditorProject]:
        """Replace the project with one loaded from project file bytes.

        On failure the current project is kept.
        """
        result = EditorProject.load_project(data, **self._history())
        if result.success:
            self._replace_project(result.value)
        return result

    def _replace_project(self, project: EditorProject) -> None:
        self.project = project
        self.import_selection = None
        self.clipboard = []

    def save_project_bytes(self) -> Result[bytes]:
        if self.project is None:
            return Err("No project is open")
        try:
            return Ok(self.project.save_project())
        except ValueError as exc:
            logger.error("Failed to save project: %s", exc)
            return Err(str(exc))

    def export_pool_bytes(self) -> Result[bytes]:
        if self.project is None:
            return Err("No project is open")
        try:
            return Ok(encode_pool(self.project.pool))
        except ValueError as exc:
            return Err(str(exc))

    def export_header(self) -> Result[str]:
        if self.project is None:
            return Err("No project is open")
        return Ok(generate_header(self.project.pool, self.project.object_name))

    def save_project(self) -> Result[bytes]:
        """Serialize the project and offer it to the front end for saving."""
        return self._offer(self.save_project_bytes(), "project" + PROJECT_FILE_EXTENSION)

    def save_pool(self) -> Result[bytes]:
        return self._offer(self.export_pool_bytes(), "object_pool" + IOP_EXTENSION)

    def save_header(self) -> Result[str]:
        header = self.export_header()
        if header.success and self.dialogs is not None:
            self.dialogs.save_file(HEADER_FILE_NAME, header.value.encode("utf-8"))
        return header

    def _offer(self, content: Result[bytes], suggested_name: str) -> Result[bytes]:
        if content.success and self.dialogs is not None:
            self.dialogs.save_file(suggested_name, content.value)
        return content

    # ─────────────────────────────────────────────────────────────────────────
    # Autosave
    # ─────────────────────────────────────────────────────────────────────────

    def autosave_if_due(self, now: float) -> bool:
        """Write the committed project to the autosave path when the interval passed.

        Returns:
            True if an autosave was written.
        """
        autosave = self.settings.autosave
        if not autosave.enabled or self.project is None:
            return False
        if now - self.last_autosave < autosave.interval_secs:
            return False
        self.last_autosave = now
        return self.autosave(autosave.path)

    def autosave(self, path: Path) -> bool:
        if self.project is None:
            return False
        try:
            Path(path).write_bytes(self.project.save_project())
        except (OSError, ValueError) as exc:
            logger.error("Autosave to %s failed: %s", path, exc)
            return False
        logger.info("Autosaved project to %s", path)
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Import
    # ─────────────────────────────────────────────────────────────────────────

    def import_pool_bytes(self, data: bytes) -> Result[ImportSelection]:
        """Open the import selection for a raw IOP pool."""
        if self.project is None:
            return Err("Open a project before importing")
        pool = _decode(data)
        if not pool.success:
            return pool
        self.import_selection = ImportSelection(pool.value)
        return Ok(self.import_selection)

    def confirm_import(self, selected: set[int] | None = None) -> Result[ImportReport]:
        """Merge the chosen objects of the open import selection."""
        selection = self.import_selection
        if self.project is None or selection is None:
            return Err("No import in progress")
        chosen = selection.selected if selected is None else selected
        try:
            report = import_objects(self.project, selection.pool, chosen, selection.source_info)
        except PoolError as exc:
            return Err(str(exc))
        selection.close()
        self.import_selection = None
        return Ok(report)

    def cancel_import(self) -> None:
        if self.import_selection is not None:
            self.import_selection.close()
        self.import_selection = None

    # ─────────────────────────────────────────────────────────────────────────
    # Objects
    # ─────────────────────────────────────────────────────────────────────────

    def generate_smart_name_for_new_object(self, object_type: ObjectType) -> Result[str]:
        if self.project is None:
            return Err("No project is open")
        return Ok(self.project.generate_smart_name_for_new_object(object_type))

    def create_object(self, object_type: ObjectType, name: str | None = None) -> Result[int]:
        if self.project is None:
            return Err("No project is open")
        try:
            return Ok(self.project.create_object(object_type, name))
        except PoolError as exc:
            return Err(str(exc))

    def copy_selected(self, as_new: bool = False) -> Result[int]:
        """Put the selected object on the clipboard.

        Returns:
            Ok(number of objects copied).
        """
        if self.project is None:
            return Err("No project is open")
        try:
            if as_new:
                self.clipboard = self.project.copy_selected_objects_as_new()
            else:
                self.clipboard = self.project.copy_selected_objects_exact()
        except PoolError as exc:
            return Err(str(exc))
        return Ok(len(self.clipboard))

    def paste(self) -> Result[bool]:
        if self.project is None:
            return Err("No project is open")
        if not self.clipboard:
            return Ok(False)
        # Paste copies so the clipboard can be pasted again.
        return Ok(self.project.paste_objects(ObjectPool(self.clipboard).clone()))

    def request_image_load(self, object_id: int) -> None:
        if self.project is not None:
            self.project.request_image_load(object_id)

    def apply_image(self, object_id: int | None, content: bytes) -> Result[bool]:
        """Hand image bytes to the image applier and commit the result."""
        if self.project is None:
            return Err("No project is open")
        obj = self.project.staging.object_by_id(object_id)
        if obj is None or obj.object_type != ObjectType.PICTURE_GRAPHIC:
            return Err(f"Object {object_id} is not a picture graphic")
        if self.image_applier is None:
            return Err("Images cannot be loaded in this session")
        updated = copy.deepcopy(obj)
        try:
            self.image_applier(updated, content)
        except ValueError as exc:
            return Err(f"Failed to load image: {exc}")
        self.project.staging.add(updated)
        return Ok(self.project.commit())


def _decode(data: bytes) -> Result[ObjectPool]:
    try:
        pool = decode_pool_strict(data)
    except VtPoolError as exc:
        return Err(f"Failed to parse object pool: {exc}")
    if len(pool) == 0:
        return Err("Failed to parse object pool: no objects found in data")
    return Ok(pool)


__all__ = [
    "DesignerSession",
    "FileDialogReason",
    "FileDialogs",
    "ImageApplier",
    "ImportSelection",
    "PendingDialog",
]
