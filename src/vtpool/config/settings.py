"""
vtpool.config.settings - Typed view of the configuration dictionary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

from vtpool.config.defaults import DEFAULT_CONFIG

ORIENTATIONS = ("right", "left", "top", "bottom")
KEY_ORDERS = ("top_to_bottom", "bottom_to_top", "left_to_right", "right_to_left")


@dataclass
class AutosaveSettings:
    enabled: bool = True
    interval_secs: float = 30.0
    path: Path = Path("autosave.aitp")


@dataclass
class HistorySettings:
    pool_depth: int = 10
    selection_depth: int = 20


@dataclass
class DesignerSettings:
    """Editor settings built from the [designer], [project], [autosave]
    and [history] sections.

    Attributes:
        softkey_key_size: (width, height) of soft keys in the soft key mask.
        key_size: (width, height) of keys in key groups.
        softkey_mask_orientation: Side the soft key mask is drawn on.
        softkey_mask_key_order: Order keys are laid out in.
        vt_version: VT version the pool targets.
        apply_smart_naming_on_import: Name every object of a raw pool on load.
        mask_size: Default data mask size for new projects.
        autosave: Autosave timing and location.
        history: Undo/redo depths.
    """

    softkey_key_size: Tuple[int, int] = (60, 60)
    key_size: Tuple[int, int] = (60, 60)
    softkey_mask_orientation: str = "right"
    softkey_mask_key_order: str = "top_to_bottom"
    vt_version: int = 4
    apply_smart_naming_on_import: bool = True
    mask_size: int = 500
    autosave: AutosaveSettings = field(default_factory=AutosaveSettings)
    history: HistorySettings = field(default_factory=HistorySettings)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> DesignerSettings:
        """Build settings from a loaded config dictionary.

        Raises:
            ValueError: If a value has the wrong type or is out of range.
        """
        designer = {**DEFAULT_CONFIG["designer"], **config.get("designer", {})}
        project = {**DEFAULT_CONFIG["project"], **config.get("project", {})}
        autosave = {**DEFAULT_CONFIG["autosave"], **config.get("autosave", {})}
        history = {**DEFAULT_CONFIG["history"], **config.get("history", {})}

        orientation = str(designer["softkey_mask_orientation"])
        if orientation not in ORIENTATIONS:
            raise ValueError(
                f"designer.softkey_mask_orientation must be one of {ORIENTATIONS}, "
                f"got {orientation!r}"
            )
        key_order = str(designer["softkey_mask_key_order"])
        if key_order not in KEY_ORDERS:
            raise ValueError(
                f"designer.softkey_mask_key_order must be one of {KEY_ORDERS}, got {key_order!r}"
            )

        return cls(
            softkey_key_size=(
                _positive_int(designer, "softkey_key_width", "designer"),
                _positive_int(designer, "softkey_key_height", "designer"),
            ),
            key_size=(
                _positive_int(designer, "key_width", "designer"),
                _positive_int(designer, "key_height", "designer"),
            ),
            softkey_mask_orientation=orientation,
            softkey_mask_key_order=key_order,
            vt_version=_positive_int(designer, "vt_version", "designer"),
            apply_smart_naming_on_import=bool(designer["apply_smart_naming_on_import"]),
            mask_size=_positive_int(project, "mask_size", "project"),
            autosave=AutosaveSettings(
                enabled=bool(autosave["enabled"]),
                interval_secs=float(_positive_int(autosave, "interval_secs", "autosave")),
                path=Path(autosave["path"]),
            ),
            history=HistorySettings(
                pool_depth=_positive_int(history, "pool_depth", "history"),
                selection_depth=_positive_int(history, "selection_depth", "history"),
            ),
        )


def _positive_int(section: Dict[str, Any], key: str, section_name: str) -> int:
    value = section[key]
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{section_name}.{key} must be a positive integer, got {value!r}")
    return value
