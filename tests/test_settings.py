"""Tests for the typed DesignerSettings view of the config."""

from pathlib import Path

import pytest

from vtpool.config import DEFAULT_CONFIG, DesignerSettings


class TestFromConfig:
    def test_defaults(self):
        settings = DesignerSettings.from_config(DEFAULT_CONFIG)
        assert settings == DesignerSettings()

    def test_empty_config_uses_defaults(self):
        assert DesignerSettings.from_config({}) == DesignerSettings()

    def test_values_mapped(self):
        settings = DesignerSettings.from_config(
            {
                "designer": {"softkey_key_width": 80, "key_height": 40, "softkey_mask_orientation": "left"},
                "project": {"mask_size": 480},
                "autosave": {"enabled": False, "interval_secs": 5, "path": "backup.aitp"},
                "history": {"pool_depth": 3},
            }
        )
        assert settings.softkey_key_size == (80, 60)
        assert settings.key_size == (60, 40)
        assert settings.softkey_mask_orientation == "left"
        assert settings.mask_size == 480
        assert settings.autosave.enabled is False
        assert settings.autosave.interval_secs == 5.0
        assert settings.autosave.path == Path("backup.aitp")
        assert settings.history.pool_depth == 3
        assert settings.history.selection_depth == 20

    @pytest.mark.parametrize(
        "config, message",
        [
            ({"designer": {"softkey_mask_orientation": "diagonal"}}, "softkey_mask_orientation"),
            ({"designer": {"softkey_mask_key_order": "random"}}, "softkey_mask_key_order"),
            ({"project": {"mask_size": 0}}, "project.mask_size"),
            ({"history": {"pool_depth": "ten"}}, "history.pool_depth"),
            ({"autosave": {"interval_secs": True}}, "autosave.interval_secs"),
        ],
    )
    def test_invalid_values(self, config, message):
        with pytest.raises(ValueError, match=message):
            DesignerSettings.from_config(config)
