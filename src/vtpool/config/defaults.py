"""
vtpool.config.defaults - Default configuration values
"""

DEFAULT_CONFIG = {
    "designer": {
        "softkey_key_width": 60,
        "softkey_key_height": 60,
        "key_width": 60,
        "key_height": 60,
        "softkey_mask_orientation": "right",
        "softkey_mask_key_order": "top_to_bottom",
        "vt_version": 4,
        "apply_smart_naming_on_import": True,
    },
    "project": {
        "mask_size": 500,
    },
    "autosave": {
        "enabled": True,
        "interval_secs": 30,
        "path": "autosave.aitp",
    },
    "history": {
        "pool_depth": 10,
        "selection_depth": 20,
    },
}

CONFIG_FILE_NAME = ".vtpool.toml"
ENV_PREFIX = "VTPOOL_"
