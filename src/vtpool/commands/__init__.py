"""
vtpool.commands - CLI command implementations
"""

__all__ = [
    "common",
    "config_cmd",
    "convert",
    "header",
    "import_cmd",
    "info",
    "largest",
    "name",
]
