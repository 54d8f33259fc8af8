"""Configuration module using Pydantic Settings.

Usage:
    from structclone.config import CopySettings

    settings = CopySettings(max_depth=512)
"""

from structclone.config.settings import CopySettings, get_settings

__all__ = [
    "CopySettings",
    "get_settings",
]
