"""Configuration module using Pydantic Settings.

Provides typed, environment-driven defaults for mapping registries.

Usage:
    from patchconfig.config import PatchSettings

    settings = PatchSettings(ignore_letter_case=True)
"""

from patchconfig.config.settings import PatchSettings

__all__ = [
    "PatchSettings",
]
