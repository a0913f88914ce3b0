"""Configuration settings using Pydantic Settings.

Provides environment-driven defaults for mapping registries.

Usage:
    from patchconfig import MappingRegistry, initialize
    from patchconfig.config import PatchSettings

    # Load from environment variables (PATCHCONFIG_*)
    settings = PatchSettings()
    registry = MappingRegistry.from_settings(settings)
    initialize(configure, registry=registry)  # freezes if PATCHCONFIG_FREEZE_ON_INITIALIZE

    # Or override with explicit values
    settings = PatchSettings(ignore_letter_case=True)
"""

from __future__ import annotations

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install patchconfig[config]"
    ) from e


class PatchSettings(BaseSettings):  # type: ignore[misc]
    """Defaults for mapping registries.

    Attributes:
        ignore_letter_case: Match payload field names to properties case-insensitively.
        freeze_on_initialize: Freeze the registry once ``initialize`` has run.

    Environment Variables:
        PATCHCONFIG_IGNORE_LETTER_CASE
        PATCHCONFIG_FREEZE_ON_INITIALIZE
    """

    model_config = SettingsConfigDict(
        env_prefix="PATCHCONFIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ignore_letter_case: bool = False
    freeze_on_initialize: bool = False
