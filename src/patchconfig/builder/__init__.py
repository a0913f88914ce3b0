"""Builder functionality: fluent configuration of mapping registries."""

from patchconfig.builder.config import (
    Config,
    EntityConfig,
    PropertyConfig,
    clean,
    initialize,
)

__all__ = [
    "Config",
    "EntityConfig",
    "PropertyConfig",
    "initialize",
    "clean",
]
