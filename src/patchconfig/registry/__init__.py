"""Registry functionality: stateful store of patch mapping configuration."""

from patchconfig.registry.models import (
    EntityRegistration,
    PropertyEditor,
    RegistrySnapshot,
    RegistryState,
)
from patchconfig.registry.protocol import MappingLookup
from patchconfig.registry.registry import MappingRegistry, RegistryFrozenError, get_registry
from patchconfig.registry.resolution import resolve_value

__all__ = [
    # Models
    "PropertyEditor",
    "EntityRegistration",
    "RegistrySnapshot",
    "RegistryState",
    # Protocol
    "MappingLookup",
    # Registry
    "MappingRegistry",
    "RegistryFrozenError",
    "get_registry",
    "resolve_value",
]
