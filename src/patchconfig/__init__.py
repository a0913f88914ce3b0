"""patchconfig: configuration registry for mapping patch payloads onto typed entities.

Usage:
    from patchconfig import MapResult, get_registry, ignore_old_value, initialize, resolve_value

    @dataclass
    class Person:
        name: str
        age: int

    initialize(
        lambda cfg: cfg.add_entity(Person)
        .property(lambda p: p.age)
        .add_mapping(ignore_old_value(lambda t, v: MapResult.ok(int(v))))
    )

    resolve_value(get_registry(), Person, "age", "42", 30)  # MapResult(value=42)
"""

__version__ = "0.1.0"

# Builders
from patchconfig.builder import (
    Config,
    EntityConfig,
    PropertyConfig,
    clean,
    initialize,
)

# Core primitives
from patchconfig.core import (
    MapFunction,
    MapResult,
    Selector,
    SelectorError,
    TransformFunction,
    UnknownPropertyError,
    UnsupportedSelectorError,
    ignore_old_value,
    run_transforms,
)

# Registry
from patchconfig.registry import (
    EntityRegistration,
    MappingLookup,
    MappingRegistry,
    PropertyEditor,
    RegistryFrozenError,
    RegistrySnapshot,
    RegistryState,
    get_registry,
    resolve_value,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "MapResult",
    "TransformFunction",
    "MapFunction",
    "ignore_old_value",
    "run_transforms",
    "Selector",
    "SelectorError",
    "UnsupportedSelectorError",
    "UnknownPropertyError",
    # Registry
    "MappingRegistry",
    "MappingLookup",
    "RegistrySnapshot",
    "RegistryState",
    "RegistryFrozenError",
    "EntityRegistration",
    "PropertyEditor",
    "get_registry",
    "resolve_value",
    # Builders
    "Config",
    "EntityConfig",
    "PropertyConfig",
    "initialize",
    "clean",
]
