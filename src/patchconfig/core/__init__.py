"""Core functionalities: stateless primitives.

Architecture Note:
    core/ holds pure helpers with no registry state: transform results and
    chains, and selector resolution. Stateful configuration lives in
    registry/ and builder/.
"""

from patchconfig.core.mapping import (
    MapFunction,
    MapResult,
    TransformFunction,
    ignore_old_value,
    run_transforms,
)
from patchconfig.core.selector import (
    Selector,
    SelectorError,
    UnknownPropertyError,
    UnsupportedSelectorError,
    declared_members,
    find_member,
    property_type,
    resolve_property_name,
)

__all__ = [
    # Mapping
    "MapResult",
    "TransformFunction",
    "MapFunction",
    "ignore_old_value",
    "run_transforms",
    # Selector
    "Selector",
    "SelectorError",
    "UnsupportedSelectorError",
    "UnknownPropertyError",
    "declared_members",
    "find_member",
    "property_type",
    "resolve_property_name",
]
