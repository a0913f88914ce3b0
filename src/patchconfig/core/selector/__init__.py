"""Selector functionality: member selectors resolved to validated property names."""

from patchconfig.core.selector.core import (
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
    "Selector",
    "SelectorError",
    "UnsupportedSelectorError",
    "UnknownPropertyError",
    "declared_members",
    "find_member",
    "property_type",
    "resolve_property_name",
]
