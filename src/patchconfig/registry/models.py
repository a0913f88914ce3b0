"""Registry models: property editors, entity registrations, and snapshots.

PropertyEditor and EntityRegistration are immutable; the registry swaps in
new instances on every change. RegistrySnapshot is the read-only view handed
out by ``MappingRegistry.freeze()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from types import MappingProxyType
from typing import Any

from patchconfig.core.mapping import TransformFunction


class RegistryState(Enum):
    """Lifecycle state of a mapping registry."""

    UNCONFIGURED = auto()  # Empty cache, default flag, no global mappings
    CONFIGURED = auto()  # Anything else


@dataclass(frozen=True, slots=True)
class PropertyEditor:
    """Configuration governing how one entity property is patched."""

    entity_type: type
    property_name: str
    property_type: Any = object
    mappings: tuple[TransformFunction, ...] = ()
    """Transforms in registration order; each consumes the previous result."""
    ignore_null: bool = False
    """Skip assignment when the incoming value is None."""
    excluded: bool = False
    """Never assign this property, whatever the incoming value."""

    def with_mapping(self, transform: TransformFunction) -> PropertyEditor:
        return replace(self, mappings=(*self.mappings, transform))

    def with_ignore_null(self, enabled: bool = True) -> PropertyEditor:
        return replace(self, ignore_null=enabled)

    def with_excluded(self, enabled: bool = True) -> PropertyEditor:
        return replace(self, excluded=enabled)


@dataclass(frozen=True, slots=True)
class EntityRegistration:
    """Property editors configured for one entity type.

    Immutable; the registry replaces the stored registration whenever an
    editor is added or changed.
    """

    entity_type: type
    editors: Mapping[str, PropertyEditor] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "editors", MappingProxyType(dict(self.editors)))

    def with_editor(self, editor: PropertyEditor) -> EntityRegistration:
        """Copy of this registration with ``editor`` stored under its property name."""
        return replace(self, editors={**self.editors, editor.property_name: editor})

    def find_editor(self, property_name: str, ignore_case: bool = False) -> PropertyEditor | None:
        """Look up an editor by property name.

        An exact match always wins. With ``ignore_case`` the first editor
        (in registration order) whose name matches case-insensitively is used.

        Args:
            property_name: Name as it appears in the patch payload.
            ignore_case: Whether to fall back to case-insensitive matching.

        Returns:
            Matching editor, or None.
        """
        editor = self.editors.get(property_name)
        if editor is not None or not ignore_case:
            return editor
        folded = property_name.casefold()
        for name, candidate in self.editors.items():
            if name.casefold() == folded:
                return candidate
        return None

    def case_collisions(self) -> list[tuple[str, str]]:
        """Pairs of configured property names that differ only by letter case."""
        seen: dict[str, str] = {}
        collisions: list[tuple[str, str]] = []
        for name in self.editors:
            folded = name.casefold()
            if folded in seen:
                collisions.append((seen[folded], name))
            else:
                seen[folded] = name
        return collisions


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    """Immutable view of a registry, safe to share between threads."""

    ignore_letter_case: bool
    global_mappings: tuple[TransformFunction, ...]
    registrations: Mapping[type, EntityRegistration]

    def is_registered(self, entity_type: type) -> bool:
        return entity_type in self.registrations

    def get_registration(self, entity_type: type) -> EntityRegistration | None:
        return self.registrations.get(entity_type)

    def get_editor(self, entity_type: type, property_name: str) -> PropertyEditor | None:
        registration = self.registrations.get(entity_type)
        if registration is None:
            return None
        return registration.find_editor(property_name, self.ignore_letter_case)

    def entity_types(self) -> tuple[type, ...]:
        return tuple(self.registrations)
