"""Read interface shared by live registries and frozen snapshots.

Patch appliers depend on this protocol rather than on MappingRegistry so
they can be handed either the live registry during startup or a frozen
snapshot once traffic begins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from patchconfig.core.mapping import TransformFunction
    from patchconfig.registry.models import EntityRegistration, PropertyEditor


@runtime_checkable
class MappingLookup(Protocol):
    """Query surface consumed by patch appliers.

    Usage:
        editor = lookup.get_editor(Person, "age")
        if editor is not None and editor.excluded:
            ...

        for transform in lookup.global_mappings:
            ...
    """

    @property
    def ignore_letter_case(self) -> bool:
        """Whether payload field names match property names case-insensitively."""
        ...

    @property
    def global_mappings(self) -> tuple[TransformFunction, ...]:
        """Transforms applied to every property of every registered entity."""
        ...

    def is_registered(self, entity_type: type) -> bool:
        """Check whether an entity type has been added."""
        ...

    def get_registration(self, entity_type: type) -> EntityRegistration | None:
        """Get the registration for an entity type, if any."""
        ...

    def get_editor(self, entity_type: type, property_name: str) -> PropertyEditor | None:
        """Get the editor for a property, honouring the letter-case flag.

        Args:
            entity_type: Entity class being patched.
            property_name: Field name as it appears in the payload.

        Returns:
            The matching editor, or None if the property has no configuration.
        """
        ...
