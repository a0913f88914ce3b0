"""Mapping registry: entity type -> property editors, plus global settings.

Usage:
    registry = MappingRegistry()
    registry.configure(
        lambda cfg: cfg.add_entity(Person).property(lambda p: p.name).ignore_null()
    )
    snapshot = registry.freeze()

    snapshot.get_editor(Person, "name").ignore_null  # True
"""

from __future__ import annotations

import warnings
from collections.abc import Callable
from types import MappingProxyType
from typing import TYPE_CHECKING

from patchconfig.core.mapping import TransformFunction
from patchconfig.core.selector import Selector, property_type, resolve_property_name
from patchconfig.registry.models import (
    EntityRegistration,
    PropertyEditor,
    RegistrySnapshot,
    RegistryState,
)

if TYPE_CHECKING:
    from patchconfig.builder import Config
    from patchconfig.config import PatchSettings


class RegistryFrozenError(RuntimeError):
    """Raised when a frozen registry is asked to change."""

    pass


class MappingRegistry:
    """Process-local registry of patch mapping configuration.

    Holds the letter-case flag, the global transform list, and one
    EntityRegistration per configured entity type. No internal locking:
    configure once at startup, then hand readers the snapshot from ``freeze()``.
    """

    def __init__(
        self, ignore_letter_case: bool = False, freeze_on_initialize: bool = False
    ) -> None:
        """Initialize an empty registry.

        Args:
            ignore_letter_case: Initial value of the letter-case flag.
            freeze_on_initialize: Default for ``initialize(..., freeze=None)``.
        """
        self._ignore_letter_case = ignore_letter_case
        self.freeze_on_initialize = freeze_on_initialize
        self._global_mappings: list[TransformFunction] = []
        self._registrations: dict[type, EntityRegistration] = {}
        self._frozen = False

    @classmethod
    def from_settings(cls, settings: PatchSettings | None = None) -> MappingRegistry:
        """Create a registry seeded from PatchSettings.

        Args:
            settings: Explicit settings; loaded from the environment when None.

        Returns:
            New registry with the configured letter-case flag and freeze policy.
        """
        if settings is None:
            # Late import: pydantic-settings is only needed on this path
            from patchconfig.config import PatchSettings

            settings = PatchSettings()
        return cls(
            ignore_letter_case=settings.ignore_letter_case,
            freeze_on_initialize=settings.freeze_on_initialize,
        )

    # Read interface

    @property
    def ignore_letter_case(self) -> bool:
        return self._ignore_letter_case

    @property
    def global_mappings(self) -> tuple[TransformFunction, ...]:
        return tuple(self._global_mappings)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def state(self) -> RegistryState:
        if self._registrations or self._global_mappings or self._ignore_letter_case:
            return RegistryState.CONFIGURED
        return RegistryState.UNCONFIGURED

    def is_registered(self, entity_type: type) -> bool:
        return entity_type in self._registrations

    def get_registration(self, entity_type: type) -> EntityRegistration | None:
        return self._registrations.get(entity_type)

    def get_editor(self, entity_type: type, property_name: str) -> PropertyEditor | None:
        registration = self._registrations.get(entity_type)
        if registration is None:
            return None
        return registration.find_editor(property_name, self._ignore_letter_case)

    def entity_types(self) -> tuple[type, ...]:
        return tuple(self._registrations)

    # Configuration

    def configure(self, configurator: Callable[[Config], None]) -> None:
        """Run a configurator once against a fresh Config builder.

        Args:
            configurator: Callable receiving the builder bound to this registry.
        """
        # Late import to avoid circular dependency
        from patchconfig.builder import Config

        configurator(Config(self))

    def add_entity(self, entity_type: type) -> EntityRegistration:
        """Register an entity type. Registering twice returns the existing entry.

        Args:
            entity_type: Entity class to register.

        Returns:
            The registration for ``entity_type``.

        Raises:
            TypeError: If ``entity_type`` is not a class.
            RegistryFrozenError: If the registry is frozen.
        """
        if not isinstance(entity_type, type):
            raise TypeError(f"Entity type must be a class, got {entity_type!r}")
        registration = self._registrations.get(entity_type)
        if registration is not None:
            return registration
        self._check_mutable()
        registration = EntityRegistration(entity_type)
        self._registrations[entity_type] = registration
        return registration

    def set_ignore_letter_case(self, enabled: bool = True) -> None:
        """Set whether property names match case-insensitively."""
        self._check_mutable()
        self._ignore_letter_case = enabled
        if enabled:
            for registration in self._registrations.values():
                self._warn_case_collisions(registration)

    def add_global_mapping(self, transform: TransformFunction) -> None:
        """Append a transform applied to every property of every registered entity."""
        self._check_mutable()
        self._global_mappings.append(transform)

    def editor(self, entity_type: type, selector: Selector) -> PropertyEditor:
        """Get or create the editor for one property.

        Registers ``entity_type`` if needed.

        Args:
            entity_type: Entity class owning the property.
            selector: Member name or single-access callable.

        Returns:
            The stored editor.

        Raises:
            SelectorError: If the selector does not resolve to a declared member.
            RegistryFrozenError: If a new editor would be created on a frozen registry.
        """
        property_name = resolve_property_name(entity_type, selector)
        registration = self.add_entity(entity_type)
        editor = registration.editors.get(property_name)
        if editor is not None:
            return editor
        self._check_mutable()
        editor = PropertyEditor(
            entity_type=entity_type,
            property_name=property_name,
            property_type=property_type(entity_type, property_name),
        )
        registration = registration.with_editor(editor)
        self._registrations[entity_type] = registration
        if self._ignore_letter_case:
            self._warn_case_collisions(registration, only=property_name)
        return editor

    def add_property_mapping(
        self, entity_type: type, selector: Selector, transform: TransformFunction
    ) -> PropertyEditor:
        """Append a transform to one property's mapping chain."""
        editor = self.editor(entity_type, selector)
        if editor.excluded:
            warnings.warn(
                f"{entity_type.__name__}.{editor.property_name} is excluded; "
                f"its mappings will never run.",
                stacklevel=3,
            )
        return self._store(editor.with_mapping(transform))

    def set_ignore_null(
        self, entity_type: type, selector: Selector, enabled: bool = True
    ) -> PropertyEditor:
        """Skip assignment of None for one property."""
        editor = self.editor(entity_type, selector)
        return self._store(editor.with_ignore_null(enabled))

    def set_excluded(
        self, entity_type: type, selector: Selector, enabled: bool = True
    ) -> PropertyEditor:
        """Exclude one property from patching entirely."""
        editor = self.editor(entity_type, selector)
        if enabled and editor.mappings:
            warnings.warn(
                f"Excluding {entity_type.__name__}.{editor.property_name} which has "
                f"{len(editor.mappings)} mapping(s); they will never run.",
                stacklevel=3,
            )
        return self._store(editor.with_excluded(enabled))

    # Lifecycle

    def freeze(self) -> RegistrySnapshot:
        """Stop accepting changes and return an immutable snapshot.

        Returns:
            Snapshot exposing the same read interface as the registry.
        """
        self._frozen = True
        return RegistrySnapshot(
            ignore_letter_case=self._ignore_letter_case,
            global_mappings=tuple(self._global_mappings),
            registrations=MappingProxyType(dict(self._registrations)),
        )

    def reset(self) -> None:
        """Clear the flag, global mappings and entity cache, and unfreeze.

        The freeze-on-initialize policy is kept. Snapshots taken earlier are
        unaffected.
        """
        self._ignore_letter_case = False
        self._global_mappings.clear()
        self._registrations.clear()
        self._frozen = False

    def _store(self, editor: PropertyEditor) -> PropertyEditor:
        self._check_mutable()
        registration = self._registrations[editor.entity_type]
        self._registrations[editor.entity_type] = registration.with_editor(editor)
        return editor

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Registry is frozen; call reset() before reconfiguring")

    def _warn_case_collisions(
        self, registration: EntityRegistration, only: str | None = None
    ) -> None:
        for first, second in registration.case_collisions():
            if only is not None and only != second:
                continue
            warnings.warn(
                f"{registration.entity_type.__name__} has properties '{first}' and "
                f"'{second}' differing only by case; case-insensitive lookups "
                f"resolve to '{first}'.",
                stacklevel=4,
            )


# Module-level registry instance
_registry = MappingRegistry()


def get_registry() -> MappingRegistry:
    """Access the default mapping registry.

    Returns:
        The process-local MappingRegistry instance.
    """
    return _registry
