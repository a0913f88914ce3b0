"""Fluent configuration builders and the global entry points.

Usage:
    def configure(cfg: Config) -> None:
        cfg.ignore_letter_case().add_mapping(trim_strings)
        person = cfg.add_entity(Person)
        person.property(lambda p: p.age).add_mapping(
            ignore_old_value(lambda t, v: MapResult.ok(int(v)))
        )
        person.property(lambda p: p.email).ignore_null()
        person.property(lambda p: p.id).exclude()

    initialize(configure)
"""

from __future__ import annotations

from collections.abc import Callable

from patchconfig.core.mapping import TransformFunction
from patchconfig.core.selector import Selector
from patchconfig.registry import MappingRegistry, PropertyEditor, get_registry


class Config:
    """Entry builder bound to one registry."""

    def __init__(self, registry: MappingRegistry | None = None) -> None:
        self._registry = registry if registry is not None else get_registry()

    @property
    def registry(self) -> MappingRegistry:
        return self._registry

    def add_entity[T](self, entity_type: type[T]) -> EntityConfig[T]:
        """Register an entity type (no-op if present) and scope a builder to it.

        Args:
            entity_type: Entity class to configure.

        Returns:
            Builder for the entity's properties.

        Raises:
            TypeError: If ``entity_type`` is not a class.
        """
        self._registry.add_entity(entity_type)
        return EntityConfig(self._registry, entity_type)

    def ignore_letter_case(self, enabled: bool = True) -> Config:
        """Match payload field names to property names case-insensitively."""
        self._registry.set_ignore_letter_case(enabled)
        return self

    def add_mapping(self, transform: TransformFunction) -> Config:
        """Add a transform run for every property of every registered entity.

        Global transforms run after a property's own mappings, in the order
        they were added.
        """
        self._registry.add_global_mapping(transform)
        return self


class EntityConfig[T]:
    """Builder scoped to one entity type."""

    def __init__(self, registry: MappingRegistry, entity_type: type[T]) -> None:
        self._registry = registry
        self.entity_type = entity_type

    def property(self, selector: Selector) -> PropertyConfig[T]:
        """Select a property to configure.

        Args:
            selector: ``lambda e: e.field`` or the member name.

        Returns:
            Builder for that property's editor.

        Raises:
            UnsupportedSelectorError: If the selector is not a direct member access.
            UnknownPropertyError: If the entity does not declare the member.
        """
        editor = self._registry.editor(self.entity_type, selector)
        return PropertyConfig(self._registry, self.entity_type, editor.property_name)


class PropertyConfig[T]:
    """Builder for one property's editor. Calls accumulate on the stored editor."""

    def __init__(self, registry: MappingRegistry, entity_type: type[T], property_name: str) -> None:
        self._registry = registry
        self.entity_type = entity_type
        self.property_name = property_name

    @property
    def editor(self) -> PropertyEditor:
        """Current state of the editor being built."""
        return self._registry.editor(self.entity_type, self.property_name)

    def add_mapping(self, transform: TransformFunction) -> PropertyConfig[T]:
        """Append a transform to this property's chain.

        For a transform that only needs the incoming value, wrap it with
        ``ignore_old_value``.
        """
        self._registry.add_property_mapping(self.entity_type, self.property_name, transform)
        return self

    def ignore_null(self) -> PropertyConfig[T]:
        """Skip assignment when the incoming value is None."""
        self._registry.set_ignore_null(self.entity_type, self.property_name)
        return self

    def exclude(self) -> PropertyConfig[T]:
        """Never assign this property during patching."""
        self._registry.set_excluded(self.entity_type, self.property_name)
        return self


def initialize(
    configurator: Callable[[Config], None],
    *,
    registry: MappingRegistry | None = None,
    freeze: bool | None = None,
) -> None:
    """Run ``configurator`` once against a fresh Config builder.

    Args:
        configurator: Callable that performs the configuration calls.
        registry: Target registry; the default registry when None.
        freeze: Freeze the registry once the configurator returns. When None,
            the registry's ``freeze_on_initialize`` policy decides.
    """
    target = registry if registry is not None else get_registry()
    target.configure(configurator)
    if freeze is None:
        freeze = target.freeze_on_initialize
    if freeze:
        target.freeze()


def clean(registry: MappingRegistry | None = None) -> None:
    """Reset a registry (the default one when None) to its unconfigured state."""
    (registry if registry is not None else get_registry()).reset()
