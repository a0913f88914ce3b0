"""Tests for the fluent configuration builders and global entry points."""

from dataclasses import dataclass

import pytest

from patchconfig import (
    Config,
    EntityConfig,
    MapResult,
    MappingRegistry,
    PropertyConfig,
    RegistryFrozenError,
    UnsupportedSelectorError,
    clean,
    get_registry,
    ignore_old_value,
    initialize,
)


@dataclass
class Person:
    Name: str
    Age: int
    email: str | None = None


def test_initialize_runs_configurator_once_with_fresh_config(registry) -> None:
    received: list[Config] = []

    initialize(received.append, registry=registry)

    assert len(received) == 1
    assert isinstance(received[0], Config)
    assert received[0].registry is registry


def test_initialize_defaults_to_global_registry(default_registry) -> None:
    initialize(lambda cfg: cfg.add_entity(Person))

    assert default_registry.is_registered(Person)


def test_initialize_can_freeze(registry) -> None:
    initialize(lambda cfg: cfg.add_entity(Person), registry=registry, freeze=True)

    assert registry.is_frozen
    with pytest.raises(RegistryFrozenError):
        initialize(lambda cfg: cfg.ignore_letter_case(), registry=registry)


def test_builders_chain(registry) -> None:
    cfg = Config(registry)

    assert cfg.ignore_letter_case() is cfg
    assert cfg.add_mapping(lambda t, n, o: MapResult.ok(n)) is cfg

    entity = cfg.add_entity(Person)
    assert isinstance(entity, EntityConfig)
    assert entity.entity_type is Person

    prop = entity.property(lambda p: p.Age)
    assert isinstance(prop, PropertyConfig)
    assert prop.property_name == "Age"
    assert prop.add_mapping(lambda t, n, o: MapResult.ok(n)) is prop
    assert prop.ignore_null() is prop


def test_ignore_letter_case_can_be_disabled(registry) -> None:
    Config(registry).ignore_letter_case().ignore_letter_case(False)

    assert registry.ignore_letter_case is False


def test_property_configs_share_one_editor(registry) -> None:
    entity = Config(registry).add_entity(Person)
    first, second = (lambda t, n, o: MapResult.ok(1)), (lambda t, n, o: MapResult.ok(2))

    entity.property(lambda p: p.Age).add_mapping(first)
    entity.property("Age").add_mapping(second).ignore_null()

    editor = registry.get_editor(Person, "Age")
    assert editor.mappings == (first, second)
    assert editor.ignore_null is True
    assert editor.excluded is False


def test_property_config_exposes_current_editor(registry) -> None:
    prop = Config(registry).add_entity(Person).property(lambda p: p.email)

    prop.exclude()

    assert prop.editor.excluded is True


def test_add_entity_twice_keeps_one_registration(registry) -> None:
    cfg = Config(registry)
    cfg.add_entity(Person).property(lambda p: p.Age).ignore_null()
    cfg.add_entity(Person)

    assert registry.entity_types() == (Person,)
    assert registry.get_editor(Person, "Age").ignore_null is True


def test_unsupported_selector_fails_at_configuration_time(registry) -> None:
    entity = Config(registry).add_entity(Person)

    with pytest.raises(UnsupportedSelectorError):
        entity.property(lambda p: p.Name.lower())


def test_letter_case_lookup_through_builder(registry) -> None:
    initialize(lambda cfg: cfg.add_entity(Person).property(lambda p: p.Name), registry=registry)
    assert registry.get_editor(Person, "name") is None

    initialize(lambda cfg: cfg.ignore_letter_case(True), registry=registry)
    assert registry.get_editor(Person, "name").property_name == "Name"


def test_clean_resets_default_registry(default_registry) -> None:
    initialize(
        lambda cfg: cfg.ignore_letter_case()
        .add_mapping(lambda t, n, o: MapResult.ok(n))
        .add_entity(Person)
        .property(lambda p: p.Age)
        .exclude()
    )

    clean()

    assert default_registry.ignore_letter_case is False
    assert default_registry.global_mappings == ()
    assert default_registry.get_editor(Person, "Age") is None
    assert not default_registry.is_registered(Person)


def test_clean_accepts_explicit_registry() -> None:
    registry = MappingRegistry()
    Config(registry).add_entity(Person)

    clean(registry)

    assert registry.entity_types() == ()


def test_config_without_registry_binds_default(default_registry) -> None:
    assert Config().registry is get_registry()


def test_end_to_end_age_mapping(default_registry) -> None:
    initialize(
        lambda cfg: cfg.add_entity(Person)
        .property(lambda p: p.Age)
        .add_mapping(ignore_old_value(lambda t, nv: MapResult.ok(42)))
    )

    editor = default_registry.get_editor(Person, "Age")

    assert len(editor.mappings) == 1
    for new_value, old_value in [(1, 2), ("x", None), (None, 0)]:
        assert editor.mappings[0](int, new_value, old_value) == MapResult.ok(42)


@pytest.mark.parametrize(
    ("policy", "freeze", "expected"),
    [
        (True, None, True),
        (False, None, False),
        (True, False, False),
        (False, True, True),
    ],
    ids=["policy-on", "policy-off", "explicit-off", "explicit-on"],
)
def test_initialize_follows_registry_freeze_policy(policy, freeze, expected) -> None:
    registry = MappingRegistry(freeze_on_initialize=policy)

    initialize(lambda cfg: cfg.add_entity(Person), registry=registry, freeze=freeze)

    assert registry.is_frozen is expected
