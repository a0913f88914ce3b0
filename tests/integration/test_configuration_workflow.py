"""Configuration workflow integration tests.

A minimal patch applier lives here to drive the registry the way an external
collaborator would: match payload keys, ask for the resolved value, assign.
"""

from dataclasses import dataclass
from typing import Any

from patchconfig import (
    MapResult,
    MappingLookup,
    MappingRegistry,
    clean,
    get_registry,
    ignore_old_value,
    initialize,
    resolve_value,
)
from patchconfig.core.selector import find_member


@dataclass
class Customer:
    id: int
    name: str
    email: str | None
    credit: int = 0


def apply_payload(lookup: MappingLookup, entity: Any, payload: dict[str, Any]) -> None:
    entity_type = type(entity)
    for key, new_value in payload.items():
        member = find_member(entity_type, key, lookup.ignore_letter_case)
        if member is None:
            continue
        result = resolve_value(lookup, entity_type, key, new_value, getattr(entity, member))
        if result.is_ok:
            setattr(entity, member, result.value)


def _strip_strings(t, new, old):
    return MapResult.ok(new.strip() if isinstance(new, str) else new)


def _never_decrease(t, new, old):
    if new < old:
        return MapResult.skip()
    return MapResult.ok(new)


def configure(cfg) -> None:
    cfg.ignore_letter_case().add_mapping(_strip_strings)
    customer = cfg.add_entity(Customer)
    customer.property(lambda c: c.id).exclude()
    customer.property(lambda c: c.email).ignore_null()
    customer.property(lambda c: c.credit).add_mapping(
        ignore_old_value(lambda t, v: MapResult.ok(t(v)))
    ).add_mapping(_never_decrease)


def test_patch_with_default_registry() -> None:
    clean()
    try:
        initialize(configure, freeze=True)
        customer = Customer(id=1, name="Ada", email="ada@example.com", credit=10)

        apply_payload(
            get_registry(),
            customer,
            {"ID": 99, "Name": "  Ada Lovelace ", "EMAIL": None, "credit": "25", "unknown": 1},
        )

        assert customer == Customer(id=1, name="Ada Lovelace", email="ada@example.com", credit=25)
    finally:
        clean()

    assert get_registry().entity_types() == ()


def test_skip_from_property_chain_keeps_old_value() -> None:
    registry = MappingRegistry()
    initialize(configure, registry=registry)
    customer = Customer(id=1, name="Ada", email=None, credit=50)

    apply_payload(registry, customer, {"credit": "20", "email": " a@b.c "})

    assert customer.credit == 50
    assert customer.email == "a@b.c"


def test_snapshot_drives_patching_after_registry_reset() -> None:
    registry = MappingRegistry()
    initialize(configure, registry=registry)
    snapshot = registry.freeze()
    registry.reset()
    customer = Customer(id=1, name="Ada", email=None)

    apply_payload(snapshot, customer, {"id": 7, "NAME": " Grace "})
    apply_payload(registry, customer, {"id": 8})

    assert customer.id == 8
    assert customer.name == "Grace"


def test_independent_registries_do_not_share_state() -> None:
    configured = MappingRegistry()
    untouched = MappingRegistry()
    initialize(configure, registry=configured)

    customer = Customer(id=1, name="Ada", email=None)
    apply_payload(untouched, customer, {"id": 2, "name": " x "})

    assert customer.id == 2
    assert customer.name == " x "
    assert untouched.entity_types() == ()
