"""Value resolution: run the configured chain for one incoming patch value.

Order for a registered entity:
    1. excluded property -> skip
    2. ignore_null and incoming None -> skip
    3. per-property mappings, in registration order, each consuming the
       previous result
    4. global mappings, in registration order, applied to that result

The first skip anywhere stops resolution. Unregistered entity types pass the
incoming value through untouched.
"""

from __future__ import annotations

from typing import Any

from patchconfig.core.mapping import MapResult, run_transforms
from patchconfig.core.selector import find_member, property_type
from patchconfig.registry.protocol import MappingLookup


def resolve_value(
    source: MappingLookup,
    entity_type: type,
    property_name: str,
    new_value: Any,
    old_value: Any = None,
) -> MapResult[Any]:
    """Compute the value a patch applier should assign to one property.

    Args:
        source: Registry or snapshot to read configuration from.
        entity_type: Entity class being patched.
        property_name: Field name as it appears in the payload.
        new_value: Incoming value.
        old_value: Current value of the property on the entity.

    Returns:
        ``MapResult.ok`` with the value to assign, or ``MapResult.skip()``.
    """
    if not source.is_registered(entity_type):
        return MapResult.ok(new_value)

    editor = source.get_editor(entity_type, property_name)
    if editor is not None:
        if editor.excluded:
            return MapResult.skip()
        if editor.ignore_null and new_value is None:
            return MapResult.skip()
        target_type = editor.property_type
        result = run_transforms(editor.mappings, target_type, new_value, old_value)
        if result.skipped:
            return result
        new_value = result.value
    else:
        member = find_member(entity_type, property_name, source.ignore_letter_case)
        target_type = property_type(entity_type, member) if member is not None else object

    return run_transforms(source.global_mappings, target_type, new_value, old_value)
