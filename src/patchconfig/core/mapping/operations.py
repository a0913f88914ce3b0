"""Pure functions for building and running transform chains.

These are stateless helpers: they know nothing about entities or registries,
only about sequences of transform functions.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import wraps
from typing import Any

from patchconfig.core.mapping.models import MapFunction, MapResult, TransformFunction


def ignore_old_value(map_function: MapFunction) -> TransformFunction:
    """Adapt a ``(property_type, new_value)`` function to the transform signature.

    Args:
        map_function: Function that only needs the incoming value.

    Returns:
        Transform function that discards the old-value argument.
    """

    @wraps(map_function)
    def transform(property_type: type, new_value: Any, old_value: Any) -> MapResult[Any]:
        return map_function(property_type, new_value)

    return transform


def run_transforms(
    transforms: Iterable[TransformFunction],
    property_type: type,
    new_value: Any,
    old_value: Any,
) -> MapResult[Any]:
    """Run transforms in order, feeding each one the previous result's value.

    Every transform sees the original ``old_value``. The first skip stops the
    chain and is returned as-is.

    Args:
        transforms: Transform functions in registration order.
        property_type: Declared type of the target property.
        new_value: Incoming value from the patch payload.
        old_value: Current value of the property.

    Returns:
        ``MapResult.ok`` with the final value, or ``MapResult.skip()``. An empty
        chain returns ``new_value`` unchanged.

    Raises:
        TypeError: If a transform returns something other than a MapResult.
    """
    result: MapResult[Any] = MapResult.ok(new_value)
    for transform in transforms:
        result = transform(property_type, result.value, old_value)
        if not isinstance(result, MapResult):
            name = getattr(transform, "__qualname__", repr(transform))
            raise TypeError(f"Transform {name} returned {type(result).__name__}, expected MapResult")
        if result.skipped:
            return result
    return result
