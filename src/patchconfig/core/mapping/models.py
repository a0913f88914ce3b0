"""Mapping models: transform results and function signatures.

Usage:
    def trim(property_type, new_value, old_value):
        if isinstance(new_value, str):
            return MapResult.ok(new_value.strip())
        return MapResult.ok(new_value)

    def keep_positive(property_type, new_value, old_value):
        if new_value is not None and new_value < 0:
            return MapResult.skip()
        return MapResult.ok(new_value)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class MapResult[T]:
    """Outcome of a transform: a value to assign, or an instruction to skip.

    Build instances through ``MapResult.ok`` and ``MapResult.skip`` rather than
    the constructor.
    """

    value: T | None = None
    skipped: bool = False

    @classmethod
    def ok(cls, value: T) -> MapResult[T]:
        """Assign ``value`` to the property."""
        return cls(value=value, skipped=False)

    @classmethod
    def skip(cls) -> MapResult[Any]:
        """Leave the property untouched."""
        return cls(value=None, skipped=True)

    @property
    def is_ok(self) -> bool:
        return not self.skipped


type TransformFunction = Callable[[type, Any, Any], MapResult[Any]]
"""Transform signature: ``(property_type, new_value, old_value) -> MapResult``."""

type MapFunction = Callable[[type, Any], MapResult[Any]]
"""New-value-only signature: ``(property_type, new_value) -> MapResult``.

Adapt with ``ignore_old_value`` before registering.
"""
