"""Mapping functionality: transform results, signatures, and chain execution."""

from patchconfig.core.mapping.models import MapFunction, MapResult, TransformFunction
from patchconfig.core.mapping.operations import ignore_old_value, run_transforms

__all__ = [
    # Models
    "MapResult",
    "TransformFunction",
    "MapFunction",
    # Operations
    "ignore_old_value",
    "run_transforms",
]
