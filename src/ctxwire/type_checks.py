from __future__ import annotations

import types
from typing import Any, TypeGuard

PRIMITIVE_TYPES: tuple[type[Any], ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_primitive_value(value: object) -> bool:
    """Return true for scalar values that cannot be bound as instances."""
    return isinstance(value, PRIMITIVE_TYPES)


def is_primitive_type(candidate: object) -> bool:
    """Return true for scalar classes that autowiring never constructs."""
    return is_runtime_class(candidate) and candidate in PRIMITIVE_TYPES


__all__ = [
    "PRIMITIVE_TYPES",
    "is_primitive_type",
    "is_primitive_value",
    "is_runtime_class",
]
