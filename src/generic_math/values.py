"""Runtime numeric-type model used to pick specializations."""

from __future__ import annotations

import numbers
from enum import Enum

import jax
import numpy as np


class CompareResult(int, Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


class TypeCategory(str, Enum):
    JAX = "jax"
    INTEGRAL = "integral"
    FLOAT_CONVERTIBLE = "float_convertible"
    GENERIC = "generic"


def type_name(tp: type) -> str:
    module = getattr(tp, "__module__", "")
    if module in ("builtins", ""):
        return tp.__qualname__
    return f"{module}.{tp.__qualname__}"


def is_jax_type(tp: type) -> bool:
    try:
        return issubclass(tp, jax.Array)
    except TypeError:
        return False


def is_integral_type(tp: type) -> bool:
    if tp is bool:
        return False
    return issubclass(tp, (numbers.Integral, np.integer))


def is_float_convertible_type(tp: type) -> bool:
    """True for non-integral types that can round-trip through a Python float."""
    if is_jax_type(tp) or is_integral_type(tp):
        return False
    if issubclass(tp, (complex, np.complexfloating)):
        return False
    return hasattr(tp, "__float__")


def category_of(tp: type) -> TypeCategory:
    if is_jax_type(tp):
        return TypeCategory.JAX
    if is_integral_type(tp):
        return TypeCategory.INTEGRAL
    if is_float_convertible_type(tp):
        return TypeCategory.FLOAT_CONVERTIBLE
    return TypeCategory.GENERIC


def implements(tp: type, dunder: str) -> bool:
    """True if ``tp`` provides ``dunder`` itself rather than inheriting ``object``'s default."""
    attr = getattr(tp, dunder, None)
    if attr is None:
        return False
    if dunder in ("__eq__", "__ne__"):
        return True
    return attr is not getattr(object, dunder, None)
