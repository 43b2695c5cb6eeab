"""Comparisons, predicates, extrema and clamping."""

from __future__ import annotations

from typing import Any

from . import reduction
from .constants import constants_of
from .errors import OutOfRangeError
from .specialize import invoke
from .values import CompareResult


def equal(a: Any, b: Any, *rest: Any) -> bool:
    """True when every operand equals the first."""
    if rest:
        return reduction.equal_all((a, b, *rest))
    return invoke("equal", a, b)


def not_equal(a: Any, b: Any) -> bool:
    return invoke("not_equal", a, b)


def less_than(a: Any, b: Any) -> bool:
    return invoke("less_than", a, b)


def greater_than(a: Any, b: Any) -> bool:
    return invoke("greater_than", a, b)


def less_than_or_equal(a: Any, b: Any) -> bool:
    return invoke("less_than_or_equal", a, b)


def greater_than_or_equal(a: Any, b: Any) -> bool:
    return invoke("greater_than_or_equal", a, b)


def compare(a: Any, b: Any) -> CompareResult:
    return invoke("compare", a, b)


def equal_with_leniency(a: Any, b: Any, leniency: Any) -> bool:
    """True when ``|a - b| <= leniency``. A negative leniency is rejected up front."""
    if invoke("is_negative", leniency):
        raise OutOfRangeError("leniency", leniency, "leniency >= 0")
    return invoke("equal_with_leniency", a, b, leniency)


def maximum(a: Any, b: Any, *rest: Any) -> Any:
    if rest:
        return reduction.maximum_all((a, b, *rest))
    return invoke("maximum", a, b)


def minimum(a: Any, b: Any, *rest: Any) -> Any:
    if rest:
        return reduction.minimum_all((a, b, *rest))
    return invoke("minimum", a, b)


def clamp(value: Any, minimum: Any, maximum: Any) -> Any:
    return invoke("clamp", value, minimum, maximum)


def is_integer(a: Any) -> bool:
    return invoke("is_integer", a)


def is_even(a: Any) -> bool:
    return invoke("is_even", a)


def is_odd(a: Any) -> bool:
    return invoke("is_odd", a)


def is_negative(a: Any) -> bool:
    return invoke("is_negative", a)


def is_positive(a: Any) -> bool:
    return invoke("is_positive", a)


def is_non_negative(a: Any) -> bool:
    return invoke("is_non_negative", a)


def is_zero(a: Any) -> bool:
    return invoke("equal", a, constants_of(type(a)).zero)
