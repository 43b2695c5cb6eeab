"""Arithmetic entry points.

Binary operations take ``op(a, b, *rest)``. With two operands they call the
specialization directly; with more, they fold left to right through the
sequence form of the same operation.
"""

from __future__ import annotations

from typing import Any

from . import reduction
from .constants import constants_of
from .errors import NotImplementedOperationError
from .sequences import Values
from .specialize import invoke, resolve
from .values import is_jax_type


def convert(value: Any, to_type: type) -> Any:
    """Convert ``value`` into ``to_type`` through the cached conversion for that type pair."""
    return resolve("convert", type(value), to_type)(value)


def negate(a: Any) -> Any:
    return invoke("negate", a)


def add(a: Any, b: Any, *rest: Any) -> Any:
    if rest:
        return reduction.add_all((a, b, *rest))
    return invoke("add", a, b)


def subtract(a: Any, b: Any, *rest: Any) -> Any:
    if rest:
        return reduction.subtract_all((a, b, *rest))
    return invoke("subtract", a, b)


def multiply(a: Any, b: Any, *rest: Any) -> Any:
    if rest:
        return reduction.multiply_all((a, b, *rest))
    return invoke("multiply", a, b)


def divide(a: Any, b: Any, *rest: Any) -> Any:
    """True division; integral operands produce a float, as with ``/``."""
    if rest:
        return reduction.divide_all((a, b, *rest))
    return invoke("divide", a, b)


def modulo(a: Any, b: Any, *rest: Any) -> Any:
    if rest:
        return modulo_all((a, b, *rest))
    return invoke("modulo", a, b)


def power(a: Any, b: Any, *rest: Any) -> Any:
    """``a`` raised to ``b``; further operands fold left, ``power(a, b, c) == (a ** b) ** c``."""
    if rest:
        return power_all((a, b, *rest))
    return invoke("power", a, b)


def modulo_all(values: Values | None) -> Any:
    return reduction.fold("modulo", values)


def power_all(values: Values | None) -> Any:
    return reduction.fold("power", values)


def invert(a: Any) -> Any:
    return invoke("invert", a)


def multiply_add(a: Any, b: Any, c: Any) -> Any:
    return invoke("multiply_add", a, b, c)


def absolute_value(a: Any) -> Any:
    return invoke("absolute_value", a)


def square_root(a: Any) -> Any:
    return invoke("square_root", a)


def root(base: Any, degree: Any) -> Any:
    """The ``degree``-th root of ``base``, computed as ``base ** (1 / degree)``.

    Types whose division truncates turn ``1 / degree`` into zero for any
    degree above one; those roots raise ``NotImplementedOperationError``.
    """
    exponent = invoke("invert", degree)
    if not is_jax_type(type(exponent)) and invoke("equal", exponent, constants_of(type(exponent)).zero):
        raise NotImplementedOperationError(
            f"root of degree {degree!r} has no representable exponent in {type(degree).__name__}"
        )
    return invoke("power", base, exponent)


def logarithm(value: Any, base: Any) -> Any:
    return invoke("logarithm", value, base)


def natural_logarithm(value: Any) -> Any:
    return invoke("natural_logarithm", value)


def exponential(a: Any) -> Any:
    raise NotImplementedOperationError("exponential is not implemented")
