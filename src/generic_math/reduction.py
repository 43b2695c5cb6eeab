"""Folds over sequences of numbers: sums, products, extrema, GCF and LCM."""

from __future__ import annotations

from typing import Any, Final

from .constants import constants_of
from .errors import DomainError, EmptyInputError, NullInputError
from .sequences import Values, as_stepper
from .specialize import invoke

_EMPTY: Final = object()


def fold(operation: str, values: Values | None, *, name: str = "values") -> Any:
    """Left fold of a binary operation, seeded with the first element.

    ``None`` is rejected before anything is consumed; an empty sequence is
    reported after its producer has run.
    """
    stepper = as_stepper(values, name=name)
    result: Any = _EMPTY

    def step(item: Any) -> None:
        nonlocal result
        if result is _EMPTY:
            result = item
        else:
            result = invoke(operation, result, item)

    stepper(step)
    if result is _EMPTY:
        raise EmptyInputError(name)
    return result


def add_all(values: Values | None) -> Any:
    return fold("add", values)


def multiply_all(values: Values | None) -> Any:
    return fold("multiply", values)


def subtract_all(values: Values | None) -> Any:
    return fold("subtract", values)


def divide_all(values: Values | None) -> Any:
    return fold("divide", values)


def maximum_all(values: Values | None) -> Any:
    return fold("maximum", values)


def minimum_all(values: Values | None) -> Any:
    return fold("minimum", values)


def equal_all(values: Values | None) -> bool:
    """True when every element equals the first; an empty sequence is an error."""
    stepper = as_stepper(values)
    first: Any = _EMPTY
    result = True

    def step(item: Any) -> None:
        nonlocal first, result
        if first is _EMPTY:
            first = item
        elif result and not invoke("equal", first, item):
            result = False

    stepper(step)
    if first is _EMPTY:
        raise EmptyInputError("values")
    return result


def _check_factor_operand(n: Any, operation: str) -> None:
    if n is None:
        raise NullInputError("values element")
    if not invoke("is_integer", n):
        raise DomainError(f"{operation} requires integer values, got {n!r}")


def _greatest_common_factor(a: Any, b: Any) -> Any:
    zero = constants_of(type(b)).zero
    while invoke("not_equal", b, zero):
        a, b = b, invoke("modulo", a, b)
    return invoke("absolute_value", a)


def greatest_common_factor_all(values: Values | None) -> Any:
    """Greatest common factor of non-zero integer values, computed by Euclid's algorithm."""
    stepper = as_stepper(values)
    answer: Any = _EMPTY

    def step(n: Any) -> None:
        nonlocal answer
        _check_factor_operand(n, "greatest common factor")
        if invoke("equal", n, constants_of(type(n)).zero):
            raise DomainError("greatest common factor is undefined for zero")
        if answer is _EMPTY:
            answer = invoke("absolute_value", n)
        else:
            answer = _greatest_common_factor(answer, n)

    stepper(step)
    if answer is _EMPTY:
        raise EmptyInputError("values")
    return answer


def least_common_multiple_all(values: Values | None) -> Any:
    """Least common multiple of integer values, via ``|a*b| / gcf(a, b)``.

    Any zero element makes the result zero.
    """
    stepper = as_stepper(values)
    answer: Any = _EMPTY

    def step(n: Any) -> None:
        nonlocal answer
        _check_factor_operand(n, "least common multiple")
        zero = constants_of(type(n)).zero
        if answer is _EMPTY:
            answer = invoke("absolute_value", n)
        elif invoke("equal", n, zero) or invoke("equal", answer, zero):
            answer = zero
        else:
            product = invoke("absolute_value", invoke("multiply", answer, n))
            answer = invoke("quotient", product, _greatest_common_factor(answer, n))

    stepper(step)
    if answer is _EMPTY:
        raise EmptyInputError("values")
    return answer
