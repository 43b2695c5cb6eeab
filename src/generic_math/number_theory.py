"""Primality, factorization and combinatorics over any integer-valued type."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from . import reduction
from .constants import constants_of
from .errors import DomainError, NullInputError, OutOfRangeError
from .specialize import invoke


def is_prime(a: Any) -> bool:
    """Trial division by odd candidates whose square does not exceed ``a``."""
    if not invoke("is_integer", a):
        return False
    table = constants_of(type(a))
    if invoke("less_than", a, table.two):
        return False
    if invoke("equal", a, table.two):
        return True
    if invoke("is_even", a):
        return False
    divisor = table.three
    while invoke("less_than_or_equal", invoke("multiply", divisor, divisor), a):
        if invoke("equal", invoke("modulo", a, divisor), table.zero):
            return False
        divisor = invoke("add", divisor, table.two)
    return True


def factor_primes(a: Any) -> Iterator[Any]:
    """Prime factors of ``a`` in ascending order, with ``-1`` first for negative input.

    The argument is validated eagerly; the factors themselves are produced
    lazily by the returned generator.
    """
    if a is None:
        raise NullInputError("a")
    if not invoke("is_integer", a):
        raise OutOfRangeError("a", a, "an integer value")
    if invoke("equal", a, constants_of(type(a)).zero):
        raise DomainError("zero has no prime factorization")
    return _factor_primes(a)


def _factor_primes(a: Any) -> Iterator[Any]:
    table = constants_of(type(a))
    if invoke("is_negative", a):
        yield table.negative_one
        a = invoke("absolute_value", a)
    while invoke("is_even", a):
        yield table.two
        a = invoke("quotient", a, table.two)
    divisor = table.three
    while invoke("less_than_or_equal", invoke("multiply", divisor, divisor), a):
        while invoke("equal", invoke("modulo", a, divisor), table.zero):
            yield divisor
            a = invoke("quotient", a, divisor)
        divisor = invoke("add", divisor, table.two)
    if invoke("greater_than", a, table.two):
        yield a


def greatest_common_factor(a: Any, b: Any, *rest: Any) -> Any:
    return reduction.greatest_common_factor_all((a, b, *rest))


def least_common_multiple(a: Any, b: Any, *rest: Any) -> Any:
    return reduction.least_common_multiple_all((a, b, *rest))


def factorial(a: Any) -> Any:
    """``a * (a - 1) * ... * 1`` for a non-negative integer value ``a``."""
    if not invoke("is_integer", a):
        raise OutOfRangeError("a", a, "an integer value")
    table = constants_of(type(a))
    if invoke("is_negative", a):
        raise OutOfRangeError("a", a, "a >= 0")
    result = table.one
    while invoke("greater_than", a, table.one):
        result = invoke("multiply", a, result)
        a = invoke("subtract", a, table.one)
    return result


def combinations(n: Any, groups: Sequence[Any]) -> Any:
    """Ways to split ``n`` values into groups of the given sizes: ``n! / (k1! * k2! * ...)``."""
    if groups is None:
        raise NullInputError("groups")
    if not invoke("is_integer", n):
        raise OutOfRangeError("n", n, "an integer value")
    result = factorial(n)
    total = constants_of(type(n)).zero
    for index, size in enumerate(groups):
        if not invoke("is_integer", size):
            raise OutOfRangeError(f"groups[{index}]", size, "an integer value")
        result = invoke("quotient", result, factorial(size))
        total = invoke("add", total, size)
    if invoke("greater_than", total, n):
        raise DomainError(f"group sizes sum to {total!r}, more than n={n!r}")
    return result


def binomial_coefficient(n: Any, k: Any) -> Any:
    """``n`` choose ``k``."""
    if invoke("is_negative", n):
        raise OutOfRangeError("n", n, "n >= 0")
    if not invoke("is_integer", n):
        raise OutOfRangeError("n", n, "an integer value")
    if not invoke("is_integer", k):
        raise OutOfRangeError("k", k, "an integer value")
    if invoke("less_than", n, k):
        raise DomainError(f"n={n!r} is less than k={k!r}")
    denominator = invoke("multiply", factorial(k), factorial(invoke("subtract", n, k)))
    return invoke("quotient", factorial(n), denominator)
