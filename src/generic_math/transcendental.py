"""Pi, trigonometric approximations and transcendental placeholders.

Every routine here is written purely in terms of cached specializations, so it
works for any numeric type that supports the operators involved. Iterative
routines stop at a fixed point (the estimate no longer changes at the type's
precision) or when the caller's ``stop_when(estimate)`` returns True. Exact
types such as ``Fraction`` never reach a fixed point, so callers must pass a
``stop_when`` budget to the Taylor series for them.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Optional

from . import config
from .constants import constants_of
from .errors import NotImplementedOperationError
from .specialize import invoke, resolve
from .values import type_name

log = logging.getLogger(__name__)

StopWhen = Callable[[Any], bool]


def _iteration_budget(limit: int) -> StopWhen:
    iterations = 0

    def stop_when(_estimate: Any) -> bool:
        nonlocal iterations
        iterations += 1
        return iterations >= limit

    return stop_when


def pi(numeric_type: type, stop_when: Optional[StopWhen] = None) -> Any:
    """Compute pi in ``numeric_type`` with the series ``2 * (1 + 1/3 * (1 + 2/5 * (1 + ...)))``.

    Each outer iteration ``i`` re-evaluates the series ``i`` terms deep,
    innermost term first. The loop ends when an estimate equals the previous
    one or ``stop_when`` asks to stop; by default that happens after
    ``GENERIC_MATH_PI_ITERATIONS`` outer iterations. The result never drops
    below three, which keeps narrow integer types meaningful.
    """
    budgeted = stop_when is None
    if stop_when is None:
        stop_when = _iteration_budget(config.PI_ITERATIONS)

    table = constants_of(numeric_type)
    to_type = resolve("convert", int, numeric_type)
    estimate: Any = table.one
    for i in itertools.count(1):
        previous = estimate
        estimate = table.one
        for j in range(i, 0, -1):
            estimate = invoke("pi_term", to_type(j), estimate)
        estimate = invoke("multiply", table.two, estimate)
        if invoke("equal", estimate, previous):
            break
        if stop_when(estimate):
            if budgeted:
                log.debug("pi for %s stopped on its budget after %d iterations", type_name(numeric_type), i)
            break

    estimate = resolve("convert", type(estimate), numeric_type)(estimate)
    return invoke("maximum", estimate, table.three)


def _taylor_series(x: Any, first_term: Any, first_index: Any, stop_when: Optional[StopWhen]) -> Any:
    table = constants_of(type(x))
    x_squared = invoke("multiply", x, x)
    total = first_term
    power = first_term
    factorial = table.one
    index = first_index
    subtract_next = True
    while True:
        power = invoke("multiply", power, x_squared)
        factorial = invoke(
            "multiply", factorial, invoke("multiply", index, invoke("subtract", index, table.one))
        )
        previous = total
        term = invoke("divide", power, factorial)
        total = invoke("subtract" if subtract_next else "add", total, term)
        subtract_next = not subtract_next
        index = invoke("add", index, table.two)
        if invoke("equal", total, previous):
            break
        # overflowed to nan
        if not invoke("equal", total, total):
            break
        if stop_when is not None and stop_when(total):
            break
    return total


def sine_taylor_series(x: Any, stop_when: Optional[StopWhen] = None) -> Any:
    """Sine by its Maclaurin series ``x - x**3/3! + x**5/5! - ...``."""
    return _taylor_series(x, x, constants_of(type(x)).three, stop_when)


def cosine_taylor_series(x: Any, stop_when: Optional[StopWhen] = None) -> Any:
    """Cosine by its Maclaurin series ``1 - x**2/2! + x**4/4! - ...``."""
    table = constants_of(type(x))
    return _taylor_series(x, table.one, table.two, stop_when)


def tangent_taylor_series(x: Any, stop_when: Optional[StopWhen] = None) -> Any:
    return invoke("divide", sine_taylor_series(x, stop_when), cosine_taylor_series(x, stop_when))


def sine_quadratic(x: Any) -> Any:
    """Fast two-piece parabolic estimate of sine over one period.

    The angle is reduced into ``[0, 2*pi)``. The first half period uses
    ``-4/pi**2 * (x - pi/2)**2 + 1`` and the second ``4/pi**2 * (x - 3*pi/2)**2 - 1``.
    """
    table = constants_of(type(x))
    adjusted = invoke("modulo", x, table.pi2)
    if invoke("is_negative", adjusted):
        adjusted = invoke("add", adjusted, table.pi2)
    if invoke("less_than", adjusted, table.pi):
        offset = invoke("subtract", adjusted, table.pi_over_2)
        scaled = invoke("multiply", table.negative_four_over_pi_squared, invoke("multiply", offset, offset))
        return invoke("add", scaled, table.one)
    offset = invoke("subtract", adjusted, table.pi3_over_2)
    scaled = invoke("multiply", table.four_over_pi_squared, invoke("multiply", offset, offset))
    return invoke("subtract", scaled, table.one)


def cosine_quadratic(x: Any) -> Any:
    return sine_quadratic(invoke("add", x, constants_of(type(x)).pi_over_2))


def tangent_quadratic(x: Any) -> Any:
    return invoke("divide", sine_quadratic(x), cosine_quadratic(x))


def cosecant_quadratic(x: Any) -> Any:
    return invoke("invert", sine_quadratic(x))


def secant_quadratic(x: Any) -> Any:
    return invoke("invert", cosine_quadratic(x))


def cotangent_quadratic(x: Any) -> Any:
    return invoke("divide", cosine_quadratic(x), sine_quadratic(x))


def sine_system(x: Any) -> Any:
    return invoke("sine_system", x)


def cosine_system(x: Any) -> Any:
    return invoke("cosine_system", x)


def tangent_system(x: Any) -> Any:
    return invoke("tangent_system", x)


def cosecant_system(x: Any) -> Any:
    return invoke("invert", sine_system(x))


def secant_system(x: Any) -> Any:
    return invoke("invert", cosine_system(x))


def cotangent_system(x: Any) -> Any:
    return invoke("invert", tangent_system(x))


def _placeholder(name: str) -> Callable[[Any], Any]:
    def unimplemented(x: Any) -> Any:
        raise NotImplementedOperationError(f"{name} is not implemented")

    unimplemented.__name__ = name
    unimplemented.__qualname__ = name
    unimplemented.__doc__ = "Not implemented; always raises NotImplementedOperationError."
    return unimplemented


inverse_sine = _placeholder("inverse_sine")
inverse_cosine = _placeholder("inverse_cosine")
inverse_tangent = _placeholder("inverse_tangent")
inverse_cosecant = _placeholder("inverse_cosecant")
inverse_secant = _placeholder("inverse_secant")
inverse_cotangent = _placeholder("inverse_cotangent")
hyperbolic_sine = _placeholder("hyperbolic_sine")
hyperbolic_cosine = _placeholder("hyperbolic_cosine")
hyperbolic_tangent = _placeholder("hyperbolic_tangent")
hyperbolic_cosecant = _placeholder("hyperbolic_cosecant")
hyperbolic_secant = _placeholder("hyperbolic_secant")
hyperbolic_cotangent = _placeholder("hyperbolic_cotangent")
inverse_hyperbolic_sine = _placeholder("inverse_hyperbolic_sine")
inverse_hyperbolic_cosine = _placeholder("inverse_hyperbolic_cosine")
inverse_hyperbolic_tangent = _placeholder("inverse_hyperbolic_tangent")
inverse_hyperbolic_cosecant = _placeholder("inverse_hyperbolic_cosecant")
inverse_hyperbolic_secant = _placeholder("inverse_hyperbolic_secant")
inverse_hyperbolic_cotangent = _placeholder("inverse_hyperbolic_cotangent")
