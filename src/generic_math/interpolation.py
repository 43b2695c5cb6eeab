"""Interpolation between known values."""

from __future__ import annotations

from typing import Any

from .constants import constants_of
from .errors import DomainError, NotImplementedOperationError, NullInputError, OutOfRangeError
from .specialize import invoke


def linear_interpolation(x: Any, x0: Any, x1: Any, y0: Any, y1: Any) -> Any:
    """Value at ``x`` on the line through ``(x0, y0)`` and ``(x1, y1)``, for ``x0 <= x <= x1``."""
    if (
        invoke("greater_than", x0, x1)
        or invoke("greater_than", x, x1)
        or invoke("less_than", x, x0)
    ):
        raise OutOfRangeError("x", x, f"{x0!r} <= x <= {x1!r}")
    if invoke("equal", x0, x1):
        if invoke("not_equal", y0, y1):
            raise DomainError(f"x0 == x1 == {x0!r} but y0={y0!r} != y1={y1!r}")
        return y0
    rise = invoke("multiply", invoke("subtract", x, x0), invoke("subtract", y1, y0))
    return invoke("add", y0, invoke("divide", rise, invoke("subtract", x1, x0)))


def _check_blend(a: Any, b: Any, factor: Any) -> None:
    for name, value in (("a", a), ("b", b), ("factor", factor)):
        if value is None:
            raise NullInputError(name)
    table = constants_of(type(factor))
    if invoke("less_than", factor, table.zero) or invoke("greater_than", factor, table.one):
        raise OutOfRangeError("factor", factor, "0 <= factor <= 1")


def blend(a: Any, b: Any, factor: Any) -> Any:
    """``a + (b - a) * factor`` with ``factor`` in ``[0, 1]``."""
    _check_blend(a, b, factor)
    return invoke("add", a, invoke("multiply", invoke("subtract", b, a), factor))


def spherical_interpolation(a: Any, b: Any, factor: Any) -> Any:
    _check_blend(a, b, factor)
    raise NotImplementedOperationError("spherical interpolation is not implemented")
