"""Descriptive statistics over sequences of any numeric type.

Routines that need two passes (variance, mean deviation, regression) walk
their input twice: a stepper is invoked again and a collection is iterated
again. One-shot iterators are materialized once up front.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from typing import Any, Callable, NamedTuple, Optional, Union

from .constants import constants_of
from .errors import DomainError, EmptyInputError, NotImplementedOperationError, NullInputError, OutOfRangeError
from .sequences import Stepper, Values, as_replayable_stepper, as_stepper, is_stepper, to_list
from .specialize import invoke, resolve
from .values import CompareResult

_EMPTY = object()


class Regression(NamedTuple):
    slope: Any
    y_intercept: Any


def mean(values: Values | None) -> Any:
    """Arithmetic mean from a running count and running sum in one pass."""
    stepper = as_stepper(values)
    state: dict[str, Any] = {}

    def step(item: Any) -> None:
        if not state:
            table = constants_of(type(item))
            state["count"] = table.zero
            state["sum"] = table.zero
            state["one"] = table.one
        state["count"] = invoke("add", state["count"], state["one"])
        state["sum"] = invoke("add", state["sum"], item)

    stepper(step)
    if not state:
        raise EmptyInputError("values")
    return invoke("divide", state["sum"], state["count"])


def _deviation_average(values: Values | None, deviation: Callable[[Any, Any], Any]) -> Any:
    stepper = as_replayable_stepper(values)
    center = mean(stepper)
    total: Any = _EMPTY
    count: Any = _EMPTY

    def step(item: Any) -> None:
        nonlocal total, count
        term = deviation(item, center)
        if total is _EMPTY:
            table = constants_of(type(item))
            total, count = term, table.one
        else:
            total = invoke("add", total, term)
            count = invoke("add", count, constants_of(type(count)).one)

    stepper(step)
    if total is _EMPTY:
        raise EmptyInputError("values")
    return invoke("divide", total, count)


def _squared_deviation(item: Any, center: Any) -> Any:
    difference = invoke("subtract", item, center)
    return invoke("multiply", difference, difference)


def _absolute_deviation(item: Any, center: Any) -> Any:
    return invoke("absolute_value", invoke("subtract", item, center))


def variance(values: Values | None) -> Any:
    """Population variance: the mean of squared deviations from the mean."""
    return _deviation_average(values, _squared_deviation)


def standard_deviation(values: Values | None) -> Any:
    return invoke("square_root", variance(values))


def mean_deviation(values: Values | None) -> Any:
    return _deviation_average(values, _absolute_deviation)


def geometric_mean(values: Values | None) -> Any:
    """``count``-th root of the product of the values."""
    stepper = as_stepper(values)
    product: Any = _EMPTY
    count: Any = _EMPTY

    def step(item: Any) -> None:
        nonlocal product, count
        if product is _EMPTY:
            product, count = item, constants_of(type(item)).one
        else:
            product = invoke("multiply", product, item)
            count = invoke("add", count, constants_of(type(count)).one)

    stepper(step)
    if product is _EMPTY:
        raise EmptyInputError("values")
    return invoke("power", product, invoke("invert", count))


def _sorted(items: list[Any], compare: Optional[Callable[[Any, Any], Any]]) -> list[Any]:
    order = compare if compare is not None else (lambda a, b: invoke("compare", a, b))
    return sorted(items, key=functools.cmp_to_key(lambda a, b: int(order(a, b))))


def median(values: Values | None, compare: Optional[Callable[[Any, Any], CompareResult]] = None) -> Any:
    """Middle value after sorting; the mean of the two middle values for an even count."""
    ordered = _sorted(to_list(values), compare)
    if not ordered:
        raise EmptyInputError("values")
    middle = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[middle]
    left, right = ordered[middle - 1], ordered[middle]
    return invoke("divide", invoke("add", left, right), constants_of(type(left)).two)


def quantiles(count: int, values: Values | None) -> list[Any]:
    """``count + 1`` quantile boundaries of ``values``, starting at the minimum and ending at the maximum.

    Interior boundary ``k`` is read at position ``len / ((count + 1) * k)``
    of the sorted data. A fractional position averages the element at the
    truncated index with its successor.
    """
    if count < 1:
        raise OutOfRangeError("count", count, "count >= 1")
    ordered = _sorted(to_list(values), None)
    if not ordered:
        raise EmptyInputError("values")
    tp = type(ordered[0])
    table = constants_of(tp)
    to_type = resolve("convert", int, tp)
    length = to_type(len(ordered))
    divisions = to_type(count + 1)

    result = [ordered[0]] * (count + 1)
    result[-1] = ordered[-1]
    for k in range(1, count):
        position = invoke("divide", length, invoke("multiply", divisions, to_type(k)))
        index = int(invoke("convert_to_int", position))
        if invoke("is_integer", position):
            if index >= len(ordered):
                raise DomainError(f"quantile position {index} is outside the data")
            result[k] = ordered[index]
        else:
            if index + 1 >= len(ordered):
                raise DomainError(f"quantile position {index + 1} is outside the data")
            result[k] = invoke("divide", invoke("add", ordered[index], ordered[index + 1]), table.two)
    return result


def value_range(values: Values | None) -> tuple[Any, Any]:
    """``(minimum, maximum)`` in a single pass."""
    stepper = as_stepper(values)
    low: Any = _EMPTY
    high: Any = _EMPTY

    def step(item: Any) -> None:
        nonlocal low, high
        if low is _EMPTY:
            low = high = item
            return
        if invoke("less_than", item, low):
            low = item
        if invoke("less_than", high, item):
            high = item

    stepper(step)
    if low is _EMPTY:
        raise EmptyInputError("values")
    return low, high


Points = Union[Stepper, Iterable[tuple[Any, Any]]]


def _point_stepper(points: Points | None) -> Stepper:
    """Replayable stepper calling ``step(x, y)`` once per point."""
    if points is None:
        raise NullInputError("points")
    if is_stepper(points):
        return points
    pairs = tuple(points)

    def stepper(step: Callable[[Any, Any], None]) -> None:
        for x, y in pairs:
            step(x, y)

    return stepper


def linear_regression_2d(points: Points | None) -> Regression:
    """Least-squares line through ``(x, y)`` points.

    ``points`` is an iterable of pairs, or a stepper that calls its callback
    as ``step(x, y)``.
    """
    stepper = _point_stepper(points)
    sums: dict[str, Any] = {}

    def accumulate(x: Any, y: Any) -> None:
        if not sums:
            sums["count"] = 1
            sums["x"], sums["y"] = x, y
            return
        sums["count"] += 1
        sums["x"] = invoke("add", sums["x"], x)
        sums["y"] = invoke("add", sums["y"], y)

    stepper(accumulate)
    if sums.get("count", 0) < 2:
        raise DomainError("linear regression requires at least two points")

    count = resolve("convert", int, type(sums["x"]))(sums["count"])
    mean_x = invoke("divide", sums["x"], count)
    mean_y = invoke("divide", sums["y"], count)
    zero = constants_of(type(mean_x)).zero
    deviations = {"xy": zero, "xx": zero}

    def deviate(x: Any, y: Any) -> None:
        dx = invoke("subtract", x, mean_x)
        dy = invoke("subtract", y, mean_y)
        deviations["xy"] = invoke("add", deviations["xy"], invoke("multiply", dx, dy))
        deviations["xx"] = invoke("add", deviations["xx"], invoke("multiply", dx, dx))

    stepper(deviate)
    slope = invoke("divide", deviations["xy"], deviations["xx"])
    y_intercept = invoke("subtract", mean_y, invoke("multiply", slope, mean_x))
    return Regression(slope, y_intercept)


def mode(values: Values | None) -> Any:
    raise NotImplementedOperationError("mode is not implemented")
