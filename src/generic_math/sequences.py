"""Push-style sequences ("steppers") bridged to Python iterables.

A stepper is a callable that takes a per-element callback and invokes it once
per element, in order, before returning. Every sequence argument in this
package accepts either a stepper or an ordinary iterable.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeVar, Union

from .errors import NullInputError

T = TypeVar("T")

Step = Callable[[T], None]
Stepper = Callable[[Step], None]
Values = Union[Stepper, Iterable[Any]]


def is_stepper(values: object) -> bool:
    return callable(values) and not isinstance(values, (type, Iterable))


def _iterable_stepper(values: Iterable[Any]) -> Stepper:
    def stepper(step: Step) -> None:
        for item in values:
            step(item)

    return stepper


def as_stepper(values: Values | None, *, name: str = "values") -> Stepper:
    """Return a stepper over ``values``; a one-shot iterator yields a one-shot stepper."""
    if values is None:
        raise NullInputError(name)
    if is_stepper(values):
        return values
    if not isinstance(values, Iterable):
        raise TypeError(f"{name} must be an iterable or a stepper, got {type(values).__name__}")
    return _iterable_stepper(values)


def as_replayable_stepper(values: Values | None, *, name: str = "values") -> Stepper:
    """Return a stepper that can be invoked more than once.

    Steppers and re-iterable collections are walked again from their source on
    every invocation. One-shot iterators are materialized up front.
    """
    if values is None:
        raise NullInputError(name)
    if is_stepper(values):
        return values
    if isinstance(values, Iterator):
        return _iterable_stepper(tuple(values))
    return as_stepper(values, name=name)


def to_list(values: Values | None, *, name: str = "values") -> list[Any]:
    stepper = as_stepper(values, name=name)
    if not is_stepper(values):
        return list(values)
    out: list[Any] = []
    stepper(out.append)
    return out


def count(values: Values | None, *, name: str = "values") -> int:
    total = 0

    def step(_item: object) -> None:
        nonlocal total
        total += 1

    as_stepper(values, name=name)(step)
    return total


def from_values(*values: Any) -> Stepper:
    """Stepper over fixed operands, used by the n-ary overloads."""
    return _iterable_stepper(values)
