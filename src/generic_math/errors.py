"""Structured error types for specialization and computation failures."""

from __future__ import annotations

import decimal


class MathError(Exception):
    """Base class for structured generic-math errors."""


class NullInputError(MathError, ValueError):
    """A required sequence or argument was absent."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is None")
        self.name = name


class EmptyInputError(MathError, ValueError):
    """A sequence produced no elements where at least one was required."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is empty")
        self.name = name


class OutOfRangeError(MathError, ValueError):
    """A numeric parameter violates a documented bound."""

    def __init__(self, name: str, value: object, bound: str) -> None:
        super().__init__(f"{name}={value!r} is out of range: requires {bound}")
        self.name = name
        self.value = value
        self.bound = bound


class DomainError(MathError, ArithmeticError):
    """The request is mathematically undefined for otherwise well-formed input."""


class TypeCapabilityError(MathError, TypeError):
    """A numeric type lacks an operator that a specialization needs."""

    def __init__(self, operation: str, types: tuple[type, ...], missing: tuple[str, ...]) -> None:
        names = ", ".join(t.__qualname__ for t in types)
        super().__init__(
            f"cannot specialize {operation!r} for ({names}): missing operator(s) {', '.join(missing)}"
        )
        self.operation = operation
        self.types = types
        self.missing = missing


class NotImplementedOperationError(MathError, NotImplementedError):
    """The operation exists in the API but has no implementation for this input."""


_DOMAIN_MARKERS = (
    "division by zero",
    "divide by zero",
    "modulo by zero",
    "math domain error",
    "zero to a negative power",
)
_CAPABILITY_MARKERS = (
    "unsupported operand",
    "not supported between",
    "bad operand type",
)


def classify_operator_exception(err: Exception, *, operation: str, types: tuple[type, ...]) -> MathError:
    """Best-effort classification of an exception raised inside a synthesized operator."""
    if isinstance(err, MathError):
        return err
    message = str(err)
    lowered = message.lower()

    if isinstance(err, ZeroDivisionError):
        return DomainError(f"{operation}: {message or 'division by zero'}")
    if isinstance(err, decimal.InvalidOperation):
        return DomainError(f"{operation}: invalid decimal operation")
    if any(marker in lowered for marker in _DOMAIN_MARKERS):
        return DomainError(f"{operation}: {message}")

    if isinstance(err, TypeError) and any(marker in lowered for marker in _CAPABILITY_MARKERS):
        return TypeCapabilityError(operation, types, (message,))

    return MathError(f"{operation}: {message}")
