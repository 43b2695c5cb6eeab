"""Canonical constants per numeric type, built lazily and cached."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Final

from .specialize import invoke, resolve
from .values import type_name

log = logging.getLogger(__name__)

_BASIC_LITERALS: Final[tuple[tuple[str, int], ...]] = (
    ("zero", 0),
    ("one", 1),
    ("two", 2),
    ("three", 3),
    ("four", 4),
    ("ten", 10),
    ("negative_one", -1),
)


@dataclass(frozen=True)
class PiConstants:
    pi: Any
    pi2: Any
    pi_over_2: Any
    pi3_over_2: Any
    four_over_pi_squared: Any
    negative_four_over_pi_squared: Any


class ConstantTable:
    """Constants of one numeric type.

    The small integer constants are converted from literals when the table is
    created. The pi family is computed on first access, because computing pi
    goes back through the operator specializations of the same type.
    """

    zero: Any
    one: Any
    two: Any
    three: Any
    four: Any
    ten: Any
    negative_one: Any

    def __init__(self, numeric_type: type) -> None:
        self.numeric_type = numeric_type
        for name, literal in _BASIC_LITERALS:
            setattr(self, name, resolve("convert", int, numeric_type)(literal))
        self._pi_lock = threading.Lock()
        self._pi: PiConstants | None = None

    def _pi_constants(self) -> PiConstants:
        cached = self._pi
        if cached is not None:
            return cached
        with self._pi_lock:
            if self._pi is None:
                from .transcendental import pi as compute_pi

                tp = self.numeric_type

                def convert(value: Any) -> Any:
                    return resolve("convert", type(value), tp)(value)

                pi = compute_pi(tp)
                pi_squared = invoke("multiply", pi, pi)
                self._pi = PiConstants(
                    pi=pi,
                    pi2=convert(invoke("multiply", self.two, pi)),
                    pi_over_2=convert(invoke("divide", pi, self.two)),
                    pi3_over_2=convert(invoke("divide", invoke("multiply", self.three, pi), self.two)),
                    four_over_pi_squared=convert(invoke("divide", self.four, pi_squared)),
                    negative_four_over_pi_squared=convert(
                        invoke("negate", invoke("divide", self.four, pi_squared))
                    ),
                )
            return self._pi

    @property
    def pi(self) -> Any:
        return self._pi_constants().pi

    @property
    def pi2(self) -> Any:
        return self._pi_constants().pi2

    @property
    def pi_over_2(self) -> Any:
        return self._pi_constants().pi_over_2

    @property
    def pi3_over_2(self) -> Any:
        return self._pi_constants().pi3_over_2

    @property
    def four_over_pi_squared(self) -> Any:
        return self._pi_constants().four_over_pi_squared

    @property
    def negative_four_over_pi_squared(self) -> Any:
        return self._pi_constants().negative_four_over_pi_squared

    def __repr__(self) -> str:
        return f"ConstantTable({type_name(self.numeric_type)})"


_TABLES: dict[type, ConstantTable] = {}
_TABLES_LOCK = threading.Lock()


def constants_of(numeric_type: type) -> ConstantTable:
    table = _TABLES.get(numeric_type)
    if table is not None:
        return table
    with _TABLES_LOCK:
        table = _TABLES.get(numeric_type)
        if table is None:
            table = ConstantTable(numeric_type)
            _TABLES[numeric_type] = table
            log.debug("built constant table for %s", type_name(numeric_type))
    return table
