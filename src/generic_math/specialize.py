"""Per-type operator specializations, synthesized lazily and cached.

Every generic operation is identified by a name and resolved against the
concrete runtime types of its operands. The first call through a slot builds a
function specialized for those types (rendered from an operator template, or
produced by a custom builder for operations with type-dependent strategies),
publishes it in the slot, and forwards the call. Later calls go straight to the
published function.
"""

from __future__ import annotations

import logging
import math
import numbers
import threading
from dataclasses import dataclass
from typing import Any, Callable, Final

import jax
import jax.numpy as jnp

from . import config
from .errors import (
    DomainError,
    MathError,
    NotImplementedOperationError,
    TypeCapabilityError,
    classify_operator_exception,
)
from .values import CompareResult, TypeCategory, category_of, implements, type_name

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationTemplate:
    name: str
    params: tuple[str, ...]
    body: str
    dunders: tuple[str, ...] = ()
    constants: tuple[str, ...] = ()
    predicate: bool = False
    traceable: bool = True


# Templates may only close over the eagerly built constants (zero through
# negative_one); the pi family is itself computed through specializations.
_TEMPLATES: Final[dict[str, OperationTemplate]] = {
    template.name: template
    for template in (
        OperationTemplate("negate", ("a",), "return -a", ("__neg__",)),
        OperationTemplate("add", ("a", "b"), "return a + b", ("__add__",)),
        OperationTemplate("subtract", ("a", "b"), "return a - b", ("__sub__",)),
        OperationTemplate("multiply", ("a", "b"), "return a * b", ("__mul__",)),
        OperationTemplate("divide", ("a", "b"), "return a / b", ("__truediv__",)),
        OperationTemplate("floor_divide", ("a", "b"), "return a // b", ("__floordiv__",)),
        OperationTemplate("modulo", ("a", "b"), "return a % b", ("__mod__",)),
        OperationTemplate("invert", ("a",), "return one / a", ("__truediv__",), ("one",)),
        OperationTemplate("multiply_add", ("a", "b", "c"), "return a * b + c", ("__mul__", "__add__")),
        OperationTemplate(
            "pi_term",
            ("j", "pi"),
            "return one + pi * (j / (two * j + one))",
            ("__add__", "__mul__", "__truediv__"),
            ("one", "two"),
        ),
        OperationTemplate(
            "absolute_value",
            ("a",),
            "if a < zero:\n    return -a\nreturn a",
            ("__lt__", "__neg__"),
            ("zero",),
            traceable=False,
        ),
        OperationTemplate("equal", ("a", "b"), "return a == b", ("__eq__",), predicate=True),
        OperationTemplate("not_equal", ("a", "b"), "return a != b", ("__ne__",), predicate=True),
        OperationTemplate("less_than", ("a", "b"), "return a < b", ("__lt__",), predicate=True),
        OperationTemplate("greater_than", ("a", "b"), "return a > b", ("__gt__",), predicate=True),
        OperationTemplate("less_than_or_equal", ("a", "b"), "return a <= b", ("__le__",), predicate=True),
        OperationTemplate("greater_than_or_equal", ("a", "b"), "return a >= b", ("__ge__",), predicate=True),
        OperationTemplate(
            "compare",
            ("a", "b"),
            "if a < b:\n    return CompareResult.LESS\n"
            "if a > b:\n    return CompareResult.GREATER\n"
            "return CompareResult.EQUAL",
            ("__lt__", "__gt__"),
            traceable=False,
        ),
        OperationTemplate("maximum", ("a", "b"), "if a < b:\n    return b\nreturn a", ("__lt__",), traceable=False),
        OperationTemplate("minimum", ("a", "b"), "if a > b:\n    return b\nreturn a", ("__gt__",), traceable=False),
        OperationTemplate(
            "clamp",
            ("value", "minimum", "maximum"),
            "if value < minimum:\n    return minimum\n"
            "if value > maximum:\n    return maximum\n"
            "return value",
            ("__lt__", "__gt__"),
            traceable=False,
        ),
        OperationTemplate(
            "equal_with_leniency",
            ("a", "b", "leniency"),
            "difference = a - b\n"
            "if difference < zero:\n    difference = -difference\n"
            "return difference <= leniency",
            ("__sub__", "__lt__", "__neg__", "__le__"),
            ("zero",),
            predicate=True,
            traceable=False,
        ),
        OperationTemplate(
            "is_integer", ("a",), "return a % one == zero", ("__mod__",), ("zero", "one"), predicate=True
        ),
        OperationTemplate(
            "is_even", ("a",), "return a % two == zero", ("__mod__",), ("zero", "two"), predicate=True
        ),
        OperationTemplate(
            "is_odd",
            ("a",),
            "if a < zero:\n    a = -a\nreturn a % two == one",
            ("__lt__", "__neg__", "__mod__"),
            ("zero", "one", "two"),
            predicate=True,
            traceable=False,
        ),
        OperationTemplate("is_negative", ("a",), "return a < zero", ("__lt__",), ("zero",), predicate=True),
        OperationTemplate("is_positive", ("a",), "return a > zero", ("__gt__",), ("zero",), predicate=True),
        OperationTemplate(
            "is_non_negative", ("a",), "return a >= zero", ("__ge__",), ("zero",), predicate=True
        ),
    )
}

_REFLECTED: Final[dict[str, str]] = {
    "__add__": "__radd__",
    "__sub__": "__rsub__",
    "__mul__": "__rmul__",
    "__truediv__": "__rtruediv__",
    "__floordiv__": "__rfloordiv__",
    "__mod__": "__rmod__",
    "__lt__": "__gt__",
    "__gt__": "__lt__",
    "__le__": "__ge__",
    "__ge__": "__le__",
}


def _missing_operators(dunders: tuple[str, ...], types: tuple[type, ...]) -> tuple[str, ...]:
    missing: list[str] = []
    for dunder in dunders:
        if any(implements(tp, dunder) for tp in types):
            continue
        reflected = _REFLECTED.get(dunder)
        if reflected is not None and any(implements(tp, reflected) for tp in types[1:]):
            continue
        missing.append(dunder)
    return tuple(missing)


def _check_capabilities(operation: str, dunders: tuple[str, ...], types: tuple[type, ...]) -> None:
    missing = _missing_operators(dunders, types)
    if missing:
        raise TypeCapabilityError(operation, types, missing)


def _identifier(tp: type) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in tp.__qualname__)


def _render(template: OperationTemplate, types: tuple[type, ...]) -> tuple[str, str]:
    fn_name = f"{template.name}__{'_'.join(_identifier(tp) for tp in types)}"
    lines = [f"def {fn_name}({', '.join(template.params)}):"]
    lines.extend(f"    {line}" for line in template.body.splitlines())
    return fn_name, "\n".join(lines) + "\n"


def _wants_jit(types: tuple[type, ...]) -> bool:
    return config.USE_JAX_JIT and category_of(types[0]) is TypeCategory.JAX


def _compile_template(template: OperationTemplate, types: tuple[type, ...]) -> Callable[..., Any]:
    if len(types) != len(template.params):
        raise TypeError(f"{template.name} takes {len(template.params)} operand(s), got {len(types)}")
    _check_capabilities(template.name, template.dunders, types)

    namespace: dict[str, Any] = {"CompareResult": CompareResult}
    if template.constants:
        from .constants import constants_of

        table = constants_of(types[0])
        for name in template.constants:
            namespace[name] = getattr(table, name)

    fn_name, source = _render(template, types)
    if config.LOG_SYNTHESIS:
        log.debug("source for %s:\n%s", fn_name, source)
    exec(compile(source, f"<generic_math:{fn_name}>", "exec"), namespace)
    fn = namespace[fn_name]

    if template.traceable and _wants_jit(types):
        fn = jax.jit(fn)
    if template.predicate:
        raw = fn

        def predicate(*args: Any) -> bool:
            return bool(raw(*args))

        fn = predicate
    return fn


def _not_implemented(operation: str, types: tuple[type, ...]) -> Callable[..., Any]:
    names = ", ".join(type_name(tp) for tp in types)

    def unsupported(*_args: Any) -> Any:
        raise NotImplementedOperationError(f"{operation} is not implemented for ({names})")

    return unsupported


def _fast_path(tp: type) -> bool:
    return config.USE_FLOAT_FAST_PATH and category_of(tp) in (
        TypeCategory.INTEGRAL,
        TypeCategory.FLOAT_CONVERTIBLE,
    )


def _build_convert(types: tuple[type, ...]) -> Callable[[Any], Any]:
    source, target = types
    if source is target:
        return lambda a: a
    if category_of(target) is TypeCategory.JAX:
        return jnp.asarray
    if (
        issubclass(source, numbers.Rational)
        and not issubclass(source, numbers.Integral)
        and not issubclass(target, numbers.Rational)
    ):
        # Decimal and friends refuse Fraction directly.
        def convert_rational(a: Any) -> Any:
            return target(a.numerator) / target(a.denominator)

        return convert_rational

    def convert(a: Any) -> Any:
        try:
            return target(a)
        except TypeError as err:
            raise TypeCapabilityError(
                "convert", types, (f"{type_name(target)}({type_name(source)})",)
            ) from err

    return convert


def _build_quotient(types: tuple[type, ...]) -> Callable[[Any, Any], Any]:
    if category_of(types[0]) is TypeCategory.INTEGRAL:
        return _compile_template(_TEMPLATES["floor_divide"], types)
    return _compile_template(_TEMPLATES["divide"], types)


def _integral_exponent(b: Any) -> int | None:
    """Return ``b`` as a non-negative ``int`` when it is one, else ``None``."""
    if isinstance(b, numbers.Integral):
        return int(b) if b >= 0 else None
    if invoke("is_integer", b) and invoke("is_non_negative", b):
        return int(invoke("convert_to_int", b))
    return None


def _build_power(types: tuple[type, ...]) -> Callable[[Any, Any], Any]:
    tp = types[0]
    category = category_of(tp)
    if category is TypeCategory.JAX:
        return jax.jit(jnp.power) if config.USE_JAX_JIT else jnp.power
    if _fast_path(tp):
        if category is TypeCategory.INTEGRAL:

            def power_integral(a: Any, b: Any) -> Any:
                if isinstance(b, numbers.Integral) and b >= 0:
                    return a ** b
                return math.pow(float(a), float(b))

            return power_integral

        def power_float(a: Any, b: Any) -> Any:
            return tp(math.pow(float(a), float(b)))

        return power_float

    _check_capabilities("power", ("__mul__",), (tp, tp))
    from .constants import constants_of

    one = constants_of(tp).one
    multiply = resolve("multiply", tp, tp)

    def power_repeated(a: Any, b: Any) -> Any:
        exponent = _integral_exponent(b)
        if exponent is None:
            raise NotImplementedOperationError(
                f"power for {type_name(tp)} supports only non-negative integer exponents, got {b!r}"
            )
        result = one
        for _ in range(exponent):
            result = multiply(result, a)
        return result

    return power_repeated


def _build_square_root(types: tuple[type, ...]) -> Callable[[Any], Any]:
    tp = types[0]
    category = category_of(tp)
    if category is TypeCategory.JAX:
        return jax.jit(jnp.sqrt) if config.USE_JAX_JIT else jnp.sqrt
    if _fast_path(tp):
        if category is TypeCategory.INTEGRAL:

            def square_root_integral(a: Any) -> Any:
                if a < 0:
                    raise DomainError(f"square root of negative integer {a!r}")
                return tp(math.isqrt(a))

            return square_root_integral

        def square_root_float(a: Any) -> Any:
            return tp(math.sqrt(float(a)))

        return square_root_float

    from .constants import constants_of

    table = constants_of(tp)
    half = invoke("invert", table.two)
    if not invoke("equal", half, table.zero):

        def square_root_by_power(a: Any) -> Any:
            return invoke("power", a, half)

        return square_root_by_power

    # Division truncates, so the floor root comes from Newton's method instead.
    def square_root_newton(a: Any) -> Any:
        if invoke("less_than", a, table.zero):
            raise DomainError(f"square root of negative value {a!r}")
        if invoke("less_than", a, table.two):
            return a
        estimate = a
        refined = invoke("divide", invoke("add", estimate, invoke("divide", a, estimate)), table.two)
        while invoke("less_than", refined, estimate):
            estimate = refined
            refined = invoke("divide", invoke("add", estimate, invoke("divide", a, estimate)), table.two)
        return estimate

    return square_root_newton


def _float_builder(
    operation: str,
    float_fn: Callable[..., float],
    jax_fn: Callable[..., Any],
) -> Callable[[tuple[type, ...]], Callable[..., Any]]:
    """Builder for operations that only exist through a float or jax primitive.

    Integral operands produce Python floats, like true division does. Other
    float-convertible types are converted back to their own type.
    """

    def build(types: tuple[type, ...]) -> Callable[..., Any]:
        tp = types[0]
        category = category_of(tp)
        if category is TypeCategory.JAX:
            return jax.jit(jax_fn) if config.USE_JAX_JIT else jax_fn
        if not _fast_path(tp):
            return _not_implemented(operation, types)
        if category is TypeCategory.INTEGRAL:
            return lambda *args: float_fn(*(float(arg) for arg in args))
        return lambda *args: tp(float_fn(*(float(arg) for arg in args)))

    return build


def _jax_logarithm(a: Any, b: Any) -> Any:
    return jnp.log(a) / jnp.log(b)


def _build_convert_to_int(types: tuple[type, ...]) -> Callable[[Any], int]:
    return _build_convert((types[0], int))


_BUILDERS: Final[dict[str, Callable[[tuple[type, ...]], Callable[..., Any]]]] = {
    "convert": _build_convert,
    "convert_to_int": _build_convert_to_int,
    "quotient": _build_quotient,
    "power": _build_power,
    "square_root": _build_square_root,
    "natural_logarithm": _float_builder("natural_logarithm", math.log, jnp.log),
    "logarithm": _float_builder("logarithm", math.log, _jax_logarithm),
    "sine_system": _float_builder("sine_system", math.sin, jnp.sin),
    "cosine_system": _float_builder("cosine_system", math.cos, jnp.cos),
    "tangent_system": _float_builder("tangent_system", math.tan, jnp.tan),
}

OPERATIONS: Final[frozenset[str]] = frozenset(_TEMPLATES) | frozenset(_BUILDERS)

_SLOTS: dict[tuple[str, tuple[type, ...]], "Specialization"] = {}
_SLOTS_LOCK = threading.Lock()
_CACHE_STATS: dict[str, int] = {"hits": 0, "misses": 0, "synthesized": 0}


def _guard(fn: Callable[..., Any], operation: str, types: tuple[type, ...]) -> Callable[..., Any]:
    def guarded(*args: Any) -> Any:
        try:
            return fn(*args)
        except MathError:
            raise
        except (ArithmeticError, TypeError, ValueError) as err:
            raise classify_operator_exception(err, operation=operation, types=types) from err

    guarded.__name__ = getattr(fn, "__name__", operation)
    guarded.__wrapped__ = fn
    return guarded


def _synthesize(operation: str, types: tuple[type, ...]) -> Callable[..., Any]:
    template = _TEMPLATES.get(operation)
    if template is not None:
        fn = _compile_template(template, types)
    else:
        fn = _BUILDERS[operation](types)
    _CACHE_STATS["synthesized"] += 1
    log.debug(
        "synthesized %s for (%s) [%s]",
        operation,
        ", ".join(type_name(tp) for tp in types),
        category_of(types[0]).value,
    )
    return _guard(fn, operation, types)


class Specialization:
    """Cache slot for one operation over one tuple of operand types.

    The slot starts out pointing at a bootstrap routine. The first call
    synthesizes the specialized function under the slot's lock, publishes it,
    and forwards the arguments; concurrent first callers wait and then reuse
    the published function. A failed synthesis leaves the slot in its
    bootstrap state so the same error is raised on the next call.
    """

    __slots__ = ("operation", "types", "function", "_lock", "_resolved")

    def __init__(self, operation: str, types: tuple[type, ...]) -> None:
        self.operation = operation
        self.types = types
        self._lock = threading.Lock()
        self._resolved = False
        self.function: Callable[..., Any] = self._bootstrap

    @property
    def resolved(self) -> bool:
        return self._resolved

    def _bootstrap(self, *args: Any) -> Any:
        with self._lock:
            if not self._resolved:
                self.function = _synthesize(self.operation, self.types)
                self._resolved = True
        return self.function(*args)

    def __call__(self, *args: Any) -> Any:
        return self.function(*args)

    def __repr__(self) -> str:
        names = ", ".join(type_name(tp) for tp in self.types)
        state = "resolved" if self.resolved else "bootstrap"
        return f"Specialization({self.operation!r}, ({names}), {state})"


def resolve(operation: str, *types: type) -> Specialization:
    """Return the cache slot for ``operation`` over ``types``, creating it if needed."""
    key = (operation, types)
    slot = _SLOTS.get(key)
    if slot is not None:
        _CACHE_STATS["hits"] += 1
        return slot
    if operation not in OPERATIONS:
        raise KeyError(f"unknown operation {operation!r}")
    with _SLOTS_LOCK:
        slot = _SLOTS.get(key)
        if slot is None:
            slot = Specialization(operation, types)
            _SLOTS[key] = slot
            _CACHE_STATS["misses"] += 1
        else:
            _CACHE_STATS["hits"] += 1
    return slot


def invoke(operation: str, *args: Any) -> Any:
    return resolve(operation, *(type(arg) for arg in args))(*args)


def specialization_cache_stats(*, reset: bool = False) -> dict[str, float | int]:
    hits = _CACHE_STATS["hits"]
    misses = _CACHE_STATS["misses"]
    total = hits + misses
    stats: dict[str, float | int] = {
        "hits": hits,
        "misses": misses,
        "synthesized": _CACHE_STATS["synthesized"],
        "size": len(_SLOTS),
        "resolved": sum(1 for slot in list(_SLOTS.values()) if slot.resolved),
        "hit_rate": float(hits / total) if total else 0.0,
    }
    if reset:
        with _SLOTS_LOCK:
            _SLOTS.clear()
        _CACHE_STATS["hits"] = 0
        _CACHE_STATS["misses"] = 0
        _CACHE_STATS["synthesized"] = 0
    return stats
