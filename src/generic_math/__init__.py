"""generic-math public API."""

from .arithmetic import (
    absolute_value,
    add,
    convert,
    divide,
    exponential,
    invert,
    logarithm,
    modulo,
    modulo_all,
    multiply,
    multiply_add,
    natural_logarithm,
    negate,
    power,
    power_all,
    root,
    square_root,
    subtract,
)
from .comparison import (
    clamp,
    compare,
    equal,
    equal_with_leniency,
    greater_than,
    greater_than_or_equal,
    is_even,
    is_integer,
    is_negative,
    is_non_negative,
    is_odd,
    is_positive,
    is_zero,
    less_than,
    less_than_or_equal,
    maximum,
    minimum,
    not_equal,
)
from .constants import ConstantTable, constants_of
from .errors import (
    DomainError,
    EmptyInputError,
    MathError,
    NotImplementedOperationError,
    NullInputError,
    OutOfRangeError,
    TypeCapabilityError,
)
from .interpolation import blend, linear_interpolation, spherical_interpolation
from .number_theory import (
    binomial_coefficient,
    combinations,
    factor_primes,
    factorial,
    greatest_common_factor,
    is_prime,
    least_common_multiple,
)
from .reduction import (
    add_all,
    divide_all,
    equal_all,
    greatest_common_factor_all,
    least_common_multiple_all,
    maximum_all,
    minimum_all,
    multiply_all,
    subtract_all,
)
from .specialize import Specialization, invoke, resolve, specialization_cache_stats
from .statistics import (
    Regression,
    geometric_mean,
    linear_regression_2d,
    mean,
    mean_deviation,
    median,
    mode,
    quantiles,
    standard_deviation,
    value_range,
    variance,
)
from .transcendental import (
    cosecant_quadratic,
    cosecant_system,
    cosine_quadratic,
    cosine_system,
    cosine_taylor_series,
    cotangent_quadratic,
    cotangent_system,
    hyperbolic_cosecant,
    hyperbolic_cosine,
    hyperbolic_cotangent,
    hyperbolic_secant,
    hyperbolic_sine,
    hyperbolic_tangent,
    inverse_cosecant,
    inverse_cosine,
    inverse_cotangent,
    inverse_hyperbolic_cosecant,
    inverse_hyperbolic_cosine,
    inverse_hyperbolic_cotangent,
    inverse_hyperbolic_secant,
    inverse_hyperbolic_sine,
    inverse_hyperbolic_tangent,
    inverse_secant,
    inverse_sine,
    inverse_tangent,
    pi,
    secant_quadratic,
    secant_system,
    sine_quadratic,
    sine_system,
    sine_taylor_series,
    tangent_quadratic,
    tangent_system,
    tangent_taylor_series,
)
from .values import CompareResult

__all__ = [
    "convert",
    "negate",
    "add",
    "subtract",
    "multiply",
    "divide",
    "modulo",
    "power",
    "invert",
    "absolute_value",
    "square_root",
    "root",
    "logarithm",
    "natural_logarithm",
    "exponential",
    "multiply_add",
    "add_all",
    "subtract_all",
    "multiply_all",
    "divide_all",
    "modulo_all",
    "power_all",
    "maximum_all",
    "minimum_all",
    "equal_all",
    "equal",
    "not_equal",
    "less_than",
    "greater_than",
    "less_than_or_equal",
    "greater_than_or_equal",
    "compare",
    "CompareResult",
    "equal_with_leniency",
    "is_integer",
    "is_even",
    "is_odd",
    "is_negative",
    "is_positive",
    "is_non_negative",
    "is_zero",
    "is_prime",
    "maximum",
    "minimum",
    "clamp",
    "mean",
    "geometric_mean",
    "variance",
    "standard_deviation",
    "mean_deviation",
    "median",
    "quantiles",
    "value_range",
    "mode",
    "greatest_common_factor",
    "greatest_common_factor_all",
    "least_common_multiple",
    "least_common_multiple_all",
    "linear_regression_2d",
    "Regression",
    "factor_primes",
    "factorial",
    "binomial_coefficient",
    "combinations",
    "pi",
    "sine_taylor_series",
    "cosine_taylor_series",
    "tangent_taylor_series",
    "sine_quadratic",
    "cosine_quadratic",
    "tangent_quadratic",
    "cosecant_quadratic",
    "secant_quadratic",
    "cotangent_quadratic",
    "sine_system",
    "cosine_system",
    "tangent_system",
    "cosecant_system",
    "secant_system",
    "cotangent_system",
    "inverse_sine",
    "inverse_cosine",
    "inverse_tangent",
    "inverse_cosecant",
    "inverse_secant",
    "inverse_cotangent",
    "hyperbolic_sine",
    "hyperbolic_cosine",
    "hyperbolic_tangent",
    "hyperbolic_cosecant",
    "hyperbolic_secant",
    "hyperbolic_cotangent",
    "inverse_hyperbolic_sine",
    "inverse_hyperbolic_cosine",
    "inverse_hyperbolic_tangent",
    "inverse_hyperbolic_cosecant",
    "inverse_hyperbolic_secant",
    "inverse_hyperbolic_cotangent",
    "linear_interpolation",
    "blend",
    "spherical_interpolation",
    "constants_of",
    "ConstantTable",
    "resolve",
    "invoke",
    "Specialization",
    "specialization_cache_stats",
    "MathError",
    "NullInputError",
    "EmptyInputError",
    "OutOfRangeError",
    "DomainError",
    "TypeCapabilityError",
    "NotImplementedOperationError",
]
