from __future__ import annotations

import importlib.util
import math
import unittest
from decimal import Decimal
from fractions import Fraction


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


def _budget(limit: int):
    seen = 0

    def stop_when(_estimate) -> bool:
        nonlocal seen
        seen += 1
        return seen >= limit

    return stop_when


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for transcendental tests")
class TaylorSeriesTests(unittest.TestCase):
    def test_sine_and_cosine_match_reference_for_floats(self) -> None:
        from generic_math import cosine_taylor_series, sine_taylor_series

        for x in (-3.0, -1.25, -0.1, 0.0, 0.5, 1.0, 2.0, 3.1):
            with self.subTest(x=x):
                self.assertAlmostEqual(sine_taylor_series(x), math.sin(x), places=10)
                self.assertAlmostEqual(cosine_taylor_series(x), math.cos(x), places=10)

    def test_tangent(self) -> None:
        from generic_math import tangent_taylor_series

        self.assertAlmostEqual(tangent_taylor_series(0.5), math.tan(0.5), places=10)

    def test_exact_types_stop_on_the_callers_budget(self) -> None:
        from generic_math import cosine_taylor_series, sine_taylor_series

        sine = sine_taylor_series(Fraction(1, 2), stop_when=_budget(10))
        self.assertIsInstance(sine, Fraction)
        self.assertAlmostEqual(float(sine), math.sin(0.5), places=12)

        cosine = cosine_taylor_series(Fraction(1, 2), stop_when=_budget(10))
        self.assertAlmostEqual(float(cosine), math.cos(0.5), places=12)

    def test_decimal_reaches_a_fixed_point(self) -> None:
        from generic_math import sine_taylor_series

        value = sine_taylor_series(Decimal("0.5"))
        self.assertIsInstance(value, Decimal)
        self.assertAlmostEqual(float(value), math.sin(0.5), places=12)

    def test_stop_predicate_sees_the_running_sum(self) -> None:
        from generic_math import sine_taylor_series

        seen: list[float] = []

        def stop_when(estimate: float) -> bool:
            seen.append(estimate)
            return len(seen) == 2

        value = sine_taylor_series(1.0, stop_when=stop_when)
        self.assertEqual(len(seen), 2)
        self.assertEqual(value, seen[-1])
        self.assertAlmostEqual(value, 1.0 - 1.0 / 6.0 + 1.0 / 120.0, places=15)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for transcendental tests")
class QuadraticEstimateTests(unittest.TestCase):
    def test_sine_hits_the_exact_values_at_quarter_periods(self) -> None:
        from generic_math import sine_quadratic

        self.assertAlmostEqual(sine_quadratic(0.0), 0.0, places=12)
        self.assertAlmostEqual(sine_quadratic(math.pi / 2), 1.0, places=12)
        self.assertAlmostEqual(sine_quadratic(3 * math.pi / 2), -1.0, places=12)
        self.assertAlmostEqual(sine_quadratic(-math.pi / 2), -1.0, places=12)

    def test_error_is_bounded(self) -> None:
        from generic_math import cosine_quadratic, sine_quadratic

        for step in range(-40, 41):
            x = step * 0.2
            with self.subTest(x=x):
                self.assertLess(abs(sine_quadratic(x) - math.sin(x)), 0.06)
                self.assertLess(abs(cosine_quadratic(x) - math.cos(x)), 0.06)

    def test_derived_functions(self) -> None:
        from generic_math import (
            cosecant_quadratic,
            cosine_quadratic,
            cotangent_quadratic,
            secant_quadratic,
            sine_quadratic,
            tangent_quadratic,
        )

        x = 0.7
        self.assertAlmostEqual(tangent_quadratic(x), sine_quadratic(x) / cosine_quadratic(x), places=12)
        self.assertAlmostEqual(cosecant_quadratic(x), 1 / sine_quadratic(x), places=12)
        self.assertAlmostEqual(secant_quadratic(x), 1 / cosine_quadratic(x), places=12)
        self.assertAlmostEqual(cotangent_quadratic(x), cosine_quadratic(x) / sine_quadratic(x), places=12)
        self.assertAlmostEqual(cosine_quadratic(0.0), 1.0, places=12)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for transcendental tests")
class SystemTrigTests(unittest.TestCase):
    def test_float_convertible_types_use_math(self) -> None:
        from generic_math import (
            cosecant_system,
            cosine_system,
            cotangent_system,
            secant_system,
            sine_system,
            tangent_system,
        )

        self.assertEqual(sine_system(0.5), math.sin(0.5))
        self.assertEqual(cosine_system(0.5), math.cos(0.5))
        self.assertEqual(tangent_system(0.5), math.tan(0.5))
        self.assertAlmostEqual(cosecant_system(0.5), 1 / math.sin(0.5), places=12)
        self.assertAlmostEqual(secant_system(0.5), 1 / math.cos(0.5), places=12)
        self.assertAlmostEqual(cotangent_system(0.5), 1 / math.tan(0.5), places=12)
        self.assertIsInstance(sine_system(Fraction(1, 2)), Fraction)
        self.assertIsInstance(sine_system(1), float)

    def test_unimplemented_functions_raise_distinctly(self) -> None:
        import generic_math
        from generic_math import DomainError, NotImplementedOperationError

        names = [
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
        ]
        for name in names:
            with self.subTest(name=name):
                fn = getattr(generic_math, name)
                self.assertEqual(fn.__name__, name)
                with self.assertRaises(NotImplementedOperationError) as err:
                    fn(0.5)
                self.assertNotIsInstance(err.exception, DomainError)


if __name__ == "__main__":
    unittest.main()
