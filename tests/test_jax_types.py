from __future__ import annotations

import importlib.util
import math
import unittest
from unittest import mock


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for jax array specializations")
class JaxSpecializationTests(unittest.TestCase):
    def test_array_type_is_categorized(self) -> None:
        import jax.numpy as jnp

        from generic_math.values import TypeCategory, category_of

        self.assertIs(category_of(type(jnp.asarray(1.0))), TypeCategory.JAX)
        self.assertIs(category_of(int), TypeCategory.INTEGRAL)
        self.assertIs(category_of(float), TypeCategory.FLOAT_CONVERTIBLE)

    def test_arithmetic_on_arrays(self) -> None:
        import jax.numpy as jnp

        from generic_math import add, multiply, multiply_add, power, square_root, subtract

        a = jnp.asarray(3.0)
        b = jnp.asarray(4.0)
        self.assertAlmostEqual(float(add(a, b)), 7.0, places=6)
        self.assertAlmostEqual(float(subtract(a, b)), -1.0, places=6)
        self.assertAlmostEqual(float(multiply(a, b)), 12.0, places=6)
        self.assertAlmostEqual(float(multiply_add(a, b, a)), 15.0, places=6)
        self.assertAlmostEqual(float(power(a, jnp.asarray(2.0))), 9.0, places=5)
        self.assertAlmostEqual(float(square_root(jnp.asarray(2.25))), 1.5, places=6)

        vector = jnp.asarray([1.0, 2.0, 3.0])
        self.assertEqual(add(vector, vector).tolist(), [2.0, 4.0, 6.0])

    def test_branch_free_templates_are_jitted(self) -> None:
        import jax.numpy as jnp

        from generic_math import config, invoke, resolve, specialization_cache_stats

        tp = type(jnp.asarray(1.0))
        specialization_cache_stats(reset=True)
        invoke("add", jnp.asarray(1.0), jnp.asarray(2.0))
        self.assertTrue(hasattr(resolve("add", tp, tp).function.__wrapped__, "lower"))

        specialization_cache_stats(reset=True)
        try:
            with mock.patch.object(config, "USE_JAX_JIT", False):
                invoke("add", jnp.asarray(1.0), jnp.asarray(2.0))
                self.assertFalse(hasattr(resolve("add", tp, tp).function.__wrapped__, "lower"))
        finally:
            specialization_cache_stats(reset=True)

    def test_predicates_return_python_bools(self) -> None:
        import jax.numpy as jnp

        from generic_math import equal, is_even, is_integer, less_than, maximum

        self.assertIs(equal(jnp.asarray(2.0), jnp.asarray(2.0)), True)
        self.assertIs(less_than(jnp.asarray(1.0), jnp.asarray(2.0)), True)
        self.assertIs(is_integer(jnp.asarray(2.5)), False)
        self.assertIs(is_even(jnp.asarray(4)), True)
        self.assertAlmostEqual(float(maximum(jnp.asarray(1.0), jnp.asarray(2.0))), 2.0, places=6)

    def test_pi_and_statistics_for_arrays(self) -> None:
        import jax.numpy as jnp

        from generic_math import constants_of, mean, pi, sine_taylor_series

        tp = type(jnp.asarray(1.0))
        self.assertAlmostEqual(float(pi(tp)), math.pi, places=5)
        self.assertAlmostEqual(float(constants_of(tp).pi2), 2 * math.pi, places=5)
        self.assertAlmostEqual(float(mean([jnp.asarray(1.0), jnp.asarray(2.0)])), 1.5, places=6)
        self.assertAlmostEqual(float(sine_taylor_series(jnp.asarray(0.5))), math.sin(0.5), places=5)


if __name__ == "__main__":
    unittest.main()
