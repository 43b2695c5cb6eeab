from __future__ import annotations

import importlib.util
import itertools
import unittest
from fractions import Fraction


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for reduction tests")
class ReductionTests(unittest.TestCase):
    def test_fold_seeds_with_first_element_and_runs_in_order(self) -> None:
        from generic_math.reduction import fold

        self.assertEqual(fold("subtract", [10, 3, 2]), 5)
        self.assertEqual(fold("divide", [Fraction(1), Fraction(2), Fraction(5)]), Fraction(1, 10))
        self.assertEqual(fold("add", [42]), 42)

    def test_steppers_are_accepted(self) -> None:
        from generic_math import add_all, maximum_all

        def stepper(step) -> None:
            for value in (4, 8, 15, 16, 23, 42):
                step(value)

        self.assertEqual(add_all(stepper), 108)
        self.assertEqual(maximum_all(stepper), 42)

    def test_none_is_rejected_before_any_work(self) -> None:
        from generic_math import NullInputError, add_all, greatest_common_factor_all, multiply_all

        for fn in (add_all, multiply_all, greatest_common_factor_all):
            with self.subTest(fn=fn.__name__):
                with self.assertRaises(NullInputError):
                    fn(None)

    def test_empty_input_is_reported_after_the_producer_runs(self) -> None:
        from generic_math import EmptyInputError, NullInputError, add_all, greatest_common_factor_all

        calls: list[str] = []

        def empty(step) -> None:
            calls.append("produced")

        with self.assertRaises(EmptyInputError) as err:
            add_all(empty)
        self.assertNotIsInstance(err.exception, NullInputError)
        self.assertEqual(calls, ["produced"])
        with self.assertRaises(EmptyInputError):
            greatest_common_factor_all([])

    def test_greatest_common_factor(self) -> None:
        from generic_math import greatest_common_factor, greatest_common_factor_all

        self.assertEqual(greatest_common_factor(12, 18), 6)
        self.assertEqual(greatest_common_factor(-12, 18), 6)
        self.assertEqual(greatest_common_factor(12, -18), 6)
        self.assertEqual(greatest_common_factor(12, 18, 27), 3)
        self.assertEqual(greatest_common_factor_all([7]), 7)
        self.assertEqual(greatest_common_factor(12.0, 18.0), 6.0)

    def test_greatest_common_factor_divides_both_operands(self) -> None:
        from generic_math import greatest_common_factor, modulo

        values = [1, 2, 6, 9, -15, 28, 35, 97, 360, -1024]
        for a, b in itertools.product(values, repeat=2):
            with self.subTest(a=a, b=b):
                g = greatest_common_factor(a, b)
                self.assertGreater(g, 0)
                self.assertEqual(modulo(a, g), 0)
                self.assertEqual(modulo(b, g), 0)

    def test_least_common_multiple_identity(self) -> None:
        from generic_math import greatest_common_factor, least_common_multiple

        values = [1, 3, 4, 6, -10, 21, 64]
        for a, b in itertools.product(values, repeat=2):
            with self.subTest(a=a, b=b):
                self.assertEqual(greatest_common_factor(a, b) * least_common_multiple(a, b), abs(a * b))
        self.assertEqual(least_common_multiple(4, 6, 10), 60)

    def test_factor_operands_must_be_integers(self) -> None:
        from generic_math import DomainError, greatest_common_factor, least_common_multiple

        with self.assertRaises(DomainError):
            greatest_common_factor(0, 5)
        with self.assertRaises(DomainError):
            greatest_common_factor(4, 2.5)
        with self.assertRaises(DomainError):
            least_common_multiple(Fraction(1, 2), 3)

    def test_least_common_multiple_with_a_zero_is_zero(self) -> None:
        from generic_math import DomainError, least_common_multiple, least_common_multiple_all

        self.assertEqual(least_common_multiple(4, 0), 0)
        self.assertEqual(least_common_multiple(0, 4), 0)
        self.assertEqual(least_common_multiple(3, 0, 5), 0)
        self.assertEqual(least_common_multiple_all([0]), 0)
        with self.assertRaises(DomainError):
            least_common_multiple(0, 2.5)


if __name__ == "__main__":
    unittest.main()
