from __future__ import annotations

import decimal
import unittest

from generic_math.errors import (
    DomainError,
    EmptyInputError,
    MathError,
    NotImplementedOperationError,
    NullInputError,
    OutOfRangeError,
    TypeCapabilityError,
    classify_operator_exception,
)


class ErrorHierarchyTests(unittest.TestCase):
    def test_every_error_is_a_math_error_and_a_builtin_kind(self) -> None:
        cases = [
            (NullInputError("values"), ValueError),
            (EmptyInputError("values"), ValueError),
            (OutOfRangeError("factor", 2, "0 <= factor <= 1"), ValueError),
            (DomainError("undefined"), ArithmeticError),
            (TypeCapabilityError("add", (object,), ("__add__",)), TypeError),
            (NotImplementedOperationError("later"), NotImplementedError),
        ]
        for err, builtin in cases:
            with self.subTest(err=type(err).__name__):
                self.assertIsInstance(err, MathError)
                self.assertIsInstance(err, builtin)

    def test_kinds_are_distinguishable(self) -> None:
        self.assertFalse(issubclass(NotImplementedOperationError, DomainError))
        self.assertFalse(issubclass(EmptyInputError, NullInputError))
        self.assertFalse(issubclass(NullInputError, EmptyInputError))

    def test_messages_carry_context(self) -> None:
        err = OutOfRangeError("leniency", -1, "leniency >= 0")
        self.assertEqual(err.name, "leniency")
        self.assertEqual(err.value, -1)
        self.assertIn("leniency >= 0", str(err))
        self.assertIn("values is empty", str(EmptyInputError("values")))
        capability = TypeCapabilityError("divide", (int, str), ("__truediv__",))
        self.assertIn("divide", str(capability))
        self.assertIn("__truediv__", str(capability))


class ClassifyOperatorExceptionTests(unittest.TestCase):
    def _classify(self, err: Exception) -> MathError:
        return classify_operator_exception(err, operation="op", types=(int, int))

    def test_domain_failures(self) -> None:
        cases = [
            ZeroDivisionError("division by zero"),
            ZeroDivisionError(),
            ValueError("math domain error"),
            decimal.InvalidOperation([decimal.InvalidOperation]),
            decimal.DivisionByZero(),
        ]
        for err in cases:
            with self.subTest(err=repr(err)):
                self.assertIsInstance(self._classify(err), DomainError)

    def test_capability_failures(self) -> None:
        err = self._classify(TypeError("unsupported operand type(s) for +: 'int' and 'str'"))
        self.assertIsInstance(err, TypeCapabilityError)
        self.assertEqual(err.types, (int, int))
        err = self._classify(TypeError("'<' not supported between instances of 'A' and 'A'"))
        self.assertIsInstance(err, TypeCapabilityError)

    def test_math_errors_pass_through(self) -> None:
        original = OutOfRangeError("x", 1, "x < 0")
        self.assertIs(self._classify(original), original)

    def test_unknown_failures_become_generic_math_errors(self) -> None:
        err = self._classify(OverflowError("numerical result out of range"))
        self.assertIs(type(err), MathError)
        self.assertIn("op", str(err))
        err = self._classify(TypeError("something else entirely"))
        self.assertIs(type(err), MathError)


if __name__ == "__main__":
    unittest.main()
