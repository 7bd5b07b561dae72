from unittest import TestCase

import numpy as np
from numpy.testing import assert_allclose


# ======================================================================

def _independent(x):
    from dualroot.numeric.dual import Dual
    return Dual.coerce_from(x).activate_derivative()


class TestDual(TestCase):
    def test_coerce(self):
        from dualroot.numeric.dual import Dual

        x = Dual.coerce_from(2.5)
        self.assertEqual(x.coerce_to(), 2.5)
        self.assertEqual(x.first_derivative(), 0.0)
        self.assertEqual(x.second_derivative(), 0.0)
        self.assertEqual(float(x), 2.5)

        x = x.activate_derivative()
        self.assertEqual(x.zeroth_derivative(), 2.5)
        self.assertEqual(x.first_derivative(), 1.0)
        self.assertEqual(x.second_derivative(), 0.0)

        # Immutable.
        with self.assertRaises(AttributeError):
            x.value = 1.0

    def test_arithmetic(self):
        from dualroot.numeric.dual import derivatives

        # f = x³ - 2x at x = 2.
        assert_allclose(derivatives(lambda x: x ** 3 - 2 * x, 2.0),
                        (4.0, 10.0, 12.0))

        # Product and quotient rules: f = x / (1 + x²) at x = 1.
        assert_allclose(derivatives(lambda x: x / (1 + x * x), 1.0),
                        (0.5, 0.0, -0.5))

        # Reflected operators: f = 1 / x at x = 2.
        assert_allclose(derivatives(lambda x: 1 / x, 2.0),
                        (0.5, -0.25, 0.25))
        assert_allclose(derivatives(lambda x: 3 - x, 2.0), (1.0, -1.0, 0.0))

        # Unary operators.
        assert_allclose(derivatives(lambda x: -x, 2.0), (-2.0, -1.0, 0.0))
        assert_allclose(derivatives(lambda x: abs(x), -2.0),
                        (2.0, -1.0, 0.0))

    def test_powers(self):
        from dualroot.numeric.dual import derivatives

        assert_allclose(derivatives(lambda x: x ** 0.5, 4.0),
                        (2.0, 0.25, -1 / 32))
        assert_allclose(derivatives(lambda x: x ** 2, 0.0), (0.0, 0.0, 2.0))
        assert_allclose(derivatives(lambda x: x ** 1, 3.0), (3.0, 1.0, 0.0))
        assert_allclose(derivatives(lambda x: x ** 0, 3.0), (1.0, 0.0, 0.0))

        # Variable exponent: f = xˣ at x = 1 gives f' = 1, f'' = 2.
        assert_allclose(derivatives(lambda x: x ** x, 1.0), (1.0, 1.0, 2.0))

        # Constant base: f = 2ˣ.
        ln2 = np.log(2)
        assert_allclose(derivatives(lambda x: 2 ** x, 3.0),
                        (8.0, 8 * ln2, 8 * ln2 ** 2))

    def test_elementary(self):
        from dualroot.numeric.dual import Dual, derivatives

        x0 = 0.3
        s, c = np.sin(x0), np.cos(x0)
        cases = [
            (np.sin, (s, c, -s)),
            (np.cos, (c, -s, -c)),
            (np.tan, (s / c, 1 / c ** 2, 2 * s / c ** 3)),
            (np.exp, (np.exp(x0),) * 3),
            (np.expm1, (np.expm1(x0), np.exp(x0), np.exp(x0))),
            (np.log, (np.log(x0), 1 / x0, -1 / x0 ** 2)),
            (np.log1p, (np.log1p(x0), 1 / (1 + x0), -1 / (1 + x0) ** 2)),
            (np.log10, (np.log10(x0), 1 / (x0 * np.log(10)),
                        -1 / (x0 ** 2 * np.log(10)))),
            (np.log2, (np.log2(x0), 1 / (x0 * np.log(2)),
                       -1 / (x0 ** 2 * np.log(2)))),
            (np.sqrt, (np.sqrt(x0), 0.5 / np.sqrt(x0),
                       -0.25 * x0 ** -1.5)),
            (Dual.cbrt, (np.cbrt(x0), x0 ** (-2 / 3) / 3,
                        -2 / 9 * x0 ** (-5 / 3))),
            (np.arcsin, (np.arcsin(x0), (1 - x0 ** 2) ** -0.5,
                         x0 * (1 - x0 ** 2) ** -1.5)),
            (np.arccos, (np.arccos(x0), -(1 - x0 ** 2) ** -0.5,
                         -x0 * (1 - x0 ** 2) ** -1.5)),
            (np.arctan, (np.arctan(x0), 1 / (1 + x0 ** 2),
                         -2 * x0 / (1 + x0 ** 2) ** 2)),
            (np.sinh, (np.sinh(x0), np.cosh(x0), np.sinh(x0))),
            (np.cosh, (np.cosh(x0), np.sinh(x0), np.cosh(x0))),
            (np.tanh, (np.tanh(x0), 1 / np.cosh(x0) ** 2,
                       -2 * np.tanh(x0) / np.cosh(x0) ** 2)),
            (np.arcsinh, (np.arcsinh(x0), (1 + x0 ** 2) ** -0.5,
                          -x0 * (1 + x0 ** 2) ** -1.5)),
            (np.arctanh, (np.arctanh(x0), 1 / (1 - x0 ** 2),
                          2 * x0 / (1 - x0 ** 2) ** 2)),
        ]
        for func, expected in cases:
            with self.subTest(func=func.__name__):
                assert_allclose(derivatives(func, x0), expected, rtol=1e-12)

    def test_chain_rule(self):
        from dualroot.numeric.dual import derivatives

        # f = exp(sin(x²)).
        def f(x):
            return np.exp(np.sin(x ** 2))

        x0 = 0.7
        u = x0 ** 2
        f0 = np.exp(np.sin(u))
        f1 = f0 * np.cos(u) * 2 * x0
        f2 = (f0 * (np.cos(u) * 2 * x0) ** 2 +
              f0 * (-np.sin(u) * 4 * x0 ** 2 + 2 * np.cos(u)))
        assert_allclose(derivatives(f, x0), (f0, f1, f2), rtol=1e-12)

        # Same function body evaluates on plain floats.
        self.assertEqual(f(x0), f0)

    def test_comparison(self):
        from dualroot.numeric.dual import Dual

        x = _independent(1.0)
        self.assertTrue(x < 2.0)
        self.assertTrue(x <= 1.0)
        self.assertTrue(x == 1.0)
        self.assertTrue(x != Dual(2.0, 1.0, 0.0))
        self.assertTrue(x >= Dual(1.0, 5.0, 0.0))
        self.assertTrue(2.0 > x)

        # Branches in user functions follow the value.
        def relu_sq(u):
            return u * u if u > 0 else 0 * u

        self.assertEqual(relu_sq(_independent(3.0)).first_derivative(), 6.0)
        self.assertEqual(relu_sq(_independent(-3.0)).first_derivative(), 0.0)

    def test_float32(self):
        x = _independent(np.float32(0.5))
        z = np.sin(x) * x ** 2 + 1.5
        for coeff in (z.zeroth_derivative(), z.first_derivative(),
                      z.second_derivative()):
            self.assertIsInstance(coeff, np.float32)

    def test_evaluate_constant(self):
        from dualroot.numeric.dual import Dual, evaluate, derivatives

        z = evaluate(lambda x: 3.0, 1.0, derive=True)
        self.assertIsInstance(z, Dual)
        self.assertEqual(derivatives(lambda x: 3.0, 1.0), (3.0, 0.0, 0.0))

        # Plain results take the scalar type of the point.
        for coeff in derivatives(lambda x: 3.0, np.float32(1)):
            self.assertIsInstance(coeff, np.float32)
        z = evaluate(lambda x: 3.0, np.float64(1.0), derive=True)
        self.assertIsInstance(z.first_derivative(), np.float64)

    def test_protocols(self):
        from dualroot.numeric.dual import Coerceable, Derivable, Dual

        # Dual satisfies both interfaces structurally.
        for name in ('activate_derivative', 'zeroth_derivative',
                     'first_derivative', 'second_derivative'):
            self.assertIn(name, dir(Derivable))
            self.assertTrue(callable(getattr(Dual, name)))
        for name in ('coerce_from', 'coerce_to'):
            self.assertIn(name, dir(Coerceable))
            self.assertTrue(callable(getattr(Dual, name)))

    def test_format(self):
        x = _independent(2.0)
        self.assertEqual(f"{x:.1f}", "2.0 [d1 = 1.0, d2 = 0.0]")
        self.assertEqual(str(x), "2.0 [d1 = 1.0, d2 = 0.0]")


class TestScalarType(TestCase):
    def test_scalar_type(self):
        from dualroot.numeric.dual import scalar_type

        self.assertIs(scalar_type(1.0, 2.0), np.float64)
        self.assertIs(scalar_type(1, 2), np.float64)
        self.assertIs(scalar_type(np.float32(1), 1e-4), np.float32)
        self.assertIs(scalar_type(np.float32(1), np.float64(1)), np.float64)

# ----------------------------------------------------------------------
