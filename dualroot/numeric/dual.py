"""
Dual Numbers (:mod:`dualroot.numeric.dual`)
===========================================

.. currentmodule:: dualroot.numeric.dual

Forward-mode automatic differentiation to second order.  A ``Dual``
carries a value together with its first and second derivatives with
respect to a single independent variable.  Evaluating an ordinary
function on a ``Dual`` gives the exact derivatives of that function at
the point, not a finite difference approximation.

Examples
--------
Functions are written once using operators and NumPy functions, and can
then be called with either plain numbers or ``Dual`` objects:

>>> import numpy as np
>>> def f(x):
...     return x ** 3 - 2 * np.sin(x)
>>> x = Dual.coerce_from(0.0).activate_derivative()
>>> print(f(x).first_derivative())
-2.0

NumPy passes ``Dual`` objects through its object loops, which call the
method with the same name as the ufunc (``np.sin(x)`` -> ``x.sin()``).
Functions from the standard ``math`` module convert to ``float`` and
lose the derivatives.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Protocol, Self, TypeVar

import numpy as np

T = TypeVar('T')


# ======================================================================

class Derivable(Protocol[T]):
    """
    Numeric type able to produce derivatives of an expression with
    respect to a seeded independent variable.
    """

    def activate_derivative(self) -> Self:
        """Seed this value as the independent variable."""
        ...

    def zeroth_derivative(self) -> T:
        """Value of the expression."""
        ...

    def first_derivative(self) -> T:
        """First derivative with respect to the independent variable."""
        ...

    def second_derivative(self) -> T:
        """Second derivative with respect to the independent variable."""
        ...


class Coerceable(Protocol[T]):
    """
    Numeric type that can be converted to and from a plain scalar type
    `T`.
    """

    @classmethod
    def coerce_from(cls, value: T) -> Self:
        ...

    def coerce_to(self) -> T:
        ...


# ======================================================================

@dataclass(frozen=True, eq=False)
class Dual(Generic[T]):
    r"""
    ``Dual`` represents a scalar value `value` together with its first
    and second derivatives `d1` and `d2`.  Each operation applies the
    corresponding differentiation rule, e.g. for a function :math:`g`
    applied to :math:`u`:

        - :math:`g(u)' = g'(u) u'`
        - :math:`g(u)'' = g''(u) u'^2 + g'(u) u''`

    ``Dual`` objects are immutable and can be treated like scalars.
    Plain numbers used alongside a ``Dual`` in an expression are
    promoted to constants (zero derivatives).  Comparisons only use
    `value`.

    .. note:: ``Dual`` objects are not normally created directly.  Use
       ``Dual.coerce_from(x).activate_derivative()`` to make an
       independent variable.
    """
    value: T
    d1: T
    d2: T

    # -- Construction / Conversion -------------------------------------

    @classmethod
    def coerce_from(cls, value: T) -> Dual[T]:
        """Lift a plain scalar to a constant ``Dual``."""
        zero = type(value)(0)
        return cls(value, zero, zero)

    def coerce_to(self) -> T:
        """Drop derivatives and return the plain scalar value."""
        return self.value

    def activate_derivative(self) -> Dual[T]:
        """
        Return a copy of this value seeded as the independent variable,
        i.e. ``d1 = 1`` and ``d2 = 0``.
        """
        return Dual(self.value, type(self.value)(1), type(self.value)(0))

    def zeroth_derivative(self) -> T:
        return self.value

    def first_derivative(self) -> T:
        return self.d1

    def second_derivative(self) -> T:
        return self.d2

    def _chain(self, g0, g1, g2) -> Dual[T]:
        # Apply g(u) where g0, g1, g2 are g, g', g'' evaluated at u.
        return Dual(g0, g1 * self.d1, g2 * self.d1 * self.d1 + g1 * self.d2)

    # -- Unary Operators -----------------------------------------------

    def __abs__(self) -> Dual[T]:
        s = np.sign(self.value)
        return Dual(abs(self.value), s * self.d1, s * self.d2)

    def __float__(self) -> float:
        """
        Returns float(self.value).

        .. note:: Derivatives are removed.
        """
        return float(self.value)

    def __neg__(self) -> Dual[T]:
        return Dual(-self.value, -self.d1, -self.d2)

    def __pos__(self) -> Dual[T]:
        return self

    # -- Binary Operators ----------------------------------------------

    def __add__(self, rhs: Dual[T] | T) -> Dual[T]:
        rhs = _promote(rhs)
        return Dual(self.value + rhs.value, self.d1 + rhs.d1,
                    self.d2 + rhs.d2)

    def __sub__(self, rhs: Dual[T] | T) -> Dual[T]:
        rhs = _promote(rhs)
        return Dual(self.value - rhs.value, self.d1 - rhs.d1,
                    self.d2 - rhs.d2)

    def __mul__(self, rhs: Dual[T] | T) -> Dual[T]:
        if not isinstance(rhs, Dual):
            return Dual(self.value * rhs, self.d1 * rhs, self.d2 * rhs)

        # Product rule, applied twice for the second derivative.
        return Dual(self.value * rhs.value,
                    self.d1 * rhs.value + self.value * rhs.d1,
                    (self.d2 * rhs.value + 2 * self.d1 * rhs.d1 +
                     self.value * rhs.d2))

    def __truediv__(self, rhs: Dual[T] | T) -> Dual[T]:
        if not isinstance(rhs, Dual):
            return Dual(self.value / rhs, self.d1 / rhs, self.d2 / rhs)

        return self * rhs.reciprocal()

    def __pow__(self, pwr: Dual[T] | T) -> Dual[T]:
        """
        Raise to a power.  For a constant power `n` the usual power rule
        is used.  If the power is itself a ``Dual`` the result is
        computed as :math:`e^{n \\ln u}`, which requires `value` > 0.
        """
        if isinstance(pwr, Dual):
            return (pwr * self.log()).exp()

        if pwr == 0:
            return Dual.coerce_from(np.power(self.value, 0))
        if pwr == 1:
            return self

        v = self.value
        return self._chain(np.power(v, pwr),
                           pwr * np.power(v, pwr - 1),
                           pwr * (pwr - 1) * np.power(v, pwr - 2))

    def __radd__(self, lhs: T) -> Dual[T]:
        return self + lhs

    def __rsub__(self, lhs: T) -> Dual[T]:
        return -self + lhs

    def __rmul__(self, lhs: T) -> Dual[T]:
        return self * lhs

    def __rtruediv__(self, lhs: T) -> Dual[T]:
        return self.reciprocal() * lhs

    def __rpow__(self, lhs: T) -> Dual[T]:
        # Constant base: c ** u = exp(u ln c).
        return (self * np.log(lhs)).exp()

    # -- Comparison Operators ------------------------------------------

    def __lt__(self, rhs) -> bool:
        return self.value < _value_of(rhs)

    def __le__(self, rhs) -> bool:
        return self.value <= _value_of(rhs)

    def __eq__(self, rhs) -> bool:
        return self.value == _value_of(rhs)

    def __ne__(self, rhs) -> bool:
        return self.value != _value_of(rhs)

    def __ge__(self, rhs) -> bool:
        return self.value >= _value_of(rhs)

    def __gt__(self, rhs) -> bool:
        return self.value > _value_of(rhs)

    def __hash__(self) -> int:
        return hash(self.value)

    # -- String Magic Methods ------------------------------------------

    def __format__(self, format_spec: str) -> str:
        return (f"{format(self.value, format_spec)} "
                f"[d1 = {format(self.d1, format_spec)}, "
                f"d2 = {format(self.d2, format_spec)}]")

    def __str__(self) -> str:
        return self.__format__('')

    # -- Elementary Functions ------------------------------------------
    # Method names match the NumPy ufuncs so that e.g. np.exp(x) works.

    def reciprocal(self) -> Dual[T]:
        r = 1 / self.value
        return self._chain(r, -r * r, 2 * r * r * r)

    def square(self) -> Dual[T]:
        return self * self

    def sqrt(self) -> Dual[T]:
        r = np.sqrt(self.value)
        g1 = 0.5 / r
        return self._chain(r, g1, -0.5 * g1 / self.value)

    def cbrt(self) -> Dual[T]:
        r = np.cbrt(self.value)
        g1 = 1 / (3 * r * r)
        return self._chain(r, g1, -2 * g1 / (3 * self.value))

    def exp(self) -> Dual[T]:
        e = np.exp(self.value)
        return self._chain(e, e, e)

    def expm1(self) -> Dual[T]:
        e = np.exp(self.value)
        return self._chain(np.expm1(self.value), e, e)

    def log(self) -> Dual[T]:
        r = 1 / self.value
        return self._chain(np.log(self.value), r, -r * r)

    def log1p(self) -> Dual[T]:
        r = 1 / (1 + self.value)
        return self._chain(np.log1p(self.value), r, -r * r)

    def log2(self) -> Dual[T]:
        return self.log() / np.log(2)

    def log10(self) -> Dual[T]:
        return self.log() / np.log(10)

    def sin(self) -> Dual[T]:
        s, c = np.sin(self.value), np.cos(self.value)
        return self._chain(s, c, -s)

    def cos(self) -> Dual[T]:
        s, c = np.sin(self.value), np.cos(self.value)
        return self._chain(c, -s, -c)

    def tan(self) -> Dual[T]:
        t = np.tan(self.value)
        sec2 = 1 + t * t
        return self._chain(t, sec2, 2 * t * sec2)

    def arcsin(self) -> Dual[T]:
        g1 = 1 / np.sqrt(1 - self.value * self.value)
        return self._chain(np.arcsin(self.value), g1, self.value * g1 ** 3)

    def arccos(self) -> Dual[T]:
        g1 = 1 / np.sqrt(1 - self.value * self.value)
        return self._chain(np.arccos(self.value), -g1,
                           -self.value * g1 ** 3)

    def arctan(self) -> Dual[T]:
        g1 = 1 / (1 + self.value * self.value)
        return self._chain(np.arctan(self.value), g1,
                           -2 * self.value * g1 * g1)

    def sinh(self) -> Dual[T]:
        sh, ch = np.sinh(self.value), np.cosh(self.value)
        return self._chain(sh, ch, sh)

    def cosh(self) -> Dual[T]:
        sh, ch = np.sinh(self.value), np.cosh(self.value)
        return self._chain(ch, sh, ch)

    def tanh(self) -> Dual[T]:
        t = np.tanh(self.value)
        g1 = 1 - t * t
        return self._chain(t, g1, -2 * t * g1)

    def arcsinh(self) -> Dual[T]:
        g1 = 1 / np.sqrt(1 + self.value * self.value)
        return self._chain(np.arcsinh(self.value), g1,
                           -self.value * g1 ** 3)

    def arctanh(self) -> Dual[T]:
        g1 = 1 / (1 - self.value * self.value)
        return self._chain(np.arctanh(self.value), g1,
                           2 * self.value * g1 * g1)


# ----------------------------------------------------------------------

def _promote(x) -> Dual:
    return x if isinstance(x, Dual) else Dual.coerce_from(x)


def _value_of(x):
    return x.value if isinstance(x, Dual) else x


# ======================================================================

def scalar_type(*values) -> type:
    """
    Returns the NumPy floating point scalar type common to `values`.
    Integer (or boolean) values are promoted to ``numpy.float64``, while
    e.g. ``numpy.float32`` values keep their precision.
    """
    dtype = np.result_type(*values)
    if not np.issubdtype(dtype, np.floating):
        dtype = np.dtype(np.float64)
    return dtype.type


def evaluate(f: Callable, x, *, number: type = Dual,
             derive: bool = False):
    """
    Evaluate `f` at scalar `x` lifted to the derivative tracking type
    `number`.  If `derive` is ``True`` then `x` is seeded as the
    independent variable.  A plain scalar returned by `f` (e.g. a
    constant function) is converted to the scalar type of `x` before
    being promoted to `number`.
    """
    x = number.coerce_from(x)
    if derive:
        x = x.activate_derivative()

    z = f(x)
    if not isinstance(z, number):
        z = number.coerce_from(type(x.coerce_to())(z))
    return z


def derivatives(f: Callable, x, *, number: type = Dual) -> tuple:
    """
    Compute the value and exact first and second derivatives of scalar
    function `f` at `x`.

    Examples
    --------
    >>> print(*derivatives(lambda u: u ** 2 + 3 * u, 2.0))
    10.0 7.0 2.0

    Parameters
    ----------
    f : Callable[[Dual], Dual]
        Scalar function written using operators and NumPy functions.
    x : scalar
        Point of evaluation.
    number : type, default = Dual
        Derivative tracking type used to evaluate `f`.

    Returns
    -------
    f, df_dx, d2f_dx2 : (scalar, scalar, scalar)
    """
    z = evaluate(f, x, number=number, derive=True)
    return z.zeroth_derivative(), z.first_derivative(), z.second_derivative()
