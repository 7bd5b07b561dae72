from __future__ import annotations

import operator
from collections.abc import Callable

import numpy as np

from dualroot.numeric.dual import Dual, evaluate, scalar_type

DEFAULT_RESOLUTION = 1000


# ======================================================================

def _check_bounds(lower, upper):
    if lower > upper:
        raise ValueError(f"Lower bound must be less than upper bound, got "
                         f"lower = {lower}, upper = {upper}.")
    if lower == upper:
        raise ValueError(f"Bounds cannot be the same, got lower = upper = "
                         f"{lower}.")


def _check_resolution(resolution: int) -> int:
    resolution = operator.index(resolution)
    if resolution < 1:
        raise ValueError("resolution must be greater than 0.")
    return resolution


# ----------------------------------------------------------------------

def find_bisections(f: Callable, lower, upper,
                    resolution: int = DEFAULT_RESOLUTION, *,
                    number: type = Dual) -> list[tuple]:
    """
    Scan the interval [`lower`, `upper`] in `resolution` equal steps
    and return each step (`a`, `b`) where the value of `f` changes sign,
    i.e. ``f(a) > 0 > f(b)`` or ``f(a) < 0 < f(b)``.  Each of these
    brackets contains at least one root.

    The step size has a machine epsilon added, i.e. ``step = (upper -
    lower) / resolution + eps``.  This moves the sample points slightly
    so that a root lying exactly on a sample point (e.g. the midpoint of
    a symmetric interval) still produces a sign change.  As a result the
    last bracket may extend very slightly past `upper`.

    Examples
    --------
    :math:`\\sin(x)` has three roots in [-5, 5]:

    >>> import numpy as np
    >>> len(find_bisections(np.sin, -5.0, 5.0, 2000))
    3

    Parameters
    ----------
    f : Callable[[Dual], Dual]
        Scalar function (see `newton`).
    lower, upper : scalar
        Interval to scan, with ``lower < upper``.
    resolution : int, default = 1000
        Number of steps.  Higher values find more closely spaced roots
        at the cost of more function evaluations (``resolution + 1``).
    number : type, default = Dual
        Derivative tracking type used to evaluate `f`.  Only the value
        of `f` is used.

    Returns
    -------
    brackets : list[(scalar, scalar)]
        Brackets in ascending order.

    Raises
    ------
    ValueError
        Illegal bounds or `resolution`.

    Notes
    -----
    This is a sampling method and will not find:
        - Roots where `f` touches zero without changing sign.
        - Pairs (or any even number) of roots inside a single step.
    A sample landing exactly on zero gives no strict sign change either
    side of it, so that root is also missed.
    """
    _check_bounds(lower, upper)
    resolution = _check_resolution(resolution)

    ftype = scalar_type(lower, upper)
    lower, upper = ftype(lower), ftype(upper)
    step = (upper - lower) / ftype(resolution) + np.finfo(ftype).eps

    def f_at(x):
        return evaluate(f, x, number=number).zeroth_derivative()

    brackets = []
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        a = lower
        fa = f_at(a)
        for i in range(resolution):
            b = lower + step * ftype(i + 1)
            fb = f_at(b)

            # Strict sign change only; NaN never brackets.
            if (fa > 0 and fb < 0) or (fa < 0 and fb > 0):
                brackets.append((a, b))

            a, fa = b, fb

    return brackets
