"""
Find a single root of a scalar function using the Newton-Raphson method,
where the derivative is computed exactly by evaluating the function on
a derivative tracking number (see :mod:`dualroot.numeric.dual`).

Failure to converge is an ordinary outcome here: by default no root
(``None``) is returned and the caller decides what to do about it.
"""
from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any, NamedTuple

import numpy as np

from dualroot.numeric.dual import Dual, evaluate, scalar_type
from dualroot.numeric.solve.exception import SolverError

DEFAULT_PATIENCE = 50
DEFAULT_TOLERANCE = 1.48e-8


# ======================================================================

class NewtonResult(NamedTuple):
    """
    Outcome of a Newton-Raphson refinement.

    Attributes
    ----------
    root :
        Converged root, or ``None`` if the refinement failed.
    converged : bool
        ``True`` if `root` was found.
    guess :
        Initial guess.
    last :
        Last estimate computed.  If converged this is the same as `root`.
        On failure it is informative only and may be far from any root.
    iterations : int
        Number of iterations used.  This is less than `patience` when
        the refinement stops early on a non-finite estimate (``flag ==
        2``), which can never meet the tolerance.
    flag : int
        - 0: Converged.
        - 1: Reached patience limit.
        - 2: Estimate became non-finite.
    details : str
        Text description of `flag`.
    """
    root: Any
    converged: bool
    guess: Any
    last: Any
    iterations: int
    flag: int
    details: str


# ----------------------------------------------------------------------

def _check_newton_args(patience: int, tolerance) -> int:
    patience = operator.index(patience)
    if patience < 1:
        raise ValueError("patience must be greater than 0.")
    if not tolerance > 0:
        raise ValueError(f"tolerance too small ({tolerance} <= 0).")
    return patience


# ======================================================================

def newton(f: Callable, guess, patience: int = DEFAULT_PATIENCE,
           tolerance=DEFAULT_TOLERANCE, *, halley: bool = False,
           full_output: bool = False, disp: bool = False,
           verbose: bool = False, number: type = Dual):
    r"""
    Find a root of :math:`f(x) = 0` near `guess` using Newton-Raphson
    iteration:

        :math:`x_{n+1} = x_n - f(x_n) / f'(x_n)`

    The derivative :math:`f'(x_n)` is exact, obtained by evaluating `f`
    on a ``Dual`` number.  Iteration stops with success once
    :math:`|x_{n+1} - x_n| <` `tolerance`, returning :math:`x_{n+1}`.

    Examples
    --------
    >>> import numpy as np
    >>> root = newton(np.sin, 2.0, 1000, 1e-4)
    >>> print(f"{root:.6f}")
    3.141593

    Parameters
    ----------
    f : Callable[[Dual], Dual]
        Scalar function, written using operators and NumPy functions so
        that it can be evaluated on `number` objects.  It must be pure
        (no internal state).
    guess : scalar
        Initial estimate.  The floating point type of `guess` and
        `tolerance` is used throughout, e.g. ``numpy.float32`` inputs
        give a ``numpy.float32`` root.
    patience : int, default = 50
        Maximum number of iterations.
    tolerance : scalar, default = 1.48e-8
        Stop when the change between successive estimates is less than
        this value.
    halley : bool, default = False
        If ``True``, Halley's method is used.  The Newton step is
        adjusted using the exact second derivative, but only when the
        adjustment denominator stays close enough to 1.
    full_output : bool, default = False
        If ``True`` return ``(root, NewtonResult)``.
    disp : bool, default = False
        If ``True`` raise `SolverError` on failure instead of returning
        ``None``.
    verbose : bool, default = False
        If ``True``, print progress statements.
    number : type, default = Dual
        Derivative tracking type used to evaluate `f`.

    Returns
    -------
    root : scalar or None
        The root, or ``None`` if no root was found within `patience`
        iterations.
    root, result : (scalar or None, NewtonResult)
        When ``full_output == True``.

    Raises
    ------
    ValueError
        If `patience` < 1 or `tolerance` <= 0.
    SolverError
        Failure to converge when ``disp == True``, including attributes
        `guess`, `last` and `iterations`.

    Notes
    -----
    - There is no special treatment of a zero derivative.  The
      resulting non-finite estimate cannot meet the tolerance so the
      refinement simply fails (without raising) as soon as it occurs.
    - On failure no 'best' estimate is returned as the root because
      intermediate estimates may be far from any root.
    """
    patience = _check_newton_args(patience, tolerance)
    ftype = scalar_type(guess, tolerance)
    current, tolerance = ftype(guess), ftype(tolerance)

    if verbose:
        print("Newton-Raphson Root:")

    flag, details = 1, f"Reached patience limit of {patience} iterations."
    its = 0
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        while its < patience:
            z = evaluate(f, current, number=number, derive=True)
            fval = ftype(z.zeroth_derivative())
            fder = ftype(z.first_derivative())
            step = fval / fder

            if halley:
                adj = step * z.second_derivative() / fder / 2
                if abs(adj) < 1:
                    step = step / (1 - adj)

            nxt = ftype(current - step)
            its += 1

            if verbose:
                print(f"... Iteration {its}: x = {nxt}, f(x) = {fval}, "
                      f"f'(x) = {fder}")

            if abs(nxt - current) < tolerance:
                if verbose:
                    print("... Converged.")

                result = NewtonResult(nxt, True, guess, nxt, its, 0,
                                      "Converged.")
                return (nxt, result) if full_output else nxt

            current = nxt
            if not np.isfinite(current):
                flag, details = 2, "Non-finite estimate."
                break

    if verbose:
        print(f"... Failed with initial guess of {guess}: {details}")

    if disp:
        raise SolverError("newton() failed to converge:", flag=flag,
                          details=details, guess=guess, last=current,
                          iterations=its)

    result = NewtonResult(None, False, guess, current, its, flag, details)
    return (None, result) if full_output else None
