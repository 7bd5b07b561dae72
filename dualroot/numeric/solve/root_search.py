from __future__ import annotations

import operator
import warnings
from collections.abc import Callable
from typing import Any, NamedTuple

from dualroot.numeric.dual import Dual
from dualroot.numeric.solve.bracket import (DEFAULT_RESOLUTION,
                                            _check_bounds, _check_resolution,
                                            find_bisections)
from dualroot.numeric.solve.newton import (DEFAULT_PATIENCE,
                                           DEFAULT_TOLERANCE,
                                           _check_newton_args, newton)

DEFAULT_SEEDS = 100


# ======================================================================

class RootSearchResult(NamedTuple):
    """
    Roots found by `root_search`, in ascending order, along with all
    brackets that were scanned.  Brackets where no root was confirmed
    are included.
    """
    roots: list[Any]
    brackets: list[tuple[Any, Any]]


# ----------------------------------------------------------------------

def root_search(f: Callable, lower, upper,
                resolution: int = DEFAULT_RESOLUTION,
                patience: int = DEFAULT_PATIENCE,
                tolerance=DEFAULT_TOLERANCE, *, seeds: int = DEFAULT_SEEDS,
                halley: bool = False, verbose: bool = False,
                number: type = Dual) -> RootSearchResult:
    """
    Find the real roots of scalar function `f` in the interval
    [`lower`, `upper`].  The interval is first scanned for sign changes
    (see `find_bisections`), then each bracket (`a`, `b`) found is
    refined using `newton` started from evenly spaced seeds
    ``a + i * (b - a) / seeds`` for ``i = 0, 1, ..., seeds - 1``:

        - The first root lying strictly inside (`a`, `b`) is accepted
          and the remaining seeds are skipped.
        - If a seed fails to converge the remaining seeds are skipped
          and the bracket gives no root.

    At most one root is returned for each bracket.

    Examples
    --------
    >>> import numpy as np
    >>> roots, brackets = root_search(np.cos, -5.0, 5.0, 2000, 1000, 1e-4)
    >>> print(np.round(np.array(roots) / np.pi, 6))
    [-1.5 -0.5  0.5  1.5]

    Parameters
    ----------
    f : Callable[[Dual], Dual]
        Scalar function (see `newton`).
    lower, upper : scalar
        Search interval, with ``lower < upper``.
    resolution : int, default = 1000
        Number of steps used for the bracket scan.
    patience : int, default = 50
        Maximum Newton iterations for each seed.
    tolerance : scalar, default = 1.48e-8
        Newton convergence tolerance.
    seeds : int, default = 100
        Number of Newton starting points in each bracket.
    halley : bool, default = False
        If ``True`` use Halley's method for refinement.
    verbose : bool, default = False
        If ``True``, print progress statements.
    number : type, default = Dual
        Derivative tracking type used to evaluate `f`.

    Returns
    -------
    result : RootSearchResult
        Named tuple of ``(roots, brackets)``.

    Raises
    ------
    ValueError
        Illegal bounds (``lower >= upper``) or other parameters.  This
        is raised before `f` is evaluated.
    """
    _check_bounds(lower, upper)
    resolution = _check_resolution(resolution)
    patience = _check_newton_args(patience, tolerance)
    seeds = operator.index(seeds)
    if seeds < 1:
        raise ValueError("seeds must be greater than 0.")

    brackets = find_bisections(f, lower, upper, resolution, number=number)
    if verbose:
        print(f"Root Search: {len(brackets)} bracket(s) in "
              f"[{lower}, {upper}]")

    if not brackets:
        warnings.warn(f"No sign changes found in [{lower}, {upper}] "
                      f"with resolution = {resolution}.", RuntimeWarning)

    roots = []
    for a, b in brackets:
        ftype = type(a)
        step = (b - a) / ftype(seeds)
        root = None
        for i in range(seeds):
            x0 = a + ftype(i) * step
            root = newton(f, x0, patience, tolerance, halley=halley,
                          number=number)

            # Fail-fast: one non-converging seed abandons the bracket.
            if root is None:
                break

            if a < root < b:
                roots.append(root)
                break

            root = None

        if verbose:
            outcome = f"root = {root}" if root is not None else "no root"
            print(f"... Bracket [{a}, {b}]: {outcome}")

    return RootSearchResult(roots, brackets)
