"""
=======================================
Solvers (:mod:`dualroot.numeric.solve`)
=======================================

.. currentmodule:: dualroot.numeric.solve

Functions for finding the real roots of scalar functions.  Derivatives
are computed exactly by automatic differentiation, so only the function
itself needs to be supplied.

Functions
---------

.. autosummary::
    :toctree:

    find_bisections
    newton
    root_search

Results
-------

.. autosummary::
    :toctree:

    NewtonResult
    RootSearchResult

Exceptions
----------

.. autosummary::
    :toctree:

    SolverError

"""

from .bracket import DEFAULT_RESOLUTION, find_bisections
from .exception import SolverError
from .newton import (DEFAULT_PATIENCE, DEFAULT_TOLERANCE, NewtonResult,
                     newton)
from .root_search import DEFAULT_SEEDS, RootSearchResult, root_search
