"""
.. This module acts as the top-level API documentation.

.. module: dualroot

Real roots of scalar functions over an interval, using a sign-change
scan followed by Newton-Raphson refinement with exact derivatives from
automatic differentiation.

.. autosummary::
    :toctree: generated/

    numeric

"""

__version__ = "0.1.0"

import sys

# ======================================================================

assert sys.version_info >= (3, 11)

from .numeric.dual import Coerceable, Derivable, Dual, derivatives
from .numeric.solve import (NewtonResult, RootSearchResult, SolverError,
                            find_bisections, newton, root_search)
