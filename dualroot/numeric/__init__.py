"""
Numeric (:mod:`dualroot.numeric`)
=================================

.. currentmodule:: dualroot.numeric

Derivative tracking numbers and the root solvers built on them.

.. autosummary::
    :toctree:

    dual
    solve

"""
from .dual import (Coerceable, Derivable, Dual, derivatives, evaluate,
                   scalar_type)
