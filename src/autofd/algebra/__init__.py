"""
######################################
Number systems (:mod:`autofd.algebra`)
######################################

.. currentmodule:: autofd.algebra

This module provides the number systems that generated derivatives are evaluated in.

.. autosummary::
    :toctree: generated/

    dual
    hyperdual

Both modules implement the :class:`autofd.typing.Algebra` protocol. Coefficients may
be floats, :mod:`mpmath` numbers, or NumPy scalars and arrays; in the latter case the
derivative is evaluated elementwise.

"""

from . import dual, hyperdual

__all__ = ["dual", "hyperdual"]
