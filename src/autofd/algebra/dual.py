"""
#########################################
Dual numbers (:mod:`autofd.algebra.dual`)
#########################################

.. currentmodule:: autofd.algebra.dual

This module provides dual numbers, the target algebra of first-order derivatives.

.. autosummary::
    :toctree: generated/

    Number
    add
    sub
    mul
    inv
    neg

Elementary functions ``fabs``, ``acos``, ``acosh``, ``asin``, ``asinh``, ``atan``,
``atanh``, ``cos``, ``cosh``, ``exp``, ``log``, ``pow``, ``sin``, ``sinh``, ``sqrt``,
``tan`` and ``tanh`` are defined as well.

"""

from collections.abc import Callable
from typing import Any, Self

import numpy as np

from autofd.algebra import _elementary as _el
from autofd.typing import Scalar


class Number[T: Scalar]:
    r"""Dual number :math:`a + b\epsilon`, where :math:`\epsilon^2 = 0`.

    Parameters
    ----------
    real : T, default=0
    emag : T, default=0
        Coefficient of the infinitesimal :math:`\epsilon`.

    Attributes
    ----------
    real : T
    emag : T

    Examples
    --------
    >>> x = Number(real=3.0, emag=1)
    >>> y = mul(x, x)
    >>> y.real, y.emag
    (9.0, 6.0)
    """

    __slots__ = ("real", "emag")
    real: T
    emag: T

    def __init__(self, real: T | int = 0, emag: T | int = 0):
        self.real = real  # type: ignore
        self.emag = emag  # type: ignore

    def __repr__(self) -> str:
        return f"{type(self).__name__}(real={self.real!r}, emag={self.emag!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return other.real == self.real and other.emag == self.emag  # type: ignore

    def __add__(self, rhs: Self | T | int) -> Self:
        return add(self, _ensure(rhs))

    def __sub__(self, rhs: Self | T | int) -> Self:
        return sub(self, _ensure(rhs))

    def __mul__(self, rhs: Self | T | int) -> Self:
        return mul(self, _ensure(rhs))

    def __truediv__(self, rhs: Self | T | int) -> Self:
        return mul(self, inv(_ensure(rhs)))

    def __neg__(self) -> Self:
        return neg(self)

    def __pos__(self) -> Self:
        return self.__class__(+self.real, +self.emag)

    def __radd__(self, lhs: T | int) -> Self:
        return add(_ensure(lhs), self)

    def __rsub__(self, lhs: T | int) -> Self:
        return sub(_ensure(lhs), self)

    def __rmul__(self, lhs: T | int) -> Self:
        return mul(_ensure(lhs), self)

    def __rtruediv__(self, lhs: T | int) -> Self:
        return mul(_ensure(lhs), inv(self))


def _ensure(value: Any) -> Number:
    return value if isinstance(value, Number) else Number(value)


def add(x: Number, y: Number, /) -> Number:
    return Number(x.real + y.real, x.emag + y.emag)


def sub(x: Number, y: Number, /) -> Number:
    return Number(x.real - y.real, x.emag - y.emag)


def mul(x: Number, y: Number, /) -> Number:
    return Number(x.real * y.real, x.real * y.emag + x.emag * y.real)


def inv(x: Number, /) -> Number:
    """Multiplicative inverse of `x`.

    Raises
    ------
    ZeroDivisionError
        If the real part of `x` is zero.
    """
    return Number(1 / x.real, -x.emag / x.real**2)


def neg(x: Number, /) -> Number:
    return Number(-x.real, -x.emag)


def _lift(fun: Callable[[Any], Any], deriv: Callable[[Any], Any]):
    def result(x: Number, /) -> Number:
        return Number(fun(x.real), deriv(x.real) * x.emag)

    result.__name__ = fun.__name__
    result.__qualname__ = fun.__name__
    result.__doc__ = f"Extension of ``{fun.__name__}`` to dual numbers."
    return result


fabs = _lift(_el.fabs, _el.sign)
acos = _lift(_el.acos, lambda a: -1 / _el.sqrt(1 - a * a))
acosh = _lift(_el.acosh, lambda a: 1 / _el.sqrt(a * a - 1))
asin = _lift(_el.asin, lambda a: 1 / _el.sqrt(1 - a * a))
asinh = _lift(_el.asinh, lambda a: 1 / _el.sqrt(a * a + 1))
atan = _lift(_el.atan, lambda a: 1 / (1 + a * a))
atanh = _lift(_el.atanh, lambda a: 1 / (1 - a * a))
cos = _lift(_el.cos, lambda a: -_el.sin(a))
cosh = _lift(_el.cosh, _el.sinh)
exp = _lift(_el.exp, _el.exp)
log = _lift(_el.log, lambda a: 1 / a)
sin = _lift(_el.sin, _el.cos)
sinh = _lift(_el.sinh, _el.cosh)
sqrt = _lift(_el.sqrt, lambda a: 1 / (2 * _el.sqrt(a)))
tan = _lift(_el.tan, lambda a: 1 + _el.tan(a) ** 2)
tanh = _lift(_el.tanh, lambda a: 1 - _el.tanh(a) ** 2)


def pow(x: Number, y: Number, /) -> Number:
    """`x` raised to the power `y`.

    If `y` carries no infinitesimal part, the power rule is used so that negative
    bases with integral exponents are supported. Otherwise the result is
    ``exp(y * log(x))``.
    """
    if _iszero(y.emag):
        n = y.real
        deriv = _el.scaled_power(n, x.real, n - 1)
        return Number(_el.power(x.real, n), deriv * x.emag)

    return exp(mul(y, log(x)))


def _iszero(value: Any) -> bool:
    return bool(np.all(value == 0))
