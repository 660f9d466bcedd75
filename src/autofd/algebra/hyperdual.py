"""
###################################################
Hyperdual numbers (:mod:`autofd.algebra.hyperdual`)
###################################################

.. currentmodule:: autofd.algebra.hyperdual

This module provides hyperdual numbers, the target algebra of second-order
derivatives.

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
    r"""Hyperdual number
    :math:`a + b\epsilon_1 + c\epsilon_2 + d\epsilon_1\epsilon_2`, where
    :math:`\epsilon_1^2 = \epsilon_2^2 = 0` and :math:`\epsilon_1\epsilon_2 \neq 0`.

    Parameters
    ----------
    real : T, default=0
    e1mag : T, default=0
    e2mag : T, default=0
    e1e2mag : T, default=0

    Attributes
    ----------
    real : T
    e1mag : T
    e2mag : T
    e1e2mag : T
        Coefficient of the cross term. When both :math:`\epsilon_1` and
        :math:`\epsilon_2` of the variable are seeded with one, this is the second
        derivative.

    Examples
    --------
    >>> x = Number(real=3.0, e1mag=1, e2mag=1)
    >>> y = mul(mul(x, x), x)
    >>> y.real, y.e1mag, y.e1e2mag
    (27.0, 27.0, 18.0)
    """

    __slots__ = ("real", "e1mag", "e2mag", "e1e2mag")
    real: T
    e1mag: T
    e2mag: T
    e1e2mag: T

    def __init__(
        self,
        real: T | int = 0,
        e1mag: T | int = 0,
        e2mag: T | int = 0,
        e1e2mag: T | int = 0,
    ):
        self.real = real  # type: ignore
        self.e1mag = e1mag  # type: ignore
        self.e2mag = e2mag  # type: ignore
        self.e1e2mag = e1e2mag  # type: ignore

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(real={self.real!r}, e1mag={self.e1mag!r}, "
            f"e2mag={self.e2mag!r}, e1e2mag={self.e1e2mag!r})"
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return (
            other.real == self.real  # type: ignore
            and other.e1mag == self.e1mag  # type: ignore
            and other.e2mag == self.e2mag  # type: ignore
            and other.e1e2mag == self.e1e2mag  # type: ignore
        )

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
        return self.__class__(+self.real, +self.e1mag, +self.e2mag, +self.e1e2mag)

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
    return Number(
        x.real + y.real,
        x.e1mag + y.e1mag,
        x.e2mag + y.e2mag,
        x.e1e2mag + y.e1e2mag,
    )


def sub(x: Number, y: Number, /) -> Number:
    return Number(
        x.real - y.real,
        x.e1mag - y.e1mag,
        x.e2mag - y.e2mag,
        x.e1e2mag - y.e1e2mag,
    )


def mul(x: Number, y: Number, /) -> Number:
    return Number(
        x.real * y.real,
        x.real * y.e1mag + x.e1mag * y.real,
        x.real * y.e2mag + x.e2mag * y.real,
        x.real * y.e1e2mag
        + x.e1mag * y.e2mag
        + x.e2mag * y.e1mag
        + x.e1e2mag * y.real,
    )


def _apply(x: Number, f0: Any, f1: Any, f2: Any) -> Number:
    # f(a + b e1 + c e2 + d e1e2) = f(a) + f'(a) b e1 + f'(a) c e2
    #                              + (f'(a) d + f''(a) b c) e1e2
    return Number(
        f0,
        f1 * x.e1mag,
        f1 * x.e2mag,
        f1 * x.e1e2mag + f2 * x.e1mag * x.e2mag,
    )


def inv(x: Number, /) -> Number:
    """Multiplicative inverse of `x`.

    Raises
    ------
    ZeroDivisionError
        If the real part of `x` is zero.
    """
    a = x.real
    return _apply(x, 1 / a, -1 / a**2, 2 / a**3)


def neg(x: Number, /) -> Number:
    return Number(-x.real, -x.e1mag, -x.e2mag, -x.e1e2mag)


def _lift(
    fun: Callable[[Any], Any],
    deriv: Callable[[Any], Any],
    deriv2: Callable[[Any], Any],
):
    def result(x: Number, /) -> Number:
        a = x.real
        return _apply(x, fun(a), deriv(a), deriv2(a))

    result.__name__ = fun.__name__
    result.__qualname__ = fun.__name__
    result.__doc__ = f"Extension of ``{fun.__name__}`` to hyperdual numbers."
    return result


fabs = _lift(_el.fabs, _el.sign, lambda a: a * 0)
acos = _lift(
    _el.acos,
    lambda a: -1 / _el.sqrt(1 - a * a),
    lambda a: -a / _el.sqrt(1 - a * a) ** 3,
)
acosh = _lift(
    _el.acosh,
    lambda a: 1 / _el.sqrt(a * a - 1),
    lambda a: -a / _el.sqrt(a * a - 1) ** 3,
)
asin = _lift(
    _el.asin,
    lambda a: 1 / _el.sqrt(1 - a * a),
    lambda a: a / _el.sqrt(1 - a * a) ** 3,
)
asinh = _lift(
    _el.asinh,
    lambda a: 1 / _el.sqrt(a * a + 1),
    lambda a: -a / _el.sqrt(a * a + 1) ** 3,
)
atan = _lift(
    _el.atan,
    lambda a: 1 / (1 + a * a),
    lambda a: -2 * a / (1 + a * a) ** 2,
)
atanh = _lift(
    _el.atanh,
    lambda a: 1 / (1 - a * a),
    lambda a: 2 * a / (1 - a * a) ** 2,
)
cos = _lift(_el.cos, lambda a: -_el.sin(a), lambda a: -_el.cos(a))
cosh = _lift(_el.cosh, _el.sinh, _el.cosh)
exp = _lift(_el.exp, _el.exp, _el.exp)
log = _lift(_el.log, lambda a: 1 / a, lambda a: -1 / a**2)
sin = _lift(_el.sin, _el.cos, lambda a: -_el.sin(a))
sinh = _lift(_el.sinh, _el.cosh, _el.sinh)
sqrt = _lift(
    _el.sqrt,
    lambda a: 1 / (2 * _el.sqrt(a)),
    lambda a: -1 / (4 * _el.sqrt(a) ** 3),
)
tan = _lift(
    _el.tan,
    lambda a: 1 + _el.tan(a) ** 2,
    lambda a: 2 * _el.tan(a) * (1 + _el.tan(a) ** 2),
)
tanh = _lift(
    _el.tanh,
    lambda a: 1 - _el.tanh(a) ** 2,
    lambda a: -2 * _el.tanh(a) * (1 - _el.tanh(a) ** 2),
)


def pow(x: Number, y: Number, /) -> Number:
    """`x` raised to the power `y`.

    If `y` carries no infinitesimal part, the power rule is used so that negative
    bases with integral exponents are supported. Otherwise the result is
    ``exp(y * log(x))``.
    """
    if _iszero(y.e1mag) and _iszero(y.e2mag) and _iszero(y.e1e2mag):
        a, n = x.real, y.real
        f0 = _el.power(a, n)
        f1 = _el.scaled_power(n, a, n - 1)
        f2 = _el.scaled_power(n * (n - 1), a, n - 2)
        return _apply(x, f0, f1, f2)

    return exp(mul(y, log(x)))


def _iszero(value: Any) -> bool:
    return bool(np.all(value == 0))
