"""
#############################
Typing (:mod:`autofd.typing`)
#############################

This module provides the protocols shared by the rewriter and the number systems it
targets.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

.. autoclass:: Algebra
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol, Self


class Scalar(Protocol):
    """Protocol for the coefficients of dual and hyperdual numbers.

    The derivative tables of :mod:`autofd.algebra` combine a coefficient with small
    integer constants on either side, as in ``1 / a`` or ``2 * a``, and raise it to
    integer powers, as in ``a**2``. Unary negation is used by ``neg``. Elementary
    functions are dispatched separately, on the concrete coefficient type.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __pow__(self, exponent: int) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...


class Algebra[T](Protocol):
    """Protocol for the module-level operations of a number system with
    infinitesimals.

    Code emitted by :mod:`autofd.emit` only ever calls these names, so any module
    providing them can stand in for :mod:`autofd.algebra.dual` or
    :mod:`autofd.algebra.hyperdual`. Division is expressed as ``mul(x, inv(y))``.
    """

    Number: type[T]

    def add(self, x: T, y: T, /) -> T: ...

    def sub(self, x: T, y: T, /) -> T: ...

    def mul(self, x: T, y: T, /) -> T: ...

    def inv(self, x: T, /) -> T: ...

    def neg(self, x: T, /) -> T: ...

    def fabs(self, x: T, /) -> T: ...

    def acos(self, x: T, /) -> T: ...

    def acosh(self, x: T, /) -> T: ...

    def asin(self, x: T, /) -> T: ...

    def asinh(self, x: T, /) -> T: ...

    def atan(self, x: T, /) -> T: ...

    def atanh(self, x: T, /) -> T: ...

    def cos(self, x: T, /) -> T: ...

    def cosh(self, x: T, /) -> T: ...

    def exp(self, x: T, /) -> T: ...

    def log(self, x: T, /) -> T: ...

    def pow(self, x: T, y: T, /) -> T: ...

    def sin(self, x: T, /) -> T: ...

    def sinh(self, x: T, /) -> T: ...

    def sqrt(self, x: T, /) -> T: ...

    def tan(self, x: T, /) -> T: ...

    def tanh(self, x: T, /) -> T: ...
