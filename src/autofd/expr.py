"""
#####################################
Expression trees (:mod:`autofd.expr`)
#####################################

.. currentmodule:: autofd.expr

This module defines the closed grammar of differentiable expressions and the grammar
of their rewritten counterparts over a dual algebra.

Scalar expressions
==================

.. autosummary::
    :toctree: generated/

    Literal
    Identifier
    Grouping
    UnaryOp
    BinaryOp
    Call
    NamespacedRef
    UnaryOperator
    BinaryOperator

Rewritten expressions
=====================

.. autosummary::
    :toctree: generated/

    Number
    Function
    Apply
    Group

Differentiation order
=====================

.. autosummary::
    :toctree: generated/

    Order

"""

import dataclasses
import enum
from typing import assert_never


class UnaryOperator(enum.Enum):
    """Unary operator specifier.

    Attributes
    ----------
    PLUS
    MINUS
    """

    PLUS = "+"
    MINUS = "-"

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


class BinaryOperator(enum.Enum):
    """Binary operator specifier.

    Attributes
    ----------
    ADD
    SUB
    MUL
    DIV
    POW
    """

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "**"

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


@dataclasses.dataclass(frozen=True, slots=True)
class Literal:
    """Numeric literal."""

    value: int | float


@dataclasses.dataclass(frozen=True, slots=True)
class Identifier:
    """Plain name; either the variable of differentiation or a constant."""

    name: str


@dataclasses.dataclass(frozen=True, slots=True)
class Grouping:
    """Explicitly parenthesized expression."""

    inner: "Expression"


@dataclasses.dataclass(frozen=True, slots=True)
class UnaryOp:
    op: UnaryOperator
    operand: "Expression"


@dataclasses.dataclass(frozen=True, slots=True)
class BinaryOp:
    op: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclasses.dataclass(frozen=True, slots=True)
class Call:
    callee: "Expression"
    args: tuple["Expression", ...]


@dataclasses.dataclass(frozen=True, slots=True)
class NamespacedRef:
    """Reference to ``namespace.member``."""

    namespace: str
    member: str

    def __str__(self) -> str:
        return f"{self.namespace}.{self.member}"


type Expression = (
    Literal | Identifier | Grouping | UnaryOp | BinaryOp | Call | NamespacedRef
)


@dataclasses.dataclass(frozen=True, slots=True)
class Number:
    """Number of the target algebra.

    Attributes
    ----------
    real : str
        Source text of the real part.
    seeded : bool
        Whether the infinitesimal parts are set to one, marking the variable of
        differentiation. Otherwise they are zero.
    """

    real: str
    seeded: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class Function:
    """Function of the target algebra, such as ``mul`` or ``sin``."""

    name: str


@dataclasses.dataclass(frozen=True, slots=True)
class Apply:
    func: Function
    args: tuple["DualExpression", ...]


@dataclasses.dataclass(frozen=True, slots=True)
class Group:
    inner: "DualExpression"


type DualExpression = Number | Function | Apply | Group


class Order(enum.Enum):
    """Differentiation order.

    The order selects the target algebra, how the variable is seeded, and which
    coefficients of the result are returned.

    Attributes
    ----------
    FIRST
        Dual numbers; the first derivative is returned.
    SECOND
        Hyperdual numbers; the first and second derivatives are returned.
    """

    FIRST = 1
    SECOND = 2

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"

    @property
    def algebra(self) -> str:
        """Name of the module in :mod:`autofd.algebra` targeted by this order."""
        match self:
            case Order.FIRST:
                return "dual"

            case Order.SECOND:
                return "hyperdual"

            case _ as unreachable:
                assert_never(unreachable)

    @property
    def seeds(self) -> tuple[str, ...]:
        """Infinitesimal parts set to one for the variable of differentiation."""
        match self:
            case Order.FIRST:
                return ("emag",)

            case Order.SECOND:
                return ("e1mag", "e2mag")

            case _ as unreachable:
                assert_never(unreachable)

    @property
    def results(self) -> tuple[str, ...]:
        """Coefficients of the result holding the derivatives, lowest order first."""
        match self:
            case Order.FIRST:
                return ("emag",)

            case Order.SECOND:
                return ("e1mag", "e1e2mag")

            case _ as unreachable:
                assert_never(unreachable)

    def annotation(self, typename: str) -> str:
        """Return annotation of the generated function for the scalar `typename`."""
        match self:
            case Order.FIRST:
                return typename

            case Order.SECOND:
                return f"tuple[{typename}, {typename}]"

            case _ as unreachable:
                assert_never(unreachable)
