"""
##############################################
Forward-mode rewriting (:mod:`autofd.rewrite`)
##############################################

.. currentmodule:: autofd.rewrite

This module restates a scalar expression in the arithmetic of a dual algebra.

.. autosummary::
    :toctree: generated/

    rewrite
    FUNCTIONS
    CONSTANTS
    RESERVED

"""

import functools
import logging
from typing import Final

from autofd.algebra._elementary import constants
from autofd.config import getcontext
from autofd.errors import UnsupportedExpression
from autofd.expr import (
    Apply,
    BinaryOp,
    BinaryOperator,
    Call,
    DualExpression,
    Expression,
    Function,
    Group,
    Grouping,
    Identifier,
    Literal,
    NamespacedRef,
    Number,
    Order,
    UnaryOp,
    UnaryOperator,
)

logger = logging.getLogger(__name__)

FUNCTIONS: Final = frozenset(
    (
        "fabs",
        "acos",
        "acosh",
        "asin",
        "asinh",
        "atan",
        "atanh",
        "cos",
        "cosh",
        "exp",
        "log",
        "pow",
        "sin",
        "sinh",
        "sqrt",
        "tan",
        "tanh",
    )
)
"""Members of the math namespace that have a counterpart in the dual algebras."""

CONSTANTS: Final = frozenset(
    (
        "e",
        "pi",
        "phi",
        "sqrt2",
        "sqrte",
        "sqrtpi",
        "sqrtphi",
        "ln2",
        "log2e",
        "ln10",
        "log10e",
    )
)
"""Members of the math namespace that are replaced by their numeric value."""

RESERVED: Final = frozenset(x.algebra for x in Order)
"""Names the generated code uses for the number systems; expressions may not read
them."""

_ADD: Final = Function("add")
_SUB: Final = Function("sub")
_MUL: Final = Function("mul")
_INV: Final = Function("inv")
_POW: Final = Function("pow")
_MINUS_ONE: Final = Number("-1")


@functools.cache
def _constant_values() -> dict[str, str]:
    return {k: repr(v) for k, v in constants().items()}


def rewrite(expr: Expression, var: str) -> DualExpression:
    """Rewrite `expr` as an expression over a dual algebra.

    Occurrences of `var` become numbers whose infinitesimal parts are seeded with
    one; every other name and literal becomes a number with zero infinitesimal
    parts. Division is rewritten as multiplication by the inverse.

    Parameters
    ----------
    expr : Expression
    var : str
        Variable of differentiation.

    Returns
    -------
    DualExpression

    Raises
    ------
    UnsupportedExpression
        If `expr` reads a name in :data:`RESERVED`, references a name of a foreign
        namespace or a member of the math namespace without a counterpart, or calls
        something other than a function of the math namespace. Nothing is returned
        for a partially rewritten tree.

    Examples
    --------
    >>> from autofd.expr import BinaryOp, BinaryOperator, Identifier, Literal
    >>> rewrite(BinaryOp(BinaryOperator.DIV, Literal(2), Identifier("x")), "x")
    ... # doctest: +NORMALIZE_WHITESPACE
    Apply(func=Function(name='mul'), args=(Number(real='2', seeded=False),
          Apply(func=Function(name='inv'), args=(Number(real='x', seeded=True),))))
    """
    return _Rewriter(var, getcontext().namespace).visit(expr)


class _Rewriter:
    __slots__ = ("_var", "_namespace")
    _var: str
    _namespace: str

    def __init__(self, var: str, namespace: str):
        self._var = var
        self._namespace = namespace

    def visit(self, expr: Expression, callee: bool = False) -> DualExpression:
        match expr:
            case Literal(value=value):
                return Number(repr(value))

            case Identifier(name=name):
                if name in RESERVED:
                    raise UnsupportedExpression(
                        f"name {name} shadows the {name} number system", name
                    )

                return Number(name, seeded=name == self._var)

            case Grouping(inner=inner):
                return Group(self.visit(inner, callee))

            case UnaryOp(op=UnaryOperator.PLUS, operand=operand):
                return self.visit(operand)

            case UnaryOp(op=UnaryOperator.MINUS, operand=operand):
                return Apply(_MUL, (_MINUS_ONE, self.visit(operand)))

            case BinaryOp(op=op, left=left, right=right):
                return self._binary(op, self.visit(left), self.visit(right))

            case Call(callee=target, args=args):
                func = self.visit(target, callee=True)

                if not _iscallable(func):
                    name = _describe(target)
                    raise UnsupportedExpression(f"invalid call of {name}", name)

                return Apply(func, tuple(self.visit(x) for x in args))  # type: ignore

            case NamespacedRef(namespace=namespace, member=member):
                return self._member(expr, namespace, member, callee)

            case _:
                raise UnsupportedExpression(f"invalid expression {expr!r}", repr(expr))

    def _binary(
        self, op: BinaryOperator, left: DualExpression, right: DualExpression
    ) -> DualExpression:
        match op:
            case BinaryOperator.ADD:
                return Apply(_ADD, (left, right))

            case BinaryOperator.SUB:
                return Apply(_SUB, (left, right))

            case BinaryOperator.MUL:
                return Apply(_MUL, (left, right))

            case BinaryOperator.DIV:
                return Apply(_MUL, (left, Apply(_INV, (right,))))

            case BinaryOperator.POW:
                return Apply(_POW, (left, right))

            case _:
                raise UnsupportedExpression(f"invalid binary operator {op!r}", op.value)

    def _member(
        self, ref: NamespacedRef, namespace: str, member: str, callee: bool
    ) -> DualExpression:
        if namespace != self._namespace:
            logger.debug(f"{ref} is outside the {self._namespace} namespace")
            raise UnsupportedExpression(f"invalid selector expression {ref}", str(ref))

        if member in FUNCTIONS:
            if not callee:
                raise UnsupportedExpression(f"function {ref} must be called", str(ref))

            return Function(member)

        if member in CONSTANTS:
            return Number(_constant_values()[member])

        raise UnsupportedExpression(f"invalid selector expression {ref}", str(ref))


def _iscallable(expr: DualExpression) -> bool:
    match expr:
        case Function():
            return True

        case Group(inner=inner):
            return _iscallable(inner)

        case _:
            return False


def _describe(expr: Expression) -> str:
    match expr:
        case Identifier(name=name):
            return name

        case NamespacedRef():
            return str(expr)

        case Grouping(inner=inner):
            return f"({_describe(inner)})"

        case _:
            return type(expr).__name__
