import math
import re

import pytest

from autofd.config import localcontext
from autofd.errors import UnsupportedExpression
from autofd.expr import (
    Apply,
    BinaryOp,
    BinaryOperator,
    Call,
    Function,
    Group,
    Grouping,
    Identifier,
    Literal,
    NamespacedRef,
    Number,
    UnaryOp,
    UnaryOperator,
)
from autofd.rewrite import CONSTANTS, FUNCTIONS, rewrite

X = Identifier("x")
SEEDED = Number("x", seeded=True)


def test_product():
    expr = BinaryOp(BinaryOperator.MUL, X, X)
    assert rewrite(expr, "x") == Apply(Function("mul"), (SEEDED, SEEDED))


def test_quotient():
    expr = BinaryOp(
        BinaryOperator.DIV, Literal(2), Grouping(BinaryOp(BinaryOperator.MUL, X, X))
    )
    assert rewrite(expr, "x") == Apply(
        Function("mul"),
        (
            Number("2"),
            Apply(Function("inv"), (Group(Apply(Function("mul"), (SEEDED, SEEDED))),)),
        ),
    )


def test_call():
    expr = BinaryOp(
        BinaryOperator.ADD,
        Call(NamespacedRef("math", "sin"), (X,)),
        Call(NamespacedRef("math", "pow"), (X, Literal(3))),
    )
    assert rewrite(expr, "x") == Apply(
        Function("add"),
        (
            Apply(Function("sin"), (SEEDED,)),
            Apply(Function("pow"), (SEEDED, Number("3"))),
        ),
    )


def test_seeding():
    expr = BinaryOp(BinaryOperator.SUB, Identifier("a"), X)
    assert rewrite(expr, "x") == Apply(Function("sub"), (Number("a"), SEEDED))
    assert rewrite(expr, "a") == Apply(
        Function("sub"), (Number("a", seeded=True), Number("x"))
    )


def test_literals():
    assert rewrite(Literal(2), "x") == Number("2")
    assert rewrite(Literal(0.5), "x") == Number("0.5")
    assert rewrite(Literal(1e-07), "x") == Number("1e-07")


def test_unary():
    assert rewrite(UnaryOp(UnaryOperator.PLUS, X), "x") == SEEDED
    assert rewrite(UnaryOp(UnaryOperator.MINUS, X), "x") == Apply(
        Function("mul"), (Number("-1"), SEEDED)
    )


def test_power():
    expr = BinaryOp(BinaryOperator.POW, X, Literal(2))
    assert rewrite(expr, "x") == Apply(Function("pow"), (SEEDED, Number("2")))


def test_constants():
    assert rewrite(NamespacedRef("math", "pi"), "x") == Number(repr(math.pi))
    assert rewrite(NamespacedRef("math", "e"), "x") == Number(repr(math.e))
    assert rewrite(NamespacedRef("math", "sqrt2"), "x") == Number(repr(math.sqrt(2)))
    assert len(CONSTANTS) == 11


def test_functions():
    for name in FUNCTIONS:
        expr = Call(NamespacedRef("math", name), (X,))
        assert rewrite(expr, "x") == Apply(Function(name), (SEEDED,))


def test_grouped_callee():
    expr = Call(Grouping(NamespacedRef("math", "cos")), (X,))
    assert rewrite(expr, "x") == Apply(Group(Function("cos")), (SEEDED,))


def test_namespace():
    expr = Call(NamespacedRef("m", "sin"), (X,))

    with localcontext(namespace="m"):
        assert rewrite(expr, "x") == Apply(Function("sin"), (SEEDED,))

        with pytest.raises(UnsupportedExpression):
            rewrite(Call(NamespacedRef("math", "sin"), (X,)), "x")


@pytest.mark.parametrize(
    "expr, message",
    [
        (
            Call(NamespacedRef("np", "sin"), (X,)),
            "invalid selector expression np.sin",
        ),
        (
            Call(NamespacedRef("math", "floor"), (X,)),
            "invalid selector expression math.floor",
        ),
        (
            NamespacedRef("math", "tau"),
            "invalid selector expression math.tau",
        ),
        (
            BinaryOp(BinaryOperator.ADD, NamespacedRef("math", "sin"), X),
            "function math.sin must be called",
        ),
        (
            Call(Identifier("g"), (X,)),
            "invalid call of g",
        ),
        (
            Call(NamespacedRef("math", "pi"), (X,)),
            "invalid call of math.pi",
        ),
        (
            Call(Grouping(Literal(2)), (X,)),
            "invalid call of (Literal)",
        ),
        (
            Identifier("dual"),
            "name dual shadows the dual number system",
        ),
    ],
)
def test_unsupported(expr, message):
    with pytest.raises(UnsupportedExpression, match=re.escape(message)):
        rewrite(BinaryOp(BinaryOperator.MUL, X, expr), "x")
