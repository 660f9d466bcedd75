import ast

import pytest

from autofd.errors import UnsupportedExpression
from autofd.expr import (
    BinaryOp,
    BinaryOperator,
    Call,
    Grouping,
    Identifier,
    Literal,
    NamespacedRef,
    UnaryOp,
    UnaryOperator,
)
from autofd.pyast import ParenIndex, adapt


def parse(source):
    return adapt(ast.parse(source, mode="eval").body, source)


def test_adapt():
    assert parse("x * x") == BinaryOp(
        BinaryOperator.MUL, Identifier("x"), Identifier("x")
    )
    assert parse("-x ** 2.5") == UnaryOp(
        UnaryOperator.MINUS, BinaryOp(BinaryOperator.POW, Identifier("x"), Literal(2.5))
    )
    assert parse("+x") == UnaryOp(UnaryOperator.PLUS, Identifier("x"))
    assert parse("math.pi") == NamespacedRef("math", "pi")
    assert parse("math.atan(x / 2)") == Call(
        NamespacedRef("math", "atan"),
        (BinaryOp(BinaryOperator.DIV, Identifier("x"), Literal(2)),),
    )


def test_grouping():
    assert parse("2 / (x * x)") == BinaryOp(
        BinaryOperator.DIV,
        Literal(2),
        Grouping(BinaryOp(BinaryOperator.MUL, Identifier("x"), Identifier("x"))),
    )
    assert parse("((x))") == Grouping(Grouping(Identifier("x")))
    assert parse("(x) - (1)") == BinaryOp(
        BinaryOperator.SUB, Grouping(Identifier("x")), Grouping(Literal(1))
    )


def test_grouping_call_arguments():
    x = Identifier("x")
    pow_ = NamespacedRef("math", "pow")

    assert parse("math.sin(x)") == Call(NamespacedRef("math", "sin"), (x,))
    assert parse("math.sin((x))") == Call(NamespacedRef("math", "sin"), (Grouping(x),))
    assert parse("math.pow(x, 2)") == Call(pow_, (x, Literal(2)))
    assert parse("math.pow((x), (2))") == Call(
        pow_, (Grouping(x), Grouping(Literal(2)))
    )
    assert parse("(math.sin)(x)") == Call(Grouping(NamespacedRef("math", "sin")), (x,))


def test_grouping_without_source():
    node = ast.parse("(x) * ((x))", mode="eval").body
    assert adapt(node) == BinaryOp(BinaryOperator.MUL, Identifier("x"), Identifier("x"))


def test_grouping_non_ascii():
    assert parse("é + (x)") == BinaryOp(
        BinaryOperator.ADD, Identifier("é"), Grouping(Identifier("x"))
    )


def test_grouping_multiline():
    source = (
        "def f(x: float) -> float:\n"
        "    return (\n"
        "        x\n"
        "        * (x + 1)\n"
        "    )\n"
    )
    tree = ast.parse(source)
    value = tree.body[0].body[0].value
    assert adapt(value, source) == Grouping(
        BinaryOp(
            BinaryOperator.MUL,
            Identifier("x"),
            Grouping(BinaryOp(BinaryOperator.ADD, Identifier("x"), Literal(1))),
        )
    )


def test_paren_index():
    source = "((x)) + y"
    node = ast.parse(source, mode="eval").body
    parens = ParenIndex(source)

    assert parens.count(node.left, node) == 2
    assert parens.count(node.right, node) == 0
    assert parens.count(node) == 0


@pytest.mark.parametrize(
    "source, construct",
    [
        ("x // 2", "x // 2"),
        ("x % 2", "x % 2"),
        ("x if x else 1", "x if x else 1"),
        ("True", "True"),
        ("'x'", "'x'"),
        ("1j", "1j"),
        ("x < 1", "x < 1"),
        ("~x", "~x"),
        ("math.pow(x, y=2)", "math.pow(x, y=2)"),
        ("math.sin(*x)", "math.sin(*x)"),
        ("a.b.c", "a.b.c"),
        ("x[0]", "x[0]"),
        ("x + (lambda: 1)()", "lambda: 1"),
    ],
)
def test_unsupported(source, construct):
    with pytest.raises(UnsupportedExpression) as excinfo:
        parse(source)

    assert excinfo.value.construct == construct
    assert excinfo.value.message.startswith("invalid expression")


def test_adapt_without_positions():
    node = ast.BinOp(ast.Name("x", ast.Load()), ast.Mult(), ast.Constant(2))
    assert adapt(node, "(x) * 2") == BinaryOp(
        BinaryOperator.MUL, Identifier("x"), Literal(2)
    )
