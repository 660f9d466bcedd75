import ast

import pytest

from autofd.config import localcontext
from autofd.errors import (
    MultipleReturnStatements,
    MultipleReturnValues,
    NakedReturnUnsupported,
    NoReturnStatement,
    SignatureMismatch,
    UnsupportedStatement,
)
from autofd.resolve import StringResolver
from autofd.validate import check_signature, extract_return


def resolve(source, name="f"):
    return StringResolver({"m": source}).resolve("m", name)


@pytest.mark.parametrize(
    "header",
    [
        "def f(x: float) -> float:",
        "def f(t: float, /) -> float:",
        "def f(x: 'float') -> 'float':",
        "def f(x: np.float64) -> np.float64:",
    ],
)
def test_signature(header):
    fun = resolve(f"{header}\n    return 1\n")
    assert check_signature(fun) == fun.signature.params[0].name


@pytest.mark.parametrize(
    "header",
    [
        "def f(x: float, y: float) -> float:",
        "def f() -> float:",
        "def f(x: float) -> int:",
        "def f(x: int) -> int:",
        "def f(x) -> float:",
        "def f(x: float):",
        "def f(x: float, *args) -> float:",
        "def f(x: float, *, k: float) -> float:",
        "def f(x: float, **kwargs) -> float:",
        "def f(x: np.float64) -> float:",
        "def f(dual: float) -> float:",
        "def f(hyperdual: float) -> float:",
    ],
)
def test_signature_mismatch(header):
    fun = resolve(f"{header}\n    return 1\n")

    with pytest.raises(SignatureMismatch, match="invalid function signature for f"):
        check_signature(fun)


def test_signature_method():
    source = "class T:\n    def f(self, x: float) -> float:\n        return x\n"
    assert check_signature(resolve(source, "T.f")) == "x"


def test_signature_float_types():
    fun = resolve("def f(x: Real) -> Real:\n    return x\n")

    with pytest.raises(SignatureMismatch):
        check_signature(fun)

    with localcontext(float_types=("Real",)):
        assert check_signature(fun) == "x"


def test_extract_return():
    fun = resolve("def f(x: float) -> float:\n    y = 2\n    return x * x\n")
    value = extract_return(fun)

    assert isinstance(value, ast.BinOp)
    assert ast.unparse(value) == "x * x"


@pytest.mark.parametrize(
    "body, exc, message",
    [
        ("pass", NoReturnStatement, "could not find a return statement in f"),
        (
            "if x > 0:\n        return x\n    return -x",
            MultipleReturnStatements,
            "can not handle functions with multiple return statements",
        ),
        ("return", NakedReturnUnsupported, "naked returns not supported"),
        ("return x, x", MultipleReturnValues, "too many return values"),
        (
            "for i in range(2):\n        return x",
            UnsupportedStatement,
            "nested in control flow",
        ),
    ],
)
def test_extract_return_errors(body, exc, message):
    fun = resolve(f"def f(x: float) -> float:\n    {body}\n")

    with pytest.raises(exc, match=message):
        extract_return(fun)


def test_extract_return_nested_function():
    source = (
        "def f(x: float) -> float:\n"
        "    def g(y):\n"
        "        return y\n"
        "    return g(x)\n"
    )

    with pytest.raises(MultipleReturnStatements):
        extract_return(resolve(source))
