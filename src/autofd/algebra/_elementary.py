import math
from typing import Any

import mpmath
import mpmath.ctx_mp_python
import numpy as np


def _dispatch(name: str, npname: str, mpname: str):
    mathfun = getattr(math, name)
    npfun = getattr(np, npname)
    mpfun = getattr(mpmath, mpname)

    def result(x: Any, /) -> Any:
        match x:
            case mpmath.ctx_mp_python.mpnumeric():
                return mpfun(x)

            case np.ndarray() | np.generic():
                return npfun(x)

            case float() | int():
                return mathfun(x)

            case _:
                raise TypeError(f"{name} is not defined for {type(x).__name__}")

    result.__name__ = name
    result.__qualname__ = name
    return result


fabs = _dispatch("fabs", "abs", "fabs")
acos = _dispatch("acos", "arccos", "acos")
acosh = _dispatch("acosh", "arccosh", "acosh")
asin = _dispatch("asin", "arcsin", "asin")
asinh = _dispatch("asinh", "arcsinh", "asinh")
atan = _dispatch("atan", "arctan", "atan")
atanh = _dispatch("atanh", "arctanh", "atanh")
cos = _dispatch("cos", "cos", "cos")
cosh = _dispatch("cosh", "cosh", "cosh")
exp = _dispatch("exp", "exp", "exp")
log = _dispatch("log", "log", "log")
sin = _dispatch("sin", "sin", "sin")
sinh = _dispatch("sinh", "sinh", "sinh")
sqrt = _dispatch("sqrt", "sqrt", "sqrt")
tan = _dispatch("tan", "tan", "tan")
tanh = _dispatch("tanh", "tanh", "tanh")


def sign(x: Any, /) -> Any:
    """Sign of `x`. The sign of a zero follows its sign bit."""
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.mpf(-1) if x < 0 else mpmath.mpf(1)

        case np.ndarray() | np.generic():
            return np.copysign(1.0, x)

        case float() | int():
            return math.copysign(1.0, x)

        case _:
            raise TypeError(f"sign is not defined for {type(x).__name__}")


def power(x: Any, y: Any, /) -> Any:
    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, y:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpmath.power(x, y)

        case (np.ndarray() | np.generic(), _) | (_, np.ndarray() | np.generic()):
            return np.power(x, y)

        case (float() | int(), float() | int()):
            return math.pow(x, y)

        case _:
            raise TypeError(
                f"power is not defined for {type(x).__name__} and {type(y).__name__}"
            )


def scaled_power(c: Any, x: Any, y: Any, /) -> Any:
    """Return ``c * x**y``, or zero wherever `c` is zero.

    Terms of the power rule with a zero coefficient vanish at a zero base instead of
    raising.
    """
    if any(isinstance(v, np.ndarray | np.generic) for v in (c, x, y)):
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.where(c == 0, 0 * c, c * np.power(x, y))[()]

    if c == 0:
        return c

    return c * power(x, y)


def constants() -> dict[str, float]:
    """Return the named mathematical constants, each correctly rounded to a float."""
    with mpmath.workdps(40):
        return {
            "e": float(mpmath.e),
            "pi": float(mpmath.pi),
            "phi": float(mpmath.phi),
            "sqrt2": float(mpmath.sqrt(2)),
            "sqrte": float(mpmath.sqrt(mpmath.e)),
            "sqrtpi": float(mpmath.sqrt(mpmath.pi)),
            "sqrtphi": float(mpmath.sqrt(mpmath.phi)),
            "ln2": float(mpmath.ln2),
            "log2e": float(1 / mpmath.ln2),
            "ln10": float(mpmath.ln10),
            "log10e": float(1 / mpmath.ln10),
        }
