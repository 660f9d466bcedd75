import math

import numpy as np
import pytest

from autofd.algebra import hyperdual

POINTS = {
    "fabs": -0.7,
    "acos": 0.3,
    "acosh": 1.7,
    "asin": 0.3,
    "asinh": 0.7,
    "atan": 0.7,
    "atanh": 0.3,
    "cos": 0.7,
    "cosh": 0.7,
    "exp": 0.7,
    "log": 1.3,
    "sin": 0.7,
    "sinh": 0.7,
    "sqrt": 1.3,
    "tan": 0.7,
    "tanh": 0.7,
}


def seed(a):
    return hyperdual.Number(real=a, e1mag=1, e2mag=1)


def test_mul():
    x = seed(3.0)
    y = hyperdual.mul(hyperdual.mul(x, x), x)
    assert y == hyperdual.Number(27.0, 27.0, 27.0, 18.0)


def test_inv():
    y = hyperdual.inv(seed(2.0))
    assert pytest.approx(y.real) == 0.5
    assert pytest.approx(y.e1mag) == -0.25
    assert pytest.approx(y.e2mag) == -0.25
    assert pytest.approx(y.e1e2mag) == 0.25


def test_add_sub_neg():
    x = hyperdual.Number(1.0, 2.0, 3.0, 4.0)
    y = hyperdual.Number(4.0, 3.0, 2.0, 1.0)

    assert hyperdual.add(x, y) == hyperdual.Number(5.0, 5.0, 5.0, 5.0)
    assert hyperdual.sub(x, y) == hyperdual.Number(-3.0, -1.0, 1.0, 3.0)
    assert hyperdual.neg(x) == hyperdual.Number(-1.0, -2.0, -3.0, -4.0)
    assert x - 1 == hyperdual.Number(0.0, 2.0, 3.0, 4.0)


@pytest.mark.parametrize("name", sorted(POINTS))
def test_elementary(name):
    fun = getattr(math, name)
    a = POINTS[name]
    h = 1e-4
    y = getattr(hyperdual, name)(seed(a))
    d1 = (fun(a + h) - fun(a - h)) / (2 * h)
    d2 = (fun(a + h) - 2 * fun(a) + fun(a - h)) / h**2

    assert pytest.approx(y.real) == fun(a)
    assert pytest.approx(y.e1mag, 1e-6) == d1
    assert y.e1mag == y.e2mag
    assert pytest.approx(y.e1e2mag, 1e-5, abs=1e-6) == d2


def test_chain():
    # f(x) = exp(x) / (1 + x^2)
    a = 0.8
    x = seed(a)
    y = hyperdual.mul(
        hyperdual.exp(x),
        hyperdual.inv(hyperdual.add(hyperdual.Number(1), hyperdual.mul(x, x))),
    )
    d1 = math.exp(a) * (1 - a) ** 2 / (1 + a * a) ** 2
    assert pytest.approx(y.e1mag) == d1

    h = 1e-4
    f = lambda t: math.exp(t) / (1 + t * t)  # noqa: E731
    assert pytest.approx(y.e1e2mag, 1e-5) == (f(a + h) - 2 * f(a) + f(a - h)) / h**2


def test_pow():
    y = hyperdual.pow(seed(-2.0), hyperdual.Number(3))
    assert y.real == pytest.approx(-8.0)
    assert y.e1mag == pytest.approx(12.0)
    assert y.e1e2mag == pytest.approx(-12.0)

    # d^2/dx^2 x^x = x^x ((log x + 1)^2 + 1/x)
    x = seed(2.0)
    y = hyperdual.pow(x, x)
    assert y.e1e2mag == pytest.approx(4 * ((math.log(2) + 1) ** 2 + 0.5))


def test_numpy():
    a = np.array([0.2, 0.4])
    x = hyperdual.Number(a, np.ones_like(a), np.ones_like(a))
    y = hyperdual.sin(x)

    np.testing.assert_allclose(y.e1mag, np.cos(a))
    np.testing.assert_allclose(y.e1e2mag, -np.sin(a))


def test_pow_zero_base():
    y = hyperdual.pow(seed(0.0), hyperdual.Number(1))
    assert y == hyperdual.Number(0.0, 1.0, 1.0, 0.0)

    y = hyperdual.pow(seed(0.0), hyperdual.Number(2))
    assert y.e1mag == 0
    assert y.e1e2mag == pytest.approx(2.0)

    a = np.array([0.0, 3.0])
    x = hyperdual.Number(a, np.ones_like(a), np.ones_like(a))
    y = hyperdual.pow(x, hyperdual.Number(1))
    np.testing.assert_array_equal(y.e1mag, [1.0, 1.0])
    np.testing.assert_array_equal(y.e1e2mag, [0.0, 0.0])
