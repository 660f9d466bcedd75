"""Rendering of generated derivatives as Python source."""

import dataclasses
import logging
from typing import TextIO, assert_never

from autofd.config import getcontext
from autofd.expr import Apply, DualExpression, Function, Group, Number, Order

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class GeneratedFunction:
    """Derivative ready to be rendered.

    Attributes
    ----------
    name : str
        Name of the generated function.
    param : str
        Name of its parameter, the variable of differentiation.
    annotation : str
        Floating-point type of the parameter and of each returned derivative.
    order : Order
    body : DualExpression
        Rewritten expression.
    """

    name: str
    param: str
    annotation: str
    order: Order
    body: DualExpression


def render(fun: GeneratedFunction, imports: bool = False) -> str:
    """Return the source of `fun`.

    For :attr:`Order.FIRST` the generated function returns the first derivative; for
    :attr:`Order.SECOND` it returns the pair of the first and second derivatives.

    Parameters
    ----------
    fun : GeneratedFunction
    imports : bool, default=False
        If ``True``, the import of the target algebra precedes the definition.

    Examples
    --------
    >>> from autofd.expr import Apply, Function, Number
    >>> x = Number("x", seeded=True)
    >>> fun = GeneratedFunction("dsq", "x", "float", Order.FIRST,
    ...                         Apply(Function("mul"), (x, x)))
    >>> print(render(fun), end="")
    def dsq(x: float) -> float:
        v = dual.mul(dual.Number(real=x, emag=1), dual.Number(real=x, emag=1))
        return v.emag
    """
    indent = getcontext().indent
    order = fun.order
    local = _local_name(fun)
    results = ", ".join(f"{local}.{x}" for x in order.results)
    lines = [
        f"def {fun.name}({fun.param}: {fun.annotation}) -> "
        f"{order.annotation(fun.annotation)}:",
        f"{indent}{local} = {_render(fun.body, order)}",
        f"{indent}return {results}",
        "",
    ]

    if imports:
        lines[:0] = [f"from autofd.algebra import {order.algebra}", "", ""]

    return "\n".join(lines)


def emit(sink: TextIO, fun: GeneratedFunction, imports: bool = False) -> None:
    """Write the source of `fun` to `sink`.

    The source is rendered in full before anything is written.
    """
    text = render(fun, imports)
    logger.debug(f"writing {len(text)} characters for {fun.name}")
    sink.write(text)


def _render(expr: DualExpression, order: Order) -> str:
    algebra = order.algebra

    match expr:
        case Number(real=real, seeded=False):
            return f"{algebra}.Number(real={real})"

        case Number(real=real, seeded=True):
            seeds = ", ".join(f"{x}=1" for x in order.seeds)
            return f"{algebra}.Number(real={real}, {seeds})"

        case Function(name=name):
            return f"{algebra}.{name}"

        case Apply(func=func, args=args):
            rendered = ", ".join(_render(x, order) for x in args)
            return f"{_render(func, order)}({rendered})"

        case Group(inner=inner):
            return f"({_render(inner, order)})"

        case _ as unreachable:
            assert_never(unreachable)


def _local_name(fun: GeneratedFunction) -> str:
    # The result must not shadow a name read by the expression.
    taken = {fun.param, *_names(fun.body)}
    name = "v"

    while name in taken:
        name += "_"

    return name


def _names(expr: DualExpression) -> set[str]:
    match expr:
        case Number(real=real):
            return {real}

        case Function():
            return set()

        case Apply(args=args):
            return set().union(*(_names(x) for x in args))

        case Group(inner=inner):
            return _names(inner)

        case _ as unreachable:
            assert_never(unreachable)
