"""Gates run on a resolved function before its return expression is rewritten."""

import ast
import logging

from autofd.config import getcontext
from autofd.errors import (
    MultipleReturnStatements,
    MultipleReturnValues,
    NakedReturnUnsupported,
    NoReturnStatement,
    SignatureMismatch,
    UnsupportedStatement,
)
from autofd.resolve import ResolvedCallable
from autofd.rewrite import RESERVED

logger = logging.getLogger(__name__)


def check_signature(fun: ResolvedCallable) -> str:
    """Check that `fun` maps one floating-point number to one of the same type.

    Returns
    -------
    str
        Name of the parameter, which is the variable of differentiation.

    Raises
    ------
    SignatureMismatch
        If `fun` has not exactly one positional parameter, if the parameter and the
        return value are not annotated with the same floating-point type, or if the
        parameter is named after a number system.
    """
    sig = fun.signature
    float_types = getcontext().float_types

    if (
        len(sig.params) != 1
        or sig.variadic
        or sig.params[0].annotation not in float_types
        or sig.returns != sig.params[0].annotation
        or sig.params[0].name in RESERVED
    ):
        logger.debug(f"signature of {fun.name} is {sig}")
        raise SignatureMismatch(f"invalid function signature for {fun.name}")

    return sig.params[0].name


def extract_return(fun: ResolvedCallable) -> ast.expr:
    """Return the sole value returned by `fun`.

    Raises
    ------
    NoReturnStatement
        If the body has no return statement.
    MultipleReturnStatements
        If the body has more than one return statement.
    NakedReturnUnsupported
        If the return statement has no value.
    MultipleReturnValues
        If the return statement returns a tuple.
    UnsupportedStatement
        If the return statement is nested in another statement.
    """
    returns = [
        node
        for stmt in fun.body
        for node in ast.walk(stmt)
        if isinstance(node, ast.Return)
    ]

    match len(returns):
        case 0:
            raise NoReturnStatement(f"could not find a return statement in {fun.name}")

        case 1:
            pass

        case _:
            raise MultipleReturnStatements(
                f"can not handle functions with multiple return statements ({fun.name})"
            )

    ret = returns[0]

    match ret.value:
        case None:
            raise NakedReturnUnsupported(f"naked returns not supported ({fun.name})")

        case ast.Tuple(elts=elts) if len(elts) > 1:
            raise MultipleReturnValues(f"too many return values ({fun.name})")

        case value:
            pass

    if not any(stmt is ret for stmt in fun.body):
        raise UnsupportedStatement(
            f"return statement of {fun.name} is nested in control flow"
        )

    logger.debug(f"{fun.name} returns {ast.unparse(value)}")
    return value
