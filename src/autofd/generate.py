import ast
import dataclasses
import inspect
import logging
import textwrap
from collections.abc import Callable
from typing import Any, TextIO

from autofd.algebra import dual, hyperdual
from autofd.config import getcontext
from autofd.emit import GeneratedFunction, render
from autofd.errors import AutofdError, NotAFunction, ResolutionError
from autofd.expr import Order
from autofd.pyast import adapt
from autofd.resolve import ModuleResolver, ResolvedCallable, Resolver, signature_of
from autofd.rewrite import rewrite
from autofd.validate import check_signature, extract_return

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class FunctionSpec:
    """Function whose derivative is generated.

    Attributes
    ----------
    path : str
        Module path of the function.
    name : str
        Function name, or ``Type.method``.
    deriv : str, default=""
        Name of the generated function. If empty, the name is the current prefix
        followed by `name` with dots replaced by underscores.
    order : Order, default=Order.FIRST
    """

    path: str
    name: str
    deriv: str = ""
    order: Order = Order.FIRST

    @property
    def qualname(self) -> str:
        return f"{self.path}.{self.name}"

    def derivative_name(self) -> str:
        if self.deriv:
            return self.deriv

        return getcontext().prefix + self.name.replace(".", "_")


def generate_derivative(
    spec: FunctionSpec, resolved: ResolvedCallable, imports: bool = False
) -> str:
    """Return the source of the derivative of `resolved`.

    Parameters
    ----------
    spec : FunctionSpec
    resolved : ResolvedCallable
        Definition of the function named by `spec`.
    imports : bool, default=False
        If ``True``, the import of the target algebra precedes the definition.

    Returns
    -------
    str

    Raises
    ------
    DerivativeError
        If the function cannot be differentiated. See :mod:`autofd.errors` for the
        specific subclasses.

    Examples
    --------
    >>> from autofd.resolve import StringResolver
    >>> src = "def f(x: float) -> float:\\n    return 2 / (x * x)\\n"
    >>> spec = FunctionSpec("m", "f")
    >>> resolved = StringResolver({"m": src}).resolve("m", "f")
    >>> print(generate_derivative(spec, resolved), end="")
    def deriv_f(x: float) -> float:
        v = dual.mul(dual.Number(real=2), dual.inv((dual.mul(dual.Number(real=x, emag=1), dual.Number(real=x, emag=1)))))
        return v.emag
    """
    try:
        var = check_signature(resolved)
        value = extract_return(resolved)
        body = rewrite(adapt(value, resolved.source), var)
    except AutofdError as exc:
        exc.add_note(f"could not generate derivative of {spec.qualname}")
        raise

    logger.debug(f"rewrote {spec.qualname} w.r.t. {var} ({spec.order.name})")
    fun = GeneratedFunction(
        name=spec.derivative_name(),
        param=var,
        annotation=resolved.signature.params[0].annotation,  # type: ignore
        order=spec.order,
        body=body,
    )
    return render(fun, imports)


def derivative(
    sink: TextIO,
    spec: FunctionSpec,
    resolver: Resolver | None = None,
    imports: bool = False,
) -> None:
    """Write the source of the derivative of the function named by `spec` to `sink`.

    Nothing is written if an error occurs.

    Parameters
    ----------
    sink : TextIO
    spec : FunctionSpec
    resolver : Resolver | None, default=None
        Resolver locating the function. Defaults to a new :class:`ModuleResolver`.
    imports : bool, default=False
        If ``True``, the import of the target algebra precedes the definition.

    Raises
    ------
    ResolutionError
        If the function cannot be located.
    DerivativeError
        If the function cannot be differentiated.
    """
    if resolver is None:
        resolver = ModuleResolver()

    try:
        resolved = resolver.resolve(spec.path, spec.name)
    except ResolutionError as exc:
        exc.add_note(f"could not create derivative generator for {spec.qualname}")
        raise

    sink.write(generate_derivative(spec, resolved, imports))


def deriv(fun: Callable[[Any], Any], order: Order = Order.FIRST) -> Callable:
    """Return a compiled derivative of the function `fun`.

    The source of `fun` is rewritten once; the returned function evaluates the
    rewritten expression in the dual algebra without tracing `fun`.

    Parameters
    ----------
    fun : Callable
        Function defined with ``def`` that maps a float to a float. Bound methods are
        accepted.
    order : Order, default=Order.FIRST

    Returns
    -------
    Callable
        For :attr:`Order.FIRST`, a function returning the first derivative; for
        :attr:`Order.SECOND`, a function returning the pair of the first and second
        derivatives.

    Raises
    ------
    NotAFunction
        If the source of `fun` is unavailable or is not a ``def`` statement.
    DerivativeError
        If `fun` cannot be differentiated.

    Examples
    --------
    >>> import math
    >>> def f(x: float) -> float:
    ...     return x * math.sin(x)
    >>> df = deriv(f)
    >>> round(df(0.0), 6)
    0.0
    """
    receiver = inspect.ismethod(fun)
    target: Any = fun.__func__ if receiver else fun  # type: ignore

    try:
        source = textwrap.dedent(inspect.getsource(target))
    except (OSError, TypeError) as exc:
        raise NotAFunction(f"source of {fun!r} is unavailable") from exc

    node = ast.parse(source).body[0]

    if not isinstance(node, ast.FunctionDef):
        raise NotAFunction(f"{fun!r} is not defined by a def statement")

    resolved = ResolvedCallable(
        path=target.__module__,
        name=target.__qualname__,
        signature=signature_of(node, receiver),
        body=tuple(node.body),
        source=source,
    )
    spec = FunctionSpec(target.__module__, target.__qualname__, node.name, order)
    code = generate_derivative(spec, resolved)

    namespace = dict(target.__globals__)
    namespace.update(inspect.getclosurevars(target).nonlocals)
    namespace.update(dual=dual, hyperdual=hyperdual)
    exec(compile(code, f"<autofd:{spec.qualname}>", "exec"), namespace)
    return namespace[node.name]
