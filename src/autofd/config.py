"""
####################################
Configuration (:mod:`autofd.config`)
####################################

.. currentmodule:: autofd.config

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
from collections.abc import Iterable
from typing import Self


class Context:
    """Create a new context.

    Context holds the settings read by the generator. Each thread or task sees its
    own current context.

    Parameters
    ----------
    namespace : str, default="math"
        Name of the module whose functions and constants may be referenced by the
        differentiated expression.
    prefix : str, default="deriv\\_"
        Prefix of derivative names that are not given explicitly.
    float_types : Iterable[str], default=("float", "np.float64", "numpy.float64")
        Annotations accepted as a floating-point type.
    indent : str, default="    "
        Indentation of the emitted function body.
    """

    __slots__ = ("_namespace", "_prefix", "_float_types", "_indent")
    _namespace: str
    _prefix: str
    _float_types: tuple[str, ...]
    _indent: str

    def __init__(
        self,
        namespace: str = "math",
        prefix: str = "deriv_",
        float_types: Iterable[str] = ("float", "np.float64", "numpy.float64"),
        indent: str = "    ",
    ):
        if not namespace.isidentifier():
            raise ValueError(f"invalid namespace {namespace!r}")

        self._namespace = namespace
        self._prefix = prefix
        self._float_types = tuple(float_types)
        self._indent = indent

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def float_types(self) -> tuple[str, ...]:
        return self._float_types

    @property
    def indent(self) -> str:
        return self._indent

    def copy(self) -> Self:
        return self.__class__(
            self._namespace, self._prefix, self._float_types, self._indent
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(namespace={self._namespace!r}, "
            f"prefix={self._prefix!r}, float_types={self._float_types!r}, "
            f"indent={self._indent!r})"
        )

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("autofd")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    namespace: str | None = None,
    prefix: str | None = None,
    float_types: Iterable[str] | None = None,
    indent: str | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Keyword arguments override the corresponding settings of the copy.

    Examples
    --------
    >>> with localcontext(prefix="d_") as ctx:
    ...     ctx.prefix
    'd_'
    >>> getcontext().prefix
    'deriv_'
    """
    if ctx is None:
        ctx = getcontext()

    ctx = Context(
        ctx.namespace if namespace is None else namespace,
        ctx.prefix if prefix is None else prefix,
        ctx.float_types if float_types is None else float_types,
        ctx.indent if indent is None else indent,
    )
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
