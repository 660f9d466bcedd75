"""
#########################################
Source resolution (:mod:`autofd.resolve`)
#########################################

.. currentmodule:: autofd.resolve

This module locates the definition of a function or method and returns its signature
and body. Modules are parsed, never imported, so locating a function has no side
effects beyond those of importing its parent packages.

.. autosummary::
    :toctree: generated/

    Resolver
    ModuleResolver
    StringResolver
    ResolvedCallable
    Signature
    Parameter

"""

import ast
import dataclasses
import importlib.util
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from autofd.errors import NotAFunction, NotANamedType, PackageNotFound, SymbolNotFound

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class Parameter:
    """Positional parameter.

    Attributes
    ----------
    name : str
    annotation : str | None
        Source text of the annotation, or ``None`` if the parameter is unannotated.
    """

    name: str
    annotation: str | None

    def __str__(self) -> str:
        if self.annotation is None:
            return self.name

        return f"{self.name}: {self.annotation}"


@dataclasses.dataclass(frozen=True, slots=True)
class Signature:
    """Signature of a function, the receiver of a method excluded.

    Attributes
    ----------
    params : tuple[Parameter, ...]
        Positional parameters.
    returns : str | None
        Source text of the return annotation.
    variadic : bool
        Whether the function also takes ``*args``, keyword-only parameters, or
        ``**kwargs``.
    """

    params: tuple[Parameter, ...]
    returns: str | None
    variadic: bool = False

    def __str__(self) -> str:
        params = ", ".join(str(x) for x in self.params)

        if self.variadic:
            params += ", ..." if params else "..."

        if self.returns is None:
            return f"({params})"

        return f"({params}) -> {self.returns}"


@dataclasses.dataclass(frozen=True, slots=True)
class ResolvedCallable:
    """Function located by a :class:`Resolver`.

    Attributes
    ----------
    path : str
        Module path.
    name : str
        Function name, or ``Type.method``.
    signature : Signature
    body : tuple[ast.stmt, ...]
    source : str
        Text the positions of the nodes in `body` refer to.
    """

    path: str
    name: str
    signature: Signature
    body: tuple[ast.stmt, ...]
    source: str


class Resolver(ABC):
    """Abstract base class for locating functions by module path and name."""

    __slots__ = ("_modules",)
    _modules: dict[str, tuple[ast.Module, str]]

    def __init__(self):
        self._modules = {}

    @abstractmethod
    def load(self, path: str) -> tuple[str, str]:
        """Return the source of the module `path` and the file name to report.

        Raises
        ------
        PackageNotFound
            If the module does not exist or has no Python source.
        """
        raise NotImplementedError

    def resolve(self, path: str, name: str) -> ResolvedCallable:
        """Locate the function or method `name` in the module `path`.

        Parameters
        ----------
        path : str
            Module path, such as ``"package.module"``.
        name : str
            Either a module-level function name or ``"Type.method"``.

        Raises
        ------
        PackageNotFound
            If the module cannot be found or parsed.
        SymbolNotFound
            If the module or class has no such name.
        NotAFunction
            If the name is not bound to a ``def`` statement.
        NotANamedType
            If the receiver of ``Type.method`` is not a class.
        """
        tree, source = self._parse(path)

        if "." in name:
            owner, method = name.split(".", 1)
            obj = _lookup(tree.body, owner)

            if obj is None:
                raise SymbolNotFound(f"could not find {owner} in package {path!r}")

            if not isinstance(obj, ast.ClassDef):
                raise NotANamedType(
                    f"object {owner} in package {path!r} is not a named type "
                    f"({_describe(obj)})"
                )

            node = _lookup(obj.body, method)

            if node is None:
                raise SymbolNotFound(f"could not find {name} in package {path!r}")

            names = {_decorator(x) for x in _decorators(node)}
            receiver = "staticmethod" not in names
        else:
            node = _lookup(tree.body, name)

            if node is None:
                raise SymbolNotFound(f"could not find {name} in package {path!r}")

            receiver = False

        if not isinstance(node, ast.FunctionDef):
            raise NotAFunction(
                f"object {name} in package {path!r} is not a func ({_describe(node)})"
            )

        logger.debug(f"resolved {path}.{name} at line {node.lineno}")
        return ResolvedCallable(
            path=path,
            name=name,
            signature=signature_of(node, receiver),
            body=tuple(node.body),
            source=source,
        )

    def _parse(self, path: str) -> tuple[ast.Module, str]:
        if (cached := self._modules.get(path)) is not None:
            return cached

        source, filename = self.load(path)

        try:
            tree = ast.parse(source, filename=filename)
        except SyntaxError as exc:
            raise PackageNotFound(
                f"could not load package {path!r}: {exc.msg} ({filename}:{exc.lineno})"
            ) from exc

        self._modules[path] = (tree, source)
        return tree, source


class ModuleResolver(Resolver):
    """Resolver reading modules from the import path.

    The module itself is not executed; its source is read through the loader found
    by :func:`importlib.util.find_spec`.
    """

    __slots__ = ()

    def load(self, path: str) -> tuple[str, str]:
        try:
            spec = importlib.util.find_spec(path)
        except (ImportError, ValueError) as exc:
            raise PackageNotFound(f"could not find package {path!r}") from exc

        if spec is None or spec.loader is None or not spec.has_location:
            raise PackageNotFound(f"could not find package {path!r}")

        get_source = getattr(spec.loader, "get_source", None)
        source = get_source(spec.name) if get_source is not None else None

        if source is None:
            raise PackageNotFound(f"package {path!r} has no Python source")

        return source, spec.origin or path


class StringResolver(Resolver):
    """Resolver reading modules from memory.

    Parameters
    ----------
    sources : Mapping[str, str]
        Mapping from module paths to module sources.

    Examples
    --------
    >>> src = "def f(x: float) -> float:\\n    return x * x\\n"
    >>> resolver = StringResolver({"m": src})
    >>> fun = resolver.resolve("m", "f")
    >>> str(fun.signature)
    '(x: float) -> float'
    """

    __slots__ = ("_sources",)
    _sources: dict[str, str]

    def __init__(self, sources: Mapping[str, str]):
        super().__init__()
        self._sources = dict(sources)

    def load(self, path: str) -> tuple[str, str]:
        if (source := self._sources.get(path)) is None:
            raise PackageNotFound(f"could not find package {path!r}")

        return source, f"<{path}>"


def _lookup(body: list[ast.stmt], name: str) -> ast.stmt | None:
    # The last binding in a block wins, as it would at run time.
    result: ast.stmt | None = None

    for stmt in body:
        if name in _bindings(stmt):
            result = stmt

    return result


def _bindings(stmt: ast.stmt) -> set[str]:
    match stmt:
        case ast.FunctionDef(name=name) | ast.AsyncFunctionDef(name=name):
            return {name}

        case ast.ClassDef(name=name):
            return {name}

        case ast.Assign(targets=targets):
            return {x.id for x in targets if isinstance(x, ast.Name)}

        case ast.AnnAssign(target=ast.Name(id=name)):
            return {name}

        case ast.Import(names=names):
            return {x.asname or x.name.split(".")[0] for x in names}

        case ast.ImportFrom(names=names):
            return {x.asname or x.name for x in names}

        case _:
            return set()


def _describe(node: ast.stmt) -> str:
    match node:
        case ast.FunctionDef():
            return "function"

        case ast.AsyncFunctionDef():
            return "coroutine function"

        case ast.ClassDef():
            return "class"

        case ast.Import() | ast.ImportFrom():
            return "import"

        case _:
            return "variable"


def _decorators(node: ast.stmt) -> list[ast.expr]:
    if isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef):
        return node.decorator_list

    return []


def _decorator(node: ast.expr) -> str:
    match node:
        case ast.Name(id=name):
            return name

        case ast.Attribute(attr=attr):
            return attr

        case ast.Call(func=func):
            return _decorator(func)

        case _:
            return ""


def signature_of(node: ast.FunctionDef, receiver: bool = False) -> Signature:
    """Return the signature of `node`, without its first parameter if `receiver`."""
    args = node.args
    positional = [*args.posonlyargs, *args.args]

    if receiver:
        positional = positional[1:]

    params = tuple(Parameter(x.arg, _annotation(x.annotation)) for x in positional)
    variadic = (
        args.vararg is not None or args.kwarg is not None or len(args.kwonlyargs) > 0
    )
    return Signature(params, _annotation(node.returns), variadic)


def _annotation(node: ast.expr | None) -> str | None:
    if node is None:
        return None

    # String annotations are written as if they were not quoted.
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value.strip()

    return ast.unparse(node)
