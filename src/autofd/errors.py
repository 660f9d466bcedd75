"""
#############################
Errors (:mod:`autofd.errors`)
#############################

.. currentmodule:: autofd.errors

Exceptions raised while locating a function and generating its derivative. Every
exception is terminal for the request that raised it.

.. autosummary::
    :toctree: generated/

    AutofdError
    ResolutionError
    PackageNotFound
    SymbolNotFound
    NotAFunction
    NotANamedType
    DerivativeError
    SignatureMismatch
    NoReturnStatement
    MultipleReturnStatements
    NakedReturnUnsupported
    MultipleReturnValues
    UnsupportedStatement
    UnsupportedExpression

"""


class AutofdError(Exception):
    """Base class of all the exceptions raised by :mod:`autofd`.

    Parameters
    ----------
    message : str
    """

    message: str

    def __init__(self, message: str, *args, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.message = message


class ResolutionError(AutofdError):
    """Raised when a function cannot be located."""


class PackageNotFound(ResolutionError):
    """Raised when a module path cannot be found or parsed."""


class SymbolNotFound(ResolutionError):
    """Raised when a module or class has no attribute of the requested name."""


class NotAFunction(ResolutionError):
    """Raised when the requested name is bound to something other than a function."""


class NotANamedType(ResolutionError):
    """Raised when the receiver of ``Type.method`` is not a class."""


class DerivativeError(AutofdError):
    """Raised when a located function cannot be differentiated."""


class SignatureMismatch(DerivativeError):
    """Raised when a function is not of the form ``(x: float) -> float``."""


class NoReturnStatement(DerivativeError):
    """Raised when a function body has no return statement."""


class MultipleReturnStatements(DerivativeError):
    """Raised when a function body has more than one return statement."""


class NakedReturnUnsupported(DerivativeError):
    """Raised when the return statement has no value."""


class MultipleReturnValues(DerivativeError):
    """Raised when the return statement returns more than one value."""


class UnsupportedStatement(DerivativeError):
    """Raised when the return statement is nested inside control flow."""


class UnsupportedExpression(DerivativeError):
    """Raised when the returned expression is outside the differentiable grammar.

    Parameters
    ----------
    message : str
    construct : str, default=""
        The offending construct, as written in the source.
    """

    construct: str

    def __init__(self, message: str, construct: str = "", *args, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.construct = construct
