from .config import Context, getcontext, localcontext, setcontext
from .expr import Order
from .generate import FunctionSpec, deriv, derivative, generate_derivative
from .resolve import ModuleResolver, Resolver, StringResolver

__all__ = [
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "Order",
    "FunctionSpec",
    "deriv",
    "derivative",
    "generate_derivative",
    "ModuleResolver",
    "Resolver",
    "StringResolver",
]
