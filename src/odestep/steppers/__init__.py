from .base import Equation, Method, MethodMeta, MethodEntry
from .registry import register, get_method, get_entry, registry, resolve, list_methods

# Import concrete methods to trigger auto-registration
from .euler import euler
from .midpoint import midpoint
from .rk4 import rk4

__all__ = [
    "Equation", "Method", "MethodMeta", "MethodEntry",
    "register", "get_method", "get_entry", "registry", "resolve", "list_methods",
    "euler", "midpoint", "rk4",
]
