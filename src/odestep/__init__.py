# src/odestep/__init__.py
from __future__ import annotations

# Re-export frozen constants/types for stable imports
from odestep.runtime.status import Status, OK, NAN_DETECTED, DONE

from .errors import (
    OdestepError, DimensionMismatchError, StepSizeError,
    NonConvergentStepError, UnknownMethodError, ConfigError,
)
from .config import AdaptiveConfig, load_config
from .steppers import (
    MethodMeta, MethodEntry, register, get_method, registry, list_methods,
    euler, midpoint, rk4,
)
from .runtime.quality import quality
from .runtime.results import Snapshot, Trajectory
from .runtime.fixed import fixed_step
from .runtime.adaptive import adaptive_step


__all__ = [
    # Core entry points
    "fixed_step", "adaptive_step",
    # Built-in methods and the quality estimator
    "euler", "midpoint", "rk4", "quality",
    # Results
    "Snapshot", "Trajectory",
    # Status codes
    "Status", "OK", "NAN_DETECTED", "DONE",
    # Configuration
    "AdaptiveConfig", "load_config",
    # Method registry
    "MethodMeta", "MethodEntry", "register", "get_method", "registry",
    "list_methods", "get_method_info",
    # Errors
    "OdestepError", "DimensionMismatchError", "StepSizeError",
    "NonConvergentStepError", "UnknownMethodError", "ConfigError",
]


def get_method_info(name: str) -> MethodMeta:
    """Return the metadata of a registered method (names and aliases accepted).

    Example::

        >>> import odestep
        >>> odestep.get_method_info("rk2").name
        'midpoint'
    """
    from .steppers.registry import get_entry
    return get_entry(name).meta
