# src/odestep/runtime/guards.py
from __future__ import annotations

import math
from typing import Callable, Sequence
import numpy as np

from odestep.errors import DimensionMismatchError, StepSizeError
from .jit import jit_compile

__all__ = [
    "allfinite1d", "get_guard", "as_state", "check_dimensions",
    "check_time_span", "check_step",
]


def _allfinite1d_impl(x: np.ndarray) -> bool:
    for i in range(x.size):
        if not math.isfinite(x[i]):
            return False
    return True


allfinite1d: Callable[[np.ndarray], bool] = _allfinite1d_impl
_allfinite1d_jit: Callable[[np.ndarray], bool] | None = None  # compiled lazily


def get_guard(jit: bool = False) -> Callable[[np.ndarray], bool]:
    """Return the Python or numba flavour of the finite-state guard."""
    global _allfinite1d_jit
    if not jit:
        return _allfinite1d_impl
    if _allfinite1d_jit is None:
        _allfinite1d_jit = jit_compile(_allfinite1d_impl, jit=True)
    return _allfinite1d_jit


def as_state(state) -> np.ndarray:
    """
    Return the live float64 state vector.

    A writeable 1D float64 ndarray is returned as-is (the caller keeps a
    handle on the vector the stepper mutates). Read-only arrays, such as
    Snapshot.y, and anything else are copied into a new array.
    """
    if isinstance(state, np.ndarray) and state.dtype == np.float64 and state.flags.writeable:
        y = state
    else:
        y = np.array(state, dtype=np.float64)
    if y.ndim != 1:
        raise DimensionMismatchError(f"state must be a flat 1D vector; got shape {y.shape}")
    return y


def check_dimensions(y: np.ndarray, equations: Sequence) -> None:
    """Fail fast when the equation set does not match the state length."""
    n_eq = len(equations)
    if n_eq != y.size:
        raise DimensionMismatchError(
            f"state has {y.size} component(s) but {n_eq} equation(s) were given"
        )


def check_time_span(t0: float, tmax: float) -> tuple[float, float]:
    t0, tmax = float(t0), float(tmax)
    if not (math.isfinite(t0) and math.isfinite(tmax)):
        raise StepSizeError(f"t0 and tmax must be finite; got t0={t0!r}, tmax={tmax!r}")
    return t0, tmax


def check_step(h: float, name: str = "h", *, allow_zero: bool = False) -> float:
    """Validate a step-size argument and return it as float."""
    h = float(h)
    if not math.isfinite(h):
        raise StepSizeError(f"{name} must be finite; got {h!r}")
    if h < 0.0 or (h == 0.0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise StepSizeError(f"{name} must be {bound}; got {h!r}")
    return h
