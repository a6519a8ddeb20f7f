# src/odestep/steppers/euler.py
"""
Euler (explicit, first order) single-step method.

One derivative evaluation per equation at the start of the interval.
"""
from __future__ import annotations
from typing import Sequence
import numpy as np

from .base import Equation, MethodMeta

__all__ = ["euler", "EULER_META"]

# NOTE: Never add NaN / Inf checks in the methods!
# The steppers guard the live state after every accepted step.

EULER_META = MethodMeta(
    name="euler",
    order=1,
    stages=1,
    family="euler",
    aliases=("fwd_euler", "forward_euler"),
)


def euler(state: np.ndarray, t: float, h: float, equations: Sequence[Equation]) -> np.ndarray:
    """
    Explicit Euler increment: inc_i = h * f_i(x_n, t_n)
    """
    n = state.size
    dd = np.empty(n, dtype=np.float64)
    for i, f in enumerate(equations):
        dd[i] = f(state, t)

    kk = np.empty(n, dtype=np.float64)
    for i in range(n):
        kk[i] = h * dd[i]
    return kk


# Auto-register on module import
def _auto_register():
    from .registry import register
    register(euler, EULER_META)

_auto_register()
