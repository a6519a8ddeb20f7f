# src/odestep/steppers/midpoint.py
"""
Explicit midpoint (RK2) single-step method.

    d   = f(x_n, t_n)
    x_m = x_n + h/2 * d
    inc = h * f(x_m, t_n + h/2)

All first-pass derivatives are taken before the half-step state is built.
"""
from __future__ import annotations
from typing import Sequence
import numpy as np

from .base import Equation, MethodMeta

__all__ = ["midpoint", "MIDPOINT_META"]

MIDPOINT_META = MethodMeta(
    name="midpoint",
    order=2,
    stages=2,
    family="runge-kutta",
    aliases=("rk2", "rk2_midpoint"),
)


def midpoint(state: np.ndarray, t: float, h: float, equations: Sequence[Equation]) -> np.ndarray:
    n = state.size
    dd = np.empty(n, dtype=np.float64)

    for i, f in enumerate(equations):
        dd[i] = f(state, t)

    x_mid = np.empty(n, dtype=np.float64)
    for i in range(n):
        x_mid[i] = state[i] + dd[i] * h / 2

    for i, f in enumerate(equations):
        dd[i] = f(x_mid, t + h / 2)

    kk = np.empty(n, dtype=np.float64)
    for i in range(n):
        kk[i] = h * dd[i]
    return kk


# Auto-register on module import
def _auto_register():
    from .registry import register
    register(midpoint, MIDPOINT_META)

_auto_register()
