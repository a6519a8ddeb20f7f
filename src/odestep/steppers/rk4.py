# src/odestep/steppers/rk4.py
"""
RK4 (Runge-Kutta 4th order, explicit) single-step method.

    k0 = f(x_n, t)
    k1 = f(x_n + h/2 * k0, t + h/2)
    k2 = f(x_n + h/2 * k1, t + h/2)
    k3 = f(x_n + h * k2,   t + h)
    inc = h/6 * (k0 + 2*k1 + 2*k2 + k3)

The trial vector is a single buffer that each stage rewrites component by
component: equation i is evaluated first, then trial[i] is overwritten for
the next stage. Equations later in the list therefore already see the new
trial values of earlier components. Keep this order; reference results
depend on it bit for bit.
"""
from __future__ import annotations
from typing import Sequence
import numpy as np

from .base import Equation, MethodMeta

__all__ = ["rk4", "RK4_META"]

RK4_META = MethodMeta(
    name="rk4",
    order=4,
    stages=4,
    family="runge-kutta",
    aliases=("rk4_classic", "classical_rk4"),
)


def rk4(state: np.ndarray, t: float, h: float, equations: Sequence[Equation]) -> np.ndarray:
    n = state.size
    k0 = np.empty(n, dtype=np.float64)
    k1 = np.empty(n, dtype=np.float64)
    k2 = np.empty(n, dtype=np.float64)
    k3 = np.empty(n, dtype=np.float64)

    y_stage = np.empty(n, dtype=np.float64)

    # Stage 1 (evaluated on state, so no aliasing with y_stage)
    for i, f in enumerate(equations):
        k0[i] = f(state, t)
        y_stage[i] = state[i] + h / 2 * k0[i]

    # Stage 2
    for i, f in enumerate(equations):
        k1[i] = f(y_stage, t + h / 2)
        y_stage[i] = state[i] + h / 2 * k1[i]

    # Stage 3
    for i, f in enumerate(equations):
        k2[i] = f(y_stage, t + h / 2)
        y_stage[i] = state[i] + h * k2[i]

    # Stage 4
    for i, f in enumerate(equations):
        k3[i] = f(y_stage, t + h)

    kk = np.empty(n, dtype=np.float64)
    for i in range(n):
        kk[i] = h / 6 * (k0[i] + 2 * k1[i] + 2 * k2[i] + k3[i])
    return kk


# Auto-register on module import
def _auto_register():
    from .registry import register
    register(rk4, RK4_META)

_auto_register()
