# src/odestep/runtime/fixed.py
"""
Fixed-step driver.

Records the state at T = t0, t0 + h, ... while T <= tmax, applying one
method increment after each record. No error control.
"""
from __future__ import annotations
from typing import Sequence, Union

from odestep.errors import NonConvergentStepError
from odestep.steppers.base import Equation, Method
from odestep.steppers.registry import resolve
from .guards import as_state, check_dimensions, check_step, check_time_span, get_guard
from .results import Trajectory
from .status import Status

__all__ = ["fixed_step"]


def fixed_step(
    method: Union[Method, str],
    equations: Sequence[Equation],
    state,
    t0: float,
    tmax: float,
    h: float,
    *,
    nan_guard: bool = True,
    jit: bool = False,
) -> Trajectory:
    """
    Integrate `equations` from t0 to tmax with constant step h.

    Parameters:
        method: single-step method callable or registered name ("rk4", ...).
        equations: equation i computes d(state[i])/dt as f(state, t).
        state: initial state; a writeable float64 ndarray is mutated in place,
            anything else (lists, read-only snapshots) is copied first.
        t0, tmax: time span; T = tmax is included when reached exactly.
        h: step size (> 0).
        nan_guard: stop with Status.NAN_DETECTED when the state turns non-finite.
        jit: compile the finite guard with numba when available.

    Returns:
        Trajectory with one snapshot per visited time.
    """
    step_fn = resolve(method)
    y = as_state(state)
    check_dimensions(y, equations)
    t0, tmax = check_time_span(t0, tmax)
    h = check_step(h, "h")
    allfinite = get_guard(jit) if nan_guard else None

    traj = Trajectory(y.size)
    T = t0
    while T <= tmax:
        kk = step_fn(y, T, h, equations)

        traj.record(T, y)

        y += kk

        if allfinite is not None and not allfinite(y):
            traj.status = Status.NAN_DETECTED
            return traj

        T_next = T + h
        if T_next == T:
            raise NonConvergentStepError(T, h, "step too small to advance time")
        T = T_next

    traj.status = Status.DONE
    return traj
