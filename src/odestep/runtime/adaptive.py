# src/odestep/runtime/adaptive.py
"""
Adaptive driver with step-doubling error control.

Each outer iteration tries at most `max_tries` step sizes. For every try
one full step of size h is compared with two successive half steps:

    q = max_i |x_full[i] - x_half[i]| / h

then, in priority order:

    h < hmin        accept h as is (no error, no warning by default)
    q > q_upper     h *= shrink, retry
    q < q_lower     h *= grow, accept the step taken with the old h
    otherwise       accept

The state is recorded at T, time advances by the h used for the accepted
try and the increment of that try is applied. When the tries run out the
last computed step is accepted.
"""
from __future__ import annotations
import math
import warnings
from typing import Optional, Sequence, Union

import numpy as np

from odestep.config import AdaptiveConfig
from odestep.errors import NonConvergentStepError
from odestep.steppers.base import Equation, Method
from odestep.steppers.registry import resolve
from .guards import as_state, check_dimensions, check_step, check_time_span, get_guard
from .quality import quality
from .results import Trajectory
from .status import Status

__all__ = ["adaptive_step", "half_steps"]


def half_steps(
    step_fn: Method,
    y: np.ndarray,
    t: float,
    h: float,
    equations: Sequence[Equation],
) -> np.ndarray:
    """
    Advance a copy of `y` by two successive steps of size h/2.

    Both half steps are evaluated at time `t`; only the state carries over
    from the first to the second.
    """
    x_half = np.array(y, dtype=np.float64, copy=True)
    for _ in range(2):
        x_half += step_fn(x_half, t, h / 2, equations)
    return x_half


def adaptive_step(
    method: Union[Method, str],
    equations: Sequence[Equation],
    state,
    t0: float,
    tmax: float,
    hmin: float,
    h: float,
    *,
    config: Optional[AdaptiveConfig] = None,
    jit: bool = False,
) -> Trajectory:
    """
    Integrate `equations` from t0 to tmax, adapting the step size.

    Parameters:
        method: single-step method callable or registered name ("rk4", ...).
        equations: equation i computes d(state[i])/dt as f(state, t).
        state: initial state; a writeable float64 ndarray is mutated in place,
            anything else (lists, read-only snapshots) is copied first.
        t0, tmax: time span; no snapshot is recorded past tmax.
        hmin: advisory minimum step (>= 0). Once h drops below it the
            controller stops shrinking and accepts the step.
        h: initial step size (> 0), clamped to config.max_step when set.
        config: controller settings, see AdaptiveConfig.
        jit: compile the finite guard with numba when available.

    Returns:
        Trajectory with one snapshot per accepted step.

    Raises:
        DimensionMismatchError: len(equations) != len(state).
        StepSizeError: invalid h, hmin, t0 or tmax.
        NonConvergentStepError: the step size collapsed to zero, overflowed,
            or no longer advances time.
    """
    cfg = config if config is not None else AdaptiveConfig()
    step_fn = resolve(method)
    y = as_state(state)
    check_dimensions(y, equations)
    t0, tmax = check_time_span(t0, tmax)
    hmin = check_step(hmin, "hmin", allow_zero=True)
    h = check_step(h, "h")
    if cfg.max_step is not None and h > cfg.max_step:
        h = cfg.max_step
    allfinite = get_guard(jit) if cfg.nan_guard else None

    traj = Trajectory(y.size)
    T = t0
    H = h
    kk_full = None

    while T <= tmax:
        for _ in range(cfg.max_tries):
            kk_full = step_fn(y, T, h, equations)
            x_full = y + kk_full
            x_half = half_steps(step_fn, y, T, h, equations)

            q = quality(x_full, x_half, h)

            # h actually used for this outer iteration
            H = h

            if h < hmin:
                if cfg.warn_below_min_step:
                    warnings.warn(
                        f"step size {h!r} below hmin={hmin!r} at t={T!r}; "
                        f"accepting step with quality {q:.3g}",
                        RuntimeWarning,
                        stacklevel=2,
                    )
                break
            elif q > cfg.q_upper:
                h *= cfg.shrink
            elif q < cfg.q_lower:
                h *= cfg.grow
                if cfg.max_step is not None and h > cfg.max_step:
                    h = cfg.max_step
                break
            else:
                break

        if not (h > 0.0 and math.isfinite(h)):
            raise NonConvergentStepError(T, h, "step size is no longer positive and finite")

        traj.record(T, y)

        T_next = T + H
        if T_next == T:
            raise NonConvergentStepError(T, H, "step too small to advance time")
        T = T_next

        y += kk_full

        if allfinite is not None and not allfinite(y):
            traj.status = Status.NAN_DETECTED
            return traj

    traj.status = Status.DONE
    return traj
