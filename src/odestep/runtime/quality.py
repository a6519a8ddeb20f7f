# src/odestep/runtime/quality.py
from __future__ import annotations
import numpy as np

__all__ = ["quality"]


def quality(x_full: np.ndarray, x_half: np.ndarray, h: float) -> float:
    """
    Step-doubling quality measure: max_i |x_full[i] - x_half[i]| / h.

    A comparative signal for the step-size controller (local truncation
    error normalized by the step), not an absolute error bound. Returns
    0.0 for empty states.
    """
    q = 0.0
    for i in range(len(x_full)):
        diff = x_full[i] - x_half[i]
        if diff >= 0:
            c = diff / h
        else:
            c = -diff / h
        if c > q:
            q = c
    return float(q)
