# src/odestep/steppers/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence
import numpy as np

__all__ = ["Equation", "Method", "MethodMeta", "MethodEntry"]

# f(state, t) -> d(state[i])/dt for one component i
Equation = Callable[[np.ndarray, float], float]


class Method(Protocol):
    """
    Single-step method contract:

        increment = method(state, t, h, equations)

    `increment[i]` is added to `state[i]` to advance by `h`. Implementations
    MUST NOT mutate `state` and MUST return a new float64 array of the same
    length.
    """

    def __call__(
        self,
        state: np.ndarray,
        t: float,
        h: float,
        equations: Sequence[Equation],
    ) -> np.ndarray: ...


@dataclass(frozen=True)
class MethodMeta:
    """
    Public metadata for a single-step method.
    """
    name: str
    order: int = 1
    stages: int = 1                      # derivative passes per step
    family: str = ""
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodEntry:
    """A registered method: the callable plus its metadata."""
    fn: Method
    meta: MethodMeta
