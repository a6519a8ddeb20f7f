# src/odestep/errors.py
from __future__ import annotations

__all__ = [
    "OdestepError",
    "DimensionMismatchError",
    "StepSizeError",
    "NonConvergentStepError",
    "UnknownMethodError",
    "ConfigError",
]

class OdestepError(Exception):
    """Base error for the odestep package."""


class DimensionMismatchError(OdestepError):
    """Raised when the state is not a flat vector matching the equation set."""
    def __init__(self, message: str):
        super().__init__(f"Dimension mismatch: {message}")


class StepSizeError(OdestepError):
    """Raised when step-size or time-span arguments are unusable."""
    def __init__(self, message: str):
        super().__init__(message)


class NonConvergentStepError(OdestepError):
    """Raised when the step size collapses or time can no longer advance."""
    def __init__(self, t: float, h: float, reason: str):
        self.t = t
        self.h = h
        msg = f"Non-convergent step at t={t!r} (h={h!r}): {reason}"
        super().__init__(msg)


class UnknownMethodError(OdestepError, KeyError):
    """Raised when a method name is not in the registry."""
    def __init__(self, name: str, known: list[str]):
        self.name = name
        self.known = known
        msg = f"Unknown method: {name!r}\n"
        if known:
            msg += "Registered methods:\n"
            for k in known:
                msg += f"  - {k}\n"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0])


class ConfigError(OdestepError):
    """Raised when configuration is malformed or invalid."""
    def __init__(self, message: str):
        super().__init__(message)
