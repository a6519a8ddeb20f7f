# src/odestep/runtime/status.py
from __future__ import annotations
from enum import IntEnum

__all__ = ["Status", "OK", "NAN_DETECTED", "DONE"]

class Status(IntEnum):
    """Stable exit codes for the steppers."""
    OK = 0              # internal (no exit): step accepted, proceed
    NAN_DETECTED = 3    # exit: state became non-finite, run stopped early
    DONE = 9            # exit: reached tmax

# Plain int constants, handy in comparisons and tests
OK: int = int(Status.OK)
NAN_DETECTED: int = int(Status.NAN_DETECTED)
DONE: int = int(Status.DONE)
