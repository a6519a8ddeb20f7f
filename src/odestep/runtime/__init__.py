from .status import Status, OK, NAN_DETECTED, DONE
from .quality import quality
from .results import Snapshot, Trajectory
from .fixed import fixed_step
from .adaptive import adaptive_step

__all__ = [
    "Status", "OK", "NAN_DETECTED", "DONE",
    "quality", "Snapshot", "Trajectory",
    "fixed_step", "adaptive_step",
]
