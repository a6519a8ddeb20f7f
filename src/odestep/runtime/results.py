# src/odestep/runtime/results.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence
import numpy as np

from .status import Status, DONE

__all__ = ["Snapshot", "Trajectory"]


@dataclass(frozen=True, eq=False)
class Snapshot:
    """
    One recorded row: time and an owned, read-only copy of the state.
    """
    t: float
    y: np.ndarray

    @classmethod
    def capture(cls, t: float, state: np.ndarray) -> Snapshot:
        y = np.array(state, dtype=np.float64, copy=True)
        y.flags.writeable = False
        return cls(t=float(t), y=y)


class Trajectory:
    """
    Append-only sequence of Snapshots in time order plus the exit status.

    Notes:
      - `T` has shape (n,); `Y` has shape (n_state, n), states are columns
        per record index. Both are fresh arrays built on access.
      - `status` is DONE for a run that reached tmax, NAN_DETECTED when the
        state turned non-finite (the offending state is not recorded).
    """

    def __init__(self, n_state: int, snapshots: Iterable[Snapshot] = ()):
        self.n_state = int(n_state)
        self._rows: List[Snapshot] = list(snapshots)
        self.status: Status = Status.OK

    # ---------------- recording ----------------

    def record(self, t: float, state: np.ndarray) -> Snapshot:
        snap = Snapshot.capture(t, state)
        self._rows.append(snap)
        return snap

    # ---------------- sequence protocol ----------------

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self._rows)

    def __getitem__(self, idx):
        return self._rows[idx]

    def __repr__(self) -> str:
        return (
            f"Trajectory(n={len(self)}, n_state={self.n_state}, "
            f"status={Status(self.status).name})"
        )

    # ---------------- views ----------------

    @property
    def T(self) -> np.ndarray:
        return np.array([row.t for row in self._rows], dtype=np.float64)

    @property
    def Y(self) -> np.ndarray:
        if not self._rows:
            return np.zeros((self.n_state, 0), dtype=np.float64)
        return np.stack([row.y for row in self._rows], axis=1)

    @property
    def last(self) -> Snapshot:
        if not self._rows:
            raise IndexError("trajectory is empty")
        return self._rows[-1]

    @property
    def ok(self) -> bool:
        """Return True when the stepper reached tmax (status == DONE)."""
        return int(self.status) == DONE

    # --------------- helpers (out of hot path) ---------------

    def derivatives(self, equations: Sequence) -> np.ndarray:
        """Evaluate the equations at every recorded row; shape (n_state, n)."""
        out = np.zeros((len(equations), len(self)), dtype=np.float64)
        for j, row in enumerate(self._rows):
            for i, f in enumerate(equations):
                out[i, j] = f(row.y, row.t)
        return out

    def format_table(
        self,
        state_names: Optional[Sequence[str]] = None,
        equations: Optional[Sequence] = None,
        *,
        rows: Optional[slice] = None,
        precision: int = 3,
        width: int = 9,
    ) -> str:
        """
        Render the trajectory as a fixed-width text table.

        Columns are 't', one per state and, when `equations` is given, one
        derivative column per state (named with a trailing apostrophe).
        """
        if state_names is None:
            state_names = [f"s{i}" for i in range(self.n_state)]
        if len(state_names) != self.n_state:
            raise ValueError(
                f"expected {self.n_state} state name(s); got {len(state_names)}"
            )
        header = ["t", *state_names]
        if equations is not None:
            header += [f"{name}'" for name in state_names]

        lines = [" ".join(f"{h:>{width}}" for h in header)]
        selected = self._rows if rows is None else self._rows[rows]
        for row in selected:
            values = [row.t, *row.y]
            if equations is not None:
                values += [f(row.y, row.t) for f in equations]
            lines.append(" ".join(f"{v:{width}.{precision}f}" for v in values))
        return "\n".join(lines)

    def to_pandas(self, state_names: Iterable[str] | None = None):
        """
        Build a tidy pandas.DataFrame (optional dependency).
        Columns: 't' and per-state columns.
        """
        try:
            import pandas as pd  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("pandas is required for Trajectory.to_pandas()") from e

        data = {"t": self.T}
        y = self.Y
        if state_names is None:
            state_names = [f"s{i}" for i in range(self.n_state)]
        for idx, name in enumerate(state_names):
            data[str(name)] = y[idx]
        return pd.DataFrame(data)
