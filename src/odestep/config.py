# src/odestep/config.py
from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

try:  # pragma: no cover - Python >=3.11
    import tomllib  # type: ignore
except Exception:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from odestep.errors import ConfigError

__all__ = ["AdaptiveConfig", "load_config", "INLINE_PREFIX"]

INLINE_PREFIX = "inline:"


@dataclass(frozen=True)
class AdaptiveConfig:
    """
    Runtime configuration for the adaptive stepper.

    Defaults reproduce the classic step-doubling controller:
    halve on q > 0.005, double on q < 0.0005, at most 5 tries per step,
    no upper bound on the step and silent acceptance below hmin.
    """
    max_tries: int = 5
    q_upper: float = 0.005               # above: shrink and retry
    q_lower: float = 0.0005              # below: grow and accept
    shrink: float = 0.5
    grow: float = 2.0
    max_step: Optional[float] = None     # upper bound on h; None keeps doubling unbounded
    warn_below_min_step: bool = False
    nan_guard: bool = True

    def __post_init__(self):
        if isinstance(self.max_tries, bool) or not isinstance(self.max_tries, int) or self.max_tries < 1:
            raise ConfigError(f"max_tries must be a positive integer; got {self.max_tries!r}")
        for name in ("q_upper", "q_lower", "shrink", "grow"):
            value = getattr(self, name)
            if not _is_real(value) or not math.isfinite(value) or value <= 0.0:
                raise ConfigError(f"{name} must be a positive finite number; got {value!r}")
        if self.q_lower > self.q_upper:
            raise ConfigError(
                f"q_lower ({self.q_lower}) must not exceed q_upper ({self.q_upper})"
            )
        if self.shrink >= 1.0:
            raise ConfigError(f"shrink must be < 1; got {self.shrink}")
        if self.grow < 1.0:
            raise ConfigError(f"grow must be >= 1; got {self.grow}")
        if self.max_step is not None:
            if not _is_real(self.max_step) or not math.isfinite(self.max_step) or self.max_step <= 0.0:
                raise ConfigError(f"max_step must be a positive finite number or None; got {self.max_step!r}")
        for name in ("warn_below_min_step", "nan_guard"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a boolean; got {getattr(self, name)!r}")


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _read_source(source: Union[str, Path]) -> dict:
    if isinstance(source, str) and source.lstrip().startswith(INLINE_PREFIX):
        text = source.lstrip()[len(INLINE_PREFIX):]
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid inline TOML: {e}") from e

    path = Path(source)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def load_config(
    source: Union[str, Path, Mapping[str, Any], None] = None,
    *,
    base: Optional[AdaptiveConfig] = None,
) -> AdaptiveConfig:
    """
    Build an AdaptiveConfig from TOML or a mapping.

    Args:
        source: path to a TOML file, TOML text prefixed with ``inline:``,
            a mapping, or None for defaults. Values are read from the
            ``[adaptive]`` table when present, otherwise from the top level.
        base: config to override (defaults to ``AdaptiveConfig()``).

    Raises:
        ConfigError: unreadable TOML, unknown keys or invalid values.
    """
    config = base if base is not None else AdaptiveConfig()
    if source is None:
        return config

    if isinstance(source, Mapping):
        data = dict(source)
    else:
        data = _read_source(source)

    if "adaptive" in data:
        table = data["adaptive"]
        if not isinstance(table, Mapping):
            raise ConfigError("[adaptive] must be a table")
        data = dict(table)

    known = {f.name for f in fields(AdaptiveConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(
            f"Unknown adaptive config key(s): {', '.join(unknown)}. "
            f"Valid keys: {', '.join(sorted(known))}"
        )

    updates = dict(data)
    # TOML has no null; a non-positive max_step means "unbounded"
    if "max_step" in updates and _is_real(updates["max_step"]) and updates["max_step"] <= 0:
        updates["max_step"] = None
    for name in ("q_upper", "q_lower", "shrink", "grow", "max_step"):
        if name in updates and _is_real(updates[name]):
            updates[name] = float(updates[name])

    return dataclasses.replace(config, **updates)
