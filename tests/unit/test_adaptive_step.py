# tests/unit/test_adaptive_step.py
"""
Adaptive driver (step doubling):

- growth when the quality is below the lower threshold (unbounded by default)
- opt-in max_step clamp, on entry and on growth
- steady step inside the threshold band
- shrinking with bounded retries, last try accepted
- advisory hmin: accepted silently, optional RuntimeWarning
- tmax bound, snapshot copies, restart from a recorded snapshot
- validation and failure modes
"""
import warnings

import numpy as np
import pytest

from odestep import (
    AdaptiveConfig, DimensionMismatchError, NonConvergentStepError, Status,
    StepSizeError, adaptive_step, euler, fixed_step, midpoint, rk4,
)
from odestep.runtime.adaptive import half_steps

ZERO = [lambda xx, t: 0.0]
STIFFISH = [lambda xx, t: -10.0 * xx[0]]


def test_step_doubles_without_bound():
    traj = adaptive_step(rk4, ZERO, [3.0], 0.0, 10.0, 0.01, 0.5)

    # h: 0.5 -> 1 -> 2 -> 4 -> 8 -> 16
    np.testing.assert_array_equal(traj.T, [0.0, 0.5, 1.5, 3.5, 7.5])
    np.testing.assert_array_equal(traj.Y[0], [3.0] * 5)
    assert traj.status == Status.DONE


def test_max_step_clamps_growth():
    cfg = AdaptiveConfig(max_step=1.0)
    traj = adaptive_step(rk4, ZERO, [3.0], 0.0, 10.0, 0.01, 0.5, config=cfg)

    expected = [0.0, 0.5] + [1.5 + i for i in range(9)]
    np.testing.assert_array_equal(traj.T, expected)


def test_max_step_clamps_initial_step():
    cfg = AdaptiveConfig(max_step=0.5)
    traj = adaptive_step(rk4, ZERO, [3.0], 0.0, 2.0, 0.01, 2.0, config=cfg)

    np.testing.assert_array_equal(traj.T, [0.0, 0.5, 1.0, 1.5, 2.0])


def test_quality_between_thresholds_keeps_step():
    """
    Euler on x' = -10x gives q = 25 h |x|: from h = 0.01, x = 1 it decays
    from 0.25 by a factor 0.9 per step, inside [0.01, 1.0] for the whole
    run, so every step is accepted at the same h.
    """
    cfg = AdaptiveConfig(q_lower=0.01, q_upper=1.0)
    traj = adaptive_step(euler, STIFFISH, [1.0], 0.0, 0.05, 0.001, 0.01, config=cfg)

    assert len(traj) >= 5
    assert traj.T[1] == 0.01
    np.testing.assert_allclose(np.diff(traj.T), 0.01)
    np.testing.assert_allclose(traj.Y[0], 0.9 ** np.arange(len(traj)))


def test_shrinks_and_accepts_last_try():
    """
    Euler on x' = -10x: x_full - x_half = -25 h^2 x, so q = 25 h |x|.
    From h = 1 every one of the 5 tries halves; the step taken is the
    fifth try, h = 1/16, and the next iteration starts from 1/32.
    """
    traj = adaptive_step(euler, STIFFISH, [1.0], 0.0, 0.1, 0.001, 1.0)

    assert traj.T[1] == 0.0625
    assert traj.Y[0, 1] == pytest.approx(1.0 - 10.0 * 0.0625)
    # second step: four more halvings from 1/32
    assert traj.T[2] - traj.T[1] == pytest.approx(1.0 / 512.0)


def test_max_tries_is_configurable():
    traj = adaptive_step(
        euler, STIFFISH, [1.0], 0.0, 1.0, 0.001, 1.0,
        config=AdaptiveConfig(max_tries=2),
    )
    assert traj.T[1] == 0.5


def test_below_hmin_accepted_silently():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        traj = adaptive_step(euler, STIFFISH, [1.0], 0.0, 2.0, 1.0, 0.5)

    # h never changes once below hmin, regardless of quality
    np.testing.assert_array_equal(traj.T, [0.0, 0.5, 1.0, 1.5, 2.0])
    np.testing.assert_allclose(traj.Y[0], [1.0, -4.0, 16.0, -64.0, 256.0])


def test_below_hmin_warning_is_opt_in():
    cfg = AdaptiveConfig(warn_below_min_step=True)
    with pytest.warns(RuntimeWarning, match="below hmin"):
        adaptive_step(euler, STIFFISH, [1.0], 0.0, 1.0, 1.0, 0.5, config=cfg)


def _oscillator():
    return [
        lambda xx, t: xx[1],
        lambda xx, t: -xx[0] - 0.4 * xx[1],
    ]


@pytest.mark.parametrize("method", [euler, midpoint, rk4], ids=lambda m: m.__name__)
def test_never_records_past_tmax(method):
    traj = adaptive_step(method, _oscillator(), [-0.5, 0.0], 0.0, 5.0, 0.01, 0.5)
    assert len(traj) > 1
    assert traj.T.max() <= 5.0
    assert np.all(np.diff(traj.T) > 0)


def test_snapshots_are_copies():
    x = np.array([-0.5, 0.0])
    traj = adaptive_step(rk4, _oscillator(), x, 0.0, 3.0, 0.01, 0.5)
    recorded = traj.Y.copy()

    # live vector was advanced in place
    assert not np.array_equal(x, [-0.5, 0.0])

    x[:] = 1234.0
    np.testing.assert_array_equal(traj.Y, recorded)
    np.testing.assert_array_equal(traj[0].y, [-0.5, 0.0])

    with pytest.raises(ValueError):
        traj[0].y[0] = 1.0


def test_half_steps_reuse_start_time():
    seen = []

    def f(xx, t):
        seen.append(t)
        return 1.0

    out = half_steps(euler, np.array([0.0]), 2.0, 0.5, [f])
    assert out[0] == pytest.approx(0.5)
    assert seen == [2.0, 2.0]


def test_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        adaptive_step(rk4, _oscillator(), [1.0], 0.0, 1.0, 0.01, 0.1)
    with pytest.raises(DimensionMismatchError):
        adaptive_step(rk4, _oscillator(), [[1.0, 0.0]], 0.0, 1.0, 0.01, 0.1)


@pytest.mark.parametrize(
    "hmin, h",
    [(0.01, 0.0), (0.01, -1.0), (-0.01, 0.1), (float("nan"), 0.1), (0.01, float("inf"))],
)
def test_rejects_bad_step_arguments(hmin, h):
    with pytest.raises(StepSizeError):
        adaptive_step(rk4, ZERO, [1.0], 0.0, 1.0, hmin, h)


def test_rejects_non_finite_span():
    with pytest.raises(StepSizeError):
        adaptive_step(rk4, ZERO, [1.0], 0.0, float("inf"), 0.01, 0.1)


def test_zero_hmin_is_allowed():
    traj = adaptive_step(rk4, ZERO, [1.0], 0.0, 1.0, 0.0, 0.5)
    np.testing.assert_array_equal(traj.T, [0.0, 0.5])


def test_time_cannot_advance():
    with pytest.raises(NonConvergentStepError):
        adaptive_step(rk4, ZERO, [1.0], 1e20, 2e20, 0.01, 1.0)


def test_stops_on_non_finite_state():
    odes = [lambda xx, t: float("nan") if t >= 1.0 else 0.0]
    traj = adaptive_step(euler, odes, [0.0], 0.0, 10.0, 0.01, 0.5)

    assert traj.status == Status.NAN_DETECTED
    np.testing.assert_array_equal(traj.T, [0.0, 0.5, 1.5])
    assert np.all(np.isfinite(traj.Y))


def test_accepts_method_name():
    a = adaptive_step("rk4", _oscillator(), [-0.5, 0.0], 0.0, 2.0, 0.01, 0.5)
    b = adaptive_step(rk4, _oscillator(), [-0.5, 0.0], 0.0, 2.0, 0.01, 0.5)
    np.testing.assert_array_equal(a.T, b.T)
    np.testing.assert_array_equal(a.Y, b.Y)


def test_restart_from_recorded_snapshot():
    first = adaptive_step(rk4, _oscillator(), [-0.5, 0.0], 0.0, 5.0, 0.01, 0.5)
    start = first.last
    saved = start.y.copy()

    resumed = adaptive_step(rk4, _oscillator(), start.y, start.t, 10.0, 0.01, 0.5)
    assert resumed.ok
    assert resumed[0].t == start.t
    np.testing.assert_array_equal(resumed[0].y, saved)
    assert resumed.T.max() <= 10.0

    fixed = fixed_step(rk4, _oscillator(), start.y, start.t, 10.0, 0.25)
    assert fixed.ok
    np.testing.assert_array_equal(fixed[0].y, saved)

    # the snapshot itself is left untouched
    np.testing.assert_array_equal(start.y, saved)
    np.testing.assert_array_equal(first.last.y, saved)
