"""CCD inverse-kinematics tests."""

from __future__ import annotations

import numpy as np
import pytest

from robosim.kinematics.chain import end_effector_position
from robosim.kinematics.ik import solve_ik
from robosim.kinematics.joints import JointAngles
from robosim.utils.constants import JOINT_LIMITS, JOINT_NAMES


def _distance(joints: JointAngles, target: np.ndarray) -> float:
    return float(np.linalg.norm(end_effector_position(joints) - target))


def _random_joints(rng: np.random.Generator) -> JointAngles:
    return JointAngles(
        **{name: rng.uniform(*JOINT_LIMITS[name]) for name in JOINT_NAMES}
    )


def test_reachable_target_converges_monotonically():
    target = np.array([-1.8, 7.2, 0.0])
    joints = JointAngles.home()
    distances = [_distance(joints, target)]
    for _ in range(20):
        joints = solve_ik(target, joints, 5)
        distances.append(_distance(joints, target))

    for before, after in zip(distances, distances[1:]):
        assert after <= before + 1e-9
    assert distances[-1] < 0.01


def test_results_stay_within_limits():
    rng = np.random.default_rng(7)
    for _ in range(25):
        start = _random_joints(rng)
        target = rng.uniform([-12.0, -5.0, -12.0], [12.0, 15.0, 12.0])
        result = solve_ik(target, start, 5)
        assert result.within_limits()


def test_out_of_range_input_is_clamped():
    wild = JointAngles(j1=10.0, j2=-10.0, j3=10.0, j5=10.0)
    result = solve_ik([2.0, 4.0, 1.0], wild, 3)
    assert result.within_limits()


def test_j6_never_changes():
    rng = np.random.default_rng(3)
    for _ in range(10):
        start = _random_joints(rng).replace(j6=0.7)
        target = rng.uniform([-6.0, 0.0, -6.0], [6.0, 8.0, 6.0])
        assert solve_ik(target, start, 5).j6 == 0.7


def test_input_configuration_is_untouched():
    start = JointAngles.home()
    snapshot = start.as_array()
    solve_ik([3.0, 3.0, 1.0], start, 5)
    np.testing.assert_array_equal(start.as_array(), snapshot)


def test_already_at_target_returns_same_angles():
    start = JointAngles(0.1, 0.2, 0.3, 0.0, -0.2, 0.0)
    target = end_effector_position(start)
    assert solve_ik(target, start, 5) == start


def test_unreachable_target_is_best_effort():
    target = np.array([20.0, 1.0, 0.0])
    start = JointAngles.home()
    result = solve_ik(target, start, 10)
    assert np.all(np.isfinite(result.as_array()))
    assert result.within_limits()
    assert _distance(result, target) <= _distance(start, target)


def test_degenerate_target_on_base_axis_yields_finite_angles():
    result = solve_ik([0.0, 1.1, 0.0], JointAngles(), 5)
    assert np.all(np.isfinite(result.as_array()))
    assert result.within_limits()


def test_base_rotation_turns_toward_side_target():
    # Tip starts in the x/y plane; a target off to +z needs a base turn.
    start = JointAngles.home()
    target = np.array([0.0, 7.0, 2.5])
    result = solve_ik(target, start, 5)
    assert result.j1 != pytest.approx(start.j1)
    assert _distance(result, target) < _distance(start, target)


def test_zero_iterations_is_a_no_op():
    start = JointAngles.home()
    assert solve_ik([4.0, 1.0, 0.0], start, 0) == start


def test_out_of_range_j6_passes_through_unchanged():
    start = JointAngles(j2=5.0, j6=4.0)
    result = solve_ik([2.0, 4.0, 1.0], start, 3)
    assert result.j6 == 4.0
    assert -np.pi / 2 <= result.j2 <= np.pi / 2
