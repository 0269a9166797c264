"""Forward-kinematics chain tests."""

from __future__ import annotations

import math

import numpy as np
import pytest

from robosim.kinematics.chain import (
    FRAME_NAMES,
    compute_chain,
    end_effector_position,
    gripper_reference_point,
    home_tip_position,
)
from robosim.kinematics.joints import JointAngles


def test_zero_pose_tip_is_straight_up():
    tip = end_effector_position(JointAngles())
    np.testing.assert_allclose(tip, [0.0, 8.1, 0.0], atol=1e-12)


def test_chain_has_seven_ordered_frames():
    chain = compute_chain(JointAngles())
    assert [f.name for f in chain.frames] == list(FRAME_NAMES)
    expected_heights = [1.1, 1.1, 5.1, 6.6, 6.8, 7.6, 8.1]
    np.testing.assert_allclose([p[1] for p in chain.positions], expected_heights)
    np.testing.assert_allclose(chain.frames[-1].position, chain.end_effector)


def test_compute_chain_is_deterministic():
    joints = JointAngles(0.3, -0.4, 0.9, 1.2, -0.7, 2.0)
    first = compute_chain(joints)
    second = compute_chain(joints)
    for a, b in zip(first.frames, second.frames):
        np.testing.assert_array_equal(a.position, b.position)
        np.testing.assert_array_equal(a.rotation, b.rotation)
    np.testing.assert_array_equal(first.end_effector, second.end_effector)


def test_shoulder_pitch_tips_arm_toward_negative_x():
    tip = end_effector_position(JointAngles(j2=math.pi / 2))
    np.testing.assert_allclose(tip, [-7.0, 1.1, 0.0], atol=1e-9)


def test_base_rotation_uses_inverted_sign():
    tip = end_effector_position(JointAngles(j1=math.pi / 2, j2=math.pi / 2))
    np.testing.assert_allclose(tip, [0.0, 1.1, -7.0], atol=1e-9)


def test_elbow_bend_moves_only_distal_links():
    chain = compute_chain(JointAngles(j3=math.pi / 2))
    np.testing.assert_allclose(chain.frames[2].position, [0.0, 5.1, 0.0], atol=1e-9)
    np.testing.assert_allclose(chain.end_effector, [-3.0, 5.1, 0.0], atol=1e-9)


def test_wrist_bend_pivots_at_wrist():
    tip = end_effector_position(JointAngles(j5=math.pi / 2))
    np.testing.assert_allclose(tip, [-1.3, 6.8, 0.0], atol=1e-9)


def test_roll_joints_do_not_move_tip_of_straight_arm():
    tip = end_effector_position(JointAngles(j4=1.0, j6=0.7))
    np.testing.assert_allclose(tip, [0.0, 8.1, 0.0], atol=1e-9)


def test_tip_orientation_matches_flange():
    chain = compute_chain(JointAngles(0.2, 0.3, 0.4, 0.5, 0.6, 0.7))
    np.testing.assert_array_equal(chain.frames[-1].rotation, chain.frames[-2].rotation)


def test_orientations_are_rotations():
    chain = compute_chain(JointAngles(0.2, -0.3, 1.4, -2.5, 0.6, 0.7))
    for rot in chain.rotations:
        np.testing.assert_allclose(rot @ rot.T, np.eye(3), atol=1e-12)
        assert np.linalg.det(rot) == pytest.approx(1.0)


def test_no_clamping_in_forward_kinematics():
    beyond = JointAngles(j2=3.0)
    assert not np.allclose(
        end_effector_position(beyond), end_effector_position(beyond.clamped())
    )


def test_home_tip_position_matches_home_joints():
    np.testing.assert_array_equal(
        home_tip_position(), compute_chain(JointAngles.home()).end_effector
    )
    assert home_tip_position()[2] == pytest.approx(0.0)


def test_gripper_reference_point_sits_below_tip():
    tip = np.array([1.0, 2.0, 3.0])
    ref = gripper_reference_point(tip)
    np.testing.assert_allclose(ref, [1.0, 1.8, 3.0])
    np.testing.assert_array_equal(tip, [1.0, 2.0, 3.0])


def test_joint_angles_round_trip_helpers():
    joints = JointAngles.from_array([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
    assert joints.get("j4") == pytest.approx(0.4)
    assert joints.replace(j4=1.0).j4 == 1.0
    with pytest.raises(KeyError):
        joints.get("j7")
    with pytest.raises(ValueError):
        JointAngles.from_array([0.0, 1.0])
