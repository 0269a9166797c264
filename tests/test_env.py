"""Gymnasium environment tests."""

from __future__ import annotations

import numpy as np
import pytest

from robosim.envs import PickPlaceSimEnv, SimConfig
from robosim.envs.pick_place import ACTION_DIM, STATE_DIM
from robosim.kinematics.joints import JointAngles


def _idle_action(trigger: bool = False) -> np.ndarray:
    action = np.zeros(ACTION_DIM, dtype=np.float32)
    action[3] = 1.0
    action[4] = 1.0 if trigger else 0.0
    return action


def test_reset_returns_home_state():
    env = PickPlaceSimEnv()
    obs, info = env.reset(seed=0)
    assert obs["agent_pos"].shape == (STATE_DIM,)
    assert obs["agent_pos"].dtype == np.float32
    np.testing.assert_allclose(obs["agent_pos"][:6], JointAngles.home().as_array(), atol=1e-6)
    assert obs["agent_pos"][9] == 1.0
    assert env.observation_space.contains(obs)
    assert info["phase"] == "IDLE"
    assert not info["is_success"]


def test_trigger_action_starts_sequence():
    env = PickPlaceSimEnv()
    env.reset()
    _, _, _, _, info = env.step(_idle_action(trigger=True))
    assert info["phase"] == "APPROACH"


def test_manual_actions_are_ignored_while_sequence_runs():
    env = PickPlaceSimEnv()
    env.reset()
    env.step(_idle_action(trigger=True))
    action = _idle_action()
    action[3] = -1.0
    env.step(action)
    assert env.snapshot.gripper_open


def test_drag_action_moves_ik_target():
    env = PickPlaceSimEnv()
    env.reset()
    before = env.controller.ik_target
    action = _idle_action()
    action[1] = 1.0
    env.step(action)
    np.testing.assert_allclose(env.controller.ik_target, before + [0.0, 0.1, 0.0], atol=1e-6)


def test_pixel_observations():
    cfg = SimConfig(obs_type="pixels_agent_pos", observation_height=64, observation_width=80)
    env = PickPlaceSimEnv(cfg)
    obs, _ = env.reset()
    assert obs["pixels"].shape == (64, 80, 3)
    assert obs["pixels"].dtype == np.uint8


def test_short_action_is_rejected():
    env = PickPlaceSimEnv()
    env.reset()
    with pytest.raises(ValueError):
        env.step(np.zeros(3))


def test_episode_truncates_at_length():
    env = PickPlaceSimEnv(SimConfig(episode_length=3))
    env.reset()
    truncated = [env.step(_idle_action())[3] for _ in range(3)]
    assert truncated == [False, False, True]


def test_reward_is_negative_distance_to_drop_area():
    env = PickPlaceSimEnv()
    env.reset()
    _, reward, terminated, _, _ = env.step(_idle_action())
    # nearest default box sits at x=4, eight units from the drop centre
    assert reward == pytest.approx(-8.0)
    assert not terminated


def test_reset_rebuilds_scene():
    env = PickPlaceSimEnv()
    env.reset()
    env.controller.spawn_object()
    assert len(env.controller.objects) == 4
    env.reset(seed=3)
    assert len(env.controller.objects) == 3
    assert env.cfg.seed == 3


def test_zero_gripper_command_keeps_gripper_state():
    env = PickPlaceSimEnv()
    env.reset()
    close = np.zeros(ACTION_DIM, dtype=np.float32)
    close[3] = -1.0
    env.step(close)
    assert not env.snapshot.gripper_open
    env.step(np.zeros(ACTION_DIM, dtype=np.float32))
    assert not env.snapshot.gripper_open
    reopen = np.zeros(ACTION_DIM, dtype=np.float32)
    reopen[3] = 1.0
    env.step(reopen)
    assert env.snapshot.gripper_open
