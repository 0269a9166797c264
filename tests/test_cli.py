"""Command-line entry point tests."""

from __future__ import annotations

import numpy as np
import pytest

import run_sim
from robosim.envs.pick_place import ACTION_DIM, PickPlaceSimEnv
from robosim.sequencer.pick_place import SequencePhase
from robosim.sim.config import SimConfig


def test_auto_mode_prints_cycle_summary(capsys):
    run_sim.main(["--mode", "auto", "--cycles", "1", "--spawn", "1"])
    out = capsys.readouterr().out
    assert "Mode: auto" in out
    assert "Cycle 1" in out
    assert out.count("box") >= 3


def test_unknown_mode_is_rejected():
    with pytest.raises(SystemExit):
        run_sim.main(["--mode", "fly"])


def test_finished_episode_is_reset_once(capsys):
    env = PickPlaceSimEnv(SimConfig(fps=30, episode_length=5000))
    env.reset()
    trigger = np.zeros(ACTION_DIM, dtype=np.float32)
    trigger[4] = 1.0
    run_sim._step_episode(env, trigger)

    neutral = np.zeros(ACTION_DIM, dtype=np.float32)
    for _ in range(600):
        run_sim._step_episode(env, neutral)

    out = capsys.readouterr().out
    assert out.count("Object placed in drop area") == 1
    assert env.snapshot.phase is SequencePhase.IDLE
    np.testing.assert_allclose(env.controller.objects[0].position, [4.0, 0.4, 0.0])
