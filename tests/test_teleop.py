"""Keyboard teleop tests (terminal input path)."""

from __future__ import annotations

import numpy as np
import pytest

from robosim.teleop.keyboard_teleop import KeyboardTeleop


@pytest.mark.parametrize(
    "key, expected",
    [
        ("w", [0.0, 1.0, 0.0]),
        ("s", [0.0, -1.0, 0.0]),
        ("d", [1.0, 0.0, 0.0]),
        ("a", [-1.0, 0.0, 0.0]),
        ("r", [0.0, 0.0, 1.0]),
        ("f", [0.0, 0.0, -1.0]),
    ],
)
def test_drag_keys(key, expected):
    teleop = KeyboardTeleop()
    assert teleop.process_terminal_input(key)
    np.testing.assert_array_equal(teleop.get_action()[:3], expected)


def test_terminal_command_applies_for_one_step():
    teleop = KeyboardTeleop()
    teleop.process_terminal_input("w")
    teleop.process_terminal_input("x")
    np.testing.assert_array_equal(teleop.get_action()[:3], [0.0, 0.0, 0.0])


def test_gripper_toggle():
    teleop = KeyboardTeleop()
    assert teleop.get_action()[3] == 1.0
    teleop.process_terminal_input("g")
    assert teleop.get_action()[3] == -1.0


def test_trigger_is_consumed_once():
    teleop = KeyboardTeleop()
    teleop.process_terminal_input("p")
    assert teleop.get_action()[4] == 1.0
    assert teleop.get_action()[4] == 0.0


def test_quit_key():
    assert not KeyboardTeleop().process_terminal_input("Q\n")
