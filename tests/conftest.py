"""Shared fixtures for the robosim test-suite."""

from __future__ import annotations

from typing import List

import numpy as np
import pytest

from robosim.scene.objects import ObjectShape, SceneObject
from robosim.sequencer.pick_place import PickPlaceSequencer
from robosim.sim.state import SimState
from robosim.utils.clock import ManualClock


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def one_box() -> List[SceneObject]:
    return [SceneObject("box-1", np.array([4.0, 0.4, 0.0]), "#ef4444", ObjectShape.BOX)]


@pytest.fixture
def state(one_box) -> SimState:
    return SimState(ik_target=np.array([4.0, 2.0, 0.0]), objects=one_box)


class CompletionCounter:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def completions() -> CompletionCounter:
    return CompletionCounter()


@pytest.fixture
def sequencer(clock, completions) -> PickPlaceSequencer:
    return PickPlaceSequencer(clock=clock, on_complete=completions)
