"""Pick-and-place sequencer tests, driven by a manual clock."""

from __future__ import annotations

from typing import List, Tuple

import numpy as np
import pytest

from robosim.kinematics.chain import home_tip_position
from robosim.scene.objects import SceneObject
from robosim.sequencer.pick_place import PickPlaceSequencer, SequencePhase, phase_duration

DT = 0.125

Record = Tuple[SequencePhase, np.ndarray, bool]


def _run(sequencer: PickPlaceSequencer, state, clock, max_ticks: int = 400) -> List[Record]:
    records: List[Record] = []
    for _ in range(max_ticks):
        clock.advance(DT)
        sequencer.tick(state)
        records.append((sequencer.phase, state.ik_target.copy(), state.gripper_open))
        if not sequencer.is_running:
            break
    return records


def _first_entry(records: List[Record], phase: SequencePhase) -> Record:
    return next(r for r in records if r[0] is phase)


def test_full_run_visits_every_phase_in_order(sequencer, state, clock, completions):
    assert sequencer.trigger(state)
    assert sequencer.phase is SequencePhase.APPROACH
    records = _run(sequencer, state, clock)

    visited = [SequencePhase.APPROACH]
    for phase, _, _ in records:
        if phase is not visited[-1]:
            visited.append(phase)
    assert visited == list(SequencePhase)[1:] + [SequencePhase.IDLE]
    assert completions.calls == 1

    for _ in range(10):
        clock.advance(DT)
        sequencer.tick(state)
    assert completions.calls == 1


def test_gripper_is_closed_only_while_carrying(sequencer, state, clock):
    sequencer.trigger(state)
    closed = {
        SequencePhase.GRIP,
        SequencePhase.LIFT_PICK,
        SequencePhase.TRAVEL,
        SequencePhase.DESCEND_DROP,
    }
    for phase, _, gripper_open in _run(sequencer, state, clock):
        assert gripper_open is (phase not in closed), phase


@pytest.mark.parametrize(
    "phase, expected",
    [
        (SequencePhase.DESCEND_PICK, [4.0, 2.4, 0.0]),
        (SequencePhase.GRIP, [4.0, 0.6, 0.0]),
        (SequencePhase.LIFT_PICK, [4.0, 0.6, 0.0]),
        (SequencePhase.TRAVEL, [4.0, 3.6, 0.0]),
        (SequencePhase.DESCEND_DROP, [-4.0, 3.0, 0.0]),
        (SequencePhase.RELEASE, [-4.0, 1.0, 0.0]),
        (SequencePhase.HOME, [-4.0, 3.0, 0.0]),
    ],
)
def test_phase_entry_waypoints(sequencer, state, clock, phase, expected):
    sequencer.trigger(state)
    records = _run(sequencer, state, clock)
    _, target, _ = _first_entry(records, phase)
    np.testing.assert_allclose(target, expected, atol=1e-9)


def test_run_finishes_at_home_tip(sequencer, state, clock):
    sequencer.trigger(state)
    phase, target, _ = _run(sequencer, state, clock)[-1]
    assert phase is SequencePhase.IDLE
    np.testing.assert_allclose(target, home_tip_position(), atol=1e-9)


def test_grip_dwells_before_lifting(sequencer, state, clock):
    sequencer.trigger(state)
    while sequencer.phase is not SequencePhase.GRIP:
        clock.advance(DT)
        sequencer.tick(state)
    for _ in range(3):
        clock.advance(DT)
        sequencer.tick(state)
        assert sequencer.phase is SequencePhase.GRIP
    clock.advance(DT)
    sequencer.tick(state)
    assert sequencer.phase is SequencePhase.LIFT_PICK


def test_movement_interpolates_linearly(sequencer, state, clock):
    sequencer.trigger(state)
    # APPROACH covers 0.4 units, so it takes the 0.5 s minimum.
    clock.advance(0.25)
    sequencer.tick(state)
    assert sequencer.phase is SequencePhase.APPROACH
    np.testing.assert_allclose(state.ik_target, [4.0, 2.2, 0.0])


def test_phase_duration_has_floor_and_speed():
    origin = np.zeros(3)
    assert phase_duration(origin, np.array([0.1, 0.0, 0.0])) == 0.5
    assert phase_duration(origin, np.array([8.0, 0.0, 0.0])) == pytest.approx(2.0)


def test_trigger_without_candidates_completes_immediately(sequencer, state, completions):
    state.objects[:] = [SceneObject("left", [-4.0, 0.4, 0.0])]
    assert not sequencer.trigger(state)
    assert sequencer.phase is SequencePhase.IDLE
    assert completions.calls == 1


def test_trigger_on_empty_scene(sequencer, state, completions):
    state.objects.clear()
    assert not sequencer.trigger(state)
    assert completions.calls == 1


def test_target_removed_mid_approach_aborts(sequencer, state, clock, completions):
    sequencer.trigger(state)
    state.objects.clear()
    records = _run(sequencer, state, clock)
    assert records[-1][0] is SequencePhase.IDLE
    assert SequencePhase.DESCEND_PICK not in [r[0] for r in records]
    assert completions.calls == 1


def test_trigger_while_running_is_ignored(sequencer, state, clock, completions):
    sequencer.trigger(state)
    clock.advance(DT)
    sequencer.tick(state)
    assert not sequencer.trigger(state)
    assert sequencer.phase is SequencePhase.APPROACH
    assert completions.calls == 0


def test_trigger_opens_gripper(sequencer, state):
    state.gripper_open = False
    sequencer.trigger(state)
    assert state.gripper_open is True


def test_descend_reads_object_position_at_phase_entry(sequencer, state, clock):
    sequencer.trigger(state)
    state.objects[0].position = np.array([4.0, 0.4, 1.0])
    while sequencer.phase is SequencePhase.APPROACH:
        clock.advance(DT)
        sequencer.tick(state)
    assert sequencer.phase is SequencePhase.DESCEND_PICK
    np.testing.assert_allclose(sequencer.waypoint, [4.0, 0.6, 1.0])


def test_first_object_in_pick_area_is_selected(sequencer, state):
    state.objects[:] = [
        SceneObject("a", [-3.0, 0.4, 0.0]),
        SceneObject("b", [3.0, 0.4, 1.0]),
        SceneObject("c", [5.0, 0.4, -1.0]),
    ]
    sequencer.trigger(state)
    assert sequencer.target_id == "b"
    np.testing.assert_allclose(sequencer.waypoint, [3.0, 2.4, 1.0])
