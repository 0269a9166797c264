"""
Scripted pick-and-place sequence.

A linear state machine advanced once per tick.  Each movement phase slides the
IK target in a straight line from where it was at phase entry to a waypoint,
at a fixed speed with a minimum duration; the two gripper phases hold still
for a short dwell.  Phase timing reads an injectable clock at each tick, so
the sequence is wall-clock based in interactive use and fully deterministic
under a ``ManualClock``.

    IDLE -> APPROACH -> DESCEND_PICK -> GRIP -> LIFT_PICK -> TRAVEL
         -> DESCEND_DROP -> RELEASE -> LIFT_DROP -> HOME -> IDLE

Classes:
    SequencePhase: Enumeration of sequence phases.
    PickPlaceSequencer: The state machine.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Dict, Optional

import numpy as np

from robosim.kinematics.chain import home_tip_position
from robosim.scene.objects import SceneObject, find_object
from robosim.sim.state import SimState
from robosim.utils.clock import Clock
from robosim.utils.constants import (
    APPROACH_CLEARANCE,
    DROP_AREA_CENTER,
    DROP_HEIGHT,
    GRASP_CLEARANCE,
    GRIP_DWELL,
    LIFT_DROP_HEIGHT,
    LIFT_PICK_HEIGHT,
    MIN_PHASE_DURATION,
    SEQUENCE_SPEED,
    TRAVEL_HEIGHT,
)
from robosim.utils.helpers import clamp, lerp

logger = logging.getLogger(__name__)


class SequencePhase(str, Enum):
    """Phases of the pick-and-place sequence, in execution order."""

    IDLE = "IDLE"
    APPROACH = "APPROACH"
    DESCEND_PICK = "DESCEND_PICK"
    GRIP = "GRIP"
    LIFT_PICK = "LIFT_PICK"
    TRAVEL = "TRAVEL"
    DESCEND_DROP = "DESCEND_DROP"
    RELEASE = "RELEASE"
    LIFT_DROP = "LIFT_DROP"
    HOME = "HOME"


STATIONARY_PHASES = frozenset({SequencePhase.GRIP, SequencePhase.RELEASE})


def in_pick_area(obj: SceneObject) -> bool:
    """Objects on the positive-x side of the base are candidates for picking."""
    return obj.position[0] > 0.0


def phase_duration(start: np.ndarray, end: np.ndarray) -> float:
    """Time to travel from *start* to *end* at sequence speed (with a floor)."""
    distance = float(np.linalg.norm(end - start))
    return max(MIN_PHASE_DURATION, distance / SEQUENCE_SPEED)


@dataclass
class PickPlaceSequencer:
    """Drives the IK target and gripper through one pick-and-place cycle.

    Attributes:
        clock: Zero-argument callable returning the current time in seconds.
        on_complete: Called exactly once each time a run returns to IDLE,
            including when a run could not start or was aborted.
        phase: Current phase.
        target_id: Id of the object being moved, if any.
    """

    clock: Clock = time.monotonic
    on_complete: Optional[Callable[[], None]] = None
    phase: SequencePhase = SequencePhase.IDLE
    target_id: Optional[str] = None
    _phase_start: float = 0.0
    _start: np.ndarray = field(default_factory=lambda: np.zeros(3))
    _end: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @property
    def is_running(self) -> bool:
        return self.phase is not SequencePhase.IDLE

    @property
    def waypoint(self) -> np.ndarray:
        """End point of the current phase."""
        return self._end.copy()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def trigger(self, state: SimState) -> bool:
        """Start a run on the first object found in the pick area.

        Args:
            state: Shared simulation state.

        Returns:
            *True* if the sequence started.
        """
        if self.is_running:
            logger.warning("Sequence already running (%s); trigger ignored", self.phase.value)
            return False

        candidate = next((obj for obj in state.objects if in_pick_area(obj)), None)
        if candidate is None:
            logger.warning("No objects found in pick area")
            self._complete()
            return False

        self.target_id = candidate.id
        state.gripper_open = True
        above = candidate.position + np.array([0.0, APPROACH_CLEARANCE, 0.0])
        self._enter(SequencePhase.APPROACH, self.clock(), state.ik_target, above)
        logger.info("Sequence started on object %s", candidate.id)
        return True

    def tick(self, state: SimState) -> None:
        """Advance the sequence by one frame.

        Args:
            state: Shared simulation state; ``ik_target`` and ``gripper_open``
                may be written.
        """
        if not self.is_running:
            return

        now = self.clock()
        elapsed = now - self._phase_start

        if self.phase in STATIONARY_PHASES:
            if elapsed >= GRIP_DWELL:
                self._advance(state, now)
            return

        t = clamp(elapsed / phase_duration(self._start, self._end), 0.0, 1.0)
        state.ik_target = lerp(self._start, self._end, t)
        if t >= 1.0:
            self._advance(state, now)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _enter(
        self, phase: SequencePhase, now: float, start: np.ndarray, end: np.ndarray
    ) -> None:
        logger.debug("Phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self._phase_start = now
        self._start = np.array(start, dtype=np.float64)
        self._end = np.array(end, dtype=np.float64)

    def _hold(self, phase: SequencePhase, now: float, state: SimState) -> None:
        self._enter(phase, now, state.ik_target, state.ik_target)

    def _complete(self) -> None:
        self.phase = SequencePhase.IDLE
        self.target_id = None
        if self.on_complete is not None:
            self.on_complete()

    def _advance(self, state: SimState, now: float) -> None:
        handler = self._TRANSITIONS[self.phase]
        handler(self, state, now)

    def _after_approach(self, state: SimState, now: float) -> None:
        target = find_object(state.objects, self.target_id)
        if target is None:
            logger.warning("Target object %s disappeared; aborting sequence", self.target_id)
            self._complete()
            return
        grasp_point = target.position + np.array([0.0, GRASP_CLEARANCE, 0.0])
        self._enter(SequencePhase.DESCEND_PICK, now, state.ik_target, grasp_point)

    def _after_descend_pick(self, state: SimState, now: float) -> None:
        self._hold(SequencePhase.GRIP, now, state)
        state.gripper_open = False

    def _after_grip(self, state: SimState, now: float) -> None:
        lifted = state.ik_target + np.array([0.0, LIFT_PICK_HEIGHT, 0.0])
        self._enter(SequencePhase.LIFT_PICK, now, state.ik_target, lifted)

    def _after_lift_pick(self, state: SimState, now: float) -> None:
        above_drop = np.array([DROP_AREA_CENTER[0], TRAVEL_HEIGHT, DROP_AREA_CENTER[2]])
        self._enter(SequencePhase.TRAVEL, now, state.ik_target, above_drop)

    def _after_travel(self, state: SimState, now: float) -> None:
        drop_point = np.array([DROP_AREA_CENTER[0], DROP_HEIGHT, DROP_AREA_CENTER[2]])
        self._enter(SequencePhase.DESCEND_DROP, now, state.ik_target, drop_point)

    def _after_descend_drop(self, state: SimState, now: float) -> None:
        self._hold(SequencePhase.RELEASE, now, state)
        state.gripper_open = True

    def _after_release(self, state: SimState, now: float) -> None:
        lifted = state.ik_target + np.array([0.0, LIFT_DROP_HEIGHT, 0.0])
        self._enter(SequencePhase.LIFT_DROP, now, state.ik_target, lifted)

    def _after_lift_drop(self, state: SimState, now: float) -> None:
        self._enter(SequencePhase.HOME, now, state.ik_target, home_tip_position())

    def _after_home(self, state: SimState, now: float) -> None:
        logger.info("Sequence complete")
        self._complete()

    _TRANSITIONS: ClassVar[
        Dict[SequencePhase, Callable[["PickPlaceSequencer", SimState, float], None]]
    ] = {
        SequencePhase.APPROACH: _after_approach,
        SequencePhase.DESCEND_PICK: _after_descend_pick,
        SequencePhase.GRIP: _after_grip,
        SequencePhase.LIFT_PICK: _after_lift_pick,
        SequencePhase.TRAVEL: _after_travel,
        SequencePhase.DESCEND_DROP: _after_descend_drop,
        SequencePhase.RELEASE: _after_release,
        SequencePhase.LIFT_DROP: _after_lift_drop,
        SequencePhase.HOME: _after_home,
    }
