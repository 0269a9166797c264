"""
Simulation controller: the per-tick pipeline and the control-layer API.

Each call to ``tick`` runs, in order: the pick-and-place sequencer (which may
move the IK target and toggle the gripper), the IK solver (when IK mode is on
or a sequence is running), forward kinematics for the tool tip, and the grasp
tracker.  Input handlers (sliders, gripper button, IK drag, spawn, run) only
touch state between ticks.

Classes:
    SimSnapshot: Read-only view of the state after a tick.
    SimulationController: Owns the state and runs the pipeline.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from robosim.kinematics.chain import KinematicChain, compute_chain
from robosim.kinematics.ik import solve_ik
from robosim.kinematics.joints import JointAngles
from robosim.scene.grasp import GraspTracker
from robosim.scene.objects import ObjectShape, ObjectSpawner, SceneObject, default_objects
from robosim.sequencer.pick_place import PickPlaceSequencer, SequencePhase
from robosim.sim.config import SimConfig
from robosim.sim.state import SimState
from robosim.utils.clock import Clock
from robosim.utils.constants import OBJECT_COLORS
from robosim.utils.helpers import as_vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimSnapshot:
    """State committed by one tick, for renderers and UIs.

    Attributes:
        tick: Number of ticks run so far.
        joints: Joint angles after IK.
        chain: Forward kinematics of ``joints``.
        gripper_open: Gripper flag.
        ik_target: IK target used this tick.
        ik_mode: Whether IK mode is on.
        objects: Copies of the scene objects.
        held_id: Id of the held object, if any.
        phase: Sequencer phase after the tick.
    """

    tick: int
    joints: JointAngles
    chain: KinematicChain
    gripper_open: bool
    ik_target: np.ndarray
    ik_mode: bool
    objects: Tuple[SceneObject, ...]
    held_id: Optional[str]
    phase: SequencePhase

    @property
    def sequence_running(self) -> bool:
        return self.phase is not SequencePhase.IDLE

    @property
    def tip(self) -> np.ndarray:
        return self.chain.end_effector


class SimulationController:
    """Owns the simulation state and advances it one tick at a time.

    Attributes:
        config: Run configuration.
        state: Shared mutable state.
        sequencer: Pick-and-place state machine.
        tracker: Grasp/drop tracker.
        spawner: Object spawner for the pick area.
        completed_runs: Number of times the sequencer signalled completion.
    """

    def __init__(
        self,
        config: SimConfig | None = None,
        clock: Clock = time.monotonic,
        state: SimState | None = None,
    ) -> None:
        """Initialise the controller.

        Args:
            config: Optional configuration; defaults to ``SimConfig()``.
            clock: Time source for sequence phase timing.
            state: Optional pre-built state (e.g. custom objects).
        """
        self.config = config or SimConfig()
        if state is None:
            state = SimState(
                ik_target=np.array(self.config.initial_ik_target, dtype=np.float64),
                objects=default_objects() if self.config.spawn_default_objects else [],
            )
        self.state = state
        self.sequencer = PickPlaceSequencer(clock=clock, on_complete=self._on_sequence_complete)
        self.tracker = GraspTracker(prev_gripper_open=self.state.gripper_open)
        self.spawner = ObjectSpawner(seed=self.config.seed)
        self.completed_runs = 0
        self._tick_count = 0
        self._listeners: List[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def joints(self) -> JointAngles:
        return self.state.arm.joints

    @property
    def gripper_open(self) -> bool:
        return self.state.gripper_open

    @property
    def ik_target(self) -> np.ndarray:
        return self.state.ik_target.copy()

    @property
    def objects(self) -> List[SceneObject]:
        return self.state.objects

    @property
    def phase(self) -> SequencePhase:
        return self.sequencer.phase

    @property
    def is_sequence_running(self) -> bool:
        return self.sequencer.is_running

    @property
    def held_object_id(self) -> Optional[str]:
        return self.tracker.held_id

    def chain(self) -> KinematicChain:
        return compute_chain(self.state.arm.joints)

    # ------------------------------------------------------------------
    # Per-tick pipeline
    # ------------------------------------------------------------------

    def tick(self) -> SimSnapshot:
        """Run one frame of the simulation.

        Returns:
            Snapshot of the committed state.
        """
        state = self.state
        drive_ik = state.ik_mode or self.sequencer.is_running

        self.sequencer.tick(state)

        if drive_ik:
            state.arm.joints = solve_ik(
                state.ik_target, state.arm.joints, self.config.ik_iterations
            )

        chain = compute_chain(state.arm.joints)
        self.tracker.update(state.gripper_open, chain.end_effector, state.objects)
        self._tick_count += 1
        return self._snapshot(chain)

    def _snapshot(self, chain: KinematicChain) -> SimSnapshot:
        state = self.state
        return SimSnapshot(
            tick=self._tick_count,
            joints=state.arm.joints,
            chain=chain,
            gripper_open=state.gripper_open,
            ik_target=state.ik_target.copy(),
            ik_mode=state.ik_mode,
            objects=tuple(obj.copy() for obj in state.objects),
            held_id=self.tracker.held_id,
            phase=self.sequencer.phase,
        )

    def snapshot(self) -> SimSnapshot:
        """Return a snapshot of the current state without ticking."""
        return self._snapshot(self.chain())

    # ------------------------------------------------------------------
    # Control-layer inputs
    # ------------------------------------------------------------------

    def set_joint(self, name: str, value: float) -> float:
        """Apply a direct joint edit (slider drag), clamped to range.

        Ignored while a sequence runs or IK mode is on, since the solver
        owns the joints then.

        Returns:
            The joint's value after the call.
        """
        if self.is_sequence_running or self.state.ik_mode:
            logger.warning("Joint %s is IK-driven right now; edit ignored", name)
            return self.state.arm.joints.get(name)
        return self.state.arm.set_joint(name, value)

    def set_gripper_open(self, gripper_open: bool) -> None:
        self.state.gripper_open = gripper_open

    def toggle_gripper(self) -> bool:
        """Flip the gripper flag and return the new value."""
        self.state.gripper_open = not self.state.gripper_open
        return self.state.gripper_open

    def set_ik_mode(self, enabled: bool) -> None:
        """Switch IK-target dragging on or off.

        Turning it on snaps the IK target to the current tool tip so the arm
        does not jump.
        """
        if enabled and not self.state.ik_mode:
            self.state.ik_target = self.chain().end_effector.copy()
        self.state.ik_mode = bool(enabled)

    def set_ik_target(self, position: Sequence[float]) -> None:
        self.state.ik_target = as_vec3(position)

    def drag_ik_target(self, delta: Sequence[float]) -> np.ndarray:
        """Move the IK target by *delta* and return the new target."""
        self.state.ik_target = self.state.ik_target + as_vec3(delta)
        return self.state.ik_target.copy()

    def spawn_object(
        self,
        shape: ObjectShape | str = ObjectShape.BOX,
        color: str = OBJECT_COLORS[0],
        position: Optional[Sequence[float]] = None,
    ) -> SceneObject:
        """Add a new object to the scene.

        Args:
            shape: Shape tag or name.
            color: Hex colour string.
            position: Explicit position, or *None* for a random spot in the
                pick area.

        Returns:
            The object added to the scene.
        """
        obj = self.spawner.spawn(shape, color, position, existing=self.state.objects)
        self.state.objects.append(obj)
        logger.debug("Spawned %s %s at %s", obj.shape.value, obj.id, obj.position)
        return obj

    def run_sequence(self) -> bool:
        """Trigger a pick-and-place run.

        Returns:
            *True* if a run started; completion listeners have already been
            notified when it did not.
        """
        return self.sequencer.trigger(self.state)

    def add_completion_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback fired whenever a sequence run ends."""
        self._listeners.append(callback)

    def reset(self) -> bool:
        """Return the arm home, open the gripper, and leave IK mode.

        Returns:
            *False* (and does nothing) while a sequence is running.
        """
        if self.is_sequence_running:
            logger.warning("Cannot reset while a sequence is running")
            return False
        self.state.arm.reset()
        self.state.ik_mode = False
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _on_sequence_complete(self) -> None:
        self.completed_runs += 1
        for callback in self._listeners:
            callback()
