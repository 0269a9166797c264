"""
Shared mutable simulation state.

One ``SimState`` is owned by the controller and handed, in a fixed order, to
each stage of the per-tick pipeline.  Stages write during their turn and read
whatever the previous stage committed.

Classes:
    SimState: Arm, IK target, IK mode, and scene objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from robosim.robots.sim_robot_arm import SimRobotArm
from robosim.scene.objects import SceneObject, default_objects
from robosim.utils.constants import DEFAULT_IK_TARGET


@dataclass
class SimState:
    """Everything the kinematics core reads and writes each tick.

    Attributes:
        arm: Joint angles and gripper flag.
        ik_target: Desired tool-tip position.
        objects: Scene-object collection, shared with the renderer.
        ik_mode: Whether the user is dragging the IK target.
    """

    arm: SimRobotArm = field(default_factory=SimRobotArm)
    ik_target: np.ndarray = field(default_factory=lambda: np.array(DEFAULT_IK_TARGET))
    objects: List[SceneObject] = field(default_factory=default_objects)
    ik_mode: bool = False

    @property
    def gripper_open(self) -> bool:
        return self.arm.gripper_open

    @gripper_open.setter
    def gripper_open(self, value: bool) -> None:
        self.arm.gripper_open = bool(value)
