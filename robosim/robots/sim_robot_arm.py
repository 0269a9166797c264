"""
Owned joint and gripper state of the simulated 6-DOF arm.

The arm keeps the single authoritative ``JointAngles`` and gripper flag of the
simulation.  Direct edits are clamped at the point of application; pose
queries always go through forward kinematics so the renderer never has to
feed positions back into the simulation.

Classes:
    SimRobotArm: The robot arm state holder.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from robosim.kinematics.chain import KinematicChain, compute_chain
from robosim.kinematics.joints import JointAngles, clamp_joint


@dataclass
class SimRobotArm:
    """A simulated 6-DOF arm: joint angles plus gripper open/closed.

    Attributes:
        joints: Current joint angles in radians (always within limits).
        gripper_open: Whether the gripper is currently open.
    """

    joints: JointAngles = field(default_factory=JointAngles.home)
    gripper_open: bool = True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reset(self) -> JointAngles:
        """Return to the home configuration with the gripper open.

        Returns:
            The post-reset joint angles.
        """
        self.joints = JointAngles.home()
        self.gripper_open = True
        return self.joints

    def set_joint(self, name: str, value: float) -> float:
        """Set one joint, silently clamping it to its range.

        Args:
            name: Joint name (``j1`` .. ``j6``).
            value: Requested angle in radians.

        Returns:
            The angle actually applied.

        Raises:
            KeyError: If *name* is not a joint.
        """
        self.joints.get(name)
        applied = clamp_joint(name, value)
        self.joints = self.joints.replace(**{name: applied})
        return applied

    def set_joints(self, joints: JointAngles) -> None:
        """Replace all joint angles, clamping each to its range."""
        self.joints = joints.clamped()

    def chain(self) -> KinematicChain:
        """Evaluate forward kinematics for the current joints."""
        return compute_chain(self.joints)

    def tip_position(self) -> np.ndarray:
        """Return the current tool-tip world position."""
        return self.chain().end_effector

    def get_state(self) -> np.ndarray:
        """Return the full proprioceptive state vector.

        Concatenates joint positions (6), tool-tip xyz (3), and a scalar
        gripper flag (1) into a single flat vector of length 10.

        Returns:
            1-D NumPy array of shape ``(10,)``.
        """
        gripper_val = np.array([1.0 if self.gripper_open else 0.0])
        return np.concatenate([self.joints.as_array(), self.tip_position(), gripper_val])
