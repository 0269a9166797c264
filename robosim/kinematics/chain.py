"""
Forward kinematics of the 6-DOF arm.

The arm is a serial chain laid out along its local up (Y) axis.  Starting at
the world origin, each segment translates along the current local up axis and
then rotates about either the local up axis (roll joints j1, j4, j6) or the
local forward Z axis (pitch joints j2, j3, j5).  The base rotation uses -j1 so
that a positive j1 reads as a clockwise turn seen from above.

Anchor order (index: name):
    0: base/shoulder pivot   (after -j1)
    1: shoulder              (after j2, same position as 0)
    2: elbow                 (after upper arm + j3)
    3: wrist roll            (after forearm housing + j4)
    4: wrist bend            (after wrist offset + j5)
    5: flange                (after flange offset + j6)
    6: tool tip

Functions:
    compute_chain: Joint angles to the full list of anchor frames.
    end_effector_position: Joint angles to the tool-tip position only.
    home_tip_position: Tool-tip position of the home configuration.
    gripper_reference_point: Point the gripper holds objects at.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from robosim.kinematics.joints import JointAngles
from robosim.utils.constants import (
    CHAIN_ORIGIN,
    FLANGE_OFFSET,
    FOREARM_LENGTH,
    GRIPPER_REFERENCE_DROP,
    TOOL_LENGTH,
    UPPER_ARM_LENGTH,
    WRIST_OFFSET,
)
from robosim.utils.helpers import rot_y, rot_z

UP = np.array([0.0, 1.0, 0.0])
FORWARD = np.array([0.0, 0.0, 1.0])

FRAME_NAMES: Tuple[str, ...] = (
    "base",
    "shoulder",
    "elbow",
    "wrist_roll",
    "wrist_bend",
    "flange",
    "tip",
)


@dataclass(frozen=True)
class ChainFrame:
    """Position and accumulated orientation of one anchor on the arm.

    Attributes:
        name: Anchor name from ``FRAME_NAMES``.
        position: World position, shape ``(3,)``.
        rotation: World orientation as a 3x3 rotation matrix, including the
            rotation of the joint located at this anchor.
    """

    name: str
    position: np.ndarray
    rotation: np.ndarray


@dataclass(frozen=True)
class KinematicChain:
    """Result of a forward-kinematics evaluation.

    Attributes:
        frames: Seven anchors ordered base to tip.
        end_effector: Tool-tip position (same as ``frames[-1].position``).
    """

    frames: Tuple[ChainFrame, ...]
    end_effector: np.ndarray

    @property
    def positions(self) -> List[np.ndarray]:
        return [f.position for f in self.frames]

    @property
    def rotations(self) -> List[np.ndarray]:
        return [f.rotation for f in self.frames]


def compute_chain(joints: JointAngles) -> KinematicChain:
    """Compute every anchor frame of the arm for *joints*.

    Pure and deterministic; angles are used as given (no clamping).

    Args:
        joints: Joint configuration.

    Returns:
        A ``KinematicChain`` with 7 frames and the end-effector position.
    """
    frames: List[ChainFrame] = []
    pos = np.array(CHAIN_ORIGIN, dtype=np.float64)
    rot = np.eye(3)

    def record(rotation: np.ndarray) -> None:
        name = FRAME_NAMES[len(frames)]
        frames.append(ChainFrame(name, pos.copy(), rotation.copy()))

    # (translation along local up before the joint, joint rotation)
    segments = (
        (0.0, rot_y(-joints.j1)),
        (0.0, rot_z(joints.j2)),
        (UPPER_ARM_LENGTH, rot_z(joints.j3)),
        (FOREARM_LENGTH, rot_y(joints.j4)),
        (WRIST_OFFSET, rot_z(joints.j5)),
        (FLANGE_OFFSET, rot_y(joints.j6)),
    )
    for length, joint_rot in segments:
        pos = pos + rot @ (UP * length)
        rot = rot @ joint_rot
        record(rot)

    pos = pos + rot @ (UP * TOOL_LENGTH)
    record(rot)

    return KinematicChain(frames=tuple(frames), end_effector=pos.copy())


def end_effector_position(joints: JointAngles) -> np.ndarray:
    """Return just the tool-tip position (3,) from FK."""
    return compute_chain(joints).end_effector


def home_tip_position() -> np.ndarray:
    """Return the tool-tip position of the home joint configuration."""
    return end_effector_position(JointAngles.home())


def gripper_reference_point(tip: np.ndarray) -> np.ndarray:
    """Return the point between the finger pads, just below the tool tip.

    Args:
        tip: Tool-tip world position.

    Returns:
        New array shifted down by ``GRIPPER_REFERENCE_DROP``.
    """
    point = np.array(tip, dtype=np.float64)
    point[1] -= GRIPPER_REFERENCE_DROP
    return point
