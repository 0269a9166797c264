"""
Position-only inverse kinematics by cyclic coordinate descent (CCD).

Each pass walks the joints from the wrist back to the base and turns one joint
at a time so that the tool tip swings toward the target around that joint's
world-space axis.  Orientation is not solved.  j6 (flange roll) is never
touched since it does not move the tip.

Functions:
    solve_ik: Move joint angles toward a Cartesian tip target.
"""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

import numpy as np

from robosim.kinematics.chain import FORWARD, UP, compute_chain
from robosim.kinematics.joints import JointAngles, clamp_joint
from robosim.utils.constants import IK_DAMPING, IK_DEFAULT_ITERATIONS, IK_TOLERANCE
from robosim.utils.helpers import as_vec3

# Wrist to base.  j6 is listed for completeness and skipped.
SOLVE_ORDER: Tuple[str, ...] = ("j6", "j5", "j4", "j3", "j2", "j1")
SKIPPED_JOINTS = frozenset({"j6"})

# joint -> (anchor index of its pivot in the chain, nominal local axis)
JOINT_AXES: Dict[str, Tuple[int, np.ndarray]] = {
    "j1": (0, UP),
    "j2": (1, FORWARD),
    "j3": (2, FORWARD),
    "j4": (3, UP),
    "j5": (4, FORWARD),
}

_EPS = 1e-9


def _project_unit(vec: np.ndarray, axis: np.ndarray) -> np.ndarray | None:
    """Project *vec* onto the plane normal to unit *axis* and normalise.

    Returns:
        The unit projection, or *None* when it is degenerate.
    """
    proj = vec - axis * float(np.dot(vec, axis))
    norm = float(np.linalg.norm(proj))
    if norm < _EPS:
        return None
    return proj / norm


def _signed_angle(a: np.ndarray, b: np.ndarray, axis: np.ndarray) -> float:
    """Angle from unit *a* to unit *b*, signed by the right-hand rule on *axis*."""
    angle = float(np.arccos(np.clip(np.dot(a, b), -1.0, 1.0)))
    if float(np.dot(np.cross(a, b), axis)) < 0.0:
        angle = -angle
    return angle


def solve_ik(
    target: Sequence[float] | np.ndarray,
    current: JointAngles,
    iterations: int = IK_DEFAULT_ITERATIONS,
) -> JointAngles:
    """Run CCD passes that pull the tool tip toward *target*.

    Never fails: unreachable targets simply end in the best clamped
    configuration found.  j1..j5 of the result are always within joint
    limits; j6 is returned exactly as given.

    Args:
        target: Desired tool-tip world position.
        current: Starting configuration (left untouched).
        iterations: Number of passes over the joints.

    Returns:
        The updated joint configuration.
    """
    target = as_vec3(target)
    angles = current.clamped().as_dict()
    angles["j6"] = current.j6

    for _ in range(iterations):
        for name in SOLVE_ORDER:
            if name in SKIPPED_JOINTS:
                continue

            chain = compute_chain(JointAngles(**angles))
            tip = chain.end_effector
            if np.linalg.norm(tip - target) < IK_TOLERANCE:
                return JointAngles(**angles)

            idx, local_axis = JOINT_AXES[name]
            pivot = chain.frames[idx].position
            parent_rot = chain.frames[idx - 1].rotation if idx > 0 else np.eye(3)
            axis = parent_rot @ local_axis
            axis = axis / np.linalg.norm(axis)

            to_tip = _project_unit(tip - pivot, axis)
            to_target = _project_unit(target - pivot, axis)
            if to_tip is None or to_target is None:
                continue

            angle = _signed_angle(to_tip, to_target, axis) * IK_DAMPING

            # FK applies -j1 at the base, so a positive swing means a smaller j1.
            if name == "j1":
                value = angles[name] - angle
            else:
                value = angles[name] + angle
            angles[name] = clamp_joint(name, value)

    return JointAngles(**angles)
