"""
Forward and inverse kinematics of the 6-DOF arm.

Provides the immutable ``JointAngles`` value type, the pure forward-kinematics
chain, and a cyclic-coordinate-descent position IK solver.
"""

from robosim.kinematics.chain import (
    ChainFrame,
    KinematicChain,
    compute_chain,
    end_effector_position,
    gripper_reference_point,
    home_tip_position,
)
from robosim.kinematics.ik import solve_ik
from robosim.kinematics.joints import JointAngles, clamp_joint

__all__ = [
    "ChainFrame",
    "JointAngles",
    "KinematicChain",
    "clamp_joint",
    "compute_chain",
    "end_effector_position",
    "gripper_reference_point",
    "home_tip_position",
    "solve_ik",
]
