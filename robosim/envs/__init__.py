"""
Gymnasium-compatible simulation environment for robosim.

Provides the pick-and-place task driven through the IK target, the gripper,
and the scripted sequence trigger.
"""

from robosim.envs.pick_place import PickPlaceSimEnv
from robosim.sim.config import SimConfig

__all__ = [
    "PickPlaceSimEnv",
    "SimConfig",
]
