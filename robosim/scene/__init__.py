"""
Scene objects and grasp/drop tracking.

Provides the ``SceneObject`` record, a seeded spawner for the pick area, and
the per-tick tracker that attaches objects to the gripper and drops them.
"""

from robosim.scene.grasp import GraspTracker
from robosim.scene.objects import (
    ObjectShape,
    ObjectSpawner,
    SceneObject,
    default_objects,
    find_object,
    resting_height,
)

__all__ = [
    "GraspTracker",
    "ObjectShape",
    "ObjectSpawner",
    "SceneObject",
    "default_objects",
    "find_object",
    "resting_height",
]
