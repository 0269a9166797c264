"""
Grasp/drop tracking for scene objects.

Runs once per tick regardless of what the sequencer is doing.  Closing the
gripper picks up the nearest object within reach of the point between the
finger pads; opening it lets go.  A held object follows the gripper exactly.
When nothing is held, airborne objects sink toward the floor by a fixed amount
per tick.  This is a scripted correction, not a physics step.

Classes:
    GraspTracker: Attaches, carries, and drops objects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from robosim.kinematics.chain import gripper_reference_point
from robosim.scene.objects import SceneObject, find_object
from robosim.utils.constants import FALL_RATE, GRASP_THRESHOLD, REST_TOLERANCE

logger = logging.getLogger(__name__)


@dataclass
class GraspTracker:
    """Tracks which object, if any, is held by the gripper.

    Attributes:
        prev_gripper_open: Gripper flag seen on the previous update.
        held_id: Id of the held object, or *None*.
        threshold: Maximum grasp distance from the reference point.
        fall_rate: Height lost per tick by an unsupported object.
    """

    prev_gripper_open: bool = True
    held_id: Optional[str] = None
    threshold: float = GRASP_THRESHOLD
    fall_rate: float = FALL_RATE

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(
        self, gripper_open: bool, tip_position: np.ndarray, objects: List[SceneObject]
    ) -> None:
        """Advance grasp state by one tick, mutating *objects* in place.

        Args:
            gripper_open: Gripper flag for this tick.
            tip_position: Current tool-tip world position from FK.
            objects: Shared scene-object collection.
        """
        reference = gripper_reference_point(tip_position)

        if self.prev_gripper_open and not gripper_open:
            self._try_grasp(reference, objects)
        elif not self.prev_gripper_open and gripper_open:
            self._release()

        held = find_object(objects, self.held_id)
        if self.held_id is not None and held is None:
            logger.warning("Held object %s left the scene; dropping grasp", self.held_id)
            self.held_id = None

        if held is not None:
            held.position = reference.copy()
        else:
            self._apply_fall(objects)

        self.prev_gripper_open = gripper_open

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _try_grasp(self, reference: np.ndarray, objects: List[SceneObject]) -> None:
        """Pick the object nearest *reference* if it is within the threshold."""
        closest: Optional[SceneObject] = None
        min_distance = self.threshold
        for obj in objects:
            distance = float(np.linalg.norm(obj.position - reference))
            if distance < min_distance:
                min_distance = distance
                closest = obj
        if closest is not None:
            self.held_id = closest.id
            logger.debug("Grasped %s at distance %.3f", closest.id, min_distance)
        else:
            logger.debug("Gripper closed on nothing")

    def _release(self) -> None:
        if self.held_id is not None:
            logger.debug("Released %s", self.held_id)
        self.held_id = None

    def _apply_fall(self, objects: List[SceneObject]) -> None:
        """Lower every airborne object toward its resting height."""
        for obj in objects:
            ground = obj.resting_height
            if obj.position[1] > ground + REST_TOLERANCE:
                obj.position[1] = max(ground, obj.position[1] - self.fall_rate)
