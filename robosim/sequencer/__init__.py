"""
Scripted pick-and-place sequencing.

Provides the timed state machine that moves the IK target and toggles the
gripper through a complete pick-and-place cycle.
"""

from robosim.sequencer.pick_place import PickPlaceSequencer, SequencePhase

__all__ = ["PickPlaceSequencer", "SequencePhase"]
