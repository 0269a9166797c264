"""
Per-tick simulation control.

Holds the shared simulation state and the controller that advances the
sequencer, IK solver, and grasp tracker in a fixed order each frame.
"""
