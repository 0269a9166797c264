"""
Simulated robot arm state.

Provides the 6-DOF arm's joint angles and gripper flag with clamped edits and
forward-kinematics pose queries.
"""
