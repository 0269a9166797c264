"""
Keyboard teleoperation for driving the IK target, gripper, and sequence.
"""
