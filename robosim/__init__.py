"""
RoboSim: interactive 6-DOF robot arm pick-and-place simulator.

A kinematics and animation core for an articulated arm: a forward-kinematics
chain, a cyclic-coordinate-descent IK solver, a timed pick-and-place sequencer
and a simple grasp/drop tracker, plus thin adapters (Gymnasium env, renderer,
keyboard teleop) that feed and read the core.

Modules:
    kinematics: Forward-kinematics chain and CCD inverse kinematics.
    robots: Owned joint-angle and gripper state of the arm.
    scene: Scene objects, spawning, and grasp/drop tracking.
    sequencer: Scripted pick-and-place state machine.
    sim: Per-tick simulation controller tying the core together.
    envs: Gymnasium-compatible wrapper around the controller.
    teleop: Keyboard teleoperation for driving the IK target.
    visualization: Canvas rendering and a Pygame viewer.
    utils: Shared constants, clocks, and helper utilities.
"""

__version__ = "0.1.0"
