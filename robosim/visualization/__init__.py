"""
Rendering and live visualization.

Provides a side-view NumPy canvas renderer that consumes forward-kinematics
output and a Pygame window that shows it with a telemetry overlay.
"""
