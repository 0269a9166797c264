"""
Shared constants for the robosim package.

Holds the fixed configuration consumed by the kinematics core: joint names and
limits, the home configuration, link offsets of the arm, scene geometry for the
pick and drop areas, and the tuning constants of the IK solver, the sequencer,
and the grasp tracker.  None of these are runtime-configurable.
"""

from __future__ import annotations

import math
from typing import Dict, Tuple

# ---------------------------------------------------------------------------
# Joints
# ---------------------------------------------------------------------------
JOINT_NAMES: Tuple[str, ...] = ("j1", "j2", "j3", "j4", "j5", "j6")
NUM_JOINTS: int = 6

JOINT_LIMITS: Dict[str, Tuple[float, float]] = {
    "j1": (-math.pi, math.pi),
    "j2": (-math.pi / 2, math.pi / 2),
    "j3": (-math.pi / 1.5, math.pi / 1.5),
    "j4": (-math.pi, math.pi),
    "j5": (-math.pi / 2, math.pi / 2),
    "j6": (-math.pi, math.pi),
}

HOME_JOINTS: Dict[str, float] = {
    "j1": 0.0,
    "j2": 0.2,
    "j3": 0.5,
    "j4": 0.0,
    "j5": -0.5,
    "j6": 0.0,
}

JOINT_LABELS: Dict[str, str] = {
    "j1": "Base",
    "j2": "Shoulder",
    "j3": "Elbow",
    "j4": "Roll",
    "j5": "Pitch",
    "j6": "Yaw",
}

# ---------------------------------------------------------------------------
# Arm geometry (world units, Y is up)
# ---------------------------------------------------------------------------
CHAIN_ORIGIN: Tuple[float, float, float] = (0.0, 1.1, 0.0)
UPPER_ARM_LENGTH: float = 4.0
FOREARM_LENGTH: float = 1.5
WRIST_OFFSET: float = 0.2
FLANGE_OFFSET: float = 0.8
TOOL_LENGTH: float = 0.5
NUM_CHAIN_FRAMES: int = 7

# Distance from the tool tip down to the point the gripper actually holds.
GRIPPER_REFERENCE_DROP: float = 0.2
FINGER_OFFSET_OPEN: float = 0.25
FINGER_OFFSET_CLOSED: float = 0.08

# ---------------------------------------------------------------------------
# Scene geometry
# ---------------------------------------------------------------------------
BOX_SIZE: float = 0.8
PICK_AREA_CENTER: Tuple[float, float, float] = (4.0, 0.05, 0.0)
DROP_AREA_CENTER: Tuple[float, float, float] = (-4.0, 0.05, 0.0)
AREA_RADIUS: float = 2.5
SPAWN_RADIUS: float = 1.0
DEFAULT_IK_TARGET: Tuple[float, float, float] = (4.0, 2.0, 0.0)

# ---------------------------------------------------------------------------
# IK solver
# ---------------------------------------------------------------------------
IK_DAMPING: float = 0.5
IK_TOLERANCE: float = 0.01
IK_DEFAULT_ITERATIONS: int = 5

# ---------------------------------------------------------------------------
# Sequencer
# ---------------------------------------------------------------------------
SEQUENCE_SPEED: float = 4.0
MIN_PHASE_DURATION: float = 0.5
GRIP_DWELL: float = 0.5
APPROACH_CLEARANCE: float = 2.0
GRASP_CLEARANCE: float = 0.2
LIFT_PICK_HEIGHT: float = 3.0
LIFT_DROP_HEIGHT: float = 2.0
TRAVEL_HEIGHT: float = 3.0
DROP_HEIGHT: float = 1.0

# ---------------------------------------------------------------------------
# Grasp / drop tracker
# ---------------------------------------------------------------------------
GRASP_THRESHOLD: float = 1.2
FALL_RATE: float = 0.2
REST_TOLERANCE: float = 0.01

# ---------------------------------------------------------------------------
# Object palette
# ---------------------------------------------------------------------------
OBJECT_COLORS: Tuple[str, ...] = (
    "#ef4444",
    "#3b82f6",
    "#eab308",
    "#10b981",
    "#a855f7",
    "#ec4899",
    "#f97316",
    "#64748b",
)

# ---------------------------------------------------------------------------
# Rendering defaults
# ---------------------------------------------------------------------------
DEFAULT_RENDER_WIDTH: int = 384
DEFAULT_RENDER_HEIGHT: int = 384
DEFAULT_FPS: int = 30

# Color palette (RGB 0-255) used by the canvas renderer
COLOR_BACKGROUND: Tuple[int, int, int] = (26, 26, 26)
COLOR_FLOOR: Tuple[int, int, int] = (60, 60, 60)
COLOR_ROBOT: Tuple[int, int, int] = (255, 87, 34)
COLOR_JOINT: Tuple[int, int, int] = (51, 51, 51)
COLOR_PICK_AREA: Tuple[int, int, int] = (16, 185, 129)
COLOR_DROP_AREA: Tuple[int, int, int] = (239, 68, 68)
COLOR_TARGET: Tuple[int, int, int] = (255, 255, 255)
COLOR_TEXT: Tuple[int, int, int] = (230, 230, 230)
