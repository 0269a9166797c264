"""
Joint-angle value type for the 6-DOF arm.

Classes:
    JointAngles: Immutable set of six named joint angles (radians).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, Sequence

import numpy as np

from robosim.utils.constants import HOME_JOINTS, JOINT_LIMITS, JOINT_NAMES
from robosim.utils.helpers import clamp


@dataclass(frozen=True)
class JointAngles:
    """Six named joint angles in radians.

    Instances are immutable; every edit produces a new value, so a solver can
    never modify the configuration it was handed.

    Attributes:
        j1: Base rotation about the world up axis.
        j2: Shoulder pitch.
        j3: Elbow pitch.
        j4: Forearm roll.
        j5: Wrist bend.
        j6: Flange rotation.
    """

    j1: float = 0.0
    j2: float = 0.0
    j3: float = 0.0
    j4: float = 0.0
    j5: float = 0.0
    j6: float = 0.0

    @classmethod
    def home(cls) -> "JointAngles":
        """Return the fixed home configuration."""
        return cls(**HOME_JOINTS)

    @classmethod
    def from_array(cls, values: Sequence[float] | np.ndarray) -> "JointAngles":
        """Build from a length-6 sequence ordered j1..j6.

        Raises:
            ValueError: If *values* does not have six entries.
        """
        flat = [float(v) for v in np.asarray(values, dtype=np.float64).reshape(-1)]
        if len(flat) != len(JOINT_NAMES):
            raise ValueError(f"Expected {len(JOINT_NAMES)} joint values, got {len(flat)}")
        return cls(*flat)

    def as_array(self) -> np.ndarray:
        """Return the angles as a float64 array ordered j1..j6."""
        return np.array([getattr(self, f.name) for f in fields(self)], dtype=np.float64)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def get(self, name: str) -> float:
        """Look up a joint angle by name.

        Raises:
            KeyError: If *name* is not one of ``j1`` .. ``j6``.
        """
        if name not in JOINT_LIMITS:
            raise KeyError(f"Unknown joint '{name}'. Choose from {list(JOINT_NAMES)}")
        return getattr(self, name)

    def replace(self, **changes: float) -> "JointAngles":
        """Return a copy with the given joints overwritten (no clamping)."""
        unknown = set(changes) - set(JOINT_LIMITS)
        if unknown:
            raise KeyError(f"Unknown joint(s) {sorted(unknown)}")
        return replace(self, **{k: float(v) for k, v in changes.items()})

    def clamped(self) -> "JointAngles":
        """Return a copy with every angle clamped to its joint range."""
        return JointAngles(
            **{name: clamp_joint(name, getattr(self, name)) for name in JOINT_NAMES}
        )

    def within_limits(self) -> bool:
        """Check if all joints are within limits."""
        return all(
            JOINT_LIMITS[name][0] <= getattr(self, name) <= JOINT_LIMITS[name][1]
            for name in JOINT_NAMES
        )


def clamp_joint(name: str, value: float) -> float:
    """Clamp a single joint value to its configured range.

    Args:
        name: Joint name (``j1`` .. ``j6``).
        value: Angle in radians.

    Returns:
        The clamped angle.
    """
    lo, hi = JOINT_LIMITS[name]
    return clamp(float(value), lo, hi)
