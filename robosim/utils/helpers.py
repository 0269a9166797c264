"""
Small stateless helpers used across the robosim package.

Provides scalar clamping, 3-vector coercion, elementary rotation matrices,
seeding, and colour parsing.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


def clamp(value: float, lo: float, hi: float) -> float:
    """Return *value* clamped to the closed interval [*lo*, *hi*].

    Args:
        value: The scalar to clamp.
        lo: Lower bound (inclusive).
        hi: Upper bound (inclusive).

    Returns:
        The clamped scalar.
    """
    return max(lo, min(hi, value))


def as_vec3(value: Sequence[float] | np.ndarray) -> np.ndarray:
    """Coerce *value* into a fresh float64 array of shape ``(3,)``.

    Args:
        value: Any 3-element sequence.

    Returns:
        A new NumPy array (never a view of the input).

    Raises:
        ValueError: When *value* does not hold exactly three elements.
    """
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {arr.shape}")
    return arr


def rot_y(theta: float) -> np.ndarray:
    """Rotation about the Y (up) axis as a 3x3 matrix."""
    c, s = np.cos(theta), np.sin(theta)
    return np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ])


def rot_z(theta: float) -> np.ndarray:
    """Rotation about the Z (forward) axis as a 3x3 matrix."""
    c, s = np.cos(theta), np.sin(theta)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def lerp(start: np.ndarray, end: np.ndarray, t: float) -> np.ndarray:
    """Linearly interpolate between two points.

    Args:
        start: Point at ``t = 0``.
        end: Point at ``t = 1``.
        t: Interpolation parameter.

    Returns:
        ``start + (end - start) * t`` as a new array.
    """
    return start + (end - start) * t


def seed_rngs(seed: int | None) -> np.random.Generator:
    """Create and return a NumPy random generator seeded with *seed*.

    Args:
        seed: The integer seed value, or *None* for OS entropy.

    Returns:
        A seeded ``numpy.random.Generator``.
    """
    return np.random.default_rng(seed)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse a ``'#rrggbb'`` string into an RGB tuple.

    Args:
        color: Hex colour string, with or without the leading ``#``.

    Returns:
        Tuple of three ints in 0-255.

    Raises:
        ValueError: If the string is not six hex digits.
    """
    digits = color.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Expected '#rrggbb' colour, got {color!r}")
    return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))
