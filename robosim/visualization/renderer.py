"""
Side-view canvas renderer.

Draws a snapshot of the simulation onto an ``(H, W, 3)`` uint8 NumPy canvas,
looking along the world Z axis (x to the right, y up).  The renderer is a pure
consumer of forward-kinematics output: it never computes poses of its own and
never writes back into the simulation.

Functions:
    render_scene: Draw a ``SimSnapshot`` onto a fresh canvas.
    finger_offset: Half-gap between the gripper fingers.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from robosim.scene.objects import ObjectShape
from robosim.sim.controller import SimSnapshot
from robosim.utils.constants import (
    AREA_RADIUS,
    BOX_SIZE,
    COLOR_BACKGROUND,
    COLOR_DROP_AREA,
    COLOR_FLOOR,
    COLOR_JOINT,
    COLOR_PICK_AREA,
    COLOR_ROBOT,
    COLOR_TARGET,
    DROP_AREA_CENTER,
    FINGER_OFFSET_CLOSED,
    FINGER_OFFSET_OPEN,
    PICK_AREA_CENTER,
)
from robosim.utils.helpers import hex_to_rgb

# Visible world window (x_min, x_max, y_min, y_max)
VIEW_BOUNDS: Tuple[float, float, float, float] = (-7.0, 7.0, -1.0, 11.0)


def finger_offset(gripper_open: bool) -> float:
    """Return the sideways offset of each finger from the tool axis."""
    return FINGER_OFFSET_OPEN if gripper_open else FINGER_OFFSET_CLOSED


def _world_to_pixel(pos: np.ndarray, h: int, w: int) -> Tuple[int, int]:
    """Map a world position to (column, row) pixel coordinates.

    Args:
        pos: World-space [x, y, z]; z is ignored.
        h: Canvas height.
        w: Canvas width.

    Returns:
        Tuple of (pixel_x, pixel_y), clipped to the canvas.
    """
    x_min, x_max, y_min, y_max = VIEW_BOUNDS
    px = int((pos[0] - x_min) / (x_max - x_min) * w)
    py = int((1.0 - (pos[1] - y_min) / (y_max - y_min)) * h)
    return int(np.clip(px, 0, w - 1)), int(np.clip(py, 0, h - 1))


def _world_scale(w: int) -> float:
    """Pixels per world unit along x."""
    return w / (VIEW_BOUNDS[1] - VIEW_BOUNDS[0])


def _draw_disc(
    canvas: np.ndarray, pos: np.ndarray, colour: Tuple[int, int, int], radius: float
) -> None:
    """Fill a disc of world *radius* centred at *pos*."""
    h, w = canvas.shape[:2]
    cx, cy = _world_to_pixel(pos, h, w)
    r_px = max(1.0, radius * _world_scale(w))
    rr, cc = np.ogrid[:h, :w]
    mask = (rr - cy) ** 2 + (cc - cx) ** 2 <= r_px**2
    canvas[mask] = colour


def _draw_rect(
    canvas: np.ndarray,
    centre: np.ndarray,
    half_w: float,
    half_h: float,
    colour: Tuple[int, int, int],
) -> None:
    """Fill an axis-aligned rectangle given in world units."""
    h, w = canvas.shape[:2]
    x0, y0 = _world_to_pixel(centre + np.array([-half_w, half_h, 0.0]), h, w)
    x1, y1 = _world_to_pixel(centre + np.array([half_w, -half_h, 0.0]), h, w)
    canvas[y0 : y1 + 1, x0 : x1 + 1] = colour


def _draw_segment(
    canvas: np.ndarray,
    start: np.ndarray,
    end: np.ndarray,
    colour: Tuple[int, int, int],
    radius: float,
) -> None:
    """Draw a thick line as a row of discs."""
    length = float(np.linalg.norm(end[:2] - start[:2]))
    steps = max(2, int(length / max(radius, 1e-3)) * 2)
    for t in np.linspace(0.0, 1.0, steps):
        _draw_disc(canvas, start + (end - start) * t, colour, radius)


def _draw_areas(canvas: np.ndarray) -> None:
    for centre, colour in ((PICK_AREA_CENTER, COLOR_PICK_AREA), (DROP_AREA_CENTER, COLOR_DROP_AREA)):
        _draw_rect(canvas, np.array([centre[0], 0.0, 0.0]), AREA_RADIUS, 0.05, colour)


def _draw_arm(canvas: np.ndarray, snapshot: SimSnapshot) -> None:
    positions = snapshot.chain.positions
    for start, end in zip(positions[:-1], positions[1:]):
        _draw_segment(canvas, start, end, COLOR_ROBOT, 0.18)
    for joint_pos in positions[:-1]:
        _draw_disc(canvas, joint_pos, COLOR_JOINT, 0.22)

    tip_frame = snapshot.chain.frames[-1]
    side = tip_frame.rotation @ np.array([1.0, 0.0, 0.0])
    along = tip_frame.rotation @ np.array([0.0, 1.0, 0.0])
    offset = finger_offset(snapshot.gripper_open)
    for sign in (1.0, -1.0):
        root = tip_frame.position + side * offset * sign
        _draw_segment(canvas, root, root + along * 0.4, COLOR_JOINT, 0.05)


def _draw_objects(canvas: np.ndarray, snapshot: SimSnapshot) -> None:
    for obj in snapshot.objects:
        colour = hex_to_rgb(obj.color)
        if obj.shape is ObjectShape.SPHERE:
            _draw_disc(canvas, obj.position, colour, BOX_SIZE / 1.5)
        else:
            _draw_rect(canvas, obj.position, BOX_SIZE / 2, BOX_SIZE / 2, colour)


def render_scene(snapshot: SimSnapshot, width: int, height: int) -> np.ndarray:
    """Render a snapshot as an RGB image.

    Args:
        snapshot: State committed by the last tick.
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        (H, W, 3) uint8 NumPy array.
    """
    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    canvas[:] = COLOR_BACKGROUND
    _draw_rect(canvas, np.array([0.0, -0.5, 0.0]), 7.0, 0.5, COLOR_FLOOR)
    _draw_areas(canvas)
    _draw_objects(canvas, snapshot)
    _draw_arm(canvas, snapshot)
    if snapshot.ik_mode or snapshot.sequence_running:
        _draw_disc(canvas, snapshot.ik_target, COLOR_TARGET, 0.12)
    return canvas
