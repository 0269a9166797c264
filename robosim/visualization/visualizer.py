"""
Real-time Pygame viewer for the simulator.

Blits rendered side-view frames to a window and overlays telemetry: sequence
phase, gripper state, tool-tip position, and the held object.

Classes:
    SimVisualizer: Live rendering with a HUD.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np

from robosim.sim.controller import SimSnapshot
from robosim.utils.constants import COLOR_TEXT, JOINT_NAMES


def hud_lines(snapshot: SimSnapshot) -> List[str]:
    """Format the telemetry shown over a frame.

    Args:
        snapshot: State committed by the last tick.

    Returns:
        Lines of text, top to bottom.
    """
    tip = snapshot.tip
    gripper = "open" if snapshot.gripper_open else "closed"
    joints = " ".join(f"{name}={snapshot.joints.get(name):+.2f}" for name in JOINT_NAMES)
    lines = [
        f"Tick: {snapshot.tick}  Phase: {snapshot.phase.value}",
        f"Gripper: {gripper}  Held: {snapshot.held_id or '-'}",
        f"Tip: ({tip[0]:.2f}, {tip[1]:.2f}, {tip[2]:.2f})",
        joints,
    ]
    if snapshot.ik_mode:
        lines.append("IK MODE ACTIVE")
    return lines


@dataclass
class SimVisualizer:
    """Pygame-based viewer for the simulator.

    Call ``render_frame`` each tick with the rendered image and the snapshot
    it was drawn from; the viewer blits the image plus a HUD overlay.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        fps: Target frames per second.
        window_title: Caption displayed in the title bar.
    """

    width: int = 640
    height: int = 640
    fps: int = 30
    window_title: str = "RoboSim 6-DOF Manipulator"
    _screen: Optional[Any] = None
    _clock: Optional[Any] = None

    # ------------------------------------------------------------------
    # Initialisation / teardown
    # ------------------------------------------------------------------

    def init_display(self) -> None:
        """Create the Pygame window and clock.

        Raises:
            ImportError: If Pygame is not installed.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError("Pygame required: pip install pygame") from exc
        pygame.init()
        self._screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.window_title)
        self._clock = pygame.time.Clock()

    def close(self) -> None:
        """Destroy the Pygame window and quit Pygame."""
        if self._screen is None:
            return
        import pygame

        pygame.quit()
        self._screen = None
        self._clock = None

    # ------------------------------------------------------------------
    # Live rendering
    # ------------------------------------------------------------------

    def _image_to_surface(self, image: np.ndarray) -> Any:
        """Convert an (H, W, 3) uint8 NumPy image to a Pygame surface."""
        import pygame

        return pygame.surfarray.make_surface(np.transpose(image, (1, 0, 2)))

    def _scale_surface(self, surface: Any) -> Any:
        import pygame

        return pygame.transform.scale(surface, (self.width, self.height))

    def _draw_hud(self, lines: List[str]) -> None:
        """Draw HUD text lines from the top-left corner down."""
        import pygame

        font = pygame.font.SysFont("monospace", 14)
        for idx, text in enumerate(lines):
            rendered = font.render(text, True, COLOR_TEXT)
            self._screen.blit(rendered, (8, 4 + idx * 18))

    def render_frame(self, image: np.ndarray, snapshot: SimSnapshot) -> bool:
        """Blit one frame to the window with HUD overlay.

        Args:
            image: (H, W, 3) uint8 RGB image.
            snapshot: State the image was rendered from.

        Returns:
            True if still running, False if user closed the window.
        """
        if self._screen is None:
            self.init_display()
        surface = self._image_to_surface(image)
        self._screen.blit(self._scale_surface(surface), (0, 0))
        self._draw_hud(hud_lines(snapshot))
        return self._flip_display()

    def _pump_quit_events(self) -> bool:
        """Consume QUIT events only, leaving key events for the teleop.

        Returns:
            True if the window should stay open, False on quit.
        """
        import pygame

        return not pygame.event.get(pygame.QUIT)

    def _flip_display(self) -> bool:
        """Update the display, check for quit, and tick the clock.

        Returns:
            True if still running, False if user closed the window.
        """
        import pygame

        pygame.display.flip()
        alive = self._pump_quit_events()
        if self._clock is not None:
            self._clock.tick(self.fps)
        return alive
