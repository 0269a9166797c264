"""
Keyboard teleoperation of the IK target.

Translates key presses into action vectors for ``PickPlaceSimEnv``: six keys
drag the IK target along the world axes, one toggles the gripper, and one
pulses the scripted pick-and-place sequence.  A terminal-based mode is
provided for headless sessions.

Key bindings:
    W / S: +y / -y (up / down)
    A / D: -x / +x
    R / F: +z / -z
    G: toggle gripper
    P: run pick-and-place sequence
    Q: quit

Classes:
    KeyboardTeleop: Maps keyboard input to env actions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

import numpy as np

from robosim.envs.pick_place import ACTION_DIM

_AXIS_KEYS: Dict[str, Tuple[int, float]] = {
    "w": (1, 1.0),
    "s": (1, -1.0),
    "d": (0, 1.0),
    "a": (0, -1.0),
    "r": (2, 1.0),
    "f": (2, -1.0),
}


@dataclass
class KeyboardTeleop:
    """Maps keyboard input to IK-target drag actions.

    When Pygame is available key-down / key-up events are tracked in real
    time so held keys keep dragging the target.  Otherwise single-character
    commands are read from stdin and apply for one step each.

    Attributes:
        speed: Magnitude of the drag component per held key.
        gripper_open: Gripper command sent with every action.
        key_state: Which drag keys are currently held.
        trigger_pending: Whether the next action pulses the sequence.
    """

    speed: float = 1.0
    gripper_open: bool = True
    key_state: Dict[str, bool] = field(
        default_factory=lambda: {key: False for key in _AXIS_KEYS}
    )
    trigger_pending: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_action(self) -> np.ndarray:
        """Return the action for the current key state and consume any trigger.

        Returns:
            1-D float32 array of shape ``(5,)``: drag (3), gripper, trigger.
        """
        action = np.zeros(ACTION_DIM, dtype=np.float32)
        action[:3] = self._keys_to_delta()
        action[3] = 1.0 if self.gripper_open else -1.0
        action[4] = 1.0 if self.trigger_pending else 0.0
        self.trigger_pending = False
        return action

    def process_pygame_events(self) -> bool:
        """Pump Pygame key events and update state accordingly.

        Returns:
            *False* if a QUIT event or the quit key was received.

        Raises:
            ImportError: If Pygame is not installed.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError(
                "Pygame required for real-time teleop: pip install pygame"
            ) from exc
        for event in pygame.event.get((pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP)):
            if event.type == pygame.QUIT:
                return False
            if not self._handle_pygame_key_event(event, pygame):
                return False
        return True

    def process_terminal_input(self, char: str) -> bool:
        """Update state from a single-character terminal command.

        Args:
            char: Single character read from stdin.

        Returns:
            *False* if the quit character was received; *True* otherwise.
        """
        self._reset_key_state()
        char = char.strip().lower()[:1]
        if char == "q":
            return False
        self._press(char)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _press(self, char: str) -> None:
        if char in self.key_state:
            self.key_state[char] = True
        elif char == "g":
            self.gripper_open = not self.gripper_open
        elif char == "p":
            self.trigger_pending = True

    def _keys_to_delta(self) -> np.ndarray:
        """Convert held keys to an (x, y, z) drag vector."""
        delta = np.zeros(3, dtype=np.float32)
        for key, held in self.key_state.items():
            if held:
                axis, sign = _AXIS_KEYS[key]
                delta[axis] += sign * self.speed
        return np.clip(delta, -1.0, 1.0)

    def _handle_pygame_key_event(self, event: object, pygame_module: object) -> bool:
        """Apply one KEYDOWN / KEYUP event.

        Args:
            event: Pygame event object.
            pygame_module: The ``pygame`` module (passed to avoid re-import).

        Returns:
            *False* when the quit key was pressed.
        """
        pg = pygame_module
        char = pg.key.name(event.key)
        if char == "q" and event.type == pg.KEYDOWN:
            return False
        if char in self.key_state:
            self.key_state[char] = event.type == pg.KEYDOWN
        elif event.type == pg.KEYDOWN:
            self._press(char)
        return True

    def _reset_key_state(self) -> None:
        """Release all drag keys before applying a terminal command."""
        for key in self.key_state:
            self.key_state[key] = False
