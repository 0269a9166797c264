"""
Dataclass configuration for a simulation run.

Holds the per-run settings (frame rate, episode length, seeding, IK effort per
tick, render size).  The kinematic and sequencing constants themselves are
fixed and live in ``robosim.utils.constants``.

Classes:
    SimConfig: Settings shared by the controller, the env, and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from robosim.utils.constants import (
    DEFAULT_FPS,
    DEFAULT_IK_TARGET,
    DEFAULT_RENDER_HEIGHT,
    DEFAULT_RENDER_WIDTH,
    IK_DEFAULT_ITERATIONS,
)


@dataclass
class SimConfig:
    """Configuration for one simulation run.

    Attributes:
        task: Human-readable task identifier.
        fps: Simulation frames per second; one tick per frame.
        episode_length: Maximum env steps per episode.
        ik_iterations: CCD passes per tick.
        obs_type: Observation mode (``'agent_pos'`` or ``'pixels_agent_pos'``).
        render_mode: Gymnasium render mode (``'rgb_array'``, ``'human'``).
        observation_height: Pixel height of rendered observations.
        observation_width: Pixel width of rendered observations.
        seed: Random seed for the object spawner.
        spawn_default_objects: Start with the three default boxes.
        initial_ik_target: IK target before the user or sequencer moves it.
    """

    task: str = "PickPlace-RoboSim-v0"
    fps: int = DEFAULT_FPS
    episode_length: int = 900
    ik_iterations: int = IK_DEFAULT_ITERATIONS
    obs_type: str = "agent_pos"
    render_mode: str = "rgb_array"
    observation_height: int = DEFAULT_RENDER_HEIGHT
    observation_width: int = DEFAULT_RENDER_WIDTH
    seed: int = 42
    spawn_default_objects: bool = True
    initial_ik_target: Tuple[float, float, float] = DEFAULT_IK_TARGET

    def __post_init__(self) -> None:
        """Validate numeric settings.

        Raises:
            ValueError: On non-positive fps, episode length, or render size,
                or negative IK iterations.
        """
        if self.fps <= 0:
            raise ValueError("`fps` must be positive")
        if self.episode_length <= 0:
            raise ValueError("`episode_length` must be positive")
        if self.ik_iterations < 0:
            raise ValueError("`ik_iterations` must be non-negative")
        if self.observation_height <= 0 or self.observation_width <= 0:
            raise ValueError("Render size must be positive")

    @property
    def dt(self) -> float:
        """Seconds per tick."""
        return 1.0 / self.fps
