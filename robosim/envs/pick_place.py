"""
Pick-and-place simulation environment (Gymnasium-compatible).

Wraps ``SimulationController`` so the arm can be driven step by step: the
agent nudges the IK target, commands the gripper, and may pulse the scripted
pick-and-place sequence.  Time inside the env is sim time, advanced by
``1 / fps`` per step, so sequence phases last the same number of steps on any
machine.

Classes:
    PickPlaceSimEnv: Gymnasium environment for the pick-and-place task.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from robosim.sim.config import SimConfig
from robosim.sim.controller import SimSnapshot, SimulationController
from robosim.utils.clock import ManualClock
from robosim.utils.constants import AREA_RADIUS, DROP_AREA_CENTER, REST_TOLERANCE
from robosim.visualization.renderer import render_scene

# action layout: [dx, dy, dz, gripper, trigger]
ACTION_DIM: int = 5
STATE_DIM: int = 10
IK_DRAG_STEP: float = 0.1


class PickPlaceSimEnv(gym.Env):
    """Gymnasium environment around the 6-DOF pick-and-place simulator.

    IK mode is always on: the first three action entries move the IK target
    (scaled by ``IK_DRAG_STEP``), the fourth opens (> 0) or closes (< 0) the
    gripper and leaves it alone at exactly 0, and a fifth entry above 0.5
    triggers the scripted sequence.
    While a sequence runs it owns the IK target and gripper and manual
    commands are ignored.

    Attributes:
        metadata: Gymnasium metadata with supported render modes.
        cfg: ``SimConfig`` controlling episode length, resolution, etc.
    """

    metadata: Dict[str, Any] = {"render_modes": ["rgb_array", "human"]}

    def __init__(self, cfg: SimConfig | None = None) -> None:
        """Initialise the environment.

        Args:
            cfg: Optional configuration; a default ``SimConfig`` is used when
                *None*.
        """
        super().__init__()
        self.cfg = cfg or SimConfig()
        self.render_mode = self.cfg.render_mode
        self._step_count = 0
        self._clock = ManualClock()
        self._controller = self._build_controller(self.cfg)
        self._snapshot = self._controller.snapshot()
        self._init_spaces()

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _init_spaces(self) -> None:
        """Define action and observation Gymnasium spaces."""
        self.action_space = spaces.Box(
            low=-1.0, high=1.0, shape=(ACTION_DIM,), dtype=np.float32
        )
        obs_dict: Dict[str, spaces.Space] = {}
        obs_dict["agent_pos"] = spaces.Box(
            low=-20.0, high=20.0, shape=(STATE_DIM,), dtype=np.float32
        )
        if "pixels" in self.cfg.obs_type:
            h, w = self.cfg.observation_height, self.cfg.observation_width
            obs_dict["pixels"] = spaces.Box(
                low=0, high=255, shape=(h, w, 3), dtype=np.uint8
            )
        self.observation_space = spaces.Dict(obs_dict)

    def _build_controller(self, cfg: SimConfig) -> SimulationController:
        self._clock = ManualClock()
        controller = SimulationController(config=cfg, clock=self._clock)
        controller.set_ik_mode(True)
        return controller

    @property
    def controller(self) -> SimulationController:
        return self._controller

    # ------------------------------------------------------------------
    # Gymnasium API
    # ------------------------------------------------------------------

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """Reset the environment and return the initial observation.

        Args:
            seed: Optional spawner seed.
            options: Unused; for Gymnasium compatibility.

        Returns:
            Tuple of (observation dict, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.cfg = replace(self.cfg, seed=seed)
        self._step_count = 0
        self._controller = self._build_controller(self.cfg)
        self._snapshot = self._controller.snapshot()
        return self._build_observation(), self._build_info(False)

    def _apply_manual_action(self, action: np.ndarray) -> None:
        """Drag the IK target and set the gripper unless a sequence owns them."""
        if self._controller.is_sequence_running:
            return
        self._controller.drag_ik_target(action[:3] * IK_DRAG_STEP)
        if action[3] > 0.0:
            self._controller.set_gripper_open(True)
        elif action[3] < 0.0:
            self._controller.set_gripper_open(False)

    def _compute_reward(self) -> Tuple[float, bool]:
        """Compute shaped reward and success flag.

        Returns:
            Tuple of (scalar reward, success boolean).
        """
        objects = self._snapshot.objects
        if not objects:
            return 0.0, False
        drop_xz = np.array([DROP_AREA_CENTER[0], DROP_AREA_CENTER[2]])
        dists = [float(np.linalg.norm(obj.position[[0, 2]] - drop_xz)) for obj in objects]
        success = any(
            d <= AREA_RADIUS
            and obj.id != self._snapshot.held_id
            and obj.position[1] <= obj.resting_height + REST_TOLERANCE
            for d, obj in zip(dists, objects)
        )
        return -min(dists), success

    def step(
        self, action: np.ndarray
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """Advance the environment by one tick.

        Args:
            action: 5-D array of IK target deltas (3), gripper command (1)
                and sequence trigger (1).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action = np.asarray(action, dtype=np.float64).reshape(-1)
        if action.shape[0] < ACTION_DIM:
            raise ValueError(f"Expected action of length {ACTION_DIM}, got {action.shape[0]}")
        if action[4] > 0.5:
            self._controller.run_sequence()
        self._apply_manual_action(action)
        self._clock.advance(self.cfg.dt)
        self._snapshot = self._controller.tick()
        self._step_count += 1
        reward, success = self._compute_reward()
        truncated = self._step_count >= self.cfg.episode_length
        return (
            self._build_observation(),
            reward,
            success,
            truncated,
            self._build_info(success),
        )

    # ------------------------------------------------------------------
    # Observation builder
    # ------------------------------------------------------------------

    def _build_state_vector(self) -> np.ndarray:
        """Joint angles (6), tool tip (3), gripper flag (1) as float32."""
        snap = self._snapshot
        gripper_val = np.array([1.0 if snap.gripper_open else 0.0])
        return np.concatenate([snap.joints.as_array(), snap.tip, gripper_val]).astype(
            np.float32
        )

    def _build_observation(self) -> Dict[str, np.ndarray]:
        """Assemble the observation dictionary.

        Returns:
            Dictionary with ``'agent_pos'`` and optionally ``'pixels'``.
        """
        obs: Dict[str, np.ndarray] = {"agent_pos": self._build_state_vector()}
        if "pixels" in self.cfg.obs_type:
            obs["pixels"] = self.render()
        return obs

    def _build_info(self, success: bool) -> Dict[str, Any]:
        return {
            "is_success": success,
            "phase": self._snapshot.phase.value,
            "held_id": self._snapshot.held_id,
        }

    @property
    def snapshot(self) -> SimSnapshot:
        return self._snapshot

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> np.ndarray:
        """Render the current scene as an RGB image.

        Returns:
            (H, W, 3) uint8 NumPy array.
        """
        return render_scene(
            self._snapshot, self.cfg.observation_width, self.cfg.observation_height
        )
