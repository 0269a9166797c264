#!/usr/bin/env python3
"""
Main entry point for the RoboSim 6-DOF pick-and-place simulator.

Runs the kinematics core headlessly on sim time, from a terminal, or in a
Pygame window.  Run directly with ``python run_sim.py`` or via the installed
``robosim`` command.

Usage examples::

    # Headless: run three pick-and-place cycles and print a summary
    python run_sim.py --mode auto --cycles 3

    # Terminal teleoperation of the IK target
    python run_sim.py --mode teleop

    # Live Pygame window with keyboard control (P runs the sequence)
    python run_sim.py --mode visualize --autostart
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict

import numpy as np

from robosim.envs.pick_place import ACTION_DIM, PickPlaceSimEnv
from robosim.sim.config import SimConfig
from robosim.sim.controller import SimulationController
from robosim.teleop.keyboard_teleop import KeyboardTeleop
from robosim.utils.clock import ManualClock
from robosim.visualization.renderer import render_scene
from robosim.visualization.visualizer import SimVisualizer

# Safety cap on ticks per sequence run in auto mode (one minute of sim time at 30 fps)
_MAX_TICKS_PER_RUN = 1800


# ======================================================================
# Configuration builders
# ======================================================================


def _build_config(args: argparse.Namespace) -> SimConfig:
    """Construct a ``SimConfig`` from parsed CLI arguments.

    Args:
        args: Namespace from ``argparse``.

    Returns:
        A ``SimConfig`` instance.
    """
    return SimConfig(
        fps=args.fps,
        episode_length=args.episode_length,
        ik_iterations=args.ik_iterations,
        seed=args.seed,
        observation_width=args.width,
        observation_height=args.height,
    )


# ======================================================================
# Mode runners
# ======================================================================


def _run_cycle(controller: SimulationController, clock: ManualClock) -> int:
    """Trigger one sequence and tick until it completes.

    Returns:
        Number of ticks the run took (0 when it could not start).
    """
    if not controller.run_sequence():
        return 0
    ticks = 0
    while controller.is_sequence_running and ticks < _MAX_TICKS_PER_RUN:
        clock.advance(controller.config.dt)
        controller.tick()
        ticks += 1
    return ticks


def _settle(controller: SimulationController, clock: ManualClock, ticks: int) -> None:
    """Tick with no sequence so released objects finish falling."""
    for _ in range(ticks):
        clock.advance(controller.config.dt)
        controller.tick()


def _run_auto(cfg: SimConfig, args: argparse.Namespace) -> None:
    """Run pick-and-place cycles headlessly on sim time and report results.

    Args:
        cfg: Simulation configuration.
        args: Parsed CLI arguments.
    """
    clock = ManualClock()
    controller = SimulationController(config=cfg, clock=clock)
    for _ in range(args.spawn):
        controller.spawn_object()

    for cycle in range(1, args.cycles + 1):
        ticks = _run_cycle(controller, clock)
        if ticks == 0:
            print(f"Cycle {cycle}: nothing left in the pick area, stopping.")
            break
        _settle(controller, clock, cfg.fps)
        tip = controller.chain().end_effector
        print(
            f"Cycle {cycle}: {ticks} ticks ({ticks * cfg.dt:.2f}s sim), "
            f"tip=({tip[0]:.2f}, {tip[1]:.2f}, {tip[2]:.2f})"
        )

    for obj in controller.objects:
        x, y, z = obj.position
        print(f"  {obj.shape.value:<8} {obj.id:<10} ({x:+.2f}, {y:.2f}, {z:+.2f})")


def _step_episode(env: PickPlaceSimEnv, action: np.ndarray) -> Dict[str, Any]:
    """Step the env once, starting a new episode when the current one ends.

    Args:
        env: Simulation environment.
        action: Action vector for this step.

    Returns:
        The info dict of the step.
    """
    _, _, terminated, truncated, info = env.step(action)
    if terminated or truncated:
        if terminated:
            print(f"Object placed in drop area (phase={info['phase']}).")
        else:
            print("Episode length reached.")
        env.reset()
    return info


def _run_teleop(cfg: SimConfig, args: argparse.Namespace) -> None:
    """Drive the IK target from terminal input, one command per line.

    Args:
        cfg: Simulation configuration.
        args: Parsed CLI arguments.
    """
    env = PickPlaceSimEnv(cfg)
    teleop = KeyboardTeleop()
    env.reset(seed=args.seed)
    print("Teleop: w/s up/down, a/d x, r/f z, g gripper, p run sequence, q quit.")
    for line in sys.stdin:
        if not teleop.process_terminal_input(line):
            break
        info = {}
        for _ in range(args.steps_per_command):
            info = _step_episode(env, teleop.get_action())
        tip = env.snapshot.tip
        print(
            f"phase={info.get('phase')} tip=({tip[0]:.2f}, {tip[1]:.2f}, {tip[2]:.2f}) "
            f"held={info.get('held_id')}"
        )
    env.close()


def _run_visualize(cfg: SimConfig, args: argparse.Namespace) -> None:
    """Run the simulator in a Pygame window with keyboard control.

    Args:
        cfg: Simulation configuration.
        args: Parsed CLI arguments.
    """
    env = PickPlaceSimEnv(cfg)
    env.reset(seed=args.seed)
    teleop = KeyboardTeleop(trigger_pending=args.autostart)
    viz = SimVisualizer(width=cfg.observation_width, height=cfg.observation_height, fps=cfg.fps)
    _run_visualize_loop(env, teleop, viz)
    viz.close()
    env.close()


def _run_visualize_loop(env: PickPlaceSimEnv, teleop: KeyboardTeleop, viz: SimVisualizer) -> None:
    """Step the env with keyboard actions, rendering every frame.

    Args:
        env: Simulation environment.
        teleop: Keyboard teleop interface.
        viz: Visualizer instance.
    """
    viz.init_display()
    alive = True
    while alive:
        if not teleop.process_pygame_events():
            break
        _step_episode(env, teleop.get_action())
        image = render_scene(env.snapshot, viz.width, viz.height)
        alive = viz.render_frame(image, env.snapshot)


# ======================================================================
# CLI
# ======================================================================


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="RoboSim 6-DOF pick-and-place simulator")
    parser.add_argument("--mode", choices=["auto", "teleop", "visualize"], default="auto")
    parser.add_argument("--cycles", type=int, default=3)
    parser.add_argument("--spawn", type=int, default=0, help="extra random objects to spawn")
    parser.add_argument("--fps", type=int, default=30)
    parser.add_argument("--episode-length", type=int, default=900)
    parser.add_argument("--ik-iterations", type=int, default=5)
    parser.add_argument("--steps-per-command", type=int, default=5)
    parser.add_argument("--width", type=int, default=640)
    parser.add_argument("--height", type=int, default=640)
    parser.add_argument("--autostart", action="store_true", help="run a sequence at start")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    return parser.parse_args(argv)


# ======================================================================
# Dispatch
# ======================================================================


# Mapping from mode name to runner function
_MODE_DISPATCH = {
    "auto": _run_auto,
    "teleop": _run_teleop,
    "visualize": _run_visualize,
}


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, configure logging, and run the selected mode."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    np.set_printoptions(precision=3, suppress=True)

    cfg = _build_config(args)
    print(f"Mode: {args.mode} | fps={cfg.fps} | IK iterations={cfg.ik_iterations} | seed={cfg.seed}")
    print(f"Action layout: {ACTION_DIM} (dx, dy, dz, gripper, trigger)")
    print("-" * 60)

    runner = _MODE_DISPATCH[args.mode]
    runner(cfg, args)


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------
if __name__ == "__main__":
    main()
