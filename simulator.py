"""
Headless pendulum simulation
Fixed-step trajectories, a high-order scipy reference and full drawing runs
without a display.
"""

from __future__ import annotations

import time
from typing import List, Sequence, Tuple

import numpy as np
from scipy.integrate import solve_ivp

from config import DEFAULT_COLORS, STRING_LENGTH, SimulationEnvironment, SimulationParameters
from equations import build_equations_of_motion, specific_energy
from integrator import step_pendulum
from orchestrator import PendulumAnimation, SynchronousScheduler, start_drawing
from vector import Vector

REFERENCE_SOLVER_KWARGS = dict(
    method='DOP853',  # High-order Runge-Kutta method
    rtol=1e-12,
    atol=1e-14,
)


def simulate_trajectory(phi: Vector, environment: SimulationEnvironment, steps: int) -> np.ndarray:
    """
    Apply ``step_pendulum`` ``steps`` times.

    Returns
    -------
    trajectory : array, shape (steps + 1, 2)
        Rows of [phi, phi_dot], starting with the initial state.
    """
    trajectory = np.empty((steps + 1, 2))
    trajectory[0] = np.asarray(phi)
    for n in range(1, steps + 1):
        phi = step_pendulum(phi, environment)
        trajectory[n] = np.asarray(phi)
    return trajectory


def reference_trajectory(phi: Vector, environment: SimulationEnvironment, steps: int) -> np.ndarray:
    """
    Same grid as ``simulate_trajectory`` but integrated with scipy's
    adaptive DOP853 at tight tolerances.
    """
    dt = environment.time_step
    t = np.arange(steps + 1) * dt
    sol = solve_ivp(
        build_equations_of_motion(environment.gravity, environment.string_length),
        [0.0, t[-1]],
        np.asarray(phi),
        t_eval=t,
        **REFERENCE_SOLVER_KWARGS,
    )
    if not sol.success:
        raise RuntimeError(f"Reference integration failed: {sol.message}")
    return sol.y.T


def energy_drift(trajectory: np.ndarray, environment: SimulationEnvironment) -> float:
    """Largest deviation of specific energy from its initial value, relative to it."""
    energy = specific_energy(
        trajectory[:, 0], trajectory[:, 1], environment.gravity, environment.string_length
    )
    scale = abs(energy[0]) or 1.0
    return float(np.max(np.abs(energy - energy[0])) / scale)


class RecordingSurface:
    """Drawing surface that keeps every stroked path instead of rendering it."""

    def __init__(self):
        self.size: Tuple[float, float] = (0, 0)
        self.line_width = 1.0
        self.line_join = "miter"
        self.stroke_color = None
        self.paths: List[Tuple[object, List[Tuple[float, float]]]] = []
        self._path: List[Tuple[float, float]] = []

    def clear(self, width, height) -> None:
        self.size = (width, height)
        self.paths = []

    def set_stroke_color(self, value) -> None:
        self.stroke_color = value

    def set_line_width(self, value) -> None:
        self.line_width = value

    def set_line_join(self, style) -> None:
        self.line_join = style

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x, y) -> None:
        self._path.append((x, y))

    def line_to(self, x, y) -> None:
        self._path.append((x, y))

    def stroke(self) -> None:
        self.paths.append((self.stroke_color, list(self._path)))


def run_headless(
    params: SimulationParameters,
    colors: Sequence = DEFAULT_COLORS,
    string_length: float = STRING_LENGTH,
) -> Tuple[PendulumAnimation, RecordingSurface]:
    """Run a complete drawing against a RecordingSurface."""
    surface = RecordingSurface()
    scheduler = SynchronousScheduler()

    tic = time.time()
    animation = start_drawing(params, surface, scheduler, colors, string_length)
    scheduler.run()
    toc = time.time()

    print(
        f"Headless run drew {animation.frames_drawn} frames "
        f"({len(surface.paths)} strokes) in {toc - tic:.2f} s"
    )
    return animation, surface
