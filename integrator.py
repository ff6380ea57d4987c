"""
Fixed-step integration of the pendulum state
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from config import STRING_LENGTH, SimulationEnvironment
from equations import build_acceleration
from vector import Vector


def step_pendulum(phi: Vector, environment: SimulationEnvironment) -> Vector:
    """
    Advance ``(phi, phi_dot)`` by one classical Runge-Kutta 4 step of size
    ``environment.time_step``. Returns a new vector; NaN and inf propagate.
    """
    dt = environment.time_step
    acceleration = build_acceleration(environment.gravity, environment.string_length)

    k1 = Vector(
        dt * phi[1],
        dt * acceleration(phi[0]),
    )
    k2 = Vector(
        dt * (phi[1] + k1[1] / 2),
        dt * acceleration(phi[0] + k1[0] / 2),
    )
    k3 = Vector(
        dt * (phi[1] + k2[1] / 2),
        dt * acceleration(phi[0] + k2[0] / 2),
    )
    k4 = Vector(
        dt * (phi[1] + k3[1]),
        dt * acceleration(phi[0] + k3[0]),
    )

    return phi + (k1 + k2 * 2 + k3 * 2 + k4) * (1 / 6)


def advance_azimuth(omega: Vector, dt: float) -> Vector:
    """Explicit Euler step of the azimuth; the rate stays fixed for the run."""
    return Vector(omega[0] + dt * omega[1], omega[1])


def initial_state(params, string_length: float = STRING_LENGTH) -> Tuple[Vector, Vector]:
    """
    Starting ``(phi, phi_dot)`` and ``(omega, omega_rate)`` for a run.

    The tip starts at rest radially at planar radius ``initial_radius``.
    The azimuth rate is ``v0 / |r0|`` and is not recomputed as phi changes.
    A zero radius gives an infinite (or NaN) rate, which propagates.
    """
    r0 = float(params.initial_radius)
    phi = Vector(math.asin(r0 / string_length), 0.0)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        rate = float(np.float64(params.initial_velocity) / abs(r0))
    omega = Vector(float(params.initial_omega), rate)
    return phi, omega
