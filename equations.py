"""
Pendulum equations of motion
Deflection angle only; the azimuth is advanced separately by the orchestrator.
"""

from __future__ import annotations

from typing import Callable

import numpy as np


def build_acceleration(gravity: float, string_length: float) -> Callable[[float], float]:
    """
    Angular acceleration of the deflection angle, phi'' = -(g/L) sin(phi).
    """

    ratio = gravity / string_length

    def acceleration(angle: float) -> float:
        return -ratio * np.sin(angle)

    return acceleration


def build_equations_of_motion(gravity: float, string_length: float) -> Callable:
    """
    First-order system in the ``f(t, u)`` form expected by scipy's solve_ivp.
    """

    acceleration = build_acceleration(gravity, string_length)

    def equations_of_motion(t: float, u: np.ndarray) -> np.ndarray:
        """Return time derivative of state [phi, phi_dot]."""
        return np.array([u[1], acceleration(u[0])])

    return equations_of_motion


def specific_energy(phi, phi_dot, gravity: float, string_length: float):
    """
    Mechanical energy per unit mass and per L^2: kinetic + potential,
    zero at rest hanging straight down. Accepts scalars or arrays.
    """
    phi = np.asarray(phi, dtype=float)
    phi_dot = np.asarray(phi_dot, dtype=float)
    return 0.5 * phi_dot**2 + gravity / string_length * (1.0 - np.cos(phi))
