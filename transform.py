"""
Spherical pendulum angles to drawing-surface coordinates
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from config import CENTER_X, CENTER_Y, STRING_LENGTH
from vector import Vector


def to_cartesian(
    phi: float,
    omega: float,
    string_length: float = STRING_LENGTH,
    center: Tuple[float, float] = (CENTER_X, CENTER_Y),
) -> Vector:
    """
    Project the pendulum tip onto the drawing plane.

    The planar radius is ``L sin(phi)``; the azimuth ``omega`` sets its
    direction around the canvas centre. Infinite angles come out as NaN.
    """
    r = string_length * np.sin(phi)
    return Vector(
        r * np.cos(omega) + center[0],
        r * np.sin(omega) + center[1],
    )
