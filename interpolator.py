"""
Cubic interpolation through four consecutive samples
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from config import INTERPOLATION_DENSITY, INTERPOLATION_POINTS
from errors import InvalidInterpolationInput
from vector import Vector

# Samples run half a unit past the last control point so each frame
# overlaps the start of the next one.
INTERPOLATION_EXTENT = INTERPOLATION_POINTS - 0.5

Coefficients = Tuple[Vector, Vector, Vector, Vector]


def fit_cubic(points: Sequence[Vector]) -> Coefficients:
    """
    Coefficients of P(t) = c3 t^3 + c2 t^2 + c1 t + c0
    with P(0) = p0, P(1) = p1, P(2) = p2 and P(3) = p3.
    """
    if len(points) != INTERPOLATION_POINTS:
        raise InvalidInterpolationInput(
            f"cubic fit needs exactly {INTERPOLATION_POINTS} points, got {len(points)}"
        )
    p0, p1, p2, p3 = points

    c0 = p0
    c1 = p0 * (-11 / 6) + p1 * 3 + p2 * (-3 / 2) + p3 * (1 / 3)
    c2 = p0 + p1 * (-5 / 2) + p2 * 2 + p3 * (-1 / 2)
    c3 = p0 * (-1 / 6) + p1 * (1 / 2) + p2 * (-1 / 2) + p3 * (1 / 6)
    return c0, c1, c2, c3


def evaluate_cubic(coefficients: Coefficients, t: float) -> Vector:
    c0, c1, c2, c3 = coefficients
    return c0 + c1 * t + c2 * (t * t) + c3 * (t ** 3)


def interpolate_points(
    points: Sequence[Vector],
    density: int = INTERPOLATION_DENSITY,
) -> List[Vector]:
    """
    Densify four samples into a polyline evaluated at t = i / density,
    1 <= i < INTERPOLATION_EXTENT * density. t = 0 itself is not emitted.
    """
    coefficients = fit_cubic(points)

    interpolated = []
    i = 1
    while i < INTERPOLATION_EXTENT * density:
        interpolated.append(evaluate_cubic(coefficients, i / density))
        i += 1
    return interpolated
