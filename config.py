"""
Run configuration: fixed drawing constants, user parameters and the
immutable environment snapshot handed to every component.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

from matplotlib.colors import TABLEAU_COLORS

from errors import ConfigurationOutOfRange

# Drawing surface (pixels)
CANVAS_WIDTH = 1920
CANVAS_HEIGHT = 1920
CENTER_X = CANVAS_WIDTH / 2
CENTER_Y = CANVAS_HEIGHT / 2

# Pendulum
STRING_LENGTH = 20000.0

# Number of line segments used to approximate the curve between two samples
INTERPOLATION_DENSITY = 5
# Number of samples fed to one polynomial fit
INTERPOLATION_POINTS = 4

MAX_COLORS = 10
DEFAULT_COLORS: Tuple[str, ...] = tuple(TABLEAU_COLORS.values())


@dataclass
class SimulationParameters:
    """
    Raw numeric fields as entered by the user.

    ``initial_omega`` is the starting azimuth and ``initial_velocity`` the
    tangential speed of the tip; the azimuth rate is derived from it and the
    starting radius.
    """
    gravity: float = 9.8
    initial_omega: float = 0.0
    initial_velocity: float = 4000.0
    initial_radius: float = 8000.0
    resolution: float = 0.9
    final_time: float = 300.0
    color_speed: float = 2.0
    color_radius: float = 60.0
    color_width: float = 2.0
    num_colors: int = 3


@dataclass(frozen=True)
class SimulationEnvironment:
    """Read-only snapshot of everything one run needs."""
    gravity: float
    time_step: float
    final_time: float
    color_speed: float
    color_radius: float
    color_width: float
    num_colors: int
    colors: Tuple = ()
    string_length: float = STRING_LENGTH
    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT
    interpolation_density: int = INTERPOLATION_DENSITY
    interpolation_points: int = INTERPOLATION_POINTS
    center: Tuple[float, float] = field(default=(CENTER_X, CENTER_Y))


def timestep_from_resolution(resolution: float) -> float:
    """Resolution closer to 1 means a finer integration step."""
    return 1.0 - resolution


def validate_parameters(
    params: SimulationParameters,
    colors: Sequence = DEFAULT_COLORS,
    string_length: float = STRING_LENGTH,
) -> None:
    """Reject parameters that cannot start a run. Nothing is built here."""
    if abs(params.initial_radius) > string_length:
        raise ConfigurationOutOfRange(
            "Starting point outside possible range for string "
            f"(|{params.initial_radius}| > {string_length})"
        )
    if params.resolution >= 1.0:
        raise ConfigurationOutOfRange(
            f"resolution must be below 1 for a positive time step, got {params.resolution}"
        )
    num_colors = int(params.num_colors)
    if num_colors != params.num_colors or not 1 <= num_colors <= MAX_COLORS:
        raise ConfigurationOutOfRange(
            f"num_colors must be an integer between 1 and {MAX_COLORS}, got {params.num_colors}"
        )
    if len(colors) < num_colors:
        raise ConfigurationOutOfRange(
            f"{num_colors} color tracks requested but only {len(colors)} colors supplied"
        )


def build_environment(
    params: SimulationParameters,
    colors: Sequence = DEFAULT_COLORS,
    string_length: float = STRING_LENGTH,
) -> SimulationEnvironment:
    """Validate ``params`` and freeze them into a SimulationEnvironment."""
    validate_parameters(params, colors, string_length)
    num_colors = int(params.num_colors)
    return SimulationEnvironment(
        gravity=float(params.gravity),
        time_step=timestep_from_resolution(params.resolution),
        final_time=float(params.final_time),
        color_speed=float(params.color_speed),
        color_radius=float(params.color_radius),
        color_width=float(params.color_width),
        num_colors=num_colors,
        colors=tuple(colors[:num_colors]),
        string_length=float(string_length),
    )
