"""
Frame-by-frame drawing loop
Integrates, samples the colour tracks, interpolates and strokes, then asks
the scheduler for the next frame until the time horizon is reached.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from enum import Enum
from functools import partial
from typing import Callable, List, NamedTuple, Optional, Protocol, Sequence

import numpy as np

from config import (
    DEFAULT_COLORS,
    STRING_LENGTH,
    SimulationEnvironment,
    SimulationParameters,
    build_environment,
)
from integrator import advance_azimuth, initial_state, step_pendulum
from interpolator import interpolate_points
from transform import to_cartesian
from vector import Vector

logger = logging.getLogger(__name__)


class DrawingSurface(Protocol):
    def clear(self, width, height) -> None: ...
    def set_stroke_color(self, value) -> None: ...
    def set_line_width(self, value) -> None: ...
    def set_line_join(self, style) -> None: ...
    def begin_path(self) -> None: ...
    def move_to(self, x, y) -> None: ...
    def line_to(self, x, y) -> None: ...
    def stroke(self) -> None: ...


class FrameScheduler(Protocol):
    def schedule(self, callback: Callable[[], None]) -> None: ...


class SynchronousScheduler:
    """Runs scheduled frames back to back in an explicit loop."""

    def __init__(self, max_frames: Optional[int] = None):
        self.max_frames = max_frames
        self.scheduled = 0
        self.frames_run = 0
        self._queue: deque = deque()

    def schedule(self, callback: Callable[[], None]) -> None:
        self.scheduled += 1
        self._queue.append(callback)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run(self) -> int:
        """Drain the queue; returns the number of frames executed."""
        while self._queue:
            if self.max_frames is not None and self.frames_run >= self.max_frames:
                print(f"Stopping after {self.frames_run} frames")
                break
            callback = self._queue.popleft()
            callback()
            self.frames_run += 1
        return self.frames_run


class AnimationState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


class FrameState(NamedTuple):
    """Everything one frame hands over to the next."""
    phi: Vector
    omega: Vector
    time: float


class PendulumAnimation:
    """
    Single run of the drawing.

    Parameters
    ----------
    phi : Vector
        Initial (deflection angle, angular velocity).
    omega : Vector
        Initial (azimuth, azimuth rate).
    environment : SimulationEnvironment
        Frozen run configuration.
    surface : DrawingSurface
        Receives the canvas-style path calls.
    scheduler : FrameScheduler
        Decides when the next frame runs.
    """

    def __init__(
        self,
        phi: Vector,
        omega: Vector,
        environment: SimulationEnvironment,
        surface: DrawingSurface,
        scheduler: FrameScheduler,
    ):
        self.environment = environment
        self.surface = surface
        self.scheduler = scheduler
        self.state = AnimationState.IDLE
        self.frames_drawn = 0
        self.last_frame = FrameState(phi, omega, 0.0)

    def start(self) -> None:
        if self.state is not AnimationState.IDLE:
            raise RuntimeError(f"animation cannot start from state {self.state.value}")

        env = self.environment
        self.surface.clear(env.canvas_width, env.canvas_height)
        self.surface.set_line_width(env.color_width)
        self.surface.set_line_join("round")

        self.state = AnimationState.RUNNING
        print(
            f"Starting run: dt={env.time_step:g}, final_time={env.final_time:g}, "
            f"{env.num_colors} color tracks"
        )
        self._schedule(self.last_frame)

    def _schedule(self, frame: FrameState) -> None:
        self.scheduler.schedule(partial(self.animate_frame, frame))

    def animate_frame(self, frame: FrameState) -> None:
        if self.state is not AnimationState.RUNNING:
            return

        env = self.environment
        try:
            tracks, phi, omega = self.sample_tracks(frame)
            lines = [interpolate_points(track, env.interpolation_density) for track in tracks]
            self.stroke_lines(lines)
        except Exception:
            self.state = AnimationState.FINISHED
            logger.exception("Frame at t=%g aborted the run", frame.time)
            raise

        self.frames_drawn += 1
        time = frame.time + env.time_step * (env.interpolation_points - 1)
        self.last_frame = FrameState(phi, omega, time)

        if time < env.final_time:
            self._schedule(self.last_frame)
        else:
            self.state = AnimationState.FINISHED
            print(f"Run finished after {self.frames_drawn} frames (t={time:g})")

    def sample_tracks(self, frame: FrameState):
        """
        Take ``interpolation_points`` samples per colour track, stepping the
        pendulum between samples. Returns the tracks and the advanced state.
        """
        env = self.environment
        phi, omega = frame.phi, frame.omega
        tracks: List[List[Vector]] = [[] for _ in range(env.num_colors)]

        for i in range(env.interpolation_points):
            center = to_cartesian(phi[0], omega[0], env.string_length, env.center)

            for c in range(env.num_colors):
                offset = 2 * math.pi * c / env.num_colors
                delta = frame.time + i * env.time_step
                theta = env.color_speed * delta + offset
                tracks[c].append(
                    center + Vector(np.cos(theta), np.sin(theta)) * env.color_radius
                )

            if i < env.interpolation_points - 1:
                phi = step_pendulum(phi, env)
                omega = advance_azimuth(omega, env.time_step)

        return tracks, phi, omega

    def stroke_lines(self, lines: Sequence[Sequence[Vector]]) -> None:
        """Stroke overlapping triplets of every interpolated track."""
        env = self.environment
        surface = self.surface
        for i in range(len(lines[0]) - 2):
            for c in range(env.num_colors):
                first_point = lines[c][i]
                middle_point = lines[c][i + 1]
                last_point = lines[c][i + 2]

                surface.set_stroke_color(env.colors[c])
                surface.begin_path()
                surface.move_to(first_point[0], first_point[1])
                surface.line_to(middle_point[0], middle_point[1])
                surface.line_to(last_point[0], last_point[1])
                surface.stroke()


def start_drawing(
    params: SimulationParameters,
    surface: DrawingSurface,
    scheduler: FrameScheduler,
    colors: Sequence = DEFAULT_COLORS,
    string_length: float = STRING_LENGTH,
) -> PendulumAnimation:
    """
    Validate ``params``, build the run and schedule its first frame.
    Raises ConfigurationOutOfRange before touching the surface or scheduler.
    """
    environment = build_environment(params, colors, string_length)
    phi, omega = initial_state(params, string_length)

    animation = PendulumAnimation(phi, omega, environment, surface, scheduler)
    animation.start()
    return animation
