"""
Pendulum Drawing Animation
Matplotlib drawing surface and frame scheduler for the orchestrator
"""

from __future__ import annotations

import math
from typing import Callable, List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, FFMpegWriter
from matplotlib.collections import LineCollection

from config import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DEFAULT_COLORS,
    INTERPOLATION_POINTS,
    STRING_LENGTH,
    SimulationParameters,
    timestep_from_resolution,
)
from orchestrator import PendulumAnimation, SynchronousScheduler, start_drawing


class MatplotlibSurface:
    """
    Canvas-style path API on top of a matplotlib Axes.

    Pixel coordinates with the y axis pointing down. Strokes are buffered and
    turned into one LineCollection per ``present`` call.
    """

    def __init__(self, ax, dpi: float = 100):
        self.ax = ax
        self.dpi = dpi
        self.stroke_color = "white"
        self.line_width = 1.0
        self.line_join = "miter"
        self._path: List = []
        self._segments: List = []
        self._colors: List = []

    def clear(self, width, height) -> None:
        ax = self.ax
        ax.cla()
        ax.set_facecolor('black')
        ax.set_aspect('equal')
        ax.axis('off')
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        self._segments = []
        self._colors = []

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
        if len(self._path) < 2:
            return
        self._segments.append(list(self._path))
        self._colors.append(self.stroke_color)

    def present(self) -> list:
        """Move buffered strokes onto the axes; returns the new artists."""
        if not self._segments:
            return []
        collection = LineCollection(
            self._segments,
            colors=self._colors,
            # canvas widths are pixels, matplotlib wants points
            linewidths=self.line_width * 72.0 / self.dpi,
            joinstyle=self.line_join,
            capstyle='round',
        )
        self.ax.add_collection(collection)
        self._segments = []
        self._colors = []
        return [collection]


class MatplotlibScheduler:
    """Runs one scheduled frame per FuncAnimation tick."""

    def __init__(self, surface: MatplotlibSurface):
        self.surface = surface
        self.frames_run = 0
        self._pending: Optional[Callable[[], None]] = None

    def schedule(self, callback: Callable[[], None]) -> None:
        self._pending = callback

    def frames(self):
        while self._pending is not None:
            yield self.frames_run

    def update(self, frame):
        callback, self._pending = self._pending, None
        if callback is not None:
            callback()
            self.frames_run += 1
            if self.frames_run % 100 == 0:
                print(f"Animating: frame {self.frames_run}", end="\r")
        return self.surface.present()


def estimate_frames(params: SimulationParameters, frame_samples: int = INTERPOLATION_POINTS - 1) -> int:
    """Upper bound on frames for a run, used to size saved videos."""
    dt = timestep_from_resolution(params.resolution)
    return int(math.ceil(params.final_time / (dt * frame_samples))) + 1


def animate_pendulum(
    params: Optional[SimulationParameters] = None,
    colors: Sequence = DEFAULT_COLORS,
    save_video: bool = False,
    video_filename: str = 'pendulum_drawing.mp4',
    image_filename: Optional[str] = None,
    playback_speed: float = 1.0,
    dpi: int = 100,
    string_length: float = STRING_LENGTH,
) -> PendulumAnimation:
    """
    Draw a pendulum run with matplotlib.

    Parameters
    ----------
    params : SimulationParameters
        Run parameters (defaults when None).
    colors : sequence
        Palette; the first ``params.num_colors`` entries are used.
    save_video : bool
        Save the animation with ffmpeg instead of showing a window.
    video_filename : str
        Output video filename.
    image_filename : str | None
        When given, run the whole drawing without animation and save the
        finished picture here instead.
    playback_speed : float
        Relative playback multiplier (>1 faster, <1 slower).
    dpi : int
        Figure resolution; the figure is sized to the canvas in pixels.
    """
    params = params or SimulationParameters()

    playback_speed = max(playback_speed, 1e-3)
    base_fps = 60
    render_fps = max(1, int(round(base_fps * playback_speed)))

    fig = plt.figure(figsize=(CANVAS_WIDTH / dpi, CANVAS_HEIGHT / dpi), dpi=dpi, facecolor='black')
    ax = fig.add_axes([0, 0, 1, 1])
    surface = MatplotlibSurface(ax, dpi=dpi)

    try:
        if image_filename is not None:
            scheduler = SynchronousScheduler()
            animation = start_drawing(params, surface, scheduler, colors, string_length)
            scheduler.run()
            surface.present()
            fig.savefig(image_filename, facecolor='black', dpi=dpi)
            print(f"Drawing saved to {image_filename} ({animation.frames_drawn} frames)")
            return animation

        scheduler = MatplotlibScheduler(surface)
        animation = start_drawing(params, surface, scheduler, colors, string_length)

        print(f"Creating animation at {render_fps} fps...")
        anim = FuncAnimation(
            fig,
            scheduler.update,
            frames=scheduler.frames,
            init_func=lambda: [],
            interval=1000 / render_fps,
            repeat=False,
            save_count=estimate_frames(params),
            cache_frame_data=False,
        )

        if save_video:
            print(f"Saving video to {video_filename}...")
            writer = FFMpegWriter(fps=render_fps, bitrate=5000, extra_args=['-vcodec', 'libx264'])
            anim.save(video_filename, writer=writer, dpi=dpi)
            print("Video saved successfully!")
        else:
            print("Displaying animation (close window to exit)...")
            plt.show()
        return animation
    finally:
        plt.close(fig)
