"""
Run the spherical pendulum drawing pipeline
"""

import logging
import sys

import animator
from config import DEFAULT_COLORS, STRING_LENGTH, SimulationParameters, timestep_from_resolution
from errors import ConfigurationOutOfRange

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_all")


def main():
    """
    Complete pipeline:
    1. Check the parameters against the string length
    2. Integrate, interpolate and stroke frame by frame
    3. Show, save a video or save the finished picture
    """

    print("=" * 60)
    print("SPHERICAL PENDULUM DRAWING")
    print("=" * 60)
    print()

    # Configuration
    params = SimulationParameters(
        gravity=9.8,
        initial_omega=0.0,       # starting azimuth (rad)
        initial_velocity=4000,   # tangential speed of the tip
        initial_radius=8000,     # must not exceed the string length
        resolution=0.9,          # integration step is 1 - resolution
        final_time=300,
        color_speed=2.0,
        color_radius=60,
        color_width=2,
        num_colors=3,
    )
    colors = DEFAULT_COLORS
    save_video = False
    image_filename = 'pendulum_drawing.png'  # None to animate instead

    print("Configuration:")
    print(f"  String length: {STRING_LENGTH:g}")
    print(f"  Starting radius: {params.initial_radius:g}")
    print(f"  Time step: {timestep_from_resolution(params.resolution):g}")
    print(f"  Duration: {params.final_time:g}")
    print(f"  Color tracks: {params.num_colors}")
    print()

    try:
        animation = animator.animate_pendulum(
            params,
            colors=colors,
            save_video=save_video,
            image_filename=image_filename,
        )
    except ConfigurationOutOfRange as err:
        log.error("Cannot start drawing: %s", err)
        return 1

    print()
    print("=" * 60)
    print(f"COMPLETE! {animation.frames_drawn} frames drawn")
    print("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())
