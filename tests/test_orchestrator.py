import math

import pytest

import orchestrator
from config import CENTER_X, CENTER_Y, SimulationParameters
from errors import ConfigurationOutOfRange, InvalidInterpolationInput
from orchestrator import AnimationState, SynchronousScheduler, start_drawing


class FakeSurface:
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name,) + args)
        return record

    def strokes(self):
        """(color, [points]) for every stroked path."""
        result = []
        color, path = None, []
        for call in self.calls:
            if call[0] == "set_stroke_color":
                color = call[1]
            elif call[0] == "begin_path":
                path = []
            elif call[0] in ("move_to", "line_to"):
                path.append(call[1:])
            elif call[0] == "stroke":
                result.append((color, path))
        return result


def near_rest_params(**overrides):
    values = dict(
        gravity=9.8,
        initial_radius=100,
        initial_omega=0,
        initial_velocity=0,
        resolution=0.99,
        final_time=1.0,
        color_speed=1.0,
        color_radius=10,
        color_width=3,
        num_colors=1,
    )
    values.update(overrides)
    return SimulationParameters(**values)


def test_near_rest_pendulum_end_to_end():
    surface = FakeSurface()
    scheduler = SynchronousScheduler()
    params = near_rest_params()

    animation = start_drawing(params, surface, scheduler, colors=["#ff0000"])
    assert animation.state is AnimationState.RUNNING
    scheduler.run()

    dt = 1 - 0.99
    assert animation.state is AnimationState.FINISHED
    assert scheduler.frames_run >= math.floor(1.0 / (dt * 3))
    assert scheduler.frames_run == animation.frames_drawn
    assert animation.last_frame.time >= 1.0
    assert animation.last_frame.phi[0] == pytest.approx(math.asin(100 / 20000), abs=1e-5)


def test_surface_is_prepared_before_first_frame():
    surface = FakeSurface()
    scheduler = SynchronousScheduler()
    animation = start_drawing(near_rest_params(), surface, scheduler, colors=["red"])

    assert surface.calls == [
        ("clear", 1920, 1920),
        ("set_line_width", 3.0),
        ("set_line_join", "round"),
    ]
    assert scheduler.pending == 1
    assert animation.frames_drawn == 0


def test_stroke_call_sequence():
    surface = FakeSurface()
    scheduler = SynchronousScheduler(max_frames=1)
    start_drawing(near_rest_params(), surface, scheduler, colors=["red"])
    scheduler.run()

    names = [call[0] for call in surface.calls[3:]]
    per_stroke = ["set_stroke_color", "begin_path", "move_to", "line_to", "line_to", "stroke"]
    # 17 interpolated points -> 15 overlapping triplets
    assert names == per_stroke * 15


def test_triplets_overlap_and_colors_interleave():
    surface = FakeSurface()
    scheduler = SynchronousScheduler(max_frames=1)
    start_drawing(near_rest_params(num_colors=2), surface, scheduler, colors=["red", "blue"])
    scheduler.run()

    strokes = surface.strokes()
    assert len(strokes) == 30
    assert [color for color, _ in strokes[:4]] == ["red", "blue", "red", "blue"]
    for color, path in strokes:
        assert len(path) == 3
    first_red, second_red = strokes[0][1], strokes[2][1]
    assert first_red[1:] == second_red[:2]


def test_markers_orbit_center_at_color_radius():
    # no tangential velocity keeps the azimuth at 0
    surface = FakeSurface()
    scheduler = SynchronousScheduler()
    start_drawing(
        near_rest_params(initial_velocity=0, color_speed=0.0, color_radius=25),
        surface, scheduler, colors=["red"],
    )
    scheduler.run()

    for _, path in surface.strokes():
        for x, y in path:
            assert x == pytest.approx(CENTER_X + 100 + 25, abs=0.1)
            assert y == pytest.approx(CENTER_Y, abs=0.1)


def test_frame_count_at_exact_horizon():
    scheduler = SynchronousScheduler()
    animation = start_drawing(
        near_rest_params(resolution=0.5, final_time=3.0), FakeSurface(), scheduler, colors=["red"]
    )
    scheduler.run()
    # elapsed time goes 1.5, 3.0; the second frame reaches the horizon
    assert animation.frames_drawn == 2
    assert scheduler.scheduled == 2


def test_out_of_range_radius_never_schedules():
    surface = FakeSurface()
    scheduler = SynchronousScheduler()
    with pytest.raises(ConfigurationOutOfRange):
        start_drawing(near_rest_params(initial_radius=25000), surface, scheduler, colors=["red"])
    assert scheduler.scheduled == 0
    assert surface.calls == []


@pytest.mark.parametrize("error", [InvalidInterpolationInput, ValueError])
def test_error_in_frame_aborts_run(monkeypatch, error):
    def broken(points, density):
        raise error("boom")

    monkeypatch.setattr(orchestrator, "interpolate_points", broken)
    scheduler = SynchronousScheduler()
    animation = start_drawing(near_rest_params(), FakeSurface(), scheduler, colors=["red"])

    with pytest.raises(error):
        scheduler.run()
    assert animation.state is AnimationState.FINISHED
    assert scheduler.pending == 0


def test_cannot_start_twice():
    animation = start_drawing(near_rest_params(), FakeSurface(), SynchronousScheduler(), colors=["red"])
    with pytest.raises(RuntimeError):
        animation.start()


def test_finished_animation_ignores_stale_frames():
    surface = FakeSurface()
    scheduler = SynchronousScheduler()
    animation = start_drawing(near_rest_params(), surface, scheduler, colors=["red"])
    scheduler.run()
    calls = len(surface.calls)

    animation.animate_frame(animation.last_frame)
    assert len(surface.calls) == calls
    assert scheduler.pending == 0


def test_infinite_azimuth_rate_runs_to_finished():
    surface = FakeSurface()
    scheduler = SynchronousScheduler()
    animation = start_drawing(
        near_rest_params(initial_radius=1e-10, initial_velocity=1e308, resolution=0.5, final_time=3.0),
        surface, scheduler, colors=["red"],
    )
    scheduler.run()

    assert math.isinf(animation.last_frame.omega[1])
    assert animation.state is AnimationState.FINISHED
    assert animation.frames_drawn == 2
    # the azimuth turns infinite after the first step, so later points are NaN
    assert any(math.isnan(x) for _, path in surface.strokes() for x, _ in path)


def frame_points(strokes):
    """Polyline of one track recovered from its overlapping triplets."""
    return [path[0] for _, path in strokes] + strokes[-1][1][1:]


def test_consecutive_frames_join_up():
    surface = FakeSurface()
    scheduler = SynchronousScheduler(max_frames=2)
    start_drawing(
        near_rest_params(
            initial_radius=8000, initial_velocity=4000, resolution=0.9,
            final_time=10.0, color_radius=0,
        ),
        surface, scheduler, colors=["red"],
    )
    scheduler.run()

    strokes = surface.strokes()
    assert len(strokes) == 30
    first = frame_points(strokes[:15])
    second = frame_points(strokes[15:])

    segment = max(math.dist(a, b) for a, b in zip(first, first[1:]))
    assert segment > 0
    # the next frame starts inside the tail of the previous one
    assert min(math.dist(second[0], p) for p in first) <= segment
    assert math.dist(first[-1], second[0]) <= 2 * segment
