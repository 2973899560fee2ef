import pytest

from ringchart.animation.frame_clock import RecordingClock
from ringchart.core.arc import ArcDescriptor
from ringchart.core.geometry import RectF
from ringchart.host import HeadlessHost, RecordingRenderer


def test_pump_runs_callbacks_registered_before_the_frame():
    host = HeadlessHost()
    seen: list[tuple[str, float]] = []

    def first(t: float) -> None:
        seen.append(("first", t))
        host.post_frame_callback(second)

    def second(t: float) -> None:
        seen.append(("second", t))

    host.post_frame_callback(first)
    assert host.pump(10.0) == 1
    assert seen == [("first", 10.0)]
    assert host.has_pending_frames is True

    assert host.pump(20.0) == 1
    assert seen == [("first", 10.0), ("second", 20.0)]
    assert host.pump(30.0) == 0


def test_run_frames_pumps_until_idle_on_clock_time():
    host = HeadlessHost()
    times: list[float] = []

    def callback(t: float) -> None:
        times.append(t)
        if len(times) < 4:
            host.post_frame_callback(callback)

    host.post_frame_callback(callback)
    frame_indices: list[int] = []
    frames = host.run_frames(RecordingClock(fps=50.0), on_frame=frame_indices.append)

    assert frames == 4
    assert times == [0.0, 20.0, 40.0, 60.0]
    assert frame_indices == [0, 1, 2, 3]


def test_run_frames_respects_max_frames():
    host = HeadlessHost()

    def forever(t: float) -> None:
        host.post_frame_callback(forever)

    host.post_frame_callback(forever)
    assert host.run_frames(RecordingClock(fps=60.0), max_frames=5) == 5
    assert host.has_pending_frames is True


def test_invalidate_is_counted_and_density_is_validated():
    host = HeadlessHost(density=3.0, supports_animation=False)
    host.invalidate()
    host.invalidate()

    assert host.invalidation_count == 2
    assert host.density == 3.0
    assert host.supports_animation is False
    with pytest.raises(ValueError):
        HeadlessHost(density=0.0)


def test_recording_renderer_keeps_order():
    renderer = RecordingRenderer()
    arcs = [
        ArcDescriptor(rect=RectF(0, 0, 10, 10), start_angle=0.0, sweep_angle=s, color=0xFF000000, stroke_width=1.0)
        for s in (360.0, 90.0)
    ]
    for arc in arcs:
        renderer.draw_arc(arc)

    assert renderer.arcs == arcs
    renderer.clear()
    assert renderer.arcs == []
