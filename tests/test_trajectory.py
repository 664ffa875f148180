import pytest

from slingshot.components.active_switch import ActiveSwitch
from slingshot.components.bubble import Bubble
from slingshot.components.projectile import FlightState
from slingshot.events.bus import EventBus, EVENT_POINTER_SAMPLE, EVENT_TICK
from slingshot.systems.grid_ops import get_color_queue, get_preview, get_projectile, get_score
from slingshot.systems.launch import LaunchSystem
from slingshot.systems.physics import ProjectileSystem
from slingshot.systems.trajectory import TrajectorySystem, predict_path, preview_for
from slingshot.utils.pointer_filter import PointerSample
from tests.helpers import make_world

LAYOUT = [(0, 4, 'red'), (0, 5, 'blue'), (0, 6, 'green'), (1, 5, 'red')]


def _aim(bus, x, y):
    bus.emit(EVENT_POINTER_SAMPLE, pointer=PointerSample(405.0, 685.0), grab=True)
    bus.emit(EVENT_POINTER_SAMPLE, pointer=PointerSample(x, y), grab=True)


def _state(world):
    ball = get_projectile(world)
    queue = get_color_queue(world)
    bubbles = sorted(
        (ent, b.row, b.col, b.x, b.y, b.color, world.component_for_entity(ent, ActiveSwitch).active)
        for ent, b in world.get_component(Bubble)
    )
    return (ball.x, ball.y, ball.vx, ball.vy, ball.state, ball.color,
            queue.current, queue.next, get_score(world).value, bubbles)


def test_preview_is_empty_unless_aiming():
    bus = EventBus()
    world = make_world(bus, LAYOUT)
    preview = preview_for(world)
    assert preview.points == [] and preview.impact is None


def test_preview_is_empty_for_a_pull_that_would_cancel():
    bus = EventBus()
    world = make_world(bus, LAYOUT)
    LaunchSystem(world, bus)
    _aim(bus, 400.0, 700.0)
    assert preview_for(world).points == []


def test_predict_path_stops_below_the_board():
    points, impact = predict_path((400.0, 850.0), (0.0, 40.0), [], 800, 900)
    assert impact is None
    assert points[-1][1] > 900


def test_preview_has_no_side_effects():
    bus = EventBus()
    world = make_world(bus, LAYOUT)
    LaunchSystem(world, bus)
    _aim(bus, 330.0, 840.0)
    before = _state(world)
    first = preview_for(world)
    for _ in range(5):
        again = preview_for(world)
        assert again.points == first.points
        assert again.impact == first.impact
    assert _state(world) == before


def test_preview_matches_live_flight():
    bus = EventBus()
    world = make_world(bus, LAYOUT)
    LaunchSystem(world, bus)
    ProjectileSystem(world, bus)
    _aim(bus, 330.0, 840.0)
    preview = preview_for(world)
    assert preview.impact is not None

    bus.emit(EVENT_POINTER_SAMPLE, pointer=None, grab=False)
    ball = get_projectile(world)
    assert ball.state is FlightState.FLYING
    live = [(ball.x, ball.y)]
    for _ in range(200):
        bus.emit(EVENT_TICK, dt=1 / 60)
        live.append((ball.x, ball.y))
        if ball.state is not FlightState.FLYING:
            break
    assert ball.state is not FlightState.FLYING
    assert len(live) == len(preview.points)
    for actual, predicted in zip(live, preview.points):
        assert actual == pytest.approx(predicted)
    assert live[-1] == pytest.approx(preview.impact)


def test_trajectory_system_tracks_aim_and_clears_after():
    bus = EventBus()
    world = make_world(bus, LAYOUT)
    LaunchSystem(world, bus)
    TrajectorySystem(world, bus)
    _aim(bus, 330.0, 840.0)
    bus.emit(EVENT_TICK, dt=1 / 60)
    assert get_preview(world).points
    bus.emit(EVENT_POINTER_SAMPLE, pointer=None, grab=False)
    bus.emit(EVENT_TICK, dt=1 / 60)
    assert get_preview(world).points == []
    assert get_preview(world).impact is None
