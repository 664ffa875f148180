import math

import pytest

from slingshot.components.projectile import FlightState
from slingshot.constants import BUBBLE_RADIUS, COLLISION_FACTOR, FRICTION
from slingshot.events.bus import EventBus, EVENT_PROJECTILE_COLLIDED, EVENT_PROJECTILE_RESET, EVENT_TICK
from slingshot.systems.grid_ops import get_geometry, get_projectile
from slingshot.systems.physics import (
    COLLISION_BUBBLE,
    COLLISION_CEILING,
    FlightStep,
    ProjectileSystem,
    launch_velocity,
    simulate_step,
)
from tests.helpers import FakeClock, make_world, record

WIDTH = 800


def test_launch_velocity_full_pull_uses_max_multiplier():
    vx, vy, stretch = launch_velocity((400.0, 680.0), (400.0, 860.0))
    assert stretch == pytest.approx(180.0)
    assert vx == pytest.approx(0.0)
    assert vy == pytest.approx(-81.0)


def test_launch_velocity_eases_quadratically():
    _, vy, stretch = launch_velocity((400.0, 680.0), (400.0, 770.0))
    assert stretch == pytest.approx(90.0)
    # 0.15 + 0.30 * 0.5**2 = 0.225
    assert vy == pytest.approx(-90.0 * 0.225)


def test_launch_velocity_ratio_caps_at_one():
    _, vy, _ = launch_velocity((0.0, 0.0), (0.0, 360.0))
    assert vy == pytest.approx(-360.0 * 0.45)


def test_wall_reflects_and_clamps_without_terminating():
    step = simulate_step(FlightStep(30.0, 500.0, -20.0, 0.0), [], WIDTH)
    assert not step.collided
    assert step.vx > 0
    assert step.x >= BUBBLE_RADIUS
    assert step.vx == pytest.approx(20.0 * FRICTION)


def test_right_wall_reflects():
    step = simulate_step(FlightStep(WIDTH - 30.0, 500.0, 20.0, 0.0), [], WIDTH)
    assert step.vx < 0
    assert step.x <= WIDTH - BUBBLE_RADIUS


def test_ceiling_is_a_collision():
    step = simulate_step(FlightStep(400.0, 30.0, 0.0, -20.0), [], WIDTH)
    assert step.collision == COLLISION_CEILING
    assert step.y < BUBBLE_RADIUS


def test_fast_ball_cannot_tunnel_through_bubble():
    obstacle = (400.0, 300.0)
    step = simulate_step(FlightStep(400.0, 500.0, 0.0, -400.0), [obstacle], WIDTH)
    assert step.collision == COLLISION_BUBBLE
    assert math.dist((step.x, step.y), obstacle) < BUBBLE_RADIUS * COLLISION_FACTOR
    assert step.y > obstacle[1]


def test_ball_stops_short_of_bubble_over_several_frames():
    obstacle = (400.0, 300.0)
    state = FlightStep(400.0, 400.0, 0.0, -30.0)
    for _ in range(20):
        state = simulate_step(state, [obstacle], WIDTH)
        if state.collided:
            break
    assert state.collision == COLLISION_BUBBLE
    assert math.dist((state.x, state.y), obstacle) < BUBBLE_RADIUS * COLLISION_FACTOR


def test_resting_velocity_does_not_move():
    state = FlightStep(400.0, 400.0, 0.0, 0.0)
    assert simulate_step(state, [], WIDTH) == state


def test_speed_decays_monotonically_without_collisions():
    state = FlightStep(400.0, 450.0, 37.0, 0.0)
    speed = math.hypot(state.vx, state.vy)
    for _ in range(200):
        state = simulate_step(state, [], WIDTH)
        assert not state.collided
        new_speed = math.hypot(state.vx, state.vy)
        assert new_speed <= speed
        speed = new_speed


def _flying_world(bus, clock, **ball):
    world = make_world(bus, clock=clock)
    projectile = get_projectile(world)
    projectile.state = FlightState.FLYING
    projectile.flight_started_at = clock()
    for key, value in ball.items():
        setattr(projectile, key, value)
    return world


def test_projectile_system_ignores_resting_ball():
    bus = EventBus()
    world = make_world(bus)
    ProjectileSystem(world, bus)
    ball = get_projectile(world)
    before = (ball.x, ball.y)
    bus.emit(EVENT_TICK, dt=1 / 60)
    assert (ball.x, ball.y) == before


def test_projectile_system_advances_flying_ball():
    bus = EventBus()
    clock = FakeClock()
    world = _flying_world(bus, clock, vx=0.0, vy=-20.0)
    ProjectileSystem(world, bus)
    start_y = get_projectile(world).y
    bus.emit(EVENT_TICK, dt=1 / 60)
    assert get_projectile(world).y == pytest.approx(start_y - 20.0)


def test_flight_timeout_uses_wall_clock():
    bus = EventBus()
    clock = FakeClock(10.0)
    world = _flying_world(bus, clock, vx=-40.0, vy=0.0)
    ProjectileSystem(world, bus)
    resets = record(bus, EVENT_PROJECTILE_RESET)
    for _ in range(30):
        bus.emit(EVENT_TICK, dt=1 / 60)
    assert get_projectile(world).state is FlightState.FLYING
    clock.advance(5.01)
    bus.emit(EVENT_TICK, dt=1 / 60)
    ball = get_projectile(world)
    assert ball.state is FlightState.RESTING
    assert (ball.x, ball.y) == get_geometry(world).anchor
    assert (ball.vx, ball.vy) == (0.0, 0.0)
    assert resets == [{'reason': 'timeout'}]


def test_ball_falling_off_board_is_reset():
    bus = EventBus()
    clock = FakeClock()
    world = _flying_world(bus, clock, x=400.0, y=890.0, vx=0.0, vy=30.0)
    ProjectileSystem(world, bus)
    resets = record(bus, EVENT_PROJECTILE_RESET)
    bus.emit(EVENT_TICK, dt=1 / 60)
    ball = get_projectile(world)
    assert ball.state is FlightState.RESTING
    assert (ball.x, ball.y) == get_geometry(world).anchor
    assert resets == [{'reason': 'missed'}]


def test_collision_hands_off_and_ends_flight():
    bus = EventBus()
    clock = FakeClock()
    world = _flying_world(bus, clock, x=400.0, y=40.0, vx=0.0, vy=-30.0)
    ProjectileSystem(world, bus)
    collided = record(bus, EVENT_PROJECTILE_COLLIDED)
    bus.emit(EVENT_TICK, dt=1 / 60)
    assert len(collided) == 1
    assert collided[0]['reason'] == COLLISION_CEILING
    assert get_projectile(world).state is not FlightState.FLYING
