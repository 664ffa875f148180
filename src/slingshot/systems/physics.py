from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from esper import World

from slingshot.components.projectile import FlightState
from slingshot.constants import (
    BUBBLE_RADIUS,
    COLLISION_FACTOR,
    FLIGHT_TIMEOUT,
    FRICTION,
    GRAVITY,
    MAX_DRAG_DIST,
    MAX_FORCE_MULT,
    MIN_FORCE_MULT,
    SUBSTEP_FACTOR,
)
from slingshot.events.bus import (
    EventBus,
    EVENT_PROJECTILE_COLLIDED,
    EVENT_PROJECTILE_RESET,
    EVENT_TICK,
)
from slingshot.systems.grid_ops import get_geometry, get_projectile, obstacle_centers

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

COLLISION_CEILING = 'ceiling'
COLLISION_BUBBLE = 'bubble'


@dataclass(frozen=True, slots=True)
class FlightStep:
    x: float
    y: float
    vx: float
    vy: float
    collision: Optional[str] = None

    @property
    def collided(self) -> bool:
        return self.collision is not None


def launch_velocity(anchor: Point, ball: Point) -> Tuple[float, float, float]:
    """Velocity for releasing the ball at ``ball``; returns (vx, vy, stretch).

    Power eases quadratically with the pull ratio so short pulls stay weak.
    """
    dx = anchor[0] - ball[0]
    dy = anchor[1] - ball[1]
    stretch = math.hypot(dx, dy)
    ratio = min(stretch / MAX_DRAG_DIST, 1.0)
    multiplier = MIN_FORCE_MULT + (MAX_FORCE_MULT - MIN_FORCE_MULT) * (ratio * ratio)
    return dx * multiplier, dy * multiplier, stretch


def simulate_step(state: FlightStep, obstacles: Sequence[Point], width: float) -> FlightStep:
    """Advance one frame: sub-stepped move, wall bounce, collision test, then drag.

    The frame is split into ``ceil(speed / (R * 0.8))`` sub-steps so a fast ball
    cannot skip over a bubble. Wall bounces are not terminal; the ceiling and any
    bubble closer than ``R * 1.8`` are.
    """
    x, y, vx, vy = state.x, state.y, state.vx, state.vy
    speed = math.hypot(vx, vy)
    steps = math.ceil(speed / (BUBBLE_RADIUS * SUBSTEP_FACTOR))
    hit_dist_sq = (BUBBLE_RADIUS * COLLISION_FACTOR) ** 2
    left = BUBBLE_RADIUS
    right = width - BUBBLE_RADIUS
    collision: Optional[str] = None
    for _ in range(steps):
        x += vx / steps
        y += vy / steps
        if x < left or x > right:
            vx = -vx
            x = max(left, min(right, x))
        if y < BUBBLE_RADIUS:
            collision = COLLISION_CEILING
            break
        for bx, by in obstacles:
            if (x - bx) ** 2 + (y - by) ** 2 < hit_dist_sq:
                collision = COLLISION_BUBBLE
                break
        if collision:
            break
    vy += GRAVITY
    vx *= FRICTION
    vy *= FRICTION
    return FlightStep(x=x, y=y, vx=vx, vy=vy, collision=collision)


class ProjectileSystem:
    """Integrates the ball while it is flying and reports how the flight ends."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        ball = get_projectile(self.world)
        if ball.state is not FlightState.FLYING:
            return
        geometry = get_geometry(self.world)
        now = self.world.clock()
        started = ball.flight_started_at if ball.flight_started_at is not None else now
        if now - started > FLIGHT_TIMEOUT:
            logger.debug("flight timed out after %.2fs", now - started)
            self._reset(ball, geometry.anchor, 'timeout')
            return
        step = simulate_step(
            FlightStep(ball.x, ball.y, ball.vx, ball.vy),
            obstacle_centers(self.world),
            geometry.width,
        )
        ball.x, ball.y, ball.vx, ball.vy = step.x, step.y, step.vx, step.vy
        if step.collided:
            # Placement resets the ball and advances the colour queue synchronously.
            ball.state = FlightState.RESTING
            self.event_bus.emit(EVENT_PROJECTILE_COLLIDED, x=step.x, y=step.y, reason=step.collision)
        if ball.y > geometry.height:
            logger.debug("ball left the board at x=%.1f", ball.x)
            self._reset(ball, geometry.anchor, 'missed')

    def _reset(self, ball, anchor, reason: str) -> None:
        ball.reset(anchor)
        self.event_bus.emit(EVENT_PROJECTILE_RESET, reason=reason)
