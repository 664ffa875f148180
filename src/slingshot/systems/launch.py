from __future__ import annotations

import logging
import math
from typing import Optional

from esper import World

from slingshot.components.projectile import FlightState, Projectile
from slingshot.constants import GRAB_RADIUS, MAX_DRAG_DIST, MIN_LAUNCH_STRETCH, SETTLE_FACTOR
from slingshot.events.bus import (
    EventBus,
    EVENT_AIM_CANCELLED,
    EVENT_AIM_STARTED,
    EVENT_POINTER_SAMPLE,
    EVENT_PROJECTILE_LAUNCHED,
    EVENT_PROJECTILE_RESET,
)
from slingshot.systems.grid_ops import get_geometry, get_projectile
from slingshot.systems.physics import launch_velocity
from slingshot.utils.pointer_filter import PointerSample

logger = logging.getLogger(__name__)


def clamp_drag(anchor: tuple[float, float], x: float, y: float, max_dist: float = MAX_DRAG_DIST) -> tuple[float, float]:
    """Pull (x, y) back onto the drag circle around ``anchor`` if it lies outside it."""
    dx = x - anchor[0]
    dy = y - anchor[1]
    dist = math.hypot(dx, dy)
    if dist <= max_dist:
        return x, y
    angle = math.atan2(dy, dx)
    return anchor[0] + math.cos(angle) * max_dist, anchor[1] + math.sin(angle) * max_dist


class LaunchSystem:
    """Slingshot state machine: RESTING -> AIMING -> FLYING -> RESTING.

    Aiming starts when a grab begins within reach of the ball and ends on release,
    which either launches or, for a short pull, cancels back to the anchor.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_POINTER_SAMPLE, self.on_pointer_sample)

    def on_pointer_sample(self, sender, **kwargs):
        pointer: Optional[PointerSample] = kwargs.get('pointer')
        grab = bool(kwargs.get('grab')) and pointer is not None
        ball = get_projectile(self.world)
        if ball.state is FlightState.FLYING:
            return
        anchor = get_geometry(self.world).anchor
        if grab:
            self._drag(ball, anchor, pointer)
        elif ball.state is FlightState.AIMING:
            self._release(ball, anchor)
        else:
            ball.x += (anchor[0] - ball.x) * SETTLE_FACTOR
            ball.y += (anchor[1] - ball.y) * SETTLE_FACTOR

    def _drag(self, ball: Projectile, anchor, pointer: PointerSample) -> None:
        if ball.state is FlightState.RESTING:
            if math.hypot(pointer.x - ball.x, pointer.y - ball.y) >= GRAB_RADIUS:
                return
            ball.state = FlightState.AIMING
            self.event_bus.emit(EVENT_AIM_STARTED, x=pointer.x, y=pointer.y)
        ball.x, ball.y = clamp_drag(anchor, pointer.x, pointer.y)

    def _release(self, ball: Projectile, anchor) -> None:
        vx, vy, stretch = launch_velocity(anchor, (ball.x, ball.y))
        if stretch > MIN_LAUNCH_STRETCH:
            ball.vx, ball.vy = vx, vy
            ball.state = FlightState.FLYING
            ball.flight_started_at = self.world.clock()
            logger.debug("launched with stretch %.1f -> v=(%.2f, %.2f)", stretch, vx, vy)
            self.event_bus.emit(EVENT_PROJECTILE_LAUNCHED, vx=vx, vy=vy, stretch=stretch)
            return
        ball.reset(anchor)
        logger.debug("aim cancelled, stretch %.1f", stretch)
        self.event_bus.emit(EVENT_AIM_CANCELLED, stretch=stretch)
        self.event_bus.emit(EVENT_PROJECTILE_RESET, reason='cancelled')
