from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from esper import World

from slingshot.components.projectile import FlightState
from slingshot.components.trajectory_preview import TrajectoryPreview
from slingshot.constants import MIN_LAUNCH_STRETCH, PREVIEW_FRAMES
from slingshot.events.bus import EventBus, EVENT_TICK
from slingshot.systems.grid_ops import get_geometry, get_preview, get_projectile, obstacle_centers
from slingshot.systems.physics import FlightStep, launch_velocity, simulate_step

Point = Tuple[float, float]


def predict_path(
    start: Point,
    velocity: Tuple[float, float],
    obstacles: Sequence[Point],
    width: float,
    height: float,
    frames: int = PREVIEW_FRAMES,
) -> Tuple[List[Point], Optional[Point]]:
    """Run the live flight step forward from ``start``; returns (points, impact).

    Works on copies only, so it can run any number of times per tick.
    """
    state = FlightStep(start[0], start[1], velocity[0], velocity[1])
    points: List[Point] = [start]
    for _ in range(frames):
        state = simulate_step(state, obstacles, width)
        points.append((state.x, state.y))
        if state.collided:
            return points, (state.x, state.y)
        if state.y > height:
            break
    return points, None


def preview_for(world: World) -> TrajectoryPreview:
    """Trajectory a release right now would follow, or an empty preview."""
    ball = get_projectile(world)
    if ball.state is not FlightState.AIMING:
        return TrajectoryPreview()
    geometry = get_geometry(world)
    vx, vy, stretch = launch_velocity(geometry.anchor, (ball.x, ball.y))
    if stretch <= MIN_LAUNCH_STRETCH:
        return TrajectoryPreview()
    points, impact = predict_path(
        (ball.x, ball.y),
        (vx, vy),
        obstacle_centers(world),
        geometry.width,
        geometry.height,
    )
    return TrajectoryPreview(points=points, impact=impact)


class TrajectorySystem:
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        preview = get_preview(self.world)
        fresh = preview_for(self.world)
        preview.points = fresh.points
        preview.impact = fresh.impact
