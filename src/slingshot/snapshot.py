"""Read-only view of a world after a tick, for presentation layers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from slingshot.components.particle import Particle
from slingshot.components.projectile import FlightState
from slingshot.systems.grid_ops import (
    active_bubbles,
    get_color_queue,
    get_geometry,
    get_palette,
    get_preview,
    get_projectile,
    get_score,
)

Point = Tuple[float, float]
RGB = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class BubbleView:
    id: int
    row: int
    col: int
    x: float
    y: float
    color: str
    rgb: RGB


@dataclass(frozen=True, slots=True)
class ProjectileView:
    x: float
    y: float
    color: str
    rgb: RGB
    state: FlightState


@dataclass(frozen=True, slots=True)
class ParticleView:
    x: float
    y: float
    life: float
    rgb: RGB


@dataclass(frozen=True, slots=True)
class RenderSnapshot:
    width: int
    height: int
    anchor: Point
    bubbles: Tuple[BubbleView, ...]
    projectile: ProjectileView
    trajectory: Tuple[Point, ...]
    impact: Optional[Point]
    particles: Tuple[ParticleView, ...]
    score: int
    current_color: str
    next_color: str

    @property
    def aiming(self) -> bool:
        return self.projectile.state is FlightState.AIMING

    @property
    def flying(self) -> bool:
        return self.projectile.state is FlightState.FLYING


def build_snapshot(world: World) -> RenderSnapshot:
    geometry = get_geometry(world)
    palette = get_palette(world)
    ball = get_projectile(world)
    queue = get_color_queue(world)
    preview = get_preview(world)
    bubbles = tuple(
        BubbleView(
            id=entity,
            row=bubble.row,
            col=bubble.col,
            x=bubble.x,
            y=bubble.y,
            color=bubble.color,
            rgb=palette.display_for(bubble.color),
        )
        for entity, bubble in sorted(active_bubbles(world), key=lambda entry: entry[0])
    )
    particles = tuple(
        ParticleView(x=p.x, y=p.y, life=p.life, rgb=p.color)
        for _, p in world.get_component(Particle)
    )
    return RenderSnapshot(
        width=geometry.width,
        height=geometry.height,
        anchor=geometry.anchor,
        bubbles=bubbles,
        projectile=ProjectileView(
            x=ball.x,
            y=ball.y,
            color=ball.color,
            rgb=palette.display_for(ball.color),
            state=ball.state,
        ),
        trajectory=tuple(preview.points),
        impact=preview.impact,
        particles=particles,
        score=get_score(world).value,
        current_color=queue.current,
        next_color=queue.next,
    )
