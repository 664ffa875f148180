"""Per-tick driver tying the slingshot world, event bus and systems together.

A presentation layer owns one ``Game`` and feeds it one ``TickInput`` per
perception/input event through ``advance``. Everything happens synchronously
inside that call; nothing runs between ticks.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from esper import World

from slingshot.events.bus import EVENT_POINTER_RAW, EVENT_TICK, EventBus
from slingshot.snapshot import RenderSnapshot, build_snapshot
from slingshot.systems.board import BoardSystem
from slingshot.systems.launch import LaunchSystem
from slingshot.systems.match import MatchSystem
from slingshot.systems.particles import ParticleSystem
from slingshot.systems.physics import ProjectileSystem
from slingshot.systems.placement import PlacementSystem
from slingshot.systems.pointer_input_system import PointerInputSystem
from slingshot.systems.trajectory import TrajectorySystem
from slingshot.utils.pointer_filter import PointerSample
from slingshot.world import create_world


@dataclass(frozen=True, slots=True)
class TickInput:
    pointer: Optional[PointerSample] = None
    grab_active: bool = False
    width: Optional[int] = None
    height: Optional[int] = None
    dt: float = 1 / 60


class Game:
    def __init__(
        self,
        width: int = 800,
        height: int = 900,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
        particle_rng: random.Random | None = None,
        seed_board: bool = True,
        world: World | None = None,
        event_bus: EventBus | None = None,
    ):
        self.event_bus = event_bus or EventBus()
        self.world = world or create_world(
            self.event_bus,
            width,
            height,
            rng=rng,
            clock=clock,
            seed_board=seed_board,
        )
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.pointer_input_system = PointerInputSystem(self.world, self.event_bus)
        self.launch_system = LaunchSystem(self.world, self.event_bus)
        self.projectile_system = ProjectileSystem(self.world, self.event_bus)
        self.placement_system = PlacementSystem(self.world, self.event_bus)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.trajectory_system = TrajectorySystem(self.world, self.event_bus)
        self.particle_system = ParticleSystem(self.world, self.event_bus, rng=particle_rng)

    def step(self, tick: TickInput) -> RenderSnapshot:
        if tick.width is not None and tick.height is not None:
            self.board_system.resize(tick.width, tick.height)
        pointer = tick.pointer
        self.event_bus.emit(
            EVENT_POINTER_RAW,
            x=pointer.x if pointer is not None else None,
            y=pointer.y if pointer is not None else None,
            grab=tick.grab_active,
        )
        self.event_bus.emit(EVENT_TICK, dt=tick.dt)
        return build_snapshot(self.world)

    def snapshot(self) -> RenderSnapshot:
        return build_snapshot(self.world)


def advance(game: Game, tick: TickInput) -> Tuple[Game, RenderSnapshot]:
    """Run one frame. The caller keeps the returned game as its only live handle."""
    snapshot = game.step(tick)
    return game, snapshot
