from __future__ import annotations

import random
from typing import Sequence, Tuple

from esper import World

from slingshot.events.bus import EventBus
from slingshot.systems.grid_ops import get_color_queue, get_projectile, place_bubbles
from slingshot.world import create_world


class FakeClock:
    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


def make_world(
    bus: EventBus,
    layout: Sequence[Tuple[int, int, str]] = (),
    *,
    current: str = 'red',
    next_color: str = 'blue',
    width: int = 800,
    height: int = 900,
    seed: int = 0,
    clock: FakeClock | None = None,
    **kwargs,
) -> World:
    """Empty board with scripted bubbles and a fixed colour queue."""
    world = create_world(
        bus,
        width,
        height,
        seed_board=False,
        rng=random.Random(seed),
        clock=clock or FakeClock(),
        **kwargs,
    )
    place_bubbles(world, layout)
    queue = get_color_queue(world)
    queue.current = current
    queue.next = next_color
    get_projectile(world).color = current
    return world


def record(bus: EventBus, name: str) -> list[dict]:
    events: list[dict] = []
    bus.subscribe(name, lambda sender, **kwargs: events.append(kwargs))
    return events
