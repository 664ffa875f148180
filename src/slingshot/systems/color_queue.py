from __future__ import annotations

import random
from typing import List

from esper import World

from slingshot.components.color_queue import ColorQueue
from slingshot.events.bus import EventBus, EVENT_COLOR_QUEUE_ADVANCED
from slingshot.systems.grid_ops import active_colors, get_color_queue, get_palette


def _resolve_rng(world: World, rng: random.Random | None) -> random.Random:
    candidate_rng = rng or getattr(world, "random", None)
    if isinstance(candidate_rng, random.Random):
        return candidate_rng
    return random.Random()


def color_options(world: World) -> List[str]:
    """Colours still on the board, or the whole palette once the board is clear."""
    return active_colors(world) or get_palette(world).names()


def initial_color_queue(world: World, rng: random.Random | None = None) -> ColorQueue:
    rng = _resolve_rng(world, rng)
    options = color_options(world)
    current = rng.choice(options)
    return ColorQueue(current=current, next=rng.choice(options))


def advance_color_queue(
    world: World,
    rng: random.Random | None = None,
    *,
    event_bus: EventBus | None = None,
) -> ColorQueue:
    """Promote ``next`` to ``current`` and draw a fresh ``next`` from the board's colours.

    A promoted colour that no longer exists on the board is redrawn so the loaded
    ball can always still complete a match.
    """
    rng = _resolve_rng(world, rng)
    queue = get_color_queue(world)
    options = color_options(world)
    queue.current = queue.next
    if queue.current not in options:
        queue.current = rng.choice(options)
    queue.next = rng.choice(options)
    if event_bus is not None:
        event_bus.emit(EVENT_COLOR_QUEUE_ADVANCED, current=queue.current, next=queue.next)
    return queue
