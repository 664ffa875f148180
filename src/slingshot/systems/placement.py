from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from esper import World

from slingshot.constants import PLACEMENT_EXTRA_ROWS
from slingshot.events.bus import (
    EventBus,
    EVENT_BUBBLE_PLACED,
    EVENT_PLACEMENT_FAILED,
    EVENT_PROJECTILE_COLLIDED,
    EVENT_PROJECTILE_RESET,
)
from slingshot.systems.color_queue import advance_color_queue
from slingshot.systems.grid_ops import (
    cell_center,
    cols_in_row,
    get_color_queue,
    get_geometry,
    get_projectile,
    occupied_cells,
    spawn_bubble,
)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


def nearest_open_cell(world: World, x: float, y: float) -> Optional[Position]:
    """Closest unoccupied cell to (x, y), scanning row-major past the nominal grid.

    Ties keep the first cell scanned. Returns None when every cell is taken.
    """
    geometry = get_geometry(world)
    taken = occupied_cells(world)
    best: Optional[Position] = None
    best_dist = math.inf
    for row in range(geometry.rows + PLACEMENT_EXTRA_ROWS):
        for col in range(cols_in_row(row, geometry.cols)):
            if (row, col) in taken:
                continue
            cx, cy = cell_center(row, col, geometry.width, geometry.cols)
            dist = math.hypot(x - cx, y - cy)
            if dist < best_dist:
                best_dist = dist
                best = (row, col)
    return best


class PlacementSystem:
    """Snaps a collided ball into the grid, then reloads the slingshot."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_PROJECTILE_COLLIDED, self.on_projectile_collided)

    def on_projectile_collided(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        self.place(x, y)

    def place(self, x: float, y: float) -> Optional[int]:
        ball = get_projectile(self.world)
        anchor = get_geometry(self.world).anchor
        cell = nearest_open_cell(self.world, x, y)
        if cell is None:
            logger.debug("no open cell for ball at (%.1f, %.1f); dropping it", x, y)
            ball.reset(anchor)
            self.event_bus.emit(EVENT_PLACEMENT_FAILED, x=x, y=y)
            self.event_bus.emit(EVENT_PROJECTILE_RESET, reason='placement_failed')
            return None
        row, col = cell
        color = get_color_queue(self.world).current
        entity = spawn_bubble(self.world, row, col, color)
        logger.debug("placed %s bubble at (%d, %d)", color, row, col)
        # Match resolution runs synchronously inside this emit.
        self.event_bus.emit(EVENT_BUBBLE_PLACED, entity=entity, row=row, col=col, color=color)
        queue = advance_color_queue(self.world, event_bus=self.event_bus)
        ball.reset(anchor)
        ball.color = queue.current
        self.event_bus.emit(EVENT_PROJECTILE_RESET, reason='placed')
        return entity
