import random
from time import monotonic
from typing import Callable

from esper import World

from slingshot.components.board_geometry import BoardGeometry
from slingshot.components.palette import Palette, default_palette
from slingshot.components.projectile import Projectile
from slingshot.components.score import Score
from slingshot.components.trajectory_preview import TrajectoryPreview
from slingshot.constants import GRID_COLS, GRID_ROWS
from slingshot.events.bus import EventBus
from slingshot.systems.color_queue import initial_color_queue
from slingshot.systems.grid_ops import seed_grid


def create_world(
    event_bus: EventBus,
    width: int = 800,
    height: int = 900,
    *,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    palette: Palette | None = None,
    seed_board: bool = True,
    rng: random.Random | None = None,
    clock: Callable[[], float] | None = None,
) -> World:
    """Build a fresh game world: geometry, palette, seeded board, loaded ball and HUD state.

    ``rng`` drives every gameplay draw (board seeding, colour queue) and ``clock``
    supplies wall-clock seconds for the flight timeout; pass fakes for replayable tests.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "clock", clock or monotonic)

    geometry = BoardGeometry(width=width, height=height, rows=rows, cols=cols)
    world.create_entity(geometry)
    world.create_entity(palette or default_palette())
    world.create_entity(Score())
    world.create_entity(TrajectoryPreview())

    if seed_board:
        seed_grid(world)

    queue = initial_color_queue(world)
    world.create_entity(queue)
    anchor_x, anchor_y = geometry.anchor
    world.create_entity(Projectile(x=anchor_x, y=anchor_y, color=queue.current))
    return world
