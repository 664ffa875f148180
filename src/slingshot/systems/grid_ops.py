from __future__ import annotations

import random
from typing import Iterable, List, Optional, Tuple, Type, TypeVar

from esper import World

from slingshot.components.active_switch import ActiveSwitch
from slingshot.components.board_geometry import BoardGeometry
from slingshot.components.bubble import Bubble
from slingshot.components.color_queue import ColorQueue
from slingshot.components.palette import Palette
from slingshot.components.projectile import Projectile
from slingshot.components.score import Score
from slingshot.components.trajectory_preview import TrajectoryPreview
from slingshot.constants import (
    BUBBLE_RADIUS,
    GRID_COLS,
    ROW_HEIGHT,
    SEED_DENSITY,
    SEED_ROWS,
)

Position = Tuple[int, int]
BubbleEntry = Tuple[int, Bubble]
C = TypeVar("C")


def _singleton(world: World, component_type: Type[C], label: str) -> C:
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{label} not found")


def get_geometry(world: World) -> BoardGeometry:
    return _singleton(world, BoardGeometry, "BoardGeometry")


def get_palette(world: World) -> Palette:
    return _singleton(world, Palette, "Palette definitions")


def get_projectile(world: World) -> Projectile:
    return _singleton(world, Projectile, "Projectile")


def get_color_queue(world: World) -> ColorQueue:
    return _singleton(world, ColorQueue, "ColorQueue")


def get_score(world: World) -> Score:
    return _singleton(world, Score, "Score")


def get_preview(world: World) -> TrajectoryPreview:
    return _singleton(world, TrajectoryPreview, "TrajectoryPreview")


def cols_in_row(row: int, cols: int = GRID_COLS) -> int:
    """Odd rows are inset by half a bubble and hold one column fewer."""
    return cols - 1 if row % 2 else cols


def cell_center(row: int, col: int, width: float, cols: int = GRID_COLS) -> Tuple[float, float]:
    x_offset = (width - cols * BUBBLE_RADIUS * 2) / 2 + BUBBLE_RADIUS
    x = x_offset + col * BUBBLE_RADIUS * 2 + (BUBBLE_RADIUS if row % 2 else 0)
    y = BUBBLE_RADIUS + row * ROW_HEIGHT
    return x, y


def is_neighbor(a: Position, b: Position) -> bool:
    """Offset-hex adjacency, decided by the parity of ``a``'s row.

    Odd rows touch columns {c, c+1} of the rows above and below; even rows touch {c-1, c}.
    """
    a_row, a_col = a
    dr = b[0] - a_row
    dc = b[1] - a_col
    if abs(dr) > 1:
        return False
    if dr == 0:
        return abs(dc) == 1
    if a_row % 2:
        return dc in (0, 1)
    return dc in (-1, 0)


def active_bubbles(world: World) -> List[BubbleEntry]:
    result: List[BubbleEntry] = []
    for entity, (bubble, switch) in world.get_components(Bubble, ActiveSwitch):
        if switch.active:
            result.append((entity, bubble))
    return result


def occupant(world: World, row: int, col: int) -> Optional[BubbleEntry]:
    for entity, bubble in active_bubbles(world):
        if bubble.row == row and bubble.col == col:
            return entity, bubble
    return None


def occupied_cells(world: World) -> set[Position]:
    return {bubble.cell for _, bubble in active_bubbles(world)}


def active_colors(world: World) -> List[str]:
    """Colours present among active bubbles, in palette order."""
    palette = get_palette(world)
    return palette.ordered(bubble.color for _, bubble in active_bubbles(world))


def obstacle_centers(world: World) -> List[Tuple[float, float]]:
    return [(bubble.x, bubble.y) for _, bubble in active_bubbles(world)]


def spawn_bubble(world: World, row: int, col: int, color: str) -> int:
    geometry = get_geometry(world)
    x, y = cell_center(row, col, geometry.width, geometry.cols)
    return world.create_entity(Bubble(row=row, col=col, x=x, y=y, color=color), ActiveSwitch(active=True))


def seed_grid(
    world: World,
    rng: random.Random | None = None,
    *,
    rows: int = SEED_ROWS,
    density: float = SEED_DENSITY,
) -> List[int]:
    """Populate the top ``rows`` rows; each valid cell is filled with probability ``density``."""
    candidate_rng = rng or getattr(world, "random", None)
    if isinstance(candidate_rng, random.Random):
        rng = candidate_rng
    else:
        rng = random.Random()
    geometry = get_geometry(world)
    choices = get_palette(world).names()
    created: List[int] = []
    for row in range(rows):
        for col in range(cols_in_row(row, geometry.cols)):
            if rng.random() < density:
                created.append(spawn_bubble(world, row, col, rng.choice(choices)))
    return created


def refresh_bubble_centers(world: World) -> None:
    """Recompute cached pixel centres after the board width changes."""
    geometry = get_geometry(world)
    for _, bubble in world.get_component(Bubble):
        bubble.x, bubble.y = cell_center(bubble.row, bubble.col, geometry.width, geometry.cols)


def place_bubbles(world: World, layout: Iterable[Tuple[int, int, str]]) -> List[int]:
    """Create active bubbles at explicit cells; handy for scripted boards."""
    return [spawn_bubble(world, row, col, color) for row, col, color in layout]
