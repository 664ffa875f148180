from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from esper import World

from slingshot.components.active_switch import ActiveSwitch
from slingshot.components.bubble import Bubble
from slingshot.constants import COMBO_MULTIPLIER, MATCH_THRESHOLD
from slingshot.events.bus import (
    EventBus,
    EVENT_BUBBLE_PLACED,
    EVENT_BUBBLE_POPPED,
    EVENT_MATCH_FOUND,
    EVENT_SCORE_CHANGED,
)
from slingshot.systems.grid_ops import active_bubbles, get_palette, get_score, is_neighbor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchResult:
    matched: List[int] = field(default_factory=list)
    points: int = 0
    combo_applied: bool = False

    @property
    def is_match(self) -> bool:
        return bool(self.matched)


def find_cluster(world: World, seed_entity: int) -> List[int]:
    """Flood fill over active same-colour neighbours of ``seed_entity``."""
    seed: Bubble = world.component_for_entity(seed_entity, Bubble)
    candidates = {
        entity: bubble
        for entity, bubble in active_bubbles(world)
        if bubble.color == seed.color
    }
    candidates.setdefault(seed_entity, seed)
    visited: set[int] = set()
    cluster: List[int] = []
    stack = [seed_entity]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        cluster.append(current)
        cell = candidates[current].cell
        for other, bubble in candidates.items():
            if other not in visited and is_neighbor(cell, bubble.cell):
                stack.append(other)
    return cluster


def score_for(base_points: int, size: int) -> Tuple[int, bool]:
    """Points for a cluster: the summed base points, times the combo bonus above the threshold."""
    combo = size > MATCH_THRESHOLD
    multiplier = COMBO_MULTIPLIER if combo else 1.0
    return int(math.floor(base_points * size * multiplier)), combo


def resolve_matches(world: World, seed_entity: int, event_bus: EventBus | None = None) -> MatchResult:
    """Pop the cluster around ``seed_entity`` if it reaches the match threshold.

    Below the threshold nothing changes. Popped bubbles are deactivated, never deleted.
    """
    cluster = find_cluster(world, seed_entity)
    if len(cluster) < MATCH_THRESHOLD:
        return MatchResult()
    seed: Bubble = world.component_for_entity(seed_entity, Bubble)
    palette = get_palette(world)
    points, combo = score_for(palette.points_for(seed.color), len(cluster))
    popped: List[Tuple[int, Bubble]] = []
    for entity in cluster:
        world.component_for_entity(entity, ActiveSwitch).active = False
        popped.append((entity, world.component_for_entity(entity, Bubble)))
    score = get_score(world)
    score.value += points
    logger.debug("popped %d %s bubbles for %d points", len(cluster), seed.color, points)
    if event_bus is not None:
        event_bus.emit(
            EVENT_MATCH_FOUND,
            entities=list(cluster),
            positions=sorted(bubble.cell for _, bubble in popped),
            color=seed.color,
            points=points,
            combo=combo,
        )
        for entity, bubble in popped:
            event_bus.emit(EVENT_BUBBLE_POPPED, entity=entity, x=bubble.x, y=bubble.y, color=bubble.color)
        event_bus.emit(EVENT_SCORE_CHANGED, score=score.value, delta=points)
    return MatchResult(matched=list(cluster), points=points, combo_applied=combo)


class MatchSystem:
    """Resolves matches for every freshly placed bubble."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.last_result: MatchResult | None = None
        event_bus.subscribe(EVENT_BUBBLE_PLACED, self.on_bubble_placed)

    def on_bubble_placed(self, sender, **kwargs):
        entity = kwargs.get('entity')
        if entity is None:
            return
        self.last_result = resolve_matches(self.world, entity, self.event_bus)
