from __future__ import annotations

from typing import Any

from esper import World

from slingshot.events.bus import (
    EVENT_POINTER_RAW,
    EVENT_POINTER_SAMPLE,
    EventBus,
)
from slingshot.systems.grid_ops import get_geometry
from slingshot.utils.pointer_filter import PointerFilter


class PointerInputSystem:
    """Bridges raw pointer/grab input to sanitized samples shared by all systems."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        pointer_filter: PointerFilter | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._filter = pointer_filter or PointerFilter()
        self.event_bus.subscribe(EVENT_POINTER_RAW, self._on_pointer_raw)

    @property
    def pointer_filter(self) -> PointerFilter:
        return self._filter

    def _on_pointer_raw(self, sender: Any, **payload: Any) -> None:
        geometry = get_geometry(self.world)
        sample = self._filter.accept(payload.get("x"), payload.get("y"), geometry.width, geometry.height)
        # A missing sample means no grab, whatever the gesture source claimed.
        grab = bool(payload.get("grab")) and sample is not None
        self.event_bus.emit(EVENT_POINTER_SAMPLE, pointer=sample, grab=grab)
