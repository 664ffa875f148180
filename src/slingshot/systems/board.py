from esper import World

from slingshot.components.projectile import FlightState
from slingshot.events.bus import EventBus, EVENT_BOARD_RESIZED
from slingshot.systems.grid_ops import get_geometry, get_projectile, refresh_bubble_centers


class BoardSystem:
    """Keeps board geometry, bubble centres and the resting ball in step with the canvas size."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def resize(self, width: int, height: int) -> bool:
        geometry = get_geometry(self.world)
        if width <= 0 or height <= 0:
            return False
        if (geometry.width, geometry.height) == (width, height):
            return False
        geometry.width = width
        geometry.height = height
        refresh_bubble_centers(self.world)
        ball = get_projectile(self.world)
        if ball.state is FlightState.RESTING:
            ball.x, ball.y = geometry.anchor
        self.event_bus.emit(EVENT_BOARD_RESIZED, width=width, height=height, anchor=geometry.anchor)
        return True
