from __future__ import annotations

import random

from esper import World

from slingshot.components.particle import Particle
from slingshot.constants import PARTICLE_DECAY, PARTICLE_SPEED, PARTICLES_PER_POP
from slingshot.events.bus import EventBus, EVENT_BUBBLE_POPPED, EVENT_TICK
from slingshot.systems.grid_ops import get_palette


class ParticleSystem:
    """Cosmetic burst per popped bubble. Has its own random source so it never shifts gameplay draws."""

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or random.Random()
        event_bus.subscribe(EVENT_BUBBLE_POPPED, self.on_bubble_popped)
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_bubble_popped(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        color = kwargs.get('color')
        if x is None or y is None or color is None:
            return
        display = get_palette(self.world).display_for(color)
        for _ in range(PARTICLES_PER_POP):
            self.world.create_entity(
                Particle(
                    x=x,
                    y=y,
                    vx=(self._rng.random() - 0.5) * PARTICLE_SPEED,
                    vy=(self._rng.random() - 0.5) * PARTICLE_SPEED,
                    color=display,
                )
            )

    def on_tick(self, sender, **kwargs):
        expired = []
        for ent, particle in self.world.get_component(Particle):
            particle.x += particle.vx
            particle.y += particle.vy
            particle.life -= PARTICLE_DECAY
            if particle.life <= 0:
                expired.append(ent)
        for ent in expired:
            self.world.delete_entity(ent, immediate=True)
