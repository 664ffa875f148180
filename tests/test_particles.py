import random

import pytest

from slingshot.components.particle import Particle
from slingshot.constants import PARTICLE_DECAY, PARTICLES_PER_POP
from slingshot.events.bus import EventBus, EVENT_BUBBLE_POPPED, EVENT_TICK
from slingshot.systems.grid_ops import get_palette
from slingshot.systems.particles import ParticleSystem
from tests.helpers import make_world


def _particles(world):
    return [particle for _, particle in world.get_component(Particle)]


def test_pop_spawns_colored_burst():
    bus = EventBus()
    world = make_world(bus)
    ParticleSystem(world, bus, rng=random.Random(1))
    bus.emit(EVENT_BUBBLE_POPPED, entity=1, x=100.0, y=50.0, color='purple')
    particles = _particles(world)
    assert len(particles) == PARTICLES_PER_POP
    display = get_palette(world).display_for('purple')
    for particle in particles:
        assert particle.color == display
        assert (particle.x, particle.y) == (100.0, 50.0)
        assert abs(particle.vx) <= 6.0 and abs(particle.vy) <= 6.0
        assert particle.life == 1.0


def test_particles_move_fade_and_expire():
    bus = EventBus()
    world = make_world(bus)
    ParticleSystem(world, bus, rng=random.Random(2))
    bus.emit(EVENT_BUBBLE_POPPED, entity=1, x=100.0, y=50.0, color='red')
    bus.emit(EVENT_TICK, dt=1 / 60)
    particle = _particles(world)[0]
    assert particle.life == pytest.approx(1.0 - PARTICLE_DECAY)
    assert (particle.x, particle.y) == pytest.approx((100.0 + particle.vx, 50.0 + particle.vy))
    for _ in range(25):
        bus.emit(EVENT_TICK, dt=1 / 60)
    assert _particles(world) == []


def test_particles_do_not_touch_gameplay_random():
    bus = EventBus()
    world = make_world(bus, seed=42)
    state = world.random.getstate()
    ParticleSystem(world, bus)
    bus.emit(EVENT_BUBBLE_POPPED, entity=1, x=1.0, y=1.0, color='red')
    assert world.random.getstate() == state


def test_incomplete_pop_payload_is_ignored():
    bus = EventBus()
    world = make_world(bus)
    ParticleSystem(world, bus)
    bus.emit(EVENT_BUBBLE_POPPED, entity=1, x=1.0)
    assert _particles(world) == []
