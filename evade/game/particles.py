"""
Particle System
================
Particles are plain records; the functions below create and advance them
in bulk. Every entity owns its own particle list, and the simulation owns
a global effects list for spawn/collection bursts.
"""

import math
import random
from dataclasses import dataclass
from typing import List

from evade.game.geometry import clamp, random_range


@dataclass
class Particle:
    """A short-lived visual dot.

    `life` starts at 1.0 and only ever decreases; the particle is dead
    once it reaches zero.
    """
    x: float
    y: float
    vx: float
    vy: float
    life: float = 1.0
    max_life: float = 1.0
    size: float = 3.0
    color: str = 'white'  # Token resolved by the renderer
    decay: float = 0.02   # Life lost per tick
    drag: float = 0.98    # Velocity multiplier per tick


def is_dead(particle: Particle) -> bool:
    return particle.life <= 0


def particle_alpha(particle: Particle) -> float:
    """Opacity in [0, 1] derived from remaining life."""
    if particle.max_life <= 0:
        return 0.0
    return clamp(particle.life / particle.max_life, 0.0, 1.0)


def update_particles(particles: List[Particle]) -> None:
    """Advance every particle one tick and drop the dead ones (in place)."""
    for p in particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= p.decay
        p.vx *= p.drag
        p.vy *= p.drag
    particles[:] = [p for p in particles if p.life > 0]


def spawn_particle(
    particles: List[Particle],
    x: float, y: float,
    color: str,
    rng=random,
) -> Particle:
    """Spawn a single drifting particle with a random velocity."""
    particle = Particle(
        x=x, y=y,
        vx=random_range(-2, 2, rng),
        vy=random_range(-2, 2, rng),
        max_life=random_range(0.5, 1.5, rng),
        size=random_range(2, 5, rng),
        color=color,
    )
    particles.append(particle)
    return particle


def spawn_burst(
    particles: List[Particle],
    x: float, y: float,
    color: str,
    count: int,
    rng=random,
) -> None:
    """Spawn `count` drifting particles at one point."""
    for _ in range(count):
        spawn_particle(particles, x, y, color, rng)


def spawn_ring(
    particles: List[Particle],
    x: float, y: float,
    color: str,
    count: int = 8,
    speed: float = 2.0,
    rng=random,
) -> None:
    """Spawn an evenly spaced ring of particles moving outward."""
    for i in range(count):
        angle = (i / count) * math.pi * 2
        particles.append(Particle(
            x=x, y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            size=random_range(2, 4, rng),
            color=color,
            decay=0.04,
            drag=0.9,
        ))


def spawn_scatter(
    particles: List[Particle],
    x: float, y: float,
    color: str,
    count: int = 15,
    rng=random,
) -> None:
    """Spawn particles in random directions at random speeds."""
    for _ in range(count):
        angle = rng.random() * math.pi * 2
        speed = random_range(1, 4, rng)
        particles.append(Particle(
            x=x, y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            max_life=random_range(0.8, 1.2, rng),
            size=random_range(1, 3, rng),
            color=color,
            decay=0.03,
            drag=0.95,
        ))
