"""
Barrier pickups.

BarrierManager owns the pickups lying in the world: it spawns them on a
timer at positions away from both player and enemy, advances their
animation, and hands them to the player on contact. Spawn and collection
bursts go into an effects list shared with the simulation.
"""

import math
import random
from dataclasses import dataclass
from typing import List, Optional

from evade import config
from evade.game.geometry import distance, random_range
from evade.game.particles import Particle, spawn_ring, spawn_scatter
from evade.logging import get_logger
from evade.models import WorldConfig

log = get_logger('barrier')


@dataclass
class Barrier:
    """A shield pickup lying in the world."""
    x: float
    y: float
    size: float = config.BARRIER_SIZE
    rotation: float = 0.0
    rotation_speed: float = 0.0
    pulse_phase: float = 0.0
    color: str = 'barrier'

    def update(self) -> None:
        self.rotation += self.rotation_speed
        self.pulse_phase += 0.05

    @property
    def pulse_scale(self) -> float:
        return 1 + math.sin(self.pulse_phase) * 0.15


class BarrierManager:
    """Spawns, animates and hands out barrier pickups.

    Args:
        world: World bounds and pickup size
        effects: List that receives spawn and collection particles
        spawn_interval: Ticks between spawn trials
        max_active: Upper bound on pickups lying in the world
        min_separation: Minimum spawn distance from player and enemy
        max_attempts: Candidate positions tried per spawn
        rng: Random source (the random module by default)
    """

    def __init__(
        self,
        world: WorldConfig,
        effects: Optional[List[Particle]] = None,
        spawn_interval: int = config.BARRIER_SPAWN_INTERVAL,
        max_active: int = config.BARRIER_MAX_ACTIVE,
        min_separation: float = config.BARRIER_MIN_SEPARATION,
        max_attempts: int = config.BARRIER_SPAWN_ATTEMPTS,
        rng=random,
    ):
        self.world = world
        self.effects: List[Particle] = effects if effects is not None else []
        self.spawn_interval = spawn_interval
        self.max_active = max_active
        self.min_separation = min_separation
        self.max_attempts = max_attempts
        self._rng = rng

        self.barriers: List[Barrier] = []
        self.spawn_timer = 0

    def reset(self) -> None:
        self.barriers.clear()
        self.spawn_timer = 0

    def update(self, player, enemy, spawn_probability: float) -> int:
        """Advance one tick.

        Args:
            player: The player (position, size, add_barrier)
            enemy: The enemy (position only)
            spawn_probability: Chance that a due spawn trial places a pickup

        Returns:
            Number of pickups collected this tick
        """
        self.spawn_timer += 1
        if self.spawn_timer >= self.spawn_interval:
            self.spawn_timer = 0
            if len(self.barriers) < self.max_active and self._rng.random() < spawn_probability:
                self.spawn_barrier(player, enemy)

        collected = 0
        for barrier in list(self.barriers):
            barrier.update()

            if distance(player.x, player.y, barrier.x, barrier.y) >= self.world.collection_radius:
                continue

            # At capacity the pickup stays where it is
            if player.add_barrier():
                self.barriers.remove(barrier)
                spawn_scatter(self.effects, barrier.x, barrier.y, barrier.color, 15, self._rng)
                collected += 1

        return collected

    def spawn_barrier(self, player, enemy) -> Optional[Barrier]:
        """Place one pickup away from player and enemy.

        Returns:
            The new barrier, or None if no candidate position was far enough
        """
        size = self.world.barrier_size
        for _ in range(self.max_attempts):
            x = random_range(size, self.world.width - size, self._rng)
            y = random_range(size, self.world.height - size, self._rng)

            if distance(x, y, player.x, player.y) <= self.min_separation:
                continue
            if distance(x, y, enemy.x, enemy.y) <= self.min_separation:
                continue

            barrier = Barrier(
                x=x, y=y, size=size,
                rotation_speed=random_range(-0.03, 0.03, self._rng),
                pulse_phase=self._rng.random() * math.pi * 2,
            )
            self.barriers.append(barrier)
            spawn_ring(self.effects, x, y, barrier.color, rng=self._rng)
            log.trace("Barrier spawned at (%.0f, %.0f)", x, y)
            return barrier

        log.debug("No barrier position found after %d attempts", self.max_attempts)
        return None

    def __len__(self) -> int:
        return len(self.barriers)
