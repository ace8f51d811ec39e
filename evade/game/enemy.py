"""
Enemy entity: the pursuing "69" circle.

The enemy steers toward the player with a proportional turn (a fraction
of the angular error per tick), so it curves after the player instead of
snapping onto it. A small heading jitter every few seconds keeps its path
from looking mechanical. Hitting a wall reflects the heading.
"""

import math
import random
from typing import List

from evade import config
from evade.game.geometry import clamp, normalize_angle, random_range
from evade.game.particles import Particle, spawn_particle, update_particles
from evade.models import DifficultyPreset, Vector2D, WorldConfig


class Enemy:
    """The pursuer.

    Attributes:
        x, y: Position in world units
        size: Radius
        heading: Direction of travel in radians
        speed: Current speed in units per tick
        base_speed: Speed from the difficulty preset, before the ramp
        direction_change_counter: Ticks since the last heading jitter
        rotation: Accumulated body rotation (render only)
        rotation_speed: Body rotation per tick
        pulse_phase: Phase of the size pulse (render only)
        particles: Trail particles owned by the enemy
    """

    label = config.ENEMY_LABEL

    def __init__(self, world: WorldConfig, preset: DifficultyPreset, rng=random):
        self.world = world
        self.color = 'enemy'
        self._rng = rng
        self.set_difficulty(preset)
        self.reset()

    def reset(self) -> None:
        """Respawn at a fixed distance from the world centre, at a random angle."""
        cx, cy = self.world.center
        self.size = self.world.enemy_size
        angle = self._rng.random() * math.pi * 2
        self.x = clamp(cx + math.cos(angle) * config.ENEMY_SPAWN_DISTANCE,
                       self.size, self.world.width - self.size)
        self.y = clamp(cy + math.sin(angle) * config.ENEMY_SPAWN_DISTANCE,
                       self.size, self.world.height - self.size)
        self.heading = self._rng.random() * math.pi * 2
        self.speed = self.base_speed
        self.direction_change_counter = 0
        self.rotation = 0.0
        self.rotation_speed = 0.02
        self.pulse_phase = 0.0
        self.particles: List[Particle] = []

    def set_difficulty(self, preset: DifficultyPreset) -> None:
        self.base_speed = preset.enemy_speed
        self.speed = preset.enemy_speed

    @property
    def position(self) -> Vector2D:
        return Vector2D(x=self.x, y=self.y)

    def update(self, player) -> None:
        """Steer toward the player and advance one tick."""
        self.direction_change_counter += 1
        if self.direction_change_counter > config.ENEMY_DIRECTION_CHANGE_INTERVAL:
            self.direction_change_counter = 0
            half = config.ENEMY_HEADING_JITTER / 2
            self.heading += random_range(-half, half, self._rng)

        target = math.atan2(player.y - self.y, player.x - self.x)
        delta = normalize_angle(target - self.heading)
        self.heading += delta * config.ENEMY_TURN_GAIN

        self.x += math.cos(self.heading) * self.speed
        self.y += math.sin(self.heading) * self.speed

        # Reflect off the walls
        if self.x < self.size or self.x > self.world.width - self.size:
            self.heading = math.pi - self.heading
            self.x = clamp(self.x, self.size, self.world.width - self.size)
        if self.y < self.size or self.y > self.world.height - self.size:
            self.heading = -self.heading
            self.y = clamp(self.y, self.size, self.world.height - self.size)

        self.rotation_speed = 0.02 + self.speed * 0.01
        self.rotation += self.rotation_speed
        self.pulse_phase += 0.1

        update_particles(self.particles)
        if self._rng.random() < config.ENEMY_TRAIL_CHANCE:
            spawn_particle(self.particles, self.x, self.y, self.color, self._rng)

    def update_speed(self, elapsed_time: float) -> None:
        """Ramp speed up linearly once the grace period is over.

        The multiplier reaches 2 at RAMP_GRACE_SECONDS + RAMP_DOUBLING_SECONDS.
        """
        if elapsed_time <= config.RAMP_GRACE_SECONDS:
            self.speed = self.base_speed
            return

        multiplier = 1 + (elapsed_time - config.RAMP_GRACE_SECONDS) / config.RAMP_DOUBLING_SECONDS
        if config.ENEMY_MAX_SPEED_MULTIPLIER > 0:
            multiplier = min(multiplier, config.ENEMY_MAX_SPEED_MULTIPLIER)
        self.speed = self.base_speed * multiplier

    def check_collision(self, player) -> bool:
        """True if the enemy touches a vulnerable player.

        The hitbox is shrunk by ENEMY_HITBOX_FACTOR so grazes don't count.
        """
        if player.is_invulnerable():
            return False
        dist = math.hypot(player.x - self.x, player.y - self.y)
        return dist < (self.size + player.size) * config.ENEMY_HITBOX_FACTOR

    @property
    def pulse_scale(self) -> float:
        """Body scale factor for the pulsing effect."""
        return 1 + math.sin(self.pulse_phase) * 0.1

    def __str__(self) -> str:
        return f"Enemy(pos=({self.x:.1f}, {self.y:.1f}), speed={self.speed:.2f})"
