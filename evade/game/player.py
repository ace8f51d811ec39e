"""
Player entity.

The player moves according to a per-tick movement intent supplied by the
input layer, holds a limited number of barriers, and can spend one to
become invulnerable for a short window. A dash gives a brief speed burst.

The player performs no I/O: methods that the host should react to
(use_barrier, add_barrier, activate_dash) report success through their
return value so the caller can play the matching feedback.
"""

import math
import random
from typing import List

from evade import config
from evade.game.geometry import clamp
from evade.game.particles import Particle, spawn_burst, spawn_particle, update_particles
from evade.models import Vector2D, WorldConfig


class Player:
    """The player-controlled circle.

    Attributes:
        x, y: Position in world units
        size: Radius
        barriers: Barriers held, in [0, max_barriers]
        invulnerable: Remaining invulnerability ticks (never negative)
        vx, vy: Velocity applied on the last update
        particles: Particles owned by the player
        dash_cooldown: Ticks until the next dash is allowed
        is_dashing: Whether the dash speed boost is active

    Examples:
        >>> player = Player(WorldConfig())
        >>> player.add_barrier()
        True
        >>> player.use_barrier()
        True
        >>> player.is_invulnerable()
        True
    """

    def __init__(
        self,
        world: WorldConfig,
        max_speed: float = config.PLAYER_MAX_SPEED,
        max_barriers: int = config.PLAYER_MAX_BARRIERS,
        rng=random,
    ):
        self.world = world
        self.base_max_speed = max_speed
        self.max_barriers = max_barriers
        self.color = 'player'
        self._rng = rng
        self.reset()

    def reset(self) -> None:
        """Place the player at the world centre with no barriers."""
        self.x, self.y = self.world.center
        self.size = self.world.player_size
        self.vx = 0.0
        self.vy = 0.0
        self.barriers = 0
        self.invulnerable = 0
        self.dash_cooldown = 0
        self.is_dashing = False
        self.particles: List[Particle] = []

    @property
    def position(self) -> Vector2D:
        return Vector2D(x=self.x, y=self.y)

    @property
    def max_speed(self) -> float:
        """Current speed cap, boosted while dashing."""
        if self.is_dashing:
            return self.base_max_speed * config.DASH_SPEED_MULTIPLIER
        return self.base_max_speed

    def update(self, movement_intent: Vector2D) -> None:
        """Advance the player by one tick.

        Args:
            movement_intent: Desired direction scaled to [0, 1]; values with
                larger magnitude are capped at max_speed.
        """
        speed = self.max_speed
        vx = movement_intent.x * speed
        vy = movement_intent.y * speed
        magnitude = math.hypot(vx, vy)
        if magnitude > speed:
            vx *= speed / magnitude
            vy *= speed / magnitude
        self.vx, self.vy = vx, vy

        self.x = clamp(self.x + vx, self.size, self.world.width - self.size)
        self.y = clamp(self.y + vy, self.size, self.world.height - self.size)

        if self.dash_cooldown > 0:
            self.dash_cooldown -= 1
            dash_ends_at = config.DASH_COOLDOWN_TICKS - config.DASH_DURATION_TICKS
            if self.is_dashing and self.dash_cooldown <= dash_ends_at:
                self.is_dashing = False

        if self.invulnerable > 0:
            self.invulnerable -= 1

        update_particles(self.particles)

        moving = abs(self.vx) > 0.1 or abs(self.vy) > 0.1
        if moving and self._rng.random() < config.PLAYER_TRAIL_CHANCE:
            spawn_particle(self.particles, self.x, self.y, self.color, self._rng)

    def use_barrier(self) -> bool:
        """Spend one barrier for INVULNERABLE_TICKS of invulnerability.

        Refused when no barrier is held or an invulnerability window is
        already running, so a barrier is never wasted.

        Returns:
            True if a barrier was spent, False if nothing happened
        """
        if self.barriers <= 0 or self.is_invulnerable():
            return False

        self.barriers -= 1
        self.invulnerable = config.INVULNERABLE_TICKS
        spawn_burst(self.particles, self.x, self.y, 'barrier', 30, self._rng)
        return True

    def add_barrier(self) -> bool:
        """Take one barrier if there is room for it.

        Returns:
            True if the barrier was added, False at capacity (no change)
        """
        if self.barriers >= self.max_barriers:
            return False

        self.barriers += 1
        spawn_burst(self.particles, self.x, self.y, 'barrier', 15, self._rng)
        return True

    def activate_dash(self) -> bool:
        """Start a dash if it is off cooldown.

        Returns:
            True if the dash started
        """
        if self.dash_cooldown > 0:
            return False

        self.is_dashing = True
        self.dash_cooldown = config.DASH_COOLDOWN_TICKS
        self.invulnerable = max(self.invulnerable, config.DASH_INVULNERABLE_TICKS)
        spawn_burst(self.particles, self.x, self.y, self.color, 20, self._rng)
        return True

    def is_invulnerable(self) -> bool:
        return self.invulnerable > 0

    @property
    def dash_cooldown_fraction(self) -> float:
        """Remaining dash cooldown as a fraction of the full cooldown."""
        if config.DASH_COOLDOWN_TICKS <= 0:
            return 0.0
        return self.dash_cooldown / config.DASH_COOLDOWN_TICKS

    def __str__(self) -> str:
        return (f"Player(pos=({self.x:.1f}, {self.y:.1f}), barriers={self.barriers}, "
                f"invulnerable={self.invulnerable})")
