"""
Simulation - one game session, advanced one fixed tick at a time.

The simulation owns the entities, the shared effects list and the camera.
It knows nothing about windows, menus, audio or persistence: the engine
feeds it a movement intent each frame and reacts to the TickResult.
"""

import random
from dataclasses import dataclass
from typing import List, Tuple

from evade import config
from evade.game.barrier import BarrierManager
from evade.game.camera import Camera
from evade.game.enemy import Enemy
from evade.game.particles import Particle, update_particles
from evade.game.player import Player
from evade.logging import get_logger
from evade.models import Difficulty, DifficultyPreset, Vector2D, WorldConfig

log = get_logger('simulation')


@dataclass
class TickResult:
    """What happened during one tick."""
    collided: bool = False
    collected: int = 0


class Simulation:
    """A single play session.

    Args:
        world: Immutable world configuration for this session
        difficulty: Selected difficulty level
        preset: Tuning for that level
        viewport: Window size in pixels, used by the camera
        rng: Random source shared by every entity
    """

    def __init__(
        self,
        world: WorldConfig,
        difficulty: Difficulty,
        preset: DifficultyPreset,
        viewport: Tuple[int, int] = (config.SCREEN_WIDTH, config.SCREEN_HEIGHT),
        rng=random,
    ):
        self.world = world
        self.difficulty = difficulty
        self.preset = preset
        self.viewport = viewport

        self.effects: List[Particle] = []
        self.player = Player(world, rng=rng)
        self.enemy = Enemy(world, preset, rng=rng)
        self.barriers = BarrierManager(world, self.effects, rng=rng)
        self.camera = Camera(world)

        self.elapsed_time = 0.0
        self.active = False

    def reset(self) -> None:
        """Start a fresh session with the current difficulty."""
        self.player.reset()
        self.enemy.set_difficulty(self.preset)
        self.enemy.reset()
        self.barriers.reset()
        self.effects.clear()
        self.camera.reset()
        self.camera.update(self.player.position, self.viewport)
        self.elapsed_time = 0.0
        self.active = True
        log.info("Session started (difficulty=%s, world=%.0fx%.0f)",
                 self.difficulty.value, self.world.width, self.world.height)

    def tick(self, movement_intent: Vector2D) -> TickResult:
        """Advance the session by one fixed step.

        Does nothing once the session is inactive.
        """
        if not self.active:
            return TickResult()

        self.elapsed_time += config.TICK_SECONDS

        self.player.update(movement_intent)
        self.enemy.update(self.player)
        collected = self.barriers.update(self.player, self.enemy, self.preset.barrier_spawn)
        update_particles(self.effects)
        self.camera.update(self.player.position, self.viewport)
        self.enemy.update_speed(self.elapsed_time)

        if self.enemy.check_collision(self.player):
            self.active = False
            log.info("Collision after %.2fs with %d barriers held",
                     self.elapsed_time, self.player.barriers)
            return TickResult(collided=True, collected=collected)

        return TickResult(collided=False, collected=collected)
