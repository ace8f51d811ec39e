"""
Evade data models.

Validated configuration and persistence records: the immutable world
configuration built once per session, difficulty presets, user settings
and the aggregated play statistics.
"""

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from evade import config
from evade.models.enums import Difficulty


class WorldConfig(BaseModel):
    """Immutable world dimensions and entity sizes for one session.

    Built once when a session starts and passed to every entity that
    needs world bounds. Never mutated afterwards.

    Attributes:
        width: World width in world units
        height: World height in world units
        player_size: Player radius
        enemy_size: Enemy radius
        barrier_size: Pickup radius
        collection_radius: Pickup collection distance

    Examples:
        >>> world = WorldConfig.from_viewport(1280, 720)
        >>> world.width, world.height
        (1920.0, 1200.0)
    """
    width: float = Field(default=float(config.WORLD_MIN_SIZE), gt=0)
    height: float = Field(default=float(config.WORLD_MIN_SIZE), gt=0)
    player_size: float = Field(default=config.PLAYER_SIZE, gt=0)
    enemy_size: float = Field(default=config.ENEMY_SIZE, gt=0)
    barrier_size: float = Field(default=config.BARRIER_SIZE, gt=0)
    collection_radius: float = Field(default=config.COLLECTION_RADIUS, gt=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_room_for_entities(self) -> 'WorldConfig':
        """The world must be wider than the largest entity diameter."""
        largest = 2 * max(self.player_size, self.enemy_size, self.barrier_size)
        if self.width <= largest or self.height <= largest:
            raise ValueError(
                f'World {self.width}x{self.height} too small for entities of diameter {largest}'
            )
        return self

    @classmethod
    def from_viewport(cls, width: int, height: int) -> 'WorldConfig':
        """Scale the world from the window size, never below the minimum."""
        return cls(
            width=float(max(config.WORLD_MIN_SIZE, width * config.WORLD_SCALE)),
            height=float(max(config.WORLD_MIN_SIZE, height * config.WORLD_SCALE)),
        )

    @property
    def center(self) -> Tuple[float, float]:
        return (self.width / 2, self.height / 2)


class DifficultyPreset(BaseModel):
    """Tuning for one difficulty level.

    Attributes:
        enemy_speed: Enemy base speed in world units per tick
        barrier_spawn: Probability that a due spawn attempt actually happens
    """
    model_config = ConfigDict(frozen=True)

    enemy_speed: float = Field(gt=0.0, description="Enemy base speed (units per tick)")
    barrier_spawn: float = Field(ge=0.0, le=1.0, description="Spawn trial probability")


DEFAULT_PRESETS: Dict[Difficulty, DifficultyPreset] = {
    Difficulty.EASY: DifficultyPreset(enemy_speed=1.2, barrier_spawn=0.02),
    Difficulty.MEDIUM: DifficultyPreset(enemy_speed=1.5, barrier_spawn=0.015),
    Difficulty.HARD: DifficultyPreset(enemy_speed=2.0, barrier_spawn=0.01),
}


class DifficultyPresets(BaseModel):
    """All difficulty presets, as loaded from difficulty.yaml."""
    model_config = ConfigDict(frozen=True)

    presets: Dict[Difficulty, DifficultyPreset]

    @field_validator('presets')
    @classmethod
    def validate_all_levels_present(cls, v: Dict[Difficulty, DifficultyPreset]):
        missing = [d.value for d in Difficulty if d not in v]
        if missing:
            raise ValueError(f"Missing difficulty presets: {', '.join(missing)}")
        return v

    def get(self, difficulty: Difficulty) -> DifficultyPreset:
        return self.presets[difficulty]

    @classmethod
    def defaults(cls) -> 'DifficultyPresets':
        return cls(presets=dict(DEFAULT_PRESETS))


class GameSettings(BaseModel):
    """User settings persisted under the 'gameSettings' key.

    Examples:
        >>> GameSettings().difficulty
        <Difficulty.MEDIUM: 'medium'>
    """
    model_config = ConfigDict(populate_by_name=True)

    sound_volume: int = Field(default=config.DEFAULT_VOLUME, ge=0, le=100, alias='soundVolume')
    sound_enabled: bool = Field(default=True, alias='soundEnabled')
    vibration: bool = True
    difficulty: Difficulty = Difficulty(config.DEFAULT_DIFFICULTY)


class GameStatistics(BaseModel):
    """Aggregated play statistics persisted under 'gameStatistics'.

    Attributes:
        best_time: Longest survival in seconds
        total_games: Number of finished games
        total_barriers: Barriers held at game over, summed over all games
        total_time: Seconds played, summed over all games
    """
    model_config = ConfigDict(populate_by_name=True)

    best_time: float = Field(default=0.0, ge=0.0, alias='bestTime')
    total_games: int = Field(default=0, ge=0, alias='totalGames')
    total_barriers: int = Field(default=0, ge=0, alias='totalBarriers')
    total_time: float = Field(default=0.0, ge=0.0, alias='totalTime')

    def with_game(self, elapsed: float, barriers: int) -> 'GameStatistics':
        """Return statistics including one more finished game."""
        return GameStatistics(
            best_time=max(self.best_time, elapsed),
            total_games=self.total_games + 1,
            total_barriers=self.total_barriers + barriers,
            total_time=self.total_time + elapsed,
        )

    @property
    def average_time(self) -> float:
        if self.total_games == 0:
            return 0.0
        return self.total_time / self.total_games
