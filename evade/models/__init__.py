"""
Data models for Evade.

This package provides the Pydantic models and enums used across the game:
- Primitives: Point2D/Vector2D, Resolution
- Enums: EvadeState, Difficulty, InputAction, FeedbackEvent
- Models: WorldConfig, DifficultyPreset(s), GameSettings, GameStatistics

Usage:
    >>> from evade.models import Vector2D, WorldConfig, Difficulty
"""

from .primitives import (
    Point2D,
    Vector2D,
    ZERO,
    Resolution,
)
from .enums import (
    EvadeState,
    Difficulty,
    InputAction,
    FeedbackEvent,
)
from .models import (
    WorldConfig,
    DifficultyPreset,
    DifficultyPresets,
    DEFAULT_PRESETS,
    GameSettings,
    GameStatistics,
)

__all__ = [
    'Point2D',
    'Vector2D',
    'ZERO',
    'Resolution',
    'EvadeState',
    'Difficulty',
    'InputAction',
    'FeedbackEvent',
    'WorldConfig',
    'DifficultyPreset',
    'DifficultyPresets',
    'DEFAULT_PRESETS',
    'GameSettings',
    'GameStatistics',
]
