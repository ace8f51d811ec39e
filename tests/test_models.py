"""
Unit tests for the Pydantic models and enums.
"""

import pytest
from pydantic import ValidationError

from evade.models import (
    DEFAULT_PRESETS,
    Difficulty,
    DifficultyPreset,
    DifficultyPresets,
    EvadeState,
    FeedbackEvent,
    GameSettings,
    GameStatistics,
    Point2D,
    Resolution,
    Vector2D,
    WorldConfig,
)


class TestPoint2D:

    def test_distance_and_length(self):
        p = Point2D(x=3.0, y=4.0)
        assert p.length() == 5.0
        assert Point2D(x=0.0, y=0.0).distance_to(p) == 5.0

    def test_is_frozen(self):
        p = Point2D(x=1.0, y=2.0)
        with pytest.raises(ValidationError):
            p.x = 5.0

    def test_clamped(self):
        v = Vector2D(x=3.0, y=4.0).clamped(1.0)
        assert v.length() == pytest.approx(1.0)
        assert v.x == pytest.approx(0.6)

    def test_clamped_short_vector_unchanged(self):
        v = Vector2D(x=0.3, y=0.4)
        assert v.clamped(1.0) is v

    def test_str(self):
        assert str(Point2D(x=1.0, y=2.5)) == "Point2D(x=1.00, y=2.50)"


class TestResolution:

    def test_parse(self):
        res = Resolution.parse("1600x900")
        assert (res.width, res.height) == (1600, 900)
        assert res.aspect_ratio == pytest.approx(16 / 9)

    @pytest.mark.parametrize("text", ["1600", "axb", "0x100", "1600x900x2"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            Resolution.parse(text)


class TestWorldConfig:

    def test_defaults(self):
        world = WorldConfig()
        assert (world.width, world.height) == (1200.0, 1200.0)
        assert world.center == (600.0, 600.0)
        assert world.collection_radius == 25.0

    def test_from_viewport_has_minimum(self):
        world = WorldConfig.from_viewport(640, 480)
        assert (world.width, world.height) == (1200.0, 1200.0)

    def test_from_viewport_scales_large_windows(self):
        world = WorldConfig.from_viewport(1280, 720)
        assert (world.width, world.height) == (1920.0, 1200.0)

    def test_is_frozen(self):
        world = WorldConfig()
        with pytest.raises(ValidationError):
            world.width = 10.0

    def test_rejects_world_smaller_than_entities(self):
        with pytest.raises(ValidationError):
            WorldConfig(width=50.0, height=50.0)


class TestDifficulty:

    def test_presets(self):
        assert DEFAULT_PRESETS[Difficulty.EASY] == DifficultyPreset(enemy_speed=1.2, barrier_spawn=0.02)
        assert DEFAULT_PRESETS[Difficulty.HARD].enemy_speed == 2.0

    def test_next_wraps(self):
        assert Difficulty.EASY.next() == Difficulty.MEDIUM
        assert Difficulty.HARD.next() == Difficulty.EASY

    def test_preset_validation(self):
        with pytest.raises(ValidationError):
            DifficultyPreset(enemy_speed=0.0, barrier_spawn=0.1)
        with pytest.raises(ValidationError):
            DifficultyPreset(enemy_speed=1.0, barrier_spawn=-0.1)

    def test_presets_require_every_level(self):
        with pytest.raises(ValidationError):
            DifficultyPresets(presets={Difficulty.EASY: DEFAULT_PRESETS[Difficulty.EASY]})


class TestSettingsAndStatistics:

    def test_settings_defaults(self):
        settings = GameSettings()
        assert settings.sound_volume == 50
        assert settings.sound_enabled is True
        assert settings.vibration is True
        assert settings.difficulty == Difficulty.MEDIUM

    def test_settings_from_stored_keys(self):
        settings = GameSettings.model_validate(
            {'soundVolume': 30, 'soundEnabled': False, 'vibration': False, 'difficulty': 'easy'})
        assert settings.sound_volume == 30
        assert settings.difficulty == Difficulty.EASY

    def test_statistics_with_game(self):
        stats = GameStatistics().with_game(40.0, 3).with_game(10.0, 1)
        assert stats.best_time == 40.0
        assert stats.total_games == 2
        assert stats.total_barriers == 4
        assert stats.average_time == pytest.approx(25.0)

    def test_average_without_games(self):
        assert GameStatistics().average_time == 0.0


class TestEnums:

    def test_feedback_event_values(self):
        assert FeedbackEvent('gameOver') == FeedbackEvent.GAME_OVER
        assert {e.value for e in FeedbackEvent} == {'collect', 'barrier', 'gameOver', 'dash', 'denied'}

    def test_states(self):
        assert EvadeState('game_over') == EvadeState.GAME_OVER
        assert len(EvadeState) == 7
