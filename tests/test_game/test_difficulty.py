"""
Unit tests for the DifficultyLoader.
"""

import pytest

from evade.game.difficulty import DEFAULT_PRESETS_PATH, DifficultyLoader
from evade.models import DEFAULT_PRESETS, Difficulty, DifficultyPresets


class TestDifficultyLoader:

    def test_bundled_presets_file_exists(self):
        assert DEFAULT_PRESETS_PATH.exists()

    def test_loads_bundled_presets(self):
        presets = DifficultyLoader().load()
        assert presets.get(Difficulty.EASY).enemy_speed == 1.2
        assert presets.get(Difficulty.MEDIUM).barrier_spawn == 0.015
        assert presets.get(Difficulty.HARD).enemy_speed == 2.0

    def test_bundled_presets_match_builtins(self):
        presets = DifficultyLoader().load()
        for difficulty in Difficulty:
            assert presets.get(difficulty) == DEFAULT_PRESETS[difficulty]

    def test_missing_file_uses_builtins(self, tmp_path):
        presets = DifficultyLoader(tmp_path / 'nope.yaml').load()
        assert presets == DifficultyPresets.defaults()

    def test_custom_file(self, tmp_path):
        path = tmp_path / 'difficulty.yaml'
        path.write_text(
            "presets:\n"
            "  easy: {enemy_speed: 0.5, barrier_spawn: 0.5}\n"
            "  medium: {enemy_speed: 1.0, barrier_spawn: 0.2}\n"
            "  hard: {enemy_speed: 4.0, barrier_spawn: 0.0}\n"
        )
        presets = DifficultyLoader(path).load()
        assert presets.get(Difficulty.HARD).enemy_speed == 4.0
        assert presets.get(Difficulty.EASY).barrier_spawn == 0.5

    def test_missing_level_is_invalid(self, tmp_path):
        path = tmp_path / 'difficulty.yaml'
        path.write_text("presets:\n  easy: {enemy_speed: 1.0, barrier_spawn: 0.1}\n")
        with pytest.raises(ValueError, match="Missing difficulty presets"):
            DifficultyLoader(path).load()

    def test_out_of_range_probability_is_invalid(self, tmp_path):
        path = tmp_path / 'difficulty.yaml'
        path.write_text(
            "presets:\n"
            "  easy: {enemy_speed: 1.0, barrier_spawn: 1.5}\n"
            "  medium: {enemy_speed: 1.0, barrier_spawn: 0.1}\n"
            "  hard: {enemy_speed: 1.0, barrier_spawn: 0.1}\n"
        )
        with pytest.raises(ValueError):
            DifficultyLoader(path).load()

    def test_malformed_yaml_raises_value_error(self, tmp_path):
        path = tmp_path / 'difficulty.yaml'
        path.write_text("presets: [unclosed\n")
        with pytest.raises(ValueError, match="Failed to parse"):
            DifficultyLoader(path).load()

    def test_load_or_default_falls_back(self, tmp_path):
        path = tmp_path / 'difficulty.yaml'
        path.write_text("just a string\n")
        presets = DifficultyLoader(path).load_or_default()
        assert presets == DifficultyPresets.defaults()
