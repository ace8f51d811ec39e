"""
Integration tests for the game engine.

The engine runs against the dummy SDL drivers with sound muted and a
mock haptics callback, so the full state machine can be driven with
synthetic pygame events.
"""

from unittest.mock import MagicMock, patch

import pygame
import pytest

from evade import config
from evade.engine import GameEngine, InitializationError
from evade.models import Difficulty, EvadeState, FeedbackEvent, GameSettings
from evade.storage import SettingsStore, Storage


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


@pytest.fixture
def store(tmp_path):
    return SettingsStore(Storage(tmp_path / 'evade.json'))


@pytest.fixture
def haptics():
    return MagicMock()


@pytest.fixture
def engine(store, haptics):
    eng = GameEngine(store=store, resolution=(800, 600), mute=True, haptics=haptics)
    yield eng
    eng.quit()


def put_enemy_on_player(engine):
    sim = engine.simulation
    sim.enemy.x, sim.enemy.y = sim.player.x, sim.player.y


class TestStartup:

    def test_opens_main_menu(self, engine):
        assert engine.state == EvadeState.MENU
        assert engine.simulation is None
        assert engine.running is True

    def test_world_derived_from_viewport(self, engine):
        assert engine.viewport == (800, 600)
        assert engine.world.width == 1200.0

    def test_difficulty_override(self, store, haptics):
        eng = GameEngine(store=store, difficulty=Difficulty.HARD, resolution=(800, 600), mute=True)
        try:
            assert eng.settings.difficulty == Difficulty.HARD
        finally:
            eng.quit()

    def test_display_failure_raises(self, store):
        with patch('pygame.display.set_mode', side_effect=pygame.error("no display")):
            with pytest.raises(InitializationError):
                GameEngine(store=store, mute=True)
        pygame.quit()


class TestSessionFlow:

    def test_enter_starts_game(self, engine):
        engine.step([key(pygame.K_RETURN)])
        assert engine.state == EvadeState.PLAYING
        assert engine.simulation is not None
        assert engine.simulation.elapsed_time > 0

    def test_one_tick_per_frame(self, engine):
        engine.start_game()
        for _ in range(10):
            engine.step([])
        assert engine.simulation.elapsed_time == pytest.approx(10 / 60)

    def test_escape_pauses_and_resumes(self, engine):
        engine.start_game()
        engine.step([key(pygame.K_ESCAPE)])
        assert engine.state == EvadeState.PAUSED

        elapsed = engine.simulation.elapsed_time
        engine.step([])
        assert engine.simulation.elapsed_time == elapsed

        engine.step([key(pygame.K_ESCAPE)])
        assert engine.state == EvadeState.PLAYING

    def test_pause_menu_returns_to_menu(self, engine):
        engine.start_game()
        engine.pause()
        engine.step([key(pygame.K_DOWN), key(pygame.K_RETURN)])
        assert engine.state == EvadeState.MENU
        assert engine.simulation is None

    def test_collision_ends_game(self, engine, store, haptics):
        engine.start_game()
        for _ in range(30):
            engine.step([])
        put_enemy_on_player(engine)
        engine.step([])

        assert engine.state == EvadeState.GAME_OVER
        stats = store.load_statistics()
        assert stats.total_games == 1
        assert stats.best_time > 0
        assert engine.game_over_menu.new_best is True
        haptics.assert_called()

    def test_game_over_emits_session_record(self, engine):
        engine.start_game()
        put_enemy_on_player(engine)
        with patch('evade.engine.emit_record') as emit:
            engine.update()
        module, record = emit.call_args[0]
        assert module == 'session'
        assert record['difficulty'] == engine.settings.difficulty.value
        assert record['new_best'] is True

    def test_play_again(self, engine):
        engine.start_game()
        put_enemy_on_player(engine)
        engine.update()
        first = engine.simulation

        engine.step([key(pygame.K_RETURN)])
        assert engine.state == EvadeState.PLAYING
        assert engine.simulation is not first

    def test_space_does_not_skip_results(self, engine):
        engine.start_game()
        put_enemy_on_player(engine)
        engine.update()

        engine.step([key(pygame.K_SPACE)])
        assert engine.state == EvadeState.GAME_OVER

    def test_barrier_without_charges_is_denied(self, engine):
        engine.start_game()
        with patch.object(engine.feedback, 'notify') as notify:
            engine.step([key(pygame.K_SPACE)])
        notify.assert_called_with(FeedbackEvent.DENIED)

    def test_barrier_with_charge(self, engine):
        engine.start_game()
        engine.simulation.player.add_barrier()
        with patch.object(engine.feedback, 'notify') as notify:
            engine.step([key(pygame.K_SPACE)])
        notify.assert_any_call(FeedbackEvent.BARRIER)
        assert engine.simulation.player.is_invulnerable()

    def test_dash(self, engine):
        engine.start_game()
        engine.step([key(pygame.K_LSHIFT)])
        assert engine.simulation.player.is_dashing

    def test_tick_advances_input_sources(self, engine):
        engine.start_game()
        with patch.object(engine.input_manager, 'update') as update:
            engine.step([])
        update.assert_called_once_with(config.TICK_SECONDS)

    def test_quit_event_stops_loop(self, engine):
        engine.step([pygame.event.Event(pygame.QUIT)])
        assert engine.running is False


class TestFailureBoundary:

    def test_tick_exception_returns_to_menu(self, engine):
        engine.start_game()
        engine.simulation.tick = MagicMock(side_effect=RuntimeError("boom"))
        engine.step([])
        assert engine.state == EvadeState.MENU
        assert engine.simulation is None

    def test_render_exception_returns_to_menu(self, engine):
        engine.start_game()
        engine.renderer.render = MagicMock(side_effect=RuntimeError("boom"))
        engine.render()
        assert engine.state == EvadeState.MENU

    def test_menu_render_exception_propagates(self, engine):
        engine.start_menu.render = MagicMock(side_effect=RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            engine.render()


class TestSettingsScreens:

    def test_settings_save(self, engine, store):
        engine.step([key(pygame.K_DOWN), key(pygame.K_RETURN)])
        assert engine.state == EvadeState.SETTINGS

        # Cycle difficulty, then jump to Save
        engine.step([key(pygame.K_RETURN)])
        for _ in range(5):
            engine.step([key(pygame.K_DOWN)])
        engine.step([key(pygame.K_RETURN)])

        assert engine.state == EvadeState.MENU
        assert engine.settings.difficulty == Difficulty.HARD
        assert store.load_settings().difficulty == Difficulty.HARD

    def test_settings_escape_discards(self, engine, store):
        engine.step([key(pygame.K_DOWN), key(pygame.K_RETURN)])
        engine.step([key(pygame.K_RETURN)])
        engine.step([key(pygame.K_ESCAPE)])

        assert engine.state == EvadeState.MENU
        assert engine.settings.difficulty == Difficulty.MEDIUM
        assert store.load_settings() == GameSettings()

    def test_apply_settings_updates_feedback(self, engine):
        engine.apply_settings(GameSettings(sound_volume=20, vibration=False))
        assert engine.feedback.volume == 20
        assert engine.feedback.vibration_enabled is False

    def test_stats_screen(self, engine):
        engine.step([key(pygame.K_DOWN), key(pygame.K_DOWN), key(pygame.K_RETURN)])
        assert engine.state == EvadeState.STATS
        engine.step([key(pygame.K_ESCAPE)])
        assert engine.state == EvadeState.MENU


class TestSoundSettings:

    @pytest.fixture
    def mock_mixer(self):
        with patch('pygame.mixer.get_init', return_value=None), \
             patch('pygame.mixer.init'), \
             patch('pygame.sndarray.make_sound', side_effect=lambda array: MagicMock()):
            yield

    @pytest.fixture
    def silent_store(self, store):
        store.save_settings(GameSettings(sound_enabled=False))
        return store

    def test_enabling_sound_starts_audio(self, silent_store, mock_mixer):
        eng = GameEngine(store=silent_store, resolution=(800, 600))
        try:
            assert eng.feedback.audio_enabled is False
            eng.apply_settings(GameSettings(sound_enabled=True, sound_volume=80))
            if not config.AUDIO_ENABLED:
                pytest.skip("Audio disabled by environment")
            assert eng.feedback.audio_enabled is True
            assert set(eng.feedback.sounds) == set(FeedbackEvent)
            assert eng.feedback.volume == 80
        finally:
            eng.quit()

    def test_mute_flag_wins_over_settings(self, silent_store, mock_mixer):
        eng = GameEngine(store=silent_store, resolution=(800, 600), mute=True)
        try:
            eng.apply_settings(GameSettings(sound_enabled=True))
            assert eng.feedback.audio_enabled is False
            assert eng.feedback.sounds == {}
        finally:
            eng.quit()

    def test_disabling_sound(self, engine):
        engine.apply_settings(GameSettings(sound_enabled=False))
        assert engine.feedback.audio_enabled is False
