"""
Main game engine for Evade.

This module provides the game loop, pygame initialization, the screen
state machine and the failure boundary around each simulation tick.
"""

import time
from typing import List, Optional, Sequence, Tuple

import pygame

from evade import config
from evade.game.difficulty import DifficultyLoader
from evade.game.feedback import FeedbackManager, HapticsCallback
from evade.game.hud import Hud
from evade.game.menu import (
    GameOverMenu,
    MenuAction,
    PauseMenu,
    SettingsMenu,
    StartMenu,
    StatsMenu,
)
from evade.game.renderer import WorldRenderer
from evade.game.simulation import Simulation
from evade.input import InputManager, KeyboardInputSource, MouseInputSource
from evade.logging import close_all_sinks, create_sink, emit_record, get_logger, register_sink
from evade.models import (
    Difficulty,
    EvadeState,
    FeedbackEvent,
    GameSettings,
    InputAction,
    WorldConfig,
)
from evade.state import StateManager
from evade.storage import SettingsStore

log = get_logger('engine')

RESUME_KEYS = (pygame.K_ESCAPE, pygame.K_p)


class InitializationError(Exception):
    """The display or another required subsystem could not be started."""


class GameEngine:
    """Main game engine managing the game loop and pygame state.

    Owns the window, the screens and, while a game is running, the
    Simulation. Exactly one simulation tick runs per frame while PLAYING.
    Any exception escaping a tick or a gameplay render is logged and the
    engine falls back to the main menu.

    Attributes:
        screen: Pygame display surface
        clock: Pygame clock for frame timing
        running: Whether the game loop should continue
        states: Screen state machine
        settings: Current user settings
        simulation: Active session, None outside gameplay
        input_manager: Keyboard and mouse input combined

    Examples:
        >>> engine = GameEngine()
        >>> engine.run()
    """

    def __init__(
        self,
        store: Optional[SettingsStore] = None,
        difficulty: Optional[Difficulty] = None,
        resolution: Optional[Tuple[int, int]] = None,
        fullscreen: bool = False,
        mute: bool = False,
        haptics: Optional[HapticsCallback] = None,
        difficulty_loader: Optional[DifficultyLoader] = None,
    ):
        """Initialize pygame, load settings and presets, and open the main menu.

        Raises:
            InitializationError: If the display cannot be created
        """
        pygame.init()

        size = resolution or (config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        flags = pygame.FULLSCREEN if fullscreen else 0
        try:
            self.screen = pygame.display.set_mode((0, 0) if fullscreen else size, flags)
        except pygame.error as e:
            raise InitializationError(f"Could not create display: {e}") from e
        pygame.display.set_caption("Evade")

        self.clock = pygame.time.Clock()
        self.running = True
        self.mute = mute
        self.states = StateManager()
        self.viewport: Tuple[int, int] = self.screen.get_size()
        self.world = WorldConfig.from_viewport(*self.viewport)
        self._render_loading()

        self.store = store if store is not None else SettingsStore()
        self.settings = self.store.load_settings()
        if difficulty is not None:
            self.settings = self.settings.model_copy(update={'difficulty': difficulty})

        loader = difficulty_loader if difficulty_loader is not None else DifficultyLoader()
        self.presets = loader.load_or_default()

        self.feedback = FeedbackManager(
            audio_enabled=self.settings.sound_enabled and not mute,
            volume=self.settings.sound_volume,
            vibration_enabled=self.settings.vibration,
            haptics=haptics,
        )

        self.input_manager = InputManager([KeyboardInputSource(), MouseInputSource()])
        self.renderer = WorldRenderer()
        self.hud = Hud()

        self.simulation: Optional[Simulation] = None
        self.start_menu = StartMenu(self.viewport, self.store.best_time())
        self.pause_menu: Optional[PauseMenu] = None
        self.game_over_menu: Optional[GameOverMenu] = None
        self.settings_menu: Optional[SettingsMenu] = None
        self.stats_menu: Optional[StatsMenu] = None

        register_sink('session', create_sink('session'))

        log.info("Engine ready (%dx%d, world %.0fx%.0f, difficulty=%s)",
                 self.viewport[0], self.viewport[1], self.world.width, self.world.height,
                 self.settings.difficulty.value)
        self.states.set_state(EvadeState.MENU)

    @property
    def state(self) -> EvadeState:
        return self.states.current

    def _render_loading(self) -> None:
        self.screen.fill(config.Colors.BACKGROUND)
        font = pygame.font.Font(None, config.Fonts.LARGE)
        text = font.render("Loading...", True, config.Colors.UI_TEXT)
        self.screen.blit(text, text.get_rect(center=(self.viewport[0] // 2, self.viewport[1] // 2)))
        pygame.display.flip()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def start_game(self) -> None:
        """Start a fresh session with the current difficulty."""
        difficulty = self.settings.difficulty
        simulation = Simulation(self.world, difficulty, self.presets.get(difficulty), self.viewport)
        simulation.reset()
        if not self.states.set_state(EvadeState.PLAYING):
            return
        self.simulation = simulation
        self.game_over_menu = None
        self.input_manager.clear()

    def pause(self) -> None:
        if self.simulation is None or not self.states.set_state(EvadeState.PAUSED):
            return
        self.pause_menu = PauseMenu(self.viewport, self.simulation.elapsed_time,
                                    self.simulation.player.barriers)
        self.input_manager.clear()

    def resume(self) -> None:
        if self.states.set_state(EvadeState.PLAYING):
            self.pause_menu = None

    def return_to_menu(self) -> None:
        if not self.states.set_state(EvadeState.MENU):
            return
        self._leave_gameplay()

    def _leave_gameplay(self) -> None:
        self.simulation = None
        self.pause_menu = None
        self.game_over_menu = None
        self.input_manager.clear()
        self.start_menu = StartMenu(self.viewport, self.store.best_time())

    def _game_over(self) -> None:
        sim = self.simulation
        elapsed = sim.elapsed_time
        barriers = sim.player.barriers
        previous_best = self.store.best_time()

        stats = self.store.record_game(elapsed, barriers)
        self.feedback.notify(FeedbackEvent.GAME_OVER)
        self.game_over_menu = GameOverMenu(self.viewport, elapsed, barriers, stats.best_time)
        self.states.set_state(EvadeState.GAME_OVER)

        log.info("Game over after %.2fs (best %.2fs)", elapsed, stats.best_time)
        emit_record('session', {
            'type': 'session',
            'timestamp': time.time(),
            'difficulty': sim.difficulty.value,
            'elapsed': round(elapsed, 3),
            'barriers_held': barriers,
            'best_time': round(stats.best_time, 3),
            'new_best': elapsed > previous_best,
        })

    def _recover(self) -> None:
        """Drop the session and go back to the main menu after a failure."""
        self.states.force(EvadeState.MENU)
        self._leave_gameplay()

    def apply_settings(self, settings: GameSettings) -> None:
        self.settings = settings
        self.store.save_settings(settings)
        self.feedback.set_enabled(settings.sound_enabled and not self.mute)
        self.feedback.set_volume(settings.sound_volume)
        self.feedback.set_vibration(settings.vibration)
        log.info("Settings saved (difficulty=%s, volume=%d)",
                 settings.difficulty.value, settings.sound_volume)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_events(self, events: Optional[Sequence[pygame.event.Event]] = None) -> None:
        """Process pygame events based on the current state.

        Args:
            events: Events to process; read from pygame when omitted
        """
        if events is None:
            events = pygame.event.get()

        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
                return

        if self.states.is_(EvadeState.MENU):
            self._handle_menu_events(events)
        elif self.states.is_(EvadeState.PLAYING):
            self._handle_playing_events(events)
        elif self.states.is_(EvadeState.PAUSED):
            self._handle_pause_events(events)
        elif self.states.is_(EvadeState.GAME_OVER):
            self._handle_game_over_events(events)
        elif self.states.is_(EvadeState.SETTINGS):
            self._handle_settings_events(events)
        elif self.states.is_(EvadeState.STATS):
            self._handle_stats_events(events)

    def _handle_menu_events(self, events: Sequence[pygame.event.Event]) -> None:
        action = self.start_menu.handle_input(events)

        if action == MenuAction.START_GAME:
            self.start_game()
        elif action == MenuAction.SETTINGS:
            self.settings_menu = SettingsMenu(self.viewport, self.settings)
            self.states.set_state(EvadeState.SETTINGS)
        elif action == MenuAction.STATS:
            self.stats_menu = StatsMenu(self.viewport, self.store.load_statistics())
            self.states.set_state(EvadeState.STATS)
        elif action == MenuAction.QUIT_GAME:
            self.running = False

    def _handle_playing_events(self, events: Sequence[pygame.event.Event]) -> None:
        self.input_manager.process(events)

        for event in self.input_manager.get_events():
            if event.action == InputAction.PAUSE:
                self.pause()
                return
            self._handle_action(event.action)

    def _handle_action(self, action: InputAction) -> None:
        player = self.simulation.player
        if action == InputAction.USE_BARRIER:
            if player.use_barrier():
                self.feedback.notify(FeedbackEvent.BARRIER)
            else:
                self.feedback.notify(FeedbackEvent.DENIED)
        elif action == InputAction.DASH:
            if player.activate_dash():
                self.feedback.notify(FeedbackEvent.DASH)
            else:
                self.feedback.notify(FeedbackEvent.DENIED)

    def _handle_pause_events(self, events: Sequence[pygame.event.Event]) -> None:
        for event in events:
            if event.type == pygame.KEYDOWN and event.key in RESUME_KEYS:
                self.resume()
                return

        if self.pause_menu is not None:
            action = self.pause_menu.handle_input(events)
            if action == MenuAction.RESUME:
                self.resume()
            elif action == MenuAction.MAIN_MENU:
                self.return_to_menu()

    def _handle_game_over_events(self, events: Sequence[pygame.event.Event]) -> None:
        if self.game_over_menu is None:
            return
        action = self.game_over_menu.handle_input(events)
        if action == MenuAction.PLAY_AGAIN:
            self.start_game()
        elif action == MenuAction.MAIN_MENU:
            self.return_to_menu()

    def _handle_settings_events(self, events: Sequence[pygame.event.Event]) -> None:
        if self.settings_menu is None:
            return
        action = self.settings_menu.handle_input(events)
        if action == MenuAction.SAVE:
            self.apply_settings(self.settings_menu.settings)
            self.states.go_back()
        elif action == MenuAction.BACK:
            self.states.go_back()

    def _handle_stats_events(self, events: Sequence[pygame.event.Event]) -> None:
        if self.stats_menu is not None and self.stats_menu.handle_input(events) == MenuAction.BACK:
            self.states.go_back()

    # ------------------------------------------------------------------
    # Update and render
    # ------------------------------------------------------------------

    def update(self) -> None:
        """Run one simulation tick while playing.

        The tick uses a fixed quantum regardless of the frame's wall time.
        """
        if not self.states.is_(EvadeState.PLAYING) or self.simulation is None:
            return

        try:
            self.input_manager.update(config.TICK_SECONDS)
            result = self.simulation.tick(self.input_manager.movement_intent())
            for _ in range(result.collected):
                self.feedback.notify(FeedbackEvent.COLLECT)
            if result.collided:
                self._game_over()
        except Exception:
            log.exception("Simulation tick failed; returning to menu")
            self._recover()

    def render(self) -> None:
        """Render the current frame based on the game state."""
        try:
            self._render_state()
        except Exception:
            if self.simulation is None:
                raise
            log.exception("Render failed; returning to menu")
            self._recover()
            self._render_state()
        pygame.display.flip()

    def _render_state(self) -> None:
        if self.states.is_(EvadeState.MENU) or self.states.is_(EvadeState.LOADING):
            self.start_menu.render(self.screen)

        elif self.states.is_(EvadeState.PLAYING):
            self._render_world()

        elif self.states.is_(EvadeState.PAUSED):
            self._render_world()
            if self.pause_menu is not None:
                self.pause_menu.render(self.screen)

        elif self.states.is_(EvadeState.GAME_OVER):
            if self.game_over_menu is not None:
                self.game_over_menu.render(self.screen)

        elif self.states.is_(EvadeState.SETTINGS):
            if self.settings_menu is not None:
                self.settings_menu.render(self.screen)

        elif self.states.is_(EvadeState.STATS):
            if self.stats_menu is not None:
                self.stats_menu.render(self.screen)

    def _render_world(self) -> None:
        if self.simulation is None:
            return
        self.renderer.render(self.screen, self.simulation)
        self.hud.render(self.screen, self.simulation)

    def step(self, events: Optional[List[pygame.event.Event]] = None) -> None:
        """One frame: events, at most one tick, render."""
        self.handle_events(events)
        if not self.running:
            return
        self.update()
        self.render()

    def run(self) -> None:
        """Run the main game loop until the window is closed or Quit is chosen."""
        while self.running:
            self.clock.tick(config.FPS)
            self.step()

    def quit(self) -> None:
        """Close log sinks and shut down pygame."""
        close_all_sinks()
        pygame.quit()
