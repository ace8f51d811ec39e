"""
Menu system for Evade.

This module provides the screens wrapped around gameplay: the main menu,
pause overlay, game over summary, settings and statistics.

Classes:
    MenuScreen: Base class for menu screens
    StartMenu: Main menu
    PauseMenu: Overlay shown while paused
    GameOverMenu: Final time, barriers and best time
    SettingsMenu: Difficulty, volume and vibration
    StatsMenu: Aggregated play statistics
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

import pygame

from evade import config
from evade.game.geometry import format_time
from evade.models import GameSettings, GameStatistics, Vector2D

ITEM_SPACING = 70
HIT_HALF_WIDTH = 200
HIT_HALF_HEIGHT = 30
VOLUME_STEP = 10


class MenuAction(str, Enum):
    """Actions that can be triggered from menu selections."""
    START_GAME = "start_game"
    SETTINGS = "settings"
    STATS = "stats"
    QUIT_GAME = "quit_game"
    RESUME = "resume"
    MAIN_MENU = "main_menu"
    PLAY_AGAIN = "play_again"
    CYCLE_DIFFICULTY = "cycle_difficulty"
    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    TOGGLE_SOUND = "toggle_sound"
    TOGGLE_VIBRATION = "toggle_vibration"
    SAVE = "save"
    BACK = "back"
    NONE = "none"


def _blit_centered(
    screen: pygame.Surface,
    text: str,
    size: int,
    color: Tuple[int, int, int],
    center: Tuple[int, int],
) -> None:
    font = pygame.font.Font(None, size)
    surface = font.render(text, True, color)
    screen.blit(surface, surface.get_rect(center=center))


class MenuItem:
    """A selectable menu item.

    Attributes:
        text: Display text for the menu item
        action: Action to perform when selected
        position: Centre of the item on screen
        selected: Whether this item is currently selected
    """

    def __init__(self, text: str, action: MenuAction, position: Vector2D):
        self.text = text
        self.action = action
        self.position = position
        self.selected = False

    def contains(self, pos: Tuple[int, int]) -> bool:
        return (abs(pos[0] - self.position.x) < HIT_HALF_WIDTH and
                abs(pos[1] - self.position.y) < HIT_HALF_HEIGHT)

    def render(self, screen: pygame.Surface) -> None:
        color = config.Colors.UI_HIGHLIGHT if self.selected else config.Colors.UI_TEXT
        _blit_centered(screen, self.text, config.Fonts.LARGE, color,
                       (int(self.position.x), int(self.position.y)))


class MenuScreen:
    """Base class for menu screens.

    Provides common functionality for rendering menus and handling
    keyboard/mouse selection. Items are stacked vertically below base_y.

    Attributes:
        items: List of menu items
        selected_index: Index of currently selected item
        title: Menu title text
        screen_size: Window size the layout is computed for
    """

    def __init__(self, title: str, screen_size: Tuple[int, int], base_y: Optional[int] = None):
        self.title = title
        self.screen_size = screen_size
        self.base_y = base_y if base_y is not None else screen_size[1] // 2 - 40
        self.items: List[MenuItem] = []
        self.selected_index = 0

    @property
    def center_x(self) -> int:
        return self.screen_size[0] // 2

    def add_item(self, text: str, action: MenuAction) -> MenuItem:
        y = self.base_y + len(self.items) * ITEM_SPACING
        item = MenuItem(text, action, Vector2D(x=float(self.center_x), y=float(y)))
        self.items.append(item)

        # Select first item by default
        if len(self.items) == 1:
            item.selected = True
        return item

    def handle_input(self, events: Sequence[pygame.event.Event]) -> Optional[MenuAction]:
        """Handle input events for menu navigation.

        Returns:
            MenuAction if an item was activated, None otherwise
        """
        for event in events:
            if event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_UP, pygame.K_w):
                    self._select_previous()
                elif event.key in (pygame.K_DOWN, pygame.K_s):
                    self._select_next()
                elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    return self._activate_selected()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                for i, item in enumerate(self.items):
                    if item.contains(event.pos):
                        self._select_item(i)
                        return self._activate_selected()

            elif event.type == pygame.MOUSEMOTION:
                # Highlight item under mouse
                for i, item in enumerate(self.items):
                    if item.contains(event.pos):
                        self._select_item(i)
                        break

        return None

    def _select_item(self, index: int) -> None:
        if 0 <= index < len(self.items):
            if 0 <= self.selected_index < len(self.items):
                self.items[self.selected_index].selected = False
            self.selected_index = index
            self.items[self.selected_index].selected = True

    def _select_next(self) -> None:
        """Select the next menu item (wrap around)."""
        if self.items:
            self._select_item((self.selected_index + 1) % len(self.items))

    def _select_previous(self) -> None:
        """Select the previous menu item (wrap around)."""
        if self.items:
            self._select_item((self.selected_index - 1) % len(self.items))

    def _activate_selected(self) -> MenuAction:
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index].action
        return MenuAction.NONE

    def render_title(self, screen: pygame.Surface, y: int = 150) -> None:
        _blit_centered(screen, self.title, config.Fonts.HUGE, config.Colors.UI_TEXT,
                       (self.center_x, y))

    def render_lines(
        self,
        screen: pygame.Surface,
        lines: Sequence[str],
        start_y: int,
        size: int = config.Fonts.MEDIUM,
        color: Tuple[int, int, int] = config.Colors.UI_TEXT,
        spacing: int = 40,
    ) -> None:
        for i, line in enumerate(lines):
            _blit_centered(screen, line, size, color, (self.center_x, start_y + i * spacing))

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(config.Colors.BACKGROUND)
        self.render_title(screen)
        for item in self.items:
            item.render(screen)


class StartMenu(MenuScreen):
    """Main menu."""

    def __init__(self, screen_size: Tuple[int, int], best_time: float = 0.0):
        super().__init__("EVADE", screen_size)
        self.best_time = best_time

        self.add_item("Play", MenuAction.START_GAME)
        self.add_item("Settings", MenuAction.SETTINGS)
        self.add_item("Statistics", MenuAction.STATS)
        self.add_item("Quit", MenuAction.QUIT_GAME)

    def render(self, screen: pygame.Surface) -> None:
        super().render(screen)

        _blit_centered(screen, f"Outrun the {config.ENEMY_LABEL}. Grab barriers.",
                       config.Fonts.MEDIUM, config.Colors.UI_DIM, (self.center_x, 220))
        if self.best_time > 0:
            _blit_centered(screen, f"Best: {format_time(self.best_time)}", config.Fonts.MEDIUM,
                           config.Colors.BARRIER, (self.center_x, 260))

        self.render_lines(screen, [
            "WASD / arrows or drag the mouse to move",
            "SPACE barrier   SHIFT dash   ESC pause",
        ], self.screen_size[1] - 90, size=config.Fonts.SMALL, color=config.Colors.GRAY, spacing=30)


class PauseMenu(MenuScreen):
    """Pause overlay drawn on top of the frozen game."""

    def __init__(self, screen_size: Tuple[int, int], elapsed: float = 0.0, barriers: int = 0):
        super().__init__("PAUSED", screen_size, base_y=screen_size[1] // 2 + 40)
        self.elapsed = elapsed
        self.barriers = barriers

        self.add_item("Resume", MenuAction.RESUME)
        self.add_item("Main Menu", MenuAction.MAIN_MENU)

    def render(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(self.screen_size)
        overlay.set_alpha(config.Colors.OVERLAY[3])
        overlay.fill(config.Colors.OVERLAY[:3])
        screen.blit(overlay, (0, 0))

        self.render_title(screen, y=self.screen_size[1] // 2 - 120)
        self.render_lines(screen, [
            f"Time: {format_time(self.elapsed)}",
            f"Barriers: {self.barriers}",
        ], self.screen_size[1] // 2 - 50)
        for item in self.items:
            item.render(screen)


class GameOverMenu(MenuScreen):
    """Game over screen with the session's results.

    Attributes:
        elapsed: Survival time in seconds
        barriers: Barriers held at the end
        best_time: Best time including this game
        new_best: Whether this game set the best time
    """

    def __init__(
        self,
        screen_size: Tuple[int, int],
        elapsed: float,
        barriers: int,
        best_time: float,
    ):
        super().__init__("CAUGHT!", screen_size, base_y=screen_size[1] // 2 + 80)
        self.elapsed = elapsed
        self.barriers = barriers
        self.best_time = best_time
        self.new_best = elapsed > 0 and elapsed >= best_time

        self.add_item("Play Again", MenuAction.PLAY_AGAIN)
        self.add_item("Main Menu", MenuAction.MAIN_MENU)

    def handle_input(self, events: Sequence[pygame.event.Event]) -> Optional[MenuAction]:
        # Space doubles as the barrier key during play
        events = [e for e in events if not (e.type == pygame.KEYDOWN and e.key == pygame.K_SPACE)]
        return super().handle_input(events)

    def render(self, screen: pygame.Surface) -> None:
        super().render(screen)

        self.render_lines(screen, [
            f"Survived: {format_time(self.elapsed)}",
            f"Barriers held: {self.barriers}",
            f"Best: {format_time(self.best_time)}",
        ], self.screen_size[1] // 2 - 100, size=config.Fonts.LARGE, spacing=50)
        if self.new_best:
            _blit_centered(screen, "New best time!", config.Fonts.MEDIUM, config.Colors.BARRIER,
                           (self.center_x, 220))


class SettingsMenu(MenuScreen):
    """Edits a draft copy of the settings; SAVE hands it back to the engine.

    Toggle and step actions are applied here and reported as NONE, so the
    engine only sees SAVE and BACK.

    Examples:
        >>> menu = SettingsMenu((1280, 720), GameSettings())
        >>> menu.apply(MenuAction.VOLUME_UP)
        >>> menu.settings.sound_volume
        60
    """

    def __init__(self, screen_size: Tuple[int, int], settings: GameSettings):
        super().__init__("SETTINGS", screen_size, base_y=220)
        self.settings = settings.model_copy()

        self._difficulty = self.add_item("", MenuAction.CYCLE_DIFFICULTY)
        self._sound = self.add_item("", MenuAction.TOGGLE_SOUND)
        self._volume_up = self.add_item("", MenuAction.VOLUME_UP)
        self._volume_down = self.add_item("Volume -", MenuAction.VOLUME_DOWN)
        self._vibration = self.add_item("", MenuAction.TOGGLE_VIBRATION)
        self.add_item("Save", MenuAction.SAVE)
        self.add_item("Back", MenuAction.BACK)
        self._refresh_labels()

    def _refresh_labels(self) -> None:
        s = self.settings
        self._difficulty.text = f"Difficulty: {s.difficulty.value.title()}"
        self._sound.text = f"Sound: {'On' if s.sound_enabled else 'Off'}"
        self._volume_up.text = f"Volume: {s.sound_volume}%  +"
        self._vibration.text = f"Vibration: {'On' if s.vibration else 'Off'}"

    def apply(self, action: MenuAction) -> None:
        """Apply a settings-editing action to the draft."""
        s = self.settings
        if action == MenuAction.CYCLE_DIFFICULTY:
            update = {'difficulty': s.difficulty.next()}
        elif action == MenuAction.VOLUME_UP:
            update = {'sound_volume': min(100, s.sound_volume + VOLUME_STEP)}
        elif action == MenuAction.VOLUME_DOWN:
            update = {'sound_volume': max(0, s.sound_volume - VOLUME_STEP)}
        elif action == MenuAction.TOGGLE_SOUND:
            update = {'sound_enabled': not s.sound_enabled}
        elif action == MenuAction.TOGGLE_VIBRATION:
            update = {'vibration': not s.vibration}
        else:
            return
        self.settings = s.model_copy(update=update)
        self._refresh_labels()

    def handle_input(self, events: Sequence[pygame.event.Event]) -> Optional[MenuAction]:
        for event in events:
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return MenuAction.BACK

        action = super().handle_input(events)
        if action in (MenuAction.SAVE, MenuAction.BACK) or action is None:
            return action
        self.apply(action)
        return MenuAction.NONE


class StatsMenu(MenuScreen):
    """Read-only statistics screen."""

    def __init__(self, screen_size: Tuple[int, int], stats: GameStatistics):
        super().__init__("STATISTICS", screen_size, base_y=screen_size[1] - 120)
        self.stats = stats
        self.add_item("Back", MenuAction.BACK)

    def lines(self) -> List[str]:
        s = self.stats
        return [
            f"Best time: {format_time(s.best_time)}",
            f"Games played: {s.total_games}",
            f"Average time: {format_time(s.average_time)}",
            f"Total time: {format_time(s.total_time)}",
            f"Barriers held at game over: {s.total_barriers}",
        ]

    def handle_input(self, events: Sequence[pygame.event.Event]) -> Optional[MenuAction]:
        for event in events:
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return MenuAction.BACK
        return super().handle_input(events)

    def render(self, screen: pygame.Surface) -> None:
        super().render(screen)
        self.render_lines(screen, self.lines(), 240, spacing=50)
