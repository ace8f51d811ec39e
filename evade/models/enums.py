"""
Enumerations for Evade.

These enums define the screens the game can be in, the difficulty presets,
the player's discrete actions and the feedback events sent to the
audio/haptics layer.
"""

from enum import Enum


class EvadeState(str, Enum):
    """Screens/states of the game.

    Attributes:
        LOADING: Startup, before the first menu is shown
        MENU: Main menu
        PLAYING: Active gameplay, one simulation tick per frame
        PAUSED: Gameplay suspended, state kept
        GAME_OVER: Session ended by a collision
        SETTINGS: Settings screen (reached from MENU)
        STATS: Statistics screen (reached from MENU)
    """
    LOADING = "loading"
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    SETTINGS = "settings"
    STATS = "stats"


class Difficulty(str, Enum):
    """Named difficulty presets."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    def next(self) -> 'Difficulty':
        """Cycle to the next difficulty (wraps around)."""
        members = list(Difficulty)
        return members[(members.index(self) + 1) % len(members)]


class InputAction(str, Enum):
    """Discrete player actions produced by input sources.

    Attributes:
        USE_BARRIER: Spend a barrier for temporary invulnerability
        DASH: Short speed burst with brief invulnerability
        PAUSE: Toggle pause
    """
    USE_BARRIER = "use_barrier"
    DASH = "dash"
    PAUSE = "pause"


class FeedbackEvent(str, Enum):
    """Fire-and-forget notifications for the audio/haptics layer."""
    COLLECT = "collect"
    BARRIER = "barrier"
    GAME_OVER = "gameOver"
    DASH = "dash"
    DENIED = "denied"
