"""
Evade - Configuration.

Game constants, screen settings, colors and gameplay parameters. Numeric
values can be overridden from the environment or a .env file placed next
to this module.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)
FPS = 60
TICK_SECONDS = 1.0 / FPS  # Fixed simulation quantum

# World (scaled from the window, never smaller than the minimum)
WORLD_MIN_SIZE = _get_int('WORLD_MIN_SIZE', 1200)
WORLD_SCALE = _get_float('WORLD_SCALE', 1.5)

# Entity sizes (radii in world units)
PLAYER_SIZE = _get_float('PLAYER_SIZE', 20.0)
ENEMY_SIZE = _get_float('ENEMY_SIZE', 40.0)
BARRIER_SIZE = _get_float('BARRIER_SIZE', 15.0)
COLLECTION_RADIUS = _get_float('COLLECTION_RADIUS', 25.0)

# Player
PLAYER_MAX_SPEED = _get_float('PLAYER_MAX_SPEED', 5.0)  # units per tick
PLAYER_MAX_BARRIERS = _get_int('PLAYER_MAX_BARRIERS', 5)
INVULNERABLE_TICKS = _get_int('INVULNERABLE_TICKS', 90)  # 1.5s at 60fps
DASH_COOLDOWN_TICKS = _get_int('DASH_COOLDOWN_TICKS', 60)
DASH_DURATION_TICKS = _get_int('DASH_DURATION_TICKS', 30)
DASH_INVULNERABLE_TICKS = _get_int('DASH_INVULNERABLE_TICKS', 30)
DASH_SPEED_MULTIPLIER = _get_float('DASH_SPEED_MULTIPLIER', 2.0)

# Enemy
ENEMY_SPAWN_DISTANCE = _get_float('ENEMY_SPAWN_DISTANCE', 300.0)
ENEMY_TURN_GAIN = _get_float('ENEMY_TURN_GAIN', 0.08)
ENEMY_DIRECTION_CHANGE_INTERVAL = _get_int('ENEMY_DIRECTION_CHANGE_INTERVAL', 90)
ENEMY_HEADING_JITTER = _get_float('ENEMY_HEADING_JITTER', 0.2)  # full width of the jitter range
ENEMY_HITBOX_FACTOR = 0.8
ENEMY_LABEL = os.getenv('ENEMY_LABEL', '69')

# Difficulty ramp
RAMP_GRACE_SECONDS = _get_float('RAMP_GRACE_SECONDS', 30.0)
RAMP_DOUBLING_SECONDS = _get_float('RAMP_DOUBLING_SECONDS', 120.0)
ENEMY_MAX_SPEED_MULTIPLIER = _get_float('ENEMY_MAX_SPEED_MULTIPLIER', 0.0)  # 0 = uncapped

# Barrier pickups
BARRIER_SPAWN_INTERVAL = _get_int('BARRIER_SPAWN_INTERVAL', 120)  # ticks
BARRIER_MAX_ACTIVE = _get_int('BARRIER_MAX_ACTIVE', 8)
BARRIER_MIN_SEPARATION = _get_float('BARRIER_MIN_SEPARATION', 150.0)
BARRIER_SPAWN_ATTEMPTS = _get_int('BARRIER_SPAWN_ATTEMPTS', 20)

# Camera
CAMERA_ZOOM = _get_float('CAMERA_ZOOM', 0.7)
CAMERA_ZOOM_LERP = _get_float('CAMERA_ZOOM_LERP', 0.1)
CAMERA_MIN_ZOOM = 0.3
CAMERA_MAX_ZOOM = 2.0
GRID_SIZE = 80

# Particles
PLAYER_TRAIL_CHANCE = 0.3
ENEMY_TRAIL_CHANCE = 0.2

# Default difficulty
DEFAULT_DIFFICULTY = os.getenv('DEFAULT_DIFFICULTY', 'medium')

# Audio
AUDIO_ENABLED = _get_bool('AUDIO_ENABLED', True)
DEFAULT_VOLUME = _get_int('DEFAULT_VOLUME', 50)  # percent

# Vibration patterns (milliseconds on/off)
VIBRATE_BARRIER = [50, 50, 50]
VIBRATE_DASH = [100]
VIBRATE_DENIED = [50]
VIBRATE_GAME_OVER = [200, 100, 200]

# Colors
BACKGROUND_COLOR = (26, 26, 46)
GRID_COLOR = (38, 38, 58)
PLAYER_COLOR = (72, 219, 251)
ENEMY_COLOR = (255, 107, 107)
BARRIER_COLOR = (254, 202, 87)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRAY = (128, 128, 128)
DIM_GRAY = (70, 70, 90)


class Colors:
    """Color constants for easy access in code."""
    BACKGROUND = BACKGROUND_COLOR
    GRID = GRID_COLOR
    PLAYER = PLAYER_COLOR
    ENEMY = ENEMY_COLOR
    BARRIER = BARRIER_COLOR
    WHITE = WHITE
    BLACK = BLACK
    GRAY = GRAY
    UI_TEXT = WHITE
    UI_HIGHLIGHT = BARRIER_COLOR
    UI_DIM = DIM_GRAY
    OVERLAY = (0, 0, 0, 160)


# Color tokens used by particles and entities
COLOR_TOKENS = {
    'player': PLAYER_COLOR,
    'enemy': ENEMY_COLOR,
    'barrier': BARRIER_COLOR,
    'white': WHITE,
}


class Fonts:
    """Font size constants."""
    SMALL = 24
    MEDIUM = 36
    LARGE = 48
    HUGE = 72
