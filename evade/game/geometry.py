"""
Numeric helpers shared by every gameplay module.
"""

import math
import random


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds."""
    return lo if value < lo else hi if value > hi else value


def lerp(start: float, end: float, factor: float) -> float:
    """Linear interpolation from start toward end."""
    return start + (end - start) * factor


def random_range(lo: float, hi: float, rng=random) -> float:
    """Uniform float in [lo, hi)."""
    return lo + rng.random() * (hi - lo)


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def normalize_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    angle = math.fmod(angle, 2 * math.pi)
    if angle > math.pi:
        angle -= 2 * math.pi
    elif angle <= -math.pi:
        angle += 2 * math.pi
    return angle


def format_time(seconds: float) -> str:
    """Format seconds as MM:SS.

    Examples:
        >>> format_time(83.9)
        '01:23'
    """
    total = int(max(0.0, seconds))
    return f"{total // 60:02d}:{total % 60:02d}"
