"""
Camera that follows the player through a world larger than the window.
"""

from typing import Tuple

from evade import config
from evade.game.geometry import clamp
from evade.models import Vector2D, WorldConfig


class Camera:
    """Maps world coordinates to screen coordinates.

    The camera's (x, y) is the world point shown at the top-left corner
    of the viewport; zoom scales world units to pixels.
    """

    def __init__(self, world: WorldConfig, zoom: float = config.CAMERA_ZOOM):
        self.world = world
        self.x = 0.0
        self.y = 0.0
        self.zoom = zoom
        self.target_zoom = zoom

    def reset(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self.zoom = self.target_zoom

    def update(self, target: Vector2D, viewport: Tuple[int, int]) -> None:
        """Centre on target and keep the view inside the world.

        When the view is larger than the world the upper clamp bound is
        floored at zero so the world sits at the top-left.
        """
        view_w = viewport[0] / self.zoom
        view_h = viewport[1] / self.zoom

        self.x = clamp(target.x - view_w / 2, 0.0, max(0.0, self.world.width - view_w))
        self.y = clamp(target.y - view_h / 2, 0.0, max(0.0, self.world.height - view_h))

        # Smooth zoom
        self.zoom += (self.target_zoom - self.zoom) * config.CAMERA_ZOOM_LERP

    def set_target_zoom(self, zoom: float) -> None:
        self.target_zoom = clamp(zoom, config.CAMERA_MIN_ZOOM, config.CAMERA_MAX_ZOOM)

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return ((x - self.x) * self.zoom, (y - self.y) * self.zoom)

    def scale(self, length: float) -> float:
        """Convert a world length to pixels."""
        return length * self.zoom

    def visible_rect(self, viewport: Tuple[int, int]) -> Tuple[float, float, float, float]:
        """World-space (left, top, right, bottom) currently on screen."""
        return (
            self.x,
            self.y,
            self.x + viewport[0] / self.zoom,
            self.y + viewport[1] / self.zoom,
        )

    def is_visible(self, x: float, y: float, radius: float, viewport: Tuple[int, int]) -> bool:
        left, top, right, bottom = self.visible_rect(viewport)
        return left - radius <= x <= right + radius and top - radius <= y <= bottom + radius
