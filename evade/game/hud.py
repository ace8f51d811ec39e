"""
Heads-up display: survival timer, barrier slots and difficulty.
"""

from typing import Dict

import pygame

from evade import config
from evade.game.geometry import format_time
from evade.game.simulation import Simulation

MARGIN = 20
SLOT_RADIUS = 10
SLOT_SPACING = 28


class Hud:
    """Screen-space overlay drawn after the world."""

    def __init__(self):
        self._fonts: Dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def render(self, screen: pygame.Surface, sim: Simulation) -> None:
        width = screen.get_width()

        timer = self._font(config.Fonts.LARGE).render(
            format_time(sim.elapsed_time), True, config.Colors.UI_TEXT)
        screen.blit(timer, timer.get_rect(midtop=(width // 2, MARGIN)))

        # One slot per capacity, filled for each barrier held
        player = sim.player
        for i in range(player.max_barriers):
            center = (MARGIN + SLOT_RADIUS + i * SLOT_SPACING, MARGIN + SLOT_RADIUS)
            if i < player.barriers:
                pygame.draw.circle(screen, config.Colors.BARRIER, center, SLOT_RADIUS)
            else:
                pygame.draw.circle(screen, config.Colors.UI_DIM, center, SLOT_RADIUS, 2)

        label = self._font(config.Fonts.SMALL).render(
            sim.difficulty.value.upper(), True, config.Colors.GRAY)
        screen.blit(label, label.get_rect(topright=(width - MARGIN, MARGIN)))
