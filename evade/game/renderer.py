"""
World rendering.

Draws the simulation through the camera transform: background grid,
barrier pickups, player, enemy and every particle list. Entities carry
colour tokens; this module resolves them to RGB.
"""

import math
from typing import Dict, Iterable, List, Tuple

import pygame

from evade import config
from evade.game.camera import Camera
from evade.game.particles import Particle, particle_alpha
from evade.game.simulation import Simulation

Point = Tuple[float, float]


def resolve_color(token: str) -> Tuple[int, int, int]:
    return config.COLOR_TOKENS.get(token, config.WHITE)


def _rotate(points: Iterable[Point], angle: float, scale: float = 1.0) -> List[Point]:
    """Rotate and scale local points around the origin."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return [((x * cos_a - y * sin_a) * scale, (x * sin_a + y * cos_a) * scale) for x, y in points]


class WorldRenderer:
    """Draws one frame of the world onto a surface."""

    def __init__(self):
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._dots: Dict[Tuple[int, Tuple[int, int, int]], pygame.Surface] = {}

    def _font(self, size: int) -> pygame.font.Font:
        size = max(8, size)
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def _dot(self, radius: int, color: Tuple[int, int, int]) -> pygame.Surface:
        """Opaque circle sprite, shared by every particle of that size and colour."""
        key = (radius, color)
        if key not in self._dots:
            dot = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(dot, color, (radius, radius), radius)
            self._dots[key] = dot
        return self._dots[key]

    def render(self, screen: pygame.Surface, sim: Simulation) -> None:
        camera = sim.camera
        viewport = screen.get_size()
        screen.fill(config.Colors.BACKGROUND)
        self.draw_grid(screen, camera, sim.world.width, sim.world.height)

        for barrier in sim.barriers.barriers:
            if camera.is_visible(barrier.x, barrier.y, barrier.size * barrier.pulse_scale, viewport):
                self.draw_barrier(screen, camera, barrier)

        self.draw_particles(screen, camera, sim.player.particles)
        self.draw_player(screen, camera, sim.player)
        self.draw_particles(screen, camera, sim.enemy.particles)
        self.draw_enemy(screen, camera, sim.enemy)
        self.draw_particles(screen, camera, sim.effects)

    def draw_grid(self, screen: pygame.Surface, camera: Camera, width: float, height: float) -> None:
        view_w, view_h = screen.get_size()
        left, top, right, bottom = camera.visible_rect((view_w, view_h))
        step = config.GRID_SIZE

        x = math.floor(left / step) * step
        while x <= min(right, width):
            sx, _ = camera.world_to_screen(x, 0)
            pygame.draw.line(screen, config.Colors.GRID, (sx, 0), (sx, view_h))
            x += step

        y = math.floor(top / step) * step
        while y <= min(bottom, height):
            _, sy = camera.world_to_screen(0, y)
            pygame.draw.line(screen, config.Colors.GRID, (0, sy), (view_w, sy))
            y += step

    def draw_particles(self, screen: pygame.Surface, camera: Camera, particles: List[Particle]) -> None:
        viewport = screen.get_size()
        for p in particles:
            if not camera.is_visible(p.x, p.y, p.size, viewport):
                continue
            radius = max(1, int(camera.scale(p.size)))
            sx, sy = camera.world_to_screen(p.x, p.y)
            dot = self._dot(radius, resolve_color(p.color))
            dot.set_alpha(int(255 * particle_alpha(p)))
            screen.blit(dot, (sx - radius, sy - radius))

    def draw_barrier(self, screen: pygame.Surface, camera: Camera, barrier) -> None:
        color = resolve_color(barrier.color)
        cx, cy = camera.world_to_screen(barrier.x, barrier.y)
        scale = camera.scale(barrier.size) * barrier.pulse_scale

        pygame.draw.circle(screen, color, (cx, cy), max(1, int(scale)), 2)

        shield = _rotate([(0, -0.5), (0.3, -0.2), (0.3, 0.3), (-0.3, 0.3), (-0.3, -0.2)],
                         barrier.rotation, scale)
        pygame.draw.polygon(screen, color, [(cx + x, cy + y) for x, y in shield])

        gem = _rotate([(0, -0.25), (0.15, 0), (0, 0.25), (-0.15, 0)], barrier.rotation, scale)
        pygame.draw.polygon(screen, config.Colors.WHITE, [(cx + x, cy + y) for x, y in gem])

    def draw_player(self, screen: pygame.Surface, camera: Camera, player) -> None:
        cx, cy = camera.world_to_screen(player.x, player.y)
        scale = 1.0
        if player.is_dashing:
            scale += math.sin(pygame.time.get_ticks() * 0.1) * 0.2
        radius = camera.scale(player.size) * scale
        unit = camera.scale(1.0) * scale

        pygame.draw.circle(screen, resolve_color(player.color), (cx, cy), max(1, int(radius)))

        # Face
        for side in (-1, 1):
            pygame.draw.circle(screen, config.Colors.WHITE,
                               (cx + side * 5 * unit, cy - 3 * unit), max(1, int(4 * unit)))
        smile = pygame.Rect(0, 0, 6 * unit, 6 * unit)
        smile.center = (int(cx), int(cy + 5 * unit))
        pygame.draw.arc(screen, config.Colors.ENEMY, smile, math.pi, 2 * math.pi, max(1, int(2 * unit)))

        if player.dash_cooldown > 0:
            ring = pygame.Rect(0, 0, (radius + 8 * unit) * 2, (radius + 8 * unit) * 2)
            ring.center = (int(cx), int(cy))
            sweep = math.pi * 2 * (1 - player.dash_cooldown_fraction)
            # pygame arcs run counter-clockwise from the x axis
            pygame.draw.arc(screen, config.Colors.BARRIER, ring, math.pi / 2 - sweep, math.pi / 2, 3)

        if player.is_invulnerable():
            glow = 0.5 + math.sin(pygame.time.get_ticks() * 0.1) * 0.3
            ring_radius = int(radius + 5 * unit)
            halo = pygame.Surface((ring_radius * 2 + 4, ring_radius * 2 + 4), pygame.SRCALPHA)
            pygame.draw.circle(halo, (255, 255, 255, int(255 * glow)),
                               (ring_radius + 2, ring_radius + 2), ring_radius, 2)
            screen.blit(halo, (cx - ring_radius - 2, cy - ring_radius - 2))

    def draw_enemy(self, screen: pygame.Surface, camera: Camera, enemy) -> None:
        cx, cy = camera.world_to_screen(enemy.x, enemy.y)
        scale = camera.scale(enemy.size) * enemy.pulse_scale
        angle = enemy.heading + math.pi / 2

        pygame.draw.circle(screen, resolve_color(enemy.color), (cx, cy), max(1, int(scale)))

        label = self._font(int(scale * 1.0)).render(enemy.label, True, config.Colors.WHITE)
        label = pygame.transform.rotate(label, -math.degrees(angle))
        screen.blit(label, label.get_rect(center=(int(cx), int(cy))))

        eyes = _rotate([(-0.25, -0.15), (0.25, -0.15)], angle, scale)
        for ex, ey in eyes:
            pygame.draw.circle(screen, config.Colors.WHITE, (cx + ex, cy + ey), max(1, int(scale * 0.12)))
            pygame.draw.circle(screen, config.Colors.BLACK, (cx + ex, cy + ey), max(1, int(scale * 0.06)))

        brows = _rotate([(-0.35, -0.3), (-0.15, -0.25), (0.35, -0.3), (0.15, -0.25)], angle, scale)
        for start, end in (brows[0:2], brows[2:4]):
            pygame.draw.line(screen, config.Colors.BLACK,
                             (cx + start[0], cy + start[1]), (cx + end[0], cy + end[1]), 2)
