"""
Rendering smoke tests for the world renderer and HUD.

Pixels are not compared; the tests check that every entity state can be
drawn and that the obvious colours end up on screen.
"""

import random
from unittest.mock import patch

import pytest

from evade import config
from evade.game.barrier import Barrier
from evade.game.hud import MARGIN, SLOT_RADIUS, Hud
from evade.game.particles import Particle
from evade.game.renderer import WorldRenderer, resolve_color
from evade.game.simulation import Simulation
from evade.models import Difficulty, Vector2D


@pytest.fixture
def sim(world, preset):
    simulation = Simulation(world, Difficulty.HARD, preset, viewport=(800, 600), rng=random.Random(9))
    simulation.reset()
    return simulation


class TestResolveColor:

    def test_known_tokens(self):
        assert resolve_color('player') == config.PLAYER_COLOR
        assert resolve_color('enemy') == config.ENEMY_COLOR
        assert resolve_color('barrier') == config.BARRIER_COLOR

    def test_unknown_token_is_white(self):
        assert resolve_color('mauve') == config.WHITE


class TestWorldRenderer:

    def test_renders_fresh_session(self, screen, sim):
        WorldRenderer().render(screen, sim)

    def test_renders_every_entity_state(self, screen, sim):
        sim.barriers.barriers.append(Barrier(x=sim.player.x + 100, y=sim.player.y, rotation=1.0))
        sim.player.add_barrier()
        sim.player.use_barrier()
        sim.player.activate_dash()
        for _ in range(5):
            sim.tick(Vector2D(x=1.0, y=0.0))

        WorldRenderer().render(screen, sim)

    def test_player_drawn_at_screen_position(self, screen, sim):
        WorldRenderer().render(screen, sim)
        sx, sy = sim.camera.world_to_screen(sim.player.x, sim.player.y)
        # Sample the body just left of the face
        color = screen.get_at((int(sx - sim.camera.scale(sim.player.size) * 0.7), int(sy)))
        assert tuple(color)[:3] == config.PLAYER_COLOR


    def test_off_screen_barrier_is_culled(self, screen, sim):
        left, top, right, bottom = sim.camera.visible_rect(screen.get_size())
        visible = Barrier(x=sim.player.x + 100, y=sim.player.y)
        hidden = Barrier(x=sim.player.x, y=top - 100)
        sim.barriers.barriers.extend([visible, hidden])

        renderer = WorldRenderer()
        with patch.object(renderer, 'draw_barrier') as draw_barrier:
            renderer.render(screen, sim)

        drawn = [c.args[2] for c in draw_barrier.call_args_list]
        assert drawn == [visible]

    def test_off_screen_particles_are_culled(self, screen, sim):
        left, top, right, bottom = sim.camera.visible_rect(screen.get_size())
        renderer = WorldRenderer()

        renderer.draw_particles(screen, sim.camera, [Particle(x=left - 100, y=top - 100, vx=0, vy=0)])
        assert renderer._dots == {}

        renderer.draw_particles(screen, sim.camera, [Particle(x=sim.player.x, y=sim.player.y, vx=0, vy=0)])
        assert len(renderer._dots) == 1

    def test_particle_sprites_are_shared(self, screen, sim):
        renderer = WorldRenderer()
        particles = [Particle(x=sim.player.x + i, y=sim.player.y, vx=0, vy=0, life=i / 10)
                     for i in range(1, 10)]
        renderer.draw_particles(screen, sim.camera, particles)
        assert len(renderer._dots) == 1


class TestHud:

    def test_renders(self, screen, sim):
        sim.player.add_barrier()
        Hud().render(screen, sim)

    def test_filled_slot_uses_barrier_colour(self, screen, sim):
        screen.fill(config.BACKGROUND_COLOR)
        sim.player.add_barrier()
        Hud().render(screen, sim)
        assert tuple(screen.get_at((MARGIN + SLOT_RADIUS, MARGIN + SLOT_RADIUS)))[:3] == config.BARRIER_COLOR
