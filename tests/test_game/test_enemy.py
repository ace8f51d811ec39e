"""
Unit tests for the Enemy entity.

Tests cover:
- Spawn placement
- Pursuit steering and turn rate
- Wall reflection and bounds
- Speed ramp
- Collision rules
"""

import math
import random

import pytest

from evade import config
from evade.game.enemy import Enemy
from evade.game.geometry import normalize_angle
from evade.game.player import Player
from evade.models import DifficultyPreset, Vector2D, WorldConfig


@pytest.fixture
def player(world, rng):
    return Player(world, rng=rng)


@pytest.fixture
def enemy(world, preset, rng):
    return Enemy(world, preset, rng=rng)


class TestEnemySpawn:

    def test_spawns_at_fixed_radius_from_centre(self, world, preset):
        for seed in range(20):
            enemy = Enemy(world, preset, rng=random.Random(seed))
            cx, cy = world.center
            assert math.hypot(enemy.x - cx, enemy.y - cy) == pytest.approx(config.ENEMY_SPAWN_DISTANCE)

    def test_spawn_is_clamped_into_small_world(self, preset):
        world = WorldConfig(width=400.0, height=400.0)
        for seed in range(20):
            enemy = Enemy(world, preset, rng=random.Random(seed))
            assert enemy.size <= enemy.x <= world.width - enemy.size
            assert enemy.size <= enemy.y <= world.height - enemy.size

    def test_speed_comes_from_preset(self, enemy, preset):
        assert enemy.speed == preset.enemy_speed
        assert enemy.base_speed == preset.enemy_speed

    def test_set_difficulty(self, enemy):
        enemy.set_difficulty(DifficultyPreset(enemy_speed=2.0, barrier_spawn=0.01))
        assert enemy.speed == 2.0
        assert enemy.base_speed == 2.0


class TestEnemySteering:

    def test_heading_change_bounded_by_turn_gain(self, enemy, player):
        """Without jitter one tick turns by gain * delta, never more than delta."""
        for _ in range(50):
            target = math.atan2(player.y - enemy.y, player.x - enemy.x)
            delta = normalize_angle(target - enemy.heading)
            before = enemy.heading

            enemy.direction_change_counter = 0
            enemy.update(player)

            # Ignore wall reflections, which rewrite the heading
            inside = (enemy.size < enemy.x < enemy.world.width - enemy.size and
                      enemy.size < enemy.y < enemy.world.height - enemy.size)
            if inside:
                change = enemy.heading - before
                assert abs(change) <= abs(delta) + 1e-9
                assert change == pytest.approx(delta * config.ENEMY_TURN_GAIN)

    def test_closes_in_on_stationary_player(self, enemy, player):
        start = math.hypot(player.x - enemy.x, player.y - enemy.y)
        for _ in range(200):
            enemy.update(player)
        assert math.hypot(player.x - enemy.x, player.y - enemy.y) < start

    def test_moves_by_speed_each_tick(self, enemy, player):
        before = (enemy.x, enemy.y)
        enemy.update(player)
        assert math.hypot(enemy.x - before[0], enemy.y - before[1]) == pytest.approx(enemy.speed)

    def test_jitter_applied_after_interval(self, world, preset):
        player = Player(world)
        enemy = Enemy(world, preset, rng=random.Random(1))
        enemy.direction_change_counter = config.ENEMY_DIRECTION_CHANGE_INTERVAL
        enemy.update(player)
        assert enemy.direction_change_counter == 0

    def test_animation_advances(self, enemy, player):
        enemy.update(player)
        assert enemy.pulse_phase == pytest.approx(0.1)
        assert enemy.rotation_speed == pytest.approx(0.02 + enemy.speed * 0.01)


class TestEnemyBounds:

    def test_reflects_off_left_wall(self, enemy, player):
        enemy.x = enemy.size + 0.5
        enemy.y = player.y = 600.0
        player.x = 0.0
        enemy.heading = math.pi  # heading straight left
        enemy.update(player)

        assert enemy.x == pytest.approx(enemy.size)
        # Reflected heading points right
        assert math.cos(enemy.heading) > 0

    def test_reflects_off_top_wall(self, enemy, player):
        enemy.x = player.x = 600.0
        enemy.y = enemy.size + 0.5
        player.y = 0.0
        enemy.heading = -math.pi / 2  # heading straight up
        enemy.update(player)

        assert enemy.y == pytest.approx(enemy.size)
        assert math.sin(enemy.heading) > 0

    def test_stays_inside_world(self, world, preset):
        enemy = Enemy(world, DifficultyPreset(enemy_speed=25.0, barrier_spawn=0.0), rng=random.Random(2))
        player = Player(world)
        for i in range(2000):
            player.x = world.width * ((i * 7) % 11) / 11
            player.y = world.height * ((i * 5) % 13) / 13
            enemy.update(player)
            assert enemy.size <= enemy.x <= world.width - enemy.size
            assert enemy.size <= enemy.y <= world.height - enemy.size


class TestEnemySpeedRamp:

    def test_no_ramp_during_grace_period(self, enemy):
        enemy.update_speed(10.0)
        assert enemy.speed == enemy.base_speed
        enemy.update_speed(config.RAMP_GRACE_SECONDS)
        assert enemy.speed == enemy.base_speed

    def test_double_speed_at_150_seconds(self, enemy):
        enemy.update_speed(150.0)
        assert enemy.speed == pytest.approx(2 * enemy.base_speed)

    def test_ramp_is_linear(self, enemy):
        enemy.update_speed(90.0)
        assert enemy.speed == pytest.approx(1.5 * enemy.base_speed)

    def test_optional_cap(self, enemy, monkeypatch):
        monkeypatch.setattr(config, 'ENEMY_MAX_SPEED_MULTIPLIER', 1.5)
        enemy.update_speed(600.0)
        assert enemy.speed == pytest.approx(1.5 * enemy.base_speed)


class TestEnemyCollision:

    def test_overlap_collides(self, enemy, player):
        enemy.x = enemy.y = 100.0
        player.x = player.y = 100.0
        assert enemy.check_collision(player) is True

    def test_invulnerable_never_collides(self, enemy, player):
        enemy.x = enemy.y = 100.0
        player.x = player.y = 100.0
        player.add_barrier()
        player.use_barrier()
        assert enemy.check_collision(player) is False

    def test_hitbox_is_shrunk(self, enemy, player):
        reach = (enemy.size + player.size) * config.ENEMY_HITBOX_FACTOR
        enemy.x, enemy.y = 100.0, 100.0
        player.y = 100.0

        player.x = 100.0 + reach + 0.01
        assert enemy.check_collision(player) is False

        player.x = 100.0 + reach - 0.01
        assert enemy.check_collision(player) is True

    def test_label(self, enemy):
        assert enemy.label == "69"
