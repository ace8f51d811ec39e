"""
Shared fixtures for the Evade test suite.

pygame runs headless: the dummy video and audio drivers are selected
before pygame is imported anywhere.
"""

import os
import random

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pygame
import pytest

from evade.models import DifficultyPreset, WorldConfig


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep storage and log files out of the real user directories."""
    monkeypatch.setenv('EVADE_DATA_DIR', str(tmp_path / 'data'))
    return tmp_path / 'data'


@pytest.fixture
def pygame_init():
    """Initialize pygame for testing."""
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def screen(pygame_init):
    """Create a test pygame surface."""
    return pygame.display.set_mode((800, 600))


@pytest.fixture
def world():
    """The minimum 1200x1200 world."""
    return WorldConfig()


@pytest.fixture
def preset():
    return DifficultyPreset(enemy_speed=1.5, barrier_spawn=0.015)


@pytest.fixture
def rng():
    """Seeded random source for reproducible entity behaviour."""
    return random.Random(69)
