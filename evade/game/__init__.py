"""
Evade gameplay: entities, the per-tick simulation and everything drawn
on screen.
"""
from evade.game.barrier import Barrier, BarrierManager
from evade.game.camera import Camera
from evade.game.enemy import Enemy
from evade.game.particles import Particle
from evade.game.player import Player
from evade.game.simulation import Simulation, TickResult

__all__ = [
    'Barrier',
    'BarrierManager',
    'Camera',
    'Enemy',
    'Particle',
    'Player',
    'Simulation',
    'TickResult',
]
