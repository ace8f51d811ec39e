"""
Evade - dodge the pursuer, collect barriers, survive.

A single-screen arcade game built on pygame: a player-controlled circle
evades a pursuing enemy while collecting shield pickups that grant
temporary invulnerability.
"""

__version__ = "1.0.0"
