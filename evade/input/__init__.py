"""
Input handling for Evade.

Sources turn pygame events into a per-tick movement intent (a vector of
length at most 1) and discrete InputActions. InputManager combines every
active source so keyboard and mouse can be used together.
"""
from evade.input.input_event import InputEvent
from evade.input.input_manager import InputManager
from evade.input.sources import InputSource, KeyboardInputSource, MouseInputSource

__all__ = [
    'InputEvent',
    'InputManager',
    'InputSource',
    'KeyboardInputSource',
    'MouseInputSource',
]
