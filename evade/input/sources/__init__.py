"""Input source implementations."""

from evade.input.sources.base import InputSource
from evade.input.sources.keyboard import KeyboardInputSource
from evade.input.sources.mouse import MouseInputSource

__all__ = [
    'InputSource',
    'KeyboardInputSource',
    'MouseInputSource',
]
