"""
Keyboard input source.

WASD and the arrow keys steer; Space raises a barrier, Shift dashes and
Escape or P pauses. Held keys are tracked from KEYDOWN/KEYUP events so the
source can be driven by synthetic events in tests.
"""

import math
import time
from typing import Dict, Sequence, Set, Tuple

import pygame

from evade.input.input_event import InputEvent
from evade.input.sources.base import InputSource
from evade.models import InputAction, Vector2D

DIRECTION_KEYS: Dict[int, Tuple[int, int]] = {
    pygame.K_w: (0, -1),
    pygame.K_UP: (0, -1),
    pygame.K_s: (0, 1),
    pygame.K_DOWN: (0, 1),
    pygame.K_a: (-1, 0),
    pygame.K_LEFT: (-1, 0),
    pygame.K_d: (1, 0),
    pygame.K_RIGHT: (1, 0),
}

ACTION_KEYS: Dict[int, InputAction] = {
    pygame.K_SPACE: InputAction.USE_BARRIER,
    pygame.K_LSHIFT: InputAction.DASH,
    pygame.K_RSHIFT: InputAction.DASH,
    pygame.K_ESCAPE: InputAction.PAUSE,
    pygame.K_p: InputAction.PAUSE,
}


class KeyboardInputSource(InputSource):
    """Keyboard steering and action keys.

    Diagonals are normalised so moving diagonally is no faster than
    moving straight.

    Examples:
        >>> source = KeyboardInputSource()
        >>> source.process([pygame.event.Event(pygame.KEYDOWN, key=pygame.K_d)])
        >>> source.movement_intent()
        Point2D(x=1.00, y=0.00)
    """

    def __init__(self):
        super().__init__()
        self._held: Set[int] = set()

    def process(self, events: Sequence[pygame.event.Event]) -> None:
        for event in events:
            if event.type == pygame.KEYDOWN:
                if event.key in DIRECTION_KEYS:
                    self._held.add(event.key)
                elif event.key in ACTION_KEYS:
                    self._event_queue.append(InputEvent(
                        action=ACTION_KEYS[event.key],
                        timestamp=time.monotonic(),
                    ))
            elif event.type == pygame.KEYUP:
                self._held.discard(event.key)

    def movement_intent(self) -> Vector2D:
        dx = sum(DIRECTION_KEYS[key][0] for key in self._held)
        dy = sum(DIRECTION_KEYS[key][1] for key in self._held)
        # Up+W counts once
        dx = max(-1, min(1, dx))
        dy = max(-1, min(1, dy))
        if dx == 0 and dy == 0:
            return Vector2D(x=0.0, y=0.0)
        length = math.hypot(dx, dy)
        return Vector2D(x=dx / length, y=dy / length)

    def clear(self) -> None:
        super().clear()
        self._held.clear()
