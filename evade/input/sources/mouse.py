"""
Mouse input source: a virtual joystick.

Pressing the left button sets the joystick centre; dragging away from it
steers. The drag is ignored inside the dead zone and reaches full
deflection at JOYSTICK_RADIUS pixels. The right button raises a barrier and
the middle button dashes.
"""

import time
from typing import Optional, Sequence, Tuple

import pygame

from evade.input.input_event import InputEvent
from evade.input.sources.base import InputSource
from evade.models import InputAction, Vector2D

DEAD_ZONE = 5.0
JOYSTICK_RADIUS = 60.0

BUTTON_ACTIONS = {
    2: InputAction.DASH,
    3: InputAction.USE_BARRIER,
}


class MouseInputSource(InputSource):
    """Drag-to-steer mouse input.

    Attributes:
        anchor: Screen position where the drag started, None when released
        current: Latest pointer position during a drag
    """

    def __init__(self, dead_zone: float = DEAD_ZONE, radius: float = JOYSTICK_RADIUS):
        super().__init__()
        self.dead_zone = dead_zone
        self.radius = radius
        self.anchor: Optional[Tuple[float, float]] = None
        self.current: Optional[Tuple[float, float]] = None

    def process(self, events: Sequence[pygame.event.Event]) -> None:
        for event in events:
            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self.anchor = (float(event.pos[0]), float(event.pos[1]))
                    self.current = self.anchor
                elif event.button in BUTTON_ACTIONS:
                    self._event_queue.append(InputEvent(
                        action=BUTTON_ACTIONS[event.button],
                        timestamp=time.monotonic(),
                    ))
            elif event.type == pygame.MOUSEMOTION and self.anchor is not None:
                self.current = (float(event.pos[0]), float(event.pos[1]))
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.anchor = None
                self.current = None

    def movement_intent(self) -> Vector2D:
        if self.anchor is None or self.current is None:
            return Vector2D(x=0.0, y=0.0)

        drag = Vector2D(x=self.current[0] - self.anchor[0], y=self.current[1] - self.anchor[1])
        length = drag.length()
        if length < self.dead_zone:
            return Vector2D(x=0.0, y=0.0)

        return Vector2D(x=drag.x / self.radius, y=drag.y / self.radius).clamped(1.0)

    def clear(self) -> None:
        super().clear()
        self.anchor = None
        self.current = None
