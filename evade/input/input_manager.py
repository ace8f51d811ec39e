"""
Input manager for Evade.

Combines any number of input sources behind one interface for the engine:
one movement intent per tick and one list of actions per frame.
"""

from typing import List, Optional, Sequence

import pygame

from evade.input.input_event import InputEvent
from evade.input.sources.base import InputSource
from evade.models import Vector2D


class InputManager:
    """Feeds events to every source and merges their output.

    The movement intent is the sum of the sources' intents clamped to
    length 1, so two sources pushing the same way don't move faster.

    Examples:
        >>> from evade.input.sources import KeyboardInputSource
        >>> manager = InputManager([KeyboardInputSource()])
        >>> manager.movement_intent()
        Point2D(x=0.00, y=0.00)
    """

    def __init__(self, sources: Optional[Sequence[InputSource]] = None):
        self._sources: List[InputSource] = []
        for source in sources or []:
            self.add_source(source)

    def add_source(self, source: InputSource) -> None:
        """Add an input source.

        Raises:
            TypeError: If source is not an instance of InputSource
        """
        if not isinstance(source, InputSource):
            raise TypeError(
                f"source must be an instance of InputSource, got {type(source).__name__}"
            )
        self._sources.append(source)

    @property
    def sources(self) -> List[InputSource]:
        return list(self._sources)

    def process(self, events: Sequence[pygame.event.Event]) -> None:
        for source in self._sources:
            source.process(events)

    def update(self, dt: float) -> None:
        for source in self._sources:
            source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Actions from every source since the last call, oldest first."""
        events: List[InputEvent] = []
        for source in self._sources:
            events.extend(source.poll_events())
        events.sort(key=lambda e: e.timestamp)
        return events

    def movement_intent(self) -> Vector2D:
        x = 0.0
        y = 0.0
        for source in self._sources:
            intent = source.movement_intent()
            x += intent.x
            y += intent.y
        return Vector2D(x=x, y=y).clamped(1.0)

    def clear(self) -> None:
        """Drop queued actions and held movement, e.g. when leaving gameplay."""
        for source in self._sources:
            source.clear()
