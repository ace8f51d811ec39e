"""
Abstract base class for input sources.

Every source receives the frame's pygame events through process(), keeps
whatever state it needs to report a movement intent, and queues discrete
actions until the next poll_events().
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

import pygame

from evade.input.input_event import InputEvent
from evade.models import Vector2D


class InputSource(ABC):
    """Abstract base class for input sources.

    Subclasses must implement:
        - process(events): Consume this frame's pygame events
        - movement_intent(): Current desired direction, length <= 1

    Examples:
        >>> class StillSource(InputSource):
        ...     def process(self, events):
        ...         pass
        ...     def movement_intent(self):
        ...         return Vector2D(x=0.0, y=0.0)
    """

    def __init__(self):
        self._event_queue: List[InputEvent] = []

    @abstractmethod
    def process(self, events: Sequence[pygame.event.Event]) -> None:
        """Consume the pygame events collected this frame."""

    @abstractmethod
    def movement_intent(self) -> Vector2D:
        """Desired movement direction with length in [0, 1]."""

    def poll_events(self) -> List[InputEvent]:
        """Return queued actions since the last poll and clear the queue."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Time-based processing; most sources need none."""

    def clear(self) -> None:
        """Drop queued actions and any held movement."""
        self._event_queue.clear()
