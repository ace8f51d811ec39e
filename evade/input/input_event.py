"""
Input event model.

An InputEvent is a discrete player action (barrier, dash, pause) raised by
any input source. Continuous movement is not an event; sources expose it
through movement_intent().
"""

from pydantic import BaseModel, ConfigDict, field_validator

from evade.models import InputAction


class InputEvent(BaseModel):
    """Immutable discrete action from any source.

    Attributes:
        action: What the player asked for
        timestamp: Time of the action (seconds, from a monotonic clock)

    Examples:
        >>> event = InputEvent(action=InputAction.DASH, timestamp=12.5)
        >>> print(event)
        InputEvent(action=dash, t=12.500)
    """
    action: InputAction
    timestamp: float

    model_config = ConfigDict(frozen=True)

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f'Timestamp must be non-negative, got {v}')
        return v

    def __str__(self) -> str:
        return f"InputEvent(action={self.action.value}, t={self.timestamp:.3f})"
