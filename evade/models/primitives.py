"""
Shared primitive data types.

Basic geometric types used throughout the game: positions, velocities,
movement intents and screen resolutions.
"""

import math

from pydantic import BaseModel, Field, computed_field, ConfigDict


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions, velocities and intents.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> pos.distance_to(Point2D(x=103.0, y=204.0))
        5.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def clamped(self, max_length: float) -> 'Point2D':
        """Return this vector scaled down so its length is at most max_length.

        Examples:
            >>> Point2D(x=3.0, y=4.0).clamped(1.0)
            Point2D(x=0.60, y=0.80)
        """
        length = self.length()
        if length <= max_length or length == 0.0:
            return self
        scale = max_length / length
        return Point2D(x=self.x * scale, y=self.y * scale)

    def __str__(self) -> str:
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"

    def __repr__(self) -> str:
        return self.__str__()


# Alias used for velocities and movement intents
Vector2D = Point2D

ZERO = Point2D(x=0.0, y=0.0)


class Resolution(BaseModel):
    """Window or viewport resolution in pixels.

    Examples:
        >>> hd = Resolution(width=1280, height=720)
        >>> hd.aspect_ratio
        1.7777777777777777
    """
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @computed_field
    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, text: str) -> 'Resolution':
        """Parse a WIDTHxHEIGHT string such as '1280x720'.

        Raises:
            ValueError: If the string is not in WIDTHxHEIGHT form
        """
        try:
            width, height = text.lower().split('x')
            return cls(width=int(width), height=int(height))
        except ValueError as e:
            raise ValueError(f"Invalid resolution '{text}', expected WIDTHxHEIGHT") from e

    def __str__(self) -> str:
        return f"Resolution({self.width}x{self.height})"
