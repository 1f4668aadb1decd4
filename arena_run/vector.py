"""
Vector Math
============
Immutable 2D float vector used for every position and velocity.
"""

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Vector2:
    """2D vector value. No identity, compares by components."""
    x: float = 0.0
    y: float = 0.0

    def add(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, s: float) -> 'Vector2':
        return Vector2(self.x * s, self.y * s)

    def divide(self, s: float) -> 'Vector2':
        """
        Divide both components by s.

        Division by zero does not raise: components follow IEEE rules
        and come out as inf, -inf or nan.
        """
        if s == 0:
            return Vector2(_ieee_div(self.x), _ieee_div(self.y))
        return Vector2(self.x / s, self.y / s)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> 'Vector2':
        """Unit vector in the same direction, or the zero vector at zero length."""
        length = self.length()
        if length == 0:
            return Vector2(0.0, 0.0)
        return self.divide(length)

    def distance_to(self, other: 'Vector2') -> float:
        return other.sub(self).length()

    def __add__(self, other: 'Vector2') -> 'Vector2':
        return self.add(other)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        return self.sub(other)

    def __mul__(self, s: float) -> 'Vector2':
        return self.scale(s)

    def __rmul__(self, s: float) -> 'Vector2':
        return self.scale(s)

    def __truediv__(self, s: float) -> 'Vector2':
        return self.divide(s)

    def __iter__(self):
        yield self.x
        yield self.y


ZERO = Vector2(0.0, 0.0)


def _ieee_div(value: float) -> float:
    # x / 0.0 under IEEE 754 (Python raises instead)
    if value > 0:
        return math.inf
    if value < 0:
        return -math.inf
    return math.nan
