"""
Camera
=======
Smooth-follow view offset. Screen position = world position + camera position.
"""

from .vector import Vector2


VIEWPORT_WIDTH = 1920
VIEWPORT_HEIGHT = 1080
FOLLOW_FACTOR = 0.05


class Camera:
    """Eases toward the offset that puts the target at the viewport center."""

    def __init__(self, position: Vector2 = None, factor: float = FOLLOW_FACTOR):
        self.position = position if position is not None else Vector2(0.0, 0.0)
        self.factor = factor

    def target_offset(self, target: Vector2, screen_w: int = VIEWPORT_WIDTH,
                      screen_h: int = VIEWPORT_HEIGHT) -> Vector2:
        return Vector2(-target.x + screen_w / 2, -target.y + screen_h / 2)

    def follow(self, target: Vector2, screen_w: int = VIEWPORT_WIDTH,
               screen_h: int = VIEWPORT_HEIGHT) -> None:
        """Move a fixed fraction of the remaining way toward the target offset."""
        goal = self.target_offset(target, screen_w, screen_h)
        self.position = self.position + (goal - self.position) * self.factor

    def to_screen(self, world_pos: Vector2) -> Vector2:
        return world_pos + self.position
