"""
Player Module
==============
Player entity creation, input snapshots and the movement system.
"""

from dataclasses import dataclass
from typing import Dict

from .ecs import World
from .components import Motion, Health, PlayerTag
from .vector import Vector2


PLAYER_SPEED = 8.0
PLAYER_LIFE = 100


@dataclass(frozen=True)
class InputSnapshot:
    """Pressed state of every key the simulation cares about, sampled once per tick."""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    modifier: bool = False
    toggle: bool = False
    quit: bool = False


def create_player(world: World, position: Vector2) -> int:
    """Create the player entity with all required components."""
    return world.create_entity(
        Motion(position=position, velocity=Vector2(0.0, 0.0), speed=PLAYER_SPEED),
        Health(PLAYER_LIFE, PLAYER_LIFE),
        PlayerTag(),
    )


def movement_vector(snapshot: InputSnapshot) -> Vector2:
    """Sum of pressed directions. Opposite keys cancel out."""
    dx, dy = 0.0, 0.0
    if snapshot.up:
        dy -= 1
    if snapshot.down:
        dy += 1
    if snapshot.left:
        dx -= 1
    if snapshot.right:
        dx += 1
    return Vector2(dx, dy)


def player_input_system(world: World, snapshot: InputSnapshot) -> None:
    """
    Apply input to the player.

    The clamp runs first, against last tick's position. The direction is
    normalized before scaling, so diagonals are as fast as straight lines.
    """
    for entity_id, motion, _ in world.query(Motion, PlayerTag):
        motion.clamp_to_arena()
        motion.velocity = movement_vector(snapshot).normalize() * motion.speed
        motion.position = motion.position + motion.velocity


class DebugToggle:
    """
    Rising-edge latch for the debug chord (modifier + toggle key).

    Fires once when the chord goes down and re-arms only after the
    chord is released, so holding it does not flicker the overlay.
    """

    def __init__(self):
        self.latched = False

    def update(self, snapshot: InputSnapshot) -> bool:
        """Feed this tick's snapshot. Returns True when the flag should flip."""
        chord = snapshot.modifier and snapshot.toggle
        if chord and not self.latched:
            self.latched = True
            return True
        if not chord:
            self.latched = False
        return False

    def reset(self):
        self.latched = False


class InputHandler:
    """
    Turns terminal keystrokes into per-tick InputSnapshots.

    Terminals send key-down (and auto-repeat) but never key-up, so a key
    counts as held for a few frames after its last keystroke. '!' is
    Shift+1 on most layouts and stands in for the debug chord.
    """

    MOVE_KEYS = {'w': 'up', 's': 'down', 'a': 'left', 'd': 'right'}
    CHORD_KEY = '!'

    def __init__(self, hold_duration: int = 12, chord_hold_duration: int = 30):
        self.keys_held: Dict[str, int] = {}  # key -> frames remaining
        self.hold_duration = hold_duration
        # Longer than the usual auto-repeat delay so a held chord stays down
        self.chord_hold_duration = chord_hold_duration
        self._quit_triggered = False

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        key_str = key.lower() if not key.is_sequence else ''

        if key_str == 'q' or key.name == 'KEY_ESCAPE':
            self._quit_triggered = True
        elif key_str and key_str in self.MOVE_KEYS:
            self.keys_held[key_str] = self.hold_duration
        elif key_str == self.CHORD_KEY:
            self.keys_held[self.CHORD_KEY] = self.chord_hold_duration

    def update(self) -> None:
        """Update key hold timers (call once per tick)."""
        expired = []
        for key, frames in self.keys_held.items():
            self.keys_held[key] = frames - 1
            if self.keys_held[key] <= 0:
                expired.append(key)
        for key in expired:
            del self.keys_held[key]

    def snapshot(self) -> InputSnapshot:
        """Current held state. Consumes the quit trigger."""
        chord = self.CHORD_KEY in self.keys_held
        quit_triggered = self._quit_triggered
        self._quit_triggered = False
        return InputSnapshot(
            up='w' in self.keys_held,
            down='s' in self.keys_held,
            left='a' in self.keys_held,
            right='d' in self.keys_held,
            modifier=chord,
            toggle=chord,
            quit=quit_triggered,
        )
