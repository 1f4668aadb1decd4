#!/usr/bin/env python3
"""
ARENA_RUN - Terminal Arena Survival
====================================
Survive in a 5000x5000 arena while guard waves hunt you down.

Controls:
    WASD    - Move
    !       - Toggle debug overlay (Shift+1)
    F       - Toggle FPS display
    Q/ESC   - Quit

Configuration comes from ARENA_* environment variables (see config.py).
"""

import random
import sys
import time

from blessed import Terminal
from loguru import logger
from pydantic import ValidationError

from .config import Settings, get_settings
from .engine import GameRenderer
from .player import InputHandler
from .simulation import Simulation


WINDOW_TITLE = 'Run'
MAX_TICKS_PER_FRAME = 4
FPS_SAMPLE_SECONDS = 0.5


def configure_logging(settings: Settings) -> None:
    """Log to a file or not at all; the terminal itself is the game screen."""
    logger.remove()
    if settings.log_file is not None:
        logger.add(settings.log_file, level=settings.log_level.upper())


class GameState:
    """Couples the simulation with the terminal renderer and keyboard."""

    def __init__(self, term: Terminal, settings: Settings):
        self.term = term
        self.renderer = GameRenderer(term)
        self.input_handler = InputHandler()
        self.running = True

        rng = random.Random(settings.seed) if settings.seed is not None else random.Random()
        self.sim = Simulation(
            rng=rng,
            shoot_cooldown=settings.shoot_cooldown,
            spawn_interval=settings.spawn_interval,
            spawn_count=settings.spawn_count,
        )

    def handle_input(self):
        """Drain every keystroke that is already waiting."""
        for key in iter(lambda: self.term.inkey(timeout=0), ''):
            if not key.is_sequence and key.lower() == 'f':
                self.renderer.show_fps = not self.renderer.show_fps
                continue
            self.input_handler.process_key(key)

    def update(self):
        snapshot = self.input_handler.snapshot()
        if snapshot.quit:
            self.running = False
            return
        self.sim.tick(snapshot)
        self.input_handler.update()

    def render(self):
        size = (self.term.width, self.term.height)
        if size != (self.renderer.width, self.renderer.height):
            self.renderer.resize(*size)
            print(self.term.home + self.term.clear, end='', flush=True)

        self.renderer.begin_frame()
        self.sim.draw(self.renderer.sink)
        health = self.sim.player_health
        self.renderer.render_hud(
            health.life if health is not None else 0,
            self.sim.enemy_count,
            self.sim.projectile_count,
            self.sim.debug,
        )
        print(self.renderer.end_frame(), end='', flush=True)


# =============================================================================
# MAIN LOOP
# =============================================================================

def run_loop(game: GameState, frame_time: float) -> None:
    """
    Fixed-timestep loop: input once per frame, up to MAX_TICKS_PER_FRAME
    simulation ticks to catch up, then one render.
    """
    previous = time.perf_counter()
    backlog = 0.0
    sample_time = 0.0
    sample_ticks = 0

    while game.running:
        frame_start = time.perf_counter()
        # Cap the gap after a stall so catch-up stays bounded
        elapsed = min(frame_start - previous, frame_time * 5)
        previous = frame_start
        backlog += elapsed
        sample_time += elapsed

        game.handle_input()

        for _ in range(MAX_TICKS_PER_FRAME):
            if backlog < frame_time or not game.running:
                break
            game.update()
            backlog -= frame_time
            sample_ticks += 1

        game.render()

        if sample_time >= FPS_SAMPLE_SECONDS:
            game.renderer.current_fps = sample_ticks / sample_time
            sample_time = 0.0
            sample_ticks = 0

        spare = frame_time - (time.perf_counter() - frame_start)
        if spare > 0.001:
            time.sleep(spare * 0.9)


def main():
    """Entry point: load settings, check the terminal, play until quit."""
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid ARENA_* settings:\n{e}")
        sys.exit(1)

    configure_logging(settings)
    term = Terminal()

    if term.width < settings.min_width or term.height < settings.min_height:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {settings.min_width}x{settings.min_height}'
        )
        sys.exit(1)

    logger.info(f"Starting at {settings.target_fps} FPS on a {term.width}x{term.height} terminal")

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        print(f'\x1b]0;{WINDOW_TITLE}\x07' + term.home + term.clear, end='', flush=True)
        game = GameState(term, settings)
        run_loop(game, 1.0 / settings.target_fps)
        print(term.normal, end='', flush=True)

    logger.info(f"Exited after {game.sim.ticks} ticks, {game.sim.deaths} deaths")


if __name__ == '__main__':
    main()
