#!/usr/bin/env python3
"""
ARENA_RUN Launcher
===================
Run this script to start the game.
"""

from arena_run.main import main

if __name__ == "__main__":
    main()
