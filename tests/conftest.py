"""
Pytest fixtures for blockfall tests.
"""

import os

# Headless pygame for renderer tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from blockfall.game import GameConfig, GameEngine


@pytest.fixture
def new_engine() -> GameEngine:
    """Engine that has not been started yet."""
    return GameEngine(GameConfig(random_seed=7))


@pytest.fixture
def engine(new_engine: GameEngine) -> GameEngine:
    """Engine in the playing phase on an empty 10x20 field."""
    new_engine.start()
    return new_engine


def drop_to_floor(engine: GameEngine) -> int:
    """Move the active piece down until it is blocked; returns rows moved."""
    rows = 0
    while engine.move_down():
        rows += 1
    return rows
