"""blockfall: a falling-block puzzle game.

The ``game`` package holds the engine (playfield, pieces, state machine);
``visualization`` holds the pygame renderer and the interactive driver.
"""

__version__ = "0.1.0"
