"""Game module for blockfall.

Exports the core game engine and supporting classes:
- Playfield: Grid representation, collision policy and line clearing
- Piece: Active piece position and rotation
- ShapeTable / TETROMINOES: Static catalog of the seven piece kinds
- TetrominoType: Enum of available piece kinds
- GameEngine: Game state machine driven by time and key presses
"""

from .grid import Playfield
from .pieces import DEFAULT_SHAPES, TETROMINOES, Piece, ShapeTable, TetrominoType
from .core import GameConfig, GameEngine, Key, Phase

__all__ = [
    "Playfield",
    "Piece",
    "ShapeTable",
    "TetrominoType",
    "TETROMINOES",
    "DEFAULT_SHAPES",
    "GameConfig",
    "GameEngine",
    "Key",
    "Phase",
]
