from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

import numpy as np

from .grid import Playfield
from .pieces import DEFAULT_SHAPES, ROTATIONS, Piece, ShapeTable


logger = logging.getLogger(__name__)


class Phase(Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Key(Enum):
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    UP = "up"
    SPACE = "space"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    fall_interval_ms: float = 1000
    random_seed: Optional[int] = None
    # Drain every elapsed interval in one advance() call instead of one step per call.
    catch_up: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"playfield dimensions must be positive, got {self.width}x{self.height}")
        if self.fall_interval_ms <= 0:
            raise ValueError(f"fall_interval_ms must be positive, got {self.fall_interval_ms}")


def _piece_height(shapes: ShapeTable, kind: int, rotation: int) -> int:
    ys = [dy for _, dy in shapes.offsets(kind, rotation)]
    return max(ys) + 1


class GameEngine:
    """Falling-block game state machine.

    Owns the playfield, the active piece, the phase, the score and the
    gravity accumulator. Renderers read state through the public attributes
    and ``get_state()``; drivers feed time through ``advance()`` and input
    through ``handle_key()``. Commands are synchronous and never raise for
    blocked moves: they are simply ignored.
    """

    def __init__(self, config: Optional[GameConfig] = None, shapes: ShapeTable = DEFAULT_SHAPES) -> None:
        self.config = config or GameConfig()
        self.shapes = shapes
        widest = max(shapes.bounding_width(kind, 0) for kind in range(len(shapes)))
        tallest = max(_piece_height(shapes, k, r) for k in range(len(shapes)) for r in range(ROTATIONS))
        if self.config.width < widest or self.config.height < tallest:
            raise ValueError(
                f"a {self.config.width}x{self.config.height} playfield cannot hold every piece "
                f"(needs at least {widest}x{tallest})"
            )
        for kind in range(len(shapes)):
            xs = [self._spawn_x(kind) + dx for dx, _ in shapes.offsets(kind, 0)]
            if min(xs) < 0 or max(xs) >= self.config.width:
                raise ValueError(f"kind {kind} spawns outside a {self.config.width} column playfield")
        self.rng = random.Random(self.config.random_seed)
        self.grid = Playfield(self.config.width, self.config.height)
        self.phase = Phase.NOT_STARTED
        self.score = 0
        self.accumulated_ms: float = 0
        self.active_piece: Optional[Piece] = None

        self._commands: Dict[Key, Callable[[], object]] = {
            Key.LEFT: self.move_left,
            Key.RIGHT: self.move_right,
            Key.DOWN: self.move_down,
            Key.UP: self.rotate_clockwise,
            Key.SPACE: self.hard_drop,
        }

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    # Lifecycle

    def reset(self) -> None:
        self.grid.reset()
        self.score = 0
        self.accumulated_ms = 0
        self.phase = Phase.PLAYING
        logger.info("New game on a %dx%d playfield", self.width, self.height)
        self.spawn_piece()

    def start(self) -> None:
        if self.phase is Phase.NOT_STARTED:
            self.reset()

    def restart(self) -> None:
        if self.phase is Phase.GAME_OVER:
            self.reset()

    def _spawn_x(self, kind: int) -> int:
        return (self.config.width - self.shapes.bounding_width(kind, 0)) // 2

    def spawn_piece(self, kind: Optional[int] = None) -> None:
        if kind is None:
            kind = self.rng.randrange(len(self.shapes))
        x = self._spawn_x(kind)
        self.active_piece = Piece(kind=kind, rotation=0, x=x, y=0)
        logger.debug("Spawned kind %d at x=%d", kind, x)
        # Immediate overlap check: if the new piece sits on locked cells, the game is over
        for cx, cy in self.active_piece.cells(self.shapes):
            if 0 <= cy < self.height and 0 <= cx < self.width and self.grid.grid[cy, cx] != 0:
                self.phase = Phase.GAME_OVER
                logger.info("Game over, final score %d", self.score)
                break

    # Queries

    def can_place(self, dx: int, dy: int, rotation: Optional[int] = None) -> bool:
        if self.active_piece is None:
            return False
        cells = self.active_piece.cells(self.shapes, dx, dy, rotation)
        return self.grid.can_place(cells)

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid; negative values mark the falling piece
        state = self.grid.clone_state()
        if self.active_piece is not None and self.is_playing:
            for x, y in self.active_piece.cells(self.shapes):
                if 0 <= y < self.height and 0 <= x < self.width:
                    state[y, x] = -(self.active_piece.kind + 1)
        return state

    # Commands

    def _shift(self, dx: int, dy: int) -> bool:
        if not self.is_playing or not self.can_place(dx, dy):
            return False
        assert self.active_piece is not None
        self.active_piece = self.active_piece.moved(dx, dy)
        return True

    def move_left(self) -> None:
        self._shift(-1, 0)

    def move_right(self) -> None:
        self._shift(1, 0)

    def move_down(self) -> bool:
        return self._shift(0, 1)

    def rotate_clockwise(self) -> None:
        if not self.is_playing or self.active_piece is None:
            return
        new_rotation = (self.active_piece.rotation + 1) % ROTATIONS
        if self.can_place(0, 0, new_rotation):
            self.active_piece = self.active_piece.with_rotation(new_rotation)

    def hard_drop(self) -> None:
        if not self.is_playing or self.active_piece is None:
            return
        drop = 0
        while self.can_place(0, drop + 1):
            drop += 1
        self.active_piece = self.active_piece.moved(0, drop)
        self._settle()

    def lock_piece(self) -> None:
        if self.active_piece is None:
            return
        piece = self.active_piece
        self.grid.lock(piece.cells(self.shapes), piece.kind + 1)
        logger.debug("Locked kind %d at (%d, %d)", piece.kind, piece.x, piece.y)

    def clear_lines(self) -> int:
        lines = self.grid.clear_lines()
        if lines:
            logger.debug("Cleared %d line(s)", lines)
        self.score += lines
        return lines

    def _settle(self) -> None:
        self.lock_piece()
        self.clear_lines()
        self.spawn_piece()

    def _gravity_step(self) -> None:
        if not self.move_down():
            self._settle()

    def advance(self, elapsed_ms: float) -> None:
        if not self.is_playing:
            return
        self.accumulated_ms += elapsed_ms
        interval = self.config.fall_interval_ms
        if self.config.catch_up:
            while self.is_playing and self.accumulated_ms >= interval:
                self.accumulated_ms -= interval
                self._gravity_step()
        elif self.accumulated_ms >= interval:
            self.accumulated_ms -= interval
            self._gravity_step()

    def handle_key(self, key: Key) -> bool:
        """Apply a key press; returns False when the key means nothing in this phase."""
        if self.is_playing:
            command = self._commands.get(key)
            if command is None:
                return False
            command()
            return True
        if key is Key.SPACE:
            self.reset()
            return True
        return False
