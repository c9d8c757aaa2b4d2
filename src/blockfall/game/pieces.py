from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple


Offset = Tuple[int, int]
RotationStates = Tuple[Tuple[Offset, ...], ...]

ROTATIONS = 4
CELLS_PER_PIECE = 4


class TetrominoType(IntEnum):
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6


# Offsets are (x, y) relative to the piece origin, y grows downwards.
TETROMINOES: Tuple[RotationStates, ...] = (
    # I
    (
        ((0, 0), (1, 0), (2, 0), (3, 0)),
        ((0, 0), (0, 1), (0, 2), (0, 3)),
        ((0, 0), (1, 0), (2, 0), (3, 0)),
        ((0, 0), (0, 1), (0, 2), (0, 3)),
    ),
    # O
    (
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    # T
    (
        ((0, 0), (1, 0), (2, 0), (1, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 1)),
        ((0, 1), (1, 1), (2, 1), (1, 0)),
        ((0, 1), (1, 0), (1, 1), (1, 2)),
    ),
    # S
    (
        ((0, 1), (1, 1), (1, 0), (2, 0)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (1, 0), (2, 0)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
    ),
    # Z
    (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (0, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (0, 1), (0, 2)),
    ),
    # J
    (
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (0, 2)),
        ((0, 1), (1, 1), (2, 1), (2, 0)),
        ((2, 0), (1, 0), (1, 1), (1, 2)),
    ),
    # L
    (
        ((2, 0), (0, 1), (1, 1), (2, 1)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (0, 0)),
        ((1, 0), (1, 1), (1, 2), (2, 2)),
    ),
)


class ShapeTable:
    """Read-only catalog of piece kinds and their rotation states.

    Every kind must have exactly four rotation states and every state exactly
    four cell offsets; anything else is rejected when the table is built.
    """

    def __init__(self, shapes: Sequence[Sequence[Sequence[Offset]]]) -> None:
        if len(shapes) == 0:
            raise ValueError("shape table must contain at least one kind")
        frozen: List[RotationStates] = []
        for kind, states in enumerate(shapes):
            if len(states) != ROTATIONS:
                raise ValueError(f"kind {kind} has {len(states)} rotation states, expected {ROTATIONS}")
            frozen_states = []
            for rotation, offsets in enumerate(states):
                if len(offsets) != CELLS_PER_PIECE:
                    raise ValueError(
                        f"kind {kind} rotation {rotation} has {len(offsets)} cells, expected {CELLS_PER_PIECE}"
                    )
                frozen_states.append(tuple((int(dx), int(dy)) for dx, dy in offsets))
            frozen.append(tuple(frozen_states))
        self._shapes: Tuple[RotationStates, ...] = tuple(frozen)

    def __len__(self) -> int:
        return len(self._shapes)

    def offsets(self, kind: int, rotation: int) -> Tuple[Offset, ...]:
        return self._shapes[kind][rotation % ROTATIONS]

    def bounding_width(self, kind: int, rotation: int = 0) -> int:
        xs = [dx for dx, _ in self.offsets(kind, rotation)]
        return max(xs) - min(xs) + 1


DEFAULT_SHAPES = ShapeTable(TETROMINOES)


@dataclass(frozen=True)
class Piece:
    kind: int
    rotation: int = 0  # 0..3
    x: int = 0
    y: int = 0

    def cells(
        self,
        shapes: ShapeTable = DEFAULT_SHAPES,
        dx: int = 0,
        dy: int = 0,
        rotation: Optional[int] = None,
    ) -> List[Tuple[int, int]]:
        r = self.rotation if rotation is None else rotation
        return [(self.x + ox + dx, self.y + oy + dy) for ox, oy in shapes.offsets(self.kind, r)]

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def with_rotation(self, rotation: int) -> "Piece":
        return replace(self, rotation=rotation % ROTATIONS)
