from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int]

EMPTY = 0


class Playfield:
    """Fixed-size grid that accumulates locked pieces.

    The grid uses 0 for empty cells and ``kind + 1`` for occupied cells, so
    renderers can color a cell from its value alone. Rows above the field
    (negative y) are not stored and always count as open.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"playfield dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_open(self, x: int, y: int) -> bool:
        if x < 0 or x >= self.width or y >= self.height:
            return False
        if y < 0:
            return True
        return self.grid[y, x] == EMPTY

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        return all(self.is_open(x, y) for x, y in cells)

    def lock(self, cells: Iterable[Coordinate], value: int) -> None:
        for x, y in cells:
            if y >= 0:
                self.grid[y, x] = value

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != EMPTY))

    def clear_lines(self) -> int:
        """Remove full rows bottom-up and return how many were removed.

        After a removal the rows above shift down one step and the same row
        index is checked again before the scan moves up.
        """
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                self.grid[1 : y + 1] = self.grid[0:y].copy()
                self.grid[0] = EMPTY
                cleared += 1
            else:
                y -= 1
        return cleared

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
